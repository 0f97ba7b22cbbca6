"""
Snapshot manager for saving and restoring service state across restarts.
"""

import json
import logging
import os
import tempfile
import threading
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from ..core.exceptions import PersistenceError
from ..services.course_board import CourseBoardService

logger = logging.getLogger(__name__)


class SnapshotManager:
    """Writes the service state to a JSON file and reads it back.

    The file holds the three collections in insertion order. Writes go to a
    temporary file in the same directory that then replaces the target, so
    a crash mid-write leaves the previous snapshot intact.
    """
    
    def __init__(self, snapshot_path: str):
        self._snapshot_path = snapshot_path
        self._lock = threading.RLock()
        self._last_saved_at: Optional[datetime] = None
    
    @property
    def snapshot_path(self) -> str:
        return self._snapshot_path
    
    @property
    def last_saved_at(self) -> Optional[datetime]:
        return self._last_saved_at
    
    def exists(self) -> bool:
        return os.path.exists(self._snapshot_path)
    
    def save(self, service: CourseBoardService) -> Dict[str, Any]:
        """Write a snapshot of ``service`` and return the data written."""
        with self._lock:
            snapshot = service.export_state()
            snapshot['created_at'] = datetime.now(timezone.utc).isoformat()
            
            directory = os.path.dirname(os.path.abspath(self._snapshot_path))
            try:
                os.makedirs(directory, exist_ok=True)
                fd, tmp_path = tempfile.mkstemp(prefix=".snapshot-", suffix=".json", dir=directory)
                try:
                    with os.fdopen(fd, "w", encoding="utf-8") as f:
                        json.dump(snapshot, f, indent=2)
                    os.replace(tmp_path, self._snapshot_path)
                except BaseException:
                    if os.path.exists(tmp_path):
                        os.unlink(tmp_path)
                    raise
            except OSError as e:
                raise PersistenceError(f"Failed to save snapshot: {str(e)}")
            
            self._last_saved_at = datetime.now(timezone.utc)
            logger.info("Saved snapshot to %s", self._snapshot_path)
            return snapshot
    
    def load(self, service: CourseBoardService) -> bool:
        """Restore ``service`` from the snapshot file.

        Returns False if there is no snapshot to load.
        """
        with self._lock:
            if not self.exists():
                logger.info("No snapshot at %s, starting empty", self._snapshot_path)
                return False
            
            try:
                with open(self._snapshot_path, "r", encoding="utf-8") as f:
                    snapshot = json.load(f)
            except OSError as e:
                raise PersistenceError(f"Failed to read snapshot: {str(e)}")
            except json.JSONDecodeError as e:
                raise PersistenceError(f"Snapshot {self._snapshot_path} is not valid JSON: {str(e)}")
            
            if not isinstance(snapshot, dict):
                raise PersistenceError(f"Snapshot {self._snapshot_path} must contain a JSON object")
            
            service.import_state(snapshot)
            logger.info("Loaded snapshot from %s", self._snapshot_path)
            return True
    
    def delete(self) -> bool:
        """Remove the snapshot file. Returns False if there was none."""
        with self._lock:
            if not self.exists():
                return False
            try:
                os.remove(self._snapshot_path)
            except OSError as e:
                raise PersistenceError(f"Failed to delete snapshot: {str(e)}")
            return True
