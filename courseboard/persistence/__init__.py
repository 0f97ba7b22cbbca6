"""
Persistence module for saving and restoring service state.
"""

from .snapshot_manager import SnapshotManager

__all__ = [
    "SnapshotManager",
]
