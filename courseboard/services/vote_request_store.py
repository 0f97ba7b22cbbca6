"""
Store of community vote requests.

A vote request starts with both counters at zero, collects up- and
downvotes, and is eventually declined (removed). Lookups by id are linear
scans over the ordered collection.
"""

import logging
from typing import List

from ..core.entities import VoteRequest
from ..core.enums import VoteDirection
from ..core.interfaces import IdGenerator

logger = logging.getLogger(__name__)


class VoteRequestStore:
    """Owns the ordered vote request collection."""
    
    def __init__(self, id_generator: IdGenerator):
        self._id_generator = id_generator
        self._vote_requests: List[VoteRequest] = []
    
    def create(self, course_id: int) -> VoteRequest:
        """Open a vote request. ``course_id`` is stored as given, never checked."""
        vote_request = VoteRequest(self._id_generator.next_id(), course_id)
        self._vote_requests.append(vote_request)
        logger.info("Created vote request %d for course %d", vote_request.id, course_id)
        return vote_request.copy()
    
    def upvote(self, vote_id: int) -> bool:
        return self._vote(vote_id, VoteDirection.UP)
    
    def downvote(self, vote_id: int) -> bool:
        return self._vote(vote_id, VoteDirection.DOWN)
    
    def _vote(self, vote_id: int, direction: VoteDirection) -> bool:
        """Apply a vote to the first matching request.

        Returns False, leaving the store untouched, when no request has
        ``vote_id``.
        """
        for vote_request in self._vote_requests:
            if vote_request.id == vote_id:
                vote_request.vote(direction)
                logger.debug("Vote %s on request %d -> %d/%d", direction.value, vote_id,
                             vote_request.upvotes, vote_request.downvotes)
                return True
        logger.debug("Vote %s ignored, no vote request %d", direction.value, vote_id)
        return False
    
    def decline(self, vote_id: int) -> int:
        """Remove every request with ``vote_id``. Returns how many were removed."""
        remaining = [v for v in self._vote_requests if v.id != vote_id]
        removed = len(self._vote_requests) - len(remaining)
        self._vote_requests = remaining
        if removed:
            logger.info("Declined vote request %d", vote_id)
        else:
            logger.debug("Decline ignored, no vote request %d", vote_id)
        return removed
    
    def list(self) -> List[VoteRequest]:
        return [vote_request.copy() for vote_request in self._vote_requests]
    
    def replace_all(self, vote_requests: List[VoteRequest]) -> None:
        self._vote_requests = [vote_request.copy() for vote_request in vote_requests]
    
    def __len__(self) -> int:
        return len(self._vote_requests)
