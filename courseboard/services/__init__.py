"""
Services module containing the record stores and the service that owns them.
"""

from .id_generator import SequentialIdGenerator
from .course_store import CourseStore
from .vote_request_store import VoteRequestStore
from .enrollment_store import EnrollmentStore
from .course_board import CourseBoardService

__all__ = [
    "SequentialIdGenerator",
    "CourseStore",
    "VoteRequestStore",
    "EnrollmentStore",
    "CourseBoardService",
]
