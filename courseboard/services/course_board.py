"""
Course board service: the single owner of all Courseboard state.
"""

import functools
import logging
import threading
from typing import Any, Callable, Dict, List, Optional

from ..core.entities import Course, VoteRequest, Enrollment
from ..core.enums import MAX_RECORD_ID, OperationKind
from ..core.exceptions import ResourceNotFoundError, PersistenceError, ValidationError
from ..core.interfaces import IdGenerator
from .id_generator import SequentialIdGenerator
from .course_store import CourseStore
from .vote_request_store import VoteRequestStore
from .enrollment_store import EnrollmentStore

logger = logging.getLogger(__name__)


SNAPSHOT_FORMAT_VERSION = 1

MutationListener = Callable[[str], None]


def _operation(func):
    """Run a public operation under the service lock.

    After a mutating operation completes, every registered mutation
    listener is called with the operation name while the lock is still
    held, so listeners observe exactly the state that operation produced.
    """
    name = func.__name__

    @functools.wraps(func)
    def wrapper(self, *args, **kwargs):
        with self._lock:
            result = func(self, *args, **kwargs)
            if self.is_mutating(name):
                for listener in self._mutation_listeners:
                    listener(name)
            return result

    return wrapper


class CourseBoardService:
    """Service exposing every course, vote and enrollment operation.

    Each public method runs under one re-entrant lock, so operations are
    applied one at a time and reads never see a half-finished mutation.

    With ``strict_references`` off (the default) unknown ids are ignored:
    votes and declines on a missing vote request, and dropouts that match
    nothing, do nothing. With it on, those cases and references to unknown
    courses raise ``ResourceNotFoundError``.
    """

    OPERATIONS: Dict[str, OperationKind] = {
        'create_course': OperationKind.MUTATING,
        'create_vote_request': OperationKind.MUTATING,
        'vote_up': OperationKind.MUTATING,
        'vote_down': OperationKind.MUTATING,
        'decline_vote_request': OperationKind.MUTATING,
        'enroll_student': OperationKind.MUTATING,
        'dropout_student': OperationKind.MUTATING,
        'get_courses': OperationKind.READ,
        'get_course': OperationKind.READ,
        'get_vote_requests': OperationKind.READ,
        'get_enrollments': OperationKind.READ,
        'get_enrollments_by_student': OperationKind.READ,
        'get_statistics': OperationKind.READ,
    }

    def __init__(self, id_generator: Optional[IdGenerator] = None, strict_references: bool = False):
        self._id_generator = id_generator or SequentialIdGenerator()
        self._strict_references = strict_references
        self._courses = CourseStore(self._id_generator)
        self._vote_requests = VoteRequestStore(self._id_generator)
        self._enrollments = EnrollmentStore()
        self._mutation_listeners: List[MutationListener] = []
        self._lock = threading.RLock()

    @property
    def strict_references(self) -> bool:
        return self._strict_references

    @classmethod
    def is_mutating(cls, operation: str) -> bool:
        """Tell whether a named operation changes state."""
        if operation not in cls.OPERATIONS:
            raise ValidationError(f"Unknown operation: {operation}")
        return cls.OPERATIONS[operation] is OperationKind.MUTATING

    def add_mutation_listener(self, listener: MutationListener) -> None:
        """Call ``listener(operation_name)`` after every successful mutating operation.

        Operations that end in an error do not notify. A listener that
        raises propagates its error to the caller of the operation; the
        mutation itself has already been applied.
        """
        with self._lock:
            self._mutation_listeners.append(listener)

    # Courses

    @_operation
    def create_course(self, title: str, description: str) -> Course:
        return self._courses.create(title, description)

    @_operation
    def get_courses(self) -> List[Course]:
        return self._courses.list()

    @_operation
    def get_course(self, course_id: int) -> Course:
        """Look up one course by id."""
        course = self._courses.find(course_id)
        if course is None:
            raise ResourceNotFoundError(f"Course {course_id} not found", error_code="COURSE_NOT_FOUND")
        return course

    # Vote requests

    @_operation
    def create_vote_request(self, course_id: int) -> VoteRequest:
        self._check_course(course_id)
        return self._vote_requests.create(course_id)

    @_operation
    def vote_up(self, vote_id: int) -> None:
        if not self._vote_requests.upvote(vote_id):
            self._report_missing_vote_request(vote_id)

    @_operation
    def vote_down(self, vote_id: int) -> None:
        if not self._vote_requests.downvote(vote_id):
            self._report_missing_vote_request(vote_id)

    @_operation
    def decline_vote_request(self, vote_id: int) -> None:
        if not self._vote_requests.decline(vote_id):
            self._report_missing_vote_request(vote_id)

    @_operation
    def get_vote_requests(self) -> List[VoteRequest]:
        return self._vote_requests.list()

    # Enrollments

    @_operation
    def enroll_student(self, student_id: str, course_id: int) -> Enrollment:
        self._check_course(course_id)
        return self._enrollments.enroll(student_id, course_id)

    @_operation
    def dropout_student(self, student_id: str, course_id: int) -> None:
        if not self._enrollments.dropout(student_id, course_id) and self._strict_references:
            raise ResourceNotFoundError(
                f"Student {student_id!r} is not enrolled in course {course_id}",
                error_code="ENROLLMENT_NOT_FOUND",
                details={'student_id': student_id, 'course_id': course_id}
            )

    @_operation
    def get_enrollments(self) -> List[Enrollment]:
        return self._enrollments.list()

    @_operation
    def get_enrollments_by_student(self, student_id: str) -> List[Enrollment]:
        return self._enrollments.list_by_student(student_id)

    # Reference checks

    def _check_course(self, course_id: int) -> None:
        if self._strict_references and self._courses.find(course_id) is None:
            raise ResourceNotFoundError(
                f"Course {course_id} not found",
                error_code="COURSE_NOT_FOUND",
                details={'course_id': course_id}
            )

    def _report_missing_vote_request(self, vote_id: int) -> None:
        if self._strict_references:
            raise ResourceNotFoundError(
                f"Vote request {vote_id} not found",
                error_code="VOTE_REQUEST_NOT_FOUND",
                details={'vote_id': vote_id}
            )

    # State export for snapshots

    def export_state(self) -> Dict[str, Any]:
        """Return the three collections, in insertion order, as plain data."""
        with self._lock:
            return {
                'version': SNAPSHOT_FORMAT_VERSION,
                'last_id': self._id_generator.peek(),
                'courses': [course.to_dict() for course in self._courses.list()],
                'vote_requests': [vote.to_dict() for vote in self._vote_requests.list()],
                'enrollments': [enrollment.to_dict() for enrollment in self._enrollments.list()]
            }

    def import_state(self, state: Dict[str, Any]) -> None:
        """Replace all state with previously exported data.

        Nothing is changed if any record fails to parse. The id generator
        is moved past every restored id so new records never reuse one.
        """
        with self._lock:
            version = state.get('version')
            if version != SNAPSHOT_FORMAT_VERSION:
                raise PersistenceError(f"Unsupported snapshot version: {version!r}")
            try:
                courses = [Course.from_dict(item) for item in state.get('courses', [])]
                vote_requests = [VoteRequest.from_dict(item) for item in state.get('vote_requests', [])]
                enrollments = [Enrollment.from_dict(item) for item in state.get('enrollments', [])]
            except (ValidationError, TypeError, AttributeError) as e:
                raise PersistenceError(f"Malformed snapshot data: {e}")

            last_id = state.get('last_id', 0)
            if isinstance(last_id, bool) or not isinstance(last_id, int) or not 0 <= last_id <= MAX_RECORD_ID:
                raise PersistenceError(f"Malformed snapshot data: invalid last_id {last_id!r}")

            self._courses.replace_all(courses)
            self._vote_requests.replace_all(vote_requests)
            self._enrollments.replace_all(enrollments)

            highest = max([last_id] + [c.id for c in courses] + [v.id for v in vote_requests])
            self._id_generator.advance_past(highest)
            logger.info("Restored %d courses, %d vote requests, %d enrollments",
                        len(courses), len(vote_requests), len(enrollments))

    @_operation
    def get_statistics(self) -> Dict[str, Any]:
        """Get record counts."""
        return {
            'total_courses': len(self._courses),
            'total_vote_requests': len(self._vote_requests),
            'total_enrollments': len(self._enrollments),
            'last_issued_id': self._id_generator.peek(),
            'strict_references': self._strict_references
        }
