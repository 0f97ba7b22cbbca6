"""
Core records for the Courseboard service: courses, vote requests and enrollments.
"""

from dataclasses import dataclass, asdict
from typing import Any, Dict

from .enums import MAX_RECORD_ID, MAX_VOTE_COUNT, VoteDirection
from .exceptions import ValidationError


def _require_keys(data: Dict[str, Any], keys, record: str) -> None:
    missing = [key for key in keys if key not in data]
    if missing:
        raise ValidationError(
            f"{record} record is missing fields: {', '.join(missing)}",
            error_code="MALFORMED_RECORD",
            details={"missing": missing}
        )


def _require_str(data: Dict[str, Any], key: str, record: str) -> str:
    value = data[key]
    if not isinstance(value, str):
        raise ValidationError(
            f"{record}.{key} must be a string, got {type(value).__name__}",
            error_code="MALFORMED_RECORD",
            details={"field": key}
        )
    return value


def _require_int(data: Dict[str, Any], key: str, record: str, upper: int) -> int:
    """Read an integer field in ``0..upper``. Booleans are not integers here."""
    value = data[key]
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(
            f"{record}.{key} must be an integer, got {type(value).__name__}",
            error_code="MALFORMED_RECORD",
            details={"field": key}
        )
    if not 0 <= value <= upper:
        raise ValidationError(
            f"{record}.{key} out of range: {value}",
            error_code="MALFORMED_RECORD",
            details={"field": key}
        )
    return value


@dataclass(frozen=True)
class Course:
    """Immutable course listing."""
    id: int
    title: str
    description: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Course":
        _require_keys(data, ("id", "title", "description"), "Course")
        return cls(
            id=_require_int(data, "id", "Course", MAX_RECORD_ID),
            title=_require_str(data, "title", "Course"),
            description=_require_str(data, "description", "Course")
        )


class VoteRequest:
    """Community poll about a course proposal.

    Counters only ever grow and stop at ``MAX_VOTE_COUNT`` instead of
    wrapping around.
    """

    def __init__(self, vote_id: int, course_id: int, upvotes: int = 0, downvotes: int = 0):
        self._id = vote_id
        self._course_id = course_id
        self._upvotes = upvotes
        self._downvotes = downvotes

    @property
    def id(self) -> int:
        return self._id

    @property
    def course_id(self) -> int:
        return self._course_id

    @property
    def upvotes(self) -> int:
        return self._upvotes

    @property
    def downvotes(self) -> int:
        return self._downvotes

    def vote(self, direction: VoteDirection) -> None:
        """Record one vote in the given direction."""
        if direction is VoteDirection.UP:
            self._upvotes = min(self._upvotes + 1, MAX_VOTE_COUNT)
        else:
            self._downvotes = min(self._downvotes + 1, MAX_VOTE_COUNT)

    def copy(self) -> "VoteRequest":
        return VoteRequest(self._id, self._course_id, self._upvotes, self._downvotes)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self._id,
            'course_id': self._course_id,
            'upvotes': self._upvotes,
            'downvotes': self._downvotes
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "VoteRequest":
        _require_keys(data, ("id", "course_id", "upvotes", "downvotes"), "VoteRequest")
        return cls(
            _require_int(data, "id", "VoteRequest", MAX_RECORD_ID),
            _require_int(data, "course_id", "VoteRequest", MAX_RECORD_ID),
            _require_int(data, "upvotes", "VoteRequest", MAX_VOTE_COUNT),
            _require_int(data, "downvotes", "VoteRequest", MAX_VOTE_COUNT)
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, VoteRequest):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        return (f"{self.__class__.__name__}(id={self._id}, course_id={self._course_id}, "
                f"upvotes={self._upvotes}, downvotes={self._downvotes})")


@dataclass(frozen=True)
class Enrollment:
    """Link between a student identity and a course. Duplicates are allowed."""
    student_id: str
    course_id: int

    def matches(self, student_id: str, course_id: int) -> bool:
        return self.student_id == student_id and self.course_id == course_id

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Enrollment":
        _require_keys(data, ("student_id", "course_id"), "Enrollment")
        return cls(
            student_id=_require_str(data, "student_id", "Enrollment"),
            course_id=_require_int(data, "course_id", "Enrollment", MAX_RECORD_ID)
        )
