"""
Store of student enrollments.
"""

import logging
from typing import List

from ..core.entities import Enrollment

logger = logging.getLogger(__name__)


class EnrollmentStore:
    """Owns the ordered enrollment collection.

    The same (student, course) pair may appear several times; ``dropout``
    removes all of its copies at once.
    """
    
    def __init__(self):
        self._enrollments: List[Enrollment] = []
    
    def enroll(self, student_id: str, course_id: int) -> Enrollment:
        enrollment = Enrollment(student_id=student_id, course_id=course_id)
        self._enrollments.append(enrollment)
        logger.info("Enrolled student %r in course %d", student_id, course_id)
        return enrollment
    
    def dropout(self, student_id: str, course_id: int) -> int:
        """Remove every matching enrollment. Returns how many were removed."""
        remaining = [e for e in self._enrollments if not e.matches(student_id, course_id)]
        removed = len(self._enrollments) - len(remaining)
        self._enrollments = remaining
        if removed:
            logger.info("Dropped student %r from course %d (%d entries)", student_id, course_id, removed)
        else:
            logger.debug("Dropout ignored, student %r not enrolled in course %d", student_id, course_id)
        return removed
    
    def list(self) -> List[Enrollment]:
        return list(self._enrollments)
    
    def list_by_student(self, student_id: str) -> List[Enrollment]:
        return [e for e in self._enrollments if e.student_id == student_id]
    
    def replace_all(self, enrollments: List[Enrollment]) -> None:
        self._enrollments = list(enrollments)
    
    def __len__(self) -> int:
        return len(self._enrollments)
