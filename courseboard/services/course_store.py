"""
Append-only store of course listings.
"""

import logging
from typing import List, Optional

from ..core.entities import Course
from ..core.interfaces import IdGenerator

logger = logging.getLogger(__name__)


class CourseStore:
    """Owns the ordered course collection. Courses are never updated or removed."""
    
    def __init__(self, id_generator: IdGenerator):
        self._id_generator = id_generator
        self._courses: List[Course] = []
    
    def create(self, title: str, description: str) -> Course:
        """Create a course. Empty titles and descriptions are accepted."""
        course = Course(id=self._id_generator.next_id(), title=title, description=description)
        self._courses.append(course)
        logger.info("Created course %d (%r)", course.id, course.title)
        return course
    
    def find(self, course_id: int) -> Optional[Course]:
        for course in self._courses:
            if course.id == course_id:
                return course
        return None
    
    def list(self) -> List[Course]:
        return list(self._courses)
    
    def replace_all(self, courses: List[Course]) -> None:
        """Swap in a restored collection, keeping its order."""
        self._courses = list(courses)
    
    def __len__(self) -> int:
        return len(self._courses)
