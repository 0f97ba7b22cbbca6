"""
Core module containing the record types, interfaces and error hierarchy.
"""

from .entities import Course, VoteRequest, Enrollment
from .interfaces import IdGenerator
from .exceptions import (
    CourseboardException, ValidationError, ResourceNotFoundError,
    PersistenceError, ConfigurationError, NetworkError
)
from .enums import MAX_VOTE_COUNT, MAX_RECORD_ID, OperationKind, VoteDirection

__all__ = [
    # Entities
    "Course",
    "VoteRequest",
    "Enrollment",
    
    # Interfaces
    "IdGenerator",
    
    # Enums and constants
    "MAX_VOTE_COUNT",
    "MAX_RECORD_ID",
    "OperationKind",
    "VoteDirection",
    
    # Exceptions
    "CourseboardException",
    "ValidationError",
    "ResourceNotFoundError",
    "PersistenceError",
    "ConfigurationError",
    "NetworkError",
]
