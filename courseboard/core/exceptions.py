"""
Custom exceptions for the Courseboard service.
"""

from typing import Optional, Any, Dict


class CourseboardException(Exception):
    """Base exception for all Courseboard-related errors."""
    
    def __init__(self, message: str, error_code: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}


class ValidationError(CourseboardException):
    """Raised when data validation fails."""
    pass


class ResourceNotFoundError(CourseboardException):
    """Raised when a requested resource is not found."""
    pass


class PersistenceError(CourseboardException):
    """Raised when persistence operations fail."""
    pass


class ConfigurationError(CourseboardException):
    """Raised when configuration is invalid."""
    pass


class NetworkError(CourseboardException):
    """Raised when network operations fail."""
    pass
