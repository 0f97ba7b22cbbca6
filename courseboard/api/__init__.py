"""
API module for the REST interface.
"""

from .rest_api import CourseBoardRestAPI

__all__ = [
    "CourseBoardRestAPI",
]
