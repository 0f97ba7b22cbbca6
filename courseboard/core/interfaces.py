"""
Core interfaces and abstract base classes for the Courseboard service.
"""

from abc import ABC, abstractmethod


class IdGenerator(ABC):
    """Abstract source of record ids."""
    
    @abstractmethod
    def next_id(self) -> int:
        """Return an id greater than every id returned before."""
        pass
    
    @abstractmethod
    def peek(self) -> int:
        """Return the last issued id, or 0 if none was issued."""
        pass
    
    @abstractmethod
    def advance_past(self, value: int) -> None:
        """Make sure the next id is greater than ``value``."""
        pass
