"""
Sequential id generation for new records.
"""

from ..core.enums import MAX_RECORD_ID
from ..core.exceptions import ValidationError
from ..core.interfaces import IdGenerator


class SequentialIdGenerator(IdGenerator):
    """Monotonic counter. The first id issued is 1, so ids are never zero."""
    
    def __init__(self, start_after: int = 0):
        if start_after < 0:
            raise ValidationError(f"Id counter cannot start below zero: {start_after}")
        self._last_id = start_after
    
    def next_id(self) -> int:
        if self._last_id >= MAX_RECORD_ID:
            raise ValidationError("Record id space exhausted", error_code="ID_EXHAUSTED")
        self._last_id += 1
        return self._last_id
    
    def peek(self) -> int:
        return self._last_id
    
    def advance_past(self, value: int) -> None:
        if value > self._last_id:
            self._last_id = value
