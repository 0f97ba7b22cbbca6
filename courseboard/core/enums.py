"""
Enumerations and constants for the Courseboard service.
"""

from enum import Enum


# Vote counters are unsigned 32-bit values and saturate at this bound.
MAX_VOTE_COUNT = 2 ** 32 - 1

# Record ids are unsigned 64-bit values.
MAX_RECORD_ID = 2 ** 64 - 1


class OperationKind(Enum):
    """Consistency class of a public operation."""
    MUTATING = "mutating"
    READ = "read"


class VoteDirection(Enum):
    """Which counter a vote increments."""
    UP = "up"
    DOWN = "down"
