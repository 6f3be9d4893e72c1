"""
Errors raised by the scheduling engine.

Structural input problems abort a run and surface as one of the
``SchedulingError`` subclasses. Per-task placement failures are never raised,
they are returned as data on the result.
"""

from typing import List, Tuple


class SchedulingError(Exception):
    """Base class for errors that abort a scheduling run."""


class InvalidRules(SchedulingError):
    """Scheduling rules hold a weight, factor or duration out of range."""


class InvalidDateRange(SchedulingError):
    """The requested range ends at or before its start."""


class MalformedTimeBlock(SchedulingError):
    """A time block cannot be turned into a window.

    Never escapes a run: the availability calculator catches it, skips the
    block and records a warning instead.
    """

    def __init__(self, block_id: str, reason: str):
        super().__init__(f"Time block {block_id!r} skipped: {reason}")
        self.block_id = block_id
        self.reason = reason


class ScheduleConflictError(SchedulingError):
    """Raised by the conflict guard when an allocation double-books time."""

    def __init__(self, conflicts: List[Tuple[str, str]]):
        pairs = ", ".join(f"{a} <-> {b}" for a, b in conflicts[:5])
        super().__init__(f"{len(conflicts)} scheduling conflict(s) detected: {pairs}")
        self.conflicts = conflicts


class InvalidTimeZone(SchedulingError):
    """The time zone name is not a known IANA zone."""
