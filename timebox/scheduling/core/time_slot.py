"""
Time interval representation for the scheduling system.
"""

from datetime import datetime, timedelta
from typing import Any, Optional


class FreeInterval:
    """
    A concrete, date-bound stretch of free time [start, end).

    Built fresh on every run from the time block templates, then consumed
    by the allocator as tasks are placed into it.
    """
    def __init__(self, start: datetime, end: datetime):
        self.start = start
        self.end = end

    def duration(self) -> timedelta:
        return self.end - self.start

    def minutes(self) -> float:
        return self.duration().total_seconds() / 60

    def can_fit(self, duration: timedelta) -> bool:
        return self.duration() >= duration

    def __lt__(self, other):
        return self.start < other.start

    def __eq__(self, other):
        if not isinstance(other, FreeInterval):
            return NotImplemented
        return self.start == other.start and self.end == other.end

    def __hash__(self):
        return hash((self.start, self.end))

    def __repr__(self):
        return f"FreeInterval({self.start.strftime('%Y-%m-%d %I:%M %p')} - {self.end.strftime('%I:%M %p')})"


class AllocatedSlot:
    """
    A piece of a task placed on the calendar.

    Long tasks produce one slot per chunk; ``chunk_index`` is 1-based and
    ``chunk_count`` is the number of chunks the task needed in total, placed
    or not.
    """
    def __init__(self, start: datetime, end: datetime, occupant: Any,
                 chunk_index: int = 1, chunk_count: int = 1):
        self.start = start
        self.end = end
        self.occupant = occupant
        self.chunk_index = chunk_index
        self.chunk_count = chunk_count

    @property
    def is_chunk(self) -> bool:
        return self.chunk_count > 1

    @property
    def task_id(self) -> Optional[str]:
        return getattr(self.occupant, "id", None)

    def __lt__(self, other):
        return self.start < other.start

    def __repr__(self):
        occupant_name = getattr(self.occupant, "title", str(self.occupant))
        part = f" ({self.chunk_index}/{self.chunk_count})" if self.is_chunk else ""
        return f"TaskSlot({self.start.strftime('%Y-%m-%d %I:%M %p')} - {self.end.strftime('%I:%M %p')}, {occupant_name}{part})"
