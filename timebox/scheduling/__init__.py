"""
Timebox Scheduling Engine

Places pending tasks into free time carved out of recurring time blocks,
around existing calendar commitments. Stateless: every call works only on
the input it is given.
"""

from .core.scheduler import TaskScheduler, schedule
from .core.rules import default_rules, resolve_rules
from .core.time_slot import FreeInterval, AllocatedSlot
from .exceptions import (
    SchedulingError, InvalidRules, InvalidDateRange, InvalidTimeZone, MalformedTimeBlock, ScheduleConflictError
)

__version__ = "1.0.0"
