"""
Post-hoc double-booking checks.

Allocations are carved out of free intervals, so none of these should ever
find anything. They exist to catch regressions: the tests run them on every
scenario, and the scheduler runs them when verification is switched on.
"""

import logging
from typing import List, Tuple

from ...schemas import ProposedEvent, ExistingEvent, SchedulingRules
from ..algorithms.availability import busy_windows, day_windows, usable_blocks
from ..constraints.time_constraints import is_working_day
from ..exceptions import ScheduleConflictError

logger = logging.getLogger(__name__)


def overlaps(a_start, a_end, b_start, b_end) -> bool:
    return a_start < b_end and b_start < a_end


def find_overlapping_events(events: List[ProposedEvent]) -> List[Tuple[str, str]]:
    """Every pair of proposed events that share time."""
    conflicts = []
    for i, first in enumerate(events):
        for second in events[i + 1:]:
            if overlaps(first.start, first.end, second.start, second.end):
                conflicts.append((first.id, second.id))
    return conflicts


def find_busy_conflicts(events: List[ProposedEvent], existing_events: List[ExistingEvent], tz) -> List[Tuple[str, str]]:
    """Proposed events that overlap an existing commitment."""
    conflicts = []
    busy = busy_windows(existing_events, tz)
    for event in events:
        for index, (busy_start, busy_end) in enumerate(busy):
            if overlaps(event.start, event.end, busy_start, busy_end):
                conflicts.append((event.id, f"existing[{index}]"))
    return conflicts


def find_events_outside_blocks(events: List[ProposedEvent], rules: SchedulingRules, tz) -> List[str]:
    """Ids of proposed events not contained in an enabled block on a working day."""
    blocks, _ = usable_blocks(rules)
    outside = []
    for event in events:
        local_start = event.start.astimezone(tz)
        day = local_start.date()
        contained = is_working_day(day, rules) and any(
            window_start <= event.start and event.end <= window_end
            for window_start, window_end in day_windows(day, blocks, tz)
        )
        if not contained:
            outside.append(event.id)
    return outside


def assert_conflict_free(events: List[ProposedEvent], existing_events: List[ExistingEvent],
                         rules: SchedulingRules, tz):
    """Raise ScheduleConflictError if any placement double-books or strays outside a block."""
    conflicts = find_overlapping_events(events)
    conflicts.extend(find_busy_conflicts(events, existing_events, tz))
    conflicts.extend((event_id, "time blocks") for event_id in find_events_outside_blocks(events, rules, tz))
    if conflicts:
        logger.error(f"Conflict check failed with {len(conflicts)} conflict(s)")
        raise ScheduleConflictError(conflicts)
