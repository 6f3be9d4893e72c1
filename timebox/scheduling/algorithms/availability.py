"""
Free time computation: recurring time blocks minus existing commitments.
"""

import logging
from datetime import datetime, time
from typing import List, Tuple

from ...schemas import SchedulingRules, TimeBlock, ExistingEvent, TimeBlockWarning
from ..core.time_slot import FreeInterval
from ..constraints.time_constraints import block_bounds, block_applies_to_day, is_working_day, weekday_name
from ..exceptions import MalformedTimeBlock
from ..utils.slot_utils import Window, merge_windows, subtract_busy
from ..utils.time_utils import days_in_range, get_zone, to_zone, wall_clock

logger = logging.getLogger(__name__)

UsableBlock = Tuple[TimeBlock, time, time]


def usable_blocks(rules: SchedulingRules) -> Tuple[List[UsableBlock], List[TimeBlockWarning]]:
    """
    Split the enabled time blocks into usable ones and warnings.

    Malformed blocks are skipped, never fatal.
    """
    usable: List[UsableBlock] = []
    warnings: List[TimeBlockWarning] = []
    for block in rules.enabled_blocks():
        try:
            start, end = block_bounds(block)
        except MalformedTimeBlock as e:
            logger.warning(f"⚠️ {e}")
            warnings.append(TimeBlockWarning(block_id=e.block_id, reason=e.reason))
            continue
        usable.append((block, start, end))
    return usable, warnings


def busy_windows(existing_events: List[ExistingEvent], tz) -> List[Window]:
    """Existing events as aware (start, end) pairs; zero-length or inverted events are dropped."""
    windows = []
    for event in existing_events:
        event_tz = get_zone(event.time_zone)
        start = to_zone(event.start, event_tz).astimezone(tz)
        end = to_zone(event.end, event_tz).astimezone(tz)
        if end <= start:
            logger.debug(f"Ignoring existing event {event.id or event.summary!r} with end <= start")
            continue
        windows.append((start, end))
    return windows


def day_windows(day, blocks: List[UsableBlock], tz) -> List[Window]:
    """Union of the block windows that apply to ``day``."""
    windows = [
        (wall_clock(day, start, tz), wall_clock(day, end, tz))
        for block, start, end in blocks
        if block_applies_to_day(block, day)
    ]
    return merge_windows(windows)


def compute_free_intervals(range_start: datetime, range_end: datetime, rules: SchedulingRules,
                           existing_events: List[ExistingEvent], tz) -> Tuple[List[FreeInterval], List[TimeBlockWarning]]:
    """
    Free intervals for every working day in [range_start, range_end).

    ``range_start`` and ``range_end`` must already be aware timestamps in ``tz``.
    Returns the intervals sorted by start along with any block warnings.
    """
    blocks, warnings = usable_blocks(rules)
    busy = busy_windows(existing_events, tz)

    intervals: List[FreeInterval] = []
    for day in days_in_range(range_start, range_end):
        if not is_working_day(day, rules):
            logger.debug(f"{day} ({weekday_name(day)}) is not a working day, skipping")
            continue

        windows = day_windows(day, blocks, tz)
        if not windows:
            logger.debug(f"No time blocks apply to {day} ({weekday_name(day)})")
            continue

        for window_start, window_end in windows:
            # Clip to the requested range
            window_start = max(window_start, range_start)
            window_end = min(window_end, range_end)
            if window_start >= window_end:
                continue
            for free_start, free_end in subtract_busy((window_start, window_end), busy):
                intervals.append(FreeInterval(free_start, free_end))

    intervals.sort()
    if not intervals:
        logger.warning("No free time found in range. Check working days and time blocks configuration.")
    else:
        logger.info(f"Found {len(intervals)} free intervals between {range_start.isoformat()} and {range_end.isoformat()}")
    return intervals, warnings
