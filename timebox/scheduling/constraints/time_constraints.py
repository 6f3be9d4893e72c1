"""
Day and time-of-day constraint checks for time blocks.
"""

import re
from datetime import date, time
from typing import Tuple

from ...schemas import SchedulingRules, TimeBlock
from ..core.constants import WEEKDAY_NAMES, DAY_GROUPS
from ..exceptions import MalformedTimeBlock

_CLOCK_PATTERN = re.compile(r"^(\d{1,2}):(\d{2})$")


def weekday_name(day: date) -> str:
    return WEEKDAY_NAMES[day.weekday()]


def is_working_day(day: date, rules: SchedulingRules) -> bool:
    """Check the rules' working days; days not listed are off."""
    return rules.is_working_day(weekday_name(day))


def is_known_selector(selector: str) -> bool:
    key = selector.strip().lower()
    return key in WEEKDAY_NAMES or key in DAY_GROUPS


def block_applies_to_day(block: TimeBlock, day: date) -> bool:
    """
    A block applies when its selector names the day, the day's group
    ("weekday" / "weekend"), or "all".
    """
    selector = block.day.strip().lower()
    day_name = weekday_name(day)
    if selector == day_name:
        return True
    return day_name in DAY_GROUPS.get(selector, set())


def parse_clock(value: str) -> time:
    """Parse a wall clock "HH:MM" string."""
    match = _CLOCK_PATTERN.match(value.strip())
    if not match:
        raise ValueError(f"invalid time format {value!r}, expected HH:MM")
    hour, minute = int(match.group(1)), int(match.group(2))
    if hour > 23 or minute > 59:
        raise ValueError(f"time out of range {value!r}")
    return time(hour, minute)


def block_bounds(block: TimeBlock) -> Tuple[time, time]:
    """
    Start and end wall clock times of a block.

    Raises MalformedTimeBlock for unparseable times, an unknown day selector,
    or a block that ends at or before it starts.
    """
    if not is_known_selector(block.day):
        raise MalformedTimeBlock(block.id, f"unknown day selector {block.day!r}")
    try:
        start = parse_clock(block.start_time)
        end = parse_clock(block.end_time)
    except ValueError as e:
        raise MalformedTimeBlock(block.id, str(e))
    if end <= start:
        raise MalformedTimeBlock(block.id, f"end {block.end_time} is not after start {block.start_time}")
    return start, end

