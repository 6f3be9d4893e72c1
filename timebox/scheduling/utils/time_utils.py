"""
Time zone and calendar-day helpers.
"""

from datetime import date, datetime, time, timedelta
from typing import List

import pytz

from ..exceptions import InvalidTimeZone


def get_zone(name: str):
    try:
        return pytz.timezone(name)
    except pytz.UnknownTimeZoneError:
        raise InvalidTimeZone(f"Unknown time zone: {name}")


def to_zone(value: datetime, tz) -> datetime:
    """Express a timestamp in ``tz``; naive values are taken as wall clock in ``tz``."""
    if value.tzinfo is None:
        if hasattr(tz, "localize"):
            return tz.localize(value)
        return value.replace(tzinfo=tz)
    return value.astimezone(tz)


def wall_clock(day: date, clock: time, tz) -> datetime:
    """Pin a wall clock time on a given day in ``tz``."""
    return to_zone(datetime.combine(day, clock), tz)


def days_in_range(start: datetime, end: datetime) -> List[date]:
    """All calendar days touched by [start, end), in order."""
    days = []
    current_day = start.date()
    last_day = (end - timedelta(microseconds=1)).date()
    while current_day <= last_day:
        days.append(current_day)
        current_day += timedelta(days=1)
    return days
