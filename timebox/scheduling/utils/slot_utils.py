"""
Interval helpers for building and consuming free time.
"""

from datetime import datetime, timedelta
from typing import List, Optional, Tuple
from ..core.time_slot import FreeInterval

Window = Tuple[datetime, datetime]


def merge_windows(windows: List[Window]) -> List[Window]:
    """Union a set of windows, merging any that overlap or touch."""
    merged: List[Window] = []
    for start, end in sorted(windows):
        if merged and start <= merged[-1][1]:
            # Overlapping or adjacent, extend the previous window
            if end > merged[-1][1]:
                merged[-1] = (merged[-1][0], end)
        else:
            merged.append((start, end))
    return merged


def subtract_busy(window: Window, busy: List[Window]) -> List[Window]:
    """
    Remove busy intervals from a window.

    Returns the free pieces left over, in chronological order.
    """
    window_start, window_end = window
    overlapping = sorted(
        (start, end) for start, end in busy
        if start < window_end and end > window_start
    )

    free: List[Window] = []
    current_start = window_start
    for busy_start, busy_end in overlapping:
        if busy_start > current_start:
            free.append((current_start, min(busy_start, window_end)))
        if busy_end > current_start:
            current_start = busy_end
        if current_start >= window_end:
            break

    if current_start < window_end:
        free.append((current_start, window_end))

    return free


def find_first_fit(intervals: List[FreeInterval], duration: timedelta,
                   not_before: Optional[datetime] = None) -> Optional[FreeInterval]:
    """First interval, in chronological order, with room for ``duration``."""
    for interval in intervals:
        if not_before is not None and interval.start < not_before:
            continue
        if interval.can_fit(duration):
            return interval
    return None


def consume_interval(intervals: List[FreeInterval], interval: FreeInterval, duration: timedelta) -> Window:
    """
    Take ``duration`` off the front of ``interval``.

    The interval is replaced in ``intervals`` by its trailing remainder, or
    dropped when fully used. Returns the allocated window.
    """
    allocated = (interval.start, interval.start + duration)
    remainder = []
    if allocated[1] < interval.end:
        remainder.append(FreeInterval(allocated[1], interval.end))
    replace_interval(interval, remainder, intervals)
    return allocated


def replace_interval(old: FreeInterval, new: List[FreeInterval], intervals: List[FreeInterval]):
    """Replace an old interval with new ones in the intervals list"""
    index = intervals.index(old)
    intervals.pop(index)
    for i, interval in enumerate(new):
        intervals.insert(index + i, interval)


def total_free_minutes(intervals: List[FreeInterval]) -> float:
    return sum(interval.minutes() for interval in intervals)
