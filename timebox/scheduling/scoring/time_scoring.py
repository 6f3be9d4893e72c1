"""
Time-based scoring functions for task ranking.
"""

from datetime import datetime, time, timedelta
from typing import Optional

from ...schemas import Task
from ..core.constants import NEUTRAL_URGENCY
from ..utils.time_utils import to_zone


def due_datetime(task: Task, tz) -> Optional[datetime]:
    """
    The task's due date as an aware timestamp.

    A date without a time means the end of that day.
    """
    due = task.due_date
    if due is None:
        return None
    if isinstance(due, datetime):
        return to_zone(due, tz)
    return to_zone(datetime.combine(due + timedelta(days=1), time.min), tz)


def calculate_deadline_urgency_score(task: Task, reference: datetime) -> float:
    """
    Calculate urgency score based on due date proximity (0.1 - 1.0).
    Higher score = closer to the due date = more urgent.

    Tasks without a due date sit in the middle of the scale.
    """
    deadline = due_datetime(task, reference.tzinfo)
    if deadline is None:
        return NEUTRAL_URGENCY

    hours_until_deadline = (deadline - reference).total_seconds() / 3600

    # Overdue
    if hours_until_deadline <= 0:
        return 1.0

    if hours_until_deadline <= 24:  # 1 day or less
        return 1.0 - (hours_until_deadline / 24.0) * 0.2
    elif hours_until_deadline <= 48:  # 2 days or less
        return 0.8 - (hours_until_deadline - 24.0) / 24.0 * 0.2
    elif hours_until_deadline <= 72:  # 3 days or less
        return 0.6 - (hours_until_deadline - 48.0) / 24.0 * 0.2
    elif hours_until_deadline <= 168:  # 1 week or less
        return 0.4 - (hours_until_deadline - 72.0) / 96.0 * 0.2
    elif hours_until_deadline <= 336:  # 2 weeks or less
        return 0.2 - (hours_until_deadline - 168.0) / 168.0 * 0.1
    else:
        return 0.1
