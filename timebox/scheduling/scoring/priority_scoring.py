"""
Priority-based scoring functions for task ranking.
"""

from datetime import datetime

from ...schemas import Task, SchedulingRules
from ..core.constants import PRIORITY_VALUES
from .time_scoring import calculate_deadline_urgency_score


def calculate_priority_score(task: Task) -> float:
    """
    Map priority onto [0, 1]: Low: 0.0, Medium: 0.5, High: 1.0
    """
    return PRIORITY_VALUES[task.priority.value]


def calculate_task_selection_score(task: Task, rules: SchedulingRules, reference: datetime) -> float:
    """
    Default scoring strategy: weighted priority plus weighted urgency.
    Higher score = placed earlier.

    ``reference`` is the moment urgency is measured from, normally the start
    of the scheduling range.
    """
    priority_score = calculate_priority_score(task)
    urgency_score = calculate_deadline_urgency_score(task, reference)

    return (
        (rules.priority_weight * priority_score) +
        (rules.time_weight * urgency_score)
    )
