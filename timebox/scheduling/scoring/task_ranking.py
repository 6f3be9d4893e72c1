"""
Task ordering: strategy score plus controlled randomness.
"""

import logging
import random
from datetime import datetime
from typing import Callable, List, Optional, Tuple

from ...schemas import Task, SchedulingRules
from .priority_scoring import calculate_task_selection_score

logger = logging.getLogger(__name__)

# (task, rules, reference time) -> score, higher goes first
ScoringStrategy = Callable[[Task, SchedulingRules, datetime], float]


class TaskRanker:
    """
    Orders tasks by score, highest first.

    Each task's score gets ``randomness_factor * uniform(-0.5, 0.5)`` of jitter
    so repeated runs vary. Ties keep input order, so a fixed seed on ``rng``
    reproduces the same order.
    """
    def __init__(self, rules: SchedulingRules, rng: Optional[random.Random] = None,
                 scorer: Optional[ScoringStrategy] = None):
        self.rules = rules
        self.rng = rng or random.Random()
        self.scorer = scorer or calculate_task_selection_score

    def jitter(self) -> float:
        return self.rules.randomness_factor * (self.rng.random() - 0.5)

    def score_tasks(self, tasks: List[Task], reference: datetime) -> List[Tuple[float, Task]]:
        scored = []
        for task in tasks:
            base_score = self.scorer(task, self.rules, reference)
            scored.append((base_score + self.jitter(), task))
        return scored

    def rank(self, tasks: List[Task], reference: datetime) -> List[Task]:
        scored = self.score_tasks(tasks, reference)
        # sorted() is stable, equal scores keep input order
        scored = sorted(scored, key=lambda x: x[0], reverse=True)
        for score, task in scored:
            logger.debug(f"Ranked task {task.id} '{task.title}' with score {score:.3f}")
        return [task for _, task in scored]
