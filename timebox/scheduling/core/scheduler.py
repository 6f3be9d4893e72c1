"""
Main scheduler class that orchestrates a scheduling run.
"""

import logging
import random
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple, Union

from ...schemas import Task, SchedulingRules, ExistingEvent, ProposedEvent, ScheduleResult
from ..algorithms.allocation import SlotAllocator
from ..algorithms.availability import compute_free_intervals
from ..constraints.conflict_guard import assert_conflict_free
from ..exceptions import InvalidDateRange
from ..scoring.task_ranking import TaskRanker, ScoringStrategy
from ..utils.event_utils import materialize_events
from ..utils.slot_utils import total_free_minutes
from ..utils.time_utils import get_zone, to_zone
from .constants import (
    RULES_RESOLVED, AVAILABILITY_COMPUTED, TASKS_RANKED, SLOTS_ALLOCATED, EVENTS_MATERIALIZED
)
from .rules import resolve_rules

logger = logging.getLogger(__name__)

RulesInput = Optional[Union[SchedulingRules, Dict[str, Any]]]


class TaskScheduler:
    """
    Runs one scheduling pass over caller-supplied input.

    The stages run strictly in order:
    RULES_RESOLVED -> AVAILABILITY_COMPUTED -> TASKS_RANKED -> SLOTS_ALLOCATED
    -> EVENTS_MATERIALIZED. Bad rules or a bad range abort the run before
    anything is placed; tasks that do not fit are reported on the result.

    The scheduler keeps no state between runs, so one instance may be reused,
    but ``rng`` is consumed by every run: pass a freshly seeded Random per run
    to replay a schedule.
    """
    def __init__(self, rng: Optional[random.Random] = None, scorer: Optional[ScoringStrategy] = None,
                 time_zone: str = "UTC", verify: bool = False):
        self.rng = rng or random.Random()
        self.scorer = scorer
        self.time_zone = time_zone
        self.verify = verify

# ================================
# INPUT NORMALIZATION
# ================================

    def _resolve_range(self, range_start: datetime, range_end: datetime, tz) -> Tuple[datetime, datetime]:
        start = to_zone(range_start, tz)
        end = to_zone(range_end, tz)
        if end <= start:
            raise InvalidDateRange(f"Range end {end.isoformat()} must be after start {start.isoformat()}")
        return start, end

# ================================
# CORE SCHEDULING LOGIC
# ================================

    def run(self, tasks: List[Task], rules: RulesInput, range_start: datetime, range_end: datetime,
            existing_events: Optional[List[ExistingEvent]] = None, schedule_source: str = "local") -> ScheduleResult:
        existing_events = existing_events or []
        tz = get_zone(self.time_zone)

        resolved_rules = resolve_rules(rules)
        start, end = self._resolve_range(range_start, range_end, tz)
        logger.info(f"🔄 {RULES_RESOLVED}: scheduling {len(tasks)} task(s) from '{schedule_source}' "
                    f"between {start.isoformat()} and {end.isoformat()}")

        free_intervals, warnings = compute_free_intervals(start, end, resolved_rules, existing_events, tz)
        logger.info(f"🔄 {AVAILABILITY_COMPUTED}: {len(free_intervals)} free interval(s) "
                    f"({total_free_minutes(free_intervals):.0f} min), {len(warnings)} warning(s)")

        ranker = TaskRanker(resolved_rules, rng=self.rng, scorer=self.scorer)
        ranked_tasks = ranker.rank(tasks, reference=start)
        logger.info(f"🔄 {TASKS_RANKED}: {[task.id for task in ranked_tasks]}")

        allocator = SlotAllocator(free_intervals, resolved_rules)
        allocation = allocator.allocate(ranked_tasks)
        logger.info(f"🔄 {SLOTS_ALLOCATED}: {len(allocation.slots)} slot(s), "
                    f"{len(allocation.unscheduled_task_ids)} task(s) not fully placed, "
                    f"{total_free_minutes(allocator.remaining_intervals()):.0f} min still free")

        events = materialize_events(allocation.slots, schedule_source, tz, rng=self.rng)
        if self.verify:
            assert_conflict_free(events, existing_events, resolved_rules, tz)
        logger.info(f"🔄 {EVENTS_MATERIALIZED}: {len(events)} proposed event(s)")

        return ScheduleResult(
            events=events,
            unscheduled_task_ids=allocation.unscheduled_task_ids,
            outcomes=allocation.outcomes,
            warnings=warnings,
        )


def schedule(tasks: List[Task], rules: RulesInput, range_start: datetime, range_end: datetime,
             existing_events: Optional[List[ExistingEvent]] = None, schedule_source: str = "local",
             rng: Optional[random.Random] = None, time_zone: str = "UTC") -> Tuple[List[ProposedEvent], List[str]]:
    """
    Propose events for ``tasks`` in [range_start, range_end).

    Returns the proposed events and the ids of tasks that could not be (fully)
    placed. Raises InvalidRules or InvalidDateRange for bad input.
    """
    result = TaskScheduler(rng=rng, time_zone=time_zone).run(
        tasks, rules, range_start, range_end, existing_events, schedule_source
    )
    return result.events, result.unscheduled_task_ids
