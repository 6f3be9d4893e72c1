"""
Greedy first-fit placement of ranked tasks into free intervals.
"""

import logging
from datetime import datetime, timedelta
from typing import List, Optional

from ...models import OutcomeStatus
from ...schemas import Task, SchedulingRules, TaskOutcome
from ..core.time_slot import AllocatedSlot, FreeInterval
from ..utils.slot_utils import consume_interval, find_first_fit
from .chunking import calculate_chunk_durations

logger = logging.getLogger(__name__)


class AllocationResult:
    def __init__(self):
        self.slots: List[AllocatedSlot] = []
        self.unscheduled_task_ids: List[str] = []
        self.outcomes: List[TaskOutcome] = []

    def __repr__(self):
        return f"AllocationResult({len(self.slots)} slots, {len(self.unscheduled_task_ids)} unscheduled)"


class SlotAllocator:
    """
    Places tasks into a working copy of the free intervals.

    Every placement is carved off the front of a free interval and the
    interval shrinks to what is left, so two placements can never overlap
    each other or anything the free intervals were built around.
    """
    def __init__(self, free_intervals: List[FreeInterval], rules: SchedulingRules):
        # Own copy, the caller's list is left as it was
        self.intervals = [FreeInterval(i.start, i.end) for i in sorted(free_intervals)]
        self.rules = rules

    def allocate(self, ranked_tasks: List[Task]) -> AllocationResult:
        result = AllocationResult()
        for task in ranked_tasks:
            task_slots = self.allocate_task(task)
            result.slots.extend(task_slots)

            total_chunks = len(calculate_chunk_durations(task, self.rules))
            placed_chunks = len(task_slots)
            if placed_chunks == total_chunks:
                status = OutcomeStatus.SCHEDULED
            else:
                result.unscheduled_task_ids.append(task.id)
                status = OutcomeStatus.PARTIAL if placed_chunks else OutcomeStatus.UNSCHEDULED
            result.outcomes.append(TaskOutcome(
                task_id=task.id,
                status=status,
                placed_chunks=placed_chunks,
                total_chunks=total_chunks,
            ))

        result.slots.sort()
        return result

    def allocate_task(self, task: Task) -> List[AllocatedSlot]:
        """
        Place every chunk of one task, in order.

        Stops at the first chunk that fits nowhere; that chunk and the rest
        stay unscheduled.
        """
        chunks = calculate_chunk_durations(task, self.rules)
        chunk_count = len(chunks)
        placed: List[AllocatedSlot] = []
        not_before: Optional[datetime] = None

        for chunk_index, chunk_minutes in enumerate(chunks, start=1):
            duration = timedelta(minutes=chunk_minutes)
            interval = find_first_fit(self.intervals, duration, not_before=not_before)
            if interval is None:
                logger.info(
                    f"❌ No room for '{task.title}' ({task.id}) chunk {chunk_index}/{chunk_count} "
                    f"of {chunk_minutes} min, {chunk_count - chunk_index + 1} chunk(s) left unscheduled"
                )
                break

            start, end = consume_interval(self.intervals, interval, duration)
            placed.append(AllocatedSlot(start, end, task, chunk_index=chunk_index, chunk_count=chunk_count))
            # Next chunk may not begin before this one ends
            not_before = end
            logger.debug(f"✅ Placed '{task.title}' chunk {chunk_index}/{chunk_count} at {start.isoformat()}")

        return placed

    def remaining_intervals(self) -> List[FreeInterval]:
        return list(self.intervals)
