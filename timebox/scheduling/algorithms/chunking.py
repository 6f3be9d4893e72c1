"""
Chunking rules for breaking long tasks into pieces.
"""

from typing import List

from ...schemas import Task, SchedulingRules


def resolve_task_duration(task: Task, rules: SchedulingRules) -> int:
    """Minutes the task asks for; unset falls back to the regular cap."""
    return task.duration_minutes or rules.max_task_duration


def is_long_task(task: Task, rules: SchedulingRules) -> bool:
    return resolve_task_duration(task, rules) > rules.long_task_threshold


def calculate_chunk_durations(task: Task, rules: SchedulingRules) -> List[int]:
    """
    Chunk sizes, in minutes, for placing a task.

    Long tasks are split into pieces of ``max_long_task_duration`` with a
    shorter final piece when the total does not divide evenly. Every other
    task is a single piece truncated to ``max_task_duration``.
    """
    total_minutes = resolve_task_duration(task, rules)

    if not is_long_task(task, rules):
        return [min(total_minutes, rules.max_task_duration)]

    chunk_minutes = rules.max_long_task_duration
    chunk_count, remaining_minutes = divmod(total_minutes, chunk_minutes)
    chunks = [chunk_minutes] * chunk_count
    if remaining_minutes > 0:
        chunks.append(remaining_minutes)
    return chunks
