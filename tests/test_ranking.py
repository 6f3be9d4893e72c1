"""
Task scoring and ranking.
"""

import random
from datetime import date, datetime, timedelta

import pytest

from timebox.schemas import Task
from timebox.scheduling.scoring.priority_scoring import calculate_priority_score, calculate_task_selection_score
from timebox.scheduling.scoring.task_ranking import TaskRanker
from timebox.scheduling.scoring.time_scoring import calculate_deadline_urgency_score, due_datetime

from conftest import MONDAY, UTC, at, make_task


def _ids(tasks):
    return [task.id for task in tasks]


# ─────────────────────────────────────────────────────────────────────────────
# Scores
# ─────────────────────────────────────────────────────────────────────────────

class TestScores:
    def test_priority_values(self):
        assert calculate_priority_score(make_task("a", priority="low")) == 0.0
        assert calculate_priority_score(make_task("b", priority="medium")) == 0.5
        assert calculate_priority_score(make_task("c", priority="high")) == 1.0

    def test_no_due_date_is_neutral(self):
        assert calculate_deadline_urgency_score(make_task("a"), MONDAY) == 0.5

    def test_overdue_is_most_urgent(self):
        task = make_task("a", due_date=MONDAY - timedelta(hours=3))
        assert calculate_deadline_urgency_score(task, MONDAY) == 1.0

    def test_urgency_decreases_with_distance(self):
        scores = [
            calculate_deadline_urgency_score(make_task("a", due_date=MONDAY + timedelta(hours=hours)), MONDAY)
            for hours in (6, 30, 60, 120, 250, 500)
        ]
        assert scores == sorted(scores, reverse=True)
        assert scores[-1] == 0.1
        assert all(0.1 <= score <= 1.0 for score in scores)

    def test_date_only_due_means_end_of_day(self):
        task = make_task("a", due_date=date(2025, 1, 6))
        assert due_datetime(task, UTC) == at(1, 0)
        assert calculate_deadline_urgency_score(task, MONDAY) == pytest.approx(0.8)

    def test_date_only_string_is_end_of_day(self):
        parsed = Task.model_validate({"id": "a", "title": "a", "due_date": "2025-01-07"})
        assert parsed.due_date == date(2025, 1, 7)
        assert not isinstance(parsed.due_date, datetime)
        from_date = make_task("b", due_date=date(2025, 1, 7))
        assert calculate_deadline_urgency_score(parsed, MONDAY) == calculate_deadline_urgency_score(from_date, MONDAY)
        assert calculate_deadline_urgency_score(parsed, MONDAY) == pytest.approx(0.6)

    def test_timestamp_string_keeps_its_time(self):
        parsed = Task.model_validate({"id": "a", "title": "a", "due_date": "2025-01-07T12:00:00Z"})
        assert isinstance(parsed.due_date, datetime)
        assert due_datetime(parsed, UTC) == at(1, 12)

    def test_selection_score_combines_weights(self, rules):
        task = make_task("a", priority="high", due_date=MONDAY + timedelta(hours=48))
        expected = rules.priority_weight * 1.0 + rules.time_weight * 0.6
        assert calculate_task_selection_score(task, rules, MONDAY) == pytest.approx(expected)


# ─────────────────────────────────────────────────────────────────────────────
# Ranking
# ─────────────────────────────────────────────────────────────────────────────

class TestTaskRanker:
    def test_orders_by_priority(self, rules):
        tasks = [make_task("low", priority="low"), make_task("high", priority="high"), make_task("med")]
        ranked = TaskRanker(rules, rng=random.Random(0)).rank(tasks, MONDAY)
        assert _ids(ranked) == ["high", "med", "low"]

    def test_earlier_due_date_wins_at_equal_priority(self, rules):
        tasks = [
            make_task("later", priority="high", due_date=date(2025, 1, 10)),
            make_task("sooner", priority="high", due_date=date(2025, 1, 7)),
        ]
        ranked = TaskRanker(rules).rank(tasks, MONDAY)
        assert _ids(ranked) == ["sooner", "later"]

    def test_ties_keep_input_order(self, rules):
        tasks = [make_task(str(i)) for i in range(6)]
        ranked = TaskRanker(rules).rank(tasks, MONDAY)
        assert _ids(ranked) == _ids(tasks)

    def test_same_seed_same_order(self, rules):
        noisy = rules.model_copy(update={"randomness_factor": 1.0})
        tasks = [make_task(str(i), priority=p) for i, p in enumerate(["low", "medium", "high"] * 4)]
        first = TaskRanker(noisy, rng=random.Random(42)).rank(tasks, MONDAY)
        second = TaskRanker(noisy, rng=random.Random(42)).rank(tasks, MONDAY)
        assert _ids(first) == _ids(second)

    def test_jitter_is_bounded(self, rules):
        ranker = TaskRanker(rules.model_copy(update={"randomness_factor": 0.4}), rng=random.Random(7))
        for _ in range(200):
            assert -0.2 <= ranker.jitter() <= 0.2

    def test_zero_randomness_has_no_jitter(self, rules):
        ranker = TaskRanker(rules, rng=random.Random(7))
        assert ranker.jitter() == 0.0

    def test_custom_scorer(self, rules):
        def shortest_first(task, rules, reference):
            return -task.duration_minutes

        tasks = [make_task("long", duration=50), make_task("short", duration=10), make_task("mid", duration=30)]
        ranked = TaskRanker(rules, scorer=shortest_first).rank(tasks, MONDAY)
        assert _ids(ranked) == ["short", "mid", "long"]

    def test_does_not_mutate_input(self, rules):
        tasks = [make_task("a", priority="low"), make_task("b", priority="high")]
        TaskRanker(rules).rank(tasks, MONDAY)
        assert _ids(tasks) == ["a", "b"]
