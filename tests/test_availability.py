"""
Free interval computation: block selection, unions, busy subtraction,
range clipping, time zones and malformed blocks.
"""

from datetime import datetime

import pytz

from timebox.schemas import TimeBlock, ExistingEvent
from timebox.scheduling.algorithms.availability import compute_free_intervals, usable_blocks
from timebox.scheduling.constraints.time_constraints import block_applies_to_day, parse_clock
from timebox.scheduling.utils.slot_utils import merge_windows, subtract_busy

from conftest import MONDAY, UTC, at, busy


def _windows(intervals):
    return [(i.start, i.end) for i in intervals]


def _rules_with(rules, *blocks, **updates):
    updates["time_blocks"] = list(blocks)
    return rules.model_copy(update=updates)


# ─────────────────────────────────────────────────────────────────────────────
# Interval helpers
# ─────────────────────────────────────────────────────────────────────────────

class TestIntervalHelpers:
    def test_merge_windows_joins_overlapping_and_touching(self):
        merged = merge_windows([
            (at(0, 13), at(0, 15)),
            (at(0, 9), at(0, 11)),
            (at(0, 11), at(0, 12)),
            (at(0, 10), at(0, 10, 30)),
        ])
        assert merged == [(at(0, 9), at(0, 12)), (at(0, 13), at(0, 15))]

    def test_subtract_busy_splits_window(self):
        free = subtract_busy((at(0, 9), at(0, 17)), [
            (at(0, 13), at(0, 14)),
            (at(0, 10), at(0, 11)),
        ])
        assert free == [
            (at(0, 9), at(0, 10)),
            (at(0, 11), at(0, 13)),
            (at(0, 14), at(0, 17)),
        ]

    def test_subtract_busy_handles_overlapping_busy(self):
        free = subtract_busy((at(0, 9), at(0, 17)), [
            (at(0, 8), at(0, 10)),
            (at(0, 9, 30), at(0, 12)),
            (at(0, 16), at(0, 18)),
        ])
        assert free == [(at(0, 12), at(0, 16))]

    def test_subtract_busy_fully_covered(self):
        assert subtract_busy((at(0, 9), at(0, 17)), [(at(0, 8), at(0, 18))]) == []

    def test_parse_clock(self):
        assert parse_clock("9:05").hour == 9
        assert parse_clock("17:30").minute == 30


# ─────────────────────────────────────────────────────────────────────────────
# Day selection
# ─────────────────────────────────────────────────────────────────────────────

class TestDaySelection:
    def test_selectors(self):
        monday = MONDAY.date()
        saturday = at(5, 0).date()
        assert block_applies_to_day(TimeBlock(day="monday", start_time="09:00", end_time="10:00"), monday)
        assert block_applies_to_day(TimeBlock(day="Weekday", start_time="09:00", end_time="10:00"), monday)
        assert block_applies_to_day(TimeBlock(day="all", start_time="09:00", end_time="10:00"), saturday)
        assert block_applies_to_day(TimeBlock(day="weekend", start_time="09:00", end_time="10:00"), saturday)
        assert not block_applies_to_day(TimeBlock(day="weekend", start_time="09:00", end_time="10:00"), monday)
        assert not block_applies_to_day(TimeBlock(day="tuesday", start_time="09:00", end_time="10:00"), monday)

    def test_non_working_days_are_skipped(self, rules):
        rules = _rules_with(rules, TimeBlock(day="all", start_time="09:00", end_time="12:00"))
        intervals, _ = compute_free_intervals(MONDAY, at(7, 0), rules, [], UTC)
        assert [i.start.date() for i in intervals] == [at(d, 0).date() for d in range(5)]

    def test_working_day_without_block_has_no_availability(self, rules):
        rules = _rules_with(rules, TimeBlock(day="tuesday", start_time="09:00", end_time="12:00"))
        intervals, _ = compute_free_intervals(MONDAY, at(2, 0), rules, [], UTC)
        assert _windows(intervals) == [(at(1, 9), at(1, 12))]

    def test_weekend_block_on_enabled_saturday(self, rules):
        working_days = dict(rules.working_days, saturday=True)
        rules = _rules_with(
            rules,
            TimeBlock(day="weekday", start_time="09:00", end_time="17:00"),
            TimeBlock(day="weekend", start_time="10:00", end_time="12:00"),
            working_days=working_days,
        )
        intervals, _ = compute_free_intervals(at(5, 0), at(7, 0), rules, [], UTC)
        assert _windows(intervals) == [(at(5, 10), at(5, 12))]

    def test_disabled_blocks_are_ignored(self, rules):
        rules = _rules_with(
            rules,
            TimeBlock(day="weekday", start_time="09:00", end_time="12:00"),
            TimeBlock(day="monday", start_time="13:00", end_time="17:00", enabled=False),
        )
        intervals, _ = compute_free_intervals(MONDAY, at(1, 0), rules, [], UTC)
        assert _windows(intervals) == [(at(0, 9), at(0, 12))]


# ─────────────────────────────────────────────────────────────────────────────
# Free interval computation
# ─────────────────────────────────────────────────────────────────────────────

class TestComputeFreeIntervals:
    def test_matching_blocks_are_unioned(self, rules):
        rules = _rules_with(
            rules,
            TimeBlock(day="weekday", start_time="09:00", end_time="12:00"),
            TimeBlock(day="monday", start_time="11:00", end_time="14:00"),
            TimeBlock(day="all", start_time="16:00", end_time="17:00"),
        )
        intervals, warnings = compute_free_intervals(MONDAY, at(1, 0), rules, [], UTC)
        assert warnings == []
        assert _windows(intervals) == [(at(0, 9), at(0, 14)), (at(0, 16), at(0, 17))]

    def test_existing_events_are_subtracted(self, rules, weekday_block):
        rules = _rules_with(rules, weekday_block)
        existing = [busy(at(0, 10), at(0, 11)), busy(at(0, 13), at(0, 14)), busy(at(1, 8), at(1, 9, 30))]
        intervals, _ = compute_free_intervals(MONDAY, at(2, 0), rules, existing, UTC)
        assert _windows(intervals) == [
            (at(0, 9), at(0, 10)),
            (at(0, 11), at(0, 13)),
            (at(0, 14), at(0, 17)),
            (at(1, 9, 30), at(1, 17)),
        ]

    def test_inverted_existing_event_is_ignored(self, rules, weekday_block):
        rules = _rules_with(rules, weekday_block)
        existing = [busy(at(0, 12), at(0, 11))]
        intervals, _ = compute_free_intervals(MONDAY, at(1, 0), rules, existing, UTC)
        assert _windows(intervals) == [(at(0, 9), at(0, 17))]

    def test_range_clips_windows(self, rules, weekday_block):
        rules = _rules_with(rules, weekday_block)
        intervals, _ = compute_free_intervals(at(0, 12), at(1, 10), rules, [], UTC)
        assert _windows(intervals) == [(at(0, 12), at(0, 17)), (at(1, 9), at(1, 10))]

    def test_results_are_sorted_and_disjoint(self, rules):
        rules = _rules_with(
            rules,
            TimeBlock(day="all", start_time="14:00", end_time="16:00"),
            TimeBlock(day="all", start_time="08:00", end_time="10:00"),
        )
        intervals, _ = compute_free_intervals(MONDAY, at(5, 0), rules, [busy(at(2, 9), at(2, 15))], UTC)
        starts = [i.start for i in intervals]
        assert starts == sorted(starts)
        for first, second in zip(intervals, intervals[1:]):
            assert first.end <= second.start

    def test_idempotent(self, rules, weekday_block):
        rules = _rules_with(rules, weekday_block)
        existing = [busy(at(0, 10), at(0, 11)), busy(at(3, 12), at(3, 15))]
        first, _ = compute_free_intervals(MONDAY, at(7, 0), rules, existing, UTC)
        second, _ = compute_free_intervals(MONDAY, at(7, 0), rules, existing, UTC)
        assert first == second

    def test_wall_clock_resolved_in_time_zone(self, rules, weekday_block):
        rules = _rules_with(rules, weekday_block)
        tz = pytz.timezone("America/New_York")
        start = tz.localize(datetime(2025, 1, 6))
        end = tz.localize(datetime(2025, 1, 7))
        # 14:00-15:00 UTC is 09:00-10:00 in New York in January
        existing = [ExistingEvent(start=datetime(2025, 1, 6, 14), end=datetime(2025, 1, 6, 15), time_zone="UTC")]
        intervals, _ = compute_free_intervals(start, end, rules, existing, tz)
        assert len(intervals) == 1
        assert intervals[0].start == tz.localize(datetime(2025, 1, 6, 10))
        assert intervals[0].end == tz.localize(datetime(2025, 1, 6, 17))


# ─────────────────────────────────────────────────────────────────────────────
# Malformed blocks
# ─────────────────────────────────────────────────────────────────────────────

class TestMalformedBlocks:
    def test_end_before_start_is_skipped_with_warning(self, rules, weekday_block):
        rules = _rules_with(
            rules,
            TimeBlock(id="backwards", day="monday", start_time="15:00", end_time="12:00"),
            weekday_block,
        )
        intervals, warnings = compute_free_intervals(MONDAY, at(1, 0), rules, [], UTC)
        assert _windows(intervals) == [(at(0, 9), at(0, 17))]
        assert [w.block_id for w in warnings] == ["backwards"]

    def test_zero_length_block_is_malformed(self, rules):
        rules = _rules_with(rules, TimeBlock(id="empty", day="monday", start_time="09:00", end_time="09:00"))
        intervals, warnings = compute_free_intervals(MONDAY, at(1, 0), rules, [], UTC)
        assert intervals == []
        assert warnings[0].block_id == "empty"

    def test_bad_format_and_unknown_selector(self, rules):
        rules = _rules_with(
            rules,
            TimeBlock(id="format", day="monday", start_time="9am", end_time="17:00"),
            TimeBlock(id="range", day="monday", start_time="09:00", end_time="25:00"),
            TimeBlock(id="selector", day="funday", start_time="09:00", end_time="17:00"),
        )
        usable, warnings = usable_blocks(rules)
        assert usable == []
        assert {w.block_id for w in warnings} == {"format", "range", "selector"}

    def test_disabled_malformed_block_is_not_reported(self, rules):
        rules = _rules_with(rules, TimeBlock(id="off", day="monday", start_time="15:00", end_time="12:00", enabled=False))
        _, warnings = usable_blocks(rules)
        assert warnings == []
