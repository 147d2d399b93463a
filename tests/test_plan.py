"""Tests for the segment plan builder and timer configuration."""

import pytest

from ascent.timer.config import TimerConfig
from ascent.timer.plan import (
    SegmentKind, build_plan, PAIR_PATTERN, RING_PATTERN, MAX_SETS,
)

P, R = SegmentKind.PRACTICE, SegmentKind.REST


class TestBuildPlan:

    @pytest.mark.parametrize("pattern", [PAIR_PATTERN, RING_PATTERN, (P,), (P, P, R)])
    @pytest.mark.parametrize("sets", [1, 3, 12])
    def test_segment_count_and_order(self, pattern, sets):
        plan = build_plan(120, 30, sets, pattern)
        assert len(plan) == sets * len(pattern)
        assert [s.kind for s in plan] == list(pattern) * sets

    def test_set_count_clamped(self):
        assert build_plan(60, 30, 0, PAIR_PATTERN).set_count == 1
        assert build_plan(60, 30, -4, PAIR_PATTERN).set_count == 1
        assert build_plan(60, 30, 99, PAIR_PATTERN).set_count == MAX_SETS

    def test_durations_by_kind(self):
        plan = build_plan(300, 60, 2, PAIR_PATTERN)
        assert [s.duration_sec for s in plan] == [300, 60, 300, 60]

    def test_set_and_position_tags(self):
        plan = build_plan(60, 30, 2, RING_PATTERN)
        tags = [(s.set_index, s.position) for s in plan]
        assert tags == [(1, 0), (1, 1), (1, 2), (1, 3),
                        (2, 0), (2, 1), (2, 2), (2, 3)]

    def test_b_override_applies_to_second_practice_slot(self):
        plan = build_plan(420, 60, 2, RING_PATTERN, b_practice_sec=300)
        assert [s.duration_sec for s in plan] == [420, 60, 300, 60] * 2

    def test_b_override_ignored_with_single_practice_slot(self):
        plan = build_plan(300, 60, 1, PAIR_PATTERN, b_practice_sec=30)
        assert plan[0].duration_sec == 300

    def test_labels(self):
        ring = build_plan(60, 30, 1, RING_PATTERN)
        assert [s.label for s in ring] == ["Practice A", "Rest", "Practice B", "Rest"]
        pair = build_plan(60, 30, 1, PAIR_PATTERN)
        assert [s.label for s in pair] == ["Practice", "Rest"]

    def test_phase_start_marks_b_slot_only(self):
        plan = build_plan(60, 30, 2, RING_PATTERN)
        assert [s.marks_phase_start for s in plan] == [False, False, True, False] * 2
        assert not any(s.marks_phase_start for s in build_plan(60, 30, 2, PAIR_PATTERN))

    def test_zero_practice_segment_still_exists(self):
        plan = build_plan(0, 30, 1, PAIR_PATTERN)
        assert len(plan) == 2
        assert plan[0].duration_sec == 0

    def test_empty_pattern_rejected(self):
        with pytest.raises(ValueError):
            build_plan(60, 30, 1, ())

    def test_total_seconds(self):
        assert build_plan(300, 60, 3, PAIR_PATTERN).total_seconds == 1080


class TestTimerConfig:

    def test_defaults(self):
        cfg = TimerConfig()
        assert cfg.practice_sec == 300
        assert cfg.rest_sec == 120
        assert cfg.set_count == 1
        assert cfg.pattern == RING_PATTERN
        assert cfg.separate_ab is False

    def test_normalizes_on_construction(self):
        cfg = TimerConfig(practice_sec=314, rest_sec=-5, set_count=40)
        assert cfg.practice_sec == 300
        assert cfg.rest_sec == 0
        assert cfg.set_count == MAX_SETS

    def test_from_fields(self):
        cfg = TimerConfig.from_fields(7, 0, 1, 0, 3)
        assert (cfg.practice_sec, cfg.rest_sec, cfg.set_count) == (420, 60, 3)
        assert cfg.b_practice_sec is None

    def test_from_fields_separate_ab(self):
        cfg = TimerConfig.from_fields(7, 0, 1, 0, 1, separate_ab=True, b_minutes=5, b_seconds=30)
        assert cfg.b_practice_sec == 330
        assert cfg.build().shape() == [(P, 420), (R, 60), (P, 330), (R, 60)]

    def test_from_fields_floors_and_clamps(self):
        cfg = TimerConfig.from_fields(-1, 45.9, 99, 0, 0)
        assert cfg.practice_sec == 60   # 45 s → tie → 60 (even step)
        assert cfg.rest_sec == 600
        assert cfg.set_count == 1

    def test_with_changes_renormalizes(self):
        cfg = TimerConfig().with_changes(practice_sec=100)
        assert cfg.practice_sec == 90

    def test_first_segment_seconds(self):
        assert TimerConfig(practice_sec=240).first_segment_seconds == 240

    def test_total_seconds(self):
        cfg = TimerConfig(practice_sec=300, rest_sec=60, set_count=2)
        assert cfg.total_seconds == (300 * 2 + 60 * 2) * 2

    def test_empty_pattern_uses_ring(self):
        assert TimerConfig(pattern=()).pattern == RING_PATTERN
