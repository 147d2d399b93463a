"""Tests for the session summary builder."""

from ascent.timer.plan import PAIR_PATTERN, RING_PATTERN, build_plan
from ascent.timer.summary import DEFAULT_TITLE, summarize


class TestSummarize:

    def test_practice_only_minutes(self):
        plan = build_plan(300, 60, 3, PAIR_PATTERN)
        assert summarize(plan).total_practice_minutes == 15

    def test_independent_of_rest(self):
        short = summarize(build_plan(300, 30, 3, PAIR_PATTERN))
        long = summarize(build_plan(300, 600, 3, PAIR_PATTERN))
        assert short.total_practice_minutes == long.total_practice_minutes == 15

    def test_floors_to_whole_minutes(self):
        plan = build_plan(90, 60, 1, PAIR_PATTERN)
        summary = summarize(plan)
        assert summary.total_practice_seconds == 90
        assert summary.total_practice_minutes == 1

    def test_ring_counts_both_sides(self):
        plan = build_plan(420, 60, 3, RING_PATTERN, b_practice_sec=300)
        assert summarize(plan).total_practice_minutes == (420 + 300) * 3 // 60

    def test_title_and_note(self):
        plan = build_plan(300, 60, 1, PAIR_PATTERN)
        s = summarize(plan, "  Serve practice ", "  50 per course\n")
        assert s.title == "Serve practice"
        assert s.note == "50 per course"
        assert s.set_count == 1

    def test_blank_title_gets_default(self):
        plan = build_plan(300, 60, 1, PAIR_PATTERN)
        assert summarize(plan, "   ").title == DEFAULT_TITLE
