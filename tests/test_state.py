"""Tests for the pure phase transitions (no Qt involved)."""

from ascent.timer import state as st
from ascent.timer.plan import PAIR_PATTERN, RING_PATTERN, SegmentKind, build_plan
from ascent.timer.state import EventKind, Lifecycle


def _started(plan):
    state, _ = st.start(st.idle(plan[0].duration_sec), plan)
    return state


def _kinds(events):
    return [e.kind for e in events]


class TestStart:

    def test_start_from_setting(self):
        plan = build_plan(300, 60, 3, PAIR_PATTERN)
        state, events = st.start(st.idle(300), plan)
        assert state.lifecycle is Lifecycle.RUNNING
        assert state.running is True
        assert (state.segment_index, state.set_index, state.remaining_sec) == (0, 1, 300)
        assert _kinds(events) == [EventKind.STARTED, EventKind.SEGMENT_ENTERED]

    def test_start_is_noop_when_running(self):
        plan = build_plan(300, 60, 1, PAIR_PATTERN)
        running = _started(plan)
        again, events = st.start(running, build_plan(30, 30, 1, PAIR_PATTERN))
        assert again is running
        assert events == []


class TestTick:

    def test_decrements(self):
        state = _started(build_plan(300, 60, 1, PAIR_PATTERN))
        state, events = st.tick(state)
        assert state.remaining_sec == 299
        assert events == []

    def test_noop_in_setting(self):
        idle = st.idle(300)
        assert st.tick(idle) == (idle, [])

    def test_noop_while_paused(self):
        state = _started(build_plan(300, 60, 1, PAIR_PATTERN))
        paused, _ = st.toggle_pause(state)
        assert st.tick(paused) == (paused, [])

    def test_zero_advances_on_same_tick(self):
        state = _started(build_plan(30, 60, 1, PAIR_PATTERN))
        for _ in range(29):
            state, _ = st.tick(state)
        assert state.remaining_sec == 1
        state, events = st.tick(state)
        assert state.segment_index == 1
        assert state.remaining_sec == 60
        assert _kinds(events) == [EventKind.SEGMENT_ENDED, EventKind.SEGMENT_ENTERED]

    def test_set_index_increments_at_set_boundary(self):
        state = _started(build_plan(30, 30, 2, PAIR_PATTERN))
        for _ in range(60):
            state, _ = st.tick(state)
        assert state.segment_index == 2
        assert state.set_index == 2

    def test_zero_duration_segment_passes_in_one_tick(self):
        state = _started(build_plan(0, 30, 1, PAIR_PATTERN))
        assert state.remaining_sec == 0
        state, events = st.tick(state)
        assert state.segment_index == 1
        assert state.segment.kind is SegmentKind.REST
        assert state.remaining_sec == 30

    def test_last_segment_finishes_without_wrapping(self):
        plan = build_plan(30, 30, 1, PAIR_PATTERN)
        state = _started(plan)
        for _ in range(60):
            state, events = st.tick(state)
        assert state.lifecycle is Lifecycle.FINISHED
        assert state.running is False
        assert state.segment_index == len(plan) - 1
        assert state.remaining_sec == 0
        assert events[-1].kind is EventKind.SESSION_FINISHED

    def test_full_session_tick_count(self):
        state = _started(build_plan(300, 60, 3, PAIR_PATTERN))
        ticks = 0
        while state.lifecycle is Lifecycle.RUNNING:
            state, _ = st.tick(state)
            ticks += 1
        assert ticks == 1080


class TestPauseAndSkip:

    def test_toggle_pause_flips_flag(self):
        state = _started(build_plan(300, 60, 1, PAIR_PATTERN))
        paused, events = st.toggle_pause(state)
        assert paused.running is False
        assert _kinds(events) == [EventKind.PAUSED]
        resumed, events = st.toggle_pause(paused)
        assert resumed.running is True
        assert _kinds(events) == [EventKind.RESUMED]

    def test_toggle_pause_noop_outside_running(self):
        idle = st.idle(300)
        assert st.toggle_pause(idle) == (idle, [])

    def test_skip_advances_and_marks_manual(self):
        state = _started(build_plan(300, 60, 1, PAIR_PATTERN))
        state, events = st.skip(state)
        assert state.segment_index == 1
        assert state.remaining_sec == 60
        assert all(e.manual for e in events)

    def test_skip_resumes_paused_session(self):
        state = _started(build_plan(300, 60, 1, PAIR_PATTERN))
        paused, _ = st.toggle_pause(state)
        skipped, _ = st.skip(paused)
        assert skipped.running is True

    def test_skip_noop_in_setting(self):
        idle = st.idle(300)
        assert st.skip(idle) == (idle, [])

    def test_skipping_every_segment_finishes(self):
        plan = build_plan(300, 60, 3, RING_PATTERN)
        state = _started(plan)
        for _ in range(len(plan)):
            state, _ = st.skip(state)
        assert state.lifecycle is Lifecycle.FINISHED
        finished = state
        for _ in range(len(plan)):
            state, events = st.skip(state)
            assert events == []
        assert state is finished


class TestReset:

    def test_reset_from_running(self):
        state = _started(build_plan(300, 60, 2, PAIR_PATTERN))
        state, _ = st.skip(state)
        state, _ = st.skip(state)
        state, events = st.reset(state, 240)
        assert state.lifecycle is Lifecycle.SETTING
        assert (state.segment_index, state.set_index) == (0, 1)
        assert state.remaining_sec == 240
        assert state.plan is None
        assert _kinds(events) == [EventKind.RESET]

    def test_countdown_active_boundaries(self):
        state = _started(build_plan(30, 30, 1, PAIR_PATTERN))
        for _ in range(19):
            state, _ = st.tick(state)
        assert state.remaining_sec == 11
        assert not state.countdown_active
        state, _ = st.tick(state)
        assert state.remaining_sec == 10
        assert state.countdown_active
        paused, _ = st.toggle_pause(state)
        assert not paused.countdown_active
