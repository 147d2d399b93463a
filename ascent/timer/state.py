"""Pure phase-engine transitions.

States
------
SETTING    Configuring — no plan, countdown shows the first segment.
RUNNING    A plan is active.  ``running`` is the orthogonal pause flag.
FINISHED   Terminal: advanced past the last segment of the last set.

Transitions
-----------
SETTING  → RUNNING     (start)
RUNNING  → RUNNING     (tick, toggle_pause, skip)
RUNNING  → FINISHED    (tick or skip past the last segment)
Any      → SETTING     (reset)

Each event is a plain function ``f(state, ...) -> (state, events)``.
Nothing here touches clocks, Qt, audio or storage; invalid calls return
the state unchanged with no events.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum

from .plan import Segment, SessionPlan

COUNTDOWN_THRESHOLD = 10  # seconds


class Lifecycle(Enum):
    SETTING = "setting"
    RUNNING = "running"
    FINISHED = "finished"


class EventKind(Enum):
    STARTED = "started"
    SEGMENT_ENTERED = "segment_entered"
    SEGMENT_ENDED = "segment_ended"
    SESSION_FINISHED = "session_finished"
    PAUSED = "paused"
    RESUMED = "resumed"
    RESET = "reset"


@dataclass(frozen=True)
class EngineEvent:
    kind: EventKind
    segment: Segment | None = None
    manual: bool = False


@dataclass(frozen=True)
class EngineState:
    plan: SessionPlan | None = None
    segment_index: int = 0
    set_index: int = 1
    remaining_sec: int = 0
    running: bool = False
    lifecycle: Lifecycle = Lifecycle.SETTING

    @property
    def segment(self) -> Segment | None:
        if self.plan is None:
            return None
        return self.plan[self.segment_index]

    @property
    def countdown_active(self) -> bool:
        """True while the countdown-warning cue should be sounding."""
        return (
            self.lifecycle is Lifecycle.RUNNING
            and self.running
            and 1 <= self.remaining_sec <= COUNTDOWN_THRESHOLD
        )


Transition = tuple[EngineState, list[EngineEvent]]


def idle(preview_sec: int) -> EngineState:
    """A fresh SETTING state showing *preview_sec* on the clock."""
    return EngineState(remaining_sec=max(0, preview_sec))


def start(state: EngineState, plan: SessionPlan) -> Transition:
    if state.lifecycle is not Lifecycle.SETTING:
        return state, []
    first = plan[0]
    new = EngineState(
        plan=plan,
        segment_index=0,
        set_index=1,
        remaining_sec=first.duration_sec,
        running=True,
        lifecycle=Lifecycle.RUNNING,
    )
    return new, [
        EngineEvent(EventKind.STARTED),
        EngineEvent(EventKind.SEGMENT_ENTERED, first),
    ]


def tick(state: EngineState) -> Transition:
    """One second elapsed.  Reaching zero advances on the same tick."""
    if state.lifecycle is not Lifecycle.RUNNING or not state.running:
        return state, []
    remaining = max(0, state.remaining_sec - 1)
    new = replace(state, remaining_sec=remaining)
    if remaining == 0:
        return _advance(new, manual=False)
    return new, []


def toggle_pause(state: EngineState) -> Transition:
    if state.lifecycle is not Lifecycle.RUNNING:
        return state, []
    running = not state.running
    kind = EventKind.RESUMED if running else EventKind.PAUSED
    return replace(state, running=running), [EngineEvent(kind, state.segment)]


def skip(state: EngineState) -> Transition:
    """Manual "next": same advancement as a natural end, and resumes."""
    if state.lifecycle is not Lifecycle.RUNNING:
        return state, []
    return _advance(state, manual=True)


def reset(state: EngineState, preview_sec: int) -> Transition:
    return idle(preview_sec), [EngineEvent(EventKind.RESET)]


def _advance(state: EngineState, *, manual: bool) -> Transition:
    plan = state.plan
    assert plan is not None
    ended = plan[state.segment_index]
    events = [EngineEvent(EventKind.SEGMENT_ENDED, ended, manual)]

    next_index = state.segment_index + 1
    if next_index >= len(plan):
        finished = replace(
            state,
            remaining_sec=0,
            running=False,
            lifecycle=Lifecycle.FINISHED,
        )
        events.append(EngineEvent(EventKind.SESSION_FINISHED, ended, manual))
        return finished, events

    entered = plan[next_index]
    new = replace(
        state,
        segment_index=next_index,
        set_index=entered.set_index,
        remaining_sec=entered.duration_sec,
        running=True if manual else state.running,
    )
    events.append(EngineEvent(EventKind.SEGMENT_ENTERED, entered, manual))
    return new, events
