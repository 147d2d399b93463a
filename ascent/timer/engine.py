"""Interval timer engine for Ascent.

Drives the pure transitions in :mod:`ascent.timer.state` from a single
one-second ``QTimer`` and turns their events into cues, Qt signals and
the end-of-session summary.

Clock
-----
At most one tick source exists.  It is stopped and restarted whenever
the lifecycle, the pause flag or the active segment changes, and only
runs while RUNNING and not paused.

Re-entrancy
-----------
Controls and ticks go through one queue.  A call made while another is
being processed (e.g. ``skip()`` from a slot connected to ``tick``) is
appended and handled afterwards, in arrival order, exactly once.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from typing import Callable

from PyQt6.QtCore import QObject, QTimer, pyqtSignal

from ..audio.cues import CUE_ALARM, CueDispatcher, CuePlayer
from . import state as transitions
from .config import TimerConfig
from .duration import format_mmss
from .plan import Segment, SessionPlan
from .state import COUNTDOWN_THRESHOLD, EngineEvent, EngineState, EventKind, Lifecycle
from .summary import SessionSummary, summarize

log = logging.getLogger(__name__)

TICK_INTERVAL_MS = 1000


@dataclass(frozen=True)
class DisplayState:
    """What the UI redraws after every tick or control."""

    remaining_sec: int
    segment_label: str
    set_index: int
    set_count: int
    lifecycle: Lifecycle
    running: bool = False
    progress: float = 0.0

    @property
    def time_text(self) -> str:
        return format_mmss(self.remaining_sec)


class TimerEngine(QObject):
    """Practice/rest interval timer with set tracking and cues.

    Signals
    -------
    tick(remaining_seconds: int)
        Emitted after every processed action that may change the clock.
    display_changed(display: DisplayState)
        Same cadence as ``tick``, with the full display tuple.
    lifecycle_changed(lifecycle: Lifecycle)
        SETTING / RUNNING / FINISHED transitions.
    segment_changed(segment: Segment)
        Entered a new segment (natural end or skip).
    pause_changed(running: bool)
        The pause flag flipped while RUNNING.
    session_finished(summary: SessionSummary)
        Emitted exactly once per session, on entering FINISHED.
    """

    tick = pyqtSignal(int)
    display_changed = pyqtSignal(object)
    lifecycle_changed = pyqtSignal(object)
    segment_changed = pyqtSignal(object)
    pause_changed = pyqtSignal(bool)
    session_finished = pyqtSignal(object)

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        config: TimerConfig | None = None,
        cue_player: CuePlayer | None = None,
        db_enabled: bool = True,
    ) -> None:
        super().__init__(parent)

        # ── configuration ─────────────────────────────────────────────
        self._config: TimerConfig = config or TimerConfig()
        self._db_enabled: bool = db_enabled
        self._title: str = ""
        self._note: str = ""

        # ── state ─────────────────────────────────────────────────────
        self._state: EngineState = transitions.idle(self._config.first_segment_seconds)
        self._last_summary: SessionSummary | None = None
        self._last_record_id: int | None = None

        # ── single-flow queue ─────────────────────────────────────────
        self._pending: deque[Callable[[], transitions.Transition]] = deque()
        self._busy: bool = False

        # ── cues ──────────────────────────────────────────────────────
        self._cues = CueDispatcher(
            cue_player, self, countdown_threshold=COUNTDOWN_THRESHOLD,
        )

        # ── Qt timer ──────────────────────────────────────────────────
        self._qt_timer = QTimer(self)
        self._qt_timer.setInterval(TICK_INTERVAL_MS)
        self._qt_timer.timeout.connect(self._on_tick)
        self._clock_key: tuple | None = None

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC PROPERTIES
    # ══════════════════════════════════════════════════════════════════

    @property
    def state(self) -> EngineState:
        return self._state

    @property
    def lifecycle(self) -> Lifecycle:
        return self._state.lifecycle

    @property
    def remaining(self) -> int:
        """Seconds left in the active segment (or the preview)."""
        return self._state.remaining_sec

    @property
    def plan(self) -> SessionPlan | None:
        """The running session's plan; ``None`` while SETTING."""
        return self._state.plan

    @property
    def segment(self) -> Segment | None:
        return self._state.segment

    @property
    def segment_index(self) -> int:
        return self._state.segment_index

    @property
    def set_index(self) -> int:
        return self._state.set_index

    @property
    def set_count(self) -> int:
        plan = self._state.plan
        return plan.set_count if plan is not None else self._config.set_count

    @property
    def is_running(self) -> bool:
        """True when actively counting down (RUNNING and not paused)."""
        return self._state.lifecycle is Lifecycle.RUNNING and self._state.running

    @property
    def is_paused(self) -> bool:
        return self._state.lifecycle is Lifecycle.RUNNING and not self._state.running

    @property
    def clock_active(self) -> bool:
        return self._qt_timer.isActive()

    @property
    def segment_label(self) -> str:
        segment = self._state.segment
        if segment is not None:
            return segment.label
        first = self._config.build()[0]
        return first.label

    @property
    def percent_complete(self) -> float:
        """0.0 → 1.0 progress through the current segment."""
        segment = self._state.segment
        if segment is None or self._state.lifecycle is Lifecycle.SETTING:
            return 0.0
        if self._state.lifecycle is Lifecycle.FINISHED or segment.duration_sec <= 0:
            return 1.0
        elapsed = segment.duration_sec - self._state.remaining_sec
        return max(0.0, min(1.0, elapsed / segment.duration_sec))

    @property
    def display(self) -> DisplayState:
        return DisplayState(
            remaining_sec=self._state.remaining_sec,
            segment_label=self.segment_label,
            set_index=self._state.set_index,
            set_count=self.set_count,
            lifecycle=self._state.lifecycle,
            running=self._state.running,
            progress=self.percent_complete,
        )

    @property
    def cues(self) -> CueDispatcher:
        return self._cues

    @property
    def last_summary(self) -> SessionSummary | None:
        return self._last_summary

    @property
    def last_record_id(self) -> int | None:
        return self._last_record_id

    @property
    def title(self) -> str:
        return self._title

    @title.setter
    def title(self, value: str) -> None:
        self._title = value

    @property
    def note(self) -> str:
        return self._note

    @note.setter
    def note(self, value: str) -> None:
        self._note = value

    # ══════════════════════════════════════════════════════════════════
    #  CONFIGURATION
    # ══════════════════════════════════════════════════════════════════

    @property
    def config(self) -> TimerConfig:
        return self._config

    def set_config(self, config: TimerConfig) -> None:
        """Replace the live configuration.

        A running session keeps its plan; only the SETTING preview and
        the next ``start()`` see the change.
        """
        self._config = config
        if self._state.lifecycle is Lifecycle.SETTING:
            self._state = transitions.idle(config.first_segment_seconds)
            self._emit_display()

    def set_practice_seconds(self, seconds: int) -> None:
        self.set_config(self._config.with_changes(practice_sec=seconds))

    def set_rest_seconds(self, seconds: int) -> None:
        self.set_config(self._config.with_changes(rest_sec=seconds))

    def set_b_practice_seconds(self, seconds: int | None) -> None:
        self.set_config(self._config.with_changes(b_practice_sec=seconds))

    def set_separate_ab(self, enabled: bool, b_seconds: int | None = None) -> None:
        if enabled:
            b = b_seconds if b_seconds is not None else self._config.practice_sec
            self.set_b_practice_seconds(b)
        else:
            self.set_b_practice_seconds(None)

    def set_set_count(self, count: int) -> None:
        self.set_config(self._config.with_changes(set_count=count))

    def adjust_practice(self, delta_sec: int) -> None:
        """Stepper nudge (±30 s buttons); re-normalized."""
        self.set_practice_seconds(self._config.practice_sec + delta_sec)

    def adjust_rest(self, delta_sec: int) -> None:
        self.set_rest_seconds(self._config.rest_sec + delta_sec)

    def restore_defaults(self) -> None:
        """Reload practice/rest from saved settings, back to one set."""
        from ..settings import load_settings

        saved = load_settings()
        self.set_config(self._config.with_changes(
            practice_sec=saved.practice_seconds,
            rest_sec=saved.rest_seconds,
            set_count=1,
        ))

    # ══════════════════════════════════════════════════════════════════
    #  CONTROLS
    # ══════════════════════════════════════════════════════════════════

    def start(self) -> None:
        """Build a fresh plan and start it.  Only valid from SETTING."""
        self._submit(lambda: transitions.start(self._state, self._config.build()))

    def toggle_pause(self) -> None:
        self._submit(lambda: transitions.toggle_pause(self._state))

    def pause(self) -> None:
        if self.is_running:
            self.toggle_pause()

    def resume(self) -> None:
        if self.is_paused:
            self.toggle_pause()

    def skip(self) -> None:
        """Jump to the next segment (resumes if paused)."""
        self._submit(lambda: transitions.skip(self._state))

    def reset(self) -> None:
        """Back to SETTING from anywhere; the session is discarded."""
        self._submit(lambda: transitions.reset(
            self._state, self._config.first_segment_seconds,
        ))

    def stop_alarm(self) -> None:
        self._cues.stop(CUE_ALARM)

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL — single-flow processing
    # ══════════════════════════════════════════════════════════════════

    def _on_tick(self) -> None:
        self._submit(lambda: transitions.tick(self._state))

    def _submit(self, action: Callable[[], transitions.Transition]) -> None:
        self._pending.append(action)
        if self._busy:
            return
        self._busy = True
        try:
            while self._pending:
                new_state, events = self._pending.popleft()()
                self._apply(new_state, events)
        finally:
            # a failed action drops whatever was queued behind it
            self._pending.clear()
            self._busy = False

    def _apply(self, new_state: EngineState, events: list[EngineEvent]) -> None:
        old = self._state
        self._state = new_state
        self._sync_clock()

        for event in events:
            self._handle_event(event)

        self._cues.on_countdown_threshold(
            new_state.remaining_sec,
            running=new_state.lifecycle is Lifecycle.RUNNING and new_state.running,
        )

        if old.lifecycle is not new_state.lifecycle:
            log.debug("lifecycle %s → %s", old.lifecycle.value, new_state.lifecycle.value)
            self.lifecycle_changed.emit(new_state.lifecycle)

        if events or old.remaining_sec != new_state.remaining_sec:
            self._emit_display()

    def _handle_event(self, event: EngineEvent) -> None:
        kind = event.kind
        if kind is EventKind.SEGMENT_ENTERED:
            log.debug(
                "set %d segment %s (%ds)%s",
                event.segment.set_index, event.segment.label,
                event.segment.duration_sec, " [skip]" if event.manual else "",
            )
            self._cues.on_segment_enter(event.segment, event.manual)
            self.segment_changed.emit(event.segment)
        elif kind is EventKind.SEGMENT_ENDED:
            self._cues.on_segment_end(event.segment, event.manual)
        elif kind is EventKind.SESSION_FINISHED:
            self._cues.on_session_finished()
            self._finish_session()
        elif kind in (EventKind.PAUSED, EventKind.RESUMED):
            self.pause_changed.emit(kind is EventKind.RESUMED)
        elif kind is EventKind.RESET:
            self._cues.stop_all()
        elif kind is EventKind.STARTED:
            self._last_summary = None
            self._last_record_id = None

    def _sync_clock(self) -> None:
        """Keep exactly one tick source, tied to the active segment."""
        s = self._state
        if s.lifecycle is Lifecycle.RUNNING and s.running:
            key = (s.lifecycle, s.running, s.segment_index, id(s.plan))
        else:
            key = None
        if key == self._clock_key:
            return
        self._qt_timer.stop()
        if key is not None:
            self._qt_timer.start()
        self._clock_key = key

    def _emit_display(self) -> None:
        self.tick.emit(self._state.remaining_sec)
        self.display_changed.emit(self.display)

    def _finish_session(self) -> None:
        plan = self._state.plan
        assert plan is not None
        summary = summarize(plan, self._title, self._note)
        self._last_summary = summary
        log.info(
            "session finished: %d sets, %d practice minutes",
            summary.set_count, summary.total_practice_minutes,
        )
        if self._db_enabled:
            self._persist_summary(summary)
        self.session_finished.emit(summary)

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL — database persistence
    # ══════════════════════════════════════════════════════════════════

    def _persist_summary(self, summary: SessionSummary) -> None:
        from ..database.records import save_summary

        try:
            self._last_record_id = save_summary(summary)
        except Exception:
            log.exception("could not save practice record")
