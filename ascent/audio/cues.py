"""Cue dispatcher: timer events → named audio cues.

Cue names
---------
- ``alarm``       — looping alarm when a practice segment runs out
- ``countdown``   — looping tick while 1–10 s remain
- ``phase-start`` — one-shot chime entering the B-side practice slot

Rules
-----
- Starting ``alarm`` silences every other cue; starting anything else
  silences a playing ``alarm``.
- Each cue has its own cancelable single-shot auto-stop timer.
- Player failures are logged and swallowed.  A cue that doesn't sound
  never stops the timer.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Protocol

from PyQt6.QtCore import QObject, QTimer, pyqtSignal

if TYPE_CHECKING:
    from ..timer.plan import Segment

log = logging.getLogger(__name__)

CUE_ALARM = "alarm"
CUE_COUNTDOWN = "countdown"
CUE_PHASE_START = "phase-start"
CUE_NAMES = (CUE_ALARM, CUE_COUNTDOWN, CUE_PHASE_START)

COUNTDOWN_THRESHOLD = 10  # seconds

ALARM_TIMEOUT_MS = 15_000
PHASE_START_TIMEOUT_MS = 3_000
COUNTDOWN_TIMEOUT_MS = (COUNTDOWN_THRESHOLD + 1) * 1000


class CuePlayer(Protocol):
    """Anything that can play and stop a cue by name."""

    def play(self, name: str) -> None: ...

    def stop(self, name: str) -> None: ...

    def stop_all(self) -> None: ...


class NullCuePlayer:
    """Silent player for headless runs."""

    def play(self, name: str) -> None:
        pass

    def stop(self, name: str) -> None:
        pass

    def stop_all(self) -> None:
        pass


class CueDispatcher(QObject):
    """Decides which cue plays when, and keeps at most one of each going.

    Signals
    -------
    cue_started(name: str)
    cue_stopped(name: str)
    """

    cue_started = pyqtSignal(str)
    cue_stopped = pyqtSignal(str)

    def __init__(
        self,
        player: CuePlayer | None = None,
        parent: QObject | None = None,
        *,
        alarm_timeout_ms: int = ALARM_TIMEOUT_MS,
        phase_start_timeout_ms: int = PHASE_START_TIMEOUT_MS,
        countdown_timeout_ms: int = COUNTDOWN_TIMEOUT_MS,
        countdown_threshold: int = COUNTDOWN_THRESHOLD,
    ) -> None:
        super().__init__(parent)
        self._threshold = countdown_threshold
        self._player: CuePlayer = player if player is not None else NullCuePlayer()
        self._active: set[str] = set()
        self._timers: dict[str, QTimer] = {}

        timeouts = {
            CUE_ALARM: alarm_timeout_ms,
            CUE_PHASE_START: phase_start_timeout_ms,
            CUE_COUNTDOWN: countdown_timeout_ms,
        }
        for name, ms in timeouts.items():
            timer = QTimer(self)
            timer.setSingleShot(True)
            timer.setInterval(ms)
            timer.timeout.connect(lambda n=name: self.stop(n))
            self._timers[name] = timer

    # ── state ─────────────────────────────────────────────────────────

    @property
    def player(self) -> CuePlayer:
        return self._player

    @player.setter
    def player(self, player: CuePlayer) -> None:
        self.stop_all()
        self._player = player

    @property
    def active_cues(self) -> frozenset[str]:
        return frozenset(self._active)

    def is_active(self, name: str) -> bool:
        return name in self._active

    def set_alarm_timeout(self, seconds: int) -> None:
        self._timers[CUE_ALARM].setInterval(max(1, seconds) * 1000)

    # ── playback ──────────────────────────────────────────────────────

    def play(self, name: str) -> None:
        if name == CUE_ALARM:
            for other in list(self._active):
                self.stop(other)
        elif CUE_ALARM in self._active:
            self.stop(CUE_ALARM)

        if name in self._active:
            self.stop(name)

        self._active.add(name)
        self._safe("play", name)
        timer = self._timers.get(name)
        if timer is not None:
            timer.start()
        self.cue_started.emit(name)

    def stop(self, name: str) -> None:
        timer = self._timers.get(name)
        if timer is not None:
            timer.stop()
        if name not in self._active:
            return
        self._active.discard(name)
        self._safe("stop", name)
        self.cue_stopped.emit(name)

    def stop_all(self) -> None:
        """Cancel every auto-stop timer and silence the player."""
        for timer in self._timers.values():
            timer.stop()
        stopped = sorted(self._active)
        self._active.clear()
        self._safe("stop_all")
        for name in stopped:
            self.cue_stopped.emit(name)

    # ── timer events ──────────────────────────────────────────────────

    def on_segment_enter(self, segment: Segment, manual: bool = False) -> None:
        if segment.marks_phase_start:
            self.play(CUE_PHASE_START)

    def on_segment_end(self, segment: Segment, manual: bool = False) -> None:
        if manual:
            self.stop(CUE_ALARM)
        elif segment.is_practice:
            self.play(CUE_ALARM)

    def on_countdown_threshold(self, remaining_sec: int, running: bool = True) -> None:
        """Re-evaluated after every transition; a pure function of state."""
        should_play = running and 1 <= remaining_sec <= self._threshold
        playing = CUE_COUNTDOWN in self._active
        if should_play and not playing:
            self.play(CUE_COUNTDOWN)
        elif not should_play and playing:
            self.stop(CUE_COUNTDOWN)

    def on_session_finished(self) -> None:
        self.stop_all()

    # ── internal ──────────────────────────────────────────────────────

    def _safe(self, method: str, *args: str) -> None:
        try:
            getattr(self._player, method)(*args)
        except Exception:
            log.warning("cue %s%r failed; ignoring", method, args, exc_info=True)
