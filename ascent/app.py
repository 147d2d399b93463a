"""Main application window for Ascent."""

from __future__ import annotations

import logging

from PyQt6.QtGui import QAction, QKeySequence
from PyQt6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QLabel, QListWidget,
)

from .audio.sounds import SoundCuePlayer
from .database.records import recent_records, save_summary
from .settings import Settings, load_settings
from .timer.config import TimerConfig
from .timer.engine import TimerEngine
from .timer.state import Lifecycle
from .timer.summary import SessionSummary
from .ui.styles import build_stylesheet
from .ui.timer_widget import TimerWidget

log = logging.getLogger(__name__)

RECENT_LIMIT = 10


class AscentApp(QMainWindow):
    """Timer card above the most recent practice records."""

    def __init__(self, settings: Settings | None = None) -> None:
        super().__init__()
        self.setWindowTitle("Ascent")
        self.setMinimumSize(420, 640)

        # ── settings ──────────────────────────────────────────────────
        self._settings: Settings = settings or load_settings()

        # ── sound ─────────────────────────────────────────────────────
        self._player = SoundCuePlayer(parent=self)
        self._player.set_volume(self._settings.sound_volume)
        self._player.set_enabled(self._settings.sound_enabled)

        # ── engine ────────────────────────────────────────────────────
        # Records are saved on request, not automatically.
        self._engine = TimerEngine(
            self,
            config=TimerConfig.from_settings(self._settings),
            cue_player=self._player,
            db_enabled=False,
        )
        self._engine.cues.set_alarm_timeout(self._settings.alarm_timeout_seconds)
        self._engine.title = self._settings.menu_title
        self._engine.note = self._settings.menu_note

        # ── layout ────────────────────────────────────────────────────
        self.setStyleSheet(build_stylesheet())
        central = QWidget(self)
        self.setCentralWidget(central)
        layout = QVBoxLayout(central)
        layout.setContentsMargins(16, 12, 16, 12)

        self._timer_widget = TimerWidget(self._engine, central)
        self._timer_widget.record_requested.connect(self._on_record_requested)
        layout.addWidget(self._timer_widget)

        layout.addWidget(QLabel("Recent practice", central))
        self._recent = QListWidget(central)
        layout.addWidget(self._recent)

        self._build_shortcuts()
        self._engine.lifecycle_changed.connect(self._on_lifecycle)
        self._refresh_recent()

    @property
    def engine(self) -> TimerEngine:
        return self._engine

    # ── shortcuts ─────────────────────────────────────────────────────

    def _build_shortcuts(self) -> None:
        space = QAction("Start / Pause", self)
        space.setShortcut(QKeySequence("Space"))
        space.triggered.connect(self._timer_widget.start_or_pause)
        self.addAction(space)

        nxt = QAction("Next", self)
        nxt.setShortcut(QKeySequence("Right"))
        nxt.triggered.connect(self._engine.skip)
        self.addAction(nxt)

        esc = QAction("Reset", self)
        esc.setShortcut(QKeySequence("Escape"))
        esc.triggered.connect(self._engine.reset)
        self.addAction(esc)

    # ── records ───────────────────────────────────────────────────────

    def _on_lifecycle(self, lifecycle: Lifecycle) -> None:
        if lifecycle is Lifecycle.FINISHED:
            self.statusBar().showMessage("Session complete", 5000)

    def _on_record_requested(self, summary: SessionSummary) -> None:
        record_id = save_summary(summary)
        log.info("saved practice record %d (%d min)", record_id, summary.total_practice_minutes)
        self.statusBar().showMessage(
            f"Saved {summary.total_practice_minutes} min: {summary.title}", 5000,
        )
        self._refresh_recent()

    def _refresh_recent(self) -> None:
        self._recent.clear()
        for record in recent_records(RECENT_LIMIT):
            self._recent.addItem(
                f"{record.date:%Y-%m-%d}  {record.title}  {record.minutes} min"
            )

    # ── close ─────────────────────────────────────────────────────────

    def closeEvent(self, event) -> None:
        self._engine.reset()
        super().closeEvent(event)
