"""Timer card — setting steppers while configuring, countdown while running.

Layout (top → bottom):
    - Segment label + set counter
    - MM:SS countdown and segment progress bar
    - Practice / rest / B-side steppers and set count (SETTING only)
    - Control row: Start · Pause/Resume · Next · Reset
    - Title + note inputs and "Save record" (after the session)
"""

from __future__ import annotations

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QGridLayout,
    QLabel, QPushButton, QLineEdit, QFrame, QSpinBox, QCheckBox, QProgressBar,
)

from ..timer.duration import split_time, to_seconds
from ..timer.engine import DisplayState, TimerEngine
from ..timer.plan import MAX_SETS, MIN_SETS
from ..timer.state import Lifecycle
from ..timer.summary import SessionSummary
from .styles import progress_chunk_style

LIFECYCLE_LABELS: dict[Lifecycle, str] = {
    Lifecycle.SETTING:  "READY",
    Lifecycle.RUNNING:  "",
    Lifecycle.FINISHED: "DONE",
}


class _DurationStepper(QWidget):
    """Minutes spin box plus a 0/30 seconds spin box."""

    changed = pyqtSignal(int)  # total seconds

    def __init__(self, label: str, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        row = QHBoxLayout(self)
        row.setContentsMargins(0, 0, 0, 0)

        self._label = QLabel(label, self)
        self._minutes = QSpinBox(self)
        self._minutes.setRange(0, 10)
        self._minutes.setSuffix(" min")
        self._seconds = QSpinBox(self)
        self._seconds.setRange(0, 30)
        self._seconds.setSingleStep(30)
        self._seconds.setSuffix(" s")

        row.addWidget(self._label)
        row.addStretch(1)
        row.addWidget(self._minutes)
        row.addWidget(self._seconds)

        self._minutes.valueChanged.connect(self._emit)
        self._seconds.valueChanged.connect(self._emit)

    def set_seconds(self, total: int) -> None:
        minutes, seconds = split_time(total)
        for box, value in ((self._minutes, minutes), (self._seconds, seconds)):
            box.blockSignals(True)
            box.setValue(value)
            box.blockSignals(False)

    def seconds(self) -> int:
        return to_seconds(self._minutes.value(), self._seconds.value())

    def _emit(self) -> None:
        self.changed.emit(self.seconds())


class TimerWidget(QWidget):
    """The timer card shown in the main window."""

    record_requested = pyqtSignal(object)  # SessionSummary

    def __init__(self, engine: TimerEngine, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._engine = engine
        self._build_ui()
        self._load_config()
        self._title_input.setText(engine.title)
        self._note_input.setText(engine.note)
        self._connect_signals()
        self._on_display(engine.display)
        self._update_controls(engine.lifecycle)

    # ── build ─────────────────────────────────────────────────────────────

    def _build_ui(self) -> None:
        root = QVBoxLayout(self)
        root.setContentsMargins(0, 0, 0, 0)

        card = QFrame(self)
        card.setObjectName("card")
        root.addWidget(card)

        layout = QVBoxLayout(card)
        layout.setContentsMargins(24, 20, 24, 20)
        layout.setSpacing(10)

        # ── status ───────────────────────────────────────────────────
        self._segment_label = QLabel(card)
        self._segment_label.setObjectName("segmentLabel")
        self._segment_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self._segment_label)

        self._time_label = QLabel("00:00", card)
        self._time_label.setObjectName("timeLabel")
        self._time_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self._time_label)

        self._progress = QProgressBar(card)
        self._progress.setRange(0, 1000)
        self._progress.setTextVisible(False)
        layout.addWidget(self._progress)

        self._set_label = QLabel(card)
        self._set_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self._set_label)

        # ── steppers ─────────────────────────────────────────────────
        self._settings_box = QWidget(card)
        grid = QGridLayout(self._settings_box)
        grid.setContentsMargins(0, 0, 0, 0)

        self._practice = _DurationStepper("Practice", self._settings_box)
        self._rest = _DurationStepper("Rest", self._settings_box)
        self._separate_ab = QCheckBox("Separate A/B practice", self._settings_box)
        self._b_practice = _DurationStepper("Practice B", self._settings_box)

        self._sets = QSpinBox(self._settings_box)
        self._sets.setRange(MIN_SETS, MAX_SETS)
        self._sets.setPrefix("Sets: ")

        self._defaults_btn = QPushButton("Defaults", self._settings_box)
        self._defaults_btn.setObjectName("secondaryButton")

        grid.addWidget(self._practice, 0, 0, 1, 2)
        grid.addWidget(self._rest, 1, 0, 1, 2)
        grid.addWidget(self._separate_ab, 2, 0, 1, 2)
        grid.addWidget(self._b_practice, 3, 0, 1, 2)
        grid.addWidget(self._sets, 4, 0)
        grid.addWidget(self._defaults_btn, 4, 1)
        layout.addWidget(self._settings_box)

        # ── main controls ────────────────────────────────────────────
        btn_row = QHBoxLayout()
        btn_row.setSpacing(12)

        self._reset_btn = QPushButton("Reset", card)
        self._reset_btn.setObjectName("dangerButton")
        self._start_pause_btn = QPushButton("Start", card)
        self._start_pause_btn.setObjectName("primaryButton")
        self._next_btn = QPushButton("Next", card)
        self._next_btn.setObjectName("secondaryButton")
        self._alarm_btn = QPushButton("Stop alarm", card)

        btn_row.addWidget(self._reset_btn)
        btn_row.addWidget(self._start_pause_btn)
        btn_row.addWidget(self._next_btn)
        btn_row.addWidget(self._alarm_btn)
        layout.addLayout(btn_row)

        # ── record ───────────────────────────────────────────────────
        self._title_input = QLineEdit(card)
        self._title_input.setPlaceholderText("Title")
        self._note_input = QLineEdit(card)
        self._note_input.setPlaceholderText("Note (optional)")
        self._save_btn = QPushButton("Save record", card)
        self._save_btn.setObjectName("primaryButton")
        layout.addWidget(self._title_input)
        layout.addWidget(self._note_input)
        layout.addWidget(self._save_btn)

    def _load_config(self) -> None:
        cfg = self._engine.config
        self._practice.set_seconds(cfg.practice_sec)
        self._rest.set_seconds(cfg.rest_sec)
        self._b_practice.set_seconds(
            cfg.b_practice_sec if cfg.b_practice_sec is not None else cfg.practice_sec
        )
        self._separate_ab.blockSignals(True)
        self._separate_ab.setChecked(cfg.separate_ab)
        self._separate_ab.blockSignals(False)
        self._b_practice.setVisible(cfg.separate_ab)
        self._sets.blockSignals(True)
        self._sets.setValue(cfg.set_count)
        self._sets.blockSignals(False)

    # ── signals ───────────────────────────────────────────────────────────

    def _connect_signals(self) -> None:
        self._start_pause_btn.clicked.connect(self.start_or_pause)
        self._reset_btn.clicked.connect(self._engine.reset)
        self._next_btn.clicked.connect(self._engine.skip)
        self._alarm_btn.clicked.connect(self._engine.stop_alarm)
        self._save_btn.clicked.connect(self._on_save)
        self._defaults_btn.clicked.connect(self._on_defaults)

        self._practice.changed.connect(self._on_practice)
        self._rest.changed.connect(self._on_rest)
        self._b_practice.changed.connect(self._on_b_practice)
        self._separate_ab.toggled.connect(self._on_separate_ab)
        self._sets.valueChanged.connect(self._engine.set_set_count)

        self._engine.display_changed.connect(self._on_display)
        self._engine.segment_changed.connect(self._on_segment)
        self._engine.lifecycle_changed.connect(self._update_controls)
        self._engine.pause_changed.connect(
            lambda _running: self._update_controls(self._engine.lifecycle)
        )

    # ── slots ─────────────────────────────────────────────────────────────

    def start_or_pause(self) -> None:
        """Start from SETTING with the typed title/note, else pause/resume."""
        if self._engine.lifecycle is Lifecycle.SETTING:
            self._engine.title = self._title_input.text()
            self._engine.note = self._note_input.text()
            self._engine.start()
        else:
            self._engine.toggle_pause()

    def _on_practice(self, seconds: int) -> None:
        self._engine.set_practice_seconds(seconds)
        self._practice.set_seconds(self._engine.config.practice_sec)

    def _on_rest(self, seconds: int) -> None:
        self._engine.set_rest_seconds(seconds)
        self._rest.set_seconds(self._engine.config.rest_sec)

    def _on_separate_ab(self, checked: bool) -> None:
        self._b_practice.setVisible(checked)
        self._engine.set_separate_ab(checked, self._b_practice.seconds())
        if checked:
            self._b_practice.set_seconds(self._engine.config.b_practice_sec)

    def _on_b_practice(self, seconds: int) -> None:
        if self._separate_ab.isChecked():
            self._engine.set_b_practice_seconds(seconds)
            self._b_practice.set_seconds(self._engine.config.b_practice_sec)

    def _on_defaults(self) -> None:
        self._engine.restore_defaults()
        self._load_config()

    def _on_save(self) -> None:
        summary = self._engine.last_summary
        if summary is None:
            return
        self.record_requested.emit(SessionSummary(
            total_practice_minutes=summary.total_practice_minutes,
            title=self._title_input.text().strip() or summary.title,
            note=self._note_input.text().strip(),
            total_practice_seconds=summary.total_practice_seconds,
            set_count=summary.set_count,
        ))
        self._save_btn.setEnabled(False)

    def _on_segment(self, segment) -> None:
        self._progress.setStyleSheet(progress_chunk_style(segment.kind))

    def _on_display(self, display: DisplayState) -> None:
        self._time_label.setText(display.time_text)
        self._progress.setValue(int(display.progress * 1000))
        label = LIFECYCLE_LABELS.get(display.lifecycle) or display.segment_label
        if display.lifecycle is Lifecycle.RUNNING and not display.running:
            label = f"{display.segment_label} · PAUSED"
        self._segment_label.setText(label)
        self._set_label.setText(f"Set {display.set_index} of {display.set_count}")

    def _update_controls(self, lifecycle: Lifecycle) -> None:
        setting = lifecycle is Lifecycle.SETTING
        running = lifecycle is Lifecycle.RUNNING

        if setting:
            self._start_pause_btn.setText("Start")
        elif self._engine.is_paused:
            self._start_pause_btn.setText("Resume")
        else:
            self._start_pause_btn.setText("Pause")

        self._start_pause_btn.setEnabled(setting or running)
        self._next_btn.setEnabled(running)
        self._settings_box.setVisible(setting)
        self._save_btn.setVisible(lifecycle is Lifecycle.FINISHED)
        self._save_btn.setEnabled(lifecycle is Lifecycle.FINISHED)
