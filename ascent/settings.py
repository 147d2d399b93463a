"""Application settings with JSON persistence.

Settings are stored at:
    ~/Library/Application Support/Ascent/settings.json

Per-phase durations are snapped to the 30 s step (and the 10 min dial
cap) on both load and save.

Usage::

    settings = load_settings()
    settings.practice_seconds = 7 * 60
    save_settings(settings)
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, asdict, fields
from pathlib import Path

from .timer.duration import MAX_PHASE_SECONDS, STEP_SECONDS, normalize
from .timer.plan import PATTERNS, clamp_set_count
from .timer.summary import DEFAULT_TITLE

log = logging.getLogger(__name__)

APP_SUPPORT_DIR = Path.home() / "Library" / "Application Support" / "Ascent"
SETTINGS_PATH = APP_SUPPORT_DIR / "settings.json"


@dataclass
class Settings:
    """All user-configurable preferences."""

    # ── timer ─────────────────────────────────────────────────────────
    practice_seconds: int = 5 * 60
    rest_seconds: int = 2 * 60
    b_practice_seconds: int = 5 * 60
    separate_ab: bool = False
    set_count: int = 1
    pattern: str = "ring"                  # ring | pair
    step_seconds: int = STEP_SECONDS
    max_phase_seconds: int = MAX_PHASE_SECONDS

    # ── record defaults ───────────────────────────────────────────────
    menu_title: str = DEFAULT_TITLE
    menu_note: str = ""

    # ── audio ─────────────────────────────────────────────────────────
    sound_enabled: bool = True
    sound_volume: int = 70                 # 0-100
    alarm_timeout_seconds: int = 15

    def normalized(self) -> "Settings":
        """Snap durations, clamp the set count, fall back on bad patterns."""
        step, cap = self.step_seconds, self.max_phase_seconds
        self.practice_seconds = normalize(self.practice_seconds, step, cap)
        self.rest_seconds = normalize(self.rest_seconds, step, cap)
        self.b_practice_seconds = normalize(self.b_practice_seconds, step, cap)
        self.set_count = clamp_set_count(self.set_count)
        if self.pattern not in PATTERNS:
            self.pattern = "ring"
        self.sound_volume = max(0, min(self.sound_volume, 100))
        return self


def load_settings() -> Settings:
    """Load settings from disk, falling back to defaults."""
    try:
        if SETTINGS_PATH.exists():
            data = json.loads(SETTINGS_PATH.read_text(encoding="utf-8"))
            # Only use keys that exist in the dataclass
            valid_keys = {f.name for f in fields(Settings)}
            filtered = {k: v for k, v in data.items() if k in valid_keys}
            return Settings(**filtered).normalized()
    except Exception:
        log.warning("could not read %s; using defaults", SETTINGS_PATH, exc_info=True)
    return Settings()


def save_settings(settings: Settings) -> None:
    """Write settings to disk as JSON."""
    settings.normalized()
    APP_SUPPORT_DIR.mkdir(parents=True, exist_ok=True)
    SETTINGS_PATH.write_text(
        json.dumps(asdict(settings), indent=2) + "\n",
        encoding="utf-8",
    )
