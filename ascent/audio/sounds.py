"""Cue synthesis and playback using numpy + QSoundEffect.

Cue sounds are generated programmatically as WAV files using sine-wave
synthesis with ADSR envelopes.  Files are cached to disk so subsequent
launches skip synthesis.

Sound names
-----------
- ``alarm``       — two-tone beep pair, looped until stopped
- ``countdown``   — soft one-second tick, looped while 1–10 s remain
- ``phase-start`` — bright two-note chime marking the B-side practice
"""

from __future__ import annotations

import io
import wave
from pathlib import Path
from typing import Callable

import numpy as np

from PyQt6.QtCore import QObject, QUrl
from PyQt6.QtMultimedia import QSoundEffect

from .cues import CUE_ALARM, CUE_COUNTDOWN, CUE_NAMES, CUE_PHASE_START
from ..settings import APP_SUPPORT_DIR


SOUNDS_DIR = APP_SUPPORT_DIR / "sounds"
SAMPLE_RATE = 44100

LOOPING_CUES = frozenset({CUE_ALARM, CUE_COUNTDOWN})


# ═══════════════════════════════════════════════════════════════════════════
#  WAV SYNTHESIS HELPERS
# ═══════════════════════════════════════════════════════════════════════════


def _make_envelope(
    length: int,
    attack: int = 200,
    decay: int = 400,
    sustain_level: float = 0.7,
    release: int = 800,
) -> np.ndarray:
    """ADSR envelope (all durations in samples)."""
    env = np.ones(length, dtype=np.float64)
    a = min(attack, length)
    if a > 0:
        env[:a] = np.linspace(0.0, 1.0, a)
    d_end = min(a + decay, length)
    if decay > 0 and d_end > a:
        env[a:d_end] = np.linspace(1.0, sustain_level, d_end - a)
    s_end = max(length - release, d_end)
    if s_end > d_end:
        env[d_end:s_end] = sustain_level
    if release > 0 and s_end < length:
        env[s_end:] = np.linspace(sustain_level, 0.0, length - s_end)
    return env


def _sine(freq: float, duration_s: float) -> np.ndarray:
    t = np.linspace(0, duration_s, int(SAMPLE_RATE * duration_s), endpoint=False)
    return np.sin(2 * np.pi * freq * t)


def _silence(duration_s: float) -> np.ndarray:
    return np.zeros(int(SAMPLE_RATE * duration_s))


def _to_wav_bytes(samples: np.ndarray) -> bytes:
    """Convert a float64 numpy array (-1..1) to 16-bit PCM WAV bytes."""
    samples = np.clip(samples, -1.0, 1.0)
    int_samples = (samples * 32767).astype(np.int16)

    buf = io.BytesIO()
    with wave.open(buf, "wb") as wf:
        wf.setnchannels(1)
        wf.setsampwidth(2)
        wf.setframerate(SAMPLE_RATE)
        wf.writeframes(int_samples.tobytes())
    return buf.getvalue()


# ═══════════════════════════════════════════════════════════════════════════
#  CUE GENERATORS
# ═══════════════════════════════════════════════════════════════════════════


def _generate_alarm() -> bytes:
    """Alarm — 880/660 Hz beep pair, 1 s loop unit."""
    parts: list[np.ndarray] = []
    for freq in (880.0, 660.0):
        tone = _sine(freq, 0.18) * 0.6
        env = _make_envelope(len(tone), attack=80, decay=300, sustain_level=0.8, release=400)
        parts.append(tone * env)
        parts.append(_silence(0.07))
    parts.append(_silence(0.5))
    return _to_wav_bytes(np.concatenate(parts))


def _generate_countdown_tick() -> bytes:
    """Countdown — short 1 kHz tick padded to exactly one second."""
    tick = _sine(1000.0, 0.03) * 0.3
    env = _make_envelope(len(tick), attack=30, decay=120, sustain_level=0.2, release=300)
    pad = np.zeros(SAMPLE_RATE - len(tick))
    return _to_wav_bytes(np.concatenate([tick * env, pad]))


def _generate_phase_start() -> bytes:
    """Phase start — G5 then C6, longer tail on the second note."""
    first = _sine(783.99, 0.12) * 0.5
    first = first * _make_envelope(len(first), attack=60, decay=200, sustain_level=0.4, release=300)
    second = _sine(1046.50, 0.4) * 0.5 + _sine(2093.0, 0.4) * 0.06
    second = second * _make_envelope(
        len(second),
        attack=80,
        decay=int(SAMPLE_RATE * 0.1),
        sustain_level=0.35,
        release=int(SAMPLE_RATE * 0.25),
    )
    return _to_wav_bytes(np.concatenate([first, _silence(0.03), second]))


_GENERATORS: dict[str, Callable[[], bytes]] = {
    CUE_ALARM: _generate_alarm,
    CUE_COUNTDOWN: _generate_countdown_tick,
    CUE_PHASE_START: _generate_phase_start,
}


# ═══════════════════════════════════════════════════════════════════════════
#  PLAYER
# ═══════════════════════════════════════════════════════════════════════════


class SoundCuePlayer(QObject):
    """:class:`~ascent.audio.cues.CuePlayer` backed by QSoundEffect.

    Usage::

        player = SoundCuePlayer(parent=self)
        player.set_volume(70)
        engine.cues.player = player
    """

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        sounds_dir: Path | None = None,
    ) -> None:
        super().__init__(parent)
        self._enabled = True
        self._volume = 0.7  # 0.0–1.0
        self._sounds_dir = sounds_dir or SOUNDS_DIR
        self._effects: dict[str, QSoundEffect] = {}

        self._ensure_wav_files()
        self._load_effects()

    # ── CuePlayer ─────────────────────────────────────────────────────

    def play(self, name: str) -> None:
        """Play a cue by name.  No-op if disabled or name unknown."""
        if not self._enabled:
            return
        effect = self._effects.get(name)
        if effect is not None:
            effect.play()

    def stop(self, name: str) -> None:
        effect = self._effects.get(name)
        if effect is not None:
            effect.stop()

    def stop_all(self) -> None:
        for effect in self._effects.values():
            effect.stop()

    # ── preferences ───────────────────────────────────────────────────

    def set_volume(self, level: int) -> None:
        """Set volume (0-100).  Updates all loaded effects."""
        self._volume = max(0, min(level, 100)) / 100.0
        for effect in self._effects.values():
            effect.setVolume(self._volume)

    def set_enabled(self, enabled: bool) -> None:
        self._enabled = enabled
        if not enabled:
            self.stop_all()

    @property
    def volume(self) -> int:
        return round(self._volume * 100)

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def loaded(self) -> frozenset[str]:
        return frozenset(self._effects)

    # ── internal ──────────────────────────────────────────────────────

    def _ensure_wav_files(self) -> None:
        self._sounds_dir.mkdir(parents=True, exist_ok=True)
        for name, gen_fn in _GENERATORS.items():
            path = self._sounds_dir / f"{name}.wav"
            if not path.exists():
                path.write_bytes(gen_fn())

    def _load_effects(self) -> None:
        for name in CUE_NAMES:
            path = self._sounds_dir / f"{name}.wav"
            if not path.exists():
                continue
            effect = QSoundEffect(self)
            effect.setSource(QUrl.fromLocalFile(str(path)))
            effect.setVolume(self._volume)
            if name in LOOPING_CUES:
                effect.setLoopCount(QSoundEffect.Loop.Infinite.value)
            self._effects[name] = effect
