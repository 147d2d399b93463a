"""Audio cues package."""

from .cues import (
    CueDispatcher,
    CuePlayer,
    NullCuePlayer,
    CUE_ALARM,
    CUE_COUNTDOWN,
    CUE_PHASE_START,
    CUE_NAMES,
)

__all__ = [
    "CueDispatcher",
    "CuePlayer",
    "NullCuePlayer",
    "CUE_ALARM",
    "CUE_COUNTDOWN",
    "CUE_PHASE_START",
    "CUE_NAMES",
]
