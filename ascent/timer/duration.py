"""Duration model: user-facing minutes/seconds → canonical seconds.

Every per-phase duration the timer sees has been through
:func:`normalize`, so it is a multiple of the step size and lies in
``[0, max_sec]``.  Inputs are clamped, never rejected.
"""

from __future__ import annotations

import math

STEP_SECONDS = 30
MAX_PHASE_SECONDS = 10 * 60


def normalize(
    raw_seconds: float,
    step_sec: int = STEP_SECONDS,
    max_sec: int = MAX_PHASE_SECONDS,
) -> int:
    """Round *raw_seconds* to the nearest *step_sec* multiple, then clamp.

    Ties go to the even step (``round`` semantics), so 15 s → 0 and
    45 s → 60 with the default 30 s step.
    """
    step = max(1, int(step_sec))
    stepped = round(raw_seconds / step) * step
    return int(min(max_sec, max(0, stepped)))


def to_seconds(minutes: float, seconds: float) -> int:
    """Floor both components to non-negative integers and sum them."""
    return max(0, math.floor(minutes)) * 60 + max(0, math.floor(seconds))


def split_time(
    total_sec: float,
    step_sec: int = STEP_SECONDS,
    max_sec: int = MAX_PHASE_SECONDS,
) -> tuple[int, int]:
    """Normalized ``(minutes, seconds)`` pair for a stepper display."""
    return divmod(normalize(total_sec, step_sec, max_sec), 60)


def format_mmss(total_sec: int) -> str:
    minutes, seconds = divmod(max(0, int(total_sec)), 60)
    return f"{minutes:02d}:{seconds:02d}"
