"""Session summary: practice-only time packaged for the record store."""

from __future__ import annotations

from dataclasses import dataclass

from .plan import SessionPlan

DEFAULT_TITLE = "Table tennis practice (A/B rotation)"


@dataclass(frozen=True)
class SessionSummary:
    total_practice_minutes: int
    title: str
    note: str
    total_practice_seconds: int = 0
    set_count: int = 1


def summarize(plan: SessionPlan, title: str = "", note: str = "") -> SessionSummary:
    """Sum every practice segment, floor to whole minutes.

    Rest time never counts.  A blank title falls back to
    :data:`DEFAULT_TITLE`; the note is trimmed.
    """
    practice_sec = sum(seg.duration_sec for seg in plan.practice_segments())
    return SessionSummary(
        total_practice_minutes=practice_sec // 60,
        title=title.strip() or DEFAULT_TITLE,
        note=note.strip(),
        total_practice_seconds=practice_sec,
        set_count=plan.set_count,
    )
