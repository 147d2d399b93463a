"""Storage hand-off for finished timer sessions."""

from __future__ import annotations

from datetime import date

from .db import get_session
from .models import PracticeRecord
from ..timer.summary import SessionSummary


def save_summary(summary: SessionSummary, on: date | None = None) -> int:
    """Persist *summary* as a "practice" record and return its id."""
    with get_session() as db:
        record = PracticeRecord(
            date=on or date.today(),
            type="practice",
            title=summary.title,
            minutes=summary.total_practice_minutes,
            note=summary.note,
        )
        db.add(record)
        db.flush()
        return record.id


def recent_records(limit: int = 20) -> list[PracticeRecord]:
    """Newest first, by date then creation time."""
    with get_session() as db:
        return (
            db.query(PracticeRecord)
            .order_by(PracticeRecord.date.desc(), PracticeRecord.created_at.desc(),
                      PracticeRecord.id.desc())
            .limit(limit)
            .all()
        )
