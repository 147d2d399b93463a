"""Database package."""

from .db import get_session, init_db
from .models import PracticeRecord
from .records import save_summary, recent_records

__all__ = ["get_session", "init_db", "PracticeRecord", "save_summary", "recent_records"]
