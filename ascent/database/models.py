"""SQLAlchemy ORM models for Ascent."""

from datetime import datetime, date
from sqlalchemy import Column, Integer, String, Text, DateTime, Date
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass


class PracticeRecord(Base):
    """One logged activity; finished timer sessions land here as "practice"."""

    __tablename__ = "records"

    id = Column(Integer, primary_key=True, autoincrement=True)
    date = Column(Date, nullable=False, default=date.today)
    type = Column(String(20), nullable=False, default="practice")  # practice | strength | meal
    title = Column(String(255), nullable=False)
    minutes = Column(Integer, nullable=False, default=0)
    note = Column(Text, nullable=False, default="")
    created_at = Column(DateTime, nullable=False, default=datetime.now)

    def __repr__(self) -> str:
        return (
            f"<PracticeRecord id={self.id} date={self.date} "
            f"type={self.type} minutes={self.minutes}>"
        )
