"""SQLite store for practice records.

The database lives next to ``settings.json``.  Tests swap it for an
in-memory URL with :func:`configure_engine` before anything is written.
"""

from pathlib import Path
from contextlib import contextmanager

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session as OrmSession

from .models import Base

APP_SUPPORT_DIR = Path.home() / "Library" / "Application Support" / "Ascent"
DB_PATH = APP_SUPPORT_DIR / "ascent.db"

_engine: Engine | None = None
_SessionFactory: sessionmaker | None = None


def _connect(url: str) -> Engine:
    # the Qt main thread and test threads may share one connection
    return create_engine(url, connect_args={"check_same_thread": False})


def _get_engine() -> Engine:
    global _engine
    if _engine is None:
        APP_SUPPORT_DIR.mkdir(parents=True, exist_ok=True)
        _engine = _connect(f"sqlite:///{DB_PATH}")
    return _engine


def configure_engine(url: str) -> None:
    """Point the record store at *url* (e.g. ``sqlite://``)."""
    global _engine, _SessionFactory
    _engine = _connect(url)
    _SessionFactory = None


def init_db() -> None:
    """Create the ``records`` table if it is missing."""
    Base.metadata.create_all(_get_engine())


@contextmanager
def get_session():
    """Session scope for one unit of record work; commits on clean exit."""
    global _SessionFactory
    if _SessionFactory is None:
        _SessionFactory = sessionmaker(bind=_get_engine(), expire_on_commit=False)
    session: OrmSession = _SessionFactory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
