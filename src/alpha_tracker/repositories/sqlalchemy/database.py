"""Engine and session factory for the state database."""

from typing import Optional

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from alpha_tracker.config.settings import get_settings

Base = declarative_base()

_engine: Optional[Engine] = None
_session_factory: Optional[sessionmaker] = None


def get_engine() -> Engine:
    """Return the process-wide engine, creating it from settings on first use."""
    global _engine
    if _engine is None:
        url = get_settings().get_database_url()
        connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
        _engine = create_engine(url, connect_args=connect_args, echo=False)
    return _engine


def get_session_factory() -> sessionmaker:
    global _session_factory
    if _session_factory is None:
        _session_factory = sessionmaker(autocommit=False, autoflush=False, bind=get_engine())
    return _session_factory


def init_db() -> sessionmaker:
    """Create missing tables and return the session factory."""
    from alpha_tracker.repositories.sqlalchemy import orm_models  # noqa: F401

    Base.metadata.create_all(bind=get_engine())
    return get_session_factory()


def dispose_engine() -> None:
    """Close pooled connections; the next get_engine() call starts afresh."""
    global _engine, _session_factory
    if _engine is not None:
        _engine.dispose()
    _engine = None
    _session_factory = None
