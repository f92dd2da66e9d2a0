"""SQLAlchemy persistence for application state."""

from alpha_tracker.repositories.sqlalchemy.database import (
    Base,
    dispose_engine,
    get_engine,
    get_session_factory,
    init_db,
)
from alpha_tracker.repositories.sqlalchemy.state_store import SqlAlchemyStateStore

__all__ = [
    "Base",
    "dispose_engine",
    "get_engine",
    "get_session_factory",
    "init_db",
    "SqlAlchemyStateStore",
]
