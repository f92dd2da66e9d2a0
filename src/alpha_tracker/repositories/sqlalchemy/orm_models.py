"""SQLAlchemy ORM model definitions."""

from datetime import datetime, timezone

from sqlalchemy import Column, String, DateTime, Text

from alpha_tracker.repositories.sqlalchemy.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AppStateORM(Base):
    """One persisted top-level collection, stored as a JSON document."""

    __tablename__ = "app_state"

    key = Column(String(64), primary_key=True)
    value_json = Column(Text, nullable=False)
    updated_at = Column(DateTime, nullable=False, default=_utcnow, onupdate=_utcnow)
