"""SQLAlchemy implementation of StateStore."""

import json
import logging
from datetime import datetime, timezone
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from alpha_tracker.repositories.sqlalchemy.orm_models import AppStateORM

logger = logging.getLogger(__name__)


class SqlAlchemyStateStore:
    """SQLAlchemy-backed key/value store; one short-lived session per call."""

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    def load(self, key: str, default: Any) -> Any:
        """Return the stored document, or default when missing or unreadable."""
        try:
            with self._session_factory() as db:
                row = db.get(AppStateORM, key)
                if row is None:
                    return default
                return json.loads(row.value_json)
        except (SQLAlchemyError, ValueError) as exc:
            logger.warning("Failed to load state %s, using default: %s", key, exc)
            return default

    def save(self, key: str, value: Any) -> None:
        """Overwrite the document for key; failures are logged, not raised."""
        try:
            payload = json.dumps(value, ensure_ascii=False)
        except (TypeError, ValueError) as exc:
            logger.error("State %s is not JSON serialisable: %s", key, exc)
            return

        try:
            with self._session_factory() as db:
                self._upsert(db, key, payload)
                db.commit()
        except SQLAlchemyError as exc:
            logger.error("Failed to save state %s: %s", key, exc)

    @staticmethod
    def _upsert(db: Session, key: str, payload: str) -> None:
        row = db.get(AppStateORM, key)
        if row:
            row.value_json = payload
            row.updated_at = datetime.now(timezone.utc)
        else:
            db.add(AppStateORM(key=key, value_json=payload, updated_at=datetime.now(timezone.utc)))
