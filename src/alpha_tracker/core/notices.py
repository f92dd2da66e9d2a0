"""Dismissable user-facing notices raised by background failures."""

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from alpha_tracker.core.timezone import now_local


@dataclass
class Notice:
    """A non-blocking message for the view layer."""

    notice_id: str
    message: str
    level: str = "error"
    created_at: Optional[datetime] = field(default=None)


class NoticeBoard:
    """In-memory list of notices, newest first."""

    def __init__(self, limit: int = 50):
        self._limit = limit
        self._notices: list[Notice] = []

    def post(self, message: str, level: str = "error") -> Notice:
        notice = Notice(
            notice_id=str(uuid.uuid4()),
            message=message,
            level=level,
            created_at=now_local(),
        )
        self._notices.insert(0, notice)
        del self._notices[self._limit:]
        return notice

    def list(self) -> list[Notice]:
        return list(self._notices)

    def dismiss(self, notice_id: str) -> bool:
        """Remove a notice; returns False when it was already gone."""
        before = len(self._notices)
        self._notices = [n for n in self._notices if n.notice_id != notice_id]
        return len(self._notices) != before

    def clear(self) -> None:
        self._notices.clear()
