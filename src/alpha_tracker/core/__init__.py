"""Core utilities and shared functionality."""

from alpha_tracker.core.timezone import (
    app_timezone,
    now_local,
    today_local,
)
from alpha_tracker.core.exceptions import (
    AppError,
    ValidationError,
    NotFoundError,
    InsufficientSharesError,
    GatewayError,
    ResponseParseError,
)
from alpha_tracker.core.tasks import TaskQueue, TaskOutcome
from alpha_tracker.core.notices import Notice, NoticeBoard

__all__ = [
    "app_timezone",
    "now_local",
    "today_local",
    "AppError",
    "ValidationError",
    "NotFoundError",
    "InsufficientSharesError",
    "GatewayError",
    "ResponseParseError",
    "TaskQueue",
    "TaskOutcome",
    "Notice",
    "NoticeBoard",
]
