"""Clock helpers for the configured application calendar."""

from datetime import date, datetime

import pytz

from alpha_tracker.config.settings import get_settings


def app_timezone() -> pytz.BaseTzInfo:
    """Return the timezone that defines calendar days for snapshots."""
    return pytz.timezone(get_settings().timezone)


def now_local() -> datetime:
    """Return current time in the application timezone."""
    return datetime.now(app_timezone())


def today_local() -> date:
    """Return today's calendar date in the application timezone."""
    return now_local().date()
