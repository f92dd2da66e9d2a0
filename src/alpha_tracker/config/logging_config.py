"""Logging configuration."""

import logging
import sys

from alpha_tracker.config.settings import get_settings

# Libraries that log every request or statement at INFO
_QUIET_LOGGERS = ("sqlalchemy.engine", "httpx", "httpcore", "openai")


def setup_logging() -> None:
    """Log to stdout, and to a file in the data directory when enabled."""
    settings = get_settings()

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if settings.log_to_file:
        log_path = settings.get_data_dir() / "alpha_tracker.log"
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))

    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=handlers,
        force=True,
    )

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    logging.getLogger("uvicorn").setLevel(logging.INFO)
