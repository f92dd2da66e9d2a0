"""Dependency injection for FastAPI."""

from alpha_tracker.app_context import AppContext, get_app_context


def get_context() -> AppContext:
    """Provide the initialized application context."""
    return get_app_context()
