"""Repository protocol definitions (interfaces)."""

from alpha_tracker.repositories.protocols.state_store import StateStore

__all__ = [
    "StateStore",
]
