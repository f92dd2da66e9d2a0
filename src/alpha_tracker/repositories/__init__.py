"""Repository layer - data access abstractions and implementations."""

from alpha_tracker.repositories.protocols import StateStore
from alpha_tracker.repositories.state_repository import StateRepository, StorageKey

__all__ = [
    "StateStore",
    "StateRepository",
    "StorageKey",
]
