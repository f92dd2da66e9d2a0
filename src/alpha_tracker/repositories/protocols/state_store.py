"""Key/value persistence protocol."""

from typing import Any, Protocol


class StateStore(Protocol):
    """
    Interface for durable key/value storage of JSON documents.

    load() never raises: missing keys and unreadable documents both yield the
    supplied default. save() overwrites the whole document for the key.
    """

    def load(self, key: str, default: Any) -> Any:
        """Return the stored JSON-compatible value, or default."""
        ...

    def save(self, key: str, value: Any) -> None:
        """Persist a JSON-compatible value under key."""
        ...
