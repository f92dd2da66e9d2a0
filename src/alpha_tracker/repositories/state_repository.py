"""Typed access to the persisted top-level collections."""

import logging
from decimal import Decimal
from enum import Enum
from typing import Any, Optional, TypeVar

from pydantic import TypeAdapter, ValidationError as PydanticValidationError

from alpha_tracker.domain.models import (
    AssetHistoryEntry,
    FavoriteItem,
    Language,
    MarketSnapshot,
    Note,
    Position,
    ReflectionSummary,
    Topic,
    WatchlistEntry,
)
from alpha_tracker.repositories.protocols import StateStore

logger = logging.getLogger(__name__)

T = TypeVar("T")


class StorageKey(str, Enum):
    """Stable storage keys, one per top-level collection."""

    STOCKS = "alpha_stocks"
    MARKET = "alpha_market"
    TOPICS = "alpha_topics"
    NOTES = "alpha_notes"
    REFLECTION = "alpha_reflection"
    FAVORITES = "alpha_favorites"
    PORTFOLIO = "alpha_portfolio"
    CASH = "alpha_cash"
    HISTORY = "alpha_history"
    LANGUAGE = "alpha_lang"


_POSITIONS = TypeAdapter(list[Position])
_CASH = TypeAdapter(Decimal)
_HISTORY = TypeAdapter(list[AssetHistoryEntry])
_STOCKS = TypeAdapter(list[WatchlistEntry])
_MARKET = TypeAdapter(Optional[MarketSnapshot])
_TOPICS = TypeAdapter(list[Topic])
_FAVORITES = TypeAdapter(list[FavoriteItem])
_NOTES = TypeAdapter(list[Note])
_REFLECTION = TypeAdapter(Optional[ReflectionSummary])
_LANGUAGE = TypeAdapter(Language)


class StateRepository:
    """
    Serialises domain collections to JSON documents in a StateStore.

    Every save is a full overwrite of the collection. A document that no longer
    validates is logged and replaced by the default on load.
    """

    def __init__(self, store: StateStore):
        self._store = store

    # Ledger

    def load_positions(self) -> list[Position]:
        return self._load(StorageKey.PORTFOLIO, _POSITIONS, [])

    def save_positions(self, positions: list[Position]) -> None:
        self._save(StorageKey.PORTFOLIO, _POSITIONS, positions)

    def load_cash(self, default: Decimal) -> Decimal:
        return self._load(StorageKey.CASH, _CASH, default)

    def save_cash(self, cash: Decimal) -> None:
        self._save(StorageKey.CASH, _CASH, cash)

    def load_history(self) -> list[AssetHistoryEntry]:
        return self._load(StorageKey.HISTORY, _HISTORY, [])

    def save_history(self, history: list[AssetHistoryEntry]) -> None:
        self._save(StorageKey.HISTORY, _HISTORY, history)

    # Research collections

    def load_stocks(self) -> list[WatchlistEntry]:
        return self._load(StorageKey.STOCKS, _STOCKS, [])

    def save_stocks(self, stocks: list[WatchlistEntry]) -> None:
        self._save(StorageKey.STOCKS, _STOCKS, stocks)

    def load_market(self) -> Optional[MarketSnapshot]:
        return self._load(StorageKey.MARKET, _MARKET, None)

    def save_market(self, snapshot: Optional[MarketSnapshot]) -> None:
        self._save(StorageKey.MARKET, _MARKET, snapshot)

    def load_topics(self) -> list[Topic]:
        return self._load(StorageKey.TOPICS, _TOPICS, [])

    def save_topics(self, topics: list[Topic]) -> None:
        self._save(StorageKey.TOPICS, _TOPICS, topics)

    def load_favorites(self) -> list[FavoriteItem]:
        return self._load(StorageKey.FAVORITES, _FAVORITES, [])

    def save_favorites(self, favorites: list[FavoriteItem]) -> None:
        self._save(StorageKey.FAVORITES, _FAVORITES, favorites)

    def load_notes(self) -> list[Note]:
        return self._load(StorageKey.NOTES, _NOTES, [])

    def save_notes(self, notes: list[Note]) -> None:
        self._save(StorageKey.NOTES, _NOTES, notes)

    def load_reflection(self) -> Optional[ReflectionSummary]:
        return self._load(StorageKey.REFLECTION, _REFLECTION, None)

    def save_reflection(self, summary: Optional[ReflectionSummary]) -> None:
        self._save(StorageKey.REFLECTION, _REFLECTION, summary)

    def load_language(self, default: Language) -> Language:
        return self._load(StorageKey.LANGUAGE, _LANGUAGE, default)

    def save_language(self, language: Language) -> None:
        self._save(StorageKey.LANGUAGE, _LANGUAGE, language)

    def _load(self, key: StorageKey, adapter: TypeAdapter, default: T) -> T:
        raw = self._store.load(key.value, None)
        if raw is None:
            return default
        try:
            return adapter.validate_python(raw)
        except PydanticValidationError as exc:
            logger.warning("Discarding unreadable %s document: %s", key.value, exc)
            return default

    def _save(self, key: StorageKey, adapter: TypeAdapter, value: Any) -> None:
        self._store.save(key.value, adapter.dump_python(value, mode="json"))
