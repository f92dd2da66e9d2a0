"""Domain layer - plain business models with no infrastructure dependencies."""

from alpha_tracker.domain.models import (
    Position,
    AssetHistoryEntry,
    WatchlistEntry,
    StockAnalysis,
    MarketSnapshot,
    Topic,
    FavoriteItem,
    Note,
    ReflectionSummary,
)

__all__ = [
    "Position",
    "AssetHistoryEntry",
    "WatchlistEntry",
    "StockAnalysis",
    "MarketSnapshot",
    "Topic",
    "FavoriteItem",
    "Note",
    "ReflectionSummary",
]
