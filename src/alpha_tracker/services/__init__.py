"""Service layer - business logic orchestration."""

from alpha_tracker.services.ledger_service import LedgerService, infer_market_from_code
from alpha_tracker.services.analysis_service import (
    AnalysisService,
    intrinsic_value,
    market_mood,
    simulate_entry,
    valuation_label,
)
from alpha_tracker.services.preference_service import PreferenceService
from alpha_tracker.services.watchlist_service import WatchlistService
from alpha_tracker.services.trading_service import TradingService
from alpha_tracker.services.topic_service import TopicService
from alpha_tracker.services.journal_service import JournalService
from alpha_tracker.services.market_service import MarketService

__all__ = [
    "LedgerService",
    "infer_market_from_code",
    "AnalysisService",
    "intrinsic_value",
    "market_mood",
    "simulate_entry",
    "valuation_label",
    "PreferenceService",
    "WatchlistService",
    "TradingService",
    "TopicService",
    "JournalService",
    "MarketService",
]
