"""Domain models package."""

from alpha_tracker.domain.models.enums import (
    Market,
    Currency,
    StockCategory,
    TradeType,
    ResearchStatus,
    NoteType,
    Language,
    DistributionType,
    TimeRange,
    ValuationLabel,
    Recommendation,
    MarketMood,
)
from alpha_tracker.domain.models.position import (
    Position,
    AssetHistoryEntry,
    POSITION_MARKETS,
    currency_for_market,
)
from alpha_tracker.domain.models.stock import (
    TrendPoint,
    IndustryInfo,
    BusinessRatio,
    Financials,
    StockAnalysis,
    WatchlistEntry,
)
from alpha_tracker.domain.models.market import (
    MarketIndex,
    LimitUpStock,
    OpportunityStock,
    MarketOpportunity,
    CapitalLatest,
    CapitalTrendPoint,
    CapitalFlow,
    MarketSnapshot,
    NEUTRAL_SENTIMENT,
)
from alpha_tracker.domain.models.topic import TopicAnalysis, Topic, FavoriteItem
from alpha_tracker.domain.models.journal import ReflectionAnalysis, ReflectionSummary, Note

__all__ = [
    "Market",
    "Currency",
    "StockCategory",
    "TradeType",
    "ResearchStatus",
    "NoteType",
    "Language",
    "DistributionType",
    "TimeRange",
    "ValuationLabel",
    "Recommendation",
    "MarketMood",
    "Position",
    "AssetHistoryEntry",
    "POSITION_MARKETS",
    "currency_for_market",
    "TrendPoint",
    "IndustryInfo",
    "BusinessRatio",
    "Financials",
    "StockAnalysis",
    "WatchlistEntry",
    "MarketIndex",
    "CapitalLatest",
    "CapitalTrendPoint",
    "CapitalFlow",
    "LimitUpStock",
    "OpportunityStock",
    "MarketOpportunity",
    "MarketSnapshot",
    "NEUTRAL_SENTIMENT",
    "TopicAnalysis",
    "Topic",
    "FavoriteItem",
    "ReflectionAnalysis",
    "ReflectionSummary",
    "Note",
]
