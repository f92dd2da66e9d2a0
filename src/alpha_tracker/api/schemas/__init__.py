"""Pydantic schemas for API request/response."""

from alpha_tracker.api.schemas.portfolio import (
    OpenPositionRequest,
    TradeRequest,
    CashRequest,
    TotalAssetsRequest,
    PositionResponse,
    PortfolioSummaryResponse,
    TradeResponse,
    CashResponse,
    DistributionResponse,
    TrendPointResponse,
    HistoryEntryResponse,
    RefreshReportResponse,
    MarketInferenceResponse,
)
from alpha_tracker.api.schemas.watchlist import (
    AddStockRequest,
    CategoryRequest,
    WatchlistEntryResponse,
    ValuationResponse,
    EntrySimulationResponse,
)
from alpha_tracker.api.schemas.topic import (
    AddTopicRequest,
    TopicResponse,
    FavoriteResponse,
    FavoriteToggleResponse,
)
from alpha_tracker.api.schemas.journal import (
    NoteCreateRequest,
    NoteUpdateRequest,
    NoteResponse,
    ReflectionSummaryResponse,
)
from alpha_tracker.api.schemas.market import MarketSnapshotResponse
from alpha_tracker.api.schemas.preferences import (
    LanguageRequest,
    PreferencesResponse,
    NoticeResponse,
)

__all__ = [
    "OpenPositionRequest",
    "TradeRequest",
    "CashRequest",
    "TotalAssetsRequest",
    "PositionResponse",
    "PortfolioSummaryResponse",
    "TradeResponse",
    "CashResponse",
    "DistributionResponse",
    "TrendPointResponse",
    "HistoryEntryResponse",
    "RefreshReportResponse",
    "MarketInferenceResponse",
    "AddStockRequest",
    "CategoryRequest",
    "WatchlistEntryResponse",
    "ValuationResponse",
    "EntrySimulationResponse",
    "AddTopicRequest",
    "TopicResponse",
    "FavoriteResponse",
    "FavoriteToggleResponse",
    "NoteCreateRequest",
    "NoteUpdateRequest",
    "NoteResponse",
    "ReflectionSummaryResponse",
    "MarketSnapshotResponse",
    "LanguageRequest",
    "PreferencesResponse",
    "NoticeResponse",
]
