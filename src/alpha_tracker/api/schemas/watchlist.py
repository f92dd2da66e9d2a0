"""Pydantic schemas for watchlist endpoints."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from alpha_tracker.domain.models.enums import (
    Market,
    MarketMood,
    Recommendation,
    ResearchStatus,
    StockCategory,
    ValuationLabel,
)


class AddStockRequest(BaseModel):
    name: str = Field(..., min_length=1, description="Company name or ticker")


class CategoryRequest(BaseModel):
    category: StockCategory


class TrendPointResponse(BaseModel):
    model_config = {"from_attributes": True}

    year: str
    value: float


class IndustryResponse(BaseModel):
    model_config = {"from_attributes": True}

    name: str
    sentiment_score: float


class BusinessRatioResponse(BaseModel):
    model_config = {"from_attributes": True}

    domestic: float
    overseas: float


class FinancialsResponse(BaseModel):
    model_config = {"from_attributes": True}

    net_assets: float
    last_year_net_profit: float
    market_cap: float
    currency: str
    fiscal_year: str


class StockAnalysisResponse(BaseModel):
    """Research payload for one stock."""

    model_config = {"from_attributes": True}

    market: Market
    price: Optional[float] = None
    change_percent: Optional[float] = None
    company_news: str
    main_business: str
    new_business_progress: str
    industry: IndustryResponse
    management_voice: str
    latest_report: str
    gross_margin_trend: list[TrendPointResponse]
    market_share_trend: list[TrendPointResponse]
    core_barrier: str
    business_ratio: BusinessRatioResponse
    free_cash_flow_trend: list[TrendPointResponse]
    financials: Optional[FinancialsResponse] = None


class ValuationResponse(BaseModel):
    model_config = {"from_attributes": True}

    stock_id: str
    name: str
    intrinsic_value: float
    market_cap: float
    label: ValuationLabel
    currency: str
    fiscal_year: str


class WatchlistEntryResponse(BaseModel):
    """Response schema for a watchlist entry."""

    model_config = {"from_attributes": True}

    stock_id: str
    name: str
    category: StockCategory
    status: ResearchStatus
    last_updated: Optional[datetime] = None
    analysis: StockAnalysisResponse


class EntrySimulationResponse(BaseModel):
    """Suggested position sizing."""

    model_config = {"from_attributes": True}

    recommendation: Recommendation
    entry_percent: int
    add_percent: int
    market_score: float
    industry_score: float
    market_mood: MarketMood
