"""Pydantic schemas for portfolio endpoints."""

from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from alpha_tracker.domain.models.enums import (
    Currency,
    DistributionType,
    Market,
    TradeType,
)


class OpenPositionRequest(BaseModel):
    """Request schema for opening a new position."""

    name: str = Field(..., min_length=1, description="Stock display name")
    code: str = Field(default="", description="Exchange code; used to infer the market when market is omitted")
    market: Optional[Market] = Field(default=None, description="CN, US or HK")
    entry_price: Decimal
    quantity: Decimal


class TradeRequest(BaseModel):
    """Request schema for a buy or sell against an existing position."""

    trade_type: TradeType
    quantity: Decimal
    price: Decimal


class CashRequest(BaseModel):
    amount: Decimal


class TotalAssetsRequest(BaseModel):
    total: Decimal


class PositionResponse(BaseModel):
    """Response schema for a single position with derived P/L."""

    model_config = {"from_attributes": True}

    position_id: str
    name: str
    code: str
    market: Market
    currency: Currency
    quantity: float
    cost_price: float
    current_price: float
    market_value: float
    cost_basis: float
    pnl: float
    pnl_percent: float


class PortfolioSummaryResponse(BaseModel):
    """Cash, totals and positions."""

    model_config = {"from_attributes": True}

    cash_balance: float
    market_value: float
    total_assets: float
    total_cost: float
    total_pnl: float
    pnl_percent: float
    positions: list[PositionResponse]


class TradeResponse(BaseModel):
    """Result of a trade; position is null when the trade closed it."""

    position: Optional[PositionResponse] = None
    cash_balance: float


class CashResponse(BaseModel):
    cash_balance: float
    total_assets: float


class DistributionSliceResponse(BaseModel):
    model_config = {"from_attributes": True}

    name: str
    value: float
    percentage: float


class DistributionResponse(BaseModel):
    """Portfolio split along one dimension; empty buckets are omitted."""

    model_config = {"from_attributes": True}

    dimension: DistributionType
    slices: list[DistributionSliceResponse]
    total_value: float


class TrendPointResponse(BaseModel):
    model_config = {"from_attributes": True}

    day: Optional[date] = None
    value: float
    label: str


class HistoryEntryResponse(BaseModel):
    model_config = {"from_attributes": True}

    date: date
    timestamp: datetime
    total_value: float


class RefreshReportResponse(BaseModel):
    """Outcome of a settle-all refresh."""

    model_config = {"from_attributes": True}

    requested: int
    succeeded: int
    failed: int
    failures: list[str]


class MarketInferenceResponse(BaseModel):
    code: str
    market: Optional[Market] = None
