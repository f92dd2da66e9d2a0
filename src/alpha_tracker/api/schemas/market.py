"""Pydantic schemas for the market dashboard."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from alpha_tracker.domain.models.enums import MarketMood


class MarketIndexResponse(BaseModel):
    model_config = {"from_attributes": True}

    name: str
    value: float
    change: float
    change_percent: float


class LimitUpStockResponse(BaseModel):
    model_config = {"from_attributes": True}

    name: str
    code: str
    time: str
    reason: str
    unique_advantage: Optional[str] = None
    hotspot_duration: Optional[str] = None
    logic_type: Optional[str] = None


class OpportunityStockResponse(BaseModel):
    model_config = {"from_attributes": True}

    name: str
    code: str
    reason: str


class MarketOpportunityResponse(BaseModel):
    model_config = {"from_attributes": True}

    type: str
    title: str
    description: str
    stocks: list[OpportunityStockResponse]


class CapitalLatestResponse(BaseModel):
    model_config = {"from_attributes": True}

    northbound_5day_net_inflow: float
    margin_balance: float
    volume: float
    account_growth: float


class CapitalTrendPointResponse(BaseModel):
    model_config = {"from_attributes": True}

    date: str
    volume: float
    margin_balance: float
    northbound: float
    etf_inflow: float


class CapitalFlowResponse(BaseModel):
    model_config = {"from_attributes": True}

    latest: CapitalLatestResponse
    trend: list[CapitalTrendPointResponse]
    summary: str


class MarketSnapshotResponse(BaseModel):
    """Market dashboard with the mood reading of its sentiment score."""

    model_config = {"from_attributes": True}

    sentiment_score: float
    mood: MarketMood
    indices: list[MarketIndexResponse]
    limit_up_stocks: list[LimitUpStockResponse]
    opportunities: list[MarketOpportunityResponse]
    capital: Optional[CapitalFlowResponse] = None
    last_updated: Optional[datetime] = None
