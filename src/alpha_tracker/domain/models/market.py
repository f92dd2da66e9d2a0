"""Market dashboard models."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

NEUTRAL_SENTIMENT = 5.0


@dataclass
class MarketIndex:
    """Headline index level."""

    name: str
    value: float
    change: float = 0.0
    change_percent: float = 0.0


@dataclass
class LimitUpStock:
    """A stock that hit its daily limit-up."""

    name: str
    code: str
    time: str = ""
    reason: str = ""
    unique_advantage: Optional[str] = None
    hotspot_duration: Optional[str] = None
    logic_type: Optional[str] = None


@dataclass
class OpportunityStock:
    name: str
    code: str = ""
    reason: str = ""


@dataclass
class MarketOpportunity:
    """An actively traded theme or strategy."""

    type: str
    title: str
    description: str = ""
    stocks: list[OpportunityStock] = field(default_factory=list)


@dataclass
class CapitalLatest:
    """Latest capital flow readings. Money amounts are in 100 millions; account growth is a percent."""

    northbound_5day_net_inflow: float = 0.0
    margin_balance: float = 0.0
    volume: float = 0.0
    account_growth: float = 0.0


@dataclass
class CapitalTrendPoint:
    date: str
    volume: float = 0.0
    margin_balance: float = 0.0
    northbound: float = 0.0
    etf_inflow: float = 0.0


@dataclass
class CapitalFlow:
    """Money moving into and out of the market, with a short daily history."""

    latest: CapitalLatest = field(default_factory=CapitalLatest)
    trend: list[CapitalTrendPoint] = field(default_factory=list)
    summary: str = ""


@dataclass
class MarketSnapshot:
    """Composite market view shown on the dashboard."""

    sentiment_score: float = NEUTRAL_SENTIMENT
    indices: list[MarketIndex] = field(default_factory=list)
    limit_up_stocks: list[LimitUpStock] = field(default_factory=list)
    opportunities: list[MarketOpportunity] = field(default_factory=list)
    capital: Optional[CapitalFlow] = None
    last_updated: Optional[datetime] = None
