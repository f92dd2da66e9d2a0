"""View models for portfolio and analysis outputs."""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Optional

from alpha_tracker.domain.models.enums import (
    Currency,
    DistributionType,
    Market,
    MarketMood,
    Recommendation,
    ValuationLabel,
)


@dataclass
class PositionView:
    """View model for a single holding with derived P/L."""

    position_id: str
    name: str
    code: str
    market: Market
    currency: Currency
    quantity: Decimal
    cost_price: Decimal
    current_price: Decimal
    market_value: Decimal
    cost_basis: Decimal
    pnl: Decimal
    pnl_percent: Decimal


@dataclass
class PortfolioSummary:
    """Headline figures for the trade screen."""

    cash_balance: Decimal
    market_value: Decimal
    total_assets: Decimal
    total_cost: Decimal
    total_pnl: Decimal
    pnl_percent: Decimal
    positions: list[PositionView] = field(default_factory=list)


@dataclass
class DistributionSlice:
    """One bucket of a distribution chart."""

    name: str
    value: Decimal
    percentage: Decimal


@dataclass
class DistributionView:
    """Portfolio distribution along one dimension."""

    dimension: DistributionType
    slices: list[DistributionSlice] = field(default_factory=list)
    total_value: Decimal = field(default_factory=lambda: Decimal("0"))


@dataclass
class TrendPointView:
    """One point on the asset trend chart; day is None for the live point."""

    day: Optional[date]
    value: Decimal
    label: str


@dataclass
class ValuationView:
    """Intrinsic value reading for one watchlist entry."""

    stock_id: str
    name: str
    intrinsic_value: float
    market_cap: float
    label: ValuationLabel
    currency: str = ""
    fiscal_year: str = ""


@dataclass
class EntrySimulation:
    """Suggested position sizing from market and industry sentiment."""

    recommendation: Recommendation
    entry_percent: int
    add_percent: int
    market_score: float
    industry_score: float
    market_mood: MarketMood


@dataclass
class RefreshReport:
    """Result of a settle-all refresh fan-out."""

    requested: int = 0
    succeeded: int = 0
    failed: int = 0
    failures: list[str] = field(default_factory=list)
