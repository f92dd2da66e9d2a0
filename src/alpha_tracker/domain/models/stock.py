"""Watchlist stock research models."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional

from alpha_tracker.domain.models.enums import Market, StockCategory, ResearchStatus


@dataclass
class TrendPoint:
    """One yearly value in a research trend series."""

    year: str
    value: float


@dataclass
class IndustryInfo:
    """Industry label with its 0-10 sentiment score."""

    name: str = ""
    sentiment_score: float = 5.0


@dataclass
class BusinessRatio:
    """Domestic vs overseas revenue split, in percent."""

    domestic: float = 0.0
    overseas: float = 0.0


@dataclass
class Financials:
    """Headline financials, all amounts in billions of `currency`."""

    net_assets: float
    last_year_net_profit: float
    market_cap: float
    currency: str = "CNY"
    fiscal_year: str = ""


@dataclass
class StockAnalysis:
    """Structured research returned by the gateway for one stock."""

    market: Market = Market.CN
    price: Optional[Decimal] = None
    change_percent: Optional[float] = None
    company_news: str = ""
    main_business: str = ""
    new_business_progress: str = ""
    industry: IndustryInfo = field(default_factory=IndustryInfo)
    management_voice: str = ""
    latest_report: str = ""
    gross_margin_trend: list[TrendPoint] = field(default_factory=list)
    market_share_trend: list[TrendPoint] = field(default_factory=list)
    core_barrier: str = ""
    business_ratio: BusinessRatio = field(default_factory=BusinessRatio)
    free_cash_flow_trend: list[TrendPoint] = field(default_factory=list)
    financials: Optional[Financials] = None

    @property
    def usable_price(self) -> Optional[Decimal]:
        """Price if the gateway produced a positive one."""
        if self.price is not None and self.price > 0:
            return self.price
        return None


@dataclass
class WatchlistEntry:
    """
    A researched stock on the watchlist.

    The research payload is merged in when the gateway resolves; until then
    the entry is a pending placeholder.
    """

    stock_id: str
    name: str
    category: StockCategory = StockCategory.NORMAL
    status: ResearchStatus = ResearchStatus.PENDING
    last_updated: Optional[datetime] = None
    analysis: StockAnalysis = field(default_factory=StockAnalysis)

    def __post_init__(self) -> None:
        if isinstance(self.category, str):
            self.category = StockCategory(self.category)
        if isinstance(self.status, str):
            self.status = ResearchStatus(self.status)

    @property
    def price(self) -> Optional[Decimal]:
        return self.analysis.price

    @property
    def industry_name(self) -> str:
        return self.analysis.industry.name

    def matches(self, name: str) -> bool:
        """Loose name match: identical, or either name contains the other."""
        if not name or not self.name:
            return False
        return self.name == name or name in self.name or self.name in name
