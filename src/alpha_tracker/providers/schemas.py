"""Pydantic models for research gateway payloads.

The model answers in camelCase JSON. These models validate that JSON,
tolerate nulls and missing optional fields, and convert to domain objects.
"""

from decimal import Decimal
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from alpha_tracker.domain.models import (
    BusinessRatio,
    CapitalFlow,
    CapitalLatest,
    CapitalTrendPoint,
    Financials,
    IndustryInfo,
    LimitUpStock,
    Market,
    MarketIndex,
    MarketOpportunity,
    OpportunityStock,
    ReflectionAnalysis,
    StockAnalysis,
    TopicAnalysis,
    TrendPoint,
)


class GatewayPayload(BaseModel):
    """Base payload: camelCase aliases, extra keys ignored, nulls mean absent."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        coerce_numbers_to_str=True,
    )

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data


class TrendPointPayload(GatewayPayload):
    year: str
    value: float


class IndustryPayload(GatewayPayload):
    name: str = ""
    sentiment_score: float = Field(default=5.0, ge=0, le=10)


class BusinessRatioPayload(GatewayPayload):
    domestic: float = 0.0
    overseas: float = 0.0


class FinancialsPayload(GatewayPayload):
    net_assets: float
    last_year_net_profit: float
    market_cap: float
    currency: str = "CNY"
    fiscal_year: str = ""


class StockAnalysisPayload(GatewayPayload):
    market: Market = Market.CN
    price: Optional[float] = None
    change_percent: Optional[float] = None
    company_news: str = ""
    main_business: str = ""
    new_business_progress: str = ""
    industry: IndustryPayload = Field(default_factory=IndustryPayload)
    management_voice: str = ""
    latest_report: str = ""
    gross_margin_trend: list[TrendPointPayload] = Field(default_factory=list)
    market_share_trend: list[TrendPointPayload] = Field(default_factory=list)
    core_barrier: str = ""
    business_ratio: BusinessRatioPayload = Field(default_factory=BusinessRatioPayload)
    free_cash_flow_trend: list[TrendPointPayload] = Field(default_factory=list)
    financials: Optional[FinancialsPayload] = None

    @field_validator("market", mode="before")
    @classmethod
    def _normalize_market(cls, value: Any) -> Any:
        if isinstance(value, str):
            upper = value.strip().upper()
            return upper if upper in ("CN", "US", "HK") else Market.OTHER
        return value

    def to_domain(self) -> StockAnalysis:
        return StockAnalysis(
            market=self.market,
            price=Decimal(str(self.price)) if self.price is not None else None,
            change_percent=self.change_percent,
            company_news=self.company_news,
            main_business=self.main_business,
            new_business_progress=self.new_business_progress,
            industry=IndustryInfo(
                name=self.industry.name,
                sentiment_score=self.industry.sentiment_score,
            ),
            management_voice=self.management_voice,
            latest_report=self.latest_report,
            gross_margin_trend=_trend(self.gross_margin_trend),
            market_share_trend=_trend(self.market_share_trend),
            core_barrier=self.core_barrier,
            business_ratio=BusinessRatio(
                domestic=self.business_ratio.domestic,
                overseas=self.business_ratio.overseas,
            ),
            free_cash_flow_trend=_trend(self.free_cash_flow_trend),
            financials=(
                Financials(
                    net_assets=self.financials.net_assets,
                    last_year_net_profit=self.financials.last_year_net_profit,
                    market_cap=self.financials.market_cap,
                    currency=self.financials.currency,
                    fiscal_year=self.financials.fiscal_year,
                )
                if self.financials
                else None
            ),
        )


class TopicAnalysisPayload(GatewayPayload):
    summary: str = ""
    sentiment_score: float = Field(default=5.0, ge=0, le=10)
    catalyst: str = ""
    related_stocks: list[str] = Field(default_factory=list)

    def to_domain(self) -> TopicAnalysis:
        return TopicAnalysis(
            summary=self.summary,
            sentiment_score=self.sentiment_score,
            catalyst=self.catalyst,
            related_stocks=list(self.related_stocks),
        )


class ReflectionAnalysisPayload(GatewayPayload):
    root_cause: str
    prevention: str

    def to_domain(self) -> ReflectionAnalysis:
        return ReflectionAnalysis(root_cause=self.root_cause, prevention=self.prevention)


class ReflectionSummaryPayload(GatewayPayload):
    content: str
    key_points: list[str] = Field(default_factory=list)


class MarketIndexPayload(GatewayPayload):
    name: str
    value: float
    change: float = 0.0
    change_percent: float = 0.0

    def to_domain(self) -> MarketIndex:
        return MarketIndex(
            name=self.name,
            value=self.value,
            change=self.change,
            change_percent=self.change_percent,
        )


class MarketIndicesPayload(GatewayPayload):
    sentiment_score: float = Field(default=5.0, ge=0, le=10)
    indices: list[MarketIndexPayload]


class LimitUpStockPayload(GatewayPayload):
    name: str
    code: str = ""
    time: str = ""
    reason: str = ""
    unique_advantage: Optional[str] = None
    hotspot_duration: Optional[str] = None
    logic_type: Optional[str] = None

    def to_domain(self) -> LimitUpStock:
        return LimitUpStock(
            name=self.name,
            code=self.code,
            time=self.time,
            reason=self.reason,
            unique_advantage=self.unique_advantage,
            hotspot_duration=self.hotspot_duration,
            logic_type=self.logic_type,
        )


class LimitUpPayload(GatewayPayload):
    limit_up_stocks: list[LimitUpStockPayload]


class OpportunityStockPayload(GatewayPayload):
    name: str
    code: str = ""
    reason: str = ""


class MarketOpportunityPayload(GatewayPayload):
    type: str = "Other"
    title: str
    description: str = ""
    stocks: list[OpportunityStockPayload] = Field(default_factory=list)

    def to_domain(self) -> MarketOpportunity:
        return MarketOpportunity(
            type=self.type,
            title=self.title,
            description=self.description,
            stocks=[OpportunityStock(name=s.name, code=s.code, reason=s.reason) for s in self.stocks],
        )


class OpportunitiesPayload(GatewayPayload):
    market_opportunities: list[MarketOpportunityPayload]


class CapitalLatestPayload(GatewayPayload):
    northbound_5day_net_inflow: float = Field(default=0.0, alias="northbound5DayNetInflow")
    margin_balance: float = 0.0
    volume: float = 0.0
    account_growth: float = 0.0


class CapitalTrendPointPayload(GatewayPayload):
    date: str
    volume: float = 0.0
    margin_balance: float = 0.0
    northbound: float = 0.0
    etf_inflow: float = 0.0


class CapitalDataPayload(GatewayPayload):
    latest: CapitalLatestPayload = Field(default_factory=CapitalLatestPayload)
    trend: list[CapitalTrendPointPayload] = Field(default_factory=list)
    summary: str = ""

    def to_domain(self) -> CapitalFlow:
        latest = self.latest
        return CapitalFlow(
            latest=CapitalLatest(
                northbound_5day_net_inflow=latest.northbound_5day_net_inflow,
                margin_balance=latest.margin_balance,
                volume=latest.volume,
                account_growth=latest.account_growth,
            ),
            trend=[
                CapitalTrendPoint(
                    date=p.date,
                    volume=p.volume,
                    margin_balance=p.margin_balance,
                    northbound=p.northbound,
                    etf_inflow=p.etf_inflow,
                )
                for p in self.trend
            ],
            summary=self.summary,
        )


class CapitalPayload(GatewayPayload):
    capital_data: CapitalDataPayload


def _trend(points: list[TrendPointPayload]) -> list[TrendPoint]:
    return [TrendPoint(year=p.year, value=p.value) for p in points]
