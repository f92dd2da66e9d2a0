"""Stub research gateway for offline/testing use."""

import random
from datetime import datetime, timezone
from decimal import Decimal

from alpha_tracker.domain.models import (
    BusinessRatio,
    CapitalFlow,
    CapitalLatest,
    CapitalTrendPoint,
    Financials,
    IndustryInfo,
    Language,
    LimitUpStock,
    Market,
    MarketIndex,
    MarketOpportunity,
    OpportunityStock,
    ReflectionAnalysis,
    ReflectionSummary,
    StockAnalysis,
    TopicAnalysis,
    TrendPoint,
)

# Deterministic fake research for a few well-known names
_STUB_STOCKS: dict[str, tuple[Market, Decimal, str]] = {
    "贵州茅台": (Market.CN, Decimal("1688.00"), "白酒"),
    "宁德时代": (Market.CN, Decimal("212.50"), "新能源"),
    "腾讯控股": (Market.HK, Decimal("385.20"), "互联网"),
    "Apple": (Market.US, Decimal("185.50"), "Consumer Electronics"),
    "NVIDIA": (Market.US, Decimal("485.25"), "Semiconductors"),
}

_STUB_INDICES = [
    ("上证指数", 3050.0),
    ("深证成指", 9600.0),
    ("创业板指", 1880.0),
    ("恒生指数", 17200.0),
    ("纳斯达克", 15900.0),
]


class StubResearchGateway:
    """
    Stub gateway with deterministic fake research for offline operation.

    Uses predefined data for a handful of names; generates seeded random
    research for anything else, so the same name always yields the same answer.
    """

    def __init__(self, seed: int = 42):
        self._seed = seed

    def _rng(self, key: str) -> random.Random:
        return random.Random(f"{self._seed}:{key}")

    async def analyze_stock(self, name: str, language: Language) -> StockAnalysis:
        rng = self._rng(name)
        if name in _STUB_STOCKS:
            market, price, industry = _STUB_STOCKS[name]
        else:
            market = rng.choice([Market.CN, Market.US, Market.HK])
            price = Decimal(str(10 + rng.random() * 190)).quantize(Decimal("0.01"))
            industry = "Diversified"

        years = [str(datetime.now(timezone.utc).year - offset) for offset in range(4, -1, -1)]
        domestic = round(50 + rng.random() * 50, 1)
        market_cap = round(float(price) * (1 + rng.random() * 20), 2)
        return StockAnalysis(
            market=market,
            price=price,
            change_percent=round((rng.random() - 0.5) * 6, 2),
            company_news=f"No live news for {name} (offline mode).",
            main_business=f"{name} main business summary.",
            new_business_progress="",
            industry=IndustryInfo(name=industry, sentiment_score=float(rng.randint(2, 9))),
            management_voice="",
            latest_report="",
            gross_margin_trend=[TrendPoint(year=y, value=round(20 + rng.random() * 30, 1)) for y in years],
            market_share_trend=[TrendPoint(year=y, value=round(5 + rng.random() * 15, 1)) for y in years],
            core_barrier="",
            business_ratio=BusinessRatio(domestic=domestic, overseas=round(100 - domestic, 1)),
            free_cash_flow_trend=[TrendPoint(year=y, value=round(rng.random() * 50, 1)) for y in years],
            financials=Financials(
                net_assets=round(market_cap * (0.2 + rng.random() * 0.5), 2),
                last_year_net_profit=round(market_cap * (0.02 + rng.random() * 0.06), 2),
                market_cap=market_cap,
                currency={Market.US: "USD", Market.HK: "HKD"}.get(market, "CNY"),
                fiscal_year=years[-2],
            ),
        )

    async def analyze_topic(self, keyword: str, language: Language) -> TopicAnalysis:
        rng = self._rng(keyword)
        return TopicAnalysis(
            summary=f"Offline summary for {keyword}.",
            sentiment_score=float(rng.randint(1, 9)),
            catalyst="No catalyst available offline.",
            related_stocks=rng.sample(sorted(_STUB_STOCKS), 2),
        )

    async def analyze_reflection(self, entry: str, language: Language) -> ReflectionAnalysis:
        return ReflectionAnalysis(
            root_cause="Decision made without a written plan.",
            prevention="Write entry, exit and position size before placing the order.",
        )

    async def summarize_reflections(self, entries: list[str], language: Language) -> ReflectionSummary:
        return ReflectionSummary(
            content=f"Reviewed {len(entries)} journal entries.",
            key_points=["Stick to the trading plan.", "Size positions before entering."],
            generated_at=datetime.now(timezone.utc),
        )

    async def fetch_market_indices(self, language: Language) -> tuple[float, list[MarketIndex]]:
        rng = self._rng("indices")
        indices = []
        for name, level in _STUB_INDICES:
            change_percent = round((rng.random() - 0.5) * 3, 2)
            indices.append(
                MarketIndex(
                    name=name,
                    value=level,
                    change=round(level * change_percent / 100, 2),
                    change_percent=change_percent,
                )
            )
        return float(rng.randint(3, 8)), indices

    async def fetch_market_opportunities(self, language: Language) -> list[MarketOpportunity]:
        return [
            MarketOpportunity(
                type="Sector",
                title="新能源",
                description="Offline placeholder theme.",
                stocks=[OpportunityStock(name="宁德时代", code="300750", reason="Sector leader")],
            )
        ]

    async def fetch_limit_up_stocks(self, language: Language) -> list[LimitUpStock]:
        return [LimitUpStock(name="示例股份", code="600000", time="09:35", reason="Offline placeholder")]

    async def fetch_market_capital(self, language: Language) -> CapitalFlow:
        rng = self._rng("capital")
        trend = [
            CapitalTrendPoint(
                date=f"D-{days_ago}",
                volume=round(rng.uniform(7000, 12000), 1),
                margin_balance=round(rng.uniform(14500, 16000), 1),
                northbound=round(rng.uniform(-80, 80), 1),
                etf_inflow=round(rng.uniform(-30, 60), 1),
            )
            for days_ago in range(4, -1, -1)
        ]
        return CapitalFlow(
            latest=CapitalLatest(
                northbound_5day_net_inflow=round(sum(p.northbound for p in trend), 1),
                margin_balance=trend[-1].margin_balance,
                volume=trend[-1].volume,
                account_growth=round(rng.uniform(-5, 5), 1),
            ),
            trend=trend,
            summary="Offline placeholder capital flows.",
        )
