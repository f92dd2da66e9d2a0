"""Analysis service for portfolio analytics."""

import logging
from collections import OrderedDict
from datetime import date
from decimal import Decimal
from typing import Iterable, Optional

from dateutil.relativedelta import relativedelta

from alpha_tracker.core.timezone import today_local
from alpha_tracker.domain.models import (
    DistributionType,
    Market,
    MarketMood,
    NEUTRAL_SENTIMENT,
    Position,
    Recommendation,
    TimeRange,
    ValuationLabel,
    WatchlistEntry,
)
from alpha_tracker.domain.views import (
    DistributionSlice,
    DistributionView,
    EntrySimulation,
    PortfolioSummary,
    PositionView,
    TrendPointView,
    ValuationView,
)
from alpha_tracker.services.ledger_service import LedgerService

logger = logging.getLogger(__name__)

UNKNOWN_INDUSTRY = "Unknown"
PROFIT_MULTIPLE = 20
UNDERVALUED_RATIO = 0.8
OVERVALUED_RATIO = 1.2

_ZERO = Decimal("0")
_HUNDRED = Decimal("100")

_RANGE_DELTAS = {
    TimeRange.ONE_MONTH: relativedelta(months=1),
    TimeRange.THREE_MONTHS: relativedelta(months=3),
    TimeRange.ONE_YEAR: relativedelta(years=1),
}


def percent_of(part: Decimal, whole: Decimal) -> Decimal:
    """part / whole * 100, or 0 when whole is 0."""
    if whole == 0:
        return _ZERO
    return part / whole * _HUNDRED


def intrinsic_value(net_assets: float, last_year_net_profit: float) -> float:
    """Net assets plus twenty years of last year's profit."""
    return net_assets + last_year_net_profit * PROFIT_MULTIPLE


def valuation_label(market_cap: float, value: float) -> ValuationLabel:
    if market_cap < value * UNDERVALUED_RATIO:
        return ValuationLabel.UNDERVALUED
    if market_cap > value * OVERVALUED_RATIO:
        return ValuationLabel.OVERVALUED
    return ValuationLabel.FAIR


def market_mood(score: float) -> MarketMood:
    """Map a 0-10 sentiment score to a mood."""
    if score >= 8:
        return MarketMood.HOT
    if score >= 6:
        return MarketMood.BULLISH
    if score >= 4:
        return MarketMood.VOLATILE
    if score >= 2:
        return MarketMood.BEARISH
    return MarketMood.FREEZING


def simulate_entry(market_score: Optional[float], industry_score: float) -> EntrySimulation:
    """
    Suggest entry and add-on sizes from market and industry sentiment.

    A missing or zero market score is read as neutral.
    """
    market = market_score or NEUTRAL_SENTIMENT
    if market >= 7 and industry_score >= 7:
        recommendation, entry, add = Recommendation.AGGRESSIVE, 40, 30
    elif market <= 3 or industry_score <= 3:
        recommendation, entry, add = Recommendation.CAUTIOUS, 10, 10
    else:
        recommendation, entry, add = Recommendation.MODERATE, 20, 20
    return EntrySimulation(
        recommendation=recommendation,
        entry_percent=entry,
        add_percent=add,
        market_score=market,
        industry_score=industry_score,
        market_mood=market_mood(market),
    )


class AnalysisService:
    """
    Read-only figures derived from the ledger and the watchlist.

    Nothing here is cached; every call recomputes from current state.
    """

    def __init__(self, ledger: LedgerService):
        self._ledger = ledger

    def position_view(self, position: Position) -> PositionView:
        pnl = position.market_value - position.cost_basis
        return PositionView(
            position_id=position.position_id,
            name=position.name,
            code=position.code,
            market=position.market,
            currency=position.currency,
            quantity=position.quantity,
            cost_price=position.cost_price,
            current_price=position.current_price,
            market_value=position.market_value,
            cost_basis=position.cost_basis,
            pnl=pnl,
            pnl_percent=percent_of(pnl, position.cost_basis),
        )

    def summary(self) -> PortfolioSummary:
        """Cash, market value, total assets and P/L across all positions."""
        positions = self._ledger.positions
        market_value = sum((p.market_value for p in positions), _ZERO)
        total_cost = sum((p.cost_basis for p in positions), _ZERO)
        total_pnl = market_value - total_cost
        cash = self._ledger.cash_balance
        return PortfolioSummary(
            cash_balance=cash,
            market_value=market_value,
            total_assets=cash + market_value,
            total_cost=total_cost,
            total_pnl=total_pnl,
            pnl_percent=percent_of(total_pnl, total_cost),
            positions=[self.position_view(p) for p in positions],
        )

    def distribution(
        self,
        dimension: DistributionType,
        watchlist: Iterable[WatchlistEntry] = (),
    ) -> DistributionView:
        """Split the portfolio by market, industry or risk; empty buckets are dropped."""
        dimension = DistributionType(dimension)
        positions = self._ledger.positions
        buckets: "OrderedDict[str, Decimal]" = OrderedDict()

        if dimension == DistributionType.MARKET:
            for market in (Market.CN, Market.US, Market.HK):
                buckets[market.value] = sum(
                    (p.market_value for p in positions if p.market == market), _ZERO
                )
        elif dimension == DistributionType.INDUSTRY:
            entries = list(watchlist)
            for position in positions:
                industry = self._industry_for(position.name, entries)
                buckets[industry] = buckets.get(industry, _ZERO) + position.market_value
            buckets = OrderedDict(sorted(buckets.items(), key=lambda item: item[1], reverse=True))
        else:
            buckets["Equity"] = sum((p.market_value for p in positions), _ZERO)
            buckets["Cash"] = max(_ZERO, self._ledger.cash_balance)

        slices = [(name, value) for name, value in buckets.items() if value > 0]
        total = sum((value for _, value in slices), _ZERO)
        return DistributionView(
            dimension=dimension,
            slices=[
                DistributionSlice(name=name, value=value, percentage=percent_of(value, total))
                for name, value in slices
            ],
            total_value=total,
        )

    @staticmethod
    def _industry_for(name: str, entries: list[WatchlistEntry]) -> str:
        for entry in entries:
            if entry.matches(name) and entry.industry_name:
                return entry.industry_name
        return UNKNOWN_INDUSTRY

    def valuation(self, entry: WatchlistEntry) -> Optional[ValuationView]:
        """Intrinsic value reading, or None when the entry has no financials."""
        financials = entry.analysis.financials
        if financials is None:
            return None
        value = intrinsic_value(financials.net_assets, financials.last_year_net_profit)
        return ValuationView(
            stock_id=entry.stock_id,
            name=entry.name,
            intrinsic_value=value,
            market_cap=financials.market_cap,
            label=valuation_label(financials.market_cap, value),
            currency=financials.currency,
            fiscal_year=financials.fiscal_year,
        )

    def record_daily_history(self, today: Optional[date] = None) -> bool:
        """Snapshot total assets once per calendar day; later calls that day are no-ops."""
        today = today or today_local()
        entry = self._ledger.record_snapshot(today, self._ledger.total_assets())
        return entry is not None

    def trend_series(self, time_range: TimeRange = TimeRange.ALL, today: Optional[date] = None) -> list[TrendPointView]:
        """
        Asset history within the range plus a live point for now.

        Returns an empty list when fewer than two points would be plotted.
        """
        time_range = TimeRange(time_range)
        today = today or today_local()
        history = sorted(self._ledger.history, key=lambda e: e.date)

        delta = _RANGE_DELTAS.get(time_range)
        if delta is not None:
            start = today - delta
            history = [e for e in history if e.date >= start]

        points = [
            TrendPointView(day=e.date, value=e.total_value, label=e.date.strftime("%m-%d"))
            for e in history
        ]
        points.append(TrendPointView(day=None, value=self._ledger.total_assets(), label="Now"))
        if len(points) < 2:
            return []
        return points
