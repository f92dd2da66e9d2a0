"""Paper portfolio position and asset history models."""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from alpha_tracker.domain.models.enums import Market, Currency

POSITION_MARKETS = (Market.CN, Market.US, Market.HK)


def currency_for_market(market: Market) -> Currency:
    """Derive the trading currency of a market."""
    if market == Market.US:
        return Currency.USD
    if market == Market.HK:
        return Currency.HKD
    return Currency.CNY


@dataclass
class Position:
    """
    One holding in the simulated portfolio.

    cost_price is the weighted-average acquisition price; current_price is the
    last known quote (trade print, gateway refresh or watchlist sync).
    """

    position_id: str
    name: str
    code: str
    market: Market
    quantity: Decimal
    cost_price: Decimal
    current_price: Decimal
    currency: Optional[Currency] = None

    def __post_init__(self) -> None:
        if isinstance(self.market, str):
            self.market = Market(self.market)
        if self.currency is None:
            self.currency = currency_for_market(self.market)
        elif isinstance(self.currency, str):
            self.currency = Currency(self.currency)

    @property
    def market_value(self) -> Decimal:
        return self.quantity * self.current_price

    @property
    def cost_basis(self) -> Decimal:
        return self.quantity * self.cost_price


@dataclass(frozen=True)
class AssetHistoryEntry:
    """Immutable daily snapshot of total assets."""

    date: date
    timestamp: datetime
    total_value: Decimal

