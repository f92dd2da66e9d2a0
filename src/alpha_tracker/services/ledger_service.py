"""Ledger service for the simulated portfolio."""

import logging
import re
import uuid
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Iterable, Optional, Union

from alpha_tracker.config import Settings, get_settings
from alpha_tracker.core.exceptions import InsufficientSharesError, NotFoundError, ValidationError
from alpha_tracker.core.timezone import now_local
from alpha_tracker.domain.models import (
    AssetHistoryEntry,
    Market,
    POSITION_MARKETS,
    Position,
    TradeType,
    WatchlistEntry,
)
from alpha_tracker.repositories import StateRepository

logger = logging.getLogger(__name__)

Number = Union[Decimal, int, float, str]

_HK_CODE = re.compile(r"^\d{5}$")
_CN_CODE = re.compile(r"^\d{6}$")


def infer_market_from_code(code: str) -> Optional[Market]:
    """
    Guess the listing market from a stock code.

    Five digits is a Hong Kong code, six digits an A-share code, anything
    else is treated as a US ticker.
    """
    code = (code or "").strip()
    if not code:
        return None
    if _HK_CODE.match(code):
        return Market.HK
    if _CN_CODE.match(code):
        return Market.CN
    return Market.US


def _to_decimal(value: Number, field_name: str) -> Decimal:
    try:
        return value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError) as exc:
        raise ValidationError(f"{field_name} must be a number") from exc


class LedgerService:
    """
    Service for the paper-trading ledger.

    Owns positions, the cash balance and the daily asset history. Every
    mutation is persisted immediately as a full overwrite of the collection.
    """

    def __init__(self, state_repo: StateRepository, settings: Optional[Settings] = None):
        self._repo = state_repo
        self._settings = settings or get_settings()
        self._positions: list[Position] = state_repo.load_positions()
        self._cash: Decimal = state_repo.load_cash(self._settings.initial_cash)
        self._history: list[AssetHistoryEntry] = state_repo.load_history()

    @property
    def positions(self) -> list[Position]:
        return list(self._positions)

    @property
    def cash_balance(self) -> Decimal:
        return self._cash

    @property
    def history(self) -> list[AssetHistoryEntry]:
        return list(self._history)

    def get_position(self, position_id: str) -> Position:
        """Get position by ID."""
        for position in self._positions:
            if position.position_id == position_id:
                return position
        raise NotFoundError("Position", position_id)

    def market_value(self) -> Decimal:
        return sum((p.market_value for p in self._positions), Decimal("0"))

    def total_assets(self) -> Decimal:
        return self._cash + self.market_value()

    def open_position(
        self,
        name: str,
        code: str,
        market: Union[Market, str],
        entry_price: Number,
        quantity: Number,
    ) -> Position:
        """
        Open a new position and pay for it from cash.

        Cost and current price both start at the entry price; the currency is
        derived from the market.
        """
        name = (name or "").strip()
        if not name:
            raise ValidationError("Position name is required")
        try:
            market = Market(market.upper() if isinstance(market, str) else market)
        except ValueError as exc:
            raise ValidationError(f"Unsupported market: {market}") from exc
        if market not in POSITION_MARKETS:
            raise ValidationError(f"Positions must be in one of CN, US or HK, got {market.value}")

        price = _to_decimal(entry_price, "Entry price")
        qty = _to_decimal(quantity, "Quantity")
        self._validate_amounts(price, qty)

        position = Position(
            position_id=str(uuid.uuid4()),
            name=name,
            code=(code or "").strip(),
            market=market,
            quantity=qty,
            cost_price=price,
            current_price=price,
        )
        self._cash -= price * qty
        self._positions.append(position)
        self._persist()
        logger.info("Opened position %s: %s @ %s", name, qty, price)
        return position

    def execute_trade(
        self,
        position_id: str,
        trade_type: Union[TradeType, str],
        quantity: Number,
        price: Number,
    ) -> Optional[Position]:
        """
        Buy into or sell out of an existing position.

        Buys recompute the weighted-average cost; sells leave the cost
        untouched. Both set the current price to the execution price. The
        position is removed when a sell takes its quantity to zero, in which
        case None is returned.
        """
        position = self.get_position(position_id)
        trade_type = TradeType(trade_type)
        qty = _to_decimal(quantity, "Quantity")
        px = _to_decimal(price, "Price")
        self._validate_amounts(px, qty)

        amount = px * qty
        if trade_type == TradeType.BUY:
            new_quantity = position.quantity + qty
            if new_quantity != 0:
                position.cost_price = (position.cost_price * position.quantity + amount) / new_quantity
            position.quantity = new_quantity
            self._cash -= amount
        else:
            if qty > position.quantity and self._settings.oversell_policy == "reject":
                raise InsufficientSharesError(position.name, str(qty), str(position.quantity))
            position.quantity = max(Decimal("0"), position.quantity - qty)
            self._cash += amount
        position.current_price = px

        removed = position.quantity <= 0
        if removed:
            self._positions = [p for p in self._positions if p.position_id != position_id]
            logger.info("Closed position %s", position.name)
        self._persist()
        return None if removed else position

    def apply_position_price(self, position_id: str, price: Optional[Decimal]) -> bool:
        """Update one position's price; a position closed meanwhile is ignored."""
        if price is None or price <= 0:
            return False
        for position in self._positions:
            if position.position_id == position_id:
                position.current_price = price
                self._save_positions()
                return True
        return False

    def sync_from_watchlist(self, entries: Iterable[WatchlistEntry]) -> int:
        """
        Copy watchlist prices onto positions with exactly the same name.

        Only prices that are present and differ from the position's current
        price are applied. Positions are saved only when something changed.
        """
        prices = {entry.name: entry.price for entry in entries if entry.price}
        changed = 0
        for position in self._positions:
            price = prices.get(position.name)
            if price and price != position.current_price:
                position.current_price = price
                changed += 1
        if changed:
            logger.debug("Synced %d position prices from watchlist", changed)
            self._save_positions()
        return changed

    def set_cash_balance(self, amount: Number) -> Decimal:
        self._cash = _to_decimal(amount, "Cash balance")
        self._repo.save_cash(self._cash)
        return self._cash

    def set_total_assets(self, total: Number) -> Decimal:
        """Set cash so that cash plus market value equals `total`."""
        total = _to_decimal(total, "Total assets")
        return self.set_cash_balance(total - self.market_value())

    def record_snapshot(self, day: date, total_value: Decimal) -> Optional[AssetHistoryEntry]:
        """Append a history entry for `day` unless one already exists."""
        if any(entry.date == day for entry in self._history):
            return None
        entry = AssetHistoryEntry(date=day, timestamp=now_local(), total_value=total_value)
        self._history.append(entry)
        self._repo.save_history(self._history)
        logger.info("Recorded asset snapshot for %s: %s", day.isoformat(), total_value)
        return entry

    def _validate_amounts(self, price: Decimal, quantity: Decimal) -> None:
        if self._settings.trade_validation != "strict":
            return
        if price <= 0:
            raise ValidationError("Price must be positive")
        if quantity <= 0:
            raise ValidationError("Quantity must be positive")

    def _save_positions(self) -> None:
        self._repo.save_positions(self._positions)

    def _persist(self) -> None:
        self._repo.save_positions(self._positions)
        self._repo.save_cash(self._cash)
