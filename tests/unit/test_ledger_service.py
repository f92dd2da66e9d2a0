"""
Unit tests for LedgerService.

Tests cover:
- Opening positions (cash debit, currency derivation, validation)
- Buy/sell execution with weighted-average cost
- Sell-to-zero removal and oversell handling
- Cash reconciliation across trade sequences
- Price application and watchlist synchronisation
- Cash and total-asset adjustments
- Market inference from stock codes
- Persistence of every mutation
"""

from decimal import Decimal

import pytest

from alpha_tracker.core.exceptions import InsufficientSharesError, NotFoundError, ValidationError
from alpha_tracker.domain.models import (
    Currency,
    Market,
    StockAnalysis,
    TradeType,
    WatchlistEntry,
)
from alpha_tracker.repositories import StateRepository
from alpha_tracker.services import LedgerService, infer_market_from_code
from tests.conftest import FIXED_TODAY, make_settings


def _entry(name: str, price) -> WatchlistEntry:
    return WatchlistEntry(
        stock_id=f"id-{name}",
        name=name,
        analysis=StockAnalysis(price=Decimal(str(price)) if price is not None else None),
    )


# =============================================================================
# OPEN POSITION TESTS
# =============================================================================


class TestOpenPosition:
    """Tests for opening new positions."""

    def test_open_position_debits_cash(self, ledger_service: LedgerService):
        """
        GIVEN a ledger with 100000 cash
        WHEN I open 100 Foo @ 10.00
        THEN cash is 99000 and the position costs and is valued at 10.00
        """
        position = ledger_service.open_position("Foo", "F1", "CN", Decimal("10.00"), Decimal("100"))

        assert ledger_service.cash_balance == Decimal("99000")
        assert position.quantity == Decimal("100")
        assert position.cost_price == Decimal("10.00")
        assert position.current_price == Decimal("10.00")
        assert ledger_service.positions == [position]

    @pytest.mark.parametrize(
        "market,currency",
        [("CN", Currency.CNY), ("US", Currency.USD), ("HK", Currency.HKD)],
    )
    def test_currency_derived_from_market(self, ledger_service, market, currency):
        """
        GIVEN a market
        WHEN a position is opened there
        THEN its currency follows the market
        """
        position = ledger_service.open_position("Foo", "F1", market, 1, 1)

        assert position.market == Market(market)
        assert position.currency == currency

    def test_lowercase_market_accepted(self, ledger_service):
        position = ledger_service.open_position("Foo", "F1", "us", 1, 1)
        assert position.market == Market.US

    def test_other_market_rejected(self, ledger_service):
        """
        GIVEN the OTHER market, which only the watchlist uses
        WHEN I try to open a position in it
        THEN ValidationError is raised and cash is untouched
        """
        with pytest.raises(ValidationError):
            ledger_service.open_position("Foo", "F1", Market.OTHER, 10, 1)
        assert ledger_service.cash_balance == Decimal("100000")

    def test_unknown_market_rejected(self, ledger_service):
        with pytest.raises(ValidationError):
            ledger_service.open_position("Foo", "F1", "JP", 10, 1)

    def test_blank_name_rejected(self, ledger_service):
        with pytest.raises(ValidationError):
            ledger_service.open_position("  ", "F1", "CN", 10, 1)

    @pytest.mark.parametrize("price,quantity", [(0, 10), (-1, 10), (10, 0), (10, -5)])
    def test_strict_validation_rejects_non_positive(self, ledger_service, price, quantity):
        """
        GIVEN strict trade validation (the default)
        WHEN price or quantity is zero or negative
        THEN ValidationError is raised and nothing is recorded
        """
        with pytest.raises(ValidationError):
            ledger_service.open_position("Foo", "F1", "CN", price, quantity)

        assert ledger_service.positions == []
        assert ledger_service.cash_balance == Decimal("100000")

    def test_permissive_validation_accepts_zero_price(self, state_repo):
        """
        GIVEN permissive trade validation
        WHEN I open a position at price 0
        THEN it is recorded and cash is unchanged
        """
        ledger = LedgerService(state_repo, make_settings(trade_validation="permissive"))

        ledger.open_position("Gift", "G1", "CN", 0, 100)

        assert len(ledger.positions) == 1
        assert ledger.cash_balance == Decimal("100000")

    def test_non_numeric_price_rejected(self, ledger_service):
        with pytest.raises(ValidationError):
            ledger_service.open_position("Foo", "F1", "CN", "abc", 1)


# =============================================================================
# TRADE EXECUTION TESTS
# =============================================================================


class TestExecuteTrade:
    """Tests for buy/sell execution."""

    def test_end_to_end_scenario(self, ledger_service: LedgerService):
        """
        GIVEN 100000 cash and no positions
        WHEN I open 100 Foo @ 10, buy 100 @ 12, then sell 200 @ 15
        THEN cash goes 99000 -> 97800 -> 100800, cost averages to 11
             and the position is removed after the sell
        """
        position = ledger_service.open_position("Foo", "F1", "CN", Decimal("10.00"), Decimal("100"))
        assert ledger_service.cash_balance == Decimal("99000")

        updated = ledger_service.execute_trade(position.position_id, TradeType.BUY, Decimal("100"), Decimal("12.00"))
        assert ledger_service.cash_balance == Decimal("97800")
        assert updated.quantity == Decimal("200")
        assert updated.cost_price == Decimal("11")
        assert updated.current_price == Decimal("12.00")

        result = ledger_service.execute_trade(position.position_id, TradeType.SELL, Decimal("200"), Decimal("15.00"))
        assert result is None
        assert ledger_service.cash_balance == Decimal("100800")
        assert ledger_service.positions == []

    def test_weighted_average_cost_identity(self, ledger_service):
        """
        GIVEN a position of q0 @ c0
        WHEN I buy q @ p
        THEN the new cost is (c0*q0 + p*q) / (q0 + q)
        """
        q0, c0, q, p = Decimal("30"), Decimal("7.25"), Decimal("45"), Decimal("9.10")
        position = ledger_service.open_position("Foo", "F1", "CN", c0, q0)

        updated = ledger_service.execute_trade(position.position_id, "buy", q, p)

        assert updated.cost_price == (c0 * q0 + p * q) / (q0 + q)
        assert updated.quantity == q0 + q

    def test_sell_keeps_cost_and_updates_price(self, ledger_service):
        """
        GIVEN 100 Foo @ 10
        WHEN I sell 40 @ 13
        THEN 60 remain at cost 10, valued at 13, and cash is credited 520
        """
        position = ledger_service.open_position("Foo", "F1", "CN", 10, 100)

        updated = ledger_service.execute_trade(position.position_id, TradeType.SELL, 40, 13)

        assert updated.quantity == Decimal("60")
        assert updated.cost_price == Decimal("10")
        assert updated.current_price == Decimal("13")
        assert ledger_service.cash_balance == Decimal("99000") + Decimal("520")

    def test_oversell_clamps_to_zero_and_removes(self, ledger_service):
        """
        GIVEN 100 Foo and the clamp oversell policy
        WHEN I sell 110
        THEN the position is removed and the full notional is credited
        """
        position = ledger_service.open_position("Foo", "F1", "CN", 10, 100)

        result = ledger_service.execute_trade(position.position_id, TradeType.SELL, 110, 10)

        assert result is None
        assert ledger_service.positions == []
        assert ledger_service.cash_balance == Decimal("99000") + Decimal("1100")

    def test_oversell_rejected_under_reject_policy(self, state_repo):
        """
        GIVEN the reject oversell policy
        WHEN I sell more than I hold
        THEN InsufficientSharesError is raised and nothing changes
        """
        ledger = LedgerService(state_repo, make_settings(oversell_policy="reject"))
        position = ledger.open_position("Foo", "F1", "CN", 10, 100)

        with pytest.raises(InsufficientSharesError):
            ledger.execute_trade(position.position_id, TradeType.SELL, 110, 10)

        assert ledger.get_position(position.position_id).quantity == Decimal("100")
        assert ledger.cash_balance == Decimal("99000")

    def test_unknown_position_raises_not_found(self, ledger_service):
        with pytest.raises(NotFoundError):
            ledger_service.execute_trade("missing", TradeType.BUY, 1, 1)

    def test_strict_validation_on_trade(self, ledger_service):
        position = ledger_service.open_position("Foo", "F1", "CN", 10, 100)

        with pytest.raises(ValidationError):
            ledger_service.execute_trade(position.position_id, TradeType.BUY, 0, 10)
        with pytest.raises(ValidationError):
            ledger_service.execute_trade(position.position_id, TradeType.SELL, 10, -1)

    def test_cash_reconciliation_over_sequence(self, ledger_service):
        """
        GIVEN a mix of opens, buys and sells
        WHEN they are applied in order
        THEN cash equals initial - buy notionals + sell notionals exactly
        """
        a = ledger_service.open_position("A", "600001", "CN", Decimal("3.33"), Decimal("300"))
        b = ledger_service.open_position("B", "AAPL", "US", Decimal("185.55"), Decimal("7"))
        ledger_service.execute_trade(a.position_id, TradeType.BUY, Decimal("100"), Decimal("3.41"))
        ledger_service.execute_trade(b.position_id, TradeType.SELL, Decimal("3"), Decimal("190.10"))
        ledger_service.execute_trade(a.position_id, TradeType.SELL, Decimal("400"), Decimal("3.05"))

        expected = (
            Decimal("100000")
            - Decimal("3.33") * 300
            - Decimal("185.55") * 7
            - Decimal("3.41") * 100
            + Decimal("190.10") * 3
            + Decimal("3.05") * 400
        )
        assert ledger_service.cash_balance == expected
        assert [p.name for p in ledger_service.positions] == ["B"]


# =============================================================================
# PRICE UPDATE TESTS
# =============================================================================


class TestPriceUpdates:
    """Tests for gateway price application and watchlist sync."""

    def test_apply_position_price_ignores_unusable(self, ledger_service):
        position = ledger_service.open_position("Foo", "F1", "CN", 10, 100)

        assert ledger_service.apply_position_price(position.position_id, None) is False
        assert ledger_service.apply_position_price(position.position_id, Decimal("0")) is False
        assert ledger_service.apply_position_price(position.position_id, Decimal("12")) is True
        assert ledger_service.get_position(position.position_id).current_price == Decimal("12")

    def test_apply_position_price_after_close_is_ignored(self, ledger_service):
        position = ledger_service.open_position("Foo", "F1", "CN", 10, 100)
        ledger_service.execute_trade(position.position_id, TradeType.SELL, 100, 10)

        assert ledger_service.apply_position_price(position.position_id, Decimal("12")) is False

    def test_sync_from_watchlist_exact_name_only(self, ledger_service):
        """
        GIVEN positions Foo and FooBar
        WHEN the watchlist carries a new price for Foo only
        THEN only Foo takes it; a partial name match is not enough
        """
        foo = ledger_service.open_position("Foo", "F1", "CN", 10, 100)
        foobar = ledger_service.open_position("FooBar", "F2", "CN", 20, 10)

        changed = ledger_service.sync_from_watchlist([_entry("Foo", "11.5"), _entry("Foo Holdings", "99")])

        assert changed == 1
        assert ledger_service.get_position(foo.position_id).current_price == Decimal("11.5")
        assert ledger_service.get_position(foobar.position_id).current_price == Decimal("20")

    def test_sync_skips_missing_or_equal_prices(self, ledger_service, state_store):
        """
        GIVEN a position whose price already matches the watchlist
        WHEN syncing with that entry and one without a price
        THEN nothing changes and positions are not re-saved
        """
        ledger_service.open_position("Foo", "F1", "CN", 10, 100)
        ledger_service.open_position("Bar", "B1", "CN", 5, 100)
        saves_before = len(state_store.saves)

        changed = ledger_service.sync_from_watchlist([_entry("Foo", "10"), _entry("Bar", None)])

        assert changed == 0
        assert len(state_store.saves) == saves_before


# =============================================================================
# CASH AND SNAPSHOT TESTS
# =============================================================================


class TestCashAndSnapshots:
    """Tests for cash adjustments and daily snapshots."""

    def test_set_total_assets_derives_cash(self, ledger_service):
        """
        GIVEN positions worth 1000
        WHEN total assets are set to 50000
        THEN cash becomes 49000
        """
        ledger_service.open_position("Foo", "F1", "CN", 10, 100)

        ledger_service.set_total_assets(50000)

        assert ledger_service.cash_balance == Decimal("49000")
        assert ledger_service.total_assets() == Decimal("50000")

    def test_set_cash_balance_can_go_negative(self, ledger_service):
        ledger_service.set_cash_balance("-250.5")
        assert ledger_service.cash_balance == Decimal("-250.5")

    def test_record_snapshot_first_write_wins(self, ledger_service):
        first = ledger_service.record_snapshot(FIXED_TODAY, Decimal("100000"))
        second = ledger_service.record_snapshot(FIXED_TODAY, Decimal("123"))

        assert first is not None
        assert second is None
        assert [e.total_value for e in ledger_service.history] == [Decimal("100000")]


# =============================================================================
# PERSISTENCE TESTS
# =============================================================================


class TestLedgerPersistence:
    """Every mutation is saved and reloads into a fresh ledger."""

    def test_state_survives_reload(self, app_settings, state_store):
        ledger = LedgerService(StateRepository(state_store), app_settings)
        position = ledger.open_position("Foo", "F1", "HK", Decimal("10.5"), Decimal("100"))
        ledger.execute_trade(position.position_id, TradeType.BUY, 50, Decimal("11.25"))
        ledger.record_snapshot(FIXED_TODAY, ledger.total_assets())

        reloaded = LedgerService(StateRepository(state_store), app_settings)

        assert reloaded.cash_balance == ledger.cash_balance
        assert len(reloaded.positions) == 1
        restored = reloaded.positions[0]
        assert restored.currency == Currency.HKD
        assert restored.quantity == Decimal("150")
        assert restored.cost_price == ledger.positions[0].cost_price
        assert reloaded.history[0].date == FIXED_TODAY

    def test_initial_cash_comes_from_settings(self, state_repo):
        ledger = LedgerService(state_repo, make_settings(initial_cash=Decimal("5000")))
        assert ledger.cash_balance == Decimal("5000")


# =============================================================================
# MARKET INFERENCE TESTS
# =============================================================================


class TestInferMarket:
    @pytest.mark.parametrize(
        "code,market",
        [
            ("00700", Market.HK),
            ("600519", Market.CN),
            ("AAPL", Market.US),
            ("1234567", Market.US),
            (" 300750 ", Market.CN),
            ("", None),
        ],
    )
    def test_infer_market_from_code(self, code, market):
        assert infer_market_from_code(code) == market
