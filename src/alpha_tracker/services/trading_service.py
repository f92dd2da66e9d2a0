"""Trading service: ledger operations that call out to the research gateway."""

import asyncio
import logging
from typing import Union

from alpha_tracker.core.tasks import TaskQueue
from alpha_tracker.domain.models import Market, Position, StockAnalysis
from alpha_tracker.domain.views import RefreshReport
from alpha_tracker.providers import ResearchGateway
from alpha_tracker.services.ledger_service import LedgerService, Number
from alpha_tracker.services.preference_service import PreferenceService
from alpha_tracker.services.watchlist_service import WatchlistService

logger = logging.getLogger(__name__)


class TradingService:
    """
    Coordinates the ledger with background research.

    Opening a position triggers research on the stock; refreshing prices fans
    out one research call per position and waits for all of them to settle.
    Research failures here are logged only.
    """

    def __init__(
        self,
        ledger: LedgerService,
        watchlist: WatchlistService,
        gateway: ResearchGateway,
        tasks: TaskQueue,
        preferences: PreferenceService,
    ):
        self._ledger = ledger
        self._watchlist = watchlist
        self._gateway = gateway
        self._tasks = tasks
        self._preferences = preferences

    def open_position(
        self,
        name: str,
        code: str,
        market: Union[Market, str],
        entry_price: Number,
        quantity: Number,
    ) -> tuple[Position, asyncio.Task]:
        """Open the position synchronously, then research it in the background."""
        position = self._ledger.open_position(name, code, market, entry_price, quantity)
        position_id = position.position_id

        def on_success(analysis: StockAnalysis) -> None:
            self._ledger.apply_position_price(position_id, analysis.usable_price)
            self._watchlist.upsert_analysis(position.name, analysis)

        task = self._tasks.submit(
            f"ledger:open:{position.name}",
            self._gateway.analyze_stock(position.name, self._preferences.language),
            on_success,
        )
        return position, task

    async def refresh_prices(self) -> RefreshReport:
        """Research every position concurrently; returns once all calls have settled."""
        positions = self._ledger.positions
        report = RefreshReport(requested=len(positions))
        tasks = [self._submit_refresh(p, report) for p in positions]
        await self._tasks.settle(tasks)
        logger.info("Price refresh finished: %d ok, %d failed", report.succeeded, report.failed)
        return report

    def _submit_refresh(self, position: Position, report: RefreshReport) -> asyncio.Task:
        position_id, name = position.position_id, position.name

        def on_success(analysis: StockAnalysis) -> None:
            report.succeeded += 1
            self._ledger.apply_position_price(position_id, analysis.usable_price)
            self._watchlist.apply_refreshed_analysis(name, analysis)

        def on_failure(error: Exception) -> None:
            report.failed += 1
            report.failures.append(name)

        return self._tasks.submit(
            f"ledger:refresh:{name}",
            self._gateway.analyze_stock(name, self._preferences.language),
            on_success,
            on_failure,
        )

