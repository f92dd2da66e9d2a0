"""Watchlist service: researched stocks and their categories."""

import asyncio
import logging
import uuid
from dataclasses import replace
from typing import Callable, Optional, Union

from alpha_tracker.core.exceptions import NotFoundError, ValidationError
from alpha_tracker.core.notices import NoticeBoard
from alpha_tracker.core.tasks import TaskQueue
from alpha_tracker.core.timezone import now_local
from alpha_tracker.domain.models import (
    IndustryInfo,
    NEUTRAL_SENTIMENT,
    ResearchStatus,
    StockAnalysis,
    StockCategory,
    WatchlistEntry,
)
from alpha_tracker.providers import ResearchGateway
from alpha_tracker.repositories import StateRepository
from alpha_tracker.services.preference_service import PreferenceService

logger = logging.getLogger(__name__)

WatchlistListener = Callable[[list[WatchlistEntry]], None]

CATEGORY_PRIORITY = {
    StockCategory.HOLDING: 4,
    StockCategory.STRONG: 3,
    StockCategory.MEDIUM: 2,
    StockCategory.NORMAL: 1,
}


class WatchlistService:
    """
    Service for the research watchlist.

    New stocks are inserted as pending placeholders and filled in when the
    research gateway answers. Listeners are notified after every change, which
    is how the ledger keeps its prices in step with the watchlist.
    """

    def __init__(
        self,
        state_repo: StateRepository,
        gateway: ResearchGateway,
        tasks: TaskQueue,
        notices: NoticeBoard,
        preferences: PreferenceService,
    ):
        self._repo = state_repo
        self._gateway = gateway
        self._tasks = tasks
        self._notices = notices
        self._preferences = preferences
        self._entries: list[WatchlistEntry] = state_repo.load_stocks()
        self._listeners: list[WatchlistListener] = []

    @property
    def entries(self) -> list[WatchlistEntry]:
        return list(self._entries)

    def subscribe(self, listener: WatchlistListener) -> None:
        self._listeners.append(listener)

    def get_entry(self, stock_id: str) -> WatchlistEntry:
        for entry in self._entries:
            if entry.stock_id == stock_id:
                return entry
        raise NotFoundError("Stock", stock_id)

    def sorted_entries(self) -> list[WatchlistEntry]:
        """Holdings first, then strong, medium, normal; newest update first within a category."""
        return sorted(
            self._entries,
            key=lambda e: (
                CATEGORY_PRIORITY.get(e.category, 0),
                e.last_updated.timestamp() if e.last_updated else 0.0,
            ),
            reverse=True,
        )

    def add_stock(self, name: str) -> tuple[WatchlistEntry, asyncio.Task]:
        """
        Insert a pending placeholder and request research for it.

        The placeholder is removed again, with a notice, if research fails.
        """
        name = (name or "").strip()
        if not name:
            raise ValidationError("Stock name is required")

        entry = WatchlistEntry(
            stock_id=str(uuid.uuid4()),
            name=name,
            category=StockCategory.NORMAL,
            status=ResearchStatus.PENDING,
            last_updated=now_local(),
            analysis=StockAnalysis(industry=IndustryInfo(sentiment_score=NEUTRAL_SENTIMENT)),
        )
        self._entries.insert(0, entry)
        self._changed()

        def on_success(analysis: StockAnalysis) -> None:
            target = self._find(entry.stock_id)
            if target is None:
                return
            self._merge(target, analysis)
            self._changed()

        def on_failure(error: Exception) -> None:
            self._entries = [e for e in self._entries if e.stock_id != entry.stock_id]
            self._notices.post(f"Failed to analyze {name}: {error}")
            self._changed()

        task = self._tasks.submit(
            f"watchlist:add:{name}",
            self._gateway.analyze_stock(name, self._preferences.language),
            on_success,
            on_failure,
        )
        return entry, task

    def refresh_stock(self, stock_id: str) -> asyncio.Task:
        """Re-research an entry; on failure the previous data is kept."""
        entry = self.get_entry(stock_id)
        name = entry.name
        entry.status = ResearchStatus.PENDING
        self._changed()

        def on_success(analysis: StockAnalysis) -> None:
            target = self._find(stock_id)
            if target is None:
                return
            self._merge(target, analysis)
            self._changed()

        def on_failure(error: Exception) -> None:
            target = self._find(stock_id)
            if target is not None:
                target.status = ResearchStatus.RESOLVED
                self._changed()
            self._notices.post(f"Failed to refresh {name}: {error}")

        return self._tasks.submit(
            f"watchlist:refresh:{name}",
            self._gateway.analyze_stock(name, self._preferences.language),
            on_success,
            on_failure,
        )

    def delete_stock(self, stock_id: str) -> None:
        self.get_entry(stock_id)
        self._entries = [e for e in self._entries if e.stock_id != stock_id]
        self._changed()

    def update_category(self, stock_id: str, category: Union[StockCategory, str]) -> WatchlistEntry:
        entry = self.get_entry(stock_id)
        entry.category = StockCategory(category)
        self._changed()
        return entry

    def pin_stock(self, stock_id: str) -> WatchlistEntry:
        """Pinning promotes an entry to the strong-interest category."""
        return self.update_category(stock_id, StockCategory.STRONG)

    def upsert_analysis(self, name: str, analysis: StockAnalysis) -> WatchlistEntry:
        """
        Merge research for a newly held stock.

        Updates the first entry whose name equals or contains `name`; otherwise
        inserts a new entry tagged as a holding.
        """
        for entry in self._entries:
            if entry.name == name or name in entry.name:
                self._merge(entry, analysis)
                self._changed()
                return entry

        entry = WatchlistEntry(
            stock_id=str(uuid.uuid4()),
            name=name,
            category=StockCategory.HOLDING,
            status=ResearchStatus.RESOLVED,
            last_updated=now_local(),
            analysis=replace(analysis),
        )
        self._entries.insert(0, entry)
        self._changed()
        return entry

    def apply_refreshed_analysis(self, name: str, analysis: StockAnalysis) -> int:
        """Merge research into every entry whose name matches `name` exactly."""
        matched = [e for e in self._entries if e.name == name]
        for entry in matched:
            self._merge(entry, analysis)
        if matched:
            self._changed()
        return len(matched)

    def _find(self, stock_id: str) -> Optional[WatchlistEntry]:
        return next((e for e in self._entries if e.stock_id == stock_id), None)

    @staticmethod
    def _merge(entry: WatchlistEntry, analysis: StockAnalysis) -> None:
        merged = replace(analysis)
        # Fields the gateway left out keep their previous values
        if merged.price is None:
            merged.price = entry.analysis.price
        if merged.financials is None:
            merged.financials = entry.analysis.financials
        entry.analysis = merged
        entry.status = ResearchStatus.RESOLVED
        entry.last_updated = now_local()

    def _changed(self) -> None:
        self._repo.save_stocks(self._entries)
        snapshot = list(self._entries)
        for listener in self._listeners:
            listener(snapshot)
