"""Market dashboard service."""

import asyncio
import logging
from datetime import datetime, timedelta
from typing import Any, Awaitable, Optional

from alpha_tracker.config import Settings, get_settings
from alpha_tracker.core.notices import NoticeBoard
from alpha_tracker.core.timezone import now_local
from alpha_tracker.domain.models import MarketSnapshot
from alpha_tracker.providers import ResearchGateway
from alpha_tracker.repositories import StateRepository
from alpha_tracker.services.preference_service import PreferenceService

logger = logging.getLogger(__name__)


class MarketService:
    """
    Service for the market sentiment dashboard.

    The snapshot is assembled from four independent gateway calls. A failed
    part keeps what the dashboard already showed, so one bad answer never
    blanks it.
    """

    def __init__(
        self,
        state_repo: StateRepository,
        gateway: ResearchGateway,
        notices: NoticeBoard,
        preferences: PreferenceService,
        settings: Optional[Settings] = None,
    ):
        self._repo = state_repo
        self._gateway = gateway
        self._notices = notices
        self._preferences = preferences
        self._settings = settings or get_settings()
        self._snapshot: Optional[MarketSnapshot] = state_repo.load_market()

    @property
    def snapshot(self) -> Optional[MarketSnapshot]:
        return self._snapshot

    def is_stale(self, now: Optional[datetime] = None) -> bool:
        if self._snapshot is None or self._snapshot.last_updated is None:
            return True
        now = now or now_local()
        age = now - self._snapshot.last_updated
        return age > timedelta(hours=self._settings.market_refresh_hours)

    async def load_if_stale(self) -> MarketSnapshot:
        if self.is_stale():
            return await self.refresh_market()
        return self._snapshot

    async def refresh_market(self) -> MarketSnapshot:
        """
        Fetch indices, opportunities, limit-up stocks and capital flows concurrently.

        A part that fails keeps its value from the previous snapshot, or its
        empty default when there is none. When every part fails the previous
        snapshot is returned unchanged.
        """
        language = self._preferences.language
        previous = self._snapshot or MarketSnapshot()
        results = await asyncio.gather(
            self._part(
                "indices",
                self._gateway.fetch_market_indices(language),
                (previous.sentiment_score, previous.indices),
            ),
            self._part("opportunities", self._gateway.fetch_market_opportunities(language), previous.opportunities),
            self._part("limit-up", self._gateway.fetch_limit_up_stocks(language), previous.limit_up_stocks),
            self._part("capital", self._gateway.fetch_market_capital(language), previous.capital),
        )
        if self._snapshot is not None and not any(ok for _, ok in results):
            return self._snapshot

        (sentiment, index_list), opportunities, limit_ups, capital = (value for value, _ in results)
        self._snapshot = MarketSnapshot(
            sentiment_score=sentiment,
            indices=index_list,
            limit_up_stocks=limit_ups,
            opportunities=opportunities,
            capital=capital,
            last_updated=now_local(),
        )
        self._repo.save_market(self._snapshot)
        return self._snapshot

    async def _part(self, label: str, work: Awaitable[Any], fallback: Any) -> tuple[Any, bool]:
        try:
            return await work, True
        except Exception as exc:
            logger.warning("Market %s unavailable: %s", label, exc)
            self._notices.post(f"Market {label} unavailable: {exc}", level="warning")
            return fallback, False
