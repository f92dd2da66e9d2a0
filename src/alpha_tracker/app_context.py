"""Application context for in-process service management.

Owns every store, the background task queue and the notice board, and wires
them together. The HTTP layer and the tests both go through this object, so
all mutations happen in one place.
"""

import logging
from typing import Optional

from alpha_tracker.config.settings import Settings, get_settings
from alpha_tracker.core.notices import NoticeBoard
from alpha_tracker.core.tasks import TaskQueue
from alpha_tracker.domain.models import Language
from alpha_tracker.providers import ResearchGateway, create_research_gateway
from alpha_tracker.repositories import StateRepository, StateStore
from alpha_tracker.repositories.sqlalchemy import SqlAlchemyStateStore, dispose_engine, init_db
from alpha_tracker.services import (
    AnalysisService,
    JournalService,
    LedgerService,
    MarketService,
    PreferenceService,
    TopicService,
    TradingService,
    WatchlistService,
)

logger = logging.getLogger(__name__)


class AppContext:
    """
    Application context providing in-process access to all services.

    The persistence store and research gateway are injectable; by default the
    SQLAlchemy store is used, and the gateway is chosen from the settings.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        store: Optional[StateStore] = None,
        gateway: Optional[ResearchGateway] = None,
    ):
        self._settings = settings
        self._store = store
        self._gateway = gateway
        self._owns_database = False
        self._initialized = False

        self._tasks: Optional[TaskQueue] = None
        self._notices: Optional[NoticeBoard] = None
        self._preferences: Optional[PreferenceService] = None
        self._ledger: Optional[LedgerService] = None
        self._analysis: Optional[AnalysisService] = None
        self._watchlist: Optional[WatchlistService] = None
        self._trading: Optional[TradingService] = None
        self._topics: Optional[TopicService] = None
        self._journal: Optional[JournalService] = None
        self._market: Optional[MarketService] = None

    def initialize(self) -> None:
        """Load every collection, connect the watchlist to the ledger and take today's snapshot."""
        settings = self._settings or get_settings()
        if self._store is None:
            self._store = SqlAlchemyStateStore(init_db())
            self._owns_database = True
        if self._gateway is None:
            self._gateway = create_research_gateway(settings)

        repo = StateRepository(self._store)
        self._tasks = TaskQueue()
        self._notices = NoticeBoard()
        self._preferences = PreferenceService(repo, Language(settings.default_language))
        self._ledger = LedgerService(repo, settings)
        self._analysis = AnalysisService(self._ledger)
        self._watchlist = WatchlistService(repo, self._gateway, self._tasks, self._notices, self._preferences)
        self._trading = TradingService(self._ledger, self._watchlist, self._gateway, self._tasks, self._preferences)
        self._topics = TopicService(repo, self._gateway, self._tasks, self._notices, self._preferences)
        self._journal = JournalService(repo, self._gateway, self._tasks, self._preferences)
        self._market = MarketService(repo, self._gateway, self._notices, self._preferences, settings)

        # Watchlist prices flow into the ledger, never the other way round
        self._watchlist.subscribe(self._ledger.sync_from_watchlist)
        self._ledger.sync_from_watchlist(self._watchlist.entries)
        self._analysis.record_daily_history()

        self._initialized = True
        logger.info("Application context initialized (gateway=%s)", type(self._gateway).__name__)

    @property
    def is_initialized(self) -> bool:
        """Check if context is initialized."""
        return self._initialized

    def _require(self, service):
        if not self._initialized:
            raise RuntimeError("AppContext.initialize() has not been called")
        return service

    @property
    def tasks(self) -> TaskQueue:
        return self._require(self._tasks)

    @property
    def notices(self) -> NoticeBoard:
        return self._require(self._notices)

    @property
    def preferences(self) -> PreferenceService:
        return self._require(self._preferences)

    @property
    def ledger(self) -> LedgerService:
        return self._require(self._ledger)

    @property
    def analysis(self) -> AnalysisService:
        return self._require(self._analysis)

    @property
    def watchlist(self) -> WatchlistService:
        return self._require(self._watchlist)

    @property
    def trading(self) -> TradingService:
        return self._require(self._trading)

    @property
    def topics(self) -> TopicService:
        return self._require(self._topics)

    @property
    def journal(self) -> JournalService:
        return self._require(self._journal)

    @property
    def market(self) -> MarketService:
        return self._require(self._market)

    async def close(self) -> None:
        """Cancel background work still in flight and release the database."""
        if self._tasks is not None:
            await self._tasks.shutdown()
        if self._owns_database:
            dispose_engine()


# Global application context (one per process)
_app_context: Optional[AppContext] = None


def get_app_context() -> AppContext:
    """Get or create the global application context."""
    global _app_context
    if _app_context is None:
        _app_context = AppContext()
    return _app_context


def set_app_context(context: Optional[AppContext]) -> None:
    """Set the global application context."""
    global _app_context
    _app_context = context
