"""
Pytest configuration and fixtures for alpha tracker tests.

This module provides:
- Settings isolated from the environment
- An in-memory state store and in-memory SQLite database fixtures
- Deterministic and failing research gateways
- Service fixtures sharing one task queue and notice board
- A FastAPI test client wired to an injected application context
"""

import json
from copy import deepcopy
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Any, Iterable, Optional

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import StaticPool, create_engine
from sqlalchemy.orm import sessionmaker

from alpha_tracker.app_context import AppContext, set_app_context
from alpha_tracker.config.settings import Settings, reset_settings, set_settings
from alpha_tracker.core import GatewayError, NoticeBoard, TaskQueue
from alpha_tracker.domain.models import (
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
)
from alpha_tracker.main import app
from alpha_tracker.repositories import StateRepository
from alpha_tracker.repositories.sqlalchemy import Base, SqlAlchemyStateStore
# Import ORM models to register them with Base before creating tables
from alpha_tracker.repositories.sqlalchemy import orm_models  # noqa: F401
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

FIXED_TODAY = date(2024, 6, 15)


# =============================================================================
# SETTINGS
# =============================================================================


def make_settings(**overrides: Any) -> Settings:
    """Settings that ignore .env and the process environment defaults that matter."""
    values = {
        "database_url": "sqlite://",
        "initial_cash": Decimal("100000"),
        "trade_validation": "strict",
        "oversell_policy": "clamp",
        "timezone": "UTC",
        "default_language": "zh",
        "openai_api_key": None,
        "market_refresh_hours": 4,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def app_settings() -> Settings:
    """Install default test settings globally for the duration of a test."""
    settings = make_settings()
    set_settings(settings)
    yield settings
    reset_settings()


# =============================================================================
# PERSISTENCE FIXTURES
# =============================================================================


class InMemoryStateStore:
    """
    Dict-backed StateStore.

    Values go through a JSON round trip on save so tests catch anything the
    real store could not serialise.
    """

    def __init__(self):
        self.data: dict[str, Any] = {}
        self.saves: list[str] = []

    def load(self, key: str, default: Any) -> Any:
        if key not in self.data:
            return default
        return deepcopy(self.data[key])

    def save(self, key: str, value: Any) -> None:
        self.data[key] = json.loads(json.dumps(value))
        self.saves.append(key)


@pytest.fixture
def state_store() -> InMemoryStateStore:
    return InMemoryStateStore()


@pytest.fixture
def state_repo(state_store) -> StateRepository:
    return StateRepository(state_store)


@pytest.fixture(scope="function")
def test_engine():
    """Create test database engine with shared in-memory SQLite."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def sqlite_store(test_engine) -> SqlAlchemyStateStore:
    """Provide a SqlAlchemyStateStore on the in-memory database."""
    return SqlAlchemyStateStore(sessionmaker(autocommit=False, autoflush=False, bind=test_engine))


# =============================================================================
# RESEARCH GATEWAY FIXTURES
# =============================================================================


class DeterministicGateway:
    """
    Research gateway with fixed answers and no randomness.

    Any name, keyword or note listed in `failing` raises GatewayError, as do
    the market parts named there ("indices", "opportunities", "limit-up", "capital").
    """

    DEFAULT_PRICES = {
        "Foo": Decimal("10.50"),
        "贵州茅台": Decimal("1688.00"),
        "Apple": Decimal("185.50"),
    }
    DEFAULT_INDUSTRIES = {
        "Foo": "Chemicals",
        "贵州茅台": "白酒",
        "Apple": "Consumer Electronics",
    }

    def __init__(
        self,
        prices: Optional[dict[str, Optional[Decimal]]] = None,
        industries: Optional[dict[str, str]] = None,
        failing: Iterable[str] = (),
        market_sentiment: float = 7.5,
    ):
        self.prices = dict(self.DEFAULT_PRICES if prices is None else prices)
        self.industries = dict(self.DEFAULT_INDUSTRIES if industries is None else industries)
        self.failing = set(failing)
        self.market_sentiment = market_sentiment
        self.financials: dict[str, Financials] = {}
        self.calls: list[tuple[str, str, Language]] = []
        self._topic_versions: dict[str, int] = {}

    def _check(self, kind: str, key: str, language: Language) -> None:
        self.calls.append((kind, key, language))
        if key in self.failing:
            raise GatewayError(f"Research failed for {key}")

    async def analyze_stock(self, name: str, language: Language) -> StockAnalysis:
        self._check("stock", name, language)
        return StockAnalysis(
            market=Market.CN,
            price=self.prices.get(name),
            change_percent=1.2,
            main_business=f"{name} business",
            industry=IndustryInfo(name=self.industries.get(name, ""), sentiment_score=7.0),
            financials=self.financials.get(name),
        )

    async def analyze_topic(self, keyword: str, language: Language) -> TopicAnalysis:
        self._check("topic", keyword, language)
        version = self._topic_versions.get(keyword, 0) + 1
        self._topic_versions[keyword] = version
        return TopicAnalysis(
            summary=f"{keyword} summary v{version}",
            sentiment_score=6.0,
            catalyst=f"{keyword} catalyst",
            related_stocks=["Foo"],
        )

    async def analyze_reflection(self, entry: str, language: Language) -> ReflectionAnalysis:
        self._check("reflection", entry, language)
        return ReflectionAnalysis(root_cause=f"cause of {entry}", prevention="follow the plan")

    async def summarize_reflections(self, entries: list[str], language: Language) -> ReflectionSummary:
        self._check("summary", "summary", language)
        return ReflectionSummary(content=f"{len(entries)} notes reviewed", key_points=list(entries))

    async def fetch_market_indices(self, language: Language) -> tuple[float, list[MarketIndex]]:
        self._check("market", "indices", language)
        return self.market_sentiment, [MarketIndex(name="上证指数", value=3000.0, change=15.0, change_percent=0.5)]

    async def fetch_market_opportunities(self, language: Language) -> list[MarketOpportunity]:
        self._check("market", "opportunities", language)
        return [
            MarketOpportunity(
                type="Sector",
                title="AI",
                description="Compute demand",
                stocks=[OpportunityStock(name="Foo", code="600001", reason="leader")],
            )
        ]

    async def fetch_limit_up_stocks(self, language: Language) -> list[LimitUpStock]:
        self._check("market", "limit-up", language)
        return [LimitUpStock(name="Bar", code="000002", time="09:31", reason="earnings")]

    async def fetch_market_capital(self, language: Language) -> CapitalFlow:
        self._check("market", "capital", language)
        return CapitalFlow(
            latest=CapitalLatest(
                northbound_5day_net_inflow=120.5, margin_balance=15000.0, volume=9500.0, account_growth=1.2
            ),
            trend=[CapitalTrendPoint(date="06-14", volume=9500.0, margin_balance=15000.0, northbound=30.0, etf_inflow=10.0)],
            summary="Inflows steady",
        )


class FailingGateway:
    """Research gateway that always raises GatewayError."""

    async def analyze_stock(self, name, language):
        raise GatewayError("Network unavailable")

    async def analyze_topic(self, keyword, language):
        raise GatewayError("Network unavailable")

    async def analyze_reflection(self, entry, language):
        raise GatewayError("Network unavailable")

    async def summarize_reflections(self, entries, language):
        raise GatewayError("Network unavailable")

    async def fetch_market_indices(self, language):
        raise GatewayError("Network unavailable")

    async def fetch_market_opportunities(self, language):
        raise GatewayError("Network unavailable")

    async def fetch_limit_up_stocks(self, language):
        raise GatewayError("Network unavailable")

    async def fetch_market_capital(self, language):
        raise GatewayError("Network unavailable")


@pytest.fixture
def gateway() -> DeterministicGateway:
    return DeterministicGateway()


@pytest.fixture
def failing_gateway() -> FailingGateway:
    return FailingGateway()


# =============================================================================
# SERVICE FIXTURES
# =============================================================================


@pytest.fixture
def task_queue() -> TaskQueue:
    return TaskQueue()


@pytest.fixture
def notices() -> NoticeBoard:
    return NoticeBoard()


@pytest.fixture
def preferences(app_settings, state_repo) -> PreferenceService:
    return PreferenceService(state_repo, Language.ZH)


@pytest.fixture
def ledger_service(app_settings, state_repo) -> LedgerService:
    """Provide a LedgerService starting from 100000 cash."""
    return LedgerService(state_repo, app_settings)


@pytest.fixture
def analysis_service(ledger_service) -> AnalysisService:
    return AnalysisService(ledger_service)


@pytest.fixture
def watchlist_service(state_repo, gateway, task_queue, notices, preferences) -> WatchlistService:
    return WatchlistService(state_repo, gateway, task_queue, notices, preferences)


@pytest.fixture
def trading_service(ledger_service, watchlist_service, gateway, task_queue, preferences) -> TradingService:
    return TradingService(ledger_service, watchlist_service, gateway, task_queue, preferences)


@pytest.fixture
def topic_service(state_repo, gateway, task_queue, notices, preferences) -> TopicService:
    return TopicService(state_repo, gateway, task_queue, notices, preferences)


@pytest.fixture
def journal_service(state_repo, gateway, task_queue, preferences) -> JournalService:
    return JournalService(state_repo, gateway, task_queue, preferences)


@pytest.fixture
def market_service(app_settings, state_repo, gateway, notices, preferences) -> MarketService:
    return MarketService(state_repo, gateway, notices, preferences, app_settings)


# =============================================================================
# APPLICATION FIXTURES
# =============================================================================


@pytest.fixture
def app_context(app_settings, state_store, gateway) -> AppContext:
    """Application context on the in-memory store and deterministic gateway (not yet initialized)."""
    ctx = AppContext(settings=app_settings, store=state_store, gateway=gateway)
    set_app_context(ctx)
    yield ctx
    set_app_context(None)


@pytest.fixture
def client(app_context) -> TestClient:
    """Provide FastAPI test client; the lifespan initializes the injected context."""
    with TestClient(app) as c:
        yield c


def drain(client: TestClient, ctx: AppContext) -> None:
    """Wait for background research started by earlier requests to settle."""
    client.portal.call(ctx.tasks.drain)


# =============================================================================
# HELPER FUNCTIONS (exported for use in tests)
# =============================================================================


def assert_decimal_equal(
    actual: Decimal,
    expected: Decimal,
    tolerance: Decimal = Decimal("0.0001"),
) -> None:
    """Assert two Decimals are equal within tolerance."""
    diff = abs(Decimal(str(actual)) - Decimal(str(expected)))
    assert diff <= tolerance, f"Expected {expected}, got {actual} (diff={diff})"


def aware(year: int, month: int, day: int, hour: int = 10) -> datetime:
    """UTC datetime helper."""
    return datetime(year, month, day, hour, tzinfo=timezone.utc)
