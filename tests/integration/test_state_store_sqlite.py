"""
Integration tests for the SQLAlchemy state store.

Tests cover:
- Round trip of every collection through StateRepository
- Overwrite semantics
- Defaults for missing and unreadable documents
- Store errors degrading instead of raising
"""

from datetime import date, datetime, timezone
from decimal import Decimal

from sqlalchemy.orm import sessionmaker

from alpha_tracker.domain.models import (
    AssetHistoryEntry,
    CapitalFlow,
    CapitalLatest,
    CapitalTrendPoint,
    FavoriteItem,
    Financials,
    Language,
    Market,
    MarketIndex,
    MarketSnapshot,
    Note,
    NoteType,
    Position,
    ReflectionAnalysis,
    ResearchStatus,
    StockAnalysis,
    StockCategory,
    Topic,
    TopicAnalysis,
    TrendPoint,
    WatchlistEntry,
)
from alpha_tracker.repositories import StateRepository, StorageKey
from alpha_tracker.repositories.sqlalchemy import SqlAlchemyStateStore
from alpha_tracker.repositories.sqlalchemy.orm_models import AppStateORM

NOW = datetime(2024, 6, 15, 8, 30, tzinfo=timezone.utc)


class TestSqlAlchemyStateStore:
    def test_load_missing_returns_default(self, sqlite_store):
        assert sqlite_store.load("alpha_cash", "fallback") == "fallback"

    def test_save_overwrites(self, sqlite_store):
        sqlite_store.save("alpha_lang", "zh")
        sqlite_store.save("alpha_lang", "en")

        assert sqlite_store.load("alpha_lang", None) == "en"

    def test_unreadable_row_returns_default(self, sqlite_store, test_engine):
        """
        GIVEN a row whose JSON is corrupt
        WHEN it is loaded
        THEN the default comes back instead of an exception
        """
        with sessionmaker(bind=test_engine)() as db:
            db.add(AppStateORM(key="alpha_notes", value_json="{not json", updated_at=NOW))
            db.commit()

        assert sqlite_store.load("alpha_notes", []) == []

    def test_database_errors_degrade(self, test_engine):
        """
        GIVEN a database whose table has been dropped
        WHEN the store is used
        THEN loads return defaults and saves do not raise
        """
        store = SqlAlchemyStateStore(sessionmaker(bind=test_engine))
        AppStateORM.__table__.drop(bind=test_engine)
        try:
            store.save("alpha_cash", "1")
            assert store.load("alpha_cash", "default") == "default"
        finally:
            AppStateORM.__table__.create(bind=test_engine)

    def test_unicode_is_stored_verbatim(self, sqlite_store, test_engine):
        sqlite_store.save("alpha_topics", [{"keyword": "低空经济"}])

        with sessionmaker(bind=test_engine)() as db:
            row = db.get(AppStateORM, "alpha_topics")
        assert "低空经济" in row.value_json


class TestStateRepositoryRoundTrip:
    """Every collection survives a save/load cycle through SQLite."""

    def test_ledger_collections(self, sqlite_store):
        repo = StateRepository(sqlite_store)
        position = Position(
            position_id="p1",
            name="Foo",
            code="00700",
            market=Market.HK,
            quantity=Decimal("150"),
            cost_price=Decimal("10.75"),
            current_price=Decimal("11.2"),
        )
        repo.save_positions([position])
        repo.save_cash(Decimal("98387.5"))
        repo.save_history([AssetHistoryEntry(date=date(2024, 6, 15), timestamp=NOW, total_value=Decimal("100067.5"))])

        assert repo.load_positions() == [position]
        assert repo.load_cash(Decimal("0")) == Decimal("98387.5")
        assert repo.load_history()[0].total_value == Decimal("100067.5")

    def test_research_collections(self, sqlite_store):
        repo = StateRepository(sqlite_store)
        entry = WatchlistEntry(
            stock_id="s1",
            name="贵州茅台",
            category=StockCategory.STRONG,
            status=ResearchStatus.RESOLVED,
            last_updated=NOW,
            analysis=StockAnalysis(
                price=Decimal("1688.00"),
                gross_margin_trend=[TrendPoint(year="2023", value=91.5)],
                financials=Financials(net_assets=2200.0, last_year_net_profit=747.0, market_cap=21000.0),
            ),
        )
        topic = Topic(topic_id="t1", keyword="AI", status=ResearchStatus.RESOLVED, analysis=TopicAnalysis(summary="S"))
        note = Note(
            note_id="n1",
            content="Chased",
            note_type=NoteType.TASK,
            created_at=NOW,
            analysis=ReflectionAnalysis(root_cause="FOMO", prevention="Plan"),
            analysis_status=ResearchStatus.RESOLVED,
        )
        snapshot = MarketSnapshot(
            sentiment_score=6.0,
            indices=[MarketIndex(name="HSI", value=17000.0)],
            capital=CapitalFlow(
                latest=CapitalLatest(northbound_5day_net_inflow=42.0),
                trend=[CapitalTrendPoint(date="06-14", northbound=8.5)],
                summary="Mild inflow",
            ),
            last_updated=NOW,
        )

        repo.save_stocks([entry])
        repo.save_topics([topic])
        repo.save_favorites([FavoriteItem(favorite_id="f1", topic_keyword="AI", summary="S", catalyst="C")])
        repo.save_notes([note])
        repo.save_market(snapshot)
        repo.save_language(Language.EN)

        assert repo.load_stocks() == [entry]
        assert repo.load_topics() == [topic]
        assert repo.load_favorites()[0].favorite_id == "f1"
        assert repo.load_notes() == [note]
        assert repo.load_market() == snapshot
        assert repo.load_language(Language.ZH) == Language.EN

    def test_invalid_document_falls_back(self, sqlite_store):
        """
        GIVEN a stored document of the wrong shape
        WHEN it is loaded through the repository
        THEN the default is returned
        """
        sqlite_store.save(StorageKey.PORTFOLIO.value, [{"name": "missing fields"}])
        sqlite_store.save(StorageKey.LANGUAGE.value, "fr")

        repo = StateRepository(sqlite_store)

        assert repo.load_positions() == []
        assert repo.load_language(Language.ZH) == Language.ZH

    def test_empty_market_and_reflection(self, sqlite_store):
        repo = StateRepository(sqlite_store)
        assert repo.load_market() is None
        assert repo.load_reflection() is None
