"""Topic board service: tracked investment themes and saved readings."""

import asyncio
import logging
import uuid
from typing import Optional

from alpha_tracker.core.exceptions import NotFoundError, ValidationError
from alpha_tracker.core.notices import NoticeBoard
from alpha_tracker.core.tasks import TaskQueue
from alpha_tracker.core.timezone import now_local
from alpha_tracker.domain.models import FavoriteItem, ResearchStatus, Topic, TopicAnalysis
from alpha_tracker.domain.views import RefreshReport
from alpha_tracker.providers import ResearchGateway
from alpha_tracker.repositories import StateRepository
from alpha_tracker.services.preference_service import PreferenceService

logger = logging.getLogger(__name__)


class TopicService:
    """
    Service for the topic board.

    Topics follow the same optimistic lifecycle as watchlist stocks. Favourites
    are snapshots of a topic's summary at the time it was saved.
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
        self._topics: list[Topic] = state_repo.load_topics()
        self._favorites: list[FavoriteItem] = state_repo.load_favorites()

    @property
    def topics(self) -> list[Topic]:
        return list(self._topics)

    @property
    def favorites(self) -> list[FavoriteItem]:
        return list(self._favorites)

    def get_topic(self, topic_id: str) -> Topic:
        topic = self._find(topic_id)
        if topic is None:
            raise NotFoundError("Topic", topic_id)
        return topic

    def add_topic(self, keyword: str) -> tuple[Topic, asyncio.Task]:
        keyword = (keyword or "").strip()
        if not keyword:
            raise ValidationError("Topic keyword is required")

        topic = Topic(
            topic_id=str(uuid.uuid4()),
            keyword=keyword,
            status=ResearchStatus.PENDING,
            last_updated=now_local(),
        )
        self._topics.insert(0, topic)
        self._save_topics()

        def on_success(analysis: TopicAnalysis) -> None:
            target = self._find(topic.topic_id)
            if target is not None:
                self._merge(target, analysis)
                self._save_topics()

        def on_failure(error: Exception) -> None:
            self._topics = [t for t in self._topics if t.topic_id != topic.topic_id]
            self._save_topics()
            self._notices.post(f"Failed to analyze topic {keyword}: {error}")

        task = self._tasks.submit(
            f"topic:add:{keyword}",
            self._gateway.analyze_topic(keyword, self._preferences.language),
            on_success,
            on_failure,
        )
        return topic, task

    async def refresh_all_topics(self) -> RefreshReport:
        """
        Re-research every topic concurrently and wait for all to settle.

        A topic whose refresh fails goes back to resolved with its previous
        analysis untouched.
        """
        report = RefreshReport(requested=len(self._topics))
        tasks = []
        for topic in self._topics:
            topic.status = ResearchStatus.PENDING
            tasks.append(self._submit_refresh(topic, report))
        self._save_topics()
        await self._tasks.settle(tasks)
        if report.failed:
            self._notices.post(f"{report.failed} topic(s) could not be refreshed", level="warning")
        return report

    def _submit_refresh(self, topic: Topic, report: RefreshReport) -> asyncio.Task:
        topic_id, keyword = topic.topic_id, topic.keyword

        def on_success(analysis: TopicAnalysis) -> None:
            report.succeeded += 1
            target = self._find(topic_id)
            if target is not None:
                self._merge(target, analysis)
                self._save_topics()

        def on_failure(error: Exception) -> None:
            report.failed += 1
            report.failures.append(keyword)
            target = self._find(topic_id)
            if target is not None:
                target.status = ResearchStatus.RESOLVED
                self._save_topics()

        return self._tasks.submit(
            f"topic:refresh:{keyword}",
            self._gateway.analyze_topic(keyword, self._preferences.language),
            on_success,
            on_failure,
        )

    def delete_topic(self, topic_id: str) -> None:
        self.get_topic(topic_id)
        self._topics = [t for t in self._topics if t.topic_id != topic_id]
        self._save_topics()

    def is_favorite(self, topic: Topic) -> bool:
        return self._favorite_for(topic) is not None

    def toggle_favorite(self, topic_id: str) -> Optional[FavoriteItem]:
        """Save the topic's current reading, or unsave it if already saved; returns the new favourite."""
        topic = self.get_topic(topic_id)
        existing = self._favorite_for(topic)
        if existing is not None:
            self._favorites = [f for f in self._favorites if f.favorite_id != existing.favorite_id]
            self._save_favorites()
            return None

        favorite = FavoriteItem(
            favorite_id=str(uuid.uuid4()),
            topic_keyword=topic.keyword,
            summary=topic.analysis.summary,
            catalyst=topic.analysis.catalyst,
            saved_at=now_local(),
        )
        self._favorites.insert(0, favorite)
        self._save_favorites()
        return favorite

    def remove_favorite(self, favorite_id: str) -> None:
        if not any(f.favorite_id == favorite_id for f in self._favorites):
            raise NotFoundError("Favorite", favorite_id)
        self._favorites = [f for f in self._favorites if f.favorite_id != favorite_id]
        self._save_favorites()

    def _favorite_for(self, topic: Topic) -> Optional[FavoriteItem]:
        for favorite in self._favorites:
            if favorite.topic_keyword == topic.keyword and favorite.summary == topic.analysis.summary:
                return favorite
        return None

    def _find(self, topic_id: str) -> Optional[Topic]:
        return next((t for t in self._topics if t.topic_id == topic_id), None)

    @staticmethod
    def _merge(topic: Topic, analysis: TopicAnalysis) -> None:
        topic.analysis = analysis
        topic.status = ResearchStatus.RESOLVED
        topic.last_updated = now_local()

    def _save_topics(self) -> None:
        self._repo.save_topics(self._topics)

    def _save_favorites(self) -> None:
        self._repo.save_favorites(self._favorites)
