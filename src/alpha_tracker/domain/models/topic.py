"""Topic tracking models."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from alpha_tracker.domain.models.enums import ResearchStatus


@dataclass
class TopicAnalysis:
    """Gateway research on an investment theme."""

    summary: str = ""
    sentiment_score: float = 5.0
    catalyst: str = ""
    related_stocks: list[str] = field(default_factory=list)


@dataclass
class Topic:
    """A tracked investment theme."""

    topic_id: str
    keyword: str
    status: ResearchStatus = ResearchStatus.PENDING
    analysis: TopicAnalysis = field(default_factory=TopicAnalysis)
    last_updated: Optional[datetime] = None

    def __post_init__(self) -> None:
        if isinstance(self.status, str):
            self.status = ResearchStatus(self.status)


@dataclass
class FavoriteItem:
    """A saved copy of one topic reading."""

    favorite_id: str
    topic_keyword: str
    summary: str
    catalyst: str
    saved_at: Optional[datetime] = None
