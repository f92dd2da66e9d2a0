"""Pydantic schemas for topic board endpoints."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from alpha_tracker.domain.models.enums import ResearchStatus


class AddTopicRequest(BaseModel):
    keyword: str = Field(..., min_length=1)


class TopicAnalysisResponse(BaseModel):
    model_config = {"from_attributes": True}

    summary: str
    sentiment_score: float
    catalyst: str
    related_stocks: list[str]


class TopicResponse(BaseModel):
    """A tracked theme and whether its current reading is saved."""

    model_config = {"from_attributes": True}

    topic_id: str
    keyword: str
    status: ResearchStatus
    analysis: TopicAnalysisResponse
    last_updated: Optional[datetime] = None
    is_favorite: bool = False


class FavoriteResponse(BaseModel):
    model_config = {"from_attributes": True}

    favorite_id: str
    topic_keyword: str
    summary: str
    catalyst: str
    saved_at: Optional[datetime] = None


class FavoriteToggleResponse(BaseModel):
    """favorite is null when the toggle removed the saved reading."""

    favorite: Optional[FavoriteResponse] = None
