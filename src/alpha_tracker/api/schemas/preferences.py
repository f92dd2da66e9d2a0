"""Pydantic schemas for preferences and notices."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from alpha_tracker.domain.models.enums import Language


class LanguageRequest(BaseModel):
    language: Language


class PreferencesResponse(BaseModel):
    language: Language


class NoticeResponse(BaseModel):
    model_config = {"from_attributes": True}

    notice_id: str
    message: str
    level: str
    created_at: Optional[datetime] = None
