"""Pydantic schemas for trading journal endpoints."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from alpha_tracker.domain.models.enums import NoteType, ResearchStatus


class NoteCreateRequest(BaseModel):
    content: str = Field(..., min_length=1)
    note_type: NoteType = NoteType.TEXT


class NoteUpdateRequest(BaseModel):
    content: str = Field(..., min_length=1)


class ReflectionAnalysisResponse(BaseModel):
    model_config = {"from_attributes": True}

    root_cause: str
    prevention: str


class NoteResponse(BaseModel):
    model_config = {"from_attributes": True}

    note_id: str
    content: str
    note_type: NoteType
    is_completed: bool
    created_at: Optional[datetime] = None
    analysis: Optional[ReflectionAnalysisResponse] = None
    analysis_status: Optional[ResearchStatus] = None


class ReflectionSummaryResponse(BaseModel):
    model_config = {"from_attributes": True}

    content: str
    key_points: list[str]
    generated_at: Optional[datetime] = None
