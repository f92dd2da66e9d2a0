"""Trading journal models."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from alpha_tracker.domain.models.enums import NoteType, ResearchStatus


@dataclass
class ReflectionAnalysis:
    """Coach feedback for a single journal entry."""

    root_cause: str
    prevention: str


@dataclass
class ReflectionSummary:
    """Coach feedback across many journal entries."""

    content: str
    key_points: list[str] = field(default_factory=list)
    generated_at: Optional[datetime] = None


@dataclass
class Note:
    """
    Journal entry.

    Text and task notes are sent for reflection analysis; ai_summary notes are
    never analysed and carry no analysis status.
    """

    note_id: str
    content: str
    note_type: NoteType = NoteType.TEXT
    is_completed: bool = False
    created_at: Optional[datetime] = None
    analysis: Optional[ReflectionAnalysis] = None
    analysis_status: Optional[ResearchStatus] = None

    def __post_init__(self) -> None:
        if isinstance(self.note_type, str):
            self.note_type = NoteType(self.note_type)
        if isinstance(self.analysis_status, str):
            self.analysis_status = ResearchStatus(self.analysis_status)
