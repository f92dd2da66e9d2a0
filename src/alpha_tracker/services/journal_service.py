"""Trading journal service."""

import asyncio
import logging
import uuid
from typing import Optional, Union

from alpha_tracker.core.exceptions import NotFoundError, ValidationError
from alpha_tracker.core.tasks import TaskQueue
from alpha_tracker.core.timezone import now_local
from alpha_tracker.domain.models import (
    Note,
    NoteType,
    ReflectionAnalysis,
    ReflectionSummary,
    ResearchStatus,
)
from alpha_tracker.providers import ResearchGateway
from alpha_tracker.repositories import StateRepository
from alpha_tracker.services.preference_service import PreferenceService

logger = logging.getLogger(__name__)


class JournalService:
    """
    Service for journal notes and coach feedback.

    Text and task notes are analysed in the background; a failed analysis
    marks the note failed but keeps it.
    """

    def __init__(
        self,
        state_repo: StateRepository,
        gateway: ResearchGateway,
        tasks: TaskQueue,
        preferences: PreferenceService,
    ):
        self._repo = state_repo
        self._gateway = gateway
        self._tasks = tasks
        self._preferences = preferences
        self._notes: list[Note] = state_repo.load_notes()
        self._summary: Optional[ReflectionSummary] = state_repo.load_reflection()

    @property
    def notes(self) -> list[Note]:
        return list(self._notes)

    @property
    def summary(self) -> Optional[ReflectionSummary]:
        return self._summary

    def get_note(self, note_id: str) -> Note:
        note = self._find(note_id)
        if note is None:
            raise NotFoundError("Note", note_id)
        return note

    def add_note(
        self, content: str, note_type: Union[NoteType, str] = NoteType.TEXT
    ) -> tuple[Note, Optional[asyncio.Task]]:
        """Add a note; text and task notes also get a background reflection analysis."""
        content = (content or "").strip()
        if not content:
            raise ValidationError("Note content is required")
        note_type = NoteType(note_type)
        analyse = note_type != NoteType.AI_SUMMARY

        note = Note(
            note_id=str(uuid.uuid4()),
            content=content,
            note_type=note_type,
            created_at=now_local(),
            analysis_status=ResearchStatus.PENDING if analyse else None,
        )
        self._notes.insert(0, note)
        self._save_notes()
        if not analyse:
            return note, None

        def on_success(analysis: ReflectionAnalysis) -> None:
            target = self._find(note.note_id)
            if target is not None:
                target.analysis = analysis
                target.analysis_status = ResearchStatus.RESOLVED
                self._save_notes()

        def on_failure(error: Exception) -> None:
            target = self._find(note.note_id)
            if target is not None:
                target.analysis_status = ResearchStatus.FAILED
                self._save_notes()

        task = self._tasks.submit(
            "journal:reflection",
            self._gateway.analyze_reflection(content, self._preferences.language),
            on_success,
            on_failure,
        )
        return note, task

    def update_note(self, note_id: str, content: str) -> Note:
        """Edit a note's text; an existing analysis is kept as is."""
        note = self.get_note(note_id)
        content = (content or "").strip()
        if not content:
            raise ValidationError("Note content is required")
        note.content = content
        self._save_notes()
        return note

    def delete_note(self, note_id: str) -> None:
        self.get_note(note_id)
        self._notes = [n for n in self._notes if n.note_id != note_id]
        self._save_notes()

    def toggle_task(self, note_id: str) -> Note:
        note = self.get_note(note_id)
        note.is_completed = not note.is_completed
        self._save_notes()
        return note

    async def generate_summary(self) -> ReflectionSummary:
        """
        Ask the coach for patterns across all user-written notes.

        Raises ValidationError when there are no user notes; gateway errors
        propagate and leave the previous summary in place.
        """
        entries = [n.content for n in self._notes if n.note_type != NoteType.AI_SUMMARY]
        if not entries:
            raise ValidationError("No user notes to analyze")
        summary = await self._gateway.summarize_reflections(entries, self._preferences.language)
        if summary.generated_at is None:
            summary.generated_at = now_local()
        self._summary = summary
        self._repo.save_reflection(summary)
        logger.info("Generated reflection summary from %d notes", len(entries))
        return summary

    def _find(self, note_id: str) -> Optional[Note]:
        return next((n for n in self._notes if n.note_id == note_id), None)

    def _save_notes(self) -> None:
        self._repo.save_notes(self._notes)
