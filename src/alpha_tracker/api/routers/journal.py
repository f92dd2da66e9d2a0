"""Trading journal API router."""

from typing import Optional

from fastapi import APIRouter, Depends

from alpha_tracker.api.deps import get_context
from alpha_tracker.api.schemas import (
    NoteCreateRequest,
    NoteResponse,
    NoteUpdateRequest,
    ReflectionSummaryResponse,
)
from alpha_tracker.app_context import AppContext

router = APIRouter(prefix="/journal", tags=["journal"])


@router.get("/notes", response_model=list[NoteResponse])
async def list_notes(ctx: AppContext = Depends(get_context)):
    return [NoteResponse.model_validate(n) for n in ctx.journal.notes]


@router.post("/notes", response_model=NoteResponse, status_code=201)
async def add_note(data: NoteCreateRequest, ctx: AppContext = Depends(get_context)):
    """Add a note. Text and task notes are analysed in the background."""
    note, _ = ctx.journal.add_note(data.content, data.note_type)
    return NoteResponse.model_validate(note)


@router.put("/notes/{note_id}", response_model=NoteResponse)
async def update_note(note_id: str, data: NoteUpdateRequest, ctx: AppContext = Depends(get_context)):
    return NoteResponse.model_validate(ctx.journal.update_note(note_id, data.content))


@router.delete("/notes/{note_id}", status_code=204)
async def delete_note(note_id: str, ctx: AppContext = Depends(get_context)):
    ctx.journal.delete_note(note_id)


@router.post("/notes/{note_id}/toggle", response_model=NoteResponse)
async def toggle_task(note_id: str, ctx: AppContext = Depends(get_context)):
    return NoteResponse.model_validate(ctx.journal.toggle_task(note_id))


@router.get("/summary", response_model=Optional[ReflectionSummaryResponse])
async def get_summary(ctx: AppContext = Depends(get_context)):
    summary = ctx.journal.summary
    return ReflectionSummaryResponse.model_validate(summary) if summary else None


@router.post("/summary", response_model=ReflectionSummaryResponse)
async def generate_summary(ctx: AppContext = Depends(get_context)):
    """Ask the coach for recurring patterns across all user notes."""
    return ReflectionSummaryResponse.model_validate(await ctx.journal.generate_summary())
