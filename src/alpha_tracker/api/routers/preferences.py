"""Preferences and notices API routers."""

from fastapi import APIRouter, Depends

from alpha_tracker.api.deps import get_context
from alpha_tracker.api.schemas import LanguageRequest, NoticeResponse, PreferencesResponse
from alpha_tracker.app_context import AppContext
from alpha_tracker.core.exceptions import NotFoundError

router = APIRouter(prefix="/preferences", tags=["preferences"])
notices_router = APIRouter(prefix="/notices", tags=["notices"])


@router.get("", response_model=PreferencesResponse)
async def get_preferences(ctx: AppContext = Depends(get_context)):
    return PreferencesResponse(language=ctx.preferences.language)


@router.put("/language", response_model=PreferencesResponse)
async def set_language(data: LanguageRequest, ctx: AppContext = Depends(get_context)):
    """Change the UI language; later research requests are answered in it."""
    return PreferencesResponse(language=ctx.preferences.set_language(data.language))


@notices_router.get("", response_model=list[NoticeResponse])
async def list_notices(ctx: AppContext = Depends(get_context)):
    """Messages from background failures, newest first."""
    return [NoticeResponse.model_validate(n) for n in ctx.notices.list()]


@notices_router.delete("/{notice_id}", status_code=204)
async def dismiss_notice(notice_id: str, ctx: AppContext = Depends(get_context)):
    if not ctx.notices.dismiss(notice_id):
        raise NotFoundError("Notice", notice_id)


@notices_router.delete("", status_code=204)
async def clear_notices(ctx: AppContext = Depends(get_context)):
    ctx.notices.clear()
