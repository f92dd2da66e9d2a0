"""Topic board API router."""

from fastapi import APIRouter, Depends

from alpha_tracker.api.deps import get_context
from alpha_tracker.api.schemas import (
    AddTopicRequest,
    FavoriteResponse,
    FavoriteToggleResponse,
    RefreshReportResponse,
    TopicResponse,
)
from alpha_tracker.app_context import AppContext
from alpha_tracker.domain.models import Topic

router = APIRouter(prefix="/topics", tags=["topics"])


def _topic_response(ctx: AppContext, topic: Topic) -> TopicResponse:
    response = TopicResponse.model_validate(topic)
    response.is_favorite = ctx.topics.is_favorite(topic)
    return response


@router.get("", response_model=list[TopicResponse])
async def list_topics(ctx: AppContext = Depends(get_context)):
    return [_topic_response(ctx, t) for t in ctx.topics.topics]


@router.post("", response_model=TopicResponse, status_code=202)
async def add_topic(data: AddTopicRequest, ctx: AppContext = Depends(get_context)):
    topic, _ = ctx.topics.add_topic(data.keyword)
    return _topic_response(ctx, topic)


@router.post("/refresh", response_model=RefreshReportResponse)
async def refresh_topics(ctx: AppContext = Depends(get_context)):
    """Re-research every topic and wait until all requests have settled."""
    report = await ctx.topics.refresh_all_topics()
    return RefreshReportResponse.model_validate(report)


@router.delete("/{topic_id}", status_code=204)
async def delete_topic(topic_id: str, ctx: AppContext = Depends(get_context)):
    ctx.topics.delete_topic(topic_id)


@router.post("/{topic_id}/favorite", response_model=FavoriteToggleResponse)
async def toggle_favorite(topic_id: str, ctx: AppContext = Depends(get_context)):
    favorite = ctx.topics.toggle_favorite(topic_id)
    return FavoriteToggleResponse(
        favorite=FavoriteResponse.model_validate(favorite) if favorite else None
    )


@router.get("/favorites", response_model=list[FavoriteResponse])
async def list_favorites(ctx: AppContext = Depends(get_context)):
    return [FavoriteResponse.model_validate(f) for f in ctx.topics.favorites]


@router.delete("/favorites/{favorite_id}", status_code=204)
async def remove_favorite(favorite_id: str, ctx: AppContext = Depends(get_context)):
    ctx.topics.remove_favorite(favorite_id)
