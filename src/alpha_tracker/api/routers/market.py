"""Market dashboard API router."""

from fastapi import APIRouter, Depends

from alpha_tracker.api.deps import get_context
from alpha_tracker.api.schemas import MarketSnapshotResponse
from alpha_tracker.app_context import AppContext
from alpha_tracker.domain.models import MarketSnapshot
from alpha_tracker.services import market_mood

router = APIRouter(prefix="/market", tags=["market"])


def _snapshot_response(snapshot: MarketSnapshot) -> MarketSnapshotResponse:
    return MarketSnapshotResponse(
        sentiment_score=snapshot.sentiment_score,
        mood=market_mood(snapshot.sentiment_score),
        indices=snapshot.indices,
        limit_up_stocks=snapshot.limit_up_stocks,
        opportunities=snapshot.opportunities,
        capital=snapshot.capital,
        last_updated=snapshot.last_updated,
    )


@router.get("", response_model=MarketSnapshotResponse)
async def get_market(ctx: AppContext = Depends(get_context)):
    """Current snapshot, fetched first when missing or older than the refresh interval."""
    return _snapshot_response(await ctx.market.load_if_stale())


@router.post("/refresh", response_model=MarketSnapshotResponse)
async def refresh_market(ctx: AppContext = Depends(get_context)):
    return _snapshot_response(await ctx.market.refresh_market())
