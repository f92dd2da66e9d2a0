"""Watchlist API router."""

from typing import Optional

from fastapi import APIRouter, Depends

from alpha_tracker.api.deps import get_context
from alpha_tracker.api.schemas import (
    AddStockRequest,
    CategoryRequest,
    EntrySimulationResponse,
    ValuationResponse,
    WatchlistEntryResponse,
)
from alpha_tracker.app_context import AppContext
from alpha_tracker.services import simulate_entry

router = APIRouter(prefix="/watchlist", tags=["watchlist"])


@router.get("", response_model=list[WatchlistEntryResponse])
async def list_stocks(ctx: AppContext = Depends(get_context)):
    """Entries in display order: holdings, strong, medium, normal; newest first within each."""
    return [WatchlistEntryResponse.model_validate(e) for e in ctx.watchlist.sorted_entries()]


@router.post("", response_model=WatchlistEntryResponse, status_code=202)
async def add_stock(data: AddStockRequest, ctx: AppContext = Depends(get_context)):
    """Add a pending entry; it is filled in or removed once research settles."""
    entry, _ = ctx.watchlist.add_stock(data.name)
    return WatchlistEntryResponse.model_validate(entry)


@router.post("/{stock_id}/refresh", response_model=WatchlistEntryResponse, status_code=202)
async def refresh_stock(stock_id: str, ctx: AppContext = Depends(get_context)):
    ctx.watchlist.refresh_stock(stock_id)
    return WatchlistEntryResponse.model_validate(ctx.watchlist.get_entry(stock_id))


@router.delete("/{stock_id}", status_code=204)
async def delete_stock(stock_id: str, ctx: AppContext = Depends(get_context)):
    ctx.watchlist.delete_stock(stock_id)


@router.put("/{stock_id}/category", response_model=WatchlistEntryResponse)
async def update_category(stock_id: str, data: CategoryRequest, ctx: AppContext = Depends(get_context)):
    return WatchlistEntryResponse.model_validate(ctx.watchlist.update_category(stock_id, data.category))


@router.post("/{stock_id}/pin", response_model=WatchlistEntryResponse)
async def pin_stock(stock_id: str, ctx: AppContext = Depends(get_context)):
    return WatchlistEntryResponse.model_validate(ctx.watchlist.pin_stock(stock_id))


@router.get("/{stock_id}/valuation", response_model=Optional[ValuationResponse])
async def get_valuation(stock_id: str, ctx: AppContext = Depends(get_context)):
    """Intrinsic value reading; null when the entry has no financials yet."""
    view = ctx.analysis.valuation(ctx.watchlist.get_entry(stock_id))
    return ValuationResponse.model_validate(view) if view else None


@router.get("/{stock_id}/simulation", response_model=EntrySimulationResponse)
async def simulate(stock_id: str, ctx: AppContext = Depends(get_context)):
    """Position sizing from today's market sentiment and the stock's industry sentiment."""
    entry = ctx.watchlist.get_entry(stock_id)
    snapshot = ctx.market.snapshot
    market_score = snapshot.sentiment_score if snapshot else None
    result = simulate_entry(market_score, entry.analysis.industry.sentiment_score)
    return EntrySimulationResponse.model_validate(result)
