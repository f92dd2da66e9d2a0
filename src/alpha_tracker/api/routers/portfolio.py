"""Portfolio API router: positions, trades, cash and analytics."""

from fastapi import APIRouter, Depends, Query

from alpha_tracker.api.deps import get_context
from alpha_tracker.api.schemas import (
    CashRequest,
    CashResponse,
    DistributionResponse,
    HistoryEntryResponse,
    MarketInferenceResponse,
    OpenPositionRequest,
    PortfolioSummaryResponse,
    PositionResponse,
    RefreshReportResponse,
    TotalAssetsRequest,
    TradeRequest,
    TradeResponse,
    TrendPointResponse,
)
from alpha_tracker.app_context import AppContext
from alpha_tracker.core.exceptions import ValidationError
from alpha_tracker.domain.models import DistributionType, TimeRange
from alpha_tracker.services import infer_market_from_code

router = APIRouter(prefix="/portfolio", tags=["portfolio"])


@router.get("", response_model=PortfolioSummaryResponse)
async def get_summary(ctx: AppContext = Depends(get_context)):
    """Cash, totals and positions. The first read of a day also records the asset snapshot."""
    ctx.analysis.record_daily_history()
    return PortfolioSummaryResponse.model_validate(ctx.analysis.summary())


@router.post("/positions", response_model=PositionResponse, status_code=201)
async def open_position(data: OpenPositionRequest, ctx: AppContext = Depends(get_context)):
    """Open a position; research on the stock continues in the background."""
    market = data.market or infer_market_from_code(data.code)
    if market is None:
        raise ValidationError("Market is required when no code is given")
    position, _ = ctx.trading.open_position(data.name, data.code, market, data.entry_price, data.quantity)
    return PositionResponse.model_validate(ctx.analysis.position_view(position))


@router.post("/positions/{position_id}/trades", response_model=TradeResponse)
async def execute_trade(position_id: str, data: TradeRequest, ctx: AppContext = Depends(get_context)):
    """Buy or sell against a position. position is null when the sell closed it."""
    position = ctx.ledger.execute_trade(position_id, data.trade_type, data.quantity, data.price)
    return TradeResponse(
        position=PositionResponse.model_validate(ctx.analysis.position_view(position)) if position else None,
        cash_balance=ctx.ledger.cash_balance,
    )


@router.post("/refresh", response_model=RefreshReportResponse)
async def refresh_prices(ctx: AppContext = Depends(get_context)):
    """Re-research every position and wait until all requests have settled."""
    report = await ctx.trading.refresh_prices()
    return RefreshReportResponse.model_validate(report)


@router.put("/cash", response_model=CashResponse)
async def set_cash(data: CashRequest, ctx: AppContext = Depends(get_context)):
    ctx.ledger.set_cash_balance(data.amount)
    return CashResponse(cash_balance=ctx.ledger.cash_balance, total_assets=ctx.ledger.total_assets())


@router.put("/total-assets", response_model=CashResponse)
async def set_total_assets(data: TotalAssetsRequest, ctx: AppContext = Depends(get_context)):
    """Adjust cash so that total assets match the given figure."""
    ctx.ledger.set_total_assets(data.total)
    return CashResponse(cash_balance=ctx.ledger.cash_balance, total_assets=ctx.ledger.total_assets())


@router.get("/distribution", response_model=DistributionResponse)
async def get_distribution(
    dimension: DistributionType = Query(DistributionType.MARKET),
    ctx: AppContext = Depends(get_context),
):
    view = ctx.analysis.distribution(dimension, ctx.watchlist.entries)
    return DistributionResponse.model_validate(view)


@router.get("/trend", response_model=list[TrendPointResponse])
async def get_trend(
    time_range: TimeRange = Query(TimeRange.ALL, alias="range"),
    ctx: AppContext = Depends(get_context),
):
    """Asset history plus a live point; empty when there is nothing to plot."""
    return [TrendPointResponse.model_validate(p) for p in ctx.analysis.trend_series(time_range)]


@router.get("/history", response_model=list[HistoryEntryResponse])
async def get_history(ctx: AppContext = Depends(get_context)):
    return [HistoryEntryResponse.model_validate(e) for e in ctx.ledger.history]


@router.get("/infer-market", response_model=MarketInferenceResponse)
async def infer_market(code: str = Query(...)):
    """Guess the market of a stock code."""
    return MarketInferenceResponse(code=code, market=infer_market_from_code(code))
