"""FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from alpha_tracker import __version__
from alpha_tracker.api.routers import (
    journal_router,
    market_router,
    notices_router,
    portfolio_router,
    preferences_router,
    topics_router,
    watchlist_router,
)
from alpha_tracker.app_context import get_app_context
from alpha_tracker.config.logging_config import setup_logging
from alpha_tracker.config.settings import get_settings
from alpha_tracker.core.exceptions import AppError, GatewayError, NotFoundError


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    setup_logging()
    ctx = get_app_context()
    if not ctx.is_initialized:
        ctx.initialize()
    yield
    # Shutdown: cancel research still in flight
    await ctx.close()


settings = get_settings()

app = FastAPI(
    title=settings.app_name,
    description="Personal investment tracker with AI research and a paper-trading ledger",
    version=__version__,
    lifespan=lifespan,
)

# Include routers
app.include_router(portfolio_router)
app.include_router(watchlist_router)
app.include_router(topics_router)
app.include_router(journal_router)
app.include_router(market_router)
app.include_router(preferences_router)
app.include_router(notices_router)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Global handler for application errors."""
    if isinstance(exc, NotFoundError):
        status_code = 404
    elif isinstance(exc, GatewayError):
        status_code = 502
    else:
        status_code = 400
    return JSONResponse(
        status_code=status_code,
        content={"error": exc.code, "message": exc.message},
    )


@app.get("/health")
def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy"}


@app.get("/")
def root() -> dict[str, str]:
    """Root endpoint with API info."""
    return {
        "app": settings.app_name,
        "version": __version__,
        "docs": "/docs",
    }
