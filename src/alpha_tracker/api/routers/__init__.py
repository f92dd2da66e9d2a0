"""API routers package."""

from alpha_tracker.api.routers.portfolio import router as portfolio_router
from alpha_tracker.api.routers.watchlist import router as watchlist_router
from alpha_tracker.api.routers.topics import router as topics_router
from alpha_tracker.api.routers.journal import router as journal_router
from alpha_tracker.api.routers.market import router as market_router
from alpha_tracker.api.routers.preferences import (
    router as preferences_router,
    notices_router,
)

__all__ = [
    "portfolio_router",
    "watchlist_router",
    "topics_router",
    "journal_router",
    "market_router",
    "preferences_router",
    "notices_router",
]
