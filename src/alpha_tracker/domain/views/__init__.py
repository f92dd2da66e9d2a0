"""View models for service outputs."""

from alpha_tracker.domain.views.portfolio import (
    PositionView,
    PortfolioSummary,
    DistributionSlice,
    DistributionView,
    TrendPointView,
    ValuationView,
    EntrySimulation,
    RefreshReport,
)

__all__ = [
    "PositionView",
    "PortfolioSummary",
    "DistributionSlice",
    "DistributionView",
    "TrendPointView",
    "ValuationView",
    "EntrySimulation",
    "RefreshReport",
]
