"""Research gateway protocol."""

from typing import Protocol

from alpha_tracker.domain.models import (
    CapitalFlow,
    Language,
    LimitUpStock,
    MarketIndex,
    MarketOpportunity,
    ReflectionAnalysis,
    ReflectionSummary,
    StockAnalysis,
    TopicAnalysis,
)


class ResearchGateway(Protocol):
    """
    Protocol for the LLM-backed research oracle.

    Every call is slow (web search plus generation, up to minutes) and
    unreliable. Implementations raise GatewayError on transport or model
    failure and ResponseParseError when the answer cannot be structured.
    """

    async def analyze_stock(self, name: str, language: Language) -> StockAnalysis:
        """Research one stock by display name."""
        ...

    async def analyze_topic(self, keyword: str, language: Language) -> TopicAnalysis:
        """Research an investment theme."""
        ...

    async def analyze_reflection(self, entry: str, language: Language) -> ReflectionAnalysis:
        """Diagnose a single trading journal entry."""
        ...

    async def summarize_reflections(self, entries: list[str], language: Language) -> ReflectionSummary:
        """Find recurring patterns across journal entries."""
        ...

    async def fetch_market_indices(self, language: Language) -> tuple[float, list[MarketIndex]]:
        """Return (sentiment score, headline indices) for today's market."""
        ...

    async def fetch_market_opportunities(self, language: Language) -> list[MarketOpportunity]:
        """Return currently active market themes."""
        ...

    async def fetch_limit_up_stocks(self, language: Language) -> list[LimitUpStock]:
        """Return representative limit-up stocks for today."""
        ...

    async def fetch_market_capital(self, language: Language) -> CapitalFlow:
        """Return northbound, margin and volume readings with their recent trend."""
        ...
