"""Enumerations for domain models."""

from enum import Enum


class Market(str, Enum):
    """Listing market of a stock."""

    CN = "CN"  # domestic A-share
    US = "US"
    HK = "HK"
    OTHER = "OTHER"  # watchlist only; positions are CN/US/HK


class Currency(str, Enum):
    """Position currencies."""

    CNY = "CNY"
    USD = "USD"
    HKD = "HKD"


class StockCategory(str, Enum):
    """Watchlist interest tags, highest priority first."""

    HOLDING = "holding"
    STRONG = "strong"
    MEDIUM = "medium"
    NORMAL = "normal"


class TradeType(str, Enum):
    """Paper-trade directions."""

    BUY = "buy"
    SELL = "sell"


class ResearchStatus(str, Enum):
    """Lifecycle of an entity whose data comes from the research gateway."""

    PENDING = "pending"
    RESOLVED = "resolved"
    FAILED = "failed"


class NoteType(str, Enum):
    """Trading journal entry kinds."""

    TEXT = "text"
    TASK = "task"
    AI_SUMMARY = "ai_summary"


class Language(str, Enum):
    """Languages the research gateway can answer in."""

    ZH = "zh"
    EN = "en"


class DistributionType(str, Enum):
    """Dimensions for the portfolio distribution chart."""

    MARKET = "market"
    INDUSTRY = "industry"
    RISK = "risk"


class TimeRange(str, Enum):
    """Windows for the asset trend chart."""

    ONE_MONTH = "1M"
    THREE_MONTHS = "3M"
    ONE_YEAR = "1Y"
    ALL = "ALL"


class ValuationLabel(str, Enum):
    """Outcome of the intrinsic value heuristic."""

    UNDERVALUED = "undervalued"
    FAIR = "fair"
    OVERVALUED = "overvalued"


class Recommendation(str, Enum):
    """Position sizing stance from the entry simulation."""

    AGGRESSIVE = "aggressive"
    MODERATE = "moderate"
    CAUTIOUS = "cautious"


class MarketMood(str, Enum):
    """Verbal reading of a 0-10 sentiment score."""

    HOT = "hot"
    BULLISH = "bullish"
    VOLATILE = "volatile"
    BEARISH = "bearish"
    FREEZING = "freezing"
