"""Data models for TradeJournal."""

from tradejournal.models.trade import Trade
from tradejournal.models.mistake import MISTAKE_CATEGORIES, OTHER_CATEGORY_ID, MistakeCategory
from tradejournal.models.results import (
    BucketStats,
    ColorIntensity,
    DailyPnl,
    DailyPnlData,
    DayOfWeekSummary,
    EquityCurve,
    EquityPoint,
    HourSummary,
    MistakeAnalytics,
    MistakeSummary,
    PeriodSummary,
    SideMetrics,
    TradeAnalytics,
    TradesSummary,
)
from tradejournal.pnl import PnlResult, TradeSide

__all__ = [
    "Trade",
    "TradeSide",
    "PnlResult",
    "MistakeCategory",
    "MISTAKE_CATEGORIES",
    "OTHER_CATEGORY_ID",
    "SideMetrics",
    "TradeAnalytics",
    "TradesSummary",
    "EquityPoint",
    "EquityCurve",
    "BucketStats",
    "DayOfWeekSummary",
    "HourSummary",
    "PeriodSummary",
    "DailyPnl",
    "DailyPnlData",
    "MistakeSummary",
    "MistakeAnalytics",
    "ColorIntensity",
]
