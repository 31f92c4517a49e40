"""Trade performance analytics.

Pure functions over an immutable snapshot of closed trades. Nothing here
performs I/O, reads the clock or caches between calls.
"""

from tradejournal.pnl import calculate_pnl
from tradejournal.analytics.breakdown import (
    bucket_stats,
    daily_pnl,
    day_of_week_breakdown,
    day_pnl,
    group_trades,
    hour_of_day_breakdown,
    period_breakdown,
)
from tradejournal.analytics.colors import blend_hex, pnl_color
from tradejournal.analytics.equity import build_equity_curve
from tradejournal.analytics.filters import (
    TradeFilters,
    date_range_start,
    filter_trades,
    unique_strategies,
)
from tradejournal.analytics.mistakes import (
    calculate_mistake_analytics,
    categorize_mistake,
    mistake_category_label,
)
from tradejournal.analytics.performance import (
    calculate_streaks,
    calculate_trade_analytics,
    required_win_rate,
    reward_ratio,
    summarize_trades,
)

__all__ = [
    "calculate_pnl",
    "calculate_trade_analytics",
    "calculate_streaks",
    "summarize_trades",
    "reward_ratio",
    "required_win_rate",
    "build_equity_curve",
    "group_trades",
    "bucket_stats",
    "day_of_week_breakdown",
    "hour_of_day_breakdown",
    "period_breakdown",
    "daily_pnl",
    "day_pnl",
    "categorize_mistake",
    "mistake_category_label",
    "calculate_mistake_analytics",
    "pnl_color",
    "blend_hex",
    "TradeFilters",
    "filter_trades",
    "unique_strategies",
    "date_range_start",
]
