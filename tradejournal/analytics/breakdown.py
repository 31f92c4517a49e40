"""Temporal breakdowns of trade performance.

Every breakdown buckets trades on their exit time and computes the same
per-bucket statistics; the variants differ only in the key, which buckets
are emitted and their order.
"""

import logging
from datetime import datetime
from typing import Callable, Hashable, Iterable, Literal, Optional, Sequence, TypeVar

from tradejournal.analytics import temporal
from tradejournal.models import (
    BucketStats,
    DailyPnl,
    DailyPnlData,
    DayOfWeekSummary,
    HourSummary,
    PeriodSummary,
    Trade,
)
from tradejournal.pnl import ZERO, sum_pnl

logger = logging.getLogger(__name__)

PeriodType = Literal["week", "month"]

T = TypeVar("T")
K = TypeVar("K", bound=Hashable)


def group_trades(trades: Iterable[T], key: Callable[[T], K]) -> dict[K, list[T]]:
    """Group trades by key, keeping first-seen key order and input order within a group."""
    grouped: dict[K, list[T]] = {}
    for trade in trades:
        grouped.setdefault(key(trade), []).append(trade)
    return grouped


def bucket_stats(trades: Sequence[Trade]) -> BucketStats:
    """Count, P&L, win count, win rate and average P&L of a bucket."""
    count = len(trades)
    if count == 0:
        return BucketStats()

    total_pnl = sum_pnl(trades)
    win_count = sum(1 for t in trades if t.pnl > 0)

    return BucketStats(
        trade_count=count,
        total_pnl=total_pnl,
        win_count=win_count,
        win_rate=win_count / count * 100,
        avg_trade_pnl=total_pnl / count,
    )


def day_of_week_breakdown(trades: Iterable[Trade]) -> list[DayOfWeekSummary]:
    """Performance per weekday.

    Always returns seven summaries, Monday through Sunday, including days
    without trades.
    """
    grouped = group_trades(trades, lambda t: temporal.weekday_index(t.exit_time))

    return [
        DayOfWeekSummary(
            day_index=index,
            day_label=temporal.weekday_label(index),
            **bucket_stats(grouped.get(index, [])).model_dump(),
        )
        for index in temporal.DISPLAY_WEEKDAY_ORDER
    ]


def hour_of_day_breakdown(trades: Iterable[Trade]) -> list[HourSummary]:
    """Performance per exit hour, only hours with trades, earliest first."""
    grouped = group_trades(trades, lambda t: temporal.hour_of_day(t.exit_time))

    return [
        HourSummary(
            hour=hour,
            hour_label=temporal.hour_label(hour),
            **bucket_stats(grouped[hour]).model_dump(),
        )
        for hour in sorted(grouped)
    ]


_PERIOD_FUNCTIONS = {
    "week": (temporal.week_key, temporal.week_label, temporal.week_start, temporal.week_end),
    "month": (temporal.month_key, temporal.month_label, temporal.month_start, temporal.month_end),
}


def period_breakdown(trades: Iterable[Trade], period_type: PeriodType) -> list[PeriodSummary]:
    """Performance per calendar week or month.

    Args:
        trades: Closed trades in any order.
        period_type: "week" (ISO weeks, Monday start) or "month".

    Returns:
        Summaries of populated periods, most recent first.
    """
    if period_type not in _PERIOD_FUNCTIONS:
        raise ValueError(f"Invalid period type: {period_type}. Must be one of {list(_PERIOD_FUNCTIONS)}")

    get_key, get_label, get_start, get_end = _PERIOD_FUNCTIONS[period_type]
    grouped = group_trades(trades, lambda t: get_key(t.exit_time))

    periods = []
    for period_key, period_trades in grouped.items():
        sample = period_trades[0].exit_time
        periods.append(PeriodSummary(
            period_key=period_key,
            period_label=get_label(sample),
            start_date=get_start(sample),
            end_date=get_end(sample),
            **bucket_stats(period_trades).model_dump(),
        ))

    logger.debug("Grouped trades into %d %s periods", len(periods), period_type)
    return temporal.most_recent_first(periods)


def daily_pnl(trades: Iterable[Trade]) -> DailyPnlData:
    """Per-day P&L for the calendar heat map.

    ``max_profit`` and ``max_loss`` are taken once over all days so every
    cell is scaled against the same maxima.
    """
    days = {}
    for date_key, day_trades in group_trades(trades, lambda t: temporal.day_key(t.exit_time)).items():
        days[date_key] = DailyPnl(
            date_key=date_key,
            date=temporal.day_start(day_trades[0].exit_time),
            loss_count=sum(1 for t in day_trades if t.pnl < 0),
            trades=tuple(day_trades),
            **bucket_stats(day_trades).model_dump(),
        )

    max_profit = max((day.total_pnl for day in days.values() if day.total_pnl > 0), default=ZERO)
    max_loss = max((-day.total_pnl for day in days.values() if day.total_pnl < 0), default=ZERO)

    return DailyPnlData(days=days, max_profit=max_profit, max_loss=max_loss)


def day_pnl(data: DailyPnlData, d: datetime) -> Optional[DailyPnl]:
    """Look up the bucket for the calendar day of ``d``."""
    return data.days.get(temporal.day_key(d))
