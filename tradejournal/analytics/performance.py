"""Portfolio level performance metrics.

Turns a set of closed trades into win rate, average win/loss, profit
factor, realized risk:reward, expected value, streaks and the long/short
split. Every metric is defined for an empty trade set.
"""

import logging
import math
from datetime import timedelta
from decimal import Decimal
from typing import Iterable, Sequence

from tradejournal.analytics.temporal import chronological
from tradejournal.models import SideMetrics, Trade, TradeAnalytics, TradesSummary
from tradejournal.pnl import ZERO, sum_pnl

logger = logging.getLogger(__name__)


def _mean(total: Decimal, count: int) -> Decimal:
    return total / count if count > 0 else ZERO


def _percent(part: int, whole: int) -> float:
    return part / whole * 100 if whole > 0 else 0.0


def reward_ratio(avg_win: Decimal, avg_loss: Decimal) -> float:
    """Average win divided by average loss.

    Returns ``inf`` when there are wins but no losses and ``0`` when there
    are no wins. Used for both profit factor and realized R:R.
    """
    if avg_loss > 0:
        return float(avg_win / avg_loss)
    if avg_win > 0:
        return math.inf
    return 0.0


def required_win_rate(rr: float) -> float:
    """Win rate needed to break even at a given R:R.

    ``0`` is a sentinel for an infinite or zero R:R, where no breakeven
    target exists.
    """
    if rr > 0 and not math.isinf(rr):
        return 100 / (1 + rr)
    return 0.0


def _side_metrics(trades: Sequence[Trade]) -> SideMetrics:
    winners = [t for t in trades if t.pnl > 0]
    losers = [t for t in trades if t.pnl < 0]

    avg_win = _mean(sum_pnl(winners), len(winners))
    avg_loss = abs(_mean(sum_pnl(losers), len(losers)))

    return SideMetrics(
        trades=tuple(trades),
        pnl=sum_pnl(trades),
        win_rate=_percent(len(winners), len(trades)),
        avg_win=avg_win,
        avg_loss=avg_loss,
        rr=reward_ratio(avg_win, avg_loss),
    )


def calculate_streaks(trades: Iterable[Trade]) -> tuple[int, int]:
    """Longest runs of consecutive wins and losses.

    Trades are scanned by exit time. A break-even trade ends both runs.

    Returns:
        Tuple of (max_consecutive_wins, max_consecutive_losses).
    """
    max_wins = max_losses = 0
    current_wins = current_losses = 0

    for trade in chronological(trades):
        if trade.pnl > 0:
            current_wins += 1
            current_losses = 0
            max_wins = max(max_wins, current_wins)
        elif trade.pnl < 0:
            current_losses += 1
            current_wins = 0
            max_losses = max(max_losses, current_losses)
        else:
            current_wins = 0
            current_losses = 0

    return max_wins, max_losses


def calculate_trade_analytics(trades: Iterable[Trade]) -> TradeAnalytics:
    """Calculate the performance snapshot of a trade set.

    Args:
        trades: Closed trades in any order. Not modified.

    Returns:
        TradeAnalytics with every metric filled in; zeros and ``None`` for
        an empty trade set.
    """
    trades = list(trades)
    total = len(trades)

    winners = [t for t in trades if t.pnl > 0]
    losers = [t for t in trades if t.pnl < 0]
    break_even = [t for t in trades if t.pnl == 0]

    winning_total = sum_pnl(winners)
    losing_total = sum_pnl(losers)
    total_pnl = sum_pnl(trades)

    avg_win = _mean(winning_total, len(winners))
    avg_loss = abs(_mean(losing_total, len(losers)))

    winning_quantity = sum((t.quantity for t in winners), ZERO)
    losing_quantity = sum((t.quantity for t in losers), ZERO)

    win_fraction = Decimal(len(winners)) / total if total > 0 else ZERO
    rr = reward_ratio(avg_win, avg_loss)

    # max()/min() return the first of equal candidates.
    best_trade = max(trades, key=lambda t: t.pnl) if trades else None
    worst_trade = min(trades, key=lambda t: t.pnl) if trades else None

    max_wins, max_losses = calculate_streaks(trades)

    hold_total = sum((t.hold_time for t in trades), timedelta())

    analytics = TradeAnalytics(
        total_trades=total,
        winning_trades=tuple(winners),
        losing_trades=tuple(losers),
        break_even_trades=tuple(break_even),
        total_pnl=total_pnl,
        avg_win=avg_win,
        avg_loss=avg_loss,
        avg_trade_pnl=_mean(total_pnl, total),
        avg_trade_pnl_percent=_mean(sum((t.pnl_percent for t in trades), ZERO), total),
        avg_per_share_win=winning_total / winning_quantity if winning_quantity > 0 else ZERO,
        avg_per_share_loss=abs(losing_total / losing_quantity) if losing_quantity > 0 else ZERO,
        largest_gain=max((t.pnl for t in winners), default=ZERO),
        largest_loss=max((abs(t.pnl) for t in losers), default=ZERO),
        max_consecutive_wins=max_wins,
        max_consecutive_losses=max_losses,
        avg_hold_time=hold_total / total if total > 0 else timedelta(),
        win_rate=_percent(len(winners), total),
        profit_factor=rr,
        best_trade=best_trade,
        worst_trade=worst_trade,
        long=_side_metrics([t for t in trades if t.side == "long"]),
        short=_side_metrics([t for t in trades if t.side == "short"]),
        realized_rr=rr,
        expected_value=win_fraction * avg_win - (1 - win_fraction) * avg_loss,
        required_win_rate=required_win_rate(rr),
    )

    logger.debug(
        "Analyzed %d trades: %d wins, %d losses, %d break-even",
        total, len(winners), len(losers), len(break_even),
    )
    return analytics


def summarize_trades(trades: Sequence[Trade], recent_count: int = 5) -> TradesSummary:
    """Headline counts plus the last ``recent_count`` trades, newest first.

    Recency follows input order, the order the record store returned.
    """
    trades = list(trades)
    total = len(trades)
    winning = sum(1 for t in trades if t.pnl > 0)
    recent = trades[-recent_count:] if recent_count > 0 else []

    return TradesSummary(
        total_trades=total,
        winning_trades=winning,
        losing_trades=sum(1 for t in trades if t.pnl < 0),
        total_pnl=sum_pnl(trades),
        win_rate=_percent(winning, total),
        recent_trades=tuple(reversed(recent)),
    )
