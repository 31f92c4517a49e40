"""Equity curve and drawdown."""

from typing import Iterable

from tradejournal.analytics.temporal import chronological
from tradejournal.models import EquityCurve, EquityPoint, Trade
from tradejournal.pnl import ZERO


def build_equity_curve(trades: Iterable[Trade]) -> EquityCurve:
    """Build the cumulative P&L curve of a trade set.

    Trades are walked by exit time. The peak starts at zero, so a series
    that never goes positive has no meaningful drawdown percentage and
    reports 0 for it.

    Args:
        trades: Closed trades in any order.

    Returns:
        EquityCurve with one point per trade and the drawdown summary.
    """
    cumulative = ZERO
    peak = ZERO
    max_drawdown = ZERO
    points = []

    for trade in chronological(trades):
        cumulative += trade.pnl
        peak = max(peak, cumulative)
        drawdown = peak - cumulative
        max_drawdown = max(max_drawdown, drawdown)

        points.append(EquityPoint(
            date=trade.exit_time,
            cumulative_pnl=cumulative,
            trade_id=trade.id,
            drawdown=drawdown,
        ))

    max_drawdown_percent = float(max_drawdown / peak * 100) if peak > 0 else 0.0

    return EquityCurve(
        points=tuple(points),
        current_balance=cumulative,
        peak_value=peak,
        max_drawdown=max_drawdown,
        max_drawdown_percent=max_drawdown_percent,
    )
