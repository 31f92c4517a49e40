"""Tests for the equity curve.

**Feature: trade-analytics**
"""

from datetime import datetime, timedelta
from decimal import Decimal

import pytz
from hypothesis import given, settings

from tradejournal.analytics import build_equity_curve

from tests.helpers import BASE_TIME, make_trade, sequence, trades_strategy

NEW_YORK = pytz.timezone("America/New_York")


class TestEquityCurve:
    """
    **Feature: trade-analytics, Property 8: Equity Curve**

    The curve accumulates P&L in exit order and measures drawdown from the
    running peak.
    """

    def test_cumulative_and_drawdown(self):
        curve = build_equity_curve(sequence([500, -300, 200, -100]))

        assert [p.cumulative_pnl for p in curve.points] == [500, 200, 400, 300]
        assert [p.drawdown for p in curve.points] == [0, 300, 100, 200]
        assert curve.current_balance == Decimal("300")
        assert curve.peak_value == Decimal("500")
        assert curve.max_drawdown == Decimal("300")
        assert curve.max_drawdown_percent == 60.0

    def test_points_follow_exit_time(self):
        late = make_trade(-100, exit_time=BASE_TIME + timedelta(days=1))
        early = make_trade(250, exit_time=BASE_TIME)

        curve = build_equity_curve([late, early])

        assert [p.trade_id for p in curve.points] == [early.id, late.id]
        assert [p.date for p in curve.points] == [early.exit_time, late.exit_time]

    def test_mixed_naive_and_aware_exit_times(self):
        naive = make_trade(-100, exit_time=datetime(2024, 1, 2, 9))
        aware = make_trade(250, exit_time=NEW_YORK.localize(datetime(2024, 1, 2, 3)))

        curve = build_equity_curve([naive, aware])

        # 03:00 in New York is 08:00 UTC, before the naive 09:00.
        assert [p.trade_id for p in curve.points] == [aware.id, naive.id]
        assert curve.max_drawdown == Decimal("100")

    def test_never_positive_has_no_percentage(self):
        curve = build_equity_curve(sequence([-100, -50]))

        assert curve.peak_value == 0
        assert curve.max_drawdown == Decimal("150")
        assert curve.max_drawdown_percent == 0.0

    def test_empty(self):
        curve = build_equity_curve([])

        assert curve.points == ()
        assert curve.current_balance == 0
        assert curve.max_drawdown == 0
        assert curve.max_drawdown_percent == 0.0

    @given(trades=trades_strategy(min_size=1))
    @settings(max_examples=100, deadline=None)
    def test_final_balance_is_total_pnl(self, trades):
        curve = build_equity_curve(trades)

        assert len(curve.points) == len(trades)
        assert curve.current_balance == sum(t.pnl for t in trades)
        assert curve.points[-1].cumulative_pnl == curve.current_balance

    @given(trades=trades_strategy())
    @settings(max_examples=100, deadline=None)
    def test_drawdown_never_negative(self, trades):
        curve = build_equity_curve(trades)

        assert all(p.drawdown >= 0 for p in curve.points)
        assert curve.max_drawdown == max((p.drawdown for p in curve.points), default=0)
        assert curve.peak_value >= 0
