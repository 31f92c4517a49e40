"""Result models produced by the analytics engine.

All results are frozen and rebuilt from scratch on every call.
"""

from datetime import datetime, timedelta
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from tradejournal.models.trade import Trade


class SideMetrics(BaseModel):
    """Performance of the long or short subset of trades."""

    trades: tuple[Trade, ...] = Field(default=(), description="Trades on this side")
    pnl: Decimal = Field(default=Decimal("0"), description="Total P&L")
    win_rate: float = Field(default=0.0, ge=0, le=100, description="Win rate percentage")
    avg_win: Decimal = Field(default=Decimal("0"), ge=0, description="Average winning P&L")
    avg_loss: Decimal = Field(default=Decimal("0"), ge=0, description="Average losing P&L magnitude")
    rr: float = Field(default=0.0, ge=0, description="Average win / average loss")

    model_config = {"frozen": True}


class TradeAnalytics(BaseModel):
    """Portfolio level performance snapshot."""

    total_trades: int = Field(..., ge=0)
    winning_trades: tuple[Trade, ...]
    losing_trades: tuple[Trade, ...]
    break_even_trades: tuple[Trade, ...]
    total_pnl: Decimal
    avg_win: Decimal = Field(..., ge=0)
    avg_loss: Decimal = Field(..., ge=0)
    avg_trade_pnl: Decimal
    avg_trade_pnl_percent: Decimal
    avg_per_share_win: Decimal = Field(..., ge=0)
    avg_per_share_loss: Decimal = Field(..., ge=0)
    largest_gain: Decimal = Field(..., ge=0)
    largest_loss: Decimal = Field(..., ge=0)
    max_consecutive_wins: int = Field(..., ge=0)
    max_consecutive_losses: int = Field(..., ge=0)
    avg_hold_time: timedelta
    win_rate: float = Field(..., ge=0, le=100)
    profit_factor: float = Field(..., ge=0, description="avg win / avg loss, inf without losses")
    best_trade: Optional[Trade] = None
    worst_trade: Optional[Trade] = None
    long: SideMetrics
    short: SideMetrics
    realized_rr: float = Field(..., ge=0)
    expected_value: Decimal
    required_win_rate: float = Field(..., ge=0, le=100, description="Breakeven win rate, 0 when undefined")

    model_config = {"frozen": True}

    @property
    def avg_hold_time_ms(self) -> float:
        return self.avg_hold_time / timedelta(milliseconds=1)

    @property
    def long_pnl(self) -> Decimal:
        return self.long.pnl

    @property
    def short_pnl(self) -> Decimal:
        return self.short.pnl


class TradesSummary(BaseModel):
    """Headline numbers with the most recent trades."""

    total_trades: int = Field(..., ge=0)
    winning_trades: int = Field(..., ge=0)
    losing_trades: int = Field(..., ge=0)
    total_pnl: Decimal
    win_rate: float = Field(..., ge=0, le=100)
    recent_trades: tuple[Trade, ...]

    model_config = {"frozen": True}


class EquityPoint(BaseModel):
    """Cumulative P&L after one trade closed."""

    date: datetime = Field(..., description="Exit time of the trade")
    cumulative_pnl: Decimal
    trade_id: str
    drawdown: Decimal = Field(..., ge=0, description="Distance below the running peak")

    model_config = {"frozen": True}


class EquityCurve(BaseModel):
    """Time ordered cumulative P&L with drawdown statistics."""

    points: tuple[EquityPoint, ...] = ()
    current_balance: Decimal = Decimal("0")
    peak_value: Decimal = Decimal("0")
    max_drawdown: Decimal = Decimal("0")
    max_drawdown_percent: float = 0.0

    model_config = {"frozen": True}


class BucketStats(BaseModel):
    """Statistics of the trades falling into one bucket."""

    trade_count: int = Field(default=0, ge=0)
    total_pnl: Decimal = Decimal("0")
    win_count: int = Field(default=0, ge=0)
    win_rate: float = Field(default=0.0, ge=0, le=100)
    avg_trade_pnl: Decimal = Decimal("0")

    model_config = {"frozen": True}


class DayOfWeekSummary(BucketStats):
    """Bucket for one weekday (0=Sunday .. 6=Saturday)."""

    day_index: int = Field(..., ge=0, le=6)
    day_label: str


class HourSummary(BucketStats):
    """Bucket for one hour of the day."""

    hour: int = Field(..., ge=0, le=23)
    hour_label: str


class PeriodSummary(BucketStats):
    """Bucket for one calendar week or month."""

    period_key: str
    period_label: str
    start_date: datetime
    end_date: datetime


class DailyPnl(BucketStats):
    """Bucket for one calendar day, used by the P&L calendar."""

    date_key: str
    date: datetime = Field(..., description="Start of the day")
    loss_count: int = Field(default=0, ge=0)
    trades: tuple[Trade, ...] = ()


class DailyPnlData(BaseModel):
    """Per-day buckets plus the maxima used to scale heat map colors."""

    days: dict[str, DailyPnl] = Field(default_factory=dict)
    max_profit: Decimal = Field(default=Decimal("0"), ge=0)
    max_loss: Decimal = Field(default=Decimal("0"), ge=0)

    model_config = {"frozen": True}


class MistakeSummary(BaseModel):
    """Aggregate statistics for one mistake category."""

    category_id: str
    label: str
    count: int = Field(..., gt=0)
    trades: tuple[Trade, ...]
    total_pnl: Decimal
    avg_pnl: Decimal
    win_rate: float = Field(..., ge=0, le=100)

    model_config = {"frozen": True}


class MistakeAnalytics(BaseModel):
    """Behavioral statistics over trades annotated with rule violations."""

    total_trades_with_mistakes: int = Field(..., ge=0)
    total_trades_without_mistakes: int = Field(..., ge=0)
    by_frequency: tuple[MistakeSummary, ...] = Field(
        ..., description="Summaries ordered by count, most frequent first"
    )
    pnl_with_mistakes: Decimal
    pnl_without_mistakes: Decimal
    avg_pnl_with_mistakes: Decimal
    avg_pnl_without_mistakes: Decimal
    top_mistake: Optional[MistakeSummary] = None
    costliest_mistake: Optional[MistakeSummary] = None

    model_config = {"frozen": True}

    @property
    def by_impact(self) -> tuple[MistakeSummary, ...]:
        """The same summaries ordered by total P&L, most negative first."""
        return tuple(sorted(self.by_frequency, key=lambda summary: summary.total_pnl))


class ColorIntensity(BaseModel):
    """Display colors for one heat map cell."""

    background_color: str = Field(..., description="CSS color, rgba() when intensity is set")
    text_color: str = Field(..., description="Foreground color or 'inherit'")
    base_color: Optional[str] = Field(default=None, description="Hex color before alpha blending")
    intensity: Optional[float] = Field(default=None, ge=0, description="Alpha applied to base_color")

    model_config = {"frozen": True}

    @property
    def is_neutral(self) -> bool:
        return self.intensity is None
