"""Trade filtering and date range presets.

These helpers select the subset of trades the analytics run on. They take
"today" as an argument instead of reading the clock, so the same inputs
always select the same trades.
"""

from datetime import date, datetime, timedelta
from typing import Iterable, Literal, Optional

from pydantic import BaseModel, Field

from tradejournal.analytics import temporal
from tradejournal.models import Trade

PnlFilter = Literal["all", "winning", "losing"]

DateRangePreset = Literal[
    "all",
    "current_week",
    "current_month",
    "current_year",
    "last_30_days",
    "last_60_days",
    "last_90_days",
]

DATE_RANGE_LABELS: dict[str, str] = {
    "all": "All Time",
    "current_week": "This Week",
    "current_month": "This Month",
    "current_year": "This Year",
    "last_30_days": "Last 30 Days",
    "last_60_days": "Last 60 Days",
    "last_90_days": "Last 90 Days",
}

_TRAILING_DAYS = {"last_30_days": 30, "last_60_days": 60, "last_90_days": 90}


class TradeFilters(BaseModel):
    """Criteria for narrowing down a trade list. Defaults select everything."""

    search_query: str = Field(default="", description="Case-insensitive match on symbol or strategy")
    side: Literal["all", "long", "short"] = "all"
    pnl: PnlFilter = "all"
    strategy: str = Field(default="all", description="Exact strategy name or 'all'")
    date_from: Optional[datetime] = Field(default=None, description="Earliest exit time, inclusive")
    date_to: Optional[datetime] = Field(default=None, description="Last exit day, inclusive of the whole day")

    model_config = {"frozen": True}

    @property
    def active_filter_count(self) -> int:
        """Number of active filters, not counting the search query."""
        count = 0
        if self.side != "all":
            count += 1
        if self.pnl != "all":
            count += 1
        if self.strategy != "all":
            count += 1
        if self.date_from or self.date_to:
            count += 1
        return count

    @property
    def has_active_filters(self) -> bool:
        return self.search_query != "" or self.active_filter_count > 0


def _matches(trade: Trade, filters: TradeFilters) -> bool:
    if filters.search_query:
        query = filters.search_query.lower()
        matches_symbol = query in trade.symbol.lower()
        matches_strategy = trade.strategy is not None and query in trade.strategy.lower()
        if not matches_symbol and not matches_strategy:
            return False

    if filters.side != "all" and trade.side != filters.side:
        return False

    if filters.pnl == "winning" and trade.pnl <= 0:
        return False
    if filters.pnl == "losing" and trade.pnl >= 0:
        return False

    if filters.strategy != "all" and trade.strategy != filters.strategy:
        return False

    if filters.date_from is not None and trade.exit_time < filters.date_from:
        return False
    if filters.date_to is not None and trade.exit_time > temporal.day_end(filters.date_to):
        return False

    return True


def filter_trades(trades: Iterable[Trade], filters: TradeFilters) -> list[Trade]:
    """Trades matching every active filter, in input order."""
    return [trade for trade in trades if _matches(trade, filters)]


def unique_strategies(trades: Iterable[Trade]) -> list[str]:
    """Distinct non-empty strategy names, sorted."""
    return sorted({trade.strategy for trade in trades if trade.strategy})


def date_range_start(preset: DateRangePreset, today: date) -> Optional[datetime]:
    """First instant included by a date range preset.

    Args:
        preset: One of the DateRangePreset values.
        today: The caller's current local date.

    Returns:
        Midnight of the first included day, or None for "all".
    """
    if preset == "all":
        return None

    midnight = datetime(today.year, today.month, today.day)

    if preset == "current_week":
        return temporal.week_start(midnight)
    if preset == "current_month":
        return temporal.month_start(midnight)
    if preset == "current_year":
        return midnight.replace(month=1, day=1)
    if preset in _TRAILING_DAYS:
        # The range includes today.
        return midnight - timedelta(days=_TRAILING_DAYS[preset] - 1)

    raise ValueError(f"Invalid date range: {preset}. Must be one of {list(DATE_RANGE_LABELS)}")
