"""Number and duration formatting for terminal output."""

import math
from datetime import timedelta
from decimal import Decimal
from typing import Union

Amount = Union[Decimal, float, int]


def format_compact_pnl(value: Amount) -> str:
    """Format P&L compactly for small cells: +$12, -$1.5K, +$2.3M."""
    abs_value = abs(float(value))
    sign = "+" if value >= 0 else "-"

    if abs_value >= 1_000_000:
        return f"{sign}${abs_value / 1_000_000:.1f}M"
    if abs_value >= 1_000:
        return f"{sign}${abs_value / 1_000:.1f}K"
    return f"{sign}${abs_value:.0f}"


def format_signed_money(value: Amount) -> str:
    """Format P&L with sign and thousands separators: +$1,234.50."""
    sign = "+" if value >= 0 else "-"
    return f"{sign}${abs(float(value)):,.2f}"


def pnl_style(value: Amount) -> str:
    """Rich style name for a P&L value."""
    if value > 0:
        return "green"
    if value < 0:
        return "red"
    return "dim"


def format_ratio(value: float) -> str:
    """Format a ratio, showing infinity as the symbol."""
    if math.isinf(value):
        return "∞"
    return f"{value:.2f}"


def format_duration(delta: timedelta) -> str:
    """Format a hold time as 2d 3h, 3h 20m, 45m or 30s."""
    total_seconds = int(delta.total_seconds())
    days, remainder = divmod(total_seconds, 86400)
    hours, remainder = divmod(remainder, 3600)
    minutes, seconds = divmod(remainder, 60)

    if days:
        return f"{days}d {hours}h"
    if hours:
        return f"{hours}h {minutes}m"
    if minutes:
        return f"{minutes}m"
    return f"{seconds}s"
