"""P&L calculation with exact decimal arithmetic.

Every place that derives or sums P&L goes through the helpers in this
module so trades, aggregates and the equity curve share the same decimal
semantics.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Literal, Union

from pydantic import BaseModel, Field

from tradejournal.errors import ValidationError

TradeSide = Literal["long", "short"]

Number = Union[Decimal, float, int, str]

MONEY_PLACES = Decimal("0.001")
ZERO = Decimal("0")
HUNDRED = Decimal("100")


class PnlResult(BaseModel):
    """Realized P&L of a single trade."""

    pnl: Decimal = Field(..., description="Absolute P&L, 3 decimal places")
    pnl_percent: Decimal = Field(..., description="P&L relative to entry price, 3 decimal places")

    model_config = {"frozen": True}


def to_decimal(value: Number) -> Decimal:
    """Convert a number to Decimal without binary floating point noise.

    Floats go through ``str`` so that ``1.234`` becomes ``Decimal("1.234")``
    rather than its exact binary expansion.
    """
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


def quantize_money(value: Number) -> Decimal:
    """Round a value to 3 decimal places, half away from zero."""
    return to_decimal(value).quantize(MONEY_PLACES, rounding=ROUND_HALF_UP)


def side_sign(side: TradeSide) -> int:
    """Return +1 for long and -1 for short positions."""
    if side == "long":
        return 1
    if side == "short":
        return -1
    raise ValidationError(f"Unknown trade side: {side!r}", field="side")


def signed_price_diff(entry_price: Number, exit_price: Number, side: TradeSide) -> Decimal:
    """Price move in the position's favour (exit - entry for long, entry - exit for short)."""
    return side_sign(side) * (to_decimal(exit_price) - to_decimal(entry_price))


def sum_pnl(trades: Iterable) -> Decimal:
    """Sum the ``pnl`` of trades as a Decimal (``0`` for no trades)."""
    return sum((trade.pnl for trade in trades), ZERO)


def calculate_pnl(
    entry_price: Number,
    exit_price: Number,
    quantity: Number,
    side: TradeSide,
) -> PnlResult:
    """Calculate P&L and P&L percent for a closed position.

    Args:
        entry_price: Price the position was opened at. Must be positive.
        exit_price: Price the position was closed at. Must be positive.
        quantity: Position size. Must be positive.
        side: "long" or "short".

    Returns:
        PnlResult with both values rounded to 3 decimal places.

    Raises:
        ValidationError: If any price or the quantity is not positive.
    """
    entry = to_decimal(entry_price)
    exit_ = to_decimal(exit_price)
    qty = to_decimal(quantity)

    for field, value in (("entry_price", entry), ("exit_price", exit_), ("quantity", qty)):
        if not value.is_finite() or value <= 0:
            raise ValidationError("non-positive magnitude", field=field)

    diff = signed_price_diff(entry, exit_, side)

    return PnlResult(
        pnl=quantize_money(diff * qty),
        pnl_percent=quantize_money(diff / entry * HUNDRED),
    )
