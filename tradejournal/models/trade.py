"""Trade data model."""

import uuid
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from tradejournal.pnl import Number, TradeSide, calculate_pnl, quantize_money, to_decimal


class Trade(BaseModel):
    """Represents a closed position in the journal."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), description="Trade ID")
    symbol: str = Field(..., min_length=1, max_length=10, description="Ticker symbol")
    side: TradeSide = Field(..., description="Position side (long/short)")
    entry_price: Decimal = Field(..., gt=0, description="Entry price")
    exit_price: Decimal = Field(..., gt=0, description="Exit price")
    quantity: Decimal = Field(..., gt=0, description="Position size")
    entry_time: datetime = Field(..., description="Position open timestamp")
    exit_time: datetime = Field(..., description="Position close timestamp")
    pnl: Decimal = Field(..., description="Realized P&L")
    pnl_percent: Decimal = Field(..., description="Realized P&L percent of entry")
    strategy: Optional[str] = Field(default=None, max_length=50, description="Setup or strategy")
    notes: Optional[str] = Field(default=None, max_length=500, description="Free-form notes")
    psychology: Optional[str] = Field(default=None, description="Mindset during the trade")
    what_worked: Optional[str] = Field(default=None, description="What went well")
    what_failed: Optional[str] = Field(default=None, description="What went wrong")
    rule_violation: Optional[str] = Field(default=None, description="Broken rule, free text")
    confidence: Optional[int] = Field(default=None, ge=1, le=5, description="Confidence 1-5")

    model_config = {"frozen": True}

    @field_validator("symbol")
    @classmethod
    def _upper_symbol(cls, value: str) -> str:
        return value.upper()

    @field_validator("pnl", "pnl_percent")
    @classmethod
    def _fixed_scale(cls, value: Decimal) -> Decimal:
        return quantize_money(value)

    @model_validator(mode="after")
    def _check_times(self) -> "Trade":
        if (self.entry_time.tzinfo is None) != (self.exit_time.tzinfo is None):
            raise ValueError("Entry and exit times must both carry a timezone or both be naive")
        if self.exit_time < self.entry_time:
            raise ValueError("Exit time must be after entry time")
        return self

    @property
    def hold_time(self) -> timedelta:
        """Time the position was held."""
        return self.exit_time - self.entry_time

    @classmethod
    def from_prices(
        cls,
        symbol: str,
        side: TradeSide,
        entry_price: Number,
        exit_price: Number,
        quantity: Number,
        entry_time: datetime,
        exit_time: datetime,
        **extra,
    ) -> "Trade":
        """Build a trade, deriving pnl and pnl_percent from prices.

        Raises:
            tradejournal.errors.ValidationError: If a magnitude is not positive.
        """
        result = calculate_pnl(entry_price, exit_price, quantity, side)
        return cls(
            symbol=symbol,
            side=side,
            entry_price=to_decimal(entry_price),
            exit_price=to_decimal(exit_price),
            quantity=to_decimal(quantity),
            entry_time=entry_time,
            exit_time=exit_time,
            pnl=result.pnl,
            pnl_percent=result.pnl_percent,
            **extra,
        )
