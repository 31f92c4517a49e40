"""Tests for P&L calculation and the Trade model.

**Feature: trade-analytics**
"""

from datetime import datetime
from decimal import Decimal

import pydantic
import pytest
import pytz
from hypothesis import given, settings
from hypothesis import strategies as st

from tradejournal.errors import ValidationError
from tradejournal.models import Trade
from tradejournal.pnl import calculate_pnl, quantize_money, side_sign, sum_pnl, to_decimal

from tests.helpers import make_trade

prices = st.decimals(min_value=Decimal("0.01"), max_value=Decimal("10000"), places=3)
quantities = st.decimals(min_value=Decimal("0.001"), max_value=Decimal("100000"), places=3)


class TestPnlPrecision:
    """
    **Feature: trade-analytics, Property 1: Decimal P&L Precision**

    P&L is computed with exact decimal arithmetic and rounded to 3 places.
    """

    def test_float_inputs_do_not_accumulate_error(self):
        result = calculate_pnl(1.234, 1.567, 1000, "long")

        assert result.pnl == Decimal("333.000")
        assert result.pnl_percent == Decimal("26.985")

    def test_short_profits_when_price_falls(self):
        result = calculate_pnl(50, 45, 200, "short")

        assert result.pnl == Decimal("1000.000")
        assert result.pnl_percent == Decimal("10.000")

    def test_long_loses_when_price_falls(self):
        result = calculate_pnl("50", "45", "200", "long")

        assert result.pnl == Decimal("-1000.000")
        assert result.pnl_percent == Decimal("-10.000")

    def test_rounds_half_away_from_zero(self):
        assert quantize_money(Decimal("0.0005")) == Decimal("0.001")
        assert quantize_money(Decimal("-0.0005")) == Decimal("-0.001")

    def test_results_have_fixed_scale(self):
        result = calculate_pnl(10, 11, 3, "long")

        assert result.pnl.as_tuple().exponent == -3
        assert result.pnl_percent.as_tuple().exponent == -3

    @given(entry=prices, exit_=prices, qty=quantities)
    @settings(max_examples=100)
    def test_long_and_short_are_mirror_images(self, entry, exit_, qty):
        long_result = calculate_pnl(entry, exit_, qty, "long")
        short_result = calculate_pnl(entry, exit_, qty, "short")

        assert long_result.pnl == -short_result.pnl
        assert long_result.pnl_percent == -short_result.pnl_percent

    @given(entry=prices, exit_=prices, qty=quantities)
    @settings(max_examples=100)
    def test_matches_exact_formula(self, entry, exit_, qty):
        result = calculate_pnl(entry, exit_, qty, "long")

        assert result.pnl == quantize_money((exit_ - entry) * qty)


class TestPnlValidation:
    """
    **Feature: trade-analytics, Property 2: Magnitude Validation**

    Non-positive prices or quantities are rejected before a trade exists.
    """

    @pytest.mark.parametrize(
        "entry, exit_, qty, field",
        [
            (0, 10, 1, "entry_price"),
            (-5, 10, 1, "entry_price"),
            (10, 0, 1, "exit_price"),
            (10, 12, 0, "quantity"),
            (10, 12, -3, "quantity"),
        ],
    )
    def test_non_positive_magnitude(self, entry, exit_, qty, field):
        with pytest.raises(ValidationError, match="non-positive magnitude") as exc_info:
            calculate_pnl(entry, exit_, qty, "long")

        assert exc_info.value.field == field
        assert exc_info.value.code == "VALIDATION_ERROR"

    def test_validation_error_is_a_value_error(self):
        with pytest.raises(ValueError):
            calculate_pnl(10, 12, 0, "long")

    def test_unknown_side(self):
        with pytest.raises(ValidationError):
            side_sign("flat")

    def test_from_prices_refuses_invalid_trade(self):
        with pytest.raises(ValidationError):
            Trade.from_prices(
                symbol="AAPL",
                side="long",
                entry_price=0,
                exit_price=10,
                quantity=1,
                entry_time=datetime(2024, 1, 2, 9, 30),
                exit_time=datetime(2024, 1, 2, 10, 0),
            )


class TestTradeModel:
    """Trade records carry derived P&L and enforce their invariants."""

    def test_from_prices_derives_pnl(self):
        trade = Trade.from_prices(
            symbol="aapl",
            side="short",
            entry_price=100,
            exit_price=90,
            quantity=5,
            entry_time=datetime(2024, 1, 2, 9, 30),
            exit_time=datetime(2024, 1, 2, 10, 0),
            rule_violation="moved stop",
            confidence=4,
        )

        assert trade.symbol == "AAPL"
        assert trade.pnl == Decimal("50.000")
        assert trade.pnl_percent == Decimal("10.000")
        assert trade.confidence == 4
        assert trade.id

    def test_trade_is_immutable(self):
        trade = make_trade(10)

        with pytest.raises(pydantic.ValidationError):
            trade.pnl = Decimal("5")

    def test_exit_before_entry_rejected(self):
        with pytest.raises(pydantic.ValidationError):
            Trade(
                symbol="AAPL",
                side="long",
                entry_price=10,
                exit_price=11,
                quantity=1,
                entry_time=datetime(2024, 1, 2, 10, 0),
                exit_time=datetime(2024, 1, 2, 9, 0),
                pnl=1,
                pnl_percent=10,
            )

    def test_mixed_naive_and_aware_times_rejected(self):
        with pytest.raises(pydantic.ValidationError, match="both carry a timezone"):
            Trade(
                symbol="AAPL",
                side="long",
                entry_price=10,
                exit_price=11,
                quantity=1,
                entry_time=datetime(2024, 1, 2, 9, 0),
                exit_time=pytz.utc.localize(datetime(2024, 1, 2, 10, 0)),
                pnl=1,
                pnl_percent=10,
            )

    def test_confidence_range(self):
        with pytest.raises(pydantic.ValidationError):
            make_trade(10, confidence=6)

    def test_stored_pnl_is_quantized(self):
        trade = make_trade(10)
        reloaded = Trade.model_validate({**trade.model_dump(), "pnl": 12.5, "pnl_percent": 1.25})

        assert reloaded.pnl == Decimal("12.500")
        assert reloaded.pnl_percent == Decimal("1.250")


class TestDecimalHelpers:
    def test_to_decimal_uses_shortest_float_repr(self):
        assert to_decimal(0.1) == Decimal("0.1")

    def test_sum_pnl_empty_is_zero(self):
        assert sum_pnl([]) == Decimal("0")

    def test_sum_pnl_is_exact(self):
        trades = [make_trade("0.1"), make_trade("0.2")]

        assert sum_pnl(trades) == Decimal("0.3")
