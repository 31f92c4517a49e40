"""Trade builders and hypothesis strategies shared by the test modules."""

from datetime import datetime, timedelta
from decimal import Decimal
from typing import Optional

from hypothesis import strategies as st

from tradejournal.models import Trade

BASE_TIME = datetime(2024, 1, 1, 9, 30)
ENTRY_PRICE = Decimal("1000")


def make_trade(
    pnl,
    exit_time: Optional[datetime] = None,
    side: str = "long",
    hold: timedelta = timedelta(minutes=30),
    **extra,
) -> Trade:
    """Build a valid one-unit trade whose P&L is exactly ``pnl``.

    Entry is fixed at 1000, so ``pnl`` must stay within (-1000, 1000).
    """
    pnl = Decimal(str(pnl))
    exit_time = exit_time or BASE_TIME
    exit_price = ENTRY_PRICE + pnl if side == "long" else ENTRY_PRICE - pnl
    return Trade.from_prices(
        symbol=extra.pop("symbol", "TEST"),
        side=side,
        entry_price=ENTRY_PRICE,
        exit_price=exit_price,
        quantity=1,
        entry_time=exit_time - hold,
        exit_time=exit_time,
        **extra,
    )


def sequence(pnls, start: datetime = BASE_TIME, step: timedelta = timedelta(hours=1), **extra) -> list[Trade]:
    """Trades closing one ``step`` apart, in the given P&L order."""
    return [make_trade(pnl, exit_time=start + step * i, **extra) for i, pnl in enumerate(pnls)]


@st.composite
def trades_strategy(draw, min_size: int = 0, max_size: int = 40):
    """Generate lists of valid trades with mixed sides, outcomes and exit times."""
    count = draw(st.integers(min_value=min_size, max_value=max_size))
    trades = []
    for _ in range(count):
        trades.append(make_trade(
            pnl=draw(st.integers(min_value=-900, max_value=900)),
            exit_time=draw(st.datetimes(
                min_value=datetime(2023, 1, 1),
                max_value=datetime(2025, 12, 31),
            )),
            side=draw(st.sampled_from(["long", "short"])),
            hold=timedelta(minutes=draw(st.integers(min_value=0, max_value=600))),
            rule_violation=draw(st.one_of(
                st.none(),
                st.just(""),
                st.sampled_from(["exited too early", "fomo chase", "moved stop", "bad luck", "no setup"]),
            )),
        ))
    return trades
