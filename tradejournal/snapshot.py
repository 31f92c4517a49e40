"""Reading trade snapshots exported by the record store.

A snapshot is a JSON array of trade objects using the Trade field names,
for example::

    [
      {
        "id": "5f0c...",
        "symbol": "AAPL",
        "side": "long",
        "entry_price": 187.2,
        "exit_price": 189.9,
        "quantity": 100,
        "entry_time": "2024-03-04T09:41:00",
        "exit_time": "2024-03-04T10:15:00",
        "pnl": 270.0,
        "pnl_percent": 1.442,
        "rule_violation": "chased the open"
      }
    ]
"""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Iterable

import pydantic
import pytz

from tradejournal.errors import StorageError, ValidationError
from tradejournal.models import Trade

logger = logging.getLogger(__name__)


def parse_trades(raw: list) -> list[Trade]:
    """Validate decoded JSON records into trades.

    Raises:
        ValidationError: Naming the index of the first invalid record, or
            of the first record whose timestamps disagree with earlier
            records on carrying a timezone.
    """
    if not isinstance(raw, list):
        raise ValidationError("Trade snapshot must be a JSON array")

    trades = []
    for index, record in enumerate(raw):
        try:
            trades.append(Trade.model_validate(record))
        except pydantic.ValidationError as e:
            first = e.errors()[0]
            field = ".".join(str(part) for part in first["loc"]) or None
            raise ValidationError(
                f"Trade #{index} is invalid: {first['msg']} ({field or 'record'})",
                field=field,
            ) from e

        # Naive and aware datetimes do not compare.
        if (trades[0].exit_time.tzinfo is None) != (trades[-1].exit_time.tzinfo is None):
            raise ValidationError(
                f"Trade #{index} mixes timezone-aware and naive timestamps with earlier trades",
                field="exit_time",
            )
    return trades


def load_trades(path: Path) -> list[Trade]:
    """Load a JSON trade snapshot from disk.

    Args:
        path: Snapshot file.

    Returns:
        Trades in file order.

    Raises:
        StorageError: If the file is missing or is not valid JSON.
        ValidationError: If a record is not a valid trade.
    """
    try:
        with open(path, "r") as f:
            raw = json.load(f)
    except FileNotFoundError as e:
        raise StorageError(f"Trade file not found: {path}", operation="read") from e
    except (OSError, json.JSONDecodeError) as e:
        raise StorageError(f"Could not read {path}: {e}", operation="read") from e

    trades = parse_trades(raw)
    logger.info("Loaded %d trades from %s", len(trades), path)
    return trades


def localize(d: datetime, tz_name: str) -> datetime:
    """Express a timestamp in a named timezone. Naive values are taken as UTC."""
    zone = pytz.timezone(tz_name)
    if d.tzinfo is None:
        d = pytz.utc.localize(d)
    return d.astimezone(zone)


def to_timezone(trades: Iterable[Trade], tz_name: str) -> list[Trade]:
    """Copies of trades with entry and exit times converted to ``tz_name``.

    Calendar keys (day, week, hour, weekday) then follow that zone's local
    calendar.
    """
    return [
        trade.model_copy(update={
            "entry_time": localize(trade.entry_time, tz_name),
            "exit_time": localize(trade.exit_time, tz_name),
        })
        for trade in trades
    ]
