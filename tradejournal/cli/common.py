"""Shared helpers for TradeJournal commands.

Loads configuration and the trade snapshot, applies the common trade-set
options and renders errors.
"""

import functools
from datetime import date, datetime
from pathlib import Path
from typing import Optional

import click
import pytz
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from tradejournal.analytics.filters import DATE_RANGE_LABELS, TradeFilters, date_range_start, filter_trades
from tradejournal.analytics.temporal import in_zone_of
from tradejournal.config import AppConfig, load_config
from tradejournal.errors import JournalError, user_message
from tradejournal.models import Trade
from tradejournal.snapshot import load_trades, to_timezone

console = Console()


def get_config(ctx: click.Context) -> AppConfig:
    """Load the configuration once per invocation."""
    obj = ctx.ensure_object(dict)
    if "config" not in obj:
        obj["config"] = load_config(obj.get("config_path"))
    return obj["config"]


def show_error(error: BaseException) -> None:
    """Print an error panel."""
    console.print(Panel(
        f"[red]{escape(user_message(error))}[/red]",
        title="[bold red]Error[/bold red]",
        border_style="red",
    ))


def handle_errors(func):
    """Turn JournalError into an error panel and exit status 1."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except JournalError as e:
            show_error(e)
            raise SystemExit(1)

    return wrapper


def trade_set_options(func):
    """Add the options that select which trades a command analyzes."""
    options = [
        click.option(
            "--file", "trades_file",
            type=click.Path(dir_okay=False, path_type=Path),
            default=None,
            help="Trade snapshot (JSON). Defaults to journal.trades_file from config.",
        ),
        click.option(
            "--range", "date_range",
            type=click.Choice(list(DATE_RANGE_LABELS)),
            default=None,
            help="Date range preset. Defaults to journal.default_range from config.",
        ),
        click.option(
            "--side",
            type=click.Choice(["all", "long", "short"]),
            default="all",
            show_default=True,
            help="Only long or short trades.",
        ),
        click.option("--strategy", default="all", help="Only trades with this strategy."),
        click.option("--search", default="", help="Match symbol or strategy (case-insensitive)."),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _range_start(preset: str, timezone: Optional[str], trades: list[Trade]) -> Optional[datetime]:
    today = datetime.now(pytz.timezone(timezone)).date() if timezone else date.today()
    start = date_range_start(preset, today)

    if start is None:
        return None
    if timezone:
        return pytz.timezone(timezone).localize(start)
    if trades and trades[0].exit_time.tzinfo is not None:
        return in_zone_of(trades[0].exit_time, start)
    return start


def load_selected_trades(
    ctx: click.Context,
    trades_file: Optional[Path],
    date_range: Optional[str],
    side: str,
    strategy: str,
    search: str,
) -> list[Trade]:
    """Load the snapshot and narrow it down to the requested trades.

    Raises:
        JournalError: If the config or snapshot cannot be loaded.
    """
    config = get_config(ctx)
    trades = load_trades(trades_file or config.journal.trades_file)

    if config.journal.timezone:
        trades = to_timezone(trades, config.journal.timezone)

    preset = date_range or config.journal.default_range
    filters = TradeFilters(
        search_query=search,
        side=side,
        strategy=strategy,
        date_from=_range_start(preset, config.journal.timezone, trades),
    )
    return filter_trades(trades, filters)


def no_trades_panel(title: str) -> None:
    console.print(Panel(
        "[dim]No trades found[/dim]",
        title=f"[bold]{title}[/bold]",
        border_style="dim",
    ))
