"""Timing commands for TradeJournal CLI.

Breaks performance down by weekday, hour, week and month, and draws a
monthly P&L calendar heat map.
"""

from datetime import datetime, timedelta
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.table import Table
from rich.text import Text

from tradejournal.analytics import (
    blend_hex,
    daily_pnl,
    day_of_week_breakdown,
    day_pnl,
    hour_of_day_breakdown,
    period_breakdown,
    pnl_color,
)
from tradejournal.analytics import temporal
from tradejournal.cli.common import (
    get_config,
    handle_errors,
    load_selected_trades,
    no_trades_panel,
    trade_set_options,
)
from tradejournal.formatting import format_compact_pnl, format_signed_money, pnl_style
from tradejournal.models import BucketStats

console = Console()

BREAKDOWN_TITLES = {
    "day": "P&L by Day of Week",
    "hour": "P&L by Time of Day",
    "week": "P&L by Week",
    "month": "P&L by Month",
}


def _stats_cells(stats: BucketStats) -> list[str]:
    style = pnl_style(stats.total_pnl)
    if stats.trade_count == 0:
        return ["0", "[dim]-[/dim]", "[dim]-[/dim]", "[dim]-[/dim]"]
    return [
        str(stats.trade_count),
        f"[{style}]{format_signed_money(stats.total_pnl)}[/{style}]",
        f"{stats.win_rate:.1f}%",
        format_signed_money(stats.avg_trade_pnl),
    ]


@click.command()
@trade_set_options
@click.option(
    "--by",
    "group_by",
    type=click.Choice(list(BREAKDOWN_TITLES)),
    default="day",
    show_default=True,
    help="Bucket trades by weekday, exit hour, week or month.",
)
@click.pass_context
@handle_errors
def breakdown(
    ctx: click.Context,
    trades_file: Optional[Path],
    date_range: Optional[str],
    side: str,
    strategy: str,
    search: str,
    group_by: str,
) -> None:
    """Display P&L grouped by a time period.

    \b
    Examples:
      tradejournal breakdown --by day
      tradejournal breakdown --by hour
      tradejournal breakdown --by month --range current_year
    """
    trades = load_selected_trades(ctx, trades_file, date_range, side, strategy, search)

    if group_by != "day" and not trades:
        no_trades_panel(BREAKDOWN_TITLES[group_by])
        return

    table = Table(title=BREAKDOWN_TITLES[group_by], show_header=True, header_style="bold cyan")

    if group_by == "day":
        table.add_column("Day", style="bold")
        rows = [(s.day_label, s) for s in day_of_week_breakdown(trades)]
    elif group_by == "hour":
        table.add_column("Hour", style="bold")
        rows = [(s.hour_label, s) for s in hour_of_day_breakdown(trades)]
    else:
        table.add_column("Period", style="bold")
        table.add_column("Dates", style="dim")
        rows = [
            (s.period_label, f"{s.start_date:%Y-%m-%d} → {s.end_date:%Y-%m-%d}", s)
            for s in period_breakdown(trades, group_by)
        ]

    table.add_column("Trades", justify="right")
    table.add_column("P&L", justify="right")
    table.add_column("Win Rate", justify="right")
    table.add_column("Avg Trade", justify="right")

    for *labels, stats in rows:
        table.add_row(*labels, *_stats_cells(stats))

    console.print(table)


def _parse_month(value: str) -> datetime:
    try:
        return datetime.strptime(value, "%Y-%m")
    except ValueError:
        raise click.BadParameter(f"Invalid month: {value}. Use YYYY-MM")


@click.command()
@trade_set_options
@click.option("--month", default=None, help="Month to show (YYYY-MM). Defaults to the latest trade's month.")
@click.pass_context
@handle_errors
def calendar(
    ctx: click.Context,
    trades_file: Optional[Path],
    date_range: Optional[str],
    side: str,
    strategy: str,
    search: str,
    month: Optional[str],
) -> None:
    """Display a monthly P&L calendar heat map.

    Cell shading scales with the day's P&L against the best and worst
    days of the selected trades.

    \b
    Examples:
      tradejournal calendar
      tradejournal calendar --month 2024-03
    """
    trades = load_selected_trades(ctx, trades_file, date_range, side, strategy, search)

    if not trades:
        no_trades_panel("P&L Calendar")
        return

    colors = get_config(ctx).colors
    data = daily_pnl(trades)

    if month:
        anchor = _parse_month(month)
    else:
        latest = max(trade.exit_time for trade in trades)
        anchor = datetime(latest.year, latest.month, 1)

    first = temporal.month_start(anchor)
    last = temporal.month_end(anchor)

    table = Table(
        title=temporal.month_label(anchor),
        show_header=True,
        header_style="bold cyan",
        show_lines=True,
    )
    for index in temporal.DISPLAY_WEEKDAY_ORDER:
        table.add_column(temporal.weekday_label(index), justify="center", min_width=8)

    cells: list[Text] = [Text("") for _ in range(first.weekday())]
    month_total = 0
    day = first
    while day <= last:
        bucket = day_pnl(data, day)
        if bucket is None:
            cells.append(Text(f"{day.day}", style="dim"))
        else:
            month_total += bucket.total_pnl
            color = pnl_color(
                bucket.total_pnl,
                data.max_profit,
                data.max_loss,
                colors.profit,
                colors.loss,
                colors.neutral,
            )
            background = blend_hex(color, colors.backdrop)
            foreground = "" if color.text_color == "inherit" else f"{color.text_color} "
            cells.append(Text(
                f"{day.day}\n{format_compact_pnl(bucket.total_pnl)}",
                style=f"{foreground}on {background}",
            ))
        day += timedelta(days=1)

    while len(cells) % 7:
        cells.append(Text(""))
    for start in range(0, len(cells), 7):
        table.add_row(*cells[start:start + 7])

    console.print(table)

    style = pnl_style(month_total)
    console.print(f"\n[bold]Month P&L:[/bold] [{style}]{format_signed_money(month_total)}[/{style}]")
