"""Performance overview commands for TradeJournal CLI.

Shows the headline analytics snapshot, risk:reward, the long/short split
and the most recent trades.
"""

from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from tradejournal.analytics import calculate_trade_analytics, summarize_trades
from tradejournal.cli.common import (
    get_config,
    handle_errors,
    load_selected_trades,
    no_trades_panel,
    trade_set_options,
)
from tradejournal.formatting import format_duration, format_ratio, format_signed_money, pnl_style
from tradejournal.models import SideMetrics, Trade

console = Console()


def _money(value) -> str:
    style = pnl_style(value)
    return f"[{style}]{format_signed_money(value)}[/{style}]"


def _trade_line(trade: Optional[Trade]) -> str:
    if trade is None:
        return "-"
    return f"{trade.symbol} {_money(trade.pnl)} ({trade.exit_time:%Y-%m-%d})"


def _side_row(table: Table, name: str, side: SideMetrics) -> None:
    table.add_row(
        name,
        str(len(side.trades)),
        _money(side.pnl),
        f"{side.win_rate:.1f}%",
        format_signed_money(side.avg_win),
        format_signed_money(-side.avg_loss),
        format_ratio(side.rr),
    )


@click.command()
@trade_set_options
@click.pass_context
@handle_errors
def overview(
    ctx: click.Context,
    trades_file: Optional[Path],
    date_range: Optional[str],
    side: str,
    strategy: str,
    search: str,
) -> None:
    """Display the performance overview.

    Win rate, average win and loss, profit factor, expected value,
    streaks and the long/short breakdown.

    \b
    Examples:
      tradejournal overview
      tradejournal overview --range last_30_days --side long
    """
    trades = load_selected_trades(ctx, trades_file, date_range, side, strategy, search)

    if not trades:
        no_trades_panel("Overview")
        return

    stats = calculate_trade_analytics(trades)

    summary = (
        f"[bold]Trades:[/bold] {stats.total_trades}  "
        f"([green]{len(stats.winning_trades)}W[/green] / "
        f"[red]{len(stats.losing_trades)}L[/red] / "
        f"[dim]{len(stats.break_even_trades)}BE[/dim])\n"
        f"[bold]Total P&L:[/bold] {_money(stats.total_pnl)}\n"
        f"[bold]Win Rate:[/bold] {stats.win_rate:.1f}%\n"
        f"[bold]Avg Trade:[/bold] {_money(stats.avg_trade_pnl)} ({stats.avg_trade_pnl_percent:.2f}%)\n"
        f"[bold]Avg Win:[/bold] {format_signed_money(stats.avg_win)}  |  "
        f"[bold]Avg Loss:[/bold] {format_signed_money(-stats.avg_loss)}\n"
        f"[bold]Per Share:[/bold] {format_signed_money(stats.avg_per_share_win)} / "
        f"{format_signed_money(-stats.avg_per_share_loss)}\n"
        f"[bold]Largest Gain:[/bold] {format_signed_money(stats.largest_gain)}  |  "
        f"[bold]Largest Loss:[/bold] {format_signed_money(-stats.largest_loss)}\n"
        f"[bold]Best Trade:[/bold] {_trade_line(stats.best_trade)}\n"
        f"[bold]Worst Trade:[/bold] {_trade_line(stats.worst_trade)}\n"
        f"[bold]Streaks:[/bold] {stats.max_consecutive_wins} wins / "
        f"{stats.max_consecutive_losses} losses\n"
        f"[bold]Avg Hold:[/bold] {format_duration(stats.avg_hold_time)}"
    )
    console.print(Panel(summary, title="[bold cyan]Performance[/bold cyan]", border_style="cyan"))

    required = (
        f"{stats.required_win_rate:.1f}%" if stats.required_win_rate > 0 else "[dim]n/a[/dim]"
    )
    risk = (
        f"[bold]Profit Factor:[/bold] {format_ratio(stats.profit_factor)}\n"
        f"[bold]Realized R:R:[/bold] {format_ratio(stats.realized_rr)}\n"
        f"[bold]Expected Value:[/bold] {_money(stats.expected_value)} per trade\n"
        f"[bold]Required Win Rate:[/bold] {required}  "
        f"[dim](actual {stats.win_rate:.1f}%)[/dim]"
    )
    console.print(Panel(risk, title="[bold cyan]Risk : Reward[/bold cyan]", border_style="cyan"))

    table = Table(title="Long vs Short", show_header=True, header_style="bold cyan")
    table.add_column("Side", style="bold")
    table.add_column("Trades", justify="right")
    table.add_column("P&L", justify="right")
    table.add_column("Win Rate", justify="right")
    table.add_column("Avg Win", justify="right")
    table.add_column("Avg Loss", justify="right")
    table.add_column("R:R", justify="right")
    _side_row(table, "Long", stats.long)
    _side_row(table, "Short", stats.short)
    console.print(table)


@click.command()
@trade_set_options
@click.option("--count", type=int, default=None, help="Number of trades (default from config).")
@click.pass_context
@handle_errors
def recent(
    ctx: click.Context,
    trades_file: Optional[Path],
    date_range: Optional[str],
    side: str,
    strategy: str,
    search: str,
    count: Optional[int],
) -> None:
    """Display the most recent trades with a quick summary.

    \b
    Examples:
      tradejournal recent
      tradejournal recent --count 10
    """
    trades = load_selected_trades(ctx, trades_file, date_range, side, strategy, search)
    count = count or get_config(ctx).journal.recent_count
    summary = summarize_trades(trades, recent_count=count)

    if not summary.recent_trades:
        no_trades_panel("Recent Trades")
        return

    table = Table(title="Recent Trades", show_header=True, header_style="bold cyan")
    table.add_column("Exit", style="dim")
    table.add_column("Symbol", style="bold")
    table.add_column("Side", justify="center")
    table.add_column("Qty", justify="right")
    table.add_column("Entry", justify="right")
    table.add_column("Exit Px", justify="right")
    table.add_column("P&L", justify="right")
    table.add_column("P&L %", justify="right")

    for trade in summary.recent_trades:
        side_color = "green" if trade.side == "long" else "red"
        table.add_row(
            trade.exit_time.strftime("%Y-%m-%d %H:%M"),
            trade.symbol,
            f"[{side_color}]{trade.side.upper()}[/{side_color}]",
            str(trade.quantity),
            str(trade.entry_price),
            str(trade.exit_price),
            _money(trade.pnl),
            f"{trade.pnl_percent:+}%",
        )

    console.print(table)
    console.print(
        f"\n[bold]Total Trades:[/bold] {summary.total_trades}  "
        f"[bold]Win Rate:[/bold] {summary.win_rate:.1f}%  "
        f"[bold]Total P&L:[/bold] {_money(summary.total_pnl)}"
    )
