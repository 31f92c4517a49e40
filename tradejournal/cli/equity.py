"""Equity curve command for TradeJournal CLI."""

from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from tradejournal.analytics import build_equity_curve
from tradejournal.cli.common import handle_errors, load_selected_trades, no_trades_panel, trade_set_options
from tradejournal.formatting import format_signed_money, pnl_style

console = Console()


@click.command()
@trade_set_options
@click.option("--last", "last_n", type=int, default=20, show_default=True, help="Points to list.")
@click.pass_context
@handle_errors
def equity(
    ctx: click.Context,
    trades_file: Optional[Path],
    date_range: Optional[str],
    side: str,
    strategy: str,
    search: str,
    last_n: int,
) -> None:
    """Display the equity curve and drawdown.

    \b
    Examples:
      tradejournal equity
      tradejournal equity --range current_year --last 50
    """
    trades = load_selected_trades(ctx, trades_file, date_range, side, strategy, search)

    if not trades:
        no_trades_panel("Equity Curve")
        return

    curve = build_equity_curve(trades)
    symbols = {trade.id: trade.symbol for trade in trades}

    table = Table(title="Equity Curve", show_header=True, header_style="bold cyan")
    table.add_column("Exit", style="dim")
    table.add_column("Symbol", style="bold")
    table.add_column("Cumulative P&L", justify="right")
    table.add_column("Drawdown", justify="right")

    for point in curve.points[-last_n:]:
        style = pnl_style(point.cumulative_pnl)
        drawdown = f"[red]{format_signed_money(-point.drawdown)}[/red]" if point.drawdown > 0 else "[dim]-[/dim]"
        table.add_row(
            point.date.strftime("%Y-%m-%d %H:%M"),
            symbols.get(point.trade_id, "?"),
            f"[{style}]{format_signed_money(point.cumulative_pnl)}[/{style}]",
            drawdown,
        )

    console.print(table)

    balance_style = pnl_style(curve.current_balance)
    console.print(Panel(
        f"[bold]Current Balance:[/bold] [{balance_style}]{format_signed_money(curve.current_balance)}[/{balance_style}]\n"
        f"[bold]Peak:[/bold] {format_signed_money(curve.peak_value)}\n"
        f"[bold]Max Drawdown:[/bold] [red]{format_signed_money(-curve.max_drawdown)}[/red] "
        f"({curve.max_drawdown_percent:.1f}%)",
        title="[bold cyan]Drawdown[/bold cyan]",
        border_style="cyan",
    ))
