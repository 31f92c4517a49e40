"""Mistake analytics commands for TradeJournal CLI."""

from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from tradejournal.analytics import calculate_mistake_analytics, categorize_mistake, mistake_category_label
from tradejournal.cli.common import handle_errors, load_selected_trades, no_trades_panel, trade_set_options
from tradejournal.formatting import format_signed_money, pnl_style
from tradejournal.models import MISTAKE_CATEGORIES

console = Console()


def _money(value) -> str:
    style = pnl_style(value)
    return f"[{style}]{format_signed_money(value)}[/{style}]"


@click.command()
@trade_set_options
@click.option(
    "--view",
    type=click.Choice(["frequency", "impact"]),
    default="frequency",
    show_default=True,
    help="Order categories by how often they occur or by what they cost.",
)
@click.pass_context
@handle_errors
def mistakes(
    ctx: click.Context,
    trades_file: Optional[Path],
    date_range: Optional[str],
    side: str,
    strategy: str,
    search: str,
    view: str,
) -> None:
    """Display what rule violations cost you.

    Trades are categorized from their rule_violation note.

    \b
    Examples:
      tradejournal mistakes
      tradejournal mistakes --view impact
    """
    trades = load_selected_trades(ctx, trades_file, date_range, side, strategy, search)

    if not trades:
        no_trades_panel("Mistakes")
        return

    analytics = calculate_mistake_analytics(trades)

    if not analytics.by_frequency:
        console.print(Panel(
            f"[green]No mistakes recorded across {analytics.total_trades_without_mistakes} trades[/green]",
            title="[bold]Mistakes[/bold]",
            border_style="green",
        ))
        return

    summaries = analytics.by_impact if view == "impact" else analytics.by_frequency

    table = Table(
        title="Mistakes by " + ("P&L Impact" if view == "impact" else "Frequency"),
        show_header=True,
        header_style="bold cyan",
    )
    table.add_column("Mistake", style="bold")
    table.add_column("Count", justify="right")
    table.add_column("Total P&L", justify="right")
    table.add_column("Avg P&L", justify="right")
    table.add_column("Win Rate", justify="right")

    for summary in summaries:
        table.add_row(
            summary.label,
            str(summary.count),
            _money(summary.total_pnl),
            _money(summary.avg_pnl),
            f"{summary.win_rate:.1f}%",
        )

    console.print(table)

    console.print(Panel(
        f"[bold]With mistakes:[/bold] {analytics.total_trades_with_mistakes} trades, "
        f"{_money(analytics.pnl_with_mistakes)} (avg {_money(analytics.avg_pnl_with_mistakes)})\n"
        f"[bold]Clean trades:[/bold] {analytics.total_trades_without_mistakes} trades, "
        f"{_money(analytics.pnl_without_mistakes)} (avg {_money(analytics.avg_pnl_without_mistakes)})\n"
        f"[bold]Most frequent:[/bold] {analytics.top_mistake.label} ({analytics.top_mistake.count}x)\n"
        f"[bold]Most costly:[/bold] {analytics.costliest_mistake.label} "
        f"({_money(analytics.costliest_mistake.total_pnl)})",
        title="[bold cyan]Mistake Impact[/bold cyan]",
        border_style="cyan",
    ))


@click.command()
@click.argument("text", required=False)
@click.option("--list", "list_categories", is_flag=True, default=False, help="List all categories and keywords.")
def categorize(text: Optional[str], list_categories: bool) -> None:
    """Show which mistake category a note falls into.

    \b
    Examples:
      tradejournal categorize "entered too early on the breakout"
      tradejournal categorize --list
    """
    if list_categories:
        table = Table(title="Mistake Categories", show_header=True, header_style="bold cyan")
        table.add_column("#", justify="right", style="dim")
        table.add_column("ID", style="bold")
        table.add_column("Label")
        table.add_column("Keywords", style="dim")
        for priority, category in enumerate(MISTAKE_CATEGORIES, start=1):
            table.add_row(str(priority), category.id, category.label, ", ".join(category.keywords) or "-")
        console.print(table)
        return

    category_id = categorize_mistake(text)

    if category_id is None:
        console.print("[dim]No mistake recorded (empty note)[/dim]")
        return

    console.print(f"[bold]{mistake_category_label(category_id)}[/bold] [dim]({category_id})[/dim]")
