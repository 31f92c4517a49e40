"""P&L calculator command for TradeJournal CLI."""

from decimal import Decimal, InvalidOperation

import click
from rich.console import Console
from rich.panel import Panel

from tradejournal.cli.common import handle_errors
from tradejournal.formatting import format_signed_money, pnl_style
from tradejournal.pnl import calculate_pnl

console = Console()


class DecimalType(click.ParamType):
    """Click parameter that parses exact decimals."""

    name = "decimal"

    def convert(self, value, param, ctx):
        if isinstance(value, Decimal):
            return value
        try:
            return Decimal(value)
        except InvalidOperation:
            self.fail(f"{value!r} is not a valid number", param, ctx)


@click.command()
@click.argument("entry_price", type=DecimalType())
@click.argument("exit_price", type=DecimalType())
@click.argument("quantity", type=DecimalType())
@click.option(
    "--side",
    type=click.Choice(["long", "short"]),
    default="long",
    show_default=True,
    help="Position side.",
)
@handle_errors
def pnl(entry_price: Decimal, exit_price: Decimal, quantity: Decimal, side: str) -> None:
    """Calculate P&L for a closed position.

    \b
    Examples:
      tradejournal pnl 1.234 1.567 1000
      tradejournal pnl 50 45 200 --side short
    """
    result = calculate_pnl(entry_price, exit_price, quantity, side)
    style = pnl_style(result.pnl)

    console.print(Panel(
        f"Side:     {side.upper()}\n"
        f"Entry:    {entry_price}\n"
        f"Exit:     {exit_price}\n"
        f"Quantity: {quantity}\n"
        f"{'─' * 30}\n"
        f"[bold]P&L:[/bold]      [{style}]{format_signed_money(result.pnl)}[/{style}]\n"
        f"[bold]P&L %:[/bold]    [{style}]{result.pnl_percent:+}%[/{style}]\n"
        f"[dim]Exact: {result.pnl}[/dim]",
        title="[bold cyan]P&L[/bold cyan]",
        border_style="cyan",
    ))
