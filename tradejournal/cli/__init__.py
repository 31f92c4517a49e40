"""CLI commands for TradeJournal.

This package provides the command-line interface for TradeJournal:
P&L calculation, performance overview, equity curve, timing
breakdowns and mistake analytics.
"""

from tradejournal.cli.main import cli, main

__all__ = ["cli", "main"]
