"""Command line entry point for TradeJournal.

The root group only knows command names; report modules (and the
analytics code they pull in) are imported when one of their commands runs.
"""

import importlib
import logging
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.logging import RichHandler


class LazyGroup(click.Group):
    """Root group resolving report commands from ``module:function`` specs.

    ``tradejournal pnl`` never imports the equity or breakdown reports, and
    ``--help`` lists every command without importing any of them.
    """

    def __init__(self, *args, lazy_subcommands: dict[str, str] | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self._lazy_subcommands = lazy_subcommands or {}

    def list_commands(self, ctx: click.Context) -> list[str]:
        return sorted(set(super().list_commands(ctx)) | set(self._lazy_subcommands))

    def get_command(self, ctx: click.Context, cmd_name: str) -> click.Command | None:
        if cmd_name in self.commands:
            return self.commands[cmd_name]
        if cmd_name in self._lazy_subcommands:
            return self._load(cmd_name)
        return None

    def _load(self, cmd_name: str) -> click.Command:
        """Import the report module behind ``cmd_name`` and register its command."""
        module_path, _, attr = self._lazy_subcommands[cmd_name].partition(":")
        cmd = getattr(importlib.import_module(module_path), attr, None)

        if not isinstance(cmd, click.Command):
            raise click.ClickException(f"{module_path}.{attr} is not a command")

        self.add_command(cmd, cmd_name)
        return cmd


# Command name -> "module:function". Commands sharing a report module
# share its imports.
LAZY_SUBCOMMANDS = {
    "pnl": "tradejournal.cli.pnl:pnl",
    "overview": "tradejournal.cli.overview:overview",
    "recent": "tradejournal.cli.overview:recent",
    "equity": "tradejournal.cli.equity:equity",
    "breakdown": "tradejournal.cli.timing:breakdown",
    "calendar": "tradejournal.cli.timing:calendar",
    "mistakes": "tradejournal.cli.psychology:mistakes",
    "categorize": "tradejournal.cli.psychology:categorize",
}


CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


def configure_logging(verbose: bool) -> None:
    """Route log records through rich; DEBUG with --verbose, WARNING otherwise."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@click.group(cls=LazyGroup, lazy_subcommands=LAZY_SUBCOMMANDS, context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="tradejournal")
@click.option(
    "--config", "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Config file (default: ~/.config/tradejournal/config.toml).",
)
@click.option("-v", "--verbose", is_flag=True, default=False, help="Show debug logging.")
@click.pass_context
def cli(ctx: click.Context, config_path: Optional[Path], verbose: bool) -> None:
    """TradeJournal - performance analytics for your closed trades.

    Reads a JSON snapshot of closed trades and reports P&L, risk:reward,
    equity curve, timing breakdowns and recurring mistakes.

    \b
    Quick Start:
      tradejournal overview              # Headline performance
      tradejournal breakdown --by day    # P&L by weekday
      tradejournal mistakes              # What your mistakes cost
    """
    configure_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path


def main() -> None:
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
