"""Main CLI entry point for TradeJournal.

This module provides the main click group and lazy loading
of the command modules.
"""

from pathlib import Path
from typing import Optional

import click

from tradejournal.log import setup_logging


class LazyGroup(click.Group):
    """A click Group that lazily loads commands.

    Command modules are only imported when one of their commands
    is actually invoked.
    """

    def __init__(self, *args, lazy_subcommands: dict[str, str] | None = None, **kwargs):
        """Initialize the lazy group.

        Args:
            lazy_subcommands: Mapping of command names to module paths.
        """
        super().__init__(*args, **kwargs)
        self._lazy_subcommands = lazy_subcommands or {}

    def list_commands(self, ctx: click.Context) -> list[str]:
        """List all available commands."""
        base = super().list_commands(ctx)
        lazy = list(self._lazy_subcommands.keys())
        return sorted(set(base + lazy))

    def get_command(self, ctx: click.Context, cmd_name: str) -> click.Command | None:
        """Get a command by name, lazily loading if needed."""
        if cmd_name in self.commands:
            return self.commands[cmd_name]

        if cmd_name in self._lazy_subcommands:
            return self._lazy_load(cmd_name)

        return None

    def _lazy_load(self, cmd_name: str) -> click.Command:
        """Load a command from its module path."""
        import importlib

        module_path = self._lazy_subcommands[cmd_name]
        module = importlib.import_module(module_path)

        cmd = None
        for attr_name in dir(module):
            attr = getattr(module, attr_name)
            if isinstance(attr, click.Command) and attr.name == cmd_name:
                cmd = attr
                break

        if cmd is None:
            raise click.ClickException(f"Could not find command '{cmd_name}' in {module_path}")

        self.add_command(cmd)
        return cmd


LAZY_SUBCOMMANDS = {
    "init": "tradejournal.cli.account",
    "login": "tradejournal.cli.account",
    "logout": "tradejournal.cli.account",
    "whoami": "tradejournal.cli.account",
    "add": "tradejournal.cli.trades",
    "edit": "tradejournal.cli.trades",
    "delete": "tradejournal.cli.trades",
    "journal": "tradejournal.cli.trades",
    "dashboard": "tradejournal.cli.dashboard",
    "report": "tradejournal.cli.dashboard",
    "calc": "tradejournal.cli.calc",
    "strategy": "tradejournal.cli.strategy",
}


CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


@click.group(cls=LazyGroup, lazy_subcommands=LAZY_SUBCOMMANDS, context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="tradejournal")
@click.option(
    "--config-dir",
    type=click.Path(file_okay=False, path_type=Path),
    envvar="TRADEJOURNAL_HOME",
    default=None,
    help="Config and data directory (default: ~/.config/tradejournal).",
)
@click.option("-v", "--verbose", is_flag=True, default=False, help="Enable debug logging.")
@click.pass_context
def cli(ctx: click.Context, config_dir: Optional[Path], verbose: bool) -> None:
    """TradeJournal - log forex and gold trades and track your edge.

    \b
    Quick Start:
      tradejournal login alice          # Choose whose journal to use
      tradejournal add --pair EURUSD --direction Buy --lot 1 \\
          --entry 1.1 --sl 1.098 --tp 1.104 --reason "TP hit"
      tradejournal dashboard            # P&L, win rate, profit factor
    """
    ctx.ensure_object(dict)
    ctx.obj["config_dir"] = config_dir

    from tradejournal.cli.common import get_config

    level = "DEBUG" if verbose else get_config(ctx)["logging"]["level"]
    setup_logging(level)


def main() -> None:
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
