"""Command line interface for TradeJournal."""

from tradejournal.cli.main import cli, main

__all__ = ["cli", "main"]
