"""Strategy commands for TradeJournal CLI."""

from typing import Optional

import click
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from tradejournal.cli.common import (
    console,
    fail_store,
    fail_validation,
    get_store,
    require_user,
    resolve_id,
    short_id,
)
from tradejournal.controller import StrategyForm
from tradejournal.errors import StoreError, ValidationError
from tradejournal.session import parse_strategies
from tradejournal.store import strategies_path


@click.group()
def strategy() -> None:
    """Manage trading strategies."""


@strategy.command("add")
@click.option("--name", type=str, required=True, help="Strategy name.")
@click.option("--description", type=str, required=True, help="What the strategy trades.")
@click.option("--rule", "rules", type=str, multiple=True, help="Entry/exit rule (repeatable).")
@click.option("--pairs", type=str, default=None, help="Comma-separated pairs, e.g. EURUSD,XAUUSD.")
@click.pass_context
def strategy_add(
    ctx: click.Context,
    name: str,
    description: str,
    rules: tuple[str, ...],
    pairs: Optional[str],
) -> None:
    """Save a strategy.

    \b
    Examples:
      tradejournal strategy add --name "London breakout" \\
          --description "Trade the Asian range break" \\
          --rule "Wait for the 08:00 candle close" --pairs EURUSD,GBPUSD
    """
    user = require_user(ctx)
    store = get_store(ctx)

    form = StrategyForm(store, user.id)
    form.set_field("name", name)
    form.set_field("description", description)
    form.set_field("rules", "\n".join(rules))
    form.set_field("pairs", pairs)

    try:
        record_id = form.submit()
    except ValidationError as e:
        fail_validation(e, kind="strategy")
    except StoreError as e:
        fail_store(e)

    console.print(Panel(
        f"[green]✓[/green] {escape(name)}\n"
        f"[dim]Id: {record_id}[/dim]",
        title="[bold green]Strategy Saved[/bold green]",
        border_style="green",
    ))


@strategy.command("list")
@click.pass_context
def strategy_list(ctx: click.Context) -> None:
    """List saved strategies."""
    user = require_user(ctx)
    store = get_store(ctx)

    try:
        strategies = parse_strategies(store.get_snapshot(strategies_path(user.id)))
    except StoreError as e:
        fail_store(e)

    if not strategies:
        console.print("[dim]No strategies saved yet[/dim]")
        return

    table = Table(title="Strategies", show_header=True, header_style="bold cyan")
    table.add_column("Id", style="dim")
    table.add_column("Name", style="bold")
    table.add_column("Description")
    table.add_column("Rules")
    table.add_column("Pairs")

    for item in strategies:
        table.add_row(
            short_id(item.id),
            escape(item.name),
            escape(item.description),
            escape("\n".join(f"• {rule}" for rule in item.rules)) or "-",
            escape(", ".join(item.pairs)) or "-",
        )

    console.print(table)


@strategy.command("delete")
@click.argument("strategy_id")
@click.pass_context
def strategy_delete(ctx: click.Context, strategy_id: str) -> None:
    """Delete a strategy by id or unique id prefix."""
    user = require_user(ctx)
    store = get_store(ctx)
    path = strategies_path(user.id)

    try:
        record_id = resolve_id(store.get_snapshot(path), strategy_id)
        store.delete(path, record_id)
    except StoreError as e:
        fail_store(e)

    console.print(f"[green]✓[/green] Deleted strategy [cyan]{short_id(record_id)}[/cyan]")
