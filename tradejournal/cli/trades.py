"""Trade commands for TradeJournal CLI.

Handles logging, editing, deleting and listing trades.
"""

from datetime import datetime
from typing import Any, Callable, Optional

import click
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from tradejournal.analytics import filter_by_date_range, sort_by_date
from tradejournal.cli.common import (
    console,
    fail_store,
    fail_validation,
    get_config,
    get_store,
    money,
    require_user,
    resolve_id,
    short_id,
)
from tradejournal.controller import TRADE_FIELDS, TradeForm
from tradejournal.errors import StoreError, ValidationError
from tradejournal.models import CLOSE_REASONS, DIRECTIONS, LEGACY_CLOSE_REASONS, TradeEntry
from tradejournal.session import parse_trades
from tradejournal.store import trades_path

# CLI option name -> form field
OPTION_FIELDS = {
    "trade_date": "date",
    "pair": "pair",
    "direction": "direction",
    "lot": "lot_size",
    "entry": "entry_price",
    "sl": "stop_loss",
    "tp": "take_profit",
    "exit_price": "exit_price",
    "reason": "close_reason",
    "pnl": "profit_loss",
    "session": "session",
    "setup": "setup_name",
    "emotion": "emotion_note",
    "notes": "notes",
    "day": "day_of_week",
    "before_chart": "before_chart",
    "after_chart": "after_chart",
}

ISO_DATE = click.DateTime(formats=["%Y-%m-%d"])


def trade_options(func: Callable) -> Callable:
    """Attach the trade field options shared by add and edit."""
    options = [
        click.option("--date", "trade_date", type=ISO_DATE, default=None,
                     help="Trade date (YYYY-MM-DD). Defaults to today."),
        click.option("--pair", type=str, default=None, help="Instrument, e.g. EURUSD or XAUUSD."),
        click.option("--direction", type=click.Choice(DIRECTIONS, case_sensitive=False),
                     default=None, help="Buy or Sell."),
        click.option("--lot", type=str, default=None, help="Lot size."),
        click.option("--entry", type=str, default=None, help="Entry price."),
        click.option("--sl", type=str, default=None, help="Stop loss price."),
        click.option("--tp", type=str, default=None, help="Take profit price."),
        click.option("--exit", "exit_price", type=str, default=None,
                     help="Exit price (used for Manual closes)."),
        click.option("--reason",
                     type=click.Choice(CLOSE_REASONS + LEGACY_CLOSE_REASONS, case_sensitive=False),
                     default=None, help="Close reason."),
        click.option("--pnl", type=str, default=None,
                     help="Profit/loss override; disables automatic calculation."),
        click.option("--session", type=str, default=None, help="Trading session, e.g. London."),
        click.option("--setup", type=str, default=None, help="Setup name."),
        click.option("--emotion", type=str, default=None, help="Emotional state."),
        click.option("--notes", type=str, default=None, help="Notes."),
        click.option("--day", type=str, default=None, help="Day of week."),
        click.option("--before-chart", type=str, default=None, help="Screenshot link before entry."),
        click.option("--after-chart", type=str, default=None, help="Screenshot link after exit."),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def apply_options(form: TradeForm, options: dict[str, Any]) -> None:
    """Copy the given CLI options into the form, in form field order."""
    values = {}
    for option_name, field in OPTION_FIELDS.items():
        value = options.get(option_name)
        if value is None:
            continue
        if isinstance(value, datetime):
            value = value.date().isoformat()
        values[field] = value

    for field in TRADE_FIELDS:
        if field in values:
            form.set_field(field, values[field])


def _num(value: Optional[float]) -> str:
    return "-" if value is None else f"{value:g}"


def _submit(form: TradeForm) -> str:
    try:
        return form.submit()
    except ValidationError as e:
        fail_validation(e)
    except StoreError as e:
        fail_store(e)


def _saved_panel(title: str, record_id: str, entry: TradeEntry, currency: str) -> Panel:
    pnl_note = " [dim](manual)[/dim]" if entry.manual_pnl else ""
    return Panel(
        f"[green]✓[/green] {escape(entry.pair)} {entry.direction} {entry.lot_size} lot\n\n"
        f"P&L:  {money(entry.profit_loss, currency)}{pnl_note}\n"
        f"R:R:  {entry.rr or 'N/A'}\n"
        f"Date: {entry.date}\n"
        f"[dim]Id: {record_id}[/dim]",
        title=f"[bold green]{title}[/bold green]",
        border_style="green",
    )


@click.command()
@trade_options
@click.pass_context
def add(ctx: click.Context, **options: Any) -> None:
    """Log a new trade.

    P&L is calculated from lot size, direction, entry and the exit
    implied by the close reason (take profit for "TP hit", stop loss
    for "SL hit", --exit otherwise). "BE hit" trades default to 0.00;
    pass --pnl to record a different amount.

    \b
    Examples:
      tradejournal add --pair EURUSD --direction Buy --lot 1 \\
          --entry 1.1000 --sl 1.0980 --tp 1.1040 --reason "TP hit"
      tradejournal add --pair XAUUSD --direction Sell --lot 0.5 \\
          --entry 1950 --exit 1944 --reason Manual --session London
    """
    config = get_config(ctx)
    user = require_user(ctx)
    store = get_store(ctx)

    form = TradeForm(store, user.id)
    apply_options(form, options)
    record_id = _submit(form)
    entry = TradeEntry.from_record(record_id, form.last_submitted)

    console.print(_saved_panel("Trade Logged", record_id, entry, config["display"]["currency"]))


@click.command()
@click.argument("trade_id")
@trade_options
@click.pass_context
def edit(ctx: click.Context, trade_id: str, **options: Any) -> None:
    """Change fields of an existing trade.

    TRADE_ID may be a unique prefix of the id shown by `journal`.
    Only the given options change; P&L is recalculated unless it was
    entered manually.

    \b
    Examples:
      tradejournal edit 3f2a9c1b --reason "SL hit"
      tradejournal edit 3f2a9c1b --notes "moved stop too early"
    """
    config = get_config(ctx)
    user = require_user(ctx)
    store = get_store(ctx)

    try:
        snapshot = store.get_snapshot(trades_path(user.id))
    except StoreError as e:
        fail_store(e)

    record_id = resolve_id(snapshot, trade_id)
    form = TradeForm(store, user.id)
    form.load(TradeEntry.from_record(record_id, snapshot[record_id]))
    apply_options(form, options)
    _submit(form)
    entry = TradeEntry.from_record(record_id, form.last_submitted)

    console.print(_saved_panel("Trade Updated", record_id, entry, config["display"]["currency"]))


@click.command()
@click.argument("trade_id")
@click.pass_context
def delete(ctx: click.Context, trade_id: str) -> None:
    """Delete a trade by id or unique id prefix."""
    user = require_user(ctx)
    store = get_store(ctx)
    path = trades_path(user.id)

    try:
        record_id = resolve_id(store.get_snapshot(path), trade_id)
        store.delete(path, record_id)
    except StoreError as e:
        fail_store(e)

    console.print(f"[green]✓[/green] Deleted trade [cyan]{short_id(record_id)}[/cyan]")


@click.command()
@click.option("--from", "start", type=ISO_DATE, default=None, help="First date (YYYY-MM-DD).")
@click.option("--to", "end", type=ISO_DATE, default=None, help="Last date (YYYY-MM-DD).")
@click.pass_context
def journal(ctx: click.Context, start: Optional[datetime], end: Optional[datetime]) -> None:
    """List trades in date order.

    \b
    Examples:
      tradejournal journal
      tradejournal journal --from 2024-01-01 --to 2024-01-31
    """
    config = get_config(ctx)
    currency = config["display"]["currency"]
    user = require_user(ctx)
    store = get_store(ctx)

    try:
        entries = parse_trades(store.get_snapshot(trades_path(user.id)))
    except StoreError as e:
        fail_store(e)

    entries = sort_by_date(filter_by_date_range(
        entries,
        start.date() if start else None,
        end.date() if end else None,
    ))

    if not entries:
        console.print(Panel(
            "[dim]No trades found[/dim]",
            title="[bold]Trade Journal[/bold]",
            border_style="dim",
        ))
        return

    table = Table(
        title="Trade Journal",
        show_header=True,
        header_style="bold cyan",
    )

    table.add_column("Id", style="dim")
    table.add_column("Date")
    table.add_column("Pair", style="bold")
    table.add_column("Side", justify="center")
    table.add_column("Lot", justify="right")
    table.add_column("Entry", justify="right")
    table.add_column("SL", justify="right")
    table.add_column("TP", justify="right")
    table.add_column("Reason")
    table.add_column("P&L", justify="right")
    table.add_column("R:R", justify="right")

    for entry in entries:
        side_color = "green" if entry.direction == "Buy" else "red"
        table.add_row(
            short_id(entry.id),
            entry.date,
            escape(entry.pair),
            f"[{side_color}]{entry.direction or '-'}[/{side_color}]",
            _num(entry.lot_size),
            _num(entry.entry_price),
            _num(entry.stop_loss),
            _num(entry.take_profit),
            escape(entry.close_reason or "-"),
            money(entry.profit_loss, currency),
            entry.rr or "N/A",
        )

    console.print(table)
    console.print(f"\n[bold]Total Trades:[/bold] {len(entries)}")
