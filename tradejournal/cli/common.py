"""Helpers shared by the TradeJournal CLI commands."""

from pathlib import Path
from typing import NoReturn, Optional

import click
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from tradejournal.auth import ProfileAuth
from tradejournal.config import get_config_dir as resolve_config_dir
from tradejournal.config import get_db_path, load_config
from tradejournal.errors import JournalError, StoreError, ValidationError
from tradejournal.models import User
from tradejournal.store import Snapshot, SQLiteTradeStore

console = Console()


def fail(message: str, title: str = "Error") -> NoReturn:
    """Print an error panel and exit with status 1."""
    console.print(Panel(
        message,
        title=f"[bold red]{title}[/bold red]",
        border_style="red",
    ))
    raise SystemExit(1)


def fail_validation(error: ValidationError, kind: str = "trade") -> NoReturn:
    """Report form errors field by field."""
    lines = "\n".join(f"  • [cyan]{name}[/cyan]: {msg}" for name, msg in error.errors.items())
    fail(f"[red]The {kind} could not be saved:[/red]\n\n{lines}", title=f"Invalid {kind.title()}")


def fail_store(error: StoreError) -> NoReturn:
    fail(f"[red]Journal storage error:[/red]\n\n{escape(str(error))}", title="Storage Error")


def get_config_dir(ctx: click.Context) -> Optional[Path]:
    return ctx.obj.get("config_dir")


def get_config(ctx: click.Context) -> dict:
    """Load configuration, exiting on a malformed file."""
    if "config" not in ctx.obj:
        try:
            ctx.obj["config"] = load_config(get_config_dir(ctx))
        except JournalError as e:
            fail(f"[red]{escape(str(e))}[/red]", title="Configuration Error")
    return ctx.obj["config"]


def get_auth(ctx: click.Context) -> ProfileAuth:
    return ProfileAuth(resolve_config_dir(get_config_dir(ctx)))


def get_store(ctx: click.Context) -> SQLiteTradeStore:
    """Open the journal database."""
    config = get_config(ctx)
    try:
        return SQLiteTradeStore(get_db_path(config, get_config_dir(ctx)))
    except StoreError as e:
        fail_store(e)


def require_user(ctx: click.Context) -> User:
    """The signed-in user, exiting when nobody is signed in."""
    user = get_auth(ctx).current_user()
    if user is None:
        fail(
            "[red]Not signed in.[/red]\n\n"
            "Run [cyan]tradejournal login USER_ID[/cyan] first.",
            title="Sign-in Required",
        )
    return user


def resolve_id(snapshot: Snapshot, prefix: str) -> str:
    """Full record id from an id or a unique id prefix.

    Exits with an error panel when nothing or more than one record matches.
    """
    if prefix in snapshot:
        return prefix

    matches = [record_id for record_id in snapshot if record_id.startswith(prefix)]
    if not matches:
        fail(f"[red]No record with id[/red] [cyan]{prefix}[/cyan]", title="Not Found")
    if len(matches) > 1:
        fail(
            f"[red]Id prefix[/red] [cyan]{prefix}[/cyan] [red]matches "
            f"{len(matches)} records.[/red] Use more characters.",
            title="Ambiguous Id",
        )
    return matches[0]


def money(value: Optional[float], currency: str = "$") -> str:
    """Signed, colored amount."""
    if value is None:
        return "-"
    color = "green" if value >= 0 else "red"
    sign = "+" if value >= 0 else "-"
    return f"[{color}]{sign}{currency}{abs(value):,.2f}[/{color}]"


def short_id(record_id: Optional[str]) -> str:
    return (record_id or "")[:8]
