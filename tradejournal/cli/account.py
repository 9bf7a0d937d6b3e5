"""Account commands for TradeJournal CLI.

Handles config initialization and choosing whose journal is active.
"""

from typing import Optional

import click
from rich.panel import Panel

from tradejournal.cli.common import console, fail_store, get_auth, get_config_dir, get_store
from tradejournal.config import write_default_config
from tradejournal.errors import StoreError
from tradejournal.store import strategies_path, trades_path


@click.command()
@click.pass_context
def init(ctx: click.Context) -> None:
    """Create a template configuration file."""
    config_path = write_default_config(get_config_dir(ctx))
    console.print(Panel(
        f"[green]✓[/green] Configuration file at:\n[cyan]{config_path}[/cyan]",
        title="[bold green]Initialized[/bold green]",
        border_style="green",
    ))


@click.command()
@click.argument("user_id")
@click.option("--email", type=str, default=None, help="Email shown in whoami.")
@click.pass_context
def login(ctx: click.Context, user_id: str, email: Optional[str]) -> None:
    """Sign in as USER_ID; trades are stored per user."""
    try:
        user = get_auth(ctx).sign_in(user_id, email)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="USER_ID")

    console.print(Panel(
        f"[green]✓[/green] Signed in as [cyan]{user.id}[/cyan]",
        title="[bold green]Login Successful[/bold green]",
        border_style="green",
    ))


@click.command()
@click.pass_context
def logout(ctx: click.Context) -> None:
    """Sign out of the current journal."""
    auth = get_auth(ctx)
    if auth.current_user() is None:
        console.print("[yellow]Not signed in. Nothing to logout from.[/yellow]")
        return

    auth.sign_out()
    console.print(Panel(
        "[green]✓[/green] Signed out\n\n"
        "[dim]Your journal stays on disk.[/dim]",
        title="[bold green]Logout Successful[/bold green]",
        border_style="green",
    ))


@click.command()
@click.pass_context
def whoami(ctx: click.Context) -> None:
    """Show the signed-in user and the size of their journal."""
    user = get_auth(ctx).current_user()
    if user is None:
        console.print("[yellow]Not signed in.[/yellow]")
        return

    try:
        stats = get_store(ctx).get_stats()
    except StoreError as e:
        fail_store(e)

    email = f" <{user.email}>" if user.email else ""
    console.print(f"[bold]{user.id}[/bold]{email}")
    console.print(
        f"[dim]Trades: {stats.get(trades_path(user.id), 0)} | "
        f"Strategies: {stats.get(strategies_path(user.id), 0)}[/dim]"
    )
