"""Dashboard and report commands for TradeJournal CLI.

Shows performance statistics, the cumulative P&L curve and
date-filtered report data.
"""

from datetime import datetime
from typing import Optional

import click
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from tradejournal.analytics import (
    REPORT_COLUMNS,
    filter_by_date_range,
    heatmap_level,
    report_rows,
    report_summary,
    sort_by_date,
)
from tradejournal.cli.common import (
    console,
    fail_store,
    get_config,
    get_store,
    money,
    require_user,
)
from tradejournal.errors import StoreError
from tradejournal.models import DashboardViews
from tradejournal.session import JournalSession, parse_trades
from tradejournal.store import trades_path

HEATMAP_STYLES = ("dim", "green", "green", "bold green", "bold bright_green")

ISO_DATE = click.DateTime(formats=["%Y-%m-%d"])


def render_stats(views: DashboardViews, currency: str) -> Panel:
    """Headline statistics panel."""
    summary = views.summary
    profit_factor = "N/A" if summary.profit_factor is None else f"{summary.profit_factor:.2f}"

    text = (
        f"Total P&L:      {money(summary.total_pnl, currency)}\n"
        f"Profit Factor:  {profit_factor}\n"
        f"Avg Win:        {money(summary.avg_win, currency)}\n"
        f"Avg Loss:       {money(summary.avg_loss, currency)}\n"
        f"Win Rate:       {summary.win_rate}%\n"
        f"Expectancy:     {money(views.expectancy, currency)}\n"
        f"{'─' * 30}\n"
        f"[dim]Trades: {len(views.entries)} | "
        f"Winners: {views.breakdown.winners} | "
        f"Losers: {views.breakdown.losers}[/dim]"
    )
    if views.best_session or views.best_day:
        text += (
            f"\n[dim]Best Session: {escape(views.best_session or 'N/A')} | "
            f"Best Day: {escape(views.best_day or 'N/A')}[/dim]"
        )

    return Panel(text, title="[bold cyan]Dashboard[/bold cyan]", border_style="cyan")


def render_curve(views: DashboardViews, currency: str, limit: int) -> Table:
    """Daily cumulative P&L with trade-count heat."""
    table = Table(
        title="Cumulative P&L",
        show_header=True,
        header_style="bold cyan",
    )
    table.add_column("Date", style="bold")
    table.add_column("Trades", justify="right")
    table.add_column("Cumulative", justify="right")

    for point in views.cumulative[-limit:]:
        count = views.trades_per_day.get(point.date, 0)
        style = HEATMAP_STYLES[heatmap_level(count)]
        table.add_row(
            point.date or "-",
            f"[{style}]{count}[/{style}]",
            money(point.cumulative_pnl, currency),
        )
    return table


@click.command()
@click.option("--days", type=int, default=10, help="Trading days shown in the P&L curve.")
@click.pass_context
def dashboard(ctx: click.Context, days: int) -> None:
    """Show P&L, win rate, profit factor and the cumulative P&L curve.

    \b
    Examples:
      tradejournal dashboard
      tradejournal dashboard --days 30
    """
    config = get_config(ctx)
    currency = config["display"]["currency"]
    user = require_user(ctx)
    store = get_store(ctx)

    try:
        with JournalSession(store, user) as session:
            views = session.views
    except StoreError as e:
        fail_store(e)

    if not views.entries:
        console.print(Panel(
            "[dim]No trades logged yet[/dim]\n\n"
            "[dim]Run 'tradejournal add' to log your first trade[/dim]",
            title="[bold]Dashboard[/bold]",
            border_style="dim",
        ))
        return

    console.print(render_stats(views, currency))
    console.print(render_curve(views, currency, max(days, 1)))


@click.command()
@click.option("--from", "start", type=ISO_DATE, default=None, help="First date (YYYY-MM-DD).")
@click.option("--to", "end", type=ISO_DATE, default=None, help="Last date (YYYY-MM-DD).")
@click.pass_context
def report(ctx: click.Context, start: Optional[datetime], end: Optional[datetime]) -> None:
    """Show the trading report for a date range.

    Without --from/--to the report covers every trade.

    \b
    Examples:
      tradejournal report
      tradejournal report --from 2024-03-01 --to 2024-03-31
    """
    config = get_config(ctx)
    currency = config["display"]["currency"]
    user = require_user(ctx)
    store = get_store(ctx)

    try:
        entries = parse_trades(store.get_snapshot(trades_path(user.id)))
    except StoreError as e:
        fail_store(e)

    start_date = start.date() if start else None
    end_date = end.date() if end else None
    entries = sort_by_date(filter_by_date_range(entries, start_date, end_date))

    if not entries:
        console.print(Panel(
            "[dim]No trades found in this range[/dim]",
            title="[bold]Trading Report[/bold]",
            border_style="dim",
        ))
        return

    summary = report_summary(entries)
    output_lines = [
        "[bold]Trading Journal Report[/bold]\n",
        f"  Total Trades:    {summary.total_trades}",
        f"  Winning Rate:    {summary.win_rate}%",
        f"  Winning Trades:  {summary.winning_trades}",
        f"  Losing Trades:   {summary.losing_trades}",
        f"  Total Profit:    {money(summary.total_profit, currency)}",
        f"  Total Loss:      {money(summary.total_loss, currency)}",
    ]
    if start_date or end_date:
        output_lines.append(
            f"  Date Range:      {start_date or '...'} to {end_date or '...'}"
        )

    console.print(Panel(
        "\n".join(output_lines),
        title="[bold cyan]Report Summary[/bold cyan]",
        border_style="cyan",
    ))

    table = Table(show_header=True, header_style="bold cyan")
    for column in REPORT_COLUMNS:
        table.add_column(column, justify="right" if column == "P/L" else "left")
    for row in report_rows(entries):
        table.add_row(*(escape(str(cell)) for cell in row))
    console.print(table)
