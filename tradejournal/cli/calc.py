"""Calculator commands for TradeJournal CLI."""

import click

from tradejournal.analytics import contract_multiplier, profit_loss, risk_reward
from tradejournal.cli.common import console, fail
from tradejournal.models import DIRECTIONS


@click.group()
def calc() -> None:
    """Profit/loss and risk:reward calculators."""


@calc.command("pnl")
@click.option("--pair", type=str, required=True, help="Instrument, e.g. EURUSD or XAUUSD.")
@click.option("--direction", type=click.Choice(DIRECTIONS, case_sensitive=False), required=True)
@click.option("--lot", type=float, required=True, help="Lot size.")
@click.option("--entry", type=float, required=True, help="Entry price.")
@click.option("--exit", "exit_price", type=float, required=True, help="Exit price.")
def calc_pnl(pair: str, direction: str, lot: float, entry: float, exit_price: float) -> None:
    """Profit/loss of a closed trade.

    \b
    Examples:
      tradejournal calc pnl --pair EURUSD --direction Buy --lot 1 --entry 1.1 --exit 1.105
    """
    result = profit_loss(lot, direction, entry, exit_price, pair)
    if result is None:
        fail("[red]Cannot calculate profit/loss from these inputs.[/red]")

    color = "green" if float(result) >= 0 else "red"
    console.print(
        f"[bold]P&L:[/bold] [{color}]{result}[/{color}] "
        f"[dim](x{contract_multiplier(pair):,} per lot)[/dim]"
    )


@calc.command("rr")
@click.option("--entry", type=float, required=True, help="Entry price.")
@click.option("--sl", type=float, required=True, help="Stop loss price.")
@click.option("--tp", type=float, required=True, help="Take profit price.")
def calc_rr(entry: float, sl: float, tp: float) -> None:
    """Risk:reward ratio of a planned trade.

    \b
    Examples:
      tradejournal calc rr --entry 1.1 --sl 1.098 --tp 1.104
    """
    console.print(f"[bold]R:R:[/bold] {risk_reward(entry, sl, tp)}")
