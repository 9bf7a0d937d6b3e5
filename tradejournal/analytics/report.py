"""Plain-data report contents for an external PDF/spreadsheet generator."""

import math
from typing import Any, Sequence

from tradejournal.analytics.stats import is_winner, win_loss_breakdown, percentage
from tradejournal.models import ReportSummary, TradeEntry

REPORT_COLUMNS = (
    "Date",
    "Pair",
    "Lot Size",
    "Direction",
    "Entry",
    "Stop Loss",
    "Take Profit",
    "Close Reason",
    "P/L",
)


def report_summary(entries: Sequence[TradeEntry]) -> ReportSummary:
    """Summary block printed above the trade table."""
    breakdown = win_loss_breakdown(entries)
    total_profit = math.fsum(e.profit_loss for e in entries if is_winner(e))
    total_loss = math.fsum(
        e.profit_loss for e in entries if not is_winner(e) and e.profit_loss is not None
    )
    return ReportSummary(
        total_trades=len(entries),
        win_rate=percentage(breakdown.winners, len(entries)),
        winning_trades=breakdown.winners,
        losing_trades=breakdown.losers,
        total_profit=round(total_profit, 2),
        total_loss=round(total_loss, 2),
    )


def _cell(value: Any) -> Any:
    return "" if value is None else value


def report_rows(entries: Sequence[TradeEntry]) -> list[list[Any]]:
    """One row per trade, in REPORT_COLUMNS order."""
    rows = []
    for entry in entries:
        pnl = "" if entry.profit_loss is None else f"{entry.profit_loss:.2f}"
        rows.append([
            entry.date,
            entry.pair,
            _cell(entry.lot_size),
            _cell(entry.direction),
            _cell(entry.entry_price),
            _cell(entry.stop_loss),
            _cell(entry.take_profit),
            _cell(entry.close_reason),
            pnl,
        ])
    return rows
