"""Aggregate statistics over a collection of trade entries.

Every function here is total: it accepts any sequence of TradeEntry
(including an empty one), never mutates it, and never raises. Entries
whose profit_loss is missing count as zero-P&L trades: they take part in
the winner/loser split but add nothing to the sums.
"""

import math
from collections import Counter, defaultdict
from datetime import date
from typing import Iterable, Optional, Sequence, Union

from tradejournal.models import (
    CumulativePoint,
    SummaryStats,
    TradeEntry,
    WinLossBreakdown,
)

DateBound = Union[str, date, None]


def is_winner(entry: TradeEntry) -> bool:
    """A trade wins when its P&L is strictly positive; all others lose."""
    return entry.profit_loss is not None and entry.profit_loss > 0


def _pnl_values(entries: Iterable[TradeEntry]) -> list[float]:
    return [e.profit_loss for e in entries if e.profit_loss is not None]


def percentage(part: int, whole: int) -> int:
    """Integer percentage, halves rounded up."""
    if whole == 0:
        return 0
    return int(part * 100 / whole + 0.5)


def win_loss_breakdown(entries: Sequence[TradeEntry]) -> WinLossBreakdown:
    """Count winners and losers."""
    winners = sum(1 for e in entries if is_winner(e))
    return WinLossBreakdown(winners=winners, losers=len(entries) - winners)


def _averages(entries: Sequence[TradeEntry]) -> tuple[float, float, float, float]:
    """Gross win, gross loss, average win and average loss (unrounded)."""
    wins = [e.profit_loss for e in entries if is_winner(e)]
    losses = _pnl_values(e for e in entries if not is_winner(e))
    loser_count = len(entries) - len(wins)

    gross_win = math.fsum(wins)
    gross_loss = math.fsum(losses)
    avg_win = gross_win / len(wins) if wins else 0.0
    avg_loss = gross_loss / loser_count if loser_count else 0.0
    return gross_win, gross_loss, avg_win, avg_loss


def summary_stats(entries: Sequence[TradeEntry]) -> SummaryStats:
    """Headline numbers: total P&L, profit factor, averages and win rate.

    Args:
        entries: Trades to summarize.

    Returns:
        SummaryStats with monetary values rounded to 2 decimals. The
        profit factor is None when there is no gross loss.
    """
    if not entries:
        return SummaryStats()

    gross_win, gross_loss, avg_win, avg_loss = _averages(entries)
    breakdown = win_loss_breakdown(entries)

    profit_factor = None
    if gross_loss != 0:
        profit_factor = round(gross_win / abs(gross_loss), 2)

    return SummaryStats(
        total_pnl=round(math.fsum(_pnl_values(entries)), 2),
        profit_factor=profit_factor,
        avg_win=round(avg_win, 2),
        avg_loss=round(avg_loss, 2),
        win_rate=percentage(breakdown.winners, len(entries)),
    )


def expectancy(entries: Sequence[TradeEntry]) -> float:
    """Expected P&L per trade.

    (win rate x average win) - (loss rate x |average loss|), using the
    unrounded rates. Zero for an empty sequence.
    """
    if not entries:
        return 0.0

    _, _, avg_win, avg_loss = _averages(entries)
    breakdown = win_loss_breakdown(entries)
    win_ratio = breakdown.winners / len(entries)
    loss_ratio = breakdown.losers / len(entries)
    return round(win_ratio * avg_win - loss_ratio * abs(avg_loss), 2)


def daily_cumulative_pnl(entries: Sequence[TradeEntry]) -> list[CumulativePoint]:
    """Running P&L with one point per distinct trade date.

    Dates are ISO strings, so lexicographic order is chronological. Each
    running total is summed exactly over all trades up to that date, so
    the last point always matches summary_stats().total_pnl.
    """
    by_date: dict[str, list[float]] = defaultdict(list)
    for entry in entries:
        values = by_date[entry.date]
        if entry.profit_loss is not None:
            values.append(entry.profit_loss)

    points = []
    running: list[float] = []
    for day in sorted(by_date):
        running.extend(by_date[day])
        points.append(
            CumulativePoint(date=day, cumulative_pnl=round(math.fsum(running), 2))
        )
    return points


def sort_by_date(entries: Iterable[TradeEntry]) -> list[TradeEntry]:
    """New list of entries in date order (stable for equal dates)."""
    return sorted(entries, key=lambda e: e.date)


def _bound(value: DateBound) -> Optional[str]:
    if isinstance(value, date):
        return value.isoformat()
    return value or None


def filter_by_date_range(
    entries: Iterable[TradeEntry],
    start: DateBound = None,
    end: DateBound = None,
) -> list[TradeEntry]:
    """Entries dated within [start, end].

    Args:
        entries: Trades to filter.
        start: Inclusive lower bound, None for unbounded.
        end: Inclusive upper bound, None for unbounded.

    Returns:
        Matching entries in their original order. Undated entries are
        dropped whenever a bound is given.
    """
    lower = _bound(start)
    upper = _bound(end)
    if lower is None and upper is None:
        return list(entries)

    selected = []
    for entry in entries:
        if not entry.date:
            continue
        if lower is not None and entry.date < lower:
            continue
        if upper is not None and entry.date > upper:
            continue
        selected.append(entry)
    return selected


def most_profitable(entries: Iterable[TradeEntry], field: str) -> Optional[str]:
    """The value of a grouping field with the highest total P&L.

    Args:
        entries: Trades to group.
        field: Grouping attribute, e.g. "session" or "day_of_week".

    Returns:
        The winning group (first seen on ties), or None when no entry
        has the field set.
    """
    totals: dict[str, float] = {}
    for entry in entries:
        key = getattr(entry, field, None)
        if not key:
            continue
        totals[key] = totals.get(key, 0.0) + (entry.profit_loss or 0.0)

    if not totals:
        return None
    return max(totals, key=totals.__getitem__)


def trades_per_day(entries: Iterable[TradeEntry]) -> dict[str, int]:
    """Trade count per date, ordered by date."""
    counts = Counter(e.date for e in entries if e.date)
    return dict(sorted(counts.items()))


def heatmap_level(count: int) -> int:
    """Calendar heatmap intensity (0-4) for a day's trade count."""
    if count <= 0:
        return 0
    if count == 1:
        return 1
    if count <= 3:
        return 2
    if count <= 5:
        return 3
    return 4
