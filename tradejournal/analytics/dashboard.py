"""Dashboard views derived from one snapshot of the journal."""

from typing import Iterable

from tradejournal.analytics.stats import (
    daily_cumulative_pnl,
    expectancy,
    most_profitable,
    sort_by_date,
    summary_stats,
    trades_per_day,
    win_loss_breakdown,
)
from tradejournal.models import DashboardViews, TradeEntry


def build_dashboard(entries: Iterable[TradeEntry]) -> DashboardViews:
    """Recompute every dashboard view from scratch."""
    ordered = sort_by_date(entries)
    return DashboardViews(
        entries=ordered,
        summary=summary_stats(ordered),
        cumulative=daily_cumulative_pnl(ordered),
        breakdown=win_loss_breakdown(ordered),
        expectancy=expectancy(ordered),
        trades_per_day=trades_per_day(ordered),
        best_session=most_profitable(ordered, "session"),
        best_day=most_profitable(ordered, "day_of_week"),
    )
