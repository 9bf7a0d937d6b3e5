"""Analytics engine: pure functions over trade entries."""

from tradejournal.analytics.calculators import (
    contract_multiplier,
    profit_loss,
    risk_reward,
)
from tradejournal.analytics.stats import (
    daily_cumulative_pnl,
    expectancy,
    filter_by_date_range,
    heatmap_level,
    is_winner,
    most_profitable,
    sort_by_date,
    summary_stats,
    trades_per_day,
    win_loss_breakdown,
)
from tradejournal.analytics.report import REPORT_COLUMNS, report_rows, report_summary
from tradejournal.analytics.dashboard import build_dashboard

__all__ = [
    "contract_multiplier",
    "profit_loss",
    "risk_reward",
    "daily_cumulative_pnl",
    "expectancy",
    "filter_by_date_range",
    "heatmap_level",
    "is_winner",
    "most_profitable",
    "sort_by_date",
    "summary_stats",
    "trades_per_day",
    "win_loss_breakdown",
    "REPORT_COLUMNS",
    "report_rows",
    "report_summary",
    "build_dashboard",
]
