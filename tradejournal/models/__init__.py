"""Data models for TradeJournal."""

from tradejournal.models.trade import (
    BREAK_EVEN_REASONS,
    CLOSE_REASONS,
    DIRECTIONS,
    LEGACY_CLOSE_REASONS,
    TradeEntry,
    is_break_even,
)
from tradejournal.models.strategy import Strategy
from tradejournal.models.user import User
from tradejournal.models.analytics import (
    CumulativePoint,
    DashboardViews,
    ReportSummary,
    SummaryStats,
    WinLossBreakdown,
)

__all__ = [
    "BREAK_EVEN_REASONS",
    "CLOSE_REASONS",
    "DIRECTIONS",
    "LEGACY_CLOSE_REASONS",
    "TradeEntry",
    "is_break_even",
    "Strategy",
    "User",
    "CumulativePoint",
    "DashboardViews",
    "ReportSummary",
    "SummaryStats",
    "WinLossBreakdown",
]
