"""Result models produced by the analytics engine."""

from typing import Optional

from pydantic import BaseModel, Field

from tradejournal.models.trade import TradeEntry


class SummaryStats(BaseModel):
    """Headline performance numbers for a set of trades."""

    total_pnl: float = Field(default=0.0, description="Sum of P&L")
    profit_factor: Optional[float] = Field(
        default=None, description="Gross win / |gross loss|, None when no loss"
    )
    avg_win: float = Field(default=0.0, description="Average winning trade")
    avg_loss: float = Field(default=0.0, description="Average losing trade (<= 0)")
    win_rate: int = Field(default=0, ge=0, le=100, description="Win rate percentage")

    model_config = {"frozen": True}


class CumulativePoint(BaseModel):
    """Running P&L at the end of one trading day."""

    date: str = Field(..., description="Trade date")
    cumulative_pnl: float = Field(..., description="Running total up to this date")

    model_config = {"frozen": True}


class WinLossBreakdown(BaseModel):
    """Winner/loser trade counts."""

    winners: int = Field(default=0, ge=0, description="Trades with P&L > 0")
    losers: int = Field(default=0, ge=0, description="All other trades")

    model_config = {"frozen": True}


class ReportSummary(BaseModel):
    """Summary block of an exported report."""

    total_trades: int = Field(default=0, ge=0)
    win_rate: int = Field(default=0, ge=0, le=100)
    winning_trades: int = Field(default=0, ge=0)
    losing_trades: int = Field(default=0, ge=0)
    total_profit: float = Field(default=0.0, description="Gross win")
    total_loss: float = Field(default=0.0, description="Gross loss (<= 0)")

    model_config = {"frozen": True}


class DashboardViews(BaseModel):
    """Everything the dashboard shows, derived from one snapshot."""

    entries: list[TradeEntry] = Field(default_factory=list)
    summary: SummaryStats = Field(default_factory=SummaryStats)
    cumulative: list[CumulativePoint] = Field(default_factory=list)
    breakdown: WinLossBreakdown = Field(default_factory=WinLossBreakdown)
    expectancy: float = 0.0
    trades_per_day: dict[str, int] = Field(default_factory=dict)
    best_session: Optional[str] = None
    best_day: Optional[str] = None

    model_config = {"frozen": True}
