"""TradeEntry data model."""

import logging
from typing import Any, Literal, Optional

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from tradejournal.parsing import to_number

logger = logging.getLogger(__name__)

DIRECTIONS = ("Buy", "Sell")

# Canonical close reasons offered by the form
CLOSE_REASONS = ("TP hit", "SL hit", "BE hit", "Manual")

# Older journal revisions stored a win/loss "result" instead
LEGACY_CLOSE_REASONS = ("Win", "Loss", "BE", "Win with Partial")

BREAK_EVEN_REASONS = frozenset({"BE hit", "BE"})

NUMERIC_FIELDS = (
    "lot_size",
    "entry_price",
    "stop_loss",
    "take_profit",
    "exit_price",
    "profit_loss",
)

TEXT_FIELDS = (
    "session",
    "setup_name",
    "emotion_note",
    "notes",
    "before_chart",
    "after_chart",
    "day_of_week",
)


def is_break_even(close_reason: Optional[str]) -> bool:
    """Whether a close reason means the P&L is entered by hand."""
    return close_reason in BREAK_EVEN_REASONS


class TradeEntry(BaseModel):
    """One logged forex/gold trade.

    Stored records use camelCase keys (``lotSize``, ``profitLoss``...);
    the model accepts both those aliases and the snake_case field names.
    """

    id: Optional[str] = Field(default=None, description="Store-assigned identifier")
    date: str = Field(default="", description="Trade date (YYYY-MM-DD)")
    pair: str = Field(default="", description="Instrument symbol, e.g. EURUSD")
    direction: Optional[Literal["Buy", "Sell"]] = Field(
        default=None, description="Trade direction"
    )
    lot_size: Optional[float] = Field(default=None, gt=0, description="Lot size")
    entry_price: Optional[float] = Field(default=None, description="Entry price")
    stop_loss: Optional[float] = Field(default=None, description="Stop loss price")
    take_profit: Optional[float] = Field(default=None, description="Take profit price")
    exit_price: Optional[float] = Field(default=None, description="Exit price")
    close_reason: Optional[str] = Field(default=None, description="Why the trade closed")
    profit_loss: Optional[float] = Field(default=None, description="Realized P&L")
    manual_pnl: bool = Field(
        default=False, description="P&L was entered by hand, not derived"
    )
    rr: Optional[str] = Field(default=None, description="Risk:reward or N/A")
    session: Optional[str] = Field(default=None, description="Trading session")
    setup_name: Optional[str] = Field(default=None, description="Setup name")
    emotion_note: Optional[str] = Field(default=None, description="Emotional state")
    notes: Optional[str] = Field(default=None, description="Free-form notes")
    before_chart: Optional[str] = Field(default=None, description="Screenshot link")
    after_chart: Optional[str] = Field(default=None, description="Screenshot link")
    day_of_week: Optional[str] = Field(default=None, description="Day of week")

    model_config = {
        "frozen": True,
        "populate_by_name": True,
        "alias_generator": to_camel,
    }

    @classmethod
    def from_record(cls, record_id: str, data: dict[str, Any]) -> "TradeEntry":
        """Build an entry from a stored record, tolerating bad values.

        Unparseable numbers become None, unknown directions are dropped,
        and the legacy ``result``/``winLoss``/``pnl`` keys are mapped
        onto the current schema.

        Args:
            record_id: Store key of the record.
            data: Raw record body.

        Returns:
            The parsed entry.
        """
        values: dict[str, Any] = {"id": record_id}

        for name in NUMERIC_FIELDS:
            raw = data.get(to_camel(name))
            if raw is None and name == "profit_loss":
                raw = data.get("pnl")
            values[name] = to_number(raw, name)

        if values["lot_size"] is not None and values["lot_size"] <= 0:
            logger.debug("Record %s has non-positive lot size", record_id)
            values["lot_size"] = None

        direction = data.get("direction")
        values["direction"] = direction if direction in DIRECTIONS else None

        close_reason = data.get("closeReason") or data.get("result") or data.get("winLoss")
        values["close_reason"] = str(close_reason) if close_reason else None

        values["date"] = str(data.get("date") or "")
        values["pair"] = str(data.get("pair") or data.get("tradeInstrument") or "")
        values["manual_pnl"] = bool(data.get("manualPnl", False))

        rr = data.get("rr") or data.get("rrRatio")
        values["rr"] = str(rr) if rr not in (None, "") else None

        for name in TEXT_FIELDS:
            raw = data.get(to_camel(name))
            values[name] = str(raw) if raw not in (None, "") else None

        return cls(**values)

    def to_record(self) -> dict[str, Any]:
        """Record body for the store (camelCase keys, no id)."""
        return self.model_dump(by_alias=True, exclude={"id"})
