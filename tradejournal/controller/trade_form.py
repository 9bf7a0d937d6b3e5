"""Trade entry form with derived profit/loss and risk:reward."""

import logging
from datetime import date
from typing import Any, Callable, Optional

from tradejournal.analytics import profit_loss, risk_reward
from tradejournal.controller.base import FormState, RecordForm
from tradejournal.errors import ParseError, ValidationError
from tradejournal.models import DIRECTIONS, LEGACY_CLOSE_REASONS, TradeEntry, is_break_even
from tradejournal.models.trade import TEXT_FIELDS
from tradejournal.parsing import parse_number
from tradejournal.store import Record, TradeStore, trades_path

logger = logging.getLogger(__name__)

PRICE_FIELDS = ("entry_price", "stop_loss", "take_profit", "exit_price")

FIELDS = (
    "date",
    "pair",
    "direction",
    "lot_size",
    *PRICE_FIELDS,
    "close_reason",
    "profit_loss",
    *TEXT_FIELDS,
)

REQUIRED_FIELDS = ("pair", "direction", "lot_size", "entry_price", "close_reason")


def _format_number(value: Optional[float]) -> str:
    return "" if value is None else repr(value)


class TradeForm(RecordForm):
    """Draft of one trade.

    Field values are kept as the raw strings a user typed. Every change
    recomputes the risk:reward ratio and, unless the P&L is a manual
    override, the profit/loss.

    The override flag is explicit state. It is set when the close reason
    becomes a break-even one or when profit_loss is typed in, and it is
    cleared when the close reason changes to any other reason. A loaded
    trade starts with the flag set when its stored P&L could not be
    derived again from its own fields.
    """

    def __init__(
        self,
        store: TradeStore,
        user_id: str,
        today: Callable[[], date] = date.today,
    ):
        """Initialize the form.

        Args:
            store: Store receiving submitted trades.
            user_id: Owner of the journal; scopes the collection path.
            today: Clock used to date new trades.
        """
        super().__init__(store, trades_path(user_id))
        self._today = today
        self.draft: dict[str, str] = {}
        self.manual_pnl = False
        self._clear_draft()

    def _clear_draft(self) -> None:
        self.draft = {name: "" for name in FIELDS}
        self.draft["rr"] = ""
        self.manual_pnl = False

    # ==================== Editing ====================

    def set_field(self, name: str, value: Any) -> None:
        """Change one draft field and refresh the derived ones.

        Args:
            name: Field name (see FIELDS).
            value: New raw value; None clears the field.

        Raises:
            ValidationError: If the field does not exist or is derived.
        """
        if name not in FIELDS:
            raise ValidationError({name: "unknown or read-only field"})

        text = "" if value is None else str(value).strip()
        self.draft[name] = text

        if name == "profit_loss":
            self.manual_pnl = bool(text)
        elif name == "close_reason":
            if is_break_even(text):
                self.manual_pnl = True
                if not self.draft["profit_loss"]:
                    self.draft["profit_loss"] = "0.00"
            else:
                self.manual_pnl = False

        if self.state != FormState.SUBMITTING:
            self.state = FormState.EDITING
        self._recalculate()

    def update(self, **values: Any) -> None:
        """set_field() for several fields, applied in order."""
        for name, value in values.items():
            self.set_field(name, value)

    def clear_override(self) -> None:
        """Return profit/loss to automatic calculation."""
        self.manual_pnl = False
        self._recalculate()

    def load(self, entry: TradeEntry) -> None:
        """Switch to editing an existing trade.

        Stored values are loaded as-is; nothing is recomputed until a
        field changes.
        """
        self._clear_draft()
        for name in ("date", "pair", "direction", "close_reason", *TEXT_FIELDS):
            value = getattr(entry, name)
            self.draft[name] = "" if value is None else str(value)
        for name in ("lot_size", *PRICE_FIELDS):
            self.draft[name] = _format_number(getattr(entry, name))
        if entry.profit_loss is not None:
            self.draft["profit_loss"] = f"{entry.profit_loss:.2f}"
        self.draft["rr"] = entry.rr or ""

        self.manual_pnl = self._keeps_stored_pnl(entry)
        self.editing_id = entry.id
        self.error = None
        self.errors = {}
        self.state = FormState.EDITING
        logger.debug("Editing trade %s (manual P&L: %s)", entry.id, self.manual_pnl)

    def _keeps_stored_pnl(self, entry: TradeEntry) -> bool:
        """Whether a loaded trade's P&L must be protected from recalculation.

        True for flagged or break-even trades, legacy win/loss records, and
        any stored P&L the loaded prices cannot reproduce.
        """
        if entry.manual_pnl or is_break_even(entry.close_reason):
            return True
        if entry.profit_loss is None:
            return False
        if entry.close_reason in LEGACY_CLOSE_REASONS:
            return True
        derived = profit_loss(
            self.draft["lot_size"],
            self.draft["direction"],
            self.draft["entry_price"],
            self.exit_for_reason(),
            self.draft["pair"],
        )
        return derived is None

    # ==================== Derived fields ====================

    def exit_for_reason(self) -> str:
        """Exit price implied by the close reason."""
        reason = self.draft["close_reason"]
        if reason == "TP hit":
            return self.draft["take_profit"]
        if reason == "SL hit":
            return self.draft["stop_loss"]
        return self.draft["exit_price"]

    def _recalculate(self) -> None:
        draft = self.draft
        draft["rr"] = risk_reward(
            draft["entry_price"], draft["stop_loss"], draft["take_profit"]
        )
        if not self.manual_pnl:
            pnl = profit_loss(
                draft["lot_size"],
                draft["direction"],
                draft["entry_price"],
                self.exit_for_reason(),
                draft["pair"],
            )
            draft["profit_loss"] = pnl or ""

    # ==================== Submission ====================

    def validate(self) -> dict[str, str]:
        draft = self.draft
        errors = {}

        for name in REQUIRED_FIELDS:
            if not draft[name]:
                errors[name] = "required"

        if draft["direction"] and draft["direction"] not in DIRECTIONS:
            errors["direction"] = f"must be one of {', '.join(DIRECTIONS)}"

        for name in ("lot_size", *PRICE_FIELDS, "profit_loss"):
            if not draft[name] or name in errors:
                continue
            try:
                number = parse_number(draft[name], name)
            except ParseError:
                errors[name] = "must be a number"
                continue
            if name == "lot_size" and number <= 0:
                errors[name] = "must be positive"

        return errors

    def build_entry(self) -> TradeEntry:
        """TradeEntry for the current draft.

        The draft must be valid (see validate()). New trades without a
        date are stamped with today's date; edited trades keep theirs.
        """
        draft = self.draft
        trade_date = draft["date"]
        if not trade_date and self.editing_id is None:
            trade_date = self._today().isoformat()

        values: dict[str, Any] = {
            "id": self.editing_id,
            "date": trade_date,
            "pair": draft["pair"].upper(),
            "direction": draft["direction"],
            "close_reason": draft["close_reason"],
            "manual_pnl": self.manual_pnl,
            "rr": draft["rr"] or None,
        }
        for name in ("lot_size", *PRICE_FIELDS, "profit_loss"):
            values[name] = parse_number(draft[name], name) if draft[name] else None
        for name in TEXT_FIELDS:
            values[name] = draft[name] or None
        return TradeEntry(**values)

    def build_record(self) -> Record:
        return self.build_entry().to_record()
