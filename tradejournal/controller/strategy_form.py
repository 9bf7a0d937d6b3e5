"""Strategy form."""

from typing import Any

from tradejournal.controller.base import FormState, RecordForm
from tradejournal.errors import ValidationError
from tradejournal.models import Strategy
from tradejournal.store import Record, TradeStore, strategies_path

FIELDS = ("name", "description", "rules", "pairs")


class StrategyForm(RecordForm):
    """Draft of one strategy.

    Rules are entered one per line and pairs comma-separated; both are
    stored as lists.
    """

    def __init__(self, store: TradeStore, user_id: str):
        super().__init__(store, strategies_path(user_id))
        self.draft: dict[str, str] = {}
        self._clear_draft()

    def _clear_draft(self) -> None:
        self.draft = {name: "" for name in FIELDS}

    def set_field(self, name: str, value: Any) -> None:
        """Change one draft field.

        Raises:
            ValidationError: If the field does not exist.
        """
        if name not in FIELDS:
            raise ValidationError({name: "unknown field"})
        self.draft[name] = "" if value is None else str(value)
        self.state = FormState.EDITING

    def load(self, strategy: Strategy) -> None:
        """Switch to editing an existing strategy."""
        self.draft = {
            "name": strategy.name,
            "description": strategy.description,
            "rules": "\n".join(strategy.rules),
            "pairs": ", ".join(strategy.pairs),
        }
        self.editing_id = strategy.id
        self.error = None
        self.errors = {}
        self.state = FormState.EDITING

    def validate(self) -> dict[str, str]:
        return {
            name: "required"
            for name in ("name", "description")
            if not self.draft[name].strip()
        }

    def build_record(self) -> Record:
        strategy = Strategy(
            name=self.draft["name"].strip(),
            description=self.draft["description"].strip(),
            rules=Strategy.split_rules(self.draft["rules"]),
            pairs=Strategy.split_pairs(self.draft["pairs"]),
        )
        return strategy.to_record()
