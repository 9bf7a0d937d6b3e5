"""Strategy data model."""

from typing import Any, Optional

from pydantic import BaseModel, Field


class Strategy(BaseModel):
    """A named trading strategy with its rules and traded pairs."""

    id: Optional[str] = Field(default=None, description="Store-assigned identifier")
    name: str = Field(..., min_length=1, description="Strategy name")
    description: str = Field(..., min_length=1, description="What the strategy does")
    rules: list[str] = Field(default_factory=list, description="Entry/exit rules")
    pairs: list[str] = Field(default_factory=list, description="Instruments traded")

    model_config = {"frozen": True}

    @staticmethod
    def split_rules(text: str) -> list[str]:
        """One rule per non-blank line."""
        return [line.strip() for line in text.splitlines() if line.strip()]

    @staticmethod
    def split_pairs(text: str) -> list[str]:
        """Comma-separated pairs, trimmed, blanks dropped."""
        return [pair.strip() for pair in text.split(",") if pair.strip()]

    @classmethod
    def from_record(cls, record_id: str, data: dict[str, Any]) -> "Strategy":
        """Build a strategy from a stored record.

        Rules and pairs may have been stored as plain text by older
        clients; those are split the same way as form input.
        """
        rules = data.get("rules") or []
        pairs = data.get("pairs") or []
        if isinstance(rules, str):
            rules = cls.split_rules(rules)
        if isinstance(pairs, str):
            pairs = cls.split_pairs(pairs)
        return cls(
            id=record_id,
            name=data.get("name", ""),
            description=data.get("description", ""),
            rules=list(rules),
            pairs=list(pairs),
        )

    def to_record(self) -> dict[str, Any]:
        """Record body for the store (no id)."""
        return self.model_dump(exclude={"id"})
