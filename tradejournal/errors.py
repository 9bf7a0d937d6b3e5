"""Exception types for TradeJournal."""

from typing import Any


class JournalError(Exception):
    """Base class for all TradeJournal errors."""


class ParseError(JournalError):
    """A numeric field could not be parsed.

    Raised by strict parsing helpers and caught by the lenient ones;
    an unparseable value is excluded from aggregates rather than shown
    to the user.
    """

    def __init__(self, field: str, value: Any):
        self.field = field
        self.value = value
        super().__init__(f"Cannot parse {field!r} value {value!r} as a number")


class ValidationError(JournalError):
    """One or more required form fields are missing or invalid."""

    def __init__(self, errors: dict[str, str]):
        self.errors = dict(errors)
        details = ", ".join(f"{name}: {msg}" for name, msg in self.errors.items())
        super().__init__(f"Invalid form: {details}")


class StoreError(JournalError):
    """A create, update, delete or subscribe call against the store failed."""
