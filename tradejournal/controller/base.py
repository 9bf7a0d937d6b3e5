"""Create-or-update form state shared by the journal forms."""

import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Optional

from tradejournal.errors import StoreError, ValidationError
from tradejournal.store import Record, TradeStore

logger = logging.getLogger(__name__)


class FormState(str, Enum):
    """Lifecycle of a form's draft."""

    IDLE = "idle"
    EDITING = "editing"
    SUBMITTING = "submitting"


class RecordForm(ABC):
    """A mutable draft bound to one store collection.

    Submitting creates a new record, or updates the remembered one when the
    form was loaded from an existing record. A failed store call keeps the
    draft so the user can retry.
    """

    def __init__(self, store: TradeStore, path: str):
        """Initialize the form.

        Args:
            store: Store receiving the submitted record.
            path: Collection path the form writes to.
        """
        self.store = store
        self.path = path
        self.state = FormState.IDLE
        self.editing_id: Optional[str] = None
        self.error: Optional[str] = None
        self.errors: dict[str, str] = {}
        self.last_submitted: Optional[Record] = None

    @property
    def is_editing(self) -> bool:
        """Whether submit() will update an existing record."""
        return self.editing_id is not None

    def reset(self) -> None:
        """Clear the draft and leave edit mode."""
        self.state = FormState.IDLE
        self.editing_id = None
        self.error = None
        self.errors = {}
        self._clear_draft()

    @abstractmethod
    def _clear_draft(self) -> None:
        """Empty the draft fields."""
        pass

    @abstractmethod
    def validate(self) -> dict[str, str]:
        """Check the draft.

        Returns:
            Mapping of field name to error message; empty when valid.
        """
        pass

    @abstractmethod
    def build_record(self) -> Record:
        """Record body for the current (valid) draft."""
        pass

    def submit(self) -> str:
        """Create or update the record described by the draft.

        Returns:
            Id of the created or updated record.

        Raises:
            ValidationError: If the draft is incomplete; nothing is written.
            StoreError: If the store call fails; the draft is kept.
        """
        self.errors = self.validate()
        if self.errors:
            raise ValidationError(self.errors)

        record = self.build_record()
        self.state = FormState.SUBMITTING
        self.error = None

        try:
            if self.editing_id is not None:
                record_id = self.editing_id
                self.store.update(self.path, record_id, record)
            else:
                record_id = self.store.create(self.path, record)
        except StoreError as e:
            self.state = FormState.EDITING
            self.error = str(e)
            logger.warning("Submit to %s failed: %s", self.path, e)
            raise

        logger.debug("Submitted %s/%s", self.path, record_id)
        self.last_submitted = record
        self.reset()
        return record_id
