"""Trade store interface for TradeJournal."""

from abc import ABC, abstractmethod
from typing import Any, Callable

Record = dict[str, Any]
Snapshot = dict[str, Record]
SnapshotCallback = Callable[[Snapshot], None]

TRADES_ROOT = "journalEntries"
STRATEGIES_ROOT = "strategies"


def trades_path(user_id: str) -> str:
    """Collection path holding a user's trades."""
    return f"{TRADES_ROOT}/{user_id}"


def strategies_path(user_id: str) -> str:
    """Collection path holding a user's strategies."""
    return f"{STRATEGIES_ROOT}/{user_id}"


class Subscription:
    """Handle returned by TradeStore.subscribe().

    Calling cancel() more than once is harmless.
    """

    def __init__(self, cancel: Callable[[], None]):
        self._cancel = cancel
        self.active = True

    def cancel(self) -> None:
        """Stop receiving snapshots."""
        if self.active:
            self.active = False
            self._cancel()


class TradeStore(ABC):
    """Abstract base class for record stores.

    A store holds collections of JSON-like records keyed by an opaque id.
    Every write to a collection delivers the full new snapshot to that
    collection's subscribers.
    """

    @abstractmethod
    def subscribe(self, path: str, on_snapshot: SnapshotCallback) -> Subscription:
        """Watch a collection.

        The callback receives the current snapshot right away and again
        after every change to the collection.

        Args:
            path: Collection path.
            on_snapshot: Called with a mapping of id to record.

        Returns:
            Subscription handle; cancel() it to stop.

        Raises:
            StoreError: If the collection cannot be read.
        """
        pass

    @abstractmethod
    def create(self, path: str, record: Record) -> str:
        """Append a record to a collection.

        Returns:
            The id assigned to the new record.

        Raises:
            StoreError: If the write fails.
        """
        pass

    @abstractmethod
    def update(self, path: str, record_id: str, partial: Record) -> None:
        """Overwrite the given fields of an existing record.

        Raises:
            StoreError: If the record does not exist or the write fails.
        """
        pass

    @abstractmethod
    def delete(self, path: str, record_id: str) -> None:
        """Remove a record. Deleting a missing id does nothing.

        Raises:
            StoreError: If the write fails.
        """
        pass

    @abstractmethod
    def get_snapshot(self, path: str) -> Snapshot:
        """Read the current contents of a collection once.

        Raises:
            StoreError: If the collection cannot be read.
        """
        pass

    def close(self) -> None:
        """Release resources held by the store."""
