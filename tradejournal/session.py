"""Live journal session: keeps dashboard views in step with the store."""

import logging
from typing import Callable, Optional

from pydantic import ValidationError as PydanticValidationError

from tradejournal.analytics import build_dashboard
from tradejournal.controller import TradeForm
from tradejournal.models import DashboardViews, Strategy, TradeEntry, User
from tradejournal.store import (
    Snapshot,
    Subscription,
    TradeStore,
    strategies_path,
    trades_path,
)

logger = logging.getLogger(__name__)

ViewsCallback = Callable[[DashboardViews], None]


def parse_trades(snapshot: Snapshot) -> list[TradeEntry]:
    """Trade entries from a store snapshot, in store order.

    Record bodies that are not objects are skipped.
    """
    entries = []
    for record_id, data in snapshot.items():
        if not isinstance(data, dict):
            logger.debug("Skipping malformed trade %s", record_id)
            continue
        try:
            entries.append(TradeEntry.from_record(record_id, data))
        except PydanticValidationError as e:
            logger.debug("Skipping unreadable trade %s: %s", record_id, e)
    return entries


def parse_strategies(snapshot: Snapshot) -> list[Strategy]:
    """Strategies from a store snapshot; unreadable records are skipped."""
    strategies = []
    for record_id, data in snapshot.items():
        if not isinstance(data, dict) or not data.get("name") or not data.get("description"):
            logger.debug("Skipping incomplete strategy %s", record_id)
            continue
        try:
            strategies.append(Strategy.from_record(record_id, data))
        except (PydanticValidationError, TypeError) as e:
            logger.debug("Skipping unreadable strategy %s: %s", record_id, e)
    return strategies


class JournalSession:
    """One user's view of their journal.

    start() subscribes to the user's trades; every snapshot the store
    delivers is parsed and all dashboard views are recomputed from it,
    then handed to the on_change callback. close() unsubscribes.

    Example:
        with JournalSession(store, user, on_change=render) as session:
            form = session.trade_form()
            ...
    """

    def __init__(
        self,
        store: TradeStore,
        user: User,
        on_change: Optional[ViewsCallback] = None,
    ):
        self.store = store
        self.user = user
        self.on_change = on_change
        self.views = DashboardViews()
        self.snapshot_count = 0
        self._subscription: Optional[Subscription] = None

    @property
    def path(self) -> str:
        return trades_path(self.user.id)

    @property
    def active(self) -> bool:
        return self._subscription is not None and self._subscription.active

    def start(self) -> "JournalSession":
        """Subscribe to the user's trades. Starting twice is a no-op.

        Raises:
            StoreError: If the collection cannot be read.
        """
        if not self.active:
            self._subscription = self.store.subscribe(self.path, self._on_snapshot)
            logger.info("Journal session started for %s", self.user.id)
        return self

    def close(self) -> None:
        """Unsubscribe. The last computed views stay readable."""
        if self._subscription is not None:
            self._subscription.cancel()
            self._subscription = None
            logger.info("Journal session closed for %s", self.user.id)

    def __enter__(self) -> "JournalSession":
        return self.start()

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _on_snapshot(self, snapshot: Snapshot) -> None:
        self.snapshot_count += 1
        self.views = build_dashboard(parse_trades(snapshot))
        logger.debug(
            "Recomputed views from snapshot %d (%d trades)",
            self.snapshot_count,
            len(self.views.entries),
        )
        if self.on_change is not None:
            self.on_change(self.views)

    # ==================== Helpers ====================

    @property
    def entries(self) -> list[TradeEntry]:
        """Trades of the latest snapshot, in date order."""
        return self.views.entries

    def find(self, record_id: str) -> Optional[TradeEntry]:
        """Trade with the given id in the latest snapshot."""
        for entry in self.views.entries:
            if entry.id == record_id:
                return entry
        return None

    def trade_form(self) -> TradeForm:
        """A TradeForm writing to this user's journal."""
        return TradeForm(self.store, self.user.id)

    def delete(self, record_id: str) -> None:
        """Delete a trade; missing ids are ignored."""
        self.store.delete(self.path, record_id)

    def strategies(self) -> list[Strategy]:
        """The user's strategies, read once."""
        return parse_strategies(self.store.get_snapshot(strategies_path(self.user.id)))
