"""Record stores for TradeJournal."""

from tradejournal.store.base import (
    STRATEGIES_ROOT,
    TRADES_ROOT,
    Record,
    Snapshot,
    Subscription,
    TradeStore,
    strategies_path,
    trades_path,
)
from tradejournal.store.sqlite import SQLiteTradeStore

__all__ = [
    "STRATEGIES_ROOT",
    "TRADES_ROOT",
    "Record",
    "Snapshot",
    "Subscription",
    "TradeStore",
    "strategies_path",
    "trades_path",
    "SQLiteTradeStore",
]
