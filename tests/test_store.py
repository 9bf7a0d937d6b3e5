"""Property-based tests for the SQLite trade store.

**Feature: trading-journal**
"""

import sqlite3
import tempfile
from pathlib import Path

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from tradejournal.errors import StoreError
from tradejournal.store import SQLiteTradeStore, strategies_path, trades_path


@pytest.fixture
def temp_store():
    """Create a temporary store for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        store = SQLiteTradeStore(Path(tmpdir) / "test.db")
        yield store
        store.close()


class TestStoreSchema:
    """
    **Feature: trading-journal, Property 10: Store Initialization and Read Errors**

    *For any* database the store cannot open or read, callers see a
    StoreError rather than a raw sqlite or JSON error.
    """

    def test_fresh_store_is_empty(self, temp_store: SQLiteTradeStore):
        assert temp_store.get_stats() == {}
        assert temp_store.get_snapshot(trades_path("alice")) == {}

    def test_unopenable_database(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            with pytest.raises(StoreError):
                SQLiteTradeStore(Path(tmpdir))

    def test_corrupt_record(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            db_path = Path(tmpdir) / "test.db"
            store = SQLiteTradeStore(db_path)
            conn = sqlite3.connect(db_path)
            try:
                conn.execute(
                    "INSERT INTO records VALUES (?, ?, ?, ?, ?)",
                    (trades_path("alice"), "bad", "{not json", "2024", "2024"),
                )
                conn.commit()
            finally:
                conn.close()

            with pytest.raises(StoreError):
                store.get_snapshot(trades_path("alice"))

    def test_creates_parent_directory(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            db_path = Path(tmpdir) / "nested" / "dir" / "journal.db"
            SQLiteTradeStore(db_path)
            assert db_path.exists()


class TestStoreOperations:
    """
    **Feature: trading-journal, Property 11: Create, Update, Delete**

    *For any* record, create assigns a fresh id, update merges fields into
    that same id, and delete removes it; deleting a missing id is a no-op.
    """

    @given(records=st.lists(
        st.dictionaries(
            st.sampled_from(["pair", "notes", "lotSize"]),
            st.one_of(st.text(max_size=10), st.floats(allow_nan=False, allow_infinity=False)),
        ),
        min_size=1,
        max_size=10,
    ))
    @settings(max_examples=25)
    def test_create_roundtrip(self, records):
        with tempfile.TemporaryDirectory() as tmpdir:
            store = SQLiteTradeStore(Path(tmpdir) / "test.db")
            path = trades_path("alice")
            ids = [store.create(path, record) for record in records]

            snapshot = store.get_snapshot(path)
            assert len(set(ids)) == len(records)
            assert list(snapshot) == ids
            for record_id, record in zip(ids, records):
                assert snapshot[record_id] == record

    def test_update_merges_same_id(self, temp_store: SQLiteTradeStore):
        path = trades_path("alice")
        record_id = temp_store.create(path, {"pair": "EURUSD", "notes": "a"})

        temp_store.update(path, record_id, {"notes": "b"})

        snapshot = temp_store.get_snapshot(path)
        assert list(snapshot) == [record_id]
        assert snapshot[record_id] == {"pair": "EURUSD", "notes": "b"}

    def test_update_missing_raises(self, temp_store: SQLiteTradeStore):
        with pytest.raises(StoreError):
            temp_store.update(trades_path("alice"), "missing", {"notes": "x"})

    def test_delete(self, temp_store: SQLiteTradeStore):
        path = trades_path("alice")
        record_id = temp_store.create(path, {"pair": "EURUSD"})

        temp_store.delete(path, record_id)
        assert temp_store.get_snapshot(path) == {}

    def test_delete_missing_is_noop(self, temp_store: SQLiteTradeStore):
        temp_store.delete(trades_path("alice"), "does-not-exist")

    def test_collections_are_isolated(self, temp_store: SQLiteTradeStore):
        temp_store.create(trades_path("alice"), {"pair": "EURUSD"})
        temp_store.create(trades_path("bob"), {"pair": "XAUUSD"})
        temp_store.create(strategies_path("alice"), {"name": "x", "description": "y"})

        assert len(temp_store.get_snapshot(trades_path("alice"))) == 1
        assert temp_store.get_stats() == {
            "journalEntries/alice": 1,
            "journalEntries/bob": 1,
            "strategies/alice": 1,
        }

    def test_unserializable_record(self, temp_store: SQLiteTradeStore):
        with pytest.raises(StoreError):
            temp_store.create(trades_path("alice"), {"bad": object()})


class TestSubscriptions:
    """
    **Feature: trading-journal, Property 12: Snapshot Delivery**

    *For any* subscriber, the current snapshot arrives on subscribe and the
    full new snapshot after every write, until the subscription is cancelled.
    """

    def test_initial_and_change_snapshots(self, temp_store: SQLiteTradeStore):
        path = trades_path("alice")
        existing = temp_store.create(path, {"pair": "EURUSD"})
        received = []

        temp_store.subscribe(path, received.append)
        new_id = temp_store.create(path, {"pair": "XAUUSD"})
        temp_store.delete(path, existing)

        assert [list(s) for s in received] == [[existing], [existing, new_id], [new_id]]

    def test_cancel_stops_delivery(self, temp_store: SQLiteTradeStore):
        path = trades_path("alice")
        received = []

        subscription = temp_store.subscribe(path, received.append)
        subscription.cancel()
        subscription.cancel()
        temp_store.create(path, {"pair": "EURUSD"})

        assert not subscription.active
        assert received == [{}]

    def test_other_collections_do_not_notify(self, temp_store: SQLiteTradeStore):
        received = []
        temp_store.subscribe(trades_path("alice"), received.append)
        temp_store.create(trades_path("bob"), {"pair": "EURUSD"})

        assert received == [{}]

    def test_failing_subscriber_does_not_fail_write(self, temp_store: SQLiteTradeStore):
        path = trades_path("alice")
        received = []

        def flaky(snapshot):
            received.append(snapshot)
            if len(received) > 1:
                raise RuntimeError("render failed")

        temp_store.subscribe(path, flaky)
        other = []
        temp_store.subscribe(path, other.append)

        record_id = temp_store.create(path, {"pair": "EURUSD"})
        temp_store.update(path, record_id, {"notes": "x"})

        assert list(temp_store.get_snapshot(path)) == [record_id]
        assert len(received) == 3
        assert len(other) == 3

    def test_missing_delete_does_not_notify(self, temp_store: SQLiteTradeStore):
        received = []
        temp_store.subscribe(trades_path("alice"), received.append)
        temp_store.delete(trades_path("alice"), "missing")

        assert len(received) == 1
