"""SQLite trade store for TradeJournal."""

import json
import logging
import sqlite3
import uuid
from collections import defaultdict
from datetime import datetime
from pathlib import Path

from tradejournal.errors import StoreError
from tradejournal.store.base import (
    Record,
    Snapshot,
    SnapshotCallback,
    Subscription,
    TradeStore,
)

logger = logging.getLogger(__name__)


class SQLiteTradeStore(TradeStore):
    """SQLite-based record store.

    Records are kept as JSON bodies in a single table keyed by
    (collection, id). Subscribers are notified synchronously after
    each committed write; a failing subscriber is logged and does not
    fail the write.
    """

    def __init__(self, db_path: Path):
        """Initialize the store.

        Args:
            db_path: Path to the SQLite database file.
        """
        self.db_path = db_path
        self._listeners: dict[str, list[SnapshotCallback]] = defaultdict(list)
        self._ensure_db_dir()
        self._init_schema()

    def _ensure_db_dir(self) -> None:
        """Ensure the database directory exists."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

    def _get_connection(self) -> sqlite3.Connection:
        """Get a database connection.

        Raises:
            StoreError: If the database cannot be opened.
        """
        try:
            conn = sqlite3.connect(self.db_path)
        except sqlite3.Error as e:
            raise StoreError(f"Cannot open journal database {self.db_path}: {e}") from e
        conn.row_factory = sqlite3.Row
        return conn

    def _init_schema(self) -> None:
        """Initialize database schema on first run."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("""
                CREATE TABLE IF NOT EXISTS records (
                    collection TEXT NOT NULL,
                    id TEXT NOT NULL,
                    data TEXT NOT NULL,
                    created_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL,
                    PRIMARY KEY (collection, id)
                )
            """)
            conn.commit()
        except sqlite3.Error as e:
            raise StoreError(f"Cannot initialize journal database: {e}") from e
        finally:
            conn.close()

    # ==================== Reads ====================

    def get_snapshot(self, path: str) -> Snapshot:
        """Read every record of a collection.

        Args:
            path: Collection path.

        Returns:
            Mapping of record id to record body, in creation order.

        Raises:
            StoreError: If the database or a stored record cannot be read.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                """
                SELECT id, data FROM records
                WHERE collection = ?
                ORDER BY created_at, rowid
                """,
                (path,),
            )
            return {row["id"]: json.loads(row["data"]) for row in cursor.fetchall()}
        except (sqlite3.Error, ValueError) as e:
            raise StoreError(f"Failed to read {path}: {e}") from e
        finally:
            conn.close()

    def subscribe(self, path: str, on_snapshot: SnapshotCallback) -> Subscription:
        """Watch a collection; see TradeStore.subscribe()."""
        snapshot = self.get_snapshot(path)
        self._listeners[path].append(on_snapshot)
        logger.debug("Subscribed to %s (%d listeners)", path, len(self._listeners[path]))

        def cancel() -> None:
            listeners = self._listeners.get(path, [])
            if on_snapshot in listeners:
                listeners.remove(on_snapshot)
            logger.debug("Unsubscribed from %s", path)

        subscription = Subscription(cancel)
        on_snapshot(snapshot)
        return subscription

    def _notify(self, path: str) -> None:
        """Deliver the new snapshot of a collection after a committed write."""
        listeners = list(self._listeners.get(path, []))
        if not listeners:
            return

        try:
            snapshot = self.get_snapshot(path)
        except StoreError:
            logger.exception("Could not re-read %s for subscribers", path)
            return

        for listener in listeners:
            try:
                listener(dict(snapshot))
            except Exception:
                # The write is already committed
                logger.exception("Subscriber of %s failed", path)

    # ==================== Writes ====================

    def create(self, path: str, record: Record) -> str:
        """Append a record; see TradeStore.create()."""
        record_id = uuid.uuid4().hex
        now = datetime.now().isoformat()
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                """
                INSERT INTO records (collection, id, data, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?)
                """,
                (path, record_id, json.dumps(record), now, now),
            )
            conn.commit()
        except (sqlite3.Error, TypeError, ValueError) as e:
            raise StoreError(f"Failed to create record in {path}: {e}") from e
        finally:
            conn.close()

        logger.info("Created %s/%s", path, record_id)
        self._notify(path)
        return record_id

    def update(self, path: str, record_id: str, partial: Record) -> None:
        """Merge fields into a record; see TradeStore.update()."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                "SELECT data FROM records WHERE collection = ? AND id = ?",
                (path, record_id),
            )
            row = cursor.fetchone()
            if row is None:
                raise StoreError(f"No record {record_id} in {path}")

            data = json.loads(row["data"])
            data.update(partial)
            cursor.execute(
                """
                UPDATE records SET data = ?, updated_at = ?
                WHERE collection = ? AND id = ?
                """,
                (json.dumps(data), datetime.now().isoformat(), path, record_id),
            )
            conn.commit()
        except (sqlite3.Error, TypeError, ValueError) as e:
            raise StoreError(f"Failed to update {path}/{record_id}: {e}") from e
        finally:
            conn.close()

        logger.info("Updated %s/%s", path, record_id)
        self._notify(path)

    def delete(self, path: str, record_id: str) -> None:
        """Remove a record; see TradeStore.delete()."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                "DELETE FROM records WHERE collection = ? AND id = ?",
                (path, record_id),
            )
            conn.commit()
            deleted = cursor.rowcount
        except sqlite3.Error as e:
            raise StoreError(f"Failed to delete {path}/{record_id}: {e}") from e
        finally:
            conn.close()

        if not deleted:
            logger.debug("Delete of missing record %s/%s ignored", path, record_id)
            return

        logger.info("Deleted %s/%s", path, record_id)
        self._notify(path)

    def close(self) -> None:
        """Drop all subscriptions."""
        self._listeners.clear()

    # ==================== Stats ====================

    def get_stats(self) -> dict[str, int]:
        """Record counts per collection.

        Raises:
            StoreError: If the database cannot be read.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                "SELECT collection, COUNT(*) AS count FROM records GROUP BY collection"
            )
            return {row["collection"]: row["count"] for row in cursor.fetchall()}
        except sqlite3.Error as e:
            raise StoreError(f"Failed to read journal stats: {e}") from e
        finally:
            conn.close()
