"""SQLite storage adapter.

Implements the core RecordStorePort using a simple SQLite database.
"""

from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Iterator, List

from core.errors import StoreError
from core.models import ProcessedRecord


class SQLiteRecordStore:
    """Thin SQLite wrapper that satisfies the RecordStorePort contract."""

    def __init__(self, db_path: str) -> None:
        self._db_path = db_path

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self._db_path)
        conn.row_factory = sqlite3.Row
        return conn

    @contextmanager
    def _transaction(self) -> Iterator[sqlite3.Connection]:
        # sqlite3's connection context manager commits or rolls back but does
        # not close, so we close explicitly.
        try:
            conn = self._connect()
        except sqlite3.Error as exc:
            raise StoreError(f"could not open {self._db_path}: {exc}") from exc
        try:
            with conn:
                yield conn
        except sqlite3.Error as exc:
            raise StoreError(str(exc)) from exc
        finally:
            conn.close()

    def init_db(self) -> None:
        """Create the message table if it does not exist."""

        with self._transaction() as conn:
            # message records every rewritten message so restarts never edit
            # the same message twice.
            # Fields:
            # - channelId / messageId: Discord ids (composite PRIMARY KEY)
            # - content: the original content that was overwritten
            # - processed_at: UTC timestamp of the confirmed edit
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS message (
                    channelId INTEGER NOT NULL,
                    messageId INTEGER NOT NULL,
                    content TEXT NOT NULL,
                    processed_at TIMESTAMP NOT NULL,
                    PRIMARY KEY (channelId, messageId)
                )
                """
            )

    def exists(self, channel_id: int, message_id: int) -> bool:
        """Check if a message has already been recorded."""

        with self._transaction() as conn:
            row = conn.execute(
                "SELECT 1 FROM message WHERE channelId = ? AND messageId = ?",
                (channel_id, message_id),
            ).fetchone()
        return row is not None

    def insert(self, channel_id: int, message_id: int, content: str) -> None:
        """Record a rewritten message; raises StoreError on any failure."""

        now = datetime.now(timezone.utc)
        with self._transaction() as conn:
            conn.execute(
                """
                INSERT INTO message (channelId, messageId, content, processed_at)
                VALUES (?, ?, ?, ?)
                """,
                (channel_id, message_id, content, now.isoformat()),
            )

    def count(self) -> int:
        """Return the number of recorded messages."""

        with self._transaction() as conn:
            row = conn.execute("SELECT COUNT(*) AS total FROM message").fetchone()
        return int(row["total"])

    def list_records(self) -> List[ProcessedRecord]:
        """Return all records, most recently processed first."""

        with self._transaction() as conn:
            rows = conn.execute(
                """
                SELECT channelId, messageId, content, processed_at
                FROM message
                ORDER BY processed_at DESC
                """
            ).fetchall()
        return [
            ProcessedRecord(
                channel_id=int(row["channelId"]),
                message_id=int(row["messageId"]),
                content=row["content"],
                processed_at=row["processed_at"],
            )
            for row in rows
        ]
