from __future__ import annotations

import json
import logging
import sqlite3
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from ..models.event import LogEntry
from .base import EventStore, StoreError, StoreUnavailableError

logger = logging.getLogger(__name__)


def _iso_now() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="microseconds")


def _json_dumps(obj: Any) -> str:
    return json.dumps(obj, ensure_ascii=False, sort_keys=True, separators=(",", ":"))


def _json_loads(text: str) -> Any:
    return json.loads(text) if text else None


class SqliteEventStore(EventStore):
    """Event collections in a single SQLite file.

    Rows are ordered by recorded_at, then by insertion sequence. Timestamps
    are UTC ISO strings and never go backwards within a collection.
    """

    def __init__(self, db_path: Path):
        super().__init__()
        self.db_path = db_path
        try:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            self._ensure_schema()
        except (OSError, sqlite3.Error) as e:
            raise StoreUnavailableError(f"Cannot open log database at {db_path}: {e}") from e

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self.db_path))
        conn.row_factory = sqlite3.Row
        return conn

    def _ensure_schema(self) -> None:
        conn = self._connect()
        try:
            conn.executescript(
                """
                CREATE TABLE IF NOT EXISTS gallon_logs(
                  seq INTEGER PRIMARY KEY AUTOINCREMENT,
                  id TEXT NOT NULL UNIQUE,
                  collection TEXT NOT NULL,
                  recorded_at TEXT NOT NULL,
                  record_json TEXT NOT NULL
                );

                CREATE INDEX IF NOT EXISTS idx_gallon_logs_collection
                  ON gallon_logs(collection, recorded_at, seq);
                """
            )
            conn.commit()
        finally:
            conn.close()

    def append(self, collection: str, record: dict[str, Any]) -> LogEntry:
        try:
            entry = LogEntry.from_record(record)
        except ValidationError as e:
            raise StoreError(f"Rejected invalid record: {e}") from e

        entry_id = uuid.uuid4().hex
        try:
            conn = self._connect()
            try:
                with conn:
                    row = conn.execute(
                        "SELECT MAX(recorded_at) AS last FROM gallon_logs WHERE collection = ?",
                        (collection,),
                    ).fetchone()
                    recorded_at = _iso_now()
                    if row is not None and row["last"] is not None and row["last"] > recorded_at:
                        recorded_at = str(row["last"])
                    conn.execute(
                        "INSERT INTO gallon_logs(id, collection, recorded_at, record_json) VALUES(?, ?, ?, ?)",
                        (entry_id, collection, recorded_at, _json_dumps(record)),
                    )
            finally:
                conn.close()
        except sqlite3.Error as e:
            raise StoreError(f"Append failed: {e}") from e

        logger.debug(f"Appended {entry_id} to {collection}")
        entry = entry.model_copy(update={"id": entry_id, "timestamp": datetime.fromisoformat(recorded_at)})
        self._notify(collection)
        return entry

    def list_all(self, collection: str) -> list[LogEntry]:
        try:
            conn = self._connect()
            try:
                rows = conn.execute(
                    "SELECT id, recorded_at, record_json FROM gallon_logs "
                    "WHERE collection = ? ORDER BY recorded_at ASC, seq ASC",
                    (collection,),
                ).fetchall()
            finally:
                conn.close()
        except sqlite3.Error as e:
            raise StoreError(f"Read failed: {e}") from e

        try:
            return [
                LogEntry.from_record(
                    _json_loads(str(row["record_json"])) or {},
                    entry_id=str(row["id"]),
                    timestamp=datetime.fromisoformat(str(row["recorded_at"])),
                )
                for row in rows
            ]
        except (ValidationError, json.JSONDecodeError) as e:
            raise StoreError(f"Corrupt record in {collection}: {e}") from e

    def delete_by_id(self, collection: str, entry_id: str) -> None:
        try:
            conn = self._connect()
            try:
                with conn:
                    cur = conn.execute(
                        "DELETE FROM gallon_logs WHERE collection = ? AND id = ?",
                        (collection, entry_id),
                    )
                    deleted = cur.rowcount
            finally:
                conn.close()
        except sqlite3.Error as e:
            raise StoreError(f"Delete failed: {e}") from e

        if deleted == 0:
            raise StoreError(f"Unknown entry id: {entry_id}")
        logger.debug(f"Deleted {entry_id} from {collection}")
        self._notify(collection)

