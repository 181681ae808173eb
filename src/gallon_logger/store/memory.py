"""Process-local event store."""

import uuid
from collections import defaultdict
from datetime import datetime, timezone
from typing import Any, Callable, Optional

from pydantic import ValidationError

from ..models.event import LogEntry
from .base import EventStore, StoreError


class InMemoryEventStore(EventStore):
    """Event store kept in a dict of lists.

    Useful for tests and dry runs. A clock can be injected to control
    timestamps; they are clamped so they never go backwards.
    """

    def __init__(self, clock: Optional[Callable[[], datetime]] = None):
        super().__init__()
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self._collections: dict[str, list[LogEntry]] = defaultdict(list)
        self._last_ts: Optional[datetime] = None

    def _next_timestamp(self) -> datetime:
        ts = self._clock()
        if self._last_ts is not None and ts < self._last_ts:
            ts = self._last_ts
        self._last_ts = ts
        return ts

    def append(self, collection: str, record: dict[str, Any]) -> LogEntry:
        try:
            entry = LogEntry.from_record(record)
        except ValidationError as e:
            raise StoreError(f"Rejected invalid record: {e}") from e
        entry = entry.model_copy(update={"id": uuid.uuid4().hex, "timestamp": self._next_timestamp()})
        self._collections[collection].append(entry)
        self._notify(collection)
        return entry

    def list_all(self, collection: str) -> list[LogEntry]:
        return list(self._collections.get(collection, []))

    def delete_by_id(self, collection: str, entry_id: str) -> None:
        entries = self._collections.get(collection, [])
        for i, entry in enumerate(entries):
            if entry.id == entry_id:
                del entries[i]
                self._notify(collection)
                return
        raise StoreError(f"Unknown entry id: {entry_id}")
