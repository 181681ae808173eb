"""Event store interface consumed by the ledger."""

from abc import ABC, abstractmethod
from typing import Any, Callable, Optional

from ..models.event import LogEntry

SnapshotCallback = Callable[[list[LogEntry]], None]
ErrorCallback = Callable[[Exception], None]


class StoreError(Exception):
    """An adapter-level failure (I/O, database, network)."""


class StoreUnavailableError(StoreError):
    """The backing store could not be opened or reached."""


def collection_path(app_id: str, operator_id: str) -> str:
    """Collection holding one operator's gallon logs."""
    return f"artifacts/{app_id}/users/{operator_id}/gallon_logs"


class Subscription:
    """Handle returned by EventStore.subscribe_ordered."""

    def __init__(self, unsubscribe: Callable[[], None]):
        self._unsubscribe = unsubscribe
        self.active = True

    def unsubscribe(self) -> None:
        if self.active:
            self._unsubscribe()
            self.active = False


class EventStore(ABC):
    """Durable, ordered, append-only event collections.

    Implementations assign the id and a non-decreasing timestamp on append
    and notify subscribers with the full ordered list after every change.
    """

    def __init__(self) -> None:
        self._subscribers: dict[int, tuple[str, SnapshotCallback, Optional[ErrorCallback]]] = {}
        self._next_token = 0

    @abstractmethod
    def append(self, collection: str, record: dict[str, Any]) -> LogEntry:
        """Persist one record and return it with id and timestamp.

        Raises:
            StoreError: If the write fails
        """

    @abstractmethod
    def list_all(self, collection: str) -> list[LogEntry]:
        """All entries ordered by timestamp, then insertion order."""

    @abstractmethod
    def delete_by_id(self, collection: str, entry_id: str) -> None:
        """Delete one entry.

        Raises:
            StoreError: If the delete fails or the id is unknown
        """

    def subscribe_ordered(
        self,
        collection: str,
        on_snapshot: SnapshotCallback,
        on_error: Optional[ErrorCallback] = None,
    ) -> Subscription:
        """Deliver the current ordered list now and after every change."""
        token = self._next_token
        self._next_token += 1
        self._subscribers[token] = (collection, on_snapshot, on_error)
        self._deliver(collection, on_snapshot, on_error)
        return Subscription(lambda: self._subscribers.pop(token, None))

    def _notify(self, collection: str) -> None:
        for sub_collection, on_snapshot, on_error in list(self._subscribers.values()):
            if sub_collection == collection:
                self._deliver(collection, on_snapshot, on_error)

    def _deliver(
        self,
        collection: str,
        on_snapshot: SnapshotCallback,
        on_error: Optional[ErrorCallback],
    ) -> None:
        try:
            entries = self.list_all(collection)
        except StoreError as e:
            if on_error is None:
                raise
            on_error(e)
            return
        on_snapshot(entries)
