"""Event store adapters for the gallon ledger."""

from .base import EventStore, StoreError, StoreUnavailableError, Subscription, collection_path
from .memory import InMemoryEventStore
from .sqlite import SqliteEventStore

__all__ = [
    "EventStore",
    "InMemoryEventStore",
    "SqliteEventStore",
    "StoreError",
    "StoreUnavailableError",
    "Subscription",
    "collection_path",
]
