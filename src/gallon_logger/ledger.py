"""Append-only gallon ledger and derived tank state."""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Sequence

from .config import GallonLoggerConfig
from .errors import (
    NotReadyError,
    PartialResetError,
    TransportError,
    TransportKind,
    ValidationError,
    ValidationKind,
)
from .mix import PendingMix, is_finite_positive
from .models.event import REFILL_LABEL, Chemical, LogEntry, TankState, WeatherConditions
from .report import build_report, last_application_conditions
from .store.base import EventStore, StoreError, StoreUnavailableError, Subscription, collection_path

logger = logging.getLogger(__name__)


def derive_state(events: Sequence[LogEntry], configured_capacity: float) -> TankState:
    """Tank state from the tail of the log.

    Each event carries its own post-state, so only the last one is read.
    """
    if not events:
        return TankState(capacity=configured_capacity, gallons_left=configured_capacity)
    last = events[-1]
    return TankState(capacity=last.initial_tank_volume, gallons_left=last.gallons_left)


def is_chronological(events: Sequence[LogEntry]) -> bool:
    """True when confirmed timestamps never go backwards."""
    previous: Optional[datetime] = None
    for entry in events:
        if entry.timestamp is None:
            continue
        if previous is not None and entry.timestamp < previous:
            return False
        previous = entry.timestamp
    return True


@dataclass(frozen=True)
class RefillResult:
    entry: LogEntry
    requested: float
    actual_added: float

    @property
    def capped(self) -> bool:
        return self.actual_added < self.requested


class Ledger:
    """Validated append-only history of one operator's tank.

    Call open(operator_id) before anything else; until then every operation
    raises NotReadyError. State is re-derived from every snapshot the store
    delivers.
    """

    def __init__(self, store: EventStore, config: Optional[GallonLoggerConfig] = None):
        self.store = store
        self.config = config or GallonLoggerConfig()
        self.operator_id: Optional[str] = None
        self.collection: Optional[str] = None
        self.events: list[LogEntry] = []
        self.last_error: Optional[Exception] = None
        # Capacity set by the operator but not yet carried by a logged event
        self._capacity_override: Optional[float] = None
        self._state = derive_state([], self.config.default_capacity)
        self._subscription: Optional[Subscription] = None
        self.mix = PendingMix(self._state.capacity, decimals=self.config.ratio_decimals)

    # --- lifecycle ---

    @property
    def is_ready(self) -> bool:
        return self.collection is not None

    def open(self, operator_id: str) -> "Ledger":
        """Bind the ledger to an operator and load their history.

        Args:
            operator_id: Identity of the operator whose tank this is

        Returns:
            The ledger itself, ready for use

        Raises:
            NotReadyError: If operator_id is blank
            TransportError: If the store cannot be reached or read
        """
        if not operator_id or not operator_id.strip():
            raise NotReadyError("An operator id is required to open the ledger.")
        self.close()

        operator_id = operator_id.strip()
        collection = collection_path(self.config.app_id, operator_id)
        self.last_error = None
        try:
            subscription = self.store.subscribe_ordered(collection, self._on_snapshot, self._on_store_error)
        except StoreError as e:
            logger.error(f"Could not subscribe to {collection}: {e}")
            raise TransportError(TransportKind.UNAVAILABLE) from e

        if self.last_error is not None:
            subscription.unsubscribe()
            raise TransportError(TransportKind.READ_FAILED) from self.last_error

        self.operator_id = operator_id
        self.collection = collection
        self._subscription = subscription
        logger.info(f"Ledger open for {operator_id} ({len(self.events)} events)")
        return self

    def close(self) -> None:
        """Unsubscribe and drop everything held for the current operator."""
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None
        self.operator_id = None
        self.collection = None
        self.events = []
        self.last_error = None
        self._capacity_override = None
        self._state = derive_state([], self.config.default_capacity)
        self.mix = PendingMix(self._state.capacity, decimals=self.config.ratio_decimals)

    def _require_ready(self) -> str:
        if self.collection is None:
            raise NotReadyError()
        return self.collection

    # --- store notifications ---

    def _on_snapshot(self, events: list[LogEntry]) -> None:
        if not is_chronological(events):
            logger.warning("Store delivered events out of timestamp order; derived state may be wrong")
        self.apply_snapshot(events)

    def _on_store_error(self, error: Exception) -> None:
        logger.error(f"Snapshot error: {error}")
        self.last_error = error

    def apply_snapshot(self, events: Sequence[LogEntry]) -> TankState:
        """Replace the in-memory snapshot and re-derive state from it."""
        self.events = list(events)
        self.last_error = None
        return self._recompute()

    def _recompute(self) -> TankState:
        override = self._capacity_override
        state = derive_state(self.events, override if override is not None else self.config.default_capacity)
        if override is not None and self.events:
            state = TankState(capacity=override, gallons_left=min(state.gallons_left, override))
        self._state = state
        if self.mix.reference_volume != state.capacity:
            self.mix.rebase(state.capacity)
        return state

    # --- derived state ---

    def get_current_state(self) -> TankState:
        self._require_ready()
        return self._state

    @property
    def last_conditions(self) -> Optional[WeatherConditions]:
        return last_application_conditions(self.events)

    # --- operations ---

    def log_application(
        self,
        road: str,
        volume_used: float,
        chemicals: Sequence[Chemical],
        conditions: Optional[WeatherConditions],
    ) -> LogEntry:
        """Record chemical applied to a road.

        Args:
            road: Road name
            volume_used: Gallons sprayed on the road
            chemicals: Mix in the tank, ratios already computed
            conditions: Environmental conditions at application time

        Returns:
            The stored LogEntry

        Raises:
            ValidationError: If any input is invalid or exceeds inventory
            TransportError: If the store write fails
        """
        collection = self._require_ready()
        state = self._state

        if not road or not road.strip():
            raise ValidationError(ValidationKind.EMPTY_ROAD, "Please select a Road Name.")
        if not is_finite_positive(volume_used):
            raise ValidationError(
                ValidationKind.NON_POSITIVE_VOLUME,
                "Please enter a valid amount of Gallons Used.",
            )
        volume_used = float(volume_used)
        if volume_used > state.gallons_left:
            raise ValidationError(
                ValidationKind.INSUFFICIENT_INVENTORY,
                f"Gallons Used ({volume_used:g}) exceeds Gallons Left ({state.gallons_left:g}). Please refill.",
            )
        if not chemicals:
            raise ValidationError(
                ValidationKind.EMPTY_CHEMICAL_MIX,
                "Please add at least one chemical to the mix before logging.",
            )
        if conditions is None or not conditions.is_complete():
            raise ValidationError(
                ValidationKind.INCOMPLETE_CONDITIONS,
                "Please complete all Environmental Conditions fields.",
            )

        decimals = self.config.volume_decimals
        entry = LogEntry(
            road_name=road.strip(),
            gallons_used=round(volume_used, decimals),
            gallons_left=min(round(state.gallons_left - volume_used, decimals), state.capacity),
            initial_tank_volume=state.capacity,
            chemical_mix=list(chemicals),
            weather_conditions=conditions.model_copy(update={"weather": conditions.weather.strip()}),
        )
        saved = self._append(collection, entry)
        logger.info(f"Logged {volume_used:.2f} gallons for {saved.road_name}")
        return saved

    def log_refill(self, volume_added: float) -> RefillResult:
        """Record liquid added to the tank, capped at capacity.

        Raises:
            ValidationError: If the request is not positive or the tank is full
            TransportError: If the store write fails
        """
        collection = self._require_ready()
        state = self._state

        if not is_finite_positive(volume_added):
            raise ValidationError(
                ValidationKind.NON_POSITIVE_VOLUME,
                "Please enter a positive amount of gallons to add.",
            )
        volume_added = float(volume_added)
        new_gallons_left = min(state.capacity, state.gallons_left + volume_added)
        actual_added = new_gallons_left - state.gallons_left
        if actual_added <= self.config.refill_tolerance:
            raise ValidationError(
                ValidationKind.TANK_FULL,
                "Could not refill: Tank is already full or amount added is too small.",
            )

        decimals = self.config.volume_decimals
        entry = LogEntry(
            road_name=REFILL_LABEL,
            gallons_used=-round(actual_added, decimals),
            gallons_left=min(round(new_gallons_left, decimals), state.capacity),
            initial_tank_volume=state.capacity,
            chemical_mix=[],
            weather_conditions=None,
        )
        saved = self._append(collection, entry)
        result = RefillResult(entry=saved, requested=volume_added, actual_added=actual_added)
        if result.capped:
            logger.info(f"Refilled tank by {actual_added:.2f} gallons (capped from {volume_added:.2f})")
        else:
            logger.info(f"Refilled tank by {actual_added:.2f} gallons")
        return result

    def set_capacity(self, new_capacity: float) -> TankState:
        """Change the tank capacity used for the next logged event.

        Gallons left is clamped down to the new capacity and staged mix
        ratios are recomputed. Nothing is written to the store.

        Raises:
            ValidationError: If new_capacity is not a positive number
        """
        self._require_ready()
        if not is_finite_positive(new_capacity):
            raise ValidationError(
                ValidationKind.NON_POSITIVE_VOLUME,
                "Tank capacity must be a positive number of gallons.",
            )
        self._capacity_override = float(new_capacity)
        return self._recompute()

    def reset(self) -> int:
        """Delete the whole history and restore the default tank.

        Returns:
            Number of events deleted

        Raises:
            TransportError: If the history cannot be listed or nothing could be deleted
            PartialResetError: If only some events were deleted
        """
        collection = self._require_ready()
        logger.info("Clearing history...")

        try:
            entries = self.store.list_all(collection)
        except StoreError as e:
            logger.error(f"Reset read error: {e}")
            raise TransportError(TransportKind.READ_FAILED) from e

        deleted: list[str] = []
        failed: list[str] = []
        for entry in entries:
            try:
                self.store.delete_by_id(collection, entry.id)
                deleted.append(entry.id)
            except StoreError as e:
                logger.error(f"Reset delete error for {entry.id}: {e}")
                failed.append(entry.id)

        if failed and not deleted:
            raise TransportError(TransportKind.WRITE_FAILED, "Could not clear history.")
        if failed:
            raise PartialResetError(deleted, failed)

        self._capacity_override = None
        self.mix = PendingMix(self.config.default_capacity, decimals=self.config.ratio_decimals)
        self.apply_snapshot([])
        logger.info("History cleared. Ready for new job!")
        return len(deleted)

    def build_report(self, as_of: datetime) -> str:
        """Render the history report for the current snapshot."""
        self._require_ready()
        return build_report(
            self.events,
            capacity=self._state.capacity,
            operator_id=self.operator_id,
            last_conditions=self.last_conditions,
            generated_at=as_of,
        )

    def _append(self, collection: str, entry: LogEntry) -> LogEntry:
        try:
            saved = self.store.append(collection, entry.to_record())
        except StoreUnavailableError as e:
            logger.error(f"Store unavailable: {e}")
            raise TransportError(TransportKind.UNAVAILABLE) from e
        except StoreError as e:
            logger.error(f"Store write error: {e}")
            raise TransportError(TransportKind.WRITE_FAILED) from e

        # The new event carries the capacity now; the override is spent
        self._capacity_override = None
        if not self.events or self.events[-1].id != saved.id:
            self.apply_snapshot([*self.events, saved])
        else:
            self._recompute()
        return saved
