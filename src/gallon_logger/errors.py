"""Error taxonomy for the gallon ledger.

Every error raised by the ledger derives from GallonLoggerError so callers
can catch one type and surface the message to the operator.
"""

from enum import Enum


class ValidationKind(str, Enum):
    """Reasons a ledger operation was rejected before touching the store."""

    EMPTY_ROAD = "empty_road"
    NON_POSITIVE_VOLUME = "non_positive_volume"
    INSUFFICIENT_INVENTORY = "insufficient_inventory"
    EMPTY_CHEMICAL_MIX = "empty_chemical_mix"
    INCOMPLETE_CONDITIONS = "incomplete_conditions"
    TANK_FULL = "tank_full"
    INVALID_CHEMICAL = "invalid_chemical"


class TransportKind(str, Enum):
    """Store adapter failure categories."""

    UNAVAILABLE = "unavailable"
    WRITE_FAILED = "write_failed"
    READ_FAILED = "read_failed"


class GallonLoggerError(Exception):
    """Base class for all ledger errors."""


class ValidationError(GallonLoggerError):
    """User input was rejected; nothing was written."""

    def __init__(self, kind: ValidationKind, message: str):
        super().__init__(message)
        self.kind = kind
        self.message = message


_TRANSPORT_MESSAGES = {
    TransportKind.UNAVAILABLE: "Could not reach the log database.",
    TransportKind.WRITE_FAILED: "Could not save log to database.",
    TransportKind.READ_FAILED: "Could not load logs from database.",
}


class TransportError(GallonLoggerError):
    """The event store failed. The operator has to re-trigger the action."""

    def __init__(self, kind: TransportKind, message: str | None = None):
        message = message or _TRANSPORT_MESSAGES[kind]
        super().__init__(message)
        self.kind = kind
        self.message = message


class PartialResetError(GallonLoggerError):
    """Some, but not all, events were deleted during a reset."""

    def __init__(self, deleted: list[str], failed: list[str]):
        self.deleted = deleted
        self.failed = failed
        self.message = (
            f"History only partially cleared: {len(deleted)} deleted, "
            f"{len(failed)} could not be deleted. Run reset again."
        )
        super().__init__(self.message)


class NotReadyError(GallonLoggerError):
    """A ledger operation was attempted before the operator handshake."""

    def __init__(self, message: str = "System is still initializing. Open the ledger for an operator first."):
        super().__init__(message)
        self.message = message


class ConfigError(GallonLoggerError):
    """A configuration value could not be used."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message
