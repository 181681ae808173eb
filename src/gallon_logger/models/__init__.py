"""Pydantic models for Gallon Logger."""

from .event import REFILL_LABEL, Chemical, LogEntry, TankState, WeatherConditions

__all__ = [
    "REFILL_LABEL",
    "Chemical",
    "LogEntry",
    "TankState",
    "WeatherConditions",
]
