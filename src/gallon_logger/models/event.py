"""Pydantic models for gallon log events.

Field names are snake_case in Python and camelCase on the wire; the
camelCase record shape is the storage contract shared with the mobile app.
"""

from datetime import datetime
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator, model_validator

REFILL_LABEL = "TANK REFILL"


class Chemical(BaseModel):
    """One chemical in a tank mix.

    oz_per_gal is frozen when the application is logged. It is the 4-decimal
    ratio string, or the number 0 when the tank volume was not positive.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str = Field(description="Chemical product name")
    total_oz: float = Field(alias="totalOz", description="Total ounces added to the tank")
    oz_per_gal: Union[str, int, float] = Field(alias="ozPerGal", description="Ounces per gallon of tank volume")


class WeatherConditions(BaseModel):
    """Environmental conditions at time of application."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    weather: str = Field(description="Free-text weather description")
    temperature: float = Field(description="Air temperature (°F)")
    wind_direction: str = Field(alias="windDirection", description="Compass direction the wind blows from")
    wind_speed: float = Field(alias="windSpeed", description="Wind speed (MPH)")

    def is_complete(self) -> bool:
        """True when every field is filled in (zero counts as missing)."""
        return bool(
            self.weather.strip()
            and self.temperature
            and self.wind_direction.strip()
            and self.wind_speed
        )


class LogEntry(BaseModel):
    """An immutable application or refill event.

    Refills carry the REFILL_LABEL road name, a negative gallons_used, no
    chemicals and no conditions.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: Optional[str] = Field(default=None, description="Store-assigned identifier")
    road_name: str = Field(alias="roadName")
    gallons_used: float = Field(alias="gallonsUsed", description="Positive when applied, negative when refilled")
    gallons_left: float = Field(alias="gallonsLeft", ge=0)
    initial_tank_volume: float = Field(alias="initialTankVolume", gt=0)
    chemical_mix: list[Chemical] = Field(default_factory=list, alias="chemicalMix")
    weather_conditions: Optional[WeatherConditions] = Field(default=None, alias="weatherConditions")
    timestamp: Optional[datetime] = Field(default=None, description="Store-assigned; None until confirmed")

    @field_validator("weather_conditions", mode="before")
    @classmethod
    def _empty_conditions(cls, value: Any) -> Any:
        if isinstance(value, dict) and not value:
            return None
        return value

    @field_serializer("weather_conditions")
    def _serialize_conditions(self, value: Optional[WeatherConditions]) -> dict:
        if value is None:
            return {}
        return value.model_dump(by_alias=True)

    @model_validator(mode="after")
    def _left_within_capacity(self) -> "LogEntry":
        if self.gallons_left > self.initial_tank_volume:
            raise ValueError(
                f"gallonsLeft ({self.gallons_left:g}) exceeds initialTankVolume ({self.initial_tank_volume:g})"
            )
        return self

    @property
    def is_refill(self) -> bool:
        return self.road_name == REFILL_LABEL

    @property
    def gallons_added(self) -> float:
        """Volume a refill put back in the tank."""
        return abs(self.gallons_used) if self.is_refill else 0.0

    def to_record(self) -> dict[str, Any]:
        """Render the storage record (camelCase, without id or timestamp)."""
        return self.model_dump(by_alias=True, exclude={"id", "timestamp"})

    @classmethod
    def from_record(
        cls,
        record: dict[str, Any],
        entry_id: Optional[str] = None,
        timestamp: Optional[datetime] = None,
    ) -> "LogEntry":
        data = dict(record)
        data["id"] = entry_id
        if timestamp is not None:
            data["timestamp"] = timestamp
        return cls.model_validate(data)


class TankState(BaseModel):
    """Derived tank state."""

    model_config = ConfigDict(frozen=True)

    capacity: float
    gallons_left: float

    @property
    def fill_ratio(self) -> float:
        return self.gallons_left / self.capacity if self.capacity > 0 else 0.0
