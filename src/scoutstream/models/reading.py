"""Sensor reading model.

A reading is a sparse bundle: any field may be ``None`` meaning
"not reported in this advertisement", never zero.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any, ClassVar

from pydantic import model_validator

from scoutstream.models._base import ScoutBaseModel, drop_sentinels


class TemperatureBand(StrEnum):
    """Coarse temperature classification used for display colouring."""

    UNKNOWN = "unknown"
    COLD = "cold"
    COOL = "cool"
    WARM = "warm"
    HOT = "hot"


# Upper bounds (exclusive, degrees Celsius); anything above the last is HOT.
_TEMPERATURE_BANDS: tuple[tuple[float, TemperatureBand], ...] = (
    (18.0, TemperatureBand.COLD),
    (22.0, TemperatureBand.COOL),
    (26.0, TemperatureBand.WARM),
)


class SensorReading(ScoutBaseModel):
    """Environmental values decoded from a single advertisement."""

    FIELDS: ClassVar[tuple[str, ...]] = ("temperature", "humidity", "velocity", "co2")

    temperature: float | None = None
    """Degrees Celsius, 0.1 resolution."""
    humidity: float | None = None
    """Relative humidity in percent, 0.1 resolution."""
    velocity: float | None = None
    """Air velocity in m/s, 0.01 resolution."""
    co2: int | None = None
    """CO2 concentration in ppm."""

    @model_validator(mode="before")
    @classmethod
    def _drop_sentinels(cls, values: Any) -> Any:
        """Drop sentinel values so the field default (``None``) is used."""
        return drop_sentinels(values)

    @property
    def is_empty(self) -> bool:
        return all(getattr(self, name) is None for name in self.FIELDS)

    def present_fields(self) -> dict[str, float | int]:
        """Return the reported fields only."""
        return {name: value for name in self.FIELDS if (value := getattr(self, name)) is not None}

    def merged_with(self, newer: SensorReading) -> SensorReading:
        """Field-wise last-known-value merge.

        Fields reported by *newer* win; fields it omits keep this reading's value.
        """
        incoming = newer.present_fields()
        if not incoming:
            return self
        return self.model_copy(update=incoming)

    @property
    def temperature_band(self) -> TemperatureBand:
        if self.temperature is None:
            return TemperatureBand.UNKNOWN
        for upper, band in _TEMPERATURE_BANDS:
            if self.temperature < upper:
                return band
        return TemperatureBand.HOT
