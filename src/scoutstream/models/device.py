"""Device record model."""

from __future__ import annotations

import re
from collections.abc import Hashable
from datetime import datetime
from typing import Any

from pydantic import Field, field_validator

from scoutstream._constants import UNKNOWN_DEVICE_NAME, rssi_to_bars
from scoutstream.models._base import ScoutBaseModel
from scoutstream.models.reading import SensorReading

_FLOOR_RE = re.compile(r"F(\d+)")
_ZONE_RE = re.compile(r"Z(\d+)")


class DeviceLocation(ScoutBaseModel):
    """Floor/zone encoded in a beacon name such as ``Scout_F1Z2``."""

    floor: str
    zone: str


def parse_location(name: str) -> DeviceLocation | None:
    """Extract ``F<floor>Z<zone>`` from the last ``_``-separated part of *name*.

    Returns ``None`` when the name has no ``_`` separator or the last part
    does not contain both a floor and a zone code.
    """
    parts = [part for part in name.split("_") if part]
    if len(parts) < 2:
        return None
    code = parts[-1]
    floor = _FLOOR_RE.search(code)
    zone = _ZONE_RE.search(code)
    if floor is None or zone is None:
        return None
    return DeviceLocation(floor=floor.group(1), zone=zone.group(1))


class DeviceRecord(ScoutBaseModel):
    """Snapshot of everything known about one beacon.

    Instances are immutable; the registry replaces a record wholesale on
    every accepted observation.
    """

    identifier: Any = Field(..., description="Stable, hashable platform identifier")
    display_name: str = UNKNOWN_DEVICE_NAME
    signal_strength: int = Field(..., description="Last observed RSSI in dBm")
    last_reading: SensorReading = Field(default_factory=SensorReading)
    last_seen: datetime | None = Field(default=None, description="Time of the latest accepted advertisement")

    @field_validator("identifier")
    @classmethod
    def _ensure_hashable(cls, value: Any) -> Any:
        if value is None or not isinstance(value, Hashable):
            raise ValueError("identifier must be a non-null hashable value")
        return value

    @property
    def signal_bars(self) -> int:
        """Signal quality as 0-3 bars."""
        return rssi_to_bars(self.signal_strength)

    @property
    def location(self) -> DeviceLocation | None:
        return parse_location(self.display_name)
