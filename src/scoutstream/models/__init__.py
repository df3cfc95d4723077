"""Data models for decoded Scout advertisements."""

from scoutstream.models._base import ScoutBaseModel
from scoutstream.models.device import DeviceLocation, DeviceRecord, parse_location
from scoutstream.models.reading import SensorReading, TemperatureBand

__all__ = [
    "DeviceLocation",
    "DeviceRecord",
    "ScoutBaseModel",
    "SensorReading",
    "TemperatureBand",
    "parse_location",
]
