"""Internal constants shared across the library."""

from __future__ import annotations

from enum import StrEnum

NAME_MARKER = "scout"
UNKNOWN_DEVICE_NAME = "Unknown Device"

# Manufacturer data starts with the company identifier (observed as ``31 01``).
COMPANY_PREFIX_LENGTH = 2

# ------------------------------------------------------------------
# Tagged binary records  (tag:1 byte, value:uint16 little-endian)
# ------------------------------------------------------------------

TAG_VALUE_WIDTH = 2

TAG_TEMPERATURE = 0x01
TAG_HUMIDITY = 0x02
TAG_VELOCITY = 0x03
TAG_CO2 = 0x04

# tag -> (field name, divisor); a divisor of ``None`` keeps the raw integer.
TAG_FIELDS: dict[int, tuple[str, float | None]] = {
    TAG_TEMPERATURE: ("temperature", 10.0),
    TAG_HUMIDITY: ("humidity", 10.0),
    TAG_VELOCITY: ("velocity", 100.0),
    TAG_CO2: ("co2", None),
}

# ------------------------------------------------------------------
# Delimited text payload  ("23.4, 45.2, 1.20, 650")
# ------------------------------------------------------------------

TEXT_DELIMITER = ","
TEXT_FIELDS: tuple[str, ...] = ("temperature", "humidity", "velocity", "co2")


class PayloadFormat(StrEnum):
    """Encoding policy used when decoding manufacturer data.

    ``AUTO`` tries the delimited text form first and only falls back to the
    tagged binary form when the text attempt yields no fields.
    """

    AUTO = "auto"
    TEXT = "text"
    TAGGED = "tagged"


# ------------------------------------------------------------------
# RSSI -> signal bars (0-3)
# ------------------------------------------------------------------

SIGNAL_BAR_THRESHOLDS: tuple[tuple[int, int], ...] = (
    (-60, 3),
    (-80, 2),
    (-90, 1),
)


def rssi_to_bars(rssi: int) -> int:
    """Map a raw RSSI (dBm) to a 0-3 bar count."""
    for threshold, bars in SIGNAL_BAR_THRESHOLDS:
        if rssi >= threshold:
            return bars
    return 0
