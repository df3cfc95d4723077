"""Deterministic device merge policy.

This module contains *no* payload parsing.  The decoder is responsible for
producing a :class:`SensorReading` whose absent fields are ``None``.
"""

from __future__ import annotations

from collections.abc import Hashable
from datetime import datetime

from scoutstream.models.device import DeviceRecord
from scoutstream.models.reading import SensorReading


def resolve_display_name(name: str | None, placeholder: str) -> str:
    """Use *name* when it is non-empty, otherwise *placeholder*."""
    if name:
        return name
    return placeholder


def merge_record(
    existing: DeviceRecord | None,
    *,
    identifier: Hashable,
    display_name: str,
    signal_strength: int,
    reading: SensorReading,
    observed_at: datetime | None = None,
) -> DeviceRecord:
    """Fold one observation into a device record.

    Policy:
    - No existing record: the reading is stored as-is.
    - Existing record: name, signal strength and last-seen time are always overwritten;
      each sensor field is overwritten only when *reading* reports it.
    """
    if existing is None:
        return DeviceRecord(
            identifier=identifier,
            display_name=display_name,
            signal_strength=signal_strength,
            last_reading=reading,
            last_seen=observed_at,
        )
    return existing.model_copy(
        update={
            "display_name": display_name,
            "signal_strength": signal_strength,
            "last_reading": existing.last_reading.merged_with(reading),
            "last_seen": observed_at,
        }
    )
