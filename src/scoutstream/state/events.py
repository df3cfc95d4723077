"""Advertisement events.

Scan sources convert whatever their platform delivers into an
:class:`Advertisement`.  Only the state/store layer interprets them.
"""

from __future__ import annotations

from collections.abc import Hashable
from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Advertisement(BaseModel):
    """A single received broadcast."""

    model_config = ConfigDict(frozen=True)

    identifier: Any = Field(..., description="Stable platform identifier (address/UUID)")
    name: str | None = Field(default=None, description="Advertised local name, if any")
    rssi: int = Field(..., description="Received signal strength in dBm")
    payload: bytes | None = Field(default=None, description="Raw manufacturer data")
    observed_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @field_validator("identifier")
    @classmethod
    def _ensure_hashable(cls, value: Any) -> Any:
        if value is None or not isinstance(value, Hashable):
            raise ValueError("identifier must be a non-null hashable value")
        return value

    @field_validator("observed_at")
    @classmethod
    def _ensure_tz_aware(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value
