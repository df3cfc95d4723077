"""Library configuration for scoutstream."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from scoutstream._constants import COMPANY_PREFIX_LENGTH, NAME_MARKER, UNKNOWN_DEVICE_NAME, PayloadFormat
from scoutstream.exceptions import ScoutConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


def parse_payload_format(value: PayloadFormat | str) -> PayloadFormat:
    if isinstance(value, PayloadFormat):
        return value
    try:
        return PayloadFormat(str(value).strip().lower())
    except ValueError as exc:
        choices = ", ".join(member.value for member in PayloadFormat)
        raise ScoutConfigError(f"payload_format must be one of {choices}, got {value!r}") from exc


@dataclasses.dataclass(frozen=True)
class ScoutConfig:
    """Decoder and registry configuration.

    Parameters
    ----------
    name_marker : str
        Substring (matched case-insensitively) that identifies a Scout
        beacon in the advertised name.
    unknown_name : str
        Placeholder used when an advertisement carries no name.
    company_prefix_length : int
        Number of leading manufacturer-data bytes (company identifier)
        skipped before decoding.
    payload_format : PayloadFormat or str
        Encoding policy. ``"auto"`` tries text first and falls back to
        tagged binary records when the text attempt yields nothing.
    feed_queue_size : int
        Maximum pending advertisements in an :class:`AdvertisementFeed`.
        ``0`` means unbounded.
    payload_trace_enabled : bool
        Log every raw payload (hex) at DEBUG level.
    """

    name_marker: str = NAME_MARKER
    unknown_name: str = UNKNOWN_DEVICE_NAME
    company_prefix_length: int = COMPANY_PREFIX_LENGTH
    payload_format: PayloadFormat = PayloadFormat.AUTO
    feed_queue_size: int = 0
    payload_trace_enabled: bool = False

    def __post_init__(self) -> None:
        if not self.name_marker or not self.name_marker.strip():
            raise ScoutConfigError("name_marker must be non-empty")
        if self.company_prefix_length < 0:
            raise ScoutConfigError(f"company_prefix_length must be >= 0, got {self.company_prefix_length}")
        if self.feed_queue_size < 0:
            raise ScoutConfigError(f"feed_queue_size must be >= 0, got {self.feed_queue_size}")
        # Frozen dataclass: coerce string formats in place.
        object.__setattr__(self, "payload_format", parse_payload_format(self.payload_format))

    @classmethod
    def from_env(cls, **overrides: Any) -> ScoutConfig:
        """Create configuration from ``SCOUT_*`` environment variables.

        Explicit keyword arguments override environment values.
        """
        env = os.environ

        _ENV_CONFIG_MAP = {
            "SCOUT_NAME_MARKER": "name_marker",
            "SCOUT_UNKNOWN_NAME": "unknown_name",
            "SCOUT_PAYLOAD_FORMAT": "payload_format",
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        for env_key, field_name in (
            ("SCOUT_COMPANY_PREFIX_LENGTH", "company_prefix_length"),
            ("SCOUT_FEED_QUEUE_SIZE", "feed_queue_size"),
        ):
            raw_value = env.get(env_key)
            if raw_value is None or field_name in overrides:
                continue
            try:
                config_kwargs[field_name] = int(raw_value)
            except ValueError as exc:
                raise ScoutConfigError(f"{env_key} must be an integer, got {raw_value!r}") from exc

        if "payload_trace_enabled" not in overrides:
            config_kwargs["payload_trace_enabled"] = _env_bool(
                env.get("SCOUT_PAYLOAD_TRACE_ENABLED"),
                False,
            )

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
