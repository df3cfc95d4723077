"""Scout manufacturer-data decoding.

Two wire formats are in circulation for the same device family.  Both
start with a 2-byte company identifier which is skipped:

* **Delimited text** (current firmware): ASCII ``"23.4, 45.2, 1.20, 650"``,
  mapped positionally to temperature, humidity, velocity, co2.
* **Tagged binary** (earlier firmware): repeated ``tag:u8`` +
  ``value:u16le`` records.

:class:`PayloadDecoder` picks between them according to
:class:`~scoutstream._constants.PayloadFormat`.  With ``AUTO`` the text
form is tried first and the tagged form is only attempted when the text
attempt produced no fields.

Decoding is best-effort: malformed or truncated payloads never raise,
they produce a reading with fewer (possibly zero) fields.
"""

from __future__ import annotations

import logging
import struct
from typing import Any

from scoutstream._constants import (
    TAG_FIELDS,
    TAG_VALUE_WIDTH,
    TEXT_DELIMITER,
    TEXT_FIELDS,
    PayloadFormat,
)
from scoutstream._hexdump import payload_for_log
from scoutstream.config import ScoutConfig, parse_payload_format
from scoutstream.exceptions import ScoutPayloadError
from scoutstream.ingestion.normalize import prune_none, safe_float, safe_int
from scoutstream.models.reading import SensorReading

_logger = logging.getLogger(__name__)

_UINT16_LE = struct.Struct("<H")

_EMPTY = SensorReading()


def decode_tagged(data: bytes) -> SensorReading:
    """Decode tagged binary records (company prefix already removed).

    Unknown tags skip exactly one value width.  A trailing tag without a
    complete value ends the parse.
    """
    values: dict[str, Any] = {}
    offset = 0
    size = len(data)
    while offset < size:
        tag = data[offset]
        offset += 1
        if size - offset < TAG_VALUE_WIDTH:
            _logger.debug("Truncated record for tag 0x%02X at offset %d; stopping", tag, offset - 1)
            break
        (raw,) = _UINT16_LE.unpack_from(data, offset)
        offset += TAG_VALUE_WIDTH

        field = TAG_FIELDS.get(tag)
        if field is None:
            _logger.debug("Skipping unrecognized tag 0x%02X", tag)
            continue
        name, divisor = field
        values[name] = raw if divisor is None else raw / divisor
    return SensorReading(**values)


def decode_text(data: bytes) -> SensorReading:
    """Decode a comma-delimited ASCII payload (company prefix already removed)."""
    try:
        text = data.decode("ascii")
    except UnicodeDecodeError:
        return _EMPTY

    # Some firmware pads the advertisement with NULs.
    text = text.strip("\x00")
    if TEXT_DELIMITER not in text:
        return _EMPTY

    parts = text.split(TEXT_DELIMITER)
    if len(parts) < len(TEXT_FIELDS):
        _logger.debug("Invalid text payload (%d fields): %r", len(parts), text)
        return _EMPTY

    temperature, humidity, velocity, co2 = (part.strip() for part in parts[: len(TEXT_FIELDS)])
    values = prune_none(
        {
            "temperature": safe_float(temperature),
            "humidity": safe_float(humidity),
            "velocity": safe_float(velocity),
            "co2": safe_int(co2),
        }
    )
    return SensorReading(**values)


class PayloadDecoder:
    """Relevance filter and payload decoder for Scout beacons."""

    def __init__(self, config: ScoutConfig | None = None) -> None:
        self._config = config or ScoutConfig()
        self._marker = self._config.name_marker.casefold()

    @property
    def config(self) -> ScoutConfig:
        return self._config

    def is_relevant(self, name: str | None) -> bool:
        """Return ``True`` when *name* contains the Scout marker (case-insensitive)."""
        if not name:
            return False
        return self._marker in name.casefold()

    def strip_prefix(self, payload: bytes | bytearray) -> bytes:
        """Remove the company identifier; payloads not longer than it yield ``b""``."""
        prefix = self._config.company_prefix_length
        if len(payload) <= prefix:
            return b""
        return bytes(payload[prefix:])

    def decode(
        self,
        payload: bytes | bytearray | None,
        *,
        mode: PayloadFormat | str | None = None,
    ) -> SensorReading:
        """Decode manufacturer data into a :class:`SensorReading`.

        ``None`` and empty payloads decode to an empty reading.  *mode*
        overrides the configured :class:`PayloadFormat` for this call.
        """
        if not payload:
            return _EMPTY

        if self._config.payload_trace_enabled:
            _logger.debug("Raw manufacturer data: %s", payload_for_log(payload))

        body = self.strip_prefix(payload)
        if not body:
            return _EMPTY

        policy = self._config.payload_format if mode is None else parse_payload_format(mode)
        if policy == PayloadFormat.TEXT:
            reading = decode_text(body)
        elif policy == PayloadFormat.TAGGED:
            reading = decode_tagged(body)
        else:
            reading = decode_text(body)
            if reading.is_empty:
                reading = decode_tagged(body)

        if reading.is_empty:
            _logger.debug("No sensor values in payload %s", payload_for_log(payload))
        else:
            _logger.debug("Decoded sensor values: %s", reading.present_fields())
        return reading

    def decode_required(
        self,
        payload: bytes | bytearray | None,
        *,
        mode: PayloadFormat | str | None = None,
    ) -> SensorReading:
        """Like :meth:`decode`, but *payload* must not be ``None``.

        Raises
        ------
        ScoutPayloadError
            If *payload* is ``None``.
        """
        if payload is None:
            raise ScoutPayloadError("payload is required but None was given")
        return self.decode(payload, mode=mode)
