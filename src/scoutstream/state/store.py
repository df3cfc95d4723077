"""Thread-safe in-memory device registry.

This is the only component allowed to mutate device state.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Hashable
from datetime import UTC, datetime

from scoutstream.config import ScoutConfig
from scoutstream.ingestion.decoder import PayloadDecoder
from scoutstream.models.device import DeviceRecord
from scoutstream.state.events import Advertisement
from scoutstream.state.policy import merge_record, resolve_display_name

_logger = logging.getLogger(__name__)


class DeviceRegistry:
    """Registry of observed Scout beacons keyed by identifier.

    A single lock guards the mapping: each observation is merged atomically,
    :meth:`clear_all` fully precedes or follows any observation, and
    :meth:`snapshot` never sees a half-applied update.  Payload decoding
    happens before the lock is taken.

    Records are never evicted; the registry grows with the number of
    distinct identifiers until :meth:`clear_all` is called.
    """

    def __init__(
        self,
        *,
        config: ScoutConfig | None = None,
        decoder: PayloadDecoder | None = None,
    ) -> None:
        self._decoder = decoder or PayloadDecoder(config)
        self._config = self._decoder.config
        self._lock = threading.Lock()
        # dicts preserve insertion order, which keeps snapshots stable.
        self._records: dict[Hashable, DeviceRecord] = {}

    @property
    def decoder(self) -> PayloadDecoder:
        return self._decoder

    def observe(
        self,
        identifier: Hashable,
        name: str | None,
        signal_strength: int,
        raw_payload: bytes | bytearray | None = None,
    ) -> None:
        """Record one received advertisement.

        Broadcasts whose name lacks the Scout marker are ignored.
        """
        self._observe(identifier, name, signal_strength, raw_payload, datetime.now(UTC))

    def observe_event(self, advertisement: Advertisement) -> DeviceRecord | None:
        """Apply an :class:`Advertisement`.

        Returns the updated record, or ``None`` when the broadcast was ignored.
        """
        return self._observe(
            advertisement.identifier,
            advertisement.name,
            advertisement.rssi,
            advertisement.payload,
            advertisement.observed_at,
        )

    def _observe(
        self,
        identifier: Hashable,
        name: str | None,
        signal_strength: int,
        raw_payload: bytes | bytearray | None,
        observed_at: datetime,
    ) -> DeviceRecord | None:
        display_name = resolve_display_name(name, self._config.unknown_name)
        if not self._decoder.is_relevant(display_name):
            return None

        reading = self._decoder.decode(raw_payload)

        with self._lock:
            existing = self._records.get(identifier)
            record = merge_record(
                existing,
                identifier=identifier,
                display_name=display_name,
                signal_strength=signal_strength,
                reading=reading,
                observed_at=observed_at,
            )
            self._records[identifier] = record

        if existing is None:
            _logger.debug("New device %s (%s) rssi=%d", identifier, display_name, signal_strength)
        return record

    def clear_all(self) -> None:
        """Drop every record (e.g. when a scan session restarts)."""
        with self._lock:
            count = len(self._records)
            self._records = {}
        _logger.debug("Cleared %d device(s) from registry", count)

    def snapshot(self) -> tuple[DeviceRecord, ...]:
        """Return all records in first-seen order.

        Records are immutable, so the tuple can be handed to other threads.
        """
        with self._lock:
            return tuple(self._records.values())

    def get(self, identifier: Hashable) -> DeviceRecord | None:
        with self._lock:
            return self._records.get(identifier)

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def __contains__(self, identifier: object) -> bool:
        with self._lock:
            return identifier in self._records
