"""Advertisement feed.

Scan sources publish :class:`~scoutstream.state.events.Advertisement`
events into an asyncio queue; a single consumer task drains the queue into
:meth:`DeviceRegistry.observe_event`.  The registry never learns which
transport produced an event.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import Final

from scoutstream.models.device import DeviceRecord
from scoutstream.state.events import Advertisement
from scoutstream.state.store import DeviceRegistry

_logger = logging.getLogger(__name__)

_STOP: Final = object()


class AdvertisementFeed:
    """Queue-backed channel from a scan source into a :class:`DeviceRegistry`.

    Parameters
    ----------
    registry
        Registry the consumer applies events to.
    maxsize
        Queue bound; ``0`` means unbounded.  When full, :meth:`publish`
        drops the event (broadcasts repeat, so a dropped one is harmless).
    on_update
        Optional callback invoked with the updated record after each
        accepted advertisement.  Exceptions it raises are logged and do not
        stop the feed.
    """

    def __init__(
        self,
        registry: DeviceRegistry,
        *,
        maxsize: int | None = None,
        on_update: Callable[[DeviceRecord], None] | None = None,
    ) -> None:
        self._registry = registry
        if maxsize is None:
            maxsize = registry.decoder.config.feed_queue_size
        self._queue: asyncio.Queue[object] = asyncio.Queue(maxsize=maxsize)
        self._on_update = on_update
        self._loop: asyncio.AbstractEventLoop | None = None
        self._running = False
        self._dropped = 0

    @property
    def registry(self) -> DeviceRegistry:
        return self._registry

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def dropped(self) -> int:
        """Number of advertisements discarded because the queue was full."""
        return self._dropped

    def publish(self, advertisement: Advertisement) -> bool:
        """Enqueue *advertisement* without waiting.

        Must be called from the event loop thread; use
        :meth:`publish_threadsafe` from other threads.
        Returns ``False`` when the event was dropped.
        """
        try:
            self._queue.put_nowait(advertisement)
        except asyncio.QueueFull:
            self._dropped += 1
            _logger.warning("Advertisement queue full; dropping event from %s", advertisement.identifier)
            return False
        return True

    def publish_threadsafe(self, advertisement: Advertisement) -> None:
        """Enqueue *advertisement* from a thread other than the consumer's loop."""
        if self._loop is None:
            raise RuntimeError("AdvertisementFeed.run() has not been started")
        self._loop.call_soon_threadsafe(self.publish, advertisement)

    async def put(self, advertisement: Advertisement) -> None:
        """Enqueue *advertisement*, waiting for space if the queue is bounded."""
        await self._queue.put(advertisement)

    async def run(self) -> None:
        """Consume events until :meth:`stop` is called or the task is cancelled."""
        self._loop = asyncio.get_running_loop()
        self._running = True
        _logger.debug("Advertisement feed started")
        try:
            while self._running:
                item = await self._queue.get()
                try:
                    if item is _STOP:
                        break
                    if isinstance(item, Advertisement):
                        self._handle(item)
                finally:
                    self._queue.task_done()
        finally:
            self._running = False
            _logger.debug("Advertisement feed stopped")

    def _handle(self, advertisement: Advertisement) -> None:
        record = self._registry.observe_event(advertisement)
        if record is None or self._on_update is None:
            return
        try:
            self._on_update(record)
        except Exception:
            _logger.warning("on_update callback failed for %s", record.identifier, exc_info=True)

    def stop(self) -> None:
        """Ask the consumer to exit after the events already queued ahead of the stop marker."""
        try:
            self._queue.put_nowait(_STOP)
        except asyncio.QueueFull:
            # Consumer exits after its current item.
            self._running = False

    async def drain(self) -> None:
        """Wait until every queued event has been applied."""
        await self._queue.join()

    def restart(self) -> None:
        """Start a fresh scan session: forget every known device."""
        self._registry.clear_all()
