"""scoutstream - Scout BLE sensor beacon decoding and device registry."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("scoutstream")
except PackageNotFoundError:
    __version__ = "0+local"

from scoutstream._constants import PayloadFormat
from scoutstream.config import ScoutConfig
from scoutstream.exceptions import ScoutConfigError, ScoutError, ScoutPayloadError
from scoutstream.ingestion.decoder import PayloadDecoder, decode_tagged, decode_text
from scoutstream.ingestion.feed import AdvertisementFeed
from scoutstream.models import DeviceLocation, DeviceRecord, SensorReading, TemperatureBand
from scoutstream.state.events import Advertisement
from scoutstream.state.store import DeviceRegistry

__all__ = [
    "__version__",
    "Advertisement",
    "AdvertisementFeed",
    "DeviceLocation",
    "DeviceRecord",
    "DeviceRegistry",
    "PayloadDecoder",
    "PayloadFormat",
    "ScoutConfig",
    "ScoutConfigError",
    "ScoutError",
    "ScoutPayloadError",
    "SensorReading",
    "TemperatureBand",
    "decode_tagged",
    "decode_text",
]
