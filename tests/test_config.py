from __future__ import annotations

import pytest

from scoutstream._constants import PayloadFormat
from scoutstream.config import ScoutConfig
from scoutstream.exceptions import ScoutConfigError


def test_defaults() -> None:
    config = ScoutConfig()

    assert config.name_marker == "scout"
    assert config.unknown_name == "Unknown Device"
    assert config.company_prefix_length == 2
    assert config.payload_format is PayloadFormat.AUTO
    assert config.payload_trace_enabled is False


def test_payload_format_string_is_coerced() -> None:
    assert ScoutConfig(payload_format="TEXT").payload_format is PayloadFormat.TEXT


@pytest.mark.parametrize(
    "kwargs",
    [
        {"name_marker": ""},
        {"name_marker": "  "},
        {"company_prefix_length": -1},
        {"feed_queue_size": -5},
        {"payload_format": "protobuf"},
    ],
)
def test_invalid_values_raise(kwargs: dict[str, object]) -> None:
    with pytest.raises(ScoutConfigError):
        ScoutConfig(**kwargs)  # type: ignore[arg-type]


def test_from_env(monkeypatch) -> None:
    monkeypatch.setenv("SCOUT_NAME_MARKER", "probe")
    monkeypatch.setenv("SCOUT_PAYLOAD_FORMAT", "tagged")
    monkeypatch.setenv("SCOUT_COMPANY_PREFIX_LENGTH", "4")
    monkeypatch.setenv("SCOUT_FEED_QUEUE_SIZE", "128")
    monkeypatch.setenv("SCOUT_PAYLOAD_TRACE_ENABLED", "yes")

    config = ScoutConfig.from_env()

    assert config.name_marker == "probe"
    assert config.payload_format is PayloadFormat.TAGGED
    assert config.company_prefix_length == 4
    assert config.feed_queue_size == 128
    assert config.payload_trace_enabled is True


def test_from_env_overrides_win(monkeypatch) -> None:
    monkeypatch.setenv("SCOUT_NAME_MARKER", "probe")
    monkeypatch.setenv("SCOUT_FEED_QUEUE_SIZE", "128")

    config = ScoutConfig.from_env(name_marker="scout", feed_queue_size=8)

    assert config.name_marker == "scout"
    assert config.feed_queue_size == 8


def test_from_env_rejects_non_integer(monkeypatch) -> None:
    monkeypatch.setenv("SCOUT_COMPANY_PREFIX_LENGTH", "two")

    with pytest.raises(ScoutConfigError):
        ScoutConfig.from_env()
