from __future__ import annotations

import struct

import pytest

from scoutstream._constants import PayloadFormat
from scoutstream.config import ScoutConfig
from scoutstream.exceptions import ScoutPayloadError
from scoutstream.ingestion.decoder import PayloadDecoder, decode_tagged, decode_text

PREFIX = b"\x31\x01"


def _tagged(*records: tuple[int, int]) -> bytes:
    return b"".join(struct.pack("<BH", tag, raw) for tag, raw in records)


def test_relevance_is_case_insensitive_substring() -> None:
    decoder = PayloadDecoder()

    assert decoder.is_relevant("Scout_F1Z2")
    assert decoder.is_relevant("my-SCOUT-beacon")
    assert not decoder.is_relevant("Fitbit Charge")
    assert not decoder.is_relevant("")
    assert not decoder.is_relevant(None)


def test_relevance_marker_is_configurable() -> None:
    decoder = PayloadDecoder(ScoutConfig(name_marker="Probe"))

    assert decoder.is_relevant("probe-7")
    assert not decoder.is_relevant("Scout_F1Z2")


def test_tagged_example_temperature_only() -> None:
    reading = PayloadDecoder().decode(bytes([0x31, 0x01, 0x01, 0xE8, 0x00]))

    assert reading.temperature == pytest.approx(23.2)
    assert reading.humidity is None
    assert reading.velocity is None
    assert reading.co2 is None


def test_tagged_all_fields_scaled() -> None:
    reading = decode_tagged(_tagged((0x01, 234), (0x02, 452), (0x03, 120), (0x04, 650)))

    assert reading.temperature == pytest.approx(23.4)
    assert reading.humidity == pytest.approx(45.2)
    assert reading.velocity == pytest.approx(1.20)
    assert reading.co2 == 650
    assert isinstance(reading.co2, int)


def test_tagged_unknown_tag_skips_two_bytes_and_continues() -> None:
    reading = decode_tagged(_tagged((0x7F, 0xFFFF), (0x04, 800)))

    assert reading.co2 == 800
    assert reading.temperature is None


def test_tagged_truncated_trailing_record_is_dropped() -> None:
    reading = decode_tagged(_tagged((0x02, 500)) + b"\x01\xe8")

    assert reading.humidity == pytest.approx(50.0)
    assert reading.temperature is None


def test_tagged_uses_unsigned_little_endian() -> None:
    reading = decode_tagged(b"\x04\x00\x80")

    assert reading.co2 == 0x8000


def test_text_example_maps_positionally() -> None:
    reading = PayloadDecoder().decode(PREFIX + b"23.4, 45.2, 1.20, 650")

    assert reading.temperature == pytest.approx(23.4)
    assert reading.humidity == pytest.approx(45.2)
    assert reading.velocity == pytest.approx(1.20)
    assert reading.co2 == 650


def test_text_extra_trailing_fields_are_ignored() -> None:
    reading = decode_text(b"21.0,40.0,0.50,700,extra,99")

    assert reading.present_fields() == {"temperature": 21.0, "humidity": 40.0, "velocity": 0.5, "co2": 700}


def test_text_without_comma_yields_nothing() -> None:
    reading = PayloadDecoder().decode(PREFIX + b"abc")

    assert reading.is_empty


def test_text_with_too_few_fields_yields_nothing() -> None:
    assert decode_text(b"23.4,45.2,1.20").is_empty


def test_text_non_ascii_yields_nothing() -> None:
    assert decode_text("23.4,45.2,1.20,65°".encode()).is_empty


def test_text_bad_field_leaves_only_that_field_absent() -> None:
    reading = decode_text(b"23.4, oops, 1.20, 650.5")

    assert reading.temperature == pytest.approx(23.4)
    assert reading.humidity is None
    assert reading.velocity == pytest.approx(1.20)
    # Fractional CO2 is rejected rather than truncated.
    assert reading.co2 is None


def test_text_nan_is_absent() -> None:
    reading = decode_text(b"nan,45.2,,650")

    assert reading.temperature is None
    assert reading.velocity is None
    assert reading.humidity == pytest.approx(45.2)
    assert reading.co2 == 650


def test_auto_prefers_text_when_it_yields_fields() -> None:
    reading = PayloadDecoder().decode(PREFIX + b"1,2,3,4")

    assert reading.present_fields() == {"temperature": 1.0, "humidity": 2.0, "velocity": 3.0, "co2": 4}


def test_auto_falls_back_to_tagged_when_text_is_empty() -> None:
    reading = PayloadDecoder().decode(PREFIX + _tagged((0x02, 381)))

    assert reading.humidity == pytest.approx(38.1)


def test_explicit_text_mode_never_falls_back() -> None:
    reading = PayloadDecoder().decode(PREFIX + _tagged((0x02, 381)), mode=PayloadFormat.TEXT)

    assert reading.is_empty


def test_explicit_tagged_mode_from_config() -> None:
    decoder = PayloadDecoder(ScoutConfig(payload_format="tagged"))

    assert decoder.decode(PREFIX + b"1,2,3,4").is_empty
    assert decoder.decode(PREFIX + _tagged((0x01, 200))).temperature == pytest.approx(20.0)


def test_mode_override_accepts_strings() -> None:
    reading = PayloadDecoder().decode(PREFIX + _tagged((0x03, 5)), mode="tagged")

    assert reading.velocity == pytest.approx(0.05)


@pytest.mark.parametrize("payload", [None, b"", b"\x31", PREFIX])
def test_missing_or_prefix_only_payload_is_empty(payload: bytes | None) -> None:
    assert PayloadDecoder().decode(payload).is_empty


def test_decode_required_rejects_none() -> None:
    with pytest.raises(ScoutPayloadError):
        PayloadDecoder().decode_required(None)


def test_decode_required_accepts_empty_bytes() -> None:
    assert PayloadDecoder().decode_required(b"").is_empty


def test_decode_accepts_bytearray() -> None:
    reading = PayloadDecoder().decode(bytearray([0x31, 0x01, 0x04, 0x10, 0x00]))

    assert reading.co2 == 16


def test_text_digit_separators_are_rejected() -> None:
    reading = decode_text(b"1_0, 45.2, 1.20, 6_50")

    assert reading.temperature is None
    assert reading.co2 is None
    assert reading.humidity == pytest.approx(45.2)
