from __future__ import annotations

from scoutstream._hexdump import hex_description, payload_for_log


def test_hex_description_is_upper_case() -> None:
    assert hex_description(b"\x31\x01\x01\xe8\x00") == "310101E800"


def test_payload_for_log_truncates_long_payloads() -> None:
    rendered = payload_for_log(bytes(range(100)), max_bytes=4)

    assert rendered.startswith("00010203")
    assert "<truncated:100b>" in rendered


def test_payload_for_log_handles_missing_values() -> None:
    assert payload_for_log(None) == "<none>"
    assert payload_for_log(b"") == "<empty>"
    assert payload_for_log(object()) == "<object>"
