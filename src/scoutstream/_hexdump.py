"""Helpers for safe debug logging of raw advertisement payloads.

Manufacturer data arrives as opaque bytes.  These helpers render it as
upper-case hex for DEBUG logs and cap the output so a misbehaving beacon
cannot flood the log.
"""

from __future__ import annotations

from typing import Any


def hex_description(data: bytes | bytearray | memoryview) -> str:
    """Return *data* as contiguous upper-case hex (``b"\\x31\\x01"`` -> ``"3101"``)."""
    return bytes(data).hex().upper()


def payload_for_log(value: Any, *, max_bytes: int = 64) -> str:
    """Return a short printable description of *value* suitable for debug logs."""
    if value is None:
        return "<none>"

    if isinstance(value, (bytes, bytearray, memoryview)):
        data = bytes(value)
        if not data:
            return "<empty>"
        if len(data) > max_bytes:
            return f"{hex_description(data[:max_bytes])}…<truncated:{len(data)}b>"
        return hex_description(data)

    if isinstance(value, str):
        if len(value) > max_bytes:
            return f"{value[:max_bytes]!r}…<truncated>"
        return repr(value)

    # Fallback: represent unknown objects without dumping internals.
    return f"<{type(value).__name__}>"
