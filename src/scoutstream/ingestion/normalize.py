"""Normalization helpers.

Centralizes lenient numeric parsing for payload fields.  Every helper
returns ``None`` instead of raising so that one bad field never aborts
the decode of its neighbours.
"""

from __future__ import annotations

import math
from typing import Any


def safe_float(value: Any) -> float | None:
    if value is None:
        return None
    if isinstance(value, str):
        value = value.strip()
        # Reject digit separators ("1_0"), which float() would accept.
        if value == "" or value == "--" or "_" in value:
            return None
    try:
        result = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(result):
        return None
    return result


def safe_int(value: Any) -> int | None:
    """Parse an integer literal.

    Integral decimals (``"650.0"``) are accepted; fractional values
    (``"650.5"``) are rejected rather than truncated.
    """
    if isinstance(value, str):
        text = value.strip()
        if "_" in text:
            return None
        try:
            return int(text)
        except ValueError:
            pass
    elif isinstance(value, int) and not isinstance(value, bool):
        return value
    parsed = safe_float(value)
    if parsed is None or not parsed.is_integer():
        return None
    return int(parsed)


def prune_none(data: dict[str, Any]) -> dict[str, Any]:
    """Drop ``None`` values; a missing key means "not reported"."""
    return {key: value for key, value in data.items() if value is not None}
