"""Base model for scoutstream value objects.

Every model inherits from :class:`ScoutBaseModel`, which is frozen so that
records handed out by the registry can be shared across threads without
copying, and ignores unknown keys so that presentation layers can feed
their own dicts through ``model_validate``.

Sensor models additionally run :func:`drop_sentinels` before validation so
that inputs such as ``"--"`` or NaN read as absent (``None``).  Identity
fields (identifiers, names) are taken verbatim.
"""

from __future__ import annotations

import math
from typing import Any

from pydantic import BaseModel, ConfigDict

# Sentinel strings treated as "not reported".
_SENTINELS = frozenset({"", "--", "NaN", "nan"})


def drop_sentinels(values: Any) -> Any:
    """Strip ``None``, sentinel strings and non-finite floats from *values*.

    Non-dict inputs are returned unchanged.
    """
    if not isinstance(values, dict):
        return values
    cleaned: dict[str, Any] = {}
    for key, value in values.items():
        if value is None:
            continue
        if isinstance(value, str) and value.strip() in _SENTINELS:
            continue
        if isinstance(value, float) and not math.isfinite(value):
            continue
        cleaned[key] = value
    return cleaned


class ScoutBaseModel(BaseModel):
    """Base for scoutstream models."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
    )
