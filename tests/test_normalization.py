from __future__ import annotations

import pytest

from scoutstream.ingestion.normalize import prune_none, safe_float, safe_int


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("23.4", 23.4),
        (" 1.20 ", 1.2),
        ("-4", -4.0),
        ("", None),
        ("--", None),
        ("abc", None),
        ("inf", None),
        ("1_0", None),
        (None, None),
    ],
)
def test_safe_float(value: object, expected: float | None) -> None:
    assert safe_float(value) == expected


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("650", 650),
        (" 650 ", 650),
        ("650.0", 650),
        ("650.5", None),
        ("x", None),
        ("", None),
        ("6_50", None),
        ("6_50.0", None),
        (7, 7),
    ],
)
def test_safe_int(value: object, expected: int | None) -> None:
    assert safe_int(value) == expected


def test_prune_none() -> None:
    assert prune_none({"a": None, "b": 0, "c": 0.0}) == {"b": 0, "c": 0.0}
