from __future__ import annotations

from datetime import UTC, datetime

import pytest

from geoclue_bridge.normalize import coerce_property


def test_strings_pass_through_unchanged() -> None:
    assert coerce_property("Paris, France") == "Paris, France"
    assert coerce_property("") == ""
    assert coerce_property("/org/freedesktop/GeoClue2/Client/1/Location/3") == (
        "/org/freedesktop/GeoClue2/Client/1/Location/3"
    )


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (0, "0"),
        (10, "10"),
        (-42, "-42"),
        (2**63 - 1, "9223372036854775807"),
    ],
)
def test_integers_become_decimal_text(value: int, expected: str) -> None:
    assert coerce_property(value) == expected


def test_booleans_are_integer_kinds() -> None:
    assert coerce_property(True) == "1"
    assert coerce_property(False) == "0"


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (51.5, "51.5"),
        (-0.12, "-0.12"),
        (48.85, "48.85"),
        (10.0, "10"),
        (-1.0, "-1"),
    ],
)
def test_floats_become_decimal_text(value: float, expected: str) -> None:
    assert coerce_property(value) == expected


def test_float_text_round_trips() -> None:
    value = 0.1 + 0.2
    assert float(coerce_property(value)) == value


@pytest.mark.parametrize(
    "value",
    [
        (1_700_000_000, 250_000),  # GeoClue2 Timestamp (tt)
        datetime(2026, 1, 1, tzinfo=UTC),
        None,
        b"raw",
        [1, 2],
        {"nested": 1},
    ],
)
def test_unsupported_kinds_are_unknown(value: object) -> None:
    assert coerce_property(value) == "UNKNOWN"
