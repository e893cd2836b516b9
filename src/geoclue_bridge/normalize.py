"""Normalization helpers.

Flattens the typed values of a D-Bus property bag into strings so a
location can be serialized uniformly.
"""

from __future__ import annotations

import math
from typing import Any

from geoclue_bridge._constants import UNKNOWN_VALUE


def _format_float(value: float) -> str:
    if math.isfinite(value) and value.is_integer():
        return str(int(value))
    return repr(value)


def coerce_property(value: Any) -> str:
    """Return the string form of a single property value.

    Strings pass through, integers (booleans included) and floats become
    decimal text. Every other kind maps to ``"UNKNOWN"``.

    Known limitation: GeoClue2 reports ``Timestamp`` as a
    ``(seconds, microseconds)`` struct, which is never decoded and is
    therefore always published as ``"UNKNOWN"``.
    """
    if isinstance(value, str):
        return value
    if isinstance(value, int):
        return str(int(value))
    if isinstance(value, float):
        return _format_float(value)
    return UNKNOWN_VALUE
