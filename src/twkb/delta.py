"""Delta-coding state and per-axis precision scaling.

Coordinates travel on the wire as differences between consecutive scaled
integers. The state is always the last *scaled integer* coordinate, never
the rounded float, so long sequences do not drift.
"""

from __future__ import annotations

import math
from typing import NamedTuple

from twkb.errors import GeometryError


class Coordinate(NamedTuple):
    """Scaled integer coordinate carried between consecutive points."""
    x: int = 0
    y: int = 0
    z: int = 0
    m: int = 0


ORIGIN = Coordinate()


def scale_factor(digits: int) -> float:
    """10 ** digits; fractional for negative digit counts."""
    return 10 ** digits


def round_half_away(value: float) -> int:
    """Round to the nearest integer, ties away from zero."""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def to_scaled(value: float | None, digits: int) -> int:
    """Scale a real coordinate to its wire integer. Missing values count as 0.

    Raises:
        GeometryError: If ``value`` is infinite or NaN.
    """
    if value is None:
        return 0
    if not math.isfinite(value):
        raise GeometryError(f"Coordinate {value} is not finite")
    return round_half_away(value * scale_factor(digits))


def from_scaled(value: int, digits: int) -> float:
    """Real coordinate for a wire integer, rounded to ``digits`` places."""
    if digits < 0:
        return float(value * 10 ** -digits)
    return round(value / scale_factor(digits), digits)
