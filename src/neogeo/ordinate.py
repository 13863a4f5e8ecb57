#!/usr/bin/env python3
"""
Angular ordinate values in decimal degrees.

A single value type covers both latitudes and longitudes; the axis tag
decides how the value is bounded and which cardinal points it is displayed
with.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional
import math

# "Against zero" tolerance used to pick the cardinal point of a value.
EPS = 1e-9


class Axis(Enum):
    """Direction measured by an ordinate."""

    NORTH_SOUTH = "north_south"
    EAST_WEST = "east_west"

    def __str__(self) -> str:
        return self.value

    @property
    def cardinals(self) -> str:
        """Cardinal points as (positive, negative)."""
        return "NS" if self is Axis.NORTH_SOUTH else "EW"


def rational(d: int, m: int, s: float) -> float:
    """
    Convert a degrees/minutes/seconds angle to decimal degrees.

    The sign is inherited from the degrees field.
    """
    return (-1 if d < 0 else 1) * (abs(d) + (abs(m) + abs(s) / 60) / 60)


def normalize_bearing(angle: float) -> float:
    """Map any angle in degrees into [0, 360) using floored modulo."""
    bearing = angle % 360.0
    # a tiny negative angle rounds up to exactly 360.0
    return 0.0 if bearing == 360.0 else bearing


def to_bearing(x: float) -> float:
    """
    Convert an angle in radians to a bearing in degrees.

    The bearing is measured clockwise from north and ranges over [0, 360).
    """
    return normalize_bearing(math.degrees(x) + 360)


def to_dms(x: float) -> str:
    """
    Format the magnitude of an angle in degrees as degrees, minutes and seconds.

    Degrees and minutes are zero-padded to two digits; seconds are printed
    with three decimals and redundant trailing zeros removed.

    Args:
        x: Angle in decimal degrees (the sign is ignored)

    Returns:
        String such as ``23° 32’ 52”``
    """
    if not math.isfinite(x):
        return str(abs(x))

    x = abs(x)
    x += 1 / 3600  # offset against representation error, undone below
    d = int(x)
    x = (x - d) * 60
    m = int(x)
    x = (x - m) * 60
    x = abs(x - 1)
    seconds = f"{x:06.3f}"

    # drop trailing zeros, and the decimal point once nothing follows it
    j = 5
    while j > 1 and seconds[j] < "1":
        j -= 1
    if j < 5:
        seconds = seconds[: j + 1]

    return f"{d:02d}° {m:02d}’ {seconds}”"


def _bound(value: float, axis: Axis) -> float:
    if not math.isfinite(value):
        return math.nan
    if axis is Axis.NORTH_SOUTH:
        return max(-90.0, min(90.0, value))
    value = math.fmod(value, 360.0)
    if value > 180.0:
        value -= 360.0
    elif value <= -180.0:
        value += 360.0
    return value


@dataclass(frozen=True)
class Ordinate:
    """
    An angular measurement in decimal degrees along one axis.

    North/South values are clamped to [-90, 90] and East/West values are
    normalized into (-180, 180]. NaN and infinities are stored as NaN.
    """

    degrees: float
    axis: Axis

    def __post_init__(self):
        object.__setattr__(self, "degrees", _bound(float(self.degrees), self.axis))

    @classmethod
    def latitude(cls, degrees: float) -> "Ordinate":
        return cls(degrees, Axis.NORTH_SOUTH)

    @classmethod
    def longitude(cls, degrees: float) -> "Ordinate":
        return cls(degrees, Axis.EAST_WEST)

    @classmethod
    def from_dms(
        cls,
        d: int,
        m: int,
        s: float,
        suffix: Optional[str] = None,
        axis: Axis = Axis.NORTH_SOUTH,
    ) -> "Ordinate":
        """
        Build an ordinate from degrees, minutes and seconds.

        Args:
            d: Degrees; its sign is used when no suffix is given
            m: Minutes
            s: Seconds
            suffix: Optional cardinal point; S and W make the value negative
            axis: Axis of the ordinate

        Returns:
            The ordinate in decimal degrees

        Raises:
            ValueError: If the suffix is not a cardinal point of the axis
        """
        value = rational(d, m, s)
        if suffix is not None:
            cardinal = suffix.strip().upper()
            positive, negative = axis.cardinals
            if cardinal not in (positive, negative):
                raise ValueError(
                    f"Invalid cardinal point '{suffix}' for {axis} ordinate "
                    f"(expected {positive} or {negative})"
                )
            value = abs(value) if cardinal == positive else -abs(value)
        return cls(value, axis)

    @property
    def radians(self) -> float:
        return math.radians(self.degrees)

    @property
    def cardinal(self) -> str:
        positive, negative = self.axis.cardinals
        return negative if abs(self.degrees) > EPS and self.degrees < 0 else positive

    def as_string(self) -> str:
        """Return the value in DMS format followed by its cardinal point."""
        return f"{to_dms(self.degrees)} {self.cardinal}"

    def __float__(self) -> float:
        return self.degrees

    def __str__(self) -> str:
        return self.as_string()
