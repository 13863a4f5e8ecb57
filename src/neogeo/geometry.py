"""
Geographic value objects and an ellipsoidal reference geodesic.

This module provides the coordinate records consumed and produced by the
navigator (positions, altitudes and polar coordinates) and a WGS84 geodesic
computed with pyproj for comparison against the spherical formulas.
"""

from dataclasses import dataclass, replace
from typing import NamedTuple, Optional
import math
import pyproj

from .ordinate import Ordinate, normalize_bearing, to_dms

# Placeholder shown for a missing label or unit.
NOT_DEFINED = "N/D"

_WGS84 = pyproj.Geod(ellps="WGS84")


class Altitude(NamedTuple):
    """An altimetric measurement with an optional unit name."""

    value: float
    unit: Optional[str] = None

    def as_string(self) -> str:
        value = "NaN" if math.isnan(self.value) else f"{self.value:7.3f}"
        return f"{value} {self.unit if self.unit is not None else NOT_DEFINED}"


class Position(NamedTuple):
    """Represents a geographic position with latitude and longitude."""

    latitude: Ordinate
    longitude: Ordinate
    altitude: Optional[Altitude] = None
    label: Optional[str] = None

    @classmethod
    def from_degrees(
        cls,
        latitude: float,
        longitude: float,
        altitude: Optional[Altitude] = None,
        label: Optional[str] = None,
    ) -> "Position":
        """
        Create a position from decimal degrees.

        Args:
            latitude: Latitude in decimal degrees, clamped to [-90, 90]
            longitude: Longitude in decimal degrees, normalized into (-180, 180]
            altitude: Optional altitude
            label: Optional place name

        Returns:
            Position object
        """
        return cls(
            Ordinate.latitude(latitude), Ordinate.longitude(longitude), altitude, label
        )

    def with_label(self, label: Optional[str]) -> "Position":
        return self._replace(label=label)

    def as_string(self) -> str:
        """
        Returns the label followed by both ordinates in DMS format.

        The altitude, when present, follows the bracketed ordinates.
        """
        altitude = self.altitude.as_string() if self.altitude is not None else ""
        label = self.label if self.label is not None else NOT_DEFINED
        return f"{label} at [{self.latitude.as_string()}  {self.longitude.as_string()}] {altitude}"


@dataclass(frozen=True)
class PolarCoordinate:
    """Distance and bearing of a place; the bearing is kept in [0, 360)."""

    distance: float  # kilometers
    bearing: float  # degrees clockwise from north
    label: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "bearing", normalize_bearing(self.bearing))

    def with_label(self, label: Optional[str]) -> "PolarCoordinate":
        return replace(self, label=label)

    def as_string(self) -> str:
        label = self.label if self.label is not None else NOT_DEFINED
        return f"{label} at [{self.distance:,.3f} km  {to_dms(self.bearing)}]"


class GeodesicReference(NamedTuple):
    """Distance and bearings of a WGS84 geodesic."""

    distance: float  # kilometers
    initial_bearing: float
    final_bearing: float


def wgs84_inverse(origin: Position, destination: Position) -> GeodesicReference:
    """
    Solve the inverse geodesic problem on the WGS84 ellipsoid.

    Used as an independent reference for the spherical navigator formulas.

    Args:
        origin: Start position
        destination: End position

    Returns:
        GeodesicReference with distance in kilometers and bearings in [0, 360)
    """
    forward, back, meters = _WGS84.inv(
        origin.longitude.degrees,
        origin.latitude.degrees,
        destination.longitude.degrees,
        destination.latitude.degrees,
    )
    return GeodesicReference(
        distance=meters / 1000,
        initial_bearing=normalize_bearing(forward),
        final_bearing=normalize_bearing(back + 180),
    )
