#!/usr/bin/env python3
"""
Great-circle and rhumb-line navigation on an oblate Earth.

Distances between two places take Earth radius variance along latitudes into
account: the radius of curvature grows from the poles toward the Equator
(Snyder, "Map Projections - A Working Manual", USGS Professional Paper 1395,
1987, p24). The ellipsoid of revolution stands in for the oblate spheroid.
The correction can be turned off per navigator, in which case every
operation uses the mean radius. Destination-point and rhumb-line
calculations always use the mean radius.

Angles come in as validated ordinates; nothing here checks ranges. Invalid
input propagates as NaN.
"""

from typing import List, Optional
import logging
import math

from .config import NeoGeoConfig
from .geometry import PolarCoordinate, Position
from .ordinate import normalize_bearing, to_bearing

logger = logging.getLogger(__name__)

EARTH_POLAR_RADIUS = 6356.78  # km
EARTH_EQUATORIAL_RADIUS = 6378.14  # km

# Quadratic mean of the polar and equatorial radii.
EARTH_MEAN_RADIUS = math.sqrt(
    (EARTH_POLAR_RADIUS**2 + 3 * EARTH_EQUATORIAL_RADIUS**2) / 4
)

# Square of Earth's eccentricity.
ECC2 = 1 - (EARTH_POLAR_RADIUS / EARTH_EQUATORIAL_RADIUS) ** 2

# Below this stretched latitude difference a rhumb line counts as east-west.
RHUMB_EW_TOLERANCE = 1e-12


def earth_radius(latitude: float, calculate_radius: bool = True) -> float:
    """
    Return the Earth radius in kilometers at the given latitude.

    Args:
        latitude: Latitude in degrees
        calculate_radius: If False, the mean radius is returned for any latitude

    Returns:
        Radius of curvature in kilometers
    """
    if calculate_radius:
        c = math.cos(math.radians(latitude))
        return EARTH_POLAR_RADIUS / math.sqrt(1 - ECC2 * c * c)
    return EARTH_MEAN_RADIUS


def _asin(x: float) -> float:
    # NaN outside the domain, as IEEE arithmetic would give
    return math.asin(x) if -1.0 <= x <= 1.0 else math.nan


def _divide(numerator: float, denominator: float) -> float:
    if denominator:
        return numerator / denominator
    if numerator == 0 or math.isnan(numerator):
        return math.nan
    return math.copysign(math.inf, numerator) * math.copysign(1.0, denominator)


def _stretched_latitude(phi: float) -> float:
    """Mercator ordinate of a latitude in radians."""
    t = math.tan(phi / 2 + math.pi / 4)
    if t > 0:
        return math.log(t)
    return -math.inf if t == 0 else math.nan


def _finite(x: float) -> float:
    # math.sin and friends raise on infinities where IEEE arithmetic gives NaN
    return x if math.isfinite(x) else math.nan


def _stretch_factor(d_phi: float, d_psi: float, phi1: float) -> float:
    # an east-west line is a circle of latitude
    if math.isnan(d_psi) or abs(d_psi) > RHUMB_EW_TOLERANCE:
        return _divide(d_phi, d_psi)
    return math.cos(phi1)


class Navigator:
    """
    Navigation calculus between geographic positions.

    The navigator keeps no state besides its configuration; every operation
    is a pure function of its arguments and the radius-correction flag.
    """

    def __init__(self, config: Optional[NeoGeoConfig] = None):
        self.config = config if config is not None else NeoGeoConfig()

    @property
    def calculate_radius(self) -> bool:
        """Whether the Earth radius is corrected for latitude."""
        return self.config.calculate_radius

    @calculate_radius.setter
    def calculate_radius(self, value: bool) -> None:
        self.config.calculate_radius = value

    def earth_radius(self, latitude: float) -> float:
        """Earth radius in kilometers at latitude under this navigator's setting."""
        return earth_radius(latitude, self.config.calculate_radius)

    def _radius_between(self, origin: Position, destination: Position) -> float:
        return self.earth_radius(self.midpoint(origin, destination).latitude.degrees)

    def midpoint(self, origin: Position, destination: Position) -> Position:
        """
        Returns the middle point of the great circle arc between two positions.

        Just as the initial bearing may differ from the final bearing, the
        midpoint is generally not half-way between latitudes/longitudes: the
        midpoint of 35N 45E and 35N 135E is around 45N 90E.

        Args:
            origin: Start position
            destination: End position

        Returns:
            Unlabelled midpoint position
        """
        d_lon = math.radians(destination.longitude.degrees - origin.longitude.degrees)
        phi1 = origin.latitude.radians
        phi2 = destination.latitude.radians
        bx = math.cos(phi2) * math.cos(d_lon)
        by = math.cos(phi2) * math.sin(d_lon)
        lat = math.atan2(
            math.sin(phi1) + math.sin(phi2),
            math.sqrt((math.cos(phi1) + bx) ** 2 + by * by),
        )
        lon = origin.longitude.radians + math.atan2(by, math.cos(phi1) + bx)
        return Position.from_degrees(math.degrees(lat), math.degrees(lon))

    def distance(self, origin: Position, destination: Position) -> float:
        """
        Distance in kilometers via the spherical law of cosines.

        The radius is taken at the midpoint latitude. The cosine of the
        central angle, sin φ1 sin φ2 + cos φ1 cos φ2 cos Δλ, is evaluated as
        cos(φ1 - φ2) - cos φ1 cos φ2 (1 - cos Δλ) so that it is exactly 1
        for coincident points.
        """
        radius = self._radius_between(origin, destination)
        phi1 = origin.latitude.radians
        phi2 = destination.latitude.radians
        d_lon = math.radians(destination.longitude.degrees - origin.longitude.degrees)
        cos_angle = math.cos(phi1 - phi2) - math.cos(phi1) * math.cos(phi2) * (
            1 - math.cos(d_lon)
        )
        # rounding can push antipodal points past -1
        return radius * math.acos(max(min(cos_angle, 1.0), -1.0))

    def half_angle_distance(self, origin: Position, destination: Position) -> float:
        """
        Distance in kilometers via the half-angle form of the law of cosines.

        Algebraically the same as distance() but built on half-angle sines
        under an arcsine, which keeps precision for short distances.
        """
        s_lat = math.sin(
            math.radians((origin.latitude.degrees - destination.latitude.degrees) / 2)
        )
        s_lon = math.sin(
            math.radians((origin.longitude.degrees - destination.longitude.degrees) / 2)
        )
        radius = self._radius_between(origin, destination)
        h = s_lat * s_lat + (
            math.cos(origin.latitude.radians)
            * math.cos(destination.latitude.radians)
            * s_lon
            * s_lon
        )
        return 2 * math.asin(math.sqrt(min(h, 1.0))) * radius

    def haversine_distance(self, origin: Position, destination: Position) -> float:
        """
        Distance in kilometers via the haversine formula.

        Numerically the preferred formula for small distances.
        """
        d_lat = math.radians(destination.latitude.degrees - origin.latitude.degrees)
        d_lon = math.radians(destination.longitude.degrees - origin.longitude.degrees)
        sla = math.sin(d_lat / 2)
        slo = math.sin(d_lon / 2)
        a = sla * sla + (
            math.cos(origin.latitude.radians)
            * math.cos(destination.latitude.radians)
            * slo
            * slo
        )
        a = min(a, 1.0)
        radius = self._radius_between(origin, destination)
        return 2 * radius * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    def initial_bearing(self, origin: Position, destination: Position) -> float:
        """Returns the initial bearing from origin to destination in [0, 360)."""
        d_lon = math.radians(destination.longitude.degrees - origin.longitude.degrees)
        phi1 = origin.latitude.radians
        phi2 = destination.latitude.radians
        y = math.sin(d_lon) * math.cos(phi2)
        x = math.cos(phi1) * math.sin(phi2) - math.sin(phi1) * math.cos(
            phi2
        ) * math.cos(d_lon)
        return to_bearing(math.atan2(y, x))

    def final_bearing(self, origin: Position, destination: Position) -> float:
        """
        Returns the bearing on arrival at destination in [0, 360).

        This is the reverse of the initial bearing from destination to origin.
        """
        return normalize_bearing(self.initial_bearing(destination, origin) + 180)

    def destination_point(
        self, origin: Position, bearing: float, distance: float
    ) -> Optional[Position]:
        """
        Position reached from origin along a great circle.

        Uses the mean Earth radius.

        Args:
            origin: Start position
            bearing: Initial bearing in degrees
            distance: Distance in kilometers

        Returns:
            Destination position, or None when the calculation does not reach
            a numeric value
        """
        phi1 = origin.latitude.radians
        theta = math.radians(_finite(bearing))
        delta = _finite(distance) / EARTH_MEAN_RADIUS
        cos_delta = math.cos(delta)
        sin_delta = math.sin(delta)
        phi2 = _asin(
            math.sin(phi1) * cos_delta + math.cos(phi1) * sin_delta * math.cos(theta)
        )
        lam2 = origin.longitude.radians + math.atan2(
            math.sin(theta) * sin_delta * math.cos(phi1),
            cos_delta - math.sin(phi1) * math.sin(phi2),
        )
        if math.isnan(phi2) or math.isnan(lam2):
            logger.warning(
                f"No destination point from {origin.as_string()} "
                f"bearing {bearing} over {distance} km"
            )
            return None
        return Position.from_degrees(math.degrees(phi2), math.degrees(lam2))

    def rhumb_line_to(self, origin: Position, destination: Position) -> PolarCoordinate:
        """
        Distance and constant bearing of the rhumb line between two positions.

        A rhumb line (loxodrome) crosses all meridians at the same angle and
        is a straight line on a Mercator projection. Sailors followed rhumb
        lines because holding a compass bearing is easier than constantly
        adjusting it along a great circle. Uses the mean Earth radius.

        Args:
            origin: Start position
            destination: End position

        Returns:
            PolarCoordinate with distance in kilometers and bearing in degrees
        """
        phi1 = origin.latitude.radians
        phi2 = destination.latitude.radians
        d_phi = phi2 - phi1
        d_lon = math.radians(destination.longitude.degrees - origin.longitude.degrees)
        d_psi = _stretched_latitude(phi2) - _stretched_latitude(phi1)
        q = _stretch_factor(d_phi, d_psi, phi1)

        # take the shorter rhumb across the antimeridian
        if abs(d_lon) > math.pi:
            d_lon = d_lon - 2 * math.pi if d_lon > 0 else d_lon + 2 * math.pi

        distance = math.sqrt(d_phi * d_phi + q * q * d_lon * d_lon) * EARTH_MEAN_RADIUS
        bearing = to_bearing(math.atan2(d_lon, d_psi))
        logger.debug(f"Rhumb line: q={q}, distance={distance} km, bearing={bearing}")
        return PolarCoordinate(distance, bearing)

    def rhumb_destination_point(
        self, origin: Position, bearing: float, distance: float
    ) -> Position:
        """
        Position reached from origin along a rhumb line.

        Holding a constant bearing spirals in toward one of the poles. A path
        that runs past a pole has its latitude folded back below the pole and
        a NaN longitude, since the rhumb has no continuation there.
        Uses the mean Earth radius.

        Args:
            origin: Start position
            bearing: Constant bearing in degrees
            distance: Distance in kilometers

        Returns:
            Destination position
        """
        theta = math.radians(_finite(bearing))
        delta = _finite(distance) / EARTH_MEAN_RADIUS
        phi1 = origin.latitude.radians
        d_phi = delta * math.cos(theta)
        phi2 = phi1 + d_phi

        # past a pole the Mercator ordinate is undefined and so is the longitude
        d_psi = _stretched_latitude(phi2) - _stretched_latitude(phi1)
        q = _stretch_factor(d_phi, d_psi, phi1)
        d_lon = _divide(delta * math.sin(theta), q)

        if abs(phi2) > math.pi / 2:
            phi2 = math.pi - phi2 if phi2 > 0 else -math.pi - phi2

        lam2 = (origin.longitude.radians + d_lon + math.pi) % (2 * math.pi) - math.pi
        return Position.from_degrees(math.degrees(phi2), math.degrees(lam2))

    def great_circle_path(
        self, origin: Position, destination: Position, segments: int = 64
    ) -> List[Position]:
        """
        Sample the great circle from origin to destination.

        Args:
            origin: Start position
            destination: End position
            segments: Number of equal-length pieces

        Returns:
            Up to segments + 1 positions; points that cannot be computed are skipped
        """
        bearing = self.initial_bearing(origin, destination)
        angle = self.haversine_distance(origin, destination) / self._radius_between(
            origin, destination
        )
        total = angle * EARTH_MEAN_RADIUS
        return self._sample(
            origin,
            destination,
            segments,
            lambda fraction: self.destination_point(origin, bearing, fraction * total),
        )

    def rhumb_line_path(
        self, origin: Position, destination: Position, segments: int = 64
    ) -> List[Position]:
        """Sample the rhumb line from origin to destination."""
        polar = self.rhumb_line_to(origin, destination)
        return self._sample(
            origin,
            destination,
            segments,
            lambda fraction: self.rhumb_destination_point(
                origin, polar.bearing, fraction * polar.distance
            ),
        )

    @staticmethod
    def _sample(origin, destination, segments, point_at) -> List[Position]:
        if segments < 1:
            raise ValueError("At least one segment is required to sample a path.")

        path = [origin]
        for i in range(1, segments):
            point = point_at(i / segments)
            if point is not None:
                path.append(point)
        path.append(destination)
        return path
