#!/usr/bin/env python3
"""
Ordered positions read from GPX files.
"""

from typing import Iterator, List, TextIO, TYPE_CHECKING
import logging
import gpxpy
import gpxpy.gpx

from .geometry import Altitude, Position

if TYPE_CHECKING:
    from .navigator import Navigator

logger = logging.getLogger(__name__)


def _gpx_point_to_position(point) -> Position:
    altitude = Altitude(point.elevation, "m") if point.elevation is not None else None
    return Position.from_degrees(
        point.latitude, point.longitude, altitude=altitude, label=point.name
    )


class Route:
    """An ordered list of positions whose first and last define a voyage."""

    def __init__(self, coords: List[Position]):
        """Initializes a Route object.

        Args:
            coords: A list of Position objects, in travel order.

        Raises:
            ValueError: If coords has fewer than two positions.
        """
        if len(coords) < 2:
            raise ValueError("Route must have at least two positions")
        self.coords = coords

    @property
    def origin(self) -> Position:
        return self.coords[0]

    @property
    def destination(self) -> Position:
        return self.coords[-1]

    def total_distance(self, navigator: "Navigator") -> float:
        """
        Sum of the haversine distances of consecutive legs.

        Args:
            navigator: Navigator providing the distance formula and radius setting

        Returns:
            Distance in kilometers
        """
        return sum(
            navigator.haversine_distance(a, b)
            for a, b in zip(self.coords, self.coords[1:])
        )

    @classmethod
    def from_gpx(cls, file_input: TextIO) -> "Route":
        """
        Parse GPX data into a route.

        Track points of all tracks and segments are concatenated; files
        without tracks fall back to route points and then to waypoints.
        Point names become position labels and elevations become altitudes
        in meters.

        Args:
            file_input: File-like object containing GPX data

        Returns:
            Route object

        Raises:
            ValueError: If the GPX data holds fewer than two points.
            gpxpy.gpx.GPXException: If GPX data is malformed.
        """
        gpx_data = gpxpy.parse(file_input)

        points = [
            point
            for track in gpx_data.tracks
            for segment in track.segments
            for point in segment.points
        ]
        source = "track"
        if not points:
            points = [point for route in gpx_data.routes for point in route.points]
            source = "route"
        if not points:
            points = list(gpx_data.waypoints)
            source = "waypoint"

        coords = [_gpx_point_to_position(point) for point in points]

        route = cls(coords)
        logger.debug(f"Parsed {len(route)} {source} points from GPX data")
        return route

    @classmethod
    def from_file(cls, filename: str) -> "Route":
        """
        Load and parse a GPX file into a route.

        Args:
            filename: Path to GPX file

        Returns:
            Route object

        Raises:
            ValueError: If the file holds fewer than two points.
            FileNotFoundError: If file doesn't exist.
            PermissionError: If file can't be read.
            gpxpy.gpx.GPXException: If GPX file is malformed.
        """
        logger.debug(f"Reading GPX file: {filename}")
        with open(filename, "r", encoding="utf-8") as f:
            return cls.from_gpx(f)

    def __len__(self) -> int:
        """Return number of positions in route."""
        return len(self.coords)

    def __getitem__(self, index):
        """Allow indexing into positions."""
        return self.coords[index]

    def __iter__(self) -> Iterator[Position]:
        """Allow iteration over positions."""
        return iter(self.coords)
