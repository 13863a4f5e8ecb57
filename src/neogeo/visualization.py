#!/usr/bin/env python3
"""
Voyage visualization using folium maps.
"""

from typing import List
import logging
import folium

from .config import NeoGeoConfig
from .geometry import Position
from .navigator import Navigator

logger = logging.getLogger(__name__)

GREAT_CIRCLE_COLOR = "#2E86AB"
RHUMB_LINE_COLOR = "#D23C4C"


def to_map_coordinates(path: List[Position]) -> List[List[float]]:
    """
    Convert positions to folium [lat, lon] pairs.

    Longitudes are unwrapped so a path crossing the antimeridian is drawn
    as one continuous line instead of jumping across the map.
    """
    coordinates: List[List[float]] = []
    previous = None
    for pos in path:
        lon = pos.longitude.degrees
        if previous is not None:
            while lon - previous > 180:
                lon -= 360
            while lon - previous < -180:
                lon += 360
        coordinates.append([pos.latitude.degrees, lon])
        previous = lon
    return coordinates


def _popup(pos: Position, role: str) -> str:
    label = pos.label if pos.label is not None else role
    return (
        f"<b>{label}</b><br>{pos.latitude.as_string()}<br>{pos.longitude.as_string()}"
    )


def create_voyage_map(
    origin: Position,
    destination: Position,
    output_filename: str,
    navigator: Navigator,
    config: NeoGeoConfig,
) -> None:
    """
    Create an interactive map of the great circle and rhumb line between two
    positions, save as HTML.

    Args:
        origin: Start position
        destination: End position
        output_filename: Path where HTML map file should be saved
        navigator: Navigator used to sample both paths
        config: Settings such as the number of path segments
    """
    great_circle = to_map_coordinates(
        navigator.great_circle_path(origin, destination, config.path_segments)
    )
    rhumb_line = to_map_coordinates(
        navigator.rhumb_line_path(origin, destination, config.path_segments)
    )

    midpoint = navigator.midpoint(origin, destination)
    logger.debug(
        f"Creating map centered at ({midpoint.latitude.degrees:.4f}, "
        f"{midpoint.longitude.degrees:.4f})"
    )

    voyage_map = folium.Map(
        location=[midpoint.latitude.degrees, midpoint.longitude.degrees],
        tiles=None,
    )

    folium.TileLayer(
        tiles="CartoDB positron",
        attr=(
            "&copy; <a href='https://www.openstreetmap.org/copyright'>OpenStreetMap</a> "
            "contributors &copy; <a href='https://carto.com/attributions'>CARTO</a>"
        ),
        name="Standard",
        control=True,
        show=True,
    ).add_to(voyage_map)

    folium.TileLayer(
        tiles="https://server.arcgisonline.com/ArcGIS/rest/services/World_Imagery/MapServer/tile/{z}/{y}/{x}",
        attr=(
            "Tiles &copy; Esri &mdash; Source: Esri, i-cubed, USDA, USGS, AEX, GeoEye, "
            "Getmapping, Aerogrid, IGN, IGP, UPR-EGP, and the GIS User Community"
        ),
        name="Satellite",
        control=True,
        show=False,
    ).add_to(voyage_map)

    folium.LayerControl().add_to(voyage_map)

    distance = navigator.haversine_distance(origin, destination)
    rhumb = navigator.rhumb_line_to(origin, destination)

    folium.PolyLine(
        great_circle,
        color=GREAT_CIRCLE_COLOR,
        weight=3,
        opacity=0.8,
        popup=f"Great circle: {distance:,.3f} km",
        z_index=2,
    ).add_to(voyage_map)

    folium.PolyLine(
        rhumb_line,
        color=RHUMB_LINE_COLOR,
        weight=2,
        opacity=0.7,
        dash_array="6",
        popup=rhumb.with_label("Rhumb line").as_string(),
        z_index=1,
    ).add_to(voyage_map)

    folium.Marker(
        great_circle[0],
        popup=_popup(origin, "Origin"),
        icon=folium.Icon(color="green", icon="play"),
    ).add_to(voyage_map)

    folium.Marker(
        great_circle[-1],
        popup=_popup(destination, "Destination"),
        icon=folium.Icon(color="red", icon="stop"),
    ).add_to(voyage_map)

    all_coords = great_circle + rhumb_line
    south = min(c[0] for c in all_coords)
    north = max(c[0] for c in all_coords)
    west = min(c[1] for c in all_coords)
    east = max(c[1] for c in all_coords)
    voyage_map.fit_bounds([[south, west], [north, east]])

    voyage_map.save(output_filename)

    logger.debug(
        f"Map saved to {output_filename} with {len(great_circle)} great circle "
        f"and {len(rhumb_line)} rhumb line points"
    )
