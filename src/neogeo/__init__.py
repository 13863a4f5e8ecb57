#!/usr/bin/env python3
"""
NeoGeo - Great-circle and rhumb-line navigation calculus.

This package computes distance, bearing, midpoint and destination points
between geographic coordinates, correcting the Earth radius for latitude.
"""
import importlib.metadata

__version__ = importlib.metadata.version("neogeo")

# Import main classes for public API
from .config import NeoGeoConfig
from .ordinate import Axis, Ordinate, to_bearing, to_dms
from .geometry import Altitude, PolarCoordinate, Position
from .navigator import EARTH_MEAN_RADIUS, Navigator, earth_radius

__all__ = [
    "NeoGeoConfig",
    "Axis",
    "Ordinate",
    "to_bearing",
    "to_dms",
    "Altitude",
    "PolarCoordinate",
    "Position",
    "EARTH_MEAN_RADIUS",
    "Navigator",
    "earth_radius",
]
