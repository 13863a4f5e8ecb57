from dataclasses import dataclass


@dataclass
class NeoGeoConfig:
    """Configuration for the navigator and the neogeo CLI."""

    calculate_radius: bool = True
    log_level: str = "WARNING"
    path_segments: int = 64
    compare_wgs84: bool = False
