#!/usr/bin/env python3
"""
Navigator demonstration tool.

Computes distance, midpoint, bearings and rhumb-line figures between two
places given in degrees, minutes, seconds and cardinal point, or read from
a GPX file, and optionally draws both paths on an interactive HTML map.

Example:
    neogeo SP 23 32 52 S 46 38 9 W CPS 22 54 21 S 47 3 39 W
"""

from typing import List, Optional, Tuple
import webbrowser
import argparse
import logging
import sys
import os
from gpxpy import gpx

from . import __version__
from . import visualization
from .config import NeoGeoConfig
from .file_utils import gpx_basename, reserve_map_filename, voyage_basename
from .geometry import Position, wgs84_inverse
from .navigator import Navigator
from .ordinate import Axis, Ordinate, to_dms
from .route import Route

logger = logging.getLogger("neogeo")

# place, then degrees, minutes, seconds and cardinal point for each ordinate
TOKENS_PER_PLACE = 9


def create_argument_parser() -> argparse.ArgumentParser:
    """
    Create and configure the command-line argument parser.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        description="Navigator API usage demonstration",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Each place is: name lat_deg lat_min lat_sec N|S lon_deg lon_min lon_sec E|W\n"
            "e.g.: neogeo SP 23 32 52 S 46 38 9 W CPS 22 54 21 S 47 3 39 W"
        ),
    )
    parser.add_argument(
        "places",
        nargs="*",
        help="Origin and destination places (9 tokens each)",
    )
    parser.add_argument(
        "--gpx",
        type=str,
        default=None,
        help="Read origin and destination from the first and last point of a GPX file",
    )
    parser.add_argument(
        "--no-radius-correction",
        action="store_true",
        help="Use the mean Earth radius instead of correcting it for latitude",
    )
    parser.add_argument(
        "--compare-wgs84",
        action="store_true",
        help="Also print the WGS84 ellipsoidal geodesic for comparison",
    )
    parser.add_argument(
        "--map",
        type=str,
        nargs="?",
        const="",
        default=None,
        help="Write an HTML map of both paths (default name: auto-generated)",
    )
    parser.add_argument(
        "--segments",
        type=int,
        default=64,
        help="Number of segments used to draw each path on the map (default: 64)",
    )
    parser.add_argument(
        "--no-open",
        action="store_true",
        help="Don't automatically open the HTML map in browser",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Set logging level (default: WARNING)",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"neogeo {__version__}",
    )
    return parser


def parse_place(tokens: List[str]) -> Position:
    """
    Build a labelled position from command-line tokens.

    Args:
        tokens: name, lat degrees, minutes, seconds, N|S, lon degrees, minutes, seconds, E|W

    Returns:
        Position with the given label

    Raises:
        ValueError: If a number or cardinal point cannot be parsed
    """
    if len(tokens) != TOKENS_PER_PLACE:
        raise ValueError(f"Expected {TOKENS_PER_PLACE} tokens, got {len(tokens)}")
    name, lat_d, lat_m, lat_s, lat_dir, lon_d, lon_m, lon_s, lon_dir = tokens
    latitude = Ordinate.from_dms(
        int(lat_d), int(lat_m), float(lat_s), lat_dir, Axis.NORTH_SOUTH
    )
    longitude = Ordinate.from_dms(
        int(lon_d), int(lon_m), float(lon_s), lon_dir, Axis.EAST_WEST
    )
    return Position(latitude, longitude, label=name)


def parse_places(tokens: List[str]) -> Tuple[Position, Position]:
    """Split command-line tokens into origin and destination positions."""
    if len(tokens) != 2 * TOKENS_PER_PLACE:
        raise ValueError(
            f"Expected {2 * TOKENS_PER_PLACE} place tokens, got {len(tokens)}"
        )
    return (
        parse_place(tokens[:TOKENS_PER_PLACE]),
        parse_place(tokens[TOKENS_PER_PLACE:]),
    )


def describe_voyage(
    navigator: Navigator, origin: Position, destination: Position
) -> str:
    """
    Render the navigator figures between two places as text.

    Args:
        navigator: Navigator to compute with
        origin: Start position
        destination: End position

    Returns:
        Multi-line report
    """
    lines = ["", "Navigator API Usage Demonstration.", ""]

    dist = navigator.distance(origin, destination)
    lines.append(
        f"Distance from {origin.as_string()} to {destination.as_string()} is {dist:,.3f} km."
    )
    lines.append("")
    lines.append(f"MidPoint is {navigator.midpoint(origin, destination).as_string()}")
    lines.append("")

    brg = navigator.initial_bearing(origin, destination)
    lines.append(f"Initial bearing is {to_dms(brg)}.")
    lines.append("")
    rhumb_point = navigator.rhumb_destination_point(origin, brg, dist)
    lines.append(f"Rhumb destination Point: {rhumb_point.as_string()}")
    lines.append("")

    brg = navigator.final_bearing(origin, destination)
    lines.append(f"Final bearing is {to_dms(brg)}.")
    lines.append("")

    rhumb = navigator.rhumb_line_to(origin, destination).with_label(
        "Rhumb lines coordinate"
    )
    lines.append(rhumb.as_string())
    lines.append("")
    return "\n".join(lines)


def describe_wgs84(origin: Position, destination: Position) -> str:
    """Render the WGS84 geodesic between two places as text."""
    reference = wgs84_inverse(origin, destination)
    return (
        f"WGS84 geodesic distance is {reference.distance:,.3f} km, "
        f"initial bearing {to_dms(reference.initial_bearing)}, "
        f"final bearing {to_dms(reference.final_bearing)}.\n"
    )


def open_file_in_browser(filename: str) -> None:
    """
    Open the specified file in the default browser.

    Args:
        filename: Path to the file to open
    """
    abs_path = os.path.abspath(filename)
    try:
        webbrowser.open(f"file://{abs_path}")
        logger.debug(f"Opening {abs_path} in your default browser...")
    except webbrowser.Error as e:
        logger.warning(f"Could not automatically open browser: {e}")
        logger.warning(f"Please manually open {abs_path}")


def setup_logging(args: argparse.Namespace) -> None:
    """Setup logging configuration."""
    if hasattr(sys.stdout, "reconfigure") and sys.stdout.encoding != "utf-8":
        try:
            sys.stdout.reconfigure(encoding="utf-8")
            if hasattr(sys.stderr, "reconfigure") and sys.stderr.encoding != "utf-8":
                sys.stderr.reconfigure(encoding="utf-8")
            logger.debug("Reconfigured stdout and stderr to UTF-8 encoding.")
        except (OSError, ValueError) as e:
            logger.debug(f"Could not reconfigure stdout/stderr to UTF-8: {e}")
    level = getattr(logging, args.log_level)

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt="%H:%M:%S"
    )

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)

    # Configure the root logger so all modules inherit the configuration
    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.addHandler(console_handler)


def config_from_args(args: argparse.Namespace) -> NeoGeoConfig:
    return NeoGeoConfig(
        calculate_radius=not args.no_radius_correction,
        log_level=args.log_level,
        path_segments=args.segments,
        compare_wgs84=args.compare_wgs84,
    )


def load_places(
    args: argparse.Namespace, navigator: Navigator
) -> Tuple[Position, Position]:
    """
    Get origin and destination from the GPX file or the place tokens.

    Raises:
        ValueError: If the places cannot be parsed
        FileNotFoundError: If the GPX file doesn't exist
        PermissionError: If the GPX file can't be read
        gpx.GPXException: If the GPX file is malformed
    """
    if args.gpx is not None:
        if args.places:
            raise ValueError("Give either place tokens or --gpx, not both")
        route = Route.from_file(args.gpx)
        logger.info(
            f"Loaded GPX route with {len(route)} points "
            f"over {route.total_distance(navigator):,.3f} km"
        )
        origin, destination = route.origin, route.destination
        return (
            origin if origin.label else origin.with_label("Start"),
            destination if destination.label else destination.with_label("End"),
        )
    return parse_places(args.places)


def determine_map_filename(
    args: argparse.Namespace, origin: Position, destination: Position
) -> str:
    """
    Determine the map filename to use.

    Raises:
        RuntimeError: If every numbered map name is taken
        ValueError: If the map file cannot be created
    """
    if args.map:
        return args.map
    if args.gpx is not None:
        return reserve_map_filename(gpx_basename(args.gpx))
    return reserve_map_filename(voyage_basename(origin.label, destination.label))


def main(argv: Optional[List[str]] = None):
    """
    Parses command-line arguments, prints the navigator figures between
    two places and optionally writes a map.
    """
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    if not args.places and args.gpx is None:
        parser.print_help()
        sys.exit(1)

    setup_logging(args)
    config = config_from_args(args)
    navigator = Navigator(config)
    logger.debug(f"Radius correction: {navigator.calculate_radius}")

    try:
        origin, destination = load_places(args, navigator)
    except FileNotFoundError:
        logger.error(f"GPX file not found: {args.gpx}")
        sys.exit(1)
    except PermissionError:
        logger.error(f"Cannot read GPX file (permission denied): {args.gpx}")
        sys.exit(1)
    except gpx.GPXException as e:
        logger.error(f"Invalid GPX file: {e}")
        sys.exit(1)
    except ValueError as e:
        logger.error(f"Invalid places: {e}")
        sys.exit(1)

    print(describe_voyage(navigator, origin, destination))
    if config.compare_wgs84:
        print(describe_wgs84(origin, destination))

    if args.map is None:
        return

    try:
        map_filename = determine_map_filename(args, origin, destination)
        logger.debug(f"Map filename: {map_filename}")
    except (RuntimeError, ValueError) as e:
        logger.error(f"Cannot choose a map filename: {e}")
        sys.exit(1)

    try:
        visualization.create_voyage_map(
            origin, destination, map_filename, navigator, config
        )
    except (OSError, ValueError) as e:
        logger.error(f"Failed to create map: {e}")
        sys.exit(1)

    if not args.no_open:
        open_file_in_browser(map_filename)


if __name__ == "__main__":
    main()
