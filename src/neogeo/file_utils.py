#!/usr/bin/env python3
"""
Names for the HTML map written by the CLI.
"""

import os
import logging

logger = logging.getLogger(__name__)

# Numbered variants tried before giving up.
MAX_ATTEMPTS = 180


def voyage_basename(origin_label: str, destination_label: str) -> str:
    """Base name for a map between two labelled places, e.g. "SP to CPS"."""
    name = f"{origin_label} to {destination_label}"
    for sep in (os.sep, os.altsep):
        if sep:
            name = name.replace(sep, "_")
    return name


def gpx_basename(gpx_filename: str) -> str:
    """Base name for a map drawn from a GPX file, next to that file."""
    root, ext = os.path.splitext(gpx_filename)
    return root if ext.lower() == ".gpx" else gpx_filename


def reserve_map_filename(base_name: str) -> str:
    """
    Create an empty "<base_name> map.html", numbering it when taken.

    Args:
        base_name: Voyage or GPX base name, optionally with a directory

    Returns:
        Name of the file just created

    Raises:
        ValueError: If the file cannot be created
        RuntimeError: If every numbered variant already exists
    """
    for attempt in range(MAX_ATTEMPTS + 1):
        number = f" ({attempt})" if attempt else ""
        candidate = f"{base_name} map{number}.html"
        try:
            # exclusive creation, so two runs never share a map
            with open(candidate, "x"):
                pass
        except FileExistsError:
            logger.debug(f"Map file {candidate} already exists")
            continue
        except OSError as e:
            raise ValueError(f"Cannot create map file {candidate}: {e}") from e
        return candidate

    raise RuntimeError(
        f"All {MAX_ATTEMPTS + 1} map filenames for '{base_name}' are taken"
    )
