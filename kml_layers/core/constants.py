"""Shared KML constants.

Centralises element names and URL prefixes used across the compiler
stages.
"""

from __future__ import annotations

ROOT_TAG: str = "kml"
"""Local name every KML document root must carry."""

# ---------------------------------------------------------------------------
# Element names (local names, namespace stripped)
# ---------------------------------------------------------------------------

FOLDER_TAG: str = "Folder"
PLACEMARK_TAG: str = "Placemark"
GROUND_OVERLAY_TAG: str = "GroundOverlay"
STYLE_TAG: str = "Style"
STYLE_MAP_TAG: str = "StyleMap"
STYLE_URL_TAG: str = "styleUrl"
COORDINATES_TAG: str = "coordinates"

MULTI_GEOMETRY_TAGS: tuple[str, ...] = ("MultiGeometry", "MultiTrack")
"""Containers whose direct children are geometries of the same feature."""

# ---------------------------------------------------------------------------
# Style resolution
# ---------------------------------------------------------------------------

STYLE_MAP_NORMAL_KEY: str = "normal"
"""Only the ``normal`` state of a ``<StyleMap>`` is used for rendering."""

ABSOLUTE_URL_PREFIXES: tuple[str, ...] = ("http://", "https://", "data:")
"""Icon hrefs with these prefixes are never rewritten."""
