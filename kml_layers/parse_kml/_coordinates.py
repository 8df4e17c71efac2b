"""Coordinate text parsing for KML.

Responsibilities:
- Parse ``<coordinates>`` text (``lon,lat[,alt] lon,lat[,alt] ...``)
- Parse a single ``<gx:coord>`` token (``lon lat [alt]``)
- Collect every coordinate of a document for extent computation

Malformed tokens are skipped, never raised: real-world KML is full of
trailing separators and partial tuples.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from kml_layers.core.constants import COORDINATES_TAG
from kml_layers.models.geometry import Coordinate

if TYPE_CHECKING:
    from kml_layers.parse_kml._document import KmlDocument, KmlNode

logger = logging.getLogger("kml_layers.parse_kml")


def _to_coordinate(lon: str, lat: str) -> Coordinate | None:
    try:
        return Coordinate(lat=float(lat), lon=float(lon))
    except ValueError:
        return None


def read_coordinates(text: str) -> list[Coordinate]:
    """Parse KML coordinate text into ``Coordinate(lat, lon)`` values.

    Tokens are separated by any run of whitespace. Tokens with fewer than
    two comma-separated fields, or non-numeric fields, are dropped.
    """
    coords: list[Coordinate] = []
    for token in text.split():
        parts = token.split(",")
        if len(parts) < 2:
            logger.debug("Skipping coordinate token %r: fewer than 2 fields", token)
            continue
        coord = _to_coordinate(parts[0], parts[1])
        if coord is None:
            logger.debug("Skipping coordinate token %r: not numeric", token)
            continue
        coords.append(coord)
    return coords


def read_node_coordinates(document: KmlDocument, node: KmlNode | None) -> list[Coordinate]:
    """Parse the coordinates held by a ``<coordinates>`` node.

    The text may be split across several text nodes; all of them are read.
    """
    if node is None:
        return []
    return read_coordinates(document.text(node))


def read_gx_coord(text: str | None) -> Coordinate | None:
    """Parse one ``<gx:coord>`` value (``lon lat [alt]``)."""
    if not text:
        return None
    parts = text.split()
    if len(parts) < 2:
        return None
    return _to_coordinate(parts[0], parts[1])


def collect_coordinates(document: KmlDocument) -> list[Coordinate]:
    """Return every coordinate of every ``<coordinates>`` element, in document order."""
    coords: list[Coordinate] = []
    for node in document.iter(COORDINATES_TAG):
        coords.extend(read_node_coordinates(document, node))
    return coords
