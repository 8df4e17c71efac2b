"""Geometry building for KML Placemarks.

Turns the geometry elements directly under a Placemark (or under a
``MultiGeometry``/``gx:MultiTrack`` inside it) into geometry records.
Only direct children of the current scope are considered, so the
geometries of a nested element never leak into its container.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

from kml_layers.core.constants import COORDINATES_TAG, MULTI_GEOMETRY_TAGS
from kml_layers.models.geometry import (
    Coordinate,
    GeometryRecord,
    LineGeometry,
    MultiPolygonGeometry,
    PointGeometry,
    PolygonGeometry,
)
from kml_layers.models.style import StyleRecord
from kml_layers.parse_kml._coordinates import read_gx_coord, read_node_coordinates

if TYPE_CHECKING:
    from kml_layers.parse_kml._document import KmlDocument, KmlNode

logger = logging.getLogger("kml_layers.parse_kml")

GeometryParser = Callable[["KmlDocument", "KmlNode", StyleRecord], GeometryRecord | None]

_FILL = StyleRecord(fill=True)


def _coordinates_of(document: KmlDocument, node: KmlNode) -> list[Coordinate]:
    return read_node_coordinates(document, document.first_descendant(node, COORDINATES_TAG))


# ---------------------------------------------------------------------------
# Per-element parsers
# ---------------------------------------------------------------------------


def parse_point(document: KmlDocument, node: KmlNode, style: StyleRecord) -> PointGeometry | None:
    coords = _coordinates_of(document, node)
    if not coords:
        return None
    return PointGeometry(coordinate=coords[0], style=style)


def parse_line_string(
    document: KmlDocument, node: KmlNode, style: StyleRecord
) -> LineGeometry | None:
    coords = _coordinates_of(document, node)
    if not coords:
        return None
    return LineGeometry(coordinates=tuple(coords), style=style)


def parse_track(document: KmlDocument, node: KmlNode, style: StyleRecord) -> LineGeometry | None:
    """Parse a ``gx:Track`` from its ``gx:coord`` samples, in document order."""
    coords = [
        coord
        for coord in (read_gx_coord(document.text(c)) for c in document.descendants(node, "coord"))
        if coord is not None
    ]
    if not coords:
        return None
    return LineGeometry(coordinates=tuple(coords), style=style)


def parse_polygon(
    document: KmlDocument, node: KmlNode, style: StyleRecord
) -> PolygonGeometry | MultiPolygonGeometry | None:
    """Parse a ``<Polygon>``.

    One outer boundary gives a polygon with its holes. Several outer
    boundaries give a multi-polygon of the outer rings only; holes cannot
    be matched to a particular outer ring and are dropped.
    """
    outer = [
        tuple(ring)
        for ring in (_coordinates_of(document, b) for b in document.children(node, "outerBoundaryIs"))
        if ring
    ]
    if not outer:
        return None
    inner = [
        tuple(ring)
        for ring in (_coordinates_of(document, b) for b in document.children(node, "innerBoundaryIs"))
        if ring
    ]

    if style.fill_color is not None:
        style = style.merged(_FILL)

    if len(outer) == 1:
        return PolygonGeometry(rings=(outer[0], *inner), style=style)

    if inner:
        logger.debug("Dropping %d inner ring(s) of a %d-ring polygon", len(inner), len(outer))
    return MultiPolygonGeometry(rings=tuple(outer), style=style)


# Dispatch order matters: it is the emission order within one scope.
GEOMETRY_PARSERS: dict[str, GeometryParser] = {
    "LineString": parse_line_string,
    "Polygon": parse_polygon,
    "Point": parse_point,
    "Track": parse_track,
}


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def build_geometries(
    document: KmlDocument, scope: KmlNode, style: StyleRecord
) -> tuple[GeometryRecord, ...]:
    """Build the geometries directly under ``scope``.

    Multi-geometry containers are expanded first, then each supported
    geometry tag in ``GEOMETRY_PARSERS`` order. Elements that yield no
    coordinates are left out.
    """
    geometries: list[GeometryRecord] = []

    for tag in MULTI_GEOMETRY_TAGS:
        for container in document.children(scope, tag):
            geometries.extend(build_geometries(document, container, style))

    for tag, parser in GEOMETRY_PARSERS.items():
        for node in document.children(scope, tag):
            geometry = parser(document, node, style)
            if geometry is not None:
                geometries.append(geometry)

    return tuple(geometries)
