"""Data models produced by the KML compiler.

- Coordinate, Bounds and the geometry records (Point/Line/Polygon/MultiPolygon)
- StyleRecord, IconStyle and the StyleTable they are looked up in
- Feature: a compiled Placemark
- LayerGroup, GroundOverlay and the KmlParseResult returned to callers
"""

from kml_layers.models.feature import Feature
from kml_layers.models.geometry import (
    Bounds,
    Coordinate,
    GeometryKind,
    GeometryRecord,
    LineGeometry,
    MultiPolygonGeometry,
    PointGeometry,
    PolygonGeometry,
)
from kml_layers.models.layer import GroundOverlay, KmlParseResult, Layer, LayerGroup
from kml_layers.models.style import (
    EMPTY_STYLE,
    IconStyle,
    StyleKey,
    StyleRecord,
    StyleTable,
    style_key,
)

__all__ = [
    "EMPTY_STYLE",
    "Bounds",
    "Coordinate",
    "Feature",
    "GeometryKind",
    "GeometryRecord",
    "GroundOverlay",
    "IconStyle",
    "KmlParseResult",
    "Layer",
    "LayerGroup",
    "LineGeometry",
    "MultiPolygonGeometry",
    "PointGeometry",
    "PolygonGeometry",
    "StyleKey",
    "StyleRecord",
    "StyleTable",
    "style_key",
]
