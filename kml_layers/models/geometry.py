"""Geometry records produced by the geometry builder.

Coordinates are kept in map order ``(lat, lon)`` as consumed by web map
clients; ``to_shapely()`` converts back to GIS ``(x=lon, y=lat)`` order.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar, NamedTuple

from kml_layers.models.style import EMPTY_STYLE, StyleRecord

if TYPE_CHECKING:
    from shapely.geometry.base import BaseGeometry


class Coordinate(NamedTuple):
    """A WGS 84 position. Altitude is not carried."""

    lat: float
    lon: float


@dataclass(frozen=True, slots=True)
class Bounds:
    """Axis-aligned lat/lon box, in degrees."""

    south: float
    west: float
    north: float
    east: float

    def to_dict(self) -> dict[str, float]:
        return {"south": self.south, "west": self.west, "north": self.north, "east": self.east}


class GeometryKind(enum.Enum):
    """Closed set of geometry variants the builder emits."""

    POINT = "point"
    LINE = "line"
    POLYGON = "polygon"
    MULTIPOLYGON = "multipolygon"


def _coords_payload(coords: tuple[Coordinate, ...]) -> list[list[float]]:
    return [[c.lat, c.lon] for c in coords]


def _xy(coords: tuple[Coordinate, ...]) -> list[tuple[float, float]]:
    return [(c.lon, c.lat) for c in coords]


@dataclass(frozen=True, slots=True)
class PointGeometry:
    """A single marker position."""

    coordinate: Coordinate
    style: StyleRecord = EMPTY_STYLE

    kind: ClassVar[GeometryKind] = GeometryKind.POINT

    def to_shapely(self) -> BaseGeometry:
        from shapely.geometry import Point

        return Point(self.coordinate.lon, self.coordinate.lat)

    def to_dict(self) -> dict[str, object]:
        return {
            "type": self.kind.value,
            "coordinates": [self.coordinate.lat, self.coordinate.lon],
            "style": self.style.to_dict(),
        }


@dataclass(frozen=True, slots=True)
class LineGeometry:
    """An open polyline (``LineString`` or ``gx:Track``)."""

    coordinates: tuple[Coordinate, ...]
    style: StyleRecord = EMPTY_STYLE

    kind: ClassVar[GeometryKind] = GeometryKind.LINE

    def to_shapely(self) -> BaseGeometry:
        from shapely.geometry import LineString

        return LineString(_xy(self.coordinates))

    def to_dict(self) -> dict[str, object]:
        return {
            "type": self.kind.value,
            "coordinates": _coords_payload(self.coordinates),
            "style": self.style.to_dict(),
        }


@dataclass(frozen=True, slots=True)
class PolygonGeometry:
    """One polygon: ``rings[0]`` is the outer boundary, the rest are holes."""

    rings: tuple[tuple[Coordinate, ...], ...]
    style: StyleRecord = EMPTY_STYLE

    kind: ClassVar[GeometryKind] = GeometryKind.POLYGON

    @property
    def exterior(self) -> tuple[Coordinate, ...]:
        return self.rings[0]

    @property
    def interiors(self) -> tuple[tuple[Coordinate, ...], ...]:
        return self.rings[1:]

    def to_shapely(self) -> BaseGeometry:
        from shapely.geometry import Polygon

        return Polygon(_xy(self.exterior), [_xy(ring) for ring in self.interiors])

    def to_dict(self) -> dict[str, object]:
        return {
            "type": self.kind.value,
            "coordinates": [_coords_payload(ring) for ring in self.rings],
            "style": self.style.to_dict(),
        }


@dataclass(frozen=True, slots=True)
class MultiPolygonGeometry:
    """Several outer boundaries of one ``<Polygon>``, each an independent ring.

    Inner boundaries are not associated with a particular outer ring and
    are therefore not carried.
    """

    rings: tuple[tuple[Coordinate, ...], ...]
    style: StyleRecord = EMPTY_STYLE

    kind: ClassVar[GeometryKind] = GeometryKind.MULTIPOLYGON

    def to_shapely(self) -> BaseGeometry:
        from shapely.geometry import MultiPolygon, Polygon

        return MultiPolygon([Polygon(_xy(ring)) for ring in self.rings])

    def to_dict(self) -> dict[str, object]:
        return {
            "type": self.kind.value,
            "coordinates": [_coords_payload(ring) for ring in self.rings],
            "style": self.style.to_dict(),
        }


GeometryRecord = PointGeometry | LineGeometry | PolygonGeometry | MultiPolygonGeometry
