"""Layer records: folder groups, ground overlays, and the parse result.

A layer is whatever a rendering layer adds to a map as one unit: a
compiled Placemark (``Feature``), a ``GroundOverlay`` image, or a
``LayerGroup`` collected from a ``<Folder>`` with more than one child.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from kml_layers.models.feature import Feature
from kml_layers.models.geometry import Bounds, Coordinate


@dataclass(frozen=True, slots=True)
class GroundOverlay:
    """An image draped over a lat/lon box.

    Attributes:
        bounds: The ``<LatLonBox>`` edges.
        icon_url: Image URL, resolved against the document URL.
        opacity: Image opacity from the overlay ``<color>`` alpha byte.
        rotation: Counter-clockwise rotation in degrees.
        name: Overlay ``<name>``, if any.
    """

    bounds: Bounds
    icon_url: str | None = None
    opacity: float = 1.0
    rotation: float = 0.0
    name: str | None = None

    def to_dict(self) -> dict[str, object]:
        return {
            "layer": "ground_overlay",
            "name": self.name,
            "bounds": self.bounds.to_dict(),
            "icon_url": self.icon_url,
            "opacity": self.opacity,
            "rotation": self.rotation,
        }


@dataclass(frozen=True, slots=True)
class LayerGroup:
    """Ordered layers of one ``<Folder>``. Always holds two or more layers."""

    layers: tuple[Layer, ...] = field(default_factory=tuple)

    def __len__(self) -> int:
        return len(self.layers)

    def to_dict(self) -> dict[str, object]:
        return {
            "layer": "group",
            "layers": [layer.to_dict() for layer in self.layers],
        }


Layer = Feature | LayerGroup | GroundOverlay


@dataclass(frozen=True, slots=True)
class KmlParseResult:
    """Output of one parse.

    Attributes:
        layers: Top-level layers in emission order.
        coordinates: Every coordinate of every ``<coordinates>`` element in
            the document, in document order.
    """

    layers: tuple[Layer, ...] = field(default_factory=tuple)
    coordinates: tuple[Coordinate, ...] = field(default_factory=tuple)

    @property
    def bounds(self) -> Bounds | None:
        """Extent of ``coordinates``, or ``None`` when there are none."""
        if not self.coordinates:
            return None

        from shapely.geometry import MultiPoint

        min_lon, min_lat, max_lon, max_lat = MultiPoint(
            [(c.lon, c.lat) for c in self.coordinates]
        ).bounds
        return Bounds(south=min_lat, west=min_lon, north=max_lat, east=max_lon)

    def to_dict(self) -> dict[str, object]:
        return {
            "layers": [layer.to_dict() for layer in self.layers],
            "coordinates": [[c.lat, c.lon] for c in self.coordinates],
        }
