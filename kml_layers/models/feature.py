"""Data model for a compiled KML Placemark.

A Feature represents one ``<Placemark>`` after style resolution and
geometry building: its name, description, merged style and the ordered
geometries it contributes to the map.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from kml_layers.models.geometry import GeometryRecord
from kml_layers.models.style import EMPTY_STYLE, StyleRecord


@dataclass(frozen=True, slots=True)
class Feature:
    """A labelled, styled Placemark.

    Attributes:
        name: First text of the Placemark ``<name>``, if any.
        description: All text of the ``<description>`` element(s), joined.
            May contain HTML.
        geometries: Geometries in document order; never empty.
        style: The merged style (referenced, then inline) of the Placemark.
    """

    name: str | None = None
    description: str = ""
    geometries: tuple[GeometryRecord, ...] = field(default_factory=tuple)
    style: StyleRecord = EMPTY_STYLE

    @property
    def is_group(self) -> bool:
        """Whether the Placemark renders as a group of shapes."""
        return len(self.geometries) > 1

    @property
    def label(self) -> str:
        """Popup content: the name as a heading followed by the description."""
        label = ""
        if self.name:
            label += f"<h2>{self.name}</h2>"
        if self.description:
            label += self.description
        return label

    @property
    def popup_deferred(self) -> bool:
        """Whether a renderer should bind ``label`` only once the shape is displayed.

        Single shapes bind on first display; groups bind immediately.
        """
        return bool(self.label) and not self.is_group

    def to_dict(self) -> dict[str, object]:
        """Serialise to a dict for a rendering layer."""
        return {
            "layer": "feature",
            "name": self.name,
            "description": self.description,
            "label": self.label,
            "popup_deferred": self.popup_deferred,
            "style": self.style.to_dict(),
            "geometries": [g.to_dict() for g in self.geometries],
        }
