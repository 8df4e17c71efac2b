"""Style records resolved from KML ``<Style>`` and ``<StyleMap>`` elements.

A ``StyleRecord`` is the rendering-neutral equivalent of a KML style: line
colour/opacity/width, polygon fill colour/opacity, and an optional icon.
Every attribute is optional; ``None`` means "not specified by the
document" so that merging a referenced style with an inline one only
overrides what the inline style actually sets.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, fields, replace
from typing import NewType

StyleKey = NewType("StyleKey", str)
"""Reference key of a style in a ``StyleTable`` (``"#" + id``)."""


def style_key(style_id: str) -> StyleKey:
    """Return the table key a ``<styleUrl>`` uses to reference ``style_id``."""
    return StyleKey(f"#{style_id}")


@dataclass(frozen=True, slots=True)
class IconStyle:
    """Marker icon for point geometries.

    Attributes:
        icon_url: Icon image URL, already resolved against the document URL.
        anchor_ref: ``hotSpot`` ``(x, y)`` position inside the icon.
        anchor_type: ``hotSpot`` ``(xunits, yunits)``, e.g. ``"fraction"``
            or ``"pixels"``.
    """

    icon_url: str
    anchor_ref: tuple[float | None, float | None] = (None, None)
    anchor_type: tuple[str | None, str | None] = (None, None)

    def to_dict(self) -> dict[str, object]:
        return {
            "icon_url": self.icon_url,
            "anchor_ref": {"x": self.anchor_ref[0], "y": self.anchor_ref[1]},
            "anchor_type": {"x": self.anchor_type[0], "y": self.anchor_type[1]},
        }


@dataclass(frozen=True, slots=True)
class StyleRecord:
    """Optional visual attributes of a feature.

    Attributes:
        color: Stroke colour as ``#RRGGBB``.
        opacity: Stroke opacity in ``[0, 1]``.
        weight: Stroke width in pixels.
        fill_color: Polygon fill colour as ``#RRGGBB``.
        fill_opacity: Polygon fill opacity in ``[0, 1]``.
        fill: Whether polygons are filled.
        icon: Marker icon for points.
    """

    color: str | None = None
    opacity: float | None = None
    weight: float | None = None
    fill_color: str | None = None
    fill_opacity: float | None = None
    fill: bool | None = None
    icon: IconStyle | None = None

    def merged(self, other: StyleRecord | None) -> StyleRecord:
        """Return a copy with every attribute ``other`` sets overriding ours."""
        if other is None:
            return self
        overrides = {
            f.name: getattr(other, f.name)
            for f in fields(other)
            if getattr(other, f.name) is not None
        }
        if not overrides:
            return self
        return replace(self, **overrides)

    @property
    def is_empty(self) -> bool:
        return all(getattr(self, f.name) is None for f in fields(self))

    def to_dict(self) -> dict[str, object]:
        """Serialise to a plain dict for a rendering layer."""
        return {
            "color": self.color,
            "opacity": self.opacity,
            "weight": self.weight,
            "fill_color": self.fill_color,
            "fill_opacity": self.fill_opacity,
            "fill": self.fill,
            "icon": self.icon.to_dict() if self.icon is not None else None,
        }


EMPTY_STYLE = StyleRecord()
"""Default style used when a feature references nothing."""


class StyleTable(Mapping[StyleKey, StyleRecord]):
    """Read-only lookup from style reference to ``StyleRecord``.

    Aliased keys (from ``<StyleMap>``) share the target's record object.
    """

    __slots__ = ("_records",)

    def __init__(self, records: Mapping[StyleKey, StyleRecord] | None = None) -> None:
        self._records: dict[StyleKey, StyleRecord] = dict(records or {})

    def __getitem__(self, key: StyleKey) -> StyleRecord:
        return self._records[key]

    def __iter__(self) -> Iterator[StyleKey]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __repr__(self) -> str:
        return f"StyleTable({sorted(self._records)!r})"

    def resolve(self, style_url: str) -> StyleRecord | None:
        """Look up the record a ``<styleUrl>`` value points at, if any."""
        return self._records.get(StyleKey(style_url.strip()))
