"""``<GroundOverlay>`` parsing into image-overlay records."""

from __future__ import annotations

from typing import TYPE_CHECKING

from kml_layers.core.exceptions import GroundOverlayError
from kml_layers.models.geometry import Bounds
from kml_layers.models.layer import GroundOverlay
from kml_layers.parse_kml._styles import child_float, child_text, decode_color, resolve_icon_url

if TYPE_CHECKING:
    from kml_layers.parse_kml._document import KmlDocument, KmlNode

_EDGES = ("south", "west", "north", "east")


def parse_ground_overlay(
    document: KmlDocument, node: KmlNode, source_url: str | None = None
) -> GroundOverlay:
    """Parse a ``<GroundOverlay>``.

    Raises:
        GroundOverlayError: If ``<LatLonBox>`` is missing or one of its
            edges is missing or not numeric.
    """
    name = child_text(document, node, "name")
    box = document.first_descendant(node, "LatLonBox")
    if box is None:
        msg = f"GroundOverlay '{name or node.index}' has no <LatLonBox>"
        raise GroundOverlayError(msg, source_url=source_url or "")

    edges: dict[str, float] = {}
    for edge in _EDGES:
        value = child_float(document, box, edge)
        if value is None:
            msg = f"GroundOverlay '{name or node.index}' has no numeric <{edge}> in <LatLonBox>"
            raise GroundOverlayError(msg, source_url=source_url or "")
        edges[edge] = value

    icon = document.child(node, "Icon")
    href = child_text(document, icon, "href") if icon is not None else None
    if href is None:
        href = child_text(document, node, "href")

    decoded = decode_color(child_text(document, node, "color"))
    rotation = child_float(document, box, "rotation")

    return GroundOverlay(
        bounds=Bounds(**edges),
        icon_url=resolve_icon_url(href, source_url) if href is not None else None,
        opacity=decoded[0] if decoded is not None else 1.0,
        rotation=rotation if rotation is not None else 0.0,
        name=name,
    )
