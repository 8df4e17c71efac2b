"""Placemark compilation: style merge, geometry, name and description."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from kml_layers.core.constants import STYLE_TAG, STYLE_URL_TAG
from kml_layers.models.feature import Feature
from kml_layers.models.style import EMPTY_STYLE, StyleRecord
from kml_layers.parse_kml._geometry import build_geometries
from kml_layers.parse_kml._styles import parse_style

if TYPE_CHECKING:
    from kml_layers.models.style import StyleTable
    from kml_layers.parse_kml._document import KmlDocument, KmlNode

logger = logging.getLogger("kml_layers.parse_kml")


def resolve_placemark_style(
    document: KmlDocument,
    node: KmlNode,
    styles: StyleTable,
    base_style: StyleRecord = EMPTY_STYLE,
    source_url: str | None = None,
) -> StyleRecord:
    """Merge referenced styles, then the inline ``<Style>``, over ``base_style``."""
    style = base_style
    for url_node in document.children(node, STYLE_URL_TAG):
        url = document.text(url_node).strip()
        referenced = styles.resolve(url)
        if referenced is None:
            logger.debug("Unresolved styleUrl %r", url)
            continue
        style = style.merged(referenced)

    inline = document.child(node, STYLE_TAG)
    if inline is not None:
        style = style.merged(parse_style(document, inline, source_url))
    return style


def compile_placemark(
    document: KmlDocument,
    node: KmlNode,
    styles: StyleTable,
    base_style: StyleRecord = EMPTY_STYLE,
    source_url: str | None = None,
) -> Feature | None:
    """Compile one ``<Placemark>`` into a ``Feature``.

    Returns ``None`` when the Placemark has no usable geometry.
    """
    style = resolve_placemark_style(document, node, styles, base_style, source_url)
    geometries = build_geometries(document, node, style)
    if not geometries:
        return None

    name_node = document.child(node, "name")
    name = (document.first_text(name_node) or "").strip() if name_node is not None else ""
    description = "".join(
        document.text(desc) for desc in document.children(node, "description")
    )

    return Feature(
        name=name or None,
        description=description,
        geometries=geometries,
        style=style,
    )
