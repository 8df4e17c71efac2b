"""Style resolution for KML (``<Style>``, ``<StyleMap>``, icon URLs).

The style table is built in two passes over the whole document:

1. every ``<Style>`` element, wherever it sits, keyed ``#id``;
2. every ``<StyleMap>``, whose ``normal`` pair aliases ``#mapId`` to a
   record indexed in pass 1.

Pass 2 reads and writes the same table, so a ``<StyleMap>`` may alias
another ``<StyleMap>`` that appears earlier in the document. A reference
to a map that comes later is unresolved.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING
from urllib.parse import urljoin

from kml_layers.core.constants import (
    ABSOLUTE_URL_PREFIXES,
    STYLE_MAP_NORMAL_KEY,
    STYLE_MAP_TAG,
    STYLE_TAG,
    STYLE_URL_TAG,
)
from kml_layers.models.style import IconStyle, StyleKey, StyleRecord, StyleTable, style_key

if TYPE_CHECKING:
    from kml_layers.parse_kml._document import KmlDocument, KmlNode

logger = logging.getLogger("kml_layers.parse_kml")


# ---------------------------------------------------------------------------
# Scalar decoding
# ---------------------------------------------------------------------------


def decode_color(value: str | None) -> tuple[float, str] | None:
    """Decode a KML ``AABBGGRR`` colour into ``(opacity, "#RRGGBB")``.

    Returns ``None`` for anything that is not eight hex digits.
    """
    if not value:
        return None
    value = value.strip().lstrip("#")
    if len(value) != 8:
        return None
    try:
        int(value, 16)
    except ValueError:
        return None
    opacity = int(value[0:2], 16) / 255.0
    return opacity, f"#{value[6:8]}{value[4:6]}{value[2:4]}"


def resolve_icon_url(href: str, source_url: str | None = None) -> str:
    """Resolve an icon ``href`` against the URL the KML was loaded from.

    Absolute URLs and ``data:`` URIs are returned unchanged. An href
    starting with ``/`` resolves against the origin of ``source_url``,
    any other href against its directory. Without a source URL the href
    is returned as-is.
    """
    href = href.strip()
    if href.startswith(ABSOLUTE_URL_PREFIXES) or not source_url:
        return href
    return urljoin(source_url, href)


def child_text(document: KmlDocument, node: KmlNode, tag: str) -> str | None:
    """Stripped text of the first direct child named ``tag``; ``None`` if blank."""
    child = document.child(node, tag)
    if child is None:
        return None
    return document.text(child).strip() or None


def child_float(document: KmlDocument, node: KmlNode, tag: str) -> float | None:
    text = child_text(document, node, tag)
    if text is None:
        return None
    try:
        return float(text)
    except ValueError:
        logger.debug("Ignoring non-numeric <%s> value %r", tag, text)
        return None


def _attr_float(value: str | None) -> float | None:
    if value is None:
        return None
    try:
        return float(value)
    except ValueError:
        return None


# ---------------------------------------------------------------------------
# <Style>
# ---------------------------------------------------------------------------


def _parse_icon_style(
    document: KmlDocument, node: KmlNode, source_url: str | None
) -> IconStyle | None:
    icon = document.child(node, "Icon")
    href = child_text(document, icon, "href") if icon is not None else None
    if href is None:
        href = child_text(document, node, "href")
    if href is None:
        return None

    hot_spot = document.child(node, "hotSpot")
    attrib = hot_spot.attrib if hot_spot is not None else {}
    return IconStyle(
        icon_url=resolve_icon_url(href, source_url),
        anchor_ref=(_attr_float(attrib.get("x")), _attr_float(attrib.get("y"))),
        anchor_type=(attrib.get("xunits"), attrib.get("yunits")),
    )


def parse_style(
    document: KmlDocument, node: KmlNode, source_url: str | None = None
) -> StyleRecord:
    """Parse one ``<Style>`` element into a ``StyleRecord``.

    Reads ``LineStyle`` (colour, width), ``PolyStyle`` (fill colour) and
    ``IconStyle`` (icon href, hot spot). Sub-styles that are missing leave
    their attributes unset.
    """
    values: dict[str, object] = {}

    line = document.child(node, "LineStyle")
    if line is not None:
        decoded = decode_color(child_text(document, line, "color"))
        if decoded is not None:
            values["opacity"], values["color"] = decoded
        width = child_float(document, line, "width")
        if width is not None:
            values["weight"] = width

    poly = document.child(node, "PolyStyle")
    if poly is not None:
        decoded = decode_color(child_text(document, poly, "color"))
        if decoded is not None:
            values["fill_opacity"], values["fill_color"] = decoded

    icon_style = document.child(node, "IconStyle")
    if icon_style is not None:
        icon = _parse_icon_style(document, icon_style, source_url)
        if icon is not None:
            values["icon"] = icon

    return StyleRecord(**values)  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# <StyleMap>
# ---------------------------------------------------------------------------


def _normal_style(
    document: KmlDocument,
    map_node: KmlNode,
    records: dict[StyleKey, StyleRecord],
    source_url: str | None,
) -> StyleRecord | None:
    """Return the record the ``normal`` pair of a ``<StyleMap>`` points at."""
    pairs = list(document.children(map_node, "Pair"))
    if not pairs:
        # Flat maps without <Pair>: the first key/styleUrl of the map decides.
        key_node = document.first_descendant(map_node, "key")
        url_node = document.first_descendant(map_node, STYLE_URL_TAG)
        if key_node is None or url_node is None:
            return None
        if document.text(key_node).strip() != STYLE_MAP_NORMAL_KEY:
            return None
        return records.get(StyleKey(document.text(url_node).strip()))

    for pair in pairs:
        if child_text(document, pair, "key") != STYLE_MAP_NORMAL_KEY:
            continue
        url = child_text(document, pair, STYLE_URL_TAG)
        if url is not None:
            return records.get(StyleKey(url))
        inline = document.child(pair, STYLE_TAG)
        if inline is not None:
            return parse_style(document, inline, source_url)
        return None
    return None


def build_style_table(document: KmlDocument, source_url: str | None = None) -> StyleTable:
    """Index every ``<Style>``, then alias every ``<StyleMap>``."""
    records: dict[StyleKey, StyleRecord] = {}

    for node in document.iter(STYLE_TAG):
        record = parse_style(document, node, source_url)
        style_id = node.attrib.get("id")
        if style_id:
            records[style_key(style_id)] = record

    for node in document.iter(STYLE_MAP_TAG):
        map_id = node.attrib.get("id")
        if not map_id:
            continue
        target = _normal_style(document, node, records, source_url)
        if target is None:
            logger.debug("StyleMap '%s' has no resolvable normal style", map_id)
            continue
        records[style_key(map_id)] = target

    logger.debug("Resolved %d style reference(s)", len(records))
    return StyleTable(records)
