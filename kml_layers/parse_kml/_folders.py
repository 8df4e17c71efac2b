"""Folder walking: scope membership, emission order and collapsing.

Within a scope (a ``<Folder>`` or the document itself) layers are emitted
as: child folders, then Placemarks, then GroundOverlays, each in document
order. An element belongs to the scope of its nearest ancestor
``<Folder>``; elements with no ancestor Folder belong to the document.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from kml_layers.core.config import ParserConfig
from kml_layers.core.constants import FOLDER_TAG, GROUND_OVERLAY_TAG, PLACEMARK_TAG
from kml_layers.core.exceptions import GroundOverlayError, KmlLoadError
from kml_layers.models.layer import Layer, LayerGroup
from kml_layers.parse_kml._ground_overlay import parse_ground_overlay
from kml_layers.parse_kml._placemark import compile_placemark

if TYPE_CHECKING:
    from kml_layers.models.style import StyleTable
    from kml_layers.parse_kml._document import KmlDocument, KmlNode

logger = logging.getLogger("kml_layers.parse_kml")


def collapse(layers: list[Layer]) -> Layer | None:
    """Nothing for no layers, the layer itself for one, a group for more."""
    if not layers:
        return None
    if len(layers) == 1:
        return layers[0]
    return LayerGroup(layers=tuple(layers))


def walk_scope(
    document: KmlDocument,
    scope: KmlNode | None,
    styles: StyleTable,
    *,
    source_url: str | None = None,
    config: ParserConfig | None = None,
) -> list[Layer]:
    """Return the layers of one scope, uncollapsed.

    Raises:
        KmlLoadError: If a ground overlay is invalid and
            ``config.strict_ground_overlays`` is set.
    """
    config = config or ParserConfig()
    layers: list[Layer] = []

    for folder in document.scope_members(scope, FOLDER_TAG):
        layer = parse_folder(document, folder, styles, source_url=source_url, config=config)
        if layer is not None:
            layers.append(layer)

    for placemark in document.scope_members(scope, PLACEMARK_TAG):
        feature = compile_placemark(document, placemark, styles, source_url=source_url)
        if feature is not None:
            layers.append(feature)

    for overlay_node in document.scope_members(scope, GROUND_OVERLAY_TAG):
        try:
            layers.append(parse_ground_overlay(document, overlay_node, source_url))
        except GroundOverlayError as exc:
            if config.strict_ground_overlays:
                raise KmlLoadError(
                    exc.message, code=exc.code, source_url=exc.source_url
                ) from exc
            logger.warning("Skipping invalid ground overlay: %s", exc)

    return layers


def parse_folder(
    document: KmlDocument,
    folder: KmlNode,
    styles: StyleTable,
    *,
    source_url: str | None = None,
    config: ParserConfig | None = None,
) -> Layer | None:
    """Compile a ``<Folder>`` and everything scoped to it into one layer."""
    return collapse(walk_scope(document, folder, styles, source_url=source_url, config=config))
