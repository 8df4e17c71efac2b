"""Canonical payload contracts for the rendering hand-off.

Every record's ``to_dict()`` output is described here as a ``TypedDict``.
This module is the single source of truth for field names; drift-detection
tests verify that serialised keys match these declarations.

Design notes:
- ``TypedDict`` keeps payloads as plain JSON-compatible dicts, which is
  what a browser-side renderer receives.
- Coordinates are ``[lat, lon]`` pairs, matching ``Coordinate``.
"""

from __future__ import annotations

from typing import Literal, TypedDict

# ---------------------------------------------------------------------------
# Styles
# ---------------------------------------------------------------------------


class XYPayload(TypedDict):
    x: object
    y: object


class IconStylePayload(TypedDict):
    icon_url: str
    anchor_ref: XYPayload
    anchor_type: XYPayload


class StylePayload(TypedDict):
    color: str | None
    opacity: float | None
    weight: float | None
    fill_color: str | None
    fill_opacity: float | None
    fill: bool | None
    icon: IconStylePayload | None


# ---------------------------------------------------------------------------
# Geometries
# ---------------------------------------------------------------------------


class GeometryPayload(TypedDict):
    """Output of ``PointGeometry/LineGeometry/PolygonGeometry/MultiPolygonGeometry.to_dict()``."""

    type: Literal["point", "line", "polygon", "multipolygon"]
    coordinates: list[object]
    style: StylePayload


class BoundsPayload(TypedDict):
    south: float
    west: float
    north: float
    east: float


# ---------------------------------------------------------------------------
# Layers
# ---------------------------------------------------------------------------


class FeaturePayload(TypedDict):
    """Output of ``Feature.to_dict()``."""

    layer: Literal["feature"]
    name: str | None
    description: str
    label: str
    popup_deferred: bool
    style: StylePayload
    geometries: list[GeometryPayload]


class GroundOverlayPayload(TypedDict):
    """Output of ``GroundOverlay.to_dict()``."""

    layer: Literal["ground_overlay"]
    name: str | None
    bounds: BoundsPayload
    icon_url: str | None
    opacity: float
    rotation: float


class LayerGroupPayload(TypedDict):
    """Output of ``LayerGroup.to_dict()``."""

    layer: Literal["group"]
    layers: list[FeaturePayload | GroundOverlayPayload | LayerGroupPayload]


class ParseResultPayload(TypedDict):
    """Output of ``KmlParseResult.to_dict()``."""

    layers: list[FeaturePayload | GroundOverlayPayload | LayerGroupPayload]
    coordinates: list[list[float]]
