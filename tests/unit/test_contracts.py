"""Contract drift detection tests.

These tests verify that serialised model keys match the canonical payload
contracts defined in ``kml_layers.models.contracts``. If a key is
added/removed from a model's ``to_dict()`` without updating the contract
TypedDict, these tests will fail.
"""

from __future__ import annotations

import unittest
from typing import get_type_hints

from kml_layers.models.contracts import (
    BoundsPayload,
    FeaturePayload,
    GeometryPayload,
    GroundOverlayPayload,
    IconStylePayload,
    LayerGroupPayload,
    ParseResultPayload,
    StylePayload,
)
from kml_layers.models.feature import Feature
from kml_layers.models.geometry import (
    Bounds,
    Coordinate,
    LineGeometry,
    MultiPolygonGeometry,
    PointGeometry,
    PolygonGeometry,
)
from kml_layers.models.layer import GroundOverlay, KmlParseResult, LayerGroup
from kml_layers.models.style import IconStyle, StyleRecord

RING = (Coordinate(0, 0), Coordinate(0, 1), Coordinate(1, 1), Coordinate(0, 0))


def _contract_keys(td: type) -> set[str]:
    """Extract the declared field names from a TypedDict class."""
    return set(get_type_hints(td).keys())


class TestStyleContract(unittest.TestCase):
    """StyleRecord / IconStyle keys."""

    def test_style_keys_match(self) -> None:
        actual = set(StyleRecord().to_dict().keys())
        assert actual == _contract_keys(StylePayload)

    def test_icon_keys_match(self) -> None:
        actual = set(IconStyle(icon_url="a.png").to_dict().keys())
        assert actual == _contract_keys(IconStylePayload)


class TestGeometryContract(unittest.TestCase):
    """Every geometry variant serialises to GeometryPayload."""

    def test_keys_match(self) -> None:
        expected = _contract_keys(GeometryPayload)
        for geom in (
            PointGeometry(Coordinate(1, 2)),
            LineGeometry(RING),
            PolygonGeometry((RING,)),
            MultiPolygonGeometry((RING, RING)),
        ):
            assert set(geom.to_dict().keys()) == expected, type(geom).__name__

    def test_type_tags(self) -> None:
        assert PointGeometry(Coordinate(1, 2)).to_dict()["type"] == "point"
        assert MultiPolygonGeometry((RING,)).to_dict()["type"] == "multipolygon"

    def test_coordinates_are_lat_lon(self) -> None:
        assert PointGeometry(Coordinate(lat=1.0, lon=2.0)).to_dict()["coordinates"] == [1.0, 2.0]


class TestLayerContracts(unittest.TestCase):
    """Feature, GroundOverlay, LayerGroup and parse result keys."""

    def test_feature_keys_match(self) -> None:
        feature = Feature(name="a", geometries=(PointGeometry(Coordinate(1, 2)),))
        assert set(feature.to_dict().keys()) == _contract_keys(FeaturePayload)

    def test_ground_overlay_keys_match(self) -> None:
        overlay = GroundOverlay(bounds=Bounds(0, 0, 1, 1))
        assert set(overlay.to_dict().keys()) == _contract_keys(GroundOverlayPayload)
        assert set(overlay.bounds.to_dict().keys()) == _contract_keys(BoundsPayload)

    def test_group_keys_match(self) -> None:
        group = LayerGroup(layers=(Feature(name="a"), Feature(name="b")))
        assert set(group.to_dict().keys()) == _contract_keys(LayerGroupPayload)

    def test_result_keys_match(self) -> None:
        result = KmlParseResult(layers=(Feature(name="a"),), coordinates=(Coordinate(1, 2),))
        assert set(result.to_dict().keys()) == _contract_keys(ParseResultPayload)
