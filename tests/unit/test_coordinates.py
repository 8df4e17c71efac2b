"""Tests for coordinate text parsing."""

from __future__ import annotations

from kml_layers.models.geometry import Coordinate
from kml_layers.parse_kml import collect_coordinates, read_coordinates, read_gx_coord
from kml_layers.parse_kml._coordinates import read_node_coordinates


class TestReadCoordinates:
    """``lon,lat[,alt]`` token lists."""

    def test_lon_lat_swapped(self) -> None:
        assert read_coordinates("10,20") == [Coordinate(lat=20.0, lon=10.0)]

    def test_whitespace_and_newlines(self) -> None:
        coords = read_coordinates("1,2 3,4\n5,6")
        assert coords == [Coordinate(2.0, 1.0), Coordinate(4.0, 3.0), Coordinate(6.0, 5.0)]

    def test_altitude_ignored(self) -> None:
        assert read_coordinates("-122.5,37.25,150") == [Coordinate(37.25, -122.5)]

    def test_runs_of_mixed_whitespace(self) -> None:
        coords = read_coordinates("\n\t  1,2 \t\n\n  3,4   \n")
        assert len(coords) == 2

    def test_short_tokens_skipped(self) -> None:
        coords = read_coordinates("1,2 7 3,4 ,")
        assert coords == [Coordinate(2.0, 1.0), Coordinate(4.0, 3.0)]

    def test_non_numeric_tokens_skipped(self) -> None:
        assert read_coordinates("a,b 1,2 3,") == [Coordinate(2.0, 1.0)]

    def test_empty_text(self) -> None:
        assert read_coordinates("") == []
        assert read_coordinates("   \n ") == []


class TestReadGxCoord:
    """Single ``gx:coord`` values."""

    def test_space_separated(self) -> None:
        assert read_gx_coord("-122.2 37.3 156.0") == Coordinate(37.3, -122.2)

    def test_without_altitude(self) -> None:
        assert read_gx_coord("5 6") == Coordinate(6.0, 5.0)

    def test_malformed(self) -> None:
        assert read_gx_coord("bad") is None
        assert read_gx_coord("x y") is None
        assert read_gx_coord("") is None
        assert read_gx_coord(None) is None


class TestNodeCoordinates:
    """Coordinates read from document nodes."""

    def test_text_split_across_nodes(self, kml_document) -> None:
        doc = kml_document("<coordinates>1,2 3,<!-- c -->4 5,6</coordinates>")
        coords = read_node_coordinates(doc, next(doc.iter("coordinates")))
        assert coords == [Coordinate(2.0, 1.0), Coordinate(4.0, 3.0), Coordinate(6.0, 5.0)]

    def test_missing_node(self, kml_document) -> None:
        doc = kml_document("<Document/>")
        assert read_node_coordinates(doc, None) == []

    def test_collect_all_coordinates(self, kml_document) -> None:
        doc = kml_document(
            "<Placemark><Point><coordinates>1,1</coordinates></Point></Placemark>"
            "<Placemark><LineString><coordinates>2,2 3,3</coordinates></LineString></Placemark>"
            "<Placemark><gx:Track><gx:coord>9 9 0</gx:coord></gx:Track></Placemark>"
        )
        coords = collect_coordinates(doc)
        assert coords == [Coordinate(1.0, 1.0), Coordinate(2.0, 2.0), Coordinate(3.0, 3.0)]
