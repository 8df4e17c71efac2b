"""Shared pytest fixtures for the kml-layers test suite."""

from collections.abc import Callable
from pathlib import Path

import pytest

from kml_layers.parse_kml import KmlDocument, load_document

# ---------------------------------------------------------------------------
# Path fixtures
# ---------------------------------------------------------------------------

TESTS_DIR = Path(__file__).parent
DATA_DIR = TESTS_DIR / "data"
EDGE_CASES_DIR = DATA_DIR / "edge_cases"

KML_HEADER = (
    '<kml xmlns="http://www.opengis.net/kml/2.2" xmlns:gx="http://www.google.com/kml/ext/2.2">'
)


def wrap_kml(body: str) -> str:
    """Wrap a KML fragment in a namespaced ``<kml>`` root."""
    return f"{KML_HEADER}{body}</kml>"


@pytest.fixture()
def data_dir() -> Path:
    """Return the path to the test data directory."""
    return DATA_DIR


@pytest.fixture()
def edge_cases_dir() -> Path:
    """Return the path to the edge-cases test data directory."""
    return EDGE_CASES_DIR


@pytest.fixture()
def kml_text() -> Callable[[str], str]:
    """Return a function wrapping a KML fragment into a full document."""
    return wrap_kml


@pytest.fixture()
def kml_document() -> Callable[[str], KmlDocument]:
    """Return a factory loading a KML fragment into a ``KmlDocument``."""

    def _load(body: str) -> KmlDocument:
        return load_document(wrap_kml(body))

    return _load


# ---------------------------------------------------------------------------
# Sample KML file fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def styled_kml(data_dir: Path) -> Path:
    """Path to a document with shared styles, a StyleMap and three Placemarks."""
    return data_dir / "01_styled_placemarks.kml"


@pytest.fixture()
def nested_folders_kml(data_dir: Path) -> Path:
    """Path to a KML with nested, single-child and empty Folders."""
    return data_dir / "02_nested_folders.kml"


@pytest.fixture()
def ground_overlay_kml(data_dir: Path) -> Path:
    """Path to a KML with one rotated GroundOverlay in a Folder."""
    return data_dir / "03_ground_overlay.kml"


@pytest.fixture()
def multigeometry_kml(data_dir: Path) -> Path:
    """Path to a KML with a MultiGeometry Placemark and a gx:Track."""
    return data_dir / "04_multigeometry_track.kml"


# ---------------------------------------------------------------------------
# Edge-case KML file fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def not_xml_kml(edge_cases_dir: Path) -> Path:
    """Path to a file that is not valid XML."""
    return edge_cases_dir / "11_malformed_not_xml.kml"


@pytest.fixture()
def wrong_root_xml(edge_cases_dir: Path) -> Path:
    """Path to well-formed XML whose root is not ``<kml>``."""
    return edge_cases_dir / "12_wrong_root.xml"


@pytest.fixture()
def empty_kml(edge_cases_dir: Path) -> Path:
    """Path to a valid KML with no features."""
    return edge_cases_dir / "13_empty_no_features.kml"


@pytest.fixture()
def empty_coordinates_kml(edge_cases_dir: Path) -> Path:
    """Path to a KML with one empty Point Placemark and one valid line."""
    return edge_cases_dir / "14_empty_coordinates.kml"


@pytest.fixture()
def overlay_without_box_kml(edge_cases_dir: Path) -> Path:
    """Path to a KML whose GroundOverlay has no LatLonBox."""
    return edge_cases_dir / "15_ground_overlay_no_box.kml"
