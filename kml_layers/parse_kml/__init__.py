"""KML compilation as a chain of composable stages.

Compiles a KML document into layer records: placemark features with
resolved styles and geometries, folder groups and ground overlays.

The pipeline is split into focused stages:
- **_document**: lxml load, root check, immutable node arena with folder scopes
- **_coordinates**: ``<coordinates>`` / ``<gx:coord>`` text → ``Coordinate``
- **_styles**: ``<Style>`` + ``<StyleMap>`` → style table, icon URLs
- **_geometry**: Point, LineString, Polygon, gx:Track, MultiGeometry
- **_placemark**: style merge, name/description, ``Feature``
- **_ground_overlay**: ``<GroundOverlay>`` → ``GroundOverlay``
- **_folders**: Folder scoping, emission order, collapsing

Supported KML structures:
- Placemarks with Point, LineString, Polygon (with holes), gx:Track
- MultiGeometry and gx:MultiTrack containers (recursive)
- Nested Folder hierarchies (one layer per folder, collapsed)
- Shared styles, inline styles and StyleMap aliases
- GroundOverlay images with LatLonBox bounds and rotation

Failure policy:
- Not XML, not ``<kml>``, or no layers at all: ``KmlLoadError``
- Anything below document level (missing coordinates, unknown style
  references, malformed tokens) is skipped quietly
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from kml_layers.core.config import ParserConfig
from kml_layers.core.exceptions import EmptyKmlError, KmlLoadError, MalformedKmlError
from kml_layers.models.layer import KmlParseResult
from kml_layers.parse_kml._coordinates import (
    collect_coordinates,
    read_coordinates,
    read_gx_coord,
)
from kml_layers.parse_kml._document import KmlDocument, KmlNode, build_document, load_document
from kml_layers.parse_kml._folders import collapse, parse_folder, walk_scope
from kml_layers.parse_kml._geometry import GEOMETRY_PARSERS, build_geometries
from kml_layers.parse_kml._ground_overlay import parse_ground_overlay
from kml_layers.parse_kml._placemark import compile_placemark, resolve_placemark_style
from kml_layers.parse_kml._styles import (
    build_style_table,
    decode_color,
    parse_style,
    resolve_icon_url,
)

if TYPE_CHECKING:
    from pathlib import Path

    from lxml.etree import _Element

    from kml_layers.parse_kml._document import KmlSource

logger = logging.getLogger("kml_layers.parse_kml")

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

__all__ = [
    "GEOMETRY_PARSERS",
    "EmptyKmlError",
    "KmlDocument",
    "KmlLoadError",
    "KmlNode",
    "MalformedKmlError",
    "build_document",
    "build_geometries",
    "build_style_table",
    "collapse",
    "collect_coordinates",
    "compile_placemark",
    "decode_color",
    "load_document",
    "parse_folder",
    "parse_ground_overlay",
    "parse_kml",
    "parse_kml_file",
    "parse_style",
    "read_coordinates",
    "read_gx_coord",
    "resolve_icon_url",
    "resolve_placemark_style",
    "walk_scope",
]


def parse_kml(
    document: KmlSource | _Element,
    source_url: str | None = None,
    *,
    config: ParserConfig | None = None,
) -> KmlParseResult:
    """Compile a KML document into layers.

    Args:
        document: KML text (``bytes`` or ``str``) or a parsed lxml element
            or element tree.
        source_url: URL the document was loaded from; used only to
            resolve relative icon hrefs.
        config: Parser options (defaults to ``ParserConfig()``).

    Returns:
        The top-level layers in emission order and the flat list of every
        coordinate in the document.

    Raises:
        MalformedKmlError: If the input is empty, not XML, or not KML.
        EmptyKmlError: If no layers were produced and
            ``config.require_layers`` is set.
        KmlLoadError: If a ground overlay is invalid and
            ``config.strict_ground_overlays`` is set.
    """
    config = config or ParserConfig()
    kml = load_document(document, huge_tree=config.huge_tree)

    styles = build_style_table(kml, source_url)
    layers = walk_scope(kml, None, styles, source_url=source_url, config=config)
    if not layers and config.require_layers:
        msg = "No renderable features found in KML document"
        raise EmptyKmlError(msg, source_url=source_url or "")

    coordinates = collect_coordinates(kml)
    logger.info(
        "Compiled %d top-level layer(s), %d style(s), %d coordinate(s)",
        len(layers),
        len(styles),
        len(coordinates),
    )
    return KmlParseResult(layers=tuple(layers), coordinates=tuple(coordinates))


def parse_kml_file(
    kml_path: Path | str,
    *,
    source_url: str | None = None,
    config: ParserConfig | None = None,
) -> KmlParseResult:
    """Read a KML file from disk and compile it.

    Relative icon hrefs resolve against the file's own location unless
    ``source_url`` is given.

    Raises:
        MalformedKmlError: If the file cannot be read or is not KML.
        EmptyKmlError: If no layers were produced.
    """
    from pathlib import Path

    kml_path = Path(kml_path)
    logger.info("Parsing KML file: %s", kml_path.name)

    try:
        content = kml_path.read_bytes()
    except OSError as exc:
        msg = f"Cannot read KML file: {exc}"
        raise MalformedKmlError(msg, source_url=str(kml_path)) from exc

    if source_url is None:
        source_url = kml_path.resolve().as_uri()
    return parse_kml(content, source_url, config=config)
