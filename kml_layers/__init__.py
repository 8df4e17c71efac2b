"""KML to map-layer compiler.

Compiles KML documents into plain geometry, style and overlay records
that a separate map rendering layer turns into shapes, markers and
image overlays.
"""

from kml_layers.core.config import ParserConfig
from kml_layers.core.exceptions import KmlLoadError
from kml_layers.parse_kml import parse_kml, parse_kml_file

__version__ = "0.1.0"

__all__ = ["KmlLoadError", "ParserConfig", "parse_kml", "parse_kml_file"]
