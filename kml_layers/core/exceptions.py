"""Unified exception taxonomy for KML compilation.

Every domain exception inherits from ``KmlError`` and carries structured
context fields so a caller (or a rendering layer reporting back to a user)
can react consistently.

Taxonomy
--------
- ``KmlLoadError``: the document could not be turned into layers.
  This is the only outcome a caller of ``parse_kml`` needs to handle.
    - ``MalformedKmlError``: empty input, not XML, or not a ``<kml>`` root.
    - ``EmptyKmlError``: the document parsed but produced no layers.
- ``GroundOverlayError``: a ``<GroundOverlay>`` lacks usable bounds.
  Recovered locally unless strict overlay handling is configured.

Every exception exposes ``to_error_dict()`` for a stable structured
error payload suitable for logging.
"""

from __future__ import annotations


class KmlError(Exception):
    """Base exception for all KML-domain errors.

    Attributes:
        message: Human-readable error description.
        stage: Compiler stage where the error occurred
            (e.g. ``"load"``, ``"ground_overlay"``).
        code: Machine-readable error code (e.g. ``"KML_MALFORMED"``).
        source_url: URL or path of the document being parsed, if known.
    """

    #: Default stage for subclasses (override via class attribute or kwarg).
    default_stage: str = ""
    #: Default code for subclasses (override via class attribute or kwarg).
    default_code: str = ""

    def __init__(
        self,
        message: str = "",
        *,
        stage: str = "",
        code: str = "",
        source_url: str = "",
    ) -> None:
        self.message = message
        self.stage = stage or self.default_stage
        self.code = code or self.default_code
        self.source_url = source_url
        super().__init__(message)

    def to_error_dict(self) -> dict[str, object]:
        """Return a structured error payload with stable keys."""
        return {
            "code": self.code,
            "stage": self.stage,
            "message": self.message,
            "source_url": self.source_url,
        }


# ---------------------------------------------------------------------------
# Load errors (caller-visible)
# ---------------------------------------------------------------------------


class KmlLoadError(KmlError):
    """Raised when a document cannot be compiled into layers."""

    default_stage = "load"
    default_code = "KML_LOAD_FAILED"


class MalformedKmlError(KmlLoadError):
    """Raised when the input is empty, not XML, or not a KML document."""

    default_code = "KML_MALFORMED"


class EmptyKmlError(KmlLoadError):
    """Raised when a well-formed document yields zero layers."""

    default_code = "KML_NO_LAYERS"


# ---------------------------------------------------------------------------
# Element-level errors (recovered by the folder walker)
# ---------------------------------------------------------------------------


class GroundOverlayError(KmlError):
    """Raised when a ``<GroundOverlay>`` has no usable ``<LatLonBox>``."""

    default_stage = "ground_overlay"
    default_code = "KML_GROUND_OVERLAY_INVALID"
