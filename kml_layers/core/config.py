"""Parser configuration loaded from environment variables.

All values have defaults matching the behaviour a map client expects:
malformed ground overlays are skipped, and a document that yields no
layers at all is reported as a load error.

Fail-fast validation:
    ``from_env()`` raises ``ConfigValidationError`` if a boolean variable
    holds a value that is not a recognised flag spelling.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from kml_layers.core.exceptions import KmlError

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off"})


class ConfigValidationError(KmlError):
    """Raised when a configuration value cannot be interpreted.

    Attributes:
        key: The configuration key that failed validation.
        value: The invalid value.
    """

    default_stage = "config"
    default_code = "CONFIG_VALIDATION_FAILED"

    def __init__(self, key: str, value: object, message: str) -> None:
        self.key = key
        self.value = value
        super().__init__(f"Invalid configuration {key}={value!r}: {message}")


@dataclass(frozen=True, slots=True)
class ParserConfig:
    """Immutable parser configuration.

    Attributes:
        huge_tree: Lift lxml's safety limits on tree depth and text size.
        strict_ground_overlays: Fail the whole parse when a
            ``<GroundOverlay>`` has no usable ``<LatLonBox>`` instead of
            skipping it.
        require_layers: Report a document that yields zero layers as a
            load error.
    """

    huge_tree: bool = False
    strict_ground_overlays: bool = False
    require_layers: bool = True

    @classmethod
    def from_env(cls) -> ParserConfig:
        """Load and validate configuration from environment variables.

        Raises:
            ConfigValidationError: If a flag is not one of
                ``1/0``, ``true/false``, ``yes/no`` or ``on/off``.
        """
        return cls(
            huge_tree=_env_flag("KML_HUGE_TREE", default=False),
            strict_ground_overlays=_env_flag("KML_STRICT_GROUND_OVERLAYS", default=False),
            require_layers=_env_flag("KML_REQUIRE_LAYERS", default=True),
        )


def _env_flag(key: str, *, default: bool) -> bool:
    raw = os.getenv(key)
    if raw is None or not raw.strip():
        return default
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigValidationError(key, raw, "must be a boolean flag (true/false, 1/0, yes/no, on/off)")
