"""
Parameter validation for palette extraction.

Normalizes ``color_count``, ``quality`` and ``color_type`` before any pixel
work starts. Invalid values raise ConfigurationError; nothing is clamped.
"""
import numbers
from dataclasses import dataclass
from typing import Any, Optional, Union

from hueharvest.config import config
from hueharvest.services.colors.utils import ColorType


class ConfigurationError(ValueError):
    """Raised when a palette parameter is missing, mistyped or out of range."""

    def __init__(self, field: str, message: str):
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message


@dataclass(frozen=True)
class PaletteOptions:
    """Validated extraction parameters."""
    color_count: int
    quality: int


def _is_integer(value: Any) -> bool:
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)


def validate_quality(quality: Optional[int] = None) -> int:
    """Return a usable sampling stride, falling back to the configured default."""
    if quality is None:
        return config.DEFAULT_QUALITY
    if not _is_integer(quality):
        raise ConfigurationError(
            "quality", f"must be an integer >= 1, got {quality!r}"
        )
    if quality < 1:
        raise ConfigurationError(
            "quality", f"must be an integer >= 1, got {quality}"
        )
    return int(quality)


def validate_color_count(color_count: int) -> int:
    """Check that ``color_count`` is an integer within the supported range."""
    valid_range = f"{config.MIN_COLOR_COUNT}-{config.MAX_COLOR_COUNT}"
    if not _is_integer(color_count):
        raise ConfigurationError(
            "color_count", f"must be an integer in {valid_range}, got {color_count!r}"
        )
    if color_count == 1:
        raise ConfigurationError(
            "color_count",
            f"must be in {valid_range}; to get a single color use get_color() instead",
        )
    if not config.MIN_COLOR_COUNT <= color_count <= config.MAX_COLOR_COUNT:
        raise ConfigurationError(
            "color_count", f"must be an integer in {valid_range}, got {color_count}"
        )
    return int(color_count)


def validate_options(color_count: int, quality: Optional[int] = None) -> PaletteOptions:
    """
    Validate palette parameters.

    Args:
        color_count: Requested palette size
        quality: Sampling stride, None for the default

    Returns:
        PaletteOptions with normalized values

    Raises:
        ConfigurationError: If either value is not an integer or out of range
    """
    return PaletteOptions(
        color_count=validate_color_count(color_count),
        quality=validate_quality(quality),
    )


def validate_color_type(color_type: Union[str, ColorType, None]) -> ColorType:
    """Resolve an output format selector; None means hex."""
    if color_type is None:
        return ColorType.HEX
    if isinstance(color_type, ColorType):
        return color_type
    if isinstance(color_type, str) and config.validate_color_type(color_type.lower()):
        name = color_type.lower()
        return ColorType(config.COLOR_TYPE_ALIASES.get(name, name))
    raise ConfigurationError(
        "color_type", f"must be one of {', '.join(config.COLOR_TYPES)}, got {color_type!r}"
    )
