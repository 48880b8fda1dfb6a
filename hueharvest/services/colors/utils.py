"""
Color format conversion helpers.

Colors travel through the pipeline as RGB triples; the public operations can
render them as lowercase ``#rrggbb`` strings instead.
"""
import re
from enum import Enum
from typing import List, Sequence, Tuple, Union

RGB = Tuple[int, int, int]
ColorValue = Union[str, RGB]

_HEX_RE = re.compile(r"^#?([0-9A-Fa-f]{6})$")


class ColorType(str, Enum):
    """Output shape of palette entries."""
    HEX = "hex"
    ARRAY = "array"


def rgb_to_hex(rgb: Sequence[int]) -> str:
    """Convert an RGB triple to a lowercase hex color string."""
    if len(rgb) != 3:
        raise ValueError(f"Expected 3 channels, got {len(rgb)}")
    r, g, b = [int(x) for x in rgb]
    for channel in (r, g, b):
        if not 0 <= channel <= 255:
            raise ValueError(f"Channel value out of range 0-255: {channel}")
    return f"#{r:02x}{g:02x}{b:02x}"


def hex_to_rgb(hex_color: str) -> RGB:
    """Convert hex color string (either case, '#' optional) to RGB tuple."""
    match = _HEX_RE.match(hex_color.strip()) if isinstance(hex_color, str) else None
    if match is None:
        raise ValueError(f"Invalid hex color: {hex_color!r}")
    digits = match.group(1)
    return tuple(int(digits[i:i+2], 16) for i in (0, 2, 4))


def format_color(rgb: RGB, color_type: ColorType = ColorType.HEX) -> ColorValue:
    if color_type == ColorType.HEX:
        return rgb_to_hex(rgb)
    return (int(rgb[0]), int(rgb[1]), int(rgb[2]))


def format_palette(palette: List[RGB], color_type: ColorType = ColorType.HEX) -> List[ColorValue]:
    """Render every palette entry in the requested output shape."""
    return [format_color(rgb, color_type) for rgb in palette]
