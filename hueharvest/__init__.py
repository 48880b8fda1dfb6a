"""
hueharvest

Extracts a representative color palette and a dominant color from raster
images using median-cut quantization.
"""
from hueharvest.services.colors.palette import get_palette, get_color
from hueharvest.services.colors.extract_api import ColorThief, get_palette_async, get_color_async
from hueharvest.services.colors.sampling import PixelBuffer
from hueharvest.services.colors.validation import ConfigurationError
from hueharvest.services.colors.utils import ColorType, rgb_to_hex, hex_to_rgb

__version__ = "1.0.0"

__all__ = [
    "ColorThief",
    "ColorType",
    "ConfigurationError",
    "PixelBuffer",
    "get_color",
    "get_color_async",
    "get_palette",
    "get_palette_async",
    "hex_to_rgb",
    "rgb_to_hex",
]
