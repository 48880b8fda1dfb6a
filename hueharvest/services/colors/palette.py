"""
Palette and dominant color operations over decoded pixel buffers.

Pipeline: validate parameters -> sample pixels -> median cut -> format.
"""
import time
from typing import List, Optional, Union

from loguru import logger

from hueharvest.config import config
from hueharvest.services.colors.quantize import quantize
from hueharvest.services.colors.sampling import PixelBuffer
from hueharvest.services.colors.utils import ColorType, ColorValue, format_palette
from hueharvest.services.colors.validation import validate_color_type, validate_options
from hueharvest.utils.metrics import get_metrics


def get_palette(
    pixels: PixelBuffer,
    color_count: int = config.DEFAULT_COLOR_COUNT,
    quality: Optional[int] = None,
    color_type: Union[str, ColorType] = ColorType.HEX,
) -> List[ColorValue]:
    """
    Cluster similar colors with median cut and return the palette.

    Args:
        pixels: Decoded RGBA pixel buffer
        color_count: Maximum number of colors to return (2-256)
        quality: Sampling stride. 1 is the highest quality, 10 the default;
            larger values are faster but more likely to miss colors
        color_type: "hex" for '#rrggbb' strings, "array" for RGB tuples

    Returns:
        List of at most color_count colors; empty for fully transparent
        or zero-sized images

    Raises:
        ConfigurationError: For invalid color_count, quality or color_type
    """
    options = validate_options(color_count, quality)
    output_type = validate_color_type(color_type)

    metrics = get_metrics()
    metrics.increment_request_count("palette")

    start_time = time.time()
    samples = pixels.sample(options.quality)
    metrics.record_timing("sampling", (time.time() - start_time) * 1000)
    metrics.record_sample_count(len(samples))

    start_time = time.time()
    palette = quantize(samples, options.color_count)
    metrics.record_timing("quantize", (time.time() - start_time) * 1000)

    if not palette:
        logger.info(f"No opaque pixels in {pixels!r}, palette is empty")

    return format_palette(palette, output_type)


def get_color(
    pixels: PixelBuffer,
    quality: Optional[int] = None,
    color_type: Union[str, ColorType] = ColorType.HEX,
) -> Optional[ColorValue]:
    """
    Return the dominant color: the first entry of a small median-cut palette.

    Returns None when the image has no opaque pixels.
    """
    palette = get_palette(
        pixels,
        config.DOMINANT_PALETTE_SIZE,
        quality=quality,
        color_type=color_type,
    )
    return palette[0] if palette else None
