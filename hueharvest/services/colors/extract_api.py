"""
Source-driven palette extraction.

Async variants of get_palette / get_color that first acquire a pixel buffer
from an image source. Acquisition problems degrade to an empty palette or a
None color; bad parameters still raise ConfigurationError, and they are
checked before any acquisition work starts.
"""
import time
from typing import Awaitable, Callable, List, Optional, Union

from hueharvest.config import config
from hueharvest.services.colors.palette import get_color, get_palette
from hueharvest.services.colors.sampling import PixelBuffer
from hueharvest.services.colors.utils import ColorType, ColorValue
from hueharvest.services.colors.validation import (
    validate_color_type, validate_options, validate_quality
)
from hueharvest.services.imaging import AcquisitionError, ImageSource, acquire_pixels
from hueharvest.utils.ids import generate_request_id
from hueharvest.utils.logging import get_logger
from hueharvest.utils.metrics import get_metrics

Acquirer = Callable[[ImageSource], Awaitable[Optional[PixelBuffer]]]


async def _acquire_or_none(source: ImageSource, acquire: Acquirer, request_id: str) -> Optional[PixelBuffer]:
    """Run the acquirer, mapping any acquisition failure to None."""
    logger = get_logger()
    start_time = time.time()

    try:
        pixels = await acquire(source)
    except AcquisitionError as e:
        logger.warning(
            f"Image acquisition failed: {e}",
            extra={"request_id": request_id, "source_type": type(source).__name__}
        )
        get_metrics().increment_failure_count("acquisition")
        return None

    duration_ms = (time.time() - start_time) * 1000
    get_metrics().record_timing("acquisition", duration_ms)

    if pixels is None:
        logger.warning("Image acquisition returned no image", extra={"request_id": request_id})
        get_metrics().increment_failure_count("acquisition")
        return None

    logger.debug(
        f"Acquired {pixels.width}x{pixels.height} image",
        extra={"request_id": request_id, "ms_acquire": duration_ms}
    )
    return pixels


async def get_palette_async(
    source: ImageSource,
    color_count: int = config.DEFAULT_COLOR_COUNT,
    quality: Optional[int] = None,
    color_type: Union[str, ColorType] = ColorType.HEX,
    acquire: Acquirer = acquire_pixels,
) -> List[ColorValue]:
    """
    Acquire an image and return its median-cut palette.

    Args:
        source: Path, http(s) URL, data URL, encoded bytes, Pillow image or PixelBuffer
        color_count: Maximum number of colors to return (2-256)
        quality: Sampling stride, None for the default
        color_type: "hex" or "array"
        acquire: Coroutine turning the source into a PixelBuffer

    Returns:
        Palette list; empty if the image could not be acquired

    Raises:
        ConfigurationError: For invalid parameters
    """
    options = validate_options(color_count, quality)
    output_type = validate_color_type(color_type)

    request_id = generate_request_id("pal")
    pixels = await _acquire_or_none(source, acquire, request_id)
    if pixels is None:
        return []

    palette = get_palette(pixels, options.color_count, options.quality, output_type)
    get_logger().info(
        f"Palette extracted: {len(palette)} colors",
        extra={"request_id": request_id, "color_count": options.color_count, "quality": options.quality}
    )
    return palette


async def get_color_async(
    source: ImageSource,
    quality: Optional[int] = None,
    color_type: Union[str, ColorType] = ColorType.HEX,
    acquire: Acquirer = acquire_pixels,
) -> Optional[ColorValue]:
    """Acquire an image and return its dominant color, or None on failure."""
    quality = validate_quality(quality)
    output_type = validate_color_type(color_type)

    request_id = generate_request_id("col")
    pixels = await _acquire_or_none(source, acquire, request_id)
    if pixels is None:
        return None

    color = get_color(pixels, quality, output_type)
    get_logger().info(
        f"Dominant color extracted: {color}",
        extra={"request_id": request_id, "quality": quality}
    )
    return color


class ColorThief:
    """
    Palette extraction bound to one image acquisition strategy.

    The default acquirer reads paths, URLs, data URLs, bytes and Pillow
    images; pass another coroutine to plug in a different image source.
    """

    def __init__(self, quality: Optional[int] = None, acquire: Acquirer = acquire_pixels):
        self.quality = validate_quality(quality)
        self.acquire = acquire

    def get_palette(
        self,
        pixels: PixelBuffer,
        color_count: int = config.DEFAULT_COLOR_COUNT,
        quality: Optional[int] = None,
        color_type: Union[str, ColorType] = ColorType.HEX,
    ) -> List[ColorValue]:
        quality = self.quality if quality is None else quality
        return get_palette(pixels, color_count, quality, color_type)

    def get_color(
        self,
        pixels: PixelBuffer,
        quality: Optional[int] = None,
        color_type: Union[str, ColorType] = ColorType.HEX,
    ) -> Optional[ColorValue]:
        return get_color(pixels, self.quality if quality is None else quality, color_type)

    async def get_palette_async(
        self,
        source: ImageSource,
        color_count: int = config.DEFAULT_COLOR_COUNT,
        quality: Optional[int] = None,
        color_type: Union[str, ColorType] = ColorType.HEX,
    ) -> List[ColorValue]:
        quality = self.quality if quality is None else quality
        return await get_palette_async(
            source, color_count, quality, color_type, acquire=self.acquire
        )

    async def get_color_async(
        self,
        source: ImageSource,
        quality: Optional[int] = None,
        color_type: Union[str, ColorType] = ColorType.HEX,
    ) -> Optional[ColorValue]:
        quality = self.quality if quality is None else quality
        return await get_color_async(source, quality, color_type, acquire=self.acquire)
