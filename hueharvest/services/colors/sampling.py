"""
Pixel sampling for palette extraction.

Turns a decoded RGBA buffer into the list of opaque RGB points that the
quantizer clusters. Sampling is stride based: with ``quality=q`` only every
q-th pixel is visited, trading palette accuracy for speed.
"""
from typing import Any, Tuple

import numpy as np
from loguru import logger

from hueharvest.config import config


def _as_flat_uint8(data: Any) -> np.ndarray:
    """View bytes-like or array-like pixel data as a flat uint8 array."""
    if isinstance(data, (bytes, bytearray, memoryview)):
        return np.frombuffer(data, dtype=np.uint8)
    array = np.asarray(data)
    if array.dtype != np.uint8:
        array = array.astype(np.uint8)
    return array.reshape(-1)


class PixelBuffer:
    """
    Decoded image data: flat RGBA bytes plus dimensions.

    The pipeline only reads from ``data``; callers keep ownership.
    """

    __slots__ = ("data", "width", "height")

    def __init__(self, data: Any, width: int, height: int):
        if width < 0 or height < 0:
            raise ValueError(f"Invalid dimensions: {width}x{height}")

        flat = _as_flat_uint8(data)
        expected = width * height * 4
        if flat.size < expected:
            raise ValueError(
                f"Pixel data too short: {flat.size} bytes for {width}x{height} RGBA "
                f"(expected {expected})"
            )

        self.data = flat
        self.width = int(width)
        self.height = int(height)

    @property
    def pixel_count(self) -> int:
        return self.width * self.height

    @property
    def shape(self) -> Tuple[int, int]:
        return self.width, self.height

    def sample(self, quality: int) -> np.ndarray:
        """Sample this buffer with the given stride."""
        return create_pixel_array(self.data, self.pixel_count, quality)

    def __repr__(self) -> str:
        return f"PixelBuffer(width={self.width}, height={self.height})"


def create_pixel_array(pixels: Any, pixel_count: int, quality: int) -> np.ndarray:
    """
    Collect opaque RGB points from an RGBA buffer.

    Args:
        pixels: Flat RGBA data (stride 4)
        pixel_count: Number of pixels to consider (width * height)
        quality: Stride in pixels; 1 visits every pixel

    Returns:
        RGB points array (N, 3) uint8, possibly empty

    Raises:
        ValueError: If the buffer holds fewer than pixel_count pixels
    """
    flat = _as_flat_uint8(pixels)
    if flat.size < pixel_count * 4:
        raise ValueError(
            f"Pixel data too short: {flat.size} bytes for {pixel_count} pixels"
        )

    visited = flat[: pixel_count * 4].reshape(-1, 4)[::quality]

    # Mostly transparent pixels are background
    opaque = visited[visited[:, 3] > config.ALPHA_THRESHOLD]
    points = np.ascontiguousarray(opaque[:, :3])

    logger.debug(
        f"Sampled {len(points)} opaque points from {len(visited)} visited pixels "
        f"(pixel_count={pixel_count}, quality={quality})"
    )
    return points
