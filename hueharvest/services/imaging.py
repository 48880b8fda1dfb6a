"""
hueharvest Imaging Utilities
Turns image sources (paths, URLs, data URLs, raw bytes, Pillow images) into
decoded RGBA pixel buffers for the palette pipeline.
"""
import asyncio
import base64
import binascii
import io
import os
from typing import Optional, Union

import numpy as np
import requests
from loguru import logger
from PIL import Image, UnidentifiedImageError

from hueharvest.config import config
from hueharvest.services.colors.sampling import PixelBuffer

ImageSource = Union[str, os.PathLike, bytes, bytearray, memoryview, Image.Image, PixelBuffer]

FETCH_CHUNK_BYTES = 64 * 1024


class AcquisitionError(RuntimeError):
    """Raised when an image source cannot be read or decoded."""


def _too_large(origin: str) -> AcquisitionError:
    return AcquisitionError(
        f"Image from {origin} too large. Maximum size: {config.MAX_FILE_MB}MB"
    )


def _check_size(payload: bytes, origin: str) -> None:
    if len(payload) > config.max_file_bytes():
        raise _too_large(origin)


def decode_data_url(data_url: str) -> bytes:
    """Decode a base64 data URL (or bare base64 string) to raw bytes."""
    payload = data_url.split(",", 1)[1] if "," in data_url else data_url
    try:
        return base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise AcquisitionError(f"Invalid base64 image data: {str(e)}") from e


def fetch_image_bytes(url: str) -> bytes:
    """
    Download image bytes over HTTP(S).

    The body is streamed and abandoned as soon as it exceeds MAX_FILE_MB.

    Raises:
        AcquisitionError: On connection errors, timeouts, non-2xx responses
            and oversized bodies
    """
    limit = config.max_file_bytes()
    payload = bytearray()
    try:
        response = requests.get(url, timeout=config.FETCH_TIMEOUT_S, stream=True)
        try:
            response.raise_for_status()

            declared = response.headers.get("Content-Length")
            if declared is not None and declared.isdigit() and int(declared) > limit:
                raise _too_large(url)

            for chunk in response.iter_content(chunk_size=FETCH_CHUNK_BYTES):
                payload.extend(chunk)
                if len(payload) > limit:
                    raise _too_large(url)
        finally:
            response.close()
    except requests.RequestException as e:
        raise AcquisitionError(f"Failed to fetch {url}: {str(e)}") from e

    return bytes(payload)


def decode_image_bytes(payload: bytes) -> Image.Image:
    """Decode encoded image bytes with Pillow."""
    _check_size(payload, "buffer")
    try:
        image = Image.open(io.BytesIO(payload))
        image.load()
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as e:
        raise AcquisitionError(f"Failed to decode image: {str(e)}") from e
    return image


def load_image(source: ImageSource) -> Image.Image:
    """
    Resolve an image source to a decoded Pillow image.

    Args:
        source: File path, http(s) URL, data URL, encoded bytes, or Pillow image

    Returns:
        Decoded Pillow image

    Raises:
        AcquisitionError: If the source cannot be read or decoded
    """
    if isinstance(source, Image.Image):
        return source

    if isinstance(source, (bytes, bytearray, memoryview)):
        return decode_image_bytes(bytes(source))

    if isinstance(source, str) and source.startswith("data:"):
        return decode_image_bytes(decode_data_url(source))

    if isinstance(source, str) and source.lower().startswith(config.SUPPORTED_URL_SCHEMES):
        return decode_image_bytes(fetch_image_bytes(source))

    if isinstance(source, (str, os.PathLike)):
        try:
            with open(source, "rb") as f:
                payload = f.read()
        except (OSError, ValueError) as e:
            raise AcquisitionError(f"Failed to read file {source}: {str(e)}") from e
        return decode_image_bytes(payload)

    raise AcquisitionError(f"Unsupported image source type: {type(source).__name__}")


def resize_long_edge(image: Image.Image, max_edge: Optional[int] = None) -> Image.Image:
    """
    Downscale image so the longest edge is at most max_edge pixels.

    A max_edge of 0 keeps the original size.
    """
    if max_edge is None:
        max_edge = config.MAX_EDGE

    if max_edge <= 0 or max(image.size) <= max_edge:
        return image

    resized = image.copy()
    resized.thumbnail((max_edge, max_edge), Image.LANCZOS)
    logger.debug(f"Resized image from {image.size} to {resized.size}")
    return resized


def image_to_pixel_buffer(image: Image.Image) -> PixelBuffer:
    """Convert a Pillow image to an RGBA pixel buffer."""
    rgba = image if image.mode == "RGBA" else image.convert("RGBA")
    width, height = rgba.size
    data = np.asarray(rgba, dtype=np.uint8).reshape(-1)
    return PixelBuffer(data, width, height)


def load_pixels(source: ImageSource) -> PixelBuffer:
    """Synchronously acquire a pixel buffer from any supported source."""
    if isinstance(source, PixelBuffer):
        return source
    image = resize_long_edge(load_image(source))
    return image_to_pixel_buffer(image)


async def acquire_pixels(source: ImageSource) -> PixelBuffer:
    """
    Acquire a pixel buffer without blocking the event loop.

    File reads, downloads and decoding run in a worker thread.
    """
    if isinstance(source, PixelBuffer):
        return source
    return await asyncio.to_thread(load_pixels, source)
