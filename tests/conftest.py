"""
Test configuration and fixtures for hueharvest tests.
"""
import io

import numpy as np
import pytest
from fastapi.testclient import TestClient
from PIL import Image

from hueharvest.main import app
from hueharvest.services.colors.sampling import PixelBuffer

RED = [255, 0, 0, 255]
BLUE = [0, 0, 255, 255]
TRANSPARENT = [0, 0, 0, 0]


@pytest.fixture
def test_client():
    """Create test client for the FastAPI app."""
    return TestClient(app)


@pytest.fixture(autouse=True)
def reset_metrics():
    """Reset metrics before each test."""
    from hueharvest.utils.metrics import reset_metrics
    reset_metrics()


def make_pixels(*pixels, width=None, height=1):
    """Build a PixelBuffer from RGBA lists laid out in one row by default."""
    data = [channel for pixel in pixels for channel in pixel]
    if width is None:
        width = len(pixels) // height
    return PixelBuffer(bytes(data), width, height)


def encode_png(rgba: np.ndarray) -> bytes:
    """Encode an (H, W, 4) uint8 array as PNG bytes."""
    buffer = io.BytesIO()
    Image.fromarray(rgba.astype(np.uint8)).save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def red_blue_pixels():
    """2x1 image: opaque red, opaque blue."""
    return make_pixels(RED, BLUE)


@pytest.fixture
def two_block_rgba():
    """20x20 image, left half red, right half blue."""
    img = np.zeros((20, 20, 4), dtype=np.uint8)
    img[:, :10] = RED
    img[:, 10:] = BLUE
    return img


@pytest.fixture
def two_block_png(two_block_rgba):
    return encode_png(two_block_rgba)
