"""
Unit tests for pixel sampling.

Tests stride-based sampling, transparency filtering and PixelBuffer
construction.
"""

import numpy as np
import pytest

from hueharvest.services.colors.sampling import PixelBuffer, create_pixel_array
from conftest import BLUE, RED, TRANSPARENT, make_pixels


class TestPixelBuffer:
    """Test pixel buffer construction"""

    def test_from_bytes(self):
        pixels = PixelBuffer(bytes(RED + BLUE), 2, 1)
        assert pixels.pixel_count == 2
        assert pixels.shape == (2, 1)
        assert pixels.data.dtype == np.uint8

    def test_from_numpy_image(self):
        img = np.zeros((3, 4, 4), dtype=np.uint8)
        pixels = PixelBuffer(img, 4, 3)
        assert pixels.pixel_count == 12
        assert pixels.data.shape == (48,)

    def test_from_list(self):
        pixels = PixelBuffer(RED + RED, 2, 1)
        assert pixels.data.tolist() == RED + RED

    def test_too_short_data_rejected(self):
        with pytest.raises(ValueError):
            PixelBuffer(bytes(RED), 2, 1)

    def test_negative_dimensions_rejected(self):
        with pytest.raises(ValueError):
            PixelBuffer(b"", -1, 1)

    def test_zero_sized(self):
        pixels = PixelBuffer(b"", 0, 0)
        assert pixels.pixel_count == 0
        assert pixels.sample(1).shape == (0, 3)


class TestCreatePixelArray:
    """Test sampling of opaque points"""

    def test_every_pixel_with_quality_one(self):
        points = create_pixel_array(bytes(RED + BLUE), 2, 1)
        assert points.shape == (2, 3)
        assert points.dtype == np.uint8
        assert points.tolist() == [[255, 0, 0], [0, 0, 255]]

    def test_stride_visits_every_nth_pixel(self):
        data = []
        for i in range(10):
            data += [i, i, i, 255]
        points = create_pixel_array(bytes(data), 10, 3)
        assert [p[0] for p in points.tolist()] == [0, 3, 6, 9]

    def test_alpha_threshold(self):
        data = [10, 10, 10, 125] + [20, 20, 20, 126] + [30, 30, 30, 0]
        points = create_pixel_array(bytes(data), 3, 1)
        assert points.tolist() == [[20, 20, 20]]

    def test_fully_transparent_image(self):
        pixels = make_pixels(TRANSPARENT, TRANSPARENT, TRANSPARENT)
        points = pixels.sample(1)
        assert points.shape == (0, 3)

    def test_pixel_count_limits_buffer(self):
        # Trailing bytes past pixel_count are ignored
        points = create_pixel_array(bytes(RED + BLUE), 1, 1)
        assert points.tolist() == [[255, 0, 0]]

    def test_short_buffer_rejected(self):
        with pytest.raises(ValueError):
            create_pixel_array(bytes(RED), 2, 1)

    def test_input_not_modified(self):
        data = np.array(RED + BLUE, dtype=np.uint8)
        original = data.copy()
        points = create_pixel_array(data, 2, 1)
        points[:] = 0
        np.testing.assert_array_equal(data, original)

    def test_sample_count_non_increasing_with_quality(self):
        rng = np.random.default_rng(42)
        img = rng.integers(0, 256, size=(37, 41, 4), dtype=np.uint8)
        img[..., 3] = 255
        pixels = PixelBuffer(img, 41, 37)

        counts = [len(pixels.sample(q)) for q in range(1, 25)]
        assert counts[0] == 37 * 41
        assert all(a >= b for a, b in zip(counts, counts[1:]))
