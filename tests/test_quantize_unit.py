"""
Unit tests for median-cut quantization.

Tests box splitting, palette bounds, averaging and deterministic ordering.
"""

import numpy as np
import pytest

from hueharvest.services.colors.quantize import ColorBox, quantize


def points(*rgb):
    return np.array(rgb, dtype=np.uint8).reshape(-1, 3)


@pytest.fixture
def random_samples():
    rng = np.random.default_rng(42)
    return rng.integers(0, 256, size=(1000, 3), dtype=np.uint8)


class TestColorBox:
    """Test cached box statistics"""

    def test_bounds_population_volume(self):
        samples = points((0, 0, 0), (255, 8, 16))
        levels = samples >> 3
        box = ColorBox(levels, 0, 2)
        assert box.population == 2
        assert box.mins.tolist() == [0, 0, 0]
        assert box.maxs.tolist() == [31, 1, 2]
        assert box.volume == 32 * 2 * 3
        assert box.priority == 2 * 32 * 2 * 3
        assert box.can_split()

    def test_single_bucket_cannot_split(self):
        samples = points((0, 0, 0), (7, 7, 7))
        box = ColorBox(samples >> 3, 0, 2)
        assert box.volume == 1
        assert not box.can_split()

    def test_average_rounds_half_up(self):
        samples = points((0, 0, 0), (1, 1, 1))
        box = ColorBox(samples >> 3, 0, 2)
        assert box.average(samples) == (1, 1, 1)


class TestQuantize:
    """Test palette generation"""

    def test_empty_samples(self):
        assert quantize(np.zeros((0, 3), dtype=np.uint8), 5) == []

    def test_single_color(self):
        samples = points(*[(200, 100, 50)] * 10)
        assert quantize(samples, 5) == [(200, 100, 50)]

    def test_two_colors(self):
        palette = quantize(points((255, 0, 0), (0, 0, 255)), 2)
        assert sorted(palette) == [(0, 0, 255), (255, 0, 0)]

    def test_representative_is_member_average(self):
        samples = points((8, 16, 24), (9, 17, 25), (11, 19, 27))
        assert quantize(samples, 4) == [(9, 17, 25)]

    def test_split_at_median_population(self):
        # Ten points spread along red, one per bucket level 0..9
        samples = points(*[(8 * i, 0, 0) for i in range(10)])
        assert quantize(samples, 2) == [(16, 0, 0), (56, 0, 0)]

    def test_split_uses_population_not_midpoint(self):
        # Nine points near black, one bright red outlier
        samples = points(*([(0, 0, 0)] * 9 + [(255, 0, 0)]))
        palette = quantize(samples, 2)
        assert palette[0] == (0, 0, 0)
        assert palette[1] == (255, 0, 0)

    def test_largest_cluster_first(self):
        samples = points((0, 0, 255), (255, 0, 0), (255, 0, 0), (255, 0, 0))
        palette = quantize(samples, 2)
        assert palette[0] == (255, 0, 0)

    @pytest.mark.parametrize("color_count", [2, 3, 5, 8, 16])
    def test_palette_size_bounded(self, random_samples, color_count):
        palette = quantize(random_samples, color_count)
        assert len(palette) == color_count

    def test_fewer_colors_when_unsplittable(self):
        samples = points((255, 0, 0), (0, 255, 0), (0, 0, 255))
        palette = quantize(samples, 10)
        assert len(palette) == 3
        assert set(palette) == {(255, 0, 0), (0, 255, 0), (0, 0, 255)}

    def test_deterministic(self, random_samples):
        assert quantize(random_samples, 7) == quantize(random_samples, 7)

    def test_input_not_reordered(self, random_samples):
        original = random_samples.copy()
        quantize(random_samples, 6)
        np.testing.assert_array_equal(random_samples, original)

    def test_channels_in_range(self, random_samples):
        for color in quantize(random_samples, 12):
            assert len(color) == 3
            assert all(isinstance(c, int) and 0 <= c <= 255 for c in color)
