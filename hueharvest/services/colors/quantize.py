"""
Median-cut color quantization.

Clusters sampled RGB points into at most ``color_count`` boxes and returns the
average color of each box. Channel values are bucketed to ``SIGBITS`` bits
(32 levels per channel by default) when measuring box extents and choosing
split points; representative colors are averaged from the full 8-bit values.

Box ordering is deterministic: boxes are kept in a heap keyed on
population * volume (volume measured in bucket levels), largest first, with
ties going to the box created first. The returned palette follows the same
order, so its first entry approximates the most significant cluster.
"""
import heapq
import itertools
from typing import List, Tuple

import numpy as np
from loguru import logger

from hueharvest.config import config

SIGBITS = config.SIGBITS
RSHIFT = 8 - SIGBITS
LEVELS = 1 << SIGBITS


class ColorBox:
    """
    A cluster of samples, stored as the index range [lo, hi) into the
    quantizer's working arrays, with cached per-channel bucket bounds.
    """

    __slots__ = ("lo", "hi", "mins", "maxs")

    def __init__(self, levels: np.ndarray, lo: int, hi: int):
        segment = levels[lo:hi]
        self.lo = lo
        self.hi = hi
        self.mins = segment.min(axis=0).astype(np.int64)
        self.maxs = segment.max(axis=0).astype(np.int64)

    @property
    def population(self) -> int:
        return self.hi - self.lo

    @property
    def volume(self) -> int:
        return int(np.prod(self.maxs - self.mins + 1))

    @property
    def priority(self) -> int:
        return self.population * self.volume

    def can_split(self) -> bool:
        """A box spanning a single bucket on every channel is final."""
        return bool(np.any(self.maxs > self.mins))

    def average(self, points: np.ndarray) -> Tuple[int, int, int]:
        """Population-weighted mean color, rounded half up and clamped to 0-255."""
        n = self.population
        totals = points[self.lo:self.hi].astype(np.int64).sum(axis=0)
        return tuple(
            min(255, max(0, int((2 * int(total) + n) // (2 * n))))
            for total in totals
        )

    def __repr__(self) -> str:
        return (
            f"ColorBox(population={self.population}, "
            f"mins={self.mins.tolist()}, maxs={self.maxs.tolist()})"
        )


def _split_box(box: ColorBox, points: np.ndarray, levels: np.ndarray) -> Tuple[ColorBox, ColorBox]:
    """
    Split a box at the median population point of its widest channel.

    Reorders ``points`` and ``levels`` in place within the box's range so each
    child is again a contiguous index range.
    """
    lo, hi = box.lo, box.hi

    # Widest channel wins, first channel on ties (R, then G, then B)
    axis = int(np.argmax(box.maxs - box.mins))

    channel = levels[lo:hi, axis]
    histogram = np.bincount(channel, minlength=LEVELS)
    cumulative = np.cumsum(histogram)

    # First level whose cumulative count reaches half the population,
    # kept inside [min, max - 1] so neither child is empty
    cut = int(np.searchsorted(cumulative, box.population / 2))
    cut = min(max(cut, int(box.mins[axis])), int(box.maxs[axis]) - 1)

    order = np.argsort(channel, kind="stable")
    points[lo:hi] = points[lo:hi][order]
    levels[lo:hi] = levels[lo:hi][order]

    mid = lo + int(cumulative[cut])
    return ColorBox(levels, lo, mid), ColorBox(levels, mid, hi)


def quantize(samples: np.ndarray, color_count: int) -> List[Tuple[int, int, int]]:
    """
    Reduce sampled points to at most ``color_count`` representative colors.

    Args:
        samples: RGB points (N, 3) uint8
        color_count: Maximum palette size (validated by the caller, >= 2)

    Returns:
        List of RGB tuples; empty when there are no samples. May be shorter
        than color_count when the samples cannot be split further.
    """
    samples = np.asarray(samples, dtype=np.uint8).reshape(-1, 3)
    if len(samples) == 0:
        logger.debug("No samples to quantize, returning empty palette")
        return []

    # Working copies, reordered in place while splitting
    points = samples.copy()
    levels = points >> RSHIFT

    sequence = itertools.count()
    heap: List[Tuple[int, int, ColorBox]] = []
    final: List[Tuple[int, int, ColorBox]] = []

    def push(box: ColorBox):
        heapq.heappush(heap, (-box.priority, next(sequence), box))

    push(ColorBox(levels, 0, len(points)))

    while heap and len(heap) + len(final) < color_count:
        entry = heapq.heappop(heap)
        box = entry[2]
        if not box.can_split():
            final.append(entry)
            continue
        left, right = _split_box(box, points, levels)
        push(left)
        push(right)

    final.extend(heap)
    final.sort(key=lambda item: (item[0], item[1]))

    palette = [box.average(points) for _, _, box in final]
    logger.debug(
        f"Quantized {len(points)} samples into {len(palette)} colors "
        f"(requested {color_count})"
    )
    return palette
