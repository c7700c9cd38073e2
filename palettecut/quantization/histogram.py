# palettecut/quantization/histogram.py
from __future__ import annotations
from typing import Protocol, Sequence, Tuple
import numpy as np

from ..config import HISTOGRAM_BITS


class HistogramLike(Protocol):
    """What Box and median_cut need from a histogram."""

    @property
    def r_elements(self) -> int: ...
    @property
    def g_elements(self) -> int: ...
    @property
    def b_elements(self) -> int: ...
    def at(self, i: int, j: int, k: int) -> int: ...


class Histogram:
    """
    Dense (R, G, B) count table over a quantized color cube.
    counts[i, j, k] is the number of samples whose quantized color is (i, j, k).
    The table is copied and frozen on construction; it never changes afterwards.
    """

    def __init__(self, counts: np.ndarray):
        counts = np.asarray(counts)
        if counts.ndim != 3:
            raise ValueError(f"Histogram must be 3-D (R, G, B), got shape {counts.shape}")
        # mean colors scale by 255 / (elements - 1)
        if min(counts.shape) < 2:
            raise ValueError(f"Every histogram axis needs at least 2 elements, got shape {counts.shape}")
        if counts.size and counts.min() < 0:
            raise ValueError("Histogram counts must be non-negative")
        self._counts = counts.astype(np.int64, copy=True)
        self._counts.flags.writeable = False

    @classmethod
    def empty(cls, r_elements: int, g_elements: int, b_elements: int) -> "Histogram":
        return cls(np.zeros((r_elements, g_elements, b_elements), dtype=np.int64))

    @classmethod
    def from_image(
        cls,
        img: np.ndarray,
        bits: Sequence[int] = HISTOGRAM_BITS,
    ) -> "Histogram":
        """
        Count the pixels of a uint8 (H,W,3) or (H,W,4) image.
        Each channel keeps its `bits` most significant bits, so the table is
        (2**bits[0], 2**bits[1], 2**bits[2]). Fully transparent RGBA pixels are skipped.
        """
        if img.dtype != np.uint8 or img.ndim != 3 or img.shape[2] not in (3, 4):
            raise TypeError("expected uint8 (H,W,3) or (H,W,4) image")
        rb, gb, bb = _check_bits(bits)

        px = img.reshape(-1, img.shape[2])
        if img.shape[2] == 4:
            px = px[px[:, 3] > 0]

        r = (px[:, 0] >> (8 - rb)).astype(np.int64)
        g = (px[:, 1] >> (8 - gb)).astype(np.int64)
        b = (px[:, 2] >> (8 - bb)).astype(np.int64)
        shape = (1 << rb, 1 << gb, 1 << bb)
        flat = (r * shape[1] + g) * shape[2] + b
        counts = np.bincount(flat, minlength=shape[0] * shape[1] * shape[2])
        return cls(counts.reshape(shape))

    @property
    def r_elements(self) -> int:
        return int(self._counts.shape[0])

    @property
    def g_elements(self) -> int:
        return int(self._counts.shape[1])

    @property
    def b_elements(self) -> int:
        return int(self._counts.shape[2])

    @property
    def shape(self) -> Tuple[int, int, int]:
        return (self.r_elements, self.g_elements, self.b_elements)

    def at(self, i: int, j: int, k: int) -> int:
        return int(self._counts[i, j, k])

    def as_array(self) -> np.ndarray:
        """Read-only view of the counts."""
        return self._counts

    def total(self) -> int:
        return int(self._counts.sum())

    def occupied(self) -> int:
        """Number of non-empty cells."""
        return int(np.count_nonzero(self._counts))

    def __repr__(self) -> str:
        return f"Histogram(shape={self.shape}, total={self.total()})"


def _check_bits(bits: Sequence[int]) -> Tuple[int, int, int]:
    if len(bits) != 3:
        raise ValueError(f"Need one bit depth per channel, got {bits!r}")
    rb, gb, bb = (int(b) for b in bits)
    for b in (rb, gb, bb):
        if not 1 <= b <= 8:
            raise ValueError(f"Channel bit depth must be in [1, 8], got {bits!r}")
    return rb, gb, bb


def counts_of(histogram: HistogramLike) -> np.ndarray:
    """
    Dense (R, G, B) counts of any histogram. Uses as_array() when the object has
    one, otherwise reads every cell through at().
    """
    as_array = getattr(histogram, "as_array", None)
    if as_array is not None:
        return as_array()
    shape = (histogram.r_elements, histogram.g_elements, histogram.b_elements)
    cells = (
        histogram.at(i, j, k)
        for i in range(shape[0])
        for j in range(shape[1])
        for k in range(shape[2])
    )
    return np.fromiter(cells, dtype=np.int64, count=shape[0] * shape[1] * shape[2]).reshape(shape)


def as_histogram(histogram: HistogramLike) -> Histogram:
    """`histogram` itself if it is a Histogram, else a Histogram built from its counts."""
    if isinstance(histogram, Histogram):
        return histogram
    return Histogram(counts_of(histogram))
