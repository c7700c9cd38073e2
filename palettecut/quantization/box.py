# palettecut/quantization/box.py
from __future__ import annotations
from dataclasses import dataclass, field, replace
import logging
from typing import Optional, Tuple
import numpy as np

from .colors import rgba
from .histogram import HistogramLike, counts_of

logger = logging.getLogger(__name__)

# Axis index -> names of its (low, high) bound fields
_AXES = (("r1", "r2"), ("g1", "g2"), ("b1", "b2"))
R_AXIS, G_AXIS, B_AXIS = 0, 1, 2


@dataclass
class Box:
    """
    Axis-aligned region [r1,r2] x [g1,g2] x [b1,b2] (inclusive) of the histogram index space.

    `volume` is recomputed from the bounds on construction and on shrink.
    `points` is only meaningful after shrink() or when set by a split.
    """

    r1: int
    g1: int
    b1: int
    r2: int
    g2: int
    b2: int
    points: int = 0
    volume: int = field(init=False)

    def __post_init__(self) -> None:
        assert self.r1 <= self.r2 and self.g1 <= self.g2 and self.b1 <= self.b2, (
            f"inverted box bounds: {self.bounds()}"
        )
        self.volume = self.calculate_volume()

    @classmethod
    def covering(cls, histogram: HistogramLike) -> "Box":
        """Unshrunk box spanning the whole histogram."""
        return cls(0, 0, 0, histogram.r_elements - 1, histogram.g_elements - 1, histogram.b_elements - 1)

    # ---------- geometry / counting ----------
    def calculate_volume(self) -> int:
        return (self.r2 - self.r1 + 1) * (self.g2 - self.g1 + 1) * (self.b2 - self.b1 + 1)

    def bounds(self) -> Tuple[int, int, int, int, int, int]:
        return (self.r1, self.g1, self.b1, self.r2, self.g2, self.b2)

    def axis_range(self, axis: int) -> Tuple[int, int]:
        lo, hi = _AXES[axis]
        return getattr(self, lo), getattr(self, hi)

    def extent(self, axis: int) -> int:
        lo, hi = self.axis_range(axis)
        return hi - lo

    def region(self, histogram: HistogramLike) -> np.ndarray:
        """View of the histogram cells inside the box, shape (R, G, B)."""
        counts = counts_of(histogram)
        return counts[self.r1:self.r2 + 1, self.g1:self.g2 + 1, self.b1:self.b2 + 1]

    def count_points(self, histogram: HistogramLike) -> int:
        return int(self.region(histogram).sum())

    def plane_points(self, histogram: HistogramLike, axis: int) -> np.ndarray:
        """Point count of every plane perpendicular to `axis`, low -> high."""
        others = tuple(a for a in range(3) if a != axis)
        return self.region(histogram).sum(axis=others)

    # ---------- shrink ----------
    def shrink(self, histogram: HistogramLike) -> None:
        """
        Move each pair of planes inwards until they touch a non-empty cell.
        Axes are done in R, G, B order and each one works on the bounds already
        tightened by the previous axes. Recomputes points and volume.
        """
        for axis in (R_AXIS, G_AXIS, B_AXIS):
            self._axis_shrink(histogram, axis)
        self.points = self.count_points(histogram)
        self.volume = self.calculate_volume()

    def _axis_shrink(self, histogram: HistogramLike, axis: int) -> None:
        lo_name, hi_name = _AXES[axis]
        i1, i2 = self.axis_range(axis)
        occupied = np.flatnonzero(self.plane_points(histogram, axis))
        if occupied.size == 0:
            # nothing on this axis: the low plane walks all the way up to the high one
            i1 = i2
        else:
            i2 = i1 + int(occupied[-1])
            i1 = i1 + int(occupied[0])
        setattr(self, lo_name, i1)
        setattr(self, hi_name, i2)

    # ---------- split ----------
    def split(self, histogram: HistogramLike) -> Optional[Tuple["Box", "Box"]]:
        """
        Median cut along the largest dimension (ties: R, then G, then B).
        Returns the two children, or None when the box can't be divided.
        Expects `points` to be current (call shrink() first).
        """
        dr, dg, db = self.extent(R_AXIS), self.extent(G_AXIS), self.extent(B_AXIS)
        if dr >= dg and dr >= db:
            return self.split_along_axis(histogram, R_AXIS)
        if dg >= dr and dg >= db:
            return self.split_along_axis(histogram, G_AXIS)
        return self.split_along_axis(histogram, B_AXIS)

    def split_along_axis(self, histogram: HistogramLike, axis: int) -> Optional[Tuple["Box", "Box"]]:
        """
        Sweep a plane perpendicular to `axis` from its low bound to its high bound
        and cut at the first position where the low side (plane included) holds
        strictly more points than the high side.
        """
        i1, i2 = self.axis_range(axis)
        planes = self.plane_points(histogram, axis)

        total1 = 0
        total2 = self.points
        for offset in range(i2 - i1 + 1):
            i = i1 + offset
            plane = int(planes[offset])
            total1 += plane
            total2 -= plane

            if total1 > total2:
                if total2 > 0:
                    return (self._child(axis, i1, i, total1),
                            self._child(axis, i + 1, i2, total2))
                if total1 - plane > 0:
                    # median sits on the last occupied plane: give that plane to the high side
                    return (self._child(axis, i1, i - 1, total1 - plane),
                            self._child(axis, i, i2, total2 + plane))
                return None
        return None

    def _child(self, axis: int, lo: int, hi: int, points: int) -> "Box":
        lo_name, hi_name = _AXES[axis]
        return replace(self, points=points, **{lo_name: lo, hi_name: hi})

    # ---------- color ----------
    def mean_color(self, histogram: HistogramLike) -> int:
        """
        Count-weighted mean of the cell coordinates, scaled to 0..255 and packed
        as an opaque RGBA int. Each channel is (255 * sum // (elements - 1)) // count.
        """
        region = self.region(histogram)
        count = int(region.sum())
        if count == 0:
            logger.warning("mean color requested for empty box %s; using black", self.bounds())
            return rgba(0, 0, 0, 255)

        r_sum = _weighted_sum(region.sum(axis=(1, 2)), self.r1)
        g_sum = _weighted_sum(region.sum(axis=(0, 2)), self.g1)
        b_sum = _weighted_sum(region.sum(axis=(0, 1)), self.b1)

        return rgba((255 * r_sum // (histogram.r_elements - 1)) // count,
                    (255 * g_sum // (histogram.g_elements - 1)) // count,
                    (255 * b_sum // (histogram.b_elements - 1)) // count,
                    255)


def _weighted_sum(plane_counts: np.ndarray, first: int) -> int:
    """sum(count * coordinate) over consecutive coordinates starting at `first`."""
    coords = np.arange(first, first + plane_counts.shape[0], dtype=np.int64)
    return int((plane_counts.astype(np.int64) * coords).sum())
