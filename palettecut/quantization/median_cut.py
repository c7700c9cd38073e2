# palettecut/quantization/median_cut.py
"""
Median cut palette selection, as described in P. Heckbert,
"Color image quantization for frame buffer display", Computer Graphics 16(3), 297-307 (1982).
"""
from __future__ import annotations
import heapq
import itertools
import logging
from typing import Iterator, List, Tuple

from .box import Box
from .histogram import HistogramLike, as_histogram

logger = logging.getLogger(__name__)


class BoxQueue:
    """Max-heap of boxes by volume; equal volumes come out in insertion order."""

    def __init__(self) -> None:
        self._heap: List[Tuple[int, int, Box]] = []
        self._seq = itertools.count()

    def push(self, box: Box) -> None:
        heapq.heappush(self._heap, (-box.volume, next(self._seq), box))

    def pop(self) -> Box:
        return heapq.heappop(self._heap)[2]

    def __iter__(self) -> Iterator[Box]:
        """Live boxes, in no particular order."""
        return (entry[2] for entry in self._heap)

    def __len__(self) -> int:
        return len(self._heap)

    def __bool__(self) -> bool:
        return bool(self._heap)


def median_cut(histogram: HistogramLike, max_boxes: int) -> List[int]:
    """
    Reduce the histogram to at most `max_boxes` packed opaque RGBA colors.

    The biggest box (by volume) is shrunk and split until there are `max_boxes`
    boxes or nothing left to split; boxes that can't be split become colors
    right away, the rest are converted once the loop stops.
    """
    if max_boxes < 0:
        raise ValueError(f"max_boxes must be >= 0, got {max_boxes}")
    result: List[int] = []
    if max_boxes == 0:
        return result

    # at()-only histograms are read once here, not on every box operation
    histogram = as_histogram(histogram)
    total = histogram.total()
    if total == 0:
        logger.debug("median_cut: empty histogram, no colors")
        return result

    boxes = BoxQueue()
    boxes.push(Box.covering(histogram))

    terminal = 0
    while boxes and len(boxes) < max_boxes:
        box = boxes.pop()
        box.shrink(histogram)

        children = box.split(histogram)
        if children is not None:
            boxes.push(children[0])
            boxes.push(children[1])
            continue

        # can't be split any further, it is a palette entry on its own
        terminal += 1
        if len(result) >= max_boxes:
            return result
        result.append(box.mean_color(histogram))

    while boxes and len(result) < max_boxes:
        result.append(boxes.pop().mean_color(histogram))

    logger.debug(
        "median_cut: %d colors from %d points (%d terminal boxes, max %d)",
        len(result), total, terminal, max_boxes,
    )
    return result
