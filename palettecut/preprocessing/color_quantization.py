from typing import Literal, Sequence, Tuple
import logging
import numpy as np

from ..config import HISTOGRAM_BITS, MATCH_CHUNK, MAX_INDEXED_COLORS, MEDIAN_CUT_COLORS
from ..mapping.matchers import apply_palette
from ..quantization.colors import palette_to_array
from ..quantization.histogram import Histogram
from ..quantization.median_cut import median_cut

logger = logging.getLogger(__name__)

QuantMethod = Literal["none", "median_cut"]

def create_palette(
    img: np.ndarray,
    max_colors: int = MEDIAN_CUT_COLORS,
    histogram_bits: Sequence[int] = HISTOGRAM_BITS,
) -> np.ndarray:
    """
    Median cut palette for a uint8 RGB/RGBA image, as (N, 3) uint8 with N <= max_colors.
    Transparent pixels don't take part. N is 0 for a fully transparent image.
    """
    histogram = Histogram.from_image(img, bits=histogram_bits)
    colors = median_cut(histogram, max_colors)
    logger.debug("palette of %d colors from %d occupied cells", len(colors), histogram.occupied())
    return palette_to_array(colors)

def quantize(
    img_rgb: np.ndarray,
    method: QuantMethod = "none",
    median_cut_colors: int = MEDIAN_CUT_COLORS,
    histogram_bits: Sequence[int] = HISTOGRAM_BITS,
    chunk: int = MATCH_CHUNK,
) -> np.ndarray:
    """
    Apply optional color quantization.
    - "none": pass-through
    - "median_cut": median cut palette, every pixel replaced by its nearest palette color
    An alpha channel, if present, is kept as is.
    """
    if method == "none":
        return img_rgb

    if method == "median_cut":
        palette = create_palette(img_rgb, median_cut_colors, histogram_bits)
        if palette.shape[0] == 0:
            # nothing visible to build a palette from
            return img_rgb.copy()
        idx = apply_palette(img_rgb, palette, chunk=chunk)
        out = img_rgb.copy()
        out[..., :3] = palette[idx]
        return out

    raise ValueError(f"Unknown quantization method: {method}")

def quantize_indexed(
    img_rgb: np.ndarray,
    max_colors: int = MAX_INDEXED_COLORS,
    histogram_bits: Sequence[int] = HISTOGRAM_BITS,
    chunk: int = MATCH_CHUNK,
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Returns (indices[H,W] uint8, palette[N,3] uint8) ready for a paletted image.
    """
    if not 1 <= max_colors <= MAX_INDEXED_COLORS:
        raise ValueError(f"Indexed images hold 1..{MAX_INDEXED_COLORS} colors, got {max_colors}")
    palette = create_palette(img_rgb, max_colors, histogram_bits)
    if palette.shape[0] == 0:
        palette = np.zeros((1, 3), dtype=np.uint8)
    idx = apply_palette(img_rgb, palette, chunk=chunk)
    return idx.astype(np.uint8), palette
