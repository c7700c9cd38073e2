from __future__ import annotations
from typing import Sequence, Tuple
import numpy as np

RGBATuple = Tuple[int, int, int, int]

def rgba(r: int, g: int, b: int, a: int = 255) -> int:
    """Pack 8-bit components as r | g<<8 | b<<16 | a<<24."""
    return (r & 0xFF) | ((g & 0xFF) << 8) | ((b & 0xFF) << 16) | ((a & 0xFF) << 24)

def rgba_components(color: int) -> RGBATuple:
    return (color & 0xFF, (color >> 8) & 0xFF, (color >> 16) & 0xFF, (color >> 24) & 0xFF)

def palette_to_array(colors: Sequence[int]) -> np.ndarray:
    """
    Packed colors -> (N, 3) uint8 RGB rows (alpha dropped).
    An empty sequence gives a (0, 3) array.
    """
    out = np.zeros((len(colors), 3), dtype=np.uint8)
    for n, c in enumerate(colors):
        r, g, b, _ = rgba_components(c)
        out[n] = (r, g, b)
    return out
