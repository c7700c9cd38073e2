from __future__ import annotations
import numpy as np

from ..config import MATCH_CHUNK

def nearest_palette_index(
    pixels: np.ndarray,   # (K, 3) uint8/float RGB
    palette: np.ndarray,  # (N, 3) uint8/float RGB
    chunk: int = MATCH_CHUNK,
) -> np.ndarray:
    """
    Returns the index of the closest palette color per pixel (squared RGB distance).
    Chunked over pixels to bound the (k, N) distance matrix for large images.
    Ties go to the lowest palette index.
    """
    K = pixels.shape[0]
    N = palette.shape[0]
    assert N > 0, "palette is empty"
    assert chunk > 0

    pal = palette.astype(np.int32)
    out = np.empty((K,), dtype=np.int32)
    for s in range(0, K, chunk):
        e = min(s + chunk, K)
        P = pixels[s:e].astype(np.int32)  # (k, 3)
        # (k,1,3) - (1,N,3) -> (k,N,3)
        diff = P[:, None, :] - pal[None, :, :]
        d2 = (diff * diff).sum(axis=2)  # (k, N)
        out[s:e] = np.argmin(d2, axis=1)
    return out

def apply_palette(img_rgb: np.ndarray, palette: np.ndarray, chunk: int = MATCH_CHUNK) -> np.ndarray:
    """
    Map an (H,W,3) image onto palette indices (H,W).
    Distinct colors are matched once and broadcast back, which is much cheaper
    than matching every pixel on photos with large flat areas.
    """
    h, w = img_rgb.shape[:2]
    flat = img_rgb[..., :3].reshape(-1, 3)
    uniq, inverse = np.unique(flat, axis=0, return_inverse=True)
    idx = nearest_palette_index(uniq, palette, chunk=chunk)
    return idx[inverse.reshape(-1)].reshape(h, w)
