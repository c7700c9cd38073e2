# palettecut/metrics/similarity.py
from __future__ import annotations
from typing import Dict
import numpy as np
from skimage.metrics import peak_signal_noise_ratio, structural_similarity as ssim

def mse(a: np.ndarray, b: np.ndarray) -> float:
    a32 = a[..., :3].astype(np.float32)
    b32 = b[..., :3].astype(np.float32)
    return float(np.mean((a32 - b32) ** 2))

def psnr(a: np.ndarray, b: np.ndarray) -> float:
    """PSNR in dB on the RGB channels; inf for identical images."""
    if mse(a, b) == 0.0:
        return float("inf")
    return float(peak_signal_noise_ratio(a[..., :3], b[..., :3], data_range=255))

def ssim_rgb(a: np.ndarray, b: np.ndarray) -> float:
    # skimage >= 0.19 uses channel_axis instead of multichannel
    a_f = (a[..., :3].astype(np.float32) / 255.0).clip(0, 1)
    b_f = (b[..., :3].astype(np.float32) / 255.0).clip(0, 1)
    val = ssim(a_f, b_f, channel_axis=2, data_range=1.0, gaussian_weights=True, use_sample_covariance=False)
    return float(val)

def count_colors(img: np.ndarray) -> int:
    return int(np.unique(img[..., :3].reshape(-1, 3), axis=0).shape[0])

def quantization_report(original: np.ndarray, quantized: np.ndarray) -> Dict[str, float]:
    """How far a quantized image drifted from its source, plus how many colors it ended up with."""
    assert original.shape[:2] == quantized.shape[:2], "images must have the same size"
    return {
        "mse": mse(original, quantized),
        "psnr": psnr(original, quantized),
        "ssim": ssim_rgb(original, quantized),
        "colors": float(count_colors(quantized)),
    }
