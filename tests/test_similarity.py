import math
import numpy as np
import pytest
from palettecut.metrics.similarity import count_colors, mse, quantization_report

def test_identical_images():
    img = (np.random.rand(32, 32, 3) * 255).astype("uint8")
    rep = quantization_report(img, img.copy())
    assert rep["mse"] == 0.0
    assert math.isinf(rep["psnr"])
    assert rep["ssim"] > 0.999
    assert rep["colors"] == count_colors(img)

def test_mse_ignores_alpha():
    a = np.zeros((4, 4, 4), dtype=np.uint8)
    b = a.copy()
    b[..., 3] = 255
    assert mse(a, b) == 0.0
    b[..., 0] = 2
    assert mse(a, b) == pytest.approx(4.0 / 3.0)

def test_count_colors():
    img = np.zeros((4, 4, 3), dtype=np.uint8)
    img[0, 0] = (1, 2, 3)
    assert count_colors(img) == 2
