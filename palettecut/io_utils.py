from pathlib import Path
from typing import Union
import cv2
import numpy as np
from PIL import Image

from .config import DEFAULT_JPEG_QUALITY, MAX_INDEXED_COLORS

# cv2 loads BGR(A); convert to RGB(A) to keep consistency across the codebase.
def load_image(path: Union[str, Path], keep_alpha: bool = False) -> np.ndarray:
    path = Path(path)
    flag = cv2.IMREAD_UNCHANGED if keep_alpha else cv2.IMREAD_COLOR
    img = cv2.imread(str(path), flag)
    if img is None:
        raise FileNotFoundError(f"Could not read image: {path}")
    if img.ndim == 2:
        return cv2.cvtColor(img, cv2.COLOR_GRAY2RGB)
    if img.shape[2] == 4:
        return cv2.cvtColor(img, cv2.COLOR_BGRA2RGBA)
    return cv2.cvtColor(img, cv2.COLOR_BGR2RGB)

def save_image_rgb(path: Union[str, Path], img_rgb: np.ndarray, quality: int = DEFAULT_JPEG_QUALITY) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    ext = path.suffix.lower()
    if img_rgb.shape[2] == 4:
        img_bgr = cv2.cvtColor(img_rgb, cv2.COLOR_RGBA2BGRA)
        # JPEG has no alpha
        if ext not in [".png"]:
            path = path.with_suffix(".png")
            ext = ".png"
    else:
        img_bgr = cv2.cvtColor(img_rgb, cv2.COLOR_RGB2BGR)
    if ext in [".jpg", ".jpeg"]:
        cv2.imwrite(str(path), img_bgr, [int(cv2.IMWRITE_JPEG_QUALITY), int(quality)])
    elif ext == ".png":
        cv2.imwrite(str(path), img_bgr)  # use default compression
    else:
        # fallback to PNG
        path = path.with_suffix(".png")
        cv2.imwrite(str(path), img_bgr)
    return path

def save_indexed_png(path: Union[str, Path], indices: np.ndarray, palette: np.ndarray) -> Path:
    """Write (H,W) palette indices + (N,3) palette as a mode "P" PNG."""
    if palette.shape[0] > MAX_INDEXED_COLORS:
        raise ValueError(f"Palettes are limited to {MAX_INDEXED_COLORS} colors for indexed PNGs")
    path = Path(path).with_suffix(".png")
    path.parent.mkdir(parents=True, exist_ok=True)
    img = Image.fromarray(indices.astype(np.uint8))  # "L"; putpalette turns it into "P"
    flat = palette.astype(np.uint8).reshape(-1).tolist()
    flat.extend([0, 0, 0] * (MAX_INDEXED_COLORS - palette.shape[0]))
    img.putpalette(flat)
    img.save(path)
    return path

def list_images(folder: Union[str, Path]) -> list[Path]:
    folder = Path(folder)
    exts = (".jpg", ".jpeg", ".png", ".bmp", ".webp")
    return sorted([p for p in folder.iterdir() if p.suffix.lower() in exts])
