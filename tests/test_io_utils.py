import numpy as np
import pytest
from PIL import Image
from palettecut.io_utils import list_images, load_image, save_image_rgb, save_indexed_png

def test_png_roundtrip(tmp_path):
    img = (np.random.rand(8, 8, 3) * 255).astype("uint8")
    path = save_image_rgb(tmp_path / "a.png", img)
    assert np.array_equal(load_image(path), img)

def test_rgba_is_written_as_png(tmp_path):
    img = (np.random.rand(8, 8, 4) * 255).astype("uint8")
    path = save_image_rgb(tmp_path / "a.jpg", img)
    assert path.suffix == ".png"
    assert np.array_equal(load_image(path, keep_alpha=True), img)

def test_indexed_png(tmp_path):
    idx = np.array([[0, 1], [1, 2]], dtype=np.uint8)
    pal = np.array([[0, 0, 0], [255, 0, 0], [0, 0, 255]], dtype=np.uint8)
    path = save_indexed_png(tmp_path / "p.png", idx, pal)
    with Image.open(path) as im:
        assert im.mode == "P"
        assert np.array_equal(np.array(im), idx)
        assert im.getpalette()[:9] == pal.reshape(-1).tolist()

def test_missing_image(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_image(tmp_path / "nope.png")

def test_list_images_filters_and_sorts(tmp_path):
    for name in ["b.png", "a.jpg", "notes.txt"]:
        (tmp_path / name).write_bytes(b"")
    assert [p.name for p in list_images(tmp_path)] == ["a.jpg", "b.png"]
