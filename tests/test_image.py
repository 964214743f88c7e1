import numpy as np
import pytest
from matplotlib import image as mpimg

from slabmc.render.image import to_rgb, write_ppm, save_png


def test_to_rgb_scales_and_saturates():
    h = np.array([[0.0, 0.5], [1.0, 2.0]])
    rgb = to_rgb(h, color=(1.0, 0.77, 0.80))
    assert rgb.dtype == np.uint8
    assert rgb.shape == (2, 2, 3)
    assert rgb[0, 0].tolist() == [0, 0, 0]
    assert rgb[0, 1].tolist() == [127, 98, 102]
    assert rgb[1, 0].tolist() == [255, 196, 204]
    # 超过 1 的值饱和
    assert rgb[1, 1].tolist() == rgb[1, 0].tolist()


def test_to_rgb_rejects_bad_input():
    with pytest.raises(ValueError):
        to_rgb(np.zeros(4))
    with pytest.raises(ValueError):
        to_rgb(np.zeros((2, 2)), color=(1.0, 2.0, 0.0))
    with pytest.raises(ValueError):
        to_rgb(np.zeros((2, 2)), color=(1.0, 0.5))


def test_write_ppm(tmp_path):
    rgb = np.arange(2 * 3 * 3, dtype=np.uint8).reshape(2, 3, 3)
    path = tmp_path / "out.ppm"
    write_ppm(path, rgb)
    data = path.read_bytes()
    header = b"P6\n3 2\n255\n"
    assert data.startswith(header)
    assert data[len(header):] == rgb.tobytes()


def test_write_ppm_rejects_grayscale(tmp_path):
    with pytest.raises(ValueError):
        write_ppm(tmp_path / "x.ppm", np.zeros((2, 2), dtype=np.uint8))


def test_save_png(tmp_path):
    rgb = to_rgb(np.eye(4))
    path = tmp_path / "out.png"
    save_png(path, rgb)
    img = mpimg.imread(path)
    assert img.shape[:2] == (4, 4)
