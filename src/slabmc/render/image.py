# src/slabmc/render/image.py
from __future__ import annotations
from typing import Sequence

import numpy as np
from matplotlib import image as mpimg

# 光子颜色（RGB，0..1）
DEFAULT_COLOR = (0.0, 0.77, 0.80)


def to_rgb(mean_histogram: np.ndarray, color: Sequence[float] = DEFAULT_COLOR) -> np.ndarray:
    """
    平均直方图 → uint8 RGB 图像 (rows, cols, 3)。
    像素 = 255 · color · min(1, v)，截断取整；负值按 0 处理。
    """
    h = np.asarray(mean_histogram, dtype=np.float64)
    if h.ndim != 2:
        raise ValueError(f"histogram must be 2D, got shape {h.shape}")
    c = np.asarray(color, dtype=np.float64)
    if c.shape != (3,) or np.any(c < 0.0) or np.any(c > 1.0):
        raise ValueError(f"color must be three values in [0, 1], got {color!r}")
    v = np.clip(h, 0.0, 1.0)
    return (255.0 * v[..., None] * c).astype(np.uint8)


def write_ppm(path, rgb: np.ndarray) -> None:
    """二进制 PPM (P6) 输出"""
    rgb = np.ascontiguousarray(rgb, dtype=np.uint8)
    if rgb.ndim != 3 or rgb.shape[2] != 3:
        raise ValueError(f"rgb must have shape (rows, cols, 3), got {rgb.shape}")
    rows, cols = rgb.shape[:2]
    with open(path, "wb") as f:
        f.write(f"P6\n{cols} {rows}\n255\n".encode("ascii"))
        f.write(rgb.tobytes())


def save_png(path, rgb: np.ndarray) -> None:
    mpimg.imsave(path, np.ascontiguousarray(rgb, dtype=np.uint8))
