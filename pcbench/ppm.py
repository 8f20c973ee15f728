"""Writing iteration-count images as binary PPM files."""

from __future__ import annotations

import os

import numpy as np


def _map_array(counts: np.ndarray, max_iterations: int) -> np.ndarray:
    clamped = np.minimum(np.float32(max_iterations), counts.astype(np.float32))
    mapped = np.power(clamped / np.float32(256.0), np.float32(0.5))
    scaled = np.float32(255.0) * mapped
    return (scaled.astype(np.int64) & 0xFF).astype(np.uint8)


def map_iterations(count: int, max_iterations: int) -> int:
    """Map an iteration count to an 8-bit grey level."""
    return int(_map_array(np.array([count]), max_iterations)[0])


def write_ppm_image(data, width: int, height: int,
                    filename: str | os.PathLike, max_iterations: int) -> None:
    """Write iteration counts as a grey-scale binary PPM image."""
    counts = np.asarray(data).ravel()
    size = width * height
    if counts.size < size:
        raise ValueError(
            f"image needs {size} values, got {counts.size}"
        )
    pixels = np.repeat(_map_array(counts[:size], max_iterations), 3)
    with open(filename, "wb") as fp:
        fp.write(f"P6\n{width} {height}\n255\n".encode("ascii"))
        fp.write(pixels.tobytes())
    print(f"Wrote image file {os.fspath(filename)}")