"""Mandelbrot set escape-count images, serial and multi-threaded."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

import numpy as np

MAX_THREADS = 32


def _escape_counts(c_re: np.ndarray, c_im: np.ndarray, count: int) -> np.ndarray:
    """Return per-point iteration counts using single-precision arithmetic."""
    counts = np.full(c_re.size, max(count, 0), dtype=np.int32)
    idx = np.arange(c_re.size)
    cr = c_re.astype(np.float32)
    ci = c_im.astype(np.float32)
    zr = cr.copy()
    zi = ci.copy()
    two = np.float32(2.0)
    for i in range(count):
        if idx.size == 0:
            break
        escaped = zr * zr + zi * zi > np.float32(4.0)
        if escaped.any():
            counts[idx[escaped]] = i
            keep = ~escaped
            idx, zr, zi, cr, ci = idx[keep], zr[keep], zi[keep], cr[keep], ci[keep]
        new_re = zr * zr - zi * zi
        new_im = two * zr * zi
        zr = cr + new_re
        zi = ci + new_im
    return counts


def mandel(c_re: float, c_im: float, count: int) -> int:
    """Return the iterations before ``c`` escapes, at most ``count``."""
    result = _escape_counts(
        np.array([c_re], dtype=np.float32), np.array([c_im], dtype=np.float32), count
    )
    return int(result[0])


def mandelbrot_serial(x0: float, y0: float, x1: float, y1: float,
                      width: int, height: int, start_row: int,
                      total_rows: int, max_iterations: int) -> np.ndarray:
    """Compute rows ``start_row`` to ``start_row + total_rows`` of the image.

    Returns an int32 array of shape ``(total_rows, width)``.
    """
    if width <= 0 or height <= 0:
        raise ValueError("width and height must be positive")
    rows = max(total_rows, 0)
    fx0, fy0 = np.float32(x0), np.float32(y0)
    dx = (np.float32(x1) - fx0) / np.float32(width)
    dy = (np.float32(y1) - fy0) / np.float32(height)
    xs = fx0 + np.arange(width, dtype=np.float32) * dx
    ys = fy0 + np.arange(start_row, start_row + rows, dtype=np.float32) * dy
    c_re = np.tile(xs, rows)
    c_im = np.repeat(ys, width)
    return _escape_counts(c_re, c_im, max_iterations).reshape(rows, width)


def mandelbrot_thread(num_threads: int, x0: float, y0: float, x1: float,
                      y1: float, width: int, height: int,
                      max_iterations: int) -> np.ndarray:
    """Compute the whole image, splitting rows between ``num_threads`` workers.

    The calling thread computes the first block itself.
    """
    if num_threads > MAX_THREADS:
        raise ValueError(f"Max allowed threads is {MAX_THREADS}")
    if num_threads < 1:
        raise ValueError("at least one thread is required")
    output = np.zeros((height, width), dtype=np.int32)

    def work(thread_id: int) -> None:
        start = thread_id * height // num_threads
        end = (thread_id + 1) * height // num_threads
        output[start:end] = mandelbrot_serial(
            x0, y0, x1, y1, width, height, start, end - start, max_iterations
        )

    if num_threads == 1:
        work(0)
        return output
    with ThreadPoolExecutor(max_workers=num_threads - 1) as pool:
        futures = [pool.submit(work, tid) for tid in range(1, num_threads)]
        work(0)
        for future in futures:
            future.result()
    return output