"""Scaled vector addition and memory-bandwidth reporting."""

from __future__ import annotations

import argparse
import math
import sys

import numpy as np

from pcbench.cycletimer import current_seconds

DEFAULT_SIZE = 20 * 1000 * 1000
FLOAT_BYTES = 4
RUNS = 3


def saxpy_serial(scale: float, xs, ys) -> np.ndarray:
    """Return ``scale * xs + ys`` in single precision."""
    x = np.asarray(xs, dtype=np.float32)
    y = np.asarray(ys, dtype=np.float32)
    if x.shape != y.shape:
        raise ValueError("xs and ys must have the same length")
    return np.float32(scale) * x + y


def to_bandwidth(num_bytes: int, seconds: float) -> float:
    """Return throughput in GiB per second."""
    gib = num_bytes / (1024.0 * 1024.0 * 1024.0)
    return gib / seconds if seconds else math.inf


def to_gflops(ops: int, seconds: float) -> float:
    """Return throughput in billions of operations per second."""
    return ops / 1e9 / seconds if seconds else math.inf


def verify_result(result, gold) -> list[int]:
    """Report elements that differ at all; returns their indices."""
    got = np.asarray(result).ravel()
    want = np.asarray(gold).ravel()
    bad = [int(i) for i in np.flatnonzero(got != want)]
    for index in bad:
        print(f"Error: [{index}] Got {float(got[index]):f} "
              f"expected {float(want[index]):f}")
    return bad


def main(argv=None) -> int:
    """Time the serial saxpy kernel and report bandwidth and GFLOPS."""
    argv = sys.argv[1:] if argv is None else list(argv)
    parser = argparse.ArgumentParser(description="Time a saxpy kernel.")
    parser.add_argument("-n", "--size", type=int, default=DEFAULT_SIZE)
    args = parser.parse_args(argv)
    n = args.size
    if n <= 0:
        parser.error("size must be positive")

    total_bytes = 4 * n * FLOAT_BYTES
    total_flops = 2 * n
    scale = 2.0
    xs = np.arange(n, dtype=np.float32)
    ys = np.arange(n, dtype=np.float32)

    min_serial = 1e30
    for _ in range(RUNS):
        start = current_seconds()
        saxpy_serial(scale, xs, ys)
        min_serial = min(min_serial, current_seconds() - start)

    print(f"[saxpy serial]:\t\t[{min_serial * 1000:.3f}] ms\t"
          f"[{to_bandwidth(total_bytes, min_serial):.3f}] GB/s\t"
          f"[{to_gflops(total_flops, min_serial):.3f}] GFLOPS")
    return 0


if __name__ == "__main__":
    sys.exit(main())