"""Square roots by Newton iteration on the inverse square root."""

from __future__ import annotations

import argparse
import sys

import numpy as np

from pcbench.cycletimer import current_seconds

THRESHOLD = np.float32(0.00001)
TOLERANCE = 1e-4
DEFAULT_SIZE = 20 * 1000 * 1000
INITIAL_GUESS = 1.0
RUNS = 3


def sqrt_serial(initial_guess: float, values) -> np.ndarray:
    """Return single-precision square roots of ``values``.

    Each element iterates from ``initial_guess`` until the inverse
    square root estimate is within the threshold; with a guess of 1 the
    iteration converges for values in (0, 3).
    """
    x = np.asarray(values, dtype=np.float32).ravel()
    one = np.float32(1.0)
    three = np.float32(3.0)
    half = np.float32(0.5)
    guess = np.full(x.shape, np.float32(initial_guess), dtype=np.float32)
    error = np.abs(guess * guess * x - one)
    pending = np.flatnonzero(error > THRESHOLD)
    while pending.size:
        g = guess[pending]
        xi = x[pending]
        g = (three * g - xi * g * g * g) * half
        guess[pending] = g
        err = np.abs(g * g * xi - one)
        pending = pending[err > THRESHOLD]
    return x * guess


def verify_result(result, gold) -> list[int]:
    """Report elements differing by more than 1e-4; returns their indices."""
    got = np.asarray(result, dtype=np.float64).ravel()
    want = np.asarray(gold, dtype=np.float64).ravel()
    bad = [int(i) for i in np.flatnonzero(np.abs(got - want) > TOLERANCE)]
    for index in bad:
        print(f"Error: [{index}] Got {got[index]:f} expected {want[index]:f}")
    return bad


def main(argv=None) -> int:
    """Time the serial square-root kernel on random inputs."""
    argv = sys.argv[1:] if argv is None else list(argv)
    parser = argparse.ArgumentParser(description="Time a square-root kernel.")
    parser.add_argument("-n", "--size", type=int, default=DEFAULT_SIZE)
    args = parser.parse_args(argv)
    if args.size <= 0:
        parser.error("size must be positive")

    rng = np.random.default_rng(0)
    values = (np.float32(0.001)
              + np.float32(2.998) * rng.random(args.size, dtype=np.float32))
    gold = np.sqrt(values)

    min_serial = 1e30
    output = None
    for _ in range(RUNS):
        start = current_seconds()
        output = sqrt_serial(INITIAL_GUESS, values)
        min_serial = min(min_serial, current_seconds() - start)

    print(f"[sqrt serial]:\t\t[{min_serial * 1000:.3f}] ms")
    verify_result(output, gold)
    return 0


if __name__ == "__main__":
    sys.exit(main())