"""Small array kernels written against the simulated vector unit."""

from __future__ import annotations

import argparse
import random
import sys
from typing import Sequence

import numpy as np

from pcbench.vecintrin import VECTOR_WIDTH, VectorUnit

EXP_MAX = 10
CLAMP_LIMIT = np.float32(9.999999)
VERIFY_EPSILON = 0.00001
SUM_EPSILON = 0.1
DEFAULT_SIZE = 16
_RED = "\033[1;31m"
_RESET = "\033[0m"


def init_values(n: int, width: int, rng: random.Random):
    """Return random ``(values, exponents)``, each ``n + width`` long.

    Values lie in [-1, 3]; exponents in [0, EXP_MAX).
    """
    count = n + width
    values = [np.float32(-1.0) + np.float32(4.0) * np.float32(rng.random())
              for _ in range(count)]
    exponents = [rng.randrange(EXP_MAX) for _ in range(count)]
    return values, exponents


def abs_serial(values: Sequence[float]) -> list:
    """Return the absolute value of every element."""
    return [-x if x < 0 else x for x in values]


def abs_vector(unit: VectorUnit, values: Sequence[float]) -> list:
    """Absolute values computed with masked vector instructions."""
    width = unit.width
    n = len(values)
    zero = np.float32(0.0)
    output = [zero] * n
    zero_vec = unit.broadcast(zero)
    for start in range(0, n, width):
        active = unit.init_ones(min(width, n - start))
        x = [zero] * width
        result = [zero] * width
        unit.vload(x, values, start, active)
        is_negative = unit.init_ones(0)
        unit.vlt(is_negative, x, zero_vec, active)
        unit.vsub(result, zero_vec, x, is_negative)
        not_negative = unit.mask_and(unit.mask_not(is_negative), active)
        unit.vload(result, values, start, not_negative)
        unit.vstore(output, start, result, active)
    return output


def clamped_exp_serial(values: Sequence[float], exponents: Sequence[int]) -> list:
    """Raise each value to its exponent and clamp the result to 9.999999."""
    output = []
    for value, exponent in zip(values, exponents):
        x = np.float32(value)
        if exponent == 0:
            output.append(np.float32(1.0))
            continue
        result = x
        for _ in range(exponent - 1):
            result = result * x
        output.append(min(result, CLAMP_LIMIT) if result > CLAMP_LIMIT else result)
    return output


def clamped_exp_vector(unit: VectorUnit, values: Sequence[float],
                       exponents: Sequence[int]) -> list:
    """Vectorised :func:`clamped_exp_serial`; works for any length and width."""
    width = unit.width
    n = min(len(values), len(exponents))
    floats = [np.float32(v) for v in values[:n]]
    ints = [int(e) for e in exponents[:n]]
    output = [np.float32(0.0)] * n

    zero_int = unit.broadcast(0)
    one_int = unit.broadcast(1)
    limit = unit.broadcast(CLAMP_LIMIT)

    for start in range(0, n, width):
        active = unit.init_ones(min(width, n - start))
        x = [np.float32(0.0)] * width
        count = [0] * width
        result = [np.float32(0.0)] * width
        unit.vload(x, floats, start, active)
        unit.vload(count, ints, start, active)
        unit.vset(result, np.float32(1.0), active)

        pending = unit.init_ones(0)
        unit.vgt(pending, count, zero_int, active)
        while unit.cntbits(pending) > 0:
            unit.vmult(result, result, x, pending)
            unit.vsub(count, count, one_int, pending)
            unit.vgt(pending, count, zero_int, pending)

        too_big = unit.init_ones(0)
        unit.vgt(too_big, result, limit, active)
        unit.vset(result, CLAMP_LIMIT, too_big)
        unit.vstore(output, start, result, active)
    return output


def array_sum_serial(values: Sequence[float]) -> float:
    """Sum the values in order with single-precision accumulation."""
    total = np.float32(0.0)
    for value in values:
        total = total + np.float32(value)
    return float(total)


def array_sum_vector(unit: VectorUnit, values: Sequence[float]) -> float:
    """Sum the values using vector adds and a horizontal reduction.

    The length must be a multiple of the vector width, and the width a
    power of two.
    """
    width = unit.width
    if len(values) % width:
        raise ValueError(f"length must be a multiple of the vector width ({width})")
    if width & (width - 1):
        raise ValueError("vector width must be a power of two")
    floats = [np.float32(v) for v in values]
    every = unit.init_ones()
    acc = unit.broadcast(np.float32(0.0))
    chunk = [np.float32(0.0)] * width
    for start in range(0, len(floats), width):
        unit.vload(chunk, floats, start, every)
        unit.vadd(acc, acc, chunk, every)
    scratch = [np.float32(0.0)] * width
    for _ in range(width.bit_length() - 1):
        unit.hadd(scratch, acc)
        unit.interleave(acc, scratch)
    return float(acc[0])


def verify_result(values, exponents, output, gold, n: int) -> bool:
    """Compare output with gold, printing the inputs on the first mismatch."""
    incorrect = next(
        (i for i, (out, want) in enumerate(zip(output, gold))
         if abs(float(out) - float(want)) > VERIFY_EPSILON),
        None,
    )
    if incorrect is None:
        print("Results matched with answer!")
        return True
    if incorrect >= n:
        print("You have written to out of bound value!")
    print(f"Wrong calculation at value[{incorrect}]!")
    print("value  = " + "".join(f"{float(v): f} " for v in values[:n]))
    print("exp    = " + "".join(f"{int(e): 9d} " for e in exponents[:n]))
    print("output = " + "".join(f"{float(v): f} " for v in output[:n]))
    print("gold   = " + "".join(f"{float(v): f} " for v in gold[:n]))
    return False


class _UsageError(Exception):
    pass


class _Parser(argparse.ArgumentParser):
    def error(self, message):
        raise _UsageError(message)


def _usage(progname: str) -> None:
    print(f"Usage: {progname} [options]")
    print("Program Options:")
    print(f"  -s  --size <N>     Use workload size N (Default = {DEFAULT_SIZE})")
    print("  -l  --log          Print vector unit execution log")
    print("  -?  --help         This message")


def main(argv=None) -> int:
    """Check the vector kernels against their serial versions."""
    argv = sys.argv[1:] if argv is None else list(argv)
    parser = _Parser(add_help=False)
    parser.add_argument("-s", "--size", type=int, default=DEFAULT_SIZE)
    parser.add_argument("-l", "--log", action="store_true")
    parser.add_argument("-?", "--help", action="store_true")
    try:
        args = parser.parse_args(argv)
    except _UsageError:
        _usage(parser.prog)
        return 1
    if args.help:
        _usage(parser.prog)
        return 1
    n = args.size
    if n <= 0:
        print(f"Error: Workload size is set to {n} (<0).")
        return -1

    unit = VectorUnit(VECTOR_WIDTH)
    width = unit.width
    values, exponents = init_values(n, width, random.Random(0))
    gold = [np.float32(0.0)] * (n + width)
    output = [np.float32(0.0)] * (n + width)
    gold[:n] = clamped_exp_serial(values[:n], exponents[:n])
    output[:n] = clamped_exp_vector(unit, values[:n], exponents[:n])

    print(f"{_RED}CLAMPED EXPONENT{_RESET} (required) ")
    clamped_correct = verify_result(values, exponents, output, gold, n)
    if args.log:
        print(unit.logger.format_log(), end="")
    print(unit.logger.format_stats(), end="")

    print("************************ Result Verification *************************")
    print("Passed!!!" if clamped_correct else "@@@ Failed!!!")

    print(f"\n{_RED}ARRAY SUM{_RESET} (bonus) ")
    if n % width == 0:
        sum_gold = array_sum_serial(values[:n])
        sum_output = array_sum_vector(unit, values[:n])
        if abs(sum_gold - sum_output) < SUM_EPSILON * 2:
            print("Passed!!!")
        else:
            print(f"Expected {sum_gold:f}, got {sum_output:f}\n.")
            print("@@@ Failed!!!")
    else:
        print(f"Must have N % VECTOR_WIDTH == 0 for this problem "
              f"(VECTOR_WIDTH is {width})")
    return 0


if __name__ == "__main__":
    sys.exit(main())