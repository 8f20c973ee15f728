"""A simulated fixed-width vector unit with masked lanes and usage logging."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Callable, MutableSequence, Sequence

VECTOR_WIDTH = 4
MAX_INST_LEN = 32
MAX_LOGGED_LANES = 64


@dataclass(frozen=True)
class LogEntry:
    """One executed instruction and the lanes that were active, as a bit mask."""

    instruction: str
    mask: int

    def is_active(self, lane: int) -> bool:
        """Return True when ``lane`` was active for this instruction."""
        return bool(self.mask >> lane & 1)


@dataclass
class Statistics:
    """Running totals of vector lane usage."""

    utilized_lane: int = 0
    total_lane: int = 0
    total_instructions: int = 0

    @property
    def utilization(self) -> float:
        """Percentage of lanes that did useful work; NaN before any lanes ran."""
        if self.total_lane == 0:
            return math.nan
        return self.utilized_lane / self.total_lane * 100


@dataclass
class Logger:
    """Records every vector instruction and the lanes it used."""

    width: int = VECTOR_WIDTH
    entries: list[LogEntry] = field(default_factory=list)
    stats: Statistics = field(default_factory=Statistics)

    def add_log(self, instruction: str, mask: Sequence[bool], n: int = 0) -> None:
        """Record ``instruction`` run over the first ``n`` lanes of ``mask``."""
        if n > MAX_LOGGED_LANES:
            raise ValueError(f"at most {MAX_LOGGED_LANES} lanes can be logged")
        bits = 0
        for lane, active in enumerate(mask[:n]):
            if active:
                bits |= 1 << lane
                self.stats.utilized_lane += 1
        self.stats.total_lane += n
        self.stats.total_instructions += n > 0
        self.entries.append(LogEntry(instruction[:MAX_INST_LEN - 1], bits))

    def format_stats(self) -> str:
        """Return the usage summary as printable text."""
        s = self.stats
        lines = [
            "****************** Printing Vector Unit Statistics *******************",
            f"Vector Width:              {self.width}",
            f"Total Vector Instructions: {s.total_instructions}",
            f"Vector Utilization:        {s.utilization:.1f}%",
            f"Utilized Vector Lanes:     {s.utilized_lane}",
            f"Total Vector Lanes:        {s.total_lane}",
        ]
        return "\n".join(lines) + "\n"

    def format_log(self) -> str:
        """Return the execution log, one line per instruction."""
        lines = [
            "***************** Printing Vector Unit Execution Log *****************",
            " Instruction | Vector Lane Occupancy ('*' for active, '_' for inactive)",
            "------------- --------------------------------------------------------",
        ]
        for entry in self.entries:
            lanes = "".join(
                "*" if entry.is_active(lane) else "_" for lane in range(self.width)
            )
            lines.append(f"{entry.instruction:>12} | {lanes}")
        return "\n".join(lines) + "\n"


def _divide(a, b):
    """Divide like the hardware does: integers truncate toward zero."""
    if isinstance(a, int) and isinstance(b, int):
        quotient = abs(a) // abs(b)
        return quotient if (a < 0) == (b < 0) else -quotient
    return a / b


class VectorUnit:
    """Masked vector operations over lists of ``width`` lanes.

    Vectors and masks are plain mutable lists; operations that take a
    ``dest`` update it in place, leaving inactive lanes untouched.
    """

    def __init__(self, width: int = VECTOR_WIDTH, logger: Logger | None = None):
        if width <= 0:
            raise ValueError("vector width must be positive")
        if width > MAX_LOGGED_LANES:
            raise ValueError(f"vector width is limited to {MAX_LOGGED_LANES}")
        self.width = width
        self.logger = logger if logger is not None else Logger(width)

    def _check(self, *vectors: Sequence) -> None:
        for vec in vectors:
            if len(vec) != self.width:
                raise ValueError(
                    f"expected {self.width} lanes, got {len(vec)}"
                )

    def _log_all(self, name: str) -> None:
        self.logger.add_log(name, self.init_ones(), self.width)

    def _masked(self, name: str, dest: MutableSequence, mask: Sequence[bool],
                lane_value: Callable[[int], object]) -> None:
        self._check(dest, mask)
        for lane in range(self.width):
            if mask[lane]:
                dest[lane] = lane_value(lane)
        self.logger.add_log(name, mask, self.width)

    def init_ones(self, first: int | None = None) -> list[bool]:
        """Return a mask with the first ``first`` lanes set (all by default)."""
        count = self.width if first is None else first
        return [lane < count for lane in range(self.width)]

    def mask_not(self, mask: Sequence[bool]) -> list[bool]:
        """Return the inverse of ``mask``."""
        self._check(mask)
        result = [not bit for bit in mask]
        self._log_all("masknot")
        return result

    def mask_or(self, mask_a: Sequence[bool], mask_b: Sequence[bool]) -> list[bool]:
        """Return the lane-wise OR of two masks."""
        self._check(mask_a, mask_b)
        result = [bool(a or b) for a, b in zip(mask_a, mask_b)]
        self._log_all("maskor")
        return result

    def mask_and(self, mask_a: Sequence[bool], mask_b: Sequence[bool]) -> list[bool]:
        """Return the lane-wise AND of two masks."""
        self._check(mask_a, mask_b)
        result = [bool(a and b) for a, b in zip(mask_a, mask_b)]
        self._log_all("maskand")
        return result

    def cntbits(self, mask: Sequence[bool]) -> int:
        """Count the set lanes of ``mask``."""
        self._check(mask)
        count = sum(1 for bit in mask if bit)
        self._log_all("cntbits")
        return count

    def vset(self, dest: MutableSequence, value, mask: Sequence[bool]) -> None:
        """Set active lanes of ``dest`` to ``value``."""
        self._masked("vset", dest, mask, lambda lane: value)

    def broadcast(self, value) -> list:
        """Return a new vector with every lane set to ``value``."""
        vec = [value] * self.width
        self.vset(vec, value, self.init_ones())
        return vec

    def vmove(self, dest: MutableSequence, src: Sequence, mask: Sequence[bool]) -> None:
        """Copy active lanes of ``src`` into ``dest``."""
        self._check(src)
        self._masked("vmove", dest, mask, lambda lane: src[lane])

    def vload(self, dest: MutableSequence, src: Sequence, offset: int,
              mask: Sequence[bool]) -> None:
        """Load ``src[offset + lane]`` into each active lane of ``dest``."""
        self._masked("vload", dest, mask, lambda lane: src[offset + lane])

    def vstore(self, dest: MutableSequence, offset: int, src: Sequence,
               mask: Sequence[bool]) -> None:
        """Store each active lane of ``src`` to ``dest[offset + lane]``."""
        self._check(src, mask)
        for lane in range(self.width):
            if mask[lane]:
                dest[offset + lane] = src[lane]
        self.logger.add_log("vstore", mask, self.width)

    def vadd(self, dest: MutableSequence, vec_a: Sequence, vec_b: Sequence,
             mask: Sequence[bool]) -> None:
        """Set active lanes of ``dest`` to ``vec_a + vec_b``."""
        self._check(vec_a, vec_b)
        self._masked("vadd", dest, mask, lambda lane: vec_a[lane] + vec_b[lane])

    def vsub(self, dest: MutableSequence, vec_a: Sequence, vec_b: Sequence,
             mask: Sequence[bool]) -> None:
        """Set active lanes of ``dest`` to ``vec_a - vec_b``."""
        self._check(vec_a, vec_b)
        self._masked("vsub", dest, mask, lambda lane: vec_a[lane] - vec_b[lane])

    def vmult(self, dest: MutableSequence, vec_a: Sequence, vec_b: Sequence,
              mask: Sequence[bool]) -> None:
        """Set active lanes of ``dest`` to ``vec_a * vec_b``."""
        self._check(vec_a, vec_b)
        self._masked("vmult", dest, mask, lambda lane: vec_a[lane] * vec_b[lane])

    def vdiv(self, dest: MutableSequence, vec_a: Sequence, vec_b: Sequence,
             mask: Sequence[bool]) -> None:
        """Set active lanes of ``dest`` to ``vec_a / vec_b``.

        Integer lanes divide with truncation toward zero.
        """
        self._check(vec_a, vec_b)
        self._masked("vdiv", dest, mask,
                     lambda lane: _divide(vec_a[lane], vec_b[lane]))

    def vabs(self, dest: MutableSequence, vec_a: Sequence, mask: Sequence[bool]) -> None:
        """Set active lanes of ``dest`` to ``abs(vec_a)``."""
        self._check(vec_a)
        self._masked("vabs", dest, mask, lambda lane: abs(vec_a[lane]))

    def vgt(self, dest: MutableSequence, vec_a: Sequence, vec_b: Sequence,
            mask: Sequence[bool]) -> None:
        """Set active lanes of the mask ``dest`` to ``vec_a > vec_b``."""
        self._check(vec_a, vec_b)
        self._masked("vgt", dest, mask, lambda lane: vec_a[lane] > vec_b[lane])

    def vlt(self, dest: MutableSequence, vec_a: Sequence, vec_b: Sequence,
            mask: Sequence[bool]) -> None:
        """Set active lanes of the mask ``dest`` to ``vec_a < vec_b``."""
        self._check(vec_a, vec_b)
        self._masked("vlt", dest, mask, lambda lane: vec_a[lane] < vec_b[lane])

    def veq(self, dest: MutableSequence, vec_a: Sequence, vec_b: Sequence,
            mask: Sequence[bool]) -> None:
        """Set active lanes of the mask ``dest`` to ``vec_a == vec_b``."""
        self._check(vec_a, vec_b)
        self._masked("veq", dest, mask, lambda lane: vec_a[lane] == vec_b[lane])

    def hadd(self, dest: MutableSequence, vec: Sequence) -> None:
        """Add adjacent pairs: ``[a b c d]`` becomes ``[a+b a+b c+d c+d]``."""
        self._check(dest, vec)
        for pair in range(self.width // 2):
            total = vec[2 * pair] + vec[2 * pair + 1]
            dest[2 * pair] = total
            dest[2 * pair + 1] = total

    def interleave(self, dest: MutableSequence, vec: Sequence) -> None:
        """Move even-indexed lanes to the front half and odd ones to the back."""
        self._check(dest, vec)
        half = self.width // 2
        for lane in range(self.width):
            source = 2 * lane if lane < half else 2 * (lane - half) + 1
            dest[lane] = vec[source]

    def add_user_log(self, text: str) -> None:
        """Add a marker line to the log without counting any lanes."""
        self.logger.add_log(text, self.init_ones(), 0)