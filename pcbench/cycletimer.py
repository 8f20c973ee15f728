"""High-resolution timing helpers used by the benchmark programs."""

from __future__ import annotations

import re
import time

_DEFAULT_SECONDS_PER_CYCLE = 1e-9
_FLOAT = re.compile(r"[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?")
_CPU_MHZ = re.compile(r"cpu\s*MHz\s*:")


def _scan_float(text: str) -> float | None:
    """Read a leading float after optional whitespace, or return None."""
    match = _FLOAT.match(text.lstrip())
    return float(match.group()) if match else None


def parse_cpuinfo(text: str) -> float:
    """Return the seconds per CPU cycle described by ``/proc/cpuinfo`` text.

    The nominal frequency after the ``@`` of a ``model name`` line is
    preferred; otherwise the first ``cpu MHz`` line is used.  Without
    either, one nanosecond per cycle is assumed.
    """
    for line in text.splitlines():
        if "model name" in line:
            at = line.find("@")
            if at < 0:
                continue
            after = line[at + 1:]
            ghz_pos = after.find("GHz")
            mhz_pos = after.find("MHz")
            if ghz_pos >= 0:
                ghz = _scan_float(after[:ghz_pos])
                if ghz is not None:
                    return 1e-9 / ghz
            elif mhz_pos >= 0:
                mhz = _scan_float(after[:mhz_pos])
                if mhz is not None:
                    return 1e-6 / mhz
        elif (match := _CPU_MHZ.match(line)) is not None:
            mhz = _scan_float(line[match.end():])
            if mhz is not None:
                return 1e-6 / mhz
    return _DEFAULT_SECONDS_PER_CYCLE


def current_ticks() -> int:
    """Return the current clock value in ticks; zero is arbitrary."""
    return time.perf_counter_ns()


def seconds_per_tick() -> float:
    """Return the conversion from ticks to seconds."""
    return 1e-9


def current_seconds() -> float:
    """Return the current clock value in seconds; zero is arbitrary."""
    return current_ticks() * seconds_per_tick()


def ticks_per_second() -> float:
    """Return the conversion from seconds to ticks."""
    return 1.0 / seconds_per_tick()


def ms_per_tick() -> float:
    """Return the conversion from ticks to milliseconds."""
    return seconds_per_tick() * 1000.0


def tick_units() -> str:
    """Return the name of the tick unit."""
    return "ns"