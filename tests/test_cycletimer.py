import pytest

from pcbench import cycletimer


def test_parse_cpuinfo_model_name_ghz():
    text = "processor\t: 0\nmodel name\t: Example CPU @ 2.50GHz\ncpu MHz\t\t: 800.000\n"
    assert cycletimer.parse_cpuinfo(text) == pytest.approx(1e-9 / 2.5)


def test_parse_cpuinfo_model_name_mhz():
    text = "model name\t: Example CPU @ 800MHz\n"
    assert cycletimer.parse_cpuinfo(text) == pytest.approx(1e-6 / 800.0)


def test_parse_cpuinfo_cpu_mhz_line():
    text = "model name\t: Example CPU without frequency\ncpu MHz\t\t: 2400.000\n"
    assert cycletimer.parse_cpuinfo(text) == pytest.approx(1e-6 / 2400.0)


def test_parse_cpuinfo_unparsable_ghz_falls_through():
    text = "model name : Thing @ fastGHz\ncpu MHz : 1000\n"
    assert cycletimer.parse_cpuinfo(text) == pytest.approx(1e-6 / 1000.0)


def test_parse_cpuinfo_default():
    assert cycletimer.parse_cpuinfo("") == 1e-9
    assert cycletimer.parse_cpuinfo("flags : fpu vme\n") == 1e-9


def test_ticks_do_not_go_backwards():
    first = cycletimer.current_ticks()
    second = cycletimer.current_ticks()
    assert second >= first


def test_conversions_are_consistent():
    assert cycletimer.ticks_per_second() * cycletimer.seconds_per_tick() == pytest.approx(1.0)
    assert cycletimer.ms_per_tick() == pytest.approx(cycletimer.seconds_per_tick() * 1000.0)


def test_current_seconds_tracks_ticks():
    before = cycletimer.current_ticks() * cycletimer.seconds_per_tick()
    now = cycletimer.current_seconds()
    after = cycletimer.current_ticks() * cycletimer.seconds_per_tick()
    assert before <= now <= after


def test_tick_units():
    assert cycletimer.tick_units() == "ns"