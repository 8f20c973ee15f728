import math

import pytest

from pcbench.vecintrin import LogEntry, Logger, Statistics, VectorUnit


@pytest.fixture
def unit():
    return VectorUnit(4)


def test_init_ones_counts_leading_lanes(unit):
    assert unit.init_ones() == [True] * 4
    assert unit.init_ones(0) == [False] * 4
    assert unit.init_ones(2) == [True, True, False, False]


def test_mask_not_is_involution(unit):
    mask = [True, False, False, True]
    assert unit.mask_not(unit.mask_not(mask)) == mask


def test_mask_or_and(unit):
    a = [True, False, True, False]
    b = [True, True, False, False]
    assert unit.mask_or(a, b) == [True, True, True, False]
    assert unit.mask_and(a, b) == [True, False, False, False]


def test_cntbits_matches_init_ones(unit):
    for first in range(5):
        assert unit.cntbits(unit.init_ones(first)) == first


def test_vset_keeps_inactive_lanes(unit):
    dest = [1, 2, 3, 4]
    unit.vset(dest, 9, [False, True, False, True])
    assert dest == [1, 9, 3, 9]


def test_broadcast_fills_all_lanes(unit):
    assert unit.broadcast(7.5) == [7.5] * 4
    assert unit.logger.entries[-1] == LogEntry("vset", 0b1111)


def test_vmove(unit):
    dest = [0, 0, 0, 0]
    unit.vmove(dest, [5, 6, 7, 8], [True, False, True, False])
    assert dest == [5, 0, 7, 0]


def test_vload_vstore_round_trip(unit):
    src = list(range(10))
    vec = [0] * 4
    unit.vload(vec, src, 3, unit.init_ones())
    assert vec == src[3:7]
    out = [None] * 10
    unit.vstore(out, 3, vec, unit.init_ones())
    assert out[3:7] == src[3:7]
    assert out[:3] == [None] * 3


def test_vload_inactive_lanes_do_not_read_past_end(unit):
    vec = [0, 0, 0, 0]
    unit.vload(vec, [1, 2], 0, unit.init_ones(2))
    assert vec == [1, 2, 0, 0]


def test_vload_active_lane_past_end_raises(unit):
    with pytest.raises(IndexError):
        unit.vload([0] * 4, [1, 2], 0, unit.init_ones())


def test_vstore_masked_leaves_memory(unit):
    out = [0] * 4
    unit.vstore(out, 0, [1, 2, 3, 4], unit.init_ones(1))
    assert out == [1, 0, 0, 0]


def test_arithmetic_ops(unit):
    a = [6, 8, 10, 12]
    b = [2, 4, 5, 3]
    ones = unit.init_ones()
    dest = [0] * 4
    unit.vadd(dest, a, b, ones)
    assert dest == [8, 12, 15, 15]
    unit.vsub(dest, a, b, ones)
    assert dest == [4, 4, 5, 9]
    unit.vmult(dest, a, b, ones)
    assert dest == [12, 32, 50, 36]
    unit.vdiv(dest, a, b, ones)
    assert dest == [3, 2, 2, 4]


def test_integer_division_truncates_toward_zero(unit):
    dest = [0] * 4
    unit.vdiv(dest, [-7, 7, -7, 7], [2, -2, -2, 2], unit.init_ones())
    assert dest == [-3, -3, 3, 3]


def test_float_division(unit):
    dest = [0.0] * 4
    unit.vdiv(dest, [1.0, 3.0, 5.0, 7.0], [2.0, 2.0, 2.0, 2.0], unit.init_ones())
    assert dest == [0.5, 1.5, 2.5, 3.5]


def test_division_by_zero_in_active_lane(unit):
    with pytest.raises(ZeroDivisionError):
        unit.vdiv([0] * 4, [1, 1, 1, 1], [1, 0, 1, 1], unit.init_ones())


def test_vabs(unit):
    dest = [0.0] * 4
    unit.vabs(dest, [-1.5, 2.0, -0.0, -3.0], [True, True, True, False])
    assert dest[:3] == [1.5, 2.0, 0.0]
    assert dest[3] == 0.0


def test_comparisons(unit):
    a = [1, 2, 3, 4]
    b = [2, 2, 2, 2]
    ones = unit.init_ones()
    gt = [False] * 4
    lt = [False] * 4
    eq = [False] * 4
    unit.vgt(gt, a, b, ones)
    unit.vlt(lt, a, b, ones)
    unit.veq(eq, a, b, ones)
    assert gt == [False, False, True, True]
    assert lt == [True, False, False, False]
    assert eq == [False, True, False, False]
    for lane in range(4):
        assert gt[lane] + lt[lane] + eq[lane] == 1


def test_comparison_respects_mask(unit):
    result = [True, True, True, True]
    unit.vlt(result, [5, 5, 5, 5], [1, 1, 1, 1], [True, False, True, False])
    assert result == [False, True, False, True]


def test_hadd_documented_example(unit):
    dest = [0] * 4
    unit.hadd(dest, [0, 1, 2, 3])
    assert dest == [1, 1, 5, 5]


def test_interleave_documented_example():
    unit = VectorUnit(8)
    dest = [0] * 8
    unit.interleave(dest, [0, 1, 2, 3, 4, 5, 6, 7])
    assert dest == [0, 2, 4, 6, 1, 3, 5, 7]


def test_hadd_and_interleave_are_not_logged(unit):
    unit.hadd([0] * 4, [1, 2, 3, 4])
    unit.interleave([0] * 4, [1, 2, 3, 4])
    assert unit.logger.entries == []


def test_wrong_lane_count_rejected(unit):
    with pytest.raises(ValueError):
        unit.vadd([0] * 4, [1, 2, 3], [1, 2, 3, 4], unit.init_ones())


def test_invalid_width_rejected():
    with pytest.raises(ValueError):
        VectorUnit(0)


def test_logger_counts_lanes(unit):
    unit.vset([0] * 4, 1, unit.init_ones(2))
    unit.mask_not(unit.init_ones(2))
    stats = unit.logger.stats
    assert stats.total_instructions == 2
    assert stats.total_lane == 8
    assert stats.utilized_lane == 6
    assert [e.instruction for e in unit.logger.entries] == ["vset", "masknot"]


def test_user_log_counts_nothing(unit):
    unit.add_user_log("marker")
    stats = unit.logger.stats
    assert stats == Statistics(0, 0, 0)
    assert unit.logger.entries == [LogEntry("marker", 0)]


def test_utilization_without_lanes_is_nan(unit):
    unit.add_user_log("marker")
    stats = unit.logger.stats
    assert stats.total_lane == 0
    utilization = stats.utilization
    assert math.isnan(utilization)
    assert utilization != utilization


def test_format_stats_lines(unit):
    unit.vset([0] * 4, 1, unit.init_ones())
    text = unit.logger.format_stats()
    lines = text.splitlines()
    assert lines[0].startswith("****************** Printing Vector Unit Statistics")
    assert "Vector Width:              4" in lines
    assert "Total Vector Instructions: 1" in lines
    assert "Vector Utilization:        100.0%" in lines
    assert "Total Vector Lanes:        4" in lines


def test_format_log_shows_occupancy(unit):
    unit.vset([0] * 4, 1, [True, False, True, False])
    lines = unit.logger.format_log().splitlines()
    assert len(lines) == 4
    assert lines[-1] == f"{'vset':>12} | *_*_"


def test_add_log_uses_only_first_n_lanes():
    logger = Logger(width=4)
    logger.add_log("op", [True, True, True, True], 2)
    assert logger.entries[0].mask == 0b11
    assert logger.stats.utilized_lane == 2
    assert logger.stats.total_lane == 2


def test_log_entry_is_active():
    entry = LogEntry("x", 0b0101)
    assert [entry.is_active(lane) for lane in range(4)] == [True, False, True, False]