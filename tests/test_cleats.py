"""
Cleat tests.

Tests:
1-7.   Minimum pulley diameter lookup (base, centers factor, round up, failures)
8-9.   Catalog pickers
10-15. Layout spacing policies
16-18. Weights and the layout calculator
"""

import pytest

from conveyor_core.calculators.base import CalcContext, round_up_to_increment
from conveyor_core.calculators.cleat_layout import (
    CleatLayoutCalculator, calculate_cleat_layout, has_small_odd_gap,
)
from conveyor_core.calculators.cleat_min_pulley import (
    CleatsMinPulleyCalculator, centers_bucket, compute_cleats_min_pulley, get_patterns_for_profile_size,
    get_sizes_for_profile, get_unique_profiles,
)
from conveyor_core.models import (
    CleatPattern, CleatRemainderMode, CleatSpacingMode, CleatStyle, OddGapLocation, OddGapSize,
)
from conveyor_core.schemas import CleatCatalogEntry, EngineParameters
from conveyor_core.weights import cleat_weight_each, cleat_weight_per_foot, cleat_width

from conftest import make_config

PVC = "PVC_HOT_WELDED"


def _entry(size, pattern, solid, drill):
    return CleatCatalogEntry(
        material_family=PVC, cleat_profile="T-Cleat", cleat_size=size, cleat_pattern=pattern,
        min_pulley_dia_12in_solid_in=solid, min_pulley_dia_12in_drill_siped_in=drill,
    )


# ============================================================
# Minimum pulley diameter
# ============================================================

def test_four_inch_centers_factor_rounds_up(snapshot):
    """6" base at 12" centers, 4" spacing: 6 x 1.35 = 8.1, rounded up to 8.5"."""
    entries = [_entry('1"', CleatPattern.STRAIGHT_CROSS, 6.0, 5.0)]
    result = compute_cleats_min_pulley(
        entries, snapshot.active_center_factors(), PVC, "T-Cleat", '1"',
        CleatPattern.STRAIGHT_CROSS, CleatStyle.SOLID, 4.0,
    )
    assert result.success
    assert result.base_min_dia_12_in == 6.0
    assert result.centers_factor == 1.35
    assert result.adjusted_min_dia_in == pytest.approx(8.1)
    assert result.rounded_min_dia_in == 8.5
    assert not result.drill_siped_caution


def test_drill_siped_without_tabulated_value_fails(snapshot):
    """No drill & siped value: unsupported, never the solid value."""
    entries = [_entry('1.5"', CleatPattern.CURVED_90, 5.5, None)]
    result = compute_cleats_min_pulley(
        entries, snapshot.active_center_factors(), PVC, "T-Cleat", '1.5"',
        CleatPattern.CURVED_90, CleatStyle.DRILL_SIPED_1IN, 12.0,
    )
    assert not result.success
    assert "not supported" in result.error
    assert result.rounded_min_dia_in is None


def test_bundled_catalog_lookups(snapshot):
    entries = snapshot.active_cleat_entries()
    factors = snapshot.active_center_factors()

    solid = compute_cleats_min_pulley(entries, factors, PVC, "T-Cleat", '1"', "STRAIGHT_CROSS", CleatStyle.SOLID, 12.0)
    assert solid.rounded_min_dia_in == 4.0     # factor 1.0, already on the increment
    assert "PVC Hot Welded Guide" in solid.rule_source

    drill = compute_cleats_min_pulley(
        entries, factors, PVC, "T-Cleat", '1"', CleatPattern.STRAIGHT_CROSS, CleatStyle.DRILL_SIPED_1IN, 6.0,
    )
    assert drill.base_min_dia_12_in == 3.0
    assert drill.rounded_min_dia_in == 4.0     # 3.0 x 1.25 = 3.75 -> 4.0
    assert drill.drill_siped_caution

    missing = compute_cleats_min_pulley(
        entries, factors, PVC, "T-Cleat", '2"', CleatPattern.CURVED_120, CleatStyle.DRILL_SIPED_1IN, 12.0,
    )
    assert not missing.success


def test_unknown_combination_and_missing_factor(snapshot):
    entries = snapshot.active_cleat_entries()
    unknown = compute_cleats_min_pulley(
        entries, snapshot.active_center_factors(), PVC, "Chevron", '1"',
        CleatPattern.STRAIGHT_CROSS, CleatStyle.SOLID, 12.0,
    )
    assert not unknown.success
    assert "not found" in unknown.error

    no_factor = compute_cleats_min_pulley(
        entries, [], PVC, "T-Cleat", '1"', CleatPattern.STRAIGHT_CROSS, CleatStyle.SOLID, 12.0,
    )
    assert not no_factor.success
    assert no_factor.base_min_dia_12_in == 4.0
    assert "Centers factor not found" in no_factor.error


def test_centers_buckets():
    assert centers_bucket(2.0) == 4
    assert centers_bucket(4.0) == 4
    assert centers_bucket(4.01) == 6
    assert centers_bucket(6.0) == 6
    assert centers_bucket(8.0) == 8
    assert centers_bucket(8.5) == 12
    assert centers_bucket(24.0) == 12


def test_round_up_never_below_value():
    """Every result is a multiple of the increment at or above the value."""
    assert round_up_to_increment(8.1, 0.5) == 8.5
    assert round_up_to_increment(8.0, 0.5) == 8.0
    assert round_up_to_increment(5.4) == 5.5   # default increment 0.5
    for hundredths in range(1, 1000):
        value = hundredths / 100
        rounded = round_up_to_increment(value, 0.25)
        assert rounded >= value
        assert rounded - value < 0.25
    with pytest.raises(ValueError):
        round_up_to_increment(1.0, 0.0)


def test_min_pulley_calculator_requires_complete_selection(snapshot):
    ctx = CalcContext(snapshot=snapshot, params=EngineParameters())
    calc = CleatsMinPulleyCalculator()
    assert calc.calculate(make_config(), ctx) is None   # cleats off
    partial = make_config(cleats_enabled=True, cleat_profile="T-Cleat", cleat_spacing_in=12.0)
    assert not calc.calculate(partial, ctx).success
    full = make_config(
        cleats_enabled=True, cleat_profile="T-Cleat", cleat_size='1"',
        cleat_pattern=CleatPattern.STRAIGHT_CROSS, cleat_spacing_in=4.0,
    )
    assert calc.calculate(full, ctx).rounded_min_dia_in == 5.5   # 4.0 x 1.35 = 5.4


# ============================================================
# Catalog pickers
# ============================================================

def test_profiles_in_sort_order(snapshot):
    entries = snapshot.active_cleat_entries()
    assert get_unique_profiles(entries) == ["T-Cleat", "Straight", "Scalloped"]
    assert get_sizes_for_profile(entries, "T-Cleat") == ['0.5"', '1"', '1.5"', '2"', '3"']


def test_patterns_for_profile_size(snapshot):
    entries = snapshot.active_cleat_entries()
    assert get_patterns_for_profile_size(entries, "T-Cleat", '3"') == [CleatPattern.STRAIGHT_CROSS]
    assert len(get_patterns_for_profile_size(entries, "T-Cleat", '1"')) == 4


# ============================================================
# Layout
# ============================================================

def test_divide_evenly():
    layout = calculate_cleat_layout(96.0, CleatSpacingMode.DIVIDE_EVENLY, cleat_count=8)
    assert layout.success
    assert layout.pitch_in == 12.0
    assert layout.odd_gap_in is None
    assert not calculate_cleat_layout(96.0, CleatSpacingMode.DIVIDE_EVENLY, cleat_count=0).success


def test_nominal_with_no_remainder():
    layout = calculate_cleat_layout(96.0, CleatSpacingMode.USE_NOMINAL, nominal_spacing_in=12.0)
    assert layout.cleat_count == 8
    assert layout.pitch_in == 12.0
    assert layout.odd_gap_in is None


def test_nominal_spread_evenly():
    layout = calculate_cleat_layout(
        96.0, CleatSpacingMode.USE_NOMINAL, nominal_spacing_in=10.0,
        remainder_mode=CleatRemainderMode.SPREAD_EVENLY,
    )
    assert layout.cleat_count == 9
    assert layout.pitch_in == pytest.approx(96.0 / 9)


def test_nominal_one_odd_gap():
    """96" at 10" nominal leaves 6": smaller adds a cleat, larger merges into one gap."""
    smaller = calculate_cleat_layout(
        96.0, CleatSpacingMode.USE_NOMINAL, nominal_spacing_in=10.0,
        remainder_mode=CleatRemainderMode.ONE_ODD_GAP, odd_gap_size=OddGapSize.SMALLER,
        odd_gap_location=OddGapLocation.HEAD,
    )
    assert smaller.cleat_count == 10
    assert smaller.odd_gap_in == pytest.approx(6.0)
    assert smaller.odd_gap_location == OddGapLocation.HEAD

    larger = calculate_cleat_layout(
        96.0, CleatSpacingMode.USE_NOMINAL, nominal_spacing_in=10.0,
        remainder_mode=CleatRemainderMode.ONE_ODD_GAP, odd_gap_size=OddGapSize.LARGER,
    )
    assert larger.cleat_count == 9
    assert larger.odd_gap_in == pytest.approx(16.0)


def test_small_odd_gap_and_bad_inputs():
    layout = calculate_cleat_layout(
        96.0, CleatSpacingMode.USE_NOMINAL, nominal_spacing_in=9.5,
        remainder_mode=CleatRemainderMode.ONE_ODD_GAP,
    )
    assert layout.odd_gap_in == pytest.approx(1.0)
    assert has_small_odd_gap(layout)
    assert not has_small_odd_gap(None)
    assert not calculate_cleat_layout(96.0, CleatSpacingMode.USE_NOMINAL, nominal_spacing_in=0).success
    assert not calculate_cleat_layout(0.0, CleatSpacingMode.USE_NOMINAL, nominal_spacing_in=12.0).success


def test_length_shorter_than_nominal_pitch():
    """10" of belt at 12" nominal: one cleat, pitch is the whole length."""
    for mode in (CleatRemainderMode.SPREAD_EVENLY, CleatRemainderMode.ONE_ODD_GAP):
        layout = calculate_cleat_layout(
            10.0, CleatSpacingMode.USE_NOMINAL, nominal_spacing_in=12.0, remainder_mode=mode,
        )
        assert layout.success
        assert layout.cleat_count == 1
        assert layout.pitch_in == 10.0
        assert layout.odd_gap_in is None
    exact = calculate_cleat_layout(12.0, CleatSpacingMode.USE_NOMINAL, nominal_spacing_in=12.0)
    assert (exact.cleat_count, exact.pitch_in) == (1, 12.0)


# ============================================================
# Weights
# ============================================================

def test_cleat_weight_each():
    """0.25 x (1.5 + 3) x 42 x 0.045 = 2.12625 lb."""
    assert cleat_weight_each(3.0, 42.0) == pytest.approx(2.12625)
    assert cleat_weight_each(3.0, 42.0, "UNKNOWN") == pytest.approx(2.12625)   # PVC density fallback
    assert cleat_weight_each(3.0, 42.0, "PU") < cleat_weight_each(3.0, 42.0)


def test_cleat_weight_per_foot_and_width():
    assert cleat_weight_per_foot(2.12625, 37.8) == pytest.approx(0.675)
    assert cleat_weight_per_foot(2.0, 0.0) == 0.0
    assert cleat_width(18.0, 1.0) == 16.0
    assert cleat_width(2.0, 2.0) == 0.0


def test_layout_calculator_adds_weight(snapshot):
    config = make_config(
        cleats_enabled=True, cleat_height_in=1.0, cleat_spacing_in=12.0, cleat_edge_offset_in=1.0,
    )
    ctx = CalcContext(snapshot=snapshot, params=EngineParameters())
    layout = CleatLayoutCalculator().calculate(config, ctx)
    assert layout.cleat_count == 8
    assert layout.cleat_width_in == 16.0
    assert layout.weight_lb_each == pytest.approx(0.25 * 2.5 * 16.0 * 0.045)
    assert layout.weight_lb_per_ft == pytest.approx(layout.weight_lb_each)   # one cleat per foot
    assert layout.summary == 'Cleats: 1" high @ 12" c/c, 1" from belt edge'
    assert CleatLayoutCalculator().calculate(make_config(), ctx) is None
