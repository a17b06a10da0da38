"""
Recipe output comparator tests.

Tests:
1-7.  Numeric tolerances (defaults, abs/rel combine, zero expected, rounding, ties)
8-10. Missing / null / type handling
11-13. Whole-output comparison, strict mode, drift tracking
14.   Issue diff
"""

import math

import pytest

from conveyor_core.canonical import MISSING
from conveyor_core.recipes.compare import (
    compare_field, compare_issues, compare_outputs, default_tolerances_for, get_default_tolerance,
    get_field_type,
)
from conveyor_core.recipes.types import ComparisonReason, ExpectedIssue, FieldType, ToleranceSpec
from conveyor_core.rules import make_issue


# ============================================================
# Numeric
# ============================================================

def test_default_tolerance_by_suffix():
    assert get_default_tolerance("drive_pulley_diameter_in") == ToleranceSpec(abs=0.001)
    assert get_default_tolerance("drive_shaft_rpm") == ToleranceSpec(rel=0.001)
    assert get_default_tolerance("gear_ratio") == ToleranceSpec(rel=0.001)
    assert get_default_tolerance("parts_on_belt") == ToleranceSpec(rel=0.0001)   # fallback
    assert set(default_tolerances_for({"a_in": 1.0, "b": "x", "c": True})) == {"a_in"}


def test_abs_tolerance():
    assert compare_field("width_in", 1.0, 1.0005).passed
    result = compare_field("width_in", 1.0, 1.01)
    assert not result.passed
    assert result.reason == ComparisonReason.EXCEEDED_ABS
    assert result.delta == pytest.approx(0.01)


def test_either_bound_passes_by_default():
    """Inside rel but outside abs: passes with "any", fails with "all"."""
    tolerance = ToleranceSpec(abs=0.01, rel=0.001)
    assert compare_field("pull", 100.0, 100.05, tolerance, combine="any").passed
    strict = compare_field("pull", 100.0, 100.05, tolerance, combine="all")
    assert not strict.passed
    assert strict.reason == ComparisonReason.EXCEEDED_ABS


def test_both_bounds_exceeded():
    result = compare_field("pull", 100.0, 101.0, ToleranceSpec(abs=0.01, rel=0.001), combine="any")
    assert not result.passed
    assert result.reason == ComparisonReason.EXCEEDED_ABS_AND_REL


def test_zero_expected_relative_delta():
    result = compare_field("count", 0, 0.5, ToleranceSpec(rel=0.1))
    assert math.isinf(result.delta_rel)
    assert result.reason == ComparisonReason.EXCEEDED_REL
    assert compare_field("count", 0, 0, ToleranceSpec(rel=0.1)).delta_rel == 0.0


def test_round_before_compare():
    assert compare_field("x", 1.234, 1.2341, ToleranceSpec(abs=0.0, round=2)).passed
    assert not compare_field("x", 1.234, 1.2441, ToleranceSpec(abs=0.0, round=2)).passed


def test_round_ties_go_up():
    """0.125 rounds to 0.13 and 2.5 to 3, matching the browser-side comparator."""
    tie = compare_field("x", 0.125, 0.13, ToleranceSpec(abs=0.0, round=2))
    assert tie.passed
    assert tie.delta == 0.0
    assert compare_field("x", 2.5, 3.0, ToleranceSpec(abs=0.0, round=0)).passed
    assert compare_field("x", -2.5, -2.0, ToleranceSpec(abs=0.0, round=0)).passed


# ============================================================
# Missing / null / types
# ============================================================

def test_missing_and_null_are_different():
    assert compare_field("x", MISSING, MISSING).passed
    assert compare_field("x", None, None).passed
    mismatch = compare_field("x", MISSING, None)
    assert not mismatch.passed
    assert mismatch.reason == ComparisonReason.VALUE_MISMATCH
    assert compare_field("x", None, 5).reason == ComparisonReason.MISSING_EXPECTED
    actual_missing = compare_field("x", 5, MISSING)
    assert actual_missing.reason == ComparisonReason.MISSING_ACTUAL
    assert actual_missing.actual is None


def test_type_mismatch():
    assert compare_field("x", 1, "1").reason == ComparisonReason.TYPE_MISMATCH
    assert compare_field("x", True, 1).reason == ComparisonReason.TYPE_MISMATCH   # bool is not numeric
    assert get_field_type(True) == FieldType.BOOLEAN


def test_exact_equality_for_non_numeric():
    assert compare_field("x", [1, 2], [1, 2]).passed
    assert not compare_field("x", [1, 2], [2, 1]).passed
    assert compare_field("x", {"a": 1}, {"a": 2}).reason == ComparisonReason.VALUE_MISMATCH
    assert compare_field("x", "PASS", "PASS").passed


# ============================================================
# Outputs
# ============================================================

def test_union_of_fields_in_expected_order():
    result = compare_outputs({"a_in": 1.0, "b": "x"}, {"b": "x", "c": 2.0})
    assert [c.field for c in result.comparisons] == ["a_in", "b", "c"]
    reasons = [c.reason for c in result.comparisons]
    assert reasons == [ComparisonReason.MISSING_ACTUAL, None, ComparisonReason.MISSING_EXPECTED]
    assert not result.passed


def test_strict_mode_needs_tolerances():
    result = compare_outputs({"a_in": 1.0, "b": "x"}, {"a_in": 1.0, "b": "x"}, strict=True)
    assert not result.passed
    assert result.comparisons[0].reason == ComparisonReason.MISSING_TOLERANCE_IN_STRICT_MODE
    assert result.comparisons[1].passed
    ok = compare_outputs({"a_in": 1.0}, {"a_in": 1.0}, {"a_in": ToleranceSpec(abs=0.001)}, strict=True)
    assert ok.passed


def test_max_drift_tracked():
    result = compare_outputs({"a_in": 1.0, "b_lb": 10.0}, {"a_in": 1.0005, "b_lb": 10.05})
    assert result.passed
    assert result.max_drift_field == "b_lb"
    assert result.max_drift_rel == pytest.approx(0.005)


# ============================================================
# Issues
# ============================================================

def test_issue_diff():
    """Unexpected errors fail; unexpected warnings do not; optional codes never go missing."""
    expected = [
        ExpectedIssue(code="AR_LONG_CONVEYOR", severity="warning"),
        ExpectedIssue(code="AR_CLIPPER_LACING", severity="warning", required=False),
    ]
    ok = compare_issues(expected, [make_issue("ar_long_conveyor"), make_issue("ar_incline_20_35")])
    assert ok.passed
    assert ok.matched == ["AR_LONG_CONVEYOR"]

    bad = compare_issues(expected, [make_issue("vi_belt_width_zero")])
    assert not bad.passed
    assert [i.code for i in bad.missing] == ["AR_LONG_CONVEYOR"]
    assert [i.code for i in bad.unexpected] == ["VI_BELT_WIDTH_ZERO"]
