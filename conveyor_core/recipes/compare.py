"""
Type-aware output comparator.

- Numeric fields: tolerance based (abs / rel / round)
- Booleans, strings, arrays and objects: exact (deep) equality
- A missing field and an explicit null are different values
- Strict mode: a numeric field with no explicit tolerance fails

When a tolerance names both abs and rel, TOLERANCE_COMBINE decides how they
combine: "any" passes a field inside either bound, "all" needs both.
"""

import math
from collections.abc import Mapping
from typing import Any, Dict, List, Optional

from ..calculators.base import round_half_up
from ..canonical import MISSING
from ..config import settings
from ..models import Severity
from ..schemas import Issue
from .types import (
    ComparisonReason, ComparisonResult, ExpectedIssue, FieldComparison, FieldType, IssueDiff,
    ToleranceSpec,
)

COMBINE_ANY = "any"
COMBINE_ALL = "all"

# Output field suffix -> default tolerance, checked in order
DEFAULT_TOLERANCES = {
    "_in": ToleranceSpec(abs=0.001),
    "_lbf": ToleranceSpec(abs=0.1),
    "_lb": ToleranceSpec(abs=0.1),
    "_rpm": ToleranceSpec(rel=0.001),
    "_pph": ToleranceSpec(rel=0.01),
    "_ratio": ToleranceSpec(rel=0.001),
    "_pct": ToleranceSpec(abs=0.1),
}

FALLBACK_TOLERANCE = ToleranceSpec(rel=0.0001)


def get_field_type(value) -> FieldType:
    if value is MISSING:
        return FieldType.MISSING
    if value is None:
        return FieldType.NULL
    if isinstance(value, bool):
        return FieldType.BOOLEAN
    if isinstance(value, (int, float)):
        return FieldType.NUMERIC
    if isinstance(value, (list, tuple)):
        return FieldType.ARRAY
    if isinstance(value, Mapping):
        return FieldType.OBJECT
    return FieldType.STRING


def get_default_tolerance(field: str) -> ToleranceSpec:
    for suffix, tolerance in DEFAULT_TOLERANCES.items():
        if field.endswith(suffix):
            return tolerance
    return FALLBACK_TOLERANCE


def default_tolerances_for(outputs: Dict[str, Any]) -> Dict[str, ToleranceSpec]:
    """Suffix defaults for every numeric field in outputs."""
    return {
        field: get_default_tolerance(field)
        for field, value in outputs.items()
        if get_field_type(value) == FieldType.NUMERIC
    }


def _deep_equal(a, b) -> bool:
    if get_field_type(a) != get_field_type(b):
        return False
    if isinstance(a, Mapping):
        return a.keys() == b.keys() and all(_deep_equal(a[k], b[k]) for k in a)
    if isinstance(a, (list, tuple)):
        return len(a) == len(b) and all(_deep_equal(x, y) for x, y in zip(a, b))
    return a == b


def _shown(value):
    return None if value is MISSING else value


def _numeric_verdict(delta: float, delta_rel: float, tolerance: ToleranceSpec, combine: str):
    exceeded = []
    if tolerance.abs is not None and delta > tolerance.abs:
        exceeded.append(ComparisonReason.EXCEEDED_ABS)
    if tolerance.rel is not None and delta_rel > tolerance.rel:
        exceeded.append(ComparisonReason.EXCEEDED_REL)

    bounds = int(tolerance.abs is not None) + int(tolerance.rel is not None)
    if combine == COMBINE_ALL:
        passed = not exceeded
    else:
        passed = bounds == 0 or len(exceeded) < bounds

    if passed:
        return True, None
    if len(exceeded) == 2:
        return False, ComparisonReason.EXCEEDED_ABS_AND_REL
    return False, exceeded[0]


def compare_field(
    field: str,
    expected,
    actual,
    tolerance: Optional[ToleranceSpec] = None,
    combine: Optional[str] = None,
) -> FieldComparison:
    """Compare one field. MISSING marks a field absent from its side."""
    expected_type = get_field_type(expected)
    actual_type = get_field_type(actual)
    shown = dict(field=field, expected=_shown(expected), actual=_shown(actual))
    empty = (FieldType.MISSING, FieldType.NULL)

    if expected_type == actual_type and expected_type in empty:
        return FieldComparison(field_type=expected_type, passed=True, **shown)

    if expected_type in empty:
        reason = ComparisonReason.VALUE_MISMATCH if actual_type in empty else ComparisonReason.MISSING_EXPECTED
        return FieldComparison(field_type=actual_type, passed=False, reason=reason, **shown)

    if actual_type in empty:
        return FieldComparison(
            field_type=expected_type, passed=False, reason=ComparisonReason.MISSING_ACTUAL, **shown,
        )

    if expected_type != actual_type:
        return FieldComparison(
            field_type=expected_type, passed=False, reason=ComparisonReason.TYPE_MISMATCH, **shown,
        )

    if expected_type != FieldType.NUMERIC:
        passed = _deep_equal(expected, actual)
        return FieldComparison(
            field_type=expected_type,
            passed=passed,
            reason=None if passed else ComparisonReason.VALUE_MISMATCH,
            **shown,
        )

    tolerance = tolerance or get_default_tolerance(field)
    exp, act = float(expected), float(actual)
    if tolerance.round is not None:
        exp, act = round_half_up(exp, tolerance.round), round_half_up(act, tolerance.round)

    delta = abs(act - exp)
    if exp != 0:
        delta_rel = delta / abs(exp)
    else:
        delta_rel = math.inf if act != 0 else 0.0

    passed, reason = _numeric_verdict(delta, delta_rel, tolerance, combine or settings.TOLERANCE_COMBINE)
    return FieldComparison(
        field_type=FieldType.NUMERIC,
        passed=passed,
        delta=delta,
        delta_rel=delta_rel,
        tolerance_used=tolerance,
        reason=reason,
        **shown,
    )


def compare_outputs(
    expected: Dict[str, Any],
    actual: Dict[str, Any],
    tolerances: Dict[str, ToleranceSpec] = None,
    strict: bool = False,
    combine: Optional[str] = None,
) -> ComparisonResult:
    """
    Compare the union of fields in expected and actual, expected's order first.
    Tracks the numeric field with the largest relative drift.
    """
    tolerances = tolerances or {}
    fields = list(expected) + [f for f in actual if f not in expected]
    comparisons = []
    max_drift_rel = None
    max_drift_field = None

    for field in fields:
        expected_value = expected.get(field, MISSING)
        actual_value = actual.get(field, MISSING)
        tolerance = tolerances.get(field)

        if strict and tolerance is None and get_field_type(expected_value) == FieldType.NUMERIC:
            comparisons.append(FieldComparison(
                field=field,
                field_type=FieldType.NUMERIC,
                expected=expected_value,
                actual=_shown(actual_value),
                passed=False,
                reason=ComparisonReason.MISSING_TOLERANCE_IN_STRICT_MODE,
            ))
            continue

        comparison = compare_field(field, expected_value, actual_value, tolerance, combine)
        comparisons.append(comparison)
        if comparison.delta_rel is not None and (max_drift_rel is None or comparison.delta_rel > max_drift_rel):
            max_drift_rel = comparison.delta_rel
            max_drift_field = field

    return ComparisonResult(
        passed=all(c.passed for c in comparisons),
        comparisons=comparisons,
        max_drift_rel=max_drift_rel,
        max_drift_field=max_drift_field,
    )


def compare_issues(expected: List[ExpectedIssue], actual: List[Issue]) -> IssueDiff:
    """
    Required expected codes must appear; any actual error whose code was not
    expected at all is unexpected. Warnings and info never fail the diff.
    """
    actual_codes = {issue.code for issue in actual}
    expected_codes = {issue.code for issue in expected}

    missing = [e for e in expected if e.required and e.code not in actual_codes]
    unexpected = [a for a in actual if a.severity == Severity.ERROR and a.code not in expected_codes]
    matched = [e.code for e in expected if e.code in actual_codes]

    return IssueDiff(
        passed=not missing and not unexpected,
        missing=missing,
        unexpected=unexpected,
        matched=matched,
    )
