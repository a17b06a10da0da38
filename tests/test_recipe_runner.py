"""
Recipe runner, CI gate and canonicalization tests.

Tests:
1-4.   Input normalization and recipe validation
5-9.   run_recipe (no expectations, self-match, drift, parse errors, issues)
10.    run_recipes ordering
11-15. CI gate
16-18. Canonical inputs, legacy roles, run formatting
"""

from datetime import datetime, timezone

import pytest

from conveyor_core.canonical import hash_canonical
from conveyor_core.errors import RecipeValidationError
from conveyor_core.recipes import (
    CIBlockingConfig, ExpectedIssue, FieldComparison, Recipe, RecipeRun, RecipeStatus, RecipeTier,
    RecipeType, TolerancePolicy, ToleranceSpec, canonicalize_recipe_inputs, check_ci_blocking,
    derive_role_from_legacy, filter_recipes_for_ci, format_run_result, get_ci_exit_code,
    normalize_inputs, run_recipe, run_recipes, should_block_ci, validate_recipe,
)
from conveyor_core.recipes.types import ComparisonReason, FieldType, RecipeRole

from conftest import BASELINE


def _recipe(**kwargs):
    fields = dict(id="r1", name="Baseline sliderbed", inputs=dict(BASELINE))
    fields.update(kwargs)
    return Recipe(**fields)


def _run(passed, **kwargs):
    return RecipeRun(
        recipe_id="r1", passed=passed, run_at=datetime.now(timezone.utc), inputs_hash="0" * 64, **kwargs
    )


GOLDEN_SMOKE = dict(
    slug="baseline", recipe_type=RecipeType.GOLDEN, recipe_tier=RecipeTier.SMOKE,
    recipe_status=RecipeStatus.LOCKED,
)


# ============================================================
# Normalization / validation
# ============================================================

def test_normalize_inputs_resolves_aliases():
    raw = {k: v for k, v in BASELINE.items() if k != "belt_width_in"}
    raw["conveyor_width_in"] = 18.0
    normalized = normalize_inputs(raw)
    assert normalized["belt_width_in"] == 18.0
    assert "conveyor_width_in" not in normalized
    assert "conveyor_width_in" in raw               # caller's dict untouched


def test_valid_recipe_passes_validation():
    recipe = _recipe(inputs_hash=hash_canonical(normalize_inputs(BASELINE)))
    assert validate_recipe(recipe) is None


def test_validation_lists_every_problem():
    recipe = _recipe(
        name=" ", inputs_hash="deadbeef", recipe_status=RecipeStatus.LOCKED,
        tolerances={"gear_ratio": ToleranceSpec(rel=-0.1)},
    )
    with pytest.raises(RecipeValidationError) as exc:
        validate_recipe(recipe)
    assert exc.value.problems == [
        "name is required",
        "inputs_hash does not match inputs",
        "locked recipe has no expected outputs",
        "locked recipe has no locked_at",
        "negative tolerance for gear_ratio",
    ]


def test_explicit_policy_needs_numeric_tolerances():
    recipe = _recipe(
        inputs={}, tolerance_policy=TolerancePolicy.EXPLICIT,
        expected_outputs={"gear_ratio": 30.0, "drive_wall_validation_status": "PASS"},
    )
    with pytest.raises(RecipeValidationError) as exc:
        validate_recipe(recipe)
    assert exc.value.problems == [
        "inputs must not be empty",
        "explicit policy but no tolerance for numeric field gear_ratio",
    ]


# ============================================================
# run_recipe
# ============================================================

def test_run_without_expectations(snapshot):
    run = run_recipe(_recipe(), snapshot)
    assert run.passed is None
    assert run.error is None
    assert run.inputs_hash == hash_canonical(normalize_inputs(BASELINE))
    assert run.outputs_hash == hash_canonical(run.actual_outputs)
    assert run.actual_outputs["belt_speed_fpm"] == 60.0
    assert run.catalog_version == "2026.01-seed"


def test_run_matches_its_own_outputs(snapshot):
    first = run_recipe(_recipe(), snapshot)
    second = run_recipe(_recipe(expected_outputs=first.actual_outputs), snapshot)
    assert second.passed is True
    assert all(c.passed for c in second.field_results)
    assert second.outputs_hash == first.outputs_hash


def test_run_detects_drift(snapshot):
    actual = run_recipe(_recipe(), snapshot).actual_outputs
    drifted = dict(actual, total_belt_pull_lb=actual["total_belt_pull_lb"] * 1.1)
    run = run_recipe(_recipe(expected_outputs=drifted), snapshot)
    assert run.passed is False
    failed = [c for c in run.field_results if not c.passed]
    assert [c.field for c in failed] == ["total_belt_pull_lb"]
    assert failed[0].reason == ComparisonReason.EXCEEDED_ABS     # _lb default is abs 0.1
    assert run.max_drift_field == "total_belt_pull_lb"
    assert run.max_drift_rel == pytest.approx(0.1 / 1.1)


def test_unparseable_inputs_record_an_error(snapshot):
    run = run_recipe(_recipe(inputs={**BASELINE, "not_a_field": 1}), snapshot)
    assert run.passed is False
    assert run.error
    assert run.actual_outputs == {}


def test_expected_issues_checked(snapshot):
    inputs = {**BASELINE, "conveyor_length_cc_in": 240.0}
    outputs = run_recipe(_recipe(inputs=inputs), snapshot).actual_outputs
    ok = run_recipe(_recipe(
        inputs=inputs, expected_outputs=outputs,
        expected_issues=[ExpectedIssue(code="AR_LONG_CONVEYOR", severity="warning")],
    ), snapshot)
    assert ok.passed is True
    assert ok.issue_result.matched == ["AR_LONG_CONVEYOR"]

    wrong = run_recipe(_recipe(
        inputs=inputs, expected_outputs=outputs,
        expected_issues=[ExpectedIssue(code="AR_INCLINE_20_35", severity="warning")],
    ), snapshot)
    assert wrong.passed is False
    assert [i.code for i in wrong.issue_result.missing] == ["AR_INCLINE_20_35"]


def test_run_recipes_keeps_input_order(snapshot):
    recipes = [
        _recipe(id="long", inputs={**BASELINE, "conveyor_length_cc_in": 240.0}),
        _recipe(id="short"),
        _recipe(id="broken", inputs={**BASELINE, "not_a_field": 1}),
    ]
    runs = run_recipes(recipes, snapshot, max_workers=2)
    assert [r.recipe_id for r in runs] == ["long", "short", "broken"]
    assert runs[2].error
    assert run_recipes([], snapshot) == []


# ============================================================
# CI gate
# ============================================================

def test_locked_golden_smoke_failure_blocks():
    recipe = _recipe(**GOLDEN_SMOKE)
    block, reason = should_block_ci(recipe, _run(False, max_drift_field="gear_ratio", max_drift_rel=0.05))
    assert block
    assert reason == "smoke_tier_failed: gear_ratio drifted 5.00%"
    assert should_block_ci(recipe, _run(False, error="bad input")) == (True, "smoke_tier_failed: bad input")
    assert should_block_ci(recipe, _run(True)) == (False, "passed")


def test_reference_and_unlocked_never_block():
    reference = _recipe(recipe_tier=RecipeTier.SMOKE, recipe_status=RecipeStatus.LOCKED)
    assert should_block_ci(reference, _run(False)) == (False, "reference_recipe")
    draft = _recipe(**{**GOLDEN_SMOKE, "recipe_status": RecipeStatus.ACTIVE})
    assert should_block_ci(draft, _run(False)) == (False, "not_locked")


def test_tier_and_slug_lists():
    regression = _recipe(**{**GOLDEN_SMOKE, "recipe_tier": RecipeTier.REGRESSION})
    assert should_block_ci(regression, _run(False)) == (False, "tier_regression_non_blocking")

    config = CIBlockingConfig(always_block=["baseline"])
    assert should_block_ci(regression, _run(False), config) == (True, "always_block_recipe_failed: baseline")
    assert should_block_ci(regression, _run(True), config) == (False, "always_block_passed")

    never = CIBlockingConfig(never_block=["baseline"])
    assert should_block_ci(_recipe(**GOLDEN_SMOKE), _run(False), never) == (False, "in_never_block_list")


def test_ci_summary_and_exit_code():
    blocked = [(_recipe(**GOLDEN_SMOKE), _run(False, error="bad input")), (_recipe(), _run(False))]
    report = check_ci_blocking(blocked)
    assert report["should_block"]
    assert len(report["blockers"]) == 1
    assert report["summary"] == "CI BLOCKED: 1 recipe(s) failed\n  - Baseline sliderbed: smoke_tier_failed: bad input"
    assert get_ci_exit_code(blocked) == 1

    clean = [(_recipe(**GOLDEN_SMOKE), _run(True))]
    assert check_ci_blocking(clean)["summary"] == "CI OK: 1 recipe(s) checked, all passed"
    assert get_ci_exit_code(clean) == 0


def test_filter_recipes_for_ci():
    smoke = _recipe(id="smoke", **GOLDEN_SMOKE)
    edge = _recipe(id="edge", **{**GOLDEN_SMOKE, "recipe_tier": RecipeTier.EDGE})
    reference = _recipe(id="ref", recipe_tier=RecipeTier.SMOKE, recipe_status=RecipeStatus.LOCKED)
    recipes = [smoke, edge, reference]
    assert [r.id for r in filter_recipes_for_ci(recipes)] == ["smoke"]
    assert [r.id for r in filter_recipes_for_ci(recipes, [RecipeTier.SMOKE, RecipeTier.EDGE])] == ["smoke", "edge"]


# ============================================================
# Canonical inputs / roles / formatting
# ============================================================

def test_canonicalize_recipe_inputs():
    raw = {
        "send_to_estimating": True, "drive_rpm": 50.0, "speed_mode": "belt_speed",
        "belt_min_pulley_dia_no_vguide_in": 3.0, "notes": None, "belt_width_in": 18.0,
    }
    inputs, removed = canonicalize_recipe_inputs(raw)
    assert inputs == {"speed_mode": "belt_speed", "belt_width_in": 18.0}
    assert removed == [
        ("send_to_estimating", "deprecated"),
        ("drive_rpm", "aliased to drive_rpm_input"),
        ("belt_min_pulley_dia_no_vguide_in", "derived from catalog"),
        ("drive_rpm_input", "inactive in speed_mode=belt_speed mode"),
        ("notes", "null"),
    ]
    assert "send_to_estimating" in raw

    kept, _ = canonicalize_recipe_inputs({"speed_mode": "drive_rpm", "drive_rpm": 50.0})
    assert kept == {"speed_mode": "drive_rpm", "drive_rpm_input": 50.0}


def test_derive_role_from_legacy():
    assert derive_role_from_legacy("golden", "draft") == RecipeRole.GOLDEN
    assert derive_role_from_legacy("reference", "deprecated") == RecipeRole.DEPRECATED
    assert derive_role_from_legacy("reference", "active") == RecipeRole.REGRESSION
    assert derive_role_from_legacy(RecipeType.REFERENCE, RecipeStatus.DRAFT) == RecipeRole.REFERENCE


def test_format_run_result():
    recipe = _recipe()
    assert format_run_result(_run(None, duration_ms=3), recipe) == (
        "SKIP Baseline sliderbed (regression)\n  Duration: 3ms"
    )
    failure = FieldComparison(
        field="gear_ratio", field_type=FieldType.NUMERIC, expected=30.0, actual=33.0, passed=False,
        delta=3.0, delta_rel=0.1, reason=ComparisonReason.EXCEEDED_REL,
    )
    text = format_run_result(_run(False, duration_ms=12, field_results=[failure]), recipe)
    assert text.splitlines() == [
        "FAIL Baseline sliderbed (regression)",
        "  - gear_ratio: expected 30.0, got 33.0 (10.00%)",
        "    reason: exceeded_rel",
        "  Duration: 12ms",
    ]
