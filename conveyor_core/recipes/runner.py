"""
Recipe runner: replays the evaluation pipeline against a recipe's stored
inputs and compares the fresh outputs to its expected outputs.

A recipe is only ever read. Locked recipes run the same way as any other;
their expectations are compared against, never rewritten.
"""

import copy
import logging
import os
import time
from concurrent.futures import ProcessPoolExecutor
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from ..canonical import hash_canonical, strip_missing
from ..catalog.snapshot import CatalogSnapshot, load_reference_catalog
from ..config import settings
from ..errors import RecipeValidationError, StructuralInputError
from ..rules.evaluator import evaluate
from ..schemas import EngineParameters
from .compare import compare_issues, compare_outputs, default_tolerances_for
from .types import Recipe, RecipeRun, RecipeStatus, RunContext, ToleranceSpec, TolerancePolicy

logger = logging.getLogger(__name__)

# Renamed inputs: old key -> current key
INPUT_ALIASES = {
    "conveyor_width_in": "belt_width_in",
}


def normalize_inputs(inputs: Dict[str, Any]) -> Dict[str, Any]:
    """Deep copy with aliases resolved and MISSING values stripped."""
    normalized = copy.deepcopy(dict(inputs))
    for old, new in INPUT_ALIASES.items():
        if old in normalized:
            value = normalized.pop(old)
            normalized.setdefault(new, value)
    return strip_missing(normalized)


def effective_tolerances(recipe: Recipe, outputs: Dict[str, Any]) -> Dict[str, ToleranceSpec]:
    explicit = dict(recipe.tolerances or {})
    if recipe.tolerance_policy == TolerancePolicy.EXPLICIT:
        return explicit
    merged = default_tolerances_for(outputs)
    merged.update(explicit)
    return merged


def validate_recipe(recipe: Recipe) -> None:
    """Raises RecipeValidationError listing every problem found."""
    problems = []
    if not recipe.id:
        problems.append("id is required")
    if not recipe.name or not recipe.name.strip():
        problems.append("name is required")
    if not recipe.inputs:
        problems.append("inputs must not be empty")
    elif recipe.inputs_hash and recipe.inputs_hash != hash_canonical(normalize_inputs(recipe.inputs)):
        problems.append("inputs_hash does not match inputs")
    if recipe.recipe_status == RecipeStatus.LOCKED:
        if recipe.expected_outputs is None:
            problems.append("locked recipe has no expected outputs")
        if recipe.locked_at is None:
            problems.append("locked recipe has no locked_at")
    if recipe.tolerance_policy == TolerancePolicy.EXPLICIT and recipe.expected_outputs:
        tolerances = recipe.tolerances or {}
        for field, value in recipe.expected_outputs.items():
            if isinstance(value, (int, float)) and not isinstance(value, bool) and field not in tolerances:
                problems.append(f"explicit policy but no tolerance for numeric field {field}")
    for field, spec in (recipe.tolerances or {}).items():
        if (spec.abs is not None and spec.abs < 0) or (spec.rel is not None and spec.rel < 0):
            problems.append(f"negative tolerance for {field}")
    if problems:
        raise RecipeValidationError(recipe.id, problems)


def _elapsed_ms(start: float) -> int:
    return int((time.perf_counter() - start) * 1000)


def run_recipe(
    recipe: Recipe,
    snapshot: Optional[CatalogSnapshot] = None,
    params: Optional[EngineParameters] = None,
    run_context: RunContext = RunContext.MANUAL,
) -> RecipeRun:
    start = time.perf_counter()
    run_at = datetime.now(timezone.utc)
    inputs = normalize_inputs(recipe.inputs)
    inputs_hash = hash_canonical(inputs)
    if recipe.inputs_hash and recipe.inputs_hash != inputs_hash:
        logger.warning("Recipe %s inputs hash differs from stored hash", recipe.id)

    try:
        result = evaluate(inputs, snapshot, params)
    except StructuralInputError as e:
        logger.warning("Recipe %s inputs could not be parsed: %s", recipe.id, e)
        return RecipeRun(
            recipe_id=recipe.id,
            passed=False,
            run_context=run_context,
            run_at=run_at,
            duration_ms=_elapsed_ms(start),
            inputs_hash=inputs_hash,
            error=f"{e}: {e.errors}",
        )

    outputs = result.outputs
    passed = None
    comparison = None
    issue_diff = None
    if recipe.expected_outputs is not None:
        comparison = compare_outputs(
            recipe.expected_outputs,
            outputs,
            effective_tolerances(recipe, outputs),
            strict=recipe.tolerance_policy == TolerancePolicy.EXPLICIT,
        )
        passed = comparison.passed
        if recipe.expected_issues:
            issue_diff = compare_issues(recipe.expected_issues, result.issues)
            passed = passed and issue_diff.passed

    run = RecipeRun(
        recipe_id=recipe.id,
        passed=passed,
        max_drift_rel=comparison.max_drift_rel if comparison else None,
        max_drift_field=comparison.max_drift_field if comparison else None,
        run_context=run_context,
        run_at=run_at,
        duration_ms=_elapsed_ms(start),
        inputs_hash=inputs_hash,
        outputs_hash=hash_canonical(outputs),
        actual_outputs=outputs,
        actual_issues=result.issues,
        field_results=comparison.comparisons if comparison else [],
        issue_result=issue_diff,
        catalog_version=result.catalog_version,
    )
    logger.info("Recipe %s: passed=%s in %d ms", recipe.id, passed, run.duration_ms)
    return run


def _run_one(recipe: Recipe, snapshot: CatalogSnapshot, params: EngineParameters, run_context: RunContext) -> RecipeRun:
    """Module-level so it pickles into worker processes."""
    return run_recipe(recipe, snapshot, params, run_context)


def run_recipes(
    recipes: List[Recipe],
    snapshot: Optional[CatalogSnapshot] = None,
    params: Optional[EngineParameters] = None,
    run_context: RunContext = RunContext.MANUAL,
    max_workers: Optional[int] = None,
) -> List[RecipeRun]:
    """
    Run recipes in a bounded process pool. Results come back in input order.
    Recipes share nothing, so any worker may take any recipe.
    """
    if not recipes:
        return []
    snapshot = snapshot or load_reference_catalog()
    params = params or EngineParameters()
    workers = max_workers or settings.RECIPE_MAX_WORKERS or os.cpu_count() or 1
    workers = min(workers, len(recipes))
    logger.info("Running %d recipes on %d workers", len(recipes), workers)

    with ProcessPoolExecutor(max_workers=workers) as executor:
        futures = [executor.submit(_run_one, recipe, snapshot, params, run_context) for recipe in recipes]
        return [future.result() for future in futures]
