"""
Recipe input canonicalization and display helpers.

canonicalize_recipe_inputs turns raw form state into the user-input blob a
recipe stores: engineering intent only, no stale UI artifacts.
"""

from typing import Any, Dict, List, Tuple

from .types import Recipe, RecipeRole, RecipeRun, RecipeStatus, RecipeType

DEPRECATED_KEYS = ("send_to_estimating",)

# Resolved from the belt catalog at evaluation time
DERIVED_CATALOG_KEYS = (
    "belt_min_pulley_dia_no_vguide_in",
    "belt_min_pulley_dia_with_vguide_in",
)

ALIASES = {
    "drive_rpm": "drive_rpm_input",
}

# mode key -> mode value -> keys inactive in that mode
MODE_GATED_KEYS = {
    "speed_mode": {
        "belt_speed": ("drive_rpm_input", "drive_rpm"),
        "drive_rpm": (),
    },
}


def canonicalize_recipe_inputs(raw: Dict[str, Any]) -> Tuple[Dict[str, Any], List[Tuple[str, str]]]:
    """Returns (user_inputs, removed_keys) where removed_keys is [(key, reason)]."""
    result = dict(raw)
    removed = []

    for key in DEPRECATED_KEYS:
        if key in result:
            del result[key]
            removed.append((key, "deprecated"))

    for old, new in ALIASES.items():
        if old in result:
            value = result.pop(old)
            result.setdefault(new, value)
            removed.append((old, f"aliased to {new}"))

    for key in DERIVED_CATALOG_KEYS:
        if key in result:
            del result[key]
            removed.append((key, "derived from catalog"))

    for mode_key, gates in MODE_GATED_KEYS.items():
        mode_value = result.get(mode_key)
        for key in gates.get(mode_value, ()) if isinstance(mode_value, str) else ():
            if key in result:
                del result[key]
                removed.append((key, f"inactive in {mode_key}={mode_value} mode"))

    for key in [k for k, v in result.items() if v is None]:
        del result[key]
        removed.append((key, "null"))

    return result, removed


def derive_role_from_legacy(recipe_type, recipe_status) -> RecipeRole:
    """Role for recipes stored before the role field existed."""
    if RecipeType(recipe_type) == RecipeType.GOLDEN:
        return RecipeRole.GOLDEN
    status = RecipeStatus(recipe_status)
    if status == RecipeStatus.DEPRECATED:
        return RecipeRole.DEPRECATED
    if status == RecipeStatus.ACTIVE:
        return RecipeRole.REGRESSION
    return RecipeRole.REFERENCE


MAX_LISTED_FAILURES = 5


def format_run_result(run: RecipeRun, recipe: Recipe) -> str:
    if run.passed is None:
        status = "SKIP"
    else:
        status = "PASS" if run.passed else "FAIL"
    lines = [f"{status} {recipe.name} ({recipe.recipe_tier.value})"]

    if run.error:
        lines.append(f"  error: {run.error}")

    if run.passed is False:
        failures = [c for c in run.field_results if not c.passed]
        for c in failures[:MAX_LISTED_FAILURES]:
            drift = f" ({c.delta_rel * 100:.2f}%)" if c.delta_rel is not None else ""
            lines.append(f"  - {c.field}: expected {c.expected}, got {c.actual}{drift}")
            if c.reason:
                lines.append(f"    reason: {c.reason.value}")
        if len(failures) > MAX_LISTED_FAILURES:
            lines.append(f"  ... and {len(failures) - MAX_LISTED_FAILURES} more failures")

    if run.issue_result and not run.issue_result.passed:
        if run.issue_result.missing:
            lines.append("  Missing issues: " + ", ".join(i.code for i in run.issue_result.missing))
        if run.issue_result.unexpected:
            lines.append("  Unexpected errors: " + ", ".join(i.code for i in run.issue_result.unexpected))

    lines.append(f"  Duration: {run.duration_ms}ms")
    return "\n".join(lines)
