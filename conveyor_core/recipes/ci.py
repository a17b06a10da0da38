"""
CI gate for recipe runs.

- Reference recipes never block
- Only locked golden recipes can block
- Only blocking tiers (default: smoke) block, with always/never slug lists
"""

from typing import List, Optional, Sequence, Tuple

from ..config import settings
from .types import CIBlockingConfig, Recipe, RecipeRun, RecipeStatus, RecipeTier, RecipeType


def default_ci_config() -> CIBlockingConfig:
    return CIBlockingConfig(blocking_tiers=[RecipeTier(t) for t in settings.CI_BLOCKING_TIERS])


def should_block_ci(recipe: Recipe, run: RecipeRun, config: CIBlockingConfig = None) -> Tuple[bool, str]:
    """(block, reason) for one recipe run."""
    config = config or default_ci_config()

    if recipe.recipe_type == RecipeType.REFERENCE:
        return False, "reference_recipe"
    if recipe.recipe_status != RecipeStatus.LOCKED:
        return False, "not_locked"

    if recipe.slug and recipe.slug in config.never_block:
        return False, "in_never_block_list"
    if recipe.slug and recipe.slug in config.always_block:
        if run.passed is False:
            return True, f"always_block_recipe_failed: {recipe.slug}"
        return False, "always_block_passed"

    if recipe.recipe_tier not in config.blocking_tiers:
        return False, f"tier_{recipe.recipe_tier.value}_non_blocking"

    if run.passed is False:
        drift = ""
        if run.max_drift_field and run.max_drift_rel is not None:
            drift = f": {run.max_drift_field} drifted {run.max_drift_rel * 100:.2f}%"
        elif run.error:
            drift = f": {run.error}"
        return True, f"{recipe.recipe_tier.value}_tier_failed{drift}"
    return False, "passed"


def check_ci_blocking(results: Sequence[Tuple[Recipe, RecipeRun]], config: CIBlockingConfig = None) -> dict:
    """
    Returns {"should_block": bool, "blockers": [(recipe, run, reason)], "summary": str}.
    """
    blockers = []
    for recipe, run in results:
        block, reason = should_block_ci(recipe, run, config)
        if block:
            blockers.append((recipe, run, reason))

    if blockers:
        lines = [f"CI BLOCKED: {len(blockers)} recipe(s) failed"]
        lines.extend(f"  - {recipe.name}: {reason}" for recipe, _, reason in blockers)
        summary = "\n".join(lines)
    else:
        summary = f"CI OK: {len(results)} recipe(s) checked, all passed"
    return {"should_block": bool(blockers), "blockers": blockers, "summary": summary}


def get_ci_exit_code(results: Sequence[Tuple[Recipe, RecipeRun]], config: CIBlockingConfig = None) -> int:
    return 1 if check_ci_blocking(results, config)["should_block"] else 0


def filter_recipes_for_ci(recipes: Sequence[Recipe], tiers: Optional[List[RecipeTier]] = None) -> List[Recipe]:
    """Locked golden recipes in the given tiers (default: the blocking tiers)."""
    tiers = tiers or default_ci_config().blocking_tiers
    return [
        r for r in recipes
        if r.recipe_type == RecipeType.GOLDEN and r.recipe_status == RecipeStatus.LOCKED and r.recipe_tier in tiers
    ]
