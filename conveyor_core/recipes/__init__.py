"""
Golden recipes: replay stored inputs and detect drift against expected outputs.
"""

from .canon import canonicalize_recipe_inputs, derive_role_from_legacy, format_run_result
from .ci import check_ci_blocking, filter_recipes_for_ci, get_ci_exit_code, should_block_ci
from .compare import compare_field, compare_issues, compare_outputs, get_default_tolerance
from .runner import normalize_inputs, run_recipe, run_recipes, validate_recipe
from .types import (
    CIBlockingConfig, ExpectedIssue, FieldComparison, Recipe, RecipeRun, RecipeStatus,
    RecipeTier, RecipeType, RunContext, TolerancePolicy, ToleranceSpec,
)
