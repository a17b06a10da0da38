"""
Exceptions raised at the core's boundary.

Expected domain failures (unknown cleat combination, stress over limit,
missing required field) are never raised: calculators return tagged
results and the evaluator returns Issues. These classes cover inputs that
cannot be interpreted at all.
"""


class ConveyorCoreError(Exception):
    """Base class for all conveyor_core exceptions."""


class CatalogShapeError(ConveyorCoreError):
    """Reference data or rule table is malformed (bad JSON shape, unknown rule id)."""


class StructuralInputError(ConveyorCoreError):
    """A configuration payload could not be parsed into a Configuration."""

    def __init__(self, message: str, errors: list = None):
        super().__init__(message)
        self.errors = errors or []


class RecipeValidationError(ConveyorCoreError):
    """A recipe failed validate_recipe()."""

    def __init__(self, recipe_id: str, problems: list):
        self.recipe_id = recipe_id
        self.problems = problems
        super().__init__(f"Recipe {recipe_id} is invalid: {'; '.join(problems)}")
