"""
Recipe models.

A recipe is a stored input snapshot with expected outputs. Golden recipes
are known-good outcomes that gate CI; reference recipes are real-world
inputs kept for drift checks. The core only reads recipes; a RecipeRun is
the append-only record of one execution.
"""

import enum
from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from ..models import Severity
from ..schemas import Issue


class RecipeType(str, enum.Enum):
    GOLDEN = "golden"
    REFERENCE = "reference"


class RecipeTier(str, enum.Enum):
    SMOKE = "smoke"
    REGRESSION = "regression"
    EDGE = "edge"
    LONGTAIL = "longtail"


class RecipeStatus(str, enum.Enum):
    DRAFT = "draft"
    ACTIVE = "active"
    LOCKED = "locked"          # expected outputs frozen
    DEPRECATED = "deprecated"


class RecipeRole(str, enum.Enum):
    REFERENCE = "reference"
    REGRESSION = "regression"
    GOLDEN = "golden"
    DEPRECATED = "deprecated"


class TolerancePolicy(str, enum.Enum):
    EXPLICIT = "explicit"                  # strict: numeric fields need a tolerance
    DEFAULT_FALLBACK = "default_fallback"  # suffix defaults, explicit entries win


class RunContext(str, enum.Enum):
    CI = "ci"
    MANUAL = "manual"
    SCHEDULED = "scheduled"
    REGRESSION_SWEEP = "regression_sweep"


class FieldType(str, enum.Enum):
    MISSING = "missing"
    NULL = "null"
    NUMERIC = "numeric"
    BOOLEAN = "boolean"
    STRING = "string"
    ARRAY = "array"
    OBJECT = "object"


class ComparisonReason(str, enum.Enum):
    EXCEEDED_ABS = "exceeded_abs"
    EXCEEDED_REL = "exceeded_rel"
    EXCEEDED_ABS_AND_REL = "exceeded_abs+exceeded_rel"
    TYPE_MISMATCH = "type_mismatch"
    VALUE_MISMATCH = "value_mismatch"
    MISSING_EXPECTED = "missing_expected"
    MISSING_ACTUAL = "missing_actual"
    MISSING_TOLERANCE_IN_STRICT_MODE = "missing_tolerance_in_strict_mode"


class ToleranceSpec(BaseModel):
    """abs: |a - e| <= abs. rel: |a - e| / |e| <= rel (decimal). round: decimals before comparing."""
    abs: Optional[float] = None
    rel: Optional[float] = None
    round: Optional[int] = None

    class Config:
        frozen = True


class ExpectedIssue(BaseModel):
    code: str
    severity: Severity
    required: bool = True   # must appear, vs may appear

    class Config:
        frozen = True


class Recipe(BaseModel):
    id: str
    name: str
    slug: Optional[str] = None
    recipe_type: RecipeType = RecipeType.REFERENCE
    recipe_tier: RecipeTier = RecipeTier.REGRESSION
    recipe_status: RecipeStatus = RecipeStatus.DRAFT
    role: Optional[RecipeRole] = None

    inputs: Dict[str, Any]
    inputs_hash: Optional[str] = None
    expected_outputs: Optional[Dict[str, Any]] = None
    expected_issues: Optional[List[ExpectedIssue]] = None
    tolerances: Optional[Dict[str, ToleranceSpec]] = None
    tolerance_policy: TolerancePolicy = TolerancePolicy.DEFAULT_FALLBACK

    locked_at: Optional[datetime] = None
    locked_by: Optional[str] = None
    notes: Optional[str] = None

    class Config:
        frozen = True

    @property
    def is_locked(self) -> bool:
        return self.recipe_status == RecipeStatus.LOCKED


class FieldComparison(BaseModel):
    field: str
    field_type: FieldType
    expected: Any = None
    actual: Any = None
    passed: bool
    delta: Optional[float] = None
    delta_rel: Optional[float] = None
    tolerance_used: Optional[ToleranceSpec] = None
    reason: Optional[ComparisonReason] = None

    class Config:
        frozen = True


class ComparisonResult(BaseModel):
    passed: bool
    comparisons: List[FieldComparison] = []
    max_drift_rel: Optional[float] = None
    max_drift_field: Optional[str] = None


class IssueDiff(BaseModel):
    passed: bool
    missing: List[ExpectedIssue] = []
    unexpected: List[Issue] = []
    matched: List[str] = []


class RecipeRun(BaseModel):
    recipe_id: str
    passed: Optional[bool] = None      # None: nothing to compare against
    max_drift_rel: Optional[float] = None
    max_drift_field: Optional[str] = None
    run_context: RunContext = RunContext.MANUAL
    run_at: datetime
    duration_ms: int = 0
    inputs_hash: str
    outputs_hash: Optional[str] = None
    actual_outputs: Dict[str, Any] = Field(default_factory=dict)
    actual_issues: List[Issue] = []
    field_results: List[FieldComparison] = []
    issue_result: Optional[IssueDiff] = None
    catalog_version: Optional[str] = None
    error: Optional[str] = None


class CIBlockingConfig(BaseModel):
    blocking_tiers: List[RecipeTier] = [RecipeTier.SMOKE]
    always_block: List[str] = []   # recipe slugs
    never_block: List[str] = []

    class Config:
        frozen = True
