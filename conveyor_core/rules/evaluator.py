"""
Rule evaluator: runs the calculator pipeline and the rule groups in a fixed
order and returns one EvaluationResult.

    1. validate_inputs              structural; errors block
    2. validate_parameters          always runs
    3. apply_application_rules
    4. validate_tob                 commit mode only
    5. apply_height_warnings
    6. apply_pci_rules
    7. apply_hub_connection_rules

Calculators and groups 3, 5, 6, 7 are skipped when group 1 reported errors.
Evaluation is pure: the same configuration, snapshot and parameters always
give the same issues in the same order.
"""

import logging
from typing import Any, Dict, Optional, Union

from pydantic import ValidationError

from ..calculators.base import CalcContext
from ..calculators.registry import run_calculators
from ..catalog.snapshot import CatalogSnapshot, load_reference_catalog
from ..config import settings
from ..errors import StructuralInputError
from ..models import EvaluationMode
from ..schemas import Configuration, EngineParameters, EvaluationResult
from .application import apply_application_rules
from .height import apply_height_warnings
from .hub import apply_hub_connection_rules
from .inputs import validate_inputs
from .parameters import validate_parameters
from .pci import apply_pci_rules
from .severity import can_save, has_errors
from .tob import validate_tob

logger = logging.getLogger(__name__)

# Results whose fields land at the top level of outputs; the rest are prefixed
_UNPREFIXED = ("belt_drive",)


def to_configuration(config: Union[Configuration, dict]) -> Configuration:
    """Configuration as-is, or a dict parsed into one (StructuralInputError on failure)."""
    if isinstance(config, Configuration):
        return config
    try:
        return Configuration(**config)
    except ValidationError as e:
        raise StructuralInputError("Configuration could not be parsed", e.errors()) from e


def flatten_outputs(results: Dict[str, Any]) -> Dict[str, Any]:
    """
    Scalar calculator fields as one flat dict. Nested objects are dropped;
    explicit None values are kept.
    """
    outputs = {}
    for name, result in results.items():
        if result is None:
            continue
        prefix = "" if name in _UNPREFIXED else f"{name}_"
        for key, value in result.model_dump(mode="json").items():
            if isinstance(value, (dict, list)):
                continue
            outputs[f"{prefix}{key}"] = value
    return outputs


def evaluate(
    config: Union[Configuration, dict],
    snapshot: Optional[CatalogSnapshot] = None,
    params: Optional[EngineParameters] = None,
    mode=EvaluationMode.DRAFT,
) -> EvaluationResult:
    config = to_configuration(config)
    snapshot = snapshot or load_reference_catalog()
    params = params or EngineParameters()
    mode = EvaluationMode(mode)
    enforce_pci = config.enforce_pci_checks if config.enforce_pci_checks is not None else settings.ENFORCE_PCI_CHECKS

    issues = validate_inputs(config)
    rejected = has_errors(issues)
    issues.extend(validate_parameters(params))

    ctx = CalcContext(snapshot=snapshot, params=params, enforce_pci=enforce_pci)
    if not rejected:
        run_calculators(config, ctx)
        issues.extend(apply_application_rules(config, ctx))
    else:
        logger.debug("Input errors present; skipping calculators and dependent rule groups")

    issues.extend(validate_tob(config, mode))

    if not rejected:
        issues.extend(apply_height_warnings(config))
        issues.extend(apply_pci_rules(config, ctx))
        issues.extend(apply_hub_connection_rules(config))

    blocking = not can_save(issues)
    logger.info(
        "Evaluated %s configuration (%s): %d issues, blocking=%s",
        config.product_key.value, mode.value, len(issues), blocking,
    )
    return EvaluationResult(
        issues=issues,
        blocking=blocking,
        outputs=flatten_outputs(ctx.results),
        belt_drive=ctx.get("belt_drive"),
        drive_wall_validation=ctx.get("drive_wall_validation"),
        tail_wall_validation=ctx.get("tail_wall_validation"),
        drive_pci=ctx.get("drive_pci"),
        tail_pci=ctx.get("tail_pci"),
        cleats_min_pulley=ctx.get("cleats_min_pulley"),
        cleat_layout=ctx.get("cleat_layout"),
        catalog_version=snapshot.version,
    )
