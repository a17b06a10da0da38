"""
Calculator registry: maps calculator names to classes, in pipeline order.

Later calculators read earlier results from CalcContext.results: the belt
drive needs the cleat layout weight, shell and PCI stress need the belt pull.
"""

import logging
from typing import Dict, List

from ..schemas import Configuration
from .base import BaseCalculator, CalcContext
from .belt_drive import BeltDriveCalculator
from .cleat_layout import CleatLayoutCalculator
from .cleat_min_pulley import CleatsMinPulleyCalculator
from .tube_stress import (
    DrivePciCalculator, DriveWallValidationCalculator,
    TailPciCalculator, TailWallValidationCalculator,
)

logger = logging.getLogger(__name__)

CALCULATOR_REGISTRY: dict[str, type] = {
    "cleat_layout": CleatLayoutCalculator,
    "belt_drive": BeltDriveCalculator,
    "cleats_min_pulley": CleatsMinPulleyCalculator,
    "drive_wall_validation": DriveWallValidationCalculator,
    "tail_wall_validation": TailWallValidationCalculator,
    "drive_pci": DrivePciCalculator,
    "tail_pci": TailPciCalculator,
}


def get_calculator(name: str) -> BaseCalculator:
    """Returns an instance of the named calculator, or raises ValueError."""
    if name not in CALCULATOR_REGISTRY:
        raise ValueError(
            f"No calculator registered for name: {name}. "
            f"Available: {list(CALCULATOR_REGISTRY.keys())}"
        )
    return CALCULATOR_REGISTRY[name]()


def has_calculator(name: str) -> bool:
    """Check if a calculator exists for a name."""
    return name in CALCULATOR_REGISTRY


def list_calculators() -> list[str]:
    """List all registered calculator names in pipeline order."""
    return list(CALCULATOR_REGISTRY.keys())


def run_calculators(config: Configuration, ctx: CalcContext, names: List[str] = None) -> Dict[str, object]:
    """
    Runs calculators in registry order, storing each result in ctx.results.
    A calculator that does not apply stores None.
    """
    for name in names or list_calculators():
        result = get_calculator(name).calculate(config, ctx)
        ctx.results[name] = result
        logger.debug("Calculator %s -> %s", name, type(result).__name__ if result is not None else None)
    return ctx.results
