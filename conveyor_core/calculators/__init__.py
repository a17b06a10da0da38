"""
Deterministic engineering calculators.

Pure functions over a Configuration and a catalog snapshot. Expected
failures come back as tagged results, never exceptions.
"""

from .base import BaseCalculator, CalcContext, round_half_up, round_up_to_increment
from .registry import (
    CALCULATOR_REGISTRY, get_calculator, has_calculator, list_calculators, run_calculators,
)
