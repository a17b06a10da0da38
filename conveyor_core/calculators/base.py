"""
Abstract base class for all engineering calculators.

Input: Configuration + CalcContext (catalog snapshot, engine parameters,
       results of calculators that ran earlier in the pipeline)
Output: a frozen result model, or None when the calculator does not apply
"""

import logging
import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from ..catalog.snapshot import CatalogSnapshot
from ..config import settings
from ..schemas import Configuration, EngineParameters

logger = logging.getLogger(__name__)


@dataclass
class CalcContext:
    snapshot: CatalogSnapshot
    params: EngineParameters
    results: Dict[str, Any] = field(default_factory=dict)
    enforce_pci: bool = False

    def get(self, name: str):
        return self.results.get(name)


class BaseCalculator(ABC):
    """All calculators inherit from this."""

    name = ""

    @abstractmethod
    def calculate(self, config: Configuration, ctx: CalcContext):
        """
        Computes this calculator's result from the configuration.
        Must not raise for expected domain failures: return a tagged result.
        """
        pass

    # --- Helper methods for all calculators ---

    def round_up(self, value: float, increment: float) -> float:
        """Round UP to the next multiple of increment. A minimum is never rounded down."""
        return round_up_to_increment(value, increment)

    def positive(self, value) -> Optional[float]:
        """Value if it is a number greater than zero, else None."""
        if value is None:
            return None
        try:
            number = float(value)
        except (TypeError, ValueError):
            return None
        return number if number > 0 else None


def round_up_to_increment(value: float, increment: float = None) -> float:
    """
    ceil(value / increment) × increment, never below value.

    Float division can land a hair under an integer step; the result is
    bumped one more step when that happens.
    """
    if increment is None:
        increment = settings.CLEAT_ROUNDING_INCREMENT_IN
    if increment <= 0:
        raise ValueError(f"Rounding increment must be positive, got {increment}")
    steps = math.ceil(value / increment)
    if steps * increment < value:
        steps += 1
    return steps * increment


def round_half_up(value: float, places: int = 0) -> float:
    """Round with ties going up (2.5 -> 3, -2.5 -> -2), not to even."""
    scale = 10 ** places
    return math.floor(value * scale + 0.5) / scale
