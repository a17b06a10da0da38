"""
Cleat layout and weight.

Spacing policies over the conveyor length L:
- divide_evenly: pitch = L / count
- use_nominal: count = floor(L / nominal), remainder r = L - count * nominal
    spread_evenly: pitch = L / count
    one_odd_gap / smaller: one extra cleat, a single short gap of r
    one_odd_gap / larger: r merged into one long gap of nominal + r

Added belt weight per foot = W_each x 12 / pitch.
"""

import math
from typing import Optional

from ..geometry import normalize_geometry
from ..models import CleatRemainderMode, CleatSpacingMode, OddGapLocation, OddGapSize
from ..schemas import CleatLayoutResult, Configuration
from ..weights import cleat_weight_each, cleat_weight_per_foot, cleat_width
from .base import BaseCalculator, CalcContext

REMAINDER_EPSILON_IN = 1e-6
MIN_ODD_GAP_IN = 2.0


def _num(value: float) -> str:
    return f"{value:g}"


def cleats_summary(height_in: float, spacing_in: float, edge_offset_in: float) -> str:
    return f'Cleats: {_num(height_in)}" high @ {_num(spacing_in)}" c/c, {_num(edge_offset_in)}" from belt edge'


def calculate_cleat_layout(
    length_in: float,
    spacing_mode: CleatSpacingMode,
    cleat_count: Optional[int] = None,
    nominal_spacing_in: Optional[float] = None,
    remainder_mode: CleatRemainderMode = CleatRemainderMode.SPREAD_EVENLY,
    odd_gap_size: OddGapSize = OddGapSize.SMALLER,
    odd_gap_location: OddGapLocation = OddGapLocation.TAIL,
) -> CleatLayoutResult:
    """Pitch, count and odd gap only; weights are filled in by the calculator."""
    if not length_in or length_in <= 0:
        return CleatLayoutResult(success=False, error="Conveyor length is required for cleat layout")

    if spacing_mode == CleatSpacingMode.DIVIDE_EVENLY:
        if not cleat_count or cleat_count < 1:
            return CleatLayoutResult(success=False, error="Cleat count must be at least 1")
        return CleatLayoutResult(success=True, cleat_count=cleat_count, pitch_in=length_in / cleat_count)

    if not nominal_spacing_in or nominal_spacing_in <= 0:
        return CleatLayoutResult(success=False, error="Nominal cleat spacing must be greater than 0")

    # Shorter than one nominal pitch: a single cleat per belt length
    if length_in < nominal_spacing_in:
        return CleatLayoutResult(success=True, cleat_count=1, pitch_in=length_in)

    count = math.floor(length_in / nominal_spacing_in)
    remainder = length_in - count * nominal_spacing_in
    if remainder < REMAINDER_EPSILON_IN:
        return CleatLayoutResult(success=True, cleat_count=count, pitch_in=nominal_spacing_in)

    if remainder_mode == CleatRemainderMode.SPREAD_EVENLY:
        return CleatLayoutResult(success=True, cleat_count=count, pitch_in=length_in / count)

    if odd_gap_size == OddGapSize.SMALLER:
        return CleatLayoutResult(
            success=True,
            cleat_count=count + 1,
            pitch_in=nominal_spacing_in,
            odd_gap_in=remainder,
            odd_gap_size=odd_gap_size,
            odd_gap_location=odd_gap_location,
        )
    return CleatLayoutResult(
        success=True,
        cleat_count=count,
        pitch_in=nominal_spacing_in,
        odd_gap_in=nominal_spacing_in + remainder,
        odd_gap_size=odd_gap_size,
        odd_gap_location=odd_gap_location,
    )


def has_small_odd_gap(layout: Optional[CleatLayoutResult]) -> bool:
    return (layout is not None and layout.success and layout.odd_gap_in is not None
            and layout.odd_gap_in < MIN_ODD_GAP_IN)


class CleatLayoutCalculator(BaseCalculator):
    name = "cleat_layout"

    def calculate(self, config: Configuration, ctx: CalcContext) -> Optional[CleatLayoutResult]:
        if not config.cleats_enabled:
            return None

        geometry = normalize_geometry(config)
        layout = calculate_cleat_layout(
            geometry.length_cc_in,
            config.cleat_spacing_mode,
            config.cleat_count,
            config.cleat_spacing_in,
            config.cleat_remainder_mode,
            config.cleat_odd_gap_size,
            config.cleat_odd_gap_location,
        )
        if not layout.success:
            return layout

        height = self.positive(config.cleat_height_in)
        belt_width = self.positive(config.belt_width_in)
        edge_offset = config.cleat_edge_offset_in or 0.0
        if height is None or belt_width is None:
            return layout
        width = cleat_width(belt_width, edge_offset)
        if width <= 0:
            return layout

        material = config.cleat_material_family or "PVC_HOT_WELDED"
        each = cleat_weight_each(height, width, material)
        return layout.model_copy(update={
            "cleat_width_in": width,
            "weight_lb_each": each,
            "weight_lb_per_ft": cleat_weight_per_foot(each, layout.pitch_in),
            "summary": cleats_summary(height, config.cleat_spacing_in or layout.pitch_in, edge_offset),
        })
