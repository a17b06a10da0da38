"""
Conveyor geometry: axis length, horizontal run, incline and TOB heights.

Three input modes:
- L_ANGLE: axis length (center-to-center) + incline angle
- H_ANGLE: horizontal run + incline angle
- H_TOB:   horizontal run + tail and drive top-of-belt heights

Rise is always computed from the horizontal run, never the axis length.
TOB heights are converted to pulley centerlines before any angle math.
"""

import math
from typing import Optional

from pydantic import BaseModel

from .models import GeometryMode, ReferenceEnd, SupportType
from .schemas import Configuration


HORIZONTAL_THRESHOLD_DEG = 0.01
MAX_INCLINE_DEG = 45.0
MIN_COS = 0.01          # cos(89.4°), near-vertical guard
DEFAULT_PULLEY_DIAMETER_IN = 4.0


def is_effectively_horizontal(angle_deg: float) -> bool:
    return abs(angle_deg) < HORIZONTAL_THRESHOLD_DEG


def axis_from_horizontal(horizontal_run_in: float, angle_deg: float) -> float:
    """Axis length from horizontal run. Near-vertical angles divide by MIN_COS."""
    if horizontal_run_in <= 0:
        return 0.0
    if is_effectively_horizontal(angle_deg):
        return horizontal_run_in
    cos_theta = math.cos(math.radians(angle_deg))
    if abs(cos_theta) < MIN_COS:
        return horizontal_run_in / MIN_COS
    return horizontal_run_in / cos_theta


def horizontal_from_axis(axis_length_in: float, angle_deg: float) -> float:
    if axis_length_in <= 0:
        return 0.0
    if is_effectively_horizontal(angle_deg):
        return axis_length_in
    return axis_length_in * math.cos(math.radians(angle_deg))


def rise_from_axis_and_angle(axis_length_in: float, angle_deg: float) -> float:
    if axis_length_in <= 0 or is_effectively_horizontal(angle_deg):
        return 0.0
    return axis_length_in * math.sin(math.radians(angle_deg))


def rise_from_horizontal_and_angle(horizontal_run_in: float, angle_deg: float) -> float:
    if horizontal_run_in <= 0 or is_effectively_horizontal(angle_deg):
        return 0.0
    return horizontal_run_in * math.tan(math.radians(angle_deg))


def tob_to_centerline(tob_in: float, pulley_diameter_in: float) -> float:
    return tob_in - pulley_diameter_in / 2


def centerline_to_tob(centerline_in: float, pulley_diameter_in: float) -> float:
    return centerline_in + pulley_diameter_in / 2


def angle_from_centerlines(tail_cl_in: float, drive_cl_in: float, horizontal_run_in: float) -> float:
    """Incline from the two pulley centerlines, clamped to ±45°."""
    if horizontal_run_in <= 0:
        return 0.0
    rise = drive_cl_in - tail_cl_in
    if abs(rise) < 0.001:
        return 0.0
    angle = math.degrees(math.atan(rise / horizontal_run_in))
    return max(-MAX_INCLINE_DEG, min(MAX_INCLINE_DEG, angle))


def calculate_opposite_tob(
    reference_tob_in: float,
    angle_deg: float,
    horizontal_run_in: float,
    reference_pulley_dia_in: float,
    opposite_pulley_dia_in: float,
    reference_end: ReferenceEnd,
) -> float:
    """
    TOB at the other end from one known TOB and the incline.
    Tail reference adds the rise to get the drive end; drive reference subtracts it.
    """
    reference_cl = tob_to_centerline(reference_tob_in, reference_pulley_dia_in)
    rise = rise_from_horizontal_and_angle(horizontal_run_in, angle_deg)
    if reference_end == ReferenceEnd.TAIL:
        opposite_cl = reference_cl + rise
    else:
        opposite_cl = reference_cl - rise
    return centerline_to_tob(opposite_cl, opposite_pulley_dia_in)


def calculate_implied_angle(
    tail_tob_in: float,
    drive_tob_in: float,
    horizontal_run_in: float,
    tail_pulley_dia_in: float,
    drive_pulley_dia_in: float,
) -> float:
    return angle_from_centerlines(
        tob_to_centerline(tail_tob_in, tail_pulley_dia_in),
        tob_to_centerline(drive_tob_in, drive_pulley_dia_in),
        horizontal_run_in,
    )


def has_angle_mismatch(implied_deg: float, entered_deg: float, tolerance_deg: float = 0.5) -> bool:
    """Strictly greater than tolerance; exactly 0.5° apart is not a mismatch."""
    return abs(implied_deg - entered_deg) > tolerance_deg


def requires_legs(config: Configuration) -> bool:
    """Floor supported: either end stands on legs or casters."""
    floor = (SupportType.LEGS, SupportType.CASTERS)
    return config.tail_support_type in floor or config.drive_support_type in floor


# ============================================================
# Normalization
# ============================================================

class DerivedGeometry(BaseModel):
    mode: GeometryMode
    length_cc_in: float = 0.0
    horizontal_run_in: float = 0.0
    incline_deg: float = 0.0
    rise_in: float = 0.0
    drive_pulley_dia_in: float
    tail_pulley_dia_in: float
    tail_cl_in: Optional[float] = None
    drive_cl_in: Optional[float] = None
    is_valid: bool = True
    error: Optional[str] = None

    class Config:
        frozen = True


def drive_pulley_diameter(config: Configuration) -> Optional[float]:
    if config.drive_pulley_diameter_in is not None:
        return config.drive_pulley_diameter_in
    return config.pulley_diameter_in


def tail_pulley_diameter(config: Configuration) -> Optional[float]:
    if config.tail_pulley_diameter_in is not None:
        return config.tail_pulley_diameter_in
    if config.pulley_diameter_in is not None:
        return config.pulley_diameter_in
    return drive_pulley_diameter(config)


def normalize_geometry(config: Configuration) -> DerivedGeometry:
    """Resolve the three geometry modes into one set of L / H / angle / rise."""
    mode = config.geometry_mode
    drive_dia = drive_pulley_diameter(config) or DEFAULT_PULLEY_DIAMETER_IN
    tail_dia = tail_pulley_diameter(config) or drive_dia
    base = {"mode": mode, "drive_pulley_dia_in": drive_dia, "tail_pulley_dia_in": tail_dia}

    if mode == GeometryMode.L_ANGLE:
        length = config.conveyor_length_cc_in or 0.0
        theta = config.conveyor_incline_deg or 0.0
        if length <= 0:
            return DerivedGeometry(**base, is_valid=False,
                                   error="Conveyor length must be greater than 0")
        return DerivedGeometry(
            **base,
            length_cc_in=length,
            horizontal_run_in=horizontal_from_axis(length, theta),
            incline_deg=theta,
            rise_in=rise_from_axis_and_angle(length, theta),
        )

    horizontal = config.horizontal_run_in or config.conveyor_length_cc_in or 0.0
    if horizontal <= 0:
        return DerivedGeometry(**base, is_valid=False,
                               error="Horizontal run must be greater than 0")

    if mode == GeometryMode.H_ANGLE:
        theta = config.conveyor_incline_deg or 0.0
        return DerivedGeometry(
            **base,
            length_cc_in=axis_from_horizontal(horizontal, theta),
            horizontal_run_in=horizontal,
            incline_deg=theta,
            rise_in=rise_from_horizontal_and_angle(horizontal, theta),
        )

    # H_TOB
    if config.tail_tob_in is None or config.drive_tob_in is None:
        return DerivedGeometry(**base, horizontal_run_in=horizontal, is_valid=False,
                               error="H_TOB mode requires both tail and drive TOB values")
    tail_cl = tob_to_centerline(config.tail_tob_in, tail_dia)
    drive_cl = tob_to_centerline(config.drive_tob_in, drive_dia)
    theta = angle_from_centerlines(tail_cl, drive_cl, horizontal)
    return DerivedGeometry(
        **base,
        length_cc_in=axis_from_horizontal(horizontal, theta),
        horizontal_run_in=horizontal,
        incline_deg=theta,
        rise_in=drive_cl - tail_cl,
        tail_cl_in=tail_cl,
        drive_cl_in=drive_cl,
    )
