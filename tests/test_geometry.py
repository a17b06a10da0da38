"""
Geometry tests: the three input modes, TOB conversion, implied angle.
"""

import math

import pytest

from conveyor_core.geometry import (
    axis_from_horizontal, calculate_implied_angle, calculate_opposite_tob, has_angle_mismatch,
    horizontal_from_axis, normalize_geometry, requires_legs, rise_from_horizontal_and_angle,
    tob_to_centerline,
)
from conveyor_core.models import GeometryMode, ReferenceEnd, SupportType

from conftest import make_config


def test_l_angle_derives_horizontal_and_rise():
    geo = normalize_geometry(make_config(conveyor_length_cc_in=100.0, conveyor_incline_deg=30.0))
    assert geo.is_valid
    assert geo.length_cc_in == 100.0
    assert geo.horizontal_run_in == pytest.approx(86.6025, abs=1e-3)
    assert geo.rise_in == pytest.approx(50.0, abs=1e-6)


def test_h_angle_derives_axis_from_horizontal():
    geo = normalize_geometry(make_config(
        geometry_mode=GeometryMode.H_ANGLE, horizontal_run_in=100.0, conveyor_incline_deg=30.0,
    ))
    assert geo.length_cc_in == pytest.approx(115.470, abs=1e-3)
    assert geo.rise_in == pytest.approx(57.735, abs=1e-3)  # rise from H, never from L


def test_h_tob_angle_uses_centerlines():
    """Equal pulleys: TOB difference equals centerline difference."""
    geo = normalize_geometry(make_config(
        geometry_mode=GeometryMode.H_TOB, horizontal_run_in=100.0, tail_tob_in=30.0, drive_tob_in=40.0,
    ))
    assert geo.tail_cl_in == 28.0
    assert geo.drive_cl_in == 38.0
    assert geo.incline_deg == pytest.approx(math.degrees(math.atan(0.1)))
    assert geo.rise_in == 10.0


def test_h_tob_without_both_heights_is_invalid():
    geo = normalize_geometry(make_config(
        geometry_mode=GeometryMode.H_TOB, horizontal_run_in=100.0, tail_tob_in=30.0,
    ))
    assert not geo.is_valid
    assert "both tail and drive TOB" in geo.error


def test_zero_length_is_invalid():
    geo = normalize_geometry(make_config(conveyor_length_cc_in=0.0))
    assert not geo.is_valid


def test_near_horizontal_and_near_vertical():
    assert axis_from_horizontal(100.0, 0.005) == 100.0     # below threshold: treated as flat
    assert horizontal_from_axis(100.0, 0.0) == 100.0
    assert axis_from_horizontal(1.0, 89.9) == pytest.approx(100.0)  # capped by MIN_COS
    assert rise_from_horizontal_and_angle(0.0, 30.0) == 0.0


def test_opposite_tob_from_tail_reference():
    """Tail reference adds the rise; different pulley sizes shift the TOB."""
    drive_tob = calculate_opposite_tob(30.0, 10.0, 100.0, 4.0, 6.0, ReferenceEnd.TAIL)
    assert drive_tob == pytest.approx(28.0 + 100.0 * math.tan(math.radians(10.0)) + 3.0)
    tail_tob = calculate_opposite_tob(drive_tob, 10.0, 100.0, 6.0, 4.0, ReferenceEnd.DRIVE)
    assert tail_tob == pytest.approx(30.0)


def test_implied_angle_and_mismatch_tolerance():
    implied = calculate_implied_angle(30.0, 40.0, 100.0, 4.0, 4.0)
    assert implied == pytest.approx(5.7106, abs=1e-3)
    assert calculate_implied_angle(30.0, 500.0, 100.0, 4.0, 4.0) == 45.0  # clamped
    assert not has_angle_mismatch(10.5, 10.0, 0.5)  # exactly at tolerance
    assert has_angle_mismatch(10.51, 10.0, 0.5)
    assert tob_to_centerline(30.0, 4.0) == 28.0


def test_requires_legs():
    assert not requires_legs(make_config())
    assert requires_legs(make_config(tail_support_type=SupportType.LEGS))
    assert requires_legs(make_config(drive_support_type=SupportType.CASTERS))
