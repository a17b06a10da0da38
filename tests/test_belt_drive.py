"""
Belt drive calculator and calculator registry tests.
"""

import math

import pytest

from conveyor_core.calculators import get_calculator, has_calculator, list_calculators, run_calculators
from conveyor_core.calculators.base import CalcContext
from conveyor_core.calculators.belt_drive import (
    BeltDriveCalculator, belt_coefficients, effective_frame_height, gravity_roller_quantity,
    requires_snub_rollers, shaft_diameter, total_belt_length,
)
from conveyor_core.models import (
    BulkInputMethod, FeedBehavior, FrameHeightMode, GearmotorMountingStyle, MaterialForm,
    ShaftDiameterMode, SpeedMode,
)
from conveyor_core.schemas import EngineParameters

from conftest import make_config


def _calc(config, snapshot, params=None):
    ctx = CalcContext(snapshot=snapshot, params=params or EngineParameters())
    return BeltDriveCalculator().calculate(config, ctx)


# ============================================================
# Belt drive
# ============================================================

def test_baseline_load_and_pull(snapshot):
    """96" C-C, 12" parts on 6" gaps: 96 / 18 parts of 5 lb on the belt."""
    result = _calc(make_config(), snapshot)
    assert result.total_belt_length_in == pytest.approx(2 * 96 + math.pi * 4)
    assert result.piw_used == 0.109
    assert result.parts_on_belt == pytest.approx(96 / 18)
    assert result.load_on_belt_lbf == pytest.approx(5 * 96 / 18)
    assert result.total_load_lbf == pytest.approx(result.belt_weight_lbf + result.load_on_belt_lbf)
    assert result.friction_pull_lb == pytest.approx(0.25 * result.total_load_lbf)
    assert result.incline_pull_lb == 0.0
    assert result.total_belt_pull_lb == pytest.approx(result.friction_pull_lb + 75.0)
    assert result.torque_drive_shaft_inlbf == pytest.approx(result.total_belt_pull_lb * 2.0 * 2.0)


def test_speed_ratios_and_capacity(snapshot):
    result = _calc(make_config(), snapshot)
    rpm = 60 / (4 / 12 * math.pi)
    assert result.drive_shaft_rpm == pytest.approx(rpm)
    assert result.gear_ratio == pytest.approx(1750 / rpm)
    assert result.chain_ratio == 1.0
    assert result.capacity_pph == pytest.approx(60 * 720 / 18)


def test_drive_rpm_mode(snapshot):
    rpm = 60 / (4 / 12 * math.pi)
    result = _calc(make_config(speed_mode=SpeedMode.DRIVE_RPM, drive_rpm_input=rpm), snapshot)
    assert result.belt_speed_fpm == pytest.approx(60.0)


def test_bottom_mount_chain_ratio(snapshot):
    result = _calc(make_config(gearmotor_mounting_style=GearmotorMountingStyle.BOTTOM_MOUNT), snapshot)
    assert result.chain_ratio == pytest.approx(24 / 18)   # default sprockets
    assert result.gearmotor_output_rpm == pytest.approx(result.drive_shaft_rpm * 24 / 18)


def test_incline_adds_pull(snapshot):
    flat = _calc(make_config(), snapshot)
    inclined = _calc(make_config(conveyor_incline_deg=15.0), snapshot)
    assert inclined.incline_pull_lb == pytest.approx(inclined.total_load_lbf * math.sin(math.radians(15.0)))
    assert inclined.total_belt_pull_lb > flat.total_belt_pull_lb


def test_throughput_target(snapshot):
    result = _calc(make_config(required_throughput_pph=2000.0, throughput_margin_pct=10.0), snapshot)
    assert result.target_throughput_pph == pytest.approx(2200.0)
    assert result.meets_throughput is True
    assert result.throughput_margin_achieved_pct == pytest.approx(20.0)


def test_bulk_load_with_surge(snapshot):
    """3600 lb/hr at 60 fpm is 1 lb per foot of belt, over 8 ft."""
    bulk = dict(material_form=MaterialForm.BULK, bulk_input_method=BulkInputMethod.WEIGHT_FLOW,
                mass_flow_lbs_per_hr=3600.0)
    assert _calc(make_config(**bulk), snapshot).load_on_belt_lbf == pytest.approx(8.0)
    surge = _calc(make_config(feed_behavior=FeedBehavior.SURGE, surge_multiplier=1.5, **bulk), snapshot)
    assert surge.load_on_belt_lbf == pytest.approx(12.0)


def test_low_profile_frame_needs_snubs(snapshot):
    result = _calc(make_config(frame_height_mode=FrameHeightMode.LOW_PROFILE), snapshot)
    assert result.effective_frame_height_in == 4.5
    assert result.requires_snub_rollers
    assert result.snub_roller_quantity == 2
    assert result.gravity_roller_quantity == 0


def test_invalid_geometry_returns_none(snapshot):
    assert _calc(make_config(conveyor_length_cc_in=0.0), snapshot) is None
    assert _calc(make_config(belt_width_in=None), snapshot) is None


# ============================================================
# Helpers
# ============================================================

def test_belt_coefficient_precedence():
    params = EngineParameters()
    assert belt_coefficients(make_config(), params, 2.5) == (0.138, 0.138)
    assert belt_coefficients(make_config(), params, 4.0) == (0.109, 0.109)
    assert belt_coefficients(make_config(belt_piw=0.12, belt_piw_override=0.15), params, 4.0)[0] == 0.15
    assert belt_coefficients(make_config(belt_coeff_pil=0.2), params, 4.0)[1] == 0.2


def test_frame_and_return_helpers():
    assert effective_frame_height(FrameHeightMode.STANDARD, 4.0) == 6.5
    assert effective_frame_height(FrameHeightMode.CUSTOM, 4.0, 10.0) == 10.0
    assert not requires_snub_rollers(6.5, 4.0, 4.0)
    assert requires_snub_rollers(6.0, 4.0, 4.0)
    assert gravity_roller_quantity(240.0, snubs=False) == 5
    assert gravity_roller_quantity(240.0, snubs=True) == 3
    assert gravity_roller_quantity(30.0, snubs=False) == 2
    assert total_belt_length(100.0, 4.0, 4.0) == pytest.approx(200 + 4 * math.pi)


def test_shaft_diameter():
    assert shaft_diameter(ShaftDiameterMode.CALCULATED, None, 18.0) == 1.0
    assert shaft_diameter(ShaftDiameterMode.CALCULATED, None, 30.0) == 1.25
    assert shaft_diameter(ShaftDiameterMode.CALCULATED, None, 48.0) == 1.5
    assert shaft_diameter(ShaftDiameterMode.MANUAL, 1.75, 18.0) == 1.75


# ============================================================
# Registry
# ============================================================

def test_registry_order():
    """Cleat layout feeds belt weight; belt pull feeds shell and PCI stress."""
    names = list_calculators()
    assert names.index("cleat_layout") < names.index("belt_drive")
    assert names.index("belt_drive") < names.index("drive_wall_validation")
    assert names.index("belt_drive") < names.index("drive_pci")
    assert has_calculator("tail_pci")
    with pytest.raises(ValueError):
        get_calculator("no_such_calculator")


def test_run_calculators_threads_cleat_weight(snapshot):
    config = make_config(
        cleats_enabled=True, cleat_height_in=1.0, cleat_spacing_in=12.0, cleat_edge_offset_in=1.0,
        drive_pulley_model_key="PCI_DRUM_4IN",
    )
    ctx = CalcContext(snapshot=snapshot, params=EngineParameters())
    results = run_calculators(config, ctx)
    assert results["belt_drive"].cleat_weight_lb_per_ft == pytest.approx(0.45)
    assert results["drive_wall_validation"].status.value == "PASS"
    assert results["tail_wall_validation"] is None
    assert results["cleats_min_pulley"] is None   # no cleat profile selected
