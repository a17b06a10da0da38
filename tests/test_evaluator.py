"""
Rule evaluator tests.

Tests:
1-5.   Pipeline behavior (clean baseline, purity, skip on input errors, parsing)
6-9.   Input and parameter groups
10-12. Commit-mode TOB requirements and height advisories
13-18. Application rules (cleats, pulleys, frame, drive train, premium)
19-22. PCI and hub connection groups
"""

import pytest

from conveyor_core.errors import StructuralInputError
from conveyor_core.models import (
    BushingSystem, CleatPattern, EvaluationMode, FrameHeightMode, GeometryMode, HubConnectionType,
    PciStatus, ProductKey, SupportType,
)
from conveyor_core.rules import evaluate, flatten_outputs
from conveyor_core.schemas import EngineParameters

from conftest import BASELINE, make_config


def _ids(result):
    return [issue.rule_id for issue in result.issues]


CLEATS = dict(
    cleats_enabled=True, cleat_height_in=1.0, cleat_spacing_in=12.0, cleat_edge_offset_in=1.0,
    cleat_profile="T-Cleat", cleat_size='1"', cleat_pattern=CleatPattern.STRAIGHT_CROSS,
)


# ============================================================
# Pipeline
# ============================================================

def test_baseline_is_clean(snapshot, baseline):
    result = evaluate(baseline, snapshot)
    assert result.issues == []
    assert not result.blocking
    assert result.catalog_version == "2026.01-seed"
    assert result.outputs["belt_speed_fpm"] == 60.0
    assert result.outputs["gear_ratio"] == pytest.approx(result.belt_drive.gear_ratio)


def test_evaluation_is_pure(snapshot, baseline):
    """Same inputs, same issues in the same order, same outputs."""
    config = make_config(conveyor_length_cc_in=240.0, conveyor_incline_deg=25.0, **CLEATS)
    first = evaluate(config, snapshot)
    second = evaluate(config, snapshot)
    assert first.issues == second.issues
    assert first.outputs == second.outputs


def test_input_errors_skip_dependent_groups(snapshot):
    config = make_config(belt_width_in=None, drive_hub_connection_type=HubConnectionType.DEAD_SHAFT_ASSEMBLY)
    result = evaluate(config, snapshot)
    assert _ids(result) == ["vi_belt_width_zero"]   # hub group never ran
    assert result.blocking
    assert result.outputs == {}
    assert result.belt_drive is None


def test_dict_inputs_parsed(snapshot):
    result = evaluate(dict(BASELINE), snapshot)
    assert result.issues == []
    with pytest.raises(StructuralInputError) as exc:
        evaluate({**BASELINE, "not_a_field": 1}, snapshot)
    assert exc.value.errors
    with pytest.raises(StructuralInputError):
        evaluate({**BASELINE, "belt_width_in": "wide"}, snapshot)


def test_flatten_outputs_prefixes_and_drops_nested(snapshot):
    result = evaluate(make_config(drive_pulley_model_key="PCI_DRUM_4IN"), snapshot)
    outputs = result.outputs
    assert "total_belt_pull_lb" in outputs                      # belt drive is unprefixed
    assert outputs["drive_wall_validation_status"] == "PASS"
    assert "drive_wall_validation_details" not in outputs       # nested object dropped
    assert outputs["drive_wall_validation_recommended_wall_in"] is None   # explicit null kept
    assert flatten_outputs({"belt_drive": None}) == {}


# ============================================================
# Inputs / parameters
# ============================================================

def test_structural_errors_collected_in_order(snapshot):
    config = make_config(conveyor_length_cc_in=0.0, drive_pulley_diameter_in=2.0, belt_speed_fpm=None)
    assert _ids(evaluate(config, snapshot)) == [
        "vi_conveyor_length_zero", "vi_drive_pulley_min", "vi_belt_speed_zero",
    ]


def test_belt_selection_required(snapshot):
    assert "vi_belt_selection_required" in _ids(evaluate(make_config(belt_catalog_key=None), snapshot))
    manual = make_config(belt_catalog_key=None, belt_coeff_piw=0.12)
    assert "vi_belt_selection_required" not in _ids(evaluate(manual, snapshot))


def test_floor_support_needs_reference_tob(snapshot):
    result = evaluate(make_config(tail_support_type=SupportType.LEGS), snapshot)
    assert "vi_tob_required_floor" in _ids(result)
    assert result.issues[0].field == "tail_tob_in"


def test_parameter_guards_run_despite_input_errors(snapshot):
    params = EngineParameters(friction_coeff=0.05)
    result = evaluate(make_config(belt_width_in=None), snapshot, params)
    assert _ids(result) == ["vi_belt_width_zero", "vp_friction_coeff_range"]


# ============================================================
# TOB / height
# ============================================================

def test_tob_requirements_only_on_commit(snapshot):
    config = make_config(tail_support_type=SupportType.LEGS)
    draft = _ids(evaluate(config, snapshot, mode=EvaluationMode.DRAFT))
    commit = _ids(evaluate(config, snapshot, mode="commit"))
    assert "tob_tail_floor_required" not in draft
    assert "tob_tail_floor_required" in commit


def test_htob_commit_requires_both_heights(snapshot):
    config = make_config(geometry_mode=GeometryMode.H_TOB, horizontal_run_in=96.0, tail_tob_in=30.0)
    ids = _ids(evaluate(config, snapshot, mode=EvaluationMode.COMMIT))
    assert "vi_drive_tob_required_htob" in ids
    assert "tob_drive_htob_required" in ids
    assert "tob_tail_htob_required" not in ids


def test_height_advisories(snapshot):
    result = evaluate(make_config(tail_tob_in=30.0, drive_tob_in=40.0, adjustment_required_in=8.0), snapshot)
    ids = _ids(result)
    assert "hw_angle_mismatch" in ids                  # 0 deg entered, about 6 deg implied
    assert "hw_adjustment_range_large" in ids
    assert not result.blocking
    very_large = evaluate(make_config(adjustment_required_in=14.0), snapshot)
    assert _ids(very_large) == ["hw_adjustment_range_very_large"]


# ============================================================
# Application rules
# ============================================================

def test_cleats_within_minimum(snapshot):
    result = evaluate(make_config(**CLEATS), snapshot)
    assert _ids(result) == ["ar_cleat_height_frame_contribution"]
    assert result.cleats_min_pulley.rounded_min_dia_in == 4.0
    assert result.outputs["cleat_layout_cleat_count"] == 8


def test_cleats_below_minimum_block(snapshot):
    config = make_config(**{**CLEATS, "cleat_spacing_in": 4.0})
    result = evaluate(config, snapshot)
    ids = _ids(result)
    assert "ar_drive_pulley_below_cleat_min" in ids
    assert "ar_tail_pulley_below_cleat_min" in ids
    assert "ar_cleat_spacing_vs_part" in ids            # 12" parts between 4" cleats
    assert result.blocking
    drive = next(i for i in result.issues if i.rule_id == "ar_drive_pulley_below_cleat_min")
    assert '5.5"' in drive.message


def test_cleat_lookup_failure_is_a_warning(snapshot):
    config = make_config(**{**CLEATS, "cleat_size": '3"', "cleat_style": "DRILL_SIPED_1IN"})
    result = evaluate(config, snapshot)
    failed = next(i for i in result.issues if i.rule_id == "ar_cleat_lookup_failed")
    assert "not supported" in failed.message
    assert not result.blocking


def test_catalog_pulley_station_rules(snapshot):
    internal = evaluate(make_config(drive_pulley_catalog_key="INTERNAL_BEARING_TAIL_4"), snapshot)
    assert _ids(internal) == ["pulley_internal_bearings_station"]
    assert "INTERNAL_BEARING_TAIL_4" in internal.issues[0].message
    wing = evaluate(make_config(drive_pulley_catalog_key="WING_TAIL_4"), snapshot)
    assert _ids(wing) == ["pulley_station_incompatible"]
    tail = evaluate(make_config(tail_pulley_catalog_key="INTERNAL_BEARING_TAIL_4"), snapshot)
    assert tail.issues == []


def test_frame_and_layout_rules(snapshot):
    low = evaluate(make_config(
        frame_height_mode=FrameHeightMode.LOW_PROFILE, drive_pulley_diameter_in=2.5,
        tail_pulley_diameter_in=2.5,
    ), snapshot)
    ids = _ids(low)
    assert "ar_frame_height_design_review" in ids       # 2.5 + 0.5 = 3" frame
    assert "ar_snub_rollers_required" in ids
    assert "ar_low_profile_info" in ids
    long_incline = _ids(evaluate(make_config(conveyor_length_cc_in=240.0, conveyor_incline_deg=25.0), snapshot))
    assert long_incline == ["ar_long_conveyor", "ar_incline_20_35"]


def test_drive_train_rules(snapshot):
    fast = evaluate(make_config(belt_speed_fpm=400.0), snapshot)
    assert "ar_belt_speed_high" in _ids(fast)
    assert "ar_gear_ratio_low" in _ids(fast)            # 1750 / 382 rpm
    slow = evaluate(make_config(belt_speed_fpm=10.0), snapshot)
    assert "ar_gear_ratio_high" in _ids(slow)


def test_premium_features_on_belt_conveyor(snapshot):
    config = make_config(product_key=ProductKey.BELT_CONVEYOR, finger_safe=True, bottom_covers=True,
                         end_guards="both_ends")
    result = evaluate(config, snapshot)
    assert _ids(result) == ["ar_premium_feature"]
    assert result.issues[0].message == "Premium feature: Finger-safe guarding"
    sliderbed = evaluate(make_config(finger_safe=True, bottom_covers=True, end_guards="both_ends"), snapshot)
    assert sliderbed.issues == []


# ============================================================
# PCI / hub connections
# ============================================================

def test_pci_estimated_hub_centers(snapshot):
    result = evaluate(make_config(drive_tube_od_in=4.0, drive_tube_wall_in=0.134), snapshot)
    assert result.drive_pci.status == PciStatus.ESTIMATED
    assert result.drive_pci.hub_centers_in == 18.0       # belt width
    assert _ids(result) == ["pci_hub_centers_estimated", "pci_status_estimated"]


def test_pci_over_limit_warns_or_blocks(snapshot):
    thin = dict(drive_tube_od_in=4.0, drive_tube_wall_in=0.01, hub_centers_in=60.0)
    warned = evaluate(make_config(**thin), snapshot)
    assert warned.drive_pci.status == PciStatus.WARN
    assert _ids(warned) == ["pci_drive_stress_warn"]
    assert not warned.blocking

    enforced = evaluate(make_config(enforce_pci_checks=True, **thin), snapshot)
    assert enforced.drive_pci.status == PciStatus.FAIL
    assert _ids(enforced) == ["pci_drive_stress_fail"]
    assert enforced.blocking


def test_pci_impossible_tube(snapshot):
    result = evaluate(make_config(tail_tube_od_in=4.0, tail_tube_wall_in=2.5, hub_centers_in=18.0), snapshot)
    assert _ids(result) == ["pci_tube_geometry_error"]
    assert result.issues[0].field == "tail_tube_wall_in"
    assert result.blocking


def test_hub_connection_rules(snapshot):
    dead = evaluate(make_config(drive_hub_connection_type=HubConnectionType.DEAD_SHAFT_ASSEMBLY), snapshot)
    assert _ids(dead) == ["hub_not_ideal_for_drive"]
    assert dead.issues[0].message.startswith("Dead Shaft Assembly is not ideal")

    taper = evaluate(make_config(
        tail_hub_connection_type=HubConnectionType.WELD_ON_HUB_COMPRESSION_BUSHINGS,
        tail_bushing_system=BushingSystem.TAPER_LOCK,
        drive_hub_connection_type=HubConnectionType.WELD_ON_HUB_COMPRESSION_BUSHINGS,
    ), snapshot)
    assert _ids(taper) == ["hub_tail_taper_lock"]       # drive defaults to XT
    assert taper.issues[0].message.startswith("Tail pulley: PCI:")
