"""
Group 1: structural and required-field validation.

Every issue here is an error and blocks. Later groups that read derived
geometry or calculator output are skipped when this group reports errors.
"""

from typing import List

from ..geometry import drive_pulley_diameter, requires_legs
from ..models import (
    BulkInputMethod, FrameConstructionType, FrameHeightMode, GearmotorMountingStyle,
    GeometryMode, MaterialForm, ReferenceEnd, ShaftDiameterMode, SpeedMode, SupportType,
    TrackingMode, BeltFamily, CleatSpacingMode,
)
from ..schemas import Configuration, Issue
from .issues import make_issue

MIN_PULLEY_DIAMETER_IN = 2.5
MIN_FRAME_HEIGHT_IN = 3.0
BELT_COEFF_RANGE = (0.05, 0.30)
SHAFT_RANGE_IN = (0.5, 4.0)
CLEAT_HEIGHT_RANGE_IN = (0.5, 6.0)
CLEAT_SPACING_RANGE_IN = (2.0, 48.0)
MAX_CLEAT_EDGE_OFFSET_IN = 12.0
MAX_PULLEY_END_TO_FRAME_IN = 6.0


def _not_positive(value) -> bool:
    return value is None or value <= 0


def _out_of_range(value, bounds) -> bool:
    low, high = bounds
    return value < low or value > high


def _whole(value) -> bool:
    return float(value).is_integer()


def _geometry(config: Configuration) -> List[Issue]:
    issues = []
    if config.geometry_mode == GeometryMode.L_ANGLE:
        if _not_positive(config.conveyor_length_cc_in):
            issues.append(make_issue("vi_conveyor_length_zero"))
    elif _not_positive(config.horizontal_run_in or config.conveyor_length_cc_in):
        issues.append(make_issue("vi_horizontal_run_zero"))

    if config.geometry_mode == GeometryMode.H_TOB:
        if config.tail_tob_in is None:
            issues.append(make_issue("vi_tail_tob_required_htob"))
        if config.drive_tob_in is None:
            issues.append(make_issue("vi_drive_tob_required_htob"))

    if _not_positive(config.belt_width_in):
        issues.append(make_issue("vi_belt_width_zero"))
    if config.conveyor_incline_deg is not None and config.conveyor_incline_deg < 0:
        issues.append(make_issue("vi_incline_negative"))
    return issues


def _pulleys(config: Configuration) -> List[Issue]:
    issues = []
    if config.pulley_diameter_in is not None and config.pulley_diameter_in <= 0:
        issues.append(make_issue("vi_pulley_diameter_zero"))

    if config.drive_pulley_diameter_in is not None:
        if config.drive_pulley_diameter_in <= 0:
            issues.append(make_issue("vi_drive_pulley_zero"))
        elif config.drive_pulley_diameter_in < MIN_PULLEY_DIAMETER_IN:
            issues.append(make_issue("vi_drive_pulley_min"))

    if config.tail_pulley_diameter_in is not None:
        if config.tail_pulley_diameter_in <= 0:
            issues.append(make_issue("vi_tail_pulley_zero"))
        elif config.tail_pulley_diameter_in < MIN_PULLEY_DIAMETER_IN:
            issues.append(make_issue("vi_tail_pulley_min"))
    return issues


def _speed(config: Configuration) -> List[Issue]:
    issues = []
    if config.speed_mode == SpeedMode.DRIVE_RPM:
        if _not_positive(config.drive_rpm_input):
            issues.append(make_issue("vi_drive_rpm_zero"))
    elif _not_positive(config.belt_speed_fpm):
        issues.append(make_issue("vi_belt_speed_zero"))

    if _not_positive(drive_pulley_diameter(config)):
        issues.append(make_issue("vi_pulley_dia_for_speed"))

    if config.gearmotor_mounting_style == GearmotorMountingStyle.BOTTOM_MOUNT:
        if _not_positive(config.gm_sprocket_teeth):
            issues.append(make_issue("vi_gm_sprocket_teeth_zero"))
        elif not _whole(config.gm_sprocket_teeth):
            issues.append(make_issue("vi_gm_sprocket_teeth_integer"))
        if _not_positive(config.drive_shaft_sprocket_teeth):
            issues.append(make_issue("vi_drive_shaft_sprocket_zero"))
        elif not _whole(config.drive_shaft_sprocket_teeth):
            issues.append(make_issue("vi_drive_shaft_sprocket_integer"))

    if config.required_throughput_pph is not None and config.required_throughput_pph < 0:
        issues.append(make_issue("vi_throughput_negative"))
    if config.throughput_margin_pct is not None and config.throughput_margin_pct < 0:
        issues.append(make_issue("vi_throughput_margin_negative"))
    return issues


def _material(config: Configuration) -> List[Issue]:
    issues = []
    if config.material_form is None:
        issues.append(make_issue("vi_material_form_required"))

    elif config.material_form == MaterialForm.PARTS:
        if _not_positive(config.part_weight_lbs):
            issues.append(make_issue("vi_part_weight_required"))
        if _not_positive(config.part_length_in):
            issues.append(make_issue("vi_part_length_required"))
        if _not_positive(config.part_width_in):
            issues.append(make_issue("vi_part_width_required"))
        if config.part_spacing_in is not None and config.part_spacing_in < 0:
            issues.append(make_issue("vi_part_spacing_negative"))

    elif config.bulk_input_method is None:
        issues.append(make_issue("vi_bulk_method_required"))
    elif config.bulk_input_method == BulkInputMethod.WEIGHT_FLOW:
        if _not_positive(config.mass_flow_lbs_per_hr):
            issues.append(make_issue("vi_mass_flow_required"))
    else:
        if _not_positive(config.volume_flow_ft3_per_hr):
            issues.append(make_issue("vi_volume_flow_required"))
        if _not_positive(config.density_lbs_per_ft3):
            issues.append(make_issue("vi_density_required"))
        if config.density_source is None:
            issues.append(make_issue("vi_density_source_required"))

    if config.drop_height_in is not None and config.drop_height_in < 0:
        issues.append(make_issue("vi_drop_height_negative"))
    return issues


def _power_user_parameters(config: Configuration) -> List[Issue]:
    issues = []
    if config.safety_factor is not None:
        if config.safety_factor < 1.0:
            issues.append(make_issue("vi_safety_factor_low"))
        if config.safety_factor > 5.0:
            issues.append(make_issue("vi_safety_factor_high"))

    if config.belt_coeff_piw is not None:
        if config.belt_coeff_piw <= 0:
            issues.append(make_issue("vi_piw_zero"))
        if _out_of_range(config.belt_coeff_piw, BELT_COEFF_RANGE):
            issues.append(make_issue("vi_piw_range"))
    if config.belt_coeff_pil is not None:
        if config.belt_coeff_pil <= 0:
            issues.append(make_issue("vi_pil_zero"))
        if _out_of_range(config.belt_coeff_pil, BELT_COEFF_RANGE):
            issues.append(make_issue("vi_pil_range"))

    if config.starting_belt_pull_lb is not None:
        if config.starting_belt_pull_lb < 0:
            issues.append(make_issue("vi_starting_pull_negative"))
        if config.starting_belt_pull_lb > 2000:
            issues.append(make_issue("vi_starting_pull_high"))

    if config.friction_coeff is not None:
        if config.friction_coeff < 0.05:
            issues.append(make_issue("vi_friction_coeff_low"))
        if config.friction_coeff > 0.6:
            issues.append(make_issue("vi_friction_coeff_high"))

    if config.motor_rpm is not None:
        if config.motor_rpm < 800:
            issues.append(make_issue("vi_motor_rpm_low"))
        if config.motor_rpm > 3600:
            issues.append(make_issue("vi_motor_rpm_high"))
    return issues


def _belt(config: Configuration) -> List[Issue]:
    issues = []
    if config.belt_tracking_method == TrackingMode.V_GUIDED:
        if not config.v_guide_key:
            issues.append(make_issue("vi_vguide_profile_required"))
        elif config.belt_family == BeltFamily.PU and config.v_guide_has_pu_data is False:
            issues.append(make_issue("vi_pu_belt_vguide_incompatible"))

    if config.belt_piw_override is not None:
        if config.belt_piw_override <= 0:
            issues.append(make_issue("vi_piw_override_zero"))
        if _out_of_range(config.belt_piw_override, BELT_COEFF_RANGE):
            issues.append(make_issue("vi_piw_override_range"))
    if config.belt_pil_override is not None:
        if config.belt_pil_override <= 0:
            issues.append(make_issue("vi_pil_override_zero"))
        if _out_of_range(config.belt_pil_override, BELT_COEFF_RANGE):
            issues.append(make_issue("vi_pil_override_range"))

    manual_coefficients = any(v is not None for v in (
        config.belt_piw_override, config.belt_pil_override,
        config.belt_coeff_piw, config.belt_coeff_pil,
    ))
    if not config.belt_catalog_key and not manual_coefficients:
        issues.append(make_issue("vi_belt_selection_required"))
    return issues


def _shafts(config: Configuration) -> List[Issue]:
    issues = []
    if config.shaft_diameter_mode == ShaftDiameterMode.MANUAL:
        if _not_positive(config.drive_shaft_diameter_in):
            issues.append(make_issue("vi_drive_shaft_manual_required"))
        if _not_positive(config.tail_shaft_diameter_in):
            issues.append(make_issue("vi_tail_shaft_manual_required"))

    low, high = SHAFT_RANGE_IN
    drive = config.drive_shaft_diameter_in
    if drive is not None and drive > 0:
        if drive < low:
            issues.append(make_issue("vi_drive_shaft_min"))
        if drive > high:
            issues.append(make_issue("vi_drive_shaft_max"))
    tail = config.tail_shaft_diameter_in
    if tail is not None and tail > 0:
        if tail < low:
            issues.append(make_issue("vi_tail_shaft_min"))
        if tail > high:
            issues.append(make_issue("vi_tail_shaft_max"))
    return issues


def _cleats(config: Configuration) -> List[Issue]:
    if not config.cleats_enabled:
        return []
    issues = []

    height = config.cleat_height_in
    if _not_positive(height):
        issues.append(make_issue("vi_cleat_height_required"))
    elif height < CLEAT_HEIGHT_RANGE_IN[0]:
        issues.append(make_issue("vi_cleat_height_min"))
    elif height > CLEAT_HEIGHT_RANGE_IN[1]:
        issues.append(make_issue("vi_cleat_height_max"))

    spacing = config.cleat_spacing_in
    if _not_positive(spacing):
        if config.cleat_spacing_mode == CleatSpacingMode.USE_NOMINAL:
            issues.append(make_issue("vi_cleat_spacing_required"))
    elif spacing < CLEAT_SPACING_RANGE_IN[0]:
        issues.append(make_issue("vi_cleat_spacing_min"))
    elif spacing > CLEAT_SPACING_RANGE_IN[1]:
        issues.append(make_issue("vi_cleat_spacing_max"))

    offset = config.cleat_edge_offset_in
    if offset is None:
        issues.append(make_issue("vi_cleat_edge_offset_required"))
    elif offset < 0:
        issues.append(make_issue("vi_cleat_edge_offset_min"))
    elif offset > MAX_CLEAT_EDGE_OFFSET_IN:
        issues.append(make_issue("vi_cleat_edge_offset_max"))
    return issues


def _heights(config: Configuration) -> List[Issue]:
    issues = []
    if config.tail_tob_in is not None and config.tail_tob_in < 0:
        issues.append(make_issue("vi_tail_tob_negative"))
    if config.drive_tob_in is not None and config.drive_tob_in < 0:
        issues.append(make_issue("vi_drive_tob_negative"))
    if config.adjustment_required_in is not None and config.adjustment_required_in < 0:
        issues.append(make_issue("vi_adjustment_range_negative"))
    return issues


def _supports(config: Configuration) -> List[Issue]:
    issues = []
    floor = (SupportType.LEGS, SupportType.CASTERS)
    floor_supported = requires_legs(config) or config.support_method in floor

    if floor_supported and config.geometry_mode != GeometryMode.H_TOB:
        if config.reference_end == ReferenceEnd.TAIL:
            reference_tob, field = config.tail_tob_in, "tail_tob_in"
        else:
            reference_tob, field = config.drive_tob_in, "drive_tob_in"
        if reference_tob is None:
            issues.append(make_issue("vi_tob_required_floor", field=field))

    rigid_qty = config.caster_rigid_qty or 0
    swivel_qty = config.caster_swivel_qty or 0

    if config.include_legs is None and config.include_casters is None:
        # Legacy single support method
        if config.support_method == SupportType.LEGS and not config.leg_model_key:
            issues.append(make_issue("vi_leg_model_legacy"))
        if config.support_method == SupportType.CASTERS:
            if rigid_qty + swivel_qty == 0:
                issues.append(make_issue("vi_caster_qty_legacy"))
            if rigid_qty > 0 and not config.caster_rigid_model_key:
                issues.append(make_issue("vi_rigid_caster_model_legacy"))
            if swivel_qty > 0 and not config.caster_swivel_model_key:
                issues.append(make_issue("vi_swivel_caster_model_legacy"))
        return issues

    if config.include_legs and not config.leg_model_key:
        issues.append(make_issue("vi_leg_model_required"))
    if config.include_casters:
        if rigid_qty + swivel_qty == 0:
            issues.append(make_issue("vi_caster_qty_zero"))
        if rigid_qty > 0 and not config.caster_rigid_model_key:
            issues.append(make_issue("vi_rigid_caster_model_required"))
        if swivel_qty > 0 and not config.caster_swivel_model_key:
            issues.append(make_issue("vi_swivel_caster_model_required"))
    return issues


def _frame(config: Configuration) -> List[Issue]:
    issues = []
    if config.frame_height_mode == FrameHeightMode.CUSTOM:
        height = config.custom_frame_height_in
        if height is None:
            issues.append(make_issue("vi_custom_frame_height_required"))
        elif height <= 0:
            issues.append(make_issue("vi_custom_frame_height_zero"))
        elif height < MIN_FRAME_HEIGHT_IN:
            issues.append(make_issue("vi_custom_frame_height_min"))

    if config.frame_construction_type == FrameConstructionType.SHEET_METAL:
        if not config.frame_sheet_metal_gauge:
            issues.append(make_issue("vi_sheet_metal_gauge_required"))
    elif not config.frame_structural_channel_series:
        issues.append(make_issue("vi_channel_series_required"))

    end_gap = config.pulley_end_to_frame_inside_in
    if end_gap is not None:
        if end_gap < 0:
            issues.append(make_issue("vi_pulley_end_frame_min"))
        elif end_gap > MAX_PULLEY_END_TO_FRAME_IN:
            issues.append(make_issue("vi_pulley_end_frame_max"))
    return issues


def validate_inputs(config: Configuration) -> List[Issue]:
    """All structural checks, in a fixed order. Never short-circuits."""
    issues = []
    for check in (_geometry, _pulleys, _speed, _material, _power_user_parameters,
                  _belt, _shafts, _cleats, _heights, _supports, _frame):
        issues.extend(check(config))
    return issues
