"""
Group 3: application rules.

Reads the configuration plus calculator results already in the context.
Runs only when validate_inputs found no errors, so the geometry it
normalizes is valid and required fields are present.
"""

import logging
from typing import List, Optional

from ..calculators.base import CalcContext
from ..calculators.belt_drive import (
    DESIGN_REVIEW_FRAME_HEIGHT_IN, chain_ratio, effective_frame_height, requires_snub_rollers,
    travel_dimension,
)
from ..calculators.cleat_layout import has_small_odd_gap
from ..catalog.pulleys import PulleyFilterCriteria, evaluate_pulley, get_effective_diameter
from ..geometry import drive_pulley_diameter, normalize_geometry, tail_pulley_diameter
from ..models import (
    BeltFamily, BulkInputMethod, DensitySource, EndGuards, FeedBehavior, FluidType,
    FrameHeightMode, GearmotorMountingStyle, LacingStyle, MaterialForm, PartTemperatureClass,
    ProductKey, PulleyStation, ReturnFrameStyle, ReturnSnubMode, SideLoadingDirection,
    SideLoadingSeverity, TrackingMode,
)
from ..schemas import Configuration, Issue
from .issues import make_issue

logger = logging.getLogger(__name__)

LONG_CONVEYOR_IN = 120.0
HIGH_DROP_IN = 24.0
LUMP_BELT_WIDTH_RATIO = 0.8
MIN_CYCLE_TIME_S = 10.0
GRAVITY_ROLLER_SAG_IN = 72.0
GRAVITY_ROLLER_TIGHT_IN = 24.0
END_OFFSET_RANGE_IN = (6.0, 60.0)
CHAIN_RATIO_RANGE = (0.5, 3.0)
MIN_SPROCKET_TEETH = 12
MAX_BELT_SPEED_FPM = 300.0
GEAR_RATIO_RANGE = (5.0, 60.0)


def _fmt(value: float) -> str:
    return f"{value:g}"


# ============================================================
# Application / material
# ============================================================

def _environment(config: Configuration) -> List[Issue]:
    issues = []
    if config.part_temperature_class == PartTemperatureClass.RED_HOT:
        issues.append(make_issue("ar_red_hot_parts"))
    elif config.part_temperature_class == PartTemperatureClass.HOT:
        issues.append(make_issue("ar_hot_parts"))

    if config.fluid_type == FluidType.CONSIDERABLE:
        issues.append(make_issue("ar_considerable_oil"))
    elif config.fluid_type == FluidType.MINIMAL:
        issues.append(make_issue("ar_minimal_oil"))

    if config.drop_height_in is not None and config.drop_height_in >= HIGH_DROP_IN:
        issues.append(make_issue(
            "ar_drop_height_high",
            f'Drop height of {_fmt(config.drop_height_in)}" is high. Consider impact or wear protection.',
        ))
    return issues


def _layout(config: Configuration) -> List[Issue]:
    issues = []
    geometry = normalize_geometry(config)
    if geometry.length_cc_in > LONG_CONVEYOR_IN:
        issues.append(make_issue("ar_long_conveyor"))

    incline = geometry.incline_deg
    if incline > 45:
        issues.append(make_issue("ar_incline_over_45"))
    elif incline > 35:
        issues.append(make_issue("ar_incline_35_45"))
    elif incline > 20:
        issues.append(make_issue("ar_incline_20_35"))
    return issues


def _bulk(config: Configuration) -> List[Issue]:
    if config.material_form != MaterialForm.BULK:
        return []
    issues = []
    if config.density_source == DensitySource.ASSUMED_CLASS:
        issues.append(make_issue("ar_density_assumed"))

    smallest = config.smallest_lump_size_in
    largest = config.largest_lump_size_in
    if smallest is not None and smallest < 0:
        issues.append(make_issue("ar_smallest_lump_negative"))
    if largest is not None and largest < 0:
        issues.append(make_issue("ar_largest_lump_negative"))
    if smallest is not None and largest is not None and smallest > largest:
        issues.append(make_issue("ar_lump_size_inversion"))
    if largest is not None and config.belt_width_in and largest > config.belt_width_in * LUMP_BELT_WIDTH_RATIO:
        issues.append(make_issue(
            "ar_lump_exceeds_belt_width",
            f'Largest lump ({_fmt(largest)}") exceeds 80% of belt width ({_fmt(config.belt_width_in)}")',
        ))

    if config.feed_behavior == FeedBehavior.SURGE:
        if config.surge_multiplier is None:
            issues.append(make_issue("ar_surge_multiplier_missing"))
        elif config.surge_multiplier < 1.0:
            issues.append(make_issue("ar_surge_multiplier_low"))

    if config.bulk_input_method == BulkInputMethod.WEIGHT_FLOW and config.density_lbs_per_ft3 is None:
        issues.append(make_issue("ar_weight_flow_no_density"))
    return issues


# ============================================================
# Belt / pulleys
# ============================================================

def _belt_min_pulley(config: Configuration) -> Optional[float]:
    if config.belt_tracking_method == TrackingMode.V_GUIDED:
        return config.belt_min_pulley_dia_with_vguide_in
    return config.belt_min_pulley_dia_no_vguide_in


def _belt(config: Configuration) -> List[Issue]:
    issues = []
    v_guided = config.belt_tracking_method == TrackingMode.V_GUIDED
    if v_guided and config.belt_family == BeltFamily.FLEECE and config.v_guide_key:
        issues.append(make_issue("ar_fleece_vguide"))

    belt_min = _belt_min_pulley(config)
    if belt_min is None:
        return issues
    tracking_label = "V-guided" if v_guided else "crowned"

    if config.belt_catalog_key:
        rule_ids = ("ar_belt_catalog_drive_pulley_min", "ar_belt_catalog_tail_pulley_min")
        source = f"catalog belt {config.belt_catalog_key}"
    else:
        rule_ids = ("ar_drive_pulley_below_belt_min", "ar_tail_pulley_below_belt_min")
        source = "belt"

    for label, diameter, rule_id in (
        ("Drive", drive_pulley_diameter(config), rule_ids[0]),
        ("Tail", tail_pulley_diameter(config), rule_ids[1]),
    ):
        if diameter is not None and diameter < belt_min:
            issues.append(make_issue(
                rule_id,
                f'{label} pulley diameter ({_fmt(diameter)}") is below the {source} minimum '
                f'({_fmt(belt_min)}" for {tracking_label} tracking)',
            ))
    return issues


_PULLEY_ISSUE_RULES = {
    "INTERNAL_BEARINGS_TAIL_ONLY": "pulley_internal_bearings_station",
    "STATION_INCOMPATIBLE": "pulley_station_incompatible",
    "FACE_WIDTH_EXCEEDED": "pulley_face_width_exceeded",
}


def _catalog_pulleys(config: Configuration, ctx: CalcContext) -> List[Issue]:
    """Station and face width checks for catalog-selected pulleys."""
    issues = []
    for label, key, station in (
        ("Drive", config.drive_pulley_catalog_key, PulleyStation.HEAD_DRIVE),
        ("Tail", config.tail_pulley_catalog_key, PulleyStation.TAIL),
    ):
        if not key:
            continue
        pulley = ctx.snapshot.get_pulley_item(key)
        if pulley is None:
            logger.warning("Pulley catalog key %s not in snapshot %s", key, ctx.snapshot.version)
            continue
        criteria = PulleyFilterCriteria(station=station, face_width_required_in=config.belt_width_in)
        found = evaluate_pulley(pulley, criteria, get_effective_diameter(pulley))
        codes = {issue.code for issue in found}
        for issue in found:
            rule_id = _PULLEY_ISSUE_RULES.get(issue.code)
            if rule_id is None:
                continue
            # The internal-bearing message already says why the station is wrong
            if issue.code == "STATION_INCOMPATIBLE" and "INTERNAL_BEARINGS_TAIL_ONLY" in codes:
                continue
            issues.append(make_issue(rule_id, f"{label} pulley {pulley.catalog_key}: {issue.message}"))
    return issues


# ============================================================
# Cleats
# ============================================================

def _cleats(config: Configuration, ctx: CalcContext) -> List[Issue]:
    if not config.cleats_enabled:
        return []
    issues = []

    spacing = config.cleat_spacing_in
    travel = travel_dimension(config) if config.material_form == MaterialForm.PARTS else None
    if spacing and travel and spacing < travel:
        issues.append(make_issue(
            "ar_cleat_spacing_vs_part",
            f'Cleat spacing ({_fmt(spacing)}") is less than the part travel dimension ({_fmt(travel)}"). '
            "Parts will not fit between cleats.",
        ))

    offset = config.cleat_edge_offset_in
    if offset is not None and config.belt_width_in and offset > config.belt_width_in / 2:
        issues.append(make_issue("ar_cleat_edge_offset_overlap"))

    min_pulley = ctx.get("cleats_min_pulley")
    if min_pulley is not None:
        if min_pulley.success:
            required = min_pulley.rounded_min_dia_in
            for label, diameter, rule_id in (
                ("Drive", drive_pulley_diameter(config), "ar_drive_pulley_below_cleat_min"),
                ("Tail", tail_pulley_diameter(config), "ar_tail_pulley_below_cleat_min"),
            ):
                if diameter is not None and diameter < required:
                    issues.append(make_issue(
                        rule_id,
                        f'{label} pulley diameter ({_fmt(diameter)}") is below the cleat minimum '
                        f'({_fmt(required)}" at {_fmt(min_pulley.centers_factor)}x centers factor)',
                    ))
        else:
            issues.append(make_issue("ar_cleat_lookup_failed", min_pulley.error))

    layout = ctx.get("cleat_layout")
    if has_small_odd_gap(layout):
        issues.append(make_issue(
            "ar_cleat_odd_gap_small",
            f'Odd cleat gap of {layout.odd_gap_in:.2f}" is less than 2". '
            "Consider a larger odd gap or spreading the remainder evenly.",
        ))
    return issues


# ============================================================
# Safety / drive
# ============================================================

def _safety(config: Configuration) -> List[Issue]:
    issues = []
    if config.finger_safe and config.end_guards == EndGuards.NONE:
        issues.append(make_issue("ar_finger_safe_no_guards"))
    if config.finger_safe and not config.bottom_covers:
        issues.append(make_issue("ar_finger_safe_no_covers"))
    if config.lacing_style == LacingStyle.CLIPPER_LACING:
        issues.append(make_issue("ar_clipper_lacing"))
    if (config.start_stop_application and config.cycle_time_seconds is not None
            and config.cycle_time_seconds < MIN_CYCLE_TIME_S):
        issues.append(make_issue("ar_start_stop_short_cycle"))
    return issues


def _side_loading(config: Configuration) -> List[Issue]:
    if config.side_loading_direction == SideLoadingDirection.NONE:
        return []
    issues = []
    if config.side_loading_severity == SideLoadingSeverity.HEAVY:
        if config.belt_tracking_method != TrackingMode.V_GUIDED:
            issues.append(make_issue("ar_heavy_sideload_no_vguide"))
        issues.append(make_issue("ar_heavy_sideload_warning"))
    elif config.side_loading_severity == SideLoadingSeverity.MODERATE:
        issues.append(make_issue("ar_moderate_sideload"))
    return issues


# ============================================================
# Frame / return support
# ============================================================

def _frame(config: Configuration) -> List[Issue]:
    issues = []
    geometry = normalize_geometry(config)
    drive_dia = geometry.drive_pulley_dia_in
    tail_dia = geometry.tail_pulley_dia_in
    frame = effective_frame_height(config.frame_height_mode, drive_dia, config.custom_frame_height_in)

    if frame < DESIGN_REVIEW_FRAME_HEIGHT_IN:
        issues.append(make_issue(
            "ar_frame_height_design_review",
            f'Frame height of {_fmt(frame)}" is below {_fmt(DESIGN_REVIEW_FRAME_HEIGHT_IN)}". Design review required.',
        ))

    snubs_required = requires_snub_rollers(frame, drive_dia, tail_dia)
    if snubs_required:
        issues.append(make_issue(
            "ar_snub_rollers_required",
            f'Frame height of {_fmt(frame)}" requires snub rollers at the pulleys',
        ))
    snubs = config.return_snub_mode == ReturnSnubMode.YES or (
        config.return_snub_mode == ReturnSnubMode.AUTO and snubs_required
    )
    if config.cleats_enabled and snubs:
        issues.append(make_issue("ar_cleats_snub_interference"))
    if config.return_frame_style == ReturnFrameStyle.LOW_PROFILE and config.return_snub_mode == ReturnSnubMode.NO:
        issues.append(make_issue("ar_low_profile_no_snubs"))

    spacing = config.return_gravity_roller_spacing_in
    if spacing is not None:
        if spacing > GRAVITY_ROLLER_SAG_IN:
            issues.append(make_issue("ar_gravity_roller_sag"))
        elif spacing < GRAVITY_ROLLER_TIGHT_IN:
            issues.append(make_issue("ar_gravity_roller_over_engineered"))

    offset = config.return_end_offset_in
    if offset is not None:
        if offset < END_OFFSET_RANGE_IN[0]:
            issues.append(make_issue("ar_end_offset_too_small"))
        elif offset > END_OFFSET_RANGE_IN[1]:
            issues.append(make_issue("ar_end_offset_too_large"))

    if config.frame_height_mode == FrameHeightMode.LOW_PROFILE:
        issues.append(make_issue("ar_low_profile_info"))
        if config.cleats_enabled:
            issues.append(make_issue("ar_low_profile_cleats_error"))
    elif config.frame_height_mode == FrameHeightMode.CUSTOM:
        issues.append(make_issue("ar_custom_frame_info"))

    if config.cleats_enabled and config.cleat_height_in and config.cleat_height_in > 0:
        issues.append(make_issue(
            "ar_cleat_height_frame_contribution",
            f'Cleats add {_fmt(2 * config.cleat_height_in)}" to the frame envelope '
            f'({_fmt(config.cleat_height_in)}" cleat on carry and return)',
        ))
    return issues


def _drive_train(config: Configuration, ctx: CalcContext) -> List[Issue]:
    issues = []
    if config.gearmotor_mounting_style == GearmotorMountingStyle.BOTTOM_MOUNT:
        ratio = chain_ratio(config)
        if ratio < CHAIN_RATIO_RANGE[0]:
            issues.append(make_issue("ar_chain_ratio_low", f"Chain ratio {ratio:.2f} is below 0.5"))
        elif ratio > CHAIN_RATIO_RANGE[1]:
            issues.append(make_issue("ar_chain_ratio_high", f"Chain ratio {ratio:.2f} exceeds 3.0"))
        if config.gm_sprocket_teeth is not None and config.gm_sprocket_teeth < MIN_SPROCKET_TEETH:
            issues.append(make_issue("ar_gm_sprocket_small"))
        if config.drive_shaft_sprocket_teeth is not None and config.drive_shaft_sprocket_teeth < MIN_SPROCKET_TEETH:
            issues.append(make_issue("ar_drive_sprocket_small"))

    drive = ctx.get("belt_drive")
    speed = drive.belt_speed_fpm if drive is not None else config.belt_speed_fpm
    if speed is not None and speed > MAX_BELT_SPEED_FPM:
        issues.append(make_issue("ar_belt_speed_high", f"Belt speed of {speed:.0f} FPM exceeds 300 FPM"))

    gear_ratio = drive.gear_ratio if drive is not None else None
    if gear_ratio is not None:
        if gear_ratio < GEAR_RATIO_RANGE[0]:
            issues.append(make_issue("ar_gear_ratio_low", f"Gear ratio {gear_ratio:.1f} is below 5"))
        elif gear_ratio > GEAR_RATIO_RANGE[1]:
            issues.append(make_issue("ar_gear_ratio_high", f"Gear ratio {gear_ratio:.1f} exceeds 60"))
    return issues


def premium_reasons(config: Configuration) -> List[str]:
    reasons = []
    if config.belt_tracking_method == TrackingMode.V_GUIDED:
        reasons.append("V-guided belt tracking")
    if config.cleats_enabled:
        reasons.append("Cleated belt")
    if config.finger_safe:
        reasons.append("Finger-safe guarding")
    return reasons


def _premium(config: Configuration) -> List[Issue]:
    if config.product_key != ProductKey.BELT_CONVEYOR:
        return []
    return [make_issue("ar_premium_feature", f"Premium feature: {reason}") for reason in premium_reasons(config)]


def apply_application_rules(config: Configuration, ctx: CalcContext) -> List[Issue]:
    issues = []
    issues.extend(_environment(config))
    issues.extend(_layout(config))
    issues.extend(_bulk(config))
    issues.extend(_belt(config))
    issues.extend(_catalog_pulleys(config, ctx))
    issues.extend(_cleats(config, ctx))
    issues.extend(_safety(config))
    issues.extend(_side_loading(config))
    issues.extend(_frame(config))
    issues.extend(_drive_train(config, ctx))
    issues.extend(_premium(config))
    return issues
