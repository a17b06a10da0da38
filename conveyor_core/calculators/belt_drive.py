"""
Belt drive calculator.

Belt length and weight, load on the belt, belt pull, drive speed and
ratios, throughput capacity, frame height and return rollers. The total
belt pull is the tension used downstream for shell stress and PCI radial
load.
"""

import math
from typing import Optional, Tuple

from ..geometry import normalize_geometry
from ..models import (
    FeedBehavior, FrameHeightMode, GearmotorMountingStyle, MaterialForm, Orientation,
    ReturnSnubMode, ShaftDiameterMode, SpeedMode,
)
from ..schemas import BeltDriveResult, Configuration, EngineParameters
from .base import BaseCalculator, CalcContext
from .tube_stress import belt_tensions, radial_load

# Frame height offsets above the drive pulley
STANDARD_FRAME_OFFSET_IN = 2.5
LOW_PROFILE_FRAME_OFFSET_IN = 0.5
MIN_FRAME_HEIGHT_IN = 3.0
DESIGN_REVIEW_FRAME_HEIGHT_IN = 4.0

SNUB_CLEARANCE_IN = 2.5
GRAVITY_ROLLER_SPACING_IN = 60.0

DEFAULT_GM_SPROCKET_TEETH = 18
DEFAULT_DRIVE_SHAFT_SPROCKET_TEETH = 24


def belt_coefficients(config: Configuration, params: EngineParameters, drive_dia_in: float) -> Tuple[float, float]:
    """
    piw / pil in order of precedence: explicit override, belt catalog value,
    power-user coefficient, then the engine default for the drive pulley size.
    """
    default_piw = params.piw_2p5 if drive_dia_in == 2.5 else params.piw_other
    default_pil = params.pil_2p5 if drive_dia_in == 2.5 else params.pil_other
    piw = config.belt_piw_override or config.belt_piw or config.belt_coeff_piw or default_piw
    pil = config.belt_pil_override or config.belt_pil or config.belt_coeff_pil or default_pil
    return piw, pil


def total_belt_length(length_cc_in: float, drive_dia_in: float, tail_dia_in: float) -> float:
    """Open belt: two spans plus half a wrap around each pulley."""
    return 2 * length_cc_in + math.pi * (drive_dia_in + tail_dia_in) / 2


def travel_dimension(config: Configuration) -> Optional[float]:
    if config.orientation == Orientation.LENGTHWISE:
        return config.part_length_in
    return config.part_width_in


def drive_shaft_rpm(belt_speed_fpm: float, drive_dia_in: float) -> float:
    return belt_speed_fpm / (drive_dia_in / 12 * math.pi)


def belt_speed_from_rpm(rpm: float, drive_dia_in: float) -> float:
    return rpm * math.pi * drive_dia_in / 12


def effective_frame_height(mode: FrameHeightMode, drive_dia_in: float, custom_in: float = None) -> float:
    if mode == FrameHeightMode.CUSTOM and custom_in is not None:
        return custom_in
    if mode == FrameHeightMode.LOW_PROFILE:
        return drive_dia_in + LOW_PROFILE_FRAME_OFFSET_IN
    return drive_dia_in + STANDARD_FRAME_OFFSET_IN


def requires_snub_rollers(frame_height_in: float, drive_dia_in: float, tail_dia_in: float) -> bool:
    return frame_height_in < max(drive_dia_in, tail_dia_in) + SNUB_CLEARANCE_IN


def gravity_roller_quantity(length_cc_in: float, snubs: bool, spacing_in: float = GRAVITY_ROLLER_SPACING_IN) -> int:
    """Snubs take over both end positions; without them at least two rollers."""
    if length_cc_in <= 0 or spacing_in <= 0:
        return 0
    positions = math.floor(length_cc_in / spacing_in) + 1
    if snubs:
        return max(positions - 2, 0)
    return max(positions, 2)


def shaft_diameter(mode: ShaftDiameterMode, manual_in: Optional[float], belt_width_in: float) -> float:
    if mode == ShaftDiameterMode.MANUAL:
        return manual_in or 1.0
    if belt_width_in <= 18:
        return 1.0
    if belt_width_in <= 36:
        return 1.25
    return 1.5


def chain_ratio(config: Configuration) -> float:
    if config.gearmotor_mounting_style != GearmotorMountingStyle.BOTTOM_MOUNT:
        return 1.0
    gm = config.gm_sprocket_teeth or DEFAULT_GM_SPROCKET_TEETH
    driven = config.drive_shaft_sprocket_teeth or DEFAULT_DRIVE_SHAFT_SPROCKET_TEETH
    return driven / gm if gm > 0 else 1.0


class BeltDriveCalculator(BaseCalculator):
    name = "belt_drive"

    def _bulk_load(self, config: Configuration, belt_speed_fpm: Optional[float], length_in: float) -> float:
        flow = config.mass_flow_lbs_per_hr
        if flow is None and config.volume_flow_ft3_per_hr and config.density_lbs_per_ft3:
            flow = config.volume_flow_ft3_per_hr * config.density_lbs_per_ft3
        if not flow or not belt_speed_fpm:
            return 0.0
        if config.feed_behavior == FeedBehavior.SURGE and config.surge_multiplier:
            flow *= config.surge_multiplier
        # lb/hr over ft/hr of belt travel, times the loaded length in feet
        return flow / (belt_speed_fpm * 60) * length_in / 12

    def calculate(self, config: Configuration, ctx: CalcContext) -> Optional[BeltDriveResult]:
        geometry = normalize_geometry(config)
        belt_width = self.positive(config.belt_width_in)
        if not geometry.is_valid or belt_width is None:
            return None

        params = ctx.params
        length = geometry.length_cc_in
        drive_dia = geometry.drive_pulley_dia_in
        tail_dia = geometry.tail_pulley_dia_in

        safety_factor = config.safety_factor or params.safety_factor
        starting_pull = config.starting_belt_pull_lb if config.starting_belt_pull_lb is not None else params.starting_belt_pull_lb
        friction = config.friction_coeff or params.friction_coeff
        motor_rpm = config.motor_rpm or params.motor_rpm

        # --- Belt weight ---
        piw, pil = belt_coefficients(config, params, drive_dia)
        belt_length = total_belt_length(length, drive_dia, tail_dia)
        belt_weight = piw * pil * belt_width * belt_length
        base_per_ft = belt_weight / (belt_length / 12)
        layout = ctx.get("cleat_layout")
        cleat_per_ft = layout.weight_lb_per_ft if layout is not None and layout.weight_lb_per_ft else 0.0
        effective_per_ft = base_per_ft + cleat_per_ft
        effective_belt_weight = effective_per_ft * belt_length / 12

        # --- Speed ---
        if config.speed_mode == SpeedMode.DRIVE_RPM:
            rpm = self.positive(config.drive_rpm_input)
            fpm = belt_speed_from_rpm(rpm, drive_dia) if rpm else None
        else:
            fpm = self.positive(config.belt_speed_fpm)
            rpm = drive_shaft_rpm(fpm, drive_dia) if fpm else None

        # --- Load ---
        pitch = None
        parts_on_belt = None
        if config.material_form == MaterialForm.BULK:
            load = self._bulk_load(config, fpm, length)
        else:
            travel = travel_dimension(config)
            spacing = config.part_spacing_in or 0.0
            if travel and travel + spacing > 0:
                pitch = travel + spacing
                parts_on_belt = length / pitch
            load = (parts_on_belt or 0.0) * (config.part_weight_lbs or 0.0)
        total_load = effective_belt_weight + load

        # --- Pull ---
        friction_pull = friction * total_load
        incline_pull = total_load * math.sin(math.radians(geometry.incline_deg))
        total_pull = friction_pull + incline_pull + starting_pull
        torque = total_pull * drive_dia / 2 * safety_factor

        # --- Drive train ---
        ratio = chain_ratio(config)
        gear_ratio = motor_rpm / (rpm * ratio) if rpm else None
        gm_output_rpm = rpm * ratio if rpm else None

        # --- Throughput ---
        capacity = fpm * 720 / pitch if fpm and pitch else None
        target = meets = achieved = None
        if config.required_throughput_pph and config.required_throughput_pph > 0:
            target = config.required_throughput_pph * (1 + (config.throughput_margin_pct or 0) / 100)
            if capacity is not None:
                meets = capacity >= target
                achieved = (capacity / config.required_throughput_pph - 1) * 100

        # --- Frame / return ---
        frame = effective_frame_height(config.frame_height_mode, drive_dia, config.custom_frame_height_in)
        snubs_required = requires_snub_rollers(frame, drive_dia, tail_dia)
        snubs = config.return_snub_mode == ReturnSnubMode.YES or (
            config.return_snub_mode == ReturnSnubMode.AUTO and snubs_required
        )
        roller_spacing = self.positive(config.return_gravity_roller_spacing_in) or GRAVITY_ROLLER_SPACING_IN

        t1, t2 = belt_tensions(total_pull)

        return BeltDriveResult(
            conveyor_length_cc_in=length,
            incline_deg=geometry.incline_deg,
            drive_pulley_diameter_in=drive_dia,
            tail_pulley_diameter_in=tail_dia,
            total_belt_length_in=belt_length,
            piw_used=piw,
            pil_used=pil,
            belt_weight_lbf=belt_weight,
            belt_weight_lb_per_ft_base=base_per_ft,
            cleat_weight_lb_per_ft=cleat_per_ft,
            belt_weight_lb_per_ft_effective=effective_per_ft,
            parts_on_belt=parts_on_belt,
            load_on_belt_lbf=load,
            total_load_lbf=total_load,
            friction_pull_lb=friction_pull,
            incline_pull_lb=incline_pull,
            starting_belt_pull_lb=starting_pull,
            total_belt_pull_lb=total_pull,
            pitch_in=pitch,
            belt_speed_fpm=fpm,
            drive_shaft_rpm=rpm,
            torque_drive_shaft_inlbf=torque,
            motor_rpm=motor_rpm,
            gear_ratio=gear_ratio,
            chain_ratio=ratio,
            gearmotor_output_rpm=gm_output_rpm,
            capacity_pph=capacity,
            target_throughput_pph=target,
            meets_throughput=meets,
            throughput_margin_achieved_pct=achieved,
            drive_shaft_diameter_in=shaft_diameter(config.shaft_diameter_mode, config.drive_shaft_diameter_in, belt_width),
            tail_shaft_diameter_in=shaft_diameter(config.shaft_diameter_mode, config.tail_shaft_diameter_in, belt_width),
            effective_frame_height_in=frame,
            requires_snub_rollers=snubs_required,
            snub_roller_quantity=2 if snubs else 0,
            gravity_roller_quantity=gravity_roller_quantity(length, snubs, roller_spacing),
            gravity_roller_spacing_in=roller_spacing,
            drive_radial_load_lbf=radial_load(t1, t2),
            tail_radial_load_lbf=2 * t2,
        )
