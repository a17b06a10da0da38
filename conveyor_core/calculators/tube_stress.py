"""
Pulley shell tube stress: wall-thickness validation and the PCI tube stress check.

Shell modeled as a thin hollow cylindrical beam:
    ID = OD - 2w
    I  = pi/64 * (OD^4 - ID^4)
    Z  = 2I / OD
    sigma = M / Z

The bending moment comes from a StressModel strategy. SimplifiedBeamModel
(M = T*L/8, uniform load) is the default; PciTubeModel applies the PCI
selection guide formula sigma = 8*OD*F*H / (pi*(OD^4 - ID^4)).
"""

import logging
import math
from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

from ..config import settings
from ..models import PciStatus, PulleyPosition, TrackingMode, WallValidationStatus
from ..schemas import (
    Configuration, PciTubeStressResult, PulleyModel, WallValidationDetails, WallValidationResult,
)
from .base import BaseCalculator, CalcContext, round_half_up

logger = logging.getLogger(__name__)

PCI_TUBE_STRESS_LIMIT_DRUM_PSI = 10000.0
PCI_TUBE_STRESS_LIMIT_VGROOVE_PSI = 3400.0

# Drive-pulley wrap and lagged-steel friction for the tension split
DEFAULT_WRAP_DEG = 180.0
DEFAULT_PULLEY_FRICTION = 0.35

WALL_STEP_TOLERANCE_IN = 0.002
WALL_GAUGE_LABELS = (
    (0.109, "12 ga"),
    (0.134, "10 ga"),
    (0.165, "8 ga"),
    (0.188, '3/16"'),
    (0.25, '1/4"'),
    (0.375, '3/8"'),
)


# ============================================================
# Section properties / stress models
# ============================================================

def section_properties(od_in: float, wall_in: float) -> Optional[Tuple[float, float, float]]:
    """(ID, I, Z) for a round tube, or None when the geometry is impossible."""
    if od_in <= 0 or wall_in <= 0:
        return None
    id_in = od_in - 2 * wall_in
    if id_in <= 0:
        return None
    inertia = math.pi / 64 * (od_in ** 4 - id_in ** 4)
    if inertia <= 0:
        return None
    return id_in, inertia, 2 * inertia / od_in


class StressModel(ABC):
    """Bending stress in a pulley shell for a given load."""

    name = ""

    @abstractmethod
    def stress_psi(self, od_in: float, wall_in: float, span_in: float, load_lb: float) -> float:
        pass


class SimplifiedBeamModel(StressModel):
    """Uniformly distributed belt tension over the face: M = T*L/8."""

    name = "simplified_beam_v1"

    def stress_psi(self, od_in, wall_in, span_in, load_lb):
        _, _, z = section_properties(od_in, wall_in)
        moment = load_lb * span_in / 8
        return moment / z


class PciTubeModel(StressModel):
    """PCI Appendix A: F is the resultant pulley load, span is the hub centers."""

    name = "pci_tube_v1"

    def stress_psi(self, od_in, wall_in, span_in, load_lb):
        id_in = od_in - 2 * wall_in
        return 8 * od_in * load_lb * span_in / (math.pi * (od_in ** 4 - id_in ** 4))


DEFAULT_STRESS_MODEL = SimplifiedBeamModel()


# ============================================================
# Wall thickness validation
# ============================================================

def stress_limit_for(model: PulleyModel, tracking: TrackingMode) -> float:
    if tracking == TrackingMode.V_GUIDED:
        return model.tube_stress_limit_vgroove_psi or settings.VGROOVE_STRESS_LIMIT_PSI
    return model.tube_stress_limit_flat_psi or settings.FLAT_STRESS_LIMIT_PSI


def get_wall_options(model: PulleyModel) -> List[float]:
    return sorted(model.allowed_wall_steps_in)


def _next_wall_step(steps: List[float], wall_in: float) -> Optional[float]:
    for step in steps:
        if step > wall_in + 1e-9:
            return step
    return None


def _thinnest_passing_step(model, steps, face_width_in, tension_lb, margined_limit, stress_model,
                           above_in: float = 0.0) -> Optional[float]:
    for step in steps:
        if step <= above_in + 1e-9 or section_properties(model.shell_od_in, step) is None:
            continue
        if stress_model.stress_psi(model.shell_od_in, step, face_width_in, tension_lb) <= margined_limit:
            return step
    return None


def validate_wall_thickness(
    model: Optional[PulleyModel],
    shell_wall_in: float,
    face_width_in: float,
    tracking: TrackingMode,
    belt_tension_lb: float = None,
    stress_model: StressModel = None,
) -> WallValidationResult:
    """
    Classify a shell wall against the model's stress limit.

    PASS: stress <= limit / safety factor.
    RECOMMEND_UPGRADE: marginal (between the margined limit and the limit),
        or over the limit while some standard wall step passes the margined
        limit. The recommended wall is the thinnest such step.
    FAIL_ENGINEERING_REQUIRED: over the limit and no standard step passes.
    """
    if model is None:
        return WallValidationResult(
            status=WallValidationStatus.NOT_VALIDATED,
            message="Pulley model not found. Wall thickness was not validated.",
        )

    od = model.shell_od_in
    props = section_properties(od, shell_wall_in or 0.0)
    if props is None:
        return WallValidationResult(
            status=WallValidationStatus.NOT_VALIDATED,
            message=f'Invalid shell geometry: {shell_wall_in}" wall on a {od}" OD shell.',
        )
    _, inertia, z = props

    stress_model = stress_model or DEFAULT_STRESS_MODEL
    tension = belt_tension_lb if belt_tension_lb and belt_tension_lb > 0 else settings.DEFAULT_BELT_TENSION_LB
    limit = stress_limit_for(model, tracking)
    margined = limit / settings.STRESS_SAFETY_FACTOR

    stress = stress_model.stress_psi(od, shell_wall_in, face_width_in, tension)
    utilization = stress / limit * 100
    steps = get_wall_options(model)
    next_step = _next_wall_step(steps, shell_wall_in)

    common = dict(
        computed_stress_psi=round(stress, 1),
        stress_limit_psi=limit,
        utilization_percent=round(utilization, 1),
        next_wall_step_in=next_step,
        stress_model=stress_model.name,
        details=WallValidationDetails(
            shell_od_in=od,
            shell_wall_in=shell_wall_in,
            face_width_in=face_width_in,
            tracking_mode=tracking,
            moment_of_inertia_in4=round(inertia, 4),
            section_modulus_in3=round(z, 4),
        ),
    )

    if stress <= margined:
        return WallValidationResult(
            status=WallValidationStatus.PASS,
            message=f'Wall thickness {shell_wall_in}" is adequate. Stress utilization: {utilization:.0f}%.',
            **common,
        )

    if stress <= limit:
        recommended = _thinnest_passing_step(
            model, steps, face_width_in, tension, margined, stress_model, above_in=shell_wall_in,
        )
        target = recommended or next_step
        if target is not None:
            message = (f'Wall thickness {shell_wall_in}" passes but is marginal ({utilization:.0f}% '
                       f'utilization). Consider upgrading to {target}" for better safety margin.')
        else:
            message = (f'Wall thickness {shell_wall_in}" passes but is marginal ({utilization:.0f}% '
                       f'utilization). No heavier standard wall is available for this model.')
        return WallValidationResult(
            status=WallValidationStatus.RECOMMEND_UPGRADE,
            recommended_wall_in=recommended,
            message=message,
            **common,
        )

    passing = _thinnest_passing_step(model, steps, face_width_in, tension, margined, stress_model)
    if passing is not None:
        return WallValidationResult(
            status=WallValidationStatus.RECOMMEND_UPGRADE,
            recommended_wall_in=passing,
            message=(f'Wall thickness {shell_wall_in}" is insufficient ({utilization:.0f}% utilization). '
                     f'Upgrade to {passing}" required.'),
            **common,
        )

    logger.info("No standard wall passes for %s at %.0f lb tension", model.model_key, tension)
    return WallValidationResult(
        status=WallValidationStatus.FAIL_ENGINEERING_REQUIRED,
        message=("No standard wall thickness is adequate for this configuration. "
                 "Engineering review required. Consider a larger pulley diameter."),
        **common,
    )


# ============================================================
# Pulley model helpers
# ============================================================

def get_eligible_models(models, position: PulleyPosition, tracking: TrackingMode) -> List[PulleyModel]:
    eligible = []
    for model in models:
        if not model.is_active:
            continue
        if position == PulleyPosition.DRIVE and not model.eligible_drive:
            continue
        if position == PulleyPosition.TAIL and not model.eligible_tail:
            continue
        if tracking == TrackingMode.CROWNED and not model.eligible_crown:
            continue
        if tracking == TrackingMode.V_GUIDED and not model.eligible_v_guided:
            continue
        eligible.append(model)
    return eligible


def default_face_width(model: PulleyModel, belt_width_in: float) -> float:
    return belt_width_in + model.face_width_allowance_in


def get_models_for_belt_width(models, belt_width_in: float) -> List[PulleyModel]:
    """Models whose face width range covers belt width + allowance."""
    return [
        m for m in models
        if m.is_active and m.face_width_min_in <= default_face_width(m, belt_width_in) <= m.face_width_max_in
    ]


def validate_face_width(model: PulleyModel, face_width_in: float) -> Tuple[bool, str]:
    if face_width_in < model.face_width_min_in:
        return False, (f'Face width {face_width_in}" is below minimum {model.face_width_min_in}" '
                       f'for this {model.shell_od_in}" pulley.')
    if face_width_in > model.face_width_max_in:
        return False, (f'Face width {face_width_in}" exceeds maximum {model.face_width_max_in}" '
                       f'for this {model.shell_od_in}" pulley.')
    return True, "Face width is within limits."


def compute_finished_od(shell_od_in: float, lagging_thickness_in: float = 0.0) -> float:
    return shell_od_in + 2 * (lagging_thickness_in or 0.0)


def format_wall_thickness(wall_in: float) -> str:
    """0.134 -> '0.134" (10 ga)'. Unlabeled walls are shown bare."""
    for value, label in WALL_GAUGE_LABELS:
        if abs(wall_in - value) <= WALL_STEP_TOLERANCE_IN:
            return f'{wall_in}" ({label})'
    return f'{wall_in}"'


# ============================================================
# PCI tube stress
# ============================================================

def belt_tensions(effective_tension_lb: float, wrap_deg: float = DEFAULT_WRAP_DEG,
                  friction: float = DEFAULT_PULLEY_FRICTION) -> Tuple[float, float]:
    """
    Euler-Eytelwein split of the effective tension Te into tight (T1) and
    slack (T2) sides: T1/T2 = e^(mu*theta), T1 - T2 = Te.
    """
    ratio = math.exp(friction * math.radians(wrap_deg))
    t2 = effective_tension_lb / (ratio - 1)
    return t2 * ratio, t2


def radial_load(t1_lb: float, t2_lb: float, wrap_deg: float = DEFAULT_WRAP_DEG) -> float:
    """Resultant of the two belt tensions acting on the pulley."""
    theta = math.radians(wrap_deg)
    return math.sqrt(max(t1_lb ** 2 + t2_lb ** 2 - 2 * t1_lb * t2_lb * math.cos(theta), 0.0))


def is_vgroove_pulley(tracking: TrackingMode, v_guide_key: Optional[str]) -> bool:
    return tracking == TrackingMode.V_GUIDED and bool(v_guide_key)


def tube_stress_limit(vgroove: bool) -> float:
    return PCI_TUBE_STRESS_LIMIT_VGROOVE_PSI if vgroove else PCI_TUBE_STRESS_LIMIT_DRUM_PSI


def calculate_pci_tube_stress(
    tube_od_in: float,
    tube_wall_in: float,
    hub_centers_in: float,
    radial_load_lbf: float,
    stress_limit_psi: float,
    hub_centers_estimated: bool = False,
    enforce: bool = False,
) -> PciTubeStressResult:
    base = dict(
        stress_limit_psi=stress_limit_psi,
        hub_centers_in=hub_centers_in,
        hub_centers_estimated=hub_centers_estimated,
        radial_load_lbf=round(radial_load_lbf, 1),
    )
    od = tube_od_in or 0.0
    wall = tube_wall_in or 0.0
    if od <= 0 or wall <= 0:
        return PciTubeStressResult(status=PciStatus.INCOMPLETE, **base)

    if od - 2 * wall <= 0:
        return PciTubeStressResult(
            status=PciStatus.ERROR,
            error_message=f'Invalid tube geometry: wall thickness ({wall}") exceeds radius ({od / 2}")',
            **base,
        )

    stress = PciTubeModel().stress_psi(od, wall, hub_centers_in, radial_load_lbf)
    if stress > stress_limit_psi:
        status = PciStatus.FAIL if enforce else PciStatus.WARN
    elif hub_centers_estimated:
        status = PciStatus.ESTIMATED
    else:
        status = PciStatus.PASS
    return PciTubeStressResult(status=status, stress_psi=round_half_up(stress), **base)


# ============================================================
# Pipeline calculators
# ============================================================

def _position_fields(config: Configuration, position: PulleyPosition) -> dict:
    if position == PulleyPosition.DRIVE:
        return {
            "model_key": config.drive_pulley_model_key,
            "shell_wall": config.drive_shell_wall_in,
            "tube_od": config.drive_tube_od_in,
            "tube_wall": config.drive_tube_wall_in,
        }
    return {
        "model_key": config.tail_pulley_model_key,
        "shell_wall": config.tail_shell_wall_in,
        "tube_od": config.tail_tube_od_in,
        "tube_wall": config.tail_tube_wall_in,
    }


class WallValidationCalculator(BaseCalculator):
    """Validates the selected pulley model's shell wall at one position."""

    position = PulleyPosition.DRIVE

    def calculate(self, config: Configuration, ctx: CalcContext) -> Optional[WallValidationResult]:
        fields = _position_fields(config, self.position)
        if not fields["model_key"]:
            return None
        model = ctx.snapshot.get_pulley_model(fields["model_key"])
        belt_width = self.positive(config.belt_width_in)
        if model is None or belt_width is None:
            return validate_wall_thickness(None, 0.0, 0.0, config.belt_tracking_method)

        drive = ctx.get("belt_drive")
        tension = drive.total_belt_pull_lb if drive is not None else None
        return validate_wall_thickness(
            model,
            fields["shell_wall"] or model.default_shell_wall_in,
            default_face_width(model, belt_width),
            config.belt_tracking_method,
            belt_tension_lb=tension,
        )


class DriveWallValidationCalculator(WallValidationCalculator):
    name = "drive_wall_validation"
    position = PulleyPosition.DRIVE


class TailWallValidationCalculator(WallValidationCalculator):
    name = "tail_wall_validation"
    position = PulleyPosition.TAIL


class PciTubeStressCalculator(BaseCalculator):
    """PCI tube stress at one position, from entered tube geometry or the selected model."""

    position = PulleyPosition.DRIVE

    def calculate(self, config: Configuration, ctx: CalcContext) -> Optional[PciTubeStressResult]:
        fields = _position_fields(config, self.position)
        od, wall = fields["tube_od"], fields["tube_wall"]
        if od is None and wall is None:
            model = ctx.snapshot.get_pulley_model(fields["model_key"]) if fields["model_key"] else None
            if model is None:
                return None
            od = model.shell_od_in
            wall = fields["shell_wall"] or model.default_shell_wall_in

        belt_width = self.positive(config.belt_width_in) or 0.0
        hub_centers = self.positive(config.hub_centers_in)
        estimated = hub_centers is None
        if estimated:
            hub_centers = belt_width

        drive = ctx.get("belt_drive")
        if drive is not None:
            load = drive.drive_radial_load_lbf if self.position == PulleyPosition.DRIVE else drive.tail_radial_load_lbf
        else:
            t1, t2 = belt_tensions(settings.DEFAULT_BELT_TENSION_LB)
            load = radial_load(t1, t2) if self.position == PulleyPosition.DRIVE else 2 * t2

        return calculate_pci_tube_stress(
            od, wall, hub_centers, load,
            tube_stress_limit(is_vgroove_pulley(config.belt_tracking_method, config.v_guide_key)),
            hub_centers_estimated=estimated,
            enforce=ctx.enforce_pci,
        )


class DrivePciCalculator(PciTubeStressCalculator):
    name = "drive_pci"
    position = PulleyPosition.DRIVE


class TailPciCalculator(PciTubeStressCalculator):
    name = "tail_pci"
    position = PulleyPosition.TAIL
