from pydantic import BaseModel, Field
from typing import Optional, List, Dict, Any, Tuple
from .models import (
    Severity, GeometryMode, SupportType, ReferenceEnd, SpeedMode,
    GearmotorMountingStyle, ShaftDiameterMode, MaterialForm, Orientation,
    BulkInputMethod, DensitySource, FeedBehavior, PartTemperatureClass,
    FluidType, SideLoadingDirection, SideLoadingSeverity, EndGuards,
    LacingStyle, ProductKey, TrackingMode, BeltFamily, ShaftArrangement,
    PulleyConstruction, WallValidationStatus, PciStatus, HubConnectionType,
    BushingSystem, CleatPattern, CleatStyle, CleatSpacingMode,
    CleatRemainderMode, OddGapSize, OddGapLocation, FrameHeightMode,
    FrameConstructionType, ReturnFrameStyle, ReturnSnubMode,
)


# ============================================================
# Configuration (engineering inputs)
# ============================================================

class Configuration(BaseModel):
    """
    One conveyor configuration as entered by the engineer.

    Every numeric field is optional: "not set" is None and is reported by the
    structural rule group instead of failing parsing. Unknown fields are
    rejected.
    """
    product_key: ProductKey = ProductKey.SLIDERBED

    # --- Geometry ---
    geometry_mode: GeometryMode = GeometryMode.L_ANGLE
    conveyor_length_cc_in: Optional[float] = None
    horizontal_run_in: Optional[float] = None
    conveyor_incline_deg: Optional[float] = 0.0
    belt_width_in: Optional[float] = None
    pulley_diameter_in: Optional[float] = None          # legacy single diameter
    drive_pulley_diameter_in: Optional[float] = None
    tail_pulley_diameter_in: Optional[float] = None

    # --- Heights / supports ---
    reference_end: ReferenceEnd = ReferenceEnd.TAIL
    tail_tob_in: Optional[float] = None
    drive_tob_in: Optional[float] = None
    adjustment_required_in: Optional[float] = None
    tail_support_type: SupportType = SupportType.EXTERNAL
    drive_support_type: SupportType = SupportType.EXTERNAL
    support_method: Optional[SupportType] = None         # legacy single support method
    include_legs: Optional[bool] = None
    leg_model_key: Optional[str] = None
    include_casters: Optional[bool] = None
    caster_rigid_qty: Optional[int] = None
    caster_rigid_model_key: Optional[str] = None
    caster_swivel_qty: Optional[int] = None
    caster_swivel_model_key: Optional[str] = None

    # --- Speed / drive ---
    speed_mode: SpeedMode = SpeedMode.BELT_SPEED
    belt_speed_fpm: Optional[float] = None
    drive_rpm_input: Optional[float] = None
    motor_rpm: Optional[float] = None
    gearmotor_mounting_style: GearmotorMountingStyle = GearmotorMountingStyle.SHAFT_MOUNTED
    gm_sprocket_teeth: Optional[float] = None
    drive_shaft_sprocket_teeth: Optional[float] = None

    # --- Throughput ---
    required_throughput_pph: Optional[float] = None
    throughput_margin_pct: Optional[float] = None

    # --- Material ---
    material_form: Optional[MaterialForm] = MaterialForm.PARTS
    part_weight_lbs: Optional[float] = None
    part_length_in: Optional[float] = None
    part_width_in: Optional[float] = None
    part_spacing_in: Optional[float] = 0.0
    orientation: Orientation = Orientation.LENGTHWISE
    drop_height_in: Optional[float] = None
    part_temperature_class: PartTemperatureClass = PartTemperatureClass.AMBIENT
    fluid_type: FluidType = FluidType.NONE
    bulk_input_method: Optional[BulkInputMethod] = None
    mass_flow_lbs_per_hr: Optional[float] = None
    volume_flow_ft3_per_hr: Optional[float] = None
    density_lbs_per_ft3: Optional[float] = None
    density_source: Optional[DensitySource] = None
    smallest_lump_size_in: Optional[float] = None
    largest_lump_size_in: Optional[float] = None
    feed_behavior: FeedBehavior = FeedBehavior.CONTINUOUS
    surge_multiplier: Optional[float] = None

    # --- Power-user overrides of engine parameters ---
    safety_factor: Optional[float] = None
    belt_coeff_piw: Optional[float] = None
    belt_coeff_pil: Optional[float] = None
    starting_belt_pull_lb: Optional[float] = None
    friction_coeff: Optional[float] = None

    # --- Belt / tracking ---
    belt_tracking_method: TrackingMode = TrackingMode.CROWNED
    v_guide_key: Optional[str] = None
    v_guide_has_pu_data: Optional[bool] = None
    belt_catalog_key: Optional[str] = None
    belt_family: Optional[BeltFamily] = None
    belt_piw: Optional[float] = None                     # from belt catalog
    belt_pil: Optional[float] = None
    belt_piw_override: Optional[float] = None
    belt_pil_override: Optional[float] = None
    belt_min_pulley_dia_no_vguide_in: Optional[float] = None
    belt_min_pulley_dia_with_vguide_in: Optional[float] = None
    lacing_style: LacingStyle = LacingStyle.ENDLESS

    # --- Shafts ---
    shaft_diameter_mode: ShaftDiameterMode = ShaftDiameterMode.CALCULATED
    drive_shaft_diameter_in: Optional[float] = None
    tail_shaft_diameter_in: Optional[float] = None

    # --- Cleats ---
    cleats_enabled: bool = False
    cleat_height_in: Optional[float] = None
    cleat_spacing_in: Optional[float] = None
    cleat_edge_offset_in: Optional[float] = None
    cleat_profile: Optional[str] = None
    cleat_size: Optional[str] = None
    cleat_pattern: Optional[CleatPattern] = None
    cleat_style: CleatStyle = CleatStyle.SOLID
    cleat_material_family: Optional[str] = None
    cleat_spacing_mode: CleatSpacingMode = CleatSpacingMode.USE_NOMINAL
    cleat_count: Optional[int] = None
    cleat_remainder_mode: CleatRemainderMode = CleatRemainderMode.SPREAD_EVENLY
    cleat_odd_gap_size: OddGapSize = OddGapSize.SMALLER
    cleat_odd_gap_location: OddGapLocation = OddGapLocation.TAIL

    # --- Frame ---
    frame_height_mode: FrameHeightMode = FrameHeightMode.STANDARD
    custom_frame_height_in: Optional[float] = None
    frame_construction_type: FrameConstructionType = FrameConstructionType.SHEET_METAL
    frame_sheet_metal_gauge: Optional[str] = "12_GA"
    frame_structural_channel_series: Optional[str] = None
    pulley_end_to_frame_inside_in: Optional[float] = None

    # --- Return support ---
    return_frame_style: ReturnFrameStyle = ReturnFrameStyle.STANDARD
    return_snub_mode: ReturnSnubMode = ReturnSnubMode.AUTO
    return_gravity_roller_spacing_in: Optional[float] = None
    return_end_offset_in: Optional[float] = None

    # --- Safety / application ---
    finger_safe: bool = False
    end_guards: EndGuards = EndGuards.NONE
    bottom_covers: bool = False
    side_skirts: bool = False
    start_stop_application: bool = False
    cycle_time_seconds: Optional[float] = None
    side_loading_direction: SideLoadingDirection = SideLoadingDirection.NONE
    side_loading_severity: Optional[SideLoadingSeverity] = None

    # --- Pulley selection / PCI ---
    drive_pulley_catalog_key: Optional[str] = None
    tail_pulley_catalog_key: Optional[str] = None
    drive_pulley_model_key: Optional[str] = None
    tail_pulley_model_key: Optional[str] = None
    drive_shell_wall_in: Optional[float] = None
    tail_shell_wall_in: Optional[float] = None
    drive_tube_od_in: Optional[float] = None
    drive_tube_wall_in: Optional[float] = None
    tail_tube_od_in: Optional[float] = None
    tail_tube_wall_in: Optional[float] = None
    hub_centers_in: Optional[float] = None
    enforce_pci_checks: Optional[bool] = None

    # --- Hub connections ---
    drive_hub_connection_type: Optional[HubConnectionType] = None
    tail_hub_connection_type: Optional[HubConnectionType] = None
    drive_bushing_system: Optional[BushingSystem] = None
    tail_bushing_system: Optional[BushingSystem] = None

    class Config:
        extra = "forbid"
        frozen = True


class EngineParameters(BaseModel):
    """Engine constants; overridable per evaluation, guarded by validate_parameters."""
    friction_coeff: float = 0.25
    safety_factor: float = 2.0
    starting_belt_pull_lb: float = 75.0
    motor_rpm: float = 1750.0
    gravity_in_per_s2: float = 386.1
    piw_2p5: float = 0.138
    piw_other: float = 0.109
    pil_2p5: float = 0.138
    pil_other: float = 0.109

    class Config:
        frozen = True


# ============================================================
# Issues and rule metadata
# ============================================================

class Issue(BaseModel):
    code: str
    severity: Severity
    message: str
    field: Optional[str] = None
    rule_id: str

    class Config:
        frozen = True


class RuleDefinition(BaseModel):
    rule_id: str
    human_name: str
    category: str
    field: str
    severity: Severity
    check_description: str
    source_function: str
    source_line: int

    class Config:
        frozen = True


class RuleEnrichment(BaseModel):
    """Plain-English condition / action / threshold shown on the rules manager."""
    rule_id: str
    condition: str
    action: str
    threshold: str
    has_todo: bool = False
    todo_note: Optional[str] = None

    class Config:
        frozen = True


# ============================================================
# Reference catalog entries
# ============================================================

class PulleyModel(BaseModel):
    """Pulley library model used for shell-wall stress validation."""
    model_key: str
    display_name: str
    shell_od_in: float
    default_shell_wall_in: float
    allowed_wall_steps_in: Tuple[float, ...]
    face_width_min_in: float
    face_width_max_in: float
    face_width_allowance_in: float = 2.0
    eligible_drive: bool = True
    eligible_tail: bool = True
    eligible_dirty_side: bool = False
    eligible_crown: bool = True
    eligible_v_guided: bool = False
    eligible_lagging: bool = True
    tube_stress_limit_flat_psi: Optional[float] = None
    tube_stress_limit_vgroove_psi: Optional[float] = None
    is_active: bool = True

    class Config:
        frozen = True
        protected_namespaces = ()


class PulleyCatalogItem(BaseModel):
    catalog_key: str
    display_name: str
    diameter_in: float
    face_width_max_in: float
    face_width_min_in: Optional[float] = None
    crown_height_in: float = 0.0
    construction: PulleyConstruction = PulleyConstruction.DRUM
    is_lagged: bool = False
    lagging_thickness_in: Optional[float] = None
    shaft_arrangement: ShaftArrangement = ShaftArrangement.THROUGH_SHAFT_EXTERNAL_BEARINGS
    hub_connection: Optional[str] = None
    allow_head_drive: bool = False
    allow_tail: bool = False
    allow_snub: bool = False
    allow_bend: bool = False
    allow_takeup: bool = False
    dirty_side_ok: bool = False
    max_shaft_rpm: Optional[float] = None
    max_belt_speed_fpm: Optional[float] = None
    max_tension_pli: Optional[float] = None
    is_preferred: bool = False
    is_active: bool = True

    class Config:
        frozen = True


class CleatCatalogEntry(BaseModel):
    material_family: str
    cleat_profile: str
    cleat_size: str
    cleat_pattern: CleatPattern
    min_pulley_dia_12in_solid_in: float
    min_pulley_dia_12in_drill_siped_in: Optional[float] = None
    notes: Optional[str] = None
    source_doc: Optional[str] = None
    sort_order: int = 0
    is_active: bool = True

    class Config:
        frozen = True


class CleatCenterFactor(BaseModel):
    material_family: str
    centers_in: int
    factor: float
    notes: Optional[str] = None
    is_active: bool = True

    class Config:
        frozen = True


# ============================================================
# Calculator results
# ============================================================

class WallValidationDetails(BaseModel):
    shell_od_in: float
    shell_wall_in: float
    face_width_in: float
    tracking_mode: TrackingMode
    moment_of_inertia_in4: float
    section_modulus_in3: float

    class Config:
        frozen = True


class WallValidationResult(BaseModel):
    status: WallValidationStatus
    computed_stress_psi: Optional[float] = None
    stress_limit_psi: Optional[float] = None
    utilization_percent: Optional[float] = None
    recommended_wall_in: Optional[float] = None
    next_wall_step_in: Optional[float] = None
    stress_model: Optional[str] = None
    message: str = ""
    details: Optional[WallValidationDetails] = None

    class Config:
        frozen = True


class CleatsMinPulleyResult(BaseModel):
    success: bool
    base_min_dia_12_in: Optional[float] = None
    centers_factor: float = 1.0
    adjusted_min_dia_in: Optional[float] = None
    rounded_min_dia_in: Optional[float] = None
    rule_source: Optional[str] = None
    drill_siped_caution: bool = False
    error: Optional[str] = None

    class Config:
        frozen = True


class CleatLayoutResult(BaseModel):
    success: bool
    cleat_count: int = 0
    pitch_in: Optional[float] = None
    odd_gap_in: Optional[float] = None
    odd_gap_size: Optional[OddGapSize] = None
    odd_gap_location: Optional[OddGapLocation] = None
    cleat_width_in: Optional[float] = None
    weight_lb_each: Optional[float] = None
    weight_lb_per_ft: Optional[float] = None
    summary: Optional[str] = None
    error: Optional[str] = None

    class Config:
        frozen = True


class BeltDriveResult(BaseModel):
    """Belt length, weight, load, pull and drive-train quantities."""
    conveyor_length_cc_in: float
    incline_deg: float
    drive_pulley_diameter_in: float
    tail_pulley_diameter_in: float
    total_belt_length_in: float
    piw_used: float
    pil_used: float
    belt_weight_lbf: float
    belt_weight_lb_per_ft_base: float
    cleat_weight_lb_per_ft: float = 0.0
    belt_weight_lb_per_ft_effective: float
    parts_on_belt: Optional[float] = None
    load_on_belt_lbf: float = 0.0
    total_load_lbf: float
    friction_pull_lb: float
    incline_pull_lb: float
    starting_belt_pull_lb: float
    total_belt_pull_lb: float
    pitch_in: Optional[float] = None
    belt_speed_fpm: Optional[float] = None
    drive_shaft_rpm: Optional[float] = None
    torque_drive_shaft_inlbf: float
    motor_rpm: float
    gear_ratio: Optional[float] = None
    chain_ratio: float = 1.0
    gearmotor_output_rpm: Optional[float] = None
    capacity_pph: Optional[float] = None
    target_throughput_pph: Optional[float] = None
    meets_throughput: Optional[bool] = None
    throughput_margin_achieved_pct: Optional[float] = None
    drive_shaft_diameter_in: float
    tail_shaft_diameter_in: float
    effective_frame_height_in: float
    requires_snub_rollers: bool
    snub_roller_quantity: int
    gravity_roller_quantity: int
    gravity_roller_spacing_in: float
    drive_radial_load_lbf: float
    tail_radial_load_lbf: float

    class Config:
        frozen = True


class PciTubeStressResult(BaseModel):
    status: PciStatus
    stress_psi: Optional[float] = None
    stress_limit_psi: Optional[float] = None
    hub_centers_in: Optional[float] = None
    hub_centers_estimated: bool = False
    radial_load_lbf: Optional[float] = None
    error_message: Optional[str] = None

    class Config:
        frozen = True


# ============================================================
# Evaluation output
# ============================================================

class EvaluationResult(BaseModel):
    issues: List[Issue] = []
    blocking: bool = False
    outputs: Dict[str, Any] = Field(default_factory=dict)
    belt_drive: Optional[BeltDriveResult] = None
    drive_wall_validation: Optional[WallValidationResult] = None
    tail_wall_validation: Optional[WallValidationResult] = None
    drive_pci: Optional[PciTubeStressResult] = None
    tail_pci: Optional[PciTubeStressResult] = None
    cleats_min_pulley: Optional[CleatsMinPulleyResult] = None
    cleat_layout: Optional[CleatLayoutResult] = None
    catalog_version: Optional[str] = None

    class Config:
        frozen = True
