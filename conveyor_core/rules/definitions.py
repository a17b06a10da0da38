"""
Declarative rule table, category sections and plain-English enrichment.

RULE_TABLE rows: (rule_id, human_name, category, field, default severity,
check description, source function). source_line is resolved at catalog
build time from the group module that emits the rule.

Rule id prefixes follow the group that emits them:
  vi_   validate_inputs             vp_   validate_parameters
  ar_   apply_application_rules     tob_  validate_tob
  hw_   apply_height_warnings       pci_  apply_pci_rules
  hub_  apply_hub_connection_rules  pulley_  apply_application_rules
"""

from ..models import Severity

E = Severity.ERROR
W = Severity.WARNING
I = Severity.INFO

VI = "validate_inputs"
VP = "validate_parameters"
AR = "apply_application_rules"
TOB = "validate_tob"
HW = "apply_height_warnings"
PCI = "apply_pci_rules"
HUB = "apply_hub_connection_rules"


# ============================================================
# Sections
# ============================================================

SECTION_MAP = {
    # Application: what's on the conveyor, environment, safety
    "application": "Application",
    "material": "Application",
    "safety": "Application",
    "height": "Application",
    # Physical: structure, geometry, belt
    "geometry": "Physical",
    "pulley": "Physical",
    "belt": "Physical",
    "shaft": "Physical",
    "frame": "Physical",
    "pci": "Physical",
    # Drive & Controls
    "speed": "Drive & Controls",
    "drive": "Drive & Controls",
    "sprocket": "Drive & Controls",
    "parameter": "Drive & Controls",
    # Build Options: optional components, support
    "cleat": "Build Options",
    "support": "Build Options",
    "return_support": "Build Options",
    "premium": "Build Options",
}

SECTIONS = ("Application", "Physical", "Drive & Controls", "Build Options")

CATEGORY_LABELS = {
    "application": "Application",
    "material": "Material",
    "safety": "Safety & Guarding",
    "height": "Height & TOB",
    "geometry": "Geometry & Layout",
    "pulley": "Pulley",
    "belt": "Belt & Tracking",
    "shaft": "Shaft",
    "frame": "Frame",
    "pci": "PCI Tube Stress",
    "speed": "Speed",
    "drive": "Drive & Gearmotor",
    "sprocket": "Sprocket",
    "parameter": "Engine Parameters",
    "cleat": "Cleats",
    "support": "Floor Support",
    "return_support": "Return Support",
    "premium": "Premium",
}


# ============================================================
# Rule table
# ============================================================

RULE_TABLE = [
    # --- validate_inputs: geometry ---
    ("vi_conveyor_length_zero", "Conveyor length required", "geometry", "conveyor_length_cc_in", E, "Conveyor Length (C-C) must be greater than 0", VI),
    ("vi_belt_width_zero", "Belt width required", "geometry", "belt_width_in", E, "Belt Width must be greater than 0", VI),
    ("vi_incline_negative", "Negative incline", "geometry", "conveyor_incline_deg", E, "Incline Angle must be >= 0", VI),
    ("vi_horizontal_run_zero", "Horizontal run required", "geometry", "horizontal_run_in", E, "Horizontal run must be greater than 0", VI),
    ("vi_tail_tob_required_htob", "Tail TOB required (H_TOB)", "geometry", "tail_tob_in", E, "Tail TOB is required in H_TOB geometry mode", VI),
    ("vi_drive_tob_required_htob", "Drive TOB required (H_TOB)", "geometry", "drive_tob_in", E, "Drive TOB is required in H_TOB geometry mode", VI),

    # --- validate_inputs: pulleys ---
    ("vi_pulley_diameter_zero", "Pulley diameter zero", "pulley", "pulley_diameter_in", E, "Pulley Diameter must be greater than 0", VI),
    ("vi_drive_pulley_zero", "Drive pulley diameter zero", "pulley", "drive_pulley_diameter_in", E, "Drive pulley diameter must be greater than 0", VI),
    ("vi_drive_pulley_min", "Drive pulley below minimum", "pulley", "drive_pulley_diameter_in", E, 'Drive pulley diameter must be at least 2.5"', VI),
    ("vi_tail_pulley_zero", "Tail pulley diameter zero", "pulley", "tail_pulley_diameter_in", E, "Tail pulley diameter must be greater than 0", VI),
    ("vi_tail_pulley_min", "Tail pulley below minimum", "pulley", "tail_pulley_diameter_in", E, 'Tail pulley diameter must be at least 2.5"', VI),

    # --- validate_inputs: speed ---
    ("vi_belt_speed_zero", "Belt speed required", "speed", "belt_speed_fpm", E, "Belt speed must be greater than 0", VI),
    ("vi_drive_rpm_zero", "Drive RPM required", "speed", "drive_rpm_input", E, "Drive RPM must be greater than 0", VI),
    ("vi_pulley_dia_for_speed", "Drive pulley needed for speed", "speed", "drive_pulley_diameter_in", E, "Drive pulley diameter is required to convert between belt speed and drive RPM", VI),

    # --- validate_inputs: sprockets (bottom mount) ---
    ("vi_gm_sprocket_teeth_zero", "Gearmotor sprocket required", "sprocket", "gm_sprocket_teeth", E, "Gearmotor sprocket teeth must be greater than 0 for a bottom-mount gearmotor", VI),
    ("vi_gm_sprocket_teeth_integer", "Gearmotor sprocket whole number", "sprocket", "gm_sprocket_teeth", E, "Gearmotor sprocket teeth must be a whole number", VI),
    ("vi_drive_shaft_sprocket_zero", "Drive shaft sprocket required", "sprocket", "drive_shaft_sprocket_teeth", E, "Drive shaft sprocket teeth must be greater than 0 for a bottom-mount gearmotor", VI),
    ("vi_drive_shaft_sprocket_integer", "Drive shaft sprocket whole number", "sprocket", "drive_shaft_sprocket_teeth", E, "Drive shaft sprocket teeth must be a whole number", VI),

    # --- validate_inputs: throughput ---
    ("vi_throughput_negative", "Negative throughput", "application", "required_throughput_pph", E, "Required throughput must be >= 0", VI),
    ("vi_throughput_margin_negative", "Negative throughput margin", "application", "throughput_margin_pct", E, "Throughput margin must be >= 0", VI),

    # --- validate_inputs: material ---
    ("vi_material_form_required", "Material form required", "material", "material_form", E, "Material form (parts or bulk) is required", VI),
    ("vi_part_weight_required", "Part weight required", "material", "part_weight_lbs", E, "Part Weight must be greater than 0", VI),
    ("vi_part_length_required", "Part length required", "material", "part_length_in", E, "Part Length must be greater than 0", VI),
    ("vi_part_width_required", "Part width required", "material", "part_width_in", E, "Part Width must be greater than 0", VI),
    ("vi_bulk_method_required", "Bulk input method required", "material", "bulk_input_method", E, "Bulk input method is required for bulk material", VI),
    ("vi_mass_flow_required", "Mass flow required", "material", "mass_flow_lbs_per_hr", E, "Mass flow rate must be greater than 0 for weight-flow input", VI),
    ("vi_volume_flow_required", "Volume flow required", "material", "volume_flow_ft3_per_hr", E, "Volume flow rate must be greater than 0 for volume-flow input", VI),
    ("vi_density_required", "Density required", "material", "density_lbs_per_ft3", E, "Material density must be greater than 0 for volume-flow input", VI),
    ("vi_density_source_required", "Density source required", "material", "density_source", E, "Density source is required for volume-flow input", VI),
    ("vi_part_spacing_negative", "Negative part spacing", "material", "part_spacing_in", E, "Part Spacing must be >= 0", VI),
    ("vi_drop_height_negative", "Negative drop height", "material", "drop_height_in", E, "Drop height cannot be negative.", VI),

    # --- validate_inputs: power-user parameters ---
    ("vi_safety_factor_low", "Safety factor too low", "parameter", "safety_factor", E, "Safety factor must be >= 1.0", VI),
    ("vi_safety_factor_high", "Safety factor too high", "parameter", "safety_factor", E, "Safety factor must be <= 5.0", VI),
    ("vi_piw_zero", "PIW zero", "parameter", "belt_coeff_piw", E, "PIW must be > 0", VI),
    ("vi_piw_range", "PIW out of range", "parameter", "belt_coeff_piw", E, "PIW should be between 0.05 and 0.30 lb/in", VI),
    ("vi_pil_zero", "PIL zero", "parameter", "belt_coeff_pil", E, "PIL must be > 0", VI),
    ("vi_pil_range", "PIL out of range", "parameter", "belt_coeff_pil", E, "PIL should be between 0.05 and 0.30 lb/in", VI),
    ("vi_starting_pull_negative", "Negative starting pull", "parameter", "starting_belt_pull_lb", E, "Starting belt pull must be >= 0", VI),
    ("vi_starting_pull_high", "Starting pull too high", "parameter", "starting_belt_pull_lb", E, "Starting belt pull must be <= 2000", VI),
    ("vi_friction_coeff_low", "Friction coefficient too low", "parameter", "friction_coeff", E, "Friction coefficient must be >= 0.05", VI),
    ("vi_friction_coeff_high", "Friction coefficient too high", "parameter", "friction_coeff", E, "Friction coefficient must be <= 0.6", VI),
    ("vi_motor_rpm_low", "Motor RPM too low", "parameter", "motor_rpm", E, "Motor RPM must be >= 800", VI),
    ("vi_motor_rpm_high", "Motor RPM too high", "parameter", "motor_rpm", E, "Motor RPM must be <= 3600", VI),

    # --- validate_inputs: belt ---
    ("vi_vguide_profile_required", "V-guide profile required", "belt", "v_guide_key", E, "V-guide profile is required when belt tracking method is V-guided", VI),
    ("vi_pu_belt_vguide_incompatible", "PU belt V-guide incompatible", "belt", "v_guide_key", E, "Selected V-guide has no PU pulley data. Choose a V-guide rated for PU belts.", VI),
    ("vi_piw_override_zero", "PIW override zero", "belt", "belt_piw_override", E, "Belt PIW override must be > 0", VI),
    ("vi_piw_override_range", "PIW override out of range", "belt", "belt_piw_override", E, "Belt PIW override should be between 0.05 and 0.30 lb/in", VI),
    ("vi_pil_override_zero", "PIL override zero", "belt", "belt_pil_override", E, "Belt PIL override must be > 0", VI),
    ("vi_pil_override_range", "PIL override out of range", "belt", "belt_pil_override", E, "Belt PIL override should be between 0.05 and 0.30 lb/in", VI),
    ("vi_belt_selection_required", "Belt selection required", "belt", "belt_catalog_key", E, "Select a belt from the catalog or enter PIW/PIL overrides", VI),

    # --- validate_inputs: shafts ---
    ("vi_drive_shaft_manual_required", "Drive shaft diameter required", "shaft", "drive_shaft_diameter_in", E, "Drive shaft diameter is required when shaft diameter mode is Manual", VI),
    ("vi_tail_shaft_manual_required", "Tail shaft diameter required", "shaft", "tail_shaft_diameter_in", E, "Tail shaft diameter is required when shaft diameter mode is Manual", VI),
    ("vi_drive_shaft_min", "Drive shaft below minimum", "shaft", "drive_shaft_diameter_in", E, 'Drive shaft diameter must be >= 0.5"', VI),
    ("vi_drive_shaft_max", "Drive shaft above maximum", "shaft", "drive_shaft_diameter_in", E, 'Drive shaft diameter must be <= 4.0"', VI),
    ("vi_tail_shaft_min", "Tail shaft below minimum", "shaft", "tail_shaft_diameter_in", E, 'Tail shaft diameter must be >= 0.5"', VI),
    ("vi_tail_shaft_max", "Tail shaft above maximum", "shaft", "tail_shaft_diameter_in", E, 'Tail shaft diameter must be <= 4.0"', VI),

    # --- validate_inputs: cleats ---
    ("vi_cleat_height_required", "Cleat height required", "cleat", "cleat_height_in", E, "Cleat height is required when cleats are enabled", VI),
    ("vi_cleat_height_min", "Cleat height below minimum", "cleat", "cleat_height_in", E, 'Cleat height must be >= 0.5"', VI),
    ("vi_cleat_height_max", "Cleat height above maximum", "cleat", "cleat_height_in", E, 'Cleat height must be <= 6"', VI),
    ("vi_cleat_spacing_required", "Cleat spacing required", "cleat", "cleat_spacing_in", E, "Cleat spacing is required when cleats are enabled", VI),
    ("vi_cleat_spacing_min", "Cleat spacing below minimum", "cleat", "cleat_spacing_in", E, 'Cleat spacing must be >= 2"', VI),
    ("vi_cleat_spacing_max", "Cleat spacing above maximum", "cleat", "cleat_spacing_in", E, 'Cleat spacing must be <= 48"', VI),
    ("vi_cleat_edge_offset_required", "Cleat edge offset required", "cleat", "cleat_edge_offset_in", E, "Cleat edge offset is required when cleats are enabled", VI),
    ("vi_cleat_edge_offset_min", "Negative cleat edge offset", "cleat", "cleat_edge_offset_in", E, "Cleat edge offset cannot be negative", VI),
    ("vi_cleat_edge_offset_max", "Cleat edge offset above maximum", "cleat", "cleat_edge_offset_in", E, 'Cleat edge offset must be <= 12"', VI),

    # --- validate_inputs: TOB heights ---
    ("vi_tail_tob_negative", "Negative tail TOB", "height", "tail_tob_in", E, "Tail TOB cannot be negative", VI),
    ("vi_drive_tob_negative", "Negative drive TOB", "height", "drive_tob_in", E, "Drive TOB cannot be negative", VI),
    ("vi_adjustment_range_negative", "Negative adjustment range", "height", "adjustment_required_in", E, "Adjustment range cannot be negative", VI),

    # --- validate_inputs: floor support ---
    ("vi_tob_required_floor", "Reference TOB required", "support", "reference_end", E, "Reference end TOB is required when the conveyor is floor supported", VI),
    ("vi_leg_model_required", "Leg model required", "support", "leg_model_key", E, "Leg model is required when legs are included", VI),
    ("vi_caster_qty_zero", "Caster quantity required", "support", "caster_rigid_qty", E, "At least one caster is required when casters are included", VI),
    ("vi_rigid_caster_model_required", "Rigid caster model required", "support", "caster_rigid_model_key", E, "Rigid caster model is required when rigid quantity is greater than 0", VI),
    ("vi_swivel_caster_model_required", "Swivel caster model required", "support", "caster_swivel_model_key", E, "Swivel caster model is required when swivel quantity is greater than 0", VI),
    ("vi_leg_model_legacy", "Leg model required (legacy)", "support", "leg_model_key", E, "Leg model is required when support method is legs", VI),
    ("vi_caster_qty_legacy", "Caster quantity required (legacy)", "support", "caster_rigid_qty", E, "At least one caster is required when support method is casters", VI),
    ("vi_rigid_caster_model_legacy", "Rigid caster model required (legacy)", "support", "caster_rigid_model_key", E, "Rigid caster model is required when rigid quantity is greater than 0", VI),
    ("vi_swivel_caster_model_legacy", "Swivel caster model required (legacy)", "support", "caster_swivel_model_key", E, "Swivel caster model is required when swivel quantity is greater than 0", VI),

    # --- validate_inputs: frame ---
    ("vi_custom_frame_height_required", "Custom frame height required", "frame", "custom_frame_height_in", E, "Custom frame height is required when frame height mode is Custom", VI),
    ("vi_custom_frame_height_min", "Custom frame height below minimum", "frame", "custom_frame_height_in", E, 'Custom frame height must be at least 3.0"', VI),
    ("vi_custom_frame_height_zero", "Custom frame height zero", "frame", "custom_frame_height_in", E, "Custom frame height must be greater than 0", VI),
    ("vi_sheet_metal_gauge_required", "Sheet metal gauge required", "frame", "frame_sheet_metal_gauge", E, "Sheet metal gauge is required for sheet metal frame construction", VI),
    ("vi_channel_series_required", "Channel series required", "frame", "frame_structural_channel_series", E, "Channel series is required for structural channel frame construction", VI),
    ("vi_pulley_end_frame_min", "Negative pulley end clearance", "frame", "pulley_end_to_frame_inside_in", E, "Pulley end to frame inside distance cannot be negative", VI),
    ("vi_pulley_end_frame_max", "Pulley end clearance above maximum", "frame", "pulley_end_to_frame_inside_in", E, 'Pulley end to frame inside distance must be <= 6"', VI),

    # --- validate_parameters ---
    ("vp_friction_coeff_range", "Friction coefficient range", "parameter", "friction_coeff", E, "Friction coefficient must be between 0.1 and 1.0", VP),
    ("vp_safety_factor_min", "Safety factor minimum", "parameter", "safety_factor", E, "Safety factor must be >= 1.0", VP),
    ("vp_starting_pull_min", "Starting pull minimum", "parameter", "starting_belt_pull_lb", E, "Starting belt pull must be >= 0", VP),
    ("vp_motor_rpm_zero", "Motor RPM zero", "parameter", "motor_rpm", E, "Motor RPM must be greater than 0", VP),
    ("vp_gravity_zero", "Gravity constant zero", "parameter", "gravity_in_per_s2", E, "Gravity constant must be greater than 0", VP),

    # --- apply_application_rules: temperature / fluid ---
    ("ar_red_hot_parts", "Red hot parts", "application", "part_temperature_class", E, "Do not use this conveyor for red hot parts", AR),
    ("ar_considerable_oil", "Considerable oil or liquid", "application", "fluid_type", W, "Consider ribbed or specialty belt", AR),
    ("ar_long_conveyor", "Long conveyor", "geometry", "conveyor_length_cc_in", W, "Consider multi-section body", AR),
    ("ar_hot_parts", "Hot parts", "application", "part_temperature_class", W, "Consider high-temperature belt", AR),
    ("ar_minimal_oil", "Minimal residual oil", "application", "fluid_type", I, "Minimal residual oil present", AR),
    ("ar_drop_height_high", "High drop height", "application", "drop_height_in", W, "Drop height is high. Consider impact or wear protection.", AR),

    # --- apply_application_rules: incline ---
    ("ar_incline_over_45", "Incline over 45 degrees", "geometry", "conveyor_incline_deg", E, "Incline exceeds 45°. A conveyor without positive engagement is not supported by this model.", AR),
    ("ar_incline_35_45", "Incline 35 to 45 degrees", "geometry", "conveyor_incline_deg", W, "Incline exceeds 35°. Product retention by friction alone is unlikely. Cleats or positive engagement features are required for reliable operation.", AR),
    ("ar_incline_20_35", "Incline 20 to 35 degrees", "geometry", "conveyor_incline_deg", W, "Incline exceeds 20°. Product retention by friction alone may be insufficient. Cleats or other retention features are typically required at this angle.", AR),

    # --- apply_application_rules: bulk material ---
    ("ar_density_assumed", "Density assumed from class", "material", "density_source", W, "Density is assumed from material class. Confirm with a measured value.", AR),
    ("ar_smallest_lump_negative", "Negative smallest lump", "material", "smallest_lump_size_in", E, "Smallest lump size cannot be negative", AR),
    ("ar_largest_lump_negative", "Negative largest lump", "material", "largest_lump_size_in", E, "Largest lump size cannot be negative", AR),
    ("ar_lump_size_inversion", "Lump size inversion", "material", "smallest_lump_size_in", E, "Smallest lump size cannot exceed largest lump size", AR),
    ("ar_lump_exceeds_belt_width", "Lump exceeds belt width", "material", "largest_lump_size_in", W, "Largest lump exceeds 80% of belt width", AR),
    ("ar_surge_multiplier_low", "Surge multiplier below 1", "material", "surge_multiplier", E, "Surge multiplier must be >= 1.0", AR),
    ("ar_surge_multiplier_missing", "Surge multiplier missing", "material", "surge_multiplier", W, "Surge feed selected without a surge multiplier. Continuous flow is assumed.", AR),
    ("ar_weight_flow_no_density", "Weight flow without density", "material", "density_lbs_per_ft3", W, "Density not provided. Belt volume loading cannot be checked.", AR),

    # --- apply_application_rules: belt / pulley ---
    ("ar_fleece_vguide", "Fleece belt with V-guide", "belt", "belt_family", W, "Fleece belts are not recommended with V-guided tracking", AR),
    ("ar_drive_pulley_below_belt_min", "Drive pulley below belt minimum", "pulley", "drive_pulley_diameter_in", W, "Drive pulley diameter is below the belt minimum for the tracking method", AR),
    ("ar_tail_pulley_below_belt_min", "Tail pulley below belt minimum", "pulley", "tail_pulley_diameter_in", W, "Tail pulley diameter is below the belt minimum for the tracking method", AR),
    ("ar_belt_catalog_drive_pulley_min", "Drive pulley below catalog belt minimum", "belt", "drive_pulley_diameter_in", W, "Drive pulley diameter is below the catalog belt minimum", AR),
    ("ar_belt_catalog_tail_pulley_min", "Tail pulley below catalog belt minimum", "belt", "tail_pulley_diameter_in", W, "Tail pulley diameter is below the catalog belt minimum", AR),
    ("pulley_internal_bearings_station", "Internal bearing pulley off tail", "pulley", "shaft_arrangement", E, "Internal bearing pulleys can only be used at tail position", AR),
    ("pulley_station_incompatible", "Pulley station incompatible", "pulley", "station", E, "Selected pulley is not allowed at this position", AR),
    ("pulley_face_width_exceeded", "Pulley face width exceeded", "pulley", "face_width_max_in", E, "Belt width exceeds the selected pulley's maximum face width", AR),

    # --- apply_application_rules: cleats ---
    ("ar_cleat_spacing_vs_part", "Cleat spacing shorter than part", "cleat", "cleat_spacing_in", W, "Cleat spacing is less than the part travel dimension. Parts will not fit between cleats.", AR),
    ("ar_cleat_edge_offset_overlap", "Cleat edge offset overlap", "cleat", "cleat_edge_offset_in", W, "Cleat edge offset exceeds half the belt width", AR),
    ("ar_drive_pulley_below_cleat_min", "Drive pulley below cleat minimum", "cleat", "drive_pulley_diameter_in", E, "Drive pulley diameter is below the cleat minimum pulley diameter", AR),
    ("ar_tail_pulley_below_cleat_min", "Tail pulley below cleat minimum", "cleat", "tail_pulley_diameter_in", E, "Tail pulley diameter is below the cleat minimum pulley diameter", AR),
    ("ar_cleat_lookup_failed", "Cleat minimum pulley lookup failed", "cleat", "cleat_profile", W, "Cleat minimum pulley diameter could not be determined", AR),
    ("ar_cleat_odd_gap_small", "Small odd cleat gap", "cleat", "cleat_odd_gap_size", W, 'Odd cleat gap is less than 2"', AR),

    # --- apply_application_rules: safety / features ---
    ("ar_finger_safe_no_guards", "Finger safe without end guards", "safety", "end_guards", W, "Finger safety may require end guards depending on layout.", AR),
    ("ar_finger_safe_no_covers", "Finger safe without bottom covers", "safety", "bottom_covers", W, "Bottom covers may be required to achieve finger-safe access underneath.", AR),
    ("ar_clipper_lacing", "Clipper lacing", "safety", "lacing_style", W, "Clipper lacing may interfere with end guards due to protrusion.", AR),

    # --- apply_application_rules: application / demand ---
    ("ar_start_stop_short_cycle", "Short start/stop cycle", "drive", "cycle_time_seconds", W, "Frequent start/stop applications may require a higher-duty gearbox.", AR),
    ("ar_heavy_sideload_no_vguide", "Heavy side load without V-guide", "belt", "belt_tracking_method", E, "Heavy side loading requires V-guided tracking. Change tracking method to V-guided.", AR),
    ("ar_heavy_sideload_warning", "Heavy side load", "belt", "side_loading_severity", W, "Heavy side loading typically requires a V-guide for reliable tracking.", AR),
    ("ar_moderate_sideload", "Moderate side load", "belt", "side_loading_severity", W, "Moderate side loading may require a V-guide for reliable tracking.", AR),

    # --- apply_application_rules: frame / return support ---
    ("ar_frame_height_design_review", "Frame height design review", "frame", "frame_height_mode", W, "Frame height is below the design review threshold", AR),
    ("ar_snub_rollers_required", "Snub rollers required", "frame", "frame_height_mode", I, "Frame height requires snub rollers at the pulleys", AR),
    ("ar_cleats_snub_interference", "Cleats with snub rollers", "return_support", "return_snub_mode", W, "Cleats may interfere with return snub rollers", AR),
    ("ar_low_profile_no_snubs", "Low profile return without snubs", "return_support", "return_snub_mode", W, "Low profile return frame normally requires snub rollers", AR),
    ("ar_gravity_roller_sag", "Gravity roller spacing too wide", "return_support", "return_gravity_roller_spacing_in", W, "Gravity roller spacing over 72\" may allow excessive belt sag", AR),
    ("ar_gravity_roller_over_engineered", "Gravity roller spacing tight", "return_support", "return_gravity_roller_spacing_in", I, "Gravity roller spacing under 24\" is tighter than needed", AR),
    ("ar_end_offset_too_small", "Return end offset too small", "return_support", "return_end_offset_in", W, 'Return end offset is less than 6"', AR),
    ("ar_end_offset_too_large", "Return end offset too large", "return_support", "return_end_offset_in", W, 'Return end offset exceeds 60"', AR),
    ("ar_low_profile_info", "Low profile frame", "frame", "frame_height_mode", I, "Low profile frame selected", AR),
    ("ar_custom_frame_info", "Custom frame height", "frame", "frame_height_mode", I, "Custom frame height selected", AR),
    ("ar_cleat_height_frame_contribution", "Cleat height adds to frame", "frame", "cleat_height_in", I, "Cleat height adds twice its height to the frame envelope", AR),
    ("ar_low_profile_cleats_error", "Low profile with cleats", "frame", "frame_height_mode", E, "Low profile frame cannot be used with cleats", AR),

    # --- apply_application_rules: sprockets / speed / drive ---
    ("ar_chain_ratio_low", "Chain ratio low", "sprocket", "drive_shaft_sprocket_teeth", W, "Chain ratio is below 0.5", AR),
    ("ar_chain_ratio_high", "Chain ratio high", "sprocket", "drive_shaft_sprocket_teeth", W, "Chain ratio exceeds 3.0", AR),
    ("ar_gm_sprocket_small", "Gearmotor sprocket small", "sprocket", "gm_sprocket_teeth", W, "Gearmotor sprocket has fewer than 12 teeth", AR),
    ("ar_drive_sprocket_small", "Drive shaft sprocket small", "sprocket", "drive_shaft_sprocket_teeth", W, "Drive shaft sprocket has fewer than 12 teeth", AR),
    ("ar_belt_speed_high", "Belt speed high", "speed", "belt_speed_fpm", W, "Belt speed exceeds 300 FPM", AR),
    ("ar_gear_ratio_low", "Gear ratio low", "drive", "gear_ratio", W, "Gear ratio is below 5", AR),
    ("ar_gear_ratio_high", "Gear ratio high", "drive", "gear_ratio", W, "Gear ratio exceeds 60", AR),
    ("ar_premium_feature", "Premium feature", "premium", "premium", I, "Configuration includes a premium feature", AR),

    # --- validate_tob (commit only) ---
    ("tob_tail_htob_required", "Tail TOB required to save (H_TOB)", "height", "tail_tob_in", E, "Tail TOB is required to save in H_TOB geometry mode", TOB),
    ("tob_drive_htob_required", "Drive TOB required to save (H_TOB)", "height", "drive_tob_in", E, "Drive TOB is required to save in H_TOB geometry mode", TOB),
    ("tob_tail_floor_required", "Tail TOB required to save", "height", "tail_tob_in", E, "Tail TOB is required to save a floor-supported conveyor referenced at the tail", TOB),
    ("tob_drive_floor_required", "Drive TOB required to save", "height", "drive_tob_in", E, "Drive TOB is required to save a floor-supported conveyor referenced at the drive", TOB),

    # --- apply_height_warnings ---
    ("hw_adjustment_range_very_large", "Very large adjustment range", "height", "adjustment_required_in", W, 'Adjustment range exceeds 12"', HW),
    ("hw_adjustment_range_large", "Large adjustment range", "height", "adjustment_required_in", I, 'Adjustment range exceeds 6"', HW),
    ("hw_angle_mismatch", "Implied angle mismatch", "height", "conveyor_incline_deg", W, "Angle implied by the TOB heights differs from the entered incline", HW),

    # --- apply_pci_rules ---
    ("pci_tube_geometry_error", "Invalid tube geometry", "pci", "tube_wall_in", E, "Invalid tube geometry", PCI),
    ("pci_drive_stress_fail", "Drive tube stress over limit", "pci", "drive_tube_wall_in", E, "Drive pulley tube stress exceeds the PCI limit", PCI),
    ("pci_tail_stress_fail", "Tail tube stress over limit", "pci", "tail_tube_wall_in", E, "Tail pulley tube stress exceeds the PCI limit", PCI),
    ("pci_drive_stress_warn", "Drive tube stress warning", "pci", "drive_tube_wall_in", W, "Drive pulley tube stress exceeds the PCI limit", PCI),
    ("pci_tail_stress_warn", "Tail tube stress warning", "pci", "tail_tube_wall_in", W, "Tail pulley tube stress exceeds the PCI limit", PCI),
    ("pci_hub_centers_estimated", "Hub centers estimated", "pci", "hub_centers_in", I, "Hub centers not provided. Belt width used as an estimate.", PCI),
    ("pci_status_estimated", "PCI check estimated", "pci", "hub_centers_in", I, "Tube stress is within limits using estimated hub centers", PCI),
    ("pci_drive_wall_upgrade", "Drive shell wall upgrade", "pci", "drive_shell_wall_in", W, "Drive pulley shell wall upgrade recommended", PCI),
    ("pci_tail_wall_upgrade", "Tail shell wall upgrade", "pci", "tail_shell_wall_in", W, "Tail pulley shell wall upgrade recommended", PCI),
    ("pci_drive_wall_engineering_required", "Drive shell wall needs engineering", "pci", "drive_shell_wall_in", E, "No standard drive pulley shell wall passes. Engineering review required.", PCI),
    ("pci_tail_wall_engineering_required", "Tail shell wall needs engineering", "pci", "tail_shell_wall_in", E, "No standard tail pulley shell wall passes. Engineering review required.", PCI),

    # --- apply_hub_connection_rules ---
    ("hub_not_ideal_for_drive", "Hub connection not ideal for drive", "pulley", "drive_hub_connection_type", W, "Selected hub connection is not ideal for a drive pulley", HUB),
    ("hub_drive_taper_lock", "Drive Taper-Lock bushing", "pulley", "drive_bushing_system", W, "Taper-Lock is not recommended for two-hub drive pulleys", HUB),
    ("hub_tail_taper_lock", "Tail Taper-Lock bushing", "pulley", "tail_bushing_system", W, "Taper-Lock is not recommended for two-hub tail pulleys", HUB),
]


# ============================================================
# Enrichment: (condition, action, threshold)
# ============================================================

ENRICHMENTS = {
    # --- Geometry & Layout ---
    "vi_conveyor_length_zero": (
        "Conveyor center-to-center length is zero or not set",
        "Block configuration",
        "length ≤ 0",
    ),
    "vi_belt_width_zero": (
        "Belt width is zero or not set",
        "Block configuration",
        "belt_width ≤ 0",
    ),
    "vi_incline_negative": (
        "Incline angle is less than zero",
        "Block configuration",
        "incline < 0°",
    ),
    "vi_horizontal_run_zero": (
        "Geometry mode is H_ANGLE or H_TOB and horizontal run is zero or not set",
        "Block configuration",
        "horizontal_run ≤ 0 in H_ANGLE/H_TOB mode",
    ),
    "vi_tail_tob_required_htob": (
        "Geometry mode is H_TOB and Tail TOB is not provided",
        "Block configuration",
        "tail_tob undefined in H_TOB mode",
    ),
    "vi_drive_tob_required_htob": (
        "Geometry mode is H_TOB and Drive TOB is not provided",
        "Block configuration",
        "drive_tob undefined in H_TOB mode",
    ),

    # --- Pulley Diameter ---
    "vi_pulley_diameter_zero": (
        "Pulley diameter is zero or not set",
        "Block configuration",
        "pulley_diameter ≤ 0",
    ),
    "vi_drive_pulley_zero": (
        "Drive pulley diameter is provided but is zero or negative",
        "Block configuration",
        "drive_pulley ≤ 0",
    ),
    "vi_drive_pulley_min": (
        "Drive pulley diameter is below the minimum allowed",
        "Block configuration",
        "drive_pulley < 2.5″",
    ),
    "vi_tail_pulley_zero": (
        "Tail pulley diameter is provided but is zero or negative",
        "Block configuration",
        "tail_pulley ≤ 0",
    ),
    "vi_tail_pulley_min": (
        "Tail pulley diameter is below the minimum allowed",
        "Block configuration",
        "tail_pulley < 2.5″",
    ),

    # --- Speed Mode ---
    "vi_belt_speed_zero": (
        "Speed mode is Belt Speed and belt speed is zero or not set",
        "Block configuration",
        "belt_speed ≤ 0 in Belt Speed mode",
    ),
    "vi_drive_rpm_zero": (
        "Speed mode is Drive RPM and drive RPM is zero or not set",
        "Block configuration",
        "drive_rpm ≤ 0 in Drive RPM mode",
    ),
    "vi_pulley_dia_for_speed": (
        "Drive pulley diameter is zero or not set (needed for speed calculation)",
        "Block configuration",
        "drive_pulley ≤ 0",
    ),

    # --- Sprocket (Bottom Mount) ---
    "vi_gm_sprocket_teeth_zero": (
        "Gearmotor is bottom-mounted and sprocket teeth is zero or not set",
        "Block configuration",
        "gm_sprocket_teeth ≤ 0 when bottom-mounted",
    ),
    "vi_gm_sprocket_teeth_integer": (
        "Gearmotor sprocket teeth is not a whole number",
        "Block configuration",
        "gm_sprocket_teeth is not integer",
    ),
    "vi_drive_shaft_sprocket_zero": (
        "Gearmotor is bottom-mounted and drive shaft sprocket teeth is zero or not set",
        "Block configuration",
        "drive_shaft_sprocket ≤ 0 when bottom-mounted",
    ),
    "vi_drive_shaft_sprocket_integer": (
        "Drive shaft sprocket teeth is not a whole number",
        "Block configuration",
        "drive_shaft_sprocket is not integer",
    ),

    # --- Throughput ---
    "vi_throughput_negative": (
        "Required throughput is provided but is negative",
        "Block configuration",
        "throughput < 0",
    ),
    "vi_throughput_margin_negative": (
        "Throughput margin is provided but is negative",
        "Block configuration",
        "margin < 0%",
    ),

    # --- Material Form ---
    "vi_material_form_required": (
        "No material form (PARTS or BULK) is selected",
        "Block configuration",
        "material_form is empty",
    ),

    # --- Parts Mode ---
    "vi_part_weight_required": (
        "Material form is PARTS but part weight is missing or zero",
        "Block configuration",
        "part_weight undefined or ≤ 0 in PARTS mode",
    ),
    "vi_part_length_required": (
        "Material form is PARTS but part length is missing or zero",
        "Block configuration",
        "part_length undefined or ≤ 0 in PARTS mode",
    ),
    "vi_part_width_required": (
        "Material form is PARTS but part width is missing or zero",
        "Block configuration",
        "part_width undefined or ≤ 0 in PARTS mode",
    ),

    # --- Bulk Mode ---
    "vi_bulk_method_required": (
        "Material form is BULK but no bulk input method is selected",
        "Block configuration",
        "bulk_input_method is empty in BULK mode",
    ),
    "vi_mass_flow_required": (
        "Bulk input method is Weight Flow but mass flow rate is missing or zero",
        "Block configuration",
        "mass_flow ≤ 0 in Weight Flow mode",
    ),
    "vi_volume_flow_required": (
        "Bulk input method is Volume Flow but volume flow rate is missing or zero",
        "Block configuration",
        "volume_flow ≤ 0 in Volume Flow mode",
    ),
    "vi_density_required": (
        "Bulk input method is Volume Flow but material density is missing or zero",
        "Block configuration",
        "density ≤ 0 in Volume Flow mode",
    ),
    "vi_density_source_required": (
        "Bulk input method is Volume Flow but density source is not specified",
        "Block configuration",
        "density_source is empty in Volume Flow mode",
    ),

    # --- Part Spacing ---
    "vi_part_spacing_negative": (
        "Material form is PARTS and part spacing is negative",
        "Block configuration",
        "part_spacing < 0",
    ),

    # --- Drop Height ---
    "vi_drop_height_negative": (
        "Drop height is a negative value",
        "Block configuration",
        "drop_height < 0",
    ),

    # --- Power-User Parameters ---
    "vi_safety_factor_low": (
        "Safety factor is provided but is less than 1.0",
        "Block configuration",
        "SF < 1.0",
    ),
    "vi_safety_factor_high": (
        "Safety factor is provided but exceeds 5.0",
        "Block configuration",
        "SF > 5.0",
    ),
    "vi_piw_zero": (
        "Belt weight coefficient PIW is provided but is zero or negative",
        "Block configuration",
        "PIW ≤ 0",
    ),
    "vi_piw_range": (
        "Belt weight coefficient PIW is outside the valid range",
        "Block configuration",
        "PIW < 0.05 or PIW > 0.30 lb/in",
    ),
    "vi_pil_zero": (
        "Belt weight coefficient PIL is provided but is zero or negative",
        "Block configuration",
        "PIL ≤ 0",
    ),
    "vi_pil_range": (
        "Belt weight coefficient PIL is outside the valid range",
        "Block configuration",
        "PIL < 0.05 or PIL > 0.30 lb/in",
    ),
    "vi_starting_pull_negative": (
        "Starting belt pull is provided but is negative",
        "Block configuration",
        "starting_pull < 0 lb",
    ),
    "vi_starting_pull_high": (
        "Starting belt pull exceeds maximum allowed",
        "Block configuration",
        "starting_pull > 2000 lb",
    ),
    "vi_friction_coeff_low": (
        "Friction coefficient is provided but is below minimum",
        "Block configuration",
        "CoF < 0.05",
    ),
    "vi_friction_coeff_high": (
        "Friction coefficient is provided but exceeds maximum",
        "Block configuration",
        "CoF > 0.6",
    ),
    "vi_motor_rpm_low": (
        "Motor RPM is provided but is below 800",
        "Block configuration",
        "RPM < 800",
    ),
    "vi_motor_rpm_high": (
        "Motor RPM is provided but exceeds 3600",
        "Block configuration",
        "RPM > 3600",
    ),

    # --- Belt Tracking & V-Guide ---
    "vi_vguide_profile_required": (
        "Belt tracking is V-guided but no V-guide profile is selected",
        "Block configuration",
        "v_guide_key is empty when tracking = V-guided",
    ),
    "vi_pu_belt_vguide_incompatible": (
        "V-guided tracking with PU belt but V-guide has no PU pulley data",
        "Block configuration",
        "belt_family = PU AND v_guide has no PU data",
    ),

    # --- Shaft Diameter ---
    "vi_drive_shaft_manual_required": (
        "Shaft mode is Manual but drive shaft diameter is missing or zero",
        "Block configuration",
        "drive_shaft undefined or ≤ 0 in Manual mode",
    ),
    "vi_tail_shaft_manual_required": (
        "Shaft mode is Manual but tail shaft diameter is missing or zero",
        "Block configuration",
        "tail_shaft undefined or ≤ 0 in Manual mode",
    ),

    # --- Belt Override ---
    "vi_piw_override_zero": (
        "Belt PIW override is provided but is zero or negative",
        "Block configuration",
        "PIW override ≤ 0",
    ),
    "vi_piw_override_range": (
        "Belt PIW override is outside the valid range",
        "Block configuration",
        "PIW override < 0.05 or > 0.30 lb/in",
    ),
    "vi_pil_override_zero": (
        "Belt PIL override is provided but is zero or negative",
        "Block configuration",
        "PIL override ≤ 0",
    ),
    "vi_pil_override_range": (
        "Belt PIL override is outside the valid range",
        "Block configuration",
        "PIL override < 0.05 or > 0.30 lb/in",
    ),

    # --- Belt Selection ---
    "vi_belt_selection_required": (
        "No belt is selected from catalog and no manual coefficients are provided",
        "Block configuration",
        "belt_key is empty AND no PIW/PIL overrides",
    ),

    # --- Shaft Range ---
    "vi_drive_shaft_min": (
        "Drive shaft diameter is below the minimum allowed",
        "Block configuration",
        "drive_shaft < 0.5″",
    ),
    "vi_drive_shaft_max": (
        "Drive shaft diameter exceeds the maximum allowed",
        "Block configuration",
        "drive_shaft > 4.0″",
    ),
    "vi_tail_shaft_min": (
        "Tail shaft diameter is below the minimum allowed",
        "Block configuration",
        "tail_shaft < 0.5″",
    ),
    "vi_tail_shaft_max": (
        "Tail shaft diameter exceeds the maximum allowed",
        "Block configuration",
        "tail_shaft > 4.0″",
    ),

    # --- Cleats ---
    "vi_cleat_height_required": (
        "Cleats are enabled but cleat height is missing or zero",
        "Block configuration",
        "cleat_height undefined or ≤ 0 when cleats enabled",
    ),
    "vi_cleat_height_min": (
        "Cleat height is below the minimum allowed",
        "Block configuration",
        "cleat_height < 0.5″",
    ),
    "vi_cleat_height_max": (
        "Cleat height exceeds the maximum allowed",
        "Block configuration",
        "cleat_height > 6″",
    ),
    "vi_cleat_spacing_required": (
        "Cleats are enabled but cleat spacing is missing or zero",
        "Block configuration",
        "cleat_spacing undefined or ≤ 0 when cleats enabled",
    ),
    "vi_cleat_spacing_min": (
        "Cleat spacing is below the minimum allowed",
        "Block configuration",
        "cleat_spacing < 2″",
    ),
    "vi_cleat_spacing_max": (
        "Cleat spacing exceeds the maximum allowed",
        "Block configuration",
        "cleat_spacing > 48″",
    ),
    "vi_cleat_edge_offset_required": (
        "Cleats are enabled but cleat edge offset is missing or negative",
        "Block configuration",
        "edge_offset undefined or < 0 when cleats enabled",
    ),
    "vi_cleat_edge_offset_min": (
        "Cleat edge offset is negative",
        "Block configuration",
        "edge_offset < 0″",
    ),
    "vi_cleat_edge_offset_max": (
        "Cleat edge offset exceeds the maximum allowed",
        "Block configuration",
        "edge_offset > 12″",
    ),

    # --- TOB Values ---
    "vi_tail_tob_negative": (
        "Tail TOB is provided but is negative",
        "Block configuration",
        "tail_tob < 0″",
    ),
    "vi_drive_tob_negative": (
        "Drive TOB is provided but is negative",
        "Block configuration",
        "drive_tob < 0″",
    ),
    "vi_adjustment_range_negative": (
        "Adjustment range is provided but is negative",
        "Block configuration",
        "adjustment_range < 0″",
    ),

    # --- Floor Support ---
    "vi_tob_required_floor": (
        "Conveyor is floor supported but reference TOB is not provided",
        "Block configuration",
        "reference_tob undefined when floor supported",
    ),
    "vi_leg_model_required": (
        "Legs are included but no leg model is selected",
        "Block configuration",
        "leg_model_key is empty when include_legs = true",
    ),
    "vi_caster_qty_zero": (
        "Casters are included but total quantity (rigid + swivel) is zero",
        "Block configuration",
        "rigid_qty + swivel_qty = 0 when include_casters = true",
    ),
    "vi_rigid_caster_model_required": (
        "Rigid caster quantity is greater than zero but no model is selected",
        "Block configuration",
        "rigid_qty > 0 AND rigid_model_key is empty",
    ),
    "vi_swivel_caster_model_required": (
        "Swivel caster quantity is greater than zero but no model is selected",
        "Block configuration",
        "swivel_qty > 0 AND swivel_model_key is empty",
    ),
    "vi_leg_model_legacy": (
        "Legacy support method is legs but no leg model is selected",
        "Block configuration",
        "support_method = legs AND leg_model_key is empty",
    ),
    "vi_caster_qty_legacy": (
        "Legacy support method is casters but total caster quantity is zero",
        "Block configuration",
        "support_method = casters AND total_casters = 0",
    ),
    "vi_rigid_caster_model_legacy": (
        "Legacy casters: rigid quantity > 0 but no model selected",
        "Block configuration",
        "rigid_qty > 0 AND rigid_model_key is empty (legacy)",
    ),
    "vi_swivel_caster_model_legacy": (
        "Legacy casters: swivel quantity > 0 but no model selected",
        "Block configuration",
        "swivel_qty > 0 AND swivel_model_key is empty (legacy)",
    ),

    # --- Frame Height ---
    "vi_custom_frame_height_required": (
        "Frame height mode is Custom but no custom height is provided",
        "Block configuration",
        "custom_frame_height undefined in Custom mode",
    ),
    "vi_custom_frame_height_min": (
        "Custom frame height is below the system minimum",
        "Block configuration",
        "custom_frame_height < MIN_FRAME_HEIGHT",
    ),
    "vi_custom_frame_height_zero": (
        "Custom frame height is provided but is zero or negative",
        "Block configuration",
        "custom_frame_height ≤ 0″",
    ),

    # --- Frame Construction ---
    "vi_sheet_metal_gauge_required": (
        "Frame construction is Sheet Metal but no gauge is specified",
        "Block configuration",
        "gauge is empty when construction = Sheet Metal",
    ),
    "vi_channel_series_required": (
        "Frame construction is Structural Channel but no series is specified",
        "Block configuration",
        "series is empty when construction = Structural Channel",
    ),
    "vi_pulley_end_frame_min": (
        "Pulley end to frame inside distance is negative",
        "Block configuration",
        "pulley_end_to_frame < 0″",
    ),
    "vi_pulley_end_frame_max": (
        "Pulley end to frame inside distance exceeds maximum",
        "Block configuration",
        "pulley_end_to_frame > 6″",
    ),
    "vp_friction_coeff_range": (
        "Parameter friction coefficient is outside the valid range",
        "Block configuration",
        "CoF < 0.1 or CoF > 1.0",
    ),
    "vp_safety_factor_min": (
        "Parameter safety factor is below minimum",
        "Block configuration",
        "SF < 1.0",
    ),
    "vp_starting_pull_min": (
        "Parameter starting belt pull is negative",
        "Block configuration",
        "starting_pull < 0 lb",
    ),
    "vp_motor_rpm_zero": (
        "Parameter motor RPM is zero or negative",
        "Block configuration",
        "motor_rpm ≤ 0",
    ),
    "vp_gravity_zero": (
        "Parameter gravity constant is zero or negative",
        "Block configuration",
        "gravity ≤ 0",
    ),

    # --- Temperature & Fluid ---
    "ar_red_hot_parts": (
        "Part temperature class is Red Hot",
        "Block configuration",
        "temperature_class = RED_HOT",
    ),
    "ar_considerable_oil": (
        "Fluid type is Considerable Oil/Liquid",
        "Warn engineer",
        "fluid_type = CONSIDERABLE",
    ),
    "ar_long_conveyor": (
        "Conveyor length exceeds 120 inches (10 feet)",
        "Warn engineer",
        "length > 120″",
    ),
    "ar_hot_parts": (
        "Part temperature class is Hot (not Red Hot)",
        "Warn engineer",
        "temperature_class = HOT",
    ),
    "ar_minimal_oil": (
        "Fluid type is Minimal Residual Oil",
        "Inform engineer",
        "fluid_type = MINIMAL",
    ),
    "ar_drop_height_high": (
        "Drop height is 24 inches or more",
        "Warn engineer",
        "drop_height ≥ 24″",
    ),

    # --- Incline ---
    "ar_incline_over_45": (
        "Incline angle exceeds 45 degrees",
        "Block configuration",
        "incline > 45°",
    ),
    "ar_incline_35_45": (
        "Incline angle is greater than 35° and 45° or less",
        "Warn engineer",
        "35° < incline ≤ 45°",
    ),
    "ar_incline_20_35": (
        "Incline angle is greater than 20° and 35° or less",
        "Warn engineer",
        "20° < incline ≤ 35°",
    ),

    # --- Bulk Mode Warnings ---
    "ar_density_assumed": (
        "Material form is Bulk and density source is Assumed from Class",
        "Warn engineer",
        "density_source = ASSUMED_CLASS",
    ),
    "ar_smallest_lump_negative": (
        "Smallest lump size is provided but is negative",
        "Block configuration",
        "smallest_lump < 0″",
    ),
    "ar_largest_lump_negative": (
        "Largest lump size is provided but is negative",
        "Block configuration",
        "largest_lump < 0″",
    ),
    "ar_lump_size_inversion": (
        "Smallest lump size exceeds largest lump size",
        "Block configuration",
        "smallest_lump > largest_lump",
    ),
    "ar_lump_exceeds_belt_width": (
        "Largest lump exceeds 80% of belt width",
        "Warn engineer",
        "largest_lump > belt_width × 0.8",
    ),
    "ar_surge_multiplier_low": (
        "Surge feed is selected and multiplier is below 1.0",
        "Block configuration",
        "surge_multiplier < 1.0",
    ),
    "ar_surge_multiplier_missing": (
        "Surge feed is selected but no multiplier is specified",
        "Warn engineer",
        "feed_behavior = SURGE AND surge_multiplier undefined",
    ),
    "ar_weight_flow_no_density": (
        "Bulk input method is Weight Flow but density is not provided",
        "Warn engineer",
        "bulk_method = WEIGHT_FLOW AND density undefined",
    ),

    # --- Belt & Pulley Warnings ---
    "ar_fleece_vguide": (
        "V-guided tracking with FLEECE belt family and a V-guide selected",
        "Warn engineer",
        "belt_family = FLEECE AND tracking = V-guided",
    ),
    "ar_drive_pulley_below_belt_min": (
        "Drive pulley diameter is below belt minimum for the current tracking method",
        "Warn engineer",
        "drive_pulley < belt_min_pulley",
    ),
    "ar_tail_pulley_below_belt_min": (
        "Tail pulley diameter is below belt minimum for the current tracking method",
        "Warn engineer",
        "tail_pulley < belt_min_pulley",
    ),

    # --- Cleat Warnings ---
    "ar_cleat_spacing_vs_part": (
        "Cleats are enabled and cleat spacing is less than the part travel dimension",
        "Warn engineer",
        "cleat_spacing < part_travel_dim",
    ),
    "ar_cleat_edge_offset_overlap": (
        "Cleat edge offset exceeds half of the belt width",
        "Warn engineer",
        "edge_offset > belt_width / 2",
    ),

    # --- Safety & Features ---
    "ar_finger_safe_no_guards": (
        "Finger-safe requirement is set but end guards are None",
        "Warn engineer",
        "finger_safe = true AND end_guards = None",
    ),
    "ar_finger_safe_no_covers": (
        "Finger-safe requirement is set but bottom covers are not enabled",
        "Warn engineer",
        "finger_safe = true AND bottom_covers = false",
    ),
    "ar_clipper_lacing": (
        "Lacing style is Clipper Lacing",
        "Warn engineer",
        "lacing_style = ClipperLacing",
    ),

    # --- Belt Catalog Pulley Warnings ---
    "ar_belt_catalog_drive_pulley_min": (
        "A belt is selected from catalog and drive pulley is below catalog belt minimum",
        "Warn engineer",
        "drive_pulley < belt_catalog_min_pulley",
    ),
    "ar_belt_catalog_tail_pulley_min": (
        "A belt is selected from catalog and tail pulley is below catalog belt minimum",
        "Warn engineer",
        "tail_pulley < belt_catalog_min_pulley",
    ),

    # --- Application & Demand ---
    "ar_start_stop_short_cycle": (
        "Start/stop application is enabled and cycle time is less than 10 seconds",
        "Warn engineer",
        "start_stop = true AND cycle_time < 10s",
    ),
    "ar_heavy_sideload_no_vguide": (
        "Side load direction is set, severity is Heavy, and tracking is not V-guided",
        "Block configuration",
        "severity = Heavy AND tracking ≠ V-guided",
    ),
    "ar_heavy_sideload_warning": (
        "Side load direction is set and severity is Heavy",
        "Warn engineer",
        "severity = Heavy",
    ),
    "ar_moderate_sideload": (
        "Side load direction is set and severity is Moderate",
        "Warn engineer",
        "severity = Moderate",
    ),

    # --- Frame Height Warnings ---
    "ar_frame_height_design_review": (
        "Effective frame height is below the design review threshold",
        "Warn engineer",
        "frame_height < DESIGN_REVIEW_THRESHOLD",
    ),
    "ar_snub_rollers_required": (
        "Frame height is below the snub roller threshold (largest pulley + 2.5″)",
        "Inform engineer",
        "frame_height < largest_pulley + 2.5″",
    ),

    # --- Return Support ---
    "ar_cleats_snub_interference": (
        "Cleats are enabled and return snub rollers are enabled",
        "Warn engineer",
        "cleats = true AND snub_rollers = true",
    ),
    "ar_low_profile_no_snubs": (
        "Return frame style is Low Profile and snub mode is explicitly No",
        "Warn engineer",
        "frame_style = LOW_PROFILE AND snub_mode = NO",
    ),
    "ar_gravity_roller_sag": (
        "Gravity roller spacing exceeds 72 inches",
        "Warn engineer",
        "roller_spacing > 72″",
    ),
    "ar_gravity_roller_over_engineered": (
        "Gravity roller spacing is less than 24 inches",
        "Inform engineer",
        "roller_spacing < 24″",
    ),
    "ar_end_offset_too_small": (
        "Return end offset is less than 6 inches",
        "Warn engineer",
        "end_offset < 6″",
    ),
    "ar_end_offset_too_large": (
        "Return end offset exceeds 60 inches",
        "Warn engineer",
        "end_offset > 60″",
    ),

    # --- Frame Mode Info ---
    "ar_low_profile_info": (
        "Frame height mode is Low Profile",
        "Inform engineer",
        "frame_height_mode = Low Profile",
    ),
    "ar_custom_frame_info": (
        "Frame height mode is Custom",
        "Inform engineer",
        "frame_height_mode = Custom",
    ),
    "ar_cleat_height_frame_contribution": (
        "Cleats are enabled (cleat height > 0)",
        "Inform engineer",
        "cleat_height > 0 (adds 2× to frame)",
    ),
    "ar_low_profile_cleats_error": (
        "Frame height mode is Low Profile and cleats are enabled",
        "Block configuration",
        "frame = Low Profile AND cleats enabled",
    ),

    # --- Sprocket Warnings ---
    "ar_chain_ratio_low": (
        "Bottom-mounted gearmotor chain ratio is below 0.5",
        "Warn engineer",
        "chain_ratio < 0.5",
    ),
    "ar_chain_ratio_high": (
        "Bottom-mounted gearmotor chain ratio exceeds 3.0",
        "Warn engineer",
        "chain_ratio > 3.0",
    ),
    "ar_gm_sprocket_small": (
        "Bottom-mounted gearmotor sprocket has fewer than 12 teeth",
        "Warn engineer",
        "gm_sprocket < 12T",
    ),
    "ar_drive_sprocket_small": (
        "Bottom-mounted drive shaft sprocket has fewer than 12 teeth",
        "Warn engineer",
        "drive_sprocket < 12T",
    ),

    # --- Speed Warnings ---
    "ar_belt_speed_high": (
        "Belt speed exceeds 300 feet per minute",
        "Warn engineer",
        "belt_speed > 300 FPM",
    ),
    "ar_gear_ratio_low": (
        "Calculated gear ratio (motor RPM / drive RPM) is below 5",
        "Warn engineer",
        "gear_ratio < 5",
    ),
    "ar_gear_ratio_high": (
        "Calculated gear ratio (motor RPM / drive RPM) exceeds 60",
        "Warn engineer",
        "gear_ratio > 60",
    ),

    # --- Premium ---
    "ar_premium_feature": (
        "Configuration includes premium features (belt conveyor only)",
        "Inform engineer",
        "premium feature present (belt conveyor only)",
    ),
    "tob_tail_htob_required": (
        "Saving in H_TOB geometry mode and Tail TOB is not provided",
        "Block configuration",
        "tail_tob undefined in H_TOB commit mode",
    ),
    "tob_drive_htob_required": (
        "Saving in H_TOB geometry mode and Drive TOB is not provided",
        "Block configuration",
        "drive_tob undefined in H_TOB commit mode",
    ),
    "tob_tail_floor_required": (
        "Saving with floor support, reference end is tail, and Tail TOB is not provided",
        "Block configuration",
        "tail_tob undefined when ref_end = tail (commit)",
    ),
    "tob_drive_floor_required": (
        "Saving with floor support, reference end is drive, and Drive TOB is not provided",
        "Block configuration",
        "drive_tob undefined when ref_end = drive (commit)",
    ),
    "hw_adjustment_range_very_large": (
        "Adjustment range exceeds 12 inches",
        "Warn engineer",
        "adjustment_range > 12″",
    ),
    "hw_adjustment_range_large": (
        "Adjustment range exceeds 6 inches (but 12 or less)",
        "Inform engineer",
        "6″ < adjustment_range ≤ 12″",
    ),
    "hw_angle_mismatch": (
        "Implied angle from TOB heights differs from entered incline by more than 0.5°",
        "Warn engineer",
        "|implied_angle − entered_incline| > 0.5°",
    ),
    "pci_tube_geometry_error": (
        "Tube geometry data (OD/wall) is invalid or missing",
        "Block configuration",
        "tube geometry invalid",
    ),
    "pci_drive_stress_fail": (
        "Drive pulley tube stress exceeds PCI limit in enforce mode",
        "Block configuration",
        "drive_stress > PCI_limit (enforce)",
    ),
    "pci_tail_stress_fail": (
        "Tail pulley tube stress exceeds PCI limit in enforce mode",
        "Block configuration",
        "tail_stress > PCI_limit (enforce)",
    ),
    "pci_drive_stress_warn": (
        "Drive pulley tube stress exceeds PCI limit in warn mode",
        "Warn engineer",
        "drive_stress > PCI_limit (warn)",
    ),
    "pci_tail_stress_warn": (
        "Tail pulley tube stress exceeds PCI limit in warn mode",
        "Warn engineer",
        "tail_stress > PCI_limit (warn)",
    ),
    "pci_hub_centers_estimated": (
        "Hub centers not provided; defaulted to belt width",
        "Inform engineer",
        "hub_centers undefined (defaults to belt_width)",
    ),
    "pci_status_estimated": (
        "PCI tube stress check passed but with estimated hub centers",
        "Inform engineer",
        "stress OK with estimated hub_centers",
    ),
    "hub_not_ideal_for_drive": (
        "Drive pulley uses ER internal bearings or dead shaft assembly",
        "Warn engineer",
        "hub_type = ER_internal or dead_shaft for drive",
    ),
    "hub_drive_taper_lock": (
        "Drive pulley uses Taper-Lock bushing with two-hub configuration",
        "Warn engineer",
        "bushing = Taper-Lock on two-hub drive pulley",
    ),
    "hub_tail_taper_lock": (
        "Tail pulley uses Taper-Lock bushing with two-hub configuration",
        "Warn engineer",
        "bushing = Taper-Lock on two-hub tail pulley",
    ),

    # --- Pulley selection / cleat minimum / shell wall ---
    "pulley_internal_bearings_station": (
        "An internal bearing pulley is selected at a position other than tail",
        "Block configuration",
        "shaft_arrangement = INTERNAL_BEARINGS AND station ≠ tail",
    ),
    "pulley_station_incompatible": (
        "Selected catalog pulley does not allow the station it is placed at",
        "Block configuration",
        "allow_<station> = false",
    ),
    "pulley_face_width_exceeded": (
        "Belt width exceeds the selected catalog pulley's maximum face width",
        "Block configuration",
        "belt_width > face_width_max",
    ),
    "ar_drive_pulley_below_cleat_min": (
        "Cleats are enabled and drive pulley is below the cleat minimum pulley diameter",
        "Block configuration",
        "drive_pulley < cleat_min_pulley",
    ),
    "ar_tail_pulley_below_cleat_min": (
        "Cleats are enabled and tail pulley is below the cleat minimum pulley diameter",
        "Block configuration",
        "tail_pulley < cleat_min_pulley",
    ),
    "ar_cleat_lookup_failed": (
        "Cleat profile is selected but the minimum pulley lookup failed",
        "Warn engineer",
        "cleat combination or centers factor not found",
    ),
    "ar_cleat_odd_gap_small": (
        "One odd gap layout leaves a gap under 2 inches",
        "Warn engineer",
        "odd_gap < 2″",
    ),
    "pci_drive_wall_upgrade": (
        "Drive pulley shell stress is above the margined limit but a standard wall step passes",
        "Warn engineer",
        "σ > limit / 1.25 (drive)",
    ),
    "pci_tail_wall_upgrade": (
        "Tail pulley shell stress is above the margined limit but a standard wall step passes",
        "Warn engineer",
        "σ > limit / 1.25 (tail)",
    ),
    "pci_drive_wall_engineering_required": (
        "No standard drive pulley shell wall passes at the margined limit",
        "Block configuration",
        "no wall step with σ ≤ limit / 1.25 (drive)",
    ),
    "pci_tail_wall_engineering_required": (
        "No standard tail pulley shell wall passes at the margined limit",
        "Block configuration",
        "no wall step with σ ≤ limit / 1.25 (tail)",
    ),
}

# Rules whose behaviour is flagged for engineering review
REVIEW_NOTES = {
    "vi_belt_speed_zero": (
        "The belt conveyor product only checked drive RPM. Confirm belt speed "
        "mode should be required for both products."
    ),
    "vi_drive_rpm_zero": (
        "The belt conveyor product only checked drive RPM without speed mode "
        "branching. Confirm the branching applies to both products."
    ),
    "vi_part_weight_required": (
        "The belt conveyor product treated part weight as optional. "
        "Confirm it is required in PARTS mode."
    ),
    "vi_part_length_required": (
        "The belt conveyor product treated part length as optional. "
        "Confirm it is required in PARTS mode."
    ),
    "vi_part_width_required": (
        "The belt conveyor product treated part width as optional. "
        "Confirm it is required in PARTS mode."
    ),
    "ar_belt_catalog_drive_pulley_min": (
        "The belt conveyor product raised this as an error against a single "
        "pulley diameter. Evaluate whether it should escalate to error."
    ),
    "ar_belt_catalog_tail_pulley_min": (
        "The belt conveyor product raised this as an error against a single "
        "pulley diameter. Evaluate whether it should escalate to error."
    ),
}
