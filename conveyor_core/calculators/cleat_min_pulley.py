"""
Cleat minimum pulley diameter.

Three stages, each able to fail on its own:
1. Base minimum diameter at 12" reference centers, looked up by
   (material family, profile, size, pattern) and the cleat style column.
   A drill & siped cleat with no tabulated value is unsupported; it never
   falls back to the solid value.
2. Desired spacing mapped to a centers bucket: <=4 -> 4, <=6 -> 6, <=8 -> 8, else 12.
3. adjusted = base x bucket factor, rounded UP to the increment (default 0.5").
"""

import re
from typing import List, Optional

from ..models import CleatPattern, CleatStyle
from ..schemas import CleatCatalogEntry, CleatsMinPulleyResult, Configuration
from .base import BaseCalculator, CalcContext, round_up_to_increment

DEFAULT_CLEAT_MATERIAL_FAMILY = "PVC_HOT_WELDED"


def centers_bucket(spacing_in: float) -> int:
    if spacing_in <= 4:
        return 4
    if spacing_in <= 6:
        return 6
    if spacing_in <= 8:
        return 8
    return 12


def round_min_pulley_dia(base_in: float, factor: float, increment: float = None) -> float:
    """base x factor, rounded up. Always >= base x factor, always a multiple of the increment."""
    return round_up_to_increment(base_in * factor, increment)


def _pattern_value(pattern) -> str:
    return pattern.value if isinstance(pattern, CleatPattern) else str(pattern)


def get_cleat_entry(entries, material_family: str, profile: str, size: str, pattern) -> Optional[CleatCatalogEntry]:
    wanted = _pattern_value(pattern)
    for entry in entries:
        if (entry.is_active
                and entry.material_family == material_family
                and entry.cleat_profile == profile
                and entry.cleat_size == size
                and entry.cleat_pattern.value == wanted):
            return entry
    return None


def is_drill_siped_supported(entry: Optional[CleatCatalogEntry]) -> bool:
    return entry is not None and entry.min_pulley_dia_12in_drill_siped_in is not None


def compute_cleats_min_pulley(
    entries,
    center_factors,
    material_family: str,
    profile: str,
    size: str,
    pattern,
    style: CleatStyle,
    spacing_in: float,
    increment: float = None,
) -> CleatsMinPulleyResult:
    label = f"{profile} {size} {_pattern_value(pattern)}"

    # --- Stage 1: base diameter at 12" centers ---
    entry = get_cleat_entry(entries, material_family, profile, size, pattern)
    if entry is None:
        return CleatsMinPulleyResult(
            success=False,
            error=f"Cleat combination not found: {material_family} {label}",
        )
    if style == CleatStyle.DRILL_SIPED_1IN:
        if not is_drill_siped_supported(entry):
            return CleatsMinPulleyResult(
                success=False,
                error=(f"Drill & Siped style not supported for {label}. "
                       f"Select Solid style or choose a different cleat configuration."),
            )
        base = entry.min_pulley_dia_12in_drill_siped_in
    else:
        base = entry.min_pulley_dia_12in_solid_in

    # --- Stage 2: centers bucket factor ---
    bucket = centers_bucket(spacing_in)
    factor = None
    for row in center_factors:
        if row.is_active and row.material_family == material_family and row.centers_in == bucket:
            factor = row.factor
            break
    if factor is None:
        return CleatsMinPulleyResult(
            success=False,
            base_min_dia_12_in=base,
            error=f'Centers factor not found for {bucket}" spacing ({material_family})',
        )

    # --- Stage 3: adjust and round up ---
    adjusted = base * factor
    source = entry.source_doc or "Cleat Catalog"
    return CleatsMinPulleyResult(
        success=True,
        base_min_dia_12_in=base,
        centers_factor=factor,
        adjusted_min_dia_in=adjusted,
        rounded_min_dia_in=round_min_pulley_dia(base, factor, increment),
        rule_source=f'{source}: {label} @ {bucket}" centers',
        drill_siped_caution=style == CleatStyle.DRILL_SIPED_1IN,
    )


# --- Catalog pickers ---

def _size_key(size: str) -> float:
    match = re.match(r"\s*(\d+(?:\.\d+)?)", size)
    return float(match.group(1)) if match else float("inf")


def get_unique_profiles(entries) -> List[str]:
    profiles = []
    for entry in entries:
        if entry.is_active and entry.cleat_profile not in profiles:
            profiles.append(entry.cleat_profile)
    return profiles


def get_sizes_for_profile(entries, profile: str) -> List[str]:
    sizes = {e.cleat_size for e in entries if e.is_active and e.cleat_profile == profile}
    return sorted(sizes, key=_size_key)


def get_patterns_for_profile_size(entries, profile: str, size: str) -> List[CleatPattern]:
    patterns = []
    for entry in entries:
        if (entry.is_active and entry.cleat_profile == profile and entry.cleat_size == size
                and entry.cleat_pattern not in patterns):
            patterns.append(entry.cleat_pattern)
    return patterns


class CleatsMinPulleyCalculator(BaseCalculator):
    name = "cleats_min_pulley"

    def calculate(self, config: Configuration, ctx: CalcContext) -> Optional[CleatsMinPulleyResult]:
        if not config.cleats_enabled or not config.cleat_profile:
            return None
        if not (config.cleat_size and config.cleat_pattern):
            return CleatsMinPulleyResult(
                success=False,
                error="Cleat profile, size and pattern are all required for the minimum pulley lookup",
            )
        spacing = self.positive(config.cleat_spacing_in)
        layout = ctx.get("cleat_layout")
        if spacing is None and layout is not None and layout.success:
            spacing = layout.pitch_in
        if spacing is None:
            return CleatsMinPulleyResult(success=False, error="Cleat spacing is required")

        return compute_cleats_min_pulley(
            ctx.snapshot.active_cleat_entries(),
            ctx.snapshot.active_center_factors(),
            config.cleat_material_family or DEFAULT_CLEAT_MATERIAL_FAMILY,
            config.cleat_profile,
            config.cleat_size,
            config.cleat_pattern,
            config.cleat_style,
            spacing,
        )
