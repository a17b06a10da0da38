"""Group 5: height and TOB advisories."""

from typing import List

from ..config import settings
from ..geometry import calculate_implied_angle, has_angle_mismatch, normalize_geometry
from ..models import GeometryMode
from ..schemas import Configuration, Issue
from .issues import make_issue

VERY_LARGE_ADJUSTMENT_IN = 12.0
LARGE_ADJUSTMENT_IN = 6.0


def apply_height_warnings(config: Configuration) -> List[Issue]:
    issues = []

    adjustment = config.adjustment_required_in
    if adjustment is not None:
        if adjustment > VERY_LARGE_ADJUSTMENT_IN:
            issues.append(make_issue(
                "hw_adjustment_range_very_large",
                f'Adjustment range of {adjustment:g}" exceeds {VERY_LARGE_ADJUSTMENT_IN:g}". '
                "Consider a different support arrangement.",
            ))
        elif adjustment > LARGE_ADJUSTMENT_IN:
            issues.append(make_issue(
                "hw_adjustment_range_large",
                f'Adjustment range of {adjustment:g}" exceeds {LARGE_ADJUSTMENT_IN:g}".',
            ))

    # In H_TOB the angle is derived from the TOBs, so it cannot disagree
    if (config.geometry_mode != GeometryMode.H_TOB
            and config.tail_tob_in is not None and config.drive_tob_in is not None):
        geometry = normalize_geometry(config)
        if geometry.is_valid and geometry.horizontal_run_in > 0:
            implied = calculate_implied_angle(
                config.tail_tob_in,
                config.drive_tob_in,
                geometry.horizontal_run_in,
                geometry.tail_pulley_dia_in,
                geometry.drive_pulley_dia_in,
            )
            if has_angle_mismatch(implied, geometry.incline_deg, settings.ANGLE_MISMATCH_TOLERANCE_DEG):
                issues.append(make_issue(
                    "hw_angle_mismatch",
                    f"Implied angle from TOB heights ({implied:.1f}°) differs from the "
                    f"entered incline ({geometry.incline_deg:.1f}°)",
                ))
    return issues
