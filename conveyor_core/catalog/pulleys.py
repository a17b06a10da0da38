"""
Pulley catalog: station compatibility, filtering, selection and admin validation.

Hard constraint: a pulley with INTERNAL_BEARINGS is tail-only.
internal_bearing_violations() is the single definition of that constraint.
The catalog validator, the normalizer and the live rule evaluator all call
it, so the three enforcement paths cannot drift apart.
"""

import logging
from typing import List, Optional

from pydantic import BaseModel

from ..models import PulleyConstruction, PulleyStation, Severity, ShaftArrangement
from ..schemas import PulleyCatalogItem

logger = logging.getLogger(__name__)

STATION_FLAGS = {
    PulleyStation.HEAD_DRIVE: "allow_head_drive",
    PulleyStation.TAIL: "allow_tail",
    PulleyStation.SNUB: "allow_snub",
    PulleyStation.BEND: "allow_bend",
    PulleyStation.TAKEUP: "allow_takeup",
}

STATION_LABELS = {
    PulleyStation.HEAD_DRIVE: "head/drive",
    PulleyStation.TAIL: "tail",
    PulleyStation.SNUB: "snub",
    PulleyStation.BEND: "bend",
    PulleyStation.TAKEUP: "takeup",
}

# Required station flags for an internal-bearing pulley
TAIL_ONLY_FLAGS = {
    "allow_head_drive": False,
    "allow_snub": False,
    "allow_bend": False,
    "allow_takeup": False,
    "allow_tail": True,
}


def _arrangement(value) -> Optional[ShaftArrangement]:
    if value is None:
        return None
    try:
        return ShaftArrangement(value)
    except ValueError:
        return None


def internal_bearing_violations(shaft_arrangement, flags: dict) -> List[str]:
    """
    Messages for every station flag that breaks the tail-only constraint.

    flags holds whatever station flags were submitted; absent flags are not
    violations except allow_tail, which must be explicitly true-or-absent.
    """
    if _arrangement(shaft_arrangement) != ShaftArrangement.INTERNAL_BEARINGS:
        return []
    errors = []
    for station in (PulleyStation.HEAD_DRIVE, PulleyStation.SNUB, PulleyStation.BEND, PulleyStation.TAKEUP):
        if flags.get(STATION_FLAGS[station]):
            errors.append(f"Internal bearing pulleys cannot be used as {STATION_LABELS[station]}")
    if flags.get("allow_tail") is False:
        errors.append("Internal bearing pulleys must allow tail position")
    return errors


def enforce_internal_bearing_rules(item: PulleyCatalogItem) -> PulleyCatalogItem:
    """Copy of item with station flags forced tail-only when it has internal bearings."""
    flags = {name: getattr(item, name) for name in TAIL_ONLY_FLAGS}
    if not internal_bearing_violations(item.shaft_arrangement, flags):
        return item
    logger.warning("Pulley %s has internal bearings; forcing tail-only station flags", item.catalog_key)
    return item.model_copy(update=TAIL_ONLY_FLAGS)


def has_internal_bearings(pulley: PulleyCatalogItem) -> bool:
    return pulley.shaft_arrangement == ShaftArrangement.INTERNAL_BEARINGS


def get_effective_diameter(pulley: PulleyCatalogItem) -> float:
    """Shell diameter plus lagging on both sides."""
    if pulley.is_lagged and pulley.lagging_thickness_in:
        return pulley.diameter_in + 2 * pulley.lagging_thickness_in
    return pulley.diameter_in


def is_station_compatible(pulley: PulleyCatalogItem, station: PulleyStation) -> bool:
    """
    Internal-bearing pulleys are judged by the tail-only constraint, not by
    their stored flags, so a bad row can never slip through.
    """
    if has_internal_bearings(pulley):
        return station == PulleyStation.TAIL
    return bool(getattr(pulley, STATION_FLAGS[station]))


# ============================================================
# Filtering / selection
# ============================================================

class PulleyFilterCriteria(BaseModel):
    station: PulleyStation
    face_width_required_in: float
    min_diameter_in: Optional[float] = None
    belt_speed_fpm: Optional[float] = None
    require_lagged: bool = False
    require_crown: bool = False
    diameter_in: Optional[float] = None
    construction: Optional[PulleyConstruction] = None


class PulleyIssue(BaseModel):
    code: str
    severity: Severity
    message: str
    field: Optional[str] = None

    class Config:
        frozen = True


class PulleyFilterResult(BaseModel):
    pulley: PulleyCatalogItem
    issues: List[PulleyIssue] = []
    effective_diameter_in: float

    @property
    def has_errors(self) -> bool:
        return any(i.severity == Severity.ERROR for i in self.issues)


def evaluate_pulley(pulley: PulleyCatalogItem, criteria: PulleyFilterCriteria, effective_dia: float) -> List[PulleyIssue]:
    issues = []

    # --- Hard errors ---
    if not is_station_compatible(pulley, criteria.station):
        issues.append(PulleyIssue(
            code="STATION_INCOMPATIBLE", severity=Severity.ERROR, field="station",
            message=f"Pulley not allowed at {STATION_LABELS[criteria.station]} position",
        ))
    if has_internal_bearings(pulley) and criteria.station != PulleyStation.TAIL:
        issues.append(PulleyIssue(
            code="INTERNAL_BEARINGS_TAIL_ONLY", severity=Severity.ERROR, field="shaft_arrangement",
            message="Internal bearing pulleys can only be used at tail position",
        ))
    if criteria.face_width_required_in > pulley.face_width_max_in:
        issues.append(PulleyIssue(
            code="FACE_WIDTH_EXCEEDED", severity=Severity.ERROR, field="face_width_max_in",
            message=(f'Required face width {criteria.face_width_required_in}" exceeds '
                     f'pulley max {pulley.face_width_max_in}"'),
        ))
    if pulley.face_width_min_in and criteria.face_width_required_in < pulley.face_width_min_in:
        issues.append(PulleyIssue(
            code="FACE_WIDTH_BELOW_MIN", severity=Severity.ERROR, field="face_width_min_in",
            message=(f'Required face width {criteria.face_width_required_in}" is below '
                     f'pulley min {pulley.face_width_min_in}"'),
        ))
    if criteria.min_diameter_in and effective_dia < criteria.min_diameter_in:
        issues.append(PulleyIssue(
            code="DIAMETER_TOO_SMALL", severity=Severity.ERROR, field="diameter_in",
            message=f'Effective diameter {effective_dia}" is below belt minimum {criteria.min_diameter_in}"',
        ))

    # --- Warnings ---
    if (criteria.belt_speed_fpm and pulley.max_belt_speed_fpm
            and criteria.belt_speed_fpm > pulley.max_belt_speed_fpm):
        issues.append(PulleyIssue(
            code="SPEED_LIMIT_EXCEEDED", severity=Severity.WARNING, field="max_belt_speed_fpm",
            message=(f"Belt speed {criteria.belt_speed_fpm} fpm exceeds pulley limit "
                     f"{pulley.max_belt_speed_fpm} fpm (B105.1)"),
        ))
    if criteria.require_lagged and not pulley.is_lagged:
        issues.append(PulleyIssue(
            code="LAGGING_RECOMMENDED", severity=Severity.WARNING, field="is_lagged",
            message="Lagged pulley recommended for this application",
        ))
    if criteria.require_crown and pulley.crown_height_in <= 0:
        issues.append(PulleyIssue(
            code="CROWN_RECOMMENDED", severity=Severity.WARNING, field="crown_height_in",
            message="Crowned pulley recommended for belt tracking",
        ))
    return issues


def filter_pulleys(pulleys, criteria: PulleyFilterCriteria) -> List[PulleyFilterResult]:
    """
    Every active pulley with its compatibility issues for the criteria.
    Sorted: no errors first, then preferred, then smallest effective diameter.
    diameter_in / construction are exact-match filters, not issues.
    """
    results = []
    for pulley in pulleys:
        if not pulley.is_active:
            continue
        effective_dia = get_effective_diameter(pulley)
        if criteria.diameter_in is not None and effective_dia != criteria.diameter_in:
            continue
        if criteria.construction and pulley.construction != criteria.construction:
            continue
        results.append(PulleyFilterResult(
            pulley=pulley,
            issues=evaluate_pulley(pulley, criteria, effective_dia),
            effective_diameter_in=effective_dia,
        ))

    return sorted(
        results,
        key=lambda r: (r.has_errors, not r.pulley.is_preferred, r.effective_diameter_in),
    )


def get_compatible_pulleys(pulleys, criteria: PulleyFilterCriteria) -> List[PulleyCatalogItem]:
    """Pulleys with no hard errors for the criteria."""
    return [r.pulley for r in filter_pulleys(pulleys, criteria) if not r.has_errors]


def select_best_pulley(pulleys, criteria: PulleyFilterCriteria) -> Optional[PulleyFilterResult]:
    """Preferred, smallest valid pulley, or None when nothing fits."""
    for result in filter_pulleys(pulleys, criteria):
        if not result.has_errors:
            return result
    return None


# ============================================================
# Admin validation
# ============================================================

def _number(data: dict, key: str, label: str, errors: list):
    """(float or None, ok). Absent is (None, True); a non-numeric value adds an error."""
    value = data.get(key)
    if value is None or value == "":
        return None, True
    try:
        return float(value), True
    except (TypeError, ValueError):
        errors.append(f"{label} must be a number")
        return None, False


def validate_pulley_catalog_item(data: dict) -> dict:
    """
    Validates a submitted catalog row before it is saved.

    Returns {"is_valid": bool, "errors": [str]}. An internal-bearing row that
    submits any non-tail station flag is rejected outright, never silently
    corrected. Form values may arrive as strings; ones that are not numbers
    are reported, not raised.
    """
    errors = []

    if not str(data.get("catalog_key") or "").strip():
        errors.append("Catalog key is required")
    if not str(data.get("display_name") or "").strip():
        errors.append("Display name is required")

    diameter, ok = _number(data, "diameter_in", "Diameter", errors)
    if ok and (diameter is None or diameter <= 0):
        errors.append("Diameter must be positive")
    fw_max, ok = _number(data, "face_width_max_in", "Face width max", errors)
    if ok and (fw_max is None or fw_max <= 0):
        errors.append("Face width max must be positive")

    fw_min, _ = _number(data, "face_width_min_in", "Face width min", errors)
    if fw_min is not None and fw_max and fw_min > fw_max:
        errors.append("Face width min cannot exceed max")

    errors.extend(internal_bearing_violations(data.get("shaft_arrangement"), data))

    if data.get("is_lagged"):
        lagging, ok = _number(data, "lagging_thickness_in", "Lagging thickness", errors)
        if ok and lagging is None:
            errors.append("Lagging thickness required when lagged")
        elif lagging is not None and lagging < 0:
            errors.append("Lagging thickness must be non-negative")

    crown, _ = _number(data, "crown_height_in", "Crown height", errors)
    if crown is not None and crown < 0:
        errors.append("Crown height must be non-negative")

    return {"is_valid": not errors, "errors": errors}
