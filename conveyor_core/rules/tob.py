"""Group 4: TOB requirements that only apply when saving."""

from typing import List

from ..geometry import requires_legs
from ..models import EvaluationMode, GeometryMode, ReferenceEnd, SupportType
from ..schemas import Configuration, Issue
from .issues import make_issue


def validate_tob(config: Configuration, mode=EvaluationMode.DRAFT) -> List[Issue]:
    """
    Draft edits may leave TOB heights blank. A commit may not when the
    geometry is defined by them or a floor support needs a reference height.
    """
    if EvaluationMode(mode) != EvaluationMode.COMMIT:
        return []

    issues = []
    if config.geometry_mode == GeometryMode.H_TOB:
        if config.tail_tob_in is None:
            issues.append(make_issue("tob_tail_htob_required"))
        if config.drive_tob_in is None:
            issues.append(make_issue("tob_drive_htob_required"))
        return issues

    floor_supported = requires_legs(config) or config.support_method in (SupportType.LEGS, SupportType.CASTERS)
    if not floor_supported:
        return issues
    if config.reference_end == ReferenceEnd.TAIL and config.tail_tob_in is None:
        issues.append(make_issue("tob_tail_floor_required"))
    if config.reference_end == ReferenceEnd.DRIVE and config.drive_tob_in is None:
        issues.append(make_issue("tob_drive_floor_required"))
    return issues
