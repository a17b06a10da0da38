"""Group 2: engine parameter guards. Runs regardless of input errors."""

from typing import List

from ..schemas import EngineParameters, Issue
from .issues import make_issue

FRICTION_RANGE = (0.1, 1.0)


def validate_parameters(params: EngineParameters) -> List[Issue]:
    issues = []
    low, high = FRICTION_RANGE
    if params.friction_coeff < low or params.friction_coeff > high:
        issues.append(make_issue("vp_friction_coeff_range"))
    if params.safety_factor < 1.0:
        issues.append(make_issue("vp_safety_factor_min"))
    if params.starting_belt_pull_lb < 0:
        issues.append(make_issue("vp_starting_pull_min"))
    if params.motor_rpm <= 0:
        issues.append(make_issue("vp_motor_rpm_zero"))
    if params.gravity_in_per_s2 <= 0:
        issues.append(make_issue("vp_gravity_zero"))
    return issues
