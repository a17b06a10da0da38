"""Which severities block save / finalize."""

from typing import Iterable

from ..models import Severity
from ..schemas import Issue

BLOCKING_POLICY = {
    Severity.ERROR: True,
    Severity.WARNING: False,
    Severity.INFO: False,
}


def is_blocking(severity: Severity) -> bool:
    return BLOCKING_POLICY[Severity(severity)]


def has_errors(issues: Iterable[Issue]) -> bool:
    return any(issue.severity == Severity.ERROR for issue in issues)


def can_save(issues: Iterable[Issue]) -> bool:
    """True when no issue has a blocking severity."""
    return not any(is_blocking(issue.severity) for issue in issues)
