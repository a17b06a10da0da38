"""
Issue construction. Severity and field come from the rule table so a group
module only says which rule fired and, when the text is dynamic, what to say.
"""

from typing import Optional

from ..errors import CatalogShapeError
from ..schemas import Issue
from .definitions import RULE_TABLE

_ROWS = {row[0]: row for row in RULE_TABLE}


def make_issue(rule_id: str, message: Optional[str] = None, field: Optional[str] = None) -> Issue:
    row = _ROWS.get(rule_id)
    if row is None:
        raise CatalogShapeError(f"Issue raised for unknown rule: {rule_id}")
    _, _, _, default_field, severity, check_description, _ = row
    return Issue(
        code=rule_id.upper(),
        severity=severity,
        message=message or check_description,
        field=field or default_field,
        rule_id=rule_id,
    )
