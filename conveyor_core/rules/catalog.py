"""
Rule catalog: RuleDefinitions built once from RULE_TABLE, plus enrichment
and section lookups for the rules manager.

source_line is the first line of the emitting group module that names the
rule id. A rule no group module names is a malformed catalog.
"""

import logging
import os
from functools import lru_cache
from typing import Dict, List, Optional

from ..errors import CatalogShapeError
from ..models import Severity
from ..schemas import RuleDefinition, RuleEnrichment
from .definitions import (
    AR, CATEGORY_LABELS, ENRICHMENTS, HUB, HW, PCI, REVIEW_NOTES, RULE_TABLE,
    SECTION_MAP, TOB, VI, VP,
)

logger = logging.getLogger(__name__)

_RULES_DIR = os.path.dirname(__file__)

SOURCE_MODULES = {
    VI: "inputs.py",
    VP: "parameters.py",
    AR: "application.py",
    TOB: "tob.py",
    HW: "height.py",
    PCI: "pci.py",
    HUB: "hub.py",
}

FALLBACK_ACTIONS = {
    Severity.ERROR: "Block configuration",
    Severity.WARNING: "Warn engineer",
    Severity.INFO: "Inform engineer",
}


def _read_source(filename: str) -> List[str]:
    with open(os.path.join(_RULES_DIR, filename)) as f:
        return f.read().splitlines()


def _find_line(lines: List[str], rule_id: str) -> Optional[int]:
    needle = f'"{rule_id}"'
    for number, line in enumerate(lines, start=1):
        if needle in line:
            return number
    return None


def build_rule_definitions(table=None, sources: Dict[str, List[str]] = None) -> Dict[str, RuleDefinition]:
    """
    RuleDefinitions keyed by id, in table order.

    sources maps a source function to its module lines; by default the
    group modules beside this file are read.
    """
    table = RULE_TABLE if table is None else table
    if sources is None:
        sources = {fn: _read_source(filename) for fn, filename in SOURCE_MODULES.items()}

    definitions = {}
    for row in table:
        if len(row) != 7:
            raise CatalogShapeError(f"Rule table row has {len(row)} columns, expected 7: {row!r}")
        rule_id, human_name, category, field, severity, description, source_function = row
        if rule_id in definitions:
            raise CatalogShapeError(f"Duplicate rule id: {rule_id}")
        if category not in SECTION_MAP:
            raise CatalogShapeError(f"Rule {rule_id} has unknown category: {category}")
        if source_function not in sources:
            raise CatalogShapeError(f"Rule {rule_id} has unknown source function: {source_function}")
        line = _find_line(sources[source_function], rule_id)
        if line is None:
            raise CatalogShapeError(f"Rule {rule_id} is not referenced by {source_function}")
        definitions[rule_id] = RuleDefinition(
            rule_id=rule_id,
            human_name=human_name,
            category=category,
            field=field,
            severity=severity,
            check_description=description,
            source_function=source_function,
            source_line=line,
        )
    return definitions


@lru_cache(maxsize=None)
def _definitions() -> Dict[str, RuleDefinition]:
    definitions = build_rule_definitions()
    logger.info("Built rule catalog: %d rules", len(definitions))
    return definitions


# ============================================================
# Lookups
# ============================================================

def get_rule(rule_id: str) -> Optional[RuleDefinition]:
    return _definitions().get(rule_id)


def has_rule(rule_id: str) -> bool:
    return rule_id in _definitions()


def get_section_for_category(category: str) -> Optional[str]:
    return SECTION_MAP.get(category)


def get_category_label(category: str) -> str:
    return CATEGORY_LABELS.get(category, category)


def list_rules(section: str = None, category: str = None, severity=None) -> List[RuleDefinition]:
    rules = []
    for rule in _definitions().values():
        if section and SECTION_MAP[rule.category] != section:
            continue
        if category and rule.category != category:
            continue
        if severity and rule.severity != Severity(severity):
            continue
        rules.append(rule)
    return rules


def get_rule_counts() -> Dict[str, int]:
    counts = {"total": 0, "error": 0, "warning": 0, "info": 0}
    for rule in _definitions().values():
        counts["total"] += 1
        counts[rule.severity.value] += 1
    return counts


def get_rule_enrichment(rule_id: str) -> RuleEnrichment:
    """
    Plain-English condition / action / threshold for a rule.

    A rule with no enrichment, or an unknown id, gets a fallback record
    marked for review. This never raises.
    """
    note = REVIEW_NOTES.get(rule_id)
    entry = ENRICHMENTS.get(rule_id)
    if entry is not None:
        condition, action, threshold = entry
        return RuleEnrichment(
            rule_id=rule_id,
            condition=condition,
            action=action,
            threshold=threshold,
            has_todo=note is not None,
            todo_note=note,
        )

    logger.warning("No enrichment for rule %s, using fallback", rule_id)
    rule = get_rule(rule_id)
    return RuleEnrichment(
        rule_id=rule_id,
        condition=rule.check_description if rule else rule_id,
        action=FALLBACK_ACTIONS[rule.severity] if rule else FALLBACK_ACTIONS[Severity.WARNING],
        threshold="n/a",
        has_todo=True,
        todo_note=f"Missing enrichment data for rule {rule_id}. Needs review.",
    )
