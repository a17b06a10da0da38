"""
Rule catalog and evaluator.

evaluate() is the entry point; the catalog functions serve the rules
manager (listing, counts, plain-English enrichment).
"""

from .catalog import (
    build_rule_definitions, get_category_label, get_rule, get_rule_counts, get_rule_enrichment,
    get_section_for_category, has_rule, list_rules,
)
from .evaluator import evaluate, flatten_outputs
from .issues import make_issue
from .severity import BLOCKING_POLICY, can_save, has_errors, is_blocking
