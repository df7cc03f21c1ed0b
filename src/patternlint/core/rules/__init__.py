"""
patternlint rules.

- docblock.py: pure extraction stages (docblock, Categories value, list split)
- pattern_category.py: PatternCategoryRule, the base category check
- checker.py: single-file host adapter and result formatting
"""
from __future__ import annotations

from .models import Outcome, RuleResult, RuleViolation
from .docblock import extract_categories_value, extract_docblock, split_categories
from .pattern_category import RULE_ID, PatternCategoryRule, validate
from .checker import check_file, check_text, format_results_output

__all__ = [
    # Models
    "Outcome",
    "RuleResult",
    "RuleViolation",
    # Extraction
    "extract_docblock",
    "extract_categories_value",
    "split_categories",
    # Rule
    "RULE_ID",
    "PatternCategoryRule",
    "validate",
    # Checker
    "check_text",
    "check_file",
    "format_results_output",
]
