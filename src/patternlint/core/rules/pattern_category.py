"""
Pattern category rule.

Enforces that a block pattern file carries a file-level docblock with a
``Categories:`` property that includes the configured base category.

The check runs once per file and always attaches its diagnostic to the
start of the file. Absence of the expected structure is reported as an
:class:`~patternlint.core.rules.models.Outcome`, never raised.
"""
from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from .docblock import extract_categories_value, extract_docblock, split_categories
from .models import Outcome, RuleResult, RuleViolation

logger = logging.getLogger(__name__)

RULE_ID = "PatternCategory.Patterns.PatternCategory"

MISSING_DOCBLOCK_MESSAGE = (
    "Pattern file is missing a file-level docblock with pattern metadata "
    "(Title, Slug, Categories)."
)
MISSING_CATEGORIES_MESSAGE = 'Pattern file docblock is missing the "Categories" property.'
MISSING_BASE_CATEGORY_MESSAGE = (
    'Pattern file Categories must include the base category "{base_category}". Found: {found}'
)


class PatternCategoryRule:
    """Check the ``Categories`` header of a pattern file.

    Args:
        base_category: Category every pattern must list. Empty or ``None``
            disables the base category check; the docblock and Categories
            checks still run.
    """

    def __init__(self, base_category: Optional[str] = None) -> None:
        self.base_category = str(base_category or "")

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> "PatternCategoryRule":
        """Build the rule from a merged configuration dict.

        Reads ``patterns.baseCategory``; a missing section or key means no
        base category is enforced.
        """
        section = config.get("patterns") or {}
        if not isinstance(section, Mapping):
            section = {}
        return cls(section.get("baseCategory"))

    def validate(self, source_text: str) -> RuleResult:
        """Validate one file's text and return its outcome."""
        docblock = extract_docblock(source_text)
        if docblock is None:
            return self._fail(Outcome.MISSING_DOCBLOCK, MISSING_DOCBLOCK_MESSAGE)

        raw_value = extract_categories_value(docblock)
        if raw_value is None:
            return self._fail(Outcome.MISSING_CATEGORIES, MISSING_CATEGORIES_MESSAGE)

        categories = split_categories(raw_value)
        if not self.base_category:
            logger.debug("No base category configured; categories %s accepted", categories)
            return RuleResult(Outcome.PASS)

        wanted = self.base_category.lower()
        if wanted not in [category.lower() for category in categories]:
            return self._fail(
                Outcome.MISSING_BASE_CATEGORY,
                MISSING_BASE_CATEGORY_MESSAGE.format(
                    base_category=self.base_category, found=raw_value
                ),
            )

        logger.debug("Base category %r found in %s", self.base_category, categories)
        return RuleResult(Outcome.PASS)

    @staticmethod
    def _fail(outcome: Outcome, message: str) -> RuleResult:
        logger.debug("Pattern category check failed: %s", outcome.code)
        violation = RuleViolation(rule_id=RULE_ID, code=outcome.code or "", message=message)
        return RuleResult(outcome, violation)


def validate(source_text: str, required_category: Optional[str] = None) -> RuleResult:
    """Validate ``source_text`` against ``required_category`` in one call."""
    return PatternCategoryRule(required_category).validate(source_text)


__all__ = [
    "RULE_ID",
    "PatternCategoryRule",
    "validate",
]
