"""
Docblock extraction helpers for pattern files.

Each stage is a pure function so every failure mode can be checked on its
own: locate the first ``/** ... */`` block, pull the raw ``Categories:``
value out of it, then split that value into a list.
"""
from __future__ import annotations

import re
from typing import List, Optional

# First docblock only; non-greedy so the match ends at the nearest "*/".
DOCBLOCK_RE = re.compile(r"/\*\*.*?\*/", re.DOTALL)
CATEGORIES_LINE_RE = re.compile(r"^\s*\*\s*Categories:\s*(.+)$", re.MULTILINE)


def extract_docblock(source_text: str) -> Optional[str]:
    """Return the first ``/** ... */`` block in ``source_text``, or ``None``."""
    match = DOCBLOCK_RE.search(source_text)
    return match.group(0) if match else None


def extract_categories_value(docblock: str) -> Optional[str]:
    """Return the raw value of the first ``* Categories:`` line.

    Args:
        docblock: Text of a docblock as returned by :func:`extract_docblock`

    Returns:
        The remainder of the line after ``Categories:`` (leading whitespace
        consumed), or ``None`` when the block has no such line.
    """
    match = CATEGORIES_LINE_RE.search(docblock)
    return match.group(1) if match else None


def split_categories(raw_value: str) -> List[str]:
    """Split a comma-separated category value, stripping each entry.

    Order and duplicates are preserved; stray commas yield empty entries.
    """
    return [entry.strip() for entry in raw_value.split(",")]


__all__ = [
    "DOCBLOCK_RE",
    "CATEGORIES_LINE_RE",
    "extract_docblock",
    "extract_categories_value",
    "split_categories",
]
