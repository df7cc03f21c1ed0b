"""
Rule checking and formatting for host consumption.

This module runs the pattern category rule against a single file and
renders results for whatever reporting layer drives it. File discovery is
left to the caller.
"""
from __future__ import annotations

import json
import logging
from dataclasses import replace
from pathlib import Path
from typing import Iterable, List, Optional, Union

from ..exceptions import PatternFileDecodeError, PatternFileNotFoundError
from .models import RuleResult
from .pattern_category import PatternCategoryRule

logger = logging.getLogger(__name__)


def check_text(
    text: str,
    rule: PatternCategoryRule,
    path: Optional[Union[str, Path]] = None,
) -> RuleResult:
    """Run ``rule`` on ``text`` and stamp the result with ``path``."""
    result = rule.validate(text)
    if path is None:
        return result
    path_str = str(path)
    violation = result.violation.with_path(path_str) if result.violation else None
    return replace(result, violation=violation, path=path_str)


def check_file(path: Union[str, Path], rule: PatternCategoryRule) -> RuleResult:
    """Read one pattern file as UTF-8 and check it.

    Raises:
        PatternFileNotFoundError: If ``path`` does not exist
        PatternFileDecodeError: If ``path`` is not valid UTF-8
    """
    p = Path(path)
    if not p.is_file():
        raise PatternFileNotFoundError(
            f"Pattern file not found: {p}", context={"path": str(p)}
        )
    try:
        text = p.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise PatternFileDecodeError(
            f"Pattern file is not valid UTF-8: {p} (byte {exc.start})",
            context={"path": str(p), "offset": exc.start},
        ) from exc
    result = check_text(text, rule, path=p)
    logger.debug("%s: %s", p, result.outcome.value)
    return result


def format_results_output(
    results: Iterable[RuleResult],
    format_mode: str = "short",
) -> str:
    """Format results for display.

    Args:
        results: Results from :func:`check_text` / :func:`check_file`
        format_mode: One of 'short', 'full', 'json'

    Returns:
        Formatted string output
    """
    results = list(results)
    failures = [r for r in results if r.violation is not None]

    if format_mode == "json":
        payload = {
            "checked": len(results),
            "errors": len(failures),
            "results": [r.to_dict() for r in results],
        }
        return json.dumps(payload, indent=2)

    if format_mode == "full":
        lines: List[str] = [f"Checked {len(results)} file(s), {len(failures)} error(s)"]
        lines.append("")
        for result in results:
            lines.append(f"FILE: {result.path or '<text>'}")
            v = result.violation
            if v is None:
                lines.append("  OK")
            else:
                lines.append(f"  {v.line}:{v.column} {v.severity.upper()} {v.message}")
                lines.append(f"  ({v.source})")
            lines.append("")
        return "\n".join(lines)

    # short format
    if not failures:
        return "No pattern category errors found."
    lines = []
    for result in failures:
        v = result.violation
        lines.append(f"{result.path or '<text>'}:{v.line}:{v.column}: {v.severity} [{v.code}] {v.message}")
    return "\n".join(lines)


__all__ = [
    "check_text",
    "check_file",
    "format_results_output",
]
