from __future__ import annotations

from typing import Any, Dict, Mapping


class PatternLintError(Exception):
    """Root of every error patternlint raises on purpose.

    Rule outcomes are never raised; these cover the surrounding layers
    (config loading, reading pattern files). ``context`` carries the
    offending path or key for reporters.
    """

    context: Dict[str, Any]

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        self.context = dict(context or {})

    def to_json_error(self) -> Dict[str, Any]:
        return {
            "error": self.__class__.__name__,
            "message": str(self),
            "context": self.context,
        }


class ConfigError(PatternLintError, ValueError):
    """Raised when configuration cannot be loaded or fails validation."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        PatternLintError.__init__(self, message, context=context)
        ValueError.__init__(self, message)


class PatternFileNotFoundError(PatternLintError, FileNotFoundError):
    """Raised when a pattern file handed to the checker does not exist."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        PatternLintError.__init__(self, message, context=context)
        FileNotFoundError.__init__(self, message)


class PatternFileDecodeError(PatternLintError, ValueError):
    """Raised when a pattern file is not valid UTF-8."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        PatternLintError.__init__(self, message, context=context)
        ValueError.__init__(self, message)


__all__ = [
    "PatternLintError",
    "ConfigError",
    "PatternFileNotFoundError",
    "PatternFileDecodeError",
]
