"""Bundled default configuration and JSON schemas."""

from __future__ import annotations

from importlib import resources
from pathlib import Path


def get_data_path(subpackage: str, filename: str = "") -> Path:
    """Filesystem path of a directory (or a file inside it) under ``patternlint/data``.

    ``get_data_path("config", "defaults.yaml")`` points at the packaged defaults.
    """
    root = Path(str(resources.files(__name__)))
    path = root / subpackage
    return path / filename if filename else path


__all__ = ["get_data_path"]
