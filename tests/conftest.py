import os
import sys
from pathlib import Path

import pytest

# Keep the repository free of Python bytecode and __pycache__ artifacts during tests.
sys.dont_write_bytecode = True

TESTS_ROOT = Path(__file__).resolve().parent
REPO_ROOT = TESTS_ROOT.parent
SRC_ROOT = REPO_ROOT / "src"

# Make src/ importable as 'patternlint'
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))


@pytest.fixture(autouse=True)
def _clear_patternlint_env(monkeypatch):
    """Tests must be deterministic regardless of developer environment."""
    for key in list(os.environ):
        if key.startswith("PATTERNLINT_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def isolated_project_env(tmp_path, monkeypatch):
    """Isolated project root with an empty ``.patternlint/config`` directory."""
    (tmp_path / ".patternlint" / "config").mkdir(parents=True)
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def pattern_text():
    """Build pattern file text from docblock body lines."""

    def _build(*lines: str) -> str:
        body = "\n".join(f" * {line}" for line in lines)
        return f"<?php\n/**\n{body}\n */\n?>\n<!-- wp:paragraph -->\n"

    return _build
