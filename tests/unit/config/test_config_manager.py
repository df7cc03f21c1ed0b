from __future__ import annotations

from pathlib import Path

import pytest

from patternlint.core.config import ConfigManager, load_base_category
from patternlint.core.exceptions import ConfigError
from patternlint.core.rules import PatternCategoryRule


def _write(root: Path, name: str, content: str) -> None:
    (root / ".patternlint" / "config" / name).write_text(content, encoding="utf-8")


def test_defaults_disable_base_category(isolated_project_env: Path) -> None:
    cfg = ConfigManager(repo_root=isolated_project_env).load_config()
    assert cfg["patterns"]["baseCategory"] == ""


def test_project_overlay_sets_base_category(isolated_project_env: Path) -> None:
    _write(isolated_project_env, "patterns.yml", "patterns:\n  baseCategory: hero\n")
    assert load_base_category(isolated_project_env) == "hero"


def test_overlays_merge_in_sorted_order(isolated_project_env: Path) -> None:
    _write(isolated_project_env, "a.yml", "patterns:\n  baseCategory: first\n")
    _write(isolated_project_env, "b.yml", "patterns:\n  baseCategory: second\n")
    assert load_base_category(isolated_project_env) == "second"


def test_yaml_extension_overlays_are_ignored(isolated_project_env: Path) -> None:
    _write(isolated_project_env, "patterns.yaml", "patterns:\n  baseCategory: hero\n")
    assert load_base_category(isolated_project_env) == ""


def test_env_override_wins(isolated_project_env: Path, monkeypatch) -> None:
    _write(isolated_project_env, "patterns.yml", "patterns:\n  baseCategory: hero\n")
    monkeypatch.setenv("PATTERNLINT_PATTERNS__BASECATEGORY", "banner")
    cfg = ConfigManager(repo_root=isolated_project_env).load_config()
    assert cfg["patterns"] == {"baseCategory": "banner"}


def test_repo_root_discovered_from_cwd(isolated_project_env: Path, monkeypatch) -> None:
    _write(isolated_project_env, "patterns.yml", "patterns:\n  baseCategory: hero\n")
    nested = isolated_project_env / "patterns" / "nested"
    nested.mkdir(parents=True)
    monkeypatch.chdir(nested)
    assert ConfigManager().repo_root == isolated_project_env.resolve()
    assert load_base_category() == "hero"


def test_schema_rejects_non_string_category(isolated_project_env: Path) -> None:
    _write(isolated_project_env, "patterns.yml", "patterns:\n  baseCategory: [a, b]\n")
    with pytest.raises(ConfigError) as excinfo:
        ConfigManager(repo_root=isolated_project_env).load_config()
    assert "patterns.baseCategory" in str(excinfo.value)


def test_invalid_yaml_raises_config_error(isolated_project_env: Path) -> None:
    _write(isolated_project_env, "broken.yml", "patterns: [unclosed\n")
    with pytest.raises(ConfigError):
        ConfigManager(repo_root=isolated_project_env).load_config()


def test_non_mapping_overlay_raises(isolated_project_env: Path) -> None:
    _write(isolated_project_env, "list.yml", "- hero\n")
    with pytest.raises(ConfigError, match="must parse to a mapping"):
        ConfigManager(repo_root=isolated_project_env).load_config()


def test_malformed_env_key_strict(isolated_project_env: Path, monkeypatch) -> None:
    monkeypatch.setenv("PATTERNLINT_patterns____x", "1")
    mgr = ConfigManager(repo_root=isolated_project_env)
    with pytest.raises(ConfigError):
        mgr.load_config()
    assert mgr.load_config(validate=False)["patterns"]["baseCategory"] == ""


@pytest.mark.parametrize(
    "raw, expected",
    [("true", True), ("42", 42), ("1.5", 1.5), ('["a"]', ["a"]), (" hero ", "hero")],
)
def test_coerce_type(isolated_project_env: Path, raw: str, expected) -> None:
    assert ConfigManager(repo_root=isolated_project_env)._coerce_type(raw) == expected


def test_rule_from_loaded_config(isolated_project_env: Path) -> None:
    _write(isolated_project_env, "patterns.yml", "patterns:\n  baseCategory: Hero\n")
    cfg = ConfigManager(repo_root=isolated_project_env).load_config()
    rule = PatternCategoryRule.from_config(cfg)
    assert rule.validate("<?php\n/**\n * Categories: hero\n */").passed


@pytest.mark.parametrize("value", ["2024", "true", "1.0", "[hero]"])
def test_env_category_stays_a_string(isolated_project_env: Path, monkeypatch, value: str) -> None:
    monkeypatch.setenv("PATTERNLINT_PATTERNS__BASECATEGORY", value)
    assert load_base_category(isolated_project_env) == value


def test_env_category_is_stripped(isolated_project_env: Path, monkeypatch) -> None:
    monkeypatch.setenv("PATTERNLINT_patterns__baseCategory", "  2024 ")
    cfg = ConfigManager(repo_root=isolated_project_env).load_config()
    assert cfg["patterns"]["baseCategory"] == "2024"


def test_env_new_keys_are_still_coerced(isolated_project_env: Path, monkeypatch) -> None:
    monkeypatch.setenv("PATTERNLINT_extra__enabled", "true")
    cfg = ConfigManager(repo_root=isolated_project_env).load_config()
    assert cfg["extra"] == {"enabled": True}
