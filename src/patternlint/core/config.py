"""
patternlint configuration management (YAML only).

Precedence (in increasing order):
  1) Packaged defaults (``patternlint/data/config/defaults.yaml``)
  2) Project overlays (``<repo_root>/.patternlint/config/*.yml``)
  3) Environment overrides (``PATTERNLINT_*``)

Environment overrides:
- Path separator: double underscore ``__`` (e.g.,
  ``PATTERNLINT_patterns__baseCategory=featured``). Keys without ``__`` fall
  back to single-underscore separation.
- Case handling: case-insensitive lookup against existing keys; preserves
  original key case when creating new keys so camelCase like
  ``patterns.baseCategory`` keeps working.
- Type coercion: bool/int/float/JSON-like strings are coerced, except where
  the key already holds a string (``baseCategory: "2024"`` stays a string).
"""
from __future__ import annotations

import json
import logging
import os
import re
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Tuple

import jsonschema
import yaml

from .exceptions import ConfigError

logger = logging.getLogger(__name__)

ENV_PREFIX = "PATTERNLINT_"
PROJECT_CONFIG_DIRNAME = ".patternlint"


class ConfigManager:
    """Load, merge, and validate patternlint configuration.

    Typical usage:

    ```python
    from patternlint.core.config import ConfigManager
    cfg = ConfigManager().load_config()
    base = cfg["patterns"]["baseCategory"]
    ```

    Attributes:
        repo_root: Repository root used to resolve project overlays.
        core_config_dir: Directory holding the packaged ``defaults.yaml``.
        project_config_dir: ``<repo_root>/.patternlint/config``, where modular
            ``*.yml`` overlays are loaded.
        schemas_dir: Directory holding ``config.schema.json``.
    """

    def __init__(self, repo_root: Optional[Path] = None) -> None:
        """Create a manager rooted at ``repo_root``.

        Args:
            repo_root: Optional repository root. If ``None``, walk up from the
                current directory to the nearest ``.patternlint`` or ``.git``
                directory; otherwise the current directory is used.
        """
        self.repo_root = Path(repo_root) if repo_root is not None else self._find_repo_root()
        from patternlint.data import get_data_path

        self.core_config_dir = get_data_path("config")
        self.schemas_dir = self.core_config_dir / "schemas"
        self.project_config_dir = self.repo_root / PROJECT_CONFIG_DIRNAME / "config"

    # ---------- Root detection ----------
    @staticmethod
    def _find_repo_root() -> Path:
        cwd = Path.cwd().resolve()
        for candidate in (cwd, *cwd.parents):
            if (candidate / PROJECT_CONFIG_DIRNAME).is_dir() or (candidate / ".git").exists():
                return candidate
        return cwd

    # ---------- Merge helpers ----------
    def deep_merge(self, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """Recursively merge ``override`` into ``base`` returning a copy.

        Dicts merge recursively; any other value (lists included) replaces
        the base value.
        """
        result: Dict[str, Any] = dict(base)
        for key, value in (override or {}).items():
            if isinstance(result.get(key), dict) and isinstance(value, dict):
                result[key] = self.deep_merge(result[key], value)
            else:
                result[key] = value
        return result

    # ---------- IO helpers ----------
    def load_yaml(self, path: Path) -> Dict[str, Any]:
        """Load a YAML mapping, returning ``{}`` when the file is missing.

        Raises:
            ConfigError: If the file holds invalid YAML or a non-mapping.
        """
        if not path.exists():
            return {}
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid YAML in {path}: {exc}", context={"path": str(path)}) from exc
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigError(f"{path} must parse to a mapping", context={"path": str(path)})
        return data

    # ---------- Validation ----------
    def validate_schema(self, config: Dict[str, Any], schema_name: str = "config.schema.json") -> None:
        """Validate configuration against a JSON schema file.

        Raises:
            ConfigError: If validation fails.
        """
        schema_path = self.schemas_dir / schema_name
        if not schema_path.exists():
            logger.warning("Schema %s not found at %s; skipping validation", schema_name, schema_path)
            return
        schema = json.loads(schema_path.read_text(encoding="utf-8"))
        try:
            jsonschema.validate(instance=config, schema=schema)
        except jsonschema.ValidationError as exc:
            where = ".".join(str(p) for p in exc.absolute_path) or "<root>"
            raise ConfigError(
                f"Invalid configuration at {where}: {exc.message}",
                context={"path": where, "schema": schema_name},
            ) from exc

    # ---------- Type coercion helpers ----------
    def _as_bool(self, v: str) -> Optional[bool]:
        low = v.strip().lower()
        if low in {"true", "false"}:
            return low == "true"
        return None

    def _as_int(self, v: str) -> Optional[int]:
        if re.fullmatch(r"[-+]?\d+", v.strip() or " "):
            return int(v)
        return None

    def _as_float(self, v: str) -> Optional[float]:
        s = v.strip()
        if re.fullmatch(r"[-+]?\d*\.\d+", s) or re.fullmatch(r"[-+]?\d+\.\d*", s):
            return float(s)
        return None

    def _as_json(self, v: str) -> Optional[Any]:
        s = v.strip()
        if (s.startswith("{") and s.endswith("}")) or (s.startswith("[") and s.endswith("]")):
            try:
                return json.loads(s)
            except json.JSONDecodeError:
                return None
        return None

    def _coerce_type(self, value: str) -> Any:
        """Coerce string to bool/int/float/JSON when appropriate.

        Falls back to the stripped string when no coercion applies.
        """
        for caster in (self._as_bool, self._as_int, self._as_float, self._as_json):
            result = caster(value)
            if result is not None:
                return result
        return value.strip()

    def _parse_env_key(self, raw: str, *, strict: bool) -> List[str]:
        """Split the tail of a ``PATTERNLINT_*`` key into path segments.

        Returns an empty list for malformed keys when ``strict`` is False.
        """
        segs = raw.split("__") if "__" in raw else raw.split("_")
        if any(seg == "" for seg in segs):
            if strict:
                raise ConfigError(
                    f"Malformed {ENV_PREFIX}* key: empty segment in '{raw}'. "
                    "Use double underscores between parts.",
                    context={"key": ENV_PREFIX + raw},
                )
            return []
        return segs

    def _iter_env_overrides(self, *, strict: bool) -> Iterator[Tuple[List[str], str]]:
        """Yield parsed environment overrides as (path, raw_value)."""
        for key in sorted(os.environ.keys()):
            if not key.startswith(ENV_PREFIX):
                continue
            raw = key[len(ENV_PREFIX):]
            if not raw:
                if strict:
                    raise ConfigError(f"Malformed {ENV_PREFIX}* key: empty tail after prefix")
                continue
            path = self._parse_env_key(raw, strict=strict)
            if not path:
                continue
            yield path, os.environ[key]

    @staticmethod
    def _match_key(container: Dict[str, Any], seg: str) -> str:
        for existing in container:
            if isinstance(existing, str) and existing.lower() == seg.lower():
                return existing
        return seg

    def _set_nested(self, root: Dict[str, Any], path: List[str], raw_value: str) -> None:
        """Set ``raw_value`` at ``path``, creating containers as needed.

        A leaf that already holds a string keeps the value as a stripped
        string; anything else goes through :meth:`_coerce_type`.
        """
        node = root
        for seg in path[:-1]:
            key = self._match_key(node, seg)
            child = node.get(key)
            if not isinstance(child, dict):
                child = {}
                node[key] = child
            node = child
        leaf = self._match_key(node, path[-1])
        if isinstance(node.get(leaf), str):
            node[leaf] = raw_value.strip()
        else:
            node[leaf] = self._coerce_type(raw_value)

    def apply_env_overrides(self, cfg: Dict[str, Any], *, strict: bool) -> None:
        """Apply ``PATTERNLINT_*`` overrides in-place to ``cfg``."""
        for path, raw_value in self._iter_env_overrides(strict=strict):
            logger.debug("Applying env override %s", ".".join(path))
            self._set_nested(cfg, path, raw_value)

    def load_config(self, validate: bool = True) -> Dict[str, Any]:
        """Load configuration with correct precedence and optional validation.

        Precedence (lowest → highest): defaults → project → env.

        Args:
            validate: When ``True`` (default), validate the merged config
                against the packaged schema and treat malformed env keys as
                errors.

        Returns:
            Dict[str, Any]: Fully merged configuration.
        """
        # Layer 1: packaged defaults
        cfg = self.load_yaml(self.core_config_dir / "defaults.yaml")

        # Layer 2: project overlays (.yml only)
        if self.project_config_dir.exists():
            for path in sorted(self.project_config_dir.glob("*.yml")):
                logger.debug("Loading project config overlay %s", path)
                cfg = self.deep_merge(cfg, self.load_yaml(path))
            for path in sorted(self.project_config_dir.glob("*.yaml")):
                logger.warning("Ignoring %s: project overlays must use the .yml extension", path)

        # Layer 3: environment overrides
        self.apply_env_overrides(cfg, strict=validate)

        if validate:
            self.validate_schema(cfg)

        return cfg


def load_base_category(repo_root: Optional[Path] = None) -> str:
    """Return the configured base category ("" when unset)."""
    cfg = ConfigManager(repo_root=repo_root).load_config()
    return str((cfg.get("patterns") or {}).get("baseCategory") or "")


__all__ = ["ConfigManager", "load_base_category"]
