"""
scriptgate configuration management (YAML layers + environment overrides).
"""
from __future__ import annotations

import json
import logging
import os
import re
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Tuple, Union

from scriptgate.core.exceptions import ConfigurationError
from scriptgate.core.schemas import SchemaValidationError, validate_payload
from scriptgate.core.utils.io import iter_yaml_files, read_yaml
from scriptgate.core.utils.merge import deep_merge as _deep_merge
from scriptgate.core.utils.paths import (
    PROJECT_ROOT_ENV,
    get_project_config_dir,
    resolve_project_root,
)
from scriptgate.data import get_data_path

logger = logging.getLogger(__name__)

ENV_PREFIX = "SCRIPTGATE_"
CONFIG_SCHEMA = "config"


class ConfigManager:
    """Load, merge, and validate scriptgate configuration.

    Configuration sources (highest to lowest priority):
    1. Environment variables: SCRIPTGATE_<section>__<key>
    2. Project config: <repo_root>/.scriptgate/config/*.yaml (alphabetical order)
    3. Bundled defaults: scriptgate.data/config/*.yaml (alphabetical order)
    """

    ARRAY_APPEND_MARKER = object()

    def __init__(self, repo_root: Optional[Path] = None) -> None:
        self.repo_root = Path(repo_root) if repo_root is not None else resolve_project_root()
        self.core_config_dir = get_data_path("config")
        self.project_config_dir = get_project_config_dir(self.repo_root) / "config"

    def deep_merge(self, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """Recursively merge dictionaries. Delegates to shared implementation."""
        return _deep_merge(base, override)

    def load_yaml(self, path: Path) -> Dict[str, Any]:
        # Fail closed: configuration must never silently ignore invalid YAML.
        data = read_yaml(path, default={}, raise_on_error=True)
        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Config file must contain a mapping: {path}",
                context={"path": str(path)},
            )
        return data

    def validate_schema(self, config: Dict[str, Any], schema_name: str = CONFIG_SCHEMA) -> None:
        try:
            validate_payload(config, schema_name)
        except SchemaValidationError as exc:
            raise ConfigurationError(str(exc), context={"schema": schema_name}) from exc

    # ========== Environment overrides ==========

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
            except ValueError:
                return None
        return None

    def _coerce_type(self, value: str) -> Any:
        for caster in (self._as_bool, self._as_int, self._as_float, self._as_json):
            result = caster(value)
            if result is not None:
                return result
        return value.strip()

    def _parse_env_key(self, raw: str, *, strict: bool) -> List[Union[str, int, object]]:
        if not raw:
            return []
        segs = raw.split("__") if "__" in raw else raw.split("_")
        processed: List[Union[str, int, object]] = []
        for seg in segs:
            if seg == "":
                if strict:
                    raise ConfigurationError(
                        f"Malformed {ENV_PREFIX}* key: empty segment in '{raw}'."
                    )
                return []
            if seg.isdigit():
                processed.append(int(seg))
            elif seg.upper() == "APPEND":
                processed.append(self.ARRAY_APPEND_MARKER)
            else:
                processed.append(seg.lower())
        return processed

    def _iter_env_overrides(
        self, *, strict: bool
    ) -> Iterator[Tuple[List[Union[str, int, object]], Any, str]]:
        for key in sorted(os.environ.keys()):
            if not key.startswith(ENV_PREFIX) or key == PROJECT_ROOT_ENV:
                continue
            raw = key[len(ENV_PREFIX):]
            path = self._parse_env_key(raw, strict=strict)
            if not path:
                continue
            yield path, self._coerce_type(os.environ[key]), raw

    def _set_nested(self, root: Dict[str, Any], path: List[Union[str, int, object]], value: Any) -> None:
        cur: Any = root
        for i, part in enumerate(path[:-1]):
            nxt = path[i + 1]
            if isinstance(part, int) or part is self.ARRAY_APPEND_MARKER:
                raise ConfigurationError("Invalid path: list index/APPEND may only appear at leaf")
            if not isinstance(cur, dict):
                raise ConfigurationError("Path traverses non-dict container")
            key_candidates = {k.lower(): k for k in cur.keys() if isinstance(k, str)}
            key_to_use = key_candidates.get(str(part).lower(), part)
            if key_to_use not in cur:
                cur[key_to_use] = [] if (isinstance(nxt, int) or nxt is self.ARRAY_APPEND_MARKER) else {}
            cur = cur[key_to_use]

        leaf = path[-1]
        if leaf is self.ARRAY_APPEND_MARKER:
            if not isinstance(cur, list):
                raise ConfigurationError("APPEND requires list")
            cur.append(value)
        elif isinstance(leaf, int):
            if not isinstance(cur, list):
                raise ConfigurationError("Index assignment requires list")
            while len(cur) <= leaf:
                cur.append(None)
            cur[leaf] = value
        else:
            if not isinstance(cur, dict):
                raise ConfigurationError("Key assignment requires dict")
            lower_map = {k.lower(): k for k in cur.keys() if isinstance(k, str)}
            cur[lower_map.get(str(leaf).lower(), leaf)] = value

    def apply_env_overrides(self, cfg: Dict[str, Any], *, strict: bool) -> None:
        for path, typed_value, raw in self._iter_env_overrides(strict=strict):
            logger.debug("Applying env override %s%s", ENV_PREFIX, raw)
            self._set_nested(cfg, path, typed_value)

    # ========== Loading ==========

    def _load_directory(self, directory: Path, cfg: Dict[str, Any]) -> Dict[str, Any]:
        """Load all YAML files from a directory and merge into config."""
        for path in iter_yaml_files(directory):
            cfg = self.deep_merge(cfg, self.load_yaml(path))
        return cfg

    def _load_config_uncached(self) -> Dict[str, Any]:
        cfg: Dict[str, Any] = {}
        cfg = self._load_directory(self.core_config_dir, cfg)
        cfg = self._load_directory(self.project_config_dir, cfg)
        self.apply_env_overrides(cfg, strict=False)
        return cfg

    def load_config(self, validate: bool = True) -> Dict[str, Any]:
        """Load configuration using the centralized cache.

        Returned dict should be treated as immutable.
        """
        defaults = {
            "core_config_dir": get_data_path("config"),
            "project_config_dir": get_project_config_dir(self.repo_root) / "config",
        }
        overridden = any(getattr(self, key) != val for key, val in defaults.items())

        if overridden:
            cfg = self._load_config_uncached()
        else:
            from .cache import get_cached_config

            cfg = get_cached_config(repo_root=self.repo_root)
        if validate:
            # Strict parsing of env override paths, even if the config came from cache.
            _ = list(self._iter_env_overrides(strict=True))
            self.validate_schema(cfg)
        return cfg

    def get(self, key: str, default: Any = None) -> Any:
        """Return a dot-notation key from the merged config."""
        current: Any = self.load_config(validate=False)
        for part in [p for p in key.split(".") if p]:
            if isinstance(current, dict) and part in current:
                current = current[part]
            else:
                return default
        return current


__all__ = ["ConfigManager", "ENV_PREFIX"]
