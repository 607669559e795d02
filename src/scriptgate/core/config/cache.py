"""Centralized configuration caching.

Provides a single source of truth for loaded configuration across all domain
configs. Cache keys include environment overrides and project config file
fingerprints so long-running processes and tests never see stale config.
"""
from __future__ import annotations

import hashlib
import os
from pathlib import Path
from typing import Any, Dict, Optional

from scriptgate.core.utils.io import iter_yaml_files
from scriptgate.core.utils.paths import get_project_config_dir, resolve_project_root

_config_cache: Dict[str, Dict[str, Any]] = {}


def _normalize_repo_root(repo_root: Optional[Path]) -> Path:
    if repo_root is None:
        return resolve_project_root()
    return Path(repo_root).expanduser().resolve()


def _cache_key(repo_root: Path) -> str:
    from .manager import ENV_PREFIX

    env_items = sorted(
        (k, os.environ.get(k, "")) for k in os.environ.keys() if k.startswith(ENV_PREFIX)
    )
    env_fp = hashlib.sha256(repr(env_items).encode("utf-8")).hexdigest()[:12]

    files: list[tuple[str, int, int]] = []
    for p in iter_yaml_files(get_project_config_dir(repo_root) / "config"):
        st = p.stat()
        files.append((p.name, int(st.st_mtime_ns), int(st.st_size)))
    cfg_fp = hashlib.sha256(repr(files).encode("utf-8")).hexdigest()[:12]

    return f"{repo_root}:env={env_fp}:cfg={cfg_fp}"


def get_cached_config(repo_root: Optional[Path] = None) -> Dict[str, Any]:
    """Get merged configuration with caching.

    Returns the same config dict instance for the same repo_root while the
    environment and project config files are unchanged.
    """
    normalized_root = _normalize_repo_root(repo_root)
    key = _cache_key(normalized_root)
    cached = _config_cache.get(key)
    if cached is not None:
        return cached

    from .manager import ConfigManager

    cfg = ConfigManager(normalized_root)._load_config_uncached()
    _config_cache[key] = cfg
    return cfg


def clear_all_caches() -> None:
    """Drop every cached configuration."""
    _config_cache.clear()


def is_cached(repo_root: Optional[Path] = None) -> bool:
    return _cache_key(_normalize_repo_root(repo_root)) in _config_cache


__all__ = ["get_cached_config", "clear_all_caches", "is_cached"]
