"""scriptgate configuration system.

Usage:
    from scriptgate.core.config import ConfigManager, LifecycleConfig

    manager = ConfigManager(repo_root=Path("/path/to/project"))
    config = manager.load_config()

    lifecycle = LifecycleConfig(repo_root=Path("/path/to/project"))
    lifecycle.render_phase
"""
from __future__ import annotations

from .base import BaseDomainConfig
from .cache import clear_all_caches, get_cached_config, is_cached
from .domains import LifecycleConfig, LoggingConfig, ScriptsConfig
from .manager import ConfigManager

__all__ = [
    "ConfigManager",
    "BaseDomainConfig",
    "get_cached_config",
    "clear_all_caches",
    "is_cached",
    "LifecycleConfig",
    "LoggingConfig",
    "ScriptsConfig",
]
