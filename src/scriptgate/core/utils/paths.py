"""Project root resolution.

Resolution priority:
1. ``SCRIPTGATE_PROJECT_ROOT`` environment variable
2. Nearest ancestor of the working directory containing ``.scriptgate/``
3. The working directory itself
"""
from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from ..exceptions import ConfigurationError

PROJECT_ROOT_ENV = "SCRIPTGATE_PROJECT_ROOT"
PROJECT_CONFIG_DIRNAME = ".scriptgate"


def resolve_project_root(start: Optional[Path] = None) -> Path:
    """Resolve the project root.

    Raises:
        ConfigurationError: If ``SCRIPTGATE_PROJECT_ROOT`` points at a missing path
    """
    env_root = os.environ.get(PROJECT_ROOT_ENV)
    if env_root:
        env_path = Path(env_root).expanduser().resolve()
        if not env_path.exists():
            raise ConfigurationError(
                f"{PROJECT_ROOT_ENV} points at missing path: {env_path}",
                context={"path": str(env_path)},
            )
        return env_path

    cwd = (start or Path.cwd()).expanduser().resolve()
    for candidate in (cwd, *cwd.parents):
        if (candidate / PROJECT_CONFIG_DIRNAME).is_dir():
            return candidate
    return cwd


def get_project_config_dir(repo_root: Path) -> Path:
    """Return ``<repo_root>/.scriptgate`` (not created)."""
    return Path(repo_root) / PROJECT_CONFIG_DIRNAME


__all__ = [
    "PROJECT_ROOT_ENV",
    "PROJECT_CONFIG_DIRNAME",
    "resolve_project_root",
    "get_project_config_dir",
]
