"""Script fixtures shared across lifecycle and resource tests."""
from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Optional

from scriptgate.core.config import LifecycleConfig, ScriptsConfig
from scriptgate.core.scripts import Script

DEFAULT_MTIME = 1_700_000_000


def write_script_file(path: Path, *, mtime: int = DEFAULT_MTIME, body: str = "console.log('widget');\n") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(body, encoding="utf-8")
    os.utime(path, (mtime, mtime))
    return path


def widget_args(script_file: Path, **overrides: Any) -> Dict[str, Any]:
    args: Dict[str, Any] = {"handle": "widget-js", "src": "/widget.js", "file": str(script_file)}
    args.update(overrides)
    return args


def lifecycle_config(**overrides: Any) -> LifecycleConfig:
    return LifecycleConfig(config={"lifecycle": overrides})


def scripts_config(**overrides: Any) -> ScriptsConfig:
    section: Dict[str, Any] = {
        "defaults": {"deps": [], "inline": "", "priority": 25, "in_footer": True},
    }
    section.update(overrides)
    return ScriptsConfig(config={"scripts": section})


def make_script(host, script_file: Path, *, cls=Script, repo_root: Optional[Path] = None, **overrides: Any) -> Script:
    """Construct ``cls`` with explicit (file-independent) configuration."""
    return cls(
        host,
        widget_args(script_file, **overrides),
        lifecycle=lifecycle_config(),
        scripts_config=scripts_config(),
        repo_root=repo_root,
    )


class FrontendOnlyScript(Script):
    """A script whose own conditional routine activates outside admin requests."""

    def conditional(self) -> bool:
        return not self.host.is_administrative_context()


class NeverScript(Script):
    def conditional(self) -> bool:
        return False


__all__ = [
    "DEFAULT_MTIME",
    "FrontendOnlyScript",
    "NeverScript",
    "lifecycle_config",
    "make_script",
    "scripts_config",
    "widget_args",
    "write_script_file",
]
