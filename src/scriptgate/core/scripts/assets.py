"""Asset path, URL and suffix helpers used to build default script args."""
from __future__ import annotations

import os
from typing import Optional

from scriptgate.core.config.domains import ScriptsConfig

# Characters stripped from the front of relative paths before joining.
_LEADING = " \t\n\r\0\x0b/"


def trailingslashit(value: str) -> str:
    return value.rstrip("/\\") + "/"


class AssetLocator:
    """Maps files under ``base_dir`` to URLs under ``base_url``."""

    def __init__(self, base_dir: str = ".", base_url: str = "/", *, debug: bool = False) -> None:
        self.base_dir = os.path.abspath(base_dir)
        self.base_url = base_url
        self.debug = debug

    @classmethod
    def from_config(cls, config: Optional[ScriptsConfig] = None) -> "AssetLocator":
        config = config or ScriptsConfig()
        assets = config.assets
        base_dir = assets["base_dir"]
        if not os.path.isabs(base_dir):
            base_dir = os.path.join(str(config.repo_root), base_dir)
        return cls(base_dir, assets["base_url"], debug=assets["debug"])

    def dir_path(self, directory: str) -> str:
        """Directory path with a trailing slash."""
        return trailingslashit(directory)

    def dir_url(self, directory: str, path: str = "") -> str:
        """URL of ``directory`` (under ``base_dir``) joined with ``path``."""
        absolute = os.path.abspath(directory)
        relative = os.path.relpath(absolute, self.base_dir)
        relative = "" if relative == "." else relative.replace(os.sep, "/")
        prefix = trailingslashit(relative) if relative else ""
        return self._join_url(prefix + path.lstrip(_LEADING))

    def url_for(self, rel_path: str = "") -> str:
        """URL of ``rel_path`` relative to ``base_url``."""
        return self._join_url(rel_path.lstrip(_LEADING))

    def file_for(self, anchor_file: str = "", rel_path: str = "") -> str:
        """Path of ``rel_path`` inside the directory containing ``anchor_file``."""
        directory = os.path.dirname(anchor_file) if anchor_file else self.base_dir
        return trailingslashit(directory) + rel_path.lstrip("/")

    def suffix(self) -> str:
        """Minified-file suffix: empty in debug mode, ``.min`` otherwise."""
        return "" if self.debug else ".min"

    def _join_url(self, tail: str) -> str:
        return trailingslashit(self.base_url) + tail


__all__ = ["AssetLocator", "trailingslashit"]
