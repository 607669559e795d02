"""Domain-specific configuration for script defaults, filters and assets."""
from __future__ import annotations

from functools import cached_property
from typing import Any, Dict

from ..base import BaseDomainConfig


class ScriptsConfig(BaseDomainConfig):
    def _config_section(self) -> str:
        return "scripts"

    @cached_property
    def defaults(self) -> Dict[str, Any]:
        """Constructor argument defaults merged under every script's args."""
        raw = self.section.get("defaults") or {}
        return {
            "deps": list(raw.get("deps") or []),
            "inline": str(raw.get("inline") or ""),
            "priority": int(raw.get("priority", 25)),
            "in_footer": bool(raw.get("in_footer", True)),
        }

    @cached_property
    def resource_conditional_filter(self) -> str:
        filters = self.section.get("filters") or {}
        return str(filters.get("resource_conditional") or "scriptgate_{handle}_conditional")

    @cached_property
    def global_conditional_filter(self) -> str:
        filters = self.section.get("filters") or {}
        return str(filters.get("global_conditional") or "scriptgate__conditional")

    @cached_property
    def assets(self) -> Dict[str, Any]:
        raw = self.section.get("assets") or {}
        return {
            "base_dir": str(raw.get("base_dir") or "."),
            "base_url": str(raw.get("base_url") or "/"),
            "debug": bool(raw.get("debug", False)),
        }


__all__ = ["ScriptsConfig"]
