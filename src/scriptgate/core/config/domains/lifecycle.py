"""Domain-specific configuration for host lifecycle phases."""
from __future__ import annotations

from functools import cached_property

from ..base import BaseDomainConfig


class LifecycleConfig(BaseDomainConfig):
    """Host phase names and the priorities scripts bind to them with."""

    def _config_section(self) -> str:
        return "lifecycle"

    @cached_property
    def bootstrap_phase(self) -> str:
        return str(self.section.get("bootstrap_phase") or "loaded")

    @cached_property
    def registration_phase(self) -> str:
        return str(self.section.get("registration_phase") or "init")

    @cached_property
    def render_phase(self) -> str:
        return str(self.section.get("render_phase") or "enqueue_scripts")

    @cached_property
    def bootstrap_priority(self) -> int:
        return int(self.section.get("bootstrap_priority", 10))

    @cached_property
    def registration_priority(self) -> int:
        return int(self.section.get("registration_priority", 10))

    @cached_property
    def phase_order(self) -> tuple[str, str, str]:
        return (self.bootstrap_phase, self.registration_phase, self.render_phase)


__all__ = ["LifecycleConfig"]
