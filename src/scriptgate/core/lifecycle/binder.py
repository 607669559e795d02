"""Phase binding for script lifecycles.

A script can be constructed at any point of the host's startup sequence, so
every phase it depends on is bound with the same two-branch rule: if the
phase already fired, run the routine now; otherwise defer it to the phase.

Binding is chained: the bootstrap step binds registration, and the
registration step binds render, so activation never runs before the script
was registered, whatever phases the host has already fired.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Callable, Optional

from scriptgate.core.config.domains import LifecycleConfig
from scriptgate.core.host.protocol import Host

if TYPE_CHECKING:
    from scriptgate.core.scripts.script import Script

logger = logging.getLogger(__name__)


def bind_or_run_now(
    phase: str,
    action: Callable[[], Any],
    *,
    has_elapsed: Callable[[str], bool],
    on_phase: Callable[[str, Callable[[], Any], int], Any],
    priority: int = 10,
) -> bool:
    """Run ``action`` now if ``phase`` has elapsed, else defer it to the phase.

    Args:
        phase: Host phase name
        action: Zero-argument routine to run
        has_elapsed: Phase query collaborator
        on_phase: Phase registration collaborator ``(phase, callback, priority)``
        priority: Ordering hint among callbacks of the same phase

    Returns:
        True if ``action`` ran synchronously, False if it was deferred.
    """
    if has_elapsed(phase):
        logger.debug("Phase %s already elapsed; running %s now", phase, _name(action))
        action()
        return True
    logger.debug("Deferring %s to phase %s (priority %s)", _name(action), phase, priority)
    on_phase(phase, action, priority)
    return False


def _name(action: Callable[..., Any]) -> str:
    return getattr(action, "__qualname__", None) or repr(action)


class LifecycleBinder:
    """Binds a script's lifecycle routines to the host's phases."""

    def __init__(self, host: Host, lifecycle: Optional[LifecycleConfig] = None) -> None:
        self.host = host
        self.lifecycle = lifecycle or LifecycleConfig()

    def bind(self, phase: str, action: Callable[[], Any], priority: int = 10) -> bool:
        return bind_or_run_now(
            phase,
            action,
            has_elapsed=self.host.phase_has_elapsed,
            on_phase=self.host.on_phase,
            priority=priority,
        )

    def attach(self, script: "Script") -> bool:
        """Bind the script's bootstrap step (which binds everything else)."""
        return self.bind(
            self.lifecycle.bootstrap_phase,
            script.on_bootstrap,
            self.lifecycle.bootstrap_priority,
        )

    def attach_phases(self, script: "Script") -> bool:
        """Bind the script's registration step (which binds activation)."""
        return self.bind(
            self.lifecycle.registration_phase,
            script.on_registration,
            self.lifecycle.registration_priority,
        )

    def attach_render(self, script: "Script") -> bool:
        """Bind activation at the script's priority."""
        return self.bind(self.lifecycle.render_phase, script.maybe_activate, script.priority)


__all__ = ["bind_or_run_now", "LifecycleBinder"]
