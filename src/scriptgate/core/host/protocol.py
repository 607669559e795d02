"""Host collaborator contract.

The host owns phase dispatch, the resource namespace and request context.
scriptgate only ever talks to it through this protocol, so any embedding
application (or the bundled :class:`~scriptgate.core.host.memory.InMemoryHost`)
can drive script lifecycles.
"""
from __future__ import annotations

from typing import Any, Callable, Mapping, Protocol, Sequence, runtime_checkable

PhaseCallback = Callable[[], Any]


@runtime_checkable
class Host(Protocol):
    """Interface the lifecycle core depends on.

    Notes
    -----
    Phase dispatch must isolate failures per callback so one script's fault
    does not stop sibling scripts bound to the same phase.
    """

    def phase_has_elapsed(self, phase: str) -> bool:
        """Return whether ``phase`` has already fired (or is firing)."""

    def on_phase(self, phase: str, callback: PhaseCallback, priority: int = 10) -> None:
        """Run ``callback`` when ``phase`` fires, ordered by ascending priority."""

    def register_resource(
        self,
        handle: str,
        src: str,
        deps: Sequence[str],
        version: int | str | None,
        in_footer: bool,
    ) -> None:
        """Declare a script to the host without activating it."""

    def activate_resource(self, handle: str) -> None:
        """Mark a registered script as live for the current render."""

    def attach_inline(self, handle: str, code: str) -> None:
        """Attach auxiliary code to an activated script."""

    def attach_localized_data(self, handle: str, name: str, data: Mapping[str, Any]) -> None:
        """Expose ``data`` as ``name`` to the script's running code."""

    def is_administrative_context(self) -> bool:
        """Return whether the current request is an administrative one."""

    def apply_filter(self, name: str, value: Any, *args: Any) -> Any:
        """Pass ``value`` through every callback registered for filter ``name``."""


__all__ = ["Host", "PhaseCallback"]
