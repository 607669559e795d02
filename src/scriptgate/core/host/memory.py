"""In-memory reference host.

``InMemoryHost`` implements :class:`~scriptgate.core.host.protocol.Host` with
plain Python containers. It is the host the CLI simulator runs manifests
against, and the one the test-suite observes script lifecycles through.

Phase dispatch follows the usual action-hook model:

- ``fire(phase)`` marks the phase as elapsed *before* running its callbacks,
  so anything bound while the phase is firing runs immediately;
- callbacks run by ascending priority, then registration order;
- a callback that raises is logged and recorded in ``failures``; the
  remaining callbacks of the phase still run.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple

from .hooks import HookRegistry

logger = logging.getLogger(__name__)

DEFAULT_PHASES: Tuple[str, ...] = ("loaded", "init", "enqueue_scripts")


@dataclass(frozen=True)
class RegisteredScript:
    handle: str
    src: str
    deps: Tuple[str, ...]
    version: int | str | None
    in_footer: bool


@dataclass(frozen=True)
class DispatchFailure:
    phase: str
    callback: str
    error: BaseException


@dataclass
class HostCall:
    """One resource call observed by the host, in call order."""

    operation: str
    handle: str
    args: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {"operation": self.operation, "handle": self.handle, **self.args}


def _callback_name(callback: Callable[..., Any]) -> str:
    owner = getattr(callback, "__self__", None)
    name = getattr(callback, "__qualname__", None) or repr(callback)
    handle = getattr(owner, "handle", None)
    return f"{name}[{handle}]" if handle else name


class InMemoryHost:
    """Host that keeps phases, filters and resources in memory."""

    def __init__(
        self,
        *,
        administrative: bool = False,
        phases: Optional[Sequence[str]] = None,
    ) -> None:
        self.administrative = administrative
        self.phase_order: Tuple[str, ...] = tuple(phases or DEFAULT_PHASES)
        self.actions = HookRegistry()
        self.filters = HookRegistry()
        self._fired: Dict[str, int] = {}

        self.registered: Dict[str, RegisteredScript] = {}
        self.active: List[str] = []
        self.inline: Dict[str, List[str]] = {}
        self.localized: Dict[str, Dict[str, Any]] = {}
        self.calls: List[HostCall] = []
        self.failures: List[DispatchFailure] = []

    # ---------------------------------------------------------------- phases

    def phase_has_elapsed(self, phase: str) -> bool:
        return self._fired.get(phase, 0) > 0

    def fired_count(self, phase: str) -> int:
        return self._fired.get(phase, 0)

    def on_phase(self, phase: str, callback: Callable[[], Any], priority: int = 10) -> None:
        self.actions.register(phase, callback, priority)

    def add_action(self, phase: str, callback: Callable[..., Any], priority: int = 10) -> None:
        """Register a phase callback (alias for on_phase)."""
        self.on_phase(phase, callback, priority)

    def fire(self, phase: str, *args: Any) -> int:
        """Fire ``phase`` and return the number of callbacks that completed."""
        self._fired[phase] = self._fired.get(phase, 0) + 1
        callbacks = self.actions.get(phase)
        logger.debug("Firing phase %s (%d callbacks)", phase, len(callbacks))

        completed = 0
        for callback in callbacks:
            try:
                callback(*args)
            except Exception as exc:
                name = _callback_name(callback)
                logger.exception("Phase %s callback %s failed", phase, name)
                self.failures.append(DispatchFailure(phase=phase, callback=name, error=exc))
                continue
            completed += 1
        return completed

    def mark_elapsed(self, phase: str) -> None:
        """Record ``phase`` as already fired without running any callback."""
        self._fired[phase] = self._fired.get(phase, 0) + 1

    def run_lifecycle(self) -> None:
        """Fire every configured phase that has not fired yet, in order."""
        for phase in self.phase_order:
            if not self.phase_has_elapsed(phase):
                self.fire(phase)

    # --------------------------------------------------------------- filters

    def add_filter(self, name: str, callback: Callable[..., Any], priority: int = 10) -> None:
        self.filters.register(name, callback, priority)

    def apply_filter(self, name: str, value: Any, *args: Any) -> Any:
        for callback in self.filters.get(name):
            value = callback(value, *args)
        return value

    # --------------------------------------------------------------- context

    def is_administrative_context(self) -> bool:
        return bool(self.administrative)

    # ------------------------------------------------------------- resources

    def _require_registered(self, handle: str, operation: str) -> None:
        if handle not in self.registered:
            raise LookupError(f"Cannot {operation} unregistered script '{handle}'")

    def register_resource(
        self,
        handle: str,
        src: str,
        deps: Sequence[str],
        version: int | str | None,
        in_footer: bool,
    ) -> None:
        self.calls.append(
            HostCall(
                "register",
                handle,
                {"src": src, "deps": list(deps), "version": version, "in_footer": in_footer},
            )
        )
        if handle in self.registered:
            logger.debug("Script %s already registered; keeping first registration", handle)
            return
        self.registered[handle] = RegisteredScript(
            handle=handle,
            src=src,
            deps=tuple(deps),
            version=version,
            in_footer=bool(in_footer),
        )

    def activate_resource(self, handle: str) -> None:
        self._require_registered(handle, "activate")
        self.calls.append(HostCall("activate", handle))
        if handle not in self.active:
            self.active.append(handle)

    def attach_inline(self, handle: str, code: str) -> None:
        self._require_registered(handle, "attach inline code to")
        self.calls.append(HostCall("inline", handle, {"code": code}))
        self.inline.setdefault(handle, []).append(code)

    def attach_localized_data(self, handle: str, name: str, data: Mapping[str, Any]) -> None:
        self._require_registered(handle, "localize")
        self.calls.append(HostCall("localize", handle, {"name": name, "data": dict(data)}))
        self.localized.setdefault(handle, {})[name] = dict(data)

    # ------------------------------------------------------------ reporting

    def calls_for(self, handle: str, operation: Optional[str] = None) -> List[HostCall]:
        return [
            c for c in self.calls
            if c.handle == handle and (operation is None or c.operation == operation)
        ]

    def snapshot(self) -> Dict[str, Any]:
        """Return a JSON-friendly view of everything the host observed."""
        return {
            "phases": {phase: self.fired_count(phase) for phase in self.phase_order},
            "calls": [c.to_dict() for c in self.calls],
            "active": list(self.active),
            "inline": {h: list(codes) for h, codes in self.inline.items()},
            "localized": {h: dict(v) for h, v in self.localized.items()},
            "failures": [
                {"phase": f.phase, "callback": f.callback, "error": str(f.error)}
                for f in self.failures
            ],
        }


__all__ = ["DEFAULT_PHASES", "DispatchFailure", "HostCall", "InMemoryHost", "RegisteredScript"]
