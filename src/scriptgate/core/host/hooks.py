"""Priority-ordered hook registry.

Callbacks are grouped by hook name and returned ordered by ascending priority,
then by registration order, so two callbacks registered with the same
priority run in the order they were added. Registering a callback again under
the same name and priority is a no-op.

Example usage:
    registry.register("init", register_widget)
    registry.register("init", register_chart, priority=5)

    registry.get("init")  # [register_chart, register_widget]
"""
from __future__ import annotations

import itertools
from dataclasses import dataclass
from typing import Any, Callable, Dict, List


@dataclass(frozen=True)
class HookCallback:
    callback: Callable[..., Any]
    priority: int
    sequence: int


class HookRegistry:
    """Registry of callbacks keyed by hook name."""

    DEFAULT_PRIORITY = 10

    def __init__(self) -> None:
        self._hooks: Dict[str, List[HookCallback]] = {}
        self._sequence = itertools.count()

    def register(self, name: str, callback: Callable[..., Any], priority: int = DEFAULT_PRIORITY) -> bool:
        """Register a callback for ``name``.

        Returns:
            False if ``callback`` was already registered at ``priority``.

        Raises:
            TypeError: If callback is not callable
        """
        if not callable(callback):
            raise TypeError("callback must be callable")
        entries = self._hooks.get(name, [])
        if any(e.callback == callback and e.priority == int(priority) for e in entries):
            return False
        entry = HookCallback(callback=callback, priority=int(priority), sequence=next(self._sequence))
        self._hooks.setdefault(name, []).append(entry)
        return True

    def add(self, name: str, callback: Callable[..., Any], priority: int = DEFAULT_PRIORITY) -> None:
        """Add a callback (alias for register)."""
        self.register(name, callback, priority)

    def get(self, name: str) -> List[Callable[..., Any]]:
        """Return callbacks for ``name`` in dispatch order."""
        entries = sorted(self._hooks.get(name, []), key=lambda e: (e.priority, e.sequence))
        return [e.callback for e in entries]

    def has(self, name: str) -> bool:
        return bool(self._hooks.get(name))

    def remove(self, name: str, callback: Callable[..., Any]) -> bool:
        """Remove every registration of ``callback`` under ``name``."""
        entries = self._hooks.get(name, [])
        kept = [e for e in entries if e.callback != callback]
        self._hooks[name] = kept
        return len(kept) != len(entries)

    def list_hooks(self) -> Dict[str, int]:
        """Return hook names mapped to their callback counts."""
        return {name: len(entries) for name, entries in self._hooks.items() if entries}

    def reset(self) -> None:
        self._hooks.clear()


__all__ = ["HookCallback", "HookRegistry"]
