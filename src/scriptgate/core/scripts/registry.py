"""One live script instance per concrete script type.

``ScriptRegistry`` replaces process-wide singletons with an explicit mapping
from a type key to the single instance it owns. Instances are constructed
lazily, on first request, and construction failures are not cached so a
corrected configuration can be retried.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable, Dict, Hashable, Mapping, Optional, Tuple, Type, TypeVar

from scriptgate.core.config.domains import LifecycleConfig, ScriptsConfig
from scriptgate.core.exceptions import ConfigurationError
from scriptgate.core.host.protocol import Host

from .script import Script

logger = logging.getLogger(__name__)

ScriptT = TypeVar("ScriptT", bound=Script)
ScriptFactory = Callable[[], Script]


class ScriptRegistry:
    """Registry of lazily constructed script instances bound to one host."""

    def __init__(
        self,
        host: Host,
        *,
        lifecycle: Optional[LifecycleConfig] = None,
        scripts_config: Optional[ScriptsConfig] = None,
        repo_root: Optional[Path] = None,
    ) -> None:
        self.host = host
        self.repo_root = repo_root
        self.lifecycle = lifecycle or LifecycleConfig(repo_root)
        self.scripts_config = scripts_config or ScriptsConfig(repo_root)
        self._factories: Dict[Hashable, ScriptFactory] = {}
        self._instances: Dict[Hashable, Script] = {}
        self._constructing: set[Hashable] = set()

    def register(self, key: Hashable, factory: ScriptFactory) -> None:
        """Declare how to build the instance for ``key``.

        Raises:
            ValueError: If a different factory is already registered for ``key``
        """
        if not callable(factory):
            raise TypeError("factory must be callable")
        existing = self._factories.get(key)
        if existing is not None and existing is not factory:
            raise ValueError(f"script factory conflict for {key!r}; already registered")
        self._factories[key] = factory

    def build(self, args: Mapping[str, Any], script_cls: Type[ScriptT] = Script) -> ScriptT:  # type: ignore[assignment]
        """Construct a script with this registry's host and configuration.

        The instance is not stored; use :meth:`register`/:meth:`get` for that.
        """
        return script_cls(
            self.host,
            args,
            lifecycle=self.lifecycle,
            scripts_config=self.scripts_config,
            repo_root=self.repo_root,
        )

    def instance(self, script_cls: Type[ScriptT], args: Optional[Mapping[str, Any]] = None) -> ScriptT:
        """Return the single instance of ``script_cls``, constructing it on first use.

        ``args`` only apply to the first construction.
        """
        existing = self._instances.get(script_cls)
        if existing is not None:
            if args:
                logger.debug("%s already constructed; ignoring args", script_cls.__name__)
            return existing  # type: ignore[return-value]
        return self._construct(script_cls, lambda: self.build(args or {}, script_cls))  # type: ignore[return-value]

    def get(self, key: Hashable) -> Script:
        """Return the instance for ``key``, constructing it from its factory.

        Script subclasses can be requested without registering a factory.

        Raises:
            KeyError: If nothing is registered for ``key``
        """
        existing = self._instances.get(key)
        if existing is not None:
            return existing
        factory = self._factories.get(key)
        if factory is None:
            if isinstance(key, type) and issubclass(key, Script):
                return self.instance(key)
            raise KeyError(f"No script registered for {key!r}")
        return self._construct(key, factory)

    def _construct(self, key: Hashable, factory: ScriptFactory) -> Script:
        if key in self._constructing:
            raise ConfigurationError(
                f"Script {key!r} requested itself during construction",
                context={"key": repr(key)},
            )
        self._constructing.add(key)
        try:
            script = factory()
        finally:
            self._constructing.discard(key)
        self._instances[key] = script
        logger.debug("Constructed script %s for %r", script.handle, key)
        return script

    def __contains__(self, key: Hashable) -> bool:
        return key in self._instances or key in self._factories

    def is_constructed(self, key: Hashable) -> bool:
        return key in self._instances

    def instances(self) -> Tuple[Script, ...]:
        """Constructed instances in construction order."""
        return tuple(self._instances.values())

    def clear(self) -> None:
        """Forget every factory and instance (tests and host teardown)."""
        self._factories.clear()
        self._instances.clear()


__all__ = ["ScriptRegistry", "ScriptFactory"]
