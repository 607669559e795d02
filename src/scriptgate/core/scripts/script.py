"""Base class for managed scripts.

A concrete script is a subclass that supplies its constructor args::

    class WidgetScript(Script):
        def __init__(self, host, args=None, **kwargs):
            super().__init__(
                host,
                {"handle": "widget-js", "src": "/widget.js", "file": WIDGET_JS, **(args or {})},
                **kwargs,
            )

        def conditional(self) -> bool:
            return not self.host.is_administrative_context()

Construction validates the args and binds the lifecycle immediately: phases
that already fired run their routine synchronously, later ones are deferred.
Use :class:`~scriptgate.core.scripts.registry.ScriptRegistry` to keep exactly
one instance per concrete type.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable, ClassVar, Dict, Mapping, Optional, Tuple

from scriptgate.core.audit import audit_event
from scriptgate.core.config.domains import LifecycleConfig, ScriptsConfig
from scriptgate.core.host.protocol import Host
from scriptgate.core.lifecycle.binder import LifecycleBinder
from scriptgate.core.lifecycle.conditions import ConditionalEvaluator
from scriptgate.core.lifecycle.pipeline import ActivationPipeline, call_host

from .assets import AssetLocator
from .descriptor import Localization, ScriptDescriptor, build_descriptor, merge_script_args

logger = logging.getLogger(__name__)


class Script:
    """One managed script bound to a host's lifecycle."""

    # Used when the merged defaults carry no priority.
    priority_fallback: ClassVar[int] = 10

    def __init__(
        self,
        host: Host,
        args: Optional[Mapping[str, Any]] = None,
        *,
        lifecycle: Optional[LifecycleConfig] = None,
        scripts_config: Optional[ScriptsConfig] = None,
        repo_root: Optional[Path] = None,
    ) -> None:
        self.host = host
        self.repo_root = repo_root
        self.scripts_config = scripts_config or ScriptsConfig(repo_root)
        self.lifecycle = lifecycle or LifecycleConfig(repo_root)
        self.assets = AssetLocator.from_config(self.scripts_config)

        raw: Dict[str, Any] = dict(args or {})
        merged = merge_script_args(raw, self.get_defaults(file=str(raw.get("file") or "")))
        self.descriptor: ScriptDescriptor = build_descriptor(
            merged, fallback_priority=type(self).priority_fallback
        )
        self.inline: str = str(merged.get("inline") or "")
        self.localization: Localization = Localization.from_mapping(merged.get("localize"))
        self.conditional_override: Any = merged.get("conditional")
        self._inline_attached = False
        self._registered = False
        self._activated = False
        self._phases_bound = False
        self._render_bound = False

        self.evaluator = ConditionalEvaluator.from_config(host, self.scripts_config)
        self.pipeline = ActivationPipeline(host, self.evaluator, repo_root=repo_root)
        self.binder = LifecycleBinder(host, self.lifecycle)
        self.binder.attach(self)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(handle={self.handle!r})"

    # ------------------------------------------------------------ identity

    @property
    def handle(self) -> str:
        return self.descriptor.handle

    @property
    def src(self) -> str:
        return self.descriptor.src

    @property
    def file(self) -> str:
        return self.descriptor.file

    @property
    def deps(self) -> Tuple[str, ...]:
        return self.descriptor.deps

    @property
    def version(self) -> int:
        return self.descriptor.version

    @property
    def priority(self) -> int:
        return self.descriptor.priority

    @property
    def in_footer(self) -> bool:
        return self.descriptor.in_footer

    @property
    def inline_attached(self) -> bool:
        return self._inline_attached

    @property
    def registered(self) -> bool:
        return self._registered

    @property
    def activated(self) -> bool:
        return self._activated

    # ------------------------------------------------------------ defaults

    def get_defaults(self, rel_path: str = "", file: str = "") -> Dict[str, Any]:
        """Default constructor args; subclasses may override.

        ``src`` and ``file`` point at ``rel_path`` under the configured asset
        base URL and next to ``file`` respectively.
        """
        return {
            "handle": "",
            "src": self.assets.url_for(rel_path),
            "file": self.assets.file_for(file, rel_path),
            **self.scripts_config.defaults,
        }

    # ------------------------------------------------------------- setters

    def set_conditional(self, conditional: Callable[[], Any] | Any) -> None:
        """Replace the conditional routine with ``conditional``."""
        self._warn_if_activated("conditional")
        self.conditional_override = conditional

    def set_inline(self, inline: str) -> None:
        self._warn_if_activated("inline")
        self.inline = inline

    def set_localization(self, name: str, data: Mapping[str, Any]) -> None:
        self._warn_if_activated("localization")
        self.localization = Localization(name=name, data=dict(data))

    def _warn_if_activated(self, what: str) -> None:
        if self._activated:
            logger.warning(
                "Setting %s on script %s after activation; it applies from the next render",
                what,
                self.handle,
            )

    # ----------------------------------------------------------- lifecycle

    def on_bootstrap(self) -> None:
        """Bootstrap-phase step: bind registration (once per instance)."""
        if self._phases_bound:
            logger.debug("Script %s already bound; ignoring repeated bootstrap", self.handle)
            return
        self._phases_bound = True
        self.binder.attach_phases(self)

    def on_registration(self) -> None:
        """Registration-phase step: register, then bind activation (once per instance)."""
        if self._render_bound:
            logger.debug("Script %s already registered; ignoring repeated registration", self.handle)
            return
        self.register()
        self._render_bound = True
        self.binder.attach_render(self)

    def register(self) -> None:
        """Declare the script to the host."""
        call_host(
            "register",
            self.handle,
            self.host.register_resource,
            self.handle,
            self.src,
            list(self.deps),
            self.version,
            self.in_footer,
        )
        self._registered = True
        logger.debug("Registered script %s (version %s)", self.handle, self.version)
        audit_event("script.registered", repo_root=self.repo_root, handle=self.handle)

    def conditional(self) -> bool:
        """Default conditional routine; subclasses override to customise."""
        return self.evaluator.default_conditional(self.handle)

    def should_activate(self) -> bool:
        return self.evaluator.should_activate(self)

    def maybe_activate(self) -> bool:
        """Render-phase step: activate if the conditional allows it.

        The conditional is evaluated once, by the activation pipeline.
        """
        return self.activate()

    def activate(self) -> bool:
        """Run the activation pipeline, which evaluates the conditional."""
        activated = self.pipeline.run(self)
        if activated:
            self._activated = True
        return activated

    def mark_inline_attached(self) -> None:
        self._inline_attached = True


__all__ = ["Script"]
