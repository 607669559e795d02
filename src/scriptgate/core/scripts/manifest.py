"""Declarative script manifests.

A manifest is a YAML file describing scripts and the host state they are
constructed in::

    context:
      administrative: false
    elapsed: [loaded]            # phases already fired before construction
    filters:
      scriptgate__conditional: true
    scripts:
      - handle: widget-js
        src: /widget.js
        file: assets/widget.js    # relative to the manifest
        priority: 25
        when: frontend            # always | never | admin | frontend
        localize:
          name: widgetData
          data: {count: 3}

Manifests are validated against the bundled ``manifest`` JSON Schema.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

import yaml

from scriptgate.core.exceptions import ConfigurationError
from scriptgate.core.host.memory import InMemoryHost
from scriptgate.core.host.protocol import Host
from scriptgate.core.schemas import validate_payload_safe
from scriptgate.core.utils.io import read_yaml

from .registry import ScriptRegistry
from .script import Script

logger = logging.getLogger(__name__)

MANIFEST_SCHEMA = "manifest"


@dataclass(frozen=True)
class ManifestScript:
    handle: str
    src: str
    file: str
    deps: Tuple[str, ...] = ()
    inline: str = ""
    priority: Optional[int] = None
    in_footer: Optional[bool] = None
    when: Optional[str] = None
    localize: Optional[Dict[str, Any]] = None

    def to_args(self, host: Host) -> Dict[str, Any]:
        args: Dict[str, Any] = {
            "handle": self.handle,
            "src": self.src,
            "file": self.file,
            "deps": list(self.deps),
            "inline": self.inline,
        }
        if self.priority is not None:
            args["priority"] = self.priority
        if self.in_footer is not None:
            args["in_footer"] = self.in_footer
        if self.localize:
            args["localize"] = dict(self.localize)
        conditional = conditional_for(self.when, host)
        if conditional is not None:
            args["conditional"] = conditional
        return args


@dataclass(frozen=True)
class Manifest:
    path: Path
    administrative: bool = False
    elapsed: Tuple[str, ...] = ()
    filters: Dict[str, Any] = field(default_factory=dict)
    scripts: Tuple[ManifestScript, ...] = ()


def conditional_for(when: Optional[str], host: Host) -> Optional[Callable[[], bool]]:
    """Translate a manifest ``when`` keyword into a conditional override."""
    if when is None:
        return None
    if when == "always":
        return lambda: True
    if when == "never":
        return lambda: False
    if when == "admin":
        return host.is_administrative_context
    if when == "frontend":
        return lambda: not host.is_administrative_context()
    raise ConfigurationError(f"Unknown manifest 'when' value: {when!r}")


def _resolve_file(base_dir: Path, raw: str) -> str:
    path = Path(raw).expanduser()
    if not path.is_absolute():
        path = base_dir / path
    return str(path)


def load_manifest(path: Path) -> Manifest:
    """Read and validate a manifest file.

    Raises:
        ConfigurationError: If the file is missing, not YAML, or fails validation
    """
    path = Path(path).expanduser().resolve()
    try:
        raw = read_yaml(path, default=None, raise_on_error=True)
    except FileNotFoundError as exc:
        raise ConfigurationError(f"Manifest not found: {path}", context={"path": str(path)}) from exc
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigurationError(
            f"Manifest is not valid YAML: {path}: {exc}", context={"path": str(path)}
        ) from exc

    errors = validate_payload_safe(raw, MANIFEST_SCHEMA)
    if errors:
        raise ConfigurationError(
            f"Invalid manifest {path}: " + "; ".join(errors),
            context={"path": str(path), "errors": errors},
        )

    seen: set[str] = set()
    scripts: List[ManifestScript] = []
    for entry in raw.get("scripts") or []:
        handle = entry["handle"]
        if handle in seen:
            raise ConfigurationError(
                f"Duplicate script handle in manifest: {handle}",
                context={"path": str(path), "handle": handle},
            )
        seen.add(handle)
        scripts.append(
            ManifestScript(
                handle=handle,
                src=entry["src"],
                file=_resolve_file(path.parent, entry["file"]),
                deps=tuple(entry.get("deps") or ()),
                inline=entry.get("inline") or "",
                priority=entry.get("priority"),
                in_footer=entry.get("in_footer"),
                when=entry.get("when"),
                localize=entry.get("localize"),
            )
        )

    context = raw.get("context") or {}
    return Manifest(
        path=path,
        administrative=bool(context.get("administrative", False)),
        elapsed=tuple(raw.get("elapsed") or ()),
        filters=dict(raw.get("filters") or {}),
        scripts=tuple(scripts),
    )


def _constant_filter(value: Any) -> Callable[..., Any]:
    def _filter(_current: Any, *_args: Any) -> Any:
        return value

    return _filter


def prepare_host(manifest: Manifest, host: InMemoryHost) -> None:
    """Apply the manifest's request context, constant filters and elapsed phases."""
    host.administrative = manifest.administrative
    for name, value in manifest.filters.items():
        host.add_filter(name, _constant_filter(value))
    for phase in manifest.elapsed:
        host.mark_elapsed(phase)


def apply_manifest(manifest: Manifest, registry: ScriptRegistry) -> List[Script]:
    """Register one factory per manifest script and construct them in order."""
    scripts: List[Script] = []
    for entry in manifest.scripts:
        args = entry.to_args(registry.host)
        registry.register(entry.handle, _factory(registry, args))
        scripts.append(registry.get(entry.handle))
    logger.debug("Applied manifest %s (%d scripts)", manifest.path, len(scripts))
    return scripts


def _factory(registry: ScriptRegistry, args: Mapping[str, Any]) -> Callable[[], Script]:
    return lambda: registry.build(args)


__all__ = [
    "Manifest",
    "ManifestScript",
    "apply_manifest",
    "conditional_for",
    "load_manifest",
    "prepare_host",
]
