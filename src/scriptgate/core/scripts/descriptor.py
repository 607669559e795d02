"""Script identity and constructor-argument handling."""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Tuple

from scriptgate.core.exceptions import ConfigurationError
from scriptgate.core.utils.merge import parse_args

REQUIRED_FIELDS: Tuple[str, ...] = ("handle", "src", "file")


@dataclass(frozen=True)
class ScriptDescriptor:
    """Immutable identity and metadata of one script.

    Parameters
    ----------
    handle : str
        Unique identifier within the host's script namespace.
    src : str
        URL or path the host loads the script from.
    file : str
        Absolute path of the script file; its mtime is the version.
    version : int
        Last-modified timestamp of ``file`` (whole seconds).
    deps : tuple[str, ...]
        Handles this script requires, passed to the host verbatim.
    priority : int
        Render-phase ordering hint.
    in_footer : bool
        Placement flag passed to the host on registration.
    """

    handle: str
    src: str
    file: str
    version: int
    deps: Tuple[str, ...] = ()
    priority: int = 10
    in_footer: bool = True

    def __post_init__(self) -> None:
        if not self.handle:
            raise ConfigurationError("Script handle must be a non-empty string")


@dataclass(frozen=True)
class Localization:
    """Named data exposed to an activated script's running code."""

    name: str = ""
    data: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any] | None) -> "Localization":
        """Build from ``{"name": ..., "data": ...}`` (``object`` is accepted for data)."""
        if not raw:
            return cls()
        data = raw.get("data", raw.get("object")) or {}
        if not isinstance(data, Mapping):
            raise ConfigurationError(
                "Localization data must be a mapping",
                context={"name": raw.get("name")},
            )
        return cls(name=str(raw.get("name") or ""), data=dict(data))


def file_version(path: str) -> int:
    """Return the last-modified time of ``path`` in whole seconds.

    Raises:
        ConfigurationError: If the file cannot be stat'ed
    """
    try:
        return int(os.stat(path).st_mtime)
    except OSError as exc:
        raise ConfigurationError(
            f"Cannot derive version from script file '{path}': {exc.strerror or exc}",
            context={"file": path},
        ) from exc


def _is_absent(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def merge_script_args(args: Mapping[str, Any], defaults: Mapping[str, Any]) -> Dict[str, Any]:
    """Validate required keys in ``args``, then merge them over ``defaults``.

    Required keys are checked on the caller's args, before defaults apply.

    Raises:
        ConfigurationError: If handle, src or file is missing
    """
    missing = [key for key in REQUIRED_FIELDS if _is_absent(args.get(key))]
    if missing:
        raise ConfigurationError(
            f"Missing a required property: {', '.join(missing)} "
            f"(scripts require {', '.join(REQUIRED_FIELDS)})",
            context={"missing": missing},
        )
    return parse_args(args, defaults)


def build_descriptor(merged: Mapping[str, Any], *, fallback_priority: int = 10) -> ScriptDescriptor:
    """Build a descriptor from merged args; ``version`` comes from the file."""
    file = str(merged["file"])
    deps = merged.get("deps") or ()
    if isinstance(deps, str):
        raise ConfigurationError(
            "Script deps must be a sequence of handles, not a string",
            context={"handle": merged.get("handle")},
        )
    priority = merged.get("priority")
    return ScriptDescriptor(
        handle=str(merged["handle"]),
        src=str(merged["src"]),
        file=file,
        version=file_version(file),
        deps=tuple(str(d) for d in deps),
        priority=int(priority) if priority is not None else fallback_priority,
        in_footer=bool(merged.get("in_footer", True)),
    )


__all__ = [
    "REQUIRED_FIELDS",
    "Localization",
    "ScriptDescriptor",
    "build_descriptor",
    "file_version",
    "merge_script_args",
]
