"""Merging for layered configuration and script constructor arguments.

Config layers merge recursively. Lists in a higher layer replace the lower
one unless their first element is a marker:

- ``"+"`` appends the remaining items to the lower layer's list
- ``"="`` replaces explicitly (same as no marker)

Script args merge flat over their defaults (:func:`parse_args`).
"""
from __future__ import annotations

from typing import Any, Dict, List, Mapping

APPEND_MARKER = "+"
REPLACE_MARKER = "="


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Return ``override`` layered over ``base``; neither input is mutated.

    >>> deep_merge({"lifecycle": {"init": "a", "x": 1}}, {"lifecycle": {"init": "b"}})
    {'lifecycle': {'init': 'b', 'x': 1}}
    """
    merged: Dict[str, Any] = dict(base)
    for key, incoming in (override or {}).items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(incoming, dict):
            merged[key] = deep_merge(current, incoming)
        elif isinstance(current, list) and isinstance(incoming, list):
            merged[key] = merge_arrays(current, incoming)
        else:
            merged[key] = incoming
    return merged


def merge_arrays(base: List[Any], override: List[Any]) -> List[Any]:
    """Layer list ``override`` over ``base`` honouring the ``+``/``=`` markers.

    >>> merge_arrays(["jquery"], ["+", "lodash"])
    ['jquery', 'lodash']
    >>> merge_arrays(["jquery"], ["lodash"])
    ['lodash']
    """
    if not override:
        return base
    head, rest = override[0], override[1:]
    if head == APPEND_MARKER:
        return [*base, *rest]
    if head == REPLACE_MARKER:
        return list(rest)
    return list(override)


def parse_args(args: Mapping[str, Any] | None, defaults: Mapping[str, Any]) -> Dict[str, Any]:
    """Shallow-merge caller arguments over defaults.

    Keys explicitly set to ``None`` in ``args`` fall back to the default so
    callers can pass optional values straight through.

    >>> parse_args({"priority": None, "deps": ["a"]}, {"priority": 25, "deps": []})
    {'priority': 25, 'deps': ['a']}
    """
    merged: Dict[str, Any] = dict(defaults)
    for key, value in (args or {}).items():
        if value is None and key in merged:
            continue
        merged[key] = value
    return merged


__all__ = ["deep_merge", "merge_arrays", "parse_args"]
