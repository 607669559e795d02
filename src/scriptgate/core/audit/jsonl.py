"""Append-only JSONL writer for audit events."""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Mapping

from scriptgate.core.utils.io import ensure_directory


def _to_jsonable(value: Any) -> Any:
    if isinstance(value, Path):
        return str(value)
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    if isinstance(value, Mapping):
        return {str(k): _to_jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [_to_jsonable(v) for v in value]
    return value


def append_jsonl(*, path: Path, payload: dict[str, Any]) -> None:
    """Append ``payload`` as one JSON line and fsync it.

    Write failures are dropped: the audit trail must not break activation.
    """
    try:
        line = json.dumps(_to_jsonable(payload), ensure_ascii=False, default=str) + "\n"
        ensure_directory(path.parent)
        with path.open("a", encoding="utf-8") as fh:
            fh.write(line)
            fh.flush()
            os.fsync(fh.fileno())
    except (OSError, ValueError):
        return


__all__ = ["append_jsonl"]
