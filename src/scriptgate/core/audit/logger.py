from __future__ import annotations

import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from scriptgate.core.audit.jsonl import append_jsonl
from scriptgate.core.exceptions import ScriptGateError


def _best_effort_repo_root(repo_root: Path | None) -> Path | None:
    if repo_root is not None:
        return repo_root.expanduser().resolve()
    try:
        from scriptgate.core.utils.paths import resolve_project_root

        return resolve_project_root()
    except ScriptGateError:
        return None


def audit_event(event: str, *, repo_root: Path | None = None, **fields: Any) -> None:
    """Emit a single structured audit event as JSONL (fail-open).

    This is separate from stdlib `logging` so the audit trail stays
    machine-readable regardless of log formatting.
    """
    root = _best_effort_repo_root(repo_root)
    if root is None:
        return

    from scriptgate.core.config.domains import LoggingConfig

    try:
        cfg = LoggingConfig(repo_root=root)
        if not cfg.audit_enabled:
            return
        path = cfg.audit_path
    except Exception:
        # Fail open: audit must never break activation.
        return

    payload: dict[str, Any] = {
        "ts": datetime.now(timezone.utc).replace(microsecond=0).isoformat(),
        "event": event,
        "pid": os.getpid(),
    }
    payload.update(fields)
    append_jsonl(path=path, payload=payload)


__all__ = ["audit_event"]
