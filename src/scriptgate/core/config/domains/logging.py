"""Domain-specific configuration for scriptgate logging and audit events.

This config controls:
- The stdlib logging level and optional log file
- Whether structured audit events are appended to a JSONL file, and where
"""

from __future__ import annotations

from functools import cached_property
from pathlib import Path
from typing import Optional

from ..base import BaseDomainConfig


class LoggingConfig(BaseDomainConfig):
    def _config_section(self) -> str:
        return "logging"

    @cached_property
    def level(self) -> str:
        return str(self.section.get("level") or "INFO").upper()

    @cached_property
    def log_file(self) -> Optional[Path]:
        raw = self.section.get("file")
        if not raw:
            return None
        path = Path(str(raw)).expanduser()
        return path if path.is_absolute() else self.repo_root / path

    @cached_property
    def audit_enabled(self) -> bool:
        audit = self.section.get("audit") or {}
        return bool(audit.get("enabled", False))

    @cached_property
    def audit_path(self) -> Path:
        audit = self.section.get("audit") or {}
        raw = str(audit.get("path") or ".scriptgate/logs/audit.jsonl")
        path = Path(raw).expanduser()
        return path if path.is_absolute() else self.repo_root / path


__all__ = ["LoggingConfig"]
