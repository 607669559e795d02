from __future__ import annotations

import logging
import sys
from pathlib import Path

from scriptgate.core.utils.io import ensure_directory

_CONFIGURED_TARGET: str | None = None
_SCRIPTGATE_HANDLER: logging.Handler | None = None

_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _level_from_name(name: str) -> int:
    level = logging.getLevelName(str(name).upper())
    return level if isinstance(level, int) else logging.INFO


def configure_stdlib_logging(*, log_path: Path | None = None, level: str = "INFO") -> None:
    """Configure Python stdlib logging for scriptgate.

    Writes to `log_path` when given, otherwise to stderr. Idempotent
    per-process: if already configured for the same target, only the level
    is updated.
    """
    global _CONFIGURED_TARGET, _SCRIPTGATE_HANDLER

    target = str(Path(log_path).resolve()) if log_path is not None else "<stderr>"
    root = logging.getLogger()
    root.setLevel(_level_from_name(level))

    if _CONFIGURED_TARGET == target and _SCRIPTGATE_HANDLER is not None:
        _SCRIPTGATE_HANDLER.setLevel(_level_from_name(level))
        return

    # Replace the scriptgate-installed handler when switching targets.
    if _SCRIPTGATE_HANDLER is not None:
        root.removeHandler(_SCRIPTGATE_HANDLER)
        _SCRIPTGATE_HANDLER.close()
        _SCRIPTGATE_HANDLER = None

    handler: logging.Handler
    if log_path is not None:
        ensure_directory(Path(target).parent)
        handler = logging.FileHandler(target, encoding="utf-8")
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(_level_from_name(level))
    handler.setFormatter(logging.Formatter(_FORMAT))
    root.addHandler(handler)

    _SCRIPTGATE_HANDLER = handler
    _CONFIGURED_TARGET = target


def reset_stdlib_logging_for_tests() -> None:
    """Test-only: remove the scriptgate-installed handler."""
    global _CONFIGURED_TARGET, _SCRIPTGATE_HANDLER
    if _SCRIPTGATE_HANDLER is not None:
        logging.getLogger().removeHandler(_SCRIPTGATE_HANDLER)
        _SCRIPTGATE_HANDLER.close()
    _CONFIGURED_TARGET = None
    _SCRIPTGATE_HANDLER = None


__all__ = ["configure_stdlib_logging", "reset_stdlib_logging_for_tests"]
