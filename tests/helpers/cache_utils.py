"""Cache utilities for test isolation."""
from __future__ import annotations


def reset_scriptgate_caches() -> None:
    """Reset module-level caches and the installed logging handler."""
    from scriptgate.core.audit import reset_stdlib_logging_for_tests
    from scriptgate.core.config.cache import clear_all_caches

    clear_all_caches()
    reset_stdlib_logging_for_tests()


__all__ = ["reset_scriptgate_caches"]
