"""Logging and structured audit events."""
from .logger import audit_event
from .stdlib_logging import configure_stdlib_logging, reset_stdlib_logging_for_tests

__all__ = ["audit_event", "configure_stdlib_logging", "reset_stdlib_logging_for_tests"]
