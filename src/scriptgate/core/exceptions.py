from __future__ import annotations

from typing import Any, Dict, Mapping


class ScriptGateError(Exception):
    """Base exception for scriptgate."""

    context: Dict[str, Any]

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        self.context = dict(context) if context is not None else {}

    def to_json_error(self) -> Dict[str, Any]:
        """Return a JSON-serializable error payload."""
        return {
            "message": str(self),
            "code": self.__class__.__name__,
            "context": self.context,
        }


class ConfigurationError(ScriptGateError, ValueError):
    """Raised when a script descriptor or configuration is missing required values."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        ScriptGateError.__init__(self, message, context=context)
        ValueError.__init__(self, message)


class EvaluationError(ScriptGateError):
    """Raised when a conditional predicate fails while deciding activation."""

    def __init__(
        self,
        message: str,
        *,
        handle: str | None = None,
        source: str | None = None,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        ctx = dict(context or {})
        if handle:
            ctx["handle"] = handle
        if source:
            ctx["source"] = source
        super().__init__(message, context=ctx)


class HostIntegrationError(ScriptGateError, RuntimeError):
    """Raised when a host collaborator call (register/activate/attach) fails."""

    def __init__(
        self,
        message: str,
        *,
        handle: str | None = None,
        operation: str | None = None,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        ctx = dict(context or {})
        if handle:
            ctx["handle"] = handle
        if operation:
            ctx["operation"] = operation
        ScriptGateError.__init__(self, message, context=ctx)
        RuntimeError.__init__(self, message)


__all__ = [
    "ScriptGateError",
    "ConfigurationError",
    "EvaluationError",
    "HostIntegrationError",
]
