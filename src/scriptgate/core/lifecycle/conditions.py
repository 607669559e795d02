"""Conditional activation resolution.

Precedence, first match wins:

1. an invocable ``conditional_override`` decides;
2. an override that is set but not invocable activates unconditionally;
3. otherwise the script's own ``conditional()`` routine decides.

The base ``conditional()`` routine is :meth:`ConditionalEvaluator.default_conditional`:
true outside administrative requests, passed through a per-script filter and
then a global filter (global wraps per-script wraps the base value).
"""
from __future__ import annotations

import logging
from typing import Any, Optional, Protocol

from scriptgate.core.config.domains import ScriptsConfig
from scriptgate.core.exceptions import EvaluationError
from scriptgate.core.host.protocol import Host

logger = logging.getLogger(__name__)

DEFAULT_RESOURCE_FILTER = "scriptgate_{handle}_conditional"
DEFAULT_GLOBAL_FILTER = "scriptgate__conditional"


class ConditionalSubject(Protocol):
    handle: str
    conditional_override: Any

    def conditional(self) -> bool:
        ...


class ConditionalEvaluator:
    """Decides whether a script should be made live for the current render."""

    def __init__(
        self,
        host: Host,
        *,
        resource_filter: str = DEFAULT_RESOURCE_FILTER,
        global_filter: str = DEFAULT_GLOBAL_FILTER,
    ) -> None:
        self.host = host
        self.resource_filter = resource_filter
        self.global_filter = global_filter

    @classmethod
    def from_config(cls, host: Host, config: Optional[ScriptsConfig] = None) -> "ConditionalEvaluator":
        config = config or ScriptsConfig()
        return cls(
            host,
            resource_filter=config.resource_conditional_filter,
            global_filter=config.global_conditional_filter,
        )

    def resource_filter_name(self, handle: str) -> str:
        return self.resource_filter.format(handle=handle)

    def default_conditional(self, handle: str) -> bool:
        """Activate outside administrative requests, subject to both filters."""
        value: Any = not self.host.is_administrative_context()
        value = self.host.apply_filter(self.resource_filter_name(handle), value)
        value = self.host.apply_filter(self.global_filter, value, handle)
        return bool(value)

    def should_activate(self, subject: ConditionalSubject) -> bool:
        override = subject.conditional_override
        if override is not None:
            if not callable(override):
                logger.debug("Non-callable conditional on %s; activating", subject.handle)
                return True
            return self._evaluate(subject.handle, "override", override)
        return self._evaluate(subject.handle, "conditional", subject.conditional)

    def _evaluate(self, handle: str, source: str, predicate: Any) -> bool:
        try:
            return bool(predicate())
        except EvaluationError:
            raise
        except Exception as exc:
            raise EvaluationError(
                f"Conditional {source} for script '{handle}' raised: {exc}",
                handle=handle,
                source=source,
            ) from exc


__all__ = [
    "ConditionalEvaluator",
    "ConditionalSubject",
    "DEFAULT_GLOBAL_FILTER",
    "DEFAULT_RESOURCE_FILTER",
]
