"""Activation pipeline.

Runs the activation side effects for one script in a fixed order:
check the conditional, activate, attach inline code (once per instance),
attach localized data (every run; the host overwrites).
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any, Callable, Optional

from scriptgate.core.audit import audit_event
from scriptgate.core.exceptions import HostIntegrationError
from scriptgate.core.host.protocol import Host

from .conditions import ConditionalEvaluator

if TYPE_CHECKING:
    from scriptgate.core.scripts.script import Script

logger = logging.getLogger(__name__)


def call_host(operation: str, handle: str, fn: Callable[..., Any], *args: Any) -> Any:
    """Invoke a host collaborator, wrapping any failure in HostIntegrationError.

    Failures are propagated once; nothing is retried.
    """
    try:
        return fn(*args)
    except HostIntegrationError:
        raise
    except Exception as exc:
        raise HostIntegrationError(
            f"Host failed to {operation} script '{handle}': {exc}",
            handle=handle,
            operation=operation,
        ) from exc


class ActivationPipeline:
    def __init__(
        self,
        host: Host,
        evaluator: ConditionalEvaluator,
        *,
        repo_root: Optional[Path] = None,
    ) -> None:
        self.host = host
        self.evaluator = evaluator
        self.repo_root = repo_root

    def run(self, script: "Script") -> bool:
        """Activate ``script`` if its conditional allows it.

        Returns:
            True if the script was activated, False if the conditional declined.
        """
        handle = script.handle
        if not self.evaluator.should_activate(script):
            logger.debug("Conditional declined activation of %s", handle)
            audit_event("script.skipped", repo_root=self.repo_root, handle=handle)
            return False

        call_host("activate", handle, self.host.activate_resource, handle)

        inline_attached = False
        if script.inline and not script.inline_attached:
            call_host("attach inline code to", handle, self.host.attach_inline, handle, script.inline)
            script.mark_inline_attached()
            inline_attached = True

        localization = script.localization
        localized = bool(localization.name and localization.data)
        if localized:
            call_host(
                "localize",
                handle,
                self.host.attach_localized_data,
                handle,
                localization.name,
                dict(localization.data),
            )

        logger.info("Activated script %s", handle)
        audit_event(
            "script.activated",
            repo_root=self.repo_root,
            handle=handle,
            inline=inline_attached,
            localized=localization.name if localized else None,
        )
        return True


__all__ = ["ActivationPipeline", "call_host"]
