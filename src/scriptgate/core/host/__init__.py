"""Host integration: the collaborator protocol and the in-memory host."""
from .hooks import HookCallback, HookRegistry
from .memory import DEFAULT_PHASES, DispatchFailure, HostCall, InMemoryHost, RegisteredScript
from .protocol import Host, PhaseCallback

__all__ = [
    "Host",
    "PhaseCallback",
    "HookCallback",
    "HookRegistry",
    "DEFAULT_PHASES",
    "DispatchFailure",
    "HostCall",
    "InMemoryHost",
    "RegisteredScript",
]
