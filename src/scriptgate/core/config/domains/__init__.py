"""Domain-specific configuration accessors."""
from .lifecycle import LifecycleConfig
from .logging import LoggingConfig
from .scripts import ScriptsConfig

__all__ = ["LifecycleConfig", "LoggingConfig", "ScriptsConfig"]
