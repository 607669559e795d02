"""Phase binding, conditional evaluation and activation for scripts."""
from .binder import LifecycleBinder, bind_or_run_now
from .conditions import ConditionalEvaluator, ConditionalSubject
from .pipeline import ActivationPipeline, call_host

__all__ = [
    "ActivationPipeline",
    "ConditionalEvaluator",
    "ConditionalSubject",
    "LifecycleBinder",
    "bind_or_run_now",
    "call_host",
]
