"""
In-process named-event listener registry.

- ListenerRegistry: add, remove and synchronously dispatch listeners by name
- ErrorPolicy: isolate or propagate listener failures during dispatch
- Settings: YAML/env configuration used by the demo CLI
"""
from .errors import EventTargetError, SettingsError
from .registry import ErrorPolicy, Listener, ListenerRegistry

__version__ = "0.1.0"

__all__ = [
    "ErrorPolicy",
    "EventTargetError",
    "Listener",
    "ListenerRegistry",
    "SettingsError",
    "__version__",
]
