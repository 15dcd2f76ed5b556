from __future__ import annotations

import logging
from enum import Enum
from threading import RLock
from types import MethodType
from typing import Callable, Dict, Hashable, Optional, Tuple

logger = logging.getLogger(__name__)

Listener = Callable[[], object]


class ErrorPolicy(str, Enum):
    """What dispatch does when a listener raises."""

    ISOLATE = "isolate"
    PROPAGATE = "propagate"


class ListenerRegistry:
    """In-process registry of named-event listeners.

    Listeners are plain callables taking no arguments. Each event name maps to
    an insertion-ordered set of distinct handles, compared by identity rather
    than by value; registering the same handle twice under one name keeps a
    single entry. A bound method counts as the same handle when it wraps the
    same function on the same instance. An event name only stays in the
    registry while it has at least one listener.

    ``dispatch`` iterates over a snapshot of the listeners, so listeners may add
    or remove listeners on the same registry while it runs. Such changes take
    effect from the next dispatch onwards.
    """

    def __init__(self, error_policy: Optional[ErrorPolicy] = None) -> None:
        # Keyed by _identity_key; a dict keeps insertion order and set semantics.
        self._listeners: Dict[str, Dict[Hashable, Listener]] = {}
        self._lock = RLock()
        self.error_policy = ErrorPolicy(error_policy or ErrorPolicy.ISOLATE)

    def add_listener(self, event_name: str, callback: Listener) -> None:
        """Register ``callback`` for ``event_name``.

        Args:
            event_name: Any string, the empty string included.
            callback: Callable invoked with no arguments on dispatch.

        Raises:
            TypeError: If ``callback`` is not callable.
        """
        if not callable(callback):
            raise TypeError("callback must be callable")
        with self._lock:
            key = _identity_key(callback)
            callbacks = self._listeners.setdefault(event_name, {})
            if key in callbacks:
                logger.debug("Listener %s already registered for '%s'", _name_of(callback), event_name)
                return
            callbacks[key] = callback
            logger.debug("Added listener %s for '%s'", _name_of(callback), event_name)

    def remove_listener(self, event_name: str, callback: Listener) -> None:
        """Remove ``callback`` from ``event_name``. Silently ignores unknown pairs."""
        with self._lock:
            callbacks = self._listeners.get(event_name)
            if callbacks is None:
                return
            if callbacks.pop(_identity_key(callback), None) is not None:
                logger.debug("Removed listener %s from '%s'", _name_of(callback), event_name)
            if not callbacks:
                del self._listeners[event_name]

    def dispatch(self, event_name: str) -> None:
        """Invoke every listener registered for ``event_name`` when the call starts.

        With ``ErrorPolicy.ISOLATE`` a failing listener is logged and the
        remaining ones still run. With ``ErrorPolicy.PROPAGATE`` the first
        failure stops the dispatch and is re-raised to the caller.
        """
        with self._lock:
            callbacks = self._listeners.get(event_name)
            if not callbacks:
                return
            snapshot: Tuple[Listener, ...] = tuple(callbacks.values())
        logger.debug("Dispatching '%s' to %d listeners", event_name, len(snapshot))
        for callback in snapshot:
            try:
                callback()
            except Exception:
                if self.error_policy is ErrorPolicy.PROPAGATE:
                    logger.debug("Listener %s failed for '%s'; aborting dispatch", _name_of(callback), event_name)
                    raise
                logger.exception("Error in listener %s for '%s'", _name_of(callback), event_name)

    def has_listeners(self, event_name: str) -> bool:
        with self._lock:
            return event_name in self._listeners

    def listener_count(self, event_name: str) -> int:
        with self._lock:
            return len(self._listeners.get(event_name, ()))

    def event_names(self) -> Tuple[str, ...]:
        """Names that currently have at least one listener, in first-registration order."""
        with self._lock:
            return tuple(self._listeners)

    def clear(self) -> None:
        """Remove all listeners for all events (useful in tests)."""
        with self._lock:
            self._listeners.clear()

    def __contains__(self, event_name: object) -> bool:
        with self._lock:
            return event_name in self._listeners

    def __len__(self) -> int:
        with self._lock:
            return len(self._listeners)

    def __repr__(self) -> str:
        return f"ListenerRegistry(events={len(self)}, error_policy={self.error_policy.value!r})"


def _identity_key(callback: Listener) -> Hashable:
    # Registered handles are kept alive by the registry, so their ids stay unique.
    if isinstance(callback, MethodType):
        return (id(callback.__self__), id(callback.__func__))
    return id(callback)


def _name_of(callback: Listener) -> str:
    return getattr(callback, "__qualname__", None) or getattr(callback, "__name__", None) or repr(callback)
