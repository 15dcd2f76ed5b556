"""Small console walkthrough of ListenerRegistry.

Registers a few listeners (one of them twice), dispatches, removes a listener
and dispatches again, printing what every listener does.
"""
from __future__ import annotations

from typing import Optional

from .registry import ListenerRegistry


def log_hello() -> None:
    print("hello")


def log_world() -> None:
    print("world")


def run_demo(registry: Optional[ListenerRegistry] = None) -> ListenerRegistry:
    target = registry if registry is not None else ListenerRegistry()

    print("--- Initial Registration and Dispatch ---")
    target.add_listener("hello", log_hello)
    target.add_listener("world", log_world)
    target.add_listener("world", lambda: print("world again!"))
    target.add_listener("hello", log_hello)  # duplicate, ignored

    target.dispatch("hello")
    target.dispatch("world")

    print("\n--- Removing Listener and Re-dispatching ---")
    target.remove_listener("hello", log_hello)

    target.dispatch("hello")  # no listeners left
    target.dispatch("world")
    return target
