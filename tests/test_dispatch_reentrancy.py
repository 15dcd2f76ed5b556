from typing import List

import pytest

from event_target import ListenerRegistry


@pytest.fixture()
def registry() -> ListenerRegistry:
    return ListenerRegistry()


def test_listener_added_during_dispatch_waits_for_next_dispatch(registry: ListenerRegistry):
    calls: List[str] = []

    def late():
        calls.append("late")

    def adder():
        calls.append("adder")
        registry.add_listener("evt", late)

    registry.add_listener("evt", adder)

    registry.dispatch("evt")
    assert calls == ["adder"]

    registry.dispatch("evt")
    assert calls == ["adder", "adder", "late"]


def test_listener_removed_during_dispatch_still_runs_this_time(registry: ListenerRegistry):
    calls: List[str] = []

    def victim():
        calls.append("victim")

    def remover():
        calls.append("remover")
        registry.remove_listener("evt", victim)

    registry.add_listener("evt", remover)
    registry.add_listener("evt", victim)

    registry.dispatch("evt")
    assert calls == ["remover", "victim"]

    registry.dispatch("evt")
    assert calls == ["remover", "victim", "remover"]


def test_listener_removing_itself_empties_entry(registry: ListenerRegistry):
    calls: List[str] = []

    def once():
        calls.append("once")
        registry.remove_listener("evt", once)

    registry.add_listener("evt", once)
    registry.dispatch("evt")
    registry.dispatch("evt")

    assert calls == ["once"]
    assert "evt" not in registry


def test_clear_during_dispatch_does_not_stop_snapshot(registry: ListenerRegistry):
    calls: List[str] = []

    registry.add_listener("evt", registry.clear)
    registry.add_listener("evt", lambda: calls.append("after-clear"))

    registry.dispatch("evt")

    assert calls == ["after-clear"]
    assert len(registry) == 0


def test_nested_dispatch_of_other_event(registry: ListenerRegistry):
    calls: List[str] = []

    registry.add_listener("outer", lambda: calls.append("outer-1"))
    registry.add_listener("outer", lambda: registry.dispatch("inner"))
    registry.add_listener("outer", lambda: calls.append("outer-2"))
    registry.add_listener("inner", lambda: calls.append("inner"))

    registry.dispatch("outer")

    assert calls == ["outer-1", "inner", "outer-2"]
