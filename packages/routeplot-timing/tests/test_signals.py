"""Unit tests for SignalBus."""
from __future__ import annotations

import pytest

from routeplot_timing import SignalBus


def test_publish_is_queued_until_flush():
    """Handlers only run on flush."""
    bus = SignalBus()
    received = []
    bus.subscribe("play", lambda name, data: received.append((name, data)))

    bus.publish("play", current_time=0.0)
    assert received == []
    assert bus.pending == 1

    bus.flush()
    assert received == [("play", {"current_time": 0.0})]
    assert bus.pending == 0


def test_publish_without_subscribers():
    bus = SignalBus()
    bus.publish("stop")
    bus.flush()


def test_handlers_run_in_registration_order():
    bus = SignalBus()
    order = []
    bus.subscribe("seek", lambda name, data: order.append("a"))
    bus.subscribe("seek", lambda name, data: order.append("b"))
    bus.publish("seek", progress=0.5)
    bus.flush()
    assert order == ["a", "b"]


def test_wildcard_receives_every_signal():
    """A "*" subscriber sees all signal names, after named handlers."""
    bus = SignalBus()
    order = []
    bus.subscribe("*", lambda name, data: order.append(("any", name)))
    bus.subscribe("pause", lambda name, data: order.append(("pause", name)))

    bus.publish("pause")
    bus.publish("complete")
    bus.flush()

    assert order == [("pause", "pause"), ("any", "pause"), ("any", "complete")]


def test_unsubscribe():
    bus = SignalBus()
    received = []

    def handler(name, data):
        received.append(name)

    bus.subscribe("play", handler)
    bus.unsubscribe("play", handler)
    bus.unsubscribe("play", handler)
    bus.unsubscribe("never", handler)
    bus.publish("play")
    bus.flush()
    assert received == []


def test_publish_during_flush_waits_for_next_flush():
    bus = SignalBus()
    received = []

    def chain(name, data):
        received.append(name)
        bus.publish("second")

    bus.subscribe("first", chain)
    bus.subscribe("second", lambda name, data: received.append(name))
    bus.publish("first")
    bus.flush()
    assert received == ["first"]
    bus.flush()
    assert received == ["first", "second"]


def test_clear_drops_queue():
    bus = SignalBus()
    received = []
    bus.subscribe("play", lambda name, data: received.append(name))
    bus.publish("play")
    bus.clear()
    bus.flush()
    assert received == []


def test_handler_errors_propagate():
    bus = SignalBus()

    def broken(name, data):
        raise RuntimeError("boom")

    bus.subscribe("play", broken)
    bus.publish("play")
    with pytest.raises(RuntimeError):
        bus.flush()
