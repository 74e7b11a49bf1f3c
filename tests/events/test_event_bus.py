"""
Tests for the event system.

This module contains tests for the EventEmitter and EventBus classes
to ensure they provide the expected behavior for event handling.
"""

import logging
import threading
import time

import pytest
from unittest.mock import MagicMock

from unofsm.events import EventEmitter, EventBus, EngineEventType, event_name


def test_on_with_string_event_type():
    """Test subscribing to an event with a string event type."""
    emitter = EventEmitter()
    callback = MagicMock()

    unsubscribe = emitter.on("CARD_DRAWN", callback)
    emitter.emit("CARD_DRAWN", {"card": "Red 3"})
    callback.assert_called_once_with({"card": "Red 3"})

    # Unsubscribe and emit again
    unsubscribe()
    emitter.emit("CARD_DRAWN", {"card": "Red 4"})
    assert callback.call_count == 1


def test_enum_and_names_are_interchangeable():
    emitter = EventEmitter()
    callback = MagicMock()

    emitter.on("card_discarded", callback)
    emitter.emit(EngineEventType.CARD_DISCARDED, {"card": "Blue 7"})
    emitter.emit("CARD_DISCARDED", {"card": "Blue 8"})

    assert callback.call_count == 2


def test_unknown_event_type_is_rejected():
    emitter = EventEmitter()

    with pytest.raises(ValueError):
        emitter.on("ROUND_STARTED", MagicMock())
    with pytest.raises(ValueError):
        emitter.emit("custom", {})
    with pytest.raises(ValueError):
        event_name(42)


def test_handlers_run_in_subscription_order():
    emitter = EventEmitter()
    calls = []

    emitter.on(EngineEventType.TURN_CHANGED, lambda d: calls.append("first"))
    emitter.on(EngineEventType.TURN_CHANGED, lambda d: calls.append("second"))
    emitter.on(EngineEventType.PHASE_CHANGED, lambda d: calls.append("other"))

    emitter.emit(EngineEventType.TURN_CHANGED, {"player": 1})

    assert calls == ["first", "second"]


def test_unsubscribe_twice_is_harmless():
    emitter = EventEmitter()
    callback = MagicMock()

    unsubscribe = emitter.on(EngineEventType.CARD_DRAWN, callback)
    unsubscribe()
    unsubscribe()
    emitter.emit(EngineEventType.CARD_DRAWN, {})

    callback.assert_not_called()


def test_failing_handler_is_logged(caplog):
    """A handler error is logged and the remaining handlers still run."""
    emitter = EventEmitter()
    callback = MagicMock()

    def broken(data):
        raise RuntimeError("boom")

    emitter.on(EngineEventType.EVENT_REJECTED, broken)
    emitter.on(EngineEventType.EVENT_REJECTED, callback)

    with caplog.at_level(logging.ERROR, logger="unofsm.events"):
        emitter.emit(EngineEventType.EVENT_REJECTED, {"x": 1})

    callback.assert_called_once_with({"x": 1})
    assert "boom" in caplog.text
    assert "EVENT_REJECTED" in caplog.text


def test_event_bus_singleton():
    """Test that EventBus returns the same instance."""
    assert EventBus.get_instance() is EventBus.get_instance()


def test_event_bus_singleton_thread_safe():
    instances = []

    def grab():
        time.sleep(0.01)
        instances.append(EventBus.get_instance())

    threads = [threading.Thread(target=grab) for _ in range(10)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert all(instance is instances[0] for instance in instances)
