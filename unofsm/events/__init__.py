"""
Event system for the unofsm engine.

This package provides the event bus that engine drivers publish game activity
on.
"""

from unofsm.events.emitter import (
    EventEmitter,
    EventBus,
    EngineEventType,
    event_name,
)

__all__ = ["EventEmitter", "EventBus", "EngineEventType", "event_name"]
