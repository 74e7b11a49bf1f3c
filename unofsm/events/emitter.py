"""
Event system for the unofsm engine.

This module provides the event bus that engine drivers publish game
activity on. Adapters, bindings and tests subscribe to it to follow a game
without reaching into the state machine.

The bus is shared by every engine in the process, so each payload carries
the ``game_id`` of the game it came from.
"""

from collections import defaultdict
from typing import Any, Callable, Dict, List, Union
import threading
import logging
from enum import Enum

# Create a logger for the event system
logger = logging.getLogger("unofsm.events")


class EngineEventType(Enum):
    """
    Event types published by unofsm engines.

    These event types cover the game flow and provide hooks for platform
    adapters to respond to game state changes.
    """

    # Core lifecycle events
    ENGINE_INIT = "engine_init"
    ENGINE_SHUTDOWN = "engine_shutdown"

    # Game lifecycle
    GAME_CREATED = "game_created"
    GAME_STARTED = "game_started"

    # Player events
    PLAYER_ACTION = "player_action"
    PLAYER_DECISION_NEEDED = "player_decision_needed"
    EVENT_REJECTED = "event_rejected"

    # Card events
    CARD_DISCARDED = "card_discarded"
    CARD_DRAWN = "card_drawn"

    # Turn events
    TURN_CHANGED = "turn_changed"
    PHASE_CHANGED = "phase_changed"


def event_name(event_type: Union[str, EngineEventType]) -> str:
    """
    Normalize an event type to its ``EngineEventType`` member name.

    Strings are matched case-insensitively against member names, so
    ``"card_drawn"`` and ``EngineEventType.CARD_DRAWN`` are the same event.

    Raises:
        ValueError: If the event type is not an engine event
    """
    if isinstance(event_type, EngineEventType):
        return event_type.name
    try:
        return EngineEventType[event_type.upper()].name
    except (KeyError, AttributeError):
        raise ValueError(f"Unknown event type: {event_type!r}") from None


class EventEmitter:
    """
    Event emitter for the unofsm engine.

    Handlers run synchronously on the emitting thread, in the order they
    subscribed. A handler that raises is logged and the remaining handlers
    still run.
    """

    def __init__(self):
        """Initialize the event emitter."""
        self._listeners: Dict[str, List[Callable]] = defaultdict(list)
        self._listener_lock = threading.RLock()

    def on(
        self, event_type: Union[str, EngineEventType], callback: Callable
    ) -> Callable:
        """
        Subscribe to an event type.

        Args:
            event_type: The event type to subscribe to (name or enum)
            callback: Function to call when event occurs, signature: fn(event_data)

        Returns:
            Unsubscribe function that can be called to remove this subscription
        """
        name = event_name(event_type)

        with self._listener_lock:
            self._listeners[name].append(callback)

        def unsubscribe():
            with self._listener_lock:
                if callback in self._listeners[name]:
                    self._listeners[name].remove(callback)

        return unsubscribe

    def emit(
        self, event_type: Union[str, EngineEventType], data: Dict[str, Any]
    ) -> None:
        """
        Emit an event to all registered listeners.

        Args:
            event_type: The type of event to emit
            data: The data to include with the event
        """
        name = event_name(event_type)

        with self._listener_lock:
            handlers = list(self._listeners.get(name, ()))

        # Call handlers outside of the lock to avoid deadlocks
        for callback in handlers:
            try:
                callback(data)
            except Exception:
                logger.exception("Error in event handler for %s", name)


class EventBus:
    """
    Global event bus for the application.

    This singleton class provides a centralized event bus that can be accessed
    from anywhere in the application.
    """

    _instance = None
    _lock = threading.Lock()

    @classmethod
    def get_instance(cls) -> EventEmitter:
        """
        Get the singleton instance of the EventBus.

        Returns:
            EventEmitter instance
        """
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = EventEmitter()
        return cls._instance
