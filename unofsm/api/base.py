"""
Base API module for unofsm.

This module provides the abstract base class for platform-agnostic game APIs
that wrap the unofsm engine components.
"""

import asyncio
from abc import ABC, abstractmethod
from typing import Dict, Any, Optional, Union, Callable, TypeVar
import threading

from unofsm.adapters import PlatformAdapter, DummyAdapter
from unofsm.engine.base import GameEngine
from unofsm.events import EventBus, EngineEventType, event_name

# Type variable for game-specific state types
T = TypeVar("T")


class GameAPI(ABC):
    """
    Abstract base class for platform-agnostic card game APIs.

    This class defines the common interface for game APIs, and provides
    utilities for running the async lifecycle from synchronous host code.

    Attributes:
        adapter: The platform adapter used for UI interaction
        engine: The underlying game engine
        config: Game configuration options
        event_bus: The event bus for event-based communication
        event_handlers: Dictionary of registered unsubscribe functions
    """

    def __init__(
        self,
        adapter: Optional[PlatformAdapter] = None,
        config: Optional[Dict[str, Any]] = None,
    ):
        """
        Initialize a new card game.

        Args:
            adapter: Platform adapter to use for rendering and input.
                    If None, a DummyAdapter is used.
            config: Configuration options for the game
        """
        self.adapter = adapter or DummyAdapter()
        self.config = config or {}
        self.event_bus = EventBus.get_instance()
        self.event_handlers = {}
        self._loop = None  # Event loop for sync wrappers
        self._async_lock = threading.Lock()

        # Engine will be initialized by concrete subclasses
        self.engine: Optional[GameEngine] = None

    @abstractmethod
    async def initialize(self) -> None:
        """
        Initialize the game and prepare for play.
        """
        await self.adapter.initialize()

    @abstractmethod
    async def shutdown(self) -> None:
        """
        Shut down the game and clean up resources.
        """
        await self.adapter.shutdown()

    @abstractmethod
    async def get_state(self) -> T:
        """
        Get the current game state.

        Returns:
            Current game state object
        """
        pass

    def on(
        self,
        event_type: Union[str, EngineEventType],
        handler: Callable,
    ) -> Callable:
        """
        Register an event handler.

        Args:
            event_type: Type of event to listen for
            handler: Event handler function

        Returns:
            Function to call to unsubscribe the handler
        """
        unsubscribe_func = self.event_bus.on(event_type, handler)

        self.event_handlers.setdefault(event_name(event_type), []).append(
            unsubscribe_func
        )

        return unsubscribe_func

    def remove_handlers(self) -> None:
        """Unsubscribe every handler registered through ``on``."""
        for unsubscribe_funcs in self.event_handlers.values():
            for unsubscribe in unsubscribe_funcs:
                unsubscribe()
        self.event_handlers.clear()

    # Synchronous API wrappers

    def initialize_sync(self) -> None:
        """
        Synchronous wrapper for initialize method.
        """
        return self._run_async(self.initialize())

    def shutdown_sync(self) -> None:
        """
        Synchronous wrapper for shutdown method.
        """
        try:
            return self._run_async(self.shutdown())
        finally:
            if self._loop is not None and not self._loop.is_closed():
                self._loop.close()

    def get_state_sync(self) -> T:
        """
        Synchronous wrapper for get_state method.
        """
        return self._run_async(self.get_state())

    def _run_async(self, coro):
        """
        Run an async coroutine from a synchronous context.

        Args:
            coro: Coroutine to run

        Returns:
            Result of the coroutine
        """
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            pass
        else:
            coro.close()
            raise RuntimeError(
                "Attempting to use synchronous method inside a running event loop. "
                "Use the async version of this method instead."
            )

        with self._async_lock:
            if self._loop is None or self._loop.is_closed():
                self._loop = asyncio.new_event_loop()

            return self._loop.run_until_complete(coro)
