"""
Base engine class for the unofsm framework.

This module provides the abstract base class for game engines. An engine owns
one live game, drives it through its state machine and keeps a platform
adapter informed.
"""

from abc import ABC, abstractmethod
from typing import Dict, Any, Optional

from unofsm.adapters import PlatformAdapter
from unofsm.events import EventBus
from unofsm.state.machine import Result, StateMachine


class GameEngine(ABC):
    """
    Abstract base class for all game engines.

    This class defines the common interface that all game engines must implement,
    providing methods for starting games, submitting player events, and
    rendering the game state.
    """

    def __init__(self, adapter: PlatformAdapter, config: Dict[str, Any] = None):
        """
        Initialize the engine.

        Args:
            adapter: Platform adapter to use for rendering and input
            config: Configuration options for the game
        """
        self.adapter = adapter
        self.config = config or {}
        self.event_bus = EventBus.get_instance()
        self.machine: Optional[StateMachine] = None

    @property
    def state(self):
        """The current game state, or None before a machine exists."""
        return self.machine.state if self.machine is not None else None

    @abstractmethod
    async def initialize(self) -> None:
        """
        Initialize the engine and prepare for a game.
        """
        await self.adapter.initialize()

    @abstractmethod
    async def shutdown(self) -> None:
        """
        Shut down the engine and clean up resources.
        """
        await self.adapter.shutdown()

    @abstractmethod
    async def start_game(self) -> None:
        """
        Start a new game.
        """
        pass

    @abstractmethod
    def submit_event(self, event: Any, strict: bool = False) -> Result:
        """
        Run one event through the state machine.

        Args:
            event: The player event
            strict: Raise instead of returning an error result

        Returns:
            The state machine's result
        """
        pass

    @abstractmethod
    async def render_state(self) -> None:
        """
        Render the current game state.
        """
        pass
