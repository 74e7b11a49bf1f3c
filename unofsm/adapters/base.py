"""
Base adapter interface for the unofsm engine.

This module defines the interface that platform-specific adapters must implement
to interact with the unofsm engine.
"""

from abc import ABC, abstractmethod
from typing import List, Dict, Any, Optional, Union
from enum import Enum

from unofsm.uno.state import EventKind, UnoEvent


class PlatformAdapter(ABC):
    """
    Base interface for platform-specific adapters.

    This abstract class defines the methods that platform-specific adapters
    must implement to interact with the unofsm engine. These methods handle
    rendering the game state, requesting player events, and notifying of
    game events.

    Implementations of this interface bridge the gap between the platform-agnostic
    game engine and specific platforms like the console or a test harness.
    """

    @abstractmethod
    async def render_game_state(self, state: Dict[str, Any]) -> None:
        """
        Render the current game state to the platform.

        Args:
            state: The current game state (top card, phase, turn holder, players)
        """
        pass

    @abstractmethod
    async def request_player_event(
        self,
        player: int,
        valid_kinds: List[EventKind],
        timeout_seconds: Optional[float] = None,
    ) -> Optional[UnoEvent]:
        """
        Request the next event from a player.

        Args:
            player: Index of the player whose turn it is
            valid_kinds: Event kinds the current phase accepts
            timeout_seconds: Optional timeout for the player's decision

        Returns:
            The player's event, or None if the player wants to stop playing

        Raises:
            TimeoutError: If the player doesn't respond within the timeout period
        """
        pass

    @abstractmethod
    async def notify_game_event(
        self, event_type: Union[str, Enum], data: Dict[str, Any]
    ) -> None:
        """
        Notify the platform of a game event.

        Args:
            event_type: The type of event that occurred
            data: Data associated with the event
        """
        pass

    # The following methods have default implementations but can be overridden

    async def initialize(self) -> None:
        """
        Initialize the adapter.

        This method is called when the adapter is first connected to the engine.
        """
        pass

    async def shutdown(self) -> None:
        """
        Shutdown the adapter.

        This method is called when the engine is shutting down.
        """
        pass
