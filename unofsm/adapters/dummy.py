"""
Dummy adapter for the unofsm engine, used for testing and simulation.

This module provides a non-interactive adapter that can be used for automated
testing and simulations where no user interaction is needed.
"""

from typing import Callable, List, Dict, Any, Optional, Union
from enum import Enum

from unofsm.adapters.base import PlatformAdapter
from unofsm.uno.state import EventKind, UnoEvent


class DummyAdapter(PlatformAdapter):
    """
    Dummy adapter for testing and simulation.

    This adapter doesn't interact with any real platform. It replays a
    scripted list of events and records everything the engine sends it.
    """

    def __init__(
        self,
        scripted_events: Optional[List[UnoEvent]] = None,
        strategy_function: Optional[
            Callable[[int, List[EventKind]], Optional[UnoEvent]]
        ] = None,
        verbose: bool = False,
    ):
        """
        Initialize the dummy adapter.

        Args:
            scripted_events: Events to hand out in order, whoever is asked
            strategy_function: Optional function that takes (player, valid_kinds)
                               and returns an event once the script runs out
            verbose: Whether to print events to stdout (useful for debugging)
        """
        self.scripted_events = list(scripted_events or [])
        self.strategy_function = strategy_function
        self.verbose = verbose

        # Track events for later inspection
        self.events = []

        # Track rendered states for testing
        self.rendered_states = []

        # Track which players were asked for an event
        self.requests = []

    async def render_game_state(self, state: Dict[str, Any]) -> None:
        """
        Store the game state for later inspection.

        Args:
            state: The current game state
        """
        self.rendered_states.append(state)

        if self.verbose:
            print(
                f"Top: {state.get('top_card')} | Phase: {state.get('phase')} | "
                f"Turn: {state.get('turn_holder')}"
            )

    async def request_player_event(
        self,
        player: int,
        valid_kinds: List[EventKind],
        timeout_seconds: Optional[float] = None,
    ) -> Optional[UnoEvent]:
        """
        Return the next scripted event, or ask the strategy function.

        Args:
            player: Index of the player whose turn it is
            valid_kinds: Event kinds the current phase accepts
            timeout_seconds: Optional timeout (ignored in this adapter)

        Returns:
            The next event, or None once there is nothing left to play
        """
        self.requests.append((player, list(valid_kinds)))

        if self.scripted_events:
            return self.scripted_events.pop(0)
        if self.strategy_function:
            return self.strategy_function(player, valid_kinds)
        return None

    async def notify_game_event(
        self, event_type: Union[str, Enum], data: Dict[str, Any]
    ) -> None:
        """
        Store the event for later inspection.

        Args:
            event_type: The type of event that occurred
            data: Data associated with the event
        """
        event_type_str = event_type.name if isinstance(event_type, Enum) else event_type

        self.events.append((event_type_str, data))

        if self.verbose:
            print(f"Event: {event_type_str}")
            for key, value in data.items():
                print(f"  {key}: {value}")

    def get_events_by_type(self, event_type: Union[str, Enum]) -> List[Dict[str, Any]]:
        """
        Get all events of a specific type.

        Args:
            event_type: The type of events to retrieve

        Returns:
            A list of event data dictionaries
        """
        event_type_str = event_type.name if isinstance(event_type, Enum) else event_type
        return [data for typ, data in self.events if typ == event_type_str]

    def clear(self) -> None:
        """Clear all stored events and states."""
        self.events.clear()
        self.rendered_states.clear()
        self.requests.clear()
