"""
Command-line interface adapter for the unofsm engine.

This module provides an adapter for console-based interactions with the
unofsm engine. Players type commands such as ``discard red 5``, ``nocard``
or ``draw``.
"""

import asyncio
import logging
from typing import List, Dict, Any, Optional, Union
from enum import Enum

from unofsm.adapters.base import PlatformAdapter
from unofsm.common.card import Card
from unofsm.common.io_interface import (
    AsyncIOInterfaceWrapper,
    ConsoleIOInterface,
    IOInterface,
)
from unofsm.uno.state import EventKind, UnoEvent

logger = logging.getLogger(__name__)

# Command words accepted for each event kind
COMMANDS = {
    "discard": EventKind.DISCARD,
    "d": EventKind.DISCARD,
    "nocard": EventKind.NO_CARD,
    "no_card": EventKind.NO_CARD,
    "pass": EventKind.NO_CARD,
    "n": EventKind.NO_CARD,
    "draw": EventKind.DRAW,
    "r": EventKind.DRAW,
}

QUIT_COMMANDS = ("quit", "exit", "q")

USAGE = {
    EventKind.DISCARD: "discard <color> <number>",
    EventKind.NO_CARD: "nocard",
    EventKind.DRAW: "draw",
}


def parse_command(player: int, text: str) -> Optional[UnoEvent]:
    """
    Turn a line of user input into an event for ``player``.

    Args:
        player: Index of the player typing the command
        text: The raw command line

    Returns:
        The event, or None for a quit command

    Raises:
        ValueError: If the command is not understood
    """
    words = text.strip().lower().split()
    if not words:
        raise ValueError("Empty command")
    if words[0] in QUIT_COMMANDS:
        return None

    kind = COMMANDS.get(words[0])
    if kind is None:
        raise ValueError(f"Unknown command: {words[0]}")

    if kind == EventKind.DISCARD:
        return UnoEvent.discard(player, Card.parse(" ".join(words[1:])))
    if len(words) > 1:
        raise ValueError(f"'{words[0]}' takes no arguments")
    if kind == EventKind.NO_CARD:
        return UnoEvent.no_card(player)
    return UnoEvent.draw(player)


class CLIAdapter(PlatformAdapter):
    """
    Command-line interface adapter for the unofsm engine.

    This adapter uses the standard console for input/output, providing a
    simple text-based interface to the game.
    """

    def __init__(self, io_interface: Optional[IOInterface] = None):
        """
        Initialize the CLI adapter.

        Args:
            io_interface: Optional IOInterface to use for I/O. If None, a default
                          console IOInterface will be created.
        """
        self.io_interface = io_interface or ConsoleIOInterface()
        self._async_io: Optional[AsyncIOInterfaceWrapper] = None

    async def initialize(self) -> None:
        """Initialize the CLI adapter."""
        if self._async_io is None:
            self._async_io = AsyncIOInterfaceWrapper(self.io_interface)

    async def shutdown(self) -> None:
        """Shutdown the CLI adapter."""
        if self._async_io is not None:
            self._async_io.close()
            self._async_io = None

    async def _write(self, message: str) -> None:
        output_async = getattr(self.io_interface, "output_async", None)
        if output_async is not None:
            await output_async(message)
        else:
            self.io_interface.output(message)

    async def _read(self, prompt: str) -> str:
        if self._async_io is not None:
            return await self._async_io.input(prompt)
        return self.io_interface.input(prompt)

    async def render_game_state(self, state: Dict[str, Any]) -> None:
        """
        Render the current game state to the console.

        Args:
            state: The current game state
        """
        await self._write("\n=== Current Game State ===")
        await self._write(f"Top card: {state.get('top_card')}")
        await self._write(f"Phase: {state.get('phase')}")
        for player in state.get("players", []):
            marker = " <- turn" if player.get("has_turn") else ""
            await self._write(f"Player {player.get('index')}{marker}")
        await self._write("===========================\n")

    async def request_player_event(
        self,
        player: int,
        valid_kinds: List[EventKind],
        timeout_seconds: Optional[float] = None,
    ) -> Optional[UnoEvent]:
        """
        Request an event from a player via the console.

        Invalid commands are reported and the player is asked again.

        Args:
            player: Index of the player whose turn it is
            valid_kinds: Event kinds the current phase accepts
            timeout_seconds: Optional timeout for the player's decision

        Returns:
            The player's event, or None if the player quits or input ends

        Raises:
            TimeoutError: If the player doesn't respond within the timeout period
        """
        options = ", ".join(USAGE[kind] for kind in valid_kinds)
        await self._write(f"\nPlayer {player}'s turn. Valid commands: {options}, quit")

        while True:
            try:
                if timeout_seconds:
                    line = await asyncio.wait_for(
                        self._read("> "), timeout_seconds
                    )
                else:
                    line = await self._read("> ")
            except asyncio.TimeoutError:
                raise TimeoutError(f"Player {player} timed out")
            except EOFError:
                return None

            try:
                return parse_command(player, line)
            except ValueError as e:
                logger.debug("Rejected command %r: %s", line, e)
                await self._write(f"Invalid command: {e}. Please try again.")

    async def notify_game_event(
        self, event_type: Union[str, Enum], data: Dict[str, Any]
    ) -> None:
        """
        Notify the user of a game event via the console.

        Args:
            event_type: The type of event that occurred
            data: Data associated with the event
        """
        if isinstance(event_type, Enum):
            event_type = event_type.name

        message = self._format_event_message(event_type, data)
        if message:
            await self._write(message)

    def _format_event_message(
        self, event_type: str, data: Dict[str, Any]
    ) -> Optional[str]:
        """
        Format an event message based on the event type.

        Args:
            event_type: The type of event
            data: Data associated with the event

        Returns:
            Formatted message string or None if no message needed
        """
        player = data.get("player", "?")

        if event_type == "CARD_DISCARDED":
            return f"Player {player} discards {data.get('card')}"

        elif event_type == "CARD_DRAWN":
            return f"Player {player} draws {data.get('card')}"

        elif event_type == "PHASE_CHANGED" and data.get("phase") == "AwaitingDraw":
            return f"Player {player} has no card to play and must draw"

        elif event_type == "EVENT_REJECTED":
            return f"Rejected: {data.get('error')}"

        return None
