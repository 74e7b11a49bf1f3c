"""
Uno API module for unofsm.

This module provides the host-binding surface for the Uno state machine:
a game object whose methods take raw identifiers (player index, color tag,
card number) and return JSON strings that a host can display or forward.
"""

import json
from typing import Any, Dict, Optional, Union

from unofsm.adapters import PlatformAdapter
from unofsm.api.base import GameAPI
from unofsm.common.card import Color
from unofsm.common.random_source import RandomSource
from unofsm.engine.uno import UnoEngine
from unofsm.state.machine import Result
from unofsm.uno.state import GameState, UnoEvent


def format_result(result: Result) -> str:
    """
    Serialize a state machine result as JSON.

    Successful results look like ``{"ok": true, "output": null}`` or
    ``{"ok": true, "output": {"card": {"color": "Red", "number": 3}}}``;
    rejections look like ``{"ok": false, "error": "IncorrectCard"}``.
    """
    if result.is_err:
        return json.dumps({"ok": False, "error": result.error.label})
    output = result.value.to_dict() if result.value is not None else None
    return json.dumps({"ok": True, "output": output})


def format_state(state: GameState) -> str:
    """Serialize a game state as JSON."""
    return json.dumps(state.to_dict())


class UnoGame(GameAPI):
    """
    Host-facing API for Uno games.

    The engine is created immediately, so the string methods can be called
    right after construction without running the async lifecycle.

    Example:
        ```python
        game = UnoGame.new()
        game.discard(0, Color.BLUE, 7)   # '{"ok": true, "output": null}'
        game.no_card(1)                  # '{"ok": true, "output": null}'
        game.draw(1)                     # '{"ok": true, "output": {"card": {...}}}'
        game.draw(2)                     # '{"ok": false, "error": "IncorrectPlayer"}'
        game.current_state()
        ```
    """

    def __init__(
        self,
        adapter: Optional[PlatformAdapter] = None,
        config: Optional[Dict[str, Any]] = None,
        random_source: Optional[RandomSource] = None,
    ):
        """
        Initialize a new Uno game.

        Args:
            adapter: Platform adapter to use for rendering and input
            config: Configuration options for the game
            random_source: Optional source of randomness for draws
        """
        super().__init__(adapter, config)
        self.engine = UnoEngine(self.adapter, self.config, random_source)
        self.config = self.engine.config

    @classmethod
    def new(cls, config: Optional[Dict[str, Any]] = None) -> "UnoGame":
        """Create a game with the default (or given) configuration."""
        return cls(config=config)

    async def initialize(self) -> None:
        """
        Initialize the engine and its adapter.
        """
        await self.engine.initialize()

    async def shutdown(self) -> None:
        """
        Shut down the game and clean up resources.
        """
        self.remove_handlers()
        await self.engine.shutdown()

    async def get_state(self) -> GameState:
        """
        Get the current game state.

        Returns:
            Current GameState object
        """
        return self.engine.state

    async def play(self, event: UnoEvent) -> str:
        """
        Submit an event through the engine and return the serialized result.

        Args:
            event: The player event

        Returns:
            JSON result string
        """
        return format_result(await self.engine.play_event(event))

    def discard(self, player: int, color: Union[int, str, Color], number: int) -> str:
        """
        Discard a card for ``player``.

        Args:
            player: Player index
            color: Color tag (0-3), name, or Color
            number: Card number (1-9)

        Returns:
            JSON result string
        """
        return format_result(self.engine.discard(player, color, number))

    def no_card(self, player: int) -> str:
        """
        Signal that ``player`` has nothing to play.

        Returns:
            JSON result string
        """
        return format_result(self.engine.no_card(player))

    def draw(self, player: int) -> str:
        """
        Draw a card for ``player``.

        Returns:
            JSON result string, with the drawn card on success
        """
        return format_result(self.engine.draw(player))

    def current_state(self) -> str:
        """
        Get the current state as JSON.
        """
        return format_state(self.engine.state)
