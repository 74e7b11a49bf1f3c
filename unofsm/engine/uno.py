"""
Uno card game engine implementation.

This module provides the UnoEngine class, which implements the GameEngine
interface for the simplified game of Uno.
"""

from typing import Any, Dict, List, Optional, Tuple, Union
import logging
import threading
import time

from unofsm.adapters import PlatformAdapter
from unofsm.common.card import Card, Color
from unofsm.common.random_source import RandomSource, SystemRandomSource
from unofsm.engine.base import GameEngine
from unofsm.events import EngineEventType
from unofsm.state.machine import Result
from unofsm.uno.constants import (
    DEFAULT_PLAYER_COUNT,
    DEFAULT_STARTING_CARD,
    DEFAULT_STARTING_PLAYER,
)
from unofsm.uno.machine import UnoStateMachine
from unofsm.uno.state import (
    CardOutput,
    EventKind,
    GameState,
    UnoError,
    UnoEvent,
    UnoRules,
)

logger = logging.getLogger(__name__)

Notification = Tuple[EngineEventType, Dict[str, Any]]

DEFAULT_CONFIG = {
    "player_count": DEFAULT_PLAYER_COUNT,
    "starting_color": DEFAULT_STARTING_CARD.color.name.lower(),
    "starting_number": DEFAULT_STARTING_CARD.number,
    "starting_player": DEFAULT_STARTING_PLAYER,
    "free_first_discard": False,
    "seed": None,
}


def rules_from_config(config: Dict[str, Any]) -> UnoRules:
    """
    Build game rules from a configuration dictionary.

    Args:
        config: Configuration merged over ``DEFAULT_CONFIG``

    Returns:
        The validated rules

    Raises:
        ValueError: If an option is invalid
    """
    return UnoRules(
        player_count=config.get("player_count", DEFAULT_PLAYER_COUNT),
        starting_card=Card(
            Color.parse(
                config.get("starting_color", DEFAULT_STARTING_CARD.color)
            ),
            config.get("starting_number", DEFAULT_STARTING_CARD.number),
        ),
        starting_player=config.get("starting_player", DEFAULT_STARTING_PLAYER),
        free_first_discard=config.get("free_first_discard", False),
    )


class UnoEngine(GameEngine):
    """
    Engine implementation for the simplified Uno game.

    The engine owns the state machine, serializes event submission, publishes
    what happened on the event bus and keeps the adapter up to date.
    """

    def __init__(
        self,
        adapter: PlatformAdapter,
        config: Dict[str, Any] = None,
        random_source: Optional[RandomSource] = None,
    ):
        """
        Initialize the Uno engine.

        Args:
            adapter: Platform adapter to use for rendering and input
            config: Configuration options for the game
            random_source: Source of randomness for draws; seeded from
                           ``config["seed"]`` if None
        """
        super().__init__(adapter, config)

        # Merge with provided config
        merged_config = dict(DEFAULT_CONFIG)
        if config:
            merged_config.update(config)
        self.config = merged_config

        self.rules = rules_from_config(self.config)
        self.random_source = random_source or SystemRandomSource(self.config["seed"])
        self.machine = UnoStateMachine(
            rules=self.rules, random_source=self.random_source
        )

        # One validate-compute-transition sequence at a time
        self._lock = threading.Lock()

    async def initialize(self) -> None:
        """
        Initialize the engine and prepare for a game.
        """
        await super().initialize()

        self._publish(
            EngineEventType.ENGINE_INIT, {"engine_type": "uno", "config": self.config}
        )
        logger.info("Uno engine initialized with %d players", self.rules.player_count)

    async def shutdown(self) -> None:
        """
        Shut down the engine and clean up resources.
        """
        self._publish(EngineEventType.ENGINE_SHUTDOWN, {})

        await super().shutdown()

    async def start_game(self) -> None:
        """
        Start a new game of Uno from the configured rules.
        """
        with self._lock:
            self.machine = UnoStateMachine(
                rules=self.rules, random_source=self.random_source
            )
        self._publish(
            EngineEventType.GAME_CREATED,
            {
                "player_count": self.rules.player_count,
                "top_card": str(self.state.top_card),
            },
        )
        self._publish(EngineEventType.GAME_STARTED, {})

        await self.render_state()

    def submit_event(
        self, event: UnoEvent, strict: bool = False
    ) -> Result[Optional[CardOutput], UnoError]:
        """
        Run one event through the state machine.

        Args:
            event: The player event
            strict: Raise ``InvalidEventError`` instead of returning an error result

        Returns:
            ``Result.ok(output)`` or ``Result.err(error)``

        Raises:
            InvalidEventError: If ``strict`` is set and the event was rejected
        """
        result, _ = self._submit(event)
        if strict:
            result.unwrap()
        return result

    def discard(
        self, player: int, color: Union[str, int, Color], number: int
    ) -> Result[Optional[CardOutput], UnoError]:
        """Submit a discard of ``color``/``number`` from ``player``."""
        return self.submit_event(
            UnoEvent.discard(player, Card(Color.parse(color), number))
        )

    def no_card(self, player: int) -> Result[Optional[CardOutput], UnoError]:
        """Submit a no-playable-card signal from ``player``."""
        return self.submit_event(UnoEvent.no_card(player))

    def draw(self, player: int) -> Result[Optional[CardOutput], UnoError]:
        """Submit a draw from ``player``."""
        return self.submit_event(UnoEvent.draw(player))

    def valid_event_kinds(self, player: int) -> List[EventKind]:
        """Event kinds the current state would accept from ``player``."""
        return self.machine.valid_event_kinds(player)

    async def play_event(
        self, event: UnoEvent
    ) -> Result[Optional[CardOutput], UnoError]:
        """
        Submit an event, forward the resulting notifications to the adapter
        and render the new state.

        Args:
            event: The player event

        Returns:
            The state machine's result
        """
        result, notifications = self._submit(event)
        for event_type, data in notifications:
            await self.adapter.notify_game_event(event_type, data)
        await self.render_state()
        return result

    async def run(self, max_events: Optional[int] = None) -> int:
        """
        Ask the adapter for events until it returns None.

        Args:
            max_events: Optional cap on the number of submitted events

        Returns:
            Number of events that were accepted
        """
        accepted = 0
        submitted = 0
        while max_events is None or submitted < max_events:
            player = self.state.turn_holder
            self._publish(
                EngineEventType.PLAYER_DECISION_NEEDED,
                {"player": player, "phase": self.state.phase.label},
            )
            event = await self.adapter.request_player_event(
                player, self.valid_event_kinds(player)
            )
            if event is None:
                break

            result = await self.play_event(event)
            submitted += 1
            if result.is_ok:
                accepted += 1

        logger.info("Session ended after %d events (%d accepted)", submitted, accepted)
        return accepted

    async def render_state(self) -> None:
        """
        Render the current game state.
        """
        await self.adapter.render_game_state(self.state.to_adapter_format())

    def _submit(
        self, event: UnoEvent
    ) -> Tuple[Result[Optional[CardOutput], UnoError], List[Notification]]:
        with self._lock:
            before = self.state
            result = self.machine.next(event)
            after = self.state

        if result.is_err:
            logger.info(
                "Rejected %s from player %d: %s",
                event.kind.name,
                event.sender,
                result.error.name,
            )
            notifications = [
                (
                    EngineEventType.EVENT_REJECTED,
                    {
                        "player": event.sender,
                        "kind": event.kind.name,
                        "error": result.error.label,
                    },
                )
            ]
        else:
            logger.debug("Accepted %s from player %d", event.kind.name, event.sender)
            notifications = self._describe_transition(
                event, result.value, before, after
            )

        timestamp = time.time()
        notifications = [
            (
                event_type,
                self._publish(
                    event_type, data, game_id=before.id, timestamp=timestamp
                ),
            )
            for event_type, data in notifications
        ]
        return result, notifications

    def _publish(
        self,
        event_type: EngineEventType,
        data: Dict[str, Any],
        game_id: Optional[str] = None,
        timestamp: Optional[float] = None,
    ) -> Dict[str, Any]:
        """
        Emit an event on the bus, stamped with the game it belongs to.

        Returns:
            The payload that was emitted
        """
        payload = {
            **data,
            "game_id": game_id or self.state.id,
            "timestamp": timestamp or time.time(),
        }
        self.event_bus.emit(event_type, payload)
        return payload

    @staticmethod
    def _describe_transition(
        event: UnoEvent,
        output: Optional[CardOutput],
        before: GameState,
        after: GameState,
    ) -> List[Notification]:
        notifications = [
            (
                EngineEventType.PLAYER_ACTION,
                {"player": event.sender, "kind": event.kind.name},
            )
        ]
        if event.kind == EventKind.DISCARD:
            notifications.append(
                (
                    EngineEventType.CARD_DISCARDED,
                    {"player": event.sender, "card": str(event.card)},
                )
            )
        if output is not None:
            notifications.append(
                (
                    EngineEventType.CARD_DRAWN,
                    {"player": event.sender, "card": str(output.card)},
                )
            )
        if after.phase != before.phase:
            notifications.append(
                (
                    EngineEventType.PHASE_CHANGED,
                    {"player": after.turn_holder, "phase": after.phase.label},
                )
            )
        if after.turn_holder != before.turn_holder:
            notifications.append(
                (
                    EngineEventType.TURN_CHANGED,
                    {"previous": before.turn_holder, "player": after.turn_holder},
                )
            )
        return notifications
