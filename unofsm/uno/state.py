"""
Immutable state models for the Uno card game.

This module provides dataclasses for representing the state of an Uno game in
an immutable manner. These classes are designed to be used with pure
transition functions that create new state instances rather than modifying
existing ones.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Dict, Optional
import time
import uuid

from unofsm.common.card import Card
from unofsm.uno.constants import (
    DEFAULT_PLAYER_COUNT,
    DEFAULT_STARTING_CARD,
    DEFAULT_STARTING_PLAYER,
    ERROR_NAMES,
)


class Phase(Enum):
    """Turn sub-states gating which events are accepted."""

    AWAITING_DISCARD = auto()
    AWAITING_DRAW = auto()

    @property
    def label(self) -> str:
        return "".join(part.capitalize() for part in self.name.split("_"))


class EventKind(Enum):
    """Kinds of events a player may submit."""

    DISCARD = auto()
    NO_CARD = auto()  # nothing playable, the same player draws next
    DRAW = auto()


class UnoError(Enum):
    """Reasons an event is rejected."""

    INCORRECT_CARD = auto()  # discard matches neither color nor number
    INCORRECT_PLAYER = auto()  # sender does not hold the turn
    UNEXPECTED_EVENT = auto()  # event kind not accepted in the current phase

    @property
    def label(self) -> str:
        return ERROR_NAMES[self.name]


@dataclass(frozen=True)
class UnoEvent:
    """
    A single player-submitted event.

    Attributes:
        sender: Index of the player who sent the event
        kind: What the player is doing
        card: The discarded card, present only for DISCARD events
    """

    sender: int
    kind: EventKind
    card: Optional[Card] = None

    def __post_init__(self):
        if isinstance(self.sender, bool) or not isinstance(self.sender, int):
            raise TypeError(f"Invalid sender: {self.sender!r}")
        if self.sender < 0:
            raise ValueError(f"Sender must be non-negative, got {self.sender}")
        if not isinstance(self.kind, EventKind):
            raise TypeError(f"Invalid event kind: {self.kind!r}")
        if self.kind == EventKind.DISCARD:
            if not isinstance(self.card, Card):
                raise ValueError("A discard event needs a card")
        elif self.card is not None:
            raise ValueError(f"{self.kind.name} events do not carry a card")

    @classmethod
    def discard(cls, sender: int, card: Card) -> "UnoEvent":
        return cls(sender, EventKind.DISCARD, card)

    @classmethod
    def no_card(cls, sender: int) -> "UnoEvent":
        return cls(sender, EventKind.NO_CARD)

    @classmethod
    def draw(cls, sender: int) -> "UnoEvent":
        return cls(sender, EventKind.DRAW)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "sender": self.sender,
            "kind": self.kind.name,
            "card": self.card.to_dict() if self.card else None,
        }


@dataclass(frozen=True)
class CardOutput:
    """
    Output of a successful draw.

    Attributes:
        card: The card handed to the drawing player
    """

    card: Card

    def to_dict(self) -> Dict[str, Any]:
        return {"card": self.card.to_dict()}


@dataclass(frozen=True)
class UnoRules:
    """
    Immutable configuration for an Uno game.

    Attributes:
        player_count: Number of players taking turns
        starting_card: Card on top of the pile when the game starts
        starting_player: Index of the player who moves first
        free_first_discard: Whether the first discard of the game may be any card
    """

    player_count: int = DEFAULT_PLAYER_COUNT
    starting_card: Card = DEFAULT_STARTING_CARD
    starting_player: int = DEFAULT_STARTING_PLAYER
    free_first_discard: bool = False

    def __post_init__(self):
        if isinstance(self.player_count, bool) or not isinstance(
            self.player_count, int
        ):
            raise ValueError(f"Invalid player count: {self.player_count!r}")
        if self.player_count < 1:
            raise ValueError("At least one player is required")
        if not isinstance(self.starting_card, Card):
            raise ValueError(f"Invalid starting card: {self.starting_card!r}")
        if not 0 <= self.starting_player < self.player_count:
            raise ValueError(
                f"Starting player must be in [0, {self.player_count}), got {self.starting_player}"
            )
        if not isinstance(self.free_first_discard, bool):
            raise ValueError(
                f"free_first_discard must be a bool, got {self.free_first_discard!r}"
            )


@dataclass(frozen=True)
class GameState:
    """
    Immutable representation of the Uno game state.

    Attributes:
        id: Unique identifier for this game
        player_count: Number of players
        top_card: Most recently discarded card
        phase: Current turn sub-state
        turn_holder: Index of the player expected to send the next event
        discard_count: Number of discards accepted so far
        rules: Rules for this game
        timestamp: Time when this state was created
    """

    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    player_count: int = DEFAULT_PLAYER_COUNT
    top_card: Card = DEFAULT_STARTING_CARD
    phase: Phase = Phase.AWAITING_DISCARD
    turn_holder: int = DEFAULT_STARTING_PLAYER
    discard_count: int = 0
    rules: UnoRules = field(default_factory=UnoRules)
    timestamp: float = field(default_factory=lambda: time.time())

    def __post_init__(self):
        if not 0 <= self.turn_holder < self.player_count:
            raise ValueError(
                f"Turn holder must be in [0, {self.player_count}), got {self.turn_holder}"
            )

    @classmethod
    def initial(cls, rules: Optional[UnoRules] = None) -> "GameState":
        """
        Build the starting state for a game.

        Args:
            rules: Rules for the new game (defaults if None)

        Returns:
            State awaiting the first discard from the starting player
        """
        rules = rules or UnoRules()
        return cls(
            player_count=rules.player_count,
            top_card=rules.starting_card,
            phase=Phase.AWAITING_DISCARD,
            turn_holder=rules.starting_player,
            rules=rules,
        )

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert the game state to a dictionary suitable for serialization.

        Returns:
            Dictionary representation of the game state
        """
        return {
            "id": self.id,
            "player_count": self.player_count,
            "top_card": self.top_card.to_dict(),
            "phase": self.phase.label,
            "turn_holder": self.turn_holder,
            "discard_count": self.discard_count,
            "timestamp": self.timestamp,
        }

    def to_adapter_format(self) -> Dict[str, Any]:
        """
        Convert the game state to a format suitable for platform adapters.

        Returns:
            Dictionary in adapter-friendly format
        """
        return {
            "top_card": str(self.top_card),
            "phase": self.phase.label,
            "turn_holder": self.turn_holder,
            "players": [
                {"index": i, "has_turn": i == self.turn_holder}
                for i in range(self.player_count)
            ],
        }
