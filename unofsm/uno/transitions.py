"""
State transition functions for the Uno card game.

This module provides pure functions for validating events and transitioning
between game states, without modifying the original state objects.
"""

from dataclasses import replace
from typing import List

from unofsm.common.card import Card
from unofsm.state.machine import Result
from unofsm.uno.state import EventKind, GameState, Phase, UnoError, UnoEvent

# Event kinds accepted in each phase
ACCEPTED_KINDS = {
    Phase.AWAITING_DISCARD: (EventKind.DISCARD, EventKind.NO_CARD),
    Phase.AWAITING_DRAW: (EventKind.DRAW,),
}


class StateTransitionEngine:
    """
    Pure functions for state transitions in Uno.

    This class contains static methods that implement game state transitions.
    Each method takes a state and returns a new state, without modifying the
    original.
    """

    @staticmethod
    def is_playable(state: GameState, card: Card) -> bool:
        """
        Check whether a card may be discarded on the current top card.

        Args:
            state: Current game state
            card: Card the player wants to discard

        Returns:
            True if the card matches the top card by color or number, or if
            the rules waive matching for the first discard
        """
        if state.rules.free_first_discard and state.discard_count == 0:
            return True
        return card.matches(state.top_card)

    @staticmethod
    def validate_event(state: GameState, event: UnoEvent) -> Result[None, UnoError]:
        """
        Check an event against the current state.

        The sender is checked before anything else, so a player acting out of
        turn always gets INCORRECT_PLAYER whatever the phase or event kind.

        Args:
            state: Current game state
            event: Event submitted by a player

        Returns:
            ``Result.ok()`` if accepted, otherwise the rejection reason
        """
        if event.sender != state.turn_holder:
            return Result.err(UnoError.INCORRECT_PLAYER)

        if event.kind not in ACCEPTED_KINDS[state.phase]:
            return Result.err(UnoError.UNEXPECTED_EVENT)

        if event.kind == EventKind.DISCARD and not StateTransitionEngine.is_playable(
            state, event.card
        ):
            return Result.err(UnoError.INCORRECT_CARD)

        return Result.ok()

    @staticmethod
    def accepted_kinds(state: GameState, sender: int) -> List[EventKind]:
        """
        List the event kinds that could be accepted from a sender.

        A DISCARD listed here still has to match the top card.
        """
        if sender != state.turn_holder:
            return []
        return list(ACCEPTED_KINDS[state.phase])

    @staticmethod
    def discard_card(state: GameState, card: Card) -> GameState:
        """
        Put a card on the pile and pass the turn to the next player.

        Args:
            state: Current game state
            card: The discarded card

        Returns:
            New game state with the new top card and turn holder
        """
        return replace(
            state,
            top_card=card,
            turn_holder=(state.turn_holder + 1) % state.player_count,
            discard_count=state.discard_count + 1,
        )

    @staticmethod
    def declare_no_card(state: GameState) -> GameState:
        """
        Record that the turn holder has nothing to play.

        The same player is now expected to draw.
        """
        return replace(state, phase=Phase.AWAITING_DRAW)

    @staticmethod
    def complete_draw(state: GameState) -> GameState:
        """
        Record that the turn holder drew a card.

        The same player is expected to discard or pass again.
        """
        return replace(state, phase=Phase.AWAITING_DISCARD)

    @staticmethod
    def apply_event(state: GameState, event: UnoEvent) -> GameState:
        """
        Apply an already validated event.

        Args:
            state: Current game state
            event: Event that passed ``validate_event``

        Returns:
            The successor state; the same state for combinations that
            validation rejects
        """
        if state.phase == Phase.AWAITING_DISCARD:
            if event.kind == EventKind.DISCARD:
                return StateTransitionEngine.discard_card(state, event.card)
            if event.kind == EventKind.NO_CARD:
                return StateTransitionEngine.declare_no_card(state)
        elif state.phase == Phase.AWAITING_DRAW and event.kind == EventKind.DRAW:
            return StateTransitionEngine.complete_draw(state)

        return state
