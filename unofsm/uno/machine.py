"""
Uno implementation of the state machine contract.

``UnoStateMachine`` wires the pure validation and transition functions of
``StateTransitionEngine`` into ``StateMachine`` and produces a random card
whenever a player draws.
"""

from typing import List, Optional

from unofsm.common.card import Card, Color
from unofsm.common.random_source import RandomSource, SystemRandomSource
from unofsm.state.machine import Result, StateMachine
from unofsm.uno.constants import COLORS, NUMBERS
from unofsm.uno.state import (
    CardOutput,
    EventKind,
    GameState,
    Phase,
    UnoError,
    UnoEvent,
    UnoRules,
)
from unofsm.uno.transitions import StateTransitionEngine


class UnoStateMachine(StateMachine[GameState, UnoEvent, CardOutput, UnoError]):
    """
    State machine for the two-phase Uno turn cycle.

    Example:
        ```python
        machine = UnoStateMachine()
        machine.next(UnoEvent.discard(0, Card(Color.BLUE, 7)))  # Result.ok(None)
        machine.next(UnoEvent.no_card(1))                       # Result.ok(None)
        result = machine.next(UnoEvent.draw(1))                 # Result.ok(CardOutput(...))
        ```

    Args:
        state: Starting state; built from ``rules`` if None
        rules: Rules used when no state is given
        random_source: Source of randomness for draws
    """

    def __init__(
        self,
        state: Optional[GameState] = None,
        rules: Optional[UnoRules] = None,
        random_source: Optional[RandomSource] = None,
    ):
        super().__init__(state or GameState.initial(rules))
        self.random_source = random_source or SystemRandomSource()

    def validate(self, state: GameState, event: UnoEvent) -> Result[None, UnoError]:
        return StateTransitionEngine.validate_event(state, event)

    def compute(self, state: GameState, event: UnoEvent) -> Optional[CardOutput]:
        if state.phase == Phase.AWAITING_DRAW and event.kind == EventKind.DRAW:
            return CardOutput(self._draw_card())
        return None

    def transition(self, state: GameState, event: UnoEvent) -> GameState:
        return StateTransitionEngine.apply_event(state, event)

    def valid_event_kinds(self, sender: int) -> List[EventKind]:
        """
        List the event kinds the current state would accept from ``sender``.

        Args:
            sender: Player index

        Returns:
            Event kinds, empty when it is not the sender's turn
        """
        return StateTransitionEngine.accepted_kinds(self.state, sender)

    def _draw_card(self) -> Card:
        color = self.random_source.choice(COLORS)
        number = self.random_source.randint(NUMBERS.start, NUMBERS.stop - 1)
        if not isinstance(color, Color) or number not in NUMBERS:
            raise RuntimeError(f"Random draw out of range: {color!r}, {number!r}")
        return Card(color, number)
