"""
Tests for the Uno game state models.
"""

import pytest

from unofsm.common.card import Card, Color
from unofsm.uno.state import (
    CardOutput,
    EventKind,
    GameState,
    Phase,
    UnoError,
    UnoEvent,
    UnoRules,
)


class TestUnoState:
    """Tests for the Uno state dataclasses."""

    def test_default_rules(self):
        rules = UnoRules()

        assert rules.player_count == 4
        assert rules.starting_card == Card(Color.BLUE, 5)
        assert rules.starting_player == 0
        assert rules.free_first_discard is False

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"player_count": 0},
            {"player_count": -2},
            {"player_count": 2.5},
            {"starting_player": 4},
            {"starting_player": -1},
            {"starting_card": "Blue 5"},
            {"free_first_discard": "false"},
            {"free_first_discard": 1},
        ],
    )
    def test_invalid_rules(self, kwargs):
        with pytest.raises(ValueError):
            UnoRules(**kwargs)

    def test_initial_state(self):
        rules = UnoRules(player_count=3, starting_card=Card(Color.RED, 4), starting_player=2)
        state = GameState.initial(rules)

        assert state.id is not None
        assert state.player_count == 3
        assert state.top_card == Card(Color.RED, 4)
        assert state.phase == Phase.AWAITING_DISCARD
        assert state.turn_holder == 2
        assert state.discard_count == 0
        assert state.rules == rules
        assert state.timestamp > 0

    def test_initial_state_defaults(self):
        state = GameState.initial()

        assert state.player_count == 4
        assert state.top_card == Card(Color.BLUE, 5)
        assert state.turn_holder == 0

    def test_turn_holder_must_be_in_range(self):
        with pytest.raises(ValueError):
            GameState(player_count=2, turn_holder=2)

    def test_state_is_immutable(self):
        state = GameState.initial()
        with pytest.raises(AttributeError):
            state.turn_holder = 1

    def test_to_dict(self):
        state = GameState.initial()
        data = state.to_dict()

        assert data["player_count"] == 4
        assert data["top_card"] == {"color": "Blue", "number": 5}
        assert data["phase"] == "AwaitingDiscard"
        assert data["turn_holder"] == 0
        assert data["discard_count"] == 0

    def test_to_adapter_format(self):
        state = GameState.initial(UnoRules(player_count=2, starting_player=1))
        data = state.to_adapter_format()

        assert data["top_card"] == "Blue 5"
        assert data["phase"] == "AwaitingDiscard"
        assert data["players"] == [
            {"index": 0, "has_turn": False},
            {"index": 1, "has_turn": True},
        ]


class TestUnoEvent:
    """Tests for event construction."""

    def test_constructors(self):
        card = Card(Color.GREEN, 3)

        assert UnoEvent.discard(1, card) == UnoEvent(1, EventKind.DISCARD, card)
        assert UnoEvent.no_card(2) == UnoEvent(2, EventKind.NO_CARD)
        assert UnoEvent.draw(3) == UnoEvent(3, EventKind.DRAW)

    def test_discard_needs_card(self):
        with pytest.raises(ValueError):
            UnoEvent(0, EventKind.DISCARD)

    @pytest.mark.parametrize("kind", [EventKind.NO_CARD, EventKind.DRAW])
    def test_other_kinds_reject_card(self, kind):
        with pytest.raises(ValueError):
            UnoEvent(0, kind, Card(Color.RED, 1))

    def test_negative_sender(self):
        with pytest.raises(ValueError):
            UnoEvent.draw(-1)

    def test_non_integer_sender(self):
        with pytest.raises(TypeError):
            UnoEvent.draw("0")

    def test_to_dict(self):
        event = UnoEvent.discard(0, Card(Color.RED, 2))
        assert event.to_dict() == {
            "sender": 0,
            "kind": "DISCARD",
            "card": {"color": "Red", "number": 2},
        }
        assert UnoEvent.draw(1).to_dict()["card"] is None


def test_error_labels():
    assert UnoError.INCORRECT_CARD.label == "IncorrectCard"
    assert UnoError.INCORRECT_PLAYER.label == "IncorrectPlayer"
    assert UnoError.UNEXPECTED_EVENT.label == "UnexpectedEvent"


def test_phase_labels():
    assert Phase.AWAITING_DISCARD.label == "AwaitingDiscard"
    assert Phase.AWAITING_DRAW.label == "AwaitingDraw"


def test_card_output_to_dict():
    assert CardOutput(Card(Color.YELLOW, 8)).to_dict() == {
        "card": {"color": "Yellow", "number": 8}
    }
