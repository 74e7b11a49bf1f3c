"""
Tests for the Uno engine.

This module contains tests for the UnoEngine driver: configuration, event
submission, event publication and the adapter-driven game loop.
"""

import threading

import pytest
from unittest.mock import MagicMock, patch

from unofsm.adapters import DummyAdapter
from unofsm.common.card import Card, Color
from unofsm.common.random_source import ScriptedRandomSource
from unofsm.engine import GameEngine, UnoEngine
from unofsm.events import EventBus, EngineEventType
from unofsm.state.machine import InvalidEventError
from unofsm.uno.constants import COLORS
from unofsm.uno.state import CardOutput, Phase, UnoError, UnoEvent


@pytest.fixture
def adapter():
    return DummyAdapter()


@pytest.fixture
def engine(adapter):
    return UnoEngine(adapter, {"seed": 1})


class TestConfiguration:
    def test_defaults(self, adapter):
        engine = UnoEngine(adapter)

        assert engine.config["player_count"] == 4
        assert engine.rules.starting_card == Card(Color.BLUE, 5)
        assert engine.state.turn_holder == 0
        assert engine.state.phase == Phase.AWAITING_DISCARD

    def test_config_overrides(self, adapter):
        engine = UnoEngine(
            adapter,
            {
                "player_count": 3,
                "starting_color": "red",
                "starting_number": 4,
                "starting_player": 2,
                "free_first_discard": True,
            },
        )

        assert engine.state.player_count == 3
        assert engine.state.top_card == Card(Color.RED, 4)
        assert engine.state.turn_holder == 2
        assert engine.rules.free_first_discard is True

    @pytest.mark.parametrize(
        "config",
        [
            {"player_count": 0},
            {"starting_color": "purple"},
            {"starting_number": 10},
            {"starting_player": 4},
            {"free_first_discard": "false"},
        ],
    )
    def test_invalid_config(self, adapter, config):
        with pytest.raises(ValueError):
            UnoEngine(adapter, config)

    def test_is_game_engine(self, engine):
        assert isinstance(engine, GameEngine)


class TestSubmitEvent:
    def test_accepted_discard(self, engine):
        result = engine.submit_event(UnoEvent.discard(0, Card(Color.BLUE, 7)))

        assert result.is_ok
        assert engine.state.top_card == Card(Color.BLUE, 7)
        assert engine.state.turn_holder == 1

    def test_rejected_event_returns_error(self, engine):
        before = engine.state
        result = engine.submit_event(UnoEvent.draw(0))

        assert result.error == UnoError.UNEXPECTED_EVENT
        assert engine.state is before

    def test_strict_mode_raises(self, engine):
        with pytest.raises(InvalidEventError) as exc_info:
            engine.submit_event(UnoEvent.draw(3), strict=True)
        assert exc_info.value.error == UnoError.INCORRECT_PLAYER

    def test_convenience_methods(self, adapter):
        source = ScriptedRandomSource(choices=[COLORS.index(Color.GREEN)], integers=[2])
        engine = UnoEngine(adapter, random_source=source)

        assert engine.discard(0, "blue", 9).is_ok
        assert engine.discard(1, Color.GREEN, 1).error == UnoError.INCORRECT_CARD
        assert engine.no_card(1).is_ok
        assert engine.draw(1).value == CardOutput(Card(Color.GREEN, 2))

    def test_discard_with_color_tag(self, engine):
        assert engine.discard(0, 1, 2).is_ok
        assert engine.state.top_card == Card(Color.BLUE, 2)

    def test_valid_event_kinds(self, engine):
        assert engine.valid_event_kinds(0) == engine.machine.valid_event_kinds(0)
        assert engine.valid_event_kinds(2) == []


class TestPublishedEvents:
    def test_discard_events(self, engine):
        bus = EventBus.get_instance()
        seen = []
        for event_type in (
            EngineEventType.PLAYER_ACTION,
            EngineEventType.CARD_DISCARDED,
            EngineEventType.TURN_CHANGED,
            EngineEventType.PHASE_CHANGED,
        ):
            bus.on(event_type, lambda data, t=event_type: seen.append((t.name, data)))

        engine.discard(0, "blue", 7)

        names = [name for name, _ in seen]
        assert names == ["PLAYER_ACTION", "CARD_DISCARDED", "TURN_CHANGED"]
        assert seen[1][1]["card"] == "Blue 7"
        assert seen[2][1]["previous"] == 0
        assert seen[2][1]["player"] == 1
        assert all(data["game_id"] == engine.state.id for _, data in seen)

    def test_draw_events(self, engine):
        bus = EventBus.get_instance()
        drawn = MagicMock()
        phases = MagicMock()
        bus.on(EngineEventType.CARD_DRAWN, drawn)
        bus.on(EngineEventType.PHASE_CHANGED, phases)

        engine.no_card(0)
        result = engine.draw(0)

        drawn.assert_called_once()
        assert drawn.call_args.args[0]["card"] == str(result.value.card)
        assert [c.args[0]["phase"] for c in phases.call_args_list] == [
            "AwaitingDraw",
            "AwaitingDiscard",
        ]

    def test_rejection_event(self, engine):
        bus = EventBus.get_instance()
        rejected = MagicMock()
        bus.on(EngineEventType.EVENT_REJECTED, rejected)

        engine.no_card(2)

        data = rejected.call_args.args[0]
        assert data["player"] == 2
        assert data["kind"] == "NO_CARD"
        assert data["error"] == "IncorrectPlayer"

    @pytest.mark.asyncio
    async def test_events_carry_their_own_game_id(self):
        first = UnoEngine(DummyAdapter())
        second = UnoEngine(DummyAdapter())
        await first.initialize()
        await second.initialize()

        discarded = []
        EventBus.get_instance().on(EngineEventType.CARD_DISCARDED, discarded.append)

        first.discard(0, "blue", 7)
        second.discard(0, "blue", 8)

        assert first.state.id != second.state.id
        assert [data["game_id"] for data in discarded] == [
            first.state.id,
            second.state.id,
        ]

    @pytest.mark.asyncio
    async def test_shutdown_carries_game_id(self, engine):
        shutdown = MagicMock()
        EventBus.get_instance().on(EngineEventType.ENGINE_SHUTDOWN, shutdown)
        UnoEngine(DummyAdapter())

        await engine.shutdown()

        assert shutdown.call_args.args[0]["game_id"] == engine.state.id

    def test_rejection_is_logged(self, engine, caplog):
        with caplog.at_level("INFO", logger="unofsm.engine.uno"):
            engine.draw(0)
        assert "UNEXPECTED_EVENT" in caplog.text


class TestLifecycle:
    @pytest.mark.asyncio
    @patch.object(DummyAdapter, "initialize")
    async def test_initialize(self, mock_initialize, engine):
        init = MagicMock()
        EventBus.get_instance().on(EngineEventType.ENGINE_INIT, init)

        await engine.initialize()

        mock_initialize.assert_called_once()
        assert init.call_args.args[0]["engine_type"] == "uno"
        assert init.call_args.args[0]["game_id"] == engine.state.id

    @pytest.mark.asyncio
    @patch.object(DummyAdapter, "shutdown")
    async def test_shutdown(self, mock_shutdown, engine):
        await engine.shutdown()
        mock_shutdown.assert_called_once()

    @pytest.mark.asyncio
    async def test_start_game_resets_state(self, engine, adapter):
        engine.discard(0, "blue", 7)
        old_id = engine.state.id

        await engine.start_game()

        assert engine.state.id != old_id
        assert engine.state.turn_holder == 0
        assert engine.state.top_card == Card(Color.BLUE, 5)
        assert adapter.rendered_states[-1]["top_card"] == "Blue 5"

    @pytest.mark.asyncio
    async def test_play_event_notifies_adapter(self, engine, adapter):
        result = await engine.play_event(UnoEvent.discard(0, Card(Color.BLUE, 7)))

        assert result.is_ok
        assert adapter.get_events_by_type("CARD_DISCARDED")[0]["card"] == "Blue 7"
        assert adapter.rendered_states[-1]["turn_holder"] == 1

    @pytest.mark.asyncio
    async def test_play_event_does_not_replay_earlier_events(self, engine, adapter):
        engine.discard(0, "blue", 7)
        await engine.play_event(UnoEvent.no_card(1))

        assert adapter.get_events_by_type("CARD_DISCARDED") == []
        assert len(adapter.get_events_by_type("PHASE_CHANGED")) == 1


class TestRun:
    @pytest.mark.asyncio
    async def test_run_plays_script(self):
        adapter = DummyAdapter(
            scripted_events=[
                UnoEvent.discard(0, Card(Color.BLUE, 4)),
                UnoEvent.no_card(1),
                UnoEvent.draw(2),
                UnoEvent.draw(1),
            ]
        )
        engine = UnoEngine(adapter, {"seed": 5})
        await engine.initialize()
        await engine.start_game()

        accepted = await engine.run()

        assert accepted == 3
        assert engine.state.turn_holder == 1
        assert engine.state.phase == Phase.AWAITING_DISCARD
        assert [player for player, _ in adapter.requests] == [0, 1, 1, 1, 1]
        assert len(adapter.get_events_by_type("EVENT_REJECTED")) == 1

    @pytest.mark.asyncio
    async def test_run_respects_max_events(self):
        def always_pass(player, kinds):
            if kinds[0].name == "DRAW":
                return UnoEvent.draw(player)
            return UnoEvent.no_card(player)

        adapter = DummyAdapter(strategy_function=always_pass)
        engine = UnoEngine(adapter)

        accepted = await engine.run(max_events=6)

        assert accepted == 6
        assert engine.state.turn_holder == 0


def test_concurrent_submissions_are_serialized():
    engine = UnoEngine(DummyAdapter())
    results = []

    def submit(player):
        results.append(engine.no_card(player))

    threads = [threading.Thread(target=submit, args=(0,)) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert sum(result.is_ok for result in results) == 1
    assert engine.state.phase == Phase.AWAITING_DRAW
