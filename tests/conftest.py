"""
Pytest configuration for tests at the root level.

This module contains pytest fixtures and configuration for testing components.
"""

import pytest

from unofsm.common.card import Card, Color
from unofsm.common.random_source import SystemRandomSource
from unofsm.events import EventBus
from unofsm.uno.machine import UnoStateMachine
from unofsm.uno.state import GameState, UnoRules


# Reset event bus before each test
@pytest.fixture(scope="function", autouse=True)
def reset_event_bus():
    """Reset the event bus singleton before each test."""
    EventBus._instance = None
    yield
    EventBus._instance = None


@pytest.fixture
def rules():
    """Default four-player rules with Blue 5 on top."""
    return UnoRules(player_count=4, starting_card=Card(Color.BLUE, 5))


@pytest.fixture
def state(rules):
    """Starting state for the default rules."""
    return GameState.initial(rules)


@pytest.fixture
def machine(rules):
    """A seeded state machine at the starting state."""
    return UnoStateMachine(rules=rules, random_source=SystemRandomSource(seed=7))
