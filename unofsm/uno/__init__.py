"""
Uno card game module.

This module provides the implementation for a simplified Uno game,
including state models, state transitions, and the state machine.
"""

from unofsm.uno.state import (
    GameState as GameState,
    Phase as Phase,
    EventKind as EventKind,
    UnoEvent as UnoEvent,
    UnoError as UnoError,
    CardOutput as CardOutput,
    UnoRules as UnoRules,
)
from unofsm.uno.transitions import StateTransitionEngine as StateTransitionEngine
from unofsm.uno.machine import UnoStateMachine as UnoStateMachine

__all__ = [
    "GameState",
    "Phase",
    "EventKind",
    "UnoEvent",
    "UnoError",
    "CardOutput",
    "UnoRules",
    "StateTransitionEngine",
    "UnoStateMachine",
]
