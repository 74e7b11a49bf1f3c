"""
Core engine for the unofsm framework.

This package provides the game engines that drive a state machine on behalf
of a platform adapter.
"""

from unofsm.engine.base import GameEngine
from unofsm.engine.uno import UnoEngine

__all__ = ["GameEngine", "UnoEngine"]
