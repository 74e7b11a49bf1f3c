"""
Platform adapters for the unofsm engine.

This package provides adapters that translate between the core game engine
and the platforms that drive it (console, tests).
"""

from unofsm.adapters.base import PlatformAdapter
from unofsm.adapters.cli import CLIAdapter
from unofsm.adapters.dummy import DummyAdapter

__all__ = ["PlatformAdapter", "CLIAdapter", "DummyAdapter"]
