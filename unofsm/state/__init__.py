"""
State machine contract.

This package provides the abstract validate/compute/transition contract shared
by every game in unofsm, along with the result type it returns.
"""

from unofsm.state.machine import InvalidEventError, Result, StateMachine

__all__ = ["InvalidEventError", "Result", "StateMachine"]
