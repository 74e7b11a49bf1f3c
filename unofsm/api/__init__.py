"""
Host-facing API for unofsm.

This package provides game objects that expose the engine through plain
method calls returning serialized results, for embedding in other hosts.
"""

from unofsm.api.base import GameAPI
from unofsm.api.uno import UnoGame, format_result, format_state

__all__ = ["GameAPI", "UnoGame", "format_result", "format_state"]
