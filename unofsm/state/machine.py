"""
Generic state machine contract for turn-based games.

A game is described by three steps: ``validate`` an incoming event against the
current state, ``compute`` any side-channel output from the current state, and
``transition`` to the successor state. ``StateMachine.next`` composes them into
a single step so that every state change is preceded by a successful
validation, and output always reflects the state as it was when the event
arrived.

States are immutable values. ``transition`` returns the successor state and
``next`` is the only place that replaces the machine's current state with it.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, Optional, TypeVar

StateT = TypeVar("StateT")
InputT = TypeVar("InputT")
OutputT = TypeVar("OutputT")
ErrorT = TypeVar("ErrorT")
ValueT = TypeVar("ValueT")


class InvalidEventError(ValueError):
    """
    Raised by ``Result.unwrap`` when an event was rejected.

    Attributes:
        error: The rejection reason returned by the state machine
    """

    def __init__(self, error: Any):
        self.error = error
        name = error.name if isinstance(error, Enum) else str(error)
        super().__init__(f"Event rejected: {name}")


@dataclass(frozen=True)
class Result(Generic[ValueT, ErrorT]):
    """
    Outcome of a state machine step: either a value or an error, never both.

    Attributes:
        value: The successful value (may be None)
        error: The rejection reason, or None on success
    """

    value: Optional[ValueT] = None
    error: Optional[ErrorT] = None

    @classmethod
    def ok(cls, value: Optional[ValueT] = None) -> "Result[ValueT, ErrorT]":
        return cls(value=value)

    @classmethod
    def err(cls, error: ErrorT) -> "Result[ValueT, ErrorT]":
        if error is None:
            raise ValueError("An error result needs an error")
        return cls(error=error)

    @property
    def is_ok(self) -> bool:
        return self.error is None

    @property
    def is_err(self) -> bool:
        return self.error is not None

    def unwrap(self) -> Optional[ValueT]:
        """
        Return the value, or raise if this result is an error.

        Raises:
            InvalidEventError: If the result carries an error
        """
        if self.error is not None:
            raise InvalidEventError(self.error)
        return self.value


class StateMachine(ABC, Generic[StateT, InputT, OutputT, ErrorT]):
    """
    Abstract base class for discrete-event state machines.

    Subclasses supply ``validate``, ``compute`` and ``transition``; callers
    only ever use ``next``.

    Attributes:
        state: The current state
    """

    def __init__(self, state: StateT):
        self.state = state

    @abstractmethod
    def validate(self, state: StateT, event: InputT) -> Result[None, ErrorT]:
        """
        Check whether ``event`` is acceptable in ``state``.

        Must not change anything.
        """
        pass

    @abstractmethod
    def compute(self, state: StateT, event: InputT) -> Optional[OutputT]:
        """
        Produce the output for an accepted event, if any.

        Only called after ``validate`` succeeded, with the pre-transition state.
        """
        pass

    @abstractmethod
    def transition(self, state: StateT, event: InputT) -> StateT:
        """
        Return the successor of ``state`` for an accepted event.

        Only called after ``validate`` succeeded.
        """
        pass

    def next(self, event: InputT) -> Result[Optional[OutputT], ErrorT]:
        """
        Validate, compute and transition in one step.

        On rejection the state is left untouched and ``compute`` is not called.

        Args:
            event: The incoming event

        Returns:
            ``Result.ok(output)`` on success, ``Result.err(error)`` otherwise
        """
        current = self.state
        verdict = self.validate(current, event)
        if verdict.is_err:
            return Result.err(verdict.error)

        output = self.compute(current, event)
        self.state = self.transition(current, event)
        return Result.ok(output)
