"""
Sources of uniform random choices.

The state machine never touches the global ``random`` module directly. It is
handed a ``RandomSource`` instead, so tests and demos can seed draws or
script them outright.
"""

import random
from abc import ABC, abstractmethod
from typing import Iterable, List, Optional, Sequence, TypeVar

T = TypeVar("T")


class RandomSource(ABC):
    """Abstract source of uniform random choices."""

    @abstractmethod
    def choice(self, options: Sequence[T]) -> T:
        """Pick one element of ``options`` uniformly at random."""
        pass

    @abstractmethod
    def randint(self, low: int, high: int) -> int:
        """Pick an integer uniformly from the closed range [low, high]."""
        pass


class SystemRandomSource(RandomSource):
    """
    Random source backed by a private ``random.Random`` instance.

    Args:
        seed: Optional seed. The same seed yields the same sequence of draws.
    """

    def __init__(self, seed: Optional[int] = None):
        self.seed = seed
        self._rng = random.Random(seed)

    def choice(self, options: Sequence[T]) -> T:
        return self._rng.choice(options)

    def randint(self, low: int, high: int) -> int:
        return self._rng.randint(low, high)


class ScriptedRandomSource(RandomSource):
    """
    Random source that replays predetermined values, for tests.

    ``choice`` consumes indexes from ``choices`` and ``randint`` consumes
    values from ``integers``. Values are returned as given, even when they
    fall outside the requested range.
    """

    def __init__(self, choices: Iterable[int] = (), integers: Iterable[int] = ()):
        self._choices: List[int] = list(choices)
        self._integers: List[int] = list(integers)

    def choice(self, options: Sequence[T]) -> T:
        if not self._choices:
            raise ValueError("No more scripted choices")
        return options[self._choices.pop(0)]

    def randint(self, low: int, high: int) -> int:
        if not self._integers:
            raise ValueError("No more scripted integers")
        return self._integers.pop(0)
