"""
This module defines the `Color` and `Card` classes, which are used to represent Uno cards.

- `Color`: An enum representing the four card colors: Red, Blue, Green and
Yellow. The integer values are the stable tags used by host bindings.

- `Card`: An immutable value representing a numbered card. A card has a color
and a number between 1 and 9, and compares equal to any other card with the
same color and number.

This module is part of the `unofsm` package, a small turn-based card game state machine.
"""

from dataclasses import dataclass
from enum import Enum, unique
from typing import Union

MIN_NUMBER = 1
MAX_NUMBER = 9


@unique
class Color(Enum):
    """
    Enum for card colors.
    """

    RED = 0
    BLUE = 1
    GREEN = 2
    YELLOW = 3

    @property
    def label(self) -> str:
        """Display name of the color, e.g. ``Red``."""
        return self.name.capitalize()

    @classmethod
    def parse(cls, value: Union[str, int, "Color"]) -> "Color":
        """
        Convert a name (``"red"``, ``"RED"``) or an integer tag into a Color.

        :param value: Color name, integer tag or Color instance
        :return: The matching Color
        :raises ValueError: If the value does not name a color
        """
        if isinstance(value, Color):
            return value
        if isinstance(value, bool):
            raise ValueError(f"Invalid color: {value!r}")
        if isinstance(value, int):
            try:
                return cls(value)
            except ValueError:
                raise ValueError(f"Invalid color tag: {value}") from None
        if isinstance(value, str):
            name = value.strip().upper()
            if name.isdigit():
                return cls.parse(int(name))
            try:
                return cls[name]
            except KeyError:
                raise ValueError(f"Invalid color: {value!r}") from None
        raise ValueError(f"Invalid color: {value!r}")

    def __str__(self) -> str:
        return self.label


@dataclass(frozen=True)
class Card:
    """
    Class representing a numbered Uno card.

    >>> card = Card(Color.BLUE, 5)
    >>> print(card)
    Blue 5
    >>> card == Card(Color.BLUE, 5)
    True
    """

    color: Color
    number: int

    def __post_init__(self):
        if not isinstance(self.color, Color):
            raise TypeError(f"Invalid color: {self.color!r}")
        if isinstance(self.number, bool) or not isinstance(self.number, int):
            raise ValueError(f"Invalid card number: {self.number!r}")
        if not MIN_NUMBER <= self.number <= MAX_NUMBER:
            raise ValueError(
                f"Card number must be between {MIN_NUMBER} and {MAX_NUMBER}, got {self.number}"
            )

    @classmethod
    def parse(cls, text: str) -> "Card":
        """
        Build a card from text of the form ``"<color> <number>"``.

        :param text: e.g. ``"red 5"`` or ``"Green 9"``
        :return: The parsed card
        :raises ValueError: If the text is not a valid card
        """
        parts = text.split()
        if len(parts) != 2:
            raise ValueError(f"Expected '<color> <number>', got {text!r}")
        color, number = parts
        try:
            value = int(number)
        except ValueError:
            raise ValueError(f"Invalid card number: {number!r}") from None
        return cls(Color.parse(color), value)

    def matches(self, other: "Card") -> bool:
        """
        Checks whether this card may be played on top of another card.

        :param other: The card currently on top of the pile.
        :return: True if the cards share a color or a number.
        """
        return self.color == other.color or self.number == other.number

    def to_dict(self) -> dict:
        return {"color": self.color.label, "number": self.number}

    def __str__(self) -> str:
        return f"{self.color.label} {self.number}"
