"""Uno-specific constants and default values."""

from unofsm.common.card import MAX_NUMBER, MIN_NUMBER, Card, Color

# Draw order of colors; a draw picks uniformly from this tuple
COLORS = (Color.RED, Color.GREEN, Color.YELLOW, Color.BLUE)

NUMBERS = range(MIN_NUMBER, MAX_NUMBER + 1)

DEFAULT_PLAYER_COUNT = 4
DEFAULT_STARTING_CARD = Card(Color.BLUE, 5)
DEFAULT_STARTING_PLAYER = 0

# Starting card of the scripted command-line demo
DEMO_STARTING_CARD = Card(Color.RED, 4)

# Names used in serialized results
ERROR_NAMES = {
    "INCORRECT_CARD": "IncorrectCard",
    "INCORRECT_PLAYER": "IncorrectPlayer",
    "UNEXPECTED_EVENT": "UnexpectedEvent",
}
