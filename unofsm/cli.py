"""
Command-line demo for the Uno state machine.

By default a scripted sequence of events is played and every state and
result is printed. With ``--interactive`` players type their events at the
console instead.
"""

import argparse
import asyncio
import logging
from typing import List, Optional

from unofsm.adapters import CLIAdapter, DummyAdapter
from unofsm.api.uno import format_result
from unofsm.common.card import Card, Color
from unofsm.common.io_interface import (
    ConsoleIOInterface,
    IOInterface,
    LoggingIOInterface,
)
from unofsm.engine.uno import DEFAULT_CONFIG, UnoEngine, rules_from_config
from unofsm.uno.constants import DEMO_STARTING_CARD
from unofsm.uno.state import GameState, UnoEvent

logger = logging.getLogger(__name__)

# Each step shows one rule of the game: a number match, a phase change,
# a phase violation, a draw, an out-of-turn event and a card mismatch.
DEMO_SCRIPT = [
    UnoEvent.discard(0, Card(Color.BLUE, 4)),
    UnoEvent.no_card(1),
    UnoEvent.no_card(1),
    UnoEvent.draw(1),
    UnoEvent.draw(3),
    UnoEvent.discard(1, Card(Color.GREEN, 5)),
]


def describe_state(state: GameState) -> str:
    return (
        f"GameState(players={state.player_count}, top_card={state.top_card}, "
        f"phase={state.phase.label}, turn_holder={state.turn_holder})"
    )


def describe_event(event: UnoEvent) -> str:
    if event.card is not None:
        return f"Player {event.sender}: {event.kind.name} {event.card}"
    return f"Player {event.sender}: {event.kind.name}"


def parse_args(argv: Optional[List[str]] = None):
    parser = argparse.ArgumentParser(
        description="Play the simplified Uno turn cycle."
    )
    parser.add_argument(
        "-p",
        "--players",
        type=int,
        default=4,
        help="number of players (default: 4)",
    )
    parser.add_argument(
        "-c",
        "--color",
        default=DEMO_STARTING_CARD.color.name.lower(),
        choices=[color.name.lower() for color in Color],
        help="color of the starting card (default: red)",
    )
    parser.add_argument(
        "-n",
        "--number",
        type=int,
        default=DEMO_STARTING_CARD.number,
        help="number of the starting card (default: 4)",
    )
    parser.add_argument(
        "-s",
        "--seed",
        type=int,
        default=None,
        help="seed for drawn cards",
    )
    parser.add_argument(
        "--free-first-discard",
        action="store_true",
        help="allow any card as the first discard of the game",
    )
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument(
        "-i",
        "--interactive",
        action="store_true",
        help="read events from the console instead of playing the demo script",
    )
    mode.add_argument(
        "-t",
        "--transcript",
        default=None,
        help="append demo output to this file instead of printing it",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="logging level (default: WARNING)",
    )
    return parser.parse_args(argv)


def build_config(args) -> dict:
    return {
        "player_count": args.players,
        "starting_color": args.color,
        "starting_number": args.number,
        "free_first_discard": args.free_first_discard,
        "seed": args.seed,
    }


async def _write(io_interface: IOInterface, message: str) -> None:
    if hasattr(io_interface, "output_async"):
        await io_interface.output_async(message)
    else:
        io_interface.output(message)


async def run_demo(
    config: dict, io_interface: IOInterface, script: Optional[List[UnoEvent]] = None
) -> UnoEngine:
    """
    Play a scripted list of events, printing each state and result.

    Args:
        config: Engine configuration
        io_interface: Where to write the transcript
        script: Events to play (defaults to ``DEMO_SCRIPT``)

    Returns:
        The engine, for inspection of the final state
    """
    engine = UnoEngine(DummyAdapter(), config)
    await engine.initialize()
    await engine.start_game()

    await _write(io_interface, describe_state(engine.state))
    for event in DEMO_SCRIPT if script is None else script:
        result = engine.submit_event(event)
        await _write(
            io_interface, f"{describe_event(event)} -> {format_result(result)}"
        )
        await _write(io_interface, describe_state(engine.state))

    await engine.shutdown()
    return engine


async def run_interactive(config: dict, io_interface: IOInterface) -> int:
    """
    Play at the console until a player quits.

    Returns:
        Number of accepted events
    """
    engine = UnoEngine(CLIAdapter(io_interface), config)
    await engine.initialize()
    try:
        await engine.start_game()
        return await engine.run()
    finally:
        await engine.shutdown()


async def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    config = build_config(args)
    try:
        rules_from_config({**DEFAULT_CONFIG, **config})
    except ValueError as e:
        logger.error("Invalid configuration: %s", e)
        return 2

    if args.interactive:
        await run_interactive(config, ConsoleIOInterface())
    elif args.transcript:
        await run_demo(config, LoggingIOInterface(args.transcript))
    else:
        await run_demo(config, ConsoleIOInterface())
    return 0


def run() -> int:
    """Console script entry point."""
    return asyncio.run(main())


if __name__ == "__main__":
    raise SystemExit(run())
