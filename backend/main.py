import argparse
import logging
import os
import random
import sys
from typing import Dict, List, Optional

from dotenv import load_dotenv

from domain.constants import BASE_DURATION_MS, GRID_SIZE, START_BODY
from players import RandomPlayer
from services.board_renderer import TextRenderer
from services.display import ConsoleDisplay
from services.frame_renderer import FrameRenderer
from services.game_clock import ScheduleClock
from services.game_session import GameSession

load_dotenv()

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
DEFAULT_MAX_TICKS = 200

logger = logging.getLogger(__name__)


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    try:
        return int(value)
    except ValueError:
        logger.warning("%s=%r is not an integer; using %s.", name, value, default)
        return default


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    try:
        return float(value)
    except ValueError:
        logger.warning("%s=%r is not a number; using %s.", name, value, default)
        return default


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Play Snake in a window, or watch a headless autopilot game."
    )
    parser.add_argument("--grid-size", type=int, default=_env_int("SNAKE_GRID_SIZE", GRID_SIZE),
                        help="Cells per side of the square board")
    parser.add_argument("--base-duration", type=float,
                        default=_env_float("SNAKE_BASE_DURATION_MS", BASE_DURATION_MS),
                        help="Tick interval in milliseconds at score 0")
    parser.add_argument("--seed", type=int, default=None,
                        help="Random seed for apple placement and the autopilot")

    subparsers = parser.add_subparsers(dest="mode")
    subparsers.add_parser("play", help="Open a pygame window (default)")

    demo = subparsers.add_parser("demo", help="Run a headless game driven by a random autopilot")
    demo.add_argument("--max-ticks", type=int, default=DEFAULT_MAX_TICKS,
                      help="Stop the demo after this many ticks")
    demo.add_argument("--snapshot", type=str, default=None,
                      help="Save the final board as a PNG instead of printing boards")
    return parser


def validate_args(parser: argparse.ArgumentParser, args: argparse.Namespace):
    if args.grid_size < 7:
        parser.error("--grid-size must be at least 7")
    if args.base_duration <= 0:
        parser.error("--base-duration must be positive")
    if getattr(args, "max_ticks", 1) < 1:
        parser.error("--max-ticks must be at least 1")


def run_demo(
    grid_size: int,
    base_duration: float,
    max_ticks: int,
    seed: Optional[int] = None,
    snapshot: Optional[str] = None
) -> Dict:
    """
    Runs a headless game with a RandomPlayer steering the snake.

    Returns:
        A dictionary summarizing the run (ticks, best score, ended, apples_eaten, length).
    """
    rng = random.Random(seed)
    renderer = FrameRenderer(grid_size) if snapshot else TextRenderer(grid_size)
    display = ConsoleDisplay()
    clock = ScheduleClock()
    session = GameSession(
        renderer=renderer,
        display=display,
        clock=clock,
        pilot=RandomPlayer(rng=rng),
        grid_size=grid_size,
        base_duration=base_duration,
        rng=rng
    )

    game = session.start()
    clock.run_until(lambda: game.ended or game.tick_count >= max_ticks)

    result = {
        "ticks": game.tick_count,
        "best_score": game.best_score,
        "ended": game.ended,
        "apples_eaten": len(game.snake) - len(START_BODY),
        "length": len(game.snake),
    }
    session.stop()

    if snapshot:
        renderer.save(snapshot)

    return result


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    validate_args(parser, args)

    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )

    if args.mode == "demo":
        result = run_demo(
            grid_size=args.grid_size,
            base_duration=args.base_duration,
            max_ticks=args.max_ticks,
            seed=args.seed,
            snapshot=args.snapshot
        )
        print("\nDemo Result Summary:")
        for key, value in result.items():
            print(f"  {key}: {value}")
        return 0

    from services.pygame_frontend import GameWindow

    window = GameWindow(
        grid_size=args.grid_size,
        base_duration=args.base_duration,
        rng=random.Random(args.seed)
    )
    window.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
