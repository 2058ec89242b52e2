"""Play 2048 in a terminal.

Keys: w/a/s/d (or k/h/j/l) to move, r to restart, q to quit.
"""

import argparse
import sys
from typing import Callable, Dict, List, Optional

import numpy as np

from board_rules import Direction
from game_engine import GameEngine, GameStatus
from game_logging import get_logger, setup_logging
from game_settings import resolve_log_format, resolve_log_level, resolve_seed

logger = get_logger(__name__)

KEY_BINDINGS: Dict[str, Direction] = {
    "w": Direction.UP,
    "a": Direction.LEFT,
    "s": Direction.DOWN,
    "d": Direction.RIGHT,
    "k": Direction.UP,
    "h": Direction.LEFT,
    "j": Direction.DOWN,
    "l": Direction.RIGHT,
}
RESTART_KEY = "r"
QUIT_KEY = "q"

BANNERS = {
    GameStatus.WON: "You reached 2048! Press r to play again.",
    GameStatus.LOST: "No moves left. Press r to try again.",
}

CELL_WIDTH = 6


def render(engine: GameEngine) -> str:
    lines = [f"Score: {engine.get_score()}"]
    banner = BANNERS.get(engine.get_status())
    if banner:
        lines.append(banner)

    border = "+" + "+".join(["-" * CELL_WIDTH] * 4) + "+"
    lines.append(border)
    for row in engine.get_state():
        cells = [(str(value) if value else "").center(CELL_WIDTH) for value in row]
        lines.append("|" + "|".join(cells) + "|")
        lines.append(border)
    return "\n".join(lines)


def run_session(
    engine: GameEngine,
    read_key: Callable[[str], str] = input,
    write: Callable[[str], None] = print,
) -> None:
    engine.start()
    write(render(engine))

    while True:
        try:
            key = read_key("> ").strip().lower()
        except EOFError:
            break

        if key == QUIT_KEY:
            break
        if key == RESTART_KEY:
            engine.restart()
            write(render(engine))
            continue

        direction = KEY_BINDINGS.get(key)
        if direction is None:
            write("Use w/a/s/d (or h/j/k/l) to move, r to restart, q to quit.")
            continue
        if engine.get_status() is not GameStatus.PLAYING:
            continue

        if engine.move(direction):
            write(render(engine))

    write(f"Final score: {engine.get_score()}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Play 2048 in the terminal.")
    parser.add_argument("--seed", type=int, default=None, help="seed for tile placement")
    parser.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING, ...")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level or resolve_log_level(), resolve_log_format())

    seed = args.seed if args.seed is not None else resolve_seed()
    logger.info("Starting terminal session with seed %s", seed)
    run_session(GameEngine(rng=np.random.default_rng(seed)))
    return 0


if __name__ == "__main__":
    sys.exit(main())
