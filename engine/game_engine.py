"""Stateful 2048 game: board, score and status behind a small command API."""

from enum import Enum
from typing import List, Optional, Sequence

import numpy as np

from board_rules import (
    Direction,
    can_move,
    empty_board,
    simulate_move,
    spawn_tile,
    to_direction,
    validate_board,
    valid_moves,
    WIN_TILE,
)
from game_logging import get_logger

logger = get_logger(__name__)


class GameStatus(str, Enum):
    """Lifecycle of a game; WON and LOST end it until the next start."""

    IDLE = "idle"
    PLAYING = "playing"
    WON = "won"
    LOST = "lost"


class GameEngine:
    """Owns a single 4x4 game.

    Moves are ignored unless the game is PLAYING. The random source only
    needs ``integers(high)`` and ``random()``, so a seeded
    ``numpy.random.Generator`` or a test stub both work.
    """

    def __init__(self, initial_board: Optional[Sequence[Sequence[int]]] = None, rng=None) -> None:
        if initial_board is None:
            self._board = empty_board()
        else:
            self._board = validate_board(initial_board)
        self._score = 0
        self._status = GameStatus.IDLE
        self._rng = rng if rng is not None else np.random.default_rng()

    @classmethod
    def resume(cls, board: Sequence[Sequence[int]], score: int = 0, rng=None) -> "GameEngine":
        """Continue play from an existing position instead of a fresh deal."""
        if isinstance(score, bool) or not isinstance(score, (int, np.integer)) or score < 0:
            raise ValueError(f"Score must be a non-negative integer, got {score!r}")

        engine = cls(board, rng=rng)
        engine._score = int(score)
        engine._status = GameStatus.PLAYING if can_move(engine._board) else GameStatus.LOST
        return engine

    def get_state(self) -> List[List[int]]:
        return self._board.tolist()

    def get_score(self) -> int:
        return self._score

    def get_status(self) -> GameStatus:
        return self._status

    def start(self) -> None:
        self._board = empty_board()
        self._score = 0
        self._status = GameStatus.PLAYING
        spawn_tile(self._board, self._rng)
        spawn_tile(self._board, self._rng)
        logger.info("New game started: %s", self._board.tolist())

    def restart(self) -> None:
        self.start()

    def move(self, direction) -> bool:
        direction = to_direction(direction)
        if self._status is not GameStatus.PLAYING:
            return False

        result = simulate_move(self._board, direction)
        if not result.changed:
            logger.debug("Move %s left the board unchanged", direction.value)
            return False

        self._board = result.board
        self._score += result.gained
        if result.reached_win:
            self._status = GameStatus.WON
            logger.info("Reached %d with score %d", WIN_TILE, self._score)

        spawn_tile(self._board, self._rng)
        if not can_move(self._board):
            self._status = GameStatus.LOST
            logger.info("No moves left, final score %d", self._score)

        logger.debug("Move %s gained %d, score %d", direction.value, result.gained, self._score)
        return True

    def move_left(self) -> bool:
        return self.move(Direction.LEFT)

    def move_right(self) -> bool:
        return self.move(Direction.RIGHT)

    def move_up(self) -> bool:
        return self.move(Direction.UP)

    def move_down(self) -> bool:
        return self.move(Direction.DOWN)

    def can_move(self) -> bool:
        return can_move(self._board)

    def valid_moves(self) -> List[str]:
        if self._status is not GameStatus.PLAYING:
            return []
        return valid_moves(self._board)


__all__ = ["GameEngine", "GameStatus"]
