"""Core 2048 board mechanics shared by the game engine and tests."""

from enum import Enum
from typing import Callable, Dict, Iterable, List, NamedTuple, Optional, Sequence, Tuple, Union

import numpy as np

BOARD_SIZE = 4
WIN_TILE = 2048
FOUR_PROBABILITY = 0.1


class Direction(str, Enum):
    UP = "UP"
    RIGHT = "RIGHT"
    DOWN = "DOWN"
    LEFT = "LEFT"


DIRECTION_NAMES: Sequence[str] = tuple(d.value for d in Direction)


class InvalidBoardError(ValueError):
    """Raised when a grid is not a 4x4 board of empty cells and powers of two."""


class MoveResult(NamedTuple):
    board: np.ndarray
    changed: bool
    gained: int
    reached_win: bool


def empty_board() -> np.ndarray:
    return np.zeros((BOARD_SIZE, BOARD_SIZE), dtype=np.int64)


def validate_board(grid: Sequence[Sequence[int]]) -> np.ndarray:
    try:
        raw = np.array(grid)
    except (OverflowError, TypeError, ValueError) as exc:
        raise InvalidBoardError(f"Board is not a rectangular integer grid: {exc}") from exc

    if raw.shape != (BOARD_SIZE, BOARD_SIZE):
        raise InvalidBoardError(
            f"Expected {BOARD_SIZE}x{BOARD_SIZE} grid, received shape {raw.shape}"
        )
    # Oversized ints infer as object dtype.
    if raw.dtype.kind not in "iu":
        raise InvalidBoardError(f"Tiles must be integers, received dtype {raw.dtype}")

    board = raw.astype(np.int64)
    if not np.array_equal(board, raw):
        raise InvalidBoardError("Tile values do not fit in a 64-bit integer")

    for (row, col), value in np.ndenumerate(board):
        if value != 0 and (value < 2 or value & (value - 1) != 0):
            raise InvalidBoardError(
                f"Tile at ({row}, {col}) must be 0 or a power of two, got {value}"
            )
    return board


def _reverse_rows(board: np.ndarray) -> np.ndarray:
    return np.fliplr(board)


def _transpose(board: np.ndarray) -> np.ndarray:
    return board.T


def _identity(board: np.ndarray) -> np.ndarray:
    return board


# Each direction maps to (normalize-to-left, restore) transforms.
TRANSFORMS: Dict[Direction, Tuple[Callable[[np.ndarray], np.ndarray], Callable[[np.ndarray], np.ndarray]]] = {
    Direction.LEFT: (_identity, _identity),
    Direction.RIGHT: (_reverse_rows, _reverse_rows),
    Direction.UP: (_transpose, _transpose),
    Direction.DOWN: (
        lambda board: _reverse_rows(_transpose(board)),
        lambda board: _transpose(_reverse_rows(board)),
    ),
}


def to_direction(direction: Union[Direction, str]) -> Direction:
    if isinstance(direction, Direction):
        return direction
    try:
        return Direction(str(direction).upper())
    except ValueError:
        raise ValueError(f"Unknown direction: {direction}") from None


def merge_row(row: Iterable[int]) -> Tuple[List[int], int, bool]:
    """Slide a single row to the left and merge equal neighbours once.

    Returns the merged row, the points gained from merges and whether a
    merge produced the winning tile. Merges are pairwise and never cascade:
    ``[2, 2, 2, 0]`` becomes ``[4, 2, 0, 0]``.
    """
    values = [int(v) for v in row]
    non_zero = [v for v in values if v != 0]
    merged: List[int] = []
    gained = 0
    reached_win = False
    idx = 0

    while idx < len(non_zero):
        value = non_zero[idx]
        if idx + 1 < len(non_zero) and non_zero[idx + 1] == value:
            new_value = value * 2
            merged.append(new_value)
            gained += new_value
            if new_value == WIN_TILE:
                reached_win = True
            idx += 2
        else:
            merged.append(value)
            idx += 1

    merged.extend([0] * (len(values) - len(merged)))
    return merged, gained, reached_win


def simulate_move(grid: Sequence[Sequence[int]], direction: Union[Direction, str]) -> MoveResult:
    direction = to_direction(direction)
    original = np.array(grid, dtype=np.int64)
    forward, inverse = TRANSFORMS[direction]

    rows = []
    gained = 0
    reached_win = False
    for row in forward(original):
        new_row, row_gain, row_win = merge_row(row)
        rows.append(new_row)
        gained += row_gain
        reached_win = reached_win or row_win

    next_board = np.ascontiguousarray(inverse(np.array(rows, dtype=np.int64)))
    changed = not np.array_equal(next_board, original)
    return MoveResult(next_board, changed, gained, reached_win)


def can_move(grid: Sequence[Sequence[int]]) -> bool:
    board = np.asarray(grid)
    if (board == 0).any():
        return True
    # Only right and down neighbours need checking.
    if (board[:, :-1] == board[:, 1:]).any():
        return True
    return bool((board[:-1, :] == board[1:, :]).any())


def empty_cells(grid: Sequence[Sequence[int]]) -> List[Tuple[int, int]]:
    rows, cols = np.nonzero(np.asarray(grid) == 0)
    return [(int(r), int(c)) for r, c in zip(rows, cols)]


def spawn_tile(board: np.ndarray, rng) -> Optional[Tuple[int, int]]:
    cells = empty_cells(board)
    if not cells:
        return None

    row, col = cells[int(rng.integers(len(cells)))]
    board[row, col] = 4 if rng.random() < FOUR_PROBABILITY else 2
    return row, col


def valid_moves(grid: Sequence[Sequence[int]]) -> List[str]:
    allowed: List[str] = []
    for direction in Direction:
        if simulate_move(grid, direction).changed:
            allowed.append(direction.value)
    return allowed


__all__ = [
    "BOARD_SIZE",
    "DIRECTION_NAMES",
    "Direction",
    "InvalidBoardError",
    "MoveResult",
    "TRANSFORMS",
    "WIN_TILE",
    "can_move",
    "empty_board",
    "empty_cells",
    "merge_row",
    "simulate_move",
    "spawn_tile",
    "to_direction",
    "valid_moves",
]
