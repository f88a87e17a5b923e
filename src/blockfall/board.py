"""Board representation for the playfield and the falling piece."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np
from numpy.typing import NDArray

from .piece import BOX_SIZE, Pattern, Piece, spawn_random


LOGGER = logging.getLogger(__name__)

# Dimensions of the playfield in cells.
WIDTH = 10
HEIGHT = 20

# Top-left corner of the 5x5 box for every freshly spawned piece, as (x, y).
SPAWN_POSITION: Tuple[int, int] = (0, 0)

Grid = NDArray[np.uint8]
Position = Tuple[int, int]

# Values produced by ``render_grid``.
EMPTY = 0
LOCKED = 1
FALLING = 2


def create_empty_grid(width: int = WIDTH, height: int = HEIGHT) -> Grid:
    """Return a new empty grid of shape ``(height, width)``."""

    return np.zeros((height, width), dtype=np.uint8)


@dataclass(frozen=True)
class LockResult:
    """Outcome of a gravity tick.

    The result is truthy only when the falling piece was locked into the grid.
    """

    locked: bool
    lines_cleared: int = 0
    game_over: bool = False

    def __bool__(self) -> bool:
        return self.locked


@dataclass(frozen=True)
class Snapshot:
    """Read-only view of the board handed to renderers each frame."""

    grid: Grid
    occupancy: Pattern
    position: Position
    game_over: bool


class Board:
    """Grid of locked cells plus the currently falling piece.

    Positions are ``(x, y)`` pairs giving the column and row of the top-left
    corner of the piece's 5x5 box.  Pattern cell ``(row, col)`` therefore lands
    on grid cell ``(y + row, x + col)``.
    """

    def __init__(
        self,
        *,
        width: int = WIDTH,
        height: int = HEIGHT,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.width = width
        self.height = height
        self.rng = rng or random.Random()
        self.grid: Grid = create_empty_grid(width, height)
        self.game_over = False
        self.piece: Piece
        self.position: Position
        self.spawn()

    def reset(self) -> None:
        """Empty the grid and start over with a fresh piece."""

        self.grid[:] = 0
        self.game_over = False
        self.spawn()

    # Validity ---------------------------------------------------------
    def is_valid(self, position: Position, occupancy: Pattern) -> bool:
        """Return ``True`` if ``occupancy`` fits at ``position``.

        Every occupied cell must land inside the board and on an empty cell.
        Bounds are checked first so the grid is never indexed out of range.
        """

        if np.shape(occupancy) != (BOX_SIZE, BOX_SIZE):
            raise ValueError(f"Occupancy must be {BOX_SIZE}x{BOX_SIZE}")
        x, y = position
        for row, col in zip(*np.nonzero(occupancy)):
            r = y + int(row)
            c = x + int(col)
            if not (0 <= r < self.height and 0 <= c < self.width):
                return False
            if self.grid[r, c] != 0:
                return False
        return True

    # Player input -----------------------------------------------------
    def attempt_move(self, dx: int, dy: int) -> bool:
        """Shift the piece by ``(dx, dy)`` if the destination is valid."""

        if self.is_game_over():
            return False
        x, y = self.position
        candidate = (x + dx, y + dy)
        if not self.is_valid(candidate, self.piece.occupancy()):
            return False
        self.position = candidate
        return True

    def attempt_rotate(self) -> bool:
        """Rotate the piece in place if the next state fits.

        There is no wall kick: a rotation that collides simply fails.
        """

        if self.is_game_over():
            return False
        candidate = self.piece.rotated()
        if not self.is_valid(self.position, candidate.occupancy()):
            return False
        self.piece = candidate
        return True

    # Gravity and locking ----------------------------------------------
    def tick_gravity(self) -> LockResult:
        """Move the piece down one row, locking it when it cannot fall.

        A lock merges the piece into the grid, clears completed lines, spawns
        the next piece and finally checks for game over.
        """

        if self.is_game_over():
            return LockResult(locked=False, game_over=True)
        if self.attempt_move(0, 1):
            return LockResult(locked=False)

        self.lock()
        cleared = self.clear_completed_lines()
        self.spawn()
        if self.is_game_over():
            self.game_over = True
            LOGGER.info("Game over")
        return LockResult(locked=True, lines_cleared=cleared, game_over=self.game_over)

    def lock(self) -> None:
        """Copy the falling piece's occupied cells into the grid.

        Raises:
            IndexError: If any cell would land outside the board.
        """

        x, y = self.position
        rows, cols = np.nonzero(self.piece.occupancy())
        rows = rows + y
        cols = cols + x
        if (
            np.any(rows < 0)
            or np.any(rows >= self.height)
            or np.any(cols < 0)
            or np.any(cols >= self.width)
        ):
            raise IndexError("Block out of bounds")
        self.grid[rows, cols] = LOCKED
        LOGGER.debug("Locked %s piece at %s", self.piece.shape.value, self.position)

    def spawn(self) -> Piece:
        """Replace the falling piece with a random one at the spawn position.

        A spawn that overlaps locked cells ends the game.
        """

        self.piece = spawn_random(self.rng)
        self.position = SPAWN_POSITION
        if not self.is_valid(self.position, self.piece.occupancy()):
            self.game_over = True
        return self.piece

    def clear_completed_lines(self) -> int:
        """Remove every full row and return how many were removed.

        Rows above a removed row shift down and empty rows are inserted at the
        top.  The grid is updated in place.
        """

        full_rows = np.all(self.grid != 0, axis=1)
        cleared = int(np.count_nonzero(full_rows))
        if cleared:
            remaining = self.grid[~full_rows].copy()
            self.grid[:cleared] = 0
            self.grid[cleared:] = remaining
            LOGGER.debug("Cleared %d row(s)", cleared)
        return cleared

    def is_game_over(self) -> bool:
        """Return ``True`` once the game has ended or the top row is occupied."""

        return self.game_over or bool(np.any(self.grid[0]))

    # Rendering --------------------------------------------------------
    def snapshot(self) -> Snapshot:
        """Return a copy of the state a renderer needs for one frame."""

        return Snapshot(
            grid=self.grid.copy(),
            occupancy=self.piece.occupancy(),
            position=self.position,
            game_over=self.is_game_over(),
        )


def render_grid(snapshot: Snapshot) -> List[List[int]]:
    """Return the locked grid with the falling piece overlaid.

    Locked cells are ``LOCKED`` and cells of the falling piece are ``FALLING``,
    so a renderer can colour them differently.
    """

    grid = [[LOCKED if cell else EMPTY for cell in row] for row in snapshot.grid.tolist()]
    height = len(grid)
    width = len(grid[0]) if grid else 0
    x, y = snapshot.position
    for row, col in zip(*np.nonzero(snapshot.occupancy)):
        r = y + int(row)
        c = x + int(col)
        if 0 <= r < height and 0 <= c < width:
            grid[r][c] = FALLING
    return grid
