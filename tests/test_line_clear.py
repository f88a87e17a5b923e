from __future__ import annotations

import random

import numpy as np

from blockfall.board import SPAWN_POSITION, Board
from blockfall.piece import Piece, Shape


def test_single_full_row_shifts_rows_above_down() -> None:
    board = Board(rng=random.Random(0))
    board.grid[15] = 1
    board.grid[14, 3] = 1
    board.grid[2, 7] = 1
    board.grid[18, 0] = 1
    before = board.grid.copy()

    assert board.clear_completed_lines() == 1

    assert np.array_equal(board.grid[1:16], before[0:15])
    assert np.array_equal(board.grid[16:], before[16:])
    assert not board.grid[0].any()
    assert board.grid[15, 3] == 1
    assert board.grid[3, 7] == 1
    assert int(board.grid.sum()) == 3


def test_two_adjacent_full_rows_are_both_removed() -> None:
    board = Board(rng=random.Random(0))
    board.grid[18] = 1
    board.grid[19] = 1
    board.grid[17, 4] = 1

    assert board.clear_completed_lines() == 2

    assert board.grid[19, 4] == 1
    assert not board.grid[:2].any()
    assert int(board.grid.sum()) == 1


def test_two_separate_full_rows_are_both_removed() -> None:
    board = Board(rng=random.Random(0))
    board.grid[10] = 1
    board.grid[19] = 1
    board.grid[9, 1] = 1
    board.grid[15, 2] = 1

    assert board.clear_completed_lines() == 2

    # Cells above both cleared rows fall two rows, those between fall one.
    assert board.grid[11, 1] == 1
    assert board.grid[16, 2] == 1
    assert not board.grid[:2].any()
    assert int(board.grid.sum()) == 2


def test_no_full_rows_leaves_grid_unchanged() -> None:
    board = Board(rng=random.Random(0))
    board.grid[19, :9] = 1
    before = board.grid.copy()
    assert board.clear_completed_lines() == 0
    assert np.array_equal(board.grid, before)


def test_lock_without_clear_keeps_footprint_and_respawns() -> None:
    board = Board(rng=random.Random(0))
    board.piece = Piece(Shape.O)
    board.position = (0, 18)

    result = board.tick_gravity()

    assert result
    assert result.lines_cleared == 0
    assert result.game_over is False
    assert board.grid[18:20, 0:2].all()
    assert int(board.grid.sum()) == 4
    assert board.position == SPAWN_POSITION
    assert board.piece.rotation == 0


def test_lock_completing_a_row_clears_it() -> None:
    board = Board(rng=random.Random(0))
    board.grid[19, 4:] = 1
    board.piece = Piece(Shape.I)
    board.position = (0, 19)

    result = board.tick_gravity()

    assert result.locked is True
    assert result.lines_cleared == 1
    assert not board.grid.any()
    assert board.position == SPAWN_POSITION
    assert not board.is_game_over()
