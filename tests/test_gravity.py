from __future__ import annotations

import random

import numpy as np
import pytest

from blockfall.board import Board
from blockfall.game import DROP_INTERVAL, Action, Game
from blockfall.piece import Piece, Shape, shape_pattern


def make_game(shape: Shape = Shape.O, position=(3, 0)) -> Game:
    game = Game.seeded(0)
    game.board.piece = Piece(shape)
    game.board.position = position
    return game


@pytest.mark.parametrize("shape", list(Shape))
def test_twenty_ticks_drop_piece_to_the_floor(shape: Shape) -> None:
    board = Board(rng=random.Random(0))
    board.piece = Piece(shape)
    board.position = (0, 0)
    pattern = shape_pattern(shape, 0)
    rows_used = int(np.any(pattern, axis=1).sum())

    results = [board.tick_gravity() for _ in range(20)]

    locks = [i for i, result in enumerate(results) if result.locked]
    assert locks == [board.height - rows_used]
    assert not board.is_game_over()
    assert not board.grid[0].any()
    footprint = board.grid[board.height - rows_used:, :5]
    assert np.array_equal(footprint, pattern[:rows_used])
    assert int(board.grid.sum()) == 4


def test_gravity_waits_for_interval() -> None:
    game = make_game()
    assert game.update(0.3) is None
    assert game.drop_accum == pytest.approx(0.3)
    assert game.board.position == (3, 0)

    result = game.update(0.3)
    assert result is not None and not result
    assert game.drop_accum == 0
    assert game.board.position == (3, 1)


def test_exact_interval_does_not_tick() -> None:
    game = make_game()
    assert game.update(DROP_INTERVAL) is None
    assert game.board.position == (3, 0)


def test_actions_map_to_board_operations() -> None:
    game = make_game(Shape.T)
    assert game.handle(Action.MOVE_LEFT) is True
    assert game.board.position == (2, 0)
    assert game.handle("move_right") is True
    assert game.board.position == (3, 0)
    assert game.handle(Action.SOFT_DROP) is True
    assert game.board.position == (3, 1)
    assert game.handle(Action.ROTATE) is True
    assert game.board.piece.rotation == 1


def test_unknown_action_raises() -> None:
    game = make_game()
    with pytest.raises(ValueError):
        game.handle("hard_drop")


def test_nothing_accumulates_after_game_over() -> None:
    game = make_game()
    game.board.game_over = True
    assert game.update(1.0) is None
    assert game.drop_accum == 0
    assert game.handle(Action.MOVE_LEFT) is False


def test_seeded_games_share_piece_sequence() -> None:
    first = Game.seeded(11)
    second = Game.seeded(11)
    for _ in range(5):
        assert first.board.piece.shape == second.board.piece.shape
        first.board.spawn()
        second.board.spawn()


def test_reset_clears_timer_and_grid() -> None:
    game = make_game()
    game.board.grid[19] = 1
    game.drop_accum = 0.4
    game.reset()
    assert game.drop_accum == 0
    assert not game.board.grid.any()
    assert not game.game_over
