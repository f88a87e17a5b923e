"""High level driver feeding input and gravity ticks to a board."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from .board import Board, LockResult, Snapshot


# Seconds between automatic downward moves.
DROP_INTERVAL = 0.5


class Action(str, Enum):
    """Discrete player inputs understood by :class:`Game`."""

    MOVE_LEFT = "move_left"
    MOVE_RIGHT = "move_right"
    SOFT_DROP = "soft_drop"
    ROTATE = "rotate"


@dataclass
class Game:
    """Mutable state for a single game session.

    ``drop_accum`` collects elapsed time between gravity ticks.  Once it
    exceeds ``DROP_INTERVAL`` the board falls by one row and the accumulator
    starts again from zero.
    """

    board: Board = field(default_factory=Board)
    drop_accum: float = 0.0

    @classmethod
    def seeded(cls, seed: Optional[int]) -> "Game":
        """Return a game whose piece sequence is fixed by ``seed``."""

        return cls(board=Board(rng=random.Random(seed)))

    @property
    def game_over(self) -> bool:
        return self.board.is_game_over()

    def handle(self, action: Action) -> bool:
        """Apply ``action`` and return whether the board accepted it.

        Raises:
            ValueError: If ``action`` is not a known :class:`Action` value.
        """

        action = Action(action)
        if action is Action.MOVE_LEFT:
            return self.board.attempt_move(-1, 0)
        if action is Action.MOVE_RIGHT:
            return self.board.attempt_move(1, 0)
        if action is Action.SOFT_DROP:
            return self.board.attempt_move(0, 1)
        return self.board.attempt_rotate()

    def update(self, dt: float) -> Optional[LockResult]:
        """Advance the gravity timer by ``dt`` seconds.

        Returns the result of the gravity tick when one fired, otherwise
        ``None``.  Nothing accumulates after the game has ended.
        """

        if self.game_over:
            return None
        self.drop_accum += dt
        if self.drop_accum <= DROP_INTERVAL:
            return None
        self.drop_accum = 0.0
        return self.board.tick_gravity()

    def snapshot(self) -> Snapshot:
        return self.board.snapshot()

    def reset(self) -> None:
        """Start a new game on the same board and random source."""

        self.board.reset()
        self.drop_accum = 0.0
