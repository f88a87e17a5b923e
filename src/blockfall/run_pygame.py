"""Simple pygame front-end for the block-falling engine.

Only this module depends on ``pygame``; the board and driver know nothing about
windows, events or drawing.
"""

from __future__ import annotations

import logging
from typing import Dict, Optional, Tuple

import numpy as np
import pygame

from .board import WIDTH, Snapshot
from .game import Action, Game

LOGGER = logging.getLogger(__name__)

WINDOW_SIZE = (400, 800)
# Size of a single board cell in pixels
CELL_SIZE = WINDOW_SIZE[0] // WIDTH
# Frames per second to run the game loop at
FPS = 60

Color = Tuple[int, int, int]

BACKGROUND: Color = (51, 51, 51)
LOCKED_COLOR: Color = (255, 0, 0)
FALLING_COLOR: Color = (0, 255, 0)

KEY_ACTIONS: Dict[int, Action] = {
    pygame.K_LEFT: Action.MOVE_LEFT,
    pygame.K_RIGHT: Action.MOVE_RIGHT,
    pygame.K_DOWN: Action.SOFT_DROP,
    pygame.K_UP: Action.ROTATE,
}


def _draw_cell(screen: pygame.Surface, row: int, col: int, color: Color) -> None:
    rect = pygame.Rect(col * CELL_SIZE, row * CELL_SIZE, CELL_SIZE, CELL_SIZE)
    pygame.draw.rect(screen, color, rect)


def draw_snapshot(screen: pygame.Surface, snapshot: Snapshot) -> bool:
    """Render one frame and return whether anything was drawn.

    Nothing is drawn once the game is over, leaving the last frame on screen.
    """

    if snapshot.game_over:
        return False

    screen.fill(BACKGROUND)
    for row, col in zip(*np.nonzero(snapshot.grid)):
        _draw_cell(screen, int(row), int(col), LOCKED_COLOR)

    x, y = snapshot.position
    for row, col in zip(*np.nonzero(snapshot.occupancy)):
        _draw_cell(screen, y + int(row), x + int(col), FALLING_COLOR)
    return True


def handle_key(key: int, game: Game) -> bool:
    """Translate a pressed key into a game action.

    Keys without a binding are ignored and report ``False``.
    """

    action = KEY_ACTIONS.get(key)
    if action is None:
        return False
    return game.handle(action)


class GameRunner:
    """Own the pygame window and drive a :class:`Game` from its event loop."""

    def __init__(self, game: Optional[Game] = None) -> None:
        self.game = game or Game()
        self._running = False
        self._screen: Optional[pygame.Surface] = None
        self._clock: Optional[pygame.time.Clock] = None

    @property
    def running(self) -> bool:
        return self._running

    def handle_event(self, event: pygame.event.Event) -> None:
        """React to a single pygame event."""

        if event.type == pygame.QUIT:
            self.stop()
        elif event.type == pygame.KEYDOWN:
            if event.key == pygame.K_ESCAPE:
                self.stop()
            else:
                handle_key(event.key, self.game)

    def run(self) -> None:
        """Open the window and block until it is closed."""

        pygame.init()
        self._screen = pygame.display.set_mode(WINDOW_SIZE)
        pygame.display.set_caption("blockfall")
        self._clock = pygame.time.Clock()
        LOGGER.info("Game started")

        self._running = True
        try:
            while self._running:
                dt = self._clock.tick(FPS) / 1000.0
                for event in pygame.event.get():
                    self.handle_event(event)
                self.game.update(dt)
                if draw_snapshot(self._screen, self.game.snapshot()):
                    pygame.display.flip()
        finally:
            pygame.quit()
            LOGGER.info("Game stopped")

    def stop(self) -> None:
        """Ask the loop to exit after the current frame."""

        self._running = False


def main(seed: Optional[int] = None) -> None:
    """Run a windowed game until the window is closed."""

    GameRunner(Game.seeded(seed)).run()


if __name__ == "__main__":  # pragma: no cover - manual execution only
    main()
