"""Entry point for the block-falling game.

Run with: `python -m blockfall`

By default a pygame window is opened.  ``--ascii`` instead prints a single
frame of the board plus the falling piece, useful as a smoke test on machines
without a display.
"""

from __future__ import annotations

import argparse
import logging
from typing import List, Optional, Sequence

from . import Game, render_grid

_GLYPHS = {0: ".", 1: "#", 2: "@"}


def format_grid(grid: List[List[int]]) -> str:
    return "\n".join("".join(_GLYPHS[cell] for cell in row) for row in grid)


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="blockfall", description=__doc__)
    parser.add_argument(
        "--ascii",
        action="store_true",
        help="Print one frame to stdout instead of opening a window.",
    )
    parser.add_argument("--seed", type=int, default=None, help="Seed for the piece sequence.")
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (e.g. DEBUG, INFO, WARNING).",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(message)s",
    )

    if args.ascii:
        game = Game.seeded(args.seed)
        print(format_grid(render_grid(game.snapshot())))
        return

    from .run_pygame import main as run_window  # pygame is only needed here

    run_window(args.seed)


if __name__ == "__main__":
    main()
