"""Core of a small falling-block puzzle game."""

from .piece import Piece, Shape, shape_pattern, spawn_random
from .board import Board, LockResult, Snapshot, render_grid
from .game import Action, Game

__all__ = [
    "Action",
    "Board",
    "Game",
    "LockResult",
    "Piece",
    "Shape",
    "Snapshot",
    "render_grid",
    "shape_pattern",
    "spawn_random",
]
