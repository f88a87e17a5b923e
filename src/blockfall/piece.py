"""Tetromino definitions and rotation.

Every piece is described by a 5x5 occupancy pattern indexed ``[row, col]``.
Rotation states are derived from the spawn orientation so that each shape
carries only as many distinct states as it actually has: one for ``O``, two for
``I``, ``S`` and ``Z`` and four for the rest.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Tuple

import numpy as np
from numpy.typing import NDArray

BOX_SIZE = 5

Offsets = List[Tuple[int, int]]
Pattern = NDArray[np.uint8]


class Shape(str, Enum):
    """Enumeration of the seven standard tetromino shapes."""

    I = "I"
    O = "O"
    T = "T"
    S = "S"
    Z = "Z"
    J = "J"
    L = "L"


def _rotate(offsets: Offsets) -> Offsets:
    """Return ``offsets`` rotated 90 degrees clockwise.

    The result is normalised so that the minimum row and column are zero, which
    keeps every state anchored to the top-left corner of the box.
    """

    rotated = [(c, -r) for r, c in offsets]
    min_r = min(r for r, _ in rotated)
    min_c = min(c for _, c in rotated)
    return sorted((r - min_r, c - min_c) for r, c in rotated)


def _to_pattern(offsets: Offsets) -> Pattern:
    pattern = np.zeros((BOX_SIZE, BOX_SIZE), dtype=np.uint8)
    rows, cols = np.asarray(offsets, dtype=np.int16).T
    pattern[rows, cols] = 1
    pattern.flags.writeable = False
    return pattern


def _generate_rotations(offsets: Offsets) -> List[Pattern]:
    """Collect the distinct rotation states reachable from ``offsets``."""

    states = [sorted(offsets)]
    while True:
        nxt = _rotate(states[-1])
        if nxt == states[0]:
            break
        states.append(nxt)
    return [_to_pattern(state) for state in states]


# Spawn orientation of each shape as (row, col) offsets inside the box.
_BASE_SHAPES: Dict[Shape, Offsets] = {
    Shape.I: [(0, 0), (0, 1), (0, 2), (0, 3)],
    Shape.O: [(0, 0), (0, 1), (1, 0), (1, 1)],
    Shape.T: [(0, 0), (0, 1), (0, 2), (1, 1)],
    Shape.S: [(0, 1), (0, 2), (1, 0), (1, 1)],
    Shape.Z: [(0, 0), (0, 1), (1, 1), (1, 2)],
    Shape.J: [(0, 0), (1, 0), (1, 1), (1, 2)],
    Shape.L: [(0, 2), (1, 0), (1, 1), (1, 2)],
}


PIECE_ROTATIONS: Dict[Shape, List[Pattern]] = {
    shape: _generate_rotations(offsets) for shape, offsets in _BASE_SHAPES.items()
}


def shape_pattern(shape: Shape, rotation: int) -> Pattern:
    """Return the 5x5 pattern for ``shape`` at ``rotation``.

    Rotation indices wrap around the shape's cycle, so any integer is accepted.
    """

    states = PIECE_ROTATIONS[shape]
    return states[rotation % len(states)]


@dataclass
class Piece:
    """A tetromino together with its current rotation state."""

    shape: Shape
    rotation: int = 0

    @property
    def cycle_length(self) -> int:
        return len(PIECE_ROTATIONS[self.shape])

    def occupancy(self) -> Pattern:
        """Return the read-only 5x5 pattern for the current rotation."""

        return shape_pattern(self.shape, self.rotation)

    def rotate(self) -> "Piece":
        """Advance to the next rotation state in place and return ``self``."""

        self.rotation = (self.rotation + 1) % self.cycle_length
        return self

    def rotated(self) -> "Piece":
        """Return a copy advanced by one rotation state."""

        return Piece(self.shape, self.rotation).rotate()

    def cells(self) -> List[Tuple[int, int]]:
        """Return the occupied ``(row, col)`` offsets inside the box."""

        rows, cols = np.nonzero(self.occupancy())
        return [(int(r), int(c)) for r, c in zip(rows, cols)]


def spawn_random(rng: random.Random) -> Piece:
    """Return a new piece of a uniformly chosen shape in spawn orientation."""

    return Piece(rng.choice(list(Shape)))
