"""Grid positions and movement directions."""

from __future__ import annotations

import enum
from dataclasses import dataclass


@dataclass(frozen=True)
class Position:
    """An integer (x, y) cell coordinate.

    ``x`` grows to the right and ``y`` grows downward, so row ``y`` of a
    rendered board is the ``y``-th line of text.
    """

    x: int
    y: int

    def __add__(self, other: Position) -> Position:
        return Position(self.x + other.x, self.y + other.y)

    def copy(self) -> Position:
        return Position(self.x, self.y)

    def to_list(self) -> list[int]:
        return [self.x, self.y]

    def __str__(self) -> str:
        return f"({self.x}, {self.y})"


class Direction(enum.Enum):
    """Cardinal movement directions with (dx, dy) values."""

    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def delta(self) -> Position:
        """Unit displacement for one step in this direction."""
        dx, dy = self.value
        return Position(dx, dy)


# Pairs that would cause an instant 180° reversal.
_OPPOSITES: dict[Direction, Direction] = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}


def opposite(direction: Direction) -> Direction:
    """Return the direction pointing the other way."""
    return _OPPOSITES[direction]


def is_opposite(current: Direction, other: Direction) -> bool:
    """Check whether *other* reverses *current*."""
    return _OPPOSITES.get(current) == other
