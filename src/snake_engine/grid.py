"""Grid helpers: neighborhoods, pathfinding, free-cell search, rendering."""

from __future__ import annotations

import enum
from collections import deque
from collections.abc import Iterable
from typing import TYPE_CHECKING

import numpy as np

from snake_engine.geometry import Position

if TYPE_CHECKING:
    from snake_engine.state import GameState

# Random draws attempted before falling back to a full scan.
DEFAULT_SPAWN_ATTEMPTS = 50


class CellType(enum.IntEnum):
    """Integer codes stored in a rendered board array."""

    EMPTY = 0
    BODY = 1
    HEAD = 2
    FOOD = 3
    SPECIAL_FOOD = 4


_CELL_CHARS = np.array([".", "s", "H", "F", "*"])


def neighbors(position: Position) -> list[Position]:
    """Return the 8 surrounding cells, unfiltered."""
    x, y = position.x, position.y
    return [
        Position(x - 1, y - 1),
        Position(x, y - 1),
        Position(x + 1, y - 1),
        Position(x - 1, y),
        Position(x + 1, y),
        Position(x - 1, y + 1),
        Position(x, y + 1),
        Position(x + 1, y + 1),
    ]


def cardinal_neighbors(position: Position) -> list[Position]:
    """Return the 4 orthogonal neighbors in top, bottom, left, right order."""
    x, y = position.x, position.y
    return [
        Position(x, y - 1),
        Position(x, y + 1),
        Position(x - 1, y),
        Position(x + 1, y),
    ]


def in_bounds(position: Position, grid_width: int, grid_height: int) -> bool:
    """Check whether a position lies within the grid."""
    return 0 <= position.x < grid_width and 0 <= position.y < grid_height


def filter_valid(
    positions: Iterable[Position], grid_width: int, grid_height: int,
) -> list[Position]:
    """Keep only the positions that lie within the grid."""
    return [p for p in positions if in_bounds(p, grid_width, grid_height)]


def find_path(
    start: Position,
    goal: Position,
    grid_width: int,
    grid_height: int,
    obstacles: Iterable[Position] = (),
) -> list[Position]:
    """Shortest 4-connected path from *start* to *goal*, both inclusive.

    Breadth-first search; neighbors are expanded in the order returned by
    :func:`cardinal_neighbors`, so ties always resolve the same way.
    Returns an empty list when the goal cannot be reached.
    """
    blocked = set(obstacles)
    came_from: dict[Position, Position | None] = {start: None}
    queue = deque([start])

    while queue:
        current = queue.popleft()
        if current == goal:
            path = [current]
            while came_from[path[-1]] is not None:
                path.append(came_from[path[-1]])
            path.reverse()
            return path

        for nxt in cardinal_neighbors(current):
            if nxt in came_from or nxt in blocked:
                continue
            if not in_bounds(nxt, grid_width, grid_height):
                continue
            came_from[nxt] = current
            queue.append(nxt)

    return []


def snake_coverage(snake_body: list[Position]) -> list[Position]:
    """Cells the snake covers now or can reach with its first segments.

    The body plus the cardinal neighbors of the first three segments,
    de-duplicated in discovery order. Neighbors are not bounds-filtered.
    """
    coverage = dict.fromkeys(snake_body)
    for segment in snake_body[:3]:
        coverage.update(dict.fromkeys(cardinal_neighbors(segment)))
    return list(coverage)


def random_free_position(
    grid_width: int,
    grid_height: int,
    occupied: Iterable[Position],
    rng: np.random.Generator | None = None,
    attempts: int = DEFAULT_SPAWN_ATTEMPTS,
) -> Position | None:
    """Pick a cell not in *occupied*.

    Tries *attempts* uniform random draws first, then scans the grid row by
    row and returns the first free cell. Returns ``None`` only when every
    cell is occupied.
    """
    taken = set(occupied)
    rng = rng if rng is not None else np.random.default_rng()

    for _ in range(attempts):
        candidate = Position(
            int(rng.integers(0, grid_width)),
            int(rng.integers(0, grid_height)),
        )
        if candidate not in taken:
            return candidate

    for y in range(grid_height):
        for x in range(grid_width):
            candidate = Position(x, y)
            if candidate not in taken:
                return candidate

    return None


def occupancy_percentage(
    snake_body: list[Position], grid_width: int, grid_height: int,
) -> float:
    """Share of the grid covered by the snake, in percent."""
    return len(snake_body) / (grid_width * grid_height) * 100


def board_array(state: GameState) -> np.ndarray:
    """Rasterize a state into a ``(height, width)`` array of :class:`CellType`.

    Items lying outside the grid are skipped. The head is painted last so
    it wins over any body segment sharing its cell.
    """
    cells = np.full(
        (state.grid_height, state.grid_width), CellType.EMPTY, dtype=np.int8,
    )

    def paint(position: Position | None, cell_type: CellType) -> None:
        if position is not None and in_bounds(
            position, state.grid_width, state.grid_height,
        ):
            cells[position.y, position.x] = cell_type

    paint(state.food, CellType.FOOD)
    paint(state.special_food, CellType.SPECIAL_FOOD)
    for segment in reversed(state.snake_body[1:]):
        paint(segment, CellType.BODY)
    paint(state.head, CellType.HEAD)
    return cells


def debug_visualize(state: GameState) -> str:
    """Render a state as text, one line per grid row.

    ``.`` empty, ``F`` food, ``*`` special food, ``s`` body, ``H`` head.
    """
    chars = _CELL_CHARS[board_array(state)]
    return "".join("".join(row) + "\n" for row in chars)
