"""Convenience entry points for code embedding the engine."""

from __future__ import annotations

from snake_engine.config import GameConfig
from snake_engine.engine import SnakeGameEngine
from snake_engine.geometry import Position
from snake_engine.grid import in_bounds
from snake_engine.state import GameState


def create_engine(
    config: GameConfig | None = None, *, seed: int | None = None,
) -> SnakeGameEngine:
    """Build an engine, already initialized from *config*."""
    return SnakeGameEngine(config, seed=seed)


def create_game_state() -> GameState:
    """Return an empty state with default dimensions."""
    return GameState()


def is_valid_position(
    position: Position, grid_width: int, grid_height: int,
) -> bool:
    return in_bounds(position, grid_width, grid_height)


def manhattan_distance(a: Position, b: Position) -> int:
    return abs(a.x - b.x) + abs(a.y - b.y)


def free_positions(state: GameState) -> list[Position]:
    """All cells not covered by the snake or any food, in row-major order."""
    occupied = set(state.snake_body)
    if state.food is not None:
        occupied.add(state.food)
    if state.special_food is not None:
        occupied.add(state.special_food)
    return [
        Position(x, y)
        for y in range(state.grid_height)
        for x in range(state.grid_width)
        if Position(x, y) not in occupied
    ]
