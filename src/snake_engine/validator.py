"""Precondition checks raising typed errors on malformed input."""

from __future__ import annotations

from snake_engine.difficulty import GameDifficulty
from snake_engine.errors import (
    InvalidGameStateError,
    InvalidPositionError,
    ValidationError,
)
from snake_engine.geometry import Direction, Position
from snake_engine.state import GameState

MIN_GRID_SIZE = 5
MAX_GRID_SIZE = 100


def validate_grid_dimensions(width: int, height: int) -> None:
    """Require both dimensions to lie in ``[5, 100]``."""
    if not isinstance(width, int) or not isinstance(height, int):
        raise ValidationError("Grid dimensions must be integers.")
    if width < MIN_GRID_SIZE or height < MIN_GRID_SIZE:
        raise ValidationError(
            f"Grid must be at least {MIN_GRID_SIZE}x{MIN_GRID_SIZE}."
        )
    if width > MAX_GRID_SIZE or height > MAX_GRID_SIZE:
        raise ValidationError(
            f"Grid cannot exceed {MAX_GRID_SIZE}x{MAX_GRID_SIZE}."
        )


def validate_position(
    position: Position | None, grid_width: int, grid_height: int,
) -> None:
    if position is None:
        raise ValidationError("position is required.")
    if not isinstance(position, Position):
        raise ValidationError(f"Not a position: {position!r}.")
    if not (0 <= position.x < grid_width and 0 <= position.y < grid_height):
        raise InvalidPositionError(position, grid_width, grid_height)


def validate_direction(direction: Direction) -> None:
    if not isinstance(direction, Direction):
        raise ValidationError(f"Invalid direction: {direction!r}.")


def validate_difficulty(difficulty: GameDifficulty) -> None:
    if not isinstance(difficulty, GameDifficulty):
        raise ValidationError(f"Invalid difficulty: {difficulty!r}.")


def validate_game_state(state: GameState | None) -> None:
    """Check that a state is well formed enough to be simulated.

    The snake must have at least one segment, the grid must meet the
    minimum size, and food must be present.
    """
    if state is None:
        raise ValidationError("state is required.")
    if not state.snake_body:
        raise InvalidGameStateError("the snake must have at least one segment")
    if state.grid_width < MIN_GRID_SIZE or state.grid_height < MIN_GRID_SIZE:
        raise InvalidGameStateError("the grid is too small")
    if state.food is None:
        raise InvalidGameStateError("food must be present")
