"""Exception hierarchy for the snake engine."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from snake_engine.geometry import Position


class SnakeGameError(Exception):
    """Base class for errors raised by the snake engine."""


class ValidationError(SnakeGameError, ValueError):
    """Raised when an input value is malformed or out of range."""


class InvalidGameStateError(ValidationError):
    """Raised when a :class:`GameState` is not well formed."""

    def __init__(self, message: str) -> None:
        super().__init__(f"Invalid game state: {message}")


class InvalidPositionError(ValidationError):
    """Raised when a position lies outside the grid."""

    def __init__(
        self, position: Position, grid_width: int, grid_height: int,
    ) -> None:
        self.position = position
        self.grid_width = grid_width
        self.grid_height = grid_height
        super().__init__(
            f"Invalid position ({position.x}, {position.y}) "
            f"for a {grid_width}x{grid_height} grid."
        )
