"""Food and special-food placement."""

from __future__ import annotations

import logging

import numpy as np

from snake_engine.errors import ValidationError
from snake_engine.geometry import Position
from snake_engine.grid import DEFAULT_SPAWN_ATTEMPTS, random_free_position
from snake_engine.state import GameState
from snake_engine.validator import validate_position

logger = logging.getLogger(__name__)


class FoodSpawner:
    """Places food items on free cells of a :class:`GameState`.

    Uses a seeded NumPy RNG for deterministic, reproducible placement.
    Regular food and special food never share a cell with the snake or
    with each other.
    """

    def __init__(
        self,
        rng: np.random.Generator | None = None,
        attempts: int = DEFAULT_SPAWN_ATTEMPTS,
    ) -> None:
        if attempts < 0:
            raise ValueError("attempts must be >= 0.")
        self.rng = rng if rng is not None else np.random.default_rng()
        self.attempts = attempts

    def spawn_food(self, state: GameState) -> Position | None:
        """Move the regular food to a random free cell.

        Returns the new position, or ``None`` if the grid is full.
        """
        occupied = list(state.snake_body)
        if state.special_food is not None:
            occupied.append(state.special_food)
        state.food = self._draw(state, occupied)
        if state.food is not None:
            logger.debug("Food spawned at %s.", state.food)
        return state.food

    def spawn_special_food(self, state: GameState) -> Position | None:
        """Move the special food to a random free cell."""
        occupied = list(state.snake_body)
        if state.food is not None:
            occupied.append(state.food)
        state.special_food = self._draw(state, occupied)
        if state.special_food is not None:
            logger.debug("Special food spawned at %s.", state.special_food)
        return state.special_food

    def place_food(self, state: GameState, position: Position) -> None:
        """Put the regular food on a chosen cell."""
        self._check_free(state, position, state.special_food)
        state.food = position

    def place_special_food(self, state: GameState, position: Position) -> None:
        """Put the special food on a chosen cell."""
        self._check_free(state, position, state.food)
        state.special_food = position

    def _draw(
        self, state: GameState, occupied: list[Position],
    ) -> Position | None:
        position = random_free_position(
            state.grid_width,
            state.grid_height,
            occupied,
            rng=self.rng,
            attempts=self.attempts,
        )
        if position is None:
            logger.warning("No free cells available for food placement.")
        return position

    @staticmethod
    def _check_free(
        state: GameState, position: Position, other: Position | None,
    ) -> None:
        validate_position(position, state.grid_width, state.grid_height)
        if position in state.snake_body:
            raise ValidationError(f"{position} is occupied by the snake.")
        if position == other:
            raise ValidationError(f"{position} is occupied by another food.")
