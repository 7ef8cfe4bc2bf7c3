"""Mutable simulation snapshot for a single snake game."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from datetime import datetime

from snake_engine.difficulty import GameDifficulty
from snake_engine.geometry import Direction, Position


class GameStatus(str, enum.Enum):
    """Lifecycle states of a game."""

    NOT_STARTED = "not_started"
    PLAYING = "playing"
    PAUSED = "paused"
    GAME_OVER = "game_over"
    VICTORY = "victory"


TERMINAL_STATUSES = frozenset({GameStatus.GAME_OVER, GameStatus.VICTORY})


@dataclass
class GameState:
    """Everything the engine knows about a game at one instant.

    The snake body is ordered head first: ``snake_body[0]`` is the head and
    ``snake_body[-1]`` the tail. Only the engine mutates a live state;
    readers receive copies from :meth:`clone`.
    """

    grid_width: int = 20
    grid_height: int = 15
    snake_body: list[Position] = field(default_factory=list)
    food: Position | None = None
    special_food: Position | None = None
    current_direction: Direction = Direction.RIGHT
    next_direction: Direction = Direction.RIGHT
    score: int = 0
    food_eaten: int = 0
    status: GameStatus = GameStatus.NOT_STARTED
    difficulty: GameDifficulty = GameDifficulty.MEDIUM
    elapsed_ms: int = 0
    start_time: datetime | None = None
    game_over_time: datetime | None = None

    @property
    def head(self) -> Position | None:
        return self.snake_body[0] if self.snake_body else None

    @property
    def tail(self) -> Position | None:
        return self.snake_body[-1] if self.snake_body else None

    @property
    def length(self) -> int:
        return len(self.snake_body)

    @property
    def is_colliding_with_self(self) -> bool:
        """True when the head shares a cell with any other segment."""
        head = self.head
        return head is not None and head in self.snake_body[1:]

    @property
    def is_out_of_bounds(self) -> bool:
        """True when the head is missing or outside the grid."""
        head = self.head
        if head is None:
            return True
        return not (
            0 <= head.x < self.grid_width and 0 <= head.y < self.grid_height
        )

    @property
    def is_finished(self) -> bool:
        return self.status in TERMINAL_STATUSES

    def clone(self) -> GameState:
        """Return an independent copy sharing no mutable containers."""
        return GameState(
            grid_width=self.grid_width,
            grid_height=self.grid_height,
            snake_body=[p.copy() for p in self.snake_body],
            food=self.food.copy() if self.food is not None else None,
            special_food=(
                self.special_food.copy()
                if self.special_food is not None else None
            ),
            current_direction=self.current_direction,
            next_direction=self.next_direction,
            score=self.score,
            food_eaten=self.food_eaten,
            status=self.status,
            difficulty=self.difficulty,
            elapsed_ms=self.elapsed_ms,
            start_time=self.start_time,
            game_over_time=self.game_over_time,
        )

    def to_dict(self) -> dict:
        """Serialize the state to a JSON-compatible dictionary."""
        return {
            "grid_width": self.grid_width,
            "grid_height": self.grid_height,
            "snake_body": [p.to_list() for p in self.snake_body],
            "food": self.food.to_list() if self.food is not None else None,
            "special_food": (
                self.special_food.to_list()
                if self.special_food is not None else None
            ),
            "current_direction": self.current_direction.name.lower(),
            "next_direction": self.next_direction.name.lower(),
            "score": self.score,
            "food_eaten": self.food_eaten,
            "status": self.status.value,
            "difficulty": self.difficulty.value,
            "elapsed_ms": self.elapsed_ms,
            "start_time": (
                self.start_time.isoformat() if self.start_time else None
            ),
            "game_over_time": (
                self.game_over_time.isoformat()
                if self.game_over_time else None
            ),
        }
