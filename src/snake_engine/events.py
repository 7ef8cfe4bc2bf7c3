"""Game events emitted by the engine for a presentation layer."""

from __future__ import annotations

import enum
from dataclasses import dataclass

from snake_engine.geometry import Position

# Human-readable event messages.
MSG_GAME_STARTED = "Game started"
MSG_GAME_PAUSED = "Game paused"
MSG_GAME_RESUMED = "Game resumed"
MSG_GAME_RESET = "Game reset"
MSG_FOOD_EATEN = "Food eaten! +{0} points"
MSG_SPECIAL_FOOD_EATEN = "Special food eaten! +{0} points"
MSG_DIRECTION_CHANGED = "Direction changed to {0}"
MSG_WALL_COLLISION = "wall collision"
MSG_SELF_COLLISION = "self collision"
MSG_VICTORY = "Victory! The snake reached its maximum length!"


class SnakeGameEventType(str, enum.Enum):
    """Kinds of events the engine reports."""

    FOOD_EATEN = "food_eaten"
    SPECIAL_FOOD_EATEN = "special_food_eaten"
    COLLISION = "collision"
    DIRECTION_CHANGED = "direction_changed"
    GAME_STARTED = "game_started"
    GAME_PAUSED = "game_paused"
    GAME_RESUMED = "game_resumed"
    GAME_OVER = "game_over"
    GAME_RESET = "game_reset"


@dataclass(frozen=True)
class SnakeGameEvent:
    """A single occurrence during a game.

    ``timestamp`` is the number of milliseconds since the game started.
    """

    type: SnakeGameEventType
    timestamp: int
    position: Position | None = None
    score_gained: int | None = None
    message: str | None = None

    def to_dict(self) -> dict:
        return {
            "type": self.type.value,
            "timestamp": self.timestamp,
            "position": (
                self.position.to_list() if self.position is not None else None
            ),
            "score_gained": self.score_gained,
            "message": self.message,
        }

    def __str__(self) -> str:
        return f"[{self.type.value}] {self.timestamp}ms - {self.message}"
