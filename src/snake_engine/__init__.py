"""Snake Engine: tick-based single-player snake simulation core."""

from snake_engine.config import GameConfig
from snake_engine.difficulty import (
    GameDifficulty,
    score_multiplier,
    tick_delay_ms,
)
from snake_engine.engine import SnakeGameEngine
from snake_engine.errors import (
    InvalidGameStateError,
    InvalidPositionError,
    SnakeGameError,
    ValidationError,
)
from snake_engine.events import SnakeGameEvent, SnakeGameEventType
from snake_engine.geometry import Direction, Position, is_opposite, opposite
from snake_engine.state import GameState, GameStatus
from snake_engine.stats import GameHistory, GameStatistics

__all__ = [
    "Direction",
    "GameConfig",
    "GameDifficulty",
    "GameHistory",
    "GameState",
    "GameStatistics",
    "GameStatus",
    "InvalidGameStateError",
    "InvalidPositionError",
    "Position",
    "SnakeGameEngine",
    "SnakeGameError",
    "SnakeGameEvent",
    "SnakeGameEventType",
    "ValidationError",
    "is_opposite",
    "opposite",
    "score_multiplier",
    "tick_delay_ms",
]
