"""Game configuration with JSON persistence."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass
from pathlib import Path

from snake_engine.difficulty import GameDifficulty, parse_difficulty
from snake_engine.errors import ValidationError
from snake_engine.validator import validate_difficulty, validate_grid_dimensions

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GameConfig:
    """Rules and defaults for a single-player game.

    Supports JSON serialization so a driver can persist its settings.
    """

    # Grid
    grid_width: int = 20
    grid_height: int = 15
    difficulty: GameDifficulty = GameDifficulty.MEDIUM

    # Snake
    initial_length: int = 3
    victory_length: int = 50

    # Scoring
    food_points: int = 10
    special_food_points: int = 50
    special_food_chance: float = 0.3

    # Placement
    spawn_attempts: int = 50

    # Frame cadence used by headless drivers
    update_interval_ms: int = 16

    def __post_init__(self) -> None:
        validate_grid_dimensions(self.grid_width, self.grid_height)
        validate_difficulty(self.difficulty)
        if self.initial_length < 1:
            raise ValidationError("initial_length must be at least 1.")
        if self.victory_length <= self.initial_length:
            raise ValidationError(
                "victory_length must be greater than initial_length."
            )
        if not 0.0 <= self.special_food_chance <= 1.0:
            raise ValidationError(
                "special_food_chance must be between 0 and 1."
            )
        if self.spawn_attempts < 0:
            raise ValidationError("spawn_attempts must be >= 0.")
        if self.update_interval_ms < 1:
            raise ValidationError("update_interval_ms must be at least 1.")

    def to_dict(self) -> dict:
        """Serialize to a plain dict (the difficulty becomes its value)."""
        d = asdict(self)
        d["difficulty"] = self.difficulty.value
        return d

    def save(self, path: str | Path) -> None:
        """Write config to a JSON file."""
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(json.dumps(self.to_dict(), indent=2))
        logger.info("Config saved to %s", p)

    @classmethod
    def from_dict(cls, raw: dict) -> GameConfig:
        raw = dict(raw)
        if "difficulty" in raw:
            raw["difficulty"] = parse_difficulty(raw["difficulty"])
        return cls(**raw)

    @classmethod
    def load(cls, path: str | Path) -> GameConfig:
        """Load config from a JSON file."""
        return cls.from_dict(json.loads(Path(path).read_text()))
