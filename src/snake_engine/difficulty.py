"""Difficulty levels and their tick interval / score multiplier tables."""

from __future__ import annotations

import enum

from snake_engine.errors import ValidationError


class GameDifficulty(enum.Enum):
    """Difficulty levels, ordered from easiest to hardest."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"
    INSANE = "insane"


DEFAULT_TICK_DELAY_MS = 100
DEFAULT_SCORE_MULTIPLIER = 1.0

_TICK_DELAYS_MS: dict[GameDifficulty, int] = {
    GameDifficulty.EASY: 150,
    GameDifficulty.MEDIUM: 100,
    GameDifficulty.HARD: 60,
    GameDifficulty.INSANE: 30,
}

_SCORE_MULTIPLIERS: dict[GameDifficulty, float] = {
    GameDifficulty.EASY: 1.0,
    GameDifficulty.MEDIUM: 1.5,
    GameDifficulty.HARD: 2.5,
    GameDifficulty.INSANE: 5.0,
}

ALL_DIFFICULTIES: list[GameDifficulty] = list(GameDifficulty)


def tick_delay_ms(difficulty: GameDifficulty) -> int:
    """Milliseconds between two movement ticks."""
    return _TICK_DELAYS_MS.get(difficulty, DEFAULT_TICK_DELAY_MS)


def score_multiplier(difficulty: GameDifficulty) -> float:
    """Factor applied to base food points."""
    return _SCORE_MULTIPLIERS.get(difficulty, DEFAULT_SCORE_MULTIPLIER)


def parse_difficulty(name: str | GameDifficulty) -> GameDifficulty:
    """Look up a difficulty by its value or member name, case-insensitively."""
    if isinstance(name, GameDifficulty):
        return name
    key = str(name).strip().lower()
    for difficulty in GameDifficulty:
        if key in (difficulty.value, difficulty.name.lower()):
            return difficulty
    raise ValidationError(f"Unknown difficulty: {name!r}.")
