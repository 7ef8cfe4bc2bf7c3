"""Per-game statistics and an append-only history of finished games."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from pydantic import BaseModel, ConfigDict, Field

from snake_engine.difficulty import GameDifficulty
from snake_engine.state import GameState, GameStatus

NO_GAMES_PLAYED = "No games played"


def _format_duration(ms: int, with_hours: bool = False) -> str:
    """``mm:ss`` or ``hh:mm:ss``; the short form drops whole hours."""
    total = int(timedelta(milliseconds=ms).total_seconds())
    hours, rest = divmod(total, 3600)
    minutes, seconds = divmod(rest, 60)
    if with_hours:
        return f"{hours:02d}:{minutes:02d}:{seconds:02d}"
    return f"{minutes:02d}:{seconds:02d}"


class GameStatistics(BaseModel):
    """Immutable summary of one game."""

    model_config = ConfigDict(frozen=True)

    final_score: int = Field(default=0, ge=0)
    final_length: int = Field(default=0, ge=0)
    food_eaten: int = Field(default=0, ge=0)
    duration_ms: int = Field(default=0, ge=0)
    difficulty: GameDifficulty = GameDifficulty.MEDIUM
    final_status: GameStatus = GameStatus.NOT_STARTED
    played_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
    )

    @classmethod
    def from_state(
        cls, state: GameState, played_at: datetime | None = None,
    ) -> GameStatistics:
        """Capture a snapshot of *state*; ``played_at`` defaults to now."""
        return cls(
            final_score=state.score,
            final_length=state.length,
            food_eaten=state.food_eaten,
            duration_ms=state.elapsed_ms,
            difficulty=state.difficulty,
            final_status=state.status,
            played_at=played_at or datetime.now(timezone.utc),
        )

    def average_eating_pace(self) -> float:
        """Seconds per food item, 0 when nothing was eaten."""
        if self.food_eaten == 0:
            return 0.0
        return self.duration_ms / 1000.0 / self.food_eaten

    def score_per_second(self) -> float:
        if self.duration_ms == 0:
            return 0.0
        return self.final_score / (self.duration_ms / 1000.0)

    def summary(self) -> str:
        if self.final_status == GameStatus.VICTORY:
            outcome = "VICTORY"
        elif self.final_status == GameStatus.GAME_OVER:
            outcome = "GAME OVER"
        else:
            outcome = "Unfinished"
        return (
            f"{outcome} | Score: {self.final_score} | "
            f"Length: {self.final_length} | "
            f"Time: {_format_duration(self.duration_ms)} | "
            f"Difficulty: {self.difficulty.value}"
        )

    def __str__(self) -> str:
        return self.summary()


class GameHistory:
    """Ordered, append-only record of played games.

    Aggregate queries return ``None`` (or :data:`NO_GAMES_PLAYED` for the
    text summary) while the history is empty.
    """

    def __init__(self) -> None:
        self._games: list[GameStatistics] = []

    @property
    def games(self) -> tuple[GameStatistics, ...]:
        return tuple(self._games)

    def __len__(self) -> int:
        return len(self._games)

    def add_game(self, state: GameState) -> GameStatistics:
        """Record a game and return the derived statistics."""
        stats = GameStatistics.from_state(state)
        self._games.append(stats)
        return stats

    def best_score(self) -> int | None:
        if not self._games:
            return None
        return max(g.final_score for g in self._games)

    def max_length(self) -> int | None:
        if not self._games:
            return None
        return max(g.final_length for g in self._games)

    def victory_count(self) -> int:
        return sum(
            1 for g in self._games if g.final_status == GameStatus.VICTORY
        )

    def average_score(self) -> float | None:
        if not self._games:
            return None
        return sum(g.final_score for g in self._games) / len(self._games)

    def total_duration_ms(self) -> int:
        return sum(g.duration_ms for g in self._games)

    def global_stats(self) -> str:
        if not self._games:
            return NO_GAMES_PLAYED
        return (
            f"Games: {len(self._games)} | "
            f"Victories: {self.victory_count()} | "
            f"Average score: {self.average_score():.1f} | "
            f"Total time: "
            f"{_format_duration(self.total_duration_ms(), with_hours=True)}"
        )

    def clear(self) -> None:
        self._games.clear()

    def to_dict(self) -> dict:
        """Serialize the history to a JSON-compatible dictionary."""
        return {"games": [g.model_dump(mode="json") for g in self._games]}
