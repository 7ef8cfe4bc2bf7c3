"""Time-driven simulation engine for a single-player snake game."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime, timezone

import numpy as np

from snake_engine.clock import monotonic_ms
from snake_engine.config import GameConfig
from snake_engine.difficulty import (
    GameDifficulty,
    score_multiplier,
    tick_delay_ms,
)
from snake_engine.errors import ValidationError
from snake_engine.events import (
    MSG_DIRECTION_CHANGED,
    MSG_FOOD_EATEN,
    MSG_GAME_PAUSED,
    MSG_GAME_RESET,
    MSG_GAME_RESUMED,
    MSG_GAME_STARTED,
    MSG_SELF_COLLISION,
    MSG_SPECIAL_FOOD_EATEN,
    MSG_VICTORY,
    MSG_WALL_COLLISION,
    SnakeGameEvent,
    SnakeGameEventType,
)
from snake_engine.food import FoodSpawner
from snake_engine.geometry import Direction, Position, is_opposite
from snake_engine.grid import in_bounds
from snake_engine.state import GameState, GameStatus
from snake_engine.validator import (
    validate_difficulty,
    validate_direction,
    validate_grid_dimensions,
)

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SnakeGameEngine:
    """Single-snake engine advanced by wall-clock time.

    A driver calls :meth:`update` frequently (every frame). Elapsed time is
    accumulated and, once it reaches the difficulty's tick interval, exactly
    one movement tick is performed and the accumulator is cleared. Excess
    time is dropped rather than replayed as extra ticks.

    Readers get independent copies from :meth:`get_current_state` and drain
    the event log with :meth:`get_events_since_last_update`.

    The engine is not thread-safe; callers sharing it across threads must
    serialize every call.
    """

    def __init__(
        self,
        config: GameConfig | None = None,
        *,
        seed: int | None = None,
        rng: np.random.Generator | None = None,
        clock: Callable[[], float] | None = None,
    ) -> None:
        self.config = config or GameConfig()
        self.rng = rng if rng is not None else np.random.default_rng(seed)
        self._clock = clock if clock is not None else monotonic_ms
        self._food = FoodSpawner(self.rng, attempts=self.config.spawn_attempts)
        self._events: list[SnakeGameEvent] = []
        self._state = GameState()
        self._accumulated_ms = 0.0
        self._last_update_ms: float | None = None
        self._start_ms: float | None = None
        self._clock_start_ms = 0.0
        self._clock_update_ms = 0.0
        self.tick = 0

        self.initialize()

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def is_game_active(self) -> bool:
        return self._state.status == GameStatus.PLAYING

    def get_current_state(self) -> GameState:
        """Return a deep copy of the current state."""
        return self._state.clone()

    def get_events_since_last_update(self) -> list[SnakeGameEvent]:
        """Return and clear all events recorded since the previous drain."""
        events = self._events
        self._events = []
        return events

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def initialize(
        self,
        difficulty: GameDifficulty | None = None,
        width: int | None = None,
        height: int | None = None,
    ) -> None:
        """Start a fresh game in the ``NOT_STARTED`` state.

        Omitted arguments fall back to the engine's config.
        """
        if difficulty is None:
            difficulty = self.config.difficulty
        if width is None:
            width = self.config.grid_width
        if height is None:
            height = self.config.grid_height
        validate_difficulty(difficulty)
        validate_grid_dimensions(width, height)
        if self.config.initial_length > width // 2 + 1:
            raise ValidationError(
                f"A snake of length {self.config.initial_length} does not fit "
                f"a grid {width} cells wide."
            )

        self._state = GameState(
            grid_width=width,
            grid_height=height,
            difficulty=difficulty,
            status=GameStatus.NOT_STARTED,
            start_time=_utcnow(),
        )
        self._place_snake()
        self._events.clear()
        self._food.spawn_food(self._state)
        self._accumulated_ms = 0.0
        self._last_update_ms = None
        self._start_ms = None
        self.tick = 0

    def start(self, now: float | None = None) -> None:
        """Begin play.

        When *now* is omitted, timing is anchored lazily: an :meth:`update`
        without a timestamp measures from the engine clock reading taken
        here, and the first :meth:`update` given an explicit timestamp
        measures from that timestamp instead.
        """
        if self._state.status != GameStatus.NOT_STARTED:
            return
        self._state.status = GameStatus.PLAYING
        self._state.start_time = _utcnow()
        self._start_ms = now
        self._last_update_ms = now
        self._clock_start_ms = self._clock_update_ms = self._clock()
        self._emit(SnakeGameEventType.GAME_STARTED, MSG_GAME_STARTED)
        logger.info(
            "Game started on a %dx%d grid at %s difficulty.",
            self._state.grid_width,
            self._state.grid_height,
            self._state.difficulty.value,
        )

    def pause(self) -> None:
        if self._state.status != GameStatus.PLAYING:
            return
        self._state.status = GameStatus.PAUSED
        self._emit(SnakeGameEventType.GAME_PAUSED, MSG_GAME_PAUSED)

    def resume(self, now: float | None = None) -> None:
        if self._state.status != GameStatus.PAUSED:
            return
        self._state.status = GameStatus.PLAYING
        # Time spent paused never reaches the accumulator.
        self._last_update_ms = now
        self._clock_update_ms = self._clock()
        self._emit(SnakeGameEventType.GAME_RESUMED, MSG_GAME_RESUMED)

    def reset(self) -> None:
        """Re-initialize with the same difficulty and grid size.

        The ``GAME_RESET`` event carries the elapsed time of the game being
        discarded and survives the buffer clear done by initialization.
        """
        elapsed = self._state.elapsed_ms
        self.initialize(
            self._state.difficulty,
            self._state.grid_width,
            self._state.grid_height,
        )
        self._events.append(SnakeGameEvent(
            SnakeGameEventType.GAME_RESET, elapsed, message=MSG_GAME_RESET,
        ))
        logger.info("Game reset.")

    def set_next_direction(self, direction: Direction) -> None:
        """Queue the direction applied on the next tick.

        A reversal of the current direction is dropped without an event.
        """
        validate_direction(direction)
        if is_opposite(self._state.current_direction, direction):
            return
        self._state.next_direction = direction
        self._emit(
            SnakeGameEventType.DIRECTION_CHANGED,
            MSG_DIRECTION_CHANGED.format(direction.name.lower()),
        )

    # ------------------------------------------------------------------
    # Food control
    # ------------------------------------------------------------------

    def place_food(self, position: Position) -> None:
        """Put the regular food on a chosen free cell."""
        self._food.place_food(self._state, position)

    def place_special_food(self, position: Position) -> None:
        """Put the special food on a chosen free cell."""
        self._food.place_special_food(self._state, position)

    def spawn_special_food(self) -> Position | None:
        """Put the special food on a random free cell."""
        return self._food.spawn_special_food(self._state)

    # ------------------------------------------------------------------
    # Simulation
    # ------------------------------------------------------------------

    def update(self, now: float | None = None) -> bool:
        """Advance the clock to *now* (milliseconds) and tick if due.

        Returns ``True`` when a tick was performed.
        """
        if self._state.status != GameStatus.PLAYING:
            return False

        if now is None:
            now = self._clock()
            start_mark, update_mark = (
                self._clock_start_ms, self._clock_update_ms,
            )
        else:
            start_mark = update_mark = now
        if self._start_ms is None:
            self._start_ms = start_mark
        if self._last_update_ms is None:
            self._last_update_ms = update_mark

        elapsed = max(0.0, now - self._last_update_ms)
        self._last_update_ms = now
        self._state.elapsed_ms = max(0, int(now - self._start_ms))
        self._accumulated_ms += elapsed

        if self._accumulated_ms < tick_delay_ms(self._state.difficulty):
            return False
        self._tick()
        self._accumulated_ms = 0.0
        return True

    def _tick(self) -> None:
        state = self._state
        state.current_direction = state.next_direction
        new_head = state.head + state.current_direction.delta
        self.tick += 1

        if not in_bounds(new_head, state.grid_width, state.grid_height):
            self._end_game(MSG_WALL_COLLISION, new_head)
            return
        if new_head in state.snake_body:
            self._end_game(MSG_SELF_COLLISION, new_head)
            return

        state.snake_body.insert(0, new_head)
        logger.debug("Tick %d: head at %s.", self.tick, new_head)

        if new_head == state.food:
            gained = self._food_score(self.config.food_points)
            state.score += gained
            state.food_eaten += 1
            self._emit(
                SnakeGameEventType.FOOD_EATEN,
                MSG_FOOD_EATEN.format(gained),
                position=new_head,
                score_gained=gained,
            )
            self._food.spawn_food(state)
        elif state.special_food is not None and new_head == state.special_food:
            gained = self._food_score(self.config.special_food_points)
            state.score += gained
            state.food_eaten += 1
            self._emit(
                SnakeGameEventType.SPECIAL_FOOD_EATEN,
                MSG_SPECIAL_FOOD_EATEN.format(gained),
                position=new_head,
                score_gained=gained,
            )
            state.special_food = None
            if self.rng.random() < self.config.special_food_chance:
                self._food.spawn_special_food(state)
        else:
            state.snake_body.pop()

        if state.length >= self.config.victory_length:
            state.status = GameStatus.VICTORY
            state.game_over_time = _utcnow()
            self._emit(SnakeGameEventType.GAME_OVER, MSG_VICTORY)
            logger.info(
                "Victory at tick %d with score %d.", self.tick, state.score,
            )

    def _end_game(self, reason: str, position: Position) -> None:
        self._state.status = GameStatus.GAME_OVER
        self._state.game_over_time = _utcnow()
        self._emit(SnakeGameEventType.GAME_OVER, reason, position=position)
        logger.info(
            "Game over (%s) at tick %d with score %d.",
            reason,
            self.tick,
            self._state.score,
        )

    def _food_score(self, base_points: int) -> int:
        return round(base_points * score_multiplier(self._state.difficulty))

    def _place_snake(self) -> None:
        """Lay the snake out horizontally, head at the center, facing right."""
        state = self._state
        start_x = state.grid_width // 2
        start_y = state.grid_height // 2
        state.snake_body = [
            Position(start_x - i, start_y)
            for i in range(self.config.initial_length)
        ]
        state.current_direction = Direction.RIGHT
        state.next_direction = Direction.RIGHT

    def _emit(
        self,
        event_type: SnakeGameEventType,
        message: str,
        *,
        position: Position | None = None,
        score_gained: int | None = None,
    ) -> None:
        self._events.append(SnakeGameEvent(
            event_type,
            self._state.elapsed_ms,
            position=position,
            score_gained=score_gained,
            message=message,
        ))
