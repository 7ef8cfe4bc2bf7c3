"""Tests for the SnakeGameEngine module."""

import json

import numpy as np
import pytest

from snake_engine.clock import SimulatedClock
from snake_engine.config import GameConfig
from snake_engine.difficulty import GameDifficulty, tick_delay_ms
from snake_engine.engine import SnakeGameEngine
from snake_engine.errors import ValidationError
from snake_engine.events import SnakeGameEventType
from snake_engine.geometry import Direction, Position
from snake_engine.state import GameStatus
from snake_engine.stats import GameHistory


def _make_engine(
    difficulty: GameDifficulty = GameDifficulty.EASY,
    width: int = 10,
    height: int = 10,
    seed: int = 0,
    **overrides,
) -> tuple[SnakeGameEngine, SimulatedClock]:
    clock = SimulatedClock(1_000.0)
    config = GameConfig(
        grid_width=width, grid_height=height, difficulty=difficulty,
        **overrides,
    )
    return SnakeGameEngine(config, seed=seed, clock=clock), clock


def _tick(engine: SnakeGameEngine, clock: SimulatedClock) -> bool:
    """Advance simulated time by one tick interval and update."""
    difficulty = engine.get_current_state().difficulty
    clock.advance(tick_delay_ms(difficulty))
    return engine.update()


def _types(events) -> list[SnakeGameEventType]:
    return [e.type for e in events]


class TestEngineInit:
    def test_initial_state(self):
        engine, _ = _make_engine()
        state = engine.get_current_state()
        assert state.status == GameStatus.NOT_STARTED
        assert state.length == 3
        assert state.score == 0
        assert state.food_eaten == 0
        assert state.special_food is None
        assert not engine.is_game_active

    def test_snake_centered_facing_right(self):
        engine, _ = _make_engine(width=10, height=10)
        state = engine.get_current_state()
        assert state.snake_body == [Position(5, 5), Position(4, 5), Position(3, 5)]
        assert state.current_direction == Direction.RIGHT
        assert state.next_direction == Direction.RIGHT

    @pytest.mark.parametrize("seed", range(10))
    def test_food_spawned_off_snake(self, seed):
        engine, _ = _make_engine(width=5, height=5, seed=seed)
        state = engine.get_current_state()
        assert state.food is not None
        assert state.food not in state.snake_body
        assert 0 <= state.food.x < 5
        assert 0 <= state.food.y < 5

    def test_initialize_overrides_config(self):
        engine, _ = _make_engine()
        engine.initialize(GameDifficulty.INSANE, 30, 20)
        state = engine.get_current_state()
        assert state.difficulty == GameDifficulty.INSANE
        assert state.grid_width == 30
        assert state.grid_height == 20
        assert state.head == Position(15, 10)

    def test_initialize_clears_events(self):
        engine, _ = _make_engine()
        engine.start()
        engine.initialize()
        assert engine.get_events_since_last_update() == []

    def test_initialize_rejects_bad_grid(self):
        engine, _ = _make_engine()
        with pytest.raises(ValidationError, match="at least 5x5"):
            engine.initialize(GameDifficulty.EASY, 4, 10)

    def test_initialize_rejects_bad_difficulty(self):
        engine, _ = _make_engine()
        with pytest.raises(ValidationError, match="Invalid difficulty"):
            engine.initialize("hard", 10, 10)

    def test_snake_too_long_for_grid(self):
        engine, _ = _make_engine(width=10, height=10, initial_length=4)
        with pytest.raises(ValidationError, match="does not fit"):
            engine.initialize(GameDifficulty.EASY, 5, 5)


class TestLifecycle:
    def test_start(self):
        engine, _ = _make_engine()
        engine.start()
        assert engine.is_game_active
        events = engine.get_events_since_last_update()
        assert _types(events) == [SnakeGameEventType.GAME_STARTED]

    def test_start_only_from_not_started(self):
        engine, _ = _make_engine()
        engine.start()
        engine.get_events_since_last_update()
        engine.start()
        assert engine.get_events_since_last_update() == []
        assert engine.get_current_state().status == GameStatus.PLAYING

    def test_pause_and_resume(self):
        engine, _ = _make_engine()
        engine.start()
        engine.pause()
        assert engine.get_current_state().status == GameStatus.PAUSED
        assert not engine.is_game_active
        engine.resume()
        assert engine.get_current_state().status == GameStatus.PLAYING
        assert _types(engine.get_events_since_last_update()) == [
            SnakeGameEventType.GAME_STARTED,
            SnakeGameEventType.GAME_PAUSED,
            SnakeGameEventType.GAME_RESUMED,
        ]

    def test_pause_and_resume_out_of_order_are_noops(self):
        engine, _ = _make_engine()
        engine.pause()
        engine.resume()
        assert engine.get_current_state().status == GameStatus.NOT_STARTED
        engine.start()
        engine.resume()
        assert engine.get_current_state().status == GameStatus.PLAYING
        assert _types(engine.get_events_since_last_update()) == [
            SnakeGameEventType.GAME_STARTED,
        ]

    def test_reset(self):
        engine, clock = _make_engine()
        engine.place_food(Position(0, 0))
        engine.start()
        _tick(engine, clock)
        _tick(engine, clock)
        engine.get_events_since_last_update()

        engine.reset()
        state = engine.get_current_state()
        assert state.status == GameStatus.NOT_STARTED
        assert state.length == 3
        assert state.head == Position(5, 5)
        assert state.score == 0
        assert state.elapsed_ms == 0
        assert engine.tick == 0

        events = engine.get_events_since_last_update()
        assert _types(events) == [SnakeGameEventType.GAME_RESET]
        assert events[0].timestamp == 300

    def test_reset_keeps_difficulty_and_size(self):
        engine, _ = _make_engine()
        engine.initialize(GameDifficulty.HARD, 12, 8)
        engine.reset()
        state = engine.get_current_state()
        assert state.difficulty == GameDifficulty.HARD
        assert (state.grid_width, state.grid_height) == (12, 8)

    def test_reset_from_game_over(self):
        engine, clock = _make_engine()
        engine.place_food(Position(0, 0))
        engine.start()
        while engine.is_game_active:
            _tick(engine, clock)
        engine.reset()
        engine.start()
        assert engine.is_game_active


class TestDirection:
    def test_set_next_direction(self):
        engine, _ = _make_engine()
        engine.set_next_direction(Direction.UP)
        state = engine.get_current_state()
        assert state.next_direction == Direction.UP
        assert state.current_direction == Direction.RIGHT
        events = engine.get_events_since_last_update()
        assert _types(events) == [SnakeGameEventType.DIRECTION_CHANGED]

    def test_reversal_dropped_silently(self):
        engine, _ = _make_engine()
        engine.set_next_direction(Direction.LEFT)
        assert engine.get_current_state().next_direction == Direction.RIGHT
        assert engine.get_events_since_last_update() == []

    def test_reversal_checked_against_current_direction(self):
        engine, _ = _make_engine()
        engine.set_next_direction(Direction.UP)
        engine.set_next_direction(Direction.DOWN)
        assert engine.get_current_state().next_direction == Direction.DOWN

    def test_invalid_direction(self):
        engine, _ = _make_engine()
        with pytest.raises(ValidationError):
            engine.set_next_direction("up")

    def test_direction_applied_on_tick(self):
        engine, clock = _make_engine()
        engine.place_food(Position(0, 0))
        engine.start()
        engine.set_next_direction(Direction.UP)
        _tick(engine, clock)
        state = engine.get_current_state()
        assert state.head == Position(5, 4)
        assert state.current_direction == Direction.UP
        # Reversal of the new direction is now rejected.
        engine.set_next_direction(Direction.DOWN)
        assert engine.get_current_state().next_direction == Direction.UP


class TestTiming:
    def test_no_update_before_start(self):
        engine, clock = _make_engine()
        clock.advance(1_000)
        assert not engine.update()
        assert engine.get_current_state().head == Position(5, 5)

    def test_single_tick_after_interval(self):
        engine, clock = _make_engine()
        engine.place_food(Position(0, 0))
        engine.start()

        clock.advance(100)
        assert not engine.update()
        clock.advance(50)
        assert engine.update()

        state = engine.get_current_state()
        assert state.head == Position(6, 5)
        assert state.tail == Position(4, 5)
        assert state.length == 3
        assert state.elapsed_ms == 150
        assert engine.tick == 1

    def test_excess_time_is_dropped(self):
        engine, clock = _make_engine()
        engine.place_food(Position(0, 0))
        engine.start()
        clock.advance(1_000)
        assert engine.update()
        assert engine.tick == 1
        clock.advance(100)
        assert not engine.update()
        clock.advance(50)
        assert engine.update()
        assert engine.tick == 2

    def test_explicit_now(self):
        engine, _ = _make_engine()
        engine.place_food(Position(0, 0))
        engine.start(now=0.0)
        assert not engine.update(100.0)
        assert engine.update(150.0)
        assert engine.get_current_state().elapsed_ms == 150

    def test_driver_timeline_independent_of_engine_clock(self):
        engine = SnakeGameEngine(
            GameConfig(
                grid_width=10, grid_height=10,
                difficulty=GameDifficulty.EASY,
            ),
            seed=0,
        )
        engine.place_food(Position(0, 0))
        engine.start()

        ticks = [engine.update(t) for t in (0.0, 100.0, 150.0)]

        assert ticks == [False, False, True]
        state = engine.get_current_state()
        assert state.elapsed_ms == 150
        events = engine.get_events_since_last_update()
        assert all(e.timestamp >= 0 for e in events)
        stats = GameHistory().add_game(state)
        assert stats.duration_ms == 150

    def test_large_epoch_does_not_tick_immediately(self):
        engine, _ = _make_engine()
        engine.place_food(Position(0, 0))
        engine.start()
        epoch = 1.7e12
        assert not engine.update(epoch)
        assert not engine.update(epoch + 100)
        assert engine.update(epoch + 150)
        assert engine.get_current_state().elapsed_ms == 150

    def test_elapsed_never_negative(self):
        engine, _ = _make_engine()
        engine.start(now=1_000.0)
        assert not engine.update(500.0)
        assert engine.get_current_state().elapsed_ms == 0

    def test_resume_with_explicit_now(self):
        engine, _ = _make_engine()
        engine.place_food(Position(0, 0))
        engine.start(now=0.0)
        engine.update(100.0)
        engine.pause()
        engine.resume(now=5_000.0)
        assert engine.update(5_050.0)
        assert engine.tick == 1
        assert engine.get_current_state().elapsed_ms == 5_050

    def test_faster_difficulty_ticks_sooner(self):
        engine, clock = _make_engine(GameDifficulty.INSANE)
        engine.place_food(Position(0, 0))
        engine.start()
        clock.advance(30)
        assert engine.update()

    def test_paused_time_not_accumulated(self):
        engine, clock = _make_engine()
        engine.place_food(Position(0, 0))
        engine.start()
        clock.advance(100)
        engine.update()
        engine.pause()
        clock.advance(1_000)
        assert not engine.update()
        engine.resume()
        clock.advance(50)
        assert engine.update()
        assert engine.tick == 1

    def test_update_is_noop_when_paused(self):
        engine, clock = _make_engine()
        engine.start()
        engine.pause()
        before = engine.get_current_state()
        clock.advance(5_000)
        engine.update()
        assert engine.get_current_state() == before


class TestFoodConsumption:
    def test_eating_food(self):
        engine, clock = _make_engine()
        engine.place_food(Position(6, 5))
        engine.start()
        engine.get_events_since_last_update()
        _tick(engine, clock)

        state = engine.get_current_state()
        assert state.score == 10
        assert state.food_eaten == 1
        assert state.length == 4
        assert state.tail == Position(3, 5)
        assert state.food is not None
        assert state.food not in state.snake_body

        events = engine.get_events_since_last_update()
        assert _types(events) == [SnakeGameEventType.FOOD_EATEN]
        assert events[0].score_gained == 10
        assert events[0].position == Position(6, 5)

    @pytest.mark.parametrize(
        ("difficulty", "expected"),
        [
            (GameDifficulty.EASY, 10),
            (GameDifficulty.MEDIUM, 15),
            (GameDifficulty.HARD, 25),
            (GameDifficulty.INSANE, 50),
        ],
    )
    def test_score_scales_with_difficulty(self, difficulty, expected):
        engine, clock = _make_engine(difficulty)
        engine.place_food(Position(6, 5))
        engine.start()
        _tick(engine, clock)
        assert engine.get_current_state().score == expected

    def test_special_food(self):
        engine, clock = _make_engine(special_food_chance=0.0)
        engine.place_food(Position(0, 0))
        engine.place_special_food(Position(6, 5))
        engine.start()
        engine.get_events_since_last_update()
        _tick(engine, clock)

        state = engine.get_current_state()
        assert state.score == 50
        assert state.food_eaten == 1
        assert state.length == 4
        assert state.special_food is None
        assert state.food == Position(0, 0)

        events = engine.get_events_since_last_update()
        assert _types(events) == [SnakeGameEventType.SPECIAL_FOOD_EATEN]
        assert events[0].score_gained == 50

    def test_special_food_respawn(self):
        engine, clock = _make_engine(
            GameDifficulty.MEDIUM, special_food_chance=1.0,
        )
        engine.place_food(Position(0, 0))
        engine.place_special_food(Position(6, 5))
        engine.start()
        _tick(engine, clock)

        state = engine.get_current_state()
        assert state.score == 75
        assert state.special_food is not None
        assert state.special_food != state.food
        assert state.special_food not in state.snake_body

    def test_spawn_special_food(self):
        engine, _ = _make_engine()
        pos = engine.spawn_special_food()
        state = engine.get_current_state()
        assert pos == state.special_food
        assert pos != state.food
        assert pos not in state.snake_body


class TestWallCollision:
    def test_death_on_wall(self):
        engine, clock = _make_engine()
        engine.place_food(Position(0, 0))
        engine.start()
        engine.get_events_since_last_update()

        for _ in range(4):
            _tick(engine, clock)
        assert engine.is_game_active
        assert engine.get_current_state().head == Position(9, 5)

        _tick(engine, clock)
        state = engine.get_current_state()
        assert state.status == GameStatus.GAME_OVER
        assert state.game_over_time is not None
        assert state.head == Position(9, 5)
        assert state.length == 3
        assert engine.tick == 5

        events = engine.get_events_since_last_update()
        assert _types(events) == [SnakeGameEventType.GAME_OVER]
        assert events[0].message == "wall collision"

    def test_frozen_after_game_over(self):
        engine, clock = _make_engine()
        engine.place_food(Position(0, 0))
        engine.start()
        while engine.is_game_active:
            _tick(engine, clock)
        frozen = engine.get_current_state()
        engine.get_events_since_last_update()

        assert not _tick(engine, clock)
        assert engine.get_current_state() == frozen
        assert engine.get_events_since_last_update() == []

    def test_death_on_top_wall(self):
        engine, clock = _make_engine()
        engine.place_food(Position(0, 9))
        engine.start()
        engine.set_next_direction(Direction.UP)
        ticks = 0
        while engine.is_game_active:
            _tick(engine, clock)
            ticks += 1
        assert ticks == 6
        assert engine.get_current_state().head == Position(5, 0)


class TestSelfCollision:
    def test_dies_on_self_collision(self):
        engine, clock = _make_engine()
        engine.start()
        # Grow to length 5 by eating directly ahead.
        for _ in range(2):
            head = engine.get_current_state().head
            engine.place_food(head + Direction.RIGHT.delta)
            _tick(engine, clock)
        assert engine.get_current_state().length == 5
        engine.get_events_since_last_update()

        for direction in (Direction.DOWN, Direction.LEFT, Direction.UP):
            engine.set_next_direction(direction)
            _tick(engine, clock)

        state = engine.get_current_state()
        assert state.status == GameStatus.GAME_OVER
        events = engine.get_events_since_last_update()
        assert events[-1].type == SnakeGameEventType.GAME_OVER
        assert events[-1].message == "self collision"


class TestVictory:
    def test_victory_at_fifty_segments(self):
        engine, clock = _make_engine(width=100, height=10)
        engine.start()
        for _ in range(47):
            head = engine.get_current_state().head
            engine.place_food(head + Direction.RIGHT.delta)
            _tick(engine, clock)

        state = engine.get_current_state()
        assert state.length == 50
        assert state.status == GameStatus.VICTORY
        assert state.score == 470
        assert state.food_eaten == 47
        assert state.game_over_time is not None

        events = engine.get_events_since_last_update()
        assert events[-1].type == SnakeGameEventType.GAME_OVER
        assert "Victory" in events[-1].message

        assert not _tick(engine, clock)
        after = engine.get_current_state()
        assert after.score == 470
        assert after.length == 50

    def test_custom_victory_length(self):
        engine, clock = _make_engine(victory_length=4)
        engine.place_food(Position(6, 5))
        engine.start()
        _tick(engine, clock)
        assert engine.get_current_state().status == GameStatus.VICTORY


class TestStateAccess:
    def test_reads_are_independent_copies(self):
        engine, _ = _make_engine()
        a = engine.get_current_state()
        b = engine.get_current_state()
        assert a == b
        assert a is not b
        assert a.snake_body is not b.snake_body

        a.snake_body.clear()
        a.score = 1_000
        assert b.length == 3
        assert engine.get_current_state().length == 3
        assert engine.get_current_state().score == 0

    def test_drain_law(self):
        engine, _ = _make_engine()
        engine.start()
        engine.set_next_direction(Direction.UP)
        first = engine.get_events_since_last_update()
        second = engine.get_events_since_last_update()
        assert _types(first) == [
            SnakeGameEventType.GAME_STARTED,
            SnakeGameEventType.DIRECTION_CHANGED,
        ]
        assert second == []

    def test_events_timestamped_with_elapsed_time(self):
        engine, clock = _make_engine()
        engine.place_food(Position(0, 0))
        engine.start()
        _tick(engine, clock)
        engine.pause()
        events = engine.get_events_since_last_update()
        assert events[0].timestamp == 0
        assert events[-1].timestamp == 150

    def test_state_is_json_serializable(self):
        engine, clock = _make_engine()
        engine.start()
        _tick(engine, clock)
        serialized = json.dumps(engine.get_current_state().to_dict())
        assert isinstance(serialized, str)


class TestDeterminism:
    def test_same_seed_same_food(self):
        a, _ = _make_engine(seed=123)
        b, _ = _make_engine(seed=123)
        assert a.get_current_state().food == b.get_current_state().food

    def test_injected_rng(self):
        clock = SimulatedClock()
        a = SnakeGameEngine(rng=np.random.default_rng(9), clock=clock)
        b = SnakeGameEngine(rng=np.random.default_rng(9), clock=clock)
        assert a.get_current_state().food == b.get_current_state().food
