"""Headless driver that plays games using breadth-first pathfinding."""

from __future__ import annotations

import logging

from snake_engine.clock import SimulatedClock
from snake_engine.config import GameConfig
from snake_engine.difficulty import GameDifficulty, tick_delay_ms
from snake_engine.engine import SnakeGameEngine
from snake_engine.geometry import Direction, Position, is_opposite
from snake_engine.grid import find_path, in_bounds
from snake_engine.state import GameState

logger = logging.getLogger(__name__)


def _direction_towards(origin: Position, target: Position) -> Direction | None:
    for direction in Direction:
        if origin + direction.delta == target:
            return direction
    return None


def _is_safe(state: GameState, direction: Direction) -> bool:
    nxt = state.head + direction.delta
    return (
        in_bounds(nxt, state.grid_width, state.grid_height)
        and nxt not in state.snake_body
    )


def choose_direction(state: GameState) -> Direction:
    """Pick the next move for *state*.

    Follows the shortest path to the food, then to the special food. When
    neither is reachable, keeps going straight if that is safe, otherwise
    turns towards any safe cell. Never reverses the current direction.
    """
    current = state.current_direction
    head = state.head
    # The engine collides with the tail too, so the whole body blocks.
    obstacles = state.snake_body[1:]

    for target in (state.food, state.special_food):
        if target is None:
            continue
        path = find_path(
            head, target, state.grid_width, state.grid_height, obstacles,
        )
        if len(path) >= 2:
            direction = _direction_towards(head, path[1])
            if direction is not None and not is_opposite(current, direction):
                return direction

    if _is_safe(state, current):
        return current
    for direction in Direction:
        if not is_opposite(current, direction) and _is_safe(state, direction):
            return direction
    return current


def play_game(
    engine: SnakeGameEngine, clock: SimulatedClock, max_ticks: int = 10_000,
) -> GameState:
    """Start *engine* and drive it until the game ends or *max_ticks* pass.

    *clock* must be the clock the engine was built with; it is advanced by
    the config's ``update_interval_ms`` per frame. A move is only chosen
    once per tick, on the frame before it is due.
    """
    engine.start()
    frame_ms = engine.config.update_interval_ms
    interval = tick_delay_ms(engine.get_current_state().difficulty)
    ticks = 0
    waited = 0
    while engine.is_game_active and ticks < max_ticks:
        if waited + frame_ms >= interval:
            engine.set_next_direction(
                choose_direction(engine.get_current_state()),
            )
        clock.advance(frame_ms)
        waited += frame_ms
        if engine.update():
            ticks += 1
            waited = 0
        engine.get_events_since_last_update()
    state = engine.get_current_state()
    logger.info(
        "Autopilot finished after %d ticks: %s, score %d.",
        ticks, state.status.value, state.score,
    )
    return state


def run_autopilot_game(
    config: GameConfig | None = None,
    *,
    difficulty: GameDifficulty | None = None,
    seed: int | None = None,
    max_ticks: int = 10_000,
) -> GameState:
    """Build an engine on a simulated clock and play one game."""
    clock = SimulatedClock()
    engine = SnakeGameEngine(config, seed=seed, clock=clock)
    if difficulty is not None:
        engine.initialize(
            difficulty, engine.config.grid_width, engine.config.grid_height,
        )
    return play_game(engine, clock, max_ticks=max_ticks)
