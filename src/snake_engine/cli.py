"""Command-line tools for running headless snake games."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import replace

from snake_engine.config import GameConfig
from snake_engine.difficulty import ALL_DIFFICULTIES, parse_difficulty
from snake_engine.errors import ValidationError
from snake_engine.grid import debug_visualize
from snake_engine.stats import GameHistory

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="snake-engine",
        description="Headless snake simulation tools.",
    )
    sub = parser.add_subparsers(dest="command", help="Available commands.")

    # --- simulate ---
    sim_p = sub.add_parser(
        "simulate", help="Play games with the pathfinding autopilot.",
    )
    sim_p.add_argument(
        "--config", type=str, default=None,
        help="Path to a JSON config file.",
    )
    sim_p.add_argument("--games", type=int, default=1)
    sim_p.add_argument(
        "--difficulty", type=str, default=None,
        choices=[d.value for d in ALL_DIFFICULTIES],
    )
    sim_p.add_argument("--grid-width", type=int, default=None)
    sim_p.add_argument("--grid-height", type=int, default=None)
    sim_p.add_argument("--seed", type=int, default=None)
    sim_p.add_argument("--max-ticks", type=int, default=10_000)
    sim_p.add_argument(
        "--show", action="store_true",
        help="Print the final board of each game.",
    )

    # --- show-config ---
    cfg_p = sub.add_parser(
        "show-config", help="Print the effective configuration as JSON.",
    )
    cfg_p.add_argument("--config", type=str, default=None)

    return parser


def _load_config(args: argparse.Namespace) -> GameConfig:
    config = GameConfig.load(args.config) if args.config else GameConfig()

    overrides: dict = {}
    if getattr(args, "difficulty", None) is not None:
        overrides["difficulty"] = parse_difficulty(args.difficulty)
    if getattr(args, "grid_width", None) is not None:
        overrides["grid_width"] = args.grid_width
    if getattr(args, "grid_height", None) is not None:
        overrides["grid_height"] = args.grid_height
    return replace(config, **overrides) if overrides else config


def _run_simulate(args: argparse.Namespace) -> int:
    from snake_engine.autopilot import run_autopilot_game

    if args.games < 1:
        logger.error("--games must be at least 1.")
        return 2

    config = _load_config(args)
    history = GameHistory()
    for i in range(args.games):
        seed = None if args.seed is None else args.seed + i
        state = run_autopilot_game(
            config, seed=seed, max_ticks=args.max_ticks,
        )
        stats = history.add_game(state)
        print(f"Game {i + 1}: {stats.summary()}")  # noqa: T201
        if args.show:
            print(debug_visualize(state))  # noqa: T201

    print(history.global_stats())  # noqa: T201
    return 0


def _run_show_config(args: argparse.Namespace) -> int:
    config = _load_config(args)
    print(json.dumps(config.to_dict(), indent=2))  # noqa: T201
    return 0


def main(argv: list[str] | None = None) -> int:
    """Entry point for the ``snake-engine`` CLI."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    handlers = {
        "simulate": _run_simulate,
        "show-config": _run_show_config,
    }
    try:
        return handlers[args.command](args)
    except ValidationError as exc:
        logger.error("%s", exc)
        return 2


if __name__ == "__main__":
    sys.exit(main())
