"""Tests for the command-line interface."""

import json

import pytest

from snake_engine.cli import _build_parser, main
from snake_engine.config import GameConfig
from snake_engine.difficulty import GameDifficulty


class TestCLIParser:
    def test_no_command_returns_1(self):
        assert main([]) == 1

    def test_simulate_defaults(self):
        args = _build_parser().parse_args(["simulate"])
        assert args.command == "simulate"
        assert args.games == 1
        assert args.config is None
        assert args.difficulty is None
        assert args.max_ticks == 10_000
        assert not args.show

    def test_simulate_with_flags(self):
        args = _build_parser().parse_args([
            "simulate",
            "--games", "3",
            "--difficulty", "hard",
            "--grid-width", "15",
            "--grid-height", "12",
            "--seed", "7",
            "--show",
        ])
        assert args.games == 3
        assert args.difficulty == "hard"
        assert args.grid_width == 15
        assert args.grid_height == 12
        assert args.seed == 7
        assert args.show

    def test_unknown_difficulty_rejected(self):
        with pytest.raises(SystemExit, match="2"):
            _build_parser().parse_args(["simulate", "--difficulty", "nightmare"])


class TestCLISimulate:
    def test_simulate_runs(self, capsys):
        result = main([
            "simulate",
            "--games", "2",
            "--grid-width", "10",
            "--grid-height", "10",
            "--seed", "1",
            "--max-ticks", "300",
        ])
        assert result == 0
        out = capsys.readouterr().out
        assert "Game 1:" in out
        assert "Game 2:" in out
        assert "Games: 2" in out

    def test_simulate_show_board(self, capsys):
        result = main([
            "simulate",
            "--grid-width", "8",
            "--grid-height", "8",
            "--seed", "4",
            "--max-ticks", "50",
            "--show",
        ])
        assert result == 0
        out = capsys.readouterr().out
        assert "H" in out

    def test_games_must_be_positive(self):
        assert main(["simulate", "--games", "0"]) == 2

    def test_invalid_grid_returns_2(self):
        assert main(["simulate", "--grid-width", "3"]) == 2


class TestCLIShowConfig:
    def test_defaults(self, capsys):
        assert main(["show-config"]) == 0
        d = json.loads(capsys.readouterr().out)
        assert d["grid_width"] == 20
        assert d["difficulty"] == "medium"

    def test_from_file(self, tmp_path, capsys):
        path = tmp_path / "cfg.json"
        GameConfig(grid_width=40, difficulty=GameDifficulty.HARD).save(path)
        assert main(["show-config", "--config", str(path)]) == 0
        d = json.loads(capsys.readouterr().out)
        assert d["grid_width"] == 40
        assert d["difficulty"] == "hard"
