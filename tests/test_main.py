"""Tests for the command-line entrypoint."""

import pytest

from tavla import __version__
from tavla.main import build_parser, main


class TestCLI:
    """Tests for the tavla console script."""

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["--version"])
        assert exc.value.code == 0
        assert __version__ in capsys.readouterr().out

    def test_no_command_prints_help(self, capsys):
        assert main([]) == 0
        assert "usage: tavla" in capsys.readouterr().out

    def test_show(self, capsys):
        assert main(["show", "--seed", "1"]) == 0
        assert "Player to move: white" in capsys.readouterr().out

    def test_play(self, capsys):
        assert main(["play", "--games", "2", "--seed", "3", "--white", "Hard", "--black", "Easy"]) == 0
        out = capsys.readouterr().out
        assert "White=Heuristic-Hard vs Black=Heuristic-Easy" in out
        assert "White wins:" in out

    def test_play_rejects_zero_games(self, capsys):
        assert main(["play", "--games", "0"]) == 2

    def test_difficulty_choices(self):
        args = build_parser().parse_args(["play", "--white", "Normal"])
        assert args.white == "Normal"
        assert args.black == "Easy"
