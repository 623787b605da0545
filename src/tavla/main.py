"""Command-line entrypoint for tavla.

Subcommands:
    show    print the starting position
    play    run AI-vs-AI games and print a summary
"""

from __future__ import annotations

import argparse
import logging
from typing import List, Optional

import numpy as np

from tavla import __version__
from tavla.core.board import board_to_string, create_backgammon_game
from tavla.evaluation.agents import Difficulty, heuristic_agent
from tavla.play.self_play import compute_game_statistics, play_games

DIFFICULTY_CHOICES = [level.value for level in Difficulty]


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level argument parser."""
    parser = argparse.ArgumentParser(
        prog="tavla",
        description="Backgammon rules engine and AI",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"tavla {__version__}",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    subparsers = parser.add_subparsers(dest="command")

    show = subparsers.add_parser("show", help="Print the starting position")
    show.add_argument("--seed", type=int, default=None, help="Seed for the opening roll")

    play = subparsers.add_parser("play", help="Play AI-vs-AI games")
    play.add_argument("--white", choices=DIFFICULTY_CHOICES, default="Hard", help="White difficulty (default: Hard)")
    play.add_argument("--black", choices=DIFFICULTY_CHOICES, default="Easy", help="Black difficulty (default: Easy)")
    play.add_argument("--games", type=int, default=10, help="Number of games (default: 10)")
    play.add_argument("--seed", type=int, default=None, help="Random seed")
    play.add_argument("--max-plies", type=int, default=2000, help="Ply cap per game (default: 2000)")

    return parser


def run_show(args: argparse.Namespace) -> int:
    state = create_backgammon_game(np.random.default_rng(args.seed))
    print(board_to_string(state))
    return 0


def run_play(args: argparse.Namespace) -> int:
    if args.games < 1:
        print("--games must be at least 1")
        return 2

    rng = np.random.default_rng(args.seed)
    # Derive agent seeds from the master seed so runs are reproducible
    white_seed, black_seed = (int(s) for s in rng.integers(0, 2**31, size=2))
    white = heuristic_agent(args.white, seed=white_seed)
    black = heuristic_agent(args.black, seed=black_seed)

    print(f"Playing {args.games} games: White={white.name} vs Black={black.name}")
    results = play_games(white, black, args.games, max_plies=args.max_plies, rng=rng)
    stats = compute_game_statistics(results)

    print(f"White wins:   {stats['white_wins']}")
    print(f"Black wins:   {stats['black_wins']}")
    print(f"Unfinished:   {stats['unfinished']}")
    print(f"White win %:  {stats['white_win_rate']:.1%}")
    print(f"Avg plies:    {stats['avg_plies']:.1f}")
    print(f"Gammons:      {stats['gammons']}")
    print(f"Backgammons:  {stats['backgammons']}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entrypoint used by the `tavla` console script."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    if args.command == "show":
        return run_show(args)
    if args.command == "play":
        return run_play(args)

    parser.print_help()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
