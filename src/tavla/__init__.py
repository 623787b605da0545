"""
Tavla - a backgammon rules engine with a heuristic AI opponent.
"""

__version__ = "0.1.0"

# Core exports
from tavla.core.types import (
    BAR,
    OFF,
    BackgammonState,
    Move,
    MoveResult,
    Player,
)
from tavla.core.board import can_bear_off, create_backgammon_game
from tavla.core.moves import apply_move, get_valid_moves, try_apply_move
from tavla.core.turn import advance_turn, play_move
from tavla.evaluation.agents import Difficulty, get_best_backgammon_move

__all__ = [
    "BAR",
    "OFF",
    "BackgammonState",
    "Move",
    "MoveResult",
    "Player",
    "can_bear_off",
    "create_backgammon_game",
    "apply_move",
    "get_valid_moves",
    "try_apply_move",
    "advance_turn",
    "play_move",
    "Difficulty",
    "get_best_backgammon_move",
]
