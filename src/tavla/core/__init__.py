"""Core game logic and data structures."""

from tavla.core.types import (
    BAR,
    OFF,
    BackgammonState,
    CheckerCounts,
    GameOutcome,
    Move,
    MoveResult,
    Player,
    Point,
)
from tavla.core.board import (
    INITIAL_BOARD,
    can_bear_off,
    create_backgammon_game,
)
from tavla.core.moves import (
    apply_move,
    find_move,
    get_single_step_moves,
    get_valid_moves,
    try_apply_move,
)
from tavla.core.turn import (
    advance_turn,
    needs_turn_change,
    play_move,
    settle_turn,
    switch_turn,
)

__all__ = [
    "BAR",
    "OFF",
    "BackgammonState",
    "CheckerCounts",
    "GameOutcome",
    "Move",
    "MoveResult",
    "Player",
    "Point",
    "INITIAL_BOARD",
    "can_bear_off",
    "create_backgammon_game",
    "apply_move",
    "find_move",
    "get_single_step_moves",
    "get_valid_moves",
    "try_apply_move",
    "advance_turn",
    "needs_turn_change",
    "play_move",
    "settle_turn",
    "switch_turn",
]
