"""Move evaluation and selection."""

from tavla.evaluation.agents import (
    Agent,
    Difficulty,
    HeuristicConfig,
    evaluate_move,
    get_best_backgammon_move,
    heuristic_agent,
    random_agent,
    select_move,
)

__all__ = [
    "Agent",
    "Difficulty",
    "HeuristicConfig",
    "evaluate_move",
    "get_best_backgammon_move",
    "heuristic_agent",
    "random_agent",
    "select_move",
]
