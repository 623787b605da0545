"""Self-play games between agents.

Plays full games with the turn policy from ``tavla.core.turn`` and collects
simple statistics, mostly for comparing difficulty levels.
"""

import logging
from dataclasses import dataclass
from typing import List, NamedTuple, Optional

import numpy as np

from tavla.core.types import BackgammonState, GameOutcome, Move, Player
from tavla.core.board import create_backgammon_game, game_outcome
from tavla.core.moves import get_valid_moves
from tavla.core.turn import advance_turn, play_move
from tavla.evaluation.agents import Agent

logger = logging.getLogger(__name__)


class GameStep(NamedTuple):
    """Single step in a game (state, action)."""
    state: BackgammonState
    player: Player
    num_legal_moves: int
    move_taken: Move


@dataclass
class GameResult:
    """Result of a completed (or capped) game."""
    steps: List[GameStep]
    outcome: Optional[GameOutcome]
    num_plies: int
    final_state: BackgammonState


def play_game(
    white_agent: Agent,
    black_agent: Agent,
    state: Optional[BackgammonState] = None,
    max_plies: int = 2000,
    rng: Optional[np.random.Generator] = None,
) -> GameResult:
    """Play a single game between two agents.

    A ply is one loop iteration: either one move or one forfeited turn.

    Args:
        white_agent: Agent playing white
        black_agent: Agent playing black
        state: Starting state (a fresh game if None)
        max_plies: Maximum plies before the game is abandoned
        rng: Random number generator for the dice

    Returns:
        GameResult with the game trajectory; ``outcome`` is None if capped
    """
    if rng is None:
        rng = np.random.default_rng()
    if state is None:
        state = create_backgammon_game(rng)

    steps: List[GameStep] = []

    for ply in range(max_plies):
        if state.winner is not None:
            return GameResult(
                steps=steps,
                outcome=game_outcome(state),
                num_plies=ply,
                final_state=state,
            )

        legal_moves = get_valid_moves(state)
        if not legal_moves:
            state = advance_turn(state, rng)
            continue

        agent = white_agent if state.turn == Player.WHITE else black_agent
        move = agent.select_move(state, legal_moves)
        if move is None:
            state = advance_turn(state, rng)
            continue

        steps.append(GameStep(
            state=state,
            player=state.turn,
            num_legal_moves=len(legal_moves),
            move_taken=move,
        ))
        state = play_move(state, move, rng)

    logger.warning("Game abandoned after %d plies", max_plies)
    return GameResult(
        steps=steps,
        outcome=game_outcome(state),
        num_plies=max_plies,
        final_state=state,
    )


def play_games(
    white_agent: Agent,
    black_agent: Agent,
    num_games: int,
    max_plies: int = 2000,
    rng: Optional[np.random.Generator] = None,
) -> List[GameResult]:
    """Play a batch of games from the standard starting position."""
    if rng is None:
        rng = np.random.default_rng()

    results = []
    for game_num in range(num_games):
        result = play_game(white_agent, black_agent, max_plies=max_plies, rng=rng)
        winner = result.outcome.winner if result.outcome else None
        logger.info("Game %d: winner=%s plies=%d", game_num + 1, winner, result.num_plies)
        results.append(result)
    return results


def compute_game_statistics(games: List[GameResult]) -> dict:
    """Compute statistics from a batch of games.

    Args:
        games: List of game results

    Returns:
        Dictionary of statistics
    """
    total_games = len(games)
    white_wins = sum(1 for g in games if g.outcome and g.outcome.winner == Player.WHITE)
    black_wins = sum(1 for g in games if g.outcome and g.outcome.winner == Player.BLACK)
    unfinished = sum(1 for g in games if g.outcome is None)

    avg_plies = float(np.mean([g.num_plies for g in games])) if games else 0.0

    gammons = sum(1 for g in games if g.outcome and g.outcome.points == 2)
    backgammons = sum(1 for g in games if g.outcome and g.outcome.points == 3)

    return {
        'total_games': total_games,
        'white_wins': white_wins,
        'black_wins': black_wins,
        'unfinished': unfinished,
        'white_win_rate': white_wins / total_games if total_games > 0 else 0.0,
        'avg_plies': avg_plies,
        'gammons': gammons,
        'backgammons': backgammons,
    }
