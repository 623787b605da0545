"""Move selection: heuristic scoring and player agents.

The heuristic looks one move ahead. Each candidate is applied, the
resulting position around its source and destination points is scored,
and the best candidate is picked. There is no search over opponent replies.

Agents wrap a selection function so self-play and hosts can treat all
players the same way:
- Random agent: selects moves uniformly at random
- Heuristic agent: scores each candidate at a difficulty level
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Union

import numpy as np

from tavla.core.types import BackgammonState, Move
from tavla.core.board import home_board_range
from tavla.core.moves import apply_move, get_valid_moves


class Difficulty(Enum):
    """AI difficulty levels."""
    EASY = "Easy"
    NORMAL = "Normal"
    HARD = "Hard"

    @staticmethod
    def parse(value: Union["Difficulty", str]) -> "Difficulty":
        """Accept a Difficulty or its name in any case ("hard", "Hard", ...)."""
        if isinstance(value, Difficulty):
            return value
        for level in Difficulty:
            if level.value.lower() == str(value).lower():
                return level
        raise ValueError(f"Unknown difficulty: {value!r}")

    def __str__(self) -> str:
        return self.value


@dataclass
class HeuristicConfig:
    """Weights for the one-move heuristic.

    Attributes:
        hit_bonus: Bonus for hitting an opponent blot
        bear_off_bonus: Bonus for bearing a checker off
        made_point_bonus: Bonus when the destination ends with exactly 2 checkers
        blot_penalty: Penalty when the destination ends as a lone blot
        broken_point_penalty: Penalty when the source is left as a lone blot
        home_point_bonus: Hard only: bonus for a made point in the home board
        jitter: Upper bound of the uniform noise added to every score
    """
    hit_bonus: float = 100.0
    bear_off_bonus: float = 200.0
    made_point_bonus: float = 50.0
    blot_penalty: float = 30.0
    broken_point_penalty: float = 40.0
    home_point_bonus: float = 30.0
    jitter: float = 5.0


# ==============================================================================
# HEURISTIC SCORING
# ==============================================================================


def evaluate_move(
    state: BackgammonState,
    move: Move,
    difficulty: Union[Difficulty, str] = Difficulty.NORMAL,
    rng: Optional[np.random.Generator] = None,
    config: Optional[HeuristicConfig] = None,
) -> float:
    """Score a candidate move from the mover's perspective.

    Higher is better.

    Args:
        state: State before the move
        move: Candidate move
        difficulty: NORMAL or HARD (HARD also rewards home board points)
        rng: NumPy random generator for the jitter
        config: Heuristic weights (uses defaults if None)

    Returns:
        Move score
    """
    difficulty = Difficulty.parse(difficulty)
    if config is None:
        config = HeuristicConfig()
    if rng is None:
        rng = np.random.default_rng()

    player = state.turn
    after = apply_move(state, move)
    score = 0.0

    if move.is_hit:
        score += config.hit_bonus

    if move.bears_off:
        score += config.bear_off_bonus

    if isinstance(move.to_point, int):
        dest_count = after.checkers_at(player, move.to_point)
        if dest_count == 2:
            score += config.made_point_bonus
        elif dest_count == 1:
            score -= config.blot_penalty

        if difficulty == Difficulty.HARD:
            if move.to_point in home_board_range(player) and dest_count > 1:
                score += config.home_point_bonus

    if isinstance(move.from_point, int):
        if after.checkers_at(player, move.from_point) == 1:
            score -= config.broken_point_penalty

    score += float(rng.uniform(0.0, config.jitter))
    return score


def select_move(
    state: BackgammonState,
    legal_moves: List[Move],
    difficulty: Union[Difficulty, str] = Difficulty.NORMAL,
    rng: Optional[np.random.Generator] = None,
    config: Optional[HeuristicConfig] = None,
) -> Optional[Move]:
    """Pick a move from precomputed candidates.

    EASY picks uniformly at random. NORMAL and HARD pick the highest score;
    ties keep the earliest candidate.

    Returns:
        Selected move, or None when there are no candidates
    """
    if not legal_moves:
        return None

    difficulty = Difficulty.parse(difficulty)
    if rng is None:
        rng = np.random.default_rng()

    if difficulty == Difficulty.EASY:
        return legal_moves[int(rng.integers(0, len(legal_moves)))]

    best_move = legal_moves[0]
    best_score = float('-inf')

    for move in legal_moves:
        score = evaluate_move(state, move, difficulty, rng, config)
        if score > best_score:
            best_score = score
            best_move = move

    return best_move


def get_best_backgammon_move(
    state: BackgammonState,
    difficulty: Union[Difficulty, str] = Difficulty.NORMAL,
    rng: Optional[np.random.Generator] = None,
    config: Optional[HeuristicConfig] = None,
) -> Optional[Move]:
    """Choose the AI's next move for the player to move.

    Args:
        state: Current state
        difficulty: "Easy", "Normal" or "Hard"
        rng: NumPy random generator (random choice and jitter)
        config: Heuristic weights (uses defaults if None)

    Returns:
        Selected move, or None when no legal move exists
    """
    return select_move(state, get_valid_moves(state), difficulty, rng, config)


# ==============================================================================
# AGENTS
# ==============================================================================


@dataclass
class Agent:
    """Base agent class for playing backgammon.

    Attributes:
        name: Agent name for identification
        select_move_fn: Function that selects a move from legal moves
    """
    name: str
    select_move_fn: Callable[[BackgammonState, List[Move]], Optional[Move]]

    def select_move(self, state: BackgammonState, legal_moves: List[Move]) -> Optional[Move]:
        """Select a move from legal moves.

        Args:
            state: Current state
            legal_moves: List of legal moves

        Returns:
            Selected move, or None if there is nothing to play
        """
        return self.select_move_fn(state, legal_moves)


def random_agent(seed: Optional[int] = None) -> Agent:
    """Create an agent that selects moves uniformly at random.

    Args:
        seed: Random seed (optional, for reproducibility)

    Returns:
        Random agent
    """
    rng = np.random.default_rng(seed)

    def select_random_move(state: BackgammonState, legal_moves: List[Move]) -> Optional[Move]:
        return select_move(state, legal_moves, Difficulty.EASY, rng)

    return Agent(name="Random", select_move_fn=select_random_move)


def heuristic_agent(
    difficulty: Union[Difficulty, str] = Difficulty.NORMAL,
    seed: Optional[int] = None,
    config: Optional[HeuristicConfig] = None,
) -> Agent:
    """Create an agent that plays at a difficulty level.

    Args:
        difficulty: "Easy", "Normal" or "Hard"
        seed: Random seed (optional, for reproducibility)
        config: Heuristic weights (uses defaults if None)

    Returns:
        Heuristic agent named after its difficulty
    """
    difficulty = Difficulty.parse(difficulty)
    rng = np.random.default_rng(seed)

    def select_heuristic_move(state: BackgammonState, legal_moves: List[Move]) -> Optional[Move]:
        return select_move(state, legal_moves, difficulty, rng, config)

    return Agent(name=f"Heuristic-{difficulty}", select_move_fn=select_heuristic_move)
