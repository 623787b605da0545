"""Tests for move selection and agents."""

from collections import Counter

import numpy as np
import pytest

from tavla.core.types import BAR, OFF, Move, Player
from tavla.core.moves import get_valid_moves
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

NO_JITTER = HeuristicConfig(jitter=0.0)


class TestDifficulty:
    """Tests for difficulty parsing."""

    def test_parse(self):
        assert Difficulty.parse("Hard") == Difficulty.HARD
        assert Difficulty.parse("easy") == Difficulty.EASY
        assert Difficulty.parse(Difficulty.NORMAL) == Difficulty.NORMAL

    def test_parse_unknown(self):
        with pytest.raises(ValueError):
            Difficulty.parse("Impossible")


class TestEvaluateMove:
    """Tests for the one-move heuristic."""

    def test_hit_and_blot(self, make_state):
        state = make_state(white={10: 1}, black={13: 1}, dice=(3, 5), moves_left=(3,))
        move = Move(10, 13, 3, is_hit=True)
        # +100 hit, -30 lone checker on the destination
        assert evaluate_move(state, move, "Normal", config=NO_JITTER) == pytest.approx(70.0)

    def test_bear_off(self, make_state):
        state = make_state(white={23: 1}, dice=(1, 2), moves_left=(1,))
        assert evaluate_move(state, Move(23, OFF, 1), config=NO_JITTER) == pytest.approx(200.0)

    def test_breaking_a_point(self, make_state):
        state = make_state(white={10: 2}, dice=(3, 5), moves_left=(3,))
        # -30 blot on 13, -40 blot left on 10
        assert evaluate_move(state, Move(10, 13, 3), config=NO_JITTER) == pytest.approx(-70.0)

    def test_home_point_bonus_only_on_hard(self, make_state):
        state = make_state(white={18: 1, 21: 1}, dice=(3, 5), moves_left=(3,))
        move = Move(18, 21, 3)
        assert evaluate_move(state, move, "Normal", config=NO_JITTER) == pytest.approx(50.0)
        assert evaluate_move(state, move, "Hard", config=NO_JITTER) == pytest.approx(80.0)

    def test_jitter_bounds(self, make_state, rng):
        state = make_state(white={10: 1}, dice=(3, 5), moves_left=(3,))
        move = Move(10, 13, 3)
        for _ in range(100):
            score = evaluate_move(state, move, "Normal", rng)
            assert -30.0 <= score < -25.0

    def test_bar_entry_has_no_source_penalty(self, make_state):
        state = make_state(bar=(1, 0), dice=(3, 5), moves_left=(3,))
        assert evaluate_move(state, Move(BAR, 2, 3), config=NO_JITTER) == pytest.approx(-30.0)


class TestGetBestMove:
    """Tests for AI move selection."""

    def test_no_moves(self, make_state):
        black = {point: 2 for point in range(6)}
        state = make_state(white={10: 14}, black=black, bar=(1, 0), dice=(3, 5))
        for difficulty in ("Easy", "Normal", "Hard"):
            assert get_best_backgammon_move(state, difficulty) is None

    def test_returns_candidate(self, opening_state, rng):
        moves = get_valid_moves(opening_state)
        for difficulty in Difficulty:
            assert get_best_backgammon_move(opening_state, difficulty, rng) in moves

    def test_hard_prefers_hit(self, make_state, rng):
        state = make_state(white={10: 1, 20: 2}, black={13: 1}, dice=(3, 5), moves_left=(3,))
        for _ in range(20):
            move = get_best_backgammon_move(state, "Hard", rng)
            assert move == Move(10, 13, 3, is_hit=True)

    def test_prefers_bear_off(self, make_state, rng):
        state = make_state(white={22: 1, 23: 2}, off=(12, 0), dice=(1, 2), moves_left=(1,))
        move = get_best_backgammon_move(state, "Normal", rng)
        assert move == Move(23, OFF, 1)

    def test_ties_keep_first(self, make_state):
        state = make_state(white={5: 1, 8: 1}, dice=(1, 2), moves_left=(1,))
        moves = get_valid_moves(state)
        assert moves == [Move(5, 6, 1), Move(8, 9, 1)]
        assert select_move(state, moves, "Normal", config=NO_JITTER) == Move(5, 6, 1)

    def test_easy_is_uniform(self, opening_state):
        rng = np.random.default_rng(2024)
        moves = get_valid_moves(opening_state)
        trials = 300 * len(moves)

        counts = Counter()
        for _ in range(trials):
            move = get_best_backgammon_move(opening_state, "Easy", rng)
            counts[moves.index(move)] += 1

        assert len(counts) == len(moves)
        for count in counts.values():
            assert 200 < count < 400


class TestAgents:
    """Tests for agent wrappers."""

    def test_agent_select_move(self, opening_state):
        agent = Agent(name="First", select_move_fn=lambda state, moves: moves[0] if moves else None)
        moves = get_valid_moves(opening_state)
        assert agent.select_move(opening_state, moves) == moves[0]

    def test_random_agent(self, opening_state):
        agent = random_agent(seed=42)
        assert agent.name == "Random"
        moves = get_valid_moves(opening_state)
        assert agent.select_move(opening_state, moves) in moves
        assert agent.select_move(opening_state, []) is None

    def test_random_agent_variety(self, opening_state):
        agent = random_agent(seed=42)
        moves = get_valid_moves(opening_state)
        picks = {agent.select_move(opening_state, moves) for _ in range(30)}
        assert len(picks) > 1

    def test_heuristic_agent(self, opening_state):
        agent = heuristic_agent("hard", seed=1)
        assert agent.name == "Heuristic-Hard"
        moves = get_valid_moves(opening_state)
        assert agent.select_move(opening_state, moves) in moves

    def test_heuristic_agent_reproducible(self, opening_state):
        moves = get_valid_moves(opening_state)
        a = heuristic_agent("Normal", seed=9).select_move(opening_state, moves)
        b = heuristic_agent("Normal", seed=9).select_move(opening_state, moves)
        assert a == b

    def test_black_agent(self, opening_state):
        state = opening_state.__class__(
            board=opening_state.board,
            turn=Player.BLACK,
            dice=(6, 5),
            moves_left=(6, 5),
        )
        move = heuristic_agent("Hard", seed=0).select_move(state, get_valid_moves(state))
        assert move is not None
        assert state.board[move.from_point] < 0
