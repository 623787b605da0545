"""Pytest configuration and shared fixtures."""

from dataclasses import replace

import numpy as np
import pytest

from tavla.core.types import BackgammonState, CheckerCounts, NUM_POINTS, Player


@pytest.fixture
def rng():
    """Create a seeded NumPy random generator for testing."""
    return np.random.default_rng(42)


@pytest.fixture
def opening_state():
    """Starting position with a fixed 3-1 roll."""
    from tavla.core.board import create_backgammon_game
    state = create_backgammon_game(np.random.default_rng(0))
    return replace(state, dice=(3, 1), moves_left=(3, 1))


@pytest.fixture
def make_state():
    """Return a builder for custom positions.

    ``white`` and ``black`` map point index to checker count (both given as
    positive numbers). Checker totals are not enforced.
    """
    def build(
        white=None,
        black=None,
        turn=Player.WHITE,
        dice=(3, 1),
        moves_left=None,
        bar=(0, 0),
        off=(0, 0),
        winner=None,
    ) -> BackgammonState:
        board = [0] * NUM_POINTS
        for point, count in (white or {}).items():
            board[point] = count
        for point, count in (black or {}).items():
            board[point] = -count
        return BackgammonState(
            board=tuple(board),
            bar=CheckerCounts(*bar),
            off=CheckerCounts(*off),
            turn=turn,
            dice=tuple(dice),
            moves_left=tuple(dice if moves_left is None else moves_left),
            winner=winner,
        )

    return build
