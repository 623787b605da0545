"""Turn and forfeit policy.

After every applied move the game either continues with the same player or
passes to the opponent with a fresh roll. The turn passes when all dice have
been used, or when dice remain but none of them can be played (the rest of
the roll is forfeit).
"""

import logging
from dataclasses import replace
from typing import Optional

import numpy as np

from tavla.core.types import BackgammonState, Move
from tavla.core.dice import roll_dice
from tavla.core.moves import apply_move, get_valid_moves

logger = logging.getLogger(__name__)


def needs_turn_change(state: BackgammonState) -> bool:
    """Check whether the player to move is done for this turn.

    Args:
        state: Current state

    Returns:
        True if the game is still running and the dice are used up or blocked
    """
    if state.winner is not None:
        return False
    if not state.moves_left:
        return True
    return len(get_valid_moves(state)) == 0


def switch_turn(state: BackgammonState, rng: Optional[np.random.Generator] = None) -> BackgammonState:
    """Hand the turn to the opponent with a fresh roll.

    Args:
        state: Current state
        rng: NumPy random generator for the new roll

    Returns:
        New state with the opponent to move and ``moves_left`` equal to the dice
    """
    dice = roll_dice(rng)
    return replace(state, turn=state.turn.opponent(), dice=dice, moves_left=dice)


def advance_turn(state: BackgammonState, rng: Optional[np.random.Generator] = None) -> BackgammonState:
    """Run the forfeit check and switch the turn if needed.

    At most one switch happens per call. If the incoming player is blocked
    as well, the next call passes the turn again (see ``settle_turn``).

    Args:
        state: State after a move (or a freshly rolled state)
        rng: NumPy random generator for the new roll

    Returns:
        The same state if the player can keep moving, else the switched state
    """
    if not needs_turn_change(state):
        return state

    if state.moves_left:
        logger.debug("%s cannot play %s, forfeiting", state.turn, list(state.moves_left))

    next_state = switch_turn(state, rng)
    logger.debug("Turn passes to %s with dice %s", next_state.turn, list(next_state.dice))
    return next_state


def settle_turn(
    state: BackgammonState,
    rng: Optional[np.random.Generator] = None,
    max_switches: int = 64,
) -> BackgammonState:
    """Advance the turn until the player to move has a playable die.

    Hosts call this before handing a state to a player, so nobody is ever
    left holding dice with no candidate moves.

    Args:
        state: State after a move (or a freshly rolled state)
        rng: NumPy random generator for the new rolls
        max_switches: Upper bound on turn switches; two fully blocked
            sides would otherwise pass the turn forever

    Returns:
        A state where the player to move can play, the game is over, or
        ``max_switches`` passes have happened
    """
    for _ in range(max_switches):
        if not needs_turn_change(state):
            return state
        state = advance_turn(state, rng)

    if needs_turn_change(state):
        logger.warning("Both players blocked after %d turn switches", max_switches)
    return state


def play_move(
    state: BackgammonState,
    move: Move,
    rng: Optional[np.random.Generator] = None,
) -> BackgammonState:
    """Apply a move and then run the turn step.

    Args:
        state: Current state
        move: A candidate from ``get_valid_moves(state)``
        rng: NumPy random generator for the next roll

    Returns:
        Next state, possibly with the opponent to move
    """
    return advance_turn(apply_move(state, move), rng)
