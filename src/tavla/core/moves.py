"""Move generation and move application.

Moves are generated one die at a time (atomic moves) and then extended into
compound moves that spend two dice on the same checker. Only two-step
extensions are generated: a checker that could travel four steps on doubles
is reached through successive turns of the selection loop, not offered as a
single four-step candidate.

``apply_move`` is a pure transition that trusts its input. Hosts that accept
moves from outside should go through ``try_apply_move``.
"""

from dataclasses import replace
from typing import List, Optional, Tuple

from tavla.core.types import (
    BAR,
    BackgammonState,
    CHECKERS_PER_PLAYER,
    Destination,
    Move,
    MoveResult,
    NUM_POINTS,
    OFF,
    Player,
    Point,
    Source,
)
from tavla.core.board import (
    can_bear_off,
    entry_point,
    home_board_range,
    is_blocked,
)


# ==============================================================================
# HELPER FUNCTIONS FOR MOVE GENERATION
# ==============================================================================

def _hits_blot(state: BackgammonState, player: Player, point: Point) -> bool:
    """Check whether landing on ``point`` hits a lone opponent checker."""
    return state.checkers_at(player.opponent(), point) == 1


def _is_rearmost(state: BackgammonState, player: Player, point: Point) -> bool:
    """Check that no checker of ``player`` sits behind ``point`` in the home board.

    Behind means further from bearing off: lower indices for White, higher
    indices for Black.
    """
    home = home_board_range(player)
    if player == Player.WHITE:
        behind = range(home.start, point)
    else:
        behind = range(point + 1, home.stop)
    return all(state.checkers_at(player, p) == 0 for p in behind)


def _unique_rolls(moves_left: Tuple[int, ...]) -> List[int]:
    """Distinct die values in first-seen order."""
    return list(dict.fromkeys(moves_left))


def _consume_die(moves_left: Tuple[int, ...], roll: int) -> Tuple[int, ...]:
    """Remove one instance of ``roll``; unknown values leave the dice untouched."""
    if roll not in moves_left:
        return moves_left
    idx = moves_left.index(roll)
    return moves_left[:idx] + moves_left[idx + 1:]


# ==============================================================================
# MOVE GENERATION
# ==============================================================================

def get_single_step_moves(state: BackgammonState) -> List[Move]:
    """Generate the legal atomic moves for the player to move.

    One move per (checker point, unique die value) pair. When the player has
    a checker on the bar, only bar entries are returned.

    Args:
        state: Current state

    Returns:
        Legal atomic moves (empty when the game is over or no dice remain)
    """
    if state.winner is not None or not state.moves_left:
        return []

    player = state.turn
    rolls = _unique_rolls(state.moves_left)
    moves: List[Move] = []

    # Checkers on the bar must enter first
    if state.bar.get(player) > 0:
        for roll in rolls:
            target = entry_point(player, roll)
            if is_blocked(state, player, target):
                continue
            moves.append(Move(BAR, target, roll, is_hit=_hits_blot(state, player, target)))
        return moves

    bearing_off = can_bear_off(state, player)
    edge = NUM_POINTS if player == Player.WHITE else -1

    for point in range(NUM_POINTS):
        if state.checkers_at(player, point) == 0:
            continue

        for roll in rolls:
            target = point + player.sign * roll

            if 0 <= target < NUM_POINTS:
                if not is_blocked(state, player, target):
                    moves.append(Move(point, target, roll, is_hit=_hits_blot(state, player, target)))
                continue

            if not bearing_off:
                continue

            # Exact bear-off, or overshoot from the rearmost checker
            if target == edge or _is_rearmost(state, player, point):
                moves.append(Move(point, OFF, roll))

    return moves


def get_valid_moves(state: BackgammonState) -> List[Move]:
    """Generate every legal candidate move for the player to move.

    The result lists the atomic moves first, followed by compound moves that
    carry one checker through an intermediate point using two dice. The list
    is not de-duplicated: two paths to the same destination both appear.

    Args:
        state: Current state

    Returns:
        Atomic and compound candidates (empty means the remaining dice are forfeit)
    """
    singles = get_single_step_moves(state)
    compounds: List[Move] = []

    for first in singles:
        if first.bears_off:
            continue

        scratch = apply_move(state, first)
        for second in get_single_step_moves(scratch):
            if second.from_point != first.to_point:
                continue
            compounds.append(Move(
                from_point=first.from_point,
                to_point=second.to_point,
                roll=first.roll + second.roll,
                is_hit=second.is_hit,
                sub_moves=(first, second),
            ))

    return singles + compounds


def find_move(moves: List[Move], from_point: Source, to_point: Destination) -> Optional[Move]:
    """Find the first candidate that moves ``from_point`` to ``to_point``.

    Args:
        moves: Candidates from ``get_valid_moves``
        from_point: Starting point or ``BAR``
        to_point: Ending point or ``OFF``

    Returns:
        Matching move, or None if the pair is not legal
    """
    for move in moves:
        if move.from_point == from_point and move.to_point == to_point:
            return move
    return None


def is_legal_move(state: BackgammonState, move: Move) -> bool:
    """Check whether ``move`` is one of the current candidates."""
    return move in get_valid_moves(state)


# ==============================================================================
# MOVE APPLICATION
# ==============================================================================

def apply_move(state: BackgammonState, move: Move) -> BackgammonState:
    """Apply a move and return the resulting state.

    Compound moves are replayed step by step so intermediate hits land on
    the bar. The turn is not switched and no dice are rolled.

    The move must come from ``get_valid_moves(state)``; anything else
    produces an inconsistent board rather than an error.

    Args:
        state: Current state
        move: Move to apply

    Returns:
        New state
    """
    if move.sub_moves:
        for sub_move in move.sub_moves:
            state = apply_move(state, sub_move)
        return state

    player = state.turn
    sign = player.sign
    board = list(state.board)
    bar = state.bar
    off = state.off

    # Remove from source
    if move.from_point == BAR:
        bar = bar.add(player, -1)
    else:
        board[move.from_point] -= sign

    # Add to destination
    if move.to_point == OFF:
        off = off.add(player, 1)
    else:
        if move.is_hit:
            bar = bar.add(player.opponent(), 1)
            board[move.to_point] = 0
        board[move.to_point] += sign

    winner = state.winner
    if off.get(player) == CHECKERS_PER_PLAYER:
        winner = player

    return replace(
        state,
        board=tuple(board),
        bar=bar,
        off=off,
        moves_left=_consume_die(state.moves_left, move.roll),
        winner=winner,
    )


def try_apply_move(state: BackgammonState, move: Move) -> MoveResult:
    """Apply a move after checking it against the current candidates.

    Args:
        state: Current state
        move: Move to apply

    Returns:
        MoveResult with the new state, or the unchanged state and an error
    """
    if state.winner is not None:
        return MoveResult.failure(state, f"Game is over, {state.winner} won")

    if not state.moves_left:
        return MoveResult.failure(state, "No dice left this turn")

    if not is_legal_move(state, move):
        return MoveResult.failure(state, f"Illegal move: {move}")

    return MoveResult.ok(apply_move(state, move))
