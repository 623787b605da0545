"""Board construction, queries and display.

Board Layout:
    White moves 0→23→off (home board: 18-23)
    Black moves 23→0→off (home board: 0-5)

    Point indices:
    12 13 14 15 16 17    18 19 20 21 22 23
    +------------------+------------------+
    |                  |                  |  White home
    |                  |                  |
    |                  |                  |
    |                  |                  |  Black home
    +------------------+------------------+
    11 10  9  8  7  6     5  4  3  2  1  0

    A positive count is white, a negative count is black.
"""

from typing import Optional, Tuple
import numpy as np

from tavla.core.types import (
    BackgammonState,
    CheckerCounts,
    CHECKERS_PER_PLAYER,
    GameOutcome,
    NUM_POINTS,
    Player,
    Point,
)
from tavla.core.dice import roll_dice


INITIAL_BOARD: Tuple[int, ...] = (
    2, 0, 0, 0, 0, -5,   # 0-5
    0, -3, 0, 0, 0, 5,   # 6-11
    -5, 0, 0, 0, 3, 0,   # 12-17
    5, 0, 0, 0, 0, -2,   # 18-23
)


# ==============================================================================
# BOARD CONSTRUCTION
# ==============================================================================

def create_backgammon_game(rng: Optional[np.random.Generator] = None) -> BackgammonState:
    """Create the standard starting position with a fresh roll.

    Standard setup:
    - White: 2 on 0, 5 on 11, 3 on 16, 5 on 18
    - Black: 2 on 23, 5 on 12, 3 on 7, 5 on 5

    Args:
        rng: NumPy random generator used for the opening roll

    Returns:
        State with White to move and ``moves_left`` equal to the dice
    """
    dice = roll_dice(rng)
    return BackgammonState(
        board=INITIAL_BOARD,
        bar=CheckerCounts(),
        off=CheckerCounts(),
        turn=Player.WHITE,
        dice=dice,
        moves_left=dice,
        winner=None,
    )


# ==============================================================================
# BOARD QUERIES
# ==============================================================================

def home_board_range(player: Player) -> range:
    """Get the range of point indices in a player's home board."""
    if player == Player.WHITE:
        return range(18, 24)
    return range(0, 6)


def entry_point(player: Player, die: int) -> Point:
    """Get the point a checker enters on from the bar with a die value.

    White enters in black's home (0-5), black in white's home (18-23).
    """
    if player == Player.WHITE:
        return die - 1
    return NUM_POINTS - die


def is_blocked(state: BackgammonState, player: Player, point: Point) -> bool:
    """Check whether the opponent holds ``point`` with two or more checkers."""
    return state.checkers_at(player.opponent(), point) >= 2


def checkers_on_board(state: BackgammonState, player: Player) -> int:
    """Count a player's checkers on points 0-23."""
    return sum(state.checkers_at(player, point) for point in range(NUM_POINTS))


def total_checkers(state: BackgammonState, player: Player) -> int:
    """Count a player's checkers on the board, on the bar and borne off."""
    return checkers_on_board(state, player) + state.bar.get(player) + state.off.get(player)


def can_bear_off(state: BackgammonState, player: Player) -> bool:
    """Check if a player can bear off checkers.

    A player can bear off when no checker is on the bar and all their
    checkers are in their home board.

    Args:
        state: Current state
        player: Which player

    Returns:
        True if player can bear off
    """
    if state.bar.get(player) > 0:
        return False

    home = home_board_range(player)
    for point in range(NUM_POINTS):
        if point not in home and state.checkers_at(player, point) > 0:
            return False

    return True


def pip_count(state: BackgammonState, player: Player) -> int:
    """Calculate pip count for a player.

    Pip count is the total number of pips needed to bear off every checker.
    Checkers on the bar count 25 pips each.

    Args:
        state: Current state
        player: Which player

    Returns:
        Total pip count
    """
    total = 25 * state.bar.get(player)
    for point in range(NUM_POINTS):
        count = state.checkers_at(player, point)
        if count > 0:
            distance = NUM_POINTS - point if player == Player.WHITE else point + 1
            total += distance * count
    return total


def is_game_over(state: BackgammonState) -> bool:
    """Check if the game is over."""
    return state.winner is not None


def game_outcome(state: BackgammonState) -> Optional[GameOutcome]:
    """Determine the winner and outcome type.

    A win is a gammon when the loser has borne off nothing, and a backgammon
    when the loser additionally still has a checker on the bar or in the
    winner's home board.

    Args:
        state: Current state

    Returns:
        GameOutcome if a player has borne off all checkers, None otherwise
    """
    for player in (Player.WHITE, Player.BLACK):
        if state.off.get(player) < CHECKERS_PER_PLAYER:
            continue

        loser = player.opponent()
        if state.off.get(loser) > 0:
            return GameOutcome(winner=player, points=1)

        in_winner_home = sum(state.checkers_at(loser, p) for p in home_board_range(player))
        if in_winner_home > 0 or state.bar.get(loser) > 0:
            return GameOutcome(winner=player, points=3)
        return GameOutcome(winner=player, points=2)

    return None


def is_valid_state(state: BackgammonState) -> Tuple[bool, str]:
    """Validate a state.

    Args:
        state: State to validate

    Returns:
        (is_valid, error_message) tuple
    """
    for player in (Player.WHITE, Player.BLACK):
        if state.bar.get(player) < 0 or state.off.get(player) < 0:
            return False, f"{player} has a negative bar or off count"

        total = total_checkers(state, player)
        if total != CHECKERS_PER_PLAYER:
            return False, f"{player} has {total} checkers, should have {CHECKERS_PER_PLAYER}"

    for point, count in enumerate(state.board):
        if abs(count) > CHECKERS_PER_PLAYER:
            return False, f"Point {point} has {abs(count)} checkers"

    return True, ""


# ==============================================================================
# BOARD DISPLAY (for debugging)
# ==============================================================================

def board_to_string(state: BackgammonState) -> str:
    """Convert state to string representation.

    Args:
        state: State to display

    Returns:
        ASCII representation
    """
    lines = []
    lines.append("=" * 40)
    lines.append(f"Player to move: {state.turn}")
    lines.append(f"Dice: {list(state.dice)}  Moves left: {list(state.moves_left)}")
    lines.append(f"White pip count: {pip_count(state, Player.WHITE)}")
    lines.append(f"Black pip count: {pip_count(state, Player.BLACK)}")
    lines.append("")

    lines.append("Point | White | Black")
    lines.append("------+-------+------")
    lines.append(f"BAR   |  {state.bar.white:2d}   |  {state.bar.black:2d}")
    for point in range(NUM_POINTS):
        w = state.checkers_at(Player.WHITE, point)
        b = state.checkers_at(Player.BLACK, point)
        lines.append(f"{point:2d}    |  {w:2d}   |  {b:2d}")
    lines.append(f"OFF   |  {state.off.white:2d}   |  {state.off.black:2d}")

    if state.winner is not None:
        lines.append(f"Winner: {state.winner}")

    lines.append("=" * 40)
    return "\n".join(lines)
