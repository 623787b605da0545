"""Dice utilities for backgammon.

This module handles dice rolling and the expansion of a roll into the die
values a player may use during the turn.
"""

from typing import List, Optional, Tuple
import numpy as np

# Two-die roll before expansion
DicePair = Tuple[int, int]


def all_dice_rolls() -> List[DicePair]:
    """Generate all 21 unique dice outcomes.

    In backgammon, (2,3) and (3,2) are equivalent, so there are 21 unique rolls:
    - 6 doubles: (1,1), (2,2), (3,3), (4,4), (5,5), (6,6)
    - 15 non-doubles: (1,2), (1,3), ..., (5,6)

    Returns:
        List of all 21 unique dice combinations, sorted
    """
    rolls = []
    for die1 in range(1, 7):
        for die2 in range(die1, 7):
            rolls.append((die1, die2))
    return rolls


def is_doubles(dice: DicePair) -> bool:
    """Check if dice roll is doubles."""
    return dice[0] == dice[1]


def dice_values(dice: DicePair) -> Tuple[int, ...]:
    """Get the dice values to use for moves.

    For doubles, you get 4 moves. For non-doubles, you get 2 moves.

    Args:
        dice: Dice roll tuple

    Returns:
        Tuple of dice values (length 2 or 4)

    Examples:
        >>> dice_values((3, 5))
        (3, 5)
        >>> dice_values((4, 4))
        (4, 4, 4, 4)
    """
    if is_doubles(dice):
        return (dice[0],) * 4
    return (dice[0], dice[1])


def roll_pair(rng: Optional[np.random.Generator] = None) -> DicePair:
    """Roll two dice.

    Args:
        rng: NumPy random generator (a fresh unseeded one if None)

    Returns:
        Tuple of (die1, die2) where each is 1-6
    """
    if rng is None:
        rng = np.random.default_rng()
    die1 = int(rng.integers(1, 7))
    die2 = int(rng.integers(1, 7))
    return (die1, die2)


def roll_dice(rng: Optional[np.random.Generator] = None) -> Tuple[int, ...]:
    """Roll the dice for a turn.

    Args:
        rng: NumPy random generator (a fresh unseeded one if None)

    Returns:
        The expanded die values: two distinct values, or four copies on doubles
    """
    return dice_values(roll_pair(rng))


def dice_to_string(dice: Tuple[int, ...]) -> str:
    """Convert dice to readable string.

    Examples:
        >>> dice_to_string((3, 5))
        '3-5'
        >>> dice_to_string((4, 4, 4, 4))
        'Double 4s'
    """
    if not dice:
        return "-"
    if len(dice) == 4 or (len(dice) == 2 and dice[0] == dice[1]):
        return f"Double {dice[0]}s"
    return "-".join(str(d) for d in dice)
