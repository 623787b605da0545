"""Core type definitions for the tavla backgammon engine.

Every value here is immutable. A new ``BackgammonState`` is produced for each
transition, so states can be shared, compared and hashed freely.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, Optional, Tuple, Union


# ==============================================================================
# BOARD REPRESENTATION
# ==============================================================================

NUM_POINTS = 24
CHECKERS_PER_PLAYER = 15

# Sentinels for positions that are not board points
BAR = "bar"
OFF = "off"

# Type aliases
Point = int  # 0-23
Source = Union[int, str]  # point or BAR
Destination = Union[int, str]  # point or OFF


class Player(Enum):
    """Player colors.

    White moves 0 → 23 (home: 18-23), Black moves 23 → 0 (home: 0-5).
    """
    WHITE = "white"
    BLACK = "black"

    def opponent(self) -> "Player":
        """Return the opponent player."""
        return Player.BLACK if self == Player.WHITE else Player.WHITE

    @property
    def sign(self) -> int:
        """Sign of this player's board counts, also the index step per pip moved."""
        return 1 if self == Player.WHITE else -1

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class CheckerCounts:
    """Per-player checker counts (used for the bar and borne-off trays)."""
    white: int = 0
    black: int = 0

    def get(self, player: Player) -> int:
        return self.white if player == Player.WHITE else self.black

    def add(self, player: Player, delta: int) -> "CheckerCounts":
        """Return a copy with ``delta`` added to ``player``'s count."""
        if player == Player.WHITE:
            return replace(self, white=self.white + delta)
        return replace(self, black=self.black + delta)

    def to_dict(self) -> Dict[str, int]:
        return {"white": self.white, "black": self.black}


# ==============================================================================
# MOVES
# ==============================================================================

@dataclass(frozen=True)
class Move:
    """A checker movement.

    Atomic moves use one die. Compound moves carry the two atomic moves that
    make them up in ``sub_moves`` and their ``roll`` is the sum of both dice.

    Attributes:
        from_point: Starting point (0-23) or ``BAR``
        to_point: Ending point (0-23) or ``OFF``
        roll: Die value consumed (sum of both for a compound move)
        is_hit: Whether the (final) landing hits a lone enemy checker
        sub_moves: Component atomic moves, empty for atomic moves
    """
    from_point: Source
    to_point: Destination
    roll: int
    is_hit: bool = False
    sub_moves: Tuple["Move", ...] = ()

    @property
    def is_compound(self) -> bool:
        return len(self.sub_moves) > 0

    @property
    def bears_off(self) -> bool:
        return self.to_point == OFF

    @property
    def enters_from_bar(self) -> bool:
        return self.from_point == BAR

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-serializable record."""
        record: Dict[str, Any] = {
            "from": self.from_point,
            "to": self.to_point,
            "roll": self.roll,
            "isHit": self.is_hit,
        }
        if self.sub_moves:
            record["subMoves"] = [m.to_dict() for m in self.sub_moves]
        return record

    @staticmethod
    def from_dict(record: Dict[str, Any]) -> "Move":
        """Create from a record produced by ``to_dict``."""
        return Move(
            from_point=record["from"],
            to_point=record["to"],
            roll=int(record["roll"]),
            is_hit=bool(record.get("isHit", False)),
            sub_moves=tuple(Move.from_dict(m) for m in record.get("subMoves", ())),
        )

    def __str__(self) -> str:
        hit = "*" if self.is_hit else ""
        return f"{self.from_point}/{self.to_point}{hit} ({self.roll})"


# ==============================================================================
# GAME STATE
# ==============================================================================

@dataclass(frozen=True)
class BackgammonState:
    """Complete game state.

    Attributes:
        board: 24 signed counts; >0 white checkers, <0 black checkers
        bar: Checkers waiting to re-enter
        off: Checkers borne off
        turn: Player to move
        dice: The current roll (2 values, or 4 for doubles)
        moves_left: Die values not yet used this turn
        winner: Set once a player has borne off all 15 checkers
    """
    board: Tuple[int, ...] = field(default_factory=lambda: (0,) * NUM_POINTS)
    bar: CheckerCounts = field(default_factory=CheckerCounts)
    off: CheckerCounts = field(default_factory=CheckerCounts)
    turn: Player = Player.WHITE
    dice: Tuple[int, ...] = ()
    moves_left: Tuple[int, ...] = ()
    winner: Optional[Player] = None

    def __post_init__(self):
        """Validate state shape."""
        assert len(self.board) == NUM_POINTS, f"board must have length {NUM_POINTS}"
        assert all(1 <= d <= 6 for d in self.dice), f"Invalid dice: {self.dice}"
        assert all(1 <= d <= 6 for d in self.moves_left), f"Invalid moves_left: {self.moves_left}"

    def checkers_at(self, player: Player, point: Point) -> int:
        """Number of ``player``'s checkers on ``point`` (0 if owned by the opponent)."""
        count = self.board[point] * player.sign
        return count if count > 0 else 0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-serializable record."""
        return {
            "board": list(self.board),
            "bar": self.bar.to_dict(),
            "off": self.off.to_dict(),
            "turn": self.turn.value,
            "dice": list(self.dice),
            "movesLeft": list(self.moves_left),
            "winner": self.winner.value if self.winner else None,
        }

    @staticmethod
    def from_dict(record: Dict[str, Any]) -> "BackgammonState":
        """Create from a record produced by ``to_dict``."""
        winner = record.get("winner")
        return BackgammonState(
            board=tuple(int(c) for c in record["board"]),
            bar=CheckerCounts(**record["bar"]),
            off=CheckerCounts(**record["off"]),
            turn=Player(record["turn"]),
            dice=tuple(int(d) for d in record["dice"]),
            moves_left=tuple(int(d) for d in record["movesLeft"]),
            winner=Player(winner) if winner else None,
        )


# ==============================================================================
# RESULTS
# ==============================================================================

@dataclass(frozen=True)
class MoveResult:
    """Outcome of a validated move application.

    Attributes:
        success: Whether the move was applied
        state: Resulting state (the unchanged input state on failure)
        error: Reason for failure, empty on success
    """
    success: bool
    state: BackgammonState
    error: str = ""

    @staticmethod
    def ok(state: BackgammonState) -> "MoveResult":
        return MoveResult(success=True, state=state)

    @staticmethod
    def failure(state: BackgammonState, error: str) -> "MoveResult":
        return MoveResult(success=False, state=state, error=error)


@dataclass(frozen=True)
class GameOutcome:
    """Game outcome with points won.

    Attributes:
        winner: Which player won
        points: Points won (1=normal, 2=gammon, 3=backgammon)
    """
    winner: Player
    points: int

    def __post_init__(self):
        """Validate outcome."""
        assert self.points in [1, 2, 3], f"Points must be 1, 2, or 3, got {self.points}"

    def is_gammon(self) -> bool:
        """Check if outcome is a gammon (includes backgammon)."""
        return self.points >= 2

    def is_backgammon(self) -> bool:
        """Check if outcome is a backgammon."""
        return self.points == 3
