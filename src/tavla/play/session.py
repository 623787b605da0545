"""A hosted game: one authoritative state shared by two players.

``GameSession`` is what a server or UI keeps per game. It validates every
submitted move against the current state, runs the turn policy after each
move, and serializes concurrent submissions with a lock so two players can
never both apply a move to the same state.
"""

import logging
import threading
from dataclasses import replace
from enum import Enum
from typing import Any, Dict, List, Optional, Union

import numpy as np

from tavla.core.types import BackgammonState, Destination, Move, MoveResult, Player, Source
from tavla.core.board import create_backgammon_game
from tavla.core.moves import find_move, get_valid_moves, try_apply_move
from tavla.core.turn import advance_turn, play_move, settle_turn
from tavla.evaluation.agents import Difficulty, HeuristicConfig, get_best_backgammon_move

logger = logging.getLogger(__name__)


class GameStatus(Enum):
    """Lifecycle of a hosted game."""
    ACTIVE = "active"
    FINISHED = "finished"
    RESIGNED = "resigned"


class GameSession:
    """Host for a single game.

    Args:
        seed: Seed for the session's dice and AI randomness
        state: Starting state (a fresh game if None)
    """

    def __init__(self, seed: Optional[int] = None, state: Optional[BackgammonState] = None):
        self._rng = np.random.default_rng(seed)
        self._lock = threading.Lock()
        self._state = state if state is not None else create_backgammon_game(self._rng)
        self._status = GameStatus.FINISHED if self._state.winner else GameStatus.ACTIVE
        self.white_player = ""
        self.black_player = ""

    @property
    def state(self) -> BackgammonState:
        return self._state

    @property
    def status(self) -> GameStatus:
        return self._status

    @property
    def winner(self) -> Optional[Player]:
        return self._state.winner

    def join(self, player_id: str) -> Optional[Player]:
        """Seat a player, white first.

        Returns:
            The player's color, or None if both seats are taken by others
        """
        with self._lock:
            if self.white_player in ("", player_id):
                self.white_player = player_id
                return Player.WHITE
            if self.black_player in ("", player_id):
                self.black_player = player_id
                return Player.BLACK
            return None

    def valid_moves(self) -> List[Move]:
        """Candidates for the player to move (empty unless the game is active)."""
        if self._status != GameStatus.ACTIVE:
            return []
        return get_valid_moves(self._state)

    def seat_of(self, player: Player) -> str:
        """Id of the client seated as ``player`` ("" if the seat is open)."""
        return self.white_player if player == Player.WHITE else self.black_player

    def submit_move(self, move: Move, player_id: Optional[str] = None) -> MoveResult:
        """Validate and apply a move, then run the turn policy.

        Once a client holds the seat of the player to move, only that client
        may move for it. An open seat accepts moves from any caller.

        Args:
            move: Move proposed by the player to move
            player_id: Id of the submitting client, as passed to ``join``

        Returns:
            MoveResult with the new authoritative state, or an error
        """
        with self._lock:
            error = self._check_turn(player_id)
            if error:
                return MoveResult.failure(self._state, error)
            return self._submit(move)

    def submit_drop(
        self,
        from_point: Source,
        to_point: Destination,
        player_id: Optional[str] = None,
    ) -> MoveResult:
        """Resolve a (from, to) pair, e.g. from drag and drop, and submit it."""
        with self._lock:
            error = self._check_turn(player_id)
            if error:
                return MoveResult.failure(self._state, error)
            move = find_move(get_valid_moves(self._state), from_point, to_point)
            if move is None:
                return MoveResult.failure(self._state, f"No legal move from {from_point} to {to_point}")
            return self._submit(move)

    def play_ai_turn(
        self,
        difficulty: Union[Difficulty, str] = Difficulty.NORMAL,
        config: Optional[HeuristicConfig] = None,
    ) -> List[Move]:
        """Let the AI play moves until the turn passes or the game ends.

        Args:
            difficulty: "Easy", "Normal" or "Hard"
            config: Heuristic weights (uses defaults if None)

        Returns:
            The moves played, in order (empty if the whole roll was forfeit)
        """
        with self._lock:
            if self._status != GameStatus.ACTIVE:
                return []

            player = self._state.turn
            state = self._state
            played: List[Move] = []

            while state.winner is None and state.turn == player:
                move = get_best_backgammon_move(state, difficulty, self._rng, config)
                if move is None:
                    state = advance_turn(state, self._rng)
                    break
                played.append(move)
                state = play_move(state, move, self._rng)

            logger.debug("AI (%s) played %s", player, [str(m) for m in played])
            self._commit(state)
            return played

    def resign(self, player: Player) -> BackgammonState:
        """Resign on behalf of ``player``; the opponent wins."""
        with self._lock:
            if self._status != GameStatus.ACTIVE:
                return self._state
            self._state = replace(self._state, moves_left=(), winner=player.opponent())
            self._status = GameStatus.RESIGNED
            logger.info("%s resigned, %s wins", player, player.opponent())
            return self._state

    def reset(self) -> BackgammonState:
        """Start a new game with the same players."""
        with self._lock:
            self._state = create_backgammon_game(self._rng)
            self._status = GameStatus.ACTIVE
            logger.info("Game reset")
            return self._state

    def to_dict(self) -> Dict[str, Any]:
        """Serializable record of the session (state plus seating and status)."""
        record = self._state.to_dict()
        record.update({
            "whitePlayer": self.white_player,
            "blackPlayer": self.black_player,
            "status": self._status.value,
        })
        return record

    def _submit(self, move: Move) -> MoveResult:
        if self._status != GameStatus.ACTIVE:
            return MoveResult.failure(self._state, f"Game is {self._status.value}")

        result = try_apply_move(self._state, move)
        if not result.success:
            logger.debug("Rejected move %s: %s", move, result.error)
            return result

        self._commit(result.state)
        return MoveResult.ok(self._state)

    def _check_turn(self, player_id: Optional[str]) -> str:
        if self._status != GameStatus.ACTIVE:
            return f"Game is {self._status.value}"
        seat = self.seat_of(self._state.turn)
        if seat and player_id != seat:
            return f"Not your turn, {self._state.turn} to move"
        return ""

    def _commit(self, state: BackgammonState) -> None:
        # The next player always receives a playable roll
        state = settle_turn(state, self._rng)
        self._state = state
        if state.winner is not None:
            self._status = GameStatus.FINISHED
            logger.info("Game finished, %s wins", state.winner)
