"""Tests for hosted game sessions."""

import threading

from tavla.core.types import OFF, Move, Player
from tavla.core.board import is_valid_state
from tavla.play.session import GameSession, GameStatus


class TestSessionLifecycle:
    """Tests for creating, resigning and resetting."""

    def test_new_session(self):
        session = GameSession(seed=1)
        assert session.status == GameStatus.ACTIVE
        assert session.state.turn == Player.WHITE
        assert is_valid_state(session.state) == (True, "")
        assert session.valid_moves()

    def test_join(self):
        session = GameSession(seed=1)
        assert session.join("alice") == Player.WHITE
        assert session.join("bob") == Player.BLACK
        assert session.join("carol") is None
        assert session.join("bob") == Player.BLACK

    def test_resign(self):
        session = GameSession(seed=1)
        state = session.resign(Player.WHITE)

        assert session.status == GameStatus.RESIGNED
        assert state.winner == Player.BLACK
        assert session.valid_moves() == []
        assert not session.submit_move(Move(0, 3, 3)).success

    def test_reset(self):
        session = GameSession(seed=1)
        session.resign(Player.BLACK)
        state = session.reset()

        assert session.status == GameStatus.ACTIVE
        assert state.winner is None
        assert session.state is state

    def test_record(self):
        session = GameSession(seed=1)
        session.join("alice")
        record = session.to_dict()
        assert record["status"] == "active"
        assert record["whitePlayer"] == "alice"
        assert record["blackPlayer"] == ""
        assert len(record["board"]) == 24


class TestSubmitMoves:
    """Tests for validated move submission."""

    def test_legal_move(self, opening_state):
        session = GameSession(seed=1, state=opening_state)
        result = session.submit_move(Move(0, 3, 3))

        assert result.success
        assert session.state.moves_left == (1,)
        assert session.state.turn == Player.WHITE

    def test_illegal_move(self, opening_state):
        session = GameSession(seed=1, state=opening_state)
        result = session.submit_move(Move(0, 5, 5))

        assert not result.success
        assert session.state is opening_state

    def test_turn_passes(self, opening_state):
        session = GameSession(seed=1, state=opening_state)
        assert session.submit_move(Move(0, 3, 3)).success
        assert session.submit_move(Move(3, 4, 1)).success
        assert session.state.turn == Player.BLACK

    def test_drop(self, opening_state):
        session = GameSession(seed=1, state=opening_state)
        assert session.submit_drop(0, 4).success
        assert session.state.turn == Player.BLACK
        assert session.state.board[4] == 1

    def test_illegal_drop(self, opening_state):
        session = GameSession(seed=1, state=opening_state)
        result = session.submit_drop(11, 12)
        assert not result.success
        assert "No legal move" in result.error

    def test_winning_move_finishes(self, make_state):
        state = make_state(white={23: 1}, black={0: 15}, off=(14, 0), dice=(1, 2))
        session = GameSession(seed=1, state=state)

        result = session.submit_move(Move(23, OFF, 1))
        assert result.success
        assert session.status == GameStatus.FINISHED
        assert session.winner == Player.WHITE
        assert session.valid_moves() == []

    def test_concurrent_submissions(self, opening_state):
        """Only one of two racing submissions of the same move is applied."""
        session = GameSession(seed=1, state=opening_state)
        barrier = threading.Barrier(2)
        results = []

        def submit():
            barrier.wait()
            results.append(session.submit_move(Move(0, 3, 3)))

        threads = [threading.Thread(target=submit) for _ in range(2)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert sorted(r.success for r in results) == [False, True]
        assert session.state.board[0] == 1
        assert session.state.board[3] == 1


class TestAITurn:
    """Tests for AI turns inside a session."""

    def test_ai_plays_whole_turn(self, opening_state):
        session = GameSession(seed=3, state=opening_state)
        played = session.play_ai_turn("Hard")

        assert played
        assert sum(m.roll for m in played) == 4
        assert session.state.turn == Player.BLACK
        assert is_valid_state(session.state) == (True, "")

    def test_ai_forfeits_when_blocked(self, make_state):
        black = {point: 2 for point in range(6)}
        black[10] = 3
        state = make_state(white={15: 14}, black=black, bar=(1, 0), dice=(3, 5))
        session = GameSession(seed=3, state=state)

        assert session.play_ai_turn("Normal") == []
        assert session.state.turn == Player.BLACK

    def test_ai_turn_after_game_end(self):
        session = GameSession(seed=1)
        session.resign(Player.WHITE)
        assert session.play_ai_turn() == []


class TestBlockedOpponent:
    """Tests for handing the turn to a player who cannot move."""

    def _closed_board_state(self, make_state):
        white = {point: 2 for point in range(18, 24)}
        white[10] = 3
        return make_state(
            white=white,
            black={5: 14},
            bar=(0, 1),
            dice=(4, 1),
            moves_left=(1,),
        )

    def test_turn_skips_blocked_opponent(self, make_state):
        session = GameSession(seed=5, state=self._closed_board_state(make_state))

        assert session.submit_move(Move(10, 11, 1)).success
        assert session.state.turn == Player.WHITE
        assert session.state.moves_left == session.state.dice
        assert session.valid_moves()

    def test_drop_skips_blocked_opponent(self, make_state):
        session = GameSession(seed=6, state=self._closed_board_state(make_state))

        assert session.submit_drop(10, 11).success
        assert session.state.turn == Player.WHITE
        assert session.valid_moves()

    def test_ai_turn_skips_blocked_opponent(self, make_state):
        session = GameSession(seed=7, state=self._closed_board_state(make_state))

        assert len(session.play_ai_turn("Normal")) == 1
        assert session.state.turn == Player.WHITE
        assert session.valid_moves()


class TestSeating:
    """Tests for restricting moves to the seated player."""

    def _seated(self, opening_state):
        session = GameSession(seed=1, state=opening_state)
        session.join("alice")
        session.join("bob")
        return session

    def test_anonymous_move_rejected(self, opening_state):
        session = self._seated(opening_state)
        result = session.submit_move(Move(0, 3, 3))

        assert not result.success
        assert "Not your turn" in result.error
        assert session.state is opening_state

    def test_opponent_move_rejected(self, opening_state):
        session = self._seated(opening_state)
        assert not session.submit_move(Move(0, 3, 3), "bob").success
        assert not session.submit_drop(0, 3, "bob").success
        assert session.state is opening_state

    def test_seated_player_moves(self, opening_state):
        session = self._seated(opening_state)
        assert session.submit_move(Move(0, 3, 3), "alice").success
        assert session.submit_drop(3, 4, "alice").success
        assert session.state.turn == Player.BLACK
        assert not session.submit_move(session.valid_moves()[0], "alice").success

    def test_open_seat_accepts_any_caller(self, opening_state):
        session = GameSession(seed=1, state=opening_state)
        session.join("alice")
        assert session.submit_drop(0, 4, "alice").success

        assert session.state.turn == Player.BLACK
        assert session.seat_of(Player.BLACK) == ""
        assert session.submit_move(session.valid_moves()[0]).success
