"""Hosting games: sessions and self-play."""

from tavla.play.self_play import (
    GameResult,
    GameStep,
    compute_game_statistics,
    play_game,
    play_games,
)
from tavla.play.session import GameSession, GameStatus

__all__ = [
    "GameResult",
    "GameStep",
    "compute_game_statistics",
    "play_game",
    "play_games",
    "GameSession",
    "GameStatus",
]
