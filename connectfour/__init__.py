"""Connect Four game engine with an optional computer player."""

from .core.types import GamePhase, GameState, MoveRejection, MoveResult, Player, PlayerKind
from .game.board import Board
from .game.engine import GameEngine, start_game


__version__ = "0.1.0"

__all__ = [
    "Board",
    "GameEngine",
    "GamePhase",
    "GameState",
    "MoveRejection",
    "MoveResult",
    "Player",
    "PlayerKind",
    "start_game",
]
