"""Game logic module for Connect Four."""

from .board import Board
from .engine import GameEngine, build_players, start_game


__all__ = [
    "Board",
    "GameEngine",
    "build_players",
    "start_game",
]
