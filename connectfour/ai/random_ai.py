"""Random AI: the computer player's move policy."""

from __future__ import annotations

import random
from typing import TYPE_CHECKING

from .interface import AIInterface


if TYPE_CHECKING:
    from ..game.board import Board


class RandomAI(AIInterface):
    """Picks uniformly among the columns that are not full.

    Pass a seed for reproducible games.
    """

    def __init__(self, seed: int | None = None):
        self._rng = random.Random(seed)

    def select_column(self, board: Board) -> int:
        """Pick a random open column."""
        open_columns = board.open_columns()
        if not open_columns:
            raise ValueError("No legal moves available")
        return self._rng.choice(open_columns)

    def get_name(self) -> str:
        return "Random AI"

    def select_column_with_explanation(self, board: Board) -> tuple[int, str]:
        column = self.select_column(board)
        return column, f"Randomly selected column {column}"
