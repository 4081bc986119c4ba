"""Abstract interface for computer move policies."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from ..game.board import Board


class AIInterface(ABC):
    """Abstract interface for computer players.

    Implementations pick a column given the current board. Selection is
    synchronous; any pause before showing the move belongs to the caller.
    """

    @abstractmethod
    def select_column(self, board: Board) -> int:
        """Choose a column to play.

        Args:
            board: Current board (at least one open column)

        Returns:
            Column number for the move
        """
        pass

    @abstractmethod
    def get_name(self) -> str:
        """Get AI name for display."""
        pass

    def select_column_with_explanation(self, board: Board) -> tuple[int, str]:
        """Get move with explanation (optional override).

        Args:
            board: Current board

        Returns:
            Tuple of (column, explanation_string)
        """
        column = self.select_column(board)
        return column, f"Selected column {column}"
