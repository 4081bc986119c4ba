"""
Shared data types for the Connect Four engine.

These types are the contracts between modules.
The board, the engine, the AI and the CLI all communicate using these structures.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from ..ai.interface import AIInterface


# ─────────────────────────────────────────────────────────────
# PLAYER & GAME PHASE
# ─────────────────────────────────────────────────────────────


class PlayerKind(Enum):
    """Who chooses the moves for a player."""

    HUMAN = "human"
    COMPUTER = "computer"


@dataclass(frozen=True)
class Player:
    """
    Player identity.

    Players are created once at game start and never mutated.
    Equality is by color and kind; the policy is behavior, not identity.
    """

    color: str
    kind: PlayerKind = PlayerKind.HUMAN
    policy: AIInterface | None = field(default=None, compare=False, repr=False)

    def __post_init__(self) -> None:
        if not self.color or not self.color.strip():
            raise ValueError("Player color must be a non-empty string")
        if self.kind == PlayerKind.COMPUTER and self.policy is None:
            raise ValueError("Computer players need a move policy")

    def __str__(self) -> str:
        return self.color

    @classmethod
    def human(cls, color: str) -> Player:
        return cls(color=color)

    @classmethod
    def computer(cls, color: str, policy: AIInterface | None = None, seed: int | None = None) -> Player:
        """Create a computer player (random policy unless one is given)."""
        if policy is None:
            from ..ai.random_ai import RandomAI

            policy = RandomAI(seed=seed)
        return cls(color=color, kind=PlayerKind.COMPUTER, policy=policy)

    @property
    def is_computer(self) -> bool:
        return self.kind == PlayerKind.COMPUTER


class GamePhase(Enum):
    """Current phase of the game."""

    AWAITING_MOVE = auto()  # Waiting for the current player's column
    WON = auto()  # Four in a row, terminal
    TIED = auto()  # Board full without a winner, terminal


class MoveRejection(Enum):
    """Why a submitted move was ignored."""

    INVALID_COLUMN = "invalid_column"  # Outside [0, width)
    COLUMN_FULL = "column_full"  # No empty cell left in the column
    GAME_ALREADY_OVER = "game_already_over"  # Won or tied already
    MOVE_IN_PROGRESS = "move_in_progress"  # Submitted while another move is being applied


# ─────────────────────────────────────────────────────────────
# BOARD POSITIONS & MOVES
# ─────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class Position:
    """Grid position (0-indexed)."""

    row: int  # 0 = top
    col: int  # 0 = left


@dataclass(frozen=True)
class Move:
    """A placed piece."""

    column: int
    player: Player
    position: Position

    def __str__(self) -> str:
        return f"{self.player} → Column {self.column}"


# ─────────────────────────────────────────────────────────────
# GAME STATE & MOVE RESULTS
# ─────────────────────────────────────────────────────────────


@dataclass
class GameState:
    """Complete game state snapshot."""

    phase: GamePhase
    current_player: Player
    current_index: int = 0
    winner: Player | None = None
    winning_positions: list[Position] = field(default_factory=list)
    legal_moves: list[int] = field(default_factory=list)
    move_history: list[Move] = field(default_factory=list)
    turn_number: int = 1

    @property
    def is_terminal(self) -> bool:
        return self.phase in (GamePhase.WON, GamePhase.TIED)

    @property
    def message(self) -> str:
        """Announcement for the view layer."""
        if self.phase == GamePhase.WON:
            return f"Player {self.winner} won!"
        if self.phase == GamePhase.TIED:
            return "It's a tie!"
        return f"Player {self.current_player}'s turn"


@dataclass
class MoveResult:
    """Outcome of a single `apply_move` call."""

    column: int
    state: GameState
    position: Position | None = None
    rejection: MoveRejection | None = None

    @property
    def accepted(self) -> bool:
        return self.rejection is None
