"""Game engine for Connect Four state management."""

import logging
from collections.abc import Sequence

from ..core.bus import EventBus
from ..core.events import Event, EventType
from ..core.types import (
    GamePhase,
    GameState,
    Move,
    MoveRejection,
    MoveResult,
    Player,
    Position,
)
from .board import Board


logger = logging.getLogger(__name__)

MAX_PLAYERS = 3


class GameEngine:
    """Manages game state and enforces rules.

    Stateful engine that:
    - Tracks the board and whose turn it is
    - Validates moves
    - Detects wins/ties
    - Plays computer turns as soon as they come up
    - Emits events for state changes
    """

    def __init__(
        self,
        players: Sequence[Player],
        height: int = 6,
        width: int = 7,
        bus: EventBus | None = None,
    ):
        """Initialize game engine.

        Args:
            players: Turn order, 1 to 3 players with distinct colors
            height: Board rows (at least 4)
            width: Board columns (at least 4)
            bus: Event bus (a private one if None)

        Raises:
            ValueError: If the player list or board size is invalid
        """
        players = list(players)
        if not 1 <= len(players) <= MAX_PLAYERS:
            raise ValueError(f"Need 1 to {MAX_PLAYERS} players (got {len(players)})")
        colors = [p.color for p in players]
        if len(set(colors)) != len(colors):
            raise ValueError(f"Player colors must be distinct: {colors}")

        # Validate dimensions up front; new_game() builds the real board.
        Board(height, width)

        self._players = tuple(players)
        self.height = height
        self.width = width
        self.bus = bus or EventBus()
        self._board: Board | None = None
        self._phase = GamePhase.AWAITING_MOVE
        self._current_index = 0
        self._winner: Player | None = None
        self._winning_positions: list[Position] = []
        self._move_history: list[Move] = []
        self._applying = False

    def new_game(self) -> GameState:
        """Start a game on an empty board with the first player to move.

        If the first player is a computer it moves immediately, and keeps
        moving for as long as computer players follow each other.

        Returns:
            Game state after any computer moves
        """
        self._board = Board(self.height, self.width)
        self._phase = GamePhase.AWAITING_MOVE
        self._current_index = 0
        self._winner = None
        self._winning_positions = []
        self._move_history = []

        logger.info(
            "New %dx%d game: %s",
            self.height,
            self.width,
            ", ".join(f"{p.color} ({p.kind.value})" for p in self._players),
        )
        self.bus.publish(Event(
            type=EventType.GAME_STARTED,
            data={
                "players": [p.color for p in self._players],
                "height": self.height,
                "width": self.width,
            },
            source="game_engine"
        ))

        self._applying = True
        try:
            self._play_computer_turns()
        finally:
            self._applying = False
        return self.state

    def apply_move(self, column: int) -> MoveResult:
        """Drop a piece for the current player.

        A rejected move leaves the game untouched. An accepted move may be
        followed by computer moves before this call returns. Calls made
        from event handlers while a move is being processed are rejected.

        Args:
            column: Column to drop piece (0 to width - 1)

        Returns:
            Result for this column, with the state after all follow-up moves

        Raises:
            RuntimeError: If game not started
        """
        self._require_board()
        if self._applying:
            if self._phase != GamePhase.AWAITING_MOVE:
                return self._reject(column, MoveRejection.GAME_ALREADY_OVER)
            return self._reject(column, MoveRejection.MOVE_IN_PROGRESS)

        self._applying = True
        try:
            result = self._apply(column)
            if result.accepted:
                self._play_computer_turns()
                result.state = self.state
        finally:
            self._applying = False
        return result

    def _apply(self, column: int) -> MoveResult:
        board = self._require_board()

        if self._phase != GamePhase.AWAITING_MOVE:
            return self._reject(column, MoveRejection.GAME_ALREADY_OVER)
        if not board.is_valid_column(column):
            return self._reject(column, MoveRejection.INVALID_COLUMN)

        row = board.find_lowest_empty_row(column)
        if row is None:
            return self._reject(column, MoveRejection.COLUMN_FULL)

        player = self.current_player
        board.place(row, column, player)
        position = Position(row=row, col=column)
        move = Move(column=column, player=player, position=position)
        self._move_history.append(move)
        logger.debug("%s (row %d)", move, row)

        # Settle the outcome before anyone hears about the move
        winning_positions = board.winning_line(row, column, player)
        if winning_positions:
            self._phase = GamePhase.WON
            self._winner = player
            self._winning_positions = winning_positions
            logger.info("Player %s won after %d moves", player, len(self._move_history))
            logger.debug("Final board:\n%s", board)
            outcome = Event(
                type=EventType.GAME_WON,
                data={
                    "winner": player.color,
                    "positions": winning_positions,
                    "message": f"Player {player} won!",
                },
                source="game_engine"
            )
        elif board.is_full():
            self._phase = GamePhase.TIED
            logger.info("Board full, game tied")
            logger.debug("Final board:\n%s", board)
            outcome = Event(
                type=EventType.GAME_DRAW,
                data={"message": "It's a tie!"},
                source="game_engine"
            )
        else:
            self._current_index = (self._current_index + 1) % len(self._players)
            outcome = Event(
                type=EventType.TURN_CHANGED,
                data={"player": self.current_player.color, "turn": self.turn_number},
                source="game_engine"
            )

        self.bus.publish(Event(
            type=EventType.MOVE_MADE,
            data={
                "move": move,
                "column": column,
                "row": row,
                "player": player.color,
                "computer": player.is_computer,
            },
            source="game_engine"
        ))
        self.bus.publish(outcome)

        return MoveResult(column=column, state=self.state, position=position)

    def _reject(self, column: int, reason: MoveRejection) -> MoveResult:
        logger.info("Rejected column %s: %s", column, reason.value)
        self.bus.publish(Event(
            type=EventType.INVALID_MOVE,
            data={"column": column, "reason": reason.value},
            source="game_engine"
        ))
        return MoveResult(column=column, state=self.state, rejection=reason)

    def _play_computer_turns(self) -> None:
        """Let computer players move until a human is up or the game ends."""
        board = self._require_board()
        while self._phase == GamePhase.AWAITING_MOVE and self.current_player.is_computer:
            player = self.current_player
            column = player.policy.select_column(board.copy())
            logger.debug("%s (%s) chose column %d", player, player.policy.get_name(), column)
            result = self._apply(column)
            if not result.accepted:
                raise RuntimeError(
                    f"Computer player {player} chose unplayable column {column}: "
                    f"{result.rejection.value}"
                )

    def reset(self) -> None:
        """Discard the current game."""
        self._board = None
        self._phase = GamePhase.AWAITING_MOVE
        self._current_index = 0
        self._winner = None
        self._winning_positions = []
        self._move_history = []
        self.bus.publish(Event(
            type=EventType.GAME_RESET,
            source="game_engine"
        ))

    def _require_board(self) -> Board:
        if self._board is None:
            raise RuntimeError("Game not started. Call new_game() first.")
        return self._board

    def get_cell_owner(self, row: int, column: int) -> Player | None:
        """Player occupying a cell, or None when empty."""
        return self._require_board().get_cell_owner(row, column)

    @property
    def board(self) -> Board:
        """Copy of the current board."""
        return self._require_board().copy()

    @property
    def board_dimensions(self) -> tuple[int, int]:
        """(height, width)"""
        return self.height, self.width

    @property
    def players(self) -> tuple[Player, ...]:
        return self._players

    @property
    def current_player(self) -> Player:
        """Player to move, or the last player to move once the game is over."""
        return self._players[self._current_index]

    @property
    def turn_number(self) -> int:
        return len(self._move_history) + 1

    @property
    def state(self) -> GameState:
        """Get current game state."""
        board = self._require_board()
        return GameState(
            phase=self._phase,
            current_player=self.current_player,
            current_index=self._current_index,
            winner=self._winner,
            winning_positions=list(self._winning_positions),
            legal_moves=board.open_columns() if self._phase == GamePhase.AWAITING_MOVE else [],
            move_history=list(self._move_history),
            turn_number=self.turn_number,
        )

    @property
    def is_started(self) -> bool:
        return self._board is not None

    @property
    def is_game_over(self) -> bool:
        """Check if game is over."""
        return self._board is not None and self._phase != GamePhase.AWAITING_MOVE

    @property
    def is_computer_turn(self) -> bool:
        """Check if a computer player is to move."""
        return (
            self._board is not None
            and self._phase == GamePhase.AWAITING_MOVE
            and self.current_player.is_computer
        )

    @property
    def is_human_turn(self) -> bool:
        """Check if a human player is to move."""
        return (
            self._board is not None
            and self._phase == GamePhase.AWAITING_MOVE
            and not self.current_player.is_computer
        )


def build_players(
    p1_color: str = "",
    p2_color: str = "",
    computer_color: str = "",
    seed: int | None = None,
) -> list[Player]:
    """Turn start-form colors into a turn order; blank colors drop the slot."""
    players = []
    if p1_color.strip():
        players.append(Player.human(p1_color.strip()))
    if p2_color.strip():
        players.append(Player.human(p2_color.strip()))
    if computer_color.strip():
        players.append(Player.computer(computer_color.strip(), seed=seed))
    return players


def start_game(
    p1_color: str = "",
    p2_color: str = "",
    computer_color: str = "",
    height: int = 6,
    width: int = 7,
    *,
    seed: int | None = None,
    bus: EventBus | None = None,
) -> GameEngine:
    """Create and start a game from start-form colors.

    Turn order is player 1, player 2, then the computer.

    Returns:
        The started engine, owned by the caller

    Raises:
        ValueError: If no colors are given, colors repeat, or the size is invalid
    """
    engine = GameEngine(
        build_players(p1_color, p2_color, computer_color, seed=seed),
        height=height,
        width=width,
        bus=bus,
    )
    engine.new_game()
    return engine
