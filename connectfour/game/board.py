"""Connect Four board: grid state, legality and win detection."""

from __future__ import annotations

from ..core.types import Player, Position


WIN_LENGTH = 4
MIN_SIZE = 4

# (row step, col step) rays from a start cell. Row 0 is the top.
DIRECTIONS = [
    (0, 1),   # Horizontal (right)
    (1, 0),   # Vertical (down)
    (1, 1),   # Diagonal down-right
    (1, -1),  # Diagonal down-left
]


class Board:
    """Connect Four grid.

    The grid is a list of rows where:
    - grid[0] is the top row
    - grid[height - 1] is the bottom row
    - grid[row][col] holds the owning Player, or None when empty

    Pieces obey gravity: they only ever land on the lowest empty row of
    a column, and cells are never cleared.
    """

    def __init__(self, height: int = 6, width: int = 7):
        """Create an empty board.

        Args:
            height: Number of rows (at least 4)
            width: Number of columns (at least 4)

        Raises:
            ValueError: If either dimension is below 4
        """
        if height < MIN_SIZE or width < MIN_SIZE:
            raise ValueError(
                f"Board must be at least {MIN_SIZE}x{MIN_SIZE} (got {height}x{width})"
            )
        self.height = height
        self.width = width
        self._grid: list[list[Player | None]] = [[None] * width for _ in range(height)]

    @property
    def dimensions(self) -> tuple[int, int]:
        """(height, width)"""
        return self.height, self.width

    @property
    def rows(self) -> list[list[Player | None]]:
        """Copy of the grid, top row first."""
        return [list(row) for row in self._grid]

    def copy(self) -> Board:
        board = Board(self.height, self.width)
        board._grid = self.rows
        return board

    def in_bounds(self, row: int, column: int) -> bool:
        return 0 <= row < self.height and 0 <= column < self.width

    def is_valid_column(self, column: int) -> bool:
        return 0 <= column < self.width

    def get_cell_owner(self, row: int, column: int) -> Player | None:
        """Player occupying a cell, or None when empty."""
        if not self.in_bounds(row, column):
            raise IndexError(f"Cell ({row}, {column}) is off the board")
        return self._grid[row][column]

    def find_lowest_empty_row(self, column: int) -> int | None:
        """Get the row where a piece would land in given column.

        Args:
            column: Column to drop piece in (0 <= column < width)

        Returns:
            Row index where piece lands, or None if column is full
        """
        for row in range(self.height - 1, -1, -1):
            if self._grid[row][column] is None:
                return row
        return None

    def open_columns(self) -> list[int]:
        """Columns that can still accept a piece, left to right."""
        # Gravity: a column is open iff its top cell is empty
        return [col for col in range(self.width) if self._grid[0][col] is None]

    def place(self, row: int, column: int, player: Player) -> None:
        """Write player into a cell.

        The caller obtains row from `find_lowest_empty_row`.

        Raises:
            ValueError: If the cell is already occupied
        """
        if self._grid[row][column] is not None:
            raise ValueError(f"Cell ({row}, {column}) is already occupied")
        self._grid[row][column] = player

    def is_full(self) -> bool:
        """True when the top row has no empty cells."""
        return all(cell is not None for cell in self._grid[0])

    def has_win_from(self, row: int, column: int, player: Player) -> bool:
        """Check whether the piece at (row, column) completes four in a row."""
        return bool(self.winning_line(row, column, player))

    def winning_line(self, row: int, column: int, player: Player) -> list[Position]:
        """Find a winning window of four that passes through (row, column).

        Every window of WIN_LENGTH cells along the four directions that
        contains the given cell is tried, so the result matches a full scan
        for any line the last piece could have completed.

        Returns:
            The four positions of the first winning window, or empty list
        """
        for dr, dc in DIRECTIONS:
            for offset in range(WIN_LENGTH):
                start_row = row - offset * dr
                start_col = column - offset * dc
                positions = self._check_direction(start_row, start_col, dr, dc, player)
                if positions:
                    return positions
        return []

    def check_for_win(self, player: Player) -> list[Position]:
        """Scan every cell as a potential start of a winning ray.

        Returns:
            Winning positions for player, or empty list if none
        """
        for row in range(self.height):
            for col in range(self.width):
                for dr, dc in DIRECTIONS:
                    positions = self._check_direction(row, col, dr, dc, player)
                    if positions:
                        return positions
        return []

    def _check_direction(
        self,
        start_row: int,
        start_col: int,
        dr: int,
        dc: int,
        player: Player
    ) -> list[Position]:
        """Check for WIN_LENGTH cells owned by player in given direction.

        Returns:
            List of winning positions, or empty list if no win
        """
        positions = []

        for i in range(WIN_LENGTH):
            row = start_row + i * dr
            col = start_col + i * dc

            if not self.in_bounds(row, col):
                return []

            if self._grid[row][col] != player:
                return []

            positions.append(Position(row=row, col=col))

        return positions

    def __str__(self) -> str:
        return "\n".join(
            " ".join("." if cell is None else cell.color[0].upper() for cell in row)
            for row in self._grid
        )
