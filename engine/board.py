"""
Board representation for the TicTacToe agent.
Immutable 3x3 snapshots that the search copies and never mutates.
"""

from enum import Enum
from typing import Optional, List, Tuple, Sequence
from dataclasses import dataclass


class Token(Enum):
    """The two marks a cell can hold."""
    X = "x"
    O = "o"
    
    def opposite(self) -> "Token":
        """Get the other player's token."""
        return Token.O if self == Token.X else Token.X


# A cell is either empty (None) or holds a token
Cell = Optional[Token]

# (row, col) coordinates
Position = Tuple[int, int]

# Three positions that win if held by one token
Line = Tuple[Position, Position, Position]

# All possible winning lines
WINNING_LINES: Tuple[Line, ...] = (
    # Rows
    ((0, 0), (0, 1), (0, 2)),
    ((1, 0), (1, 1), (1, 2)),
    ((2, 0), (2, 1), (2, 2)),
    # Columns
    ((0, 0), (1, 0), (2, 0)),
    ((0, 1), (1, 1), (2, 1)),
    ((0, 2), (1, 2), (2, 2)),
    # Diagonals
    ((0, 0), (1, 1), (2, 2)),
    ((0, 2), (1, 1), (2, 0)),
)

BOARD_SIZE = 3

# Row-major cell order, shared so that children reuse the same tuples
POSITIONS: Tuple[Position, ...] = tuple(
    (row, col) for row in range(BOARD_SIZE) for col in range(BOARD_SIZE)
)

_CHAR_TO_CELL = {
    "x": Token.X,
    "o": Token.O,
    "": None,
    " ": None,
    ".": None,
    "_": None,
}


def _parse_cell(value) -> Cell:
    if value is None or isinstance(value, Token):
        return value
    try:
        return _CHAR_TO_CELL[str(value).lower()]
    except KeyError:
        raise ValueError(f"Unknown cell value: {value!r}") from None


@dataclass(frozen=True)
class Board:
    """
    A 3x3 TicTacToe board.
    
    The grid is a tuple of row tuples. Boards are never changed in place:
    with_move() returns a new board, so a child snapshot can never alias
    its parent or its siblings.
    """
    __slots__ = ("grid",)
    
    grid: Tuple[Tuple[Cell, ...], ...]
    
    @classmethod
    def empty(cls) -> "Board":
        """Create a board with every cell empty."""
        return cls(tuple((None,) * BOARD_SIZE for _ in range(BOARD_SIZE)))
    
    @classmethod
    def from_rows(cls, rows: Sequence[Sequence]) -> "Board":
        """
        Build a board from nested rows.
        
        Args:
            rows: 3 rows of 3 cells. Each cell can be a Token, None,
                  or one of the characters "x", "o", "", " ", ".", "_".
        
        Returns:
            The new Board.
        """
        if len(rows) != BOARD_SIZE or any(len(r) != BOARD_SIZE for r in rows):
            raise ValueError(f"Board must be {BOARD_SIZE}x{BOARD_SIZE}")
        return cls(tuple(tuple(_parse_cell(c) for c in row) for row in rows))
    
    def cell(self, row: int, col: int) -> Cell:
        """Get the contents of one cell."""
        return self.grid[row][col]
    
    def empty_cells(self) -> List[Position]:
        """
        Get all empty cells on the board, in row-major order.
        
        Returns:
            List of (row, col) tuples.
        """
        grid = self.grid
        return [pos for pos in POSITIONS if grid[pos[0]][pos[1]] is None]
    
    def is_full(self) -> bool:
        """True if no cell is empty."""
        return all(cell is not None for row in self.grid for cell in row)
    
    def count(self, token: Token) -> int:
        """Number of cells holding the given token."""
        return sum(1 for row in self.grid for cell in row if cell == token)
    
    def with_move(self, row: int, col: int, token: Token) -> "Board":
        """
        Return a copy of this board with one more token placed.
        
        Args:
            row: Row index (0-2).
            col: Column index (0-2).
            token: The token to place.
        
        Returns:
            A new Board. This board is left untouched.
        """
        if not (0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE):
            raise ValueError(f"Invalid position ({row}, {col}). Must be 0-2.")
        if self.grid[row][col] is not None:
            raise ValueError(f"Cell ({row}, {col}) is already occupied!")
        
        new_row = self.grid[row][:col] + (token,) + self.grid[row][col + 1:]
        return Board(self.grid[:row] + (new_row,) + self.grid[row + 1:])
    
    def render(self) -> str:
        """Text picture of the board with row/column indices."""
        lines = ["  0   1   2"]
        for row in range(BOARD_SIZE):
            cells = [
                " " if c is None else c.value.upper()
                for c in self.grid[row]
            ]
            lines.append(f"{row} " + " | ".join(cells))
            if row < BOARD_SIZE - 1:
                lines.append("  ---------")
        return "\n".join(lines)
    
    def __str__(self) -> str:
        return self.render()


# Quick test
if __name__ == "__main__":
    print("Testing Board...")
    
    board = Board.empty()
    print(f"Empty cells: {len(board.empty_cells())}")
    
    child = board.with_move(1, 1, Token.X)
    print(child)
    assert board.cell(1, 1) is None
    assert child.cell(1, 1) == Token.X
    
    parsed = Board.from_rows(["xo.", "...", "..x"])
    print(parsed)
    assert parsed.count(Token.X) == 2
    
    print("\nBoard test done!")
