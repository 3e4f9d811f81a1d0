"""
Live board for the TicTacToe game.
The single mutable board the players commit moves to.
"""

from typing import Callable, Optional, List
from dataclasses import dataclass
from .board import Board, Cell, Token, BOARD_SIZE
from .move_validator import MoveValidator


@dataclass
class Move:
    """
    A committed move.
    """
    token: Token            # Who made the move
    row: int                # Row (0-2)
    col: int                # Column (0-2)
    move_number: int        # Which move of the game this is (0-8)


class LiveBoard:
    """
    The board the game is actually played on.
    
    Provides the two contracts the agent relies on:
    - snapshot(): read the current cells
    - set(row, col, token): commit one move, rejected if the cell is taken
    
    Every successful commit calls the listener with the placed token.
    """
    
    def __init__(self, on_change: Optional[Callable[[Token], None]] = None):
        """
        Initialize the live board.
        
        Args:
            on_change: Called with the token after each successful commit.
        """
        self.on_change = on_change
        self.validator = MoveValidator()
        self.grid: List[List[Cell]] = []
        self.moves: List[Move] = []
        self.last_error: Optional[str] = None
        self.reset()
    
    def reset(self):
        """Clear every cell and the move history."""
        self.grid = [[None for _ in range(BOARD_SIZE)] for _ in range(BOARD_SIZE)]
        self.moves = []
        self.last_error = None
    
    def snapshot(self) -> Board:
        """Get an immutable copy of the current cells."""
        return self._board()
    
    def _board(self) -> Board:
        return Board(tuple(tuple(row) for row in self.grid))
    
    def squares_left(self) -> int:
        """Number of empty cells."""
        return sum(1 for row in self.grid for cell in row if cell is None)
    
    def set(self, row: int, col: int, token: Token) -> bool:
        """
        Commit a move.
        
        Args:
            row: Row index (0-2).
            col: Column index (0-2).
            token: The token to place.
        
        Returns:
            True if the move was placed, False if it was rejected.
        """
        result = self.validator.validate_move(self._board(), row, col)
        if not result.is_valid:
            self.last_error = result.error_message
            return False
        
        self.last_error = None
        self.grid[row][col] = token
        self.moves.append(Move(token, row, col, len(self.moves)))
        
        if self.on_change is not None:
            self.on_change(token)
        
        return True
