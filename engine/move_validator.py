"""
Move validator for the TicTacToe live board.
Validates that a commit follows the rules.
"""

from typing import Optional
from dataclasses import dataclass
from .board import Board, BOARD_SIZE


@dataclass
class ValidationResult:
    """Result of move validation."""
    is_valid: bool
    error_message: Optional[str] = None


class MoveValidator:
    """
    Validates TicTacToe moves.
    
    Rules:
    1. Position must be on the board
    2. Can only place on empty cells
    """
    
    def validate_move(self, board: Board, row: int, col: int) -> ValidationResult:
        """
        Validate a move.
        
        Args:
            board: Current board snapshot.
            row: Row to place the token (0-2).
            col: Column to place the token (0-2).
        
        Returns:
            ValidationResult with is_valid and error_message.
        """
        # Check if row/col are in valid range
        if not (0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE):
            return ValidationResult(
                is_valid=False,
                error_message=f"Invalid position ({row}, {col}). Must be 0-2."
            )
        
        # Check if cell is empty
        occupant = board.cell(row, col)
        if occupant is not None:
            return ValidationResult(
                is_valid=False,
                error_message=f"Cell ({row}, {col}) is already occupied by {occupant.value}"
            )
        
        return ValidationResult(is_valid=True)
