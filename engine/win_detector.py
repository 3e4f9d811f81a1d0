"""
Win detector for the TicTacToe agent.
Finds completed lines, and tells if a player has won or the game is a draw.
"""

from typing import Optional, List, Sequence
from .board import Board, Line, Token, WINNING_LINES


class WinDetector:
    """
    Checks for win conditions in TicTacToe.
    
    Win condition: 3 cells of the same token in a row
    (horizontally, vertically, or diagonally)
    """
    
    def __init__(self, lines: Sequence[Line] = WINNING_LINES):
        """
        Initialize the win detector.
        
        Args:
            lines: The winning lines to check (default: the 8 standard lines)
        """
        self.lines = tuple(lines)
    
    def find_wins(self, board: Board) -> List[Line]:
        """
        Find every line fully held by one token.
        
        Args:
            board: The board snapshot to check.
        
        Returns:
            The matching lines, in line order. Empty if nobody has won.
        """
        grid = board.grid
        wins = []
        for line in self.lines:
            (r0, c0), (r1, c1), (r2, c2) = line
            first = grid[r0][c0]
            if first is not None and first == grid[r1][c1] == grid[r2][c2]:
                wins.append(line)
        return wins
    
    def check_winner(self, board: Board) -> Optional[Token]:
        """
        Check if there's a winner.
        
        Args:
            board: The board snapshot.
        
        Returns:
            The winning Token, or None if no winner yet.
        """
        wins = self.find_wins(board)
        if not wins:
            return None
        row, col = wins[0][0]
        return board.cell(row, col)
    
    def is_draw(self, board: Board) -> bool:
        """True if the board is full and nobody has won."""
        return board.is_full() and not self.find_wins(board)
    
    def is_game_over(self, board: Board) -> bool:
        """True if someone has won or no cell is left."""
        return bool(self.find_wins(board)) or board.is_full()


# Quick test
if __name__ == "__main__":
    print("Testing WinDetector...")
    
    detector = WinDetector()
    
    # Test 1: Horizontal win
    board1 = Board.from_rows(["xxx", "o.o", "..."])
    print(f"Test 1 (horizontal): winner = {detector.check_winner(board1)}")
    assert detector.check_winner(board1) == Token.X
    
    # Test 2: Diagonal win
    board2 = Board.from_rows(["ox.", "xo.", "..o"])
    print(f"Test 2 (diagonal): winner = {detector.check_winner(board2)}")
    assert detector.check_winner(board2) == Token.O
    
    # Test 3: Draw (full board, no winner)
    board3 = Board.from_rows(["xox", "xoo", "oxx"])
    print(f"Test 3 (draw): is_draw = {detector.is_draw(board3)}")
    assert detector.is_draw(board3)
    
    print("\nWinDetector test done!")
