"""
Leaf scorer for the TicTacToe agent.
Evaluates boards at the bottom of the game tree by counting open lines.
"""

from typing import Dict, Optional, Sequence
from .board import Board, Line, Token, WINNING_LINES
from .config import EngineConfig


class LeafScorer:
    """
    Line-counting heuristic.
    
    For every line that holds only one player's tokens (an uncontested
    line), that player earns one point per token on it, plus a bonus when
    the line is complete. A player with a completed line also earns points
    for every cell still empty, so a quicker win outscores a slower one.
    A score is one player's total minus the other's, so full drawn boards
    are worth 0 and won boards favour the winner.
    """
    
    def __init__(
        self,
        lines: Sequence[Line] = WINNING_LINES,
        config: Optional[EngineConfig] = None
    ):
        """
        Initialize the scorer.
        
        Args:
            lines: The winning lines to score.
            config: Engine configuration (for the completed line and
                    empty cell bonuses).
        """
        self.config = config or EngineConfig()
        self.lines = tuple(lines)
        self.completed_bonus = self.config.COMPLETED_LINE_BONUS
        self.empty_cell_bonus = self.config.EMPTY_CELL_BONUS
    
    def totals(self, board: Board) -> Dict[Token, int]:
        """
        Running total of each player over all lines.
        
        Args:
            board: The board snapshot.
        
        Returns:
            {Token.X: total, Token.O: total}
        """
        grid = board.grid
        x_total = 0
        o_total = 0
        x_won = False
        o_won = False
        for line in self.lines:
            x_count = 0
            o_count = 0
            for row, col in line:
                cell = grid[row][col]
                if cell is Token.X:
                    x_count += 1
                elif cell is Token.O:
                    o_count += 1
            
            if o_count == 0:
                x_total += x_count
                if x_count == 3:
                    x_total += self.completed_bonus
                    x_won = True
            if x_count == 0:
                o_total += o_count
                if o_count == 3:
                    o_total += self.completed_bonus
                    o_won = True
        
        # Counted once per board, however many lines were completed
        if x_won or o_won:
            speed = self.empty_cell_bonus * len(board.empty_cells())
            if x_won:
                x_total += speed
            if o_won:
                o_total += speed
        
        return {Token.X: x_total, Token.O: o_total}
    
    def score(self, board: Board, perspective: Token) -> int:
        """
        Score a board for one player.
        
        Args:
            board: The board snapshot.
            perspective: The player the score is for.
        
        Returns:
            Higher is better for `perspective`.
        """
        totals = self.totals(board)
        return totals[perspective] - totals[perspective.opposite()]


# Quick test
if __name__ == "__main__":
    print("Testing LeafScorer...")
    
    scorer = LeafScorer()
    
    # A full board with no winner is worth nothing to either side
    draw = Board.from_rows(["xox", "xoo", "oxx"])
    print(f"Draw totals: {scorer.totals(draw)}")
    assert scorer.score(draw, Token.X) == 0
    
    # A won row earns 3 + bonus, and each empty cell adds to it
    won = Board.from_rows(["xxx", "oo.", "..."])
    print(f"Won totals: {scorer.totals(won)}")
    print(f"Score for X: {scorer.score(won, Token.X)}")
    assert scorer.score(won, Token.X) > 0
    
    print("\nLeafScorer test done!")
