"""
Agent for the TicTacToe game.
Builds the full game tree, runs minimax with alpha-beta pruning,
and commits the chosen move to the live board.
"""

import random
from typing import Callable, Optional, Sequence
from .board import Board, Line, Position, Token
from .config import EngineConfig
from .errors import CommitRejectedError, NoLegalMoveError
from .game_tree import GameTreeNode, TreeBuilder
from .leaf_scorer import LeafScorer
from .pruning import PruningEngine


class Agent:
    """
    An AI that plays TicTacToe by searching the whole game tree.
    
    The agent will always play optimally - it will win if possible,
    block the opponent if needed, and never lose (at worst, draw).
    When several moves are equally good it picks one at random.
    """
    
    def __init__(
        self,
        token: Token,
        lines: Sequence[Line],
        find_wins: Callable[[Board], Sequence[Line]],
        choose: Optional[Callable[[Sequence[int]], int]] = None,
        seed: Optional[int] = None,
        config: Optional[EngineConfig] = None
    ):
        """
        Initialize the agent.
        
        Args:
            token: Which token the agent plays.
            lines: The winning lines of the game.
            find_wins: Win detection function (board -> completed lines).
            choose: Tie-break function picking one item of a sequence.
                    Defaults to the choice() of a Random seeded with `seed`.
            seed: Seed for the default tie-break generator.
            config: Engine configuration.
        """
        self.config = config or EngineConfig()
        self.token = token
        self.opponent = token.opposite()
        self.lines = tuple(lines)
        self.find_wins = find_wins
        
        if choose is None:
            choose = random.Random(seed).choice
        self.choose = choose
        
        self.scorer = LeafScorer(self.lines, self.config)
        
        # Counters from the last search (for debugging)
        self.nodes_built = 0
        self.nodes_resolved = 0
    
    def choose_move(self, board: Board) -> Position:
        """
        Get the best move for the agent on a board snapshot.
        
        Args:
            board: The current board. Never modified.
        
        Returns:
            (row, col) of the chosen move.
        
        Raises:
            NoLegalMoveError: The board is full or already won.
        """
        if not board.empty_cells():
            raise NoLegalMoveError("No empty cell left to play")
        
        root = GameTreeNode(board)
        
        builder = TreeBuilder(self.find_wins)
        builder.expand(root, self.token)
        
        if not root.children:
            raise NoLegalMoveError("The game on this board is already won")
        
        # Leaves are scored for the opponent, so the agent minimizes at the root
        engine = PruningEngine(
            self.scorer,
            self.opponent,
            choose=self.choose,
            pruning=self.config.PRUNING_ENABLED
        )
        engine.resolve(root, None, minimize=True)
        
        self.nodes_built = builder.nodes_built
        self.nodes_resolved = engine.nodes_resolved
        
        if self.config.DEBUG_MODE:
            print(
                f"Agent built {self.nodes_built} nodes, resolved "
                f"{self.nodes_resolved}. Best move: {root.chosen_move} "
                f"(score: {root.value})"
            )
        
        return root.chosen_move
    
    def play(self, live_board) -> Position:
        """
        Choose a move and commit it to the live board.
        
        Args:
            live_board: The game's board. Must provide snapshot() -> Board
                        and set(row, col, token) -> bool.
        
        Returns:
            (row, col) of the committed move.
        
        Raises:
            NoLegalMoveError: The board is full or already won.
            CommitRejectedError: The live board refused the move.
        """
        row, col = self.choose_move(live_board.snapshot())
        
        if not live_board.set(row, col, self.token):
            reason = getattr(live_board, "last_error", None) or ""
            raise CommitRejectedError(row, col, reason)
        
        return row, col
    
    def get_move_suggestion(self, board: Board) -> str:
        """
        Get a human-readable move suggestion.
        
        Args:
            board: Current board.
        
        Returns:
            A string describing the suggested move.
        """
        try:
            row, col = self.choose_move(board)
        except NoLegalMoveError:
            return "No moves available!"
        
        return f"Place {self.token.value.upper()} at position ({row}, {col})"


# Quick test
if __name__ == "__main__":
    from .board import WINNING_LINES
    from .win_detector import WinDetector
    
    print("Testing Agent...")
    
    agent = Agent(Token.O, WINNING_LINES, WinDetector().find_wins, seed=1)
    
    # Test 1: Agent should block a winning move
    board = Board.from_rows(["xx.", ".o.", "..."])
    print(board)
    print("\nAgent is O. X is about to win with (0,2)!")
    
    move = agent.choose_move(board)
    print(f"Agent's move: {move}")
    assert move == (0, 2), f"Expected (0, 2), got {move}"
    print("✓ Agent correctly blocks the win!")
    
    # Test 2: Agent should take a winning move
    board2 = Board.from_rows(["oo.", "xx.", "x.."])
    print(board2)
    print("\nAgent is O. Can win with (0,2)!")
    
    move = agent.choose_move(board2)
    print(f"Agent's move: {move}")
    assert move == (0, 2), f"Expected (0, 2), got {move}"
    print("✓ Agent correctly takes the win!")
    
    print("\nAgent test done!")
