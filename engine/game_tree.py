"""
Game tree for the TicTacToe agent.
Enumerates every legal continuation from a board until the game ends.
"""

from typing import Callable, List, Optional, Sequence
from .board import Board, Line, Position, Token


class GameTreeNode:
    """
    A hypothetical board reached after zero or more moves from the root.
    
    Each node owns its children. There is no link back to the parent:
    whatever the search needs from above is passed down as arguments.
    """
    
    __slots__ = (
        "board",
        "incoming_move",
        "chosen_move",
        "children",
        "lower_bound",
        "upper_bound",
    )
    
    def __init__(self, board: Board, incoming_move: Optional[Position] = None):
        """
        Args:
            board: The snapshot at this node.
            incoming_move: The (row, col) that produced this node from its
                           parent. None at the root.
        """
        self.board = board
        self.incoming_move = incoming_move
        self.chosen_move: Optional[Position] = None
        self.children: List["GameTreeNode"] = []
        self.lower_bound = float('-inf')
        self.upper_bound = float('inf')
    
    @property
    def is_leaf(self) -> bool:
        return not self.children
    
    @property
    def value(self) -> float:
        """Resolved value (both bounds are equal once resolved)."""
        return self.lower_bound
    
    def size(self) -> int:
        """Number of nodes in this subtree, including this one."""
        total = 1
        stack = list(self.children)
        while stack:
            node = stack.pop()
            total += 1
            stack.extend(node.children)
        return total
    
    def __repr__(self) -> str:
        return (
            f"GameTreeNode(move={self.incoming_move}, "
            f"children={len(self.children)}, "
            f"bounds=({self.lower_bound}, {self.upper_bound}))"
        )


class TreeBuilder:
    """
    Builds the full game tree below a node.
    
    Expansion stops at a node where someone has won, or where no empty
    cell is left (a draw). There is no depth limit: a 3x3 board is at most
    9 moves deep.
    """
    
    def __init__(self, find_wins: Callable[[Board], Sequence[Line]]):
        """
        Initialize the tree builder.
        
        Args:
            find_wins: Function returning the completed lines of a board.
        """
        self.find_wins = find_wins
        
        # Nodes created by the last expand() calls (for debugging)
        self.nodes_built = 0
    
    def expand(self, node: GameTreeNode, next_token: Token):
        """
        Recursively populate node.children.
        
        Args:
            node: The node to expand.
            next_token: The token placed by the next move from this node.
        """
        if self.find_wins(node.board):
            return  # Someone already won on this path
        
        board = node.board
        following = next_token.opposite()
        for row, col in board.empty_cells():
            child = GameTreeNode(board.with_move(row, col, next_token), (row, col))
            self.nodes_built += 1
            self.expand(child, following)
            node.children.append(child)


# Quick test
if __name__ == "__main__":
    from .win_detector import WinDetector
    
    print("Testing TreeBuilder...")
    
    builder = TreeBuilder(WinDetector().find_wins)
    
    board = Board.from_rows(["xo.", "ox.", "..."])
    root = GameTreeNode(board)
    builder.expand(root, Token.X)
    
    print(f"Root children: {len(root.children)}")
    print(f"Nodes built: {builder.nodes_built}")
    assert len(root.children) == 5
    assert root.size() == builder.nodes_built + 1
    
    print("\nTreeBuilder test done!")
