"""
Minimax search with alpha-beta pruning for the TicTacToe agent.
Resolves a built game tree bottom-up and picks a move at every level,
choosing at random between moves of equal value.
"""

import random
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence
from .board import Token
from .game_tree import GameTreeNode
from .leaf_scorer import LeafScorer


@dataclass(frozen=True)
class Bounds:
    """The (lower, upper) window inherited from the node above."""
    lower: float = float('-inf')
    upper: float = float('inf')


class DesirableSet:
    """
    Children tied for the best value seen so far at one level.
    
    Keeps the best value and the indices of the children that reach it.
    A strictly better child starts the list over, a tie is appended.
    """
    
    def __init__(self, minimize: bool):
        self.minimize = minimize
        self.best: Optional[float] = None
        self.indices: List[int] = []
    
    def offer(self, index: int, value: float):
        """Consider one resolved child."""
        if self.best is None or self._better(value, self.best):
            self.best = value
            self.indices = [index]
        elif value == self.best:
            self.indices.append(index)
    
    def _better(self, value: float, best: float) -> bool:
        return value < best if self.minimize else value > best


class PruningEngine:
    """
    Minimax with alpha-beta pruning over a fully built tree.
    
    Leaves are scored from one fixed player's point of view. At the root
    that player's score is minimized, one level down it is maximized, and
    so on, alternating.
    
    Cutoffs are strict: a child whose value equals a bound is still
    resolved exactly, so every child that ties for the best value at the
    root is a real optimum and the random pick stays safe.
    """
    
    def __init__(
        self,
        scorer: LeafScorer,
        perspective: Token,
        choose: Optional[Callable[[Sequence[int]], int]] = None,
        pruning: bool = True
    ):
        """
        Initialize the pruning engine.
        
        Args:
            scorer: Scores the leaves.
            perspective: The player leaves are scored for.
            choose: Picks one item from a non-empty sequence
                    (default: random.choice). Inject a seeded or fixed
                    function to make the search reproducible.
            pruning: If False, never cut off (brute-force evaluation).
        """
        self.scorer = scorer
        self.perspective = perspective
        self.choose = choose or random.choice
        self.pruning = pruning
        
        # Nodes visited by the last resolve() calls (for debugging)
        self.nodes_resolved = 0
    
    def resolve(
        self,
        node: GameTreeNode,
        parent_bounds: Optional[Bounds] = None,
        minimize: bool = True
    ):
        """
        Resolve a node's value and chosen move.
        
        Args:
            node: The node to resolve. Its subtree must already be built.
            parent_bounds: The window of the node above, or None at the root.
            minimize: True if this level minimizes the leaf score.
        """
        self.nodes_resolved += 1
        
        # Leaf: score it and report the move that led here
        if not node.children:
            value = self.scorer.score(node.board, self.perspective)
            node.lower_bound = node.upper_bound = value
            node.chosen_move = node.incoming_move
            return
        
        if parent_bounds is not None:
            node.lower_bound = max(node.lower_bound, parent_bounds.lower)
            node.upper_bound = min(node.upper_bound, parent_bounds.upper)
        
        desirable = DesirableSet(minimize)
        for index, child in enumerate(node.children):
            self.resolve(
                child,
                Bounds(node.lower_bound, node.upper_bound),
                not minimize
            )
            value = child.value
            desirable.offer(index, value)
            
            if minimize:
                node.upper_bound = min(node.upper_bound, value)
                if self.pruning and value < node.lower_bound:
                    break  # Prune
            else:
                node.lower_bound = max(node.lower_bound, value)
                if self.pruning and value > node.upper_bound:
                    break  # Prune
        
        selected = node.children[self.choose(desirable.indices)]
        node.lower_bound = node.upper_bound = selected.value
        node.chosen_move = selected.incoming_move


# Quick test
if __name__ == "__main__":
    from .board import Board
    from .game_tree import TreeBuilder
    from .win_detector import WinDetector
    
    print("Testing PruningEngine...")
    
    builder = TreeBuilder(WinDetector().find_wins)
    board = Board.from_rows(["oo.", "xx.", "x.."])
    
    # O to move and can win at (0, 2); leaves scored for X
    results = {}
    for pruning in (True, False):
        root = GameTreeNode(board)
        builder.expand(root, Token.O)
        engine = PruningEngine(LeafScorer(), Token.X, pruning=pruning)
        engine.resolve(root)
        results[pruning] = root.value
        print(
            f"pruning={pruning}: move={root.chosen_move} value={root.value} "
            f"visited={engine.nodes_resolved}"
        )
    
    assert results[True] == results[False]
    
    print("\nPruningEngine test done!")
