"""
TicTacToe Agent
===============
An automated TicTacToe opponent that searches the full game tree with
minimax and alpha-beta pruning, picking at random between equally good
moves.

Handles board snapshots, win detection, leaf scoring, tree search,
and the live board / game loop the agent plays on.
"""

__version__ = "1.0.0"

from .board import Board, Token, Line, Position, WINNING_LINES
from .config import EngineConfig
from .errors import EngineError, NoLegalMoveError, CommitRejectedError
from .win_detector import WinDetector
from .leaf_scorer import LeafScorer
from .game_tree import GameTreeNode, TreeBuilder
from .pruning import Bounds, PruningEngine
from .agent import Agent
from .move_validator import MoveValidator, ValidationResult
from .live_board import LiveBoard, Move
from .session import GameSession
