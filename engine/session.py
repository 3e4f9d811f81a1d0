"""
Game session for TicTacToe against the agent.
Tracks turns, detects the end of the game, and lets the agent reply.
"""

import random
from typing import Callable, Optional, Sequence
from .agent import Agent
from .board import Token, WINNING_LINES
from .config import EngineConfig
from .live_board import LiveBoard
from .win_detector import WinDetector


class GameSession:
    """
    One human against the agent.
    
    Game flow:
    1. Human places a token with human_play()
    2. The live board notifies the session
    3. Session checks for a win or a full board
    4. If the game goes on, the agent replies
    5. When only the human's last cell is left, it is filled automatically
    """
    
    def __init__(
        self,
        human_token: Optional[Token] = None,
        agent_first: bool = False,
        seed: Optional[int] = None,
        choose: Optional[Callable[[Sequence[int]], int]] = None,
        config: Optional[EngineConfig] = None
    ):
        """
        Initialize the session.
        
        Args:
            human_token: Token for the human. Random if None.
            agent_first: If True, the agent makes the first move on start().
            seed: Seed for the token draw and the agent's tie-breaks.
            choose: Tie-break function handed to the agent.
            config: Engine configuration.
        """
        self.config = config or EngineConfig()
        self.rng = random.Random(seed)
        self.requested_token = human_token
        self.agent_first = agent_first
        self.choose = choose or self.rng.choice
        
        self.win_detector = WinDetector(WINNING_LINES)
        self.board = LiveBoard(on_change=self._on_square_changed)
        
        self.reset()
    
    def reset(self):
        """Start a new game: fresh board, tokens, and agent."""
        self.human_token = self.requested_token or self._random_token()
        self.agent = Agent(
            self.human_token.opposite(),
            WINNING_LINES,
            self.win_detector.find_wins,
            choose=self.choose,
            config=self.config
        )
        self.board.reset()
        
        self.winner: Optional[Token] = None
        self.is_draw = False
        self.is_game_over = False
    
    def _random_token(self) -> Token:
        return Token.O if self.rng.random() >= 0.5 else Token.X
    
    @property
    def agent_token(self) -> Token:
        return self.agent.token
    
    def start(self):
        """Let the agent open the game if it plays first."""
        if self.agent_first and not self.board.moves and not self.is_game_over:
            self.agent.play(self.board)
    
    def human_play(self, row: int, col: int) -> bool:
        """
        Commit the human's move. The agent replies before this returns.
        
        Args:
            row: Row index (0-2).
            col: Column index (0-2).
        
        Returns:
            True if the move was accepted.
        """
        if self.is_game_over:
            self.board.last_error = "Game is already over!"
            return False
        if self._whose_turn() != self.human_token:
            self.board.last_error = "It's not your turn!"
            return False
        
        return self.board.set(row, col, self.human_token)
    
    def _whose_turn(self) -> Token:
        if not self.board.moves:
            return self.agent_token if self.agent_first else self.human_token
        return self.board.moves[-1].token.opposite()
    
    def _on_square_changed(self, new_token: Token):
        """Called by the live board after every committed move."""
        snapshot = self.board.snapshot()
        winner = self.win_detector.check_winner(snapshot)
        
        if winner is not None:
            self.winner = winner
            self.is_game_over = True
            return
        if snapshot.is_full():
            self.is_draw = True
            self.is_game_over = True
            return
        
        if new_token == self.human_token:
            self.agent.play(self.board)
        elif self.board.squares_left() == 1:
            # Only one cell left for the human, play it for them
            row, col = snapshot.empty_cells()[0]
            self.board.set(row, col, self.human_token)
    
    def result_message(self) -> str:
        """Human-readable result of the game."""
        if not self.is_game_over:
            return "Game in progress"
        if self.is_draw:
            return "It's a draw!"
        if self.winner == self.human_token:
            return "You won the game!"
        return "You lost the game!"
