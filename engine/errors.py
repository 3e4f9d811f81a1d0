"""
Errors raised by the TicTacToe agent.
"""


class EngineError(Exception):
    """Base class for agent failures surfaced to the game loop."""


class NoLegalMoveError(EngineError):
    """The agent was asked to move on a board with no move left to make."""


class CommitRejectedError(EngineError):
    """The live board refused the move the agent chose."""
    
    def __init__(self, row: int, col: int, reason: str = ""):
        self.row = row
        self.col = col
        self.reason = reason
        message = f"Move ({row}, {col}) was rejected"
        if reason:
            message += f": {reason}"
        super().__init__(message)
