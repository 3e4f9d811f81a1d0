"""
Engine configuration for the TicTacToe agent.
All the settings for leaf scoring, search and debugging.
"""


class EngineConfig:
    """
    Configuration class for engine settings.
    Change these values to tune the agent.
    """
    
    # ==================== SCORING SETTINGS ====================
    # Extra points for a line fully held by one token (an already-won position)
    COMPLETED_LINE_BONUS = 2
    
    # Points per empty cell left on a won board, for the winner.
    # Twice this must exceed any line-count gap between two won boards
    EMPTY_CELL_BONUS = 20
    
    # ==================== SEARCH SETTINGS ====================
    # Alpha-beta cutoffs. Turning this off evaluates the whole tree
    # (same result, many more nodes visited)
    PRUNING_ENABLED = True
    
    # ==================== DEBUG SETTINGS ====================
    # Print node counts and the chosen move after every search
    DEBUG_MODE = False
