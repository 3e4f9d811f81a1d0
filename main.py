"""
Console entry point for TicTacToe against the agent.

This script ties together:
- The live board the moves are committed to
- The game session (turns, win/draw detection)
- The agent (full tree search with alpha-beta pruning)

Run this script to play TicTacToe in the terminal!
"""

from typing import Optional, Tuple

from engine.board import Token
from engine.config import EngineConfig
from engine.errors import EngineError
from engine.session import GameSession


class ConsoleGame:
    """
    Terminal front end for a GameSession.

    Game flow:
    1. Human types "row col"
    2. The move is committed and the agent replies at once
    3. The board is printed
    4. Repeat until someone wins or it's a draw
    """

    def __init__(
        self,
        human_token: Optional[Token] = None,
        agent_first: bool = False,
        seed: Optional[int] = None,
        debug: bool = False
    ):
        config = EngineConfig()
        config.DEBUG_MODE = debug

        self.session = GameSession(
            human_token=human_token,
            agent_first=agent_first,
            seed=seed,
            config=config
        )
        self.is_running = False

    def start(self):
        """Start playing rounds until the user stops."""
        self.is_running = True
        while self.is_running:
            self._play_round()
            if not self._ask_restart():
                self.is_running = False

    def _play_round(self):
        """Play one game."""
        session = self.session

        print("\n" + "="*60)
        print(f"   You play: {session.human_token.value.upper()}")
        print(f"   Agent plays: {session.agent_token.value.upper()}")
        print("="*60)

        try:
            session.start()
            while not session.is_game_over:
                print("\n" + session.board.snapshot().render())

                move = self._read_move()
                if move is None:
                    self.is_running = False
                    return

                row, col = move
                if not session.human_play(row, col):
                    print(f"Illegal move: {session.board.last_error}")
        except EngineError as e:
            print(f"\nERROR: {e}")
            return

        self._show_game_result()

    def _read_move(self) -> Optional[Tuple[int, int]]:
        """Read 'row col' from the user. None means quit."""
        while True:
            text = input("Your move (row col, q to quit): ").strip().lower()
            if text in ("q", "quit"):
                return None

            parts = text.replace(",", " ").split()
            if len(parts) == 2 and all(p.isdigit() for p in parts):
                return int(parts[0]), int(parts[1])

            print("Please type two numbers 0-2, e.g. '1 1'.")

    def _show_game_result(self):
        """Show the final game result."""
        print("\n" + "="*60)
        print("   GAME OVER!")
        print("="*60)
        print("\n" + self.session.board.snapshot().render())
        print(f"\n{self.session.result_message()}")

    def _ask_restart(self) -> bool:
        if not self.is_running:
            return False
        answer = input("\nRestart game? [y/N] ").strip().lower()
        if answer in ("y", "yes"):
            self.session.reset()
            return True
        return False


def main():
    """Main entry point."""
    import argparse

    parser = argparse.ArgumentParser(description="TicTacToe against a minimax agent")
    parser.add_argument(
        "--agent-first",
        action="store_true",
        help="Let the agent make the first move"
    )
    parser.add_argument(
        "--human-token",
        choices=["x", "o"],
        default=None,
        help="Token you play (random if not given)"
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for token draw and tie-breaks"
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Print search statistics after every agent move"
    )

    args = parser.parse_args()

    human_token = Token(args.human_token) if args.human_token else None

    game = ConsoleGame(
        human_token=human_token,
        agent_first=args.agent_first,
        seed=args.seed,
        debug=args.debug
    )

    try:
        game.start()
    except (KeyboardInterrupt, EOFError):
        print("\n\nGame interrupted by user.")
    finally:
        print("Goodbye!")


if __name__ == "__main__":
    main()
