"""
Console entry point for TicTacToe.

This script ties together:
- Sessions (create, move, query)
- The AI opponent at a chosen tier
- A recorder that prints each finished game's summary

Run this script to play TicTacToe in the terminal!
"""

import argparse
import logging
import os
import random
import sys
from typing import List, Optional

from tictactoe import (
    AIPlayer,
    BoardState,
    GameConfig,
    GameError,
    GameMode,
    GameRecord,
    GameSession,
    GameStatus,
    board_from_list,
)


class ConsoleRecorder:
    """Prints a summary of each sealed game and keeps them for the session."""

    def __init__(self):
        self.records: List[GameRecord] = []

    def record(self, game_record: GameRecord) -> None:
        self.records.append(game_record)
        print(
            f"Recorded game: {game_record.total_moves} moves, "
            f"average {game_record.average_move_time:.1f}s per move"
        )


class TicTacToeConsole:
    """
    Main controller for a terminal game.

    Game flow:
    1. Show the board with free cells numbered 0-8
    2. Read a cell number from the player to move
    3. In computer mode the AI answers right away
    4. Repeat until someone wins or it's a draw
    """

    def __init__(
        self,
        mode: str = "computer",
        tier: Optional[str] = None,
        seed: Optional[int] = None,
        config: Optional[GameConfig] = None,
    ):
        self.mode = GameMode.parse(mode)
        self.tier = tier
        self.config = config or GameConfig.from_env()
        self.engine = AIPlayer(rng=random.Random(seed), config=self.config)
        self.recorder = ConsoleRecorder()
        self.session: Optional[GameSession] = None

    def new_game(self) -> GameSession:
        self.session = GameSession.create(
            mode=self.mode,
            tier=self.tier if self.mode == GameMode.COMPUTER else None,
            recorder=self.recorder,
            engine=self.engine,
            config=self.config,
        )
        return self.session

    def start(self):
        """Play games until the user stops."""
        print("\n" + "=" * 40)
        print("   TicTacToe")
        print("=" * 40)
        print("Enter a cell number (0-8), or 'q' to quit.\n")

        while True:
            self.new_game()
            if not self._game_loop():
                break
            self._show_game_result()
            if input("\nPlay again? [y/N] ").strip().lower() != "y":
                break

    def _game_loop(self) -> bool:
        """Run one game. Returns False if the user quit."""
        while self.session.is_active:
            view = self.session.query()
            self._print_board(view)

            answer = input(f"\n{view['turn']} to move: ").strip().lower()
            if answer in ("q", "quit", "exit"):
                return False

            try:
                position = int(answer)
            except ValueError:
                print(f"'{answer}' is not a cell number.")
                continue

            try:
                self.session.move(view["turn"], position)
            except GameError as e:
                print(f"Invalid move: {e}")
        return True

    def _print_board(self, view: dict):
        state = BoardState(board=board_from_list(view["board"]))
        print()
        print(state.format_board())

    def _show_game_result(self):
        """Show the final game result."""
        view = self.session.query()
        outcome = self.session.outcome

        print("\n" + "=" * 40)
        print("   GAME OVER!")
        print("=" * 40)
        self._print_board(view)

        if outcome.status == GameStatus.WIN:
            if self.mode == GameMode.COMPUTER and outcome.winner == self.config.COMPUTER_MARK:
                print("\nComputer wins! Better luck next time!")
            else:
                print(f"\n{outcome.winner.value} wins on cells {list(outcome.line)}!")
        else:
            print("\nIt's a draw! Good game!")


def main(argv=None):
    """Main entry point."""
    parser = argparse.ArgumentParser(description="TicTacToe")
    parser.add_argument(
        "--mode",
        choices=["human", "computer"],
        default="computer",
        help="Play against another human or the computer (default: computer)"
    )
    parser.add_argument(
        "--tier",
        choices=["weak", "medium", "strong"],
        default=None,
        help="Computer strength (default: medium, or TICTACTOE_DEFAULT_TIER)"
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed the computer's random choices"
    )
    parser.add_argument(
        "--log-level",
        default=os.getenv("TICTACTOE_LOG_LEVEL", "WARNING"),
        help="Logging level (default: WARNING)"
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    console = TicTacToeConsole(mode=args.mode, tier=args.tier, seed=args.seed)

    try:
        console.start()
    except (KeyboardInterrupt, EOFError):
        print("\n\nGame interrupted by user.")
    finally:
        print("Goodbye!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
