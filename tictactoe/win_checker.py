"""
Win checker for TicTacToe.
Checks if a mark has won, if the game is a draw, and classifies boards.
"""

from enum import Enum
from typing import Optional, Sequence, Tuple
from dataclasses import dataclass

from .game_state import Cell, Mark, WinLine, WIN_LINES


class GameStatus(Enum):
    """Where a board stands."""
    IN_PROGRESS = "in_progress"
    WIN = "win"
    DRAW = "draw"


@dataclass(frozen=True)
class Outcome:
    """
    Result of classifying a board.

    winner and line are set only when status is WIN.
    """

    status: GameStatus = GameStatus.IN_PROGRESS
    winner: Optional[Mark] = None
    line: Optional[WinLine] = None

    @classmethod
    def in_progress(cls) -> "Outcome":
        return cls(GameStatus.IN_PROGRESS)

    @classmethod
    def win(cls, winner: Mark, line: WinLine) -> "Outcome":
        return cls(GameStatus.WIN, winner, tuple(line))

    @classmethod
    def draw(cls) -> "Outcome":
        return cls(GameStatus.DRAW)

    @property
    def is_terminal(self) -> bool:
        """True for Win or Draw."""
        return self.status != GameStatus.IN_PROGRESS

    def to_dict(self) -> Optional[dict]:
        """Serialized outcome, or None while the game is still going."""
        if not self.is_terminal:
            return None
        return {
            "result": self.status.value,
            "winner": self.winner.value if self.winner else None,
            "line": list(self.line) if self.line else None,
        }


class WinChecker:
    """
    Checks for win conditions in TicTacToe.

    Win condition: 3 of the same mark in a row
    (horizontally, vertically, or diagonally).
    All methods are pure and accept any sequence of nine cells.
    """

    WINNING_LINES = WIN_LINES

    def check_win(self, board: Sequence[Cell]) -> Optional[Tuple[Mark, WinLine]]:
        """
        Find the first completed line.

        Lines are scanned rows, then columns, then diagonals, so a board
        with several finished lines always reports the same one.

        Args:
            board: Nine cells in row-major order.

        Returns:
            (winner, line), or None if no line is complete.
        """
        for line in self.WINNING_LINES:
            a, b, c = line
            first = board[a]
            if first is not None and first == board[b] == board[c]:
                return first, line
        return None

    def check_draw(self, board: Sequence[Cell]) -> bool:
        """
        Check if the game is a draw.

        A draw is a full board where no line is complete.
        """
        if any(cell is None for cell in board):
            return False
        return self.check_win(board) is None

    def classify(self, board: Sequence[Cell]) -> Outcome:
        """
        Classify a board as in progress, won, or drawn.

        A full board that also completes a line is a win.
        """
        result = self.check_win(board)
        if result is not None:
            winner, line = result
            return Outcome.win(winner, line)
        if all(cell is not None for cell in board):
            return Outcome.draw()
        return Outcome.in_progress()
