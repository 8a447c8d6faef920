"""
Board state for TicTacToe.
Tracks the nine cells, whose turn it is, and the fixed winning lines.
"""

from enum import Enum
from typing import Iterable, List, Optional, Sequence, Tuple
from dataclasses import dataclass

from .errors import InvalidMark, InvalidPosition


class Mark(Enum):
    """The two marks that can occupy a cell. X always moves first."""
    X = "X"
    O = "O"

    def opposite(self) -> "Mark":
        """Get the other player's mark."""
        return Mark.O if self == Mark.X else Mark.X

    @classmethod
    def parse(cls, value) -> "Mark":
        """
        Turn a mark or its symbol ("X" / "O", any case) into a Mark.

        Raises:
            InvalidMark: If the value is not a known mark.
        """
        if isinstance(value, Mark):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().upper())
            except ValueError:
                pass
        raise InvalidMark(f"Unknown mark: {value!r}. Must be 'X' or 'O'.")


# A cell is a Mark or None for empty
Cell = Optional[Mark]

# Row-major: 0,1,2 top row; 3,4,5 middle; 6,7,8 bottom
Board = Tuple[Cell, ...]
WinLine = Tuple[int, int, int]

BOARD_CELLS = 9
EMPTY_BOARD: Board = (None,) * BOARD_CELLS

# Scan order matters: rows, then columns, then diagonals
WIN_LINES: Tuple[WinLine, ...] = (
    # Rows
    (0, 1, 2),
    (3, 4, 5),
    (6, 7, 8),
    # Columns
    (0, 3, 6),
    (1, 4, 7),
    (2, 5, 8),
    # Diagonals
    (0, 4, 8),
    (2, 4, 6),
)


def is_valid_position(position) -> bool:
    """True if position is an int index 0-8 (bools are rejected)."""
    return (
        isinstance(position, int)
        and not isinstance(position, bool)
        and 0 <= position < BOARD_CELLS
    )


def empty_cells(board: Sequence[Cell]) -> List[int]:
    """
    Get all empty positions on the board.

    Args:
        board: Nine cells in row-major order.

    Returns:
        Empty indices in ascending order.
    """
    return [i for i, cell in enumerate(board) if cell is None]


def board_to_list(board: Sequence[Cell]) -> List[Optional[str]]:
    """Serialize a board as nine entries of "X", "O" or None."""
    return [cell.value if cell is not None else None for cell in board]


def board_from_list(values: Iterable[Optional[str]]) -> Board:
    """
    Parse the serialized form produced by board_to_list.

    Raises:
        InvalidPosition: If there are not exactly nine entries.
        InvalidMark: If an entry is not "X", "O" or None.
    """
    cells = [None if value is None else Mark.parse(value) for value in values]
    if len(cells) != BOARD_CELLS:
        raise InvalidPosition(f"Board must have {BOARD_CELLS} cells, got {len(cells)}")
    return tuple(cells)


@dataclass(frozen=True)
class Move:
    """A single placement: who moved and where."""
    player: Mark        # Who made the move
    position: int       # Board index (0-8)


@dataclass(frozen=True)
class BoardState:
    """
    The board plus whose turn it is.

    Instances never change. Placing a mark returns a new BoardState,
    so a state handed to the search or to a caller can't drift.
    """

    board: Board = EMPTY_BOARD
    turn: Mark = Mark.X

    def count(self, mark: Mark) -> int:
        """How many cells hold the given mark."""
        return sum(1 for cell in self.board if cell == mark)

    def get_empty_cells(self) -> List[int]:
        """Empty positions in index order."""
        return empty_cells(self.board)

    def place(self, position: int, mark: Mark) -> "BoardState":
        """
        Return a copy of this state with mark written at position.
        The turn is left alone; flipping it is the state machine's job.
        """
        cells = list(self.board)
        cells[position] = mark
        return BoardState(board=tuple(cells), turn=self.turn)

    def with_turn(self, turn: Mark) -> "BoardState":
        """Same board, different side to move."""
        return BoardState(board=self.board, turn=turn)

    def format_board(self) -> str:
        """Draw the board as text, showing index numbers in empty cells."""
        rows = []
        for row in range(3):
            cells = []
            for col in range(3):
                index = row * 3 + col
                cell = self.board[index]
                cells.append(cell.value if cell is not None else str(index))
            rows.append(" " + " | ".join(cells))
        return "\n---+---+---\n".join(rows)
