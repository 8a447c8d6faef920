"""
Move validator for TicTacToe.
Validates that moves follow the rules.
"""

from typing import List, Optional
import logging

from .errors import CellOccupied, GameError, InvalidMark, InvalidPosition, NotActive, WrongTurn
from .game_state import BoardState, Mark, Move, is_valid_position
from .win_checker import Outcome, WinChecker

logger = logging.getLogger(__name__)


class MoveValidator:
    """
    Validates TicTacToe moves.

    Rules:
    1. Position must be a cell index 0-8
    2. Game must not be over
    3. Only the player whose turn it is may move
    4. Can only place on empty cells
    """

    def __init__(self, win_checker: Optional[WinChecker] = None):
        self.win_checker = win_checker or WinChecker()

    def validate_move(self, state: BoardState, move: Move, outcome: Optional[Outcome] = None) -> None:
        """
        Validate a move against the current state.

        Args:
            state: Current board state.
            move: The move to check.
            outcome: Classification of state, if the caller already has it.

        Raises:
            InvalidPosition: The position is outside 0-8.
            NotActive: The game already finished.
            InvalidMark: The player is not a Mark.
            WrongTurn: It's the other player's turn.
            CellOccupied: The cell is taken.
        """
        if not is_valid_position(move.position):
            raise InvalidPosition(f"Invalid position {move.position!r}. Must be 0-8.")

        if outcome is None:
            outcome = self.win_checker.classify(state.board)

        if outcome.is_terminal:
            raise NotActive("Game is already over")

        if not isinstance(move.player, Mark):
            raise InvalidMark(f"Unknown player {move.player!r}")

        if move.player != state.turn:
            raise WrongTurn(f"It's {state.turn.value}'s turn, not {move.player.value}'s")

        occupant = state.board[move.position]
        if occupant is not None:
            raise CellOccupied(f"Cell {move.position} is already occupied by {occupant.value}")

    def is_legal(self, state: BoardState, move: Move) -> bool:
        """Same checks as validate_move, as a yes/no answer."""
        try:
            self.validate_move(state, move)
        except GameError as e:
            logger.debug("Illegal move %s: %s", move, e)
            return False
        return True

    def get_valid_moves(self, state: BoardState) -> List[int]:
        """
        Get all valid positions for the player to move.

        Returns:
            Empty positions in index order, or [] if the game is over.
        """
        if self.win_checker.classify(state.board).is_terminal:
            return []
        return state.get_empty_cells()
