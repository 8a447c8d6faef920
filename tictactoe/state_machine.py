"""
Turn sequencing for TicTacToe.

apply_move is a pure transition: it takes a BoardState and a Move and
returns the next state with its Outcome. GameStateMachine wraps it for one
game, holding the single current state and an append-only move history.
"""

from collections import deque
from typing import Iterator, List, Optional, Sequence, Tuple
from dataclasses import dataclass
import logging

from .errors import InvalidPosition
from .game_state import BoardState, Cell, Mark, Move, BOARD_CELLS
from .move_validator import MoveValidator
from .win_checker import GameStatus, Outcome, WinChecker

logger = logging.getLogger(__name__)

_win_checker = WinChecker()
_validator = MoveValidator(_win_checker)


@dataclass(frozen=True)
class Transition:
    """The state after an accepted move and how the board now stands."""
    state: BoardState
    outcome: Outcome


def apply_move(state: BoardState, move: Move) -> Transition:
    """
    Apply a move to a state.

    The move is validated first; nothing is produced on failure and the
    input state is never modified.

    Args:
        state: State before the move.
        move: The move to apply.

    Returns:
        Transition holding the new state and its Outcome. On a win or a
        draw the turn stays with the player who just moved.

    Raises:
        InvalidPosition, NotActive, InvalidMark, WrongTurn, CellOccupied
    """
    _validator.validate_move(state, move)

    new_state = state.place(move.position, move.player)
    outcome = _win_checker.classify(new_state.board)

    if not outcome.is_terminal:
        new_state = new_state.with_turn(state.turn.opposite())

    return Transition(new_state, outcome)


def state_from_board(board: Sequence[Cell]) -> BoardState:
    """
    Rebuild a BoardState from a bare board.

    X moves first, so X must have as many marks as O or exactly one more.
    The side to move is O when X is ahead, X otherwise. On a finished
    board the turn is left with whoever made the last move, matching what
    apply_move produces.

    Raises:
        InvalidPosition: Wrong number of cells, or mark counts that no
            legal game can reach.
    """
    cells = tuple(board)
    if len(cells) != BOARD_CELLS:
        raise InvalidPosition(f"Board must have {BOARD_CELLS} cells, got {len(cells)}")

    x_count = sum(1 for cell in cells if cell == Mark.X)
    o_count = sum(1 for cell in cells if cell == Mark.O)
    if x_count - o_count not in (0, 1):
        raise InvalidPosition(
            f"Unreachable board: {x_count} X marks and {o_count} O marks"
        )

    x_ahead = x_count > o_count
    if _win_checker.classify(cells).is_terminal:
        turn = Mark.X if x_ahead else Mark.O
    else:
        turn = Mark.O if x_ahead else Mark.X
    return BoardState(board=cells, turn=turn)


def iter_reachable_states(start: Optional[BoardState] = None) -> Iterator[BoardState]:
    """
    Yield every distinct state reachable by legal play from start.

    From the empty board this is 5,478 states, finished ones included.
    """
    start = start or BoardState()
    seen = {start}
    queue = deque([start])
    while queue:
        state = queue.popleft()
        yield state
        for position in _validator.get_valid_moves(state):
            next_state = apply_move(state, Move(state.turn, position)).state
            if next_state not in seen:
                seen.add(next_state)
                queue.append(next_state)


class GameStateMachine:
    """
    Runs one game from the empty board to a win or a draw.

    States:
    - Active: outcome is in progress, moves are accepted
    - Completed: outcome is a win or draw, every move is rejected

    There is no way back from Completed; start a new machine instead.
    """

    def __init__(self, state: Optional[BoardState] = None):
        """
        Initialize the machine.

        Args:
            state: Starting position (default: empty board, X to move).
        """
        self._state = state or BoardState()
        self._outcome = _win_checker.classify(self._state.board)
        self._history: List[Move] = []

    @property
    def state(self) -> BoardState:
        return self._state

    @property
    def outcome(self) -> Outcome:
        return self._outcome

    @property
    def history(self) -> Tuple[Move, ...]:
        """Accepted moves, oldest first."""
        return tuple(self._history)

    @property
    def is_active(self) -> bool:
        return not self._outcome.is_terminal

    def apply_move(self, move: Move) -> Outcome:
        """
        Apply a move to the current game.

        State and history are only replaced once the move is accepted,
        so a rejected move leaves the machine untouched.

        Returns:
            The Outcome after the move.
        """
        transition = apply_move(self._state, move)

        self._state = transition.state
        self._outcome = transition.outcome
        self._history.append(move)

        if transition.outcome.status == GameStatus.WIN:
            logger.info(
                "%s wins on line %s after %d moves",
                transition.outcome.winner.value,
                transition.outcome.line,
                len(self._history),
            )
        elif transition.outcome.status == GameStatus.DRAW:
            logger.info("Draw after %d moves", len(self._history))

        return transition.outcome
