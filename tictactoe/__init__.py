"""
TicTacToe game core.
Handles board state, rules, turn sequencing, match records and the
computer opponent.
"""

__version__ = "1.0.0"

from .game_state import BoardState, Mark, Move, WIN_LINES, board_from_list, board_to_list
from .win_checker import GameStatus, Outcome, WinChecker
from .move_validator import MoveValidator
from .state_machine import GameStateMachine, apply_move, iter_reachable_states, state_from_board
from .ai_player import AIPlayer, SearchResult, Tier
from .game_record import GameRecord, GameRecordBuilder, MatchRecorder, TimedMove
from .session import GameMode, GameSession
from .config import GameConfig
from .errors import (
    CellOccupied,
    GameAlreadyOver,
    GameError,
    InvalidMark,
    InvalidMode,
    InvalidPosition,
    NoLegalMoves,
    NotActive,
    WrongTurn,
)
