"""
Match records for TicTacToe.

A record is started empty when a game begins, gets one entry per accepted
move, and is sealed when the game ends. The sealed GameRecord is frozen and
is what gets handed to whoever keeps match history and player statistics.
"""

from typing import List, Optional, Protocol, Tuple
from dataclasses import dataclass

from .game_state import Board, Mark, Move, board_to_list
from .win_checker import Outcome


@dataclass(frozen=True)
class TimedMove:
    """A move with when it happened."""
    player: Mark
    position: int
    timestamp: float    # Clock reading when the move was accepted
    elapsed: float      # Seconds since the previous move (or game start)

    def to_dict(self) -> dict:
        return {
            "player": self.player.value,
            "position": self.position,
            "timestamp": self.timestamp,
            "elapsed": self.elapsed,
        }


@dataclass(frozen=True)
class GameRecord:
    """A finished game: every move, the final board and the result."""
    moves: Tuple[TimedMove, ...]
    board: Board
    outcome: Outcome
    mode: str
    tier: Optional[str] = None
    started_at: float = 0.0

    @property
    def total_moves(self) -> int:
        return len(self.moves)

    @property
    def first_move_time(self) -> float:
        """Seconds from game start to the first move."""
        return self.moves[0].elapsed if self.moves else 0.0

    @property
    def average_move_time(self) -> float:
        if not self.moves:
            return 0.0
        return sum(move.elapsed for move in self.moves) / len(self.moves)

    def to_dict(self) -> dict:
        return {
            "mode": self.mode,
            "tier": self.tier,
            "board": board_to_list(self.board),
            "outcome": self.outcome.to_dict(),
            "moves": [move.to_dict() for move in self.moves],
            "total_moves": self.total_moves,
            "first_move_time": self.first_move_time,
            "average_move_time": self.average_move_time,
        }


class MatchRecorder(Protocol):
    """Anything that accepts sealed records (match history, stats, ...)."""

    def record(self, game_record: GameRecord) -> None:
        ...


class GameRecordBuilder:
    """
    Collects moves for one game until it is sealed.

    After seal() the builder refuses further moves.
    """

    def __init__(self, started_at: float, mode: str, tier: Optional[str] = None):
        self.started_at = started_at
        self.mode = mode
        self.tier = tier
        self._moves: List[TimedMove] = []
        self._last_time = started_at
        self._sealed = False

    @property
    def is_sealed(self) -> bool:
        return self._sealed

    @property
    def moves(self) -> Tuple[TimedMove, ...]:
        return tuple(self._moves)

    def append(self, move: Move, timestamp: float) -> TimedMove:
        """Add an accepted move, timing it against the previous one."""
        if self._sealed:
            raise RuntimeError("Game record is already sealed")

        timed = TimedMove(
            player=move.player,
            position=move.position,
            timestamp=timestamp,
            elapsed=max(0.0, timestamp - self._last_time),
        )
        self._moves.append(timed)
        self._last_time = timestamp
        return timed

    def seal(self, board: Board, outcome: Outcome) -> GameRecord:
        """
        Freeze the record once the game has a final outcome.

        Raises:
            RuntimeError: Already sealed, or the outcome isn't final.
        """
        if self._sealed:
            raise RuntimeError("Game record is already sealed")
        if not outcome.is_terminal:
            raise RuntimeError("Cannot seal a game that is still in progress")

        self._sealed = True
        return GameRecord(
            moves=tuple(self._moves),
            board=tuple(board),
            outcome=outcome,
            mode=self.mode,
            tier=self.tier,
            started_at=self.started_at,
        )
