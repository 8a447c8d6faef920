"""
Game sessions for TicTacToe.

A GameSession is what the outside world talks to: create a game, make
moves, query the board. In computer mode the session answers every human
move with the engine's move straight away. When the game ends the record
is sealed and handed to the recorder, and the session keeps no copy.
"""

from enum import Enum
from typing import Callable, Optional, Tuple
import logging
import time

from .ai_player import AIPlayer, Tier
from .config import GameConfig
from .errors import GameError, InvalidMark, InvalidMode, InvalidPosition
from .game_record import GameRecordBuilder, MatchRecorder
from .game_state import BoardState, Mark, Move, board_to_list, is_valid_position
from .state_machine import GameStateMachine
from .win_checker import Outcome

logger = logging.getLogger(__name__)


class GameMode(Enum):
    """Who is playing."""
    HUMAN = "human"         # Two humans share the board
    COMPUTER = "computer"   # Human against the AI (AI plays GameConfig.COMPUTER_MARK)

    @classmethod
    def parse(cls, value) -> "GameMode":
        if isinstance(value, GameMode):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        raise InvalidMark(f"Unknown mode: {value!r}. Must be human or computer.")


class GameSession:
    """
    One game from creation to its sealed record.

    Game flow (computer mode):
    1. Human submits a move (if the AI plays X it has already opened)
    2. Session validates and applies it
    3. If the game goes on, the AI picks a reply at the session's tier
    4. The reply goes through the same state machine
    5. On a win or draw the record is sealed and sent to the recorder
    """

    def __init__(
        self,
        mode="human",
        tier=None,
        recorder: Optional[MatchRecorder] = None,
        engine: Optional[AIPlayer] = None,
        config: Optional[GameConfig] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Create a new game: empty board, X to move.

        Args:
            mode: GameMode or "human" / "computer".
            tier: Tier or tier name; computer mode only
                (default: config.DEFAULT_TIER).
            recorder: Receives the sealed GameRecord when the game ends.
            engine: AI used in computer mode (default: AIPlayer(config=config)).
            config: Tunables (default: GameConfig()).
            clock: Returns the time in seconds, used to time moves.

        Raises:
            InvalidMark: Unknown mode or tier.
            InvalidMode: A tier was given for a human-vs-human game.
        """
        self.mode = GameMode.parse(mode)
        self.config = config or GameConfig()

        if self.mode == GameMode.COMPUTER:
            self.tier: Optional[Tier] = Tier.parse(tier or self.config.DEFAULT_TIER)
        elif tier is not None:
            raise InvalidMode("Difficulty tier only applies to games against the computer")
        else:
            self.tier = None

        self.computer_mark = self.config.COMPUTER_MARK
        self.engine = engine or AIPlayer(config=self.config)
        self.recorder = recorder

        self._clock = clock
        self._machine = GameStateMachine()
        self._record = GameRecordBuilder(
            started_at=clock(),
            mode=self.mode.value,
            tier=self.tier.value if self.tier else None,
        )

        logger.info(
            "New %s game%s",
            self.mode.value,
            f" ({self.tier.value})" if self.tier else "",
        )

        # Computer playing X opens the game
        if self.mode == GameMode.COMPUTER and self._computer_to_move():
            self._computer_move()

    @classmethod
    def create(cls, mode="human", tier=None, **kwargs) -> "GameSession":
        """Start a new game; same arguments as the constructor."""
        return cls(mode=mode, tier=tier, **kwargs)

    @property
    def state(self) -> BoardState:
        return self._machine.state

    @property
    def outcome(self) -> Outcome:
        return self._machine.outcome

    @property
    def history(self) -> Tuple[Move, ...]:
        return self._machine.history

    @property
    def is_active(self) -> bool:
        return self._machine.is_active

    def move(self, mark, position) -> dict:
        """
        Play a move for mark at position.

        In computer mode the computer's reply is played before returning.

        Args:
            mark: Mark or "X" / "O".
            position: Board index 0-8.

        Returns:
            The public view after the move (and any reply).

        Raises:
            GameError: The move was rejected; nothing changed.
        """
        try:
            if not is_valid_position(position):
                raise InvalidPosition(f"Invalid position {position!r}. Must be 0-8.")
            self._play(Move(Mark.parse(mark), position))
        except GameError as e:
            logger.warning("Rejected move %r at %r: %s", mark, position, e)
            raise

        if self.mode == GameMode.COMPUTER and self._computer_to_move():
            self._computer_move()

        return self.query()

    def query(self) -> dict:
        """
        Get the public view of the game. Never changes anything.

        Returns:
            Dict with board (nine "X" / "O" / None), turn, status,
            outcome (None while active), mode, tier and move count.
        """
        state = self._machine.state
        outcome = self._machine.outcome
        return {
            "board": board_to_list(state.board),
            "turn": state.turn.value,
            "status": "completed" if outcome.is_terminal else "active",
            "outcome": outcome.to_dict(),
            "mode": self.mode.value,
            "tier": self.tier.value if self.tier else None,
            "moves": len(self._machine.history),
        }

    def _computer_to_move(self) -> bool:
        return self._machine.is_active and self._machine.state.turn == self.computer_mark

    def _computer_move(self):
        """Ask the AI for a move and play it."""
        position = self.engine.select_move(self._machine.state, self.computer_mark, self.tier)
        self._play(Move(self.computer_mark, position))

    def _play(self, move: Move):
        """Apply a move, record it, and seal the record if the game ended."""
        outcome = self._machine.apply_move(move)
        self._record.append(move, self._clock())

        if outcome.is_terminal:
            self._seal()

    def _seal(self):
        """Seal the record and hand it off."""
        game_record = self._record.seal(self._machine.state.board, self._machine.outcome)
        self._record = None

        result = game_record.outcome.to_dict()
        logger.info(
            "Game over: %s%s in %d moves",
            result["result"],
            f" ({result['winner']})" if result["winner"] else "",
            game_record.total_moves,
        )

        if self.recorder is not None:
            self.recorder.record(game_record)
