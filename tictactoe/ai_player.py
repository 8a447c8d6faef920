"""
AI player for TicTacToe.
Chooses moves for the computer at one of three strengths:
random, mostly-optimal, and full Minimax search with alpha-beta pruning.
"""

from enum import Enum
from typing import Dict, List, Optional, Sequence, Tuple
from dataclasses import dataclass, field
import logging
import random

from .config import GameConfig
from .errors import GameAlreadyOver, InvalidMark, NoLegalMoves, WrongTurn
from .game_state import BoardState, Cell, Mark, empty_cells
from .win_checker import GameStatus, WinChecker

logger = logging.getLogger(__name__)


class Tier(Enum):
    """Computer opponent strength."""
    WEAK = "weak"          # Uniform random over empty cells
    MEDIUM = "medium"      # Strong move most of the time, random otherwise
    STRONG = "strong"      # Full Minimax search, never loses

    @classmethod
    def parse(cls, value) -> "Tier":
        """
        Turn a Tier or its name ("weak", "Medium", ...) into a Tier.

        Raises:
            InvalidMark: If the value is not a known tier.
        """
        if isinstance(value, Tier):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        raise InvalidMark(f"Unknown tier: {value!r}. Must be weak, medium or strong.")


@dataclass(frozen=True)
class SearchResult:
    """What a full search found for the side to move."""
    position: int                   # Chosen move
    score: int                      # Its Minimax score
    scores: Dict[int, int] = field(default_factory=dict)    # Score for every root move
    positions_evaluated: int = 0


class AIPlayer:
    """
    An AI that plays TicTacToe at a chosen tier.

    The strong tier searches the whole game tree with Minimax. Scores are
    WIN_SCORE - depth for a win and depth - WIN_SCORE for a loss, so it
    prefers faster wins and slower losses. Alpha-beta pruning only skips
    branches that can't change the answer; turning it off gives the same
    moves and scores, just slower.

    Random choices come from the injected rng so games can be replayed.
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        config: Optional[GameConfig] = None,
        prune: bool = True,
    ):
        """
        Initialize the AI player.

        Args:
            rng: Random source for the weak and medium tiers
                (default: a new unseeded random.Random).
            config: Tunables (default: GameConfig()).
            prune: Use alpha-beta pruning in the strong search.
        """
        self.rng = rng or random.Random()
        self.config = config or GameConfig()
        self.prune = prune
        self.win_checker = WinChecker()

    def select_move(self, state: BoardState, mark, tier) -> int:
        """
        Choose a move for mark.

        Args:
            state: Current state; it must be mark's turn.
            mark: The mark the computer plays.
            tier: Tier or tier name.

        Returns:
            Board index of the chosen move.

        Raises:
            GameAlreadyOver: The game is already won or drawn.
            NoLegalMoves: The board has no empty cell.
            WrongTurn: It's not mark's turn.
        """
        mark = Mark.parse(mark)
        tier = Tier.parse(tier)

        if self.win_checker.classify(state.board).is_terminal:
            raise GameAlreadyOver("Game is already over")

        if not state.get_empty_cells():
            raise NoLegalMoves("No empty cells left")

        if state.turn != mark:
            raise WrongTurn(f"It's not {mark.value}'s turn")

        if tier == Tier.WEAK:
            position = self.random_move(state.board)
        elif tier == Tier.MEDIUM:
            position = self.medium_move(state.board, mark)
        else:
            position = self.best_move(state.board, mark)

        logger.debug("%s (%s) plays %d", mark.value, tier.value, position)
        return position

    def random_move(self, board: Sequence[Cell]) -> int:
        """Pick uniformly among the empty cells, listed in index order."""
        return self.rng.choice(empty_cells(board))

    def medium_move(self, board: Sequence[Cell], mark: Mark) -> int:
        """Play the strong move with MEDIUM_STRONG_PROBABILITY, else a random one."""
        if self.rng.random() < self.config.MEDIUM_STRONG_PROBABILITY:
            return self.best_move(board, mark)
        return self.random_move(board)

    def best_move(self, board: Sequence[Cell], mark: Mark) -> int:
        """Get the Minimax move for mark."""
        return self.search(board, mark).position

    def search(self, board: Sequence[Cell], mark: Mark) -> SearchResult:
        """
        Score every empty cell for mark and pick the best.

        Each root move gets its own full window, so its score is exact
        whether or not pruning is on. Ties go to the lowest index.
        Nothing is stored on the player between searches, so one AIPlayer
        can serve any number of games.

        Args:
            board: Current board; mark is the side to move.
            mark: The mark to find a move for.

        Returns:
            SearchResult with the chosen move, all root scores and how many
            positions were evaluated.

        Raises:
            NoLegalMoves: The board has no empty cell.
        """
        # Place-then-undo on one private list; the caller's board is untouched
        cells: List[Cell] = list(board)
        valid_moves = empty_cells(cells)
        if not valid_moves:
            raise NoLegalMoves("No empty cells left")

        scores: Dict[int, int] = {}
        best_move = valid_moves[0]
        best_score = float('-inf')
        positions_evaluated = 0

        for position in valid_moves:
            cells[position] = mark
            score, evaluated = self._minimax(cells, mark, depth=0, is_maximizing=False)
            cells[position] = None

            positions_evaluated += evaluated
            scores[position] = score
            if score > best_score:
                best_score = score
                best_move = position

        logger.debug(
            "AI evaluated %d positions. Best move: %d (score: %d)",
            positions_evaluated, best_move, best_score,
        )

        return SearchResult(
            position=best_move,
            score=best_score,
            scores=scores,
            positions_evaluated=positions_evaluated,
        )

    def _minimax(
        self,
        cells: List[Cell],
        mark: Mark,
        depth: int,
        is_maximizing: bool,
        alpha: float = float('-inf'),
        beta: float = float('inf'),
    ) -> Tuple[float, int]:
        """
        Minimax algorithm with optional alpha-beta pruning.

        Args:
            cells: Board being searched, restored before returning.
            mark: The mark we're finding a move for.
            depth: Plies played since the root move.
            is_maximizing: True if it's mark's turn.
            alpha: Best score mark can already force.
            beta: Best score the opponent can already force.

        Returns:
            (score of the position, positions evaluated below and including it)
        """
        evaluated = 1

        # Check terminal states
        outcome = self.win_checker.classify(cells)

        if outcome.status == GameStatus.WIN:
            if outcome.winner == mark:
                return self.config.WIN_SCORE - depth, evaluated  # Win (prefer faster wins)
            return depth - self.config.WIN_SCORE, evaluated      # Loss (prefer slower losses)
        elif outcome.status == GameStatus.DRAW:
            return 0, evaluated

        mover = mark if is_maximizing else mark.opposite()

        if is_maximizing:
            max_score = float('-inf')
            for position in empty_cells(cells):
                cells[position] = mover
                score, below = self._minimax(cells, mark, depth + 1, False, alpha, beta)
                cells[position] = None
                evaluated += below
                max_score = max(max_score, score)
                if self.prune:
                    alpha = max(alpha, score)
                    if beta <= alpha:
                        break  # Prune
            return max_score, evaluated
        else:
            min_score = float('inf')
            for position in empty_cells(cells):
                cells[position] = mover
                score, below = self._minimax(cells, mark, depth + 1, True, alpha, beta)
                cells[position] = None
                evaluated += below
                min_score = min(min_score, score)
                if self.prune:
                    beta = min(beta, score)
                    if beta <= alpha:
                        break  # Prune
            return min_score, evaluated
