"""
Errors raised when a game operation is rejected.
Every rejection leaves the game exactly as it was.
"""


class GameError(ValueError):
    """Base class for rejected game operations."""

    code = "game_error"

    def to_dict(self) -> dict:
        return {"error": self.code, "message": str(self)}


class NotActive(GameError):
    """A move was attempted after the game finished."""

    code = "not_active"


class WrongTurn(GameError):
    """The mover is not the player whose turn it is."""

    code = "wrong_turn"


class CellOccupied(GameError):
    """The target cell already holds a mark."""

    code = "cell_occupied"


class InvalidPosition(GameError):
    """The position is not an index from 0 to 8."""

    code = "invalid_position"


class InvalidMark(GameError):
    """A mark, tier or mode value was not recognised."""

    code = "invalid_mark"


class InvalidMode(GameError):
    """A computer-only operation was used on a human-vs-human game."""

    code = "invalid_mode"


class NoLegalMoves(GameError):
    """The opponent engine was asked to move with no empty cell left."""

    code = "no_legal_moves"


class GameAlreadyOver(NoLegalMoves):
    """The opponent engine was asked to move on a finished game."""

    code = "game_already_over"
