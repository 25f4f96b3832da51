"""
Custom exceptions

Everything raised on purpose by this package derives from ChessError, so a caller (service / API layer)
can catch a single top-level type.
"""


class ChessError(Exception):
    """Root of all errors raised by the package."""


# --- GAME / DOMAIN LAYER ---
class GameError(ChessError):
    """The game layer refused the request."""


class IllegalMoveError(GameError):
    """
    The move is not among the legal moves of the piece.

    Also raised by Board.apply_move when it is handed a move that never passed the legality filter:
    applying it would silently corrupt the position.
    """


class NotYourTurnError(GameError):
    """A piece of the side that is not to move was asked to move."""


class GameStateError(GameError):
    """The game is in a state that does not allow the request (finished game, corrupt restore data)."""


class InvalidFENError(GameError):
    """The piece placement string cannot be interpreted."""


# --- BOUNDARY LAYERS ---
class InvalidRequestError(ChessError, ValueError):
    """Request validation failed. (ValueError, so pydantic validators turn it into a ValidationError)"""


class RepositoryError(ChessError):
    """Persistence layer could not find / store the requested record."""
