"""
Type definitions used across layers
"""

from enum import IntEnum, StrEnum


class Side(StrEnum):
    WHITE = "white"
    BLACK = "black"


def opposite(side: Side) -> Side:
    return Side.BLACK if side == Side.WHITE else Side.WHITE


class PieceKind(StrEnum):
    PAWN = "pawn"
    KNIGHT = "knight"
    BISHOP = "bishop"
    ROOK = "rook"
    QUEEN = "queen"
    KING = "king"


class GameStatus(StrEnum):
    ACTIVE = "active"
    CHECK = "check"
    CHECKMATE = "checkmate"
    STALEMATE = "stalemate"


TERMINAL_STATUSES: frozenset[GameStatus] = frozenset(
    {GameStatus.CHECKMATE, GameStatus.STALEMATE}
)


class CastlingSide(StrEnum):
    KINGSIDE = "kingside"
    QUEENSIDE = "queenside"


class Strength(IntEnum):
    """Automated opponent tiers. The value doubles as the divisor narrowing the candidate pool."""

    EASY = 1
    MEDIUM = 2
    HARD = 3
    MASTER = 4
