"""Defines the chess pieces"""

from dataclasses import dataclass
from typing import Self

from neon_chess.chess.square import Square
from neon_chess.core.shared_types import PieceKind, Side

FEN_TO_PIECE: dict[str, PieceKind] = {
    "p": PieceKind.PAWN,
    "n": PieceKind.KNIGHT,
    "b": PieceKind.BISHOP,
    "r": PieceKind.ROOK,
    "q": PieceKind.QUEEN,
    "k": PieceKind.KING,
}

PIECE_TO_FEN: dict[PieceKind, str] = {value: key for key, value in FEN_TO_PIECE.items()}


# Material values used by the automated opponent. The king's value only matters in capture scoring.
PIECE_VALUES: dict[PieceKind, int] = {
    PieceKind.PAWN: 1,
    PieceKind.KNIGHT: 3,
    PieceKind.BISHOP: 3,
    PieceKind.ROOK: 5,
    PieceKind.QUEEN: 9,
    PieceKind.KING: 100,
}

PROMOTION_OPTIONS: tuple[PieceKind, ...] = (
    PieceKind.QUEEN,
    PieceKind.ROOK,
    PieceKind.BISHOP,
    PieceKind.KNIGHT,
)


@dataclass(eq=True)
class Piece:
    """
    A piece lives in exactly one board slot. Moving it mutates `square` and `has_moved` in place.

    NOTE: `has_moved` only ever goes from False to True (pieces created by promotion start at True).
    """

    kind: PieceKind
    side: Side
    square: Square
    has_moved: bool = False

    @classmethod
    def from_fen(cls, character: str, square: Square) -> Self:
        # lower case: Black pieces, upper case: White pieces
        side = Side.WHITE if character.isupper() else Side.BLACK
        kind = FEN_TO_PIECE[character.lower()]
        return cls(kind, side, square)

    def to_fen(self) -> str:
        character = PIECE_TO_FEN[self.kind]
        return character.upper() if self.side == Side.WHITE else character

    @property
    def value(self) -> int:
        return PIECE_VALUES[self.kind]

    def move_to(self, square: Square) -> None:
        self.square = square
        self.has_moved = True
