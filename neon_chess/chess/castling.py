"""Helpers for implementing Castling rules. Need to be imported by multiple sources"""

from dataclasses import dataclass
from typing import Self

from neon_chess.chess.square import Square
from neon_chess.core.shared_types import CastlingSide, Side


@dataclass(frozen=True)
class CastlingSquares:
    """
    Store the squares where king/rook start from/end up in by castling, plus the squares the rule inspects.

    * must_be_empty: every square strictly between king and rook
    * must_be_safe: the squares the king passes through or lands on (besides its own square, which must not be in check)

    NOTE: Queenside, the b-file must be empty but is never checked for attacks. The king does not cross it.
    """

    king_from: Square
    king_to: Square
    rook_from: Square
    rook_to: Square
    must_be_empty: tuple[Square, ...]
    must_be_safe: tuple[Square, ...]

    @classmethod
    def from_algebraic(
        cls,
        k_from: str,
        k_to: str,
        r_from: str,
        r_to: str,
        empty: tuple[str, ...],
        safe: tuple[str, ...],
    ) -> Self:
        """Convenience method: to make mapping shown below more readable"""
        return cls(
            king_from=Square.from_algebraic(k_from),
            king_to=Square.from_algebraic(k_to),
            rook_from=Square.from_algebraic(r_from),
            rook_to=Square.from_algebraic(r_to),
            must_be_empty=tuple(Square.from_algebraic(sq) for sq in empty),
            must_be_safe=tuple(Square.from_algebraic(sq) for sq in safe),
        )


# The moves (in classical chess) made when castling
CASTLING_RULES: dict[tuple[Side, CastlingSide], CastlingSquares] = {
    (Side.WHITE, CastlingSide.KINGSIDE): CastlingSquares.from_algebraic(
        "e1", "g1", "h1", "f1", empty=("f1", "g1"), safe=("f1", "g1")
    ),
    (Side.WHITE, CastlingSide.QUEENSIDE): CastlingSquares.from_algebraic(
        "e1", "c1", "a1", "d1", empty=("b1", "c1", "d1"), safe=("c1", "d1")
    ),
    (Side.BLACK, CastlingSide.KINGSIDE): CastlingSquares.from_algebraic(
        "e8", "g8", "h8", "f8", empty=("f8", "g8"), safe=("f8", "g8")
    ),
    (Side.BLACK, CastlingSide.QUEENSIDE): CastlingSquares.from_algebraic(
        "e8", "c8", "a8", "d8", empty=("b8", "c8", "d8"), safe=("c8", "d8")
    ),
}


def castling_rule(side: Side, castling_side: CastlingSide) -> CastlingSquares:
    return CASTLING_RULES[(side, castling_side)]
