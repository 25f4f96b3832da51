"""unit tests for neon_chess/chess/castling.py"""

from neon_chess.chess.castling import CASTLING_RULES, CastlingSquares, castling_rule
from neon_chess.chess.square import Square
from neon_chess.core.shared_types import CastlingSide, Side


def test_castling_squares_creation() -> None:
    """Test one case, just to have a little contract stating: 'I want to be able to create this dataclass'"""
    castling_squares = CastlingSquares.from_algebraic(
        "e1", "g1", "h1", "f1", empty=("f1", "g1"), safe=("f1", "g1")
    )
    assert castling_squares.king_from == Square(4, 7)
    assert castling_squares.king_to == Square(6, 7)
    assert castling_squares.rook_from == Square(7, 7)
    assert castling_squares.rook_to == Square(5, 7)
    assert castling_squares.must_be_empty == (Square(5, 7), Square(6, 7))


def test_rule_for_every_side_and_direction() -> None:
    assert len(CASTLING_RULES) == 4
    for side in Side:
        for castling_side in CastlingSide:
            rule = castling_rule(side, castling_side)
            assert rule.king_from.y == rule.king_to.y == rule.rook_from.y == rule.rook_to.y
            assert abs(rule.king_to.x - rule.king_from.x) == 2


def test_queenside_b_file_only_needs_to_be_empty() -> None:
    rule = castling_rule(Side.BLACK, CastlingSide.QUEENSIDE)
    b8 = Square.from_algebraic("b8")
    assert b8 in rule.must_be_empty
    assert b8 not in rule.must_be_safe
    assert rule.rook_to == Square.from_algebraic("d8")
