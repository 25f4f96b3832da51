"""Unit tests for /neon_chess/chess/pieces.py"""

import pytest

from neon_chess.chess.pieces import FEN_TO_PIECE, PIECE_TO_FEN, PIECE_VALUES, Piece
from neon_chess.chess.square import Square
from neon_chess.core.shared_types import PieceKind, Side

D4 = Square(3, 4)


@pytest.mark.parametrize("char", [char.upper() for char in FEN_TO_PIECE.keys()])
def test_creating_white_piece_from_fen(char: str) -> None:
    """Capital letters are used for white pieces"""
    piece = Piece.from_fen(char, D4)
    assert piece.kind == FEN_TO_PIECE[char.lower()]
    assert piece.side == Side.WHITE
    assert piece.square == D4
    assert not piece.has_moved


@pytest.mark.parametrize("char", [char.lower() for char in FEN_TO_PIECE.keys()])
def test_creating_black_piece_from_fen(char: str) -> None:
    """Lower case letters are used for black pieces"""
    piece = Piece.from_fen(char, D4)
    assert piece.kind == FEN_TO_PIECE[char]
    assert piece.side == Side.BLACK


@pytest.mark.parametrize("kind", list(PieceKind))
def test_pieces_to_fen(kind: PieceKind) -> None:
    assert Piece(kind, Side.WHITE, D4).to_fen() == PIECE_TO_FEN[kind].upper()
    assert Piece(kind, Side.BLACK, D4).to_fen() == PIECE_TO_FEN[kind]


@pytest.mark.parametrize(
    "kind, value",
    [
        (PieceKind.PAWN, 1),
        (PieceKind.KNIGHT, 3),
        (PieceKind.BISHOP, 3),
        (PieceKind.ROOK, 5),
        (PieceKind.QUEEN, 9),
        (PieceKind.KING, 100),
    ],
)
def test_material_values(kind: PieceKind, value: int) -> None:
    assert PIECE_VALUES[kind] == value
    assert Piece(kind, Side.BLACK, D4).value == value


def test_move_to_marks_piece_as_moved() -> None:
    piece = Piece(PieceKind.ROOK, Side.WHITE, Square(0, 7))
    piece.move_to(Square(0, 4))
    assert piece.square == Square(0, 4)
    assert piece.has_moved
