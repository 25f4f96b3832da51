"""Unit tests for /neon_chess/chess/search.py"""

import random

import pytest

from neon_chess.chess.board import Board
from neon_chess.chess.fen import STARTING_PLACEMENT
from neon_chess.chess.search import (
    CAPTURE_WEIGHT,
    CHECKMATE_BONUS,
    MAX_JITTER,
    center_bonus,
    choose_move,
    score_move,
)
from neon_chess.chess.square import Square
from neon_chess.core.shared_types import Side, Strength

sq = Square.from_algebraic

# Knight h6 to f7 smothers the king on h8. White has exactly 8 legal moves here.
SMOTHERED_MATE = "6rk/6pp/7N/8/8/8/6P1/7K"
# King only: e1 with every neighbour free
LONE_KING = "k7/8/8/8/8/8/8/4K3"


def test_no_legal_moves_returns_none() -> None:
    checkmated = Board.from_fen("R5k1/5ppp/8/8/8/8/8/6K1")
    for strength in Strength:
        assert choose_move(checkmated, Side.BLACK, strength, random.Random(0)) is None


def test_easy_picks_every_move_eventually(seeded_rng: random.Random) -> None:
    board = Board.from_fen(LONE_KING)
    legal_targets = {move.to_square for move in board.all_legal_moves(Side.WHITE)}
    assert len(legal_targets) == 5

    seen = set()
    for _ in range(300):
        move = choose_move(board, Side.WHITE, Strength.EASY, seeded_rng)
        assert move is not None
        seen.add(move.to_square)
    assert seen == legal_targets


@pytest.mark.parametrize("strength", list(Strength))
def test_chosen_move_is_legal(strength: Strength, seeded_rng: random.Random) -> None:
    board = Board.from_fen(STARTING_PLACEMENT)
    legal = {(m.from_square, m.to_square) for m in board.all_legal_moves(Side.WHITE)}
    for _ in range(10):
        move = choose_move(board, Side.WHITE, strength, seeded_rng)
        assert move is not None
        assert (move.from_square, move.to_square) in legal


@pytest.mark.parametrize("strength", list(Strength))
def test_search_leaves_board_unchanged(strength: Strength, seeded_rng: random.Random) -> None:
    board = Board.from_fen("r3k2r/pp3ppp/8/3pP3/8/8/PP3PPP/R3K2R")
    board.en_passant = sq("d6")
    before = board.copy()
    choose_move(board, Side.WHITE, strength, seeded_rng)
    assert board == before


def test_master_finds_mate_in_one() -> None:
    board = Board.from_fen(SMOTHERED_MATE)
    assert len(board.all_legal_moves(Side.WHITE)) == 8
    for seed in range(20):
        move = choose_move(board, Side.WHITE, Strength.MASTER, random.Random(seed))
        assert move is not None
        assert move.from_square == sq("h6")
        assert move.to_square == sq("f7")


def test_mate_outscores_winning_material(seeded_rng: random.Random) -> None:
    board = Board.from_fen(SMOTHERED_MATE)
    moves = {move.to_square.to_algebraic(): move for move in board.all_legal_moves(Side.WHITE)}

    mate = score_move(board, moves["f7"], Side.WHITE, seeded_rng)
    rook_capture = score_move(board, moves["g8"], Side.WHITE, seeded_rng)
    assert mate >= CHECKMATE_BONUS
    assert 5 * CAPTURE_WEIGHT <= rook_capture < 5 * CAPTURE_WEIGHT + MAX_JITTER
    assert mate > rook_capture


def test_quiet_move_score_is_center_plus_jitter(seeded_rng: random.Random) -> None:
    board = Board.from_fen(STARTING_PLACEMENT)
    knight = board.piece_at(sq("b1"))
    assert knight is not None
    move = next(m for m in board.legal_moves(knight) if m.to_square == sq("c3"))
    score = score_move(board, move, Side.WHITE, seeded_rng)
    assert 0.5 <= score < 0.5 + MAX_JITTER


@pytest.mark.parametrize(
    "square, bonus",
    [("a1", 0.0), ("c3", 0.5), ("f6", 0.5), ("d4", 1.0), ("e5", 1.0), ("b4", 0.0)],
)
def test_center_bonus(square: str, bonus: float) -> None:
    assert center_bonus(sq(square)) == bonus
