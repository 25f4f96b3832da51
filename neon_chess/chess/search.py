"""
The automated opponent.

Not a real game tree search: every legal move gets a one-ply heuristic score, and the strength tier decides how
far the pool of candidates is narrowed before one gets picked at random.

Ownership: the board handed to `choose_move` must be a private copy of the live game board (`Board.copy()`).
Scoring plays each candidate on it and rolls it back via snapshot/restore, so the copy ends up unchanged,
but the live board is never touched in the first place. The returned Move refers to pieces of that copy:
callers map it back to the live board by its squares.
"""

import random
from math import ceil
from typing import Optional

from loguru import logger

from neon_chess.chess.board import Board
from neon_chess.chess.moves import Move
from neon_chess.chess.square import Square
from neon_chess.core.shared_types import Side, Strength, opposite

CAPTURE_WEIGHT = 10
CHECK_BONUS = 5
CHECKMATE_BONUS = 1000
PROMOTION_BONUS = 8
CASTLING_BONUS = 3
CENTER_BONUS = 0.5
INNER_CENTER_BONUS = 0.5
MAX_JITTER = 0.2

CENTER = range(2, 6)
INNER_CENTER = range(3, 5)


def choose_move(
    board: Board,
    side: Side,
    strength: Strength,
    rng: Optional[random.Random] = None,
) -> Optional[Move]:
    """
    Pick a move for `side`.
    ---

    1. No legal moves? Return None (the game already ended in checkmate or stalemate).
    2. EASY: any legal move, uniformly at random.
    3. Otherwise: score all moves and sort them, best first.
    4. HARD and MASTER keep only the better half (rounded up).
    5. Pick at random from the top ceil(count / strength) moves.
    """
    rng = rng or random.Random()
    candidates = board.all_legal_moves(side)
    if not candidates:
        logger.debug(f"No legal moves for {side}")
        return None

    if strength == Strength.EASY:
        return rng.choice(candidates)

    scored = [(score_move(board, move, side, rng), move) for move in candidates]
    scored.sort(key=lambda pair: pair[0], reverse=True)
    ranked = [move for _, move in scored]

    if strength >= Strength.HARD:
        ranked = ranked[: ceil(len(ranked) / 2)]

    top_count = max(1, ceil(len(ranked) / int(strength)))
    logger.debug(
        f"{side} ({strength.name}): {len(candidates)} legal moves, choosing among {top_count}, best score {scored[0][0]:.2f}"
    )
    return rng.choice(ranked[:top_count])


def score_move(board: Board, move: Move, side: Side, rng: random.Random) -> float:
    """
    Heuristic value of a single legal move, found by playing it on the board and rolling it back.

    * captured material x 10
    * +5 for giving check, +1000 more if the opponent has no legal reply (checkmate)
    * +8 for a promotion, +3 for castling
    * +0.5 for landing in the central 4x4, another +0.5 for the central 2x2
    * a random jitter below 0.2 to break ties unpredictably
    """
    snapshot = board.snapshot()
    try:
        result = board.apply_move(move.piece, move.to_square)
        score = 0.0
        if result.captured is not None:
            score += result.captured.value * CAPTURE_WEIGHT

        opponent = opposite(side)
        if board.in_check(opponent):
            score += CHECK_BONUS
            if not board.has_legal_move(opponent):
                score += CHECKMATE_BONUS

        if result.is_promotion:
            score += PROMOTION_BONUS
        if result.is_castling:
            score += CASTLING_BONUS
    finally:
        board.restore(snapshot)

    score += center_bonus(move.to_square)
    score += rng.random() * MAX_JITTER
    return score


def center_bonus(square: Square) -> float:
    if square.x not in CENTER or square.y not in CENTER:
        return 0.0
    if square.x in INNER_CENTER and square.y in INNER_CENTER:
        return CENTER_BONUS + INNER_CENTER_BONUS
    return CENTER_BONUS
