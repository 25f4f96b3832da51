"""
Geometry/Base movement and capturing/attacking rules

Key idea: Use strategy pattern to define pseudo-legal move sets for each piece kind.

Pseudo-legal means: geometry, blocking and capture rules are respected, but nobody checked yet whether the move leaves
the own king in check. Legality is checked later by the Board (what-if simulation of the move).
The king is the single exception: its steps are already filtered for safety here, and it also offers castling.
"""

from dataclasses import dataclass
from typing import Callable, Optional, Protocol

from neon_chess.chess.pieces import Piece
from neon_chess.chess.square import Square
from neon_chess.core.models import MoveRecord
from neon_chess.core.shared_types import CastlingSide, PieceKind, Side


class Board(Protocol):
    """Just the parts the movement strategies need"""

    en_passant: Optional[Square]

    def piece_at(self, square: Square) -> Optional[Piece]: ...
    def is_empty(self, square: Square) -> bool: ...
    def would_expose_check(self, piece: Piece, target: Square) -> bool: ...
    def castling_moves(self, king: Piece) -> list["Move"]: ...


Vector = tuple[int, int]

STRAIGHTS: list[Vector] = [(1, 0), (-1, 0), (0, 1), (0, -1)]
DIAGONALS: list[Vector] = [(1, 1), (1, -1), (-1, 1), (-1, -1)]
KNIGHT_DELTAS: list[Vector] = [
    (1, 2),
    (2, 1),
    (2, -1),
    (1, -2),
    (-1, -2),
    (-2, -1),
    (-2, 1),
    (-1, 2),
]
KING_DELTAS: list[Vector] = STRAIGHTS + DIAGONALS


def pawn_direction(side: Side) -> int:
    """White moves UP the board (toward row 0), Black moves DOWN"""
    return -1 if side == Side.WHITE else 1


def promotion_row(side: Side) -> int:
    """The row farthest from the pawn's own start"""
    return 0 if side == Side.WHITE else 7


@dataclass
class Move:
    """A candidate move: the piece, where it stands, where it could go."""

    piece: Piece
    from_square: Square
    to_square: Square
    castling_side: Optional[CastlingSide] = None


@dataclass
class MoveResult:
    """
    What happened when a move got applied.

    Besides the flags shown to a presentation / sync layer, this keeps everything needed to take the move back
    (see Board.undo): the square the captured piece stood on (differs from `to_square` for en passant),
    the en passant target before the move, and whether this was the first move of the piece.
    """

    piece: Piece
    from_square: Square
    to_square: Square
    captured: Optional[Piece] = None
    captured_square: Optional[Square] = None
    is_castling: bool = False
    is_en_passant: bool = False
    is_promotion: bool = False
    castling_side: Optional[CastlingSide] = None
    previous_en_passant: Optional[Square] = None
    was_first_move: bool = False
    rook: Optional[Piece] = None
    rook_from: Optional[Square] = None
    rook_to: Optional[Square] = None
    promoted_to: Optional[PieceKind] = None

    def to_record(self) -> MoveRecord:
        """Transport-safe version, e.g. to send to a remote peer."""
        return MoveRecord(
            from_square=self.from_square.to_algebraic(),
            to_square=self.to_square.to_algebraic(),
            is_castling=self.is_castling,
            is_en_passant=self.is_en_passant,
            is_promotion=self.is_promotion,
            castling_side=self.castling_side.value if self.castling_side else None,
            captured=self.captured.kind.value if self.captured else None,
            promoted_to=self.promoted_to.value if self.promoted_to else None,
        )


# --- MOVEMENT RULES ---
def raycasting_move(piece: Piece, board: Board, directions: list[Vector]) -> list[Move]:
    """
    Raycasting algorithm
    -----

    The main trick we use to check the 'line of sight of a piece'.
    We define move directions and move along them until we hit another piece or
    the edge of the board. The piece we bump into is only a destination if it can be captured.
    """
    moves: list[Move] = []
    for dx, dy in directions:
        target = piece.square.offset(dx, dy)
        while target.is_within_bounds():
            occupant = board.piece_at(target)
            if occupant is None:
                moves.append(Move(piece, piece.square, target))
            else:
                if occupant.side != piece.side:
                    moves.append(Move(piece, piece.square, target))
                break
            target = target.offset(dx, dy)
    return moves


def single_step_move(piece: Piece, board: Board, deltas: list[Vector]) -> list[Move]:
    """Raycasting is for sliding pieces. This is the equivalent for kings and knights that just can move a single step along a direction"""
    moves: list[Move] = []
    for dx, dy in deltas:
        target = piece.square.offset(dx, dy)
        if not target.is_within_bounds():
            continue

        occupant = board.piece_at(target)
        if occupant is None or occupant.side != piece.side:
            moves.append(Move(piece, piece.square, target))
    return moves


def candidate_pawn_moves(piece: Piece, board: Board) -> list[Move]:
    """
    A pawn:
    - moves by a single square forward (onto an empty square only).
    - It can move by two in its first move, if both squares are empty
    - takes diagonally, or en passant onto the target square left behind by an enemy pawn's double step
    """
    moves: list[Move] = []
    direction = pawn_direction(piece.side)

    one_step = piece.square.offset(0, direction)
    if board.is_empty(one_step):
        moves.append(Move(piece, piece.square, one_step))

        two_steps = piece.square.offset(0, 2 * direction)
        if not piece.has_moved and board.is_empty(two_steps):
            moves.append(Move(piece, piece.square, two_steps))

    for dx in (-1, 1):
        target = piece.square.offset(dx, direction)
        if not target.is_within_bounds():
            continue

        occupant = board.piece_at(target)
        if occupant is not None and occupant.side != piece.side:
            moves.append(Move(piece, piece.square, target))
        elif occupant is None and target == board.en_passant:
            # the pawn that double stepped stands next to us: same row as our origin, same file as the target
            victim = board.piece_at(Square(target.x, piece.square.y))
            if (
                victim is not None
                and victim.kind == PieceKind.PAWN
                and victim.side != piece.side
            ):
                moves.append(Move(piece, piece.square, target))
    return moves


def candidate_knight_moves(piece: Piece, board: Board) -> list[Move]:
    """Knights always jump such that |delta_x| + |delta_y| = 3"""
    return single_step_move(piece, board, KNIGHT_DELTAS)


def candidate_bishop_moves(piece: Piece, board: Board) -> list[Move]:
    """Bishops move diagonally: |delta_x| = |delta_y|"""
    return raycasting_move(piece, board, DIAGONALS)


def candidate_rook_moves(piece: Piece, board: Board) -> list[Move]:
    """Rooks move either horizontally or vertically"""
    return raycasting_move(piece, board, STRAIGHTS)


def candidate_queen_moves(piece: Piece, board: Board) -> list[Move]:
    """
    The Queen combines the rook moves (horizontal + vertical movements) and bishop moves (diagonal movement)
    """
    return raycasting_move(piece, board, STRAIGHTS + DIAGONALS)


def candidate_king_moves(piece: Piece, board: Board) -> list[Move]:
    """
    The king can move by a single square at the time, but never onto a square where it would be attacked.

    Castling is modelled as a special king move (the board checks all of its conditions).
    """
    steps = [
        move
        for move in single_step_move(piece, board, KING_DELTAS)
        if not board.would_expose_check(piece, move.to_square)
    ]
    return steps + board.castling_moves(piece)


# -- STRATEGY PATTERN: MOVEMENT RULES ---
CandidateMovesFn = Callable[[Piece, Board], list[Move]]
MOVEMENT_RULES: dict[PieceKind, CandidateMovesFn] = {
    PieceKind.PAWN: candidate_pawn_moves,
    PieceKind.KNIGHT: candidate_knight_moves,
    PieceKind.BISHOP: candidate_bishop_moves,
    PieceKind.ROOK: candidate_rook_moves,
    PieceKind.QUEEN: candidate_queen_moves,
    PieceKind.KING: candidate_king_moves,
}


# --- CAPTURING RULES / ATTACKING RULES ---
def raycasting_attack(
    square: Square,
    by_side: Side,
    by_kinds: tuple[PieceKind, ...],
    board: Board,
    directions: list[Vector],
) -> bool:
    """
    Raycasting algorithm for attacks.
    ---

    Where `raycasting_move()` determines
    _"What is the line-of-sight of the piece standing on the specified square?"_

    This function determines:
    _"Is the specified square in the line-of-sight of a piece of the specified side that
    is allowed to move along the given direction?"_

    Walk outward from the square. Only the first occupied square along each ray matters.
    """
    for dx, dy in directions:
        target = square.offset(dx, dy)
        while target.is_within_bounds():
            occupant = board.piece_at(target)
            if occupant is not None:
                if occupant.side == by_side and occupant.kind in by_kinds:
                    return True
                break
            target = target.offset(dx, dy)
    return False


def single_step_attack(
    square: Square,
    by_side: Side,
    by_kind: PieceKind,
    board: Board,
    deltas: list[Vector],
) -> bool:
    """
    The equivalent for pawns, kings, and knights that just can move a single step along a direction.
    Hence, they also can only attack along a single direction.
    """
    for dx, dy in deltas:
        target = square.offset(dx, dy)
        if not target.is_within_bounds():
            continue

        occupant = board.piece_at(target)
        if occupant is not None and occupant.side == by_side and occupant.kind == by_kind:
            return True
    return False


def is_attacked_by_pawn(square: Square, by_side: Side, board: Board) -> bool:
    """
    Pawns take diagonally
    ----

    NOTE: Pawn moves are not symmetric, so to check IF a white pawn could take on your square -->
    Must look one row DOWN the board (white pawns move toward row 0). Hence, the vectors point opposite to the
    pawn's own capturing direction.
    """
    back = -pawn_direction(by_side)
    return single_step_attack(square, by_side, PieceKind.PAWN, board, [(1, back), (-1, back)])


def is_attacked_by_knight(square: Square, by_side: Side, board: Board) -> bool:
    return single_step_attack(square, by_side, PieceKind.KNIGHT, board, KNIGHT_DELTAS)


def is_attacked_by_rook(square: Square, by_side: Side, board: Board) -> bool:
    return raycasting_attack(square, by_side, (PieceKind.ROOK,), board, STRAIGHTS)


def is_attacked_by_bishop(square: Square, by_side: Side, board: Board) -> bool:
    return raycasting_attack(square, by_side, (PieceKind.BISHOP,), board, DIAGONALS)


def is_attacked_by_queen(square: Square, by_side: Side, board: Board) -> bool:
    """Straights and diagonals"""
    return raycasting_attack(square, by_side, (PieceKind.QUEEN,), board, STRAIGHTS + DIAGONALS)


def is_attacked_by_king(square: Square, by_side: Side, board: Board) -> bool:
    """
    Plain adjacency.

    NOTE: Must not call `candidate_king_moves()`: that one asks the board whether squares are attacked,
    which would end up right back here.
    """
    return single_step_attack(square, by_side, PieceKind.KING, board, KING_DELTAS)


# --- STRATEGY PATTERN: ATTACKING RULES ---
IsAttackedFn = Callable[[Square, Side, Board], bool]
ATTACK_RULES: dict[PieceKind, IsAttackedFn] = {
    PieceKind.PAWN: is_attacked_by_pawn,
    PieceKind.KNIGHT: is_attacked_by_knight,
    PieceKind.BISHOP: is_attacked_by_bishop,
    PieceKind.ROOK: is_attacked_by_rook,
    PieceKind.QUEEN: is_attacked_by_queen,
    PieceKind.KING: is_attacked_by_king,
}


def is_square_attacked(square: Square, by_side: Side, board: Board) -> bool:
    return any(rule(square, by_side, board) for rule in ATTACK_RULES.values())


def en_passant_victim_square(pawn: Piece, target: Square) -> Square:
    """The captured pawn is not on the target: it stands on the mover's origin row, target's file."""
    return Square(target.x, pawn.square.y)


def is_en_passant_capture(piece: Piece, target: Square, board: Board) -> bool:
    return (
        piece.kind == PieceKind.PAWN
        and target.x != piece.square.x
        and board.piece_at(target) is None
    )
