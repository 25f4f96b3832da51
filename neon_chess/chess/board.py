"""The Game board implements all rules that effect the `position` (in chess: the configuration of pieces on the board)"""

from copy import deepcopy
from dataclasses import dataclass, field
from typing import Iterator, Optional, Self

from loguru import logger

from neon_chess.chess.castling import castling_rule
from neon_chess.chess.fen import STARTING_PLACEMENT, is_valid_placement
from neon_chess.chess.moves import (
    MOVEMENT_RULES,
    CandidateMovesFn,
    Move,
    MoveResult,
    en_passant_victim_square,
    is_en_passant_capture,
    is_square_attacked,
    pawn_direction,
    promotion_row,
)
from neon_chess.chess.pieces import PROMOTION_OPTIONS, Piece
from neon_chess.chess.square import BOARD_DIMENSIONS, Square
from neon_chess.core.exceptions import GameStateError, IllegalMoveError, InvalidFENError
from neon_chess.core.models import PieceRecord
from neon_chess.core.shared_types import CastlingSide, PieceKind, Side, opposite

Grid = list[list[Optional[Piece]]]

# Rows the pieces start on. Used to guess `has_moved` for boards set up from a placement string
PAWN_START_ROW: dict[Side, int] = {Side.WHITE: 6, Side.BLACK: 1}
KING_HOME: dict[Side, Square] = {Side.WHITE: Square(4, 7), Side.BLACK: Square(4, 0)}
ROOK_HOMES: dict[Side, tuple[Square, Square]] = {
    Side.WHITE: (Square(0, 7), Square(7, 7)),
    Side.BLACK: (Square(0, 0), Square(7, 0)),
}


def empty_grid() -> Grid:
    num_files, num_ranks = BOARD_DIMENSIONS
    return [[None] * num_files for _ in range(num_ranks)]


def empty_captures() -> dict[Side, list[Piece]]:
    return {Side.WHITE: [], Side.BLACK: []}


@dataclass(frozen=True)
class BoardSnapshot:
    """
    Arena style save point: the fixed-size grid (piece references plus their mutable state), the length of both
    capture lists, and the en passant target. Restoring truncates the capture lists back to these lengths.
    """

    slots: tuple[tuple[Optional[Piece], Optional[Square], bool], ...]
    captured_lengths: tuple[tuple[Side, int], ...]
    en_passant: Optional[Square]


@dataclass
class Board:
    """
    8x8 grid of optional pieces (indexed grid[y][x]), a capture list per side (the side that LOST the piece)
    and the en passant target square (only set for the single ply right after a pawn's double step).
    """

    grid: Grid = field(default_factory=empty_grid)
    captured: dict[Side, list[Piece]] = field(default_factory=empty_captures)
    en_passant: Optional[Square] = None

    # --- CREATION ---
    @classmethod
    def empty(cls) -> Self:
        return cls()

    @classmethod
    def standard(cls) -> Self:
        return cls.from_fen(STARTING_PLACEMENT)

    @classmethod
    def from_fen(cls, placement: str) -> Self:
        """Construct a board using the board position part of a FEN string.

        A placement string knows nothing about history, so `has_moved` gets inferred:
        pawns off their starting row, and kings/rooks off their home squares, count as moved.
        """
        if not is_valid_placement(placement):
            raise InvalidFENError(f"Cannot interpret supplied string as piece placement: {placement!r}")

        board = cls()
        for y, fen_one_rank in enumerate(placement.split("/")):
            x = 0
            for character in fen_one_rank:
                if character.isalpha():
                    piece = Piece.from_fen(character, Square(x, y))
                    piece.has_moved = not _is_on_start_square(piece)
                    board.place_piece(piece)
                    x += 1
                else:
                    # A number denotes the amount of empty squares after each other
                    x += int(character)
        return board

    def to_fen(self) -> str:
        """Ranks are separated by slashes in FEN string. Row 0 (rank 8) comes first."""
        return "/".join(self._row_to_fen(row) for row in self.grid)

    def _row_to_fen(self, row: list[Optional[Piece]]) -> str:
        fen_characters: list[str] = []
        empty_count = 0
        for piece in row:
            if piece is None:
                empty_count += 1
                continue
            if empty_count > 0:
                fen_characters.append(str(empty_count))
                empty_count = 0
            fen_characters.append(piece.to_fen())

        # if the entire rank is empty, then we still place this number in the string
        if empty_count > 0:
            fen_characters.append(str(empty_count))
        return "".join(fen_characters)

    @classmethod
    def from_records(
        cls,
        pieces: list[PieceRecord],
        captured: Optional[dict[str, list[PieceRecord]]] = None,
        en_passant: Optional[str] = None,
    ) -> Self:
        """Rebuild a board from its serialisable snapshot. Refuses anything that breaks the board invariants."""
        board = cls()
        for record in pieces:
            piece = _piece_from_record(record)
            if not piece.square.is_within_bounds():
                raise GameStateError(f"Piece placed off the board: {record}")
            if board.piece_at(piece.square) is not None:
                raise GameStateError(f"Two pieces placed on {record.square}")
            board.place_piece(piece)

        for side in Side:
            kings = [p for p in board.pieces_of(side) if p.kind == PieceKind.KING]
            if len(kings) != 1:
                raise GameStateError(f"Expected exactly one {side} king, found {len(kings)}")

        for side_name, records in (captured or {}).items():
            board.captured[Side(side_name)] = [_piece_from_record(r) for r in records]

        board.en_passant = Square.from_algebraic(en_passant) if en_passant else None
        return board

    def to_records(self) -> tuple[list[PieceRecord], dict[str, list[PieceRecord]], Optional[str]]:
        """Serialisable snapshot: (pieces, captured per side, en passant target)"""
        pieces = [_piece_to_record(piece) for piece in self._iter_pieces()]
        captured = {
            side.value: [_piece_to_record(piece) for piece in lost]
            for side, lost in self.captured.items()
        }
        en_passant = self.en_passant.to_algebraic() if self.en_passant else None
        return pieces, captured, en_passant

    # --- QUERIES ---
    def is_valid_square(self, square: Square) -> bool:
        return square.is_within_bounds()

    def piece_at(self, square: Square) -> Optional[Piece]:
        if not square.is_within_bounds():
            return None
        return self.grid[square.y][square.x]

    def is_empty(self, square: Square) -> bool:
        """NOTE: a square off the board is not empty (nothing can go there)"""
        return square.is_within_bounds() and self.grid[square.y][square.x] is None

    def contains(self, piece: Piece) -> bool:
        """Is this very piece (not just an equal one) still standing on the board?"""
        return self.piece_at(piece.square) is piece

    def pieces_of(self, side: Side) -> list[Piece]:
        return [piece for piece in self._iter_pieces() if piece.side == side]

    def king_of(self, side: Side) -> Piece:
        for piece in self._iter_pieces():
            if piece.side == side and piece.kind == PieceKind.KING:
                return piece
        raise GameStateError(f"No {side} king on the board")

    def _iter_pieces(self) -> Iterator[Piece]:
        for row in self.grid:
            for piece in row:
                if piece is not None:
                    yield piece

    # --- SETUP ---
    def place_piece(self, piece: Piece) -> None:
        """Put a piece on its square (whatever stood there is simply overwritten)"""
        self._set(piece.square, piece)

    def remove_piece(self, square: Square) -> Optional[Piece]:
        piece = self.piece_at(square)
        if piece is not None:
            self._set(square, None)
        return piece

    def _set(self, square: Square, piece: Optional[Piece]) -> None:
        self.grid[square.y][square.x] = piece

    # --- ATTACKS / CHECK ---
    def is_attacked(self, square: Square, by_side: Side) -> bool:
        return is_square_attacked(square, by_side, self)

    def in_check(self, side: Side) -> bool:
        return self.is_attacked(self.king_of(side).square, opposite(side))

    def would_expose_check(self, piece: Piece, target: Square) -> bool:
        """
        What-if: would the king of `piece.side` be attacked after moving `piece` to `target`?
        ---

        1. Make the move in place (an en passant victim is lifted off the board as well)
        2. Look whether the own king is attacked
        3. Put everything back exactly as it was (in `finally`, so also when the check itself fails)

        A piece that is not on the board, or a target off the board, counts as exposing (it is never allowed).
        """
        if not self.contains(piece) or not target.is_within_bounds():
            return True

        origin = piece.square
        displaced = self.piece_at(target)
        victim_square: Optional[Square] = None
        victim: Optional[Piece] = None
        if target == self.en_passant and is_en_passant_capture(piece, target, self):
            victim_square = en_passant_victim_square(piece, target)
            victim = self.piece_at(victim_square)

        self._set(origin, None)
        self._set(target, piece)
        piece.square = target
        if victim_square is not None:
            self._set(victim_square, None)
        try:
            king = piece if piece.kind == PieceKind.KING else self.king_of(piece.side)
            return self.is_attacked(king.square, opposite(piece.side))
        finally:
            piece.square = origin
            self._set(target, displaced)
            self._set(origin, piece)
            if victim_square is not None:
                self._set(victim_square, victim)

    # --- MOVE GENERATION ---
    def pseudo_legal_moves(self, piece: Piece) -> list[Move]:
        """Movement rules for the piece, ignoring the safety of the own king. Stale pieces have no moves."""
        if not self.contains(piece):
            return []
        movement_rule: CandidateMovesFn = MOVEMENT_RULES[piece.kind]
        return movement_rule(piece, self)

    def legal_moves(self, piece: Piece) -> list[Move]:
        return [
            move
            for move in self.pseudo_legal_moves(piece)
            if not self.would_expose_check(piece, move.to_square)
        ]

    def legal_destinations(self, piece: Piece) -> list[Square]:
        return [move.to_square for move in self.legal_moves(piece)]

    def all_legal_moves(self, side: Side) -> list[Move]:
        moves: list[Move] = []
        for piece in self.pieces_of(side):
            moves.extend(self.legal_moves(piece))
        return moves

    def has_legal_move(self, side: Side) -> bool:
        """Stops at the first legal move found"""
        return any(self.legal_moves(piece) for piece in self.pieces_of(side))

    def castling_moves(self, king: Piece) -> list[Move]:
        """
        Castling candidates, only asked for by the king's own move generation.
        ---

        **you are allowed to castle if**

        * The king has not moved and is not in check (you cannot castle out of check).
        * The rook is still on its home square and has not moved.
        * Every square in between the two pieces is empty.
        * None of the squares the king passes through or lands on is under attack.
        """
        if king.kind != PieceKind.KING or king.has_moved:
            return []

        opponent = opposite(king.side)
        if self.is_attacked(king.square, opponent):
            return []

        moves: list[Move] = []
        for castling_side in CastlingSide:
            rule = castling_rule(king.side, castling_side)
            if king.square != rule.king_from:
                continue

            rook = self.piece_at(rule.rook_from)
            if rook is None or rook.kind != PieceKind.ROOK or rook.side != king.side or rook.has_moved:
                continue

            if not all(self.is_empty(square) for square in rule.must_be_empty):
                continue

            if any(self.is_attacked(square, opponent) for square in rule.must_be_safe):
                continue

            moves.append(Move(king, king.square, rule.king_to, castling_side=castling_side))
        return moves

    # --- MUTATIONS ---
    def apply_move(self, piece: Piece, target: Square) -> MoveResult:
        """
        Update the position on the board.
        ---

        The move must be legal: anything else is a programming error upstream and raises IllegalMoveError
        instead of leaving a corrupted position behind.

        * Castling: the king and the corresponding rook both relocate.
        * En passant: the captured pawn is NOT on the target square; it gets removed explicitly.
        * Capture: whatever stands on the target goes to the capture list of its side.
        * The en passant target is set right after a pawn's double step, and cleared after any other move.
        * A pawn reaching the far row flags promotion. Replacing it is a separate step (`promote()`).
        """
        move = self._find_legal_move(piece, target)
        origin = piece.square
        result = MoveResult(
            piece=piece,
            from_square=origin,
            to_square=target,
            previous_en_passant=self.en_passant,
            was_first_move=not piece.has_moved,
        )

        if move.castling_side is not None:
            self._castle(result, move.castling_side)
            self.en_passant = None
            logger.debug(f"{piece.side} castles {move.castling_side}")
            return result

        if is_en_passant_capture(piece, target, self):
            victim_square = en_passant_victim_square(piece, target)
            self._capture(result, victim_square)
            result.is_en_passant = True
        elif self.piece_at(target) is not None:
            self._capture(result, target)

        self.en_passant = None
        if piece.kind == PieceKind.PAWN and abs(target.y - origin.y) == 2:
            self.en_passant = origin.offset(0, pawn_direction(piece.side))

        self._relocate(piece, target)

        if piece.kind == PieceKind.PAWN and target.y == promotion_row(piece.side):
            result.is_promotion = True

        logger.debug(
            f"{piece.side} {piece.kind} {origin.to_algebraic()}->{target.to_algebraic()}"
        )
        return result

    def promote(self, pawn: Piece, kind: PieceKind | str) -> Piece:
        """Replace the pawn by a new piece. Anything that is not a valid promotion choice becomes a queen."""
        if not self.contains(pawn) or pawn.kind != PieceKind.PAWN:
            raise IllegalMoveError(f"Only a pawn on the board can be promoted, got {pawn}")

        if kind not in PROMOTION_OPTIONS:
            logger.warning(f"Cannot promote to {kind!r}, promoting to queen instead")
            kind = PieceKind.QUEEN

        new_piece = Piece(PieceKind(kind), pawn.side, pawn.square, has_moved=True)
        self._set(pawn.square, new_piece)
        return new_piece

    def undo(self, result: MoveResult) -> None:
        """
        The logical inverse of `apply_move` (promotion included). Results must be undone last-in-first-out.
        """
        piece = result.piece
        self._set(result.to_square, None)
        if result.is_castling:
            assert result.rook is not None and result.rook_from is not None and result.rook_to is not None
            self._set(result.rook_to, None)
            self._set(result.rook_from, result.rook)
            result.rook.square = result.rook_from
            result.rook.has_moved = False

        self._set(result.from_square, piece)
        piece.square = result.from_square
        piece.has_moved = not result.was_first_move

        if result.captured is not None:
            assert result.captured_square is not None
            self._set(result.captured_square, result.captured)
            self.captured[result.captured.side].pop()

        self.en_passant = result.previous_en_passant

    # --- SNAPSHOTS ---
    def snapshot(self) -> BoardSnapshot:
        slots = tuple(
            (piece, piece.square, piece.has_moved) if piece else (None, None, False)
            for row in self.grid
            for piece in row
        )
        lengths = tuple((side, len(lost)) for side, lost in self.captured.items())
        return BoardSnapshot(slots, lengths, self.en_passant)

    def restore(self, snapshot: BoardSnapshot) -> None:
        num_files, _ = BOARD_DIMENSIONS
        for idx, (piece, square, has_moved) in enumerate(snapshot.slots):
            self.grid[idx // num_files][idx % num_files] = piece
            if piece is not None and square is not None:
                piece.square = square
                piece.has_moved = has_moved
        for side, length in snapshot.captured_lengths:
            del self.captured[side][length:]
        self.en_passant = snapshot.en_passant

    def copy(self) -> Self:
        """Independent clone: nothing done to the copy can reach this board"""
        return deepcopy(self)

    # --- PRIVATE HELPERS ---
    def _find_legal_move(self, piece: Piece, target: Square) -> Move:
        if not self.contains(piece):
            raise IllegalMoveError(f"{piece} is not on the board")
        for move in self.legal_moves(piece):
            if move.to_square == target:
                return move
        raise IllegalMoveError(
            f"{piece.side} {piece.kind} cannot move {piece.square.to_algebraic()}->{target.to_algebraic()}"
        )

    def _relocate(self, piece: Piece, target: Square) -> None:
        self._set(piece.square, None)
        self._set(target, piece)
        piece.move_to(target)

    def _capture(self, result: MoveResult, square: Square) -> None:
        victim = self.remove_piece(square)
        assert victim is not None
        self.captured[victim.side].append(victim)
        result.captured = victim
        result.captured_square = square

    def _castle(self, result: MoveResult, castling_side: CastlingSide) -> None:
        king = result.piece
        rule = castling_rule(king.side, castling_side)
        rook = self.piece_at(rule.rook_from)
        assert rook is not None
        self._relocate(king, rule.king_to)
        self._relocate(rook, rule.rook_to)
        result.is_castling = True
        result.castling_side = castling_side
        result.rook = rook
        result.rook_from = rule.rook_from
        result.rook_to = rule.rook_to


# --- RECORD CONVERSION ---
def _is_on_start_square(piece: Piece) -> bool:
    if piece.kind == PieceKind.PAWN:
        return piece.square.y == PAWN_START_ROW[piece.side]
    if piece.kind == PieceKind.KING:
        return piece.square == KING_HOME[piece.side]
    if piece.kind == PieceKind.ROOK:
        return piece.square in ROOK_HOMES[piece.side]
    return True


def _piece_from_record(record: PieceRecord) -> Piece:
    return Piece(
        PieceKind(record.kind),
        Side(record.side),
        Square.from_algebraic(record.square),
        has_moved=record.has_moved,
    )


def _piece_to_record(piece: Piece) -> PieceRecord:
    return PieceRecord(
        kind=piece.kind.value,
        side=piece.side.value,
        square=piece.square.to_algebraic(),
        has_moved=piece.has_moved,
    )
