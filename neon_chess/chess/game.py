"""
The Game class will be the entrypoint into the domain layer for the service layer.
It is responsible for orchestrating all the business logic required to play a turn of the board game -->
passes this information to the service layer, which can then pass it onwards to the API layer.

The Game owns the live Board. Nothing else mutates it: the automated opponent only ever gets a copy.
"""

import random
from dataclasses import dataclass, field
from typing import Optional, Self

from loguru import logger

from neon_chess.chess.board import Board
from neon_chess.chess.fen import STARTING_PLACEMENT, has_one_king_per_side
from neon_chess.chess.moves import Move, MoveResult
from neon_chess.chess.pieces import Piece
from neon_chess.chess.search import choose_move
from neon_chess.chess.square import Square
from neon_chess.core.config import GameConfig
from neon_chess.core.exceptions import GameStateError, IllegalMoveError, NotYourTurnError
from neon_chess.core.models import GameModel, MoveRecord
from neon_chess.core.shared_types import (
    TERMINAL_STATUSES,
    GameStatus,
    PieceKind,
    Side,
    Strength,
    opposite,
)


@dataclass
class Game:
    # --- DOMAIN LAYER API CALLED BY SERVICE---

    board: Board
    side_to_move: Side
    history: list[MoveResult]
    status: GameStatus
    config: GameConfig
    starting_placement: str = STARTING_PLACEMENT
    selected: Optional[Piece] = None
    rng: random.Random = field(default_factory=random.Random, repr=False, compare=False)

    @classmethod
    def new_game(
        cls, config: Optional[GameConfig] = None, placement: Optional[str] = None
    ) -> Self:
        """Start a new game from the standard position (or the given piece placement)."""
        config = config or GameConfig()
        game = cls._set_up(config, placement or STARTING_PLACEMENT)
        logger.info(
            f"New game: {config.starting_side} to move, automated side: {config.ai_side}, strength: {config.strength.name}"
        )
        return game

    @classmethod
    def _set_up(cls, config: GameConfig, placement: str) -> Self:
        board = Board.from_fen(placement)
        if not has_one_king_per_side(placement):
            raise GameStateError(f"Cannot create new game. Need exactly one king per side: {placement}")

        game = cls(
            board=board,
            side_to_move=config.starting_side,
            history=[],
            status=GameStatus.ACTIVE,
            config=config,
            starting_placement=placement,
        )
        # a custom position might start in check (or even be over already)
        game._update_game_status()
        return game

    @classmethod
    def from_model(cls, model: GameModel) -> Self:
        """
        Define how to construct a Game from the information the Service layer actually has
        ----

        The snapshot (pieces, captures, en passant target) is what the game resumes from. If the model also lists
        the moves played, they get replayed from the starting placement, so the history is live again,
        and the outcome must agree with the snapshot.
        """
        config = GameConfig(
            starting_side=Side(model.starting_side),
            strength=Strength(model.strength),
            ai_side=Side(model.ai_side) if model.ai_side else None,
        )
        snapshot_board = Board.from_records(model.pieces, model.captured, model.en_passant)

        if not model.moves:
            game = cls(
                board=snapshot_board,
                side_to_move=Side(model.side_to_move),
                history=[],
                status=GameStatus.ACTIVE,
                config=config,
                starting_placement=model.starting_placement or STARTING_PLACEMENT,
            )
            game._update_game_status()
            return game

        game = cls._set_up(config, model.starting_placement or STARTING_PLACEMENT)
        for record in model.moves:
            game.replay(record)

        if game.board != snapshot_board or game.side_to_move != Side(model.side_to_move):
            raise GameStateError("Stored position does not match the stored list of moves")
        return game

    def to_model(self) -> GameModel:
        """Encode back into a format the Service layer uses"""
        pieces, captured, en_passant = self.board.to_records()
        return GameModel(
            pieces=pieces,
            side_to_move=self.side_to_move.value,
            status=self.status.value,
            en_passant=en_passant,
            captured=captured,
            moves=[result.to_record() for result in self.history],
            strength=int(self.config.strength),
            ai_side=self.config.ai_side.value if self.config.ai_side else None,
            starting_placement=self.starting_placement,
            starting_side=self.config.starting_side.value,
        )

    def reset(self) -> None:
        """Back to the starting position, same configuration"""
        fresh = self.new_game(self.config, self.starting_placement)
        self.board = fresh.board
        self.side_to_move = fresh.side_to_move
        self.history = []
        self.status = fresh.status
        self.selected = None

    # --- QUERIES FOR THE PRESENTATION LAYER ---
    @property
    def is_over(self) -> bool:
        return self.status in TERMINAL_STATUSES

    @property
    def is_ai_turn(self) -> bool:
        return self.config.ai_side == self.side_to_move and not self.is_over

    @property
    def winner(self) -> Optional[Side]:
        """
        Given we know it is checkmate, the side that is to move just got mated and the opponent must be the winner
        """
        if self.status != GameStatus.CHECKMATE:
            return None
        return opposite(self.side_to_move)

    @property
    def captured_pieces(self) -> dict[Side, list[Piece]]:
        return self.board.captured

    def legal_destinations(self, square: Square) -> list[Square]:
        """Squares to highlight for the piece on the given square. Empty / off-board squares have none."""
        piece = self.board.piece_at(square)
        if piece is None:
            return []
        return self.board.legal_destinations(piece)

    def legal_moves(self, side: Optional[Side] = None) -> list[Move]:
        return self.board.all_legal_moves(side or self.side_to_move)

    # --- PLAYING ---
    def select(self, square: Square) -> Optional[MoveResult]:
        """
        Click handling
        ----

        * nothing selected: select a piece of the side to move
        * the selected piece again: deselect
        * another piece of the side to move: switch the selection
        * a legal destination of the selected piece: make the move
        * anything else is ignored (so is everything once the game is over)
        """
        if self.is_over:
            return None

        clicked = self.board.piece_at(square)
        if self.selected is None:
            if clicked is not None and clicked.side == self.side_to_move:
                self.selected = clicked
            return None

        if clicked is self.selected:
            self.selected = None
            return None

        if clicked is not None and clicked.side == self.side_to_move:
            self.selected = clicked
            return None

        if square in self.board.legal_destinations(self.selected):
            return self._play(self.selected, square)
        return None

    def make_move(
        self,
        from_square: Square,
        to_square: Square,
        promote_to: Optional[PieceKind] = None,
    ) -> MoveResult:
        """
        Attempt to make a move
        -----

        1. game must still be in progress
        2. there must be a piece of the side to move on from_square
        3. the board refuses anything that is not a legal move
        4. pawn reaching the far row gets promoted (queen unless told otherwise)
        5. switch sides, update the history and the game status
        """
        if self.is_over:
            raise GameStateError(f"Game is over. status: {self.status}")

        piece = self.board.piece_at(from_square)
        if piece is None:
            raise IllegalMoveError(f"No piece on {from_square.to_algebraic()}")

        if piece.side != self.side_to_move:
            raise NotYourTurnError(f"It is not your turn. Waiting for {self.side_to_move} to make a move first.")

        return self._play(piece, to_square, promote_to)

    def play_ai_move(self) -> Optional[MoveResult]:
        """Let the automated opponent move, if it is its turn. Returns None otherwise (or without legal moves)."""
        if not self.is_ai_turn:
            return None

        move = choose_move(self.board.copy(), self.side_to_move, self.config.strength, self.rng)
        if move is None:
            return None

        # the chosen move refers to the copy: find the live piece by its square
        piece = self.board.piece_at(move.from_square)
        if piece is None:
            raise GameStateError(f"Automated move from empty square {move.from_square.to_algebraic()}")

        logger.info(
            f"{self.side_to_move} (automated) plays {move.from_square.to_algebraic()}->{move.to_square.to_algebraic()}"
        )
        return self._play(piece, move.to_square)

    def replay(self, record: MoveRecord) -> MoveResult:
        """Apply a move received from a remote peer (or from storage). Same checks as any other move."""
        promote_to = PieceKind(record.promoted_to) if record.promoted_to else None
        return self.make_move(
            Square.from_algebraic(record.from_square),
            Square.from_algebraic(record.to_square),
            promote_to,
        )

    # -- PRIVATE HELPERS ---
    def _play(
        self, piece: Piece, target: Square, promote_to: Optional[PieceKind] = None
    ) -> MoveResult:
        result = self.board.apply_move(piece, target)
        if result.is_promotion:
            promoted = self.board.promote(piece, promote_to or PieceKind.QUEEN)
            result.promoted_to = promoted.kind

        self.selected = None
        self.history.append(result)
        self.side_to_move = opposite(self.side_to_move)
        self._update_game_status()
        return result

    def _update_game_status(self) -> None:
        """
        Evaluated for the side that is about to move.

        in check + no legal move --> checkmate
        no check + no legal move --> stalemate
        in check + legal moves   --> check
        otherwise                --> active
        """
        side = self.side_to_move
        in_check = self.board.in_check(side)
        has_legal_move = self.board.has_legal_move(side)

        if in_check and not has_legal_move:
            new_status = GameStatus.CHECKMATE
        elif not has_legal_move:
            new_status = GameStatus.STALEMATE
        elif in_check:
            new_status = GameStatus.CHECK
        else:
            new_status = GameStatus.ACTIVE

        if new_status in TERMINAL_STATUSES and new_status != self.status:
            logger.info(f"Game over: {new_status} ({side} to move)")
        self.status = new_status
