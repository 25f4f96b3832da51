"""Orchestration of communication from API router to business logic and persistence layers (and the reverse direction)."""

from uuid import UUID

from loguru import logger

from neon_chess.api.models import (
    CreateGameRequest,
    DeleteGameRequest,
    GameResponse,
    GetGameRequest,
    LegalMovesRequest,
    LegalMovesResponse,
    MoveRecordModel,
    MoveRequest,
    PieceView,
    ReplayRequest,
)
from neon_chess.chess.game import Game
from neon_chess.chess.square import Square
from neon_chess.core.exceptions import RepositoryError
from neon_chess.core.models import GameModel, MoveRecord
from neon_chess.core.shared_types import GameStatus, Side, opposite
from neon_chess.db.repository import GameRepository


class ChessService:
    """Orchestration of layers for chess game."""

    def __init__(self, repository: GameRepository) -> None:
        self.repo = repository

    # -- API routes logic ---
    def create_new_game(self, request: CreateGameRequest) -> GameResponse:
        """A player requested a new game. If the automated side moves first, it does so right away."""

        new_game = Game.new_game(config=request.config, placement=request.placement)
        new_game.play_ai_move()
        created_game_data = new_game.to_model()

        stored_game, game_id = self.repo.create_game(created_game_data)
        return self._create_game_response(game_id, stored_game)

    def get_game_state(self, request: GetGameRequest) -> GameResponse:
        """Current snapshot of the game. A remote peer or a UI polls this to see whether the opponent has moved."""
        game_model = self._fetch_game(request.game_id)
        return self._create_game_response(request.game_id, game_model)

    def legal_moves(self, request: LegalMovesRequest) -> LegalMovesResponse:
        """Retrieve the legal destinations of the piece on the requested square (for highlighting)."""
        game = Game.from_model(self._fetch_game(request.game_id))
        destinations = game.legal_destinations(Square.from_algebraic(request.square))
        return LegalMovesResponse(
            game_id=request.game_id,
            square=request.square,
            destinations=[square.to_algebraic() for square in destinations],
        )

    def make_move(self, request: MoveRequest) -> GameResponse:
        """
        Make a move attempt.
        ----
        When the game has an automated opponent and the move hands it the turn, its reply is played immediately.
        """
        game = Game.from_model(self._fetch_game(request.game_id))

        game.make_move(
            Square.from_algebraic(request.from_square),
            Square.from_algebraic(request.to_square),
            request.promote_to,
        )
        reply = game.play_ai_move()
        if reply is not None:
            logger.debug(f"Game {request.game_id}: automated reply {reply.to_record()}")

        return self._store(request.game_id, game)

    def replay_move(self, request: ReplayRequest) -> GameResponse:
        """Apply a move made by a remote peer."""
        game = Game.from_model(self._fetch_game(request.game_id))
        game.replay(MoveRecord.from_dict(request.move.model_dump(mode="json")))
        return self._store(request.game_id, game)

    def delete_game(self, request: DeleteGameRequest) -> None:
        """Handle a request to delete a Game record."""
        self.repo.delete_game(request.game_id)

    # -- Internal helpers --
    def _store(self, game_id: UUID, game: Game) -> GameResponse:
        model = game.to_model()
        self.repo.update_game(game_id, model)
        return self._create_game_response(game_id, model)

    def _create_game_response(self, game_id: UUID, model: GameModel) -> GameResponse:
        """Convert info in GameModel to a GameResponse (for game with given ID.)"""
        side_to_move = Side(model.side_to_move)
        status = GameStatus(model.status)
        return GameResponse(
            game_id=game_id,
            pieces=[
                PieceView(
                    kind=piece.kind,
                    side=piece.side,
                    square=piece.square,
                    has_moved=piece.has_moved,
                )
                for piece in model.pieces
            ],
            side_to_move=side_to_move,
            status=status,
            en_passant=model.en_passant,
            captured={
                Side(side): [record.kind for record in records]
                for side, records in model.captured.items()
            },
            move_history=[MoveRecordModel(**record.to_dict()) for record in model.moves],
            winner=opposite(side_to_move) if status == GameStatus.CHECKMATE else None,
        )

    def _fetch_game(self, game_id: UUID) -> GameModel:
        """Attempt to find the game in the repository and raise error if it fails."""
        game_model = self.repo.get_game(game_id)
        if game_model is None:
            raise RepositoryError(f"No stored game with id {game_id}")
        return game_model
