"""Unit tests for neon_chess/services/chess_service.py"""

from typing import Generator
from uuid import UUID, uuid4

import pytest

from neon_chess.api.models import (
    CreateGameRequest,
    DeleteGameRequest,
    GameResponse,
    GetGameRequest,
    LegalMovesRequest,
    LegalMovesResponse,
    MoveRecordModel,
    MoveRequest,
    ReplayRequest,
)
from neon_chess.core.config import GameConfig
from neon_chess.core.exceptions import ChessError, GameError, IllegalMoveError, RepositoryError
from neon_chess.core.models import GameModel
from neon_chess.core.shared_types import GameStatus, PieceKind, Side, Strength
from neon_chess.services.chess_service import ChessService

PROMOTION_PLACEMENT = "k7/4P3/8/8/8/8/8/7K"
TWO_PLAYERS = GameConfig(ai_side=None)


# --- MOCK DEPENDENCIES ----
class MockRepository:
    """Mock the GameRepository using a dictionary of game models."""

    def __init__(self) -> None:
        self._games: dict[UUID, GameModel] = {}

    def create_game(self, game: GameModel) -> tuple[GameModel, UUID]:
        game_id = uuid4()
        self._games[game_id] = game
        return game, game_id

    def get_game(self, game_id: UUID) -> GameModel | None:
        return self._games.get(game_id)

    def update_game(self, game_id: UUID, game: GameModel) -> GameModel | None:
        if game_id not in self._games:
            return None
        self._games[game_id] = game
        return game

    def delete_game(self, game_id: UUID) -> GameModel | None:
        return self._games.pop(game_id, None)

    def clear(self) -> None:
        """Clear the repository (useful in between tests)"""
        self._games.clear()


@pytest.fixture
def mock_repository() -> Generator[MockRepository, None, None]:
    """Ensures to clear the repository between tests"""
    repo = MockRepository()
    try:
        yield repo
    finally:
        repo.clear()


@pytest.fixture
def service(mock_repository: MockRepository) -> ChessService:
    return ChessService(mock_repository)


def new_game(service: ChessService, config: GameConfig = TWO_PLAYERS, placement: str | None = None) -> GameResponse:
    return service.create_new_game(CreateGameRequest(config=config, placement=placement))


# --- SERVICE - CREATE NEW GAME ----
def test_create_a_new_game(service: ChessService, mock_repository: MockRepository) -> None:
    """Check that new game is created, persisted in repo, and return has the appropriate information."""
    response = new_game(service)

    assert isinstance(response, GameResponse)
    assert isinstance(response.game_id, UUID)
    assert len(response.pieces) == 32
    assert response.side_to_move == Side.WHITE
    assert response.status == GameStatus.ACTIVE
    assert response.move_history == []
    assert response.winner is None
    assert response.captured == {Side.WHITE: [], Side.BLACK: []}

    stored_game = mock_repository.get_game(response.game_id)
    assert stored_game is not None
    assert stored_game.moves == []
    assert stored_game.ai_side is None


def test_automated_side_opens_the_game(service: ChessService) -> None:
    config = GameConfig(ai_side=Side.WHITE, strength=Strength.EASY)
    response = new_game(service, config)
    assert len(response.move_history) == 1
    assert response.side_to_move == Side.BLACK


def test_create_with_impossible_position(service: ChessService) -> None:
    """Make sure service propagates the exceptions."""
    with pytest.raises(GameError):
        _ = new_game(service, placement="8/8/8/8/8/8/8/4K3")


# --- SERVICE - GET GAME ----
def test_get_existing_game_state(service: ChessService) -> None:
    created = new_game(service)
    response = service.get_game_state(GetGameRequest(game_id=created.game_id))
    assert response == created


def test_attempt_to_find_unknown_game(service: ChessService) -> None:
    with pytest.raises(RepositoryError):
        service.get_game_state(GetGameRequest(game_id=uuid4()))


# --- SERVICE - LEGAL MOVES ----
def test_legal_moves(service: ChessService) -> None:
    created = new_game(service)
    response = service.legal_moves(LegalMovesRequest(game_id=created.game_id, square="g1"))
    assert isinstance(response, LegalMovesResponse)
    assert sorted(response.destinations) == ["f3", "h3"]


def test_legal_moves_of_empty_square(service: ChessService) -> None:
    created = new_game(service)
    response = service.legal_moves(LegalMovesRequest(game_id=created.game_id, square="e4"))
    assert response.destinations == []


# --- SERVICE - MAKE MOVE ----
def test_make_move(service: ChessService, mock_repository: MockRepository) -> None:
    created = new_game(service)
    response = service.make_move(MoveRequest(game_id=created.game_id, from_square="e2", to_square="e4"))

    assert response.side_to_move == Side.BLACK
    assert response.en_passant == "e3"
    assert [(m.from_square, m.to_square) for m in response.move_history] == [("e2", "e4")]

    stored_game = mock_repository.get_game(created.game_id)
    assert stored_game is not None
    assert len(stored_game.moves) == 1
    assert stored_game.side_to_move == "black"


def test_make_move_gets_automated_reply(service: ChessService) -> None:
    created = new_game(service, GameConfig(ai_side=Side.BLACK, strength=Strength.HARD))
    response = service.make_move(MoveRequest(game_id=created.game_id, from_square="e2", to_square="e4"))
    assert len(response.move_history) == 2
    assert response.side_to_move == Side.WHITE


def test_illegal_move_is_not_stored(service: ChessService, mock_repository: MockRepository) -> None:
    created = new_game(service)
    with pytest.raises(IllegalMoveError):
        service.make_move(MoveRequest(game_id=created.game_id, from_square="e2", to_square="e5"))
    stored_game = mock_repository.get_game(created.game_id)
    assert stored_game is not None
    assert stored_game.moves == []


def test_game_ends_in_checkmate(service: ChessService) -> None:
    created = new_game(service)
    for from_square, to_square in [("f2", "f3"), ("e7", "e5"), ("g2", "g4"), ("d8", "h4")]:
        response = service.make_move(
            MoveRequest(game_id=created.game_id, from_square=from_square, to_square=to_square)
        )
    assert response.status == GameStatus.CHECKMATE
    assert response.winner == Side.BLACK

    with pytest.raises(ChessError):
        service.make_move(MoveRequest(game_id=created.game_id, from_square="a2", to_square="a3"))


def test_promotion_request(service: ChessService) -> None:
    created = new_game(service, placement=PROMOTION_PLACEMENT)
    response = service.make_move(
        MoveRequest(game_id=created.game_id, from_square="e7", to_square="e8", promote_to=PieceKind.ROOK)
    )
    promoted = [p for p in response.pieces if p.square == "e8"]
    assert promoted[0].kind == PieceKind.ROOK
    assert response.move_history[-1].promoted_to == PieceKind.ROOK
    assert response.status == GameStatus.CHECK


# --- SERVICE - REPLAY ----
def test_replay_remote_move(service: ChessService) -> None:
    """A move made on another copy of the same game arrives as a record and is replayed here."""
    source = new_game(service)
    source_after = service.make_move(MoveRequest(game_id=source.game_id, from_square="g1", to_square="f3"))

    mirror = new_game(service)
    response = service.replay_move(
        ReplayRequest(game_id=mirror.game_id, move=source_after.move_history[-1])
    )
    assert response.pieces == source_after.pieces
    assert response.move_history == source_after.move_history


def test_replay_illegal_remote_move(service: ChessService) -> None:
    created = new_game(service)
    with pytest.raises(IllegalMoveError):
        service.replay_move(
            ReplayRequest(game_id=created.game_id, move=MoveRecordModel(from_square="a1", to_square="a5"))
        )


# --- SERVICE - DELETE ----
def test_delete_game(service: ChessService, mock_repository: MockRepository) -> None:
    created = new_game(service)
    service.delete_game(DeleteGameRequest(game_id=created.game_id))
    assert mock_repository.get_game(created.game_id) is None
    with pytest.raises(RepositoryError):
        service.get_game_state(GetGameRequest(game_id=created.game_id))
