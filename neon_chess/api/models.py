"""Requests and Response models"""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from neon_chess.chess.fen import is_valid_placement
from neon_chess.core.config import GameConfig
from neon_chess.core.exceptions import InvalidRequestError
from neon_chess.core.shared_types import GameStatus, PieceKind, Side


def _is_algebraic_notation(value: str) -> bool:
    if len(value) != 2:
        return False
    file_char, rank_char = value[0], value[1]
    return file_char in "abcdefgh" and rank_char in "12345678"


def _validate_square(value: str) -> str:
    if not _is_algebraic_notation(value):
        raise InvalidRequestError(f"Cannot interpret {value!r} as a valid square name.")
    return value


# --- REQUEST MODELS ---
class CreateGameRequest(BaseModel):
    config: GameConfig = Field(default_factory=GameConfig)
    placement: Optional[str] = None

    @field_validator("placement")
    @classmethod
    def validate_placement(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value

        if not is_valid_placement(value.strip()):
            raise InvalidRequestError(f"Cannot interpret {value!r} as a piece placement.")
        return value.strip()


class GetGameRequest(BaseModel):
    game_id: UUID


class DeleteGameRequest(BaseModel):
    game_id: UUID


class LegalMovesRequest(BaseModel):
    game_id: UUID
    square: str

    @field_validator("square")
    @classmethod
    def validate_square(cls, value: str) -> str:
        return _validate_square(value)


class MoveRequest(BaseModel):
    game_id: UUID
    from_square: str
    to_square: str
    promote_to: Optional[PieceKind] = None

    @field_validator("from_square", "to_square")
    @classmethod
    def validate_square(cls, value: str) -> str:
        return _validate_square(value)


class MoveRecordModel(BaseModel):
    """Wire format of a single applied move, as exchanged between peers."""

    from_square: str
    to_square: str
    is_castling: bool = False
    is_en_passant: bool = False
    is_promotion: bool = False
    castling_side: Optional[str] = None
    captured: Optional[PieceKind] = None
    promoted_to: Optional[PieceKind] = None

    @field_validator("from_square", "to_square")
    @classmethod
    def validate_square(cls, value: str) -> str:
        return _validate_square(value)


class ReplayRequest(BaseModel):
    game_id: UUID
    move: MoveRecordModel


# --- RESPONSE MODELS ---
class PieceView(BaseModel):
    kind: PieceKind
    side: Side
    square: str
    has_moved: bool


class GameResponse(BaseModel):
    game_id: UUID
    pieces: list[PieceView]
    side_to_move: Side
    status: GameStatus
    en_passant: Optional[str]
    captured: dict[Side, list[PieceKind]]
    move_history: list[MoveRecordModel]
    winner: Optional[Side] = None


class LegalMovesResponse(BaseModel):
    game_id: UUID
    square: str
    destinations: list[str]
