"""GameRepository backed by SQLAlchemy: one `games` row per game, the snapshot spread over plain and JSON columns."""

from dataclasses import asdict
from typing import Any
from uuid import UUID, uuid4

from sqlalchemy import select
from sqlalchemy.orm import Session

from neon_chess.core.models import GameModel, MoveRecord, PieceRecord
from neon_chess.db.schema import DBGame


class SQLGameRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def get_game(self, game_id: UUID) -> GameModel | None:
        row = self._find(game_id)
        return None if row is None else row_to_model(row)

    def create_game(self, game: GameModel) -> tuple[GameModel, UUID]:
        row = DBGame(id=uuid4(), **model_to_columns(game))
        self.session.add(row)
        return self._commit(row), row.id

    def update_game(self, game_id: UUID, game: GameModel) -> GameModel | None:
        row = self._find(game_id)
        if row is None:
            return None
        # JSON columns get brand-new lists/dicts assigned, so the change is always flushed
        for column, value in model_to_columns(game).items():
            setattr(row, column, value)
        return self._commit(row)

    def delete_game(self, game_id: UUID) -> GameModel | None:
        row = self._find(game_id)
        if row is None:
            return None
        last_snapshot = row_to_model(row)
        self.session.delete(row)
        self.session.commit()
        return last_snapshot

    def _find(self, game_id: UUID) -> DBGame | None:
        return self.session.scalar(select(DBGame).where(DBGame.id == game_id))

    def _commit(self, row: DBGame) -> GameModel:
        self.session.commit()
        self.session.refresh(row)
        return row_to_model(row)


# --- CONVERSION ---
def model_to_columns(game: GameModel) -> dict[str, Any]:
    return {
        "pieces": [asdict(piece) for piece in game.pieces],
        "captured": {side: [asdict(p) for p in lost] for side, lost in game.captured.items()},
        "moves": [move.to_dict() for move in game.moves],
        "side_to_move": game.side_to_move,
        "status": game.status,
        "en_passant": game.en_passant,
        "strength": game.strength,
        "ai_side": game.ai_side,
        "starting_placement": game.starting_placement,
        "starting_side": game.starting_side,
    }


def row_to_model(row: DBGame) -> GameModel:
    return GameModel(
        pieces=[PieceRecord(**piece) for piece in row.pieces],
        side_to_move=row.side_to_move,
        status=row.status,
        en_passant=row.en_passant,
        captured={side: [PieceRecord(**p) for p in lost] for side, lost in row.captured.items()},
        moves=[MoveRecord.from_dict(move) for move in row.moves],
        strength=row.strength,
        ai_side=row.ai_side,
        starting_placement=row.starting_placement,
        starting_side=row.starting_side,
    )
