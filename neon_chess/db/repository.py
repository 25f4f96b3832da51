"""
Storage contract for game snapshots.

The service only knows this Protocol; SQLGameRepository is one implementation, the tests use an in-memory dict.
"""

from typing import Protocol
from uuid import UUID

from neon_chess.core.models import GameModel


class GameRepository(Protocol):
    """Keeps one GameModel snapshot per game ID. Missing IDs give None, never an exception."""

    def get_game(self, game_id: UUID) -> GameModel | None:
        """The latest snapshot stored under `game_id`."""
        ...

    def create_game(self, game: GameModel) -> tuple[GameModel, UUID]:
        """Store a snapshot under a fresh ID: (snapshot as stored, new ID)."""
        ...

    def update_game(self, game_id: UUID, game: GameModel) -> GameModel | None:
        """Overwrite the snapshot of an existing game."""
        ...

    def delete_game(self, game_id: UUID) -> GameModel | None:
        """Drop the game, returning its last snapshot."""
        ...
