"""
Boundary layer data model(s).

These objects can be used to communicate with the Service.
Hence, both the API layer (higher) and domain/db layers (lower) will use model(s) defined here to send to/receive from the Service
(Decouples the data model specific to the DB layer, API layer, or domain layer from the information needed to send across boundaries)

Everything in here is built from strings, ints and bools only: squares are written in algebraic notation ("e2"),
sides and piece kinds by their enum values ("white", "queen").
"""

from dataclasses import asdict, dataclass, field
from typing import Any, Optional, Self

# Type aliases to make GameModel easier to read
SideName = str
KindName = str


@dataclass
class PieceRecord:
    """One piece on the board"""

    kind: KindName
    side: SideName
    square: str
    has_moved: bool = False


@dataclass
class MoveRecord:
    """
    Opaque record of an applied move.

    A remote peer replays it (from_square -> to_square, promoted_to if set) on the same starting position
    to reach the identical resulting state. The flags describe the result; they are informative for the receiver.
    """

    from_square: str
    to_square: str
    is_castling: bool = False
    is_en_passant: bool = False
    is_promotion: bool = False
    castling_side: Optional[str] = None
    captured: Optional[KindName] = None
    promoted_to: Optional[KindName] = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        return cls(**data)


@dataclass
class GameModel:
    """Transport-safe snapshot of a game used between API, Service, DB, and Game layers."""

    pieces: list[PieceRecord]
    side_to_move: SideName
    status: str
    en_passant: Optional[str] = None
    captured: dict[SideName, list[PieceRecord]] = field(default_factory=dict)
    moves: list[MoveRecord] = field(default_factory=list)
    strength: int = 2
    ai_side: Optional[SideName] = None
    starting_placement: str = ""
    starting_side: SideName = "white"
