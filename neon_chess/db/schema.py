"""Database tables / schema"""

from datetime import datetime, timezone
from typing import Any, Optional
from uuid import UUID

from sqlalchemy import JSON
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class DBGame(Base):
    __tablename__ = "games"
    id: Mapped[UUID] = mapped_column(primary_key=True)
    pieces: Mapped[list[dict[str, Any]]] = mapped_column(JSON)
    captured: Mapped[dict[str, list[dict[str, Any]]]] = mapped_column(JSON, default=dict)
    moves: Mapped[list[dict[str, Any]]] = mapped_column(JSON, default=list)
    side_to_move: Mapped[str]
    status: Mapped[str]
    en_passant: Mapped[Optional[str]]
    strength: Mapped[int]
    ai_side: Mapped[Optional[str]]
    starting_placement: Mapped[str]
    starting_side: Mapped[str]
    created_at: Mapped[datetime] = mapped_column(default=utc_now)
    updated_at: Mapped[datetime] = mapped_column(default=utc_now, onupdate=utc_now)
