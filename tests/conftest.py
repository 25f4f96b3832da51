"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures/variables required for testing multiple layers.
"""

import random
from typing import Callable, Generator

import pytest
from sqlalchemy import StaticPool, create_engine
from sqlalchemy.orm import Session, sessionmaker

from neon_chess.chess.game import Game
from neon_chess.core.config import GameConfig
from neon_chess.core.shared_types import Side, Strength
from neon_chess.db.schema import Base

# Setup an in-memory SQLite database for testing
DATABASE_URL = "sqlite:///:memory:"
engine = create_engine(
    DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(autoflush=False, bind=engine)


@pytest.fixture
def db_session_repo() -> Generator[Session, None, None]:
    """Connection to a test database. Tables are removed at teardown to make unit tests of repository independent of each other."""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def seeded_rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def two_player_game() -> Callable[..., Game]:
    """Game without automated opponent. Call the inner function with a placement string (default: standard setup)"""

    def _create_game(placement: str | None = None, starting_side: Side = Side.WHITE) -> Game:
        config = GameConfig(starting_side=starting_side, ai_side=None, strength=Strength.MEDIUM)
        return Game.new_game(config=config, placement=placement)

    return _create_game

