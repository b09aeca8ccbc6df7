"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures/variables required for testing multiple layers.
"""

import random
from typing import Iterator

import pytest
from sqlalchemy import StaticPool, create_engine
from sqlalchemy.orm import Session, sessionmaker

from src.battleship.board import Board
from src.battleship.generator import BoardGenerator, fallback_board
from src.db.memory_repository import InMemoryGameRepository
from src.db.schema import Base

# Setup an in-memory SQLite database for testing
DATABASE_URL = "sqlite:///:memory:"
engine = create_engine(
    DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(autoflush=False, bind=engine)


@pytest.fixture
def db_session_repo() -> Iterator[Session]:
    """Connection to a test database. Tables are removed at teardown to make unit tests of repository independent of each other."""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def memory_repository() -> Iterator[InMemoryGameRepository]:
    """Ensures to clear the repository between tests"""
    repo = InMemoryGameRepository()
    try:
        yield repo
    finally:
        repo.clear()


@pytest.fixture
def seeded_generator() -> BoardGenerator:
    return BoardGenerator(rng=random.Random(1234))


class FixedLayoutGenerator(BoardGenerator):
    """Every board gets the same known layout, so tests know where the ships are."""

    def generate(self) -> Board:
        return fallback_board()


@pytest.fixture
def fixed_generator() -> FixedLayoutGenerator:
    return FixedLayoutGenerator()


@pytest.fixture
def db_sessions() -> Iterator[sessionmaker]:
    """Session factory over the test database, for tests that need several sessions at once (one per request)."""
    Base.metadata.create_all(bind=engine)
    try:
        yield TestingSessionLocal
    finally:
        Base.metadata.drop_all(bind=engine)
