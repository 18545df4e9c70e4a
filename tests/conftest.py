"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures/variables required for testing multiple layers.
"""

from typing import Generator

import pytest
from sqlalchemy import StaticPool, create_engine
from sqlalchemy.orm import Session, sessionmaker

from src.boxes.game import Game
from src.boxes.grid import Grid
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
def db_session_repo() -> Generator[Session, None, None]:
    """Connection to a test database. Tables are removed at teardown to make unit tests of repository independent of each other."""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        Base.metadata.drop_all(bind=engine)
        db.close()


@pytest.fixture
def small_game() -> Game:
    """2x2 grid with 50px squares and 10px walls: 4 squares, 12 walls. Grid spans -50..50 in both directions."""
    return Game.new_game(Grid(rows=2, cols=2, cell_size=50.0, wall_thickness=10.0))


@pytest.fixture
def strip_game() -> Game:
    """1x2 grid: two squares sharing the wall v1:0."""
    return Game.new_game(Grid(rows=1, cols=2, cell_size=50.0, wall_thickness=10.0))
