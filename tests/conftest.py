"""
Pytest will auto-discover / import this file called 'conftest.py'. ]
This file defines fixtures/variables required for testing multiple layers.
"""

from datetime import datetime, timedelta, timezone
from typing import Generator

import pytest
from sqlalchemy import StaticPool, create_engine
from sqlalchemy.orm import Session, sessionmaker

from src.core.shared_types import Status
from src.db.schema import Base
from src.stratego.army import ASSIGNED_CELLS
from src.stratego.board import Board
from src.stratego.game import Game
from src.stratego.pieces import ARMY_COMPOSITION, Owner

# Setup an in-memory SQLite database for testing
DATABASE_URL = "sqlite:///:memory:"
engine = create_engine(
    DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(autoflush=False, bind=engine)

HOST_ID = "host-player"
GUEST_ID = "guest-player"


def army_ranks() -> list[str]:
    """The 40 rank names of a standard army, grouped by rank (spy first, flag last)."""
    return [
        str(rank) for rank, count in ARMY_COMPOSITION.items() for _ in range(count)
    ]


def army_placement(owner: Owner) -> dict[int, str]:
    """A valid army on the owner's half. Host: flag ends up on cell 39, guest: on cell 99."""
    return dict(zip(ASSIGNED_CELLS[owner], army_ranks()))


def in_progress_game(board: Board, status: Status = Status.HOST_MOVE) -> Game:
    """A started game on a hand-crafted board."""
    return Game(
        board=board,
        host_player_id=HOST_ID,
        guest_player_id=GUEST_ID,
        status=status,
        expires_at=datetime.now(timezone.utc) + timedelta(hours=1),
    )


@pytest.fixture
def host_army() -> dict[int, str]:
    return army_placement(Owner.HOST)


@pytest.fixture
def guest_army() -> dict[int, str]:
    return army_placement(Owner.GUEST)


@pytest.fixture
def empty_board() -> Board:
    return Board.empty()


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
def db_session_shared() -> Generator[Session, None, None]:
    """Connection to a test database. Mock real setup with multiple sessions connecting to the same engine / database tables."""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)
