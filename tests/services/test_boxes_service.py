"""Unit tests for src/services/boxes_service.py"""

import logging
import threading
import time
from typing import Generator
from uuid import UUID, uuid4

import pytest
from sqlalchemy.orm import Session

from src.core.config import Config
from src.core.exceptions import (
    AlreadyClaimedError,
    ConfigurationError,
    GameError,
    InvalidStateError,
    RepositoryError,
    UnknownWallError,
)
from src.core.models import GameModel
from src.core.shared_types import Player, Status
from src.db.sql_repository import SQLGameRepository
from src.services.boxes_service import (
    BoxesService,
    ClaimWallRequest,
    CreateGameRequest,
    DeleteGameRequest,
    GameResponse,
    GetGameRequest,
    MoveResponse,
    PressRequest,
)


# --- MOCK DEPENDENCIES ----
class MockRepository:
    """Mock the GameRepository using a dictionary of game models."""

    def __init__(self) -> None:
        self._games: dict[UUID, GameModel] = {}
        self.updates = 0

    def create_game(self, game: GameModel) -> tuple[GameModel, UUID]:
        """Store new game and return the stored data + newly created game ID."""
        game_id = uuid4()
        self._games[game_id] = game
        return game, game_id

    def get_game(self, game_id: UUID) -> GameModel | None:
        """Get game by ID, if record exists."""
        return self._games.get(game_id)

    def update_game(self, game_id: UUID, game: GameModel) -> GameModel | None:
        """Overwrite the state of an existing record."""
        if game_id not in self._games:
            return None
        self.updates += 1
        self._games[game_id] = game
        return game

    def delete_game(self, game_id: UUID) -> GameModel | None:
        """Remove a game's record."""
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


def create_single_square_game(service: BoxesService) -> UUID:
    """1x1 grid, 50px square centred on the origin: walls at y=25 (top), y=-25 (bottom), x=-25 (left) and x=25 (right)."""
    response = service.create_new_game(
        CreateGameRequest(rows=1, cols=1, cell_size=50.0, wall_thickness=10.0)
    )
    return response.game_id


# --- SERVICE - CREATE NEW GAME ----
def test_create_a_new_game(mock_repository: MockRepository) -> None:
    """Check that new game is created, persisted in repo, and return has the appropriate information."""
    service = BoxesService(mock_repository)
    response = service.create_new_game(CreateGameRequest(rows=2, cols=3))

    # Check response structure
    assert isinstance(response, GameResponse)
    assert isinstance(response.game_id, UUID)

    # Check response data
    assert response.rows == 2
    assert response.cols == 3
    assert response.current_player == Player.ONE
    assert response.status == Status.IN_PROGRESS
    assert response.winner is None
    assert not response.is_tie
    assert response.scores == {Player.ONE: 0, Player.TWO: 0}
    assert response.claimed_walls == {}
    assert response.claimed_squares == {}
    assert len(response.unclaimed_walls) == 3 * 3 + 2 * 4

    # Check persisted data
    stored_game = mock_repository.get_game(response.game_id)
    assert stored_game is not None
    assert stored_game.rows == 2
    assert stored_game.cols == 3
    assert stored_game.current_player == Player.ONE
    assert stored_game.status == Status.IN_PROGRESS


def test_create_uses_configured_defaults(
    mock_repository: MockRepository, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr(Config, "GRID_ROWS", "3")
    monkeypatch.setattr(Config, "GRID_COLS", "4")
    monkeypatch.setattr(Config, "CELL_SIZE", "20.0")
    monkeypatch.setattr(Config, "WALL_THICKNESS", "2.0")
    service = BoxesService(mock_repository)
    response = service.create_new_game(CreateGameRequest())

    stored_game = mock_repository.get_game(response.game_id)
    assert stored_game is not None
    assert (stored_game.rows, stored_game.cols) == (3, 4)
    assert (stored_game.cell_size, stored_game.wall_thickness) == (20.0, 2.0)


def test_create_with_broken_configuration(
    mock_repository: MockRepository, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr(Config, "GRID_ROWS", "five")
    service = BoxesService(mock_repository)
    with pytest.raises(ConfigurationError):
        service.create_new_game(CreateGameRequest())
    assert mock_repository._games == {}


def test_complete_request_does_not_read_configuration(
    mock_repository: MockRepository, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr(Config, "GRID_ROWS", "five")
    service = BoxesService(mock_repository)
    response = service.create_new_game(
        CreateGameRequest(rows=2, cols=2, cell_size=50.0, wall_thickness=10.0)
    )
    assert response.rows == 2


@pytest.mark.parametrize(
    "request_data",
    [
        {"rows": 0, "cols": 3},
        {"rows": 3, "cols": -2},
        {"rows": 3, "cols": 3, "cell_size": 0.0},
        {"rows": 3, "cols": 3, "wall_thickness": -1.0},
        {"rows": 3, "cols": 3, "cell_size": float("nan")},
        {"rows": 3, "cols": 3, "wall_thickness": float("inf")},
    ],
)
def test_create_with_invalid_grid(mock_repository: MockRepository, request_data: dict) -> None:
    """Make sure service propagates the exceptions, and nothing gets stored."""
    service = BoxesService(mock_repository)
    with pytest.raises(GameError):
        _ = service.create_new_game(CreateGameRequest(**request_data))
    assert mock_repository._games == {}


# --- SERVICE - GET GAME ----
def test_get_game_state(mock_repository: MockRepository) -> None:
    service = BoxesService(mock_repository)
    game_id = create_single_square_game(service)
    response = service.get_game_state(GetGameRequest(game_id=game_id))
    assert response.game_id == game_id
    assert response.unclaimed_walls == ["h0:0", "h1:0", "v0:0", "v1:0"]


def test_get_unknown_game(mock_repository: MockRepository) -> None:
    service = BoxesService(mock_repository)
    with pytest.raises(RepositoryError):
        service.get_game_state(GetGameRequest(game_id=uuid4()))


# --- SERVICE - PRESS ----
def test_press_on_a_wall(mock_repository: MockRepository) -> None:
    service = BoxesService(mock_repository)
    game_id = create_single_square_game(service)

    response = service.press(PressRequest(game_id=game_id, x=3.0, y=24.0))
    assert isinstance(response, MoveResponse)
    assert response.wall == "h0:0"
    assert response.awarded == []
    assert response.game.current_player == Player.TWO
    assert response.game.claimed_walls == {"h0:0": Player.ONE}

    stored_game = mock_repository.get_game(game_id)
    assert stored_game is not None
    assert stored_game.claimed_walls == {"h0:0": "one"}
    assert stored_game.current_player == "two"


def test_press_on_no_wall(mock_repository: MockRepository) -> None:
    """Not a move: no error, nothing stored, same player to move."""
    service = BoxesService(mock_repository)
    game_id = create_single_square_game(service)

    response = service.press(PressRequest(game_id=game_id, x=0.0, y=0.0))
    assert response.wall is None
    assert response.awarded == []
    assert response.game.current_player == Player.ONE
    assert mock_repository.updates == 0


def test_press_on_claimed_wall(
    mock_repository: MockRepository, caplog: pytest.LogCaptureFixture
) -> None:
    service = BoxesService(mock_repository)
    game_id = create_single_square_game(service)
    service.press(PressRequest(game_id=game_id, x=0.0, y=25.0))
    stored_before = mock_repository.get_game(game_id)

    with caplog.at_level(logging.WARNING):
        with pytest.raises(AlreadyClaimedError):
            service.press(PressRequest(game_id=game_id, x=-5.0, y=27.0))
    assert "Rejected press" in caplog.text
    assert mock_repository.get_game(game_id) == stored_before
    assert mock_repository.updates == 1


def test_press_unknown_game(mock_repository: MockRepository) -> None:
    service = BoxesService(mock_repository)
    with pytest.raises(RepositoryError):
        service.press(PressRequest(game_id=uuid4(), x=0.0, y=0.0))


# --- SERVICE - CLAIM WALL ----
def test_play_a_full_game(mock_repository: MockRepository) -> None:
    """1x1 grid: player two claims the 4th wall, gets the square and wins."""
    service = BoxesService(mock_repository)
    game_id = create_single_square_game(service)

    for wall in ["h0:0", "h1:0", "v0:0"]:
        response = service.claim_wall(ClaimWallRequest(game_id=game_id, wall=wall))
        assert response.awarded == []
        assert response.game.status == Status.IN_PROGRESS

    response = service.claim_wall(ClaimWallRequest(game_id=game_id, wall="v1:0"))
    assert response.wall == "v1:0"
    assert response.awarded == ["0:0"]
    assert response.game.status == Status.FINISHED
    assert response.game.winner == Player.TWO
    assert not response.game.is_tie
    assert response.game.scores == {Player.ONE: 0, Player.TWO: 1}
    assert response.game.claimed_squares == {"0:0": Player.TWO}
    assert response.game.unclaimed_walls == []

    # game is over
    with pytest.raises(InvalidStateError):
        service.press(PressRequest(game_id=game_id, x=0.0, y=25.0))


def test_tie_is_reported(mock_repository: MockRepository) -> None:
    service = BoxesService(mock_repository)
    response = service.create_new_game(CreateGameRequest(rows=1, cols=2))
    game_id = response.game_id
    for wall in ["v1:0", "h0:0", "h0:1", "h1:0", "v0:0", "h1:1", "v2:0"]:
        response = service.claim_wall(ClaimWallRequest(game_id=game_id, wall=wall)).game
    assert response.status == Status.FINISHED
    assert response.winner is None
    assert response.is_tie
    assert response.scores == {Player.ONE: 1, Player.TWO: 1}


def test_claim_unknown_wall(mock_repository: MockRepository) -> None:
    service = BoxesService(mock_repository)
    game_id = create_single_square_game(service)
    with pytest.raises(UnknownWallError):
        service.claim_wall(ClaimWallRequest(game_id=game_id, wall="h4:4"))
    assert mock_repository.updates == 0


def test_claim_already_claimed_wall(mock_repository: MockRepository) -> None:
    service = BoxesService(mock_repository)
    game_id = create_single_square_game(service)
    service.claim_wall(ClaimWallRequest(game_id=game_id, wall="h0:0"))
    with pytest.raises(AlreadyClaimedError):
        service.claim_wall(ClaimWallRequest(game_id=game_id, wall="h0:0"))

    response = service.get_game_state(GetGameRequest(game_id=game_id))
    assert response.current_player == Player.TWO


# --- SERVICE - DELETE GAME ----
def test_delete_game(mock_repository: MockRepository) -> None:
    service = BoxesService(mock_repository)
    game_id = create_single_square_game(service)
    service.delete_game(DeleteGameRequest(game_id=game_id))
    assert mock_repository.get_game(game_id) is None


# --- SERVICE WITH THE SQL REPOSITORY ----
def test_full_round_trip_with_database(db_session_repo: Session) -> None:
    """Same flow as the host would run it: state survives between requests because it lives in the database."""
    service = BoxesService(SQLGameRepository(db_session_repo))
    game_id = create_single_square_game(service)

    service.press(PressRequest(game_id=game_id, x=0.0, y=25.0))
    service.press(PressRequest(game_id=game_id, x=0.0, y=-25.0))
    response = service.get_game_state(GetGameRequest(game_id=game_id))
    assert response.claimed_walls == {"h0:0": Player.ONE, "h1:0": Player.TWO}
    assert response.current_player == Player.ONE


# --- SERVICE FROM SEVERAL THREADS ----
class SlowRepository(MockRepository):
    """Every call takes a moment and records how many calls were running at the same time."""

    def __init__(self) -> None:
        super().__init__()
        self._counter_lock = threading.Lock()
        self.active = 0
        self.max_active = 0

    def _enter(self) -> None:
        with self._counter_lock:
            self.active += 1
            self.max_active = max(self.max_active, self.active)
        time.sleep(0.005)

    def _leave(self) -> None:
        with self._counter_lock:
            self.active -= 1

    def create_game(self, game: GameModel) -> tuple[GameModel, UUID]:
        self._enter()
        try:
            return super().create_game(game)
        finally:
            self._leave()

    def get_game(self, game_id: UUID) -> GameModel | None:
        self._enter()
        try:
            return super().get_game(game_id)
        finally:
            self._leave()

    def update_game(self, game_id: UUID, game: GameModel) -> GameModel | None:
        self._enter()
        try:
            return super().update_game(game_id, game)
        finally:
            self._leave()


def test_repository_is_used_by_one_thread_at_a_time() -> None:
    """Presses on all four walls of a 1x1 game, mixed with creates and reads, all from separate threads."""
    repo = SlowRepository()
    service = BoxesService(repo)
    game_id = create_single_square_game(service)
    errors: list[Exception] = []

    def run(action) -> None:
        try:
            action()
        except Exception as exc:  # collected and re-checked in the main thread
            errors.append(exc)

    actions = [
        lambda x=x, y=y: service.press(PressRequest(game_id=game_id, x=x, y=y))
        for x, y in [(0.0, 25.0), (0.0, -25.0), (-25.0, 0.0), (25.0, 0.0)]
    ]
    actions += [lambda: service.create_new_game(CreateGameRequest(rows=1, cols=1))] * 3
    actions += [lambda: service.get_game_state(GetGameRequest(game_id=game_id))] * 3

    threads = [threading.Thread(target=run, args=(action,)) for action in actions]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert errors == []
    assert repo.max_active == 1
    # no press got lost
    stored_game = repo._games[game_id]
    assert sorted(stored_game.claimed_walls) == ["h0:0", "h1:0", "v0:0", "v1:0"]
    assert stored_game.status == Status.FINISHED
