"""Orchestration of communication from API router to business logic and persistence layers (and the reverse direction)."""

import logging
from threading import Lock
from uuid import UUID

from src.api.models import (
    ClaimWallRequest,
    CreateGameRequest,
    DeleteGameRequest,
    GameResponse,
    GetGameRequest,
    MoveResponse,
    PressRequest,
)
from src.boxes.game import Game, MoveResult
from src.boxes.geometry import Point
from src.boxes.grid import Grid, WallId
from src.core.config import Config
from src.core.exceptions import IllegalMoveError, RepositoryError
from src.core.models import GameModel
from src.core.shared_types import Status
from src.db.repository import GameRepository

logger = logging.getLogger(__name__)


class BoxesService:
    """
    Orchestration of layers for dots-and-boxes.

    The domain is single threaded. Every fetch-move-store cycle runs under one lock,
    so presses arriving from several threads are handled one at a time.
    """

    def __init__(self, repository: GameRepository) -> None:
        self.repo = repository
        self._lock = Lock()

    # -- API routes logic ---
    def create_new_game(self, request: CreateGameRequest) -> GameResponse:
        """Start a game on a grid built from the request, falling back to the configured values."""

        grid = self._build_grid(request)
        new_game = Game.new_game(grid)
        created_game_data = new_game.to_model()

        # Store the GameModel in the repository
        with self._lock:
            stored_game, game_id = self.repo.create_game(created_game_data)
        logger.info("Created game %s on a %sx%s grid", game_id, grid.rows, grid.cols)

        return self._create_game_response(game_id, stored_game)

    def get_game_state(self, request: GetGameRequest) -> GameResponse:
        """Retrieve current game state (e.g. to redraw the board)."""
        with self._lock:
            game_model = self._fetch_game(request.game_id)
        return self._create_game_response(request.game_id, game_model)

    def press(self, request: PressRequest) -> MoveResponse:
        """
        The player pressed somewhere on the board.
        ----
        Resolves the point to a wall and claims it. A press that hits no wall is not a move: nothing gets stored.
        """
        with self._lock:
            stored_model = self._fetch_game(request.game_id)
            game = Game.from_model(stored_model)

            try:
                result = game.play_point(Point(request.x, request.y))
            except IllegalMoveError as exc:
                logger.warning("Rejected press in game %s: %s", request.game_id, exc)
                raise

            if result is None:
                return MoveResponse(
                    game=self._create_game_response(request.game_id, stored_model),
                    wall=None,
                    awarded=[],
                )
            return self._store_move(request.game_id, game, result)

    def claim_wall(self, request: ClaimWallRequest) -> MoveResponse:
        """Claim a wall by its notation (for hosts that do their own hit-testing)."""
        wall_id = WallId.from_notation(request.wall)
        with self._lock:
            stored_model = self._fetch_game(request.game_id)
            game = Game.from_model(stored_model)

            try:
                result = game.apply_move(wall_id)
            except IllegalMoveError as exc:
                logger.warning("Rejected claim in game %s: %s", request.game_id, exc)
                raise

            return self._store_move(request.game_id, game, result)

    def delete_game(self, request: DeleteGameRequest) -> None:
        """Handle a request to delete a Game record."""
        with self._lock:
            self.repo.delete_game(request.game_id)

    # -- Internal helpers --
    def _build_grid(self, request: CreateGameRequest) -> Grid:
        """Grid from the request. Only reads the configuration when the request leaves something out."""
        requested = (request.rows, request.cols, request.cell_size, request.wall_thickness)
        if None not in requested:
            return Grid(*requested)

        settings = Config.grid_settings()
        return Grid(
            rows=request.rows if request.rows is not None else settings.rows,
            cols=request.cols if request.cols is not None else settings.cols,
            cell_size=(
                request.cell_size if request.cell_size is not None else settings.cell_size
            ),
            wall_thickness=(
                request.wall_thickness
                if request.wall_thickness is not None
                else settings.wall_thickness
            ),
        )

    def _store_move(self, game_id: UUID, game: Game, result: MoveResult) -> MoveResponse:
        """Persist the game after an accepted move and build the response."""
        after_move = game.to_model()
        self.repo.update_game(game_id, after_move)
        if result.status == Status.FINISHED:
            logger.info("Game %s finished. scores: %s", game_id, game.scores)

        return MoveResponse(
            game=self._create_game_response(game_id, after_move),
            wall=result.wall.to_notation(),
            awarded=[cell.to_notation() for cell in result.awarded],
        )

    def _create_game_response(self, game_id: UUID, model: GameModel) -> GameResponse:
        """Convert info in GameModel to a GameResponse (for game with given ID.)"""
        game = Game.from_model(model)
        finished = game.status == Status.FINISHED
        winner = game.winner if finished else None
        return GameResponse(
            game_id=game_id,
            rows=model.rows,
            cols=model.cols,
            current_player=game.current_player,
            status=game.status,
            winner=winner,
            is_tie=finished and winner is None,
            scores=game.scores,
            claimed_walls=model.claimed_walls,
            claimed_squares=model.claimed_squares,
            unclaimed_walls=[wall_id.to_notation() for wall_id in game.unclaimed_walls()],
        )

    def _fetch_game(self, game_id: UUID) -> GameModel:
        """Attempt to find the game in the repository and raise error if it fails."""
        game_model = self.repo.get_game(game_id)
        if game_model is None:
            raise RepositoryError(f"Game with {game_id=} not found.")
        return game_model
