"""
The Game class will be the entrypoint into the domain layer for the service layer.
It is responsible for orchestrating all the rules required to play a turn of dots-and-boxes -->
passes this information to the service layer, which can then pass it onwards to the API layer.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Self

from src.boxes.board import Board
from src.boxes.geometry import Point
from src.boxes.grid import Cell, Grid, WallId
from src.boxes.outcome import outcome, tally
from src.boxes.resolver import resolve
from src.boxes.view import BoardView, SquareView, WallView
from src.core.exceptions import AlreadyClaimedError, InvalidStateError
from src.core.models import GameModel
from src.core.shared_types import Player, Status

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MoveResult:
    """What happened during one accepted move."""

    wall: WallId
    awarded: list[Cell]
    current_player: Player
    status: Status

    @property
    def extra_turn(self) -> bool:
        return bool(self.awarded) and self.status == Status.IN_PROGRESS


@dataclass
class Game:
    # --- DOMAIN LAYER API CALLED BY SERVICE---

    board: Board
    current_player: Player
    status: Status

    @classmethod
    def new_game(cls, grid: Grid) -> Self:
        """Nothing claimed, player one to move."""
        return cls(
            board=Board.from_grid(grid),
            current_player=Player.ONE,
            status=Status.IN_PROGRESS,
        )

    @classmethod
    def from_model(cls, model: GameModel) -> Self:
        """Define how to construct a Game from the information the Service layer actually has"""

        # Validation
        if model.status not in [status.value for status in Status]:
            raise InvalidStateError(
                f"Invalid status: {model.status!r}. \nPick one from {','.join(status.value for status in Status)}"
            )
        if model.current_player not in [player.value for player in Player]:
            raise InvalidStateError(
                f"Invalid player: {model.current_player!r}. \nPick one from {','.join(player.value for player in Player)}"
            )

        # create the Game
        grid = Grid(model.rows, model.cols, model.cell_size, model.wall_thickness)
        try:
            claimed_walls = {
                WallId.from_notation(notation): Player(player)
                for notation, player in model.claimed_walls.items()
            }
            claimed_squares = {
                Cell.from_notation(notation): Player(player)
                for notation, player in model.claimed_squares.items()
            }
        except ValueError as exc:
            raise InvalidStateError(f"Cannot read stored ownership: {exc}") from exc
        board = Board.from_claims(grid, claimed_walls, claimed_squares)

        status = Status(model.status)
        if (status == Status.FINISHED) != board.is_full():
            raise InvalidStateError(
                f"Status {status!r} does not match the board: the game is finished exactly when every square is owned."
            )
        return cls(board, Player(model.current_player), status)

    def to_model(self) -> GameModel:
        """Encode back into a format the Service layer uses"""
        grid = self.board.grid
        return GameModel(
            rows=grid.rows,
            cols=grid.cols,
            cell_size=grid.cell_size,
            wall_thickness=grid.wall_thickness,
            current_player=self.current_player.value,
            status=self.status.value,
            claimed_walls={
                wall_id.to_notation(): player.value
                for wall_id, player in sorted(self.board.claimed_walls().items())
            },
            claimed_squares={
                cell.to_notation(): player.value
                for cell, player in sorted(self.board.claimed_squares().items())
            },
        )

    @property
    def winner(self) -> Optional[Player]:
        """None means a tie. Raises while the game is still in progress."""
        if self.status != Status.FINISHED:
            raise InvalidStateError(f"Game has no result yet. status: {self.status}")
        return outcome(self.board.squares.values())

    @property
    def scores(self) -> dict[Player, int]:
        return tally(self.board.squares.values())

    def unclaimed_walls(self) -> list[WallId]:
        return self.board.unclaimed_walls()

    def play_point(self, point: Point) -> Optional[MoveResult]:
        """
        Full pipeline for one press of the player: find the wall under the point and claim it.

        A point that is on no wall is not a move: returns None and nothing changes.
        """
        wall_id = resolve(point, self.board.wall_rects())
        if wall_id is None:
            logger.debug("Press at (%s, %s) hit no wall", point.x, point.y)
            return None
        return self.apply_move(wall_id)

    def apply_move(self, wall_id: WallId) -> MoveResult:
        """
        Attempt to claim a wall for the player whose turn it is
        -----

        1. game must still be in progress
        2. wall must exist and not be taken yet
        3. claim the wall
        4. award every square around the wall that just got its 4th wall
        5. no square awarded? --> other player's turn. Otherwise the same player goes again.
        6. every square owned? --> game finished

        NOTE all checks that can reject the move happen in 1. and 2., so a rejected move never changes anything.
        """
        # make sure the game is (still) in progress
        self._assert_in_progress()

        # make sure the wall can be claimed
        wall = self.board.wall(wall_id)
        if wall.is_claimed:
            raise AlreadyClaimedError(
                f"Wall {wall_id.to_notation()} is already taken. Pick another one."
            )

        player = self.current_player

        # claim the wall
        self.board.claim_wall(wall_id, player)

        # award completed squares
        awarded = self._award_completed_squares(wall_id, player)

        # extra turn rule
        if not awarded:
            self._pass_turn()

        # check for end condition
        self._update_game_status()

        logger.debug(
            "Player %s took wall %s, awarded %s",
            player,
            wall_id.to_notation(),
            [cell.to_notation() for cell in awarded],
        )
        return MoveResult(
            wall=wall_id,
            awarded=awarded,
            current_player=self.current_player,
            status=self.status,
        )

    def snapshot(self) -> BoardView:
        """Immutable copy of everything a renderer needs."""
        return BoardView(
            squares=tuple(
                SquareView(square.cell, square.rect, square.ownership)
                for square in self.board.squares.values()
            ),
            walls=tuple(
                WallView(wall.wall_id, wall.rect, wall.ownership)
                for wall in self.board.walls.values()
            ),
            current_player=self.current_player,
            status=self.status,
        )

    # -- PRIVATE HELPERS ---
    def _assert_in_progress(self) -> None:
        if self.status != Status.IN_PROGRESS:
            raise InvalidStateError(f"Game is not in progress. status: {self.status}")

    def _award_completed_squares(self, wall_id: WallId, player: Player) -> list[Cell]:
        """A wall borders at most two squares, so at most two get awarded."""
        awarded: list[Cell] = []
        for square in self.board.squares_bordering(wall_id):
            if square.is_claimed:
                continue
            if self.board.is_complete(square.cell):
                self.board.award_square(square.cell, player)
                awarded.append(square.cell)
        return awarded

    def _pass_turn(self) -> None:
        self.current_player = self.current_player.other()

    def _update_game_status(self) -> None:
        if self.board.is_full():
            self._change_status(Status.FINISHED)
            logger.info("Game finished. scores: %s", self.scores)

    def _change_status(self, new_status: Status) -> None:
        self.status = new_status
