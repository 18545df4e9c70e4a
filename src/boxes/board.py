"""
The Board is the store of all squares and walls, and who owns them.

Walls live in a single arena (dict keyed by WallId). Squares only refer to their walls by id,
so two neighbouring squares look at the very same wall object and a claim can never get out of sync.
"""

from dataclasses import dataclass, field
from typing import Self

from src.boxes.geometry import Rect
from src.boxes.grid import Cell, Grid, WallId, layout
from src.boxes.ownership import UNCLAIMED, ClaimedBy, Ownership, is_claimed, owner_of
from src.core.exceptions import (
    AlreadyClaimedError,
    InvalidStateError,
    UnknownWallError,
)
from src.core.shared_types import Player


@dataclass
class Wall:
    wall_id: WallId
    rect: Rect
    ownership: Ownership = field(default=UNCLAIMED)

    @property
    def is_claimed(self) -> bool:
        return is_claimed(self.ownership)

    def claim(self, player: Player) -> None:
        if self.is_claimed:
            raise AlreadyClaimedError(
                f"Wall {self.wall_id.to_notation()} already taken by player {owner_of(self.ownership)}."
            )
        self.ownership = ClaimedBy(player)


@dataclass
class Square:
    cell: Cell
    rect: Rect
    walls: tuple[WallId, WallId, WallId, WallId]  # left, top, right, bottom
    ownership: Ownership = field(default=UNCLAIMED)

    @property
    def is_claimed(self) -> bool:
        return is_claimed(self.ownership)

    def award(self, player: Player) -> None:
        if self.is_claimed:
            raise InvalidStateError(
                f"Square {self.cell.to_notation()} already won by player {owner_of(self.ownership)}."
            )
        self.ownership = ClaimedBy(player)


@dataclass
class Board:
    grid: Grid
    walls: dict[WallId, Wall]
    squares: dict[Cell, Square]
    borders: dict[WallId, tuple[Cell, ...]]

    @classmethod
    def from_grid(cls, grid: Grid) -> Self:
        """Fresh board: nothing claimed yet."""
        grid_layout = layout(grid)
        walls = {geo.wall_id: Wall(geo.wall_id, geo.rect) for geo in grid_layout.walls}
        squares = {
            geo.cell: Square(geo.cell, geo.rect, geo.walls)
            for geo in grid_layout.squares
        }
        return cls(grid, walls, squares, grid_layout.borders)

    @classmethod
    def from_claims(
        cls,
        grid: Grid,
        claimed_walls: dict[WallId, Player],
        claimed_squares: dict[Cell, Player],
    ) -> Self:
        """
        Rebuild a board from stored ownership.
        ----

        Square ownership cannot be derived from the walls alone (the square goes to whoever claimed its LAST wall),
        so both maps are needed. Checks that the combination could actually have been played:
        every wall and square exists, and a square is owned if and only if all 4 of its walls are owned.
        """
        board = cls.from_grid(grid)
        for wall_id, player in claimed_walls.items():
            if wall_id not in board.walls:
                raise InvalidStateError(
                    f"Wall {wall_id.to_notation()} does not exist on a {grid.rows}x{grid.cols} grid."
                )
            board.walls[wall_id].ownership = ClaimedBy(player)

        for cell, player in claimed_squares.items():
            if cell not in board.squares:
                raise InvalidStateError(
                    f"Square {cell.to_notation()} does not exist on a {grid.rows}x{grid.cols} grid."
                )
            board.squares[cell].ownership = ClaimedBy(player)

        for cell, square in board.squares.items():
            if square.is_claimed != board.is_complete(cell):
                raise InvalidStateError(
                    f"Square {cell.to_notation()} must be owned exactly when all its walls are."
                )
        return board

    def wall(self, wall_id: WallId) -> Wall:
        if wall_id not in self.walls:
            raise UnknownWallError(
                f"No wall {wall_id.to_notation()} on a {self.grid.rows}x{self.grid.cols} grid."
            )
        return self.walls[wall_id]

    def square(self, cell: Cell) -> Square:
        return self.squares[cell]

    def squares_bordering(self, wall_id: WallId) -> list[Square]:
        return [self.squares[cell] for cell in self.borders[wall_id]]

    def is_complete(self, cell: Cell) -> bool:
        """All 4 walls owned (by anybody)."""
        return all(self.walls[wall_id].is_claimed for wall_id in self.squares[cell].walls)

    def claim_wall(self, wall_id: WallId, player: Player) -> None:
        self.wall(wall_id).claim(player)

    def award_square(self, cell: Cell, player: Player) -> None:
        self.square(cell).award(player)

    def unclaimed_walls(self) -> list[WallId]:
        return sorted(wall_id for wall_id, wall in self.walls.items() if not wall.is_claimed)

    def is_full(self) -> bool:
        return all(square.is_claimed for square in self.squares.values())

    def wall_rects(self) -> dict[WallId, Rect]:
        return {wall_id: wall.rect for wall_id, wall in self.walls.items()}

    def claimed_walls(self) -> dict[WallId, Player]:
        return {
            wall_id: player
            for wall_id, wall in self.walls.items()
            if (player := owner_of(wall.ownership)) is not None
        }

    def claimed_squares(self) -> dict[Cell, Player]:
        return {
            cell: player
            for cell, square in self.squares.items()
            if (player := owner_of(square.ownership)) is not None
        }
