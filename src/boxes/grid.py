"""
Grid configuration, coordinates on the grid and the layout of squares and walls.

Walls are identified canonically, so that the wall between two neighbouring squares is ONE wall:

* horizontal wall (line, position): line = horizontal grid line counted from the top (0..rows), position = column
* vertical wall (line, position): line = vertical grid line counted from the left (0..cols), position = row

ex) on a 1x2 grid the right wall of square 0:0 and the left wall of square 0:1 are both v1:0
"""

import math
import re
from dataclasses import dataclass
from typing import Self

from src.boxes.geometry import Rect
from src.core.exceptions import ConfigurationError
from src.core.shared_types import Orientation

CELL_PATTERN = re.compile(r"^(\d+):(\d+)$")
WALL_PATTERN = re.compile(r"^([hv])(\d+):(\d+)$")


@dataclass(frozen=True)
class Grid:
    """Fixed for the lifetime of a game."""

    rows: int
    cols: int
    cell_size: float = 50.0
    wall_thickness: float = 10.0

    def __post_init__(self):
        if self.rows < 1 or self.cols < 1:
            raise ConfigurationError(
                f"Grid needs at least one row and one column, got {self.rows}x{self.cols}."
            )
        if not math.isfinite(self.cell_size) or self.cell_size <= 0:
            raise ConfigurationError(f"Cell size must be a positive number, got {self.cell_size}.")
        if not math.isfinite(self.wall_thickness) or self.wall_thickness <= 0:
            raise ConfigurationError(
                f"Wall thickness must be a positive number, got {self.wall_thickness}."
            )

    @property
    def num_squares(self) -> int:
        return self.rows * self.cols

    @property
    def num_walls(self) -> int:
        """Shared walls only count once."""
        return (self.rows + 1) * self.cols + self.rows * (self.cols + 1)


@dataclass(frozen=True, order=True)
class Cell:
    row: int
    col: int

    @classmethod
    def from_notation(cls, notation: str) -> Self:
        """'row:col' ex. '1:2'"""
        match = CELL_PATTERN.match(notation)
        if match is None:
            raise ValueError(f"Cannot interpret {notation!r} as a cell.")
        return cls(int(match.group(1)), int(match.group(2)))

    def to_notation(self) -> str:
        return f"{self.row}:{self.col}"

    def is_within(self, grid: Grid) -> bool:
        return (0 <= self.row < grid.rows) and (0 <= self.col < grid.cols)


@dataclass(frozen=True, order=True)
class WallId:
    """Ordering: orientation first, then line index, then position. Used to break ties between overlapping walls."""

    orientation: Orientation
    line: int
    position: int

    @classmethod
    def horizontal(cls, line: int, position: int) -> Self:
        return cls(Orientation.HORIZONTAL, line, position)

    @classmethod
    def vertical(cls, line: int, position: int) -> Self:
        return cls(Orientation.VERTICAL, line, position)

    @classmethod
    def from_notation(cls, notation: str) -> Self:
        """'h<line>:<position>' or 'v<line>:<position>' ex. 'h0:1'"""
        match = WALL_PATTERN.match(notation)
        if match is None:
            raise ValueError(f"Cannot interpret {notation!r} as a wall.")
        orientation = (
            Orientation.HORIZONTAL if match.group(1) == "h" else Orientation.VERTICAL
        )
        return cls(orientation, int(match.group(2)), int(match.group(3)))

    def to_notation(self) -> str:
        return f"{self.orientation.value[0]}{self.line}:{self.position}"

    def is_within(self, grid: Grid) -> bool:
        if self.orientation == Orientation.HORIZONTAL:
            return (0 <= self.line <= grid.rows) and (0 <= self.position < grid.cols)
        return (0 <= self.line <= grid.cols) and (0 <= self.position < grid.rows)


def square_walls(cell: Cell) -> tuple[WallId, WallId, WallId, WallId]:
    """The 4 walls of a square in the order; left, top, right, bottom."""
    return (
        WallId.vertical(cell.col, cell.row),
        WallId.horizontal(cell.row, cell.col),
        WallId.vertical(cell.col + 1, cell.row),
        WallId.horizontal(cell.row + 1, cell.col),
    )


def bordering_cells(wall_id: WallId, grid: Grid) -> tuple[Cell, ...]:
    """One cell for a wall on the edge of the grid, two for an interior wall."""
    line, position = wall_id.line, wall_id.position
    if wall_id.orientation == Orientation.HORIZONTAL:
        candidates = [Cell(line - 1, position), Cell(line, position)]
    else:
        candidates = [Cell(position, line - 1), Cell(position, line)]
    return tuple(cell for cell in candidates if cell.is_within(grid))


@dataclass(frozen=True)
class SquareGeometry:
    cell: Cell
    rect: Rect
    walls: tuple[WallId, WallId, WallId, WallId]


@dataclass(frozen=True)
class WallGeometry:
    wall_id: WallId
    rect: Rect


@dataclass(frozen=True)
class Layout:
    squares: list[SquareGeometry]
    walls: list[WallGeometry]
    borders: dict[WallId, tuple[Cell, ...]]


def layout(grid: Grid) -> Layout:
    """
    Lay out all squares and walls of the grid.
    ----

    The grid is centred on the origin. Square 0:0 is the top left one, rows go down, columns go right.
    A wall's box is centred on the segment of the grid line it covers:
    horizontal walls are a cell wide and wall_thickness tall, vertical walls the other way around.
    """
    size = grid.cell_size
    # centre of the top left square
    offset_x = -grid.cols * size / 2 + size / 2
    offset_y = grid.rows * size / 2 - size / 2

    squares: list[SquareGeometry] = []
    for row in range(grid.rows):
        for col in range(grid.cols):
            cell = Cell(row, col)
            rect = Rect.from_x_y_w_h(
                offset_x + col * size, offset_y - row * size, size, size
            )
            squares.append(SquareGeometry(cell, rect, square_walls(cell)))

    walls: list[WallGeometry] = []
    # horizontal lines run from the top (y = +height/2) downwards
    for line in range(grid.rows + 1):
        y = grid.rows * size / 2 - line * size
        for position in range(grid.cols):
            x = offset_x + position * size
            rect = Rect.from_x_y_w_h(x, y, size, grid.wall_thickness)
            walls.append(WallGeometry(WallId.horizontal(line, position), rect))

    # vertical lines run from the left (x = -width/2) to the right
    for line in range(grid.cols + 1):
        x = -grid.cols * size / 2 + line * size
        for position in range(grid.rows):
            y = offset_y - position * size
            rect = Rect.from_x_y_w_h(x, y, grid.wall_thickness, size)
            walls.append(WallGeometry(WallId.vertical(line, position), rect))

    borders = {wall.wall_id: bordering_cells(wall.wall_id, grid) for wall in walls}
    return Layout(squares, walls, borders)
