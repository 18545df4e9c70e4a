"""
Read-only picture of the board for whoever draws it.

Exposes geometry and ownership only; turning an owner into a colour is the renderer's business.
"""

from dataclasses import dataclass

from src.boxes.geometry import Rect
from src.boxes.grid import Cell, WallId
from src.boxes.ownership import Ownership
from src.core.shared_types import Player, Status


@dataclass(frozen=True)
class SquareView:
    cell: Cell
    rect: Rect
    ownership: Ownership


@dataclass(frozen=True)
class WallView:
    wall_id: WallId
    rect: Rect
    ownership: Ownership


@dataclass(frozen=True)
class BoardView:
    squares: tuple[SquareView, ...]
    walls: tuple[WallView, ...]
    current_player: Player
    status: Status
