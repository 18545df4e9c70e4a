"""Requests and Response models"""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, field_validator

from src.boxes.grid import WallId
from src.core.exceptions import InvalidRequestError
from src.core.shared_types import Player, Status

WallNotation = str
CellNotation = str


# --- REQUEST MODELS ---
class CreateGameRequest(BaseModel):
    """Anything left out falls back to the configured grid."""

    rows: Optional[int] = None
    cols: Optional[int] = None
    cell_size: Optional[float] = None
    wall_thickness: Optional[float] = None


class PressRequest(BaseModel):
    """A single press of the player, in the coordinates of the drawn grid."""

    game_id: UUID
    x: float
    y: float


class ClaimWallRequest(BaseModel):
    game_id: UUID
    wall: WallNotation

    @field_validator("wall")
    @classmethod
    def validate_wall(cls, value: str) -> str:
        try:
            WallId.from_notation(value)
        except ValueError:
            raise InvalidRequestError(
                f"Cannot interpret wall: {value!r}. Expected something like 'h0:1' or 'v2:0'."
            )
        return value


class GetGameRequest(BaseModel):
    game_id: UUID


class DeleteGameRequest(BaseModel):
    game_id: UUID


# --- RESPONSE MODELS ---
class GameResponse(BaseModel):
    game_id: UUID
    rows: int
    cols: int
    current_player: Player
    status: Status
    winner: Optional[Player]
    is_tie: bool
    scores: dict[Player, int]
    claimed_walls: dict[WallNotation, Player]
    claimed_squares: dict[CellNotation, Player]
    unclaimed_walls: list[WallNotation]


class MoveResponse(BaseModel):
    """wall is None when the press did not hit any wall (nothing happened)."""

    game: GameResponse
    wall: Optional[WallNotation]
    awarded: list[CellNotation]
