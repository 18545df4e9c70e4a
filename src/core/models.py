"""
Boundary layer data model(s).

These objects can be used to communicate with the Service.
Hence, both the API layer (higher) and domain/db layers (lower) will use model(s) defined here to send to/receive from the Service
(Decouples the data model specific to the DB layer, API layer, or domain layer from the information needed to send across boundaries)
"""

from dataclasses import dataclass, field

# Type aliases to make GameModel easier to read
WallNotation = str
CellNotation = str
PlayerName = str


@dataclass
class GameModel:
    """Transport-safe representation of a dots-and-boxes game used between API, Service, DB, and Game layers."""

    rows: int
    cols: int
    cell_size: float
    wall_thickness: float
    current_player: PlayerName
    status: str
    claimed_walls: dict[WallNotation, PlayerName] = field(default_factory=dict)
    claimed_squares: dict[CellNotation, PlayerName] = field(default_factory=dict)
