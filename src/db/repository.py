"""Protocol repository (can implement later for SQL Alchemy / simple Excel table etc.)"""

from typing import Protocol
from uuid import UUID

from src.core.models import GameModel


class GameRepository(Protocol):
    """
    Where dots-and-boxes games live between two requests.

    A record holds the grid a game is played on plus who owns which wall and square.
    Only the current ownership is kept, not the order in which walls were claimed.
    """

    def get_game(self, game_id: UUID) -> GameModel | None:
        """The stored game, or None when no game has that ID."""
        ...

    def create_game(self, game: GameModel) -> tuple[GameModel, UUID]:
        """Store a freshly started game (grid settings included) and hand out its new ID."""
        ...

    def update_game(self, game_id: UUID, game: GameModel) -> GameModel | None:
        """
        Store the state after a move: claimed walls, claimed squares, player to move and status.

        The grid of a game never changes after creation, so rows, cols and sizes of `game` are not written.
        Returns None when no game has that ID.
        """
        ...

    def delete_game(self, game_id: UUID) -> GameModel | None:
        """Remove a game and return what was stored, or None when no game has that ID."""
        ...
