"""Implementation of (Game)Repository using SQLAlchemy"""

from uuid import UUID, uuid4

from sqlalchemy import select
from sqlalchemy.orm import Session

from src.core.models import GameModel
from src.db.schema import DBGame


class SQLGameRepository:
    """Data stored using SQL / methods implemented using SQLAlchemy"""

    def __init__(self, db_session: Session) -> None:
        self.db = db_session

    def get_game(self, game_id: UUID) -> GameModel | None:
        """Get game by ID, if record exists."""
        game_db = self._fetch_game(game_id)
        if game_db:
            return self._to_model(game_db)
        return None

    def create_game(self, game: GameModel) -> tuple[GameModel, UUID]:
        """Store new game and return the stored data + newly created game ID."""

        new_id = uuid4()
        game_db = DBGame(
            id=new_id,
            rows=game.rows,
            cols=game.cols,
            cell_size=game.cell_size,
            wall_thickness=game.wall_thickness,
            current_player=game.current_player,
            status=game.status,
            claimed_walls=dict(game.claimed_walls),
            claimed_squares=dict(game.claimed_squares),
        )
        self.db.add(game_db)
        self.db.commit()
        self.db.refresh(game_db)
        return self._to_model(game_db), new_id

    def update_game(self, game_id: UUID, game: GameModel) -> GameModel | None:
        """Overwrite the state of an existing record. The grid itself never changes."""
        game_db = self._fetch_game(game_id)
        if not game_db:
            return None
        game_db.current_player = game.current_player
        game_db.status = game.status
        # new dict objects, so SQLAlchemy notices the change of the JSON column
        game_db.claimed_walls = dict(game.claimed_walls)
        game_db.claimed_squares = dict(game.claimed_squares)
        self.db.commit()
        self.db.refresh(game_db)
        return self._to_model(game_db)

    def delete_game(self, game_id: UUID) -> GameModel | None:
        """Remove a game's record."""
        game_db = self._fetch_game(game_id)
        if not game_db:
            return None
        game_model = self._to_model(game_db)
        self.db.delete(game_db)
        self.db.commit()
        return game_model

    def _fetch_game(self, game_id: UUID) -> DBGame | None:
        query = select(DBGame).where(DBGame.id == game_id)
        return self.db.scalar(query)

    def _to_model(self, game_db: DBGame) -> GameModel:
        """Convert SQLAlchemy model to data transfer model."""
        return GameModel(
            rows=game_db.rows,
            cols=game_db.cols,
            cell_size=game_db.cell_size,
            wall_thickness=game_db.wall_thickness,
            current_player=game_db.current_player,
            status=game_db.status,
            claimed_walls=dict(game_db.claimed_walls),
            claimed_squares=dict(game_db.claimed_squares),
        )
