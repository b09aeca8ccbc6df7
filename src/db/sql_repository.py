"""Implementation of (Game)Repository using SQLAlchemy"""

import logging
from typing import Callable, TypeVar
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from src.core.exceptions import StorageError
from src.core.models import GameModel
from src.core.shared_types import Status
from src.db.schema import DBGame

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SQLGameRepository:
    """Data stored using SQL / methods implemented using SQLAlchemy"""

    def __init__(self, db_session: Session) -> None:
        self.db = db_session

    def get_game(self, game_id: UUID) -> GameModel | None:
        """Get game by ID, if record exists."""
        game_db = self._run(lambda: self.db.get(DBGame, game_id))
        return self._to_model(game_db) if game_db else None

    def find_active(self, player_id: str) -> GameModel | None:
        query = select(DBGame).where(
            DBGame.player_id == player_id, DBGame.status == Status.ACTIVE.value
        )
        game_db = self._run(lambda: self.db.scalar(query))
        return self._to_model(game_db) if game_db else None

    def save_game(self, game: GameModel) -> GameModel:
        """Insert or update the record; everything is committed in one transaction or not at all."""
        try:
            game_db = self.db.get(DBGame, game.game_id)
            if game_db is None:
                game_db = DBGame(id=game.game_id, player_id=game.player_id)
                self.db.add(game_db)
            self._copy_into(game_db, game)
            self.db.commit()
            self.db.refresh(game_db)
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error("Saving game %s failed: %s", game.game_id, exc)
            raise StorageError(f"Could not save game {game.game_id}: {exc}") from exc
        return self._to_model(game_db)

    def delete_active(self, player_id: str) -> GameModel | None:
        """Remove the player's active game record."""
        try:
            query = select(DBGame).where(
                DBGame.player_id == player_id, DBGame.status == Status.ACTIVE.value
            )
            game_db = self.db.scalar(query)
            if not game_db:
                return None
            game_model = self._to_model(game_db)
            self.db.delete(game_db)
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise StorageError(
                f"Could not delete active game of {player_id}: {exc}"
            ) from exc
        return game_model

    def list_games(self, player_id: str) -> list[GameModel]:
        query = (
            select(DBGame)
            .where(DBGame.player_id == player_id)
            .order_by(DBGame.created_at.desc())
        )
        games_db = self._run(lambda: list(self.db.scalars(query)))
        return [self._to_model(game_db) for game_db in games_db]

    # -- Internal helpers --
    def _run(self, read: Callable[[], T]) -> T:
        """Reads: translate driver errors into StorageError."""
        try:
            return read()
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise StorageError(f"Could not read from the game store: {exc}") from exc

    def _copy_into(self, game_db: DBGame, game: GameModel) -> None:
        # Assign fresh containers so the JSON columns are flagged as changed
        game_db.player_board = [list(row) for row in game.player_board]
        game_db.adversary_board = [list(row) for row in game.adversary_board]
        game_db.shots_on_adversary = dict(game.shots_on_adversary)
        game_db.shots_on_player = dict(game.shots_on_player)
        game_db.status = game.status
        game_db.turn_owner = game.turn_owner

    def _to_model(self, game_db: DBGame) -> GameModel:
        """Convert SQLAlchemy model to data transfer model."""
        return GameModel(
            game_id=game_db.id,
            player_id=game_db.player_id,
            player_board=game_db.player_board,
            adversary_board=game_db.adversary_board,
            shots_on_adversary=game_db.shots_on_adversary,
            shots_on_player=game_db.shots_on_player,
            status=game_db.status,
            turn_owner=game_db.turn_owner,
        )
