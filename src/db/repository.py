"""Protocol repository: the persistence port. Adapters: SQL (SQLAlchemy), in-memory, and a timeout wrapper around either."""

from typing import Protocol
from uuid import UUID

from src.core.models import GameModel


class GameRepository(Protocol):
    """Persistence layer orchestration"""

    def get_game(self, game_id: UUID) -> GameModel | None:
        """Get game by ID, if record exists."""
        ...

    def find_active(self, player_id: str) -> GameModel | None:
        """The player's game with status 'active', if any."""
        ...

    def save_game(self, game: GameModel) -> GameModel:
        """Insert or replace the whole record in one atomic write. Raises StorageError on failure."""
        ...

    def delete_active(self, player_id: str) -> GameModel | None:
        """Remove the player's active game record (frees the active slot)."""
        ...

    def list_games(self, player_id: str) -> list[GameModel]:
        """All games of a player, finished ones included, newest first."""
        ...
