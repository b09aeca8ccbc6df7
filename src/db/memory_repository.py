"""Implementation of (Game)Repository keeping everything in process memory. Lost on restart."""

import threading
from copy import deepcopy
from uuid import UUID

from src.core.exceptions import StorageError
from src.core.models import GameModel
from src.core.shared_types import Status


class InMemoryGameRepository:
    """
    Games keyed by ID. Stored and returned models are deep copies, so a caller mutating its GameModel
    never changes what a later load sees.
    """

    def __init__(self) -> None:
        self._games: dict[UUID, GameModel] = {}
        self._lock = threading.Lock()

    def get_game(self, game_id: UUID) -> GameModel | None:
        with self._lock:
            game = self._games.get(game_id)
            return deepcopy(game) if game else None

    def find_active(self, player_id: str) -> GameModel | None:
        with self._lock:
            game = self._active(player_id)
            return deepcopy(game) if game else None

    def save_game(self, game: GameModel) -> GameModel:
        with self._lock:
            active = self._active(game.player_id)
            if (
                game.status == Status.ACTIVE
                and active is not None
                and active.game_id != game.game_id
            ):
                raise StorageError(
                    f"Player {game.player_id} already has active game {active.game_id}."
                )
            self._games[game.game_id] = deepcopy(game)
            return deepcopy(game)

    def delete_active(self, player_id: str) -> GameModel | None:
        with self._lock:
            game = self._active(player_id)
            if game is None:
                return None
            return self._games.pop(game.game_id)

    def list_games(self, player_id: str) -> list[GameModel]:
        with self._lock:
            # dicts keep insertion order: oldest first
            games = [g for g in self._games.values() if g.player_id == player_id]
            return [deepcopy(game) for game in reversed(games)]

    def clear(self) -> None:
        """Clear the repository (useful in between tests)"""
        with self._lock:
            self._games.clear()

    def _active(self, player_id: str) -> GameModel | None:
        return next(
            (
                game
                for game in self._games.values()
                if game.player_id == player_id and game.status == Status.ACTIVE
            ),
            None,
        )
