"""
Bounded-latency wrapper around any GameRepository.

Every call runs on the storage worker thread; the caller waits at most `timeout_s`. A call that does not
finish in time raises StorageTimeoutError, and its outcome is unknown: the worker carries on with it, and
later calls queue up behind it.

By default all instances share one process-wide worker (STORAGE_EXECUTOR), so wrapping a fresh
per-request repository never starts a new thread.
"""

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from typing import Callable, TypeVar
from uuid import UUID

from src.core import config
from src.core.exceptions import StorageTimeoutError
from src.core.models import GameModel
from src.db.repository import GameRepository

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Threads are only started on the first submit
STORAGE_EXECUTOR = ThreadPoolExecutor(max_workers=1, thread_name_prefix="game-storage")


class TimedGameRepository:
    def __init__(
        self,
        repository: GameRepository,
        timeout_s: float = config.STORAGE_TIMEOUT_MS / 1000,
        executor: ThreadPoolExecutor | None = None,
    ) -> None:
        self.repository = repository
        self.timeout_s = timeout_s
        # a caller passing its own executor also owns its shutdown
        self._executor = executor or STORAGE_EXECUTOR

    def get_game(self, game_id: UUID) -> GameModel | None:
        return self._call("get_game", lambda: self.repository.get_game(game_id))

    def find_active(self, player_id: str) -> GameModel | None:
        return self._call("find_active", lambda: self.repository.find_active(player_id))

    def save_game(self, game: GameModel) -> GameModel:
        return self._call("save_game", lambda: self.repository.save_game(game))

    def delete_active(self, player_id: str) -> GameModel | None:
        return self._call(
            "delete_active", lambda: self.repository.delete_active(player_id)
        )

    def list_games(self, player_id: str) -> list[GameModel]:
        return self._call("list_games", lambda: self.repository.list_games(player_id))

    def _call(self, operation: str, work: Callable[[], T]) -> T:
        future: Future[T] = self._executor.submit(work)
        try:
            # exceptions raised by the wrapped repository propagate unchanged
            return future.result(timeout=self.timeout_s)
        except FutureTimeoutError as exc:
            logger.warning(
                "Storage %s did not answer within %.0f ms", operation, self.timeout_s * 1000
            )
            raise StorageTimeoutError(
                f"{operation} not acknowledged within {self.timeout_s * 1000:.0f} ms"
            ) from exc
