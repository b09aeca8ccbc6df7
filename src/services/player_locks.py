"""At most one in-flight operation per player."""

import logging
import threading
from contextlib import contextmanager
from typing import Iterator

from src.core.exceptions import GameBusyError

logger = logging.getLogger(__name__)


class PlayerLocks:
    """Non-blocking per-player guard: a second request for a busy player is rejected, not queued."""

    def __init__(self) -> None:
        self._busy: set[str] = set()
        self._guard = threading.Lock()

    @contextmanager
    def hold(self, player_id: str) -> Iterator[None]:
        with self._guard:
            if player_id in self._busy:
                logger.info("Rejected concurrent request for player %s", player_id)
                raise GameBusyError(
                    f"A request for player {player_id} is still being processed."
                )
            self._busy.add(player_id)
        try:
            yield
        finally:
            with self._guard:
                self._busy.discard(player_id)

    def is_busy(self, player_id: str) -> bool:
        with self._guard:
            return player_id in self._busy
