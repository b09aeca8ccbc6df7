"""Move selection for the computer opponent."""

from __future__ import annotations

import random
from itertools import islice
from typing import Protocol

from src.battleship.coordinate import Coordinate, all_coordinates
from src.battleship.shots import ShotRecord
from src.core.exceptions import GameStateError


class AdversaryPolicy(Protocol):
    """Anything that can pick the adversary's next target."""

    def choose_shot(self, record: ShotRecord) -> Coordinate:
        """Pick a coordinate that is not yet in the adversary's own shot record."""
        ...


class UntriedCoordinates:
    """Pool of coordinates not fired at yet. Removal and random draws are O(1) (swap with the last element)."""

    def __init__(self, fired: ShotRecord) -> None:
        self._cells: list[Coordinate] = [
            coordinate for coordinate in all_coordinates() if coordinate not in fired
        ]
        self._position: dict[Coordinate, int] = {
            coordinate: index for index, coordinate in enumerate(self._cells)
        }

    def __len__(self) -> int:
        return len(self._cells)

    def __contains__(self, coordinate: Coordinate) -> bool:
        return coordinate in self._position

    def discard(self, coordinate: Coordinate) -> None:
        index = self._position.pop(coordinate, None)
        if index is None:
            return
        last = self._cells.pop()
        if index < len(self._cells):
            self._cells[index] = last
            self._position[last] = index

    def draw(self, rng: random.Random) -> Coordinate:
        """Uniform pick; the coordinate stays in the pool until it shows up in the record."""
        if not self._cells:
            raise GameStateError("Every coordinate has already been fired at.")
        return self._cells[rng.randrange(len(self._cells))]


class RandomAdversary:
    """
    Uniformly random search, no follow-up on hits.

    The pool of untried cells is built once per shot record and then only shrinks by the entries added since
    the previous call (records are insert-only, so those are the newest keys). Use one instance per
    request or per game: instances are not shared between threads.
    """

    def __init__(self, rng: random.Random | None = None) -> None:
        self.rng = rng or random.Random()
        self._record: ShotRecord | None = None
        self._pool: UntriedCoordinates | None = None
        self._synced = 0

    def choose_shot(self, record: ShotRecord) -> Coordinate:
        pool = self._sync(record)
        return pool.draw(self.rng)

    def _sync(self, record: ShotRecord) -> UntriedCoordinates:
        if self._pool is None or record is not self._record:
            self._record = record
            self._pool = UntriedCoordinates(record)
        else:
            for coordinate in islice(record.shots, self._synced, None):
                self._pool.discard(coordinate)
        self._synced = len(record)
        return self._pool
