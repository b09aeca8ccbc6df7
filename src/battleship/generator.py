"""
Random fleet placement.

Ships are placed largest first by rejection sampling: draw an orientation and an anchor that keeps the ship
on the grid, and retry when the ship would overlap (or, with ``no_touching``, touch) a ship placed before.
Each ship gets a bounded number of random draws, after which the grid is scanned for the first free spot.
If even that fails the layout is restarted, and after ``board_attempts`` restarts a fixed layout is returned,
so ``generate`` always terminates.
"""

import logging
import random

from src.battleship.board import FLEET, Board, Ship
from src.battleship.coordinate import BOARD_DIMENSIONS, Coordinate
from src.core import config

logger = logging.getLogger(__name__)

# (row, column, size, horizontal). Valid under both placement rules.
FALLBACK_LAYOUT: tuple[tuple[int, int, int, bool], ...] = (
    (0, 0, 4, True),
    (0, 5, 3, True),
    (2, 0, 3, True),
    (2, 4, 2, True),
    (2, 7, 2, True),
    (4, 0, 2, True),
    (0, 9, 1, True),
    (4, 3, 1, True),
    (4, 5, 1, True),
    (4, 7, 1, True),
)


def build_ship(row: int, column: int, size: int, horizontal: bool) -> Ship:
    if horizontal:
        return Ship(tuple(Coordinate(row, column + offset) for offset in range(size)))
    return Ship(tuple(Coordinate(row + offset, column) for offset in range(size)))


def fallback_board() -> Board:
    board = Board()
    for row, column, size, horizontal in FALLBACK_LAYOUT:
        board.place_ship(build_ship(row, column, size, horizontal))
    return board


class BoardGenerator:
    """Produces a fresh board per call. Pass a seeded ``random.Random`` for reproducible layouts."""

    def __init__(
        self,
        rng: random.Random | None = None,
        no_touching: bool = config.NO_TOUCHING,
        retries_per_ship: int = config.PLACEMENT_RETRIES,
        board_attempts: int = config.BOARD_ATTEMPTS,
    ) -> None:
        self.rng = rng or random.Random()
        self.no_touching = no_touching
        self.retries_per_ship = retries_per_ship
        self.board_attempts = board_attempts

    def generate(self) -> Board:
        for attempt in range(1, self.board_attempts + 1):
            board = self._try_layout()
            if board is not None:
                return board
            logger.debug("Fleet did not fit on attempt %d, restarting layout", attempt)

        logger.warning(
            "No layout found after %d attempts, using the fallback layout",
            self.board_attempts,
        )
        return fallback_board()

    # -- Internal helpers --
    def _try_layout(self) -> Board | None:
        board = Board()
        # cells a new ship may not use: ship cells, plus their surroundings when ships may not touch
        blocked: set[Coordinate] = set()
        for size in FLEET:
            ship = self._random_placement(size, blocked) or self._first_fit(
                size, blocked
            )
            if ship is None:
                return None
            board.place_ship(ship)
            blocked.update(self._footprint(ship))
        return board

    def _random_placement(self, size: int, blocked: set[Coordinate]) -> Ship | None:
        columns, rows = BOARD_DIMENSIONS
        for _ in range(self.retries_per_ship):
            horizontal = self.rng.random() < 0.5
            if horizontal:
                row = self.rng.randrange(rows)
                column = self.rng.randrange(columns - size + 1)
            else:
                row = self.rng.randrange(rows - size + 1)
                column = self.rng.randrange(columns)
            candidate = build_ship(row, column, size, horizontal)
            if self._fits(candidate, blocked):
                return candidate
        return None

    def _first_fit(self, size: int, blocked: set[Coordinate]) -> Ship | None:
        """Deterministic scan, horizontal placements first."""
        columns, rows = BOARD_DIMENSIONS
        for horizontal in (True, False):
            max_row = rows if horizontal else rows - size + 1
            max_column = columns - size + 1 if horizontal else columns
            for row in range(max_row):
                for column in range(max_column):
                    candidate = build_ship(row, column, size, horizontal)
                    if self._fits(candidate, blocked):
                        return candidate
        return None

    def _fits(self, ship: Ship, blocked: set[Coordinate]) -> bool:
        return not any(cell in blocked for cell in ship.cells)

    def _footprint(self, ship: Ship) -> set[Coordinate]:
        footprint = set(ship.cells)
        if self.no_touching:
            for cell in ship.cells:
                footprint.update(cell.neighbours())
        return footprint
