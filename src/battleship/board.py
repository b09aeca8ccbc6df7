"""The Board records which cells of one side's grid are taken by ships."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from enum import IntEnum

from src.battleship.coordinate import BOARD_DIMENSIONS, Coordinate, all_coordinates
from src.core.exceptions import BoardLayoutError

# Ship lengths, largest first. Placement order follows this list.
FLEET: tuple[int, ...] = (4, 3, 3, 2, 2, 2, 1, 1, 1, 1)
FLEET_CELLS = sum(FLEET)


class Cell(IntEnum):
    EMPTY = 0
    SHIP = 1


@dataclass(frozen=True)
class Ship:
    cells: tuple[Coordinate, ...]

    @property
    def size(self) -> int:
        return len(self.cells)


def _empty_grid() -> list[list[Cell]]:
    return [[Cell.EMPTY] * BOARD_DIMENSIONS[0] for _ in range(BOARD_DIMENSIONS[1])]


@dataclass
class Board:
    """
    Grid of cells indexed [row][column].

    Generated once per side and not changed afterwards: shots live in separate shot records.
    """

    grid: list[list[Cell]] = field(default_factory=_empty_grid)

    @classmethod
    def from_grid(cls, grid: list[list[int]]) -> Board:
        """Rebuild a board from the 10x10 binary grid used in persistence. The grid must hold exactly a fleet's worth of ship cells."""
        if len(grid) != BOARD_DIMENSIONS[1] or any(
            len(row) != BOARD_DIMENSIONS[0] for row in grid
        ):
            raise BoardLayoutError(
                f"Board must be {BOARD_DIMENSIONS[1]} rows of {BOARD_DIMENSIONS[0]} cells."
            )
        try:
            cells = [[Cell(value) for value in row] for row in grid]
        except ValueError as exc:
            raise BoardLayoutError(f"Board cells must be 0 or 1: {exc}") from exc
        board = cls(cells)
        if board.ship_cell_count() != FLEET_CELLS:
            raise BoardLayoutError(
                f"Board holds {board.ship_cell_count()} ship cells, a fleet has {FLEET_CELLS}."
            )
        return board

    def to_grid(self) -> list[list[int]]:
        return [[int(cell) for cell in row] for row in self.grid]

    def cell(self, coordinate: Coordinate) -> Cell:
        return self.grid[coordinate.row][coordinate.column]

    def has_ship(self, coordinate: Coordinate) -> bool:
        return self.cell(coordinate) == Cell.SHIP

    def place_ship(self, ship: Ship) -> None:
        for coordinate in ship.cells:
            self.grid[coordinate.row][coordinate.column] = Cell.SHIP

    def ship_cells(self) -> list[Coordinate]:
        return [
            coordinate for coordinate in all_coordinates() if self.has_ship(coordinate)
        ]

    def ship_cell_count(self) -> int:
        return sum(row.count(Cell.SHIP) for row in self.grid)

    def ships(self) -> list[Ship]:
        """
        Reconstruct ships as orthogonally connected groups of ship cells.

        NOTE: only meaningful on boards where ships do not touch. With the overlap-only
        placement rule two neighbouring ships are reported as one.
        """
        seen: set[Coordinate] = set()
        ships: list[Ship] = []
        for start in self.ship_cells():
            if start in seen:
                continue
            component: list[Coordinate] = []
            stack = [start]
            seen.add(start)
            while stack:
                current = stack.pop()
                component.append(current)
                for step in (
                    Coordinate(current.row + 1, current.column),
                    Coordinate(current.row - 1, current.column),
                    Coordinate(current.row, current.column + 1),
                    Coordinate(current.row, current.column - 1),
                ):
                    if (
                        step.is_within_bounds()
                        and step not in seen
                        and self.has_ship(step)
                    ):
                        seen.add(step)
                        stack.append(step)
            ships.append(Ship(tuple(sorted(component))))
        return ships

    def fleet_sizes(self) -> Counter[int]:
        return Counter(ship.size for ship in self.ships())

    def has_complete_fleet(self) -> bool:
        """Fleet check for boards where ships keep their distance."""
        return self.fleet_sizes() == Counter(FLEET)
