"""
A cell on the 10x10 grid

(placed in its own module as multiple other modules need to import it)
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from src.core.exceptions import InvalidCoordinateError

# (columns, rows). Columns are lettered A-J, rows numbered 1-10.
BOARD_DIMENSIONS = (10, 10)
COLUMN_LETTERS = "ABCDEFGHIJ"

NOTATION_PATTERN = re.compile(r"^([A-J])(10|[1-9])$")


@dataclass(frozen=True, order=True)
class Coordinate:
    """Zero-based (row, column) position. 'A1' is (0, 0), 'J10' is (9, 9)."""

    row: int
    column: int

    @classmethod
    def from_notation(cls, notation: str) -> Coordinate:
        """'A1' - 'J10' get converted to (0,0) - (9,9). Letters are case-insensitive, surrounding whitespace is ignored."""
        if not isinstance(notation, str):
            raise InvalidCoordinateError(
                f"Coordinate must be a string, got {notation!r}."
            )
        match = NOTATION_PATTERN.match(notation.strip().upper())
        if match is None:
            raise InvalidCoordinateError(
                f"Cannot interpret {notation!r} as a coordinate. Use a letter A-J followed by a number 1-10, e.g. 'A1'."
            )
        letter, number = match.groups()
        return cls(row=int(number) - 1, column=COLUMN_LETTERS.index(letter))

    def to_notation(self) -> str:
        return f"{COLUMN_LETTERS[self.column]}{self.row + 1}"

    def is_within_bounds(self) -> bool:
        return (0 <= self.column < BOARD_DIMENSIONS[0]) and (
            0 <= self.row < BOARD_DIMENSIONS[1]
        )

    def neighbours(self) -> list[Coordinate]:
        """All (up to 8) surrounding cells that lie on the grid, diagonals included."""
        around = [
            Coordinate(self.row + d_row, self.column + d_col)
            for d_row in (-1, 0, 1)
            for d_col in (-1, 0, 1)
            if (d_row, d_col) != (0, 0)
        ]
        return [coordinate for coordinate in around if coordinate.is_within_bounds()]

    def __str__(self) -> str:
        return self.to_notation()


def all_coordinates() -> list[Coordinate]:
    """Every cell of the grid, row by row."""
    return [
        Coordinate(row, column)
        for row in range(BOARD_DIMENSIONS[1])
        for column in range(BOARD_DIMENSIONS[0])
    ]
