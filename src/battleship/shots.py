"""Shot records: which coordinates one side has fired at, and what came of it."""

from __future__ import annotations

from dataclasses import dataclass, field

from src.battleship.board import Board
from src.battleship.coordinate import Coordinate
from src.core.exceptions import DuplicateShotError
from src.core.shared_types import ShotOutcome


@dataclass
class ShotRecord:
    """Coordinate -> outcome. An entry, once recorded, is never overwritten."""

    shots: dict[Coordinate, ShotOutcome] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, str]) -> ShotRecord:
        """Rebuild from the persisted {"A1": "hit", ...} mapping."""
        return cls(
            {
                Coordinate.from_notation(notation): ShotOutcome(outcome)
                for notation, outcome in data.items()
            }
        )

    def to_dict(self) -> dict[str, str]:
        return {
            coordinate.to_notation(): outcome.value
            for coordinate, outcome in self.shots.items()
        }

    def __contains__(self, coordinate: Coordinate) -> bool:
        return coordinate in self.shots

    def __len__(self) -> int:
        return len(self.shots)

    def outcome(self, coordinate: Coordinate) -> ShotOutcome | None:
        return self.shots.get(coordinate)

    def record(self, coordinate: Coordinate, outcome: ShotOutcome) -> None:
        if coordinate in self.shots:
            raise DuplicateShotError(
                f"{coordinate.to_notation()} was already fired at ({self.shots[coordinate]})."
            )
        self.shots[coordinate] = outcome

    def hit_count(self) -> int:
        return sum(1 for outcome in self.shots.values() if outcome == ShotOutcome.HIT)


def is_fleet_sunk(record: ShotRecord, board: Board) -> bool:
    """True once every ship cell on the board has been hit. Pure query, safe to call repeatedly."""
    return record.hit_count() == board.ship_cell_count()
