"""
Boundary layer data model(s).

These objects can be used to communicate with the Service.
Hence, both the API layer (higher) and domain/db layers (lower) will use model(s) defined here to send to/receive from the Service
(Decouples the data model specific to the DB layer, API layer, or domain layer from the information needed to send across boundaries)
"""

from dataclasses import dataclass
from uuid import UUID

# Type aliases to make GameModel easier to read
Grid = list[list[int]]
Notation = str
OutcomeName = str


@dataclass
class GameModel:
    """Transport-safe representation of a match used between API, Service, DB, and Game layers."""

    game_id: UUID
    player_id: str
    player_board: Grid
    adversary_board: Grid
    shots_on_adversary: dict[Notation, OutcomeName]
    shots_on_player: dict[Notation, OutcomeName]
    status: str
    turn_owner: str
