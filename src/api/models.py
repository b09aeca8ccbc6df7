"""Requests and Response models"""

from typing import Any, Optional
from uuid import UUID

from pydantic import BaseModel, field_validator

from src.core.exceptions import InvalidRequestError
from src.core.shared_types import ResultOutcome, ShotOutcome, Side, Status

Notation = str


def _normalise_player_id(value: Any) -> str:
    """Chat transports hand out numeric user ids; store them as strings."""
    if isinstance(value, bool) or not isinstance(value, (int, str)):
        raise InvalidRequestError(f"Cannot use {value!r} as a player id.")
    player_id = str(value).strip()
    if not player_id:
        raise InvalidRequestError("Player id must not be empty.")
    return player_id


# --- REQUEST MODELS ---
class PlayerRequest(BaseModel):
    player_id: str

    @field_validator("player_id", mode="before")
    @classmethod
    def validate_player_id(cls, value: Any) -> str:
        return _normalise_player_id(value)


class NewGameRequest(PlayerRequest):
    pass


class SurrenderRequest(PlayerRequest):
    pass


class GetGameRequest(PlayerRequest):
    pass


class FireShotRequest(PlayerRequest):
    coordinate: str

    @field_validator("coordinate", mode="before")
    @classmethod
    def normalise_coordinate(cls, value: Any) -> str:
        if not isinstance(value, str):
            raise InvalidRequestError(f"Coordinate must be text like 'E5', got {value!r}.")
        # Range checks happen in the domain, so that a bad coordinate becomes an 'invalid' shot result
        return value.strip().upper()


# --- RESPONSE MODELS ---
class GameResponse(BaseModel):
    """The player's view: own ships, and only the shots on the adversary (its ships stay hidden)."""

    game_id: UUID
    player_id: str
    status: Status
    turn_owner: Side
    player_board: list[list[int]]
    shots_on_adversary: dict[Notation, ShotOutcome]
    shots_on_player: dict[Notation, ShotOutcome]
    winner: Optional[Side] = None
    persistence_uncertain: bool = False


class ShotResponse(BaseModel):
    outcome: ResultOutcome
    coordinate: Optional[Notation] = None
    winner: Optional[Side] = None
    adversary_coordinate: Optional[Notation] = None
    adversary_outcome: Optional[ShotOutcome] = None
    detail: Optional[str] = None
    persistence_uncertain: bool = False


class GameSummary(BaseModel):
    game_id: UUID
    status: Status
    winner: Optional[Side] = None
    shots_fired: int
    shots_received: int


class HistoryResponse(BaseModel):
    player_id: str
    games: list[GameSummary]
