"""Unit tests for src/api/models.py"""

from uuid import uuid4

import pytest

from src.api.models import (
    FireShotRequest,
    GameResponse,
    NewGameRequest,
    ShotResponse,
    SurrenderRequest,
)
from src.core.exceptions import InvalidRequestError
from src.core.shared_types import ResultOutcome, ShotOutcome, Side, Status


# -- Validation - player ids --
@pytest.mark.parametrize("player_id, expected", [(42, "42"), ("42", "42"), (" abc ", "abc")])
def test_player_id_normalised(player_id: int | str, expected: str) -> None:
    """Chat transports use numeric ids; everything is stored as a string."""
    assert NewGameRequest(player_id=player_id).player_id == expected
    assert SurrenderRequest(player_id=player_id).player_id == expected


@pytest.mark.parametrize("player_id", ["", "   ", None, True, 4.2])
def test_invalid_player_id(player_id: object) -> None:
    with pytest.raises(InvalidRequestError):
        NewGameRequest(player_id=player_id)


# -- Validation - FireShotRequest --
@pytest.mark.parametrize(
    "coordinate, expected",
    [("a1", "A1"), (" j10 ", "J10"), ("E5", "E5")],
)
def test_coordinate_normalised(coordinate: str, expected: str) -> None:
    request = FireShotRequest(player_id=42, coordinate=coordinate)
    assert request.coordinate == expected


def test_out_of_range_coordinate_still_accepted() -> None:
    """Range checking is the domain's job so the player gets an 'invalid' shot result."""
    assert FireShotRequest(player_id=42, coordinate="z99").coordinate == "Z99"


@pytest.mark.parametrize("coordinate", [11, None, ["A", 1]])
def test_non_text_coordinate(coordinate: object) -> None:
    with pytest.raises(InvalidRequestError):
        FireShotRequest(player_id=42, coordinate=coordinate)


# -- Responses --
def test_shot_response_defaults() -> None:
    response = ShotResponse(outcome=ResultOutcome.MISS)
    assert response.winner is None
    assert response.adversary_coordinate is None
    assert response.adversary_outcome is None
    assert response.persistence_uncertain is False


def test_game_response_from_plain_values() -> None:
    response = GameResponse(
        game_id=uuid4(),
        player_id="42",
        status="active",
        turn_owner="player",
        player_board=[[0] * 10 for _ in range(10)],
        shots_on_adversary={"A1": "hit"},
        shots_on_player={},
    )
    assert response.status == Status.ACTIVE
    assert response.turn_owner == Side.PLAYER
    assert response.shots_on_adversary == {"A1": ShotOutcome.HIT}
