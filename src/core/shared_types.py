"""
Type definitions used across layers
"""

from enum import StrEnum


class Status(StrEnum):
    WAITING = "waiting"
    ACTIVE = "active"
    PLAYER_WON = "player_won"
    ADVERSARY_WON = "adversary_won"
    SURRENDERED = "surrendered"


class Side(StrEnum):
    PLAYER = "player"
    ADVERSARY = "adversary"


class ShotOutcome(StrEnum):
    """What is stored in a shot record."""

    HIT = "hit"
    MISS = "miss"


class ResultOutcome(StrEnum):
    """What the transport gets back for a player's action."""

    HIT = "hit"
    MISS = "miss"
    INVALID = "invalid"
    DUPLICATE = "duplicate"
    GAME_OVER = "game_over"


# Winning status for the side whose shots sank the other fleet
WINNING_STATUS: dict[Side, Status] = {
    Side.PLAYER: Status.PLAYER_WON,
    Side.ADVERSARY: Status.ADVERSARY_WON,
}
