"""
The Game class is the entrypoint into the domain layer for the service layer.
It owns both boards and both shot records of one match, adjudicates shots and runs the
player-then-adversary exchange. The service layer converts it to and from a GameModel for persistence.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional
from uuid import UUID, uuid4

from src.battleship.adversary import AdversaryPolicy
from src.battleship.board import Board
from src.battleship.coordinate import Coordinate
from src.battleship.generator import BoardGenerator
from src.battleship.shots import ShotRecord, is_fleet_sunk
from src.core.exceptions import (
    GameNotActiveError,
    GameStateError,
    InvalidCoordinateError,
    NotYourTurnError,
)
from src.core.models import GameModel
from src.core.shared_types import WINNING_STATUS, ShotOutcome, Side, Status

logger = logging.getLogger(__name__)


@dataclass
class TurnResult:
    """What happened during one player action (the player's shot and, if the game went on, the reply)."""

    player_coordinate: Coordinate
    player_outcome: ShotOutcome
    adversary_coordinate: Optional[Coordinate] = None
    adversary_outcome: Optional[ShotOutcome] = None
    winner: Optional[Side] = None


@dataclass
class Game:
    # --- DOMAIN LAYER API CALLED BY SERVICE---

    game_id: UUID
    player_id: str
    player_board: Board
    adversary_board: Board
    shots_on_adversary: ShotRecord = field(default_factory=ShotRecord)
    shots_on_player: ShotRecord = field(default_factory=ShotRecord)
    status: Status = Status.ACTIVE
    turn_owner: Side = Side.PLAYER

    @classmethod
    def new_game(
        cls, player_id: str, generator: Optional[BoardGenerator] = None
    ) -> Game:
        """Generate a board per side. The player moves first."""
        generator = generator or BoardGenerator()
        game = cls(
            game_id=uuid4(),
            player_id=player_id,
            player_board=generator.generate(),
            adversary_board=generator.generate(),
        )
        logger.info("Created game %s for player %s", game.game_id, player_id)
        return game

    @classmethod
    def from_model(cls, model: GameModel) -> Game:
        """Define how to construct a Game from the information the Service layer actually has"""

        # Validation
        if model.status not in Status.__members__.values():
            raise GameStateError(
                f"Invalid status code: {model.status!r}. \nPick one from {','.join(Status)}"
            )
        if model.turn_owner not in Side.__members__.values():
            raise GameStateError(
                f"Invalid turn owner: {model.turn_owner!r}. \nPick one from {','.join(Side)}"
            )

        return cls(
            game_id=model.game_id,
            player_id=model.player_id,
            player_board=Board.from_grid(model.player_board),
            adversary_board=Board.from_grid(model.adversary_board),
            shots_on_adversary=ShotRecord.from_dict(model.shots_on_adversary),
            shots_on_player=ShotRecord.from_dict(model.shots_on_player),
            status=Status(model.status),
            turn_owner=Side(model.turn_owner),
        )

    def to_model(self) -> GameModel:
        """Encode back into a format the Service layer uses"""
        return GameModel(
            game_id=self.game_id,
            player_id=self.player_id,
            player_board=self.player_board.to_grid(),
            adversary_board=self.adversary_board.to_grid(),
            shots_on_adversary=self.shots_on_adversary.to_dict(),
            shots_on_player=self.shots_on_player.to_dict(),
            status=self.status.value,
            turn_owner=self.turn_owner.value,
        )

    @property
    def winner(self) -> Optional[Side]:
        if self.status == Status.PLAYER_WON:
            return Side.PLAYER
        if self.status in (Status.ADVERSARY_WON, Status.SURRENDERED):
            return Side.ADVERSARY
        return None

    def fire(self, coordinate: Coordinate, side: Side) -> ShotOutcome:
        """
        Adjudicate a single shot by `side` at the opposing board.
        ----

        Raises GameNotActiveError, InvalidCoordinateError, NotYourTurnError, DuplicateShotError (via the shot record).
        Recording the outcome is the only change made; checking for the end of the game is up to the caller
        (see `is_fleet_sunk` / `play_turn`).
        """
        if self.status != Status.ACTIVE:
            raise GameNotActiveError(f"Game is not active. status: {self.status}")
        if not coordinate.is_within_bounds():
            raise InvalidCoordinateError(f"{coordinate!r} is outside the grid.")
        if side != self.turn_owner:
            raise NotYourTurnError(
                f"It is not the {side}'s turn. Waiting for the {self.turn_owner} to fire first."
            )

        target = self._target_board(side)
        outcome = ShotOutcome.HIT if target.has_ship(coordinate) else ShotOutcome.MISS
        self.shots_by(side).record(coordinate, outcome)
        return outcome

    def is_fleet_sunk(self, side: Side) -> bool:
        """Has `side` sunk every ship of its opponent?"""
        return is_fleet_sunk(self.shots_by(side), self._target_board(side))

    def play_turn(self, coordinate: Coordinate, adversary: AdversaryPolicy) -> TurnResult:
        """
        One player action: the player's shot, then (unless that won the game) the adversary's reply.
        ----

        1. player fires. A rejected shot (inactive game, duplicate) leaves the game untouched.
        2. player sank the fleet? --> player_won, no reply.
        3. adversary picks an untried coordinate and fires.
        4. adversary sank the fleet? --> adversary_won.
        5. turn goes back to the player.
        """
        player_outcome = self.fire(coordinate, Side.PLAYER)
        result = TurnResult(player_coordinate=coordinate, player_outcome=player_outcome)
        if self._finish_if_sunk(Side.PLAYER):
            result.winner = Side.PLAYER
            return result

        self.turn_owner = Side.ADVERSARY
        reply = adversary.choose_shot(self.shots_on_player)
        result.adversary_coordinate = reply
        result.adversary_outcome = self.fire(reply, Side.ADVERSARY)
        self.turn_owner = Side.PLAYER
        if self._finish_if_sunk(Side.ADVERSARY):
            result.winner = Side.ADVERSARY
        return result

    def surrender(self) -> None:
        if self.status != Status.ACTIVE:
            raise GameNotActiveError(f"Game is not active. status: {self.status}")
        self._change_status(Status.SURRENDERED)

    def shots_by(self, side: Side) -> ShotRecord:
        """The shot record of the shots `side` fired."""
        return self.shots_on_adversary if side == Side.PLAYER else self.shots_on_player

    # -- PRIVATE HELPERS ---
    def _target_board(self, side: Side) -> Board:
        return self.adversary_board if side == Side.PLAYER else self.player_board

    def _finish_if_sunk(self, side: Side) -> bool:
        if not self.is_fleet_sunk(side):
            return False
        self._change_status(WINNING_STATUS[side])
        return True

    def _change_status(self, status: Status) -> None:
        logger.info(
            "Game %s (player %s): %s -> %s",
            self.game_id,
            self.player_id,
            self.status,
            status,
        )
        self.status = status
