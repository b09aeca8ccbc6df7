"""Orchestration of communication from the transport to business logic and persistence layers (and the reverse direction)."""

import logging
from typing import Callable, Optional

from sqlalchemy.orm import Session

from src.api.models import (
    FireShotRequest,
    GameResponse,
    GameSummary,
    GetGameRequest,
    HistoryResponse,
    NewGameRequest,
    ShotResponse,
    SurrenderRequest,
)
from src.battleship.adversary import AdversaryPolicy, RandomAdversary
from src.battleship.coordinate import Coordinate
from src.battleship.game import Game, TurnResult
from src.battleship.generator import BoardGenerator
from src.core.exceptions import (
    ActiveGameExistsError,
    DuplicateShotError,
    GameNotActiveError,
    InvalidCoordinateError,
    StorageTimeoutError,
)
from src.core.models import GameModel
from src.core.shared_types import ResultOutcome, Side
from src.db.repository import GameRepository
from src.db.sql_repository import SQLGameRepository
from src.db.timed_repository import TimedGameRepository
from src.services.player_locks import PlayerLocks

logger = logging.getLogger(__name__)

# One guard per process: services built per request must still see each other's in-flight players
PLAYER_LOCKS = PlayerLocks()


class BattleshipService:
    """Orchestration of layers for a game against the computer."""

    def __init__(
        self,
        repository: GameRepository,
        generator: Optional[BoardGenerator] = None,
        adversary_factory: Optional[Callable[[], AdversaryPolicy]] = None,
        locks: Optional[PlayerLocks] = None,
    ) -> None:
        self.repo = repository
        self.generator = generator or BoardGenerator()
        self.adversary_factory = adversary_factory or RandomAdversary
        self.locks = locks or PLAYER_LOCKS

    # -- Transport operations ---
    def new_game(self, request: NewGameRequest) -> GameResponse:
        """Player asked to start a game. Rejected while an earlier game is still active."""
        with self.locks.hold(request.player_id):
            existing = self.repo.find_active(request.player_id)
            if existing is not None:
                raise ActiveGameExistsError(
                    f"Player {request.player_id} already has an active game ({existing.game_id}). Finish or surrender it first."
                )

            game = Game.new_game(request.player_id, self.generator)
            uncertain = self._persist(game)
            return self._create_game_response(game, uncertain)

    def fire_shot(self, request: FireShotRequest) -> ShotResponse:
        """
        Player fires at the adversary board; unless that ends the game the adversary fires back.
        ----

        Bad or repeated coordinates come back as an 'invalid' / 'duplicate' result and change nothing.
        """
        with self.locks.hold(request.player_id):
            game = Game.from_model(self._fetch_active(request.player_id))

            try:
                coordinate = Coordinate.from_notation(request.coordinate)
                turn = game.play_turn(coordinate, self.adversary_factory())
            except InvalidCoordinateError as exc:
                logger.info(
                    "Player %s: invalid shot %r", request.player_id, request.coordinate
                )
                return ShotResponse(outcome=ResultOutcome.INVALID, detail=str(exc))
            except DuplicateShotError as exc:
                logger.info(
                    "Player %s: repeated shot %s", request.player_id, request.coordinate
                )
                return ShotResponse(
                    outcome=ResultOutcome.DUPLICATE,
                    coordinate=request.coordinate,
                    detail=str(exc),
                )

            uncertain = self._persist(game)
            return self._create_shot_response(turn, uncertain)

    def surrender(self, request: SurrenderRequest) -> ShotResponse:
        """Player gives up. The game is kept (for history) but no longer active."""
        with self.locks.hold(request.player_id):
            game = Game.from_model(self._fetch_active(request.player_id))
            game.surrender()
            uncertain = self._persist(game)
            return ShotResponse(
                outcome=ResultOutcome.GAME_OVER,
                winner=Side.ADVERSARY,
                persistence_uncertain=uncertain,
            )

    def get_game(self, request: GetGameRequest) -> GameResponse:
        """Current state of the player's active game."""
        game = Game.from_model(self._fetch_active(request.player_id))
        return self._create_game_response(game)

    def game_history(self, request: GetGameRequest) -> HistoryResponse:
        """All games of the player, newest first."""
        models = self.repo.list_games(request.player_id)
        games = [Game.from_model(model) for model in models]
        return HistoryResponse(
            player_id=request.player_id,
            games=[
                GameSummary(
                    game_id=game.game_id,
                    status=game.status,
                    winner=game.winner,
                    shots_fired=len(game.shots_on_adversary),
                    shots_received=len(game.shots_on_player),
                )
                for game in games
            ],
        )

    def discard_game(self, request: SurrenderRequest) -> None:
        """Drop the active game without recording a result."""
        with self.locks.hold(request.player_id):
            removed = self.repo.delete_active(request.player_id)
            if removed is None:
                raise GameNotActiveError(f"Player {request.player_id} has no active game.")
            logger.info(
                "Discarded game %s of player %s", removed.game_id, request.player_id
            )

    # -- Internal helpers --
    def _persist(self, game: Game) -> bool:
        """
        Save the game. Returns True when the store did not confirm in time.

        A timeout does not undo the adjudication: the caller gets the result, flagged as uncertain.
        Any other StorageError propagates, and the request counts as not having happened.
        """
        try:
            self.repo.save_game(game.to_model())
        except StorageTimeoutError:
            logger.warning("Save of game %s timed out; outcome unknown", game.game_id)
            return True
        return False

    def _fetch_active(self, player_id: str) -> GameModel:
        """Attempt to find the player's active game and raise error if there is none."""
        game_model = self.repo.find_active(player_id)
        if game_model is None:
            raise GameNotActiveError(f"Player {player_id} has no active game.")
        return game_model

    def _create_game_response(self, game: Game, uncertain: bool = False) -> GameResponse:
        return GameResponse(
            game_id=game.game_id,
            player_id=game.player_id,
            status=game.status,
            turn_owner=game.turn_owner,
            player_board=game.player_board.to_grid(),
            shots_on_adversary=game.shots_on_adversary.to_dict(),
            shots_on_player=game.shots_on_player.to_dict(),
            winner=game.winner,
            persistence_uncertain=uncertain,
        )

    def _create_shot_response(self, turn: TurnResult, uncertain: bool) -> ShotResponse:
        return ShotResponse(
            outcome=ResultOutcome(turn.player_outcome.value),
            coordinate=turn.player_coordinate.to_notation(),
            winner=turn.winner,
            adversary_coordinate=(
                turn.adversary_coordinate.to_notation()
                if turn.adversary_coordinate is not None
                else None
            ),
            adversary_outcome=turn.adversary_outcome,
            persistence_uncertain=uncertain,
        )


def build_service(db_session: Session) -> BattleshipService:
    """
    Default wiring: SQL store behind the storage timeout, generator settings from config.

    Cheap enough to call once per request with a fresh session: the storage worker thread and the
    per-player guard are process-wide, only the session is per request.
    """
    repository = TimedGameRepository(SQLGameRepository(db_session))
    return BattleshipService(repository, locks=PLAYER_LOCKS)
