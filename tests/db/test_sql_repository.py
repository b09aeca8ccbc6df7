"""Unit tests for src/db/sql_repository.py"""

from uuid import uuid4

import pytest
from sqlalchemy.exc import OperationalError, SQLAlchemyError
from sqlalchemy.orm import Session

from src.core.exceptions import StorageError
from src.core.shared_types import Status
from src.db.sql_repository import GameModel, SQLGameRepository

EMPTY_GRID = [[0] * 10 for _ in range(10)]


def _model(player_id: str = "42", status: str = Status.ACTIVE) -> GameModel:
    """Mock game data"""
    board = [row[:] for row in EMPTY_GRID]
    board[0][0] = 1
    return GameModel(
        game_id=uuid4(),
        player_id=player_id,
        player_board=board,
        adversary_board=[row[:] for row in EMPTY_GRID],
        shots_on_adversary={"A1": "miss"},
        shots_on_player={"B2": "miss", "A1": "hit"},
        status=status,
        turn_owner="player",
    )


def test_save_new_game(db_session_repo: Session) -> None:
    """Conversion from a GameModel to DBGame for a new entry to the database."""
    model = _model()
    repo = SQLGameRepository(db_session_repo)
    stored = repo.save_game(model)
    assert isinstance(stored, GameModel)
    assert stored == model


def test_get_game_by_id(db_session_repo: Session) -> None:
    model = _model()
    repo = SQLGameRepository(db_session_repo)
    repo.save_game(model)
    assert repo.get_game(model.game_id) == model


def test_get_unknown_game(db_session_repo: Session) -> None:
    """
    Should return None if ID does not match anything in database.

    NOTE with an empty database, any id is a valid test case.
    """
    repo = SQLGameRepository(db_session_repo)
    assert repo.get_game(uuid4()) is None
    repo.save_game(_model())
    assert repo.get_game(uuid4()) is None


def test_update_game(db_session_repo: Session) -> None:
    """Saving again under the same ID replaces the whole record."""
    repo = SQLGameRepository(db_session_repo)
    model = _model()
    repo.save_game(model)

    model.shots_on_adversary = {"A1": "miss", "C3": "hit"}
    model.shots_on_player = {"B2": "miss", "A1": "hit", "J10": "miss"}
    model.status = Status.PLAYER_WON
    repo.save_game(model)

    found = repo.get_game(model.game_id)
    assert found == model
    assert found.status == "player_won"


def test_find_active(db_session_repo: Session) -> None:
    repo = SQLGameRepository(db_session_repo)
    finished = _model(status=Status.SURRENDERED)
    active = _model()
    someone_else = _model(player_id="7")
    for model in (finished, active, someone_else):
        repo.save_game(model)

    assert repo.find_active("42") == active
    assert repo.find_active("7") == someone_else
    assert repo.find_active("1000") is None


def test_terminal_game_is_not_active(db_session_repo: Session) -> None:
    repo = SQLGameRepository(db_session_repo)
    model = _model()
    repo.save_game(model)
    model.status = Status.ADVERSARY_WON
    repo.save_game(model)
    assert repo.find_active("42") is None
    assert repo.get_game(model.game_id) == model


def test_second_active_game_rejected(db_session_repo: Session) -> None:
    """The partial unique index keeps one active game per player. The failed write is rolled back."""
    repo = SQLGameRepository(db_session_repo)
    first = _model()
    repo.save_game(first)
    with pytest.raises(StorageError):
        repo.save_game(_model())
    assert repo.find_active("42") == first


def test_delete_active(db_session_repo: Session) -> None:
    repo = SQLGameRepository(db_session_repo)
    finished = _model(status=Status.PLAYER_WON)
    active = _model()
    repo.save_game(finished)
    repo.save_game(active)

    assert repo.delete_active("42") == active
    assert repo.get_game(active.game_id) is None
    assert repo.get_game(finished.game_id) == finished
    assert repo.delete_active("42") is None


def test_list_games(db_session_repo: Session) -> None:
    repo = SQLGameRepository(db_session_repo)
    finished = _model(status=Status.SURRENDERED)
    active = _model()
    repo.save_game(finished)
    repo.save_game(active)
    repo.save_game(_model(player_id="7"))

    games = repo.list_games("42")
    assert {game.game_id for game in games} == {finished.game_id, active.game_id}
    assert repo.list_games("nobody") == []


def _broken(*args, **kwargs):
    raise OperationalError("SELECT 1", {}, Exception("database is locked"))


def test_failed_commit_leaves_session_usable(
    db_session_repo: Session, monkeypatch: pytest.MonkeyPatch
) -> None:
    """A driver error on commit is rolled back and reported; the next save on the same session works."""
    repo = SQLGameRepository(db_session_repo)
    model = _model()

    monkeypatch.setattr(db_session_repo, "commit", _broken)
    with pytest.raises(StorageError) as exc_info:
        repo.save_game(model)
    assert isinstance(exc_info.value.__cause__, SQLAlchemyError)
    monkeypatch.undo()

    assert repo.get_game(model.game_id) is None
    assert repo.save_game(model) == model
    assert repo.find_active("42") == model


@pytest.mark.parametrize(
    "method, call",
    [
        ("scalar", lambda repo: repo.find_active("42")),
        ("get", lambda repo: repo.get_game(uuid4())),
        ("scalars", lambda repo: repo.list_games("42")),
    ],
)
def test_read_error_becomes_storage_error(
    db_session_repo: Session, monkeypatch: pytest.MonkeyPatch, method, call
) -> None:
    repo = SQLGameRepository(db_session_repo)
    saved = repo.save_game(_model())

    monkeypatch.setattr(db_session_repo, method, _broken)
    with pytest.raises(StorageError):
        call(repo)
    monkeypatch.undo()

    assert repo.find_active("42") == saved
