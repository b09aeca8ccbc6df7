"""Unit tests for src/db/database.py"""

from sqlalchemy import inspect

from src.db.database import build_engine, get_db, session_factory
from src.db.sql_repository import SQLGameRepository


def test_build_engine_creates_tables() -> None:
    engine = build_engine("sqlite://", echo=False)
    try:
        assert "games" in inspect(engine).get_table_names()
    finally:
        engine.dispose()


def test_get_db_yields_working_session() -> None:
    engine = build_engine("sqlite://", echo=False)
    sessions = get_db(session_factory(engine))
    try:
        db = next(sessions)
        assert SQLGameRepository(db).find_active("42") is None
    finally:
        sessions.close()
        engine.dispose()
