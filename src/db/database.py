"""Generate database session"""

from typing import Iterator

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker

from src.core import config
from src.db.schema import Base


def build_engine(url: str = config.DATABASE_URL, echo: bool = config.DB_ECHO) -> Engine:
    """Create the engine and make sure all tables exist."""
    # sessions get handed to the storage worker thread (see TimedGameRepository)
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    engine = create_engine(url, echo=echo, connect_args=connect_args)
    Base.metadata.create_all(bind=engine)
    return engine


def session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(bind=engine)


def get_db(factory: sessionmaker[Session]) -> Iterator[Session]:
    db = factory()
    try:
        yield db
    finally:
        db.close()
