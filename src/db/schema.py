"""Database tables / schema"""

from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy import JSON, Index, String, text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

ACTIVE_ONLY = text("status = 'active'")


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class DBGame(Base):
    """One row per match. Boards and shot records are JSON so a save is a single-row write."""

    __tablename__ = "games"
    __table_args__ = (
        # at most one active game per player
        Index(
            "ix_games_one_active_per_player",
            "player_id",
            unique=True,
            sqlite_where=ACTIVE_ONLY,
            postgresql_where=ACTIVE_ONLY,
        ),
    )

    id: Mapped[UUID] = mapped_column(primary_key=True)
    player_id: Mapped[str] = mapped_column(String(64), index=True)
    player_board: Mapped[list[list[int]]] = mapped_column(JSON)
    adversary_board: Mapped[list[list[int]]] = mapped_column(JSON)
    shots_on_adversary: Mapped[dict[str, str]] = mapped_column(JSON, default=dict)
    shots_on_player: Mapped[dict[str, str]] = mapped_column(JSON, default=dict)
    status: Mapped[str] = mapped_column(String(16))
    turn_owner: Mapped[str] = mapped_column(String(16))
    created_at: Mapped[datetime] = mapped_column(default=utc_now)
    updated_at: Mapped[datetime] = mapped_column(default=utc_now, onupdate=utc_now)
