"""Database tables / schema"""

from datetime import datetime, timezone
from typing import Any, Optional
from uuid import UUID

from sqlalchemy import JSON, DateTime
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class DBGame(Base):
    __tablename__ = "games"
    id: Mapped[UUID] = mapped_column(primary_key=True)
    # 100 cells, each stored as {"rank": ..., "owner": ..., "revealed": ...}
    board: Mapped[list[dict[str, Any]]] = mapped_column(JSON)
    host_player_id: Mapped[Optional[str]]
    guest_player_id: Mapped[Optional[str]]
    status: Mapped[str]
    winner: Mapped[Optional[str]]
    # bumped on every update, used to reject writes based on a stale read
    version: Mapped[int] = mapped_column(default=0)
    expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), index=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, onupdate=utc_now
    )
