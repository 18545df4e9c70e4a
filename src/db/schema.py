"""Database tables / schema"""

from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy import JSON
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class DBGame(Base):
    __tablename__ = "games"
    id: Mapped[UUID] = mapped_column(primary_key=True)
    rows: Mapped[int]
    cols: Mapped[int]
    cell_size: Mapped[float]
    wall_thickness: Mapped[float]
    current_player: Mapped[str]
    status: Mapped[str]
    claimed_walls: Mapped[dict[str, str]] = mapped_column(JSON, default=dict)
    claimed_squares: Mapped[dict[str, str]] = mapped_column(JSON, default=dict)
    created_at: Mapped[datetime] = mapped_column(default=utc_now)
    updated_at: Mapped[datetime] = mapped_column(default=utc_now, onupdate=utc_now)
