"""SQLAlchemy 2.0 ORM models for the match cache.

A match record is one raw match-v5 document cached for one player. The same
match is stored once per player that requested it; ``(puuid, match_id)`` is
unique so concurrent writers cannot create duplicates.
"""

from datetime import datetime
from typing import Any

from sqlalchemy import (
    JSON,
    BigInteger,
    DateTime as SQLDateTime,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from app.core.models import Base

# BIGSERIAL on PostgreSQL; SQLite only auto-increments INTEGER primary keys
RecordIdType = BigInteger().with_variant(Integer(), "sqlite")
MatchDataType = JSON().with_variant(JSONB(), "postgresql")


class MatchRecordORM(Base):
    """Cached match document owned by one player."""

    __tablename__ = "match_records"
    __table_args__ = (
        UniqueConstraint("puuid", "match_id", name="uq_match_records_puuid_match_id"),
    )

    id: Mapped[int] = mapped_column(
        RecordIdType,
        primary_key=True,
        autoincrement=True,
    )

    puuid: Mapped[str] = mapped_column(
        String(78),
        nullable=False,
        index=True,
        comment="Riot PUUID of the player whose history contains the match",
    )

    player_name: Mapped[str] = mapped_column(
        String(64),
        nullable=False,
        comment="Riot ID (gameName#tagLine) at the time the match was fetched",
    )

    match_id: Mapped[str] = mapped_column(
        String(64),
        nullable=False,
        comment="Unique match identifier from Riot API",
    )

    data: Mapped[dict[str, Any]] = mapped_column(
        MatchDataType,
        nullable=False,
        comment="Raw match-v5 document",
    )

    created_at: Mapped[datetime] = mapped_column(
        SQLDateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        comment="When this match record was cached",
    )

    def to_row(self) -> dict[str, Any]:
        """Column values used for bulk inserts."""
        return {
            "puuid": self.puuid,
            "player_name": self.player_name,
            "match_id": self.match_id,
            "data": self.data,
        }

    def __repr__(self) -> str:
        return f"<MatchRecordORM(puuid='{self.puuid}', match_id='{self.match_id}')>"
