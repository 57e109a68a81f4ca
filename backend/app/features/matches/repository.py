"""Repository pattern implementation for the match cache.

The cache only ever grows: records are inserted once per ``(puuid, match_id)``
and never updated or deleted, because finished matches do not change.
"""

from abc import ABC, abstractmethod
from typing import Sequence

import structlog
from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert as postgresql_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import StoreError

from .orm_models import MatchRecordORM

logger = structlog.get_logger(__name__)


class MatchRepositoryInterface(ABC):
    """Interface for the match cache store."""

    @abstractmethod
    async def find_by_player(self, puuid: str) -> list[MatchRecordORM]:
        """Get every cached match for a player.

        Args:
            puuid: Player PUUID

        Returns:
            Cached records in insertion order
        """
        pass

    @abstractmethod
    async def upsert_many(self, records: Sequence[MatchRecordORM]) -> int:
        """Insert records whose ``(puuid, match_id)`` is not cached yet.

        Args:
            records: Records to persist

        Returns:
            Number of rows actually inserted
        """
        pass


class SQLAlchemyMatchRepository(MatchRepositoryInterface):
    """SQLAlchemy implementation of the match cache store."""

    def __init__(self, db: AsyncSession):
        """Initialize repository with database session.

        Args:
            db: SQLAlchemy async session
        """
        self.db = db

    async def find_by_player(self, puuid: str) -> list[MatchRecordORM]:
        """Get every cached match for a player."""
        stmt = (
            select(MatchRecordORM)
            .where(MatchRecordORM.puuid == puuid)
            .order_by(MatchRecordORM.id)
        )

        try:
            result = await self.db.execute(stmt)
        except SQLAlchemyError as e:
            raise StoreError(
                "Failed to load cached matches", {"puuid": puuid, "error": str(e)}
            ) from e

        records = list(result.scalars().all())
        logger.debug("cached_matches_loaded", puuid=puuid, count=len(records))
        return records

    async def upsert_many(self, records: Sequence[MatchRecordORM]) -> int:
        """Insert records, skipping ``(puuid, match_id)`` pairs already stored."""
        if not records:
            return 0

        stmt = (
            self._insert()
            .values([record.to_row() for record in records])
            .on_conflict_do_nothing(index_elements=["puuid", "match_id"])
        )

        try:
            result = await self.db.execute(stmt)
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise StoreError(
                "Failed to persist matches",
                {"count": len(records), "error": str(e)},
            ) from e

        inserted = max(result.rowcount or 0, 0)
        logger.info(
            "matches_persisted",
            requested=len(records),
            inserted=inserted,
        )
        return inserted

    def _insert(self):
        """Dialect specific INSERT supporting ON CONFLICT DO NOTHING."""
        dialect = self.db.get_bind().dialect.name
        if dialect == "postgresql":
            return postgresql_insert(MatchRecordORM)
        if dialect == "sqlite":
            return sqlite_insert(MatchRecordORM)
        raise StoreError(f"Unsupported database dialect: {dialect}")
