"""Dependencies for the matches feature.

Injects repository and Riot client into the match history service.
"""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.dependencies import RiotClientDep, SettingsDep

from .repository import MatchRepositoryInterface, SQLAlchemyMatchRepository
from .service import MatchHistoryService


async def get_match_repository(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> MatchRepositoryInterface:
    """Get match repository instance.

    :param db: Database session
    :returns: Match repository implementation
    """
    return SQLAlchemyMatchRepository(db)


async def get_match_history_service(
    repository: Annotated[MatchRepositoryInterface, Depends(get_match_repository)],
    riot_client: RiotClientDep,
    settings: SettingsDep,
) -> MatchHistoryService:
    """Get match history service configured for Arena matches.

    :param repository: Match repository
    :param riot_client: Riot API client sharing the process-wide scheduler
    :param settings: Application settings
    :returns: Match history service with injected dependencies
    """
    return MatchHistoryService(
        repository,
        riot_client,
        page_size=settings.match_page_size,
        queue_id=settings.arena_queue_id,
        start_time=settings.arena_start_time,
    )


# Type aliases for cleaner dependency injection
MatchRepositoryDep = Annotated[MatchRepositoryInterface, Depends(get_match_repository)]
MatchHistoryServiceDep = Annotated[
    MatchHistoryService, Depends(get_match_history_service)
]

__all__ = [
    "get_match_repository",
    "get_match_history_service",
    "MatchRepositoryDep",
    "MatchHistoryServiceDep",
]
