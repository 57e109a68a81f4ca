"""Dependencies for the stats feature."""

from typing import Annotated

from fastapi import Depends

from app.core.dependencies import DataDragonDep, RiotClientDep
from app.features.matches.dependencies import MatchHistoryServiceDep

from .service import PlayerStatsService


async def get_player_stats_service(
    riot_client: RiotClientDep,
    match_history: MatchHistoryServiceDep,
    data_dragon: DataDragonDep,
) -> PlayerStatsService:
    """Get player stats service instance.

    :param riot_client: Riot API client
    :param match_history: Incremental match history fetcher
    :param data_dragon: Champion roster source
    :returns: Player stats service with injected dependencies
    """
    return PlayerStatsService(riot_client, match_history, data_dragon)


PlayerStatsServiceDep = Annotated[PlayerStatsService, Depends(get_player_stats_service)]

__all__ = ["get_player_stats_service", "PlayerStatsServiceDep"]
