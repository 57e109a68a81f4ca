"""Player statistics service.

Entry point used by the route layer: resolves the Riot ID to a PUUID, brings
the match cache up to date and runs the aggregation functions.
"""

import asyncio
from typing import Any, Dict, List, Optional, Protocol, Tuple, TYPE_CHECKING

import structlog

from app.core.riot_api.errors import NotFoundError
from app.core.riot_api.models import AccountDTO
from app.features.matches.service import MatchHistoryService

from . import aggregation
from .schemas import ChampionProgressResponse, TeammateWinRateResponse

if TYPE_CHECKING:
    from app.core.riot_api.client import RiotAPIClient

logger = structlog.get_logger(__name__)


class ChampionRosterSource(Protocol):
    """Anything able to list the full champion roster."""

    async def get_champion_roster(self) -> List[str]: ...


class PlayerStatsService:
    """Computes Arena statistics for a Riot ID.

    Every operation raises ``NotFoundError`` when the account does not exist
    and lets any other upstream or store error propagate.
    """

    def __init__(
        self,
        riot_client: "RiotAPIClient",
        match_history: MatchHistoryService,
        roster_source: ChampionRosterSource,
    ):
        """
        Initialize player stats service.

        :param riot_client: Riot API client used for account and summoner lookups
        :param match_history: Incremental match fetcher
        :param roster_source: Static champion reference
        """
        self.riot_client = riot_client
        self.match_history = match_history
        self.roster_source = roster_source

    async def _load_history(
        self, game_name: str, tag_line: str
    ) -> Tuple[AccountDTO, List[Dict[str, Any]]]:
        account = await self.riot_client.get_account_by_riot_id(game_name, tag_line)
        structlog.contextvars.bind_contextvars(puuid=account.puuid)
        matches = await self.match_history.fetch_all_matches(
            account.puuid, account.riot_id
        )
        return account, matches

    async def get_all_matches(
        self, game_name: str, tag_line: str
    ) -> List[Dict[str, Any]]:
        """Return every Arena match document for the player."""
        _, matches = await self._load_history(game_name, tag_line)
        return matches

    async def get_teammate_win_rates(
        self, game_name: str, tag_line: str, include_icons: bool = False
    ) -> List[TeammateWinRateResponse]:
        """
        Win rate with each frequent teammate, most shared games first.

        Args:
            game_name: Riot ID game name
            tag_line: Riot ID tag line
            include_icons: Look up each teammate's profile icon (one extra
                scheduled request per teammate)
        """
        account, matches = await self._load_history(game_name, tag_line)
        stats = aggregation.teammate_win_rates(matches, account.puuid)

        icons: Dict[str, Optional[int]] = {}
        if include_icons and stats:
            icons = await self._profile_icons([stat.puuid for stat in stats])

        logger.info(
            "Teammate win rates computed",
            puuid=account.puuid,
            matches=len(matches),
            teammates=len(stats),
        )

        return [
            TeammateWinRateResponse(
                puuid=stat.puuid,
                summoner_name=stat.summoner_name,
                win_rate=stat.win_rate,
                total_games=stat.total,
                profile_icon_id=icons.get(stat.puuid),
            )
            for stat in stats
        ]

    async def get_champions_played(
        self, game_name: str, tag_line: str
    ) -> ChampionProgressResponse:
        """Roster split by champions the player has played."""
        account, matches = await self._load_history(game_name, tag_line)
        played = aggregation.champions_played(matches, account.puuid)
        return await self._champion_progress(played)

    async def get_champions_won(
        self, game_name: str, tag_line: str
    ) -> ChampionProgressResponse:
        """Roster split by champions the player has won a game with."""
        account, matches = await self._load_history(game_name, tag_line)
        won = aggregation.champions_won(matches, account.puuid)
        return await self._champion_progress(won)

    async def _champion_progress(self, selected: set[str]) -> ChampionProgressResponse:
        roster = await self.roster_source.get_champion_roster()
        progress = aggregation.partition_roster(roster, selected)
        return ChampionProgressResponse(
            roster=progress.roster,
            completed=progress.completed,
            remaining=progress.remaining,
            completed_count=len(progress.completed),
            total_count=len(progress.roster),
        )

    async def _profile_icons(self, puuids: List[str]) -> Dict[str, Optional[int]]:
        """Profile icon per PUUID; None for players missing on this platform."""
        results = await asyncio.gather(
            *(self._profile_icon(puuid) for puuid in puuids)
        )
        return dict(zip(puuids, results))

    async def _profile_icon(self, puuid: str) -> Optional[int]:
        try:
            summoner = await self.riot_client.get_summoner_by_puuid(puuid)
        except NotFoundError:
            logger.warning("Summoner not found on platform", puuid=puuid)
            return None
        return summoner.profile_icon_id
