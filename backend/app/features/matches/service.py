"""Incremental match history fetching.

``MatchHistoryService`` walks a player's Arena match-id pages, fetches only
the matches the cache does not hold yet, persists them page by page and
returns the complete history (cached matches first, new matches after).
"""

import asyncio
from typing import Any, Dict, List, Optional, TYPE_CHECKING

import structlog

from app.core.riot_api.constants import MAX_MATCH_PAGE_SIZE

from .orm_models import MatchRecordORM
from .repository import MatchRepositoryInterface

if TYPE_CHECKING:
    from app.core.riot_api.client import RiotAPIClient

logger = structlog.get_logger(__name__)


class MatchHistoryService:
    """Fetch-and-cache orchestration for a single player's match history.

    Responsibilities:
    - Page through match ids until a short page is returned
    - Skip ids already cached for the player
    - Fetch new match documents concurrently through the scheduled client
    - Persist each page's batch before requesting the next page

    Any upstream or store error aborts the fetch. Batches persisted from
    earlier pages stay cached, so a retry resumes where the failure happened.
    """

    def __init__(
        self,
        repository: MatchRepositoryInterface,
        riot_client: "RiotAPIClient",
        page_size: int = MAX_MATCH_PAGE_SIZE,
        queue_id: Optional[int] = None,
        start_time: Optional[int] = None,
    ):
        """
        Initialize match history service.

        :param repository: Match cache store
        :param riot_client: Riot API client sharing the process-wide scheduler
        :param page_size: Ids requested per page; a shorter page ends pagination
        :param queue_id: Queue filter for the match-id listing
        :param start_time: Epoch seconds of the oldest match to list
        """
        self.repository = repository
        self.riot_client = riot_client
        self.page_size = page_size
        self.queue_id = queue_id
        self.start_time = start_time

    async def get_cached_matches(self, puuid: str) -> List[Dict[str, Any]]:
        """Return cached match documents without contacting the Riot API."""
        records = await self.repository.find_by_player(puuid)
        return [record.data for record in records]

    async def fetch_all_matches(
        self, puuid: str, player_name: str
    ) -> List[Dict[str, Any]]:
        """
        Bring the cache up to date and return the player's full history.

        Args:
            puuid: Player PUUID
            player_name: Riot ID stored alongside newly cached matches

        Returns:
            Cached match documents followed by newly fetched ones. The order
            does not follow upstream chronology.

        Raises:
            RiotAPIError: Upstream failures other than rate limiting
            StoreError: Persistence failures
        """
        existing = await self.repository.find_by_player(puuid)
        known_ids = {record.match_id for record in existing}
        new_records: list[MatchRecordORM] = []

        offset = 0
        pages = 0
        while True:
            page = await self.riot_client.get_match_ids_page(
                puuid,
                start=offset,
                count=self.page_size,
                queue=self.queue_id,
                start_time=self.start_time,
            )
            match_ids = page.match_ids
            pages += 1

            new_ids = self._unseen_ids(match_ids, known_ids)
            if new_ids:
                batch = await self._fetch_batch(puuid, player_name, new_ids)
                await self.repository.upsert_many(batch)
                new_records.extend(batch)
                known_ids.update(new_ids)

            logger.debug(
                "Match id page processed",
                puuid=puuid,
                offset=offset,
                page_ids=len(match_ids),
                new_ids=len(new_ids),
            )

            if len(match_ids) < self.page_size:
                break
            offset += self.page_size

        logger.info(
            "Match history synchronised",
            puuid=puuid,
            pages=pages,
            cached=len(existing),
            fetched=len(new_records),
        )

        return [record.data for record in existing] + [
            record.data for record in new_records
        ]

    @staticmethod
    def _unseen_ids(match_ids: List[str], known_ids: set[str]) -> List[str]:
        """Ids not cached yet, in page order, without repeats."""
        unseen: list[str] = []
        seen: set[str] = set()
        for match_id in match_ids:
            if match_id in known_ids or match_id in seen:
                continue
            seen.add(match_id)
            unseen.append(match_id)
        return unseen

    async def _fetch_batch(
        self, puuid: str, player_name: str, match_ids: List[str]
    ) -> List[MatchRecordORM]:
        """Fetch match documents concurrently; cancel the rest on first failure."""
        tasks = [
            asyncio.create_task(self.riot_client.get_match(match_id))
            for match_id in match_ids
        ]
        try:
            documents = await asyncio.gather(*tasks)
        except Exception as e:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            logger.warning(
                "Match batch fetch failed",
                puuid=puuid,
                batch_size=len(match_ids),
                error=str(e),
                error_type=type(e).__name__,
            )
            raise

        return [
            MatchRecordORM(
                puuid=puuid,
                player_name=player_name,
                match_id=match_id,
                data=document,
            )
            for match_id, document in zip(match_ids, documents)
        ]
