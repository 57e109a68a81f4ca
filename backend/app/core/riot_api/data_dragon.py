"""Static champion reference served by Data Dragon."""

import asyncio
from typing import List, Optional

import httpx
import structlog

from .constants import DATA_DRAGON_BASE_URL
from .errors import RiotAPIError

logger = structlog.get_logger(__name__)


class DataDragonClient:
    """Fetches the champion roster for one game version.

    Data Dragon is a CDN and is not subject to the Riot API rate limit, so
    requests bypass the RequestScheduler. The roster is cached per instance.
    """

    def __init__(
        self,
        version: str,
        locale: str = "en_US",
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.version = version
        self.locale = locale
        self.timeout = timeout
        self._transport = transport
        self._roster: Optional[List[str]] = None
        self._lock = asyncio.Lock()

    @property
    def champion_url(self) -> str:
        return f"{DATA_DRAGON_BASE_URL}/{self.version}/data/{self.locale}/champion.json"

    async def get_champion_roster(self) -> List[str]:
        """Return every champion name, sorted alphabetically."""
        async with self._lock:
            if self._roster is None:
                self._roster = await self._fetch_roster()
            return list(self._roster)

    async def _fetch_roster(self) -> List[str]:
        async with httpx.AsyncClient(
            timeout=httpx.Timeout(self.timeout), transport=self._transport
        ) as session:
            try:
                response = await session.get(self.champion_url)
            except httpx.RequestError as e:
                raise RiotAPIError(f"Data Dragon request failed: {str(e)}") from e

        if response.status_code != 200:
            raise RiotAPIError(
                "Failed to load champion roster", status_code=response.status_code
            )

        roster = sorted(response.json()["data"].keys())
        logger.info(
            "Champion roster loaded", version=self.version, champions=len(roster)
        )
        return roster
