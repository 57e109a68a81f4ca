"""Riot API HTTP client. Every request goes through the shared RequestScheduler."""

import asyncio
import math
from typing import Optional, Dict, Any, Union

import httpx
import structlog

from ..config import get_global_settings
from .errors import (
    RiotAPIError,
    RateLimitError,
    AuthenticationError,
    ForbiddenError,
    NotFoundError,
    ServiceUnavailableError,
    BadRequestError,
)
from .models import AccountDTO, SummonerDTO, MatchListDTO
from .endpoints import RiotAPIEndpoints
from .constants import Region, Platform, QueueType, MAX_MATCH_PAGE_SIZE
from .scheduler import RequestScheduler

logger = structlog.get_logger(__name__)


class RiotAPIClient:
    """Typed Riot API operations built on top of the request scheduler."""

    def __init__(
        self,
        scheduler: RequestScheduler,
        api_key: Optional[str] = None,
        region: Optional[Region] = None,
        platform: Optional[Platform] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize Riot API client.

        Args:
            scheduler: Process-wide scheduler holding the shared request budget
            api_key: Riot API key (uses config if None)
            region: Default region for regional endpoints
            platform: Default platform for platform endpoints
            timeout: Total request timeout in seconds (uses config if None)
            transport: Optional httpx transport, used by tests
        """
        settings = get_global_settings()
        self.api_key = api_key or settings.riot_api_key
        self.region = region or Region(settings.riot_region.lower())
        self.platform = platform or Platform(settings.riot_platform.lower())
        self.timeout = timeout or settings.request_timeout
        self.default_retry_after = settings.rate_limit_default_retry_after

        self.scheduler = scheduler
        self.endpoints = RiotAPIEndpoints(self.region, self.platform)

        self._transport = transport
        self.session: Optional[httpx.AsyncClient] = None
        self._session_lock = asyncio.Lock()

    async def __aenter__(self):
        """Async context manager entry."""
        await self.start_session()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object | None,
    ) -> None:
        """Async context manager exit."""
        await self.close()

    async def start_session(self) -> None:
        """Start the httpx session."""
        if self.session is None or self.session.is_closed:
            async with self._session_lock:
                if self.session is None or self.session.is_closed:
                    headers = {
                        "X-Riot-Token": self.api_key,
                        "Content-Type": "application/json",
                        "User-Agent": "ArenaStats/1.0",
                    }

                    self.session = httpx.AsyncClient(
                        headers=headers,
                        timeout=httpx.Timeout(self.timeout),
                        transport=self._transport,
                    )

                    logger.info(
                        "Riot API client session started",
                        region=self._enum_str(self.region),
                        platform=self._enum_str(self.platform),
                        api_key_prefix="[REDACTED]" if self.api_key else "None",
                    )

    async def close(self) -> None:
        """Close the httpx session."""
        if self.session and not self.session.is_closed:
            await self.session.aclose()
            logger.info("Riot API client session closed")

    def _parse_retry_after(self, headers: httpx.Headers) -> float:
        """Read Retry-After in seconds, falling back to the configured default.

        Zero, negative and non-finite values count as missing, so a 429 never
        triggers an immediate retry.
        """
        try:
            retry_after = float(headers.get("Retry-After", ""))
        except ValueError:
            return self.default_retry_after
        if not math.isfinite(retry_after) or retry_after <= 0:
            return self.default_retry_after
        return retry_after

    def _raise_for_status(self, response: httpx.Response, resource: str) -> None:
        """Raise the RiotAPIError subclass matching a non-200 response."""
        status = response.status_code
        if status == 200:
            return
        if status == 429:
            raise RateLimitError(
                "Rate limit exceeded",
                status_code=status,
                retry_after=self._parse_retry_after(response.headers),
                app_rate_limit=response.headers.get("X-App-Rate-Limit"),
                method_rate_limit=response.headers.get("X-Method-Rate-Limit"),
            )
        if status == 400:
            raise BadRequestError("Invalid request parameters", status_code=status)
        if status == 401:
            raise AuthenticationError("Invalid API key", status_code=status)
        if status == 403:
            raise ForbiddenError("Access forbidden", status_code=status)
        if status == 404:
            raise NotFoundError(
                f"{resource.capitalize()} not found", status_code=status, resource=resource
            )
        if status == 503:
            raise ServiceUnavailableError("Service unavailable", status_code=status)
        raise RiotAPIError(f"Unexpected status {status}", status_code=status)

    async def _send(self, url: str, resource: str) -> Any:
        """Perform exactly one GET request and decode its JSON body."""
        if self.session is None:
            raise RiotAPIError("Session not initialized")

        try:
            response = await self.session.get(url)
        except httpx.RequestError as e:
            raise RiotAPIError(f"Request for {resource} failed: {str(e)}") from e

        try:
            self._raise_for_status(response, resource)
            return response.json()
        finally:
            await response.aclose()

    async def _make_request(self, url: str, resource: str) -> Any:
        """
        Schedule a GET request against the shared budget.

        Rate limited responses are retried by the scheduler; every other
        failure propagates to the caller.

        Args:
            url: Fully built endpoint URL
            resource: What the URL points at, used in NotFoundError messages

        Raises:
            RiotAPIError: For API errors
        """
        await self.start_session()
        return await self.scheduler.schedule(lambda: self._send(url, resource))

    @staticmethod
    def _enum_str(value: Union[Region, Platform, str]) -> str:
        """Extract string value from enum or return as-is."""
        return value.value if hasattr(value, "value") else value

    # Account endpoints
    async def get_account_by_riot_id(
        self, game_name: str, tag_line: str, region: Optional[Region] = None
    ) -> AccountDTO:
        """Get account by Riot ID (gameName#tagLine)."""
        url = self.endpoints.account_by_riot_id(game_name, tag_line, region)
        response = await self._make_request(url, "account")
        return AccountDTO(**response)

    # Summoner endpoints
    async def get_summoner_by_puuid(
        self, puuid: str, platform: Optional[Platform] = None
    ) -> SummonerDTO:
        """Get summoner by PUUID."""
        url = self.endpoints.summoner_by_puuid(puuid, platform)
        response = await self._make_request(url, "summoner")
        return SummonerDTO(**response)

    # Match endpoints
    async def get_match_ids_page(
        self,
        puuid: str,
        start: int = 0,
        count: int = MAX_MATCH_PAGE_SIZE,
        queue: Optional[Union[int, QueueType]] = None,
        start_time: Optional[int] = None,
        region: Optional[Region] = None,
    ) -> MatchListDTO:
        """Get one page of match ids by PUUID, most recent first."""
        url = self.endpoints.match_list_by_puuid(
            puuid,
            start=start,
            count=count,
            queue=queue,
            start_time=start_time,
            region=region,
        )
        match_ids = await self._make_request(url, "match history")
        return MatchListDTO(match_ids=match_ids, start=start, count=count, puuid=puuid)

    async def get_match(
        self, match_id: str, region: Optional[Region] = None
    ) -> Dict[str, Any]:
        """Get the raw match-v5 document for a match id."""
        url = self.endpoints.match_by_id(match_id, region)
        return await self._make_request(url, "match")
