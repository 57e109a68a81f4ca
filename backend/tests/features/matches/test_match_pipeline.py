"""End-to-end match history fetch through the real client and scheduler.

The Riot API is replaced by an httpx MockTransport; everything between the
service and the transport (scheduler admission, 429 retry, status mapping)
runs for real.
"""

import asyncio

import httpx
import pytest_asyncio

from app.core.riot_api.client import RiotAPIClient
from app.core.riot_api.constants import Platform, Region
from app.core.riot_api.scheduler import RequestScheduler
from app.features.matches.service import MatchHistoryService


class ArenaUpstream:
    """Serves match id pages and match documents, tracking concurrent detail requests."""

    def __init__(self, pages, rate_limited_ids=(), latency=0.02):
        self.pages = pages
        self.rate_limited_ids = set(rate_limited_ids)
        self.latency = latency
        self.match_requests: list[str] = []
        self.in_flight = 0
        self.peak_in_flight = 0

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path
        if path.endswith("/ids"):
            start = int(request.url.params["start"])
            count = int(request.url.params["count"])
            index = start // count
            page = self.pages[index] if index < len(self.pages) else []
            return httpx.Response(200, json=page)

        match_id = path.rsplit("/", 1)[-1]
        self.match_requests.append(match_id)
        if match_id in self.rate_limited_ids:
            self.rate_limited_ids.discard(match_id)
            return httpx.Response(429, headers={"Retry-After": "0.05"})

        self.in_flight += 1
        self.peak_in_flight = max(self.peak_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.latency)
        finally:
            self.in_flight -= 1
        return httpx.Response(200, json={"metadata": {"matchId": match_id}})


ARENA_PAGES = [
    ["EUW1_1", "EUW1_2", "EUW1_3", "EUW1_4", "EUW1_5"],
    ["EUW1_6", "EUW1_7"],
]


@pytest_asyncio.fixture
async def build_pipeline(make_repository):
    clients: list[RiotAPIClient] = []

    def build(upstream: ArenaUpstream, max_concurrent: int):
        scheduler = RequestScheduler(
            reservoir=50,
            refresh_amount=50,
            refresh_interval=1.0,
            max_concurrent=max_concurrent,
            min_time=0,
            default_retry_after=0.05,
        )
        client = RiotAPIClient(
            scheduler=scheduler,
            api_key="test_api_key",
            region=Region.EUROPE,
            platform=Platform.EUW1,
            transport=httpx.MockTransport(upstream),
        )
        clients.append(client)
        repository = make_repository()
        service = MatchHistoryService(
            repository, client, page_size=5, queue_id=1700, start_time=1709247600
        )
        return service, scheduler, repository

    yield build

    for client in clients:
        await client.close()


async def test_page_details_fetched_concurrently(build_pipeline):
    """Test detail requests of one page overlap, bounded by max_concurrent"""
    upstream = ArenaUpstream(ARENA_PAGES)
    service, _, repository = build_pipeline(upstream, max_concurrent=3)

    matches = await service.fetch_all_matches("player", "Player#EUW")

    assert len(matches) == 7
    assert 1 < upstream.peak_in_flight <= 3
    assert len(repository.records) == 7


async def test_single_slot_serialises_details(build_pipeline):
    """Test max_concurrent=1 never has two detail requests in flight"""
    upstream = ArenaUpstream(ARENA_PAGES)
    service, _, _ = build_pipeline(upstream, max_concurrent=1)

    await service.fetch_all_matches("player", "Player#EUW")

    assert upstream.peak_in_flight == 1


async def test_rate_limit_mid_batch_is_absorbed(build_pipeline):
    """Test a 429 on one match of a batch is retried and the fetch completes"""
    upstream = ArenaUpstream(ARENA_PAGES, rate_limited_ids={"EUW1_3"})
    service, scheduler, repository = build_pipeline(upstream, max_concurrent=3)

    matches = await service.fetch_all_matches("player", "Player#EUW")

    assert [m["metadata"]["matchId"] for m in matches] == [
        "EUW1_1",
        "EUW1_2",
        "EUW1_3",
        "EUW1_4",
        "EUW1_5",
        "EUW1_6",
        "EUW1_7",
    ]
    assert upstream.match_requests.count("EUW1_3") == 2
    assert scheduler.stats.rate_limited == 1
    # 2 pages + 7 matches + 1 retry
    assert scheduler.stats.admitted == 10
    assert sorted(r.match_id for r in repository.records) == sorted(
        sum(ARENA_PAGES, [])
    )
