"""Shared fixtures: raw match-v5 documents and in-memory collaborators."""

from typing import Any, Callable, Dict, List, Optional, Sequence

import pytest

from app.core.riot_api.models import MatchListDTO
from app.features.matches.orm_models import MatchRecordORM
from app.features.matches.repository import MatchRepositoryInterface


def _participant(
    puuid: str,
    team_id: int,
    win: bool = False,
    placement: int = 4,
    champion: str = "Garen",
    summoner_name: Optional[str] = None,
) -> Dict[str, Any]:
    return {
        "puuid": puuid,
        "summonerName": summoner_name if summoner_name is not None else puuid.upper(),
        "riotIdGameName": puuid.capitalize(),
        "riotIdTagline": "EUW",
        "teamId": team_id,
        "playerSubteamId": team_id,
        "win": win,
        "placement": placement,
        "championName": champion,
    }


def _arena_match(match_id: str, participants: List[Dict[str, Any]]) -> Dict[str, Any]:
    return {
        "metadata": {
            "matchId": match_id,
            "participants": [p["puuid"] for p in participants],
        },
        "info": {
            "gameMode": "CHERRY",
            "queueId": 1700,
            "participants": participants,
        },
    }


@pytest.fixture
def participant() -> Callable[..., Dict[str, Any]]:
    """Build one participant entry."""
    return _participant


@pytest.fixture
def arena_match() -> Callable[..., Dict[str, Any]]:
    """Build a match document from participant entries."""
    return _arena_match


@pytest.fixture
def duo_match() -> Callable[..., Dict[str, Any]]:
    """Build a match where ``puuid`` shares team 1 with ``teammate``."""

    def build(
        match_id: str,
        puuid: str = "player",
        teammate: str = "mate",
        win: bool = True,
        placement: int = 1,
        champion: str = "Garen",
    ) -> Dict[str, Any]:
        return _arena_match(
            match_id,
            [
                _participant(puuid, 1, win, placement, champion),
                _participant(teammate, 1, win, placement, "Ahri"),
                _participant("enemy-a", 2, False, 5, "Zed"),
                _participant("enemy-b", 2, False, 5, "Lux"),
            ],
        )

    return build


class InMemoryMatchRepository(MatchRepositoryInterface):
    """Match cache store keeping records in a list."""

    def __init__(self, records: Optional[List[MatchRecordORM]] = None):
        self.records: List[MatchRecordORM] = list(records or [])
        self.upsert_calls: List[List[str]] = []

    async def find_by_player(self, puuid: str) -> List[MatchRecordORM]:
        return [record for record in self.records if record.puuid == puuid]

    async def upsert_many(self, records: Sequence[MatchRecordORM]) -> int:
        self.upsert_calls.append([record.match_id for record in records])
        stored = {(record.puuid, record.match_id) for record in self.records}
        inserted = 0
        for record in records:
            if (record.puuid, record.match_id) not in stored:
                self.records.append(record)
                stored.add((record.puuid, record.match_id))
                inserted += 1
        return inserted


class FakeMatchClient:
    """Riot client stand-in serving fixed match-id pages and documents."""

    def __init__(
        self,
        pages: List[List[str]],
        documents: Optional[Dict[str, Dict[str, Any]]] = None,
        failing_ids: Optional[Dict[str, Exception]] = None,
    ):
        self.pages = pages
        self.documents = documents or {}
        self.failing_ids = failing_ids or {}
        self.page_requests: List[Dict[str, Any]] = []
        self.match_requests: List[str] = []

    async def get_match_ids_page(
        self,
        puuid: str,
        start: int = 0,
        count: int = 100,
        queue: Optional[int] = None,
        start_time: Optional[int] = None,
    ) -> MatchListDTO:
        self.page_requests.append(
            {"puuid": puuid, "start": start, "count": count, "queue": queue, "start_time": start_time}
        )
        index = start // count
        match_ids = self.pages[index] if index < len(self.pages) else []
        return MatchListDTO(match_ids=match_ids, start=start, count=count, puuid=puuid)

    async def get_match(self, match_id: str) -> Dict[str, Any]:
        self.match_requests.append(match_id)
        if match_id in self.failing_ids:
            raise self.failing_ids[match_id]
        return self.documents.get(match_id, {"metadata": {"matchId": match_id}})


@pytest.fixture
def make_repository() -> Callable[..., InMemoryMatchRepository]:
    return InMemoryMatchRepository


@pytest.fixture
def make_client() -> Callable[..., FakeMatchClient]:
    return FakeMatchClient


def page_of(prefix: str, size: int) -> List[str]:
    """Distinct match ids ``{prefix}_0`` .. ``{prefix}_{size-1}``."""
    return [f"{prefix}_{i}" for i in range(size)]


@pytest.fixture
def make_page() -> Callable[[str, int], List[str]]:
    return page_of
