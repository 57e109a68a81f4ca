"""Route tests for the Arena statistics endpoints."""

from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from app.core.riot_api.errors import NotFoundError, RiotAPIError
from app.core.exceptions import StoreError
from app.features.stats.dependencies import get_player_stats_service
from app.features.stats.router import GENERIC_ERROR
from app.features.stats.schemas import (
    ChampionProgressResponse,
    TeammateWinRateResponse,
)
from app.features.stats.service import PlayerStatsService
from app.main import app


@pytest.fixture
def stats_service():
    return AsyncMock(spec=PlayerStatsService)


@pytest.fixture
def client(stats_service):
    app.dependency_overrides[get_player_stats_service] = lambda: stats_service
    yield TestClient(app)
    app.dependency_overrides.clear()


def progress() -> ChampionProgressResponse:
    return ChampionProgressResponse(
        roster=["Ahri", "Garen", "Zed"],
        completed=["Ahri"],
        remaining=["Garen", "Zed"],
        completed_count=1,
        total_count=3,
    )


@pytest.mark.parametrize("prefix", ["", "/api/v1/arena"])
def test_all_arena_games(client, stats_service, prefix):
    stats_service.get_all_matches.return_value = [{"metadata": {"matchId": "M1"}}]

    response = client.get(f"{prefix}/getAllArenaGames/Player/EUW")

    assert response.status_code == 200
    assert response.json() == [{"metadata": {"matchId": "M1"}}]
    stats_service.get_all_matches.assert_awaited_once_with("Player", "EUW")


def test_win_rate_uses_camel_case(client, stats_service):
    stats_service.get_teammate_win_rates.return_value = [
        TeammateWinRateResponse(
            puuid="mate", summoner_name="Mate", win_rate="66.67", total_games=3
        )
    ]

    response = client.get("/getArenaWinRate/Player/EUW")

    assert response.status_code == 200
    assert response.json() == [
        {
            "puuid": "mate",
            "summonerName": "Mate",
            "winRate": "66.67",
            "totalGames": 3,
            "profileIconId": None,
        }
    ]
    stats_service.get_teammate_win_rates.assert_awaited_once_with(
        "Player", "EUW", False
    )


def test_win_rate_with_icons(client, stats_service):
    stats_service.get_teammate_win_rates.return_value = []

    response = client.get("/getArenaWinRate/Player/EUW?include_icons=true")

    assert response.status_code == 200
    stats_service.get_teammate_win_rates.assert_awaited_once_with(
        "Player", "EUW", True
    )


def test_champions_played(client, stats_service):
    stats_service.get_champions_played.return_value = progress()

    response = client.get("/getChampionsPlayed/Player/EUW")

    assert response.status_code == 200
    body = response.json()
    assert body["completed"] == ["Ahri"]
    assert body["completedCount"] == 1
    assert body["totalCount"] == 3


def test_champions_won(client, stats_service):
    stats_service.get_champions_won.return_value = progress()

    response = client.get("/api/v1/arena/getChampionsWon/Player/EUW")

    assert response.status_code == 200
    assert response.json()["remaining"] == ["Garen", "Zed"]


def test_unknown_player_is_404(client, stats_service):
    stats_service.get_champions_won.side_effect = NotFoundError(
        "Resource not found", status_code=404
    )

    response = client.get("/getChampionsWon/Nobody/0000")

    assert response.status_code == 404
    assert response.json()["detail"] == "Player Nobody#0000 not found"


@pytest.mark.parametrize(
    "error",
    [
        RiotAPIError("Unexpected status 500", status_code=500),
        StoreError("Failed to persist matches"),
    ],
)
def test_other_failures_are_500(client, stats_service, error):
    stats_service.get_all_matches.side_effect = error

    response = client.get("/getAllArenaGames/Player/EUW")

    assert response.status_code == 500
    assert response.json() == {"detail": GENERIC_ERROR}


def test_route_listing(client):
    response = client.get("/")

    assert response.status_code == 200
    assert "/getArenaWinRate/{game_name}/{tag_line}" in response.text
    assert "/api/v1/arena/getChampionsPlayed/{game_name}/{tag_line}" in response.text


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
