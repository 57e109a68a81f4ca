"""
Tests for the Data Dragon champion roster client.
"""

import httpx
import pytest

from app.core.riot_api.data_dragon import DataDragonClient
from app.core.riot_api.errors import RiotAPIError


def champion_payload(*names: str) -> dict:
    return {"type": "champion", "data": {name: {"id": name} for name in names}}


class TestDataDragonClient:
    """Roster loading and caching."""

    def test_champion_url(self):
        """Test the roster URL embeds version and locale."""
        client = DataDragonClient(version="14.10.1")
        assert client.champion_url == (
            "https://ddragon.leagueoflegends.com/cdn/14.10.1/data/en_US/champion.json"
        )

    @pytest.mark.asyncio
    async def test_roster_is_sorted(self):
        """Test champion keys are returned in alphabetical order."""
        transport = httpx.MockTransport(
            lambda request: httpx.Response(
                200, json=champion_payload("Zed", "Ahri", "Garen")
            )
        )
        client = DataDragonClient(version="14.10.1", transport=transport)

        assert await client.get_champion_roster() == ["Ahri", "Garen", "Zed"]

    @pytest.mark.asyncio
    async def test_roster_fetched_once(self):
        """Test the roster is cached after the first request."""
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(200, json=champion_payload("Ahri"))

        client = DataDragonClient(
            version="14.10.1", transport=httpx.MockTransport(handler)
        )

        await client.get_champion_roster()
        await client.get_champion_roster()

        assert len(calls) == 1

    @pytest.mark.asyncio
    async def test_cached_roster_is_a_copy(self):
        """Test callers cannot mutate the cached roster."""
        transport = httpx.MockTransport(
            lambda request: httpx.Response(200, json=champion_payload("Ahri", "Zed"))
        )
        client = DataDragonClient(version="14.10.1", transport=transport)

        roster = await client.get_champion_roster()
        roster.append("Teemo")

        assert await client.get_champion_roster() == ["Ahri", "Zed"]

    @pytest.mark.asyncio
    async def test_error_status_raises(self):
        """Test a non-200 response raises RiotAPIError and is not cached."""
        transport = httpx.MockTransport(lambda request: httpx.Response(403))
        client = DataDragonClient(version="0.0.0", transport=transport)

        with pytest.raises(RiotAPIError) as exc_info:
            await client.get_champion_roster()

        assert exc_info.value.status_code == 403
        assert client._roster is None
