"""Pydantic models for Riot API response data.

Match payloads are deliberately not modelled: they are cached and aggregated
as the raw JSON documents returned by match-v5.
"""

from typing import Optional, List
from pydantic import BaseModel, Field, ConfigDict


class AccountDTO(BaseModel):
    """Riot Account information."""

    puuid: str
    game_name: str = Field(..., alias="gameName")
    tag_line: str = Field(..., alias="tagLine")

    model_config = ConfigDict(populate_by_name=True)

    @property
    def riot_id(self) -> str:
        """Display name in ``gameName#tagLine`` form."""
        return f"{self.game_name}#{self.tag_line}"


class SummonerDTO(BaseModel):
    """League of Legends Summoner information."""

    id: Optional[str] = None
    puuid: str
    profile_icon_id: int = Field(..., alias="profileIconId")
    summoner_level: int = Field(..., alias="summonerLevel")
    revision_date: Optional[int] = Field(None, alias="revisionDate")

    model_config = ConfigDict(populate_by_name=True)


class MatchListDTO(BaseModel):
    """One page of match ids for a player."""

    match_ids: List[str] = Field(..., alias="matchIds")
    start: int
    count: int
    puuid: Optional[str] = None

    model_config = ConfigDict(populate_by_name=True)
