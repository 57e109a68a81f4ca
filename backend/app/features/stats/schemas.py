"""Pydantic schemas for player statistics responses."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class TeammateWinRateResponse(BaseModel):
    """Win rate of the queried player when grouped with one teammate."""

    puuid: str = Field(..., description="Teammate PUUID")
    summoner_name: str = Field(..., alias="summonerName")
    win_rate: str = Field(
        ...,
        alias="winRate",
        description="Percentage with two decimals, e.g. '66.67'",
    )
    total_games: int = Field(..., alias="totalGames", ge=0)
    profile_icon_id: Optional[int] = Field(None, alias="profileIconId")

    model_config = ConfigDict(populate_by_name=True)


class ChampionProgressResponse(BaseModel):
    """Champion roster split into completed and remaining champions."""

    roster: List[str] = Field(..., description="Full roster in alphabetical order")
    completed: List[str] = Field(
        ..., description="Champions in the selected set, roster order"
    )
    remaining: List[str] = Field(
        ..., description="Champions not in the selected set, roster order"
    )
    completed_count: int = Field(..., alias="completedCount", ge=0)
    total_count: int = Field(..., alias="totalCount", ge=0)

    model_config = ConfigDict(populate_by_name=True)
