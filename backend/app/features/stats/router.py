"""Arena statistics API endpoints."""

from typing import Any, Awaitable, Dict, List, TypeVar

import structlog
from fastapi import APIRouter, HTTPException, Query, status

from app.core.riot_api.errors import NotFoundError

from .dependencies import PlayerStatsServiceDep
from .schemas import ChampionProgressResponse, TeammateWinRateResponse

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["arena"])

T = TypeVar("T")

GENERIC_ERROR = "An error occurred while fetching data from Riot Games API."


async def _run(operation: Awaitable[T], game_name: str, tag_line: str) -> T:
    """Await a stats operation, collapsing errors into HTTP responses."""
    try:
        return await operation
    except NotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Player {game_name}#{tag_line} not found",
        )
    except Exception as e:
        logger.error(
            "Stats request failed",
            game_name=game_name,
            tag_line=tag_line,
            error=str(e),
            error_type=type(e).__name__,
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=GENERIC_ERROR
        )


@router.get("/getAllArenaGames/{game_name}/{tag_line}")
async def get_all_arena_games(
    game_name: str, tag_line: str, service: PlayerStatsServiceDep
) -> List[Dict[str, Any]]:
    """Every cached and newly fetched Arena match document for the player."""
    return await _run(service.get_all_matches(game_name, tag_line), game_name, tag_line)


@router.get(
    "/getArenaWinRate/{game_name}/{tag_line}",
    response_model=List[TeammateWinRateResponse],
)
async def get_arena_win_rate(
    game_name: str,
    tag_line: str,
    service: PlayerStatsServiceDep,
    include_icons: bool = Query(
        False, description="Look up each teammate's profile icon"
    ),
):
    """
    Win rate with every teammate seen in more than two Arena games.

    Sorted by number of shared games, highest first.
    """
    return await _run(
        service.get_teammate_win_rates(game_name, tag_line, include_icons),
        game_name,
        tag_line,
    )


@router.get(
    "/getChampionsPlayed/{game_name}/{tag_line}",
    response_model=ChampionProgressResponse,
)
async def get_champions_played(
    game_name: str, tag_line: str, service: PlayerStatsServiceDep
):
    """Champion roster split by champions played in Arena."""
    return await _run(
        service.get_champions_played(game_name, tag_line), game_name, tag_line
    )


@router.get(
    "/getChampionsWon/{game_name}/{tag_line}",
    response_model=ChampionProgressResponse,
)
async def get_champions_won(
    game_name: str, tag_line: str, service: PlayerStatsServiceDep
):
    """Champion roster split by champions with an Arena first place."""
    return await _run(
        service.get_champions_won(game_name, tag_line), game_name, tag_line
    )
