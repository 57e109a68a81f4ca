"""
Riot API client package for League of Legends API integration.

This package provides the rate limited HTTP client used for every Riot API
call, the error taxonomy it raises, and the static champion reference.
"""

from .client import RiotAPIClient
from .data_dragon import DataDragonClient
from .scheduler import RequestScheduler, SchedulerStats
from .errors import (
    RiotAPIError,
    RateLimitError,
    AuthenticationError,
    ForbiddenError,
    NotFoundError,
    BadRequestError,
    ServiceUnavailableError,
)
from .models import AccountDTO, SummonerDTO, MatchListDTO
from .endpoints import RiotAPIEndpoints

__all__ = [
    "RiotAPIClient",
    "DataDragonClient",
    "RequestScheduler",
    "SchedulerStats",
    "RiotAPIError",
    "RateLimitError",
    "AuthenticationError",
    "ForbiddenError",
    "NotFoundError",
    "BadRequestError",
    "ServiceUnavailableError",
    "AccountDTO",
    "SummonerDTO",
    "MatchListDTO",
    "RiotAPIEndpoints",
]
