"""Core dependencies for FastAPI application.

The request scheduler and the champion roster client live for the whole
process; Riot API clients are created per request but all share the one
scheduler, and therefore one request budget.
"""

from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends

from .config import Settings, get_global_settings
from .riot_api import DataDragonClient, RequestScheduler, RiotAPIClient

_scheduler: RequestScheduler | None = None
_data_dragon: DataDragonClient | None = None


def get_app_settings() -> Settings:
    """Get application settings."""
    return get_global_settings()


def get_request_scheduler(
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> RequestScheduler:
    """Get the process-wide request scheduler."""
    global _scheduler
    if _scheduler is None:
        _scheduler = RequestScheduler.from_settings(settings)
    return _scheduler


def get_data_dragon_client(
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> DataDragonClient:
    """Get the process-wide champion roster client."""
    global _data_dragon
    if _data_dragon is None:
        _data_dragon = DataDragonClient(
            version=settings.data_dragon_version,
            locale=settings.data_dragon_locale,
            timeout=settings.request_timeout,
        )
    return _data_dragon


async def get_riot_client(
    scheduler: Annotated[RequestScheduler, Depends(get_request_scheduler)],
) -> AsyncGenerator[RiotAPIClient, None]:
    """Get Riot API client instance bound to the shared scheduler."""
    client = RiotAPIClient(scheduler=scheduler)
    await client.start_session()
    try:
        yield client
    finally:
        await client.close()


def reset_shared_clients() -> None:
    """Forget process-wide instances (used on shutdown and in tests)."""
    global _scheduler, _data_dragon
    _scheduler = None
    _data_dragon = None


# Type aliases for cleaner dependency injection
SettingsDep = Annotated[Settings, Depends(get_app_settings)]
RiotClientDep = Annotated[RiotAPIClient, Depends(get_riot_client)]
DataDragonDep = Annotated[DataDragonClient, Depends(get_data_dragon_client)]

__all__ = [
    "get_app_settings",
    "get_request_scheduler",
    "get_data_dragon_client",
    "get_riot_client",
    "reset_shared_clients",
    "SettingsDep",
    "RiotClientDep",
    "DataDragonDep",
]
