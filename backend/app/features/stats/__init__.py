"""Arena statistics feature: aggregation over a player's match history."""

from .router import router as stats_router
from .service import PlayerStatsService

__all__ = ["stats_router", "PlayerStatsService"]
