"""Match cache feature: persistence and incremental fetching of match history."""

from .orm_models import MatchRecordORM
from .repository import MatchRepositoryInterface, SQLAlchemyMatchRepository
from .service import MatchHistoryService

__all__ = [
    "MatchRecordORM",
    "MatchRepositoryInterface",
    "SQLAlchemyMatchRepository",
    "MatchHistoryService",
]
