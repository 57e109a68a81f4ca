"""Database initialization script using SQLAlchemy create_all().

Creates the match cache table (and its unique constraint) when missing.
Existing tables are left untouched.
"""

import asyncio
import sys
from typing import NoReturn, Optional

import structlog
from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from app.core.config import get_global_settings
from app.core.logging import setup_logging
from app.core.models import Base

# Register ORM models on Base.metadata
from app.features.matches import orm_models  # noqa: F401

logger = structlog.get_logger(__name__)


def masked_url(database_url: str) -> str:
    """Database URL safe for logs, with the password replaced by ***."""
    return make_url(database_url).render_as_string(hide_password=True)


async def create_tables(engine: AsyncEngine) -> None:
    """Create all tables defined in Base.metadata on ``engine``."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def init_db(database_url: Optional[str] = None) -> None:
    """Initialize database by creating all tables defined in models.

    Raises:
        SQLAlchemyError: If database connection or table creation fails
    """
    settings = get_global_settings()
    database_url = database_url or settings.database_url

    logger.info(
        "Initializing database",
        database_url=masked_url(database_url),
    )

    engine = create_async_engine(database_url, echo=settings.debug, future=True)
    try:
        await create_tables(engine)
    except SQLAlchemyError as e:
        logger.error(
            "Database initialization failed",
            error=str(e),
            error_type=type(e).__name__,
        )
        raise
    finally:
        await engine.dispose()

    logger.info(
        "Database initialization completed successfully",
        tables_created=len(Base.metadata.tables),
        table_names=list(Base.metadata.tables.keys()),
    )


def main() -> NoReturn:
    """Run CLI for database initialization.

    Usage:
        python -m app.init_db
    """
    setup_logging(get_global_settings().log_level)
    asyncio.run(init_db())
    sys.exit(0)


if __name__ == "__main__":
    main()
