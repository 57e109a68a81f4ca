"""Logging configuration using structlog.

Events are rendered as JSON lines through stdlib logging, so uvicorn, SQLAlchemy
and application loggers share one handler. Request-scoped values bound with
``structlog.contextvars.bind_contextvars`` (for example the queried ``puuid``)
are merged into every event.
"""

import logging

import structlog
from structlog import contextvars as structlog_contextvars

# Per-request transport chatter; the scheduler and client log their own events
QUIET_LOGGERS = ("httpx", "httpcore", "aiosqlite")


def setup_logging(log_level: str = "INFO") -> None:
    """
    Configure structlog and stdlib logging.

    :param log_level: Level for application loggers (DEBUG, INFO, WARNING, ...)
    """
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    logging.basicConfig(format="%(message)s", level=level, force=True)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    structlog.configure(
        processors=[
            structlog_contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
