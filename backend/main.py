"""Run the Arena Stats API under uvicorn.

Host and port come from ``API_HOST`` / ``API_PORT``. uvicorn's own logging
config is disabled so its access and error logs go through the structlog
setup done in ``app.main``.
"""

import uvicorn

from app.core.config import get_global_settings


def main() -> None:
    settings = get_global_settings()
    uvicorn.run(
        "app.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
        log_config=None,
    )


if __name__ == "__main__":
    main()
