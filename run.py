"""Entry point for the App Catalog API server.

Loads configuration from a ``.env`` file in the working directory (if
present) and the process environment, then serves the API with
uvicorn.  The document store connection string is mandatory; the
process exits with status 1 when it is missing.

Usage:
    DATABASE_URL=mongodb://localhost:27017 python run.py
    DATABASE_URL=sqlite:///./catalog.db PORT=8080 python run.py
"""
import asyncio
import logging
import sys

from dotenv import load_dotenv

# Environment must be populated before the settings module is imported.
load_dotenv()

from uvicorn import Config, Server  # noqa: E402

from app_catalog_api.app.core.config import ConfigurationError, settings  # noqa: E402
from app_catalog_api.app.core.logging_config import resolve_log_level, setup_logging  # noqa: E402

logger = logging.getLogger("app_catalog_api.run")


async def run_api() -> None:
    """Serve the API on ``settings.host``:``settings.port``."""
    from app_catalog_api.app.main import app

    config = Config(
        app=app,
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=resolve_log_level(settings.log_level),
    )
    server = Server(config)
    logger.info("Server running on port %s", settings.port)
    await server.serve()


def main() -> int:
    setup_logging(settings.log_level, settings.log_file or None)
    try:
        settings.require_database_url()
    except ConfigurationError as exc:
        logger.error("Refusing to start: %s", exc)
        return 1
    asyncio.run(run_api())
    return 0


if __name__ == "__main__":
    try:
        exit_code = main()
    except KeyboardInterrupt:
        exit_code = 0
    sys.exit(exit_code)
