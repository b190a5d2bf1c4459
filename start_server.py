#!/usr/bin/env python3
"""
Startup script for the Task Manager Backend
This script validates configuration and the database, then starts the FastAPI server
"""

import logging
import sys

import uvicorn
from sqlalchemy.exc import SQLAlchemyError

from app.config.settings import ConfigurationError, Settings
from app.database import build_engine, check_connection

logger = logging.getLogger("start_server")


def main():
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        settings = Settings.from_env()
    except ConfigurationError as e:
        logger.critical("%s", e)
        sys.exit(1)

    logging.getLogger().setLevel(settings.log_level)

    engine = build_engine(settings)
    try:
        check_connection(engine)
    except SQLAlchemyError as e:
        logger.critical("DATABASE CONNECTION ERROR: %s", e)
        sys.exit(1)
    finally:
        engine.dispose()

    logger.info("Starting Task Manager Backend Server on %s:%s (reload=%s)",
                settings.host, settings.port, settings.reload)

    # Start the server
    uvicorn.run(
        "main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        reload=settings.reload,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
