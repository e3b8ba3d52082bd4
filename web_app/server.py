"""Server bootstrap: lifespan wiring and the uvicorn runner.

Concurrency: requests are handled concurrently by one async worker; storage
access is serialized by the database lock. Single process only: every request
shares the one SQLite connection.
"""

import logging
import signal
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from link_shorter.database.sqlite import SQLiteShorterDB
from link_shorter.service import ShorterService
from link_shorter.shortcode import ShortCodeGenerator
from .app_factory import create_app


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the database on startup and close it once requests have drained."""
    config = app.state.config
    logger = app.state.logger

    logger.info("Starting link shorter service...")

    logger.info(f"Opening database at {config.database_path}")
    db = SQLiteShorterDB(db_config=config.database_path, logger=logger)

    generator = ShortCodeGenerator(default_length=config.random_path_length)
    service = ShorterService(
        db=db,
        short_code_generator=generator,
        logger=logger,
    )

    app.state.db = db
    app.state.service = service

    logger.info("Service started successfully")

    yield

    logger.info("Shutting down link shorter service...")
    await service.close()
    logger.info("Service stopped")


def build_server_app(config, logger: logging.Logger) -> FastAPI:
    """App whose database is opened by the lifespan hook."""
    app = create_app(
        db_instance=None,  # Will be set in lifespan
        service_instance=None,
        config=config,
    )
    app.state.logger = logger
    app.router.lifespan_context = lifespan
    return app


def run_server(config, logger: logging.Logger) -> None:
    """Serve until SIGINT or SIGTERM, then drain in-flight requests."""
    app = build_server_app(config, logger)

    uvicorn_config = uvicorn.Config(
        app,
        host=config.host,
        port=config.port,
        log_level=config.log_level.lower(),
        access_log=True,
    )
    server = uvicorn.Server(uvicorn_config)

    def handle_signal(signum, frame):
        logger.info(f"Received signal {signum}, initiating graceful shutdown...")
        server.should_exit = True

    signal.signal(signal.SIGINT, handle_signal)
    signal.signal(signal.SIGTERM, handle_signal)

    logger.info(f"Serving at {config.host}:{config.port}")
    server.run()
