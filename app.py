#!/usr/bin/env python3
"""
Main entry point for URL shortener service.

Concurrency: one process owns one in-memory engine. Blocking engine calls run
on the server's threadpool, so requests reach the engine from many threads at
once; the engine's reader-writer lock keeps the mapping consistent.

Usage:
    python app.py

Environment variables:
    HOST - Host to bind to
    PORT - Port to listen on
    BASE_URL - Base URL for short links
    PATH_PREFIX - Path prefix for short links
    MAX_COLLISION_RETRIES - Short ID generation attempts per create
    HEALTH_CHECK_TIMEOUT - Seconds the health check waits for the store lock
    LOG_LEVEL - Logging level
    LOG_FILE - Optional log file
    LOG_JSON - Set to 'true' for JSON log lines
"""

import signal
import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from config import load_config
from shortener import URLShortener, ShortIDGenerator
from shortener.common.logging_config import setup_logging
from web_app import create_app


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown."""
    logger = app.state.logger
    config = app.state.config

    logger.info(f"URL shortener ready, short links under {config.base_url}")

    yield

    # Nothing to flush: the mapping is not persisted
    logger.info(f"Shutting down URL shortener with {len(app.state.engine)} stored URLs")


def build_app(config, logger) -> FastAPI:
    """Wire a fresh engine into a FastAPI app."""
    engine = URLShortener(
        generator=ShortIDGenerator(),
        logger=logger.getChild("engine"),
        max_attempts=config.max_collision_retries,
        health_timeout=config.health_check_timeout,
    )

    app = create_app(engine=engine, config=config)
    app.state.logger = logger
    app.router.lifespan_context = lifespan
    return app


def main():
    """Main entry point."""
    config = load_config()

    logger = setup_logging(
        level=config.log_level,
        log_file=config.log_file,
        json_format=config.log_json,
    )

    logger.info("URL Shortener Service")
    logger.info(f"Configuration: {config.model_dump()}")

    app = build_app(config, logger)

    # log_config=None keeps the handlers installed by setup_logging
    uvicorn_config = uvicorn.Config(
        app,
        host=config.host,
        port=config.port,
        log_level=config.log_level.lower(),
        log_config=None,
        access_log=True,
    )

    server = uvicorn.Server(uvicorn_config)

    def handle_signal(signum, frame):
        logger.info(f"Received signal {signum}, initiating graceful shutdown...")
        server.should_exit = True

    signal.signal(signal.SIGINT, handle_signal)
    signal.signal(signal.SIGTERM, handle_signal)

    try:
        logger.info(f"Starting server on {config.host}:{config.port}")
        server.run()
    except Exception as e:
        logger.error(f"Server error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
