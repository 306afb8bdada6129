#!/usr/bin/env python3
"""
Main entry point for the short link service.

The link table lives in process memory and is flushed to the configured
key-value backend after every change, so run a single worker per backend.

Usage:
    python app.py

Environment variables:
    STORAGE_BACKEND - memory, file or redis (default file)
    STORAGE_PATH - JSON document for the file backend
    REDIS_URL - Redis connection URL for the redis backend
    BASE_URL - Base URL for short links
    PORT - Port to listen on
    LOG_LEVEL - Logging level
"""

import signal
import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from config import Config, load_config
from shortlinks.persistence import TablePersistence
from shortlinks.shortcode import ShortCodeGenerator
from shortlinks.storage import create_kv_store
from shortlinks.store import ShortLinkStore
from shortlinks.common.logging_config import setup_logging
from web_app import create_app


def build_store(config: Config, logger) -> ShortLinkStore:
    """Wire a store to the configured backend (not loaded yet)."""
    kv_store = create_kv_store(
        config.storage_backend,
        storage_path=config.storage_path,
        redis_url=config.redis_url,
        logger=logger,
    )
    generator = ShortCodeGenerator(
        default_length=config.short_code_length,
        max_collision_retries=config.max_collision_retries,
        logger=logger,
    )
    return ShortLinkStore(
        persistence=TablePersistence(kv_store, key=config.storage_key, logger=logger),
        short_code_generator=generator,
        base_url=config.base_url,
        path_prefix=config.path_prefix,
        stats_tz=config.get_stats_tz(),
        logger=logger,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown."""
    config = app.state.config
    logger = app.state.logger

    logger.info("Starting short link service...")
    logger.info(f"Using {config.storage_backend} storage backend")

    store = build_store(config, logger)
    await store.load()
    app.state.store = store

    logger.info(f"Service started with {len(store.table)} links")

    yield

    logger.info("Shutting down short link service...")
    await store.close()
    logger.info("Service stopped")


def main():
    """Main entry point."""
    config = load_config()

    logger = setup_logging(
        level=config.log_level,
        log_file=config.log_file,
        json_format=config.log_json,
        recent_capacity=config.recent_log_capacity,
    )

    logger.info("Short Link Service")
    logger.info(f"Configuration: {config.model_dump()}")

    app = create_app(store=None, config=config, logger=logger)
    app.router.lifespan_context = lifespan

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

    try:
        logger.info(f"Starting server on {config.host}:{config.port}")
        server.run()
    except Exception as e:
        logger.error(f"Server error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
