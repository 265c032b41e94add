"""Application entry point: the offer pipeline behind a FastAPI service.

Configures:
- **structlog** with JSON rendering (production) or colored console (development)
- **Record store** on a SQLite database in WAL mode
- **Offer parser** with the primary and secondary completion providers
"""

from __future__ import annotations

import asyncio
import logging
import sqlite3
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any

import structlog
import uvicorn
from fastapi import FastAPI

from offerdesk.api import register_error_handlers, router
from offerdesk.config import Settings, get_settings, validate_credentials
from offerdesk.extraction import PlainTextExtractor
from offerdesk.health import register_health_routes
from offerdesk.llm import OfferParser
from offerdesk.tracking import OfferTracker, SQLiteRecordStore, init_offer_records_table

logger = structlog.get_logger()


def configure_logging(production: bool = False) -> None:
    """Set up structlog output for the offerdesk service.

    Every event carries an ISO timestamp, its level, any bound context
    variables and ``service="offerdesk"``.  When *production* is set, events
    are written as one JSON object per line and debug events are dropped;
    otherwise they go through the console renderer with debug included.
    """
    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if production:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
        log_level = logging.INFO
    else:
        renderer = structlog.dev.ConsoleRenderer()
        log_level = logging.DEBUG

    structlog.configure(
        processors=[*shared_processors, renderer],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    structlog.contextvars.bind_contextvars(service="offerdesk")


def open_records_db(db_path: Path) -> sqlite3.Connection:
    """Open the record database in WAL mode and ensure its schema exists.

    The connection is shared across the server's worker threads.
    """
    db_path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(db_path), check_same_thread=False)
    conn.execute("PRAGMA journal_mode=WAL")
    init_offer_records_table(conn)
    return conn


def initialize_services(settings: Settings | None = None) -> dict[str, Any]:
    """Set up the shared services for the application.

    Args:
        settings: Application settings.  If ``None``, ``get_settings()`` is used.

    Returns:
        A dict of initialized service instances keyed by name.
    """
    if settings is None:
        settings = get_settings()

    records_conn = open_records_db(settings.records_db_path)
    services: dict[str, Any] = {
        "settings": settings,
        "records_conn": records_conn,
        "tracker": OfferTracker(SQLiteRecordStore(records_conn)),
        "parser": OfferParser.from_settings(settings),
        "extractor": PlainTextExtractor(),
    }
    logger.info("services_initialized", records_db=str(settings.records_db_path))
    return services


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Close the record database on shutdown."""
    logger.info("application_starting")
    yield
    records_conn = app.state.services.get("records_conn")
    if records_conn is not None:
        records_conn.close()
        logger.info("records_db_closed")


def create_app(services: dict[str, Any]) -> FastAPI:
    """Create the FastAPI app with the offer routes and health probes.

    Args:
        services: The initialized services dict from ``initialize_services``.

    Returns:
        The configured FastAPI application.
    """
    fastapi_app = FastAPI(title="Offer Desk", lifespan=lifespan)
    fastapi_app.state.services = services
    fastapi_app.include_router(router)
    register_error_handlers(fastapi_app)
    register_health_routes(fastapi_app)
    return fastapi_app


async def main() -> None:
    """Main entry point: configure logging, build services, and serve."""
    settings = get_settings()
    configure_logging(production=settings.production)
    validate_credentials(settings)

    services = initialize_services(settings)
    fastapi_app = create_app(services)

    config = uvicorn.Config(
        fastapi_app,
        host="0.0.0.0",
        port=settings.port,
        log_level="info",
    )
    server = uvicorn.Server(config)
    await server.serve()


def run() -> None:
    """Console-script entry point."""
    asyncio.run(main())


if __name__ == "__main__":
    run()
