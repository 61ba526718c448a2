import logging

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from library_api.api.exception_handlers import register_exception_handlers
from library_api.api.routes.books import router as books_router
from library_api.api.routes.health import router as health_router
from library_api.config import settings
from library_api.database import engine, wait_for_database
from library_api.logging_config import configure_logging
from library_api.middleware import REQUEST_ID_HEADER, RequestContextMiddleware

configure_logging(
    level=settings.log_level,
    output_format=settings.log_format,
    service_name=settings.log_service_name,
)
logger = logging.getLogger(__name__)
logger.info("Application bootstrapped")

app = FastAPI(
    title=settings.app_name,
    description=settings.app_description,
    version=settings.app_version,
)
app.add_middleware(RequestContextMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allowed_origins,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization", REQUEST_ID_HEADER],
)
register_exception_handlers(app)
app.include_router(health_router)
app.include_router(books_router)


def run() -> None:
    """Wait for the database, then serve the API with uvicorn on the configured host and port."""
    wait_for_database(
        engine,
        attempts=settings.db_connect_attempts,
        ping_timeout=settings.db_ping_timeout_seconds,
        max_backoff=settings.db_max_backoff_seconds,
    )
    logger.info("HTTP server listening host=%s port=%s", settings.host, settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)
