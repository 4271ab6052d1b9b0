"""
FastAPI application factory and configuration.

This module creates the FastAPI application instance,
configures exception handlers, and lifespan events.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from psycopg_pool import ConnectionPool

from src.adapters.notifier import ConsoleEmailNotifier, ResendEmailNotifier
from src.adapters.store import (
    InMemoryKeyValueStore,
    PostgresKeyValueStore,
    RetryingKeyValueStore,
    run_migrations,
)
from src.api.endpoints import router as api_router
from src.api.errors import register_exception_handlers
from src.config.settings import Settings, get_settings
from src.domain.ports import EmailNotifier

logger = logging.getLogger(__name__)

# OpenAPI tags for documentation grouping
tags_metadata = [
    {
        "name": "waitlist",
        "description": "Join the waitlist, look up a registration and verify email addresses",
    },
    {
        "name": "admin",
        "description": "Operator login, registration listing and statistics",
    },
]


def build_notifier(settings: Settings) -> EmailNotifier:
    """Use the Resend API when a key is configured, else log emails to console."""
    if settings.resend_api_key:
        logger.info("Email delivery via Resend API")
        return ResendEmailNotifier(
            api_key=settings.resend_api_key,
            from_email=settings.from_email,
            timeout=settings.notifier_timeout_seconds,
        )
    logger.info("Resend API key not configured, emails will be logged to console")
    return ConsoleEmailNotifier()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    FastAPI lifespan context manager.

    Manages application startup and shutdown:
    - Creates the key-value store (in-memory, or PostgreSQL pool + migrations)
    - Creates the email notifier
    - Closes the connection pool on shutdown
    """
    settings = get_settings()
    logging.basicConfig(level=settings.log_level.upper())

    logger.info("Starting application...")

    pool = None
    if settings.store_backend == "postgres":
        logger.info("Connecting to database...")
        pool = ConnectionPool(
            conninfo=settings.database_url,
            min_size=settings.pool_min_size,
            max_size=settings.pool_max_size,
            open=True,
        )
        logger.info("Running database migrations...")
        run_migrations(pool)
        inner = PostgresKeyValueStore(pool)
    else:
        logger.warning("Using in-memory store, registrations are lost on restart")
        inner = InMemoryKeyValueStore()

    # Store and notifier live in app state for dependency injection
    app.state.store = RetryingKeyValueStore(
        inner,
        attempts=settings.store_retry_attempts,
        initial_wait=settings.store_retry_wait_seconds,
    )
    app.state.notifier = build_notifier(settings)

    logger.info("Application startup complete")

    yield

    # Shutdown
    logger.info("Shutting down application...")
    if isinstance(app.state.notifier, ResendEmailNotifier):
        app.state.notifier.close()
    if pool is not None:
        pool.close()
        logger.info("Database connection pool closed")


app = FastAPI(
    title="wallet-waitlist",
    description="Wallet Waitlist API - Email and wallet verified launch waitlist",
    version="0.1.0",
    openapi_tags=tags_metadata,
    lifespan=lifespan,
)

register_exception_handlers(app)

app.include_router(api_router, prefix="/api")


@app.get("/health")
def health_check(request: Request) -> dict[str, str]:
    """
    Health check endpoint with store validation.

    Returns 200 OK if application and store are healthy.
    A store failure is reported as 500 by the StoreError handler.
    """
    request.app.state.store.get("health:probe")
    return {"status": "healthy"}
