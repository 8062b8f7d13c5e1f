"""
Account Ledger: FastAPI Application.

This is the entry point for the application.
All routers are registered here.
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from account_ledger.api.clients import router as clients_router
from account_ledger.api.errors import register_error_handlers
from account_ledger.api.health import router as health_router
from account_ledger.config import get_settings
from account_ledger.logging_config import setup_logging
from account_ledger.models.base import Database
from account_ledger.seed import seed_accounts

logger = logging.getLogger(__name__)


def create_app(database: Database | None = None) -> FastAPI:
    """
    Build the application.

    When no database is given, one is created from the settings
    at startup and disposed of at shutdown.
    """
    settings = get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owned = app.state.database is None
        if owned:
            app.state.database = Database(
                settings.DATABASE_URL,
                lock_timeout_ms=settings.LOCK_TIMEOUT_MS,
            )
        if settings.SEED_ON_STARTUP:
            seed_accounts(app.state.database)
        logger.info("%s %s started", settings.APP_NAME, settings.APP_VERSION)
        yield
        if owned:
            app.state.database.dispose()
            app.state.database = None

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="Account balances with overdraft limits",
        lifespan=lifespan,
    )
    app.state.database = database

    register_error_handlers(app)

    # Register routers
    app.include_router(health_router)
    app.include_router(clients_router)

    return app


def run() -> None:
    settings = get_settings()
    setup_logging(settings.LOG_LEVEL)
    uvicorn.run(create_app(), host=settings.HOST, port=settings.PORT)
