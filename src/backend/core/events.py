"""
Application lifecycle event handlers.

Startup creates any missing voting tables; shutdown disposes the
connection pool.
"""

from typing import Callable

import structlog
from fastapi import FastAPI
from sqlalchemy.engine import make_url

from core.config import settings
from db.session import close_db, init_db

logger = structlog.get_logger(__name__)


def database_target() -> str:
    """Database URL with the password masked, for logs."""
    return make_url(settings.database_url).render_as_string(hide_password=True)


def create_start_app_handler(app: FastAPI) -> Callable:
    """Create startup event handler."""

    async def start_app() -> None:
        logger.info("app_starting", app=settings.APP_NAME, env=settings.APP_ENV, database=database_target())
        await init_db()
        logger.info("app_started", routes=len(app.routes))

    return start_app


def create_stop_app_handler(app: FastAPI) -> Callable:
    """Create shutdown event handler."""

    async def stop_app() -> None:
        await close_db()
        logger.info("app_stopped", app=settings.APP_NAME)

    return stop_app
