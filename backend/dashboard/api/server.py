"""
FastAPI application for the Projects Dashboard.

This module:
- Builds the app with lifespan management (logging, Logfire, MongoDB)
- Configures CORS for the frontend
- Registers the domain exception handlers and all routers
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from dashboard import __version__
from dashboard.api.errors import register_exception_handlers
from dashboard.api.routes import (
    comments_router,
    health_router,
    projects_router,
    public_setup_router,
    setup_router,
    users_router,
)
from dashboard.config import Settings, get_settings
from dashboard.database import check_db_connection, close_db, get_db_info, init_db
from dashboard.observability import configure_logging, initialize_logfire

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.
    Handles startup and shutdown events.
    """
    settings = get_settings()
    configure_logging(settings.log_level)

    logger.info(f"Starting Projects Dashboard API ({settings.environment})")

    await init_db(settings)

    db_info = get_db_info()
    if await check_db_connection():
        logger.info(f"MongoDB connection successful: {db_info['url']} ({db_info['database']})")
    else:
        logger.error(f"MongoDB connection failed: {db_info['url']} ({db_info['database']})")

    yield

    logger.info("Shutting down Projects Dashboard API")
    await close_db()


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the FastAPI application."""
    settings = settings or get_settings()

    app = FastAPI(
        title="Projects Dashboard API",
        description="Projects, tasks, team members and comments",
        version=__version__,
        lifespan=lifespan,
        debug=settings.debug,
    )

    origins = settings.cors.origins
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        # Browsers reject credentialed requests to a wildcard origin
        allow_credentials=settings.cors.allow_credentials and "*" not in origins,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["Location"],
    )

    # Instrumentation adds middleware, so it must happen before the app starts
    initialize_logfire(settings, app)

    register_exception_handlers(app)

    app.include_router(health_router)
    app.include_router(users_router)
    app.include_router(projects_router)
    app.include_router(comments_router)
    app.include_router(setup_router)
    app.include_router(public_setup_router)

    return app


app = create_app()
