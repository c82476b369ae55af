"""
Application factory for the workout tracker API.

Tests build their own app with explicit settings; uvicorn serves the
module-level ``app`` built from the environment.

Usage:
    from backend.main import create_app
    from backend.settings import Settings

    # Default app (uses get_settings())
    app = create_app()

    # Test app with custom settings
    test_settings = Settings(environment="test", _env_file=None)
    test_app = create_app(settings=test_settings)
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

import sentry_sdk
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.errors import register_exception_handlers
from backend.security_headers import SecurityHeadersMiddleware
from backend.settings import Settings, get_settings

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure a FastAPI application instance.

    Args:
        settings: Optional Settings instance. If not provided, uses get_settings()
                  which loads from environment variables.

    Returns:
        Configured FastAPI application instance.
    """
    if settings is None:
        settings = get_settings()

    _configure_logging(settings)

    # Initialize Sentry for error tracking
    _init_sentry(settings)

    app = FastAPI(
        title="Workout Tracker API",
        description="Workout sessions, exercises and sets for authenticated users",
        version="1.0.0",
        lifespan=_build_lifespan(settings),
    )

    _configure_cors(app, settings)
    app.add_middleware(SecurityHeadersMiddleware)

    register_exception_handlers(app)

    _include_routers(app)

    return app


def _configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _init_sentry(settings: Settings) -> None:
    """Initialize Sentry SDK if DSN is configured."""
    if settings.sentry_dsn:
        sentry_sdk.init(
            dsn=settings.sentry_dsn,
            environment=settings.environment,
            traces_sample_rate=0.1,  # 10% of transactions for performance monitoring
            send_default_pii=False,
        )
        logger.info("Sentry initialized for workout-tracker")


def _build_lifespan(settings: Settings):
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        from backend.database import get_engine, init_database

        init_database(get_engine(), seed=settings.seed_exercises)
        logger.info(f"Database schema ready (seed_exercises={settings.seed_exercises})")
        yield

    return lifespan


def _configure_cors(app: FastAPI, settings: Settings) -> None:
    """Configure CORS middleware for the application."""
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allowed_origins_list,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type"],
    )


def _include_routers(app: FastAPI) -> None:
    """Include all API routers in the application."""
    from api.routers import (
        exercises_router,
        health_router,
        sets_router,
        users_router,
        workouts_router,
    )

    # Health router (no prefix - /health at root)
    app.include_router(health_router)

    # Domain routers (with prefixes defined in each router)
    app.include_router(users_router)
    app.include_router(exercises_router)
    app.include_router(workouts_router)
    app.include_router(sets_router)


# Default app instance for uvicorn
# This allows: uvicorn backend.main:app --reload
app = create_app()
