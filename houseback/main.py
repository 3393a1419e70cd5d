"""
FastAPI application entry point.
Mounts routes, CORS, Prometheus metrics, error rendering and the startup database check.
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import make_asgi_app

from houseback.api.responses import render
from houseback.api.router import api_router
from houseback.config import Settings, get_settings
from houseback.core.errors import ErrorKind
from houseback.core.logging import configure_logging
from houseback.core.security import PasswordHasher
from houseback.db.session import build_engine, build_session_maker, check_database
from houseback.services.results import InternalError, ValidationFailed
from houseback.services.validation import field_errors

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup: fail fast when the database is unreachable. Shutdown: release pooled connections."""
    settings: Settings = app.state.settings
    if settings.db_check_on_startup:
        try:
            await check_database(app.state.engine)
        except Exception:
            logger.exception("Failed to connect to the database")
            raise
        logger.info("Database connection tested successfully")
    yield
    await app.state.engine.dispose()


async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Malformed bodies are client errors too: 400 with the same shape as rule violations."""
    return render(ValidationFailed(field_errors(exc.errors())))


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return render(InternalError(ErrorKind.UNKNOWN))


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings)
    app = FastAPI(
        title=settings.app_name,
        description="Personal-finance API: health checks and user signup/signin backed by PostgreSQL.",
        version="1.0.0",
        lifespan=lifespan,
    )
    # Everything request handlers need is built here from the settings passed in
    app.state.settings = settings
    app.state.engine = build_engine(settings)
    app.state.session_maker = build_session_maker(app.state.engine)
    app.state.hasher = PasswordHasher(rounds=settings.bcrypt_rounds)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    # Prometheus metrics at /metrics
    app.mount("/metrics", make_asgi_app())

    app.include_router(api_router)

    return app


app = create_app()


def run() -> None:
    """Console entry point: serve the app with uvicorn on HOST:PORT."""
    settings = get_settings()
    logger.info("Server is running on port %s", settings.port)
    uvicorn.run("houseback.main:app", host=settings.host, port=settings.port)
