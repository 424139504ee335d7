"""FastAPI application factory.

Learn: App factory pattern — create_app() returns a configured FastAPI
instance. Lifespan manages startup/shutdown (database engine).
Logging, middleware, exception handlers and routers all registered here.
"""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from authgate import __version__
from authgate.api import api_router
from authgate.api.error_handling import register_exception_handlers
from authgate.config import settings
from authgate.logging import configure_logging
from authgate.middleware.request_id import RequestIdMiddleware
from authgate.middleware.security import SecurityHeadersMiddleware

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown lifecycle.

    Learn: Anything before `yield` runs at startup, after `yield` runs at
    shutdown. Schema creation is left to Alembic (`alembic upgrade head`).
    """
    logger.info(
        "authgate.starting",
        version=__version__,
        environment=settings.environment,
        port=settings.port,
        api_prefix=settings.api_prefix,
    )
    if settings.uses_dev_secret:
        logger.warning(
            "authgate.insecure_jwt_secret",
            hint="JWT_SECRET is the development default; set it before deploying",
        )

    yield

    logger.info("authgate.shutdown")

    # Close database engine
    from authgate.db.engine import engine
    await engine.dispose()


def create_app() -> FastAPI:
    """Build and return the FastAPI application."""
    configure_logging(settings.log_level, json_output=settings.log_json)

    app = FastAPI(
        title="AuthGate",
        description="Credential management and bearer-token authentication",
        version=__version__,
        lifespan=lifespan,
    )

    # ── Middleware stack ──────────────────────────────────────
    # Note: Starlette middleware executes in reverse order of registration.
    # Request flow: CORS → Security → RequestId → handler

    app.add_middleware(RequestIdMiddleware)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Mount API routes
    app.include_router(api_router)

    return app


# Default app instance (used by uvicorn: authgate.main:app)
app = create_app()
