"""FastAPI application factory.

create_app() returns a configured FastAPI instance. The lifespan
prepares the database at startup and disposes the engine at shutdown.
Middleware, error handlers, and routers are all registered here.
"""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from lottohist import __version__
from lottohist.api import api_router
from lottohist.api.health import root_router
from lottohist.config import settings
from lottohist.errors import AppError, Unauthorized

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown lifecycle."""
    from lottohist.db.engine import engine, init_models

    logger.info(
        "lottohist.starting",
        version=__version__,
        environment=settings.environment,
        port=settings.port,
    )
    if settings.uses_default_secret:
        logger.warning(
            "lottohist.default_jwt_secret",
            hint="set LOTTOHIST_JWT_SECRET before deploying",
        )

    if settings.auto_create_schema:
        await init_models()

    yield

    logger.info("lottohist.shutdown")
    await engine.dispose()


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("http.internal_error", path=request.url.path, error=exc.message)
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, Unauthorized) else None
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.message},
        headers=headers,
    )


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    logger.info("http.bad_request", path=request.url.path, errors=len(exc.errors()))
    return JSONResponse(status_code=400, content={"error": "Invalid request body"})


def create_app() -> FastAPI:
    """Build and return the FastAPI application."""
    app = FastAPI(
        title="lottohist",
        description="Per-user history API for lottery number computations",
        version=__version__,
        lifespan=lifespan,
    )

    # ── Middleware stack ──────────────────────────────────────
    # Starlette middleware executes in reverse order of registration.
    # Request flow: RequestId → CORS → Security → handler
    # CORS also converts unexpected exceptions into the generic 500.

    from lottohist.middleware.cors import CORSHeadersMiddleware
    from lottohist.middleware.request_id import RequestIdMiddleware
    from lottohist.middleware.security import SecurityHeadersMiddleware

    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(CORSHeadersMiddleware)
    app.add_middleware(RequestIdMiddleware)

    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)

    app.include_router(root_router, tags=["health"])
    app.include_router(api_router)

    return app


# Default app instance (used by uvicorn: lottohist.main:app)
app = create_app()
