"""FastAPI application entry point."""
import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from api.routers import auth, bookmarks, categories, health, notes, tags
from core.config import Settings, get_settings
from core.passwords import CredentialHasher
from core.tokens import TokenConfig, TokenManager
from db.session import create_schema
from services.exceptions import AppError, InternalError

logger = logging.getLogger(__name__)

VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None]:
    """Create missing tables on startup."""
    await create_schema()
    yield


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add security headers to all responses."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint,
    ) -> Response:
        """Process request and add security headers to response."""
        response = await call_next(request)
        # HSTS: enforce HTTPS for 1 year, including subdomains
        response.headers["Strict-Transport-Security"] = (
            "max-age=31536000; includeSubDomains"
        )
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        return response


async def app_error_handler(_request: Request, exc: AppError) -> JSONResponse:
    """Render service-layer errors as `{"detail", "error"}` JSON."""
    message = exc.message
    if isinstance(exc, InternalError):
        logger.error("Internal error: %s", exc.message)
        message = InternalError.public_message

    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": message, "error": exc.error_code},
        headers=headers,
    )


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Build the application.

    The token manager and password hasher are constructed here, once, from the
    given settings and shared by every request through `app.state`.

    The database engine is not: `db.session` binds it at import time from
    `get_settings()`, so `database_url` and the pool sizes passed here are
    ignored. Tests swap the session through `dependency_overrides` instead.
    """
    app_settings = settings or get_settings()

    app = FastAPI(
        title="Xync API",
        description="Personal bookmarks, notes, tags and categories.",
        version=VERSION,
        lifespan=lifespan,
    )
    app.state.token_manager = TokenManager(TokenConfig.from_settings(app_settings))
    app.state.password_hasher = CredentialHasher(
        time_cost=app_settings.password_hash_time_cost,
        memory_cost=app_settings.password_hash_memory_cost,
        parallelism=app_settings.password_hash_parallelism,
    )

    app.add_exception_handler(AppError, app_error_handler)

    # Security headers middleware (runs after CORS, adds headers to responses)
    app.add_middleware(SecurityHeadersMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health.router)
    app.include_router(auth.router)
    app.include_router(bookmarks.router)
    app.include_router(notes.router)
    app.include_router(tags.router)
    app.include_router(categories.router)
    return app


app = create_app()
