"""
FastAPI application entry point.

All API routes are served under ``/api/v1``. Logging is configured from
``devconnector.logging`` before the app is built.
"""

from typing import Callable

from fastapi import FastAPI, Request, Response, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from devconnector.config import get_settings
from devconnector.db import db
from devconnector.logging import RequestLoggingMiddleware, configure_logging, get_logger

from .error_handlers import register_exception_handlers
from .middleware.request_id import RequestIDMiddleware
from .middleware.security import SecurityHeadersMiddleware
from .routers import auth as auth_router
from .routers import posts as posts_router
from .routers import profile as profile_router
from .routers import users as users_router


class RequestSizeLimitMiddleware(BaseHTTPMiddleware):
    """Rejects bodies whose Content-Length exceeds the configured limit."""

    def __init__(self, app, max_size_mb: int = 1):
        super().__init__(app)
        self.max_size = max_size_mb * 1024 * 1024
        self.max_size_mb = max_size_mb

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        content_length = request.headers.get("content-length")
        if content_length and content_length.isdigit() and int(content_length) > self.max_size:
            return JSONResponse(
                status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                content={"msg": f"Maximum request size is {self.max_size_mb}MB"},
            )
        return await call_next(request)


settings = get_settings()
configure_logging(level="DEBUG" if settings.debug else "INFO")
logger = get_logger("api")


def create_app() -> FastAPI:
    api_prefix = f"{settings.api_prefix}/v1"

    app = FastAPI(title=settings.app_name, debug=settings.debug)

    app.add_middleware(RequestSizeLimitMiddleware, max_size_mb=settings.max_request_size_mb)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", "Accept", "Origin", "x-auth-token"],
    )
    app.add_middleware(SecurityHeadersMiddleware)

    # Added last so it runs first and binds the id the logger reads
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    @app.on_event("startup")
    async def startup_event():
        logger.info("app_startup", app_name=settings.app_name, env=settings.env)

        if not db.is_initialized:
            db.initialize(settings.database_url)
        if settings.create_tables_on_startup:
            db.create_all_tables()

        health = db.health_check()
        if not health["healthy"]:
            logger.error("database_health_check_failed", error=health["error"])
            raise RuntimeError("Database unreachable. Check DATABASE_URL.")
        logger.info("database_initialized", latency_ms=health["latency_ms"])

    @app.on_event("shutdown")
    async def shutdown_event():
        logger.info("app_shutdown")

    @app.get("/health", tags=["health"])
    def health_check():
        """Liveness check."""
        return {"status": "ok"}

    @app.get("/health/ready", tags=["health"])
    def readiness_check():
        """
        Readiness check.

        Returns 200 when the database answers, 503 otherwise.
        """
        health = db.health_check()
        if not health["healthy"]:
            return JSONResponse(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                content={"status": "not_ready", "checks": {"database": False}},
            )
        return {"status": "ready", "checks": {"database": True}}

    app.include_router(users_router.router, prefix=api_prefix)
    app.include_router(auth_router.router, prefix=api_prefix)
    app.include_router(profile_router.router, prefix=api_prefix)
    app.include_router(posts_router.router, prefix=api_prefix)

    return app


app = create_app()
