"""
Name: FastAPI Application Entry Point

Responsibilities:
  - Initialize FastAPI application with metadata (title, version)
  - Configure middleware (CORS, request context)
  - Mount messaging/notification routers under /v1 prefix
  - Expose health, readiness and metrics endpoints

Collaborators:
  - FastAPI: ASGI web framework
  - CORSMiddleware: Cross-Origin Resource Sharing handler
  - RequestContextMiddleware: Request ID and logging context
  - interfaces.api.http.router: business endpoints

Notes:
  - The DB pool is only opened when the Postgres backend is active
  - /healthz is liveness (no IO); /readyz verifies the database
  - /metrics exposes Prometheus metrics
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware

from ..crosscutting.config import get_settings
from ..crosscutting.logger import logger
from ..crosscutting.metrics import get_metrics_response
from ..crosscutting.middleware import REQUEST_ID_HEADER, RequestContextMiddleware
from ..infrastructure.db import pool as db_pool
from ..interfaces.api.http.router import router
from .exception_handlers import register_exception_handlers


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle. Initializes the pool when needed."""
    settings = get_settings()
    uses_db = not settings.uses_memory_backend()

    if uses_db:
        db_pool.init_pool(
            database_url=settings.database_url,
            min_size=settings.db_pool_min_size,
            max_size=settings.db_pool_max_size,
        )

    try:
        logger.info(
            "ProjectHub messaging API starting up",
            extra={
                "app_env": settings.app_env,
                "repository_backend": "memory" if not uses_db else "postgres",
                "db_pool_min": settings.db_pool_min_size,
                "db_pool_max": settings.db_pool_max_size,
            },
        )
        yield
    finally:
        if uses_db:
            db_pool.close_pool()
        logger.info("ProjectHub messaging API shutting down")


def create_app() -> FastAPI:
    settings = get_settings()

    application = FastAPI(
        title="ProjectHub Messaging API",
        version="0.1.0",
        lifespan=lifespan,
        openapi_tags=[
            {"name": "messages", "description": "Private 1:1 messaging"},
            {"name": "notifications", "description": "Per-user notifications"},
        ],
    )

    application.add_middleware(
        RequestContextMiddleware, metrics_enabled=settings.metrics_enabled
    )
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.get_allowed_origins_list(),
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", REQUEST_ID_HEADER],
        expose_headers=[REQUEST_ID_HEADER],
    )

    application.include_router(router, prefix="/v1")
    register_exception_handlers(application)

    @application.get("/healthz")
    def healthz(request: Request):
        """Liveness: el proceso responde."""
        return {
            "ok": True,
            "request_id": getattr(request.state, "request_id", None),
        }

    @application.get("/readyz")
    def readyz(request: Request):
        """Readiness: la base de datos responde (o backend in-memory)."""
        if get_settings().uses_memory_backend():
            db_status = "memory"
        else:
            db_status = "disconnected"
            try:
                if db_pool.ping():
                    db_status = "connected"
            except Exception as exc:
                logger.warning("Ready check: DB unavailable", extra={"error": str(exc)})

        return {
            "ok": db_status in {"connected", "memory"},
            "db": db_status,
            "request_id": getattr(request.state, "request_id", None),
        }

    @application.get("/metrics")
    def metrics():
        """Prometheus text format metrics."""
        body, content_type = get_metrics_response()
        return Response(content=body, media_type=content_type)

    return application


app = create_app()
