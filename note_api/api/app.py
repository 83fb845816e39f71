# This file builds the FastAPI application and registers all API routers.
# It exists so startup behavior, middleware, and error handling are configured in one place.
# The app adds request IDs, timing headers, Prometheus metrics, and optional request logging.
# Startup creates the account and note tables when they are missing.

from __future__ import annotations

import logging
import time
import uuid

import uvicorn
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Gauge, Histogram, generate_latest
from starlette.middleware.base import RequestResponseEndpoint

from note_api.api.api_config import get_api_config
from note_api.api.db_access import DatabaseClient
from note_api.api.dependencies import get_database_client
from note_api.api.error_handlers import register_error_handlers
from note_api.api.routers.accounts import router as accounts_router
from note_api.api.routers.health import router as health_router
from note_api.api.routers.notes import router as notes_router
from note_api.common.logging import configure_logging

logger = logging.getLogger(__name__)

API_HTTP_REQUESTS_TOTAL = Counter(
    "note_api_http_requests_total",
    "Total number of HTTP requests processed by the API.",
    ["method", "path", "status_code"],
)
API_HTTP_REQUEST_DURATION_SECONDS = Histogram(
    "note_api_http_request_duration_seconds",
    "API request duration in seconds.",
    ["method", "path"],
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1, 2.5, 5, 10),
)
API_HTTP_INFLIGHT_REQUESTS = Gauge(
    "note_api_http_inflight_requests",
    "Number of API requests currently being processed.",
    ["method", "path"],
)


def _resolve_database_client(app: FastAPI) -> DatabaseClient:
    factory = app.dependency_overrides.get(get_database_client, get_database_client)
    return factory()


def create_app() -> FastAPI:
    """Create configured FastAPI application instance."""

    configure_logging()
    config = get_api_config()

    app = FastAPI(
        title=config.api_name,
        description=(
            "CRUD API for user accounts and notes. Accounts can pin one note; "
            "notes are listed newest first by their Unix timestamp."
        ),
        version=config.app_version,
        openapi_tags=[
            {"name": "health", "description": "Welcome, liveness, readiness, and version metadata."},
            {"name": "accounts", "description": "Registration, login, profile updates, and pinning."},
            {"name": "notes", "description": "Create, list, update, and delete notes."},
        ],
    )

    if config.allowed_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=config.allowed_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    @app.middleware("http")
    async def request_context_middleware(
        request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
        request.state.request_id = request_id

        method_label = request.method
        path_label = request.url.path
        started = time.perf_counter()
        status_code = 500
        API_HTTP_INFLIGHT_REQUESTS.labels(method=method_label, path=path_label).inc()
        try:
            response: Response = await call_next(request)
            status_code = response.status_code
            duration_ms = (time.perf_counter() - started) * 1000.0

            response.headers["x-request-id"] = request_id
            response.headers["x-response-time-ms"] = f"{duration_ms:.2f}"

            if config.enable_request_logging:
                logger.info(
                    "request_id=%s method=%s path=%s status=%s duration_ms=%.2f",
                    request_id,
                    method_label,
                    path_label,
                    status_code,
                    duration_ms,
                )

            return response
        finally:
            duration_s = time.perf_counter() - started
            API_HTTP_REQUESTS_TOTAL.labels(
                method=method_label,
                path=path_label,
                status_code=str(status_code),
            ).inc()
            API_HTTP_REQUEST_DURATION_SECONDS.labels(
                method=method_label,
                path=path_label,
            ).observe(duration_s)
            API_HTTP_INFLIGHT_REQUESTS.labels(method=method_label, path=path_label).dec()

    @app.get("/metrics", include_in_schema=False)
    def metrics() -> Response:
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    @app.on_event("startup")
    def startup_schema() -> None:
        # The service still binds when the store is down; /ready reports the outage.
        try:
            db = _resolve_database_client(app)
            added = db.ensure_schema(
                users_table=config.users_table_name,
                notes_table=config.notes_table_name,
            )
            logger.info("Store schema ready (added columns: %s)", ", ".join(added) or "none")
        except Exception:
            logger.exception("Store schema initialization failed during startup.")

    register_error_handlers(app)

    app.include_router(health_router)
    app.include_router(accounts_router)
    app.include_router(notes_router)

    return app


app = create_app()


def run() -> None:
    """Serve the application with uvicorn on the configured host and port."""

    config = get_api_config()
    uvicorn.run(app, host=config.host, port=config.port)
